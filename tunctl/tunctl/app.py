
import os
import sys
from .compiler import ProfileCompiler, validate_name
from .config.store import ConfigStore
from .exceptions import TunCtlError, MissingUser
from .interfaces import ServiceManagerInterface
from .logger import setup_logger, Logger
from .manager.service import SystemdServiceManager
from .manager.sysprocess import SystemProcessManager
from .model import CompileRequest, MODE_PRINT, MODE_EXECUTE, MODE_TEST
from .settings import Config
from .unit import UnitTemplate

"""
    Application main() - translates actions into compiler calls and service manager pass-through
"""

VALIDATED_SERVICE_ACTIONS = ('start', 'restart', 'enable')
SERVICE_ACTIONS = VALIDATED_SERVICE_ACTIONS + ('stop', 'disable', 'status')
NAMED_ACTIONS = SERVICE_ACTIONS + ('log', 'print', 'connect', 'test')
GLOBAL_ACTIONS = ('start-all', 'stop-all', 'list', 'ssh-keygen', 'unit')
DEFAULT_KEY_TYPE = 'ed25519'


class TunCtlApplication(object):
    settings: Config
    store: ConfigStore
    compiler: ProfileCompiler
    services: ServiceManagerInterface
    processes: SystemProcessManager

    def __init__(self, config: Config, compiler: ProfileCompiler = None, services: ServiceManagerInterface = None,
                 processes: SystemProcessManager = None):
        setup_logger(config.LOG_LEVEL, config.LOG_PATH)
        self.settings = config
        self.store = ConfigStore(config.CONFIG_PATH)
        self.compiler = compiler or ProfileCompiler(self.store)
        self.services = services or SystemdServiceManager(
            prefix=config.SERVICE_PREFIX,
            systemctl=config.SYSTEMCTL,
            journalctl=config.JOURNALCTL,
            log_lines=config.LOG_LINES
        )
        self.processes = processes or SystemProcessManager(config.PRIVILEGE_SWITCH)

    def print_command(self, name: str) -> int:
        """ Show the command line, that would be executed by the service """

        vector = self.compiler.compile(CompileRequest(name=name, mode=MODE_PRINT))
        print(vector.render(with_environment=True))

        return 0

    def connect(self, name: str) -> int:
        """ Replace the current process with the tunnel, used as ExecStart of the service unit """

        vector = self.compiler.compile(CompileRequest(name=name, mode=MODE_EXECUTE))
        self.processes.execute(vector)

        return 0

    def test_connection(self, name: str) -> int:
        """
        Connects interactively as the unprivileged account, so the host key can be accepted
        and the key authentication verified, without opening any forwarding
        """

        vector = self.compiler.compile(CompileRequest(name=name, mode=MODE_TEST))

        return self.processes.run_as(self._get_unprivileged_user(), vector.render(with_environment=True))

    def control(self, action: str, name: str) -> int:
        if action in VALIDATED_SERVICE_ACTIONS:
            self.compiler.validate(name)
        else:
            validate_name(name)

        return self.services.control(action, name)

    def log(self, name: str) -> int:
        validate_name(name)

        return self.services.tail_log(name)

    def start_all(self) -> int:
        """ Start every defined tunnel, a broken one does not stop the others from starting """

        failed = 0

        for name in self.store.tunnel_names():
            try:
                self.control('start', name)
            except TunCtlError as e:
                Logger.error('Cannot start "%s": %s' % (name, str(e)))
                failed += 1

        return 1 if failed else 0

    def stop_all(self) -> int:
        failed = 0

        for name in self.services.list_active():
            try:
                self.services.control('stop', name)
            except TunCtlError as e:
                Logger.error('Cannot stop "%s": %s' % (name, str(e)))
                failed += 1

        return 1 if failed else 0

    def list_active(self) -> int:
        for name in self.services.list_active():
            print('%s\t%s' % (name, self._find_pid(name)))

        return 0

    def ssh_keygen(self) -> int:
        key_type = self.store.get_value('general', 'key_type') or DEFAULT_KEY_TYPE

        return self.processes.run_as(self._get_unprivileged_user(), 'ssh-keygen -t %s' % key_type)

    def print_unit(self) -> int:
        print(UnitTemplate().render(
            prefix=self.settings.SERVICE_PREFIX,
            user=self._get_unprivileged_user(),
            executable=os.path.abspath(sys.argv[0]),
            config_path=self.settings.CONFIG_PATH
        ), end='')

        return 0

    def _find_pid(self, name: str) -> str:
        try:
            vector = self.compiler.compile(CompileRequest(name=name, mode=MODE_EXECUTE))
        except TunCtlError as e:
            Logger.debug('Cannot look up the process of "%s": %s' % (name, str(e)))
            return '-'

        proc = self.processes.find_process_by_signature(vector.render())

        return str(proc.pid) if proc else '-'

    def _get_unprivileged_user(self) -> str:
        user = self.store.get_value('general', 'user')

        if not user:
            raise MissingUser()

        return user
