
import re
from typing import Callable, List
from .config.parser import ConfigDocument
from .config.store import ConfigStore
from .exceptions import UnknownTunnel, InvalidName, MissingTunnelSpec, MissingHost
from .launcher import create_launcher_resolver, AUTO
from .logger import Logger
from .model import CompileRequest, CommandVector, TunnelProfile, MonitoringStrategy, create_monitoring_strategy, \
    MODES, MODE_TEST, MODE_VALIDATE

VALID_NAME = re.compile(r'^[A-Za-z0-9._/\\:]+$')
AUTOSSH_ENV_PREFIX = 'AUTOSSH_'
NO_REMOTE_COMMAND = '-N'
NOOP_REMOTE_COMMAND = 'true'


def split_words(value: str) -> List[str]:
    """
    Whitespace split, without any quoting rules

    Allows to put multiple flags in one option ex. "-L 80:localhost:80 -L 443:localhost:443".
    The configuration file has to be trusted as much as a command line.
    """

    return value.split() if value else []


def validate_name(name: str):
    if not VALID_NAME.match(name or ''):
        raise InvalidName(name)


class ProfileCompiler(object):
    """
    Compiles a [tunnel.<name>] section into the exact launcher invocation

    All checks are done before the vector is returned, a failing profile never produces a partial command.
    """

    _store: ConfigStore
    _resolver_factory: Callable

    def __init__(self, store: ConfigStore, resolver_factory: Callable = create_launcher_resolver):
        self._store = store
        self._resolver_factory = resolver_factory

    def compile(self, request: CompileRequest) -> CommandVector:
        if request.mode not in MODES:
            raise ValueError('Unknown compilation mode "%s"' % request.mode)

        # the name lands in a unit name and a shell command line, nothing is read before it is checked
        validate_name(request.name)

        document = self._store.load()

        if not document.has_section(ConfigStore.tunnel_section(request.name)):
            raise UnknownTunnel(request.name)

        profile = self.read_profile(document, request.name)
        launcher = self._resolver_factory(document.get('ssh', 'ssh') or AUTO).resolve()

        args = [launcher.executable]
        env = {}

        if launcher.auto_reconnect:
            env = self._collect_autossh_environment(document)
            args += self._create_monitoring_strategy(document).flags()

        if request.mode != MODE_TEST:
            args.append(NO_REMOTE_COMMAND)

        if profile.port:
            args += ['-p', profile.port]

        if not profile.tunnel:
            raise MissingTunnelSpec(profile.name)

        # test connection only checks the host and the key, it does not forward anything
        if request.mode != MODE_TEST:
            args += split_words(profile.tunnel)

        args += split_words(profile.global_ssh_options)
        args += split_words(profile.ssh_options)

        if not profile.host:
            raise MissingHost(profile.name)

        args.append('%s@%s' % (profile.user, profile.host) if profile.user else profile.host)

        if request.mode == MODE_TEST:
            args.append(NOOP_REMOTE_COMMAND)

        vector = CommandVector(args, env)
        Logger.debug('Compiled "%s" in "%s" mode: %s' % (request.name, request.mode, vector.render()))

        return vector

    def validate(self, name: str):
        self.compile(CompileRequest(name=name, mode=MODE_VALIDATE))

    @staticmethod
    def read_profile(document: ConfigDocument, name: str) -> TunnelProfile:
        section = ConfigStore.tunnel_section(name)

        return TunnelProfile(
            name=name,
            host=document.get(section, 'host'),
            user=document.get(section, 'user'),
            port=document.get(section, 'port'),
            tunnel=document.get(section, 'tunnel'),
            ssh_options=document.get(section, 'ssh_options', ''),
            global_ssh_options=document.get('ssh', 'ssh_options', '')
        )

    @staticmethod
    def _collect_autossh_environment(document: ConfigDocument) -> dict:
        return {key: document.get('autossh', key, '') for key in document.keys('autossh')
                if key.startswith(AUTOSSH_ENV_PREFIX)}

    @staticmethod
    def _create_monitoring_strategy(document: ConfigDocument) -> MonitoringStrategy:
        return create_monitoring_strategy(
            document.get('autossh', 'monitoring') or 'ssh',
            monitor_port=document.get('autossh', 'monitor_port'),
            interval=document.get('autossh', 'monitor_ssh_interval'),
            count=document.get('autossh', 'monitor_ssh_count')
        )
