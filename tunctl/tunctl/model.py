
from typing import List, NamedTuple, Iterator, Union
from .exceptions import InvalidMonitoring

MODE_VALIDATE = 'validate'
MODE_PRINT = 'print'
MODE_EXECUTE = 'execute'
MODE_TEST = 'test'
MODES = (MODE_VALIDATE, MODE_PRINT, MODE_EXECUTE, MODE_TEST)

DEFAULT_MONITOR_PORT = '10000'
DEFAULT_MONITOR_SSH_INTERVAL = '15'
DEFAULT_MONITOR_SSH_COUNT = '3'


CompileRequest = NamedTuple('CompileRequest', [
    ('name', str), ('mode', str)
])

Launcher = NamedTuple('Launcher', [
    ('executable', str), ('auto_reconnect', bool)
])

TunnelProfile = NamedTuple('TunnelProfile', [
    ('name', str), ('host', Union[str, None]), ('user', Union[str, None]), ('port', Union[str, None]),
    ('tunnel', Union[str, None]), ('ssh_options', str), ('global_ssh_options', str)
])


class CommandVector(object):
    """
    Final process invocation: ordered arguments plus environment overrides for the launcher

    Immutable, consumers may only execute it, print it, or re-join it for a shell.
    """

    __slots__ = ('_args', '_env')

    def __init__(self, args: List[str], env: dict = None):
        object.__setattr__(self, '_args', tuple(args))
        object.__setattr__(self, '_env', tuple(sorted((env or {}).items())))

    def __setattr__(self, key, value):
        raise AttributeError('CommandVector is immutable')

    @property
    def args(self) -> tuple:
        return self._args

    @property
    def executable(self) -> str:
        return self._args[0]

    @property
    def environment(self) -> dict:
        return dict(self._env)

    def render(self, with_environment: bool = False) -> str:
        """
        Space-joined command line. Tokens are not quoted, same as they were word-split

        :param with_environment: Prefix with VAR=value assignments, so the line is complete for a shell
        :return:
        """

        prefix = ['%s=%s' % (key, value) for key, value in self._env] if with_environment else []

        return ' '.join(prefix + list(self._args))

    def __iter__(self) -> Iterator[str]:
        return iter(self._args)

    def __len__(self) -> int:
        return len(self._args)

    def __eq__(self, other) -> bool:
        return isinstance(other, CommandVector) and self._args == other._args and self._env == other._env

    def __hash__(self):
        return hash((self._args, self._env))

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return 'CommandVector<%s>' % self.render()


class MonitoringStrategy(object):
    """ Connection monitoring used by autossh, decides about the launcher flags """

    name = ''

    def flags(self) -> List[str]:
        raise NotImplementedError()

    def __str__(self):
        return 'MonitoringStrategy<%s>' % self.name


class PortMonitoring(MonitoringStrategy):
    """ autossh sends test data through a dedicated monitoring port """

    name = 'port'

    def __init__(self, port: str):
        self.port = port

    def flags(self) -> List[str]:
        return ['-M', self.port]


class SSHKeepAliveMonitoring(MonitoringStrategy):
    """ autossh monitoring port disabled, ssh itself detects a dead connection with ServerAlive messages """

    name = 'ssh'

    def __init__(self, interval: str, count: str):
        self.interval = interval
        self.count = count

    def flags(self) -> List[str]:
        return [
            '-M', '0',
            '-o', 'ServerAliveInterval=%s' % self.interval,
            '-o', 'ServerAliveCountMax=%s' % self.count
        ]


class NoMonitoring(MonitoringStrategy):
    name = 'none'

    def flags(self) -> List[str]:
        return ['-M', '0']


def create_monitoring_strategy(method: str, monitor_port: str = None, interval: str = None,
                               count: str = None) -> MonitoringStrategy:
    if method == PortMonitoring.name:
        return PortMonitoring(monitor_port or DEFAULT_MONITOR_PORT)

    if method == SSHKeepAliveMonitoring.name:
        return SSHKeepAliveMonitoring(interval or DEFAULT_MONITOR_SSH_INTERVAL, count or DEFAULT_MONITOR_SSH_COUNT)

    if method == NoMonitoring.name:
        return NoMonitoring()

    raise InvalidMonitoring(method)
