
class TunCtlError(Exception):
    """ Base for every error that ends the invocation with a single message and a non-zero exit code """


class ConfigurationError(TunCtlError):
    pass


class ConfigUnreadable(ConfigurationError):
    def __init__(self, path: str, reason: str = ''):
        self.path = path
        msg = 'Cannot read configuration file "%s"' % path

        if reason:
            msg += ': %s' % reason

        super().__init__(msg)


class UnknownTunnel(ConfigurationError):
    def __init__(self, name: str):
        self.name = name
        super().__init__('Tunnel "%s" is not defined, expected a [tunnel.%s] section' % (name, name))


class InvalidName(ConfigurationError):
    def __init__(self, name: str):
        self.name = name
        super().__init__('Tunnel name "%s" contains characters other than A-Z a-z 0-9 . _ / \\ :' % name)


class MissingTunnelSpec(ConfigurationError):
    def __init__(self, name: str):
        self.name = name
        super().__init__('Tunnel "%s" has no "tunnel" forwarding specification' % name)


class MissingHost(ConfigurationError):
    def __init__(self, name: str):
        self.name = name
        super().__init__('Tunnel "%s" has no "host" defined' % name)


class MissingUser(ConfigurationError):
    def __init__(self):
        super().__init__('No unprivileged account configured, set "user" in the [general] section')


class LauncherNotFound(ConfigurationError):
    def __init__(self, launcher: str):
        self.launcher = launcher
        super().__init__('Cannot find an executable for the SSH launcher "%s"' % launcher)


class InvalidMonitoring(ConfigurationError):
    def __init__(self, value: str):
        self.value = value
        super().__init__('Unknown autossh monitoring "%s", possible values: port, ssh, none' % value)


class ServiceCommandError(TunCtlError):
    """ Delegated command (systemctl, journalctl, su...) exited with a non-zero code """

    def __init__(self, cmd: list, exit_code: int):
        self.cmd = cmd
        self.exit_code = exit_code
        super().__init__('Command "%s" failed with exit code %i' % (' '.join(cmd), exit_code))


class LauncherExecutionError(TunCtlError):
    """ The launcher could not replace the current process (eg. removed after it was looked up) """

    def __init__(self, executable: str, reason: str):
        self.executable = executable
        super().__init__('Cannot execute "%s": %s' % (executable, reason))
