
import os
import shutil
from typing import Callable, List
from .exceptions import LauncherNotFound
from .interfaces import LauncherResolverInterface
from .logger import Logger
from .model import Launcher

AUTO = 'auto'
AUTOSSH = 'autossh'
SSH = 'ssh'


def is_auto_reconnecting(executable: str) -> bool:
    return os.path.basename(executable).startswith(AUTOSSH)


class FixedPathResolver(LauncherResolverInterface):
    """ Launcher explicitly configured in [ssh] ssh=..., a name or a path that has to be executable """

    def __init__(self, executable: str, which: Callable = shutil.which):
        self._executable = executable
        self._which = which

    def resolve(self) -> Launcher:
        if not self._which(self._executable):
            raise LauncherNotFound(self._executable)

        return Launcher(executable=self._executable, auto_reconnect=is_auto_reconnecting(self._executable))


class SearchPathResolver(LauncherResolverInterface):
    """ Probes the search path, first found candidate wins. autossh is preferred over plain ssh """

    def __init__(self, candidates: List[str] = None, which: Callable = shutil.which):
        self._candidates = candidates or [AUTOSSH, SSH]
        self._which = which

    def resolve(self) -> Launcher:
        for candidate in self._candidates:
            if self._which(candidate):
                Logger.debug('Launcher probe: found "%s"' % candidate)
                return Launcher(executable=candidate, auto_reconnect=is_auto_reconnecting(candidate))

            Logger.debug('Launcher probe: "%s" not found in PATH' % candidate)

        raise LauncherNotFound(AUTO + ' (' + ', '.join(self._candidates) + ')')


def create_launcher_resolver(value: str, which: Callable = shutil.which) -> LauncherResolverInterface:
    if value == AUTO:
        return SearchPathResolver(which=which)

    return FixedPathResolver(value, which=which)
