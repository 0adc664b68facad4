
import os
import psutil
import subprocess
from typing import Union, List
from ..exceptions import ServiceCommandError, LauncherExecutionError
from ..logger import Logger
from ..model import CommandVector


class SystemProcessManager:
    """
    Local process helpers: replacing the current process, running as other user, finding running tunnels
    """

    _privilege_switch: List[str]

    def __init__(self, privilege_switch: List[str]):
        self._privilege_switch = privilege_switch

    @staticmethod
    def execute(vector: CommandVector):
        """
        Replaces the current process with the launcher, the service manager supervises the launcher directly

        :param vector:
        :return: Does not return on success
        """

        env = os.environ.copy()
        env.update(vector.environment)

        Logger.info('Executing %s' % vector.render())

        try:
            os.execvpe(vector.executable, list(vector.args), env)
        except OSError as e:
            raise LauncherExecutionError(vector.executable, str(e))

    def run_as(self, user: str, command: str) -> int:
        """
        Runs a shell command line as other (unprivileged) local account

        :param user:
        :param command: Complete command line, passed to the shell as a single argument
        :return:
        """

        cmd = self._privilege_switch + [command, user]
        Logger.info('Running as "%s": %s' % (user, command))

        exit_code = subprocess.call(cmd)

        if exit_code != 0:
            raise ServiceCommandError(cmd, exit_code)

        return exit_code

    @staticmethod
    def find_process_by_signature(signature: str) -> Union[psutil.Process, None]:
        for proc in psutil.process_iter():
            try:
                cmdline = " ".join(proc.cmdline())
            except psutil.Error:
                continue

            if signature in cmdline and "ssh" in cmdline:
                return proc

        return None
