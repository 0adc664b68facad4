
import re
import subprocess
from typing import List
from ..exceptions import ServiceCommandError
from ..interfaces import ServiceManagerInterface
from ..logger import Logger

ACTIONS = ('start', 'stop', 'restart', 'enable', 'disable', 'status')
UNIT_SUFFIX = '.service'
PLAIN_INSTANCE_CHAR = re.compile(r'[A-Za-z0-9:_.]')
ESCAPE_SEQUENCE = re.compile(r'\\x([0-9a-fA-F]{2})')


def escape_instance(name: str) -> str:
    """
    Escapes a tunnel name the way `systemd-escape` does, so "%I" in the unit expands back to the tunnel name

    `office/db` -> `office-db`, `dc\\db` -> `dc\\x5cdb`
    """

    escaped = ''

    for pos, char in enumerate(name):
        if char == '/':
            escaped += '-'
        elif PLAIN_INSTANCE_CHAR.match(char) and not (pos == 0 and char == '.'):
            escaped += char
        else:
            escaped += '\\x%02x' % ord(char)

    return escaped


def unescape_instance(escaped: str) -> str:
    return ESCAPE_SEQUENCE.sub(lambda match: chr(int(match.group(1), 16)), escaped.replace('-', '/'))


class SystemdServiceManager(ServiceManagerInterface):
    """
    Pass-through to systemd, each tunnel is an instance of the "<prefix>@.service" template unit
    """

    prefix: str

    def __init__(self, prefix: str, systemctl: str = 'systemctl', journalctl: str = 'journalctl',
                 log_lines: int = 50):
        self.prefix = prefix
        self._systemctl = systemctl
        self._journalctl = journalctl
        self._log_lines = log_lines

    def unit_name(self, tunnel_name: str) -> str:
        return '%s@%s' % (self.prefix, escape_instance(tunnel_name))

    def control(self, action: str, tunnel_name: str) -> int:
        if action not in ACTIONS:
            raise ValueError('Unsupported service action "%s"' % action)

        return self._call([self._systemctl, action, self.unit_name(tunnel_name)])

    def tail_log(self, tunnel_name: str) -> int:
        return self._call([
            self._journalctl, '--unit', self.unit_name(tunnel_name), '--follow', '--lines', str(self._log_lines)
        ])

    def list_active(self) -> List[str]:
        """
        Names of tunnels, which units are currently active

        `tunctl@office.service loaded active running tunctl tunnel office` -> `office`
        `tunctl@office-db.service ...` -> `office/db`, instance names are unescaped
        """

        cmd = [self._systemctl, 'list-units', '--type=service', '--state=active', '--no-legend', '--plain',
               '--full', '--no-pager', '%s@*' % self.prefix]

        Logger.debug('Listing units: %s' % ' '.join(cmd))

        try:
            output = subprocess.check_output(cmd).decode('utf-8')
        except subprocess.CalledProcessError as e:
            raise ServiceCommandError(cmd, e.returncode)

        names = []
        unit_prefix = self.prefix + '@'

        for line in output.splitlines():
            columns = line.split()

            if not columns:
                continue

            unit = columns[0]

            if not unit.startswith(unit_prefix) or not unit.endswith(UNIT_SUFFIX):
                continue

            names.append(unescape_instance(unit[len(unit_prefix):-len(UNIT_SUFFIX)]))

        return names

    @staticmethod
    def _call(cmd: List[str]) -> int:
        Logger.info('Running %s' % ' '.join(cmd))
        exit_code = subprocess.call(cmd)

        if exit_code != 0:
            raise ServiceCommandError(cmd, exit_code)

        return exit_code
