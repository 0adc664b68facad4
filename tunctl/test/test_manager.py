
import subprocess
import unittest
from unittest.mock import Mock, patch

import psutil
from unittest_data_provider import data_provider

from ..tunctl.exceptions import ServiceCommandError, LauncherExecutionError
from ..tunctl.logger import setup_dummy_logger
from ..tunctl.manager.service import SystemdServiceManager, escape_instance, unescape_instance
from ..tunctl.manager.sysprocess import SystemProcessManager
from ..tunctl.model import CommandVector

LIST_UNITS_OUTPUT = b'''tunctl@db.service  loaded active running SSH tunnel db (tunctl)
tunctl@web.service loaded active running SSH tunnel web (tunctl)
other@web.service  loaded active running Something else
'''


class SystemdServiceManagerTest(unittest.TestCase):
    def setUp(self) -> None:
        setup_dummy_logger()
        self.manager = SystemdServiceManager(prefix='tunctl')

    def test_unit_name(self):
        self.assertEqual('tunctl@web', self.manager.unit_name('web'))

    @data_provider(lambda: (
        ('web', 'web'),
        ('office/db', 'office-db'),
        ('dc\\db', 'dc\\x5cdb'),
        ('.hidden', '\\x2ehidden'),
        ('a.b:c_d', 'a.b:c_d'),
    ))
    def test_instance_escaping(self, name: str, escaped: str):
        self.assertEqual(escaped, escape_instance(name))
        self.assertEqual(name, unescape_instance(escaped))

    def test_unit_name_escapes_the_instance(self):
        self.assertEqual('tunctl@office-db', self.manager.unit_name('office/db'))
        self.assertEqual('tunctl@dc\\x5cdb', self.manager.unit_name('dc\\db'))

    def test_list_active_unescapes_names(self):
        with patch.object(subprocess, 'check_output') as check_output:
            check_output.return_value = b'tunctl@office-db.service loaded active running SSH tunnel office/db\n' \
                                        b'tunctl@dc\\x5cdb.service loaded active running SSH tunnel dc\\db\n'

            self.assertEqual(['office/db', 'dc\\db'], self.manager.list_active())

    def test_control(self):
        with patch.object(subprocess, 'call') as call:
            call.return_value = 0

            self.assertEqual(0, self.manager.control('restart', 'web'))
            call.assert_called_once_with(['systemctl', 'restart', 'tunctl@web'])

    def test_control_failure(self):
        with patch.object(subprocess, 'call') as call:
            call.return_value = 5

            with self.assertRaises(ServiceCommandError) as ctx:
                self.manager.control('start', 'web')

            self.assertEqual(5, ctx.exception.exit_code)

    def test_control_rejects_unsupported_action(self):
        with patch.object(subprocess, 'call') as call:
            with self.assertRaises(ValueError):
                self.manager.control('mask', 'web')

            call.assert_not_called()

    def test_tail_log(self):
        manager = SystemdServiceManager(prefix='tunnels', journalctl='/bin/journalctl', log_lines=10)

        with patch.object(subprocess, 'call') as call:
            call.return_value = 0
            manager.tail_log('db')

            call.assert_called_once_with(['/bin/journalctl', '--unit', 'tunnels@db', '--follow', '--lines', '10'])

    def test_list_active(self):
        with patch.object(subprocess, 'check_output') as check_output:
            check_output.return_value = LIST_UNITS_OUTPUT

            self.assertEqual(['db', 'web'], self.manager.list_active())
            self.assertIn('tunctl@*', check_output.call_args[0][0])

    def test_list_active_failure(self):
        with patch.object(subprocess, 'check_output') as check_output:
            check_output.side_effect = subprocess.CalledProcessError(1, 'systemctl')

            with self.assertRaises(ServiceCommandError):
                self.manager.list_active()


class SystemProcessManagerTest(unittest.TestCase):
    def setUp(self) -> None:
        setup_dummy_logger()
        self.manager = SystemProcessManager(['su', '-s', '/bin/sh', '-c'])

    def test_execute_replaces_process_with_environment(self):
        vector = CommandVector(['autossh', '-M', '0', '-N', 'example.com'], {'AUTOSSH_POLL': '30'})

        with patch('os.execvpe') as execvpe:
            self.manager.execute(vector)

            executable, args, env = execvpe.call_args[0]

            self.assertEqual('autossh', executable)
            self.assertEqual(['autossh', '-M', '0', '-N', 'example.com'], args)
            self.assertEqual('30', env['AUTOSSH_POLL'])

    def test_execute_failure_is_reported_as_error(self):
        vector = CommandVector(['autossh', '-M', '0', '-N', 'example.com'], {})

        with patch('os.execvpe') as execvpe:
            execvpe.side_effect = FileNotFoundError(2, 'No such file or directory')

            with self.assertRaises(LauncherExecutionError) as ctx:
                self.manager.execute(vector)

            self.assertEqual('autossh', ctx.exception.executable)

    def test_run_as(self):
        with patch.object(subprocess, 'call') as call:
            call.return_value = 0
            self.manager.run_as('tunnel', 'ssh example.com true')

            call.assert_called_once_with(['su', '-s', '/bin/sh', '-c', 'ssh example.com true', 'tunnel'])

    def test_run_as_failure(self):
        with patch.object(subprocess, 'call') as call:
            call.return_value = 255

            with self.assertRaises(ServiceCommandError) as ctx:
                self.manager.run_as('tunnel', 'ssh example.com true')

            self.assertEqual(255, ctx.exception.exit_code)

    def test_find_process_by_signature(self):
        denied = Mock()
        denied.cmdline.side_effect = psutil.AccessDenied()

        other = Mock()
        other.cmdline.return_value = ['bash']

        tunnel = Mock()
        tunnel.pid = 1234
        tunnel.cmdline.return_value = ['ssh', '-N', '-L', '80:localhost:80', 'example.com']

        with patch.object(psutil, 'process_iter') as process_iter:
            process_iter.return_value = [denied, other, tunnel]

            self.assertIs(tunnel, self.manager.find_process_by_signature('ssh -N -L 80:localhost:80 example.com'))
            self.assertIsNone(self.manager.find_process_by_signature('ssh -N -L 81:localhost:81 example.com'))
