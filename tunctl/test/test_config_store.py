
import os
import unittest

from ..tunctl.config.store import ConfigStore
from ..tunctl.exceptions import ConfigUnreadable
from ..tunctl.logger import setup_dummy_logger
from .fixtures import write_config


class ConfigStoreTest(unittest.TestCase):
    def setUp(self) -> None:
        setup_dummy_logger()
        self.path = write_config('''
[general]
user = tunnel

[ssh]

[autossh]
monitoring = port
AUTOSSH_GATETIME = 0
AUTOSSH_POLL = 30

[tunnel.db]
host = db.example.org
tunnel = -L 3306:localhost:3306

[tunnel.web]
host = example.org
''')
        self.store = ConfigStore(self.path)

    def tearDown(self) -> None:
        if os.path.isfile(self.path):
            os.unlink(self.path)

    def test_load_sections(self):
        self.assertEqual(['general', 'ssh', 'autossh', 'tunnel.db', 'tunnel.web'], self.store.load_sections())

    def test_read_section(self):
        lines, found = self.store.read_section('tunnel.db')

        assert found is True
        self.assertEqual(['host = db.example.org', 'tunnel = -L 3306:localhost:3306'], lines)

    def test_read_empty_and_missing_section(self):
        self.assertEqual(([], True), self.store.read_section('ssh'))
        self.assertEqual(([], False), self.store.read_section('tunnel.not-existing'))

    def test_get_value(self):
        self.assertEqual('tunnel', self.store.get_value('general', 'user'))
        self.assertEqual('auto', self.store.get_value('ssh', 'ssh', 'auto'))
        self.assertIsNone(self.store.get_value('ssh', 'ssh'))

    def test_section_keys(self):
        self.assertEqual(['monitoring', 'AUTOSSH_GATETIME', 'AUTOSSH_POLL'], self.store.section_keys('autossh'))

    def test_tunnel_names(self):
        self.assertEqual(['db', 'web'], self.store.tunnel_names())

    def test_leading_byte_order_mark(self):
        with open(self.path, 'wb') as f:
            f.write(b'\xef\xbb\xbf[general]\nuser = tunnel\n')

        self.assertEqual(['general'], self.store.load_sections())
        self.assertEqual('tunnel', self.store.get_value('general', 'user'))

    def test_file_is_read_again_on_each_lookup(self):
        self.assertEqual('tunnel', self.store.get_value('general', 'user'))

        with open(self.path, 'wb') as f:
            f.write(b'[general]\nuser = other\n')

        self.assertEqual('other', self.store.get_value('general', 'user'))

    def test_missing_file_is_unreadable(self):
        os.unlink(self.path)

        with self.assertRaises(ConfigUnreadable):
            self.store.load_sections()

        with self.assertRaises(ConfigUnreadable):
            self.store.read_section('general')

        with self.assertRaises(ConfigUnreadable):
            self.store.get_value('general', 'user')

    def test_directory_is_unreadable(self):
        store = ConfigStore(os.path.dirname(self.path))

        with self.assertRaises(ConfigUnreadable):
            store.load_sections()
