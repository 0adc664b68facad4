
import os
import tempfile
from typing import Iterable
from unittest.mock import Mock
from ..tunctl.compiler import ProfileCompiler
from ..tunctl.config.parser import ConfigDocument
from ..tunctl.launcher import create_launcher_resolver


BASIC_CONFIG = '''
[general]
user = tunnel

[ssh]
ssh = ssh

[tunnel.web]
host = example.com
user = alice
tunnel = "-L 8080:localhost:80"
'''


def fake_which(available: Iterable[str]):
    """ shutil.which() replacement that knows only given executables """

    available = list(available)

    return lambda name: '/usr/bin/' + os.path.basename(name) if name in available else None


def create_store(content: str) -> Mock:
    store = Mock()
    store.load.side_effect = lambda: ConfigDocument(content)

    return store


def create_compiler(content: str, available: Iterable[str] = ('ssh', 'autossh')) -> ProfileCompiler:
    which = fake_which(available)

    return ProfileCompiler(
        create_store(content),
        resolver_factory=lambda value: create_launcher_resolver(value, which=which)
    )


def write_config(content: str) -> str:
    fd, path = tempfile.mkstemp(prefix='tunctl-', suffix='.conf')

    with os.fdopen(fd, 'wb') as f:
        f.write(content.encode('utf-8'))

    return path
