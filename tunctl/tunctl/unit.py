
import os
from jinja2 import Environment, FileSystemLoader

TEMPLATES_DIR = os.path.dirname(os.path.abspath(__file__)) + '/templates'


class UnitTemplate(object):
    """
    Systemd template unit, one instance per tunnel (systemctl start <prefix>@<name>)
    """

    def __init__(self, templates_dir: str = TEMPLATES_DIR):
        self._env = Environment(loader=FileSystemLoader(templates_dir), autoescape=False, keep_trailing_newline=True)

    def render(self, prefix: str, user: str, executable: str, config_path: str, restart_sec: int = 10) -> str:
        return self._env.get_template('unit.service.j2').render(
            prefix=prefix,
            user=user,
            executable=executable,
            config_path=os.path.abspath(config_path),
            restart_sec=restart_sec
        )
