
from typing import List, Tuple, Union
from ..exceptions import ConfigUnreadable
from ..logger import Logger
from .parser import ConfigDocument

TUNNEL_SECTION_PREFIX = 'tunnel.'


class ConfigStore(object):
    """
    Read access to the tunnels configuration file

    The file is opened, consumed and closed on every call. Nothing is cached, so each invocation
    of the tool (and each lookup) sees the file as it is on disk.
    """

    path: str

    def __init__(self, path: str):
        self.path = path

    def load(self) -> ConfigDocument:
        Logger.debug('Reading configuration from "%s"' % self.path)

        try:
            with open(self.path, 'rb') as f:
                content = f.read().decode('utf-8-sig')
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigUnreadable(self.path, str(e))

        return ConfigDocument(content)

    def load_sections(self) -> List[str]:
        return self.load().sections

    def read_section(self, name: str) -> Tuple[List[str], bool]:
        """
        Raw "key=value" lines of a section

        :param name:
        :return: Lines and a flag telling if the section exists at all (an existing section may be empty)
        """

        document = self.load()

        return document.lines(name), document.has_section(name)

    def section_keys(self, name: str) -> List[str]:
        return self.load().keys(name)

    def get_value(self, section: str, key: str, default: str = None) -> Union[str, None]:
        return self.load().get(section, key, default)

    def tunnel_names(self) -> List[str]:
        return [section[len(TUNNEL_SECTION_PREFIX):] for section in self.load_sections()
                if section.startswith(TUNNEL_SECTION_PREFIX) and len(section) > len(TUNNEL_SECTION_PREFIX)]

    @staticmethod
    def tunnel_section(name: str) -> str:
        return TUNNEL_SECTION_PREFIX + name
