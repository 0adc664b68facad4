
import re
from typing import List, Dict, Tuple, Union

SECTION_HEADER = re.compile(r'^\s*\[([^\[\]]+)\]\s*$')
COMMENT = re.compile(r'(?<!\\)[;#]')
ESCAPED_COMMENT_CHAR = re.compile(r'\\([;#])')
QUOTE_AFTER_ASSIGNMENT = re.compile(r'^([^=]*=\s*)["\']')
TRAILING_QUOTE = re.compile(r'["\']\s*$')


def strip_comment(line: str) -> str:
    """
    Truncates the line at the first unescaped ";" or "#"

    `host = example.org ; production` -> `host = example.org `
    `password = abc\\#def` -> `password = abc#def`
    """

    match = COMMENT.search(line)

    if match:
        line = line[:match.start()]

    return ESCAPED_COMMENT_CHAR.sub(r'\1', line)


def strip_quotes(line: str) -> str:
    """
    Removes one layer of quotes around the value

    `tunnel = "-L 8080:localhost:80"` -> `tunnel = -L 8080:localhost:80`
    """

    line = QUOTE_AFTER_ASSIGNMENT.sub(r'\1', line, count=1)

    return TRAILING_QUOTE.sub('', line, count=1)


def split_key_value(line: str) -> Union[Tuple[str, str], None]:
    if '=' not in line:
        return None

    key, value = line.split('=', 1)

    return key.strip(), value.strip()


class ConfigDocument(object):
    """
    Parsed INI-like configuration

    Keeps raw "key=value" lines per section, in the order they appear in the file.
    Lookups are first-match-wins, so a duplicated key is shadowed by its first occurrence.
    """

    _sections: Dict[str, List[str]]

    def __init__(self, content: str):
        self._sections = {}
        self._parse(content)

    def _parse(self, content: str):
        current = None

        for raw_line in content.splitlines():
            line = strip_comment(raw_line)

            if not line.strip():
                continue

            header = SECTION_HEADER.match(line)

            if header:
                current = header.group(1).strip()
                self._sections.setdefault(current, [])
                continue

            # lines before the first section header do not belong anywhere
            if current is None:
                continue

            self._sections[current].append(strip_quotes(line).strip())

    @property
    def sections(self) -> List[str]:
        return list(self._sections.keys())

    def has_section(self, name: str) -> bool:
        return name in self._sections

    def lines(self, section: str) -> List[str]:
        return list(self._sections.get(section, []))

    def keys(self, section: str) -> List[str]:
        keys = []

        for line in self._sections.get(section, []):
            pair = split_key_value(line)

            if pair and pair[0] not in keys:
                keys.append(pair[0])

        return keys

    def get(self, section: str, key: str, default: str = None) -> Union[str, None]:
        """
        Value of the first "key=..." line in the section

        :param section:
        :param key:
        :param default: Returned when the key does not exist, an existing empty value is returned as ''
        :return:
        """

        for line in self._sections.get(section, []):
            pair = split_key_value(line)

            if pair and pair[0] == key:
                return pair[1]

        return default
