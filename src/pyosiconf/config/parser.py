# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2026/10/19 15:21:09
# @Author : Kariko Lin

"""Read and write `ConfigStore` as INI (and YAML, for inspection).

The INI dialect is kept small:

    ```ini
    ; or `#`, whole-line comments only, dropped on load
    Version = 1
    [Adapter]
    Address = 00:11:22:33:44:55
    # split on the first `=`, the value below is "pixel = 6 ; ok"
    Name = pixel = 6 ; ok
    ```

Comments, blank lines and original formatting are *not* preserved,
saving a loaded file rewrites it in the canonical `key=value` form.
"""

import logging
from io import StringIO, TextIOBase
from os import PathLike
from warnings import warn

import chardet
import yaml

from ..abstract import FileHandler
from .consts import COMMENT_PREFIXES, DEFAULT_SECTION, BoolToken
from .errors import InvalidEntryError
from .model import ConfigSection, ConfigStore


class ConfigParser(FileHandler[ConfigStore]):
    def __init__(
        self, filename: str | PathLike[str], encoding: str | None = 'utf-8'
    ) -> None:
        super().__init__(filename)
        self._codec = encoding

    @staticmethod
    def readstream(
        buf: TextIOBase, ins: ConfigStore | None = None
    ) -> ConfigStore:
        """Read a decoded text stream, merging into `ins` if given.

        Bad lines are warned about and skipped, reading never stops halfway.
        """
        if ins is None:
            ins = ConfigStore()
        this_sect = DEFAULT_SECTION
        lineno = 0
        while i := buf.readline():
            lineno += 1
            line = i.strip()
            if not line or line.startswith(COMMENT_PREFIXES):
                continue
            if line[0] == '[':
                decl = line[1:-1].strip() if line[-1] == ']' else ''
                if not decl:
                    warn(f'line {lineno}: bad section header {line!r}, skipped.')
                    continue
                # created on its first pair, empty sections don't exist.
                this_sect = decl
            elif '=' in line:
                key, val = line.split('=', 1)
                key = key.strip()
                if not key:
                    warn(f'line {lineno}: no key before "=", skipped.')
                    continue
                try:
                    ins.set_string(this_sect, key, val.strip())
                except InvalidEntryError as e:
                    warn(f'line {lineno}: {e} Skipped.')
            else:
                warn(f'line {lineno}: no "=" in {line!r}, skipped.')
        return ins

    @staticmethod
    def _decode_file(filename: str) -> StringIO:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        encoding = codec['encoding']
        if encoding is None or codec['confidence'] < 0.8:
            encoding = 'utf-8'

        # fallbacks
        try:
            buf = raw.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            buf = raw.decode('latin-1')
        return StringIO(buf, newline=None)

    def read(self) -> ConfigStore | None:
        """Load the file. `None` if it is missing or unreadable."""
        try:
            try:
                with open(self._fn, 'r', encoding=self._codec) as fp:
                    return self.readstream(fp)
            except UnicodeDecodeError:
                logging.info(
                    f'"{self._fn}" is not {self._codec}, guessing encoding.')
                return self.readstream(self._decode_file(self._fn))
        except OSError as e:
            logging.warning(f'Unable to load config "{self._fn}": {e}')
            return None

    @staticmethod
    def __output_section(
        section: ConfigSection, delimiter: str = '=', header: bool = True
    ) -> str:
        ret = f'[{section.name}]\n' if header else ''
        for k, v in section.items():
            ret += f'{k}{delimiter}{v}\n'
        return ret

    @staticmethod
    def dumps(
        instance: ConfigStore, *,
        blank_lines: int = 1,
        delimiter: str = '='
    ) -> str:
        """Format as INI text.

        `DEFAULT_SECTION` goes first without a header,
        then every other section in iteration order.
        """
        buffers = [
            ConfigParser.__output_section(
                data, delimiter, name != DEFAULT_SECTION)
            for name, data in instance.items()
        ]
        return ('\n' * blank_lines).join(buffers)

    def write(
        self, instance: ConfigStore, *,
        blank_lines: int = 1,
        delimiter: str = '='
    ) -> bool:
        """Save to the file, overwriting it.

        The file is replaced as a whole, a failed save leaves the old one
        untouched and returns `False`.
        """
        return self._commit(
            self.dumps(instance, blank_lines=blank_lines, delimiter=delimiter),
            self._codec)

    def __str__(self) -> str:
        return "INI config: " + super().__str__() + f"({self._codec})"


class ConfigYamlParser(FileHandler[ConfigStore]):
    """`{section: {key: value}}` YAML, handy to diff or eyeball a config.

    Values are always written as strings. On reading, hand-written
    scalars are converted back: `true`/`false` to the INI bool tokens,
    `null` to an empty string, anything else through `str()`.
    """
    YAML_HEADER = '# pyosiconf config dump\n'

    def __init__(
        self, filename: str | PathLike[str], encoding: str = 'utf-8'
    ) -> None:
        super().__init__(filename)
        self._codec = encoding

    @staticmethod
    def __to_str(val: object) -> str:
        if val is None:
            return ''
        if isinstance(val, bool):
            return (BoolToken.TRUE if val else BoolToken.FALSE).value
        return str(val)

    def read(self) -> ConfigStore | None:
        try:
            with open(self._fn, 'r', encoding=self._codec) as fp:
                src = yaml.safe_load(fp)
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            logging.warning(f'Unable to load YAML config "{self._fn}": {e}')
            return None

        ret = ConfigStore()
        if src is None:  # empty document
            return ret
        if not isinstance(src, dict):
            logging.warning(f'"{self._fn}" is not a mapping of sections.')
            return None
        for decl, pairs in src.items():
            if not isinstance(pairs, dict):
                warn(f'YAML section "{decl}" is not a mapping, skipped.')
                continue
            for k, v in pairs.items():
                try:
                    ret.set_string(str(decl), str(k), self.__to_str(v))
                except InvalidEntryError as e:
                    warn(f'YAML section "{decl}": {e} Skipped.')
        return ret

    def write(self, instance: ConfigStore) -> bool:
        data = {name: sect.to_dict() for name, sect in instance.items()}
        body = yaml.safe_dump(
            data,
            allow_unicode=True,
            sort_keys=False,
            default_flow_style=False) if data else ''
        return self._commit(self.YAML_HEADER + body, self._codec)


def parse(text: str) -> ConfigStore:
    """Parse INI text."""
    return ConfigParser.readstream(StringIO(text, newline=None))


def serialize(store: ConfigStore) -> str:
    return ConfigParser.dumps(store)


def load(path: str | PathLike[str]) -> ConfigStore | None:
    """Load an INI file, `None` if it cannot be read."""
    return ConfigParser(path).read()


def save(store: ConfigStore, path: str | PathLike[str]) -> bool:
    """Save `store` to `path`, overwriting it. Returns whether it worked."""
    return ConfigParser(path).write(store)
