# -*- encoding: utf-8 -*-
# @File   : checksum.py
# @Time   : 2026/10/19 16:04:52
# @Author : Kariko Lin

"""Checksum file kept next to a saved config.

The token is opaque here: whoever hashes the config computes it,
and whoever loads the config compares it. This module only stores it.
"""

import logging
from os import PathLike

from ..abstract import FileHandler


class ChecksumHandler(FileHandler[str]):
    def read(self) -> str:
        """The stored token, verbatim. Empty if missing or unreadable."""
        try:
            # newline='' so that nothing in the token gets translated.
            with open(self._fn, 'r', encoding='utf-8', newline='') as fp:
                return fp.read()
        except FileNotFoundError:
            logging.info(f'No checksum file at "{self._fn}".')
        except (OSError, UnicodeDecodeError) as e:
            logging.warning(f'Unable to read checksum "{self._fn}": {e}')
        return ''

    def write(self, instance: str) -> bool:
        if not isinstance(instance, str):
            raise TypeError(
                f'checksum must be str, got {type(instance).__name__}')
        return self._commit(instance)


def checksum_read(path: str | PathLike[str]) -> str:
    return ChecksumHandler(path).read()


def checksum_save(checksum: str, path: str | PathLike[str]) -> bool:
    """Overwrite `path` with `checksum`. Returns whether it worked."""
    return ChecksumHandler(path).write(checksum)
