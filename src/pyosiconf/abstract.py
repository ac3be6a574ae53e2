# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2026/10/19 13:51:12
# @Author : Kariko Lin

import logging
import os
import shutil
from abc import ABCMeta, abstractmethod
from contextlib import suppress
from tempfile import mkstemp
from typing import Generic, TypeVar

T = TypeVar('T')


class FileHandler(Generic[T], metaclass=ABCMeta):
    def __init__(self, filename: str | os.PathLike[str]) -> None:
        self._fn = os.fspath(filename)

    @abstractmethod
    def read(self) -> T | None:
        raise NotImplementedError

    @abstractmethod
    def write(self, instance: T) -> bool:
        raise NotImplementedError

    def _commit(self, content: str, encoding: str | None = 'utf-8') -> bool:
        """Replace `self._fn` with `content` as a whole.

        Written into a sibling temp file first and then renamed over,
        so the target holds either the old or the new content, never a half.
        """
        folder = os.path.dirname(os.path.abspath(self._fn))
        try:
            fd, tmp = mkstemp(prefix='.', suffix='.tmp', dir=folder)
        except OSError as e:
            logging.warning(f'Unable to save "{self._fn}": {e}')
            return False

        try:
            with os.fdopen(fd, 'w', encoding=encoding, newline='') as fp:
                fp.write(content)
                fp.flush()
                os.fsync(fp.fileno())
            if os.path.exists(self._fn):
                # mkstemp creates 0600, keep whatever the old file had.
                shutil.copymode(self._fn, tmp)
            os.replace(tmp, self._fn)
        except (OSError, UnicodeEncodeError) as e:
            logging.warning(f'Unable to save "{self._fn}": {e}')
            with suppress(OSError):
                os.remove(tmp)
            return False
        return True

    def __str__(self) -> str:
        return self._fn
