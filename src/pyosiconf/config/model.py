# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2026/10/19 14:10:45
# @Author : Kariko Lin

"""
In-memory INI structure: an ordered group of sections,
each an ordered group of `key=value` string pairs.

Rules kept by `ConfigStore`:
1. Pairs that are not within a section belong to `DEFAULT_SECTION`,
   which is an ordinary section, only always ordered first.
2. Sections with the same name are merged, later values overwrite.
3. A section without any pair does not exist, as far as
   `has_section()`, iteration and saving are concerned.
4. All names are case sensitive.

Not thread safe. Callers sharing a store between threads must lock it.
"""

from collections.abc import Callable, Iterator, Mapping, MutableMapping
from functools import cmp_to_key
from typing import Any

from .consts import (
    COMMENT_PREFIXES,
    DEFAULT_SECTION,
    INT_MAX,
    INT_MIN,
    UINT16_MAX,
    UINT64_MAX,
    BoolToken
)
from .errors import FeatureDisabledError, InvalidEntryError, StaleIteratorError


def _check_name(name: object, what: str) -> str:
    if not isinstance(name, str) or not name:
        raise InvalidEntryError(f'{what} must be a non-empty str, got {name!r}')
    if name != name.strip() or '\n' in name or '\r' in name:
        raise InvalidEntryError(
            f'{what} {name!r} has surrounding blanks or line breaks.')
    return name


def _check_key(key: object) -> str:
    _check_name(key, 'key')
    if '=' in key or key.startswith(('[', *COMMENT_PREFIXES)):
        raise InvalidEntryError(f'key {key!r} would not read back as a key.')
    return key


def _check_value(value: object) -> str:
    if not isinstance(value, str):
        raise TypeError(f'value must be str, got {type(value).__name__}')
    if '\n' in value or '\r' in value:
        raise InvalidEntryError(f'value {value!r} spans multiple lines.')
    if value != value.strip():
        # trimmed when the file is read back.
        raise InvalidEntryError(f'value {value!r} has surrounding blanks.')
    return value


def _to_int(value: str, lower: int, upper: int) -> int | None:
    # full match only: "12abc", " 12", "1_2" and non-ASCII digits are all
    # rejected. Leading zeros read as decimal ("010" is 10), not octal.
    if not value.isascii() or value != value.strip() or '_' in value:
        return None
    try:
        ret = int(value, 10)
    except ValueError:
        try:
            ret = int(value, 0)  # 0x.., 0o.., 0b..
        except ValueError:
            return None
    return ret if lower <= ret <= upper else None


def _from_int(value: object, lower: int, upper: int) -> str:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f'value must be int, got {type(value).__name__}')
    if not lower <= value <= upper:
        raise OverflowError(f'{value} is out of [{lower}, {upper}].')
    return str(value)


class ConfigSection(MutableMapping[str, str]):
    """A view on one section of a `ConfigStore`, looked up by name.

    Reads see whatever the store holds under that name right now,
    writes and deletes go through the store, so its rules apply:
    removing the last pair drops the section, writing to a view of a
    removed section brings it back (at the end of the order).
    """

    def __init__(self, section_name: str, /, owner: 'ConfigStore') -> None:
        self._name = section_name
        self._owner = owner

    @property
    def name(self) -> str:
        return self._name

    @property
    def _data(self) -> dict[str, str]:
        return self._owner._pairs_of(self._name)

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __setitem__(self, key: str, value: str) -> None:
        self._owner.set_string(self._name, key, value)

    def __delitem__(self, key: str) -> None:
        if not self._owner.remove_key(self._name, key):
            raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __str__(self) -> str:
        return f"[{self._name}]"

    def __repr__(self) -> str:
        return '[%s] { .cnt = %d }' % (self._name, len(self._data))

    def to_dict(self) -> dict[str, str]:
        """A detached copy of the pairs."""
        return self._data.copy()

    def get_string(self, key: str, default: str | None = None) -> str | None:
        return self._data.get(key, default)

    def get_int(self, key: str, default: int) -> int:
        if key not in self._data:
            return default
        ret = _to_int(self._data[key], INT_MIN, INT_MAX)
        return default if ret is None else ret

    def get_uint16(self, key: str, default: int) -> int:
        if key not in self._data:
            return default
        ret = _to_int(self._data[key], 0, UINT16_MAX)
        return default if ret is None else ret

    def get_uint64(self, key: str, default: int) -> int:
        if key not in self._data:
            return default
        ret = _to_int(self._data[key], 0, UINT64_MAX)
        return default if ret is None else ret

    def get_bool(self, key: str, default: bool) -> bool:
        match self._data.get(key):
            case BoolToken.TRUE.value:
                return True
            case BoolToken.FALSE.value:
                return False
            case _:
                return default

    def sort_pairs(self, comp: Callable[[str, str], int]) -> None:
        """Reorder pairs in place by a `strcmp`-like comparator on keys."""
        order = cmp_to_key(comp)
        data = self._data
        pairs = sorted(data.items(), key=lambda kv: order(kv[0]))
        data.clear()
        data.update(pairs)


class SectionHandle:
    """Opaque position in the section sequence of a `ConfigStore`.

    Issued by `section_begin()`, `section_end()` and `section_next()`.
    A handle remembers the store generation it was issued at:
    once a section or key is added or removed, the store rejects it
    with `StaleIteratorError`. Overwriting an existing value keeps
    handles valid.
    """
    __slots__ = ('_store', '_index', '_generation')

    def __init__(self, store: 'ConfigStore', index: int, generation: int):
        self._store = store
        self._index = index
        self._generation = generation

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SectionHandle):
            return NotImplemented
        return (
            self._store is other._store
            and self._index == other._index
            and self._generation == other._generation)

    def __hash__(self) -> int:
        return hash((id(self._store), self._index, self._generation))

    def __repr__(self) -> str:
        return f'<SectionHandle #{self._index} @gen {self._generation}>'


class ConfigStore(MutableMapping[str, ConfigSection]):
    """INI document, i.e. named sections of string pairs.

    Besides the mapping protocol (`store['A']['k']`, `'A' in store`, ...),
    the typed accessors take `(section, key, ...)` and never raise on
    missing data:

        ```python
        store.set_bool('Adapter', 'Discoverable', True)
        store.get_int('Adapter', 'Timeout', 120)  # -> 120, not found
        ```

    `entry_sort_enabled` gates `sort_entries_by_key()`, set it on the class
    or on an instance to opt in.
    """
    entry_sort_enabled = False

    def __init__(self) -> None:
        self.__raw: dict[str, dict[str, str]] = {}
        self.__generation = 0

    def _bump(self) -> None:
        self.__generation += 1

    def _pairs_of(self, section: str) -> dict[str, str]:
        """Live pairs of `section`, or a throwaway empty dict."""
        return self.__raw.get(section, {})

    def __live(self) -> list[str]:
        return [k for k, v in self.__raw.items() if v]

    def __pairs_for_write(self, section: str) -> dict[str, str]:
        if section in self.__raw:
            return self.__raw[section]
        _check_name(section, 'section name')
        if section == DEFAULT_SECTION:
            # the default section precedes every header when saved,
            # so it leads the iteration as well.
            self.__raw = {section: {}, **self.__raw}
        else:
            self.__raw[section] = {}
        return self.__raw[section]

    # mapping protocol

    def __getitem__(self, key: str) -> ConfigSection:
        if key not in self:
            raise KeyError(key)
        return ConfigSection(key, self)

    def __setitem__(
        self, key: str, value: ConfigSection | Mapping[str, str]
    ) -> None:
        # shouldn't keep ptr to external dict in key setting operation.
        pairs = {_check_key(k): _check_value(v) for k, v in value.items()}
        if not pairs:
            self.remove_section(key)
            return
        self.__pairs_for_write(key)
        self.__raw[key] = pairs  # position kept when replacing
        self._bump()

    def __delitem__(self, key: str) -> None:
        if not self.remove_section(key):
            raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        return bool(self.__raw.get(key))  # type: ignore[call-overload]

    def __len__(self) -> int:
        return len(self.__live())

    def __iter__(self) -> Iterator[str]:
        return iter(self.__live())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigStore):
            return NotImplemented
        return [
            (name, list(self.__raw[name].items())) for name in self
        ] == [
            (name, list(other.__raw[name].items())) for name in other
        ]

    def __repr__(self) -> str:
        return f'<ConfigStore {self.__live()}>'

    def __copy__(self) -> 'ConfigStore':
        return self.clone()

    def __deepcopy__(self, memo: dict[int, Any]) -> 'ConfigStore':
        return self.clone()

    def clone(self) -> 'ConfigStore':
        """Deep copy, sharing nothing with `self`.

        An `entry_sort_enabled` set on this instance is carried over.
        """
        ret = ConfigStore()
        ret.__raw = {k: v.copy() for k, v in self.__raw.items() if v}
        if 'entry_sort_enabled' in vars(self):
            ret.entry_sort_enabled = self.entry_sort_enabled
        return ret

    def merge(self, section: str, pairs: Mapping[str, str]) -> None:
        """Merge `pairs` into `section` as if they were read after it."""
        for k, v in pairs.items():
            self.set_string(section, k, v)

    def update(self, other: 'ConfigStore') -> None:  # type: ignore[override]
        """Merge every section of `other` into self."""
        for name, data in other.items():
            self.merge(name, data)

    # queries

    def has_section(self, section: str) -> bool:
        return section in self

    def has_key(self, section: str, key: str) -> bool:
        return key in self.__raw.get(section, {})

    def _find(self, section: str) -> ConfigSection | None:
        return self[section] if section in self else None

    def get_string(
        self, section: str, key: str, default: str | None = None
    ) -> str | None:
        sect = self._find(section)
        return default if sect is None else sect.get_string(key, default)

    def get_int(self, section: str, key: str, default: int) -> int:
        sect = self._find(section)
        return default if sect is None else sect.get_int(key, default)

    def get_uint16(self, section: str, key: str, default: int) -> int:
        sect = self._find(section)
        return default if sect is None else sect.get_uint16(key, default)

    def get_uint64(self, section: str, key: str, default: int) -> int:
        sect = self._find(section)
        return default if sect is None else sect.get_uint64(key, default)

    def get_bool(self, section: str, key: str, default: bool) -> bool:
        sect = self._find(section)
        return default if sect is None else sect.get_bool(key, default)

    # mutations

    def set_string(self, section: str, key: str, value: str) -> None:
        _check_key(key)
        _check_value(value)
        pairs = self.__pairs_for_write(section)
        if key not in pairs:
            self._bump()
        pairs[key] = value

    def set_int(self, section: str, key: str, value: int) -> None:
        self.set_string(section, key, _from_int(value, INT_MIN, INT_MAX))

    def set_uint16(self, section: str, key: str, value: int) -> None:
        self.set_string(section, key, _from_int(value, 0, UINT16_MAX))

    def set_uint64(self, section: str, key: str, value: int) -> None:
        self.set_string(section, key, _from_int(value, 0, UINT64_MAX))

    def set_bool(self, section: str, key: str, value: bool) -> None:
        if not isinstance(value, bool):
            raise TypeError(f'value must be bool, got {type(value).__name__}')
        token = BoolToken.TRUE if value else BoolToken.FALSE
        self.set_string(section, key, token.value)

    def remove_section(self, section: str) -> bool:
        """Returns whether a (non-empty) section was found and removed."""
        found = section in self
        if self.__raw.pop(section, None) is not None:
            self._bump()
        return found

    def remove_key(self, section: str, key: str) -> bool:
        """Returns whether the key was found and removed.

        A section losing its last key is dropped along with it.
        """
        pairs = self.__raw.get(section)
        if not pairs or key not in pairs:
            return False
        del pairs[key]
        if not pairs:
            del self.__raw[section]
        self._bump()
        return True

    def sort_entries_by_key(self, comp: Callable[[str, str], int]) -> None:
        """Sort the pairs of every section by key. Sections stay in place.

        Opt-in only, see `entry_sort_enabled`.
        """
        if not self.entry_sort_enabled:
            raise FeatureDisabledError(
                'entry sorting is off, set `entry_sort_enabled = True` first.')
        for name in self:
            self[name].sort_pairs(comp)

    # section handles

    def __check(self, handle: SectionHandle) -> None:
        if handle._store is not self:
            raise StaleIteratorError('handle was issued by another store.')
        if handle._generation != self.__generation:
            raise StaleIteratorError(
                'store was mutated after the handle was issued.')

    def section_begin(self) -> SectionHandle:
        """Handle to the first section, equal to `section_end()` if none."""
        return SectionHandle(self, 0, self.__generation)

    def section_end(self) -> SectionHandle:
        """One past the last section. Never dereference nor advance it."""
        return SectionHandle(self, len(self), self.__generation)

    def section_next(self, handle: SectionHandle) -> SectionHandle:
        self.__check(handle)
        if handle._index >= len(self):
            raise IndexError('cannot advance the end handle.')
        return SectionHandle(self, handle._index + 1, self.__generation)

    def section_name(self, handle: SectionHandle) -> str:
        self.__check(handle)
        names = self.__live()
        if handle._index >= len(names):
            raise IndexError('the end handle names no section.')
        return names[handle._index]
