# -*- encoding: utf-8 -*-
# @File   : errors.py
# @Time   : 2026/10/19 14:02:31
# @Author : Kariko Lin

# lookups and conversions never raise, they fall back to defaults.
# these are for callers handing us something we cannot store.


class ConfigError(Exception):
    """Base of all errors raised by `pyosiconf.config`."""
    pass


class InvalidEntryError(ConfigError, ValueError):
    """Section name, key or value that would not survive a save/load."""
    pass


class StaleIteratorError(ConfigError, RuntimeError):
    """A section handle used after the store was structurally mutated,
    or handed to a store that did not issue it."""
    pass


class FeatureDisabledError(ConfigError, RuntimeError):
    pass
