# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/19 16:20:14
# @Author : Kariko Lin

from .consts import DEFAULT_SECTION, BoolToken
from .errors import (
    ConfigError,
    InvalidEntryError,
    StaleIteratorError,
    FeatureDisabledError
)
from .model import ConfigSection, ConfigStore, SectionHandle
from .parser import (
    ConfigParser,
    ConfigYamlParser,
    parse,
    serialize,
    load,
    save
)
from .checksum import ChecksumHandler, checksum_read, checksum_save
