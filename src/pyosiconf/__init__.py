# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/19 16:22:40
# @Author : Kariko Lin

import logging

from .config import (
    DEFAULT_SECTION,
    ConfigStore, ConfigSection, SectionHandle,
    ConfigParser, ConfigYamlParser, ChecksumHandler,
    parse, serialize, load, save,
    checksum_read, checksum_save,
    ConfigError, InvalidEntryError, StaleIteratorError, FeatureDisabledError
)

__all__ = [
    'DEFAULT_SECTION',
    'ConfigStore', 'ConfigSection', 'SectionHandle',
    'ConfigParser', 'ConfigYamlParser', 'ChecksumHandler',
    'parse', 'serialize', 'load', 'save',
    'checksum_read', 'checksum_save',
    'ConfigError', 'InvalidEntryError', 'StaleIteratorError',
    'FeatureDisabledError'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
