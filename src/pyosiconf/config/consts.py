# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2026/10/19 13:58:07
# @Author : Kariko Lin

from enum import Enum

# pairs found before any `[section]` header land here.
DEFAULT_SECTION = 'Global'

# a line whose first non-blank char is one of these is a comment.
COMMENT_PREFIXES = ('#', ';')


class BoolToken(str, Enum):
    TRUE = 'true'
    FALSE = 'false'


# C `int`, `unsigned short` and `uint64_t` ranges.
INT_MIN = -(1 << 31)
INT_MAX = (1 << 31) - 1
UINT16_MAX = 0xFFFF
UINT64_MAX = (1 << 64) - 1
