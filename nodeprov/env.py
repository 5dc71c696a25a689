"""Reading settings from environment variables with fallbacks."""

from __future__ import annotations

import os
import re

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT_MIN = -(2**63)
_INT_MAX = 2**63 - 1


def with_default_int(key: str, default: int) -> int:
    """Return the integer value of ``key`` or ``default`` if unset or not an integer."""
    val = os.environ.get(key)
    if val is None or not _INT_PATTERN.fullmatch(val):
        return default
    number = int(val)
    if not _INT_MIN <= number <= _INT_MAX:
        return default
    return number


def with_default_string(key: str, default: str) -> str:
    """Return the value of ``key`` or ``default`` if it is unset."""
    return os.environ.get(key, default)