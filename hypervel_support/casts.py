"""Lenient scalar conversions for request and payload values.

Input coming from query strings, forms or JSON is frequently a string. These
helpers convert it the forgiving way web frameworks do: ``"12abc"`` is ``12``,
``"abc"`` is ``0`` and ``"on"`` is true.
"""

from __future__ import annotations

import re
from typing import Any

_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")
_TRUTHY = frozenset({"1", "true", "on", "yes"})


def to_float(value: Any) -> float:
    """Convert to float, reading the leading number of strings (``0.0`` when there is none)."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    if value is None:
        return 0.0
    if isinstance(value, (list, tuple, dict)):
        return 1.0 if value else 0.0
    match = _LEADING_NUMBER.match(str(value))
    return float(match.group(1)) if match else 0.0


def to_int(value: Any) -> int:
    """Convert to int, truncating towards zero (``0`` for non-numeric strings)."""
    if isinstance(value, int):
        return int(value)
    number = to_float(value)
    if number != number or number in (float("inf"), float("-inf")):
        return 0
    return int(number)


def to_bool(value: Any) -> bool:
    """Return True for ``1``, ``"true"``, ``"on"`` and ``"yes"`` (case-insensitive)."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in _TRUTHY
