"""Null-safe proxy returned by :func:`hypervel_support.helpers.optional`."""

from __future__ import annotations

from typing import Any

from .arr import Arr
from .traits.macroable import Macroable


class Optional(Macroable):
    """
    Wraps a value that may be None.

    Attribute and item lookups on a missing value (or missing attributes and
    keys of a present value) return None instead of raising.
    """

    def __init__(self, value: Any = None) -> None:
        self._value = value

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        if self._value is not None and hasattr(self._value, name):
            return getattr(self._value, name)
        if type(self).has_macro(name):
            return super().__getattr__(name)
        return None

    def __getitem__(self, key: Any) -> Any:
        return Arr.get(self._value, key) if Arr.accessible(self._value) else None

    def __contains__(self, key: Any) -> bool:
        return Arr.accessible(self._value) and Arr.exists(self._value, key)

    def __bool__(self) -> bool:
        return self._value is not None

    def __repr__(self) -> str:
        return f"Optional({self._value!r})"
