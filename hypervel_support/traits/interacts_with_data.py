"""Typed accessors over keyed input data."""

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar

from ..arr import Arr, data_get
from ..arr import value as resolve_value
from ..casts import to_bool, to_float, to_int
from ..strings import Str, Stringable

E = TypeVar("E", bound=Enum)

_MISSING = object()


def _keys(key: Any, rest: tuple) -> List[Any]:
    if isinstance(key, (list, tuple)):
        return list(key)
    return [key, *rest]


class InteractsWithData:
    """
    Mixin adding lookup and conversion helpers to objects holding input data.

    The host class must implement ``all(*keys)`` returning the whole data as a
    dict, and ``data(key=None, default=None)`` returning one value (dot
    notation) or everything when ``key`` is None.
    """

    # ------------------------------------------------------------------
    # Presence
    # ------------------------------------------------------------------

    def exists(self, key: Any, *keys: Any) -> bool:
        return self.has(key, *keys)

    def has(self, key: Any, *keys: Any) -> bool:
        """Determine if the data contains every given key."""
        data = self.all()
        return all(Arr.has(data, candidate) for candidate in _keys(key, keys))

    def has_any(self, keys: Any, *rest: Any) -> bool:
        return Arr.has_any(self.all(), _keys(keys, rest))

    def when_has(
        self, key: str, callback: Callable[[Any], Any], default: Optional[Callable[[], Any]] = None
    ) -> Any:
        """Apply the callback if the data contains the given key."""
        if self.has(key):
            return callback(data_get(self.all(), key)) or self
        if default is not None:
            return default()
        return self

    def filled(self, key: Any, *keys: Any) -> bool:
        """Determine if every given key holds a non-empty value."""
        return not any(self._is_empty_string(candidate) for candidate in _keys(key, keys))

    def is_not_filled(self, key: Any, *keys: Any) -> bool:
        return all(self._is_empty_string(candidate) for candidate in _keys(key, keys))

    def any_filled(self, keys: Any, *rest: Any) -> bool:
        return any(self.filled(candidate) for candidate in _keys(keys, rest))

    def when_filled(
        self, key: str, callback: Callable[[Any], Any], default: Optional[Callable[[], Any]] = None
    ) -> Any:
        if self.filled(key):
            return callback(data_get(self.all(), key)) or self
        if default is not None:
            return default()
        return self

    def missing(self, key: Any, *keys: Any) -> bool:
        return not self.has(_keys(key, keys))

    def when_missing(
        self, key: str, callback: Callable[[Any], Any], default: Optional[Callable[[], Any]] = None
    ) -> Any:
        if self.missing(key):
            return callback(data_get(self.all(), key)) or self
        if default is not None:
            return default()
        return self

    def _is_empty_string(self, key: str) -> bool:
        item = self.data(key)
        if isinstance(item, (bool, list, dict)):
            return False
        return ("" if item is None else str(item)).strip() == ""

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def str(self, key: str, default: Any = None) -> Stringable:
        return self.string(key, default)

    def string(self, key: str, default: Any = None) -> Stringable:
        return Str.of(self.data(key, default))

    def boolean(self, key: Optional[str] = None, default: bool = False) -> bool:
        """Return True when the value is "1", "true", "on" or "yes"."""
        return to_bool(self.data(key, default))

    def integer(self, key: str, default: int = 0) -> int:
        return to_int(self.data(key, default))

    def float(self, key: str, default: float = 0.0) -> float:
        return to_float(self.data(key, default))

    def date(self, key: str, format: Optional[str] = None, tz: Optional[dt.tzinfo] = None) -> Optional[dt.datetime]:
        """
        Parse the value as a datetime.

        Args:
            key: Data key.
            format: ``strptime`` format; ISO 8601 when omitted.
            tz: Attached to naive results, converts aware ones.

        Returns:
            The parsed datetime, or None when the value is not filled.
        """
        if self.is_not_filled(key):
            return None

        raw = str(self.data(key)).strip()
        parsed = dt.datetime.strptime(raw, format) if format else dt.datetime.fromisoformat(raw)

        if tz is None:
            return parsed
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=tz)
        return parsed.astimezone(tz)

    def enum(self, key: str, enum_cls: Type[E], default: Any = None) -> Optional[E]:
        """Return the enum case backed by the value, or ``default``."""
        if self.is_not_filled(key) or not issubclass(enum_cls, Enum):
            return resolve_value(default)
        result = _try_from(enum_cls, self.data(key))
        return result if result is not None else resolve_value(default)

    def enums(self, key: str, enum_cls: Type[E]) -> List[E]:
        if self.is_not_filled(key) or not issubclass(enum_cls, Enum):
            return []
        cases = self.collect(key).map(lambda item: _try_from(enum_cls, item))
        return list(cases.filter(lambda case: case is not None).values())

    def array(self, key: Any = None) -> Any:
        if isinstance(key, (list, tuple)):
            return self.only(key)
        item = self.data(key)
        if isinstance(item, (list, dict)):
            return item
        return [] if item is None else [item]

    def collect(self, key: Any = None) -> Any:
        from ..collection import Collection

        return Collection(self.only(key) if isinstance(key, (list, tuple)) else self.data(key))

    def only(self, keys: Any, *rest: Any) -> Dict[str, Any]:
        """Get a subset containing the provided keys (dot notation allowed)."""
        results: Dict[str, Any] = {}
        data = self.all()

        for key in _keys(keys, rest):
            item = data_get(data, key, _MISSING)
            if item is not _MISSING:
                Arr.set(results, key, item)

        return results

    def except_(self, keys: Any, *rest: Any) -> Dict[str, Any]:
        return Arr.except_(self.all(), _keys(keys, rest))


def _try_from(enum_cls: Type[E], item: Any) -> Optional[E]:
    try:
        return enum_cls(item)
    except ValueError:
        pass
    for case in enum_cls:
        if str(case.value) == str(item):
            return case
    return None
