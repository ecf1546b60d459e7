"""Per-execution-context storage.

:class:`Context` is a tiny key/value store whose contents are private to the
current asyncio task or thread. It is backed by a ``contextvars.ContextVar``
holding a dict that is copied on every write, so a task spawned from another
task starts with a snapshot of its parent's values and never leaks its own
writes back.
"""

from __future__ import annotations

from contextvars import ContextVar
from typing import Any, Dict, Optional

_STORAGE: ContextVar[Optional[Dict[str, Any]]] = ContextVar("hypervel_support_context", default=None)


class Context:
    """Static accessors over the current context's storage."""

    @staticmethod
    def _data() -> Dict[str, Any]:
        return _STORAGE.get() or {}

    @classmethod
    def get(cls, key: str, default: Any = None) -> Any:
        return cls._data().get(key, default)

    @classmethod
    def has(cls, key: str) -> bool:
        return key in cls._data()

    @classmethod
    def set(cls, key: str, value: Any) -> Any:
        data = dict(cls._data())
        data[key] = value
        _STORAGE.set(data)
        return value

    @classmethod
    def get_or_set(cls, key: str, value: Any) -> Any:
        """Return the stored value, storing ``value`` first if the key is absent.

        A callable ``value`` is treated as a factory and only invoked when
        the key is missing.
        """
        data = cls._data()
        if key in data:
            return data[key]
        return cls.set(key, value() if callable(value) else value)

    @classmethod
    def destroy(cls, key: str) -> None:
        data = cls._data()
        if key in data:
            data = dict(data)
            del data[key]
            _STORAGE.set(data)

    @classmethod
    def clear(cls) -> None:
        _STORAGE.set({})

    @classmethod
    def snapshot(cls) -> Dict[str, Any]:
        """Return a shallow copy of everything stored in the current context."""
        return dict(cls._data())
