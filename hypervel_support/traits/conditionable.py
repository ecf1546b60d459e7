"""Fluent conditional helpers for chainable objects."""

from __future__ import annotations

from typing import Any, Callable, Optional

from ..arr import value as resolve_value
from ..callbacks import invoke


class Conditionable:
    """Adds ``when`` / ``unless`` to a fluent class.

    The callback receives the instance and the resolved condition. Its result
    is returned, or the instance itself when the callback returns ``None``.
    """

    def when(
        self,
        condition: Any,
        callback: Optional[Callable[..., Any]] = None,
        default: Optional[Callable[..., Any]] = None,
    ) -> Any:
        resolved = resolve_value(condition, self) if callable(condition) else condition
        if resolved:
            return self._apply_condition(callback, resolved)
        if default is not None:
            return self._apply_condition(default, resolved)
        return self

    def unless(
        self,
        condition: Any,
        callback: Optional[Callable[..., Any]] = None,
        default: Optional[Callable[..., Any]] = None,
    ) -> Any:
        resolved = resolve_value(condition, self) if callable(condition) else condition
        if not resolved:
            return self._apply_condition(callback, resolved)
        if default is not None:
            return self._apply_condition(default, resolved)
        return self

    def _apply_condition(self, callback: Optional[Callable[..., Any]], resolved: Any) -> Any:
        if callback is None:
            return self
        result = invoke(callback, self, resolved)
        return self if result is None else result


class Tappable:
    """Adds ``tap``: call a callback with the instance and keep chaining."""

    def tap(self, callback: Optional[Callable[[Any], Any]] = None) -> Any:
        from ..helpers import tap

        return tap(self, callback)
