"""General purpose helper functions."""

from __future__ import annotations

import logging
import os
import re
import time
from collections.abc import Mapping, Sized
from enum import Enum
from typing import Any, Callable, List, Optional, Type, Union

from .arr import data_fill, data_forget, data_get, data_set, value
from .callbacks import invoke
from .collection import Collection
from .contracts import Htmlable
from .once import once
from .optional import Optional as OptionalValue

logger = logging.getLogger(__name__)

_ENTITY = re.compile(r"&(?!(?:#\d+|#[xX][0-9a-fA-F]+|[A-Za-z][A-Za-z0-9]*);)")
_SPECIAL_CHARS = {"<": "&lt;", ">": "&gt;", '"': "&quot;", "'": "&#039;"}


def env(key: str, default: Any = None) -> Any:
    """
    Get the value of an environment variable.

    ``true`` / ``false`` / ``empty`` / ``null`` (optionally wrapped in
    parentheses) become ``True`` / ``False`` / ``""`` / ``None``; values
    wrapped in matching single or double quotes are unquoted.
    """
    raw = os.environ.get(key)
    if raw is None:
        return value(default)

    lowered = raw.lower()
    if lowered in ("true", "(true)"):
        return True
    if lowered in ("false", "(false)"):
        return False
    if lowered in ("empty", "(empty)"):
        return ""
    if lowered in ("null", "(null)"):
        return None

    if len(raw) > 1 and raw[0] == raw[-1] and raw[0] in "'\"":
        return raw[1:-1]
    return raw


def e(target: Any, double_encode: bool = True) -> str:
    """Encode HTML special characters in a string."""
    if isinstance(target, Htmlable):
        return target.to_html()

    if isinstance(target, Enum):
        target = target.value

    text = "" if target is None else str(target)
    text = text.replace("&", "&amp;") if double_encode else _ENTITY.sub("&amp;", text)
    for char, entity in _SPECIAL_CHARS.items():
        text = text.replace(char, entity)
    return text


def blank(target: Any) -> bool:
    """Determine if the given value is "blank"."""
    if target is None:
        return True
    if isinstance(target, str):
        return target.strip() == ""
    if isinstance(target, (bool, int, float)):
        return False
    if isinstance(target, Sized):
        return len(target) == 0
    return not target


def filled(target: Any) -> bool:
    return not blank(target)


def collect(target: Any = None) -> Collection:
    return Collection(target)


def head(target: Any) -> Any:
    """Get the first element of a list or dict (None when empty)."""
    items = list(target.values()) if isinstance(target, Mapping) else list(target)
    return items[0] if items else None


def last(target: Any) -> Any:
    items = list(target.values()) if isinstance(target, Mapping) else list(target)
    return items[-1] if items else None


def class_basename(target: Union[object, type, str]) -> str:
    """Get the class "basename" of the given object, class or dotted class path."""
    if isinstance(target, str):
        name = target
    elif isinstance(target, type):
        name = target.__qualname__
    else:
        name = type(target).__qualname__
    return re.split(r"[.\\/]", name)[-1]


def object_get(target: Any, key: Optional[str], default: Any = None) -> Any:
    """Get an attribute from an object using dot notation."""
    if key is None or key.strip() == "":
        return target

    for segment in key.split("."):
        attribute = getattr(target, segment, None)
        if attribute is None:
            return value(default)
        target = attribute

    return target


def optional(target: Any = None, callback: Optional[Callable[[Any], Any]] = None) -> Any:
    """Provide null-safe access to ``target``, or call ``callback`` with it when present."""
    if callback is None:
        return OptionalValue(target)
    if target is not None:
        return callback(target)
    return None


def retry(
    times: Union[int, List[int]],
    callback: Callable[..., Any],
    sleep_milliseconds: Union[int, Callable[[int, BaseException], int]] = 0,
    when: Optional[Callable[[BaseException], bool]] = None,
) -> Any:
    """
    Retry an operation a given number of times.

    Args:
        times: Attempt count, or a list of sleeps (ms) used as a backoff
            table, allowing ``len(times) + 1`` attempts.
        callback: Receives the attempt number (starting at 1).
        sleep_milliseconds: Pause between attempts, or a callable receiving
            ``(attempt, exception)`` and returning it.
        when: Only retry when this returns truthy for the raised exception.

    Raises:
        Exception: The last exception once attempts are exhausted, or the
            first one ``when`` rejects.
    """
    backoff: List[int] = []
    if isinstance(times, list):
        backoff = times
        times = len(times) + 1

    attempts = 0
    while True:
        attempts += 1
        times -= 1

        try:
            return invoke(callback, attempts)
        except Exception as exc:
            if times < 1 or (when is not None and not when(exc)):
                raise

            delay = backoff[attempts - 1] if attempts - 1 < len(backoff) else sleep_milliseconds
            logger.debug("Attempt %d failed with %r, retrying", attempts, exc)
            if delay:
                time.sleep(value(delay, attempts, exc) / 1000)


class HigherOrderTapProxy:
    """Proxy calling any method on the target and returning the target itself."""

    def __init__(self, target: Any) -> None:
        self.target = target

    def __getattr__(self, name: str) -> Callable[..., Any]:
        if name.startswith("__"):
            raise AttributeError(name)
        method = getattr(self.target, name)

        def call(*args: Any, **kwargs: Any) -> Any:
            method(*args, **kwargs)
            return self.target

        return call


def tap(target: Any, callback: Optional[Callable[[Any], Any]] = None) -> Any:
    """Call the callback with the value then return the value."""
    if callback is None:
        return HigherOrderTapProxy(target)

    callback(target)
    return target


def transform(target: Any, callback: Callable[[Any], Any], default: Any = None) -> Any:
    """Transform the given value if it is present."""
    if filled(target):
        return callback(target)

    if callable(default):
        return default(target)

    return default


def with_(target: Any, callback: Optional[Callable[[Any], Any]] = None) -> Any:
    return target if callback is None else callback(target)


def _exception(exception: Union[str, BaseException, Type[BaseException]], parameters: tuple) -> BaseException:
    if isinstance(exception, type) and issubclass(exception, BaseException):
        return exception(*parameters)
    if isinstance(exception, BaseException):
        return exception
    return RuntimeError(exception)


def throw_if(condition: Any, exception: Any, *parameters: Any) -> Any:
    """Raise the given exception if the condition is truthy, otherwise return the condition."""
    if condition:
        raise _exception(exception, parameters)
    return condition


def throw_unless(condition: Any, exception: Any, *parameters: Any) -> Any:
    if not condition:
        raise _exception(exception, parameters)
    return condition


def when(expr: Any, result: Any = None, default: Any = None) -> Any:
    """Return ``result`` when ``expr`` is truthy, else ``default``; callables receive ``expr``."""
    chosen = result if value(expr) else default
    if callable(chosen) and not isinstance(chosen, type):
        return chosen(expr)
    return chosen


__all__ = [
    "HigherOrderTapProxy",
    "blank",
    "class_basename",
    "collect",
    "data_fill",
    "data_forget",
    "data_get",
    "data_set",
    "e",
    "env",
    "filled",
    "head",
    "last",
    "object_get",
    "once",
    "optional",
    "retry",
    "tap",
    "throw_if",
    "throw_unless",
    "transform",
    "value",
    "when",
    "with_",
]
