"""Calling user callbacks with as many arguments as they accept.

Collection callbacks are offered ``(value, key)`` (``(carry, value, key)`` for
reducers). Most callers only care about the value, so :func:`invoke` drops
trailing arguments the callback cannot take instead of failing with a
``TypeError``.
"""

from __future__ import annotations

import inspect
from functools import lru_cache
from typing import Any, Callable, Optional


@lru_cache(maxsize=1024)
def _positional_capacity(callback: Callable[..., Any]) -> Optional[int]:
    """Return how many positional arguments ``callback`` accepts (None = unlimited)."""
    try:
        signature = inspect.signature(callback)
    except (TypeError, ValueError):
        return 1

    count = 0
    for parameter in signature.parameters.values():
        if parameter.kind is inspect.Parameter.VAR_POSITIONAL:
            return None
        if parameter.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD):
            count += 1
    return count


def invoke(callback: Callable[..., Any], *args: Any) -> Any:
    """Call ``callback`` with the leading ``args`` it can accept."""
    try:
        capacity = _positional_capacity(callback)
    except TypeError:
        # unhashable callables (e.g. some partials) skip the cache
        capacity = _positional_capacity.__wrapped__(callback)
    if capacity is None:
        return callback(*args)
    return callback(*args[:capacity])
