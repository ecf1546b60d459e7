"""Structural contracts shared across the support package.

These are small runtime-checkable protocols so any object with the right
methods qualifies; nothing has to inherit from them.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, Protocol, runtime_checkable


@runtime_checkable
class Arrayable(Protocol):
    """Object that can be converted to a plain dict / list."""

    def to_array(self) -> Any: ...


@runtime_checkable
class Jsonable(Protocol):
    def to_json(self, **options: Any) -> str: ...


@runtime_checkable
class Htmlable(Protocol):
    """Object that renders itself as HTML that must not be escaped again."""

    def to_html(self) -> str: ...


@runtime_checkable
class HasOnceHash(Protocol):
    """Compute the hash used to represent the object when passed to ``once`` callers."""

    def once_hash(self) -> str: ...


@runtime_checkable
class UrlRoutable(Protocol):
    """Object that can stand in for its route key in URLs (e.g. a model)."""

    def get_route_key(self) -> Any: ...


@runtime_checkable
class ArrayAccess(Protocol):
    """Keyed container supporting ``obj[key]`` and ``key in obj``."""

    def __getitem__(self, key: Any) -> Any: ...

    def __contains__(self, key: Any) -> bool: ...



@runtime_checkable
class ValidatedData(Arrayable, ArrayAccess, Protocol):
    def __iter__(self) -> Iterator[Any]: ...

    def all(self, *keys: Any) -> Dict[str, Any]: ...
