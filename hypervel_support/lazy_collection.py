"""Generator-backed collection.

A :class:`LazyCollection` holds a *source*: a generator function, an
iterable or another collection. Every operation returns a new lazy collection
whose iteration re-runs the source, so nothing is computed until the items
are consumed::

    LazyCollection(read_lines).filter(bool).take(10).all()

Items travel as ``(key, value)`` pairs; list-like sources are keyed by
position.
"""

from __future__ import annotations

import itertools
from collections.abc import Iterable, Mapping
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple, Union

from .arr import value as resolve_value
from .callbacks import invoke
from .collection import Collection
from .contracts import Arrayable
from .traits.conditionable import Conditionable
from .traits.macroable import Macroable

Pair = Tuple[Any, Any]

_MISSING = object()


def _pairs_of(items: Any) -> Iterator[Pair]:
    if items is None:
        return iter(())
    if isinstance(items, (Collection, LazyCollection)):
        return items.pairs()
    if isinstance(items, Mapping):
        return iter(list(items.items()))
    if isinstance(items, Arrayable):
        return _pairs_of(items.to_array())
    if isinstance(items, Iterable) and not isinstance(items, (str, bytes)):
        return enumerate(items)
    return iter([(0, items)])


class LazyCollection(Macroable, Conditionable):
    """Lazily evaluated collection over a re-iterable source."""

    def __init__(self, source: Any = None) -> None:
        if isinstance(source, Iterator):
            # one-shot iterators are buffered so the collection stays re-iterable
            source = list(source)
        self._source = source
        self._pair_factory: Optional[Callable[[], Iterator[Pair]]] = None

    @classmethod
    def make(cls, source: Any = None) -> "LazyCollection":
        return cls(source)

    @classmethod
    def _from_pairs(cls, factory: Callable[[], Iterator[Pair]]) -> "LazyCollection":
        collection = cls()
        collection._pair_factory = factory
        return collection

    @classmethod
    def times(cls, number: int, callback: Optional[Callable[[int], Any]] = None) -> "LazyCollection":
        """Create a collection by invoking the callback a given number of times."""

        def generate() -> Iterator[Any]:
            for n in range(1, number + 1):
                yield callback(n) if callback else n

        return cls(generate)

    @classmethod
    def range(cls, start: int, end: int) -> "LazyCollection":
        """Create a collection with the given range, both ends included."""

        def generate() -> Iterator[int]:
            step = 1 if start <= end else -1
            yield from range(start, end + step, step)

        return cls(generate)

    # ------------------------------------------------------------------
    # Iteration
    # ------------------------------------------------------------------

    def pairs(self) -> Iterator[Pair]:
        if self._pair_factory is not None:
            return self._pair_factory()
        source = self._source
        if callable(source) and not isinstance(source, (Collection, LazyCollection)):
            return _pairs_of(source())
        return _pairs_of(source)

    def __iter__(self) -> Iterator[Any]:
        for _, item in self.pairs():
            yield item

    # ------------------------------------------------------------------
    # Eager results
    # ------------------------------------------------------------------

    def all(self) -> Union[List[Any], Dict[Any, Any]]:
        return self.collect().all()

    def collect(self) -> Collection:
        return Collection(dict(self.pairs()))

    def to_array(self) -> Union[List[Any], Dict[Any, Any]]:
        return self.collect().to_array()

    def count(self) -> int:
        return sum(1 for _ in self.pairs())

    def __len__(self) -> int:
        return self.count()

    def is_empty(self) -> bool:
        return next(iter(self.pairs()), _MISSING) is _MISSING

    def is_not_empty(self) -> bool:
        return not self.is_empty()

    def first(self, callback: Optional[Callable[..., Any]] = None, default: Any = None) -> Any:
        for key, item in self.pairs():
            if callback is None or invoke(callback, item, key):
                return item
        return resolve_value(default)

    def each(self, callback: Callable[..., Any]) -> "LazyCollection":
        """Eagerly run the callback over each item; ``False`` stops the loop."""
        for key, item in self.pairs():
            if invoke(callback, item, key) is False:
                break
        return self

    # ------------------------------------------------------------------
    # Lazy transformations
    # ------------------------------------------------------------------

    def keys(self) -> "LazyCollection":
        return self._from_values(lambda: (key for key, _ in self.pairs()))

    def values(self) -> "LazyCollection":
        return self._from_values(lambda: (item for _, item in self.pairs()))

    def map(self, callback: Callable[..., Any]) -> "LazyCollection":
        return self._derive(lambda: ((key, invoke(callback, item, key)) for key, item in self.pairs()))

    def filter(self, callback: Optional[Callable[..., Any]] = None) -> "LazyCollection":
        if callback is None:
            return self._derive(lambda: ((key, item) for key, item in self.pairs() if item))
        return self._derive(lambda: ((key, item) for key, item in self.pairs() if invoke(callback, item, key)))

    def reject(self, callback: Callable[..., Any]) -> "LazyCollection":
        return self._derive(lambda: ((key, item) for key, item in self.pairs() if not invoke(callback, item, key)))

    def take(self, limit: int) -> "LazyCollection":
        if limit < 0:
            return self._derive(lambda: iter(list(self.pairs())[limit:]))
        return self._derive(lambda: itertools.islice(self.pairs(), limit))

    def skip(self, count: int) -> "LazyCollection":
        return self._derive(lambda: itertools.islice(self.pairs(), max(count, 0), None))

    def chunk(self, size: int) -> "LazyCollection":
        """Chunk the collection into lazy collections of ``size`` items, keeping keys."""
        if size <= 0:
            return type(self)([])

        def generate() -> Iterator[Any]:
            iterator = self.pairs()
            while True:
                chunk = list(itertools.islice(iterator, size))
                if not chunk:
                    return
                yield type(self)(dict(chunk))

        return type(self)(generate)

    def chunk_while(self, callback: Callable[..., Any]) -> "LazyCollection":
        """
        Chunk consecutive items while the callback holds.

        ``callback(value, key, chunk)`` receives the chunk built so far as a
        :class:`Collection`; a falsy result closes that chunk and the current
        item starts the next one.
        """

        def generate() -> Iterator[Any]:
            iterator = self.pairs()
            chunk = Collection()

            for key, item in itertools.islice(iterator, 1):
                chunk[key] = item

            for key, item in iterator:
                if not invoke(callback, item, key, chunk):
                    yield type(self)(chunk)
                    chunk = Collection()
                chunk[key] = item

            if chunk.is_not_empty():
                yield type(self)(chunk)

        return type(self)(generate)

    def _derive(self, factory: Callable[[], Iterator[Pair]]) -> "LazyCollection":
        return type(self)._from_pairs(factory)

    def _from_values(self, factory: Callable[[], Iterator[Any]]) -> "LazyCollection":
        return type(self)._from_pairs(lambda: enumerate(factory()))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(...)"
