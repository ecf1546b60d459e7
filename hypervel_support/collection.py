"""Eager, dict-backed collection.

A :class:`Collection` keeps its items in an insertion-ordered dict. Lists are
stored keyed by position, so keys survive operations such as ``filter`` just
like they do for associative arrays; call :meth:`Collection.values` to
re-index. :meth:`Collection.all` returns a list whenever the keys are
``0..n-1`` in order and a dict otherwise.

Callbacks receive ``(value, key)`` but may accept fewer arguments.
"""

from __future__ import annotations

import json
import math
import operator
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterator, List, Optional, Tuple, Union

from .arr import Arr, data_get
from .arr import value as resolve_value
from .callbacks import invoke
from .contracts import Arrayable, Jsonable
from .traits.conditionable import Conditionable
from .traits.macroable import Macroable
from .traits.transforms_to_resource_collection import TransformsToResourceCollection

if TYPE_CHECKING:
    from .lazy_collection import LazyCollection

_MISSING = object()

_OPERATORS: Dict[str, Callable[[Any, Any], bool]] = {
    "=": operator.eq,
    "==": operator.eq,
    "===": lambda a, b: type(a) is type(b) and a == b,
    "!=": operator.ne,
    "<>": operator.ne,
    "!==": lambda a, b: type(a) is not type(b) or a != b,
    "<": operator.lt,
    ">": operator.gt,
    "<=": operator.le,
    ">=": operator.ge,
}


def _value_retriever(key: Union[None, str, Callable[..., Any]]) -> Callable[..., Any]:
    if callable(key):
        return key
    if key is None:
        return lambda item, *_: item
    return lambda item, *_: data_get(item, key)


def _items_of(items: Any) -> Dict[Any, Any]:
    if items is None:
        return {}
    if isinstance(items, Collection):
        return dict(items.items())
    if isinstance(items, Mapping):
        return dict(items)
    if isinstance(items, (str, bytes)):
        return {0: items}
    if callable(getattr(items, "pairs", None)):
        return dict(items.pairs())
    if isinstance(items, Arrayable):
        return _items_of(items.to_array())
    if isinstance(items, Iterable):
        return dict(enumerate(items))
    return {0: items}


def _plain(item: Any) -> Any:
    if isinstance(item, Arrayable):
        return item.to_array()
    return item


class Collection(Macroable, Conditionable, TransformsToResourceCollection):
    """
    Insertion-ordered collection of keyed items.

    Usage:
        users = Collection([{"name": "a", "age": 3}, {"name": "b", "age": 5}])
        users.where("age", ">", 4).pluck("name").all()  # ["b"]
    """

    def __init__(self, items: Any = None) -> None:
        self._items: Dict[Any, Any] = _items_of(items)

    @classmethod
    def make(cls, items: Any = None) -> "Collection":
        return cls(items)

    @classmethod
    def wrap(cls, items: Any) -> "Collection":
        if isinstance(items, Collection):
            return cls(items)
        return cls(Arr.wrap(items) if not isinstance(items, Mapping) else items)

    @classmethod
    def times(cls, number: int, callback: Optional[Callable[[int], Any]] = None) -> "Collection":
        if number < 1:
            return cls()
        numbers = range(1, number + 1)
        return cls([callback(n) if callback else n for n in numbers])

    # ------------------------------------------------------------------
    # Basic access
    # ------------------------------------------------------------------

    def all(self) -> Union[List[Any], Dict[Any, Any]]:
        """Return the items as a list when keyed 0..n-1, otherwise as a dict."""
        if Arr.is_list(self._items):
            return list(self._items.values())
        return dict(self._items)

    def items(self) -> List[Tuple[Any, Any]]:
        return list(self._items.items())

    def keys(self) -> "Collection":
        return Collection(list(self._items.keys()))

    def values(self) -> "Collection":
        return Collection(list(self._items.values()))

    def count(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def is_not_empty(self) -> bool:
        return not self.is_empty()

    def get(self, key: Any, default: Any = None) -> Any:
        if key in self._items:
            return self._items[key]
        return resolve_value(default)

    def has(self, *keys: Any) -> bool:
        keys = tuple(keys[0]) if len(keys) == 1 and isinstance(keys[0], list) else keys
        return all(key in self._items for key in keys)

    def first(self, callback: Optional[Callable[..., Any]] = None, default: Any = None) -> Any:
        for key, item in self._items.items():
            if callback is None or invoke(callback, item, key):
                return item
        return resolve_value(default)

    def last(self, callback: Optional[Callable[..., Any]] = None, default: Any = None) -> Any:
        for key, item in reversed(list(self._items.items())):
            if callback is None or invoke(callback, item, key):
                return item
        return resolve_value(default)

    # ------------------------------------------------------------------
    # Mutation (in place, returning self)
    # ------------------------------------------------------------------

    def put(self, key: Any, item: Any) -> "Collection":
        self._items[key] = item
        return self

    def push(self, *items: Any) -> "Collection":
        for item in items:
            self._items[self._next_index()] = item
        return self

    def prepend(self, item: Any, key: Any = _MISSING) -> "Collection":
        if key is _MISSING:
            values = [item, *self._items.values()] if Arr.is_list(self._items) else None
            if values is not None:
                self._items = dict(enumerate(values))
                return self
            key = self._next_index()
        self._items = {key: item, **{k: v for k, v in self._items.items() if k != key}}
        return self

    def pull(self, key: Any, default: Any = None) -> Any:
        if key in self._items:
            return self._items.pop(key)
        return resolve_value(default)

    def forget(self, keys: Any) -> "Collection":
        for key in Arr.wrap(keys):
            self._items.pop(key, None)
        return self

    def _next_index(self) -> int:
        indices = [key for key in self._items if isinstance(key, int) and not isinstance(key, bool)]
        return max(indices) + 1 if indices else 0

    # ------------------------------------------------------------------
    # Transformation (returning new collections)
    # ------------------------------------------------------------------

    def map(self, callback: Callable[..., Any]) -> "Collection":
        return type(self)({key: invoke(callback, item, key) for key, item in self._items.items()})

    def map_with_keys(self, callback: Callable[..., Mapping]) -> "Collection":
        result: Dict[Any, Any] = {}
        for key, item in self._items.items():
            result.update(invoke(callback, item, key))
        return type(self)(result)

    def map_into(self, cls: Callable[[Any], Any]) -> "Collection":
        return self.map(lambda item, key: cls(item))

    def filter(self, callback: Optional[Callable[..., Any]] = None) -> "Collection":
        if callback is None:
            return type(self)({key: item for key, item in self._items.items() if item})
        return type(self)({key: item for key, item in self._items.items() if invoke(callback, item, key)})

    def reject(self, callback: Callable[..., Any]) -> "Collection":
        return type(self)({key: item for key, item in self._items.items() if not invoke(callback, item, key)})

    def each(self, callback: Callable[..., Any]) -> "Collection":
        """Run the callback over each item; returning ``False`` stops the loop."""
        for key, item in list(self._items.items()):
            if invoke(callback, item, key) is False:
                break
        return self

    def reduce(self, callback: Callable[..., Any], initial: Any = None) -> Any:
        carry = initial
        for key, item in self._items.items():
            carry = invoke(callback, carry, item, key)
        return carry

    def pluck(self, value_key: Any, key: Any = None) -> "Collection":
        if key is None:
            return type(self)([data_get(item, value_key) for item in self._items.values()])
        return type(self)({data_get(item, key): data_get(item, value_key) for item in self._items.values()})

    def where(self, key: Any, operator_or_value: Any = _MISSING, value: Any = _MISSING) -> "Collection":
        """
        Filter items by a key comparison.

        ``where("age", 3)`` compares with ``==``; ``where("age", ">", 3)``
        uses the given operator.
        """
        if operator_or_value is _MISSING:
            compare, expected = (lambda actual, _: bool(actual)), None
        elif value is _MISSING:
            compare, expected = operator.eq, operator_or_value
        else:
            compare, expected = _OPERATORS.get(operator_or_value, operator.eq), value

        def matches(item: Any) -> bool:
            actual = data_get(item, key)
            try:
                return compare(actual, expected)
            except TypeError:
                return False

        return self.filter(matches)

    def where_in(self, key: Any, values: Iterable[Any]) -> "Collection":
        candidates = list(values)
        return self.filter(lambda item: data_get(item, key) in candidates)

    def sum(self, callback: Union[None, str, Callable[..., Any]] = None) -> Any:
        retrieve = _value_retriever(callback)
        return sum((invoke(retrieve, item, key) for key, item in self._items.items()), 0)

    def avg(self, callback: Union[None, str, Callable[..., Any]] = None) -> Optional[float]:
        retrieve = _value_retriever(callback)
        numbers = [invoke(retrieve, item, key) for key, item in self._items.items()]
        numbers = [number for number in numbers if number is not None]
        if not numbers:
            return None
        return sum(numbers) / len(numbers)

    def min(self, callback: Union[None, str, Callable[..., Any]] = None) -> Any:
        retrieve = _value_retriever(callback)
        numbers = [invoke(retrieve, item, key) for key, item in self._items.items()]
        numbers = [number for number in numbers if number is not None]
        return min(numbers) if numbers else None

    def max(self, callback: Union[None, str, Callable[..., Any]] = None) -> Any:
        retrieve = _value_retriever(callback)
        numbers = [invoke(retrieve, item, key) for key, item in self._items.items()]
        numbers = [number for number in numbers if number is not None]
        return max(numbers) if numbers else None

    def chunk(self, size: int) -> "Collection":
        """Break the collection into collections of ``size`` items, preserving keys."""
        if size <= 0:
            return type(self)()
        chunks: List[Collection] = []
        pairs = list(self._items.items())
        for start in range(0, len(pairs), size):
            chunks.append(type(self)(dict(pairs[start : start + size])))
        return type(self)(chunks)

    def chunk_while(self, callback: Callable[..., Any]) -> "Collection":
        """Chunk consecutive items while ``callback(value, key, chunk)`` holds."""
        return type(self)([chunk.collect() for chunk in self.lazy().chunk_while(callback)])

    def merge(self, items: Any) -> "Collection":
        """Merge like ``array_merge``: int keys are appended, other keys overwrite."""
        result: Dict[Any, Any] = {}
        index = 0
        for source in (self._items, _items_of(items)):
            for key, item in source.items():
                if isinstance(key, int) and not isinstance(key, bool):
                    result[index] = item
                    index += 1
                else:
                    result[key] = item
        return type(self)(result)

    def only(self, keys: Any) -> "Collection":
        if keys is None:
            return type(self)(self._items)
        wanted = keys.all() if isinstance(keys, Collection) else Arr.wrap(keys)
        return type(self)({key: self._items[key] for key in wanted if key in self._items})

    def except_(self, keys: Any) -> "Collection":
        unwanted = keys.all() if isinstance(keys, Collection) else Arr.wrap(keys)
        return type(self)(Arr.except_(self._items, list(unwanted)))

    def unique(self, key: Union[None, str, Callable[..., Any]] = None) -> "Collection":
        retrieve = _value_retriever(key)
        seen: List[Any] = []
        result: Dict[Any, Any] = {}
        for item_key, item in self._items.items():
            marker = invoke(retrieve, item, item_key)
            if marker in seen:
                continue
            seen.append(marker)
            result[item_key] = item
        return type(self)(result)

    def sort(self, key: Optional[Callable[[Any], Any]] = None, reverse: bool = False) -> "Collection":
        """Sort by value (optionally through ``key``), keeping keys."""
        pairs = sorted(self._items.items(), key=lambda pair: key(pair[1]) if key else pair[1], reverse=reverse)
        return type(self)(dict(pairs))

    def sort_by(self, callback: Union[str, Callable[..., Any]], descending: bool = False) -> "Collection":
        retrieve = _value_retriever(callback)
        pairs = sorted(self._items.items(), key=lambda pair: invoke(retrieve, pair[1], pair[0]), reverse=descending)
        return type(self)(dict(pairs))

    def sort_by_desc(self, callback: Union[str, Callable[..., Any]]) -> "Collection":
        return self.sort_by(callback, descending=True)

    def sort_keys(self, reverse: bool = False) -> "Collection":
        return type(self)(dict(sorted(self._items.items(), key=lambda pair: pair[0], reverse=reverse)))

    def reverse(self) -> "Collection":
        return type(self)(dict(reversed(list(self._items.items()))))

    def flatten(self, depth: float = math.inf) -> "Collection":
        return type(self)(_flatten(self._items.values(), depth))

    def collapse(self) -> "Collection":
        return type(self)(Arr.collapse(_plain(item) for item in self._items.values()))

    def implode(self, glue: str, key: Any = None) -> str:
        if key is not None:
            return glue.join(str(data_get(item, key)) for item in self._items.values())
        return glue.join(str(item) for item in self._items.values())

    def join(self, glue: str, final_glue: str = "") -> str:
        values = [str(item) for item in self._items.values()]
        if not final_glue or len(values) < 2:
            return glue.join(values)
        return glue.join(values[:-1]) + final_glue + values[-1]

    def contains(self, key: Any, operator_or_value: Any = _MISSING, value: Any = _MISSING) -> bool:
        """
        Determine whether an item exists.

        ``contains(3)`` checks values, ``contains(callable)`` runs a truth
        test and ``contains("name", "a")`` compares a key of each item.
        """
        if operator_or_value is _MISSING:
            if callable(key):
                return self.first(key, _MISSING) is not _MISSING
            return key in self._items.values()
        return self.where(key, operator_or_value, value).is_not_empty()

    def doesnt_contain(self, key: Any, operator_or_value: Any = _MISSING, value: Any = _MISSING) -> bool:
        return not self.contains(key, operator_or_value, value)

    def take(self, limit: int) -> "Collection":
        pairs = list(self._items.items())
        selected = pairs[limit:] if limit < 0 else pairs[:limit]
        return type(self)(dict(selected))

    def skip(self, count: int) -> "Collection":
        return type(self)(dict(list(self._items.items())[count:]))

    def slice(self, offset: int, length: Optional[int] = None) -> "Collection":
        pairs = list(self._items.items())[offset:]
        if length is not None:
            pairs = pairs[:length]
        return type(self)(dict(pairs))

    def group_by(self, group_key: Union[str, Callable[..., Any]], preserve_keys: bool = False) -> "Collection":
        retrieve = _value_retriever(group_key)
        groups: Dict[Any, Collection] = {}
        for key, item in self._items.items():
            group = invoke(retrieve, item, key)
            for group_value in Arr.wrap(group) if isinstance(group, list) else [group]:
                if isinstance(group_value, bool):
                    group_value = int(group_value)
                bucket = groups.setdefault(group_value, type(self)())
                if preserve_keys:
                    bucket.put(key, item)
                else:
                    bucket.push(item)
        return type(self)(groups)

    def key_by(self, key_by: Union[str, Callable[..., Any]]) -> "Collection":
        retrieve = _value_retriever(key_by)
        return type(self)({invoke(retrieve, item, key): item for key, item in self._items.items()})

    def flip(self) -> "Collection":
        return type(self)({item: key for key, item in self._items.items()})

    def combine(self, values: Any) -> "Collection":
        return type(self)(dict(zip(self._items.values(), _items_of(values).values())))

    def diff(self, items: Any) -> "Collection":
        other = list(_items_of(items).values())
        return type(self)({key: item for key, item in self._items.items() if item not in other})

    def intersect(self, items: Any) -> "Collection":
        other = list(_items_of(items).values())
        return type(self)({key: item for key, item in self._items.items() if item in other})

    def pipe(self, callback: Callable[["Collection"], Any]) -> Any:
        return callback(self)

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def collect(self) -> "Collection":
        return Collection(self._items)

    def lazy(self) -> "LazyCollection":
        from .lazy_collection import LazyCollection

        return LazyCollection(dict(self._items))

    def pairs(self) -> Iterator[Tuple[Any, Any]]:
        return iter(list(self._items.items()))

    def to_array(self) -> Union[List[Any], Dict[Any, Any]]:
        """Convert the collection (and any arrayable items) to plain lists / dicts."""
        converted = {key: _plain(item) for key, item in self._items.items()}
        return list(converted.values()) if Arr.is_list(converted) else converted

    def json_serialize(self) -> Union[List[Any], Dict[Any, Any]]:
        def convert(item: Any) -> Any:
            if hasattr(item, "json_serialize") and callable(item.json_serialize):
                return item.json_serialize()
            if isinstance(item, Jsonable):
                return json.loads(item.to_json())
            return _plain(item)

        converted = {key: convert(item) for key, item in self._items.items()}
        if Arr.is_list(converted):
            return list(converted.values())
        return {str(key): item for key, item in converted.items()}

    def to_json(self, **options: Any) -> str:
        options.setdefault("default", str)
        return json.dumps(self.json_serialize(), **options)

    # ------------------------------------------------------------------
    # Python protocols
    # ------------------------------------------------------------------

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._items.values()))

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: Any) -> bool:
        return key in self._items

    def __getitem__(self, key: Any) -> Any:
        return self._items[key]

    def __setitem__(self, key: Any, item: Any) -> None:
        if key is None:
            self.push(item)
        else:
            self._items[key] = item

    def __delitem__(self, key: Any) -> None:
        del self._items[key]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Collection):
            return self._items == other._items
        if isinstance(other, (list, dict)):
            return self.all() == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.all()!r})"


def _flatten(items: Iterable[Any], depth: float) -> List[Any]:
    result: List[Any] = []
    for item in items:
        if isinstance(item, Collection):
            item = item.all()
        if isinstance(item, Mapping):
            item = list(item.values())
        if not isinstance(item, list):
            result.append(item)
        elif depth == 1:
            result.extend(item)
        else:
            result.extend(_flatten(item, depth - 1))
    return result
