"""Dot-notation access over nested dicts, lists and objects.

``Arr`` groups the dict/list helpers; the module-level ``data_*`` functions
also walk object attributes and understand ``*`` wildcard segments::

    data_get({"users": [{"name": "a"}, {"name": "b"}]}, "users.*.name")  # ["a", "b"]

Query string helpers build and parse bracketed keys (``a[b]=1&a[c][]=2``)
the same way PHP's ``http_build_query`` / ``parse_str`` do, so URLs produced
by framework code round-trip between services.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any, Dict, Iterable, List, Optional
from urllib.parse import quote, unquote_plus

from .contracts import ArrayAccess
from .errors import UndefinedOffsetError

_MISSING = object()


def value(target: Any, *args: Any) -> Any:
    """Return ``target``, calling it first when it is callable."""
    return target(*args) if callable(target) else target


def _is_string(target: Any) -> bool:
    return isinstance(target, (str, bytes, bytearray))


def _resolve_key(target: Any, key: Any) -> Any:
    """Return the concrete key of ``target`` matching ``key``, or ``_MISSING``.

    String segments coming from dot notation are retried as ints so that
    ``"items.0"`` reaches list positions and int-keyed dicts.
    """
    if isinstance(target, (list, tuple)):
        try:
            index = int(key)
        except (TypeError, ValueError):
            return _MISSING
        return index if 0 <= index < len(target) and not isinstance(key, bool) else _MISSING
    if isinstance(target, Mapping) or Arr.accessible(target):
        try:
            if key in target:
                return key
        except TypeError:
            return _MISSING
        if isinstance(key, str) and key.lstrip("-").isdigit():
            as_int = int(key)
            try:
                if as_int in target:
                    return as_int
            except TypeError:
                return _MISSING
    return _MISSING


def _list_position(container: List[Any], segment: Any, append: bool = False) -> Optional[int]:
    """Return the list index ``segment`` names, or None; ``append`` also allows ``len(container)``."""
    if isinstance(segment, bool):
        return None
    try:
        index = int(segment)
    except (TypeError, ValueError):
        return None
    limit = len(container) + 1 if append else len(container)
    return index if 0 <= index < limit else None


def _is_collection(target: Any) -> bool:
    if isinstance(target, (Mapping, list, tuple)) or not isinstance(target, ArrayAccess):
        return False
    return callable(getattr(target, "all", None))


def _copy_containers(target: Any) -> Any:
    if isinstance(target, dict):
        return {k: _copy_containers(v) for k, v in target.items()}
    if isinstance(target, list):
        return [_copy_containers(v) for v in target]
    return target


class Arr:
    """Static helpers for dicts and lists."""

    @staticmethod
    def accessible(target: Any) -> bool:
        """Determine whether the value supports keyed access."""
        if _is_string(target):
            return False
        return isinstance(target, (Mapping, list, tuple)) or isinstance(target, ArrayAccess)

    @staticmethod
    def exists(target: Any, key: Any) -> bool:
        return _resolve_key(target, key) is not _MISSING

    @staticmethod
    def get(target: Any, key: Any = None, default: Any = None) -> Any:
        """Get an item using dot notation; callable defaults are evaluated lazily."""
        if not Arr.accessible(target):
            return value(default)
        if key is None:
            return target

        found = _resolve_key(target, key)
        if found is not _MISSING:
            return target[found]

        if not isinstance(key, str) or "." not in key:
            return value(default)

        for segment in key.split("."):
            found = _resolve_key(target, segment) if Arr.accessible(target) else _MISSING
            if found is _MISSING:
                return value(default)
            target = target[found]
        return target

    @staticmethod
    def set(target: MutableMapping, key: Any, item: Any) -> Any:
        """
        Set an item using dot notation, creating intermediate dicts.

        Returns the container the value was written to. A ``None`` key leaves
        ``target`` untouched and returns ``item``. A nested list reached with
        a segment that is not one of its positions becomes an index-keyed dict.

        Raises:
            UndefinedOffsetError: If ``target`` itself is a list and the first
                segment is not one of its positions.
        """
        if key is None:
            return item

        keys = key.split(".") if isinstance(key, str) else [key]
        parent: Any = None
        parent_key: Any = None
        for position, segment in enumerate(keys):
            if isinstance(target, list) and _list_position(target, segment, position == len(keys) - 1) is None:
                if parent is None:
                    raise UndefinedOffsetError(key)
                target = parent[parent_key] = dict(enumerate(target))
            if position == len(keys) - 1:
                break

            found = _resolve_key(target, segment)
            if found is _MISSING or not isinstance(target[found], (MutableMapping, list)):
                found = segment if found is _MISSING else found
                target[found] = {}
            parent, parent_key = target, found
            target = target[found]

        last = keys[-1]
        if isinstance(target, list):
            index = _list_position(target, last, True)
            if index == len(target):
                target.append(item)
            else:
                target[index] = item
            return target
        found = _resolve_key(target, last)
        target[last if found is _MISSING else found] = item
        return target

    @staticmethod
    def has(target: Any, keys: Any) -> bool:
        """Determine whether every given key exists (dot notation allowed)."""
        keys = Arr.wrap(keys)
        if not target or not keys:
            return False

        for key in keys:
            sub = target
            if Arr.exists(sub, key):
                continue
            if not isinstance(key, str):
                return False
            for segment in key.split("."):
                found = _resolve_key(sub, segment) if Arr.accessible(sub) else _MISSING
                if found is _MISSING:
                    return False
                sub = sub[found]
        return True

    @staticmethod
    def has_any(target: Any, keys: Any) -> bool:
        """Determine whether any of the given keys exist."""
        if keys is None:
            return False
        keys = Arr.wrap(keys)
        if not target or not keys:
            return False
        return any(Arr.has(target, key) for key in keys)

    @staticmethod
    def forget(target: Any, keys: Any) -> None:
        """Remove one or many items in place using dot notation."""
        keys = Arr.wrap(keys)
        if not keys:
            return

        for key in keys:
            found = _resolve_key(target, key)
            if found is not _MISSING:
                del target[found]
                continue
            if not isinstance(key, str):
                continue

            parts = key.split(".")
            sub = target
            for segment in parts[:-1]:
                found = _resolve_key(sub, segment) if Arr.accessible(sub) else _MISSING
                if found is _MISSING:
                    sub = None
                    break
                sub = sub[found]
            if sub is None or not Arr.accessible(sub):
                continue
            found = _resolve_key(sub, parts[-1])
            if found is not _MISSING:
                del sub[found]

    @staticmethod
    def except_(target: Dict[Any, Any], keys: Any) -> Dict[Any, Any]:
        """Return a copy of ``target`` without the given keys."""
        result = _copy_containers(dict(target))
        Arr.forget(result, keys)
        return result

    @staticmethod
    def only(target: Mapping, keys: Any) -> Dict[Any, Any]:
        keys = Arr.wrap(keys)
        return {key: target[key] for key in keys if key in target}

    @staticmethod
    def wrap(target: Any) -> List[Any]:
        """Wrap the value in a list unless it already is one."""
        if target is None:
            return []
        if isinstance(target, list):
            return target
        if isinstance(target, tuple):
            return list(target)
        return [target]

    @staticmethod
    def is_list(target: Any) -> bool:
        """Determine whether the value is a list or a dict keyed 0..n-1 in order."""
        if isinstance(target, list):
            return True
        if isinstance(target, Mapping):
            return list(target.keys()) == list(range(len(target)))
        return False

    @staticmethod
    def dot(target: Mapping, prepend: str = "") -> Dict[str, Any]:
        """Flatten a nested dict into a single level keyed with dots."""
        results: Dict[str, Any] = {}
        items = enumerate(target) if isinstance(target, list) else target.items()
        for key, item in items:
            if isinstance(item, (Mapping, list)) and item:
                results.update(Arr.dot(item, f"{prepend}{key}."))
            else:
                results[f"{prepend}{key}"] = item
        return results

    @staticmethod
    def collapse(target: Iterable[Any]) -> List[Any]:
        """Collapse a list of lists into a single list."""
        results: List[Any] = []
        for item in target:
            if isinstance(item, list):
                results.extend(item)
            elif isinstance(item, Mapping):
                results.extend(item.values())
        return results

    @staticmethod
    def query(target: Mapping) -> str:
        """Build an RFC 3986 encoded query string with bracketed nested keys."""
        pairs: List[str] = []
        for key, item in target.items():
            _build_query_pairs(str(key), item, pairs)
        return "&".join(pairs)

    @staticmethod
    def parse_query(query: Optional[str]) -> Dict[str, Any]:
        """Parse a query string into nested dicts and lists; dots in keys are preserved."""
        result: Dict[str, Any] = {}
        if not query:
            return result
        for pair in query.split("&"):
            if not pair:
                continue
            raw_key, sep, raw_value = pair.partition("=")
            key = unquote_plus(raw_key)
            if not key:
                continue
            _assign_query_value(result, key, unquote_plus(raw_value) if sep else "")
        return {key: _listify(item) for key, item in result.items()}


def _encode(component: str) -> str:
    return quote(component, safe="-_.~")


def _build_query_pairs(prefix: str, item: Any, pairs: List[str]) -> None:
    if item is None:
        return
    if isinstance(item, Mapping):
        for key, sub in item.items():
            _build_query_pairs(f"{prefix}[{key}]", sub, pairs)
        return
    if isinstance(item, (list, tuple)):
        for index, sub in enumerate(item):
            _build_query_pairs(f"{prefix}[{index}]", sub, pairs)
        return
    if isinstance(item, bool):
        item = int(item)
    pairs.append(f"{_encode(prefix)}={_encode(str(item))}")


def _split_query_key(key: str) -> List[str]:
    """Split ``a[b][]`` into ``["a", "b", ""]``; malformed brackets stay literal."""
    start = key.find("[")
    if start <= 0:
        return [key]
    segments = [key[:start]]
    rest = key[start:]
    while rest.startswith("["):
        end = rest.find("]")
        if end == -1:
            break
        segments.append(rest[1:end])
        rest = rest[end + 1 :]
    if rest:
        return [key]
    return segments


def _assign_query_value(result: Dict[str, Any], key: str, item: str) -> None:
    segments = _split_query_key(key)
    container: Any = result
    for position, segment in enumerate(segments):
        is_last = position == len(segments) - 1
        if isinstance(container, list):
            if segment == "":
                if is_last:
                    container.append(item)
                    return
                container.append({})
                container = container[-1]
                continue
            container = _list_to_dict(container)
        if segment == "":
            segment = str(_next_index(container))
        if is_last:
            container[segment] = item
            return
        if not isinstance(container.get(segment), dict):
            container[segment] = {}
        container = container[segment]


def _next_index(container: Dict[str, Any]) -> int:
    indices = [int(k) for k in container if isinstance(k, str) and k.isdigit()]
    return max(indices) + 1 if indices else 0


def _list_to_dict(container: List[Any]) -> Dict[str, Any]:
    return {str(index): item for index, item in enumerate(container)}


def _listify(item: Any) -> Any:
    """Turn nested dicts keyed "0".."n-1" into lists."""
    if not isinstance(item, dict):
        return item
    converted = {key: _listify(sub) for key, sub in item.items()}
    if list(converted) == [str(index) for index in range(len(converted))]:
        return list(converted.values())
    return converted


def data_get(target: Any, key: Any, default: Any = None) -> Any:
    """Get an item from a dict, list or object using dot notation."""
    if key is None:
        return target

    keys = list(key) if isinstance(key, (list, tuple)) else str(key).split(".")

    for position, segment in enumerate(keys):
        if segment is None:
            return target

        if segment == "*":
            if _is_collection(target):
                target = target.all()
            if not Arr.accessible(target):
                return value(default)
            items = target.values() if isinstance(target, Mapping) else target
            rest = keys[position + 1 :]
            result = [data_get(item, rest, default) for item in items]
            return Arr.collapse(result) if "*" in rest else result

        if Arr.accessible(target):
            found = _resolve_key(target, segment)
            if found is not _MISSING:
                target = target[found]
                continue
        if not _is_string(target) and not isinstance(target, (Mapping, list, tuple)) and isinstance(segment, str):
            attr = getattr(target, segment, _MISSING)
            if attr is not _MISSING:
                target = attr
                continue
        return value(default)

    return target


def data_set(target: Any, key: Any, item: Any, overwrite: bool = True) -> Any:
    """Set an item on a dict, list or object using dot notation."""
    segments = list(key) if isinstance(key, (list, tuple)) else str(key).split(".")
    segment = segments[0]
    rest = segments[1:]

    if segment == "*":
        if not Arr.accessible(target):
            return target
        inner_items = list(target.values()) if isinstance(target, Mapping) else list(target)
        if rest:
            for inner in inner_items:
                data_set(inner, rest, item, overwrite)
        elif overwrite:
            keys = list(target.keys()) if isinstance(target, Mapping) else range(len(target))
            for inner_key in keys:
                target[inner_key] = item
        return target

    if Arr.accessible(target):
        found = _resolve_key(target, segment)
        if rest:
            if found is _MISSING:
                if isinstance(target, list):
                    return target
                target[segment] = {}
                found = segment
            data_set(target[found], rest, item, overwrite)
        elif overwrite or found is _MISSING:
            if isinstance(target, list):
                if found is _MISSING:
                    target.append(item)
                else:
                    target[found] = item
            else:
                target[segment if found is _MISSING else found] = item
        return target

    if target is not None and not _is_string(target) and not isinstance(target, (int, float, bool)):
        if rest:
            if getattr(target, segment, None) is None:
                setattr(target, segment, {})
            data_set(getattr(target, segment), rest, item, overwrite)
        elif overwrite or not hasattr(target, segment):
            setattr(target, segment, item)
    return target


def data_fill(target: Any, key: Any, item: Any) -> Any:
    """Fill in data where it's missing."""
    return data_set(target, key, item, overwrite=False)


def data_forget(target: Any, key: Any) -> Any:
    """Remove an item from a dict, list or object using dot notation."""
    segments = list(key) if isinstance(key, (list, tuple)) else str(key).split(".")
    segment = segments[0]
    rest = segments[1:]

    if segment == "*" and Arr.accessible(target):
        if rest:
            inner_items = target.values() if isinstance(target, Mapping) else target
            for inner in list(inner_items):
                data_forget(inner, rest)
        return target

    if Arr.accessible(target):
        if rest:
            found = _resolve_key(target, segment)
            if found is not _MISSING:
                data_forget(target[found], rest)
        else:
            Arr.forget(target, segment)
        return target

    if target is not None and not _is_string(target):
        if rest:
            inner = getattr(target, segment, None)
            if inner is not None:
                data_forget(inner, rest)
        elif hasattr(target, segment):
            delattr(target, segment)
    return target


def deep_copy(target: Any) -> Any:
    """Copy nested dict/list containers while sharing leaf objects."""
    return _copy_containers(target)


__all__ = [
    "Arr",
    "data_fill",
    "data_forget",
    "data_get",
    "data_set",
    "deep_copy",
    "value",
]
