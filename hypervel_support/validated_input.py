"""Container for input that already passed validation."""

from __future__ import annotations

from pprint import pprint
from typing import Any, Dict, Iterator, List, Mapping, Optional

from .arr import Arr, data_get
from .traits.interacts_with_data import InteractsWithData


class ValidatedInput(InteractsWithData):
    """
    Validated request input with dict, attribute and typed access.

    Usage:
        validated = ValidatedInput({"name": "a", "meta": {"age": "3"}})
        validated.name                 # "a"
        validated["meta.age"]          # "3"
        validated.integer("meta.age")  # 3
    """

    def __init__(self, input: Optional[Dict[str, Any]] = None) -> None:
        object.__setattr__(self, "_input", dict(input or {}))

    def merge(self, items: Mapping[str, Any]) -> "ValidatedInput":
        """Return a new instance holding the input merged with ``items``."""
        return type(self)({**self.all(), **items})

    def all(self, *keys: Any) -> Dict[str, Any]:
        """Return the raw input, or only the given (dot notation) keys."""
        keys = tuple(keys[0]) if len(keys) == 1 and isinstance(keys[0], (list, tuple)) else keys
        if not keys:
            return self._input

        result: Dict[str, Any] = {}
        for key in keys:
            Arr.set(result, key, Arr.get(self._input, key))
        return result

    def data(self, key: Optional[str] = None, default: Any = None) -> Any:
        return self.input(key, default)

    def keys(self) -> List[str]:
        return list(self._input.keys())

    def input(self, key: Optional[str] = None, default: Any = None) -> Any:
        """Retrieve an input item using dot notation."""
        return data_get(self.all(), key, default)

    def dump(self, *keys: Any) -> "ValidatedInput":
        """Pretty-print the input (or only ``keys``) to stdout."""
        keys = tuple(keys[0]) if len(keys) == 1 and isinstance(keys[0], (list, tuple)) else keys
        pprint(self.only(list(keys)) if keys else self.all())
        return self

    def to_array(self) -> Dict[str, Any]:
        return self.all()

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return self.input(name)

    def __setattr__(self, name: str, item: Any) -> None:
        self._input[name] = item

    def __delattr__(self, name: str) -> None:
        self._input.pop(name, None)

    def __contains__(self, key: object) -> bool:
        return self.exists(key)

    def __getitem__(self, key: str) -> Any:
        return self.input(key)

    def __setitem__(self, key: Any, item: Any) -> None:
        if key is None:
            indices = [k for k in self._input if isinstance(k, int)]
            key = max(indices) + 1 if indices else 0
        self._input[key] = item

    def __delitem__(self, key: str) -> None:
        self._input.pop(key, None)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._input))

    def __len__(self) -> int:
        return len(self._input)

    def __repr__(self) -> str:
        return f"ValidatedInput({self._input!r})"
