"""Read-only view over the query string of a :class:`~hypervel_support.uri.Uri`."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional
from urllib.parse import unquote

from .arr import Arr, data_get
from .traits.interacts_with_data import InteractsWithData

if TYPE_CHECKING:
    from .uri import Uri


class UriQueryString(InteractsWithData):
    """Parsed access to a URI's query parameters."""

    def __init__(self, uri: "Uri") -> None:
        self._uri = uri

    def all(self, *keys: Any) -> Dict[str, Any]:
        query = self.to_array()
        keys = tuple(keys[0]) if len(keys) == 1 and isinstance(keys[0], (list, tuple)) else keys
        if not keys:
            return query

        results: Dict[str, Any] = {}
        for key in keys:
            Arr.set(results, key, Arr.get(query, key))
        return results

    def data(self, key: Optional[str] = None, default: Any = None) -> Any:
        return self.get(key, default)

    def get(self, key: Optional[str] = None, default: Any = None) -> Any:
        """Get a query string parameter using dot notation."""
        return data_get(self.to_array(), key, default)

    def decode(self) -> str:
        """Get the URL decoded version of the query string."""
        return unquote(str(self))

    def value(self) -> str:
        return str(self)

    def to_array(self) -> Dict[str, Any]:
        return Arr.parse_query(self.value())

    def __str__(self) -> str:
        return self._uri.get_uri().query.decode("ascii")

    def __repr__(self) -> str:
        return f"UriQueryString({str(self)!r})"
