"""Immutable URI value object on top of :class:`httpx.URL`.

Every ``with_*`` method returns a new :class:`Uri`::

    Uri.of("https://example.com/users").with_query({"page": 2}).with_fragment("top").value()
    # "https://example.com/users?page=2#top"

Generator-backed constructors (``to``, ``route``, ...) delegate to the URL
generator returned by the resolver registered with
:meth:`Uri.set_url_generator_resolver`.
"""

from __future__ import annotations

from pprint import pprint
from typing import Any, Callable, Dict, Mapping, Optional, Union

import httpx

from .arr import Arr, data_get, data_set
from .collection import Collection
from .contracts import UrlRoutable
from .errors import UrlGeneratorNotSetError
from .strings import Str, Stringable
from .traits.conditionable import Conditionable, Tappable
from .traits.macroable import Macroable
from .uri_query_string import UriQueryString

UriLike = Union[str, httpx.URL, "Uri"]


def _or_none(component: Any) -> Any:
    return component if component not in ("", b"") else None


class Uri(Macroable, Conditionable, Tappable):
    """Parsed, immutable URI."""

    _url_generator_resolver: Optional[Callable[[], Any]] = None

    def __init__(self, uri: UriLike = "") -> None:
        if isinstance(uri, Uri):
            uri = uri.get_uri()
        self._uri = uri if isinstance(uri, httpx.URL) else httpx.URL(str(uri))

    @classmethod
    def of(cls, uri: UriLike = "") -> "Uri":
        return cls(uri)

    # ------------------------------------------------------------------
    # URL generator
    # ------------------------------------------------------------------

    @classmethod
    def set_url_generator_resolver(cls, resolver: Optional[Callable[[], Any]]) -> None:
        """Register the callable returning the application's URL generator."""
        Uri._url_generator_resolver = resolver

    @classmethod
    def _url_generator(cls) -> Any:
        if Uri._url_generator_resolver is None:
            raise UrlGeneratorNotSetError()
        return Uri._url_generator_resolver()

    @classmethod
    def to(cls, path: str) -> "Uri":
        """Get a URI instance of an absolute URL for the given path."""
        return cls(cls._url_generator().to(path))

    @classmethod
    def route(cls, name: Any, parameters: Optional[Dict[str, Any]] = None, absolute: bool = True) -> "Uri":
        return cls(cls._url_generator().route(Str.from_(name), parameters or {}, absolute))

    @classmethod
    def signed_route(
        cls,
        name: Any,
        parameters: Optional[Dict[str, Any]] = None,
        expiration: Any = None,
        absolute: bool = True,
    ) -> "Uri":
        return cls(cls._url_generator().signed_route(Str.from_(name), parameters or {}, expiration, absolute))

    @classmethod
    def temporary_signed_route(
        cls,
        name: Any,
        expiration: Any,
        parameters: Optional[Dict[str, Any]] = None,
        absolute: bool = True,
    ) -> "Uri":
        return cls.signed_route(name, parameters, expiration, absolute)

    @classmethod
    def action(cls, action: Any, parameters: Optional[Dict[str, Any]] = None, absolute: bool = True) -> "Uri":
        return cls(cls._url_generator().action(action, parameters or {}, absolute))

    # ------------------------------------------------------------------
    # Components
    # ------------------------------------------------------------------

    def scheme(self) -> Optional[str]:
        return _or_none(self._uri.scheme)

    def user(self, with_password: bool = False) -> Optional[str]:
        """Get the user (``user:password`` when ``with_password`` is set)."""
        username = _or_none(self._uri.username)
        if username is None or not with_password or not self._uri.password:
            return username
        return f"{username}:{self._uri.password}"

    def password(self) -> Optional[str]:
        return _or_none(self._uri.password)

    def host(self) -> Optional[str]:
        return _or_none(self._uri.host)

    def port(self) -> Optional[int]:
        return self._uri.port

    def path(self) -> str:
        """Get the path without surrounding slashes; empty paths are "/"."""
        path = self._uri.path.strip("/")
        return "/" if path == "" else path

    def path_segments(self) -> Collection:
        path = self.path()
        return Collection() if path == "/" else Collection(path.split("/"))

    def query(self) -> UriQueryString:
        return UriQueryString(self)

    def fragment(self) -> Optional[str]:
        return _or_none(self._uri.fragment)

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def with_scheme(self, scheme: Any) -> "Uri":
        return self._copy_with(scheme=str(scheme))

    def with_user(self, user: Any, password: Any = None) -> "Uri":
        """Specify the user and password; a None user removes both."""
        if user is None:
            return self._copy_with(username="", password="")
        return self._copy_with(username=str(user), password="" if password is None else str(password))

    def with_host(self, host: Any) -> "Uri":
        return self._copy_with(host=str(host))

    def with_port(self, port: Optional[int]) -> "Uri":
        return self._copy_with(port=port)

    def with_path(self, path: Any) -> "Uri":
        return self._copy_with(path=Str.start(str(path), "/"))

    def with_query(self, query: Mapping[Any, Any], merge: bool = True) -> "Uri":
        """
        Merge new query parameters into the URI.

        Keys may use dot notation. Routable objects are replaced by their
        route key. With ``merge=False`` the existing query is discarded.
        """
        query = {
            key: item.get_route_key() if isinstance(item, UrlRoutable) else item for key, item in query.items()
        }

        new_query: Dict[str, Any] = self.query().all() if merge else {}
        for key, item in query.items():
            data_set(new_query, str(key), item)

        encoded = Arr.query(new_query)
        return self._copy_with(query=encoded.encode("ascii") if encoded else None)

    def with_query_if_missing(self, query: Mapping[Any, Any]) -> "Uri":
        """Merge query parameters that are not already present."""
        current = self.query()
        query = {key: item for key, item in query.items() if current.missing(str(key))}
        return self.with_query(query)

    def push_onto_query(self, key: str, item: Any) -> "Uri":
        """Push a value onto the end of a query string parameter that is a list."""
        current = data_get(self.query().all(), key)
        values = Arr.wrap(item)

        if isinstance(current, list):
            merged = []
            for candidate in [*current, *values]:
                if candidate not in merged:
                    merged.append(candidate)
        elif isinstance(current, dict):
            merged = [*current.values(), *values]
        elif current is not None:
            merged = [current, *values]
        else:
            merged = values

        return self.with_query({key: merged})

    def without_query(self, keys: Any) -> "Uri":
        return self.replace_query(Arr.except_(self.query().all(), keys))

    def replace_query(self, query: Mapping[Any, Any]) -> "Uri":
        return self.with_query(query, merge=False)

    def with_fragment(self, fragment: str) -> "Uri":
        return self._copy_with(fragment=fragment or None)

    def _copy_with(self, **components: Any) -> "Uri":
        return type(self)(self._uri.copy_with(**components))

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def redirect(self, status: int = 302, headers: Optional[Dict[str, str]] = None) -> httpx.Response:
        """Create a redirect response pointing at this URI."""
        return httpx.Response(status, headers={"Location": self.value(), **(headers or {})})

    def to_response(self, request: Any = None) -> httpx.Response:
        return self.redirect()

    def to_html(self) -> str:
        return self.value()

    def to_stringable(self) -> Stringable:
        return Str.of(self.value())

    def decode(self) -> str:
        """Get the URI with its query string percent-decoded."""
        query = self.query()
        if not query.to_array():
            return self.value()
        return Str.replace("?" + query.value(), "?" + query.decode(), self.value())

    def value(self) -> str:
        return str(self)

    def is_empty(self) -> bool:
        return self.value().strip() == ""

    def dump(self, *args: Any) -> "Uri":
        pprint(self.value())
        for arg in args:
            pprint(arg)
        return self

    def get_uri(self) -> httpx.URL:
        return self._uri

    def json_serialize(self) -> str:
        return self.value()

    def __str__(self) -> str:
        return str(self._uri)

    def __repr__(self) -> str:
        return f"Uri({self.value()!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Uri):
            return self.value() == other.value()
        if isinstance(other, str):
            return self.value() == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.value())
