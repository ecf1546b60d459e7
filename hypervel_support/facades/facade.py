"""Static proxies to container services.

A facade subclass names the service it stands for; attribute access on the
class is forwarded to that service at call time::

    class Cache(Facade):
        @classmethod
        def get_facade_accessor(cls):
            return "cache"

    Cache.get("key")  # container.get("cache").get("key")

Resolved services are memoized per accessor until
:meth:`Facade.clear_resolved_instances` is called.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional
from unittest import mock

from ..container import ApplicationContext
from ..errors import FacadeAccessorNotDefinedError, FacadeRootNotSetError

logger = logging.getLogger(__name__)


class Fake:
    """Marker base for hand-written test fakes swapped into a facade."""


class FacadeMeta(type):
    """Metaclass forwarding unknown class attributes to the facade root."""

    def __getattr__(cls, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        root = cls.get_facade_root()
        if root is None:
            raise FacadeRootNotSetError()
        return getattr(root, name)


class Facade(metaclass=FacadeMeta):
    """Base class of all facades."""

    _resolved_instance: Dict[Any, Any] = {}

    @classmethod
    def get_facade_accessor(cls) -> Any:
        """
        Get the registered name of the component.

        Returns:
            A container key (string or class), or the root object itself.

        Raises:
            FacadeAccessorNotDefinedError: If the subclass does not override it.
        """
        raise FacadeAccessorNotDefinedError()

    @classmethod
    def get_facade_root(cls) -> Any:
        return cls.resolve_facade_instance(cls.get_facade_accessor())

    @classmethod
    def resolve_facade_instance(cls, name: Any) -> Any:
        """Resolve the root from the container, or None when it is not bound."""
        if not isinstance(name, (str, type)):
            return name

        if name in Facade._resolved_instance:
            return Facade._resolved_instance[name]

        if not ApplicationContext.has_container():
            return None

        container = ApplicationContext.get_container()
        # unbound classes are still buildable by the container
        if not container.has(name) and not isinstance(name, type):
            return None

        logger.debug("Resolving facade root %s", name)
        instance = container.get(name)
        Facade._resolved_instance[name] = instance
        return instance

    @classmethod
    def resolved(cls, callback: Callable[[Any], Any]) -> None:
        """Run the callback now if the root is resolved, and after every future resolution."""
        container = ApplicationContext.get_container()
        accessor = cls.get_facade_accessor()

        if container.resolved(accessor):
            callback(cls.get_facade_root())

        container.after_resolving(accessor, callback)

    @classmethod
    def swap(cls, instance: Any) -> Any:
        """Replace the root in the facade memo and the container."""
        accessor = cls.get_facade_accessor()
        Facade._resolved_instance[accessor] = instance

        if ApplicationContext.has_container():
            ApplicationContext.get_container().instance(accessor, instance)

        return instance

    @classmethod
    def clear_resolved_instance(cls, name: Any) -> None:
        Facade._resolved_instance.pop(name, None)

    @classmethod
    def clear_resolved_instances(cls) -> None:
        Facade._resolved_instance.clear()

    # ------------------------------------------------------------------
    # Test doubles
    # ------------------------------------------------------------------

    @classmethod
    def spy(cls) -> Optional[mock.MagicMock]:
        """Swap in a mock wrapping the real root so calls can be asserted."""
        if cls.is_mock():
            return None

        root = cls.get_facade_root()
        spy = mock.MagicMock(wraps=root) if root is not None else mock.MagicMock()
        return cls.swap(spy)

    @classmethod
    def partial_mock(cls) -> mock.MagicMock:
        """Swap in a mock delegating unconfigured calls to the real root."""
        if cls.is_mock():
            return cls.get_facade_root()

        root = cls.get_facade_root()
        return cls.swap(mock.MagicMock(wraps=root))

    @classmethod
    def should_receive(cls, method: str) -> mock.MagicMock:
        """
        Get the mock attribute for ``method``, swapping in a fresh mock if needed.

        Usage:
            Cache.should_receive("get").return_value = "value"
        """
        root = cls.get_facade_root() if cls.is_mock() else cls._create_fresh_mock_instance()
        return getattr(root, method)

    @classmethod
    def _create_fresh_mock_instance(cls) -> mock.MagicMock:
        root = cls.get_facade_root()
        fresh = mock.MagicMock(spec=type(root)) if root is not None else mock.MagicMock()
        return cls.swap(fresh)

    @classmethod
    def is_mock(cls) -> bool:
        accessor = cls.get_facade_accessor()
        return isinstance(Facade._resolved_instance.get(accessor), mock.NonCallableMock)

    @classmethod
    def is_fake(cls) -> bool:
        accessor = cls.get_facade_accessor()
        return isinstance(Facade._resolved_instance.get(accessor), Fake)

    @classmethod
    def default_aliases(cls) -> Any:
        """Get the alias name to facade class map of the bundled facades."""
        from ..collection import Collection
        from . import Cache, Cookie, File, Lang, Log, Redis, Route

        return Collection(
            {
                "Cache": Cache,
                "Cookie": Cookie,
                "File": File,
                "Lang": Lang,
                "Log": Log,
                "Redis": Redis,
                "Route": Route,
            }
        )
