"""Dependency-injection container used by facades and helpers.

The container maps an *abstract* (a string key or a class) to either a
concrete factory or a ready-made instance. Shared bindings are built once and
then reused. :class:`ApplicationContext` holds the process-wide container the
rest of the package resolves services from.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, List, Optional, Union

from .errors import BindingResolutionError

logger = logging.getLogger(__name__)

Abstract = Union[str, type]
ResolvingCallback = Callable[[Any], None]


class Container:
    """
    In-memory service container.

    Usage:
        container = Container()
        container.singleton("cache", CacheManager)
        cache = container.get("cache")

    Notes:
        - ``bind`` overwrites any existing binding and drops a cached instance
          for the same abstract.
        - ``get`` instantiates unbound classes directly; unbound strings raise
          ``BindingResolutionError``.
    """

    def __init__(self) -> None:
        """Initialize an empty container."""
        self._bindings: Dict[Abstract, Dict[str, Any]] = {}
        self._instances: Dict[Abstract, Any] = {}
        self._resolved: Dict[Abstract, bool] = {}
        self._after_resolving: Dict[Abstract, List[ResolvingCallback]] = {}
        self._lock = threading.RLock()

    def bind(self, abstract: Abstract, concrete: Optional[Callable[..., Any]] = None, shared: bool = False) -> None:
        """
        Register a binding.

        Args:
            abstract: Key the service is resolved by.
            concrete: Class or factory. Factories receive the container as their
                only argument; classes are instantiated without arguments. When
                omitted the abstract itself must be a class.
            shared: Cache the first built instance for later resolutions.
        """
        if concrete is None:
            if not isinstance(abstract, type):
                raise BindingResolutionError(abstract, f"Cannot bind [{abstract}] without a concrete")
            concrete = abstract
        with self._lock:
            self._instances.pop(abstract, None)
            self._bindings[abstract] = {"concrete": concrete, "shared": shared}

    def singleton(self, abstract: Abstract, concrete: Optional[Callable[..., Any]] = None) -> None:
        """Register a shared binding."""
        self.bind(abstract, concrete, shared=True)

    def instance(self, abstract: Abstract, obj: Any) -> Any:
        """
        Register an existing object as the shared instance of ``abstract``.

        Resolving callbacks fire immediately for the new instance.
        """
        with self._lock:
            self._instances[abstract] = obj
        self._fire_after_resolving(abstract, obj)
        return obj

    def bound(self, abstract: Abstract) -> bool:
        """Determine whether the abstract has a binding or an instance."""
        return abstract in self._bindings or abstract in self._instances

    def has(self, abstract: Abstract) -> bool:
        """Alias of :meth:`bound`."""
        return self.bound(abstract)

    def resolved(self, abstract: Abstract) -> bool:
        """Determine whether the abstract was resolved at least once."""
        return abstract in self._instances or self._resolved.get(abstract, False)

    def get(self, abstract: Abstract) -> Any:
        """
        Resolve the given abstract.

        Raises:
            BindingResolutionError: If the abstract is neither bound nor an instantiable class.
        """
        return self.make(abstract)

    def make(self, abstract: Abstract, **parameters: Any) -> Any:
        """
        Resolve the given abstract, passing ``parameters`` to class constructors.

        Parameters bypass the shared instance cache.
        """
        with self._lock:
            if not parameters and abstract in self._instances:
                return self._instances[abstract]

            binding = self._bindings.get(abstract)
            if binding is None:
                if not isinstance(abstract, type):
                    raise BindingResolutionError(abstract)
                concrete: Callable[..., Any] = abstract
                shared = False
            else:
                concrete = binding["concrete"]
                shared = binding["shared"]

            logger.debug("Resolving %s from the container", abstract)
            obj = self._build(concrete, parameters)

            if shared and not parameters:
                self._instances[abstract] = obj
            self._resolved[abstract] = True

        self._fire_after_resolving(abstract, obj)
        return obj

    def after_resolving(self, abstract: Abstract, callback: ResolvingCallback) -> None:
        """Register a callback fired with every object resolved for ``abstract``."""
        self._after_resolving.setdefault(abstract, []).append(callback)

    def forget_instance(self, abstract: Abstract) -> None:
        """Drop a shared instance so the next resolution builds a fresh one."""
        with self._lock:
            self._instances.pop(abstract, None)

    def flush(self) -> None:
        """Remove every binding, instance and callback."""
        with self._lock:
            self._bindings.clear()
            self._instances.clear()
            self._resolved.clear()
            self._after_resolving.clear()

    def _build(self, concrete: Callable[..., Any], parameters: Dict[str, Any]) -> Any:
        if isinstance(concrete, type):
            return concrete(**parameters)
        return concrete(self)

    def _fire_after_resolving(self, abstract: Abstract, obj: Any) -> None:
        for callback in list(self._after_resolving.get(abstract, [])):
            callback(obj)


class ApplicationContext:
    """Holder of the process-wide container."""

    _container: Optional[Container] = None

    @classmethod
    def set_container(cls, container: Container) -> Container:
        cls._container = container
        return container

    @classmethod
    def get_container(cls) -> Container:
        """
        Return the registered container.

        Raises:
            BindingResolutionError: If no container has been registered.
        """
        if cls._container is None:
            raise BindingResolutionError("container", "No application container has been set")
        return cls._container

    @classmethod
    def has_container(cls) -> bool:
        return cls._container is not None

    @classmethod
    def clear(cls) -> None:
        cls._container = None
