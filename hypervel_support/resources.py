"""Minimal API resource classes.

A :class:`JsonResource` wraps one model and shapes it for JSON output; a
:class:`ResourceCollection` wraps many. Models choose their resource classes
with the :func:`use_resource` / :func:`use_resource_collection` decorators or
by providing a ``guess_resource_name()`` classmethod.
"""

from __future__ import annotations

import importlib
import sys
from typing import Any, Callable, List, Optional, Type, TypeVar, Union

from .contracts import Arrayable

T = TypeVar("T", bound=type)

USE_RESOURCE_ATTR = "__use_resource__"
USE_RESOURCE_COLLECTION_ATTR = "__use_resource_collection__"


class JsonResource:
    """Transforms a single model into a JSON-ready dict."""

    def __init__(self, resource: Any) -> None:
        self.resource = resource

    @classmethod
    def collection(cls, resource: Any) -> "AnonymousResourceCollection":
        return AnonymousResourceCollection(resource, cls)

    def to_array(self, request: Any = None) -> Any:
        if self.resource is None:
            return {}
        if isinstance(self.resource, Arrayable):
            return self.resource.to_array()
        if isinstance(self.resource, dict):
            return dict(self.resource)
        return {key: item for key, item in vars(self.resource).items() if not key.startswith("_")}

    def resolve(self, request: Any = None) -> Any:
        return self.to_array(request)


class ResourceCollection(JsonResource):
    """Transforms a collection of models.

    ``collects`` names the resource used for each item. When unset, a class
    named ``FooCollection`` collects ``Foo`` from its own module if it exists.
    """

    collects: Optional[Type[JsonResource]] = None

    def __init__(self, resource: Any) -> None:
        from .collection import Collection

        super().__init__(resource)
        collects = self._collects()
        items = resource if isinstance(resource, Collection) else Collection(resource)
        self.collection = items.map(lambda item: collects(item)) if collects else items

    def _collects(self) -> Optional[Type[JsonResource]]:
        if self.collects is not None:
            return self.collects
        name = type(self).__name__
        if not name.endswith("Collection") or name == "ResourceCollection":
            return None
        module = sys.modules.get(type(self).__module__)
        candidate = getattr(module, name[: -len("Collection")], None)
        if isinstance(candidate, type) and issubclass(candidate, JsonResource):
            return candidate
        return None

    def count(self) -> int:
        return self.collection.count()

    def to_array(self, request: Any = None) -> Any:
        return [
            item.resolve(request) if isinstance(item, JsonResource) else _plain(item)
            for item in self.collection.values()
        ]


class AnonymousResourceCollection(ResourceCollection):
    """Resource collection built on the fly by ``JsonResource.collection``."""

    def __init__(self, resource: Any, collects: Type[JsonResource]) -> None:
        self.collects = collects
        super().__init__(resource)


def _plain(item: Any) -> Any:
    return item.to_array() if isinstance(item, Arrayable) else item


def use_resource(resource: Type[JsonResource]) -> Callable[[T], T]:
    """Class decorator binding a model to its resource class."""

    def decorator(cls: T) -> T:
        setattr(cls, USE_RESOURCE_ATTR, resource)
        return cls

    return decorator


def use_resource_collection(resource_collection: Type[ResourceCollection]) -> Callable[[T], T]:
    """Class decorator binding a model to its resource collection class."""

    def decorator(cls: T) -> T:
        setattr(cls, USE_RESOURCE_COLLECTION_ATTR, resource_collection)
        return cls

    return decorator


def resolve_class(candidate: Union[str, type, None]) -> Optional[type]:
    """Return the class behind ``candidate`` (a class or a ``"package.module.Name"`` path), or None."""
    if candidate is None:
        return None
    if isinstance(candidate, type):
        return candidate
    module_name, _, attr = str(candidate).rpartition(".")
    if not module_name:
        return None
    try:
        module = importlib.import_module(module_name)
    except ImportError:
        return None
    found = getattr(module, attr, None)
    return found if isinstance(found, type) else None


def guessed_names(model_class: type) -> List[str]:
    """Default candidates ``<package>.resources.<Model>Resource`` and ``...<Model>``."""
    package = model_class.__module__.rsplit(".", 1)[0]
    name = model_class.__name__
    return [f"{package}.resources.{name}Resource", f"{package}.resources.{name}"]


__all__ = [
    "AnonymousResourceCollection",
    "JsonResource",
    "ResourceCollection",
    "guessed_names",
    "resolve_class",
    "use_resource",
    "use_resource_collection",
]
