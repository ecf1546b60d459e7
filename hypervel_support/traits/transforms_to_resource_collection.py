"""Turning a collection of models into an API resource collection."""

from __future__ import annotations

import sys
from typing import Any, List, Optional, Type

from ..errors import ResourceCollectionError
from ..resources import (
    USE_RESOURCE_ATTR,
    USE_RESOURCE_COLLECTION_ATTR,
    JsonResource,
    ResourceCollection,
    resolve_class,
)


class TransformsToResourceCollection:
    """Provides the ability to transform a collection to a resource collection."""

    def to_resource_collection(self, resource_class: Optional[Type[JsonResource]] = None) -> ResourceCollection:
        """
        Create a new resource collection instance for the given resource.

        Raises:
            ResourceCollectionError: If no resource class is given and none can be guessed.
        """
        if resource_class is None:
            return self._guess_resource_collection()

        return resource_class.collection(self)

    def _guess_resource_collection(self) -> ResourceCollection:
        if self.is_empty():
            return ResourceCollection(self)

        model = self.first()

        if model is None or isinstance(model, (str, int, float, bool, bytes, dict, list, tuple)):
            raise ResourceCollectionError("Resource collection guesser expects the collection to contain objects.")

        model_class = type(model)

        if not callable(getattr(model_class, "guess_resource_name", None)):
            raise ResourceCollectionError(
                f"Expected class {model_class.__name__} to implement guess_resource_name method. "
                "Make sure the model provides a guess_resource_name classmethod."
            )

        use_resource_collection = getattr(model_class, USE_RESOURCE_COLLECTION_ATTR, None)
        if isinstance(use_resource_collection, type):
            return use_resource_collection(self)

        use_resource = getattr(model_class, USE_RESOURCE_ATTR, None)
        if isinstance(use_resource, type):
            return use_resource.collection(self)

        candidates: List[Any] = list(model_class.guess_resource_name())

        for candidate in candidates:
            resource_collection = resolve_class(_collection_name(candidate))
            if resource_collection is not None:
                return resource_collection(self)

        for candidate in candidates:
            resource = resolve_class(candidate)
            if resource is not None:
                return resource.collection(self)

        raise ResourceCollectionError(f"Failed to find resource class for model [{model_class.__name__}].")


def _collection_name(candidate: Any) -> Any:
    if isinstance(candidate, type):
        module = sys.modules.get(candidate.__module__)
        return getattr(module, f"{candidate.__name__}Collection", None)
    return f"{candidate}Collection"
