"""Reflection-driven immutable value objects.

Subclass :class:`DataObject`, declare the public attributes and accept them
in ``__init__``; :meth:`DataObject.make` then builds instances from plain
dicts keyed by data keys (snake case by default)::

    class Address(DataObject):
        city: str

        def __init__(self, city: str) -> None:
            self.city = city

    class User(DataObject):
        name: str
        address: Address
        created_at: Optional[datetime] = None

        def __init__(self, name: str, address: Address, created_at: Optional[datetime] = None) -> None:
            ...

    User.make({"name": "a", "address": {"city": "x"}, "created_at": "2024-01-02"}, auto_resolve=True)
"""

from __future__ import annotations

import datetime as dt
import inspect
import json
import logging
import re
import types
import typing
from abc import ABC
from collections.abc import Mapping
from typing import Any, Callable, ClassVar, Dict, List, Optional, Set, Tuple

from .casts import to_float, to_int
from .contracts import Arrayable
from .core.config import get_settings
from .errors import (
    ImmutableDataObjectError,
    MissingPropertyError,
    NoValidDependencyError,
    UndefinedOffsetError,
)
from .strings import Str

logger = logging.getLogger(__name__)

_STANDARD_DATE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")
_NUMERIC = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")
_UNION_TYPES: Tuple[Any, ...] = (typing.Union,) + ((types.UnionType,) if hasattr(types, "UnionType") else ())

Dependency = Dict[str, Any]


def _union_members(annotation: Any) -> Optional[Tuple[Any, ...]]:
    if typing.get_origin(annotation) in _UNION_TYPES:
        return typing.get_args(annotation)
    return None


def _allows_none(annotation: Any) -> bool:
    if annotation is inspect.Parameter.empty or annotation is Any or annotation is None:
        return True
    members = _union_members(annotation)
    return members is not None and type(None) in members


def _is_data_object(annotation: Any) -> bool:
    return isinstance(annotation, type) and issubclass(annotation, DataObject)


def _is_date(annotation: Any) -> bool:
    return isinstance(annotation, type) and issubclass(annotation, dt.date)


class DataObject(ABC):
    """
    Base class for immutable value objects built from dict input.

    Subclasses may override ``convert_property_to_data_key`` /
    ``convert_data_key_to_property`` to change the key convention and
    ``date_format`` to change how date strings are parsed.
    """

    date_format: ClassVar[Optional[str]] = None

    _parameters_cache: ClassVar[Dict[type, List[inspect.Parameter]]] = {}
    _property_types_cache: ClassVar[Dict[type, Dict[str, Any]]] = {}
    _property_map_cache: ClassVar[Dict[type, Dict[str, str]]] = {}
    _reversed_property_map_cache: ClassVar[Dict[type, Dict[str, str]]] = {}
    _dependencies_map_cache: ClassVar[Dict[type, Dict[str, Dependency]]] = {}
    _auto_casting: ClassVar[Dict[type, bool]] = {}

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def make(cls, data: Mapping, auto_resolve: bool = False) -> "DataObject":
        """
        Create an instance of the class using the provided data.

        Args:
            data: Input keyed by data keys.
            auto_resolve: Build nested data objects and dates from the
                nested input first.

        Raises:
            MissingPropertyError: If a required constructor argument has no
                value, no default and does not admit None.
        """
        properties = cls.get_reversed_property_map()
        data = dict(data)
        if auto_resolve:
            data = cls._get_converted_data(data)

        arguments: Dict[str, Any] = {}
        for parameter in cls.get_parameters():
            name = parameter.name
            data_key = properties.get(name, cls.convert_property_to_data_key(name))

            if data_key in data:
                item = data[data_key]
                if cls.is_auto_casting():
                    item = cls._convert_value_to_type(item, parameter)
            elif parameter.default is not inspect.Parameter.empty:
                item = parameter.default
            else:
                item = cls._default_value_for_type(parameter)

            arguments[name] = item

        return cls(**arguments)

    @classmethod
    def convert_property_to_data_key(cls, name: str) -> str:
        return Str.snake(name)

    @classmethod
    def convert_data_key_to_property(cls, key: str) -> str:
        return Str.camel(key)

    @classmethod
    def _convert_value_to_type(cls, item: Any, parameter: inspect.Parameter) -> Any:
        annotation = parameter.annotation
        if annotation is int:
            return to_int(item)
        if annotation is float:
            return to_float(item)
        if annotation is str:
            return "" if item is None else str(item)
        if annotation is bool:
            return item not in ("", "0") if isinstance(item, str) else bool(item)
        if annotation is list:
            return item if isinstance(item, list) else [item]
        if annotation is dict:
            return dict(item) if isinstance(item, Mapping) else item
        return item

    @classmethod
    def _default_value_for_type(cls, parameter: inspect.Parameter) -> Any:
        if _allows_none(parameter.annotation):
            return None
        raise MissingPropertyError(parameter.name, cls.__name__)

    # ------------------------------------------------------------------
    # Auto-casting switches
    # ------------------------------------------------------------------

    @classmethod
    def enable_auto_casting(cls) -> None:
        DataObject._auto_casting[cls] = True

    @classmethod
    def disable_auto_casting(cls) -> None:
        DataObject._auto_casting[cls] = False

    @classmethod
    def is_auto_casting(cls) -> bool:
        for klass in cls.__mro__:
            if klass in DataObject._auto_casting:
                return DataObject._auto_casting[klass]
        return get_settings().data_object_auto_casting

    # ------------------------------------------------------------------
    # Reflection caches
    # ------------------------------------------------------------------

    @classmethod
    def get_parameters(cls) -> List[inspect.Parameter]:
        """Return the constructor parameters, with string annotations resolved."""
        cached = DataObject._parameters_cache.get(cls)
        if cached is not None:
            return cached

        signature = inspect.signature(cls.__init__)
        try:
            hints = typing.get_type_hints(cls.__init__)
        except (NameError, TypeError):
            hints = {}

        parameters = [
            parameter.replace(annotation=hints.get(parameter.name, parameter.annotation))
            for parameter in list(signature.parameters.values())[1:]
            if parameter.kind not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
        ]
        DataObject._parameters_cache[cls] = parameters
        return parameters

    @classmethod
    def get_property_types(cls) -> Dict[str, Any]:
        """Public instance attributes with their annotations."""
        cached = DataObject._property_types_cache.get(cls)
        if cached is not None:
            return cached

        try:
            hints = typing.get_type_hints(cls)
        except (NameError, TypeError):
            hints = {}

        result: Dict[str, Any] = {}
        for name, annotation in hints.items():
            if name.startswith("_") or typing.get_origin(annotation) is ClassVar:
                continue
            result[name] = annotation
        for parameter in cls.get_parameters():
            result.setdefault(parameter.name, parameter.annotation)

        DataObject._property_types_cache[cls] = result
        return result

    @classmethod
    def get_property_map(cls) -> Dict[str, str]:
        """Return ``{data key: property name}``."""
        cached = DataObject._property_map_cache.get(cls)
        if cached is not None:
            return cached

        logger.debug("Building property map for %s", cls.__name__)
        result = {cls.convert_property_to_data_key(name): name for name in cls.get_property_types()}
        DataObject._property_map_cache[cls] = result
        return result

    @classmethod
    def get_reversed_property_map(cls) -> Dict[str, str]:
        """Return ``{property name: data key}``."""
        cached = DataObject._reversed_property_map_cache.get(cls)
        if cached is not None:
            return cached

        result = {name: key for key, name in cls.get_property_map().items()}
        DataObject._reversed_property_map_cache[cls] = result
        return result

    @classmethod
    def clear_caches(cls) -> None:
        """Forget every reflection cache and auto-casting override."""
        DataObject._parameters_cache.clear()
        DataObject._property_types_cache.clear()
        DataObject._property_map_cache.clear()
        DataObject._reversed_property_map_cache.clear()
        DataObject._dependencies_map_cache.clear()
        DataObject._auto_casting.clear()

    # ------------------------------------------------------------------
    # Dependencies
    # ------------------------------------------------------------------

    @classmethod
    def customized_dependencies(cls) -> Dict[type, Callable[[Any], Any]]:
        """Handlers for non data object dependency types."""

        def as_datetime(item: Any) -> Optional[dt.datetime]:
            return cls.as_datetime(item) if item else None

        def as_date(item: Any) -> Optional[dt.date]:
            return cls.as_datetime(item).date() if item else None

        return {dt.datetime: as_datetime, dt.date: as_date}

    @classmethod
    def as_datetime(cls, item: Any) -> dt.datetime:
        """Return a timestamp, date or date string as a datetime."""
        if isinstance(item, dt.datetime):
            return item

        if isinstance(item, dt.date):
            return dt.datetime(item.year, item.month, item.day)

        if isinstance(item, (int, float)) and not isinstance(item, bool):
            return dt.datetime.fromtimestamp(item)

        text = str(item).strip()
        if _NUMERIC.match(text):
            return dt.datetime.fromtimestamp(float(text))

        standard = _STANDARD_DATE.match(text)
        if standard:
            return dt.datetime(*(int(part) for part in standard.groups()))

        date_format = cls.date_format or get_settings().date_format
        try:
            return dt.datetime.strptime(text, date_format)
        except ValueError:
            return dt.datetime.fromisoformat(text)

    @classmethod
    def get_dependencies_map(cls) -> Dict[str, Dependency]:
        cached = DataObject._dependencies_map_cache.get(cls)
        if cached is not None:
            return cached

        result = cls._resolve_dependencies_map(cls, set())
        DataObject._dependencies_map_cache[cls] = result
        return result

    @classmethod
    def _resolve_dependencies_map(cls, target: type, visited: Set[type]) -> Dict[str, Dependency]:
        if target in visited or not _is_data_object(target):
            return {}

        visited.add(target)
        customized = cls.customized_dependencies()
        result: Dict[str, Dependency] = {}

        for name, annotation in target.get_property_types().items():
            nullable = _allows_none(annotation)
            members = _union_members(annotation)
            if members is not None:
                candidates = [member for member in members if member is not type(None)]
                if len(candidates) == 1:
                    annotation = candidates[0]
                else:
                    annotation = cls._dependency_from_union(candidates)

            if _is_data_object(annotation):
                data_key = annotation.convert_property_to_data_key(name) if annotation.is_auto_casting() else name
                result[data_key] = {
                    "handler": annotation.make,
                    "type": annotation,
                    "nullable": nullable,
                    "children": cls._resolve_dependencies_map(annotation, visited),
                }
                continue

            resolver = customized.get(annotation) if isinstance(annotation, type) else None
            if resolver is not None:
                data_key = target.convert_property_to_data_key(name) if target.is_auto_casting() else name
                result[data_key] = {"handler": resolver, "type": annotation, "nullable": nullable, "children": {}}

        visited.discard(target)
        return result

    @staticmethod
    def _dependency_from_union(candidates: List[Any]) -> Any:
        for candidate in candidates:
            if _is_data_object(candidate) or _is_date(candidate):
                return candidate
        raise NoValidDependencyError()

    @classmethod
    def _get_converted_data(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        dependencies = cls.get_dependencies_map()
        if not dependencies:
            return data
        return cls._replace_dependencies_data(dependencies, data)

    @classmethod
    def _replace_dependencies_data(cls, dependencies: Dict[str, Dependency], data: Dict[str, Any]) -> Dict[str, Any]:
        data = dict(data)
        for key, dependency in dependencies.items():
            handler = dependency["handler"]
            matched = data.get(key)

            if dependency["nullable"] and matched is None:
                data[key] = None
                continue

            if isinstance(matched, dependency["type"]):
                continue

            if not isinstance(matched, Mapping):
                data[key] = handler({} if matched is None else matched)
                continue

            if dependency["children"]:
                matched = cls._replace_dependencies_data(dependency["children"], dict(matched))

            data[key] = handler(matched)

        return data

    # ------------------------------------------------------------------
    # Read-only mapping protocol
    # ------------------------------------------------------------------

    def __contains__(self, key: object) -> bool:
        return key in type(self).get_property_map()

    def __getitem__(self, key: str) -> Any:
        array = self.to_array()
        if key not in array:
            raise UndefinedOffsetError(key)
        return array[key]

    def __setitem__(self, key: str, item: Any) -> None:
        raise ImmutableDataObjectError()

    def __delitem__(self, key: str) -> None:
        raise ImmutableDataObjectError()

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_array(self) -> Dict[str, Any]:
        """Convert the object to a dict keyed by data keys, converting nested objects."""
        cached = self.__dict__.get("_array_cache")
        if cached:
            return cached

        result: Dict[str, Any] = {}
        for data_key, name in type(self).get_property_map().items():
            item = getattr(self, name, None)
            if isinstance(item, Arrayable):
                item = item.to_array()
            result[data_key] = item

        self.__dict__["_array_cache"] = result
        return result

    def to_dict(self) -> Dict[str, Any]:
        return self.to_array()

    def json_serialize(self) -> Dict[str, Any]:
        return self.to_array()

    def to_json(self, **options: Any) -> str:
        options.setdefault("default", _json_default)
        return json.dumps(self.json_serialize(), **options)

    def refresh(self) -> "DataObject":
        """Drop the cached array representation."""
        self.__dict__.pop("_array_cache", None)
        return self


def _json_default(item: Any) -> Any:
    if isinstance(item, (dt.date, dt.datetime)):
        return item.isoformat()
    return str(item)
