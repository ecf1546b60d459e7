"""Error types for the support package.

Defines a small hierarchy of exceptions rooted at :class:`SupportError`. Each
concrete error also derives from the closest builtin exception so callers may
catch either the package error or the builtin one.
"""

from __future__ import annotations

from typing import Any, Optional


class SupportError(Exception):
    """Base error for all support package exceptions."""


class BindingResolutionError(SupportError, LookupError):
    """Raised when the container cannot resolve an abstract."""

    def __init__(self, abstract: Any, message: Optional[str] = None) -> None:
        self.abstract = abstract
        super().__init__(message or f"Target [{_name_of(abstract)}] is not bound in the container")


class FacadeRootNotSetError(SupportError, RuntimeError):
    """Raised when a facade is used before its root service exists."""

    def __init__(self) -> None:
        super().__init__("A facade root has not been set.")


class FacadeAccessorNotDefinedError(SupportError, RuntimeError):
    """Raised when a facade subclass does not define its accessor."""

    def __init__(self) -> None:
        super().__init__("Facade does not implement get_facade_accessor method.")


class MacroNotFoundError(SupportError, AttributeError):
    """Raised when calling a macro that was never registered."""

    def __init__(self, owner: str, method: str) -> None:
        super().__init__(f"Method {owner}.{method} does not exist.")


class MissingPropertyError(SupportError, RuntimeError):
    """Raised when a data object is built without a required property."""

    def __init__(self, prop: str, owner: str) -> None:
        self.prop = prop
        super().__init__(f"Missing required property `{prop}` in `{owner}`")


class NoValidDependencyError(SupportError, RuntimeError):
    """Raised when a union annotation has no member the data object can build."""

    def __init__(self) -> None:
        super().__init__("No valid dependency found in union type.")


class ImmutableDataObjectError(SupportError, TypeError):
    """Raised on item assignment or deletion against a data object."""

    def __init__(self) -> None:
        super().__init__("Data object may not be mutated using array access.")


class UndefinedOffsetError(SupportError, KeyError):
    """Raised when reading a key that a data object does not expose."""

    def __init__(self, offset: Any) -> None:
        super().__init__(f"Undefined offset: {offset}")

    def __str__(self) -> str:
        return str(self.args[0])


class ResourceCollectionError(SupportError, LookupError):
    """Raised when a collection cannot be turned into a resource collection."""


class UrlGeneratorNotSetError(SupportError, RuntimeError):
    """Raised when a URI helper needs the URL generator but none was registered."""

    def __init__(self) -> None:
        super().__init__("The URL generator resolver has not been set.")


def _name_of(abstract: Any) -> str:
    if isinstance(abstract, type):
        return f"{abstract.__module__}.{abstract.__qualname__}"
    return str(abstract)
