"""Runtime method registration.

Classes deriving from :class:`Macroable` can be extended with new methods at
runtime::

    Collection.macro("second", lambda self: self.values()[1])
    Collection([1, 2, 3]).second()  # 2

Instance calls pass the instance as the first argument. Class-level calls
(``Str.shout("x")``) call the macro as-is.
"""

from __future__ import annotations

import functools
from typing import Any, Callable, Dict, Optional

from ..errors import MacroNotFoundError


def _find_macro(cls: type, name: str) -> Optional[Callable[..., Any]]:
    for klass in cls.__mro__:
        registry = klass.__dict__.get("_macros")
        if registry is not None and name in registry:
            return registry[name]
    return None


class MacroableMeta(type):
    """Metaclass routing unknown class attributes to registered macros."""

    def __getattr__(cls, name: str) -> Any:
        if name.startswith("__"):
            raise AttributeError(name)
        macro = _find_macro(cls, name)
        if macro is None:
            raise MacroNotFoundError(cls.__name__, name)
        return macro


class Macroable(metaclass=MacroableMeta):
    """Mixin adding ``macro`` / ``mixin`` registration to a class."""

    _macros: Dict[str, Callable[..., Any]] = {}

    @classmethod
    def macro(cls, name: str, macro: Callable[..., Any]) -> None:
        """Register a custom macro on this class (and its subclasses)."""
        if "_macros" not in cls.__dict__:
            cls._macros = {}
        cls._macros[name] = macro

    @classmethod
    def mixin(cls, mixin: object, replace: bool = True) -> None:
        """
        Register every public method of ``mixin`` as a macro.

        Each method is a factory: it is called once and must return the
        callable that becomes the macro.
        """
        for name in dir(mixin):
            if name.startswith("_"):
                continue
            factory = getattr(mixin, name)
            if not callable(factory):
                continue
            if replace or not cls.has_macro(name):
                cls.macro(name, factory())

    @classmethod
    def has_macro(cls, name: str) -> bool:
        return _find_macro(cls, name) is not None

    @classmethod
    def flush_macros(cls) -> None:
        """Drop the macros registered directly on this class."""
        cls._macros = {}

    def __getattr__(self, name: str) -> Any:
        if name.startswith("__"):
            raise AttributeError(name)
        macro = _find_macro(type(self), name)
        if macro is None:
            raise MacroNotFoundError(type(self).__name__, name)
        return functools.partial(macro, self)
