"""Mixins shared by the support classes."""

from .conditionable import Conditionable, Tappable
from .macroable import Macroable, MacroableMeta

__all__ = ["Conditionable", "Macroable", "MacroableMeta", "Tappable"]
