from __future__ import annotations

from .facade import Facade


class Lang(Facade):
    """Facade for the translator bound as ``"translator"``."""

    @classmethod
    def get_facade_accessor(cls) -> str:
        return "translator"
