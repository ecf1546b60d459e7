from __future__ import annotations

from .facade import Facade


class Cookie(Facade):
    """Facade for the cookie jar bound as ``"cookie"``."""

    @classmethod
    def get_facade_accessor(cls) -> str:
        return "cookie"
