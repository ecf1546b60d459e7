from __future__ import annotations

from .facade import Facade


class Cache(Facade):
    """Facade for the cache repository bound as ``"cache"``."""

    @classmethod
    def get_facade_accessor(cls) -> str:
        return "cache"
