from __future__ import annotations

from .facade import Facade


class Redis(Facade):
    """Facade for the Redis connection manager bound as ``"redis"``."""

    @classmethod
    def get_facade_accessor(cls) -> str:
        return "redis"
