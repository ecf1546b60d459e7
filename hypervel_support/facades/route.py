from __future__ import annotations

from .facade import Facade


class Route(Facade):
    @classmethod
    def get_facade_accessor(cls) -> str:
        return "router"
