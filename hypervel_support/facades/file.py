from __future__ import annotations

from .facade import Facade


class File(Facade):
    """Facade for the filesystem bound as ``"files"``."""

    @classmethod
    def get_facade_accessor(cls) -> str:
        return "files"
