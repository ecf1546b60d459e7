from __future__ import annotations

import logging
from typing import Any

from .facade import Facade

FALLBACK_LOGGER = "hypervel_support"


class Log(Facade):
    """
    Facade for the application logger bound as ``"log"``.

    When the container has no ``"log"`` binding the facade writes through the
    package logger, so ``Log.info(...)`` works before the application is
    fully wired.
    """

    @classmethod
    def get_facade_accessor(cls) -> str:
        return "log"

    @classmethod
    def resolve_facade_instance(cls, name: Any) -> Any:
        instance = super().resolve_facade_instance(name)
        if instance is None:
            return logging.getLogger(FALLBACK_LOGGER)
        return instance
