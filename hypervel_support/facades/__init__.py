"""Facades shipped with the support package."""

from .cache import Cache
from .cookie import Cookie
from .facade import Facade, FacadeMeta, Fake
from .file import File
from .lang import Lang
from .log import Log
from .redis import Redis
from .route import Route

__all__ = [
    "Cache",
    "Cookie",
    "Facade",
    "FacadeMeta",
    "Fake",
    "File",
    "Lang",
    "Log",
    "Redis",
    "Route",
]
