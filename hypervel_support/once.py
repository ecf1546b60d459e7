"""Per-context memoization of call sites.

``once`` runs a callback the first time a given call site is reached with a
given set of arguments, and returns the stored result afterwards::

    class Settings:
        def load(self):
            return once(lambda: read_settings_file())

Results are stored per instance (the ``self`` of the calling method) so two
objects never share a memoized value. The store lives in :class:`Context`,
which keeps it private to the current asyncio task or thread.
"""

from __future__ import annotations

import hashlib
import inspect
import logging
import weakref
from types import FrameType
from typing import Any, Callable, Dict, Optional

from .context import Context
from .contracts import HasOnceHash
from .core.config import get_settings

logger = logging.getLogger(__name__)

INSTANCE_CONTEXT_KEY = "__support.once.instance"
ENABLED_CONTEXT_KEY = "__support.once.enabled"

_SCALARS = (str, int, float, bool, bytes, type(None))


def _argument_hash(argument: Any) -> str:
    if isinstance(argument, HasOnceHash):
        return argument.once_hash()
    if isinstance(argument, _SCALARS):
        return repr(argument)
    if isinstance(argument, (list, tuple)):
        return "[" + ",".join(_argument_hash(item) for item in argument) + "]"
    if isinstance(argument, dict):
        return "{" + ",".join(f"{key!r}:{_argument_hash(item)}" for key, item in argument.items()) + "}"
    return f"{type(argument).__qualname__}@{id(argument)}"


def _weakrefable(obj: Any) -> bool:
    try:
        weakref.ref(obj)
    except TypeError:
        return False
    return True


class Onceable:
    """A callback together with the identity of the call site it came from."""

    def __init__(self, hash: str, obj: Optional[object], callable: Callable[[], Any]) -> None:
        self.hash = hash
        self.object = obj
        self.callable = callable

    @classmethod
    def try_from_trace(cls, callback: Callable[[], Any], frame: Optional[FrameType] = None) -> Optional["Onceable"]:
        """
        Build an onceable for the function that is asking for memoization.

        Args:
            callback: Zero-argument callable producing the value.
            frame: Frame of the calling function. Defaults to the caller of
                this method.

        Returns:
            The onceable, or None when no calling frame is available.
        """
        if frame is None:
            current = inspect.currentframe()
            frame = current.f_back if current is not None else None
        if frame is None:
            return None

        obj = getattr(callback, "__self__", None)
        if obj is None:
            obj = frame.f_locals.get("self")

        return cls(cls._hash_from_frame(frame, obj), obj, callback)

    @staticmethod
    def _hash_from_frame(frame: FrameType, obj: Optional[object]) -> str:
        info = inspect.getargvalues(frame)
        arguments = [info.locals[name] for name in info.args if name != "self" or info.locals[name] is not obj]
        if info.varargs:
            arguments.extend(info.locals[info.varargs])
        if info.keywords:
            arguments.append(info.locals[info.keywords])

        code = frame.f_code
        site = f"{code.co_filename}@{code.co_name}:{frame.f_lineno}"
        digest = hashlib.sha256(site.encode("utf-8"))
        digest.update(_argument_hash(arguments).encode("utf-8"))
        return digest.hexdigest()


class Once:
    """Context-bound store of memoized values."""

    def __init__(self) -> None:
        # keyed by id() so equal but distinct objects never share values
        self._values: Dict[int, Dict[str, Any]] = {}

    @classmethod
    def instance(cls) -> "Once":
        return Context.get_or_set(INSTANCE_CONTEXT_KEY, cls)

    def value(self, onceable: Onceable) -> Any:
        """Return the memoized value of ``onceable``, computing it on first use."""
        if not Once.enabled():
            return onceable.callable()

        obj = onceable.object if onceable.object is not None else self

        store = self._values.get(id(obj))
        if store is None:
            store = self._values[id(obj)] = {}
            if obj is not self and _weakrefable(obj):
                weakref.finalize(obj, self._values.pop, id(obj), None)

        hash = onceable.hash
        if hash in store:
            return store[hash]

        logger.debug("Memoizing once() value for %s", type(obj).__name__)
        store[hash] = onceable.callable()
        return store[hash]

    @staticmethod
    def enabled() -> bool:
        return Context.get(ENABLED_CONTEXT_KEY, get_settings().once_enabled) is True

    @staticmethod
    def enable() -> None:
        """Re-enable memoization if it was disabled."""
        Context.set(ENABLED_CONTEXT_KEY, True)

    @staticmethod
    def disable() -> None:
        Context.set(ENABLED_CONTEXT_KEY, False)

    @staticmethod
    def flush() -> None:
        """Forget every memoized value of the current context."""
        Context.destroy(INSTANCE_CONTEXT_KEY)


def once(callback: Callable[[], Any]) -> Any:
    """Call the callback once per calling site, arguments and instance."""
    current = inspect.currentframe()
    onceable = Onceable.try_from_trace(callback, current.f_back if current is not None else None)

    if onceable is None:
        return callback()

    return Once.instance().value(onceable)
