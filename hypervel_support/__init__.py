"""Hypervel Support.

Cross-cutting utilities consumed throughout a web application framework and
the applications built on it.

High-level layout
-----------------

- **Data helpers**: ``Arr`` and the ``data_*`` functions give dot-notation
  access to nested dicts, lists and objects; ``Collection`` and
  ``LazyCollection`` wrap them with functional operations.
- **Strings**: ``Str`` static helpers and the fluent ``Stringable``.
- **Services**: a small ``Container`` held by ``ApplicationContext`` and the
  static ``Facade`` proxies that resolve services from it at call time.
- **Value objects**: ``DataObject`` builds immutable objects from dict input
  by reflecting on constructor signatures and annotations.
- **Web values**: ``Uri`` / ``UriQueryString`` on top of ``httpx.URL``,
  ``HtmlString`` and the ``e()`` escaper, ``ValidatedInput`` for request data.
- **Per-context state**: ``Context`` and ``once()`` keep values private to the
  current asyncio task or thread.

Configuration and logging
-------------------------

Settings are read from ``HYPERVEL_SUPPORT_*`` environment variables (see
``hypervel_support.core.config``). The package only obtains loggers; the host
application calls ``hypervel_support.core.setup_logging()``.
"""

from .arr import Arr, data_fill, data_forget, data_get, data_set
from .collection import Collection
from .container import ApplicationContext, Container
from .context import Context
from .data_object import DataObject
from .helpers import (
    HigherOrderTapProxy,
    blank,
    class_basename,
    collect,
    e,
    env,
    filled,
    head,
    last,
    object_get,
    optional,
    retry,
    tap,
    throw_if,
    throw_unless,
    transform,
    value,
    when,
    with_,
)
from .html_string import HtmlString
from .lazy_collection import LazyCollection
from .once import Once, Onceable, once
from .optional import Optional
from .strings import Str, Stringable
from .uri import Uri
from .uri_query_string import UriQueryString
from .validated_input import ValidatedInput

__all__ = [
    "ApplicationContext",
    "Arr",
    "Collection",
    "Container",
    "Context",
    "DataObject",
    "HigherOrderTapProxy",
    "HtmlString",
    "LazyCollection",
    "Once",
    "Onceable",
    "Optional",
    "Str",
    "Stringable",
    "Uri",
    "UriQueryString",
    "ValidatedInput",
    "blank",
    "class_basename",
    "collect",
    "data_fill",
    "data_forget",
    "data_get",
    "data_set",
    "e",
    "env",
    "filled",
    "head",
    "last",
    "object_get",
    "once",
    "optional",
    "retry",
    "tap",
    "throw_if",
    "throw_unless",
    "transform",
    "value",
    "when",
    "with_",
]
