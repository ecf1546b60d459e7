"""String helpers.

:class:`Str` exposes static string functions (case conversion, wildcard
matching, UUID checks, ...). :class:`Stringable` wraps a single string and
offers the same operations fluently::

    Str.of("  UserProfile ").trim().snake().append("_id").value()  # "user_profile_id"
"""

from __future__ import annotations

import re
import uuid
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from .traits.macroable import Macroable

_MAX_UUID_INT = (1 << 128) - 1
_UUID_PATTERN = re.compile(r"^[\da-fA-F]{8}-[\da-fA-F]{4}-[\da-fA-F]{4}-[\da-fA-F]{4}-[\da-fA-F]{12}$")

Needles = Union[str, Iterable[str]]


def _needles(needles: Needles) -> List[str]:
    if isinstance(needles, str):
        return [needles]
    return [str(needle) for needle in needles]


class Str(Macroable):
    """Static string helpers."""

    _snake_cache: Dict[Tuple[str, str], str] = {}
    _camel_cache: Dict[str, str] = {}
    _studly_cache: Dict[str, str] = {}

    @staticmethod
    def of(value: Any = "") -> "Stringable":
        return Stringable(value)

    @staticmethod
    def from_(value: Any) -> str:
        """
        Get a string from an Enum, a stringable object, or a scalar value.

        Useful for APIs that accept mixed identifier types, such as cache
        tags or session keys.
        """
        if isinstance(value, Enum):
            return str(value.value)
        return str(value)

    @staticmethod
    def from_all(values: Iterable[Any]) -> List[str]:
        return [Str.from_(value) for value in values]

    @staticmethod
    def is_(pattern: Union[str, Iterable[str]], value: Any, ignore_case: bool = False) -> bool:
        """Determine if a given string matches a given pattern (``*`` is a wildcard)."""
        value = str(value)
        patterns = [pattern] if isinstance(pattern, str) or not isinstance(pattern, Iterable) else pattern

        for candidate in patterns:
            candidate = str(candidate)

            if candidate == "*" or candidate == value:
                return True

            if ignore_case and candidate.lower() == value.lower():
                return True

            regex = re.escape(candidate).replace(r"\*", ".*")
            flags = re.DOTALL | (re.IGNORECASE if ignore_case else 0)
            if re.fullmatch(regex, value, flags) is not None:
                return True

        return False

    @staticmethod
    def is_uuid(value: Any, version: Union[None, int, str] = None) -> bool:
        """
        Determine if a given value is a valid UUID.

        ``version`` may be ``None`` (any canonical UUID), ``0`` / ``"nil"``,
        ``"max"`` or an RFC 4122 version number.
        """
        if not isinstance(value, str):
            return False

        if version is None:
            return _UUID_PATTERN.match(value) is not None

        try:
            parsed = uuid.UUID(value)
        except ValueError:
            return False

        if version == 0 or version == "nil":
            return parsed.int == 0

        if version == "max":
            return parsed.int == _MAX_UUID_INT

        if parsed.variant != uuid.RFC_4122:
            return False

        return parsed.version == version

    @classmethod
    def snake(cls, value: str, delimiter: str = "_") -> str:
        """Convert a string to snake case."""
        key = (value, delimiter)
        if key in cls._snake_cache:
            return cls._snake_cache[key]

        result = value
        if not (result.isalpha() and result.islower()):
            result = re.sub(r"\s+", "", Str.ucwords(result))
            result = re.sub(r"(.)(?=[A-Z])", r"\1" + delimiter.replace("\\", r"\\"), result).lower()

        cls._snake_cache[key] = result
        return result

    @classmethod
    def studly(cls, value: str) -> str:
        """Convert a value to studly caps case."""
        if value in cls._studly_cache:
            return cls._studly_cache[value]

        words = value.replace("-", " ").replace("_", " ").split(" ")
        result = "".join(Str.ucfirst(word) for word in words)

        cls._studly_cache[value] = result
        return result

    @classmethod
    def camel(cls, value: str) -> str:
        """Convert a value to camel case."""
        if value in cls._camel_cache:
            return cls._camel_cache[value]

        result = Str.lcfirst(cls.studly(value))

        cls._camel_cache[value] = result
        return result

    @classmethod
    def kebab(cls, value: str) -> str:
        return cls.snake(value, "-")

    @classmethod
    def flush_cache(cls) -> None:
        cls._snake_cache.clear()
        cls._camel_cache.clear()
        cls._studly_cache.clear()

    @staticmethod
    def ucfirst(value: str) -> str:
        return value[:1].upper() + value[1:]

    @staticmethod
    def lcfirst(value: str) -> str:
        return value[:1].lower() + value[1:]

    @staticmethod
    def ucwords(value: str) -> str:
        return re.sub(r"(^|\s)(\S)", lambda m: m.group(1) + m.group(2).upper(), value)

    @staticmethod
    def lower(value: str) -> str:
        return value.lower()

    @staticmethod
    def upper(value: str) -> str:
        return value.upper()

    @staticmethod
    def start(value: str, prefix: str) -> str:
        """Begin a string with a single instance of a given value."""
        if prefix == "":
            return value
        quoted = re.escape(prefix)
        return prefix + re.sub(f"^(?:{quoted})+", "", value)

    @staticmethod
    def finish(value: str, cap: str) -> str:
        """Cap a string with a single instance of a given value."""
        if cap == "":
            return value
        quoted = re.escape(cap)
        return re.sub(f"(?:{quoted})+$", "", value) + cap

    @staticmethod
    def after(subject: str, search: str) -> str:
        """Return the remainder of a string after the first occurrence of a given value."""
        if search == "":
            return subject
        head, sep, tail = subject.partition(search)
        return tail if sep else subject

    @staticmethod
    def before(subject: str, search: str) -> str:
        if search == "":
            return subject
        head, sep, _ = subject.partition(search)
        return head if sep else subject

    @staticmethod
    def replace(search: Needles, replace: Union[str, Iterable[str]], subject: str, case_sensitive: bool = True) -> str:
        """Replace every occurrence of ``search`` (a string or list of strings) in ``subject``."""
        searches = _needles(search)
        replaces = [replace] * len(searches) if isinstance(replace, str) else list(replace)
        for position, needle in enumerate(searches):
            if needle == "":
                continue
            substitute = replaces[position] if position < len(replaces) else ""
            if case_sensitive:
                subject = subject.replace(needle, substitute)
            else:
                subject = re.sub(re.escape(needle), lambda _: substitute, subject, flags=re.IGNORECASE)
        return subject

    @staticmethod
    def contains(haystack: str, needles: Needles, ignore_case: bool = False) -> bool:
        if ignore_case:
            haystack = haystack.lower()
        for needle in _needles(needles):
            if ignore_case:
                needle = needle.lower()
            if needle != "" and needle in haystack:
                return True
        return False

    @staticmethod
    def starts_with(haystack: str, needles: Needles) -> bool:
        return any(needle != "" and haystack.startswith(needle) for needle in _needles(needles))

    @staticmethod
    def ends_with(haystack: str, needles: Needles) -> bool:
        return any(needle != "" and haystack.endswith(needle) for needle in _needles(needles))

    @staticmethod
    def limit(value: str, limit: int = 100, end: str = "...") -> str:
        if len(value) <= limit:
            return value
        return value[:limit].rstrip() + end


class Stringable(Macroable):
    """Immutable fluent wrapper around a string."""

    __slots__ = ("_value",)

    def __init__(self, value: Any = "") -> None:
        self._value = "" if value is None else Str.from_(value)

    def after(self, search: str) -> "Stringable":
        return Stringable(Str.after(self._value, search))

    def before(self, search: str) -> "Stringable":
        return Stringable(Str.before(self._value, search))

    def append(self, *values: str) -> "Stringable":
        return Stringable(self._value + "".join(values))

    def prepend(self, *values: str) -> "Stringable":
        return Stringable("".join(values) + self._value)

    def lower(self) -> "Stringable":
        return Stringable(self._value.lower())

    def upper(self) -> "Stringable":
        return Stringable(self._value.upper())

    def snake(self, delimiter: str = "_") -> "Stringable":
        return Stringable(Str.snake(self._value, delimiter))

    def camel(self) -> "Stringable":
        return Stringable(Str.camel(self._value))

    def studly(self) -> "Stringable":
        return Stringable(Str.studly(self._value))

    def kebab(self) -> "Stringable":
        return Stringable(Str.kebab(self._value))

    def start(self, prefix: str) -> "Stringable":
        return Stringable(Str.start(self._value, prefix))

    def finish(self, cap: str) -> "Stringable":
        return Stringable(Str.finish(self._value, cap))

    def replace(self, search: Needles, replace: Union[str, Iterable[str]]) -> "Stringable":
        return Stringable(Str.replace(search, replace, self._value))

    def limit(self, limit: int = 100, end: str = "...") -> "Stringable":
        return Stringable(Str.limit(self._value, limit, end))

    def trim(self, characters: Optional[str] = None) -> "Stringable":
        return Stringable(self._value.strip(characters))

    def contains(self, needles: Needles, ignore_case: bool = False) -> bool:
        return Str.contains(self._value, needles, ignore_case)

    def starts_with(self, needles: Needles) -> bool:
        return Str.starts_with(self._value, needles)

    def ends_with(self, needles: Needles) -> bool:
        return Str.ends_with(self._value, needles)

    def is_(self, pattern: Union[str, Iterable[str]], ignore_case: bool = False) -> bool:
        return Str.is_(pattern, self._value, ignore_case)

    def is_empty(self) -> bool:
        return self._value == ""

    def is_not_empty(self) -> bool:
        return not self.is_empty()

    def value(self) -> str:
        return self._value

    def to_string(self) -> str:
        return self._value

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"Stringable({self._value!r})"

    def __len__(self) -> int:
        return len(self._value)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Stringable):
            return self._value == other._value
        if isinstance(other, str):
            return self._value == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)
