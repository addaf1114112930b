"""Bundled converters.

:class:`ObjectToObject` doubles as the default discovery anchor: every
converter defined inside the ``castors.converters`` package is picked up
when it is listed as an anchor.
"""

from __future__ import annotations

from abc import abstractmethod
from collections import abc
from datetime import date, datetime
from enum import Enum
from numbers import Integral, Number
from typing import Any

from pydantic import BaseModel

from castors.converters.base import Converter
from castors.domain.errors import ConversionFailed
from castors.domain.types import PrimitiveKind, runtime_type

DEFAULT_DATETIME_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d",
)
DEFAULT_TRUE_WORDS: frozenset[str] = frozenset({"true", "yes", "on", "y", "t", "1"})
DEFAULT_FALSE_WORDS: frozenset[str] = frozenset({"false", "no", "off", "n", "f", "0", ""})


def _fit(number: int, source_type: Any, target_type: Any, value: Any) -> Any:
    """Range-check *number* against a fixed-width kind and box it."""
    if isinstance(target_type, PrimitiveKind) and target_type.bounds:
        low, high = target_type.bounds
        if not low <= number <= high:
            raise ConversionFailed(
                source_type, target_type, value, f"{number} is out of range [{low}, {high}]"
            )
    cls = runtime_type(target_type)
    return number if cls is int else cls(number)


def _rebuild(value: Any, target_type: Any, default: type) -> Any:
    """Build *target_type* (or *default* for abstract targets) from *value*."""
    cls = runtime_type(target_type)
    if not isinstance(cls, type) or getattr(cls, "__abstractmethods__", None):
        cls = default
    if type(value) is cls:
        return value
    return cls(value)


# ---------------------------------------------------------------------------
# Generic fallbacks
# ---------------------------------------------------------------------------


class ObjectToObject(Converter):
    """Catch-all: pass through instances, otherwise call the target type.

    Always resolves, which is why :meth:`Castors.can_cast` treats it as
    "no real support".
    """

    source_type = object
    target_type = object
    catch_all = True

    def convert(self, value: Any, target_type: Any, *directives: str) -> Any:
        cls = runtime_type(target_type)
        if isinstance(cls, type) and isinstance(value, cls):
            return value
        return cls(value)


class ObjectToString(Converter):
    source_type = object
    target_type = str

    def convert(self, value: Any, target_type: Any, *directives: str) -> Any:
        return str(value)


# ---------------------------------------------------------------------------
# Text to scalars
# ---------------------------------------------------------------------------


class StringToInteger(Converter):
    """Parse integers; an optional first directive gives the base.

    Fixed-width primitive targets (``byte``, ``short``, ``int``, ``long``)
    are range-checked.
    """

    source_type = str
    target_type = int

    def convert(self, value: Any, target_type: Any, *directives: str) -> Any:
        base = int(directives[0]) if directives else 10
        return _fit(int(value.strip(), base), str, target_type, value)


class IntegralToInteger(Converter):
    """Narrow any integral value into ``int`` or a fixed-width kind."""

    source_type = Integral
    target_type = int

    def convert(self, value: Any, target_type: Any, *directives: str) -> Any:
        return _fit(int(value), type(value), target_type, value)


class StringToFloat(Converter):
    source_type = str
    target_type = float

    def convert(self, value: Any, target_type: Any, *directives: str) -> Any:
        number = float(value.strip())
        cls = runtime_type(target_type)
        return number if cls is float else cls(number)


class StringToBoolean(Converter):
    """Match against configurable true/false words, case-insensitively."""

    source_type = str
    target_type = bool

    def __init__(self) -> None:
        self.true_words = DEFAULT_TRUE_WORDS
        self.false_words = DEFAULT_FALSE_WORDS

    def convert(self, value: Any, target_type: Any, *directives: str) -> Any:
        word = value.strip().lower()
        if word in self.true_words:
            return True
        if word in self.false_words:
            return False
        msg = f"'{value}' is not a recognised boolean word"
        raise ValueError(msg)


class NumberToBoolean(Converter):
    source_type = Number
    target_type = bool

    def convert(self, value: Any, target_type: Any, *directives: str) -> Any:
        return value != 0


class StringToChar(Converter):
    source_type = str
    target_type = PrimitiveKind.CHAR

    def convert(self, value: Any, target_type: Any, *directives: str) -> Any:
        if not value:
            raise ConversionFailed(str, target_type, value, "empty string has no character")
        return value[0]


class NumberToChar(Converter):
    """Treat the number as a code point."""

    source_type = Number
    target_type = PrimitiveKind.CHAR

    def convert(self, value: Any, target_type: Any, *directives: str) -> Any:
        return chr(int(value))


class ObjectToChar(Converter):
    """Accept anything whose string form is exactly one character.

    Marked catch-all: it resolves for every source type without
    supporting most of them.
    """

    source_type = object
    target_type = PrimitiveKind.CHAR
    catch_all = True

    def convert(self, value: Any, target_type: Any, *directives: str) -> Any:
        text = str(value)
        if len(text) != 1:
            raise ConversionFailed(
                type(value), target_type, value, f"'{text}' is not a single character"
            )
        return text


class StringToEnum(Converter):
    """Look members up by value first, then by name."""

    source_type = str
    target_type = Enum

    def convert(self, value: Any, target_type: Any, *directives: str) -> Any:
        try:
            return target_type(value)
        except ValueError:
            return target_type[value.strip()]


class EnumToString(Converter):
    source_type = Enum
    target_type = str

    def convert(self, value: Any, target_type: Any, *directives: str) -> Any:
        return value.name


# ---------------------------------------------------------------------------
# Collections
# ---------------------------------------------------------------------------


class StringSplitter(Converter):
    """Shared base for text-to-collection converters.

    Text is split on a separator rather than iterated character by
    character; the first directive overrides the configured separator.
    """

    def __init__(self) -> None:
        self.separator = ","

    def split(self, value: str, directives: tuple[str, ...]) -> list[str]:
        separator = directives[0] if directives else self.separator
        if not value.strip():
            return []
        return [item.strip() for item in value.split(separator)]

    @abstractmethod
    def convert(self, value: Any, target_type: Any, *directives: str) -> Any: ...


class StringToList(StringSplitter):
    source_type = str
    target_type = list

    def convert(self, value: Any, target_type: Any, *directives: str) -> Any:
        return _rebuild(self.split(value, directives), target_type, list)


class StringToTuple(StringSplitter):
    source_type = str
    target_type = tuple

    def convert(self, value: Any, target_type: Any, *directives: str) -> Any:
        return _rebuild(self.split(value, directives), target_type, tuple)


class StringToSet(StringSplitter):
    source_type = str
    target_type = set

    def convert(self, value: Any, target_type: Any, *directives: str) -> Any:
        return _rebuild(self.split(value, directives), target_type, set)


class IterableToList(Converter):
    source_type = abc.Iterable
    target_type = list

    def convert(self, value: Any, target_type: Any, *directives: str) -> Any:
        return _rebuild(value, target_type, list)


class IterableToTuple(Converter):
    source_type = abc.Iterable
    target_type = tuple

    def convert(self, value: Any, target_type: Any, *directives: str) -> Any:
        return _rebuild(value, target_type, tuple)


class IterableToSet(Converter):
    source_type = abc.Iterable
    target_type = set

    def convert(self, value: Any, target_type: Any, *directives: str) -> Any:
        return _rebuild(value, target_type, set)


class MappingToDict(Converter):
    source_type = abc.Mapping
    target_type = dict

    def convert(self, value: Any, target_type: Any, *directives: str) -> Any:
        return _rebuild(value, target_type, dict)


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------


class DatetimeParser(Converter):
    """Shared base for text-to-date converters.

    Formats passed as directives are tried before the configured ones;
    ISO 8601 is the last resort.
    """

    def __init__(self) -> None:
        self.formats: tuple[str, ...] = DEFAULT_DATETIME_FORMATS

    def parse(self, value: str, directives: tuple[str, ...]) -> datetime:
        text = value.strip()
        for fmt in (*directives, *self.formats):
            try:
                return datetime.strptime(text, fmt)
            except ValueError:
                continue
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            msg = f"'{value}' matches none of the formats {list((*directives, *self.formats))}"
            raise ValueError(msg) from None

    @abstractmethod
    def convert(self, value: Any, target_type: Any, *directives: str) -> Any: ...


class StringToDatetime(DatetimeParser):
    source_type = str
    target_type = datetime

    def convert(self, value: Any, target_type: Any, *directives: str) -> Any:
        return self.parse(value, directives)


class StringToDate(DatetimeParser):
    source_type = str
    target_type = date

    def convert(self, value: Any, target_type: Any, *directives: str) -> Any:
        return self.parse(value, directives).date()


class DateToString(Converter):
    """ISO format by default; the first directive is a ``strftime`` format."""

    source_type = date
    target_type = str

    def convert(self, value: Any, target_type: Any, *directives: str) -> Any:
        if directives:
            return value.strftime(directives[0])
        return value.isoformat()


# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


class MappingToModel(Converter):
    source_type = abc.Mapping
    target_type = BaseModel

    def convert(self, value: Any, target_type: Any, *directives: str) -> Any:
        return target_type.model_validate(dict(value))


class ModelToDict(Converter):
    source_type = BaseModel
    target_type = dict

    def convert(self, value: Any, target_type: Any, *directives: str) -> Any:
        return value.model_dump()
