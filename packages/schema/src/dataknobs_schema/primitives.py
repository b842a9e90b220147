"""Leaf schemas: strings, numbers, booleans, dates, literals and enumerations.
"""

from __future__ import annotations

import datetime as dt
import json
import math
import numbers
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any, Callable, TypeVar

from .base import Schema
from .errors import ParseError, SchemaConfigurationError, err
from .result import Err, Ok, Result

T = TypeVar("T")

E = TypeVar("E", bound=Enum)


def to_json(value: Any) -> str:
    """Render a value as compact JSON for membership messages."""
    try:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        return repr(value)


def same_value(a: Any, b: Any) -> bool:
    """Strict equality: booleans only ever equal booleans."""
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    return a == b


class TypeCheckSchema(Schema[T]):
    """Schema accepting any value for which ``check`` holds."""

    def __init__(self, type: str, check: Callable[[Any], bool], message: str | None = None):
        super().__init__(type, message)
        self._check = check

    def parse(self, data: Any) -> Result[T, ParseError]:
        if self._check(data):
            return Ok(data)
        return Err(err(self.type, data, self.message))


def _is_string(data: Any) -> bool:
    return isinstance(data, str)


def _is_number(data: Any) -> bool:
    if isinstance(data, bool) or not isinstance(data, numbers.Real):
        return False
    return not math.isnan(data)


def _is_boolean(data: Any) -> bool:
    return isinstance(data, bool)


def string(message: str | None = None) -> Schema[str]:
    """Schema accepting ``str`` values."""
    return TypeCheckSchema("string", _is_string, message)


def number(message: str | None = None) -> Schema[float]:
    """Schema accepting ints and floats, but not booleans or NaN."""
    return TypeCheckSchema("number", _is_number, message)


def boolean(message: str | None = None) -> Schema[bool]:
    """Schema accepting ``True`` and ``False`` only."""
    return TypeCheckSchema("boolean", _is_boolean, message)


class DateSchema(Schema[dt.date]):
    """Schema accepting ``date`` and ``datetime`` instances."""

    def __init__(self, message: str | None = None):
        super().__init__("date", message)

    def parse(self, data: Any) -> Result[dt.date, ParseError]:
        if isinstance(data, dt.datetime):
            return Ok(data.replace())
        if isinstance(data, dt.date):
            return Ok(dt.date(data.year, data.month, data.day))
        return Err(err(self.type, data, self.message))


def date(message: str | None = None) -> Schema[dt.date]:
    """Schema accepting dates, returning an equal fresh instance."""
    return DateSchema(message)


class UnknownSchema(Schema[Any]):
    """Identity schema; accepts everything."""

    def __init__(self):
        super().__init__("unknown")

    def parse(self, data: Any) -> Result[Any, ParseError]:
        return Ok(data)


def unknown() -> Schema[Any]:
    """Schema that never fails and returns its input unchanged."""
    return UnknownSchema()


class LiteralSchema(Schema[T]):
    """Schema matching a single value by strict equality."""

    def __init__(self, value: T, message: str | None = None):
        super().__init__("literal", message)
        self._value = value

    @property
    def value(self) -> T:
        return self._value

    def parse(self, data: Any) -> Result[T, ParseError]:
        if same_value(data, self._value):
            return Ok(self._value)
        message = self.message or f"Expected {to_json(self._value)}, but got {to_json(data)}"
        return Err(err(self.type, data, message))


def literal(value: T, message: str | None = None) -> Schema[T]:
    """Schema accepting exactly ``value``."""
    return LiteralSchema(value, message)


class EnumSchema(Schema[Any]):
    """Schema accepting members of an Enum class or values of a mapping.

    For an Enum class, both the members and their values are accepted and the
    member is returned. For a mapping, any of its values is accepted and
    returned as given.
    """

    def __init__(self, e: type[Enum] | Mapping[str, Any], message: str | None = None):
        super().__init__("enum", message)
        if isinstance(e, type) and issubclass(e, Enum):
            members = list(e)
            self._choices: tuple[tuple[Any, Any], ...] = tuple(
                [(m, m) for m in members] + [(m.value, m) for m in members]
            )
        elif isinstance(e, Mapping):
            self._choices = tuple((v, None) for v in e.values())
        else:
            raise SchemaConfigurationError(
                f"enum() expects an Enum class or a mapping, got {type(e).__name__}",
                context={"argument": repr(e)},
            )

    def parse(self, data: Any) -> Result[Any, ParseError]:
        for candidate, member in self._choices:
            if data is candidate or same_value(data, candidate):
                return Ok(data if member is None else member)
        return Err(err(self.type, data, self.message))


def enum(e: type[E] | Mapping[str, Any], message: str | None = None) -> Schema[Any]:
    """Schema accepting a member (or member value) of ``e``."""
    return EnumSchema(e, message)


class OneOfSchema(Schema[T]):
    """Schema accepting any value from a fixed collection."""

    def __init__(self, values: Iterable[T], message: str | None = None):
        super().__init__("oneOf", message)
        self._values = tuple(values)
        if not self._values:
            raise SchemaConfigurationError("one_of() requires at least one allowed value")

    @property
    def values(self) -> tuple[T, ...]:
        return self._values

    def parse(self, data: Any) -> Result[T, ParseError]:
        for value in self._values:
            if same_value(data, value):
                return Ok(data)
        message = self.message or (
            f"Expected one of {to_json(list(self._values))}, but got {to_json(data)}"
        )
        return Err(err(self.type, data, message))


def one_of(values: Iterable[T], message: str | None = None) -> Schema[T]:
    """Schema accepting one of ``values``."""
    return OneOfSchema(values, message)
