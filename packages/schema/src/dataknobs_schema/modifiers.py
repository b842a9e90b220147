"""Schemas that decide what happens when a value is absent (``None``)."""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from .base import Schema
from .errors import ParseError
from .option import NOTHING, Option, Some
from .result import Ok, Result

T = TypeVar("T")


class OptionalSchema(Schema[Option[T]]):
    """``None`` becomes ``NOTHING``; anything else is parsed and wrapped in ``Some``.

    Child failures are returned unchanged, never reinterpreted as absence.
    """

    def __init__(self, schema: Schema[T]):
        super().__init__("optional")
        self._schema = schema

    @property
    def schema(self) -> Schema[T]:
        return self._schema

    def parse(self, data: Any) -> Result[Option[T], ParseError]:
        if data is None:
            return Ok(NOTHING)
        return self._schema.parse(data).map(Some)


def opt(schema: Schema[T]) -> OptionalSchema[T]:
    """Make ``schema`` accept absent values."""
    return OptionalSchema(schema)


class DefaultSchema(Schema[T]):
    """``None`` becomes the default value without invoking the child.

    ``message`` is kept on the schema for introspection only. Present values
    are reported with the child's own errors.
    """

    def __init__(
        self,
        schema: Schema[T],
        value: T | None = None,
        message: str | None = None,
        factory: Callable[[], T] | None = None,
    ):
        super().__init__("default", message)
        self._schema = schema
        self._value = value
        self._factory = factory

    @property
    def schema(self) -> Schema[T]:
        return self._schema

    def default_value(self) -> T | None:
        """Get the value substituted for ``None``."""
        if self._factory is not None:
            return self._factory()
        return self._value

    def parse(self, data: Any) -> Result[T, ParseError]:
        if data is None:
            return Ok(self.default_value())
        return self._schema.parse(data)


def default(
    schema: Schema[T],
    value: T | None = None,
    message: str | None = None,
    *,
    factory: Callable[[], T] | None = None,
) -> DefaultSchema[T]:
    """Substitute a default for absent values.

    Args:
        schema: Schema applied to present values
        value: Value returned for ``None`` input
        message: Stored as ``.message``; child errors are returned unchanged
        factory: Called for each absent value instead of sharing ``value``;
            use it for mutable defaults such as lists or dicts

    Returns:
        DefaultSchema wrapping ``schema``
    """
    return DefaultSchema(schema, value, message, factory)
