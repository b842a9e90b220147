"""Composite schemas: lists, tuples, unions, objects and records.

Every composite validates its children depth-first, left to right, and stops
at the first failing child. The child's error is returned with exactly one
path segment (index or key) prepended.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import Any, TypeVar

from .base import Schema
from .errors import ParseError, SchemaConfigurationError, err
from .result import Err, Ok, Result
from .sequence import Seq

T = TypeVar("T")
K = TypeVar("K")
V = TypeVar("V")


def is_array(data: Any) -> bool:
    """Lists and tuples count as arrays; strings and Seq results do not."""
    return isinstance(data, (list, tuple))


def is_plain_object(data: Any) -> bool:
    return isinstance(data, Mapping)


class ListSchema(Schema[Seq[T]]):
    """Homogeneous list validated element by element."""

    def __init__(self, schema: Schema[T], message: str | None = None):
        super().__init__("list", message)
        self._schema = schema

    @property
    def schema(self) -> Schema[T]:
        return self._schema

    def parse(self, data: Any) -> Result[Seq[T], ParseError]:
        if not is_array(data):
            return Err(err(self.type, data, self.message))

        items = []
        for index, item in enumerate(data):
            result = self._schema.parse(item)
            if result.is_err():
                return Err(result.unwrap_err().prepend(index))
            items.append(result.unwrap())
        return Ok(Seq(items))


def list_of(schema: Schema[T], message: str | None = None) -> ListSchema[T]:
    """Schema for a list whose elements all match ``schema``."""
    return ListSchema(schema, message)


class TupleSchema(Schema[tuple]):
    """Fixed-length array with one schema per position."""

    def __init__(self, schemas: Sequence[Schema[Any]], message: str | None = None):
        super().__init__("tuple", message)
        self._schemas = tuple(schemas)
        if not self._schemas:
            raise SchemaConfigurationError("tuple_of() requires at least one schema")

    @property
    def schemas(self) -> tuple[Schema[Any], ...]:
        return self._schemas

    def parse(self, data: Any) -> Result[tuple, ParseError]:
        if not is_array(data) or len(data) != len(self._schemas):
            return Err(err(self.type, data, self.message))

        items = []
        for index, (schema, item) in enumerate(zip(self._schemas, data)):
            result = schema.parse(item)
            if result.is_err():
                return Err(result.unwrap_err().prepend(index))
            items.append(result.unwrap())
        return Ok(tuple(items))


def tuple_of(schemas: Sequence[Schema[Any]], message: str | None = None) -> TupleSchema:
    """Schema for a fixed-length array, one schema per position."""
    return TupleSchema(schemas, message)


class UnionSchema(Schema[Any]):
    """First matching alternative wins.

    When every alternative fails, a fresh error is reported whose expected
    label joins the alternatives' type tags; the individual failures are
    discarded.
    """

    def __init__(self, schemas: Sequence[Schema[Any]], message: str | None = None):
        super().__init__("union", message)
        self._schemas = tuple(schemas)
        if not self._schemas:
            raise SchemaConfigurationError("union() requires at least one schema")

    @property
    def schemas(self) -> tuple[Schema[Any], ...]:
        return self._schemas

    def parse(self, data: Any) -> Result[Any, ParseError]:
        for schema in self._schemas:
            result = schema.parse(data)
            if result.is_ok():
                return result
        expected = " | ".join(schema.type for schema in self._schemas)
        return Err(err(expected, data, self.message))


def union(schemas: Sequence[Schema[Any]], message: str | None = None) -> UnionSchema:
    """Schema matching any of ``schemas``, tried in order."""
    return UnionSchema(schemas, message)


class ObjectSchema(Schema[dict]):
    """Object with a declared set of properties.

    ``props`` is kept as an explicit ordered mapping so that extend, select,
    exclude, partial and required can rebuild new object schemas from it.
    """

    def __init__(self, props: Mapping[str, Schema[Any]], message: str | None = None):
        super().__init__("object", message)
        for key, schema in props.items():
            if not isinstance(schema, Schema):
                raise SchemaConfigurationError(
                    f"Property '{key}' must be a schema, got {type(schema).__name__}",
                    context={"property": key},
                )
        self._props = MappingProxyType(dict(props))

    @property
    def props(self) -> Mapping[str, Schema[Any]]:
        """Read-only mapping of property name to child schema."""
        return self._props

    def parse(self, data: Any) -> Result[dict, ParseError]:
        if not is_plain_object(data):
            return Err(err(self.type, data, self.message))

        obj = {}
        for key, schema in self._props.items():
            result = schema.parse(data.get(key))
            if result.is_err():
                return Err(result.unwrap_err().prepend(key))
            obj[key] = result.unwrap()
        return Ok(obj)


def obj(props: Mapping[str, Schema[Any]], message: str | None = None) -> ObjectSchema:
    """Schema for an object with the given properties.

    Missing keys are parsed as ``None``; keys not declared in ``props`` are
    dropped from the result.
    """
    return ObjectSchema(props, message)


class RecordSchema(Schema[dict]):
    """Object with arbitrary keys, every key and value checked."""

    def __init__(self, key: Schema[K], value: Schema[V], message: str | None = None):
        super().__init__("record", message)
        self._key = key
        self._value = value

    @property
    def key_schema(self) -> Schema[K]:
        return self._key

    @property
    def value_schema(self) -> Schema[V]:
        return self._value

    def parse(self, data: Any) -> Result[dict, ParseError]:
        if not is_plain_object(data):
            return Err(err(self.type, data, self.message))

        obj = {}
        for raw_key, raw_value in data.items():
            key_result = self._key.parse(raw_key)
            if key_result.is_err():
                return Err(key_result.unwrap_err().prepend(raw_key))
            value_result = self._value.parse(raw_value)
            if value_result.is_err():
                return Err(value_result.unwrap_err().prepend(raw_key))
            obj[key_result.unwrap()] = value_result.unwrap()
        return Ok(obj)


def record(key: Schema[K], value: Schema[V], message: str | None = None) -> RecordSchema:
    """Schema for a mapping of ``key`` to ``value``."""
    return RecordSchema(key, value, message)
