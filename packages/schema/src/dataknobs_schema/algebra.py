"""Object schema transforms that rebuild a schema from another's properties.

None of these touch validation logic: they compute a new ``props`` mapping
and construct a fresh ObjectSchema from it.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, TypeVar

from .base import Schema
from .composites import ObjectSchema, obj
from .errors import ParseError, SchemaConfigurationError, err
from .modifiers import DefaultSchema, OptionalSchema, opt
from .result import Err, Result

T = TypeVar("T")


def _require_object(schema: Any, operation: str) -> ObjectSchema:
    if not isinstance(schema, ObjectSchema):
        raise SchemaConfigurationError(
            f"{operation}() expects an object schema, got {type(schema).__name__}",
            context={"operation": operation, "schema_type": getattr(schema, "type", None)},
        )
    return schema


def extend(schemas: Sequence[ObjectSchema], message: str | None = None) -> ObjectSchema:
    """Merge the properties of several object schemas.

    Later schemas override earlier ones when keys collide.

    Args:
        schemas: Object schemas, merged left to right
        message: Optional override message for the merged schema

    Returns:
        New ObjectSchema with the merged properties
    """
    if not schemas:
        raise SchemaConfigurationError("extend() requires at least one object schema")
    props: dict[str, Schema[Any]] = {}
    for schema in schemas:
        props.update(_require_object(schema, "extend").props)
    return obj(props, message)


def select(schema: ObjectSchema, keys: Iterable[str], message: str | None = None) -> ObjectSchema:
    """Keep only the named properties.

    Raises:
        SchemaConfigurationError: If a key is not a property of ``schema``
    """
    source = _require_object(schema, "select").props
    keys = list(keys)
    missing = [key for key in keys if key not in source]
    if missing:
        raise SchemaConfigurationError(
            f"select() got unknown properties: {', '.join(missing)}",
            context={"missing": missing, "available": list(source)},
        )
    return obj({key: source[key] for key in source if key in keys}, message)


def exclude(schema: ObjectSchema, keys: Iterable[str], message: str | None = None) -> ObjectSchema:
    """Drop the named properties; unknown keys are ignored."""
    source = _require_object(schema, "exclude").props
    dropped = set(keys)
    return obj({key: child for key, child in source.items() if key not in dropped}, message)


def partial(schema: ObjectSchema, message: str | None = None) -> ObjectSchema:
    """Make every property optional.

    Absent keys parse to ``NOTHING``; present values are still checked by the
    original property schema.
    """
    source = _require_object(schema, "partial").props
    props = {
        key: child if isinstance(child, OptionalSchema) else opt(child)
        for key, child in source.items()
    }
    return obj(props, message)


class PresentSchema(Schema[T]):
    """Rejects ``None`` before delegating to the wrapped schema."""

    def __init__(self, schema: Schema[T]):
        super().__init__(schema.type, schema.message)
        self._schema = schema

    @property
    def schema(self) -> Schema[T]:
        return self._schema

    def parse(self, data: Any) -> Result[T, ParseError]:
        if data is None:
            return Err(err(self.type, data, self.message))
        return self._schema.parse(data)


def required(schema: ObjectSchema, message: str | None = None) -> ObjectSchema:
    """Make every property mandatory.

    Optional and default wrappers are removed so that the property yields the
    inner value, and absent values are rejected for every property.
    """
    source = _require_object(schema, "required").props
    props = {}
    for key, child in source.items():
        while isinstance(child, (OptionalSchema, DefaultSchema)):
            child = child.schema
        props[key] = child if isinstance(child, PresentSchema) else PresentSchema(child)
    return obj(props, message)
