"""Best-effort type casts applied before a primitive schema's own check.
"""

from __future__ import annotations

import datetime as dt
import logging
import math
import numbers
from typing import Any, Callable, TypeVar

from .base import Schema
from .errors import ParseError, SchemaConfigurationError, err, format_number
from .result import Err, Result

logger = logging.getLogger(__name__)

T = TypeVar("T")

TRUTHY_STRINGS = frozenset({"true", "1", "yes", "on"})


def to_number(data: Any) -> Any:
    """Numeric cast: numeric strings, booleans and None become numbers.

    Anything that cannot be read as a number becomes NaN, which the number
    schema then rejects.
    """
    if isinstance(data, bool):
        return int(data)
    if data is None:
        return 0
    if isinstance(data, numbers.Real):
        return data
    if isinstance(data, str):
        text = data.strip()
        if not text:
            return 0
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return float(text)
        except ValueError:
            logger.debug("Could not read %r as a number", data)
            return math.nan
    return math.nan


def to_string(data: Any) -> str:
    """String cast using JSON-ish spellings for None and booleans."""
    if isinstance(data, str):
        return data
    if data is None:
        return "null"
    if isinstance(data, bool):
        return "true" if data else "false"
    if isinstance(data, float):
        return format_number(data)
    return str(data)


def to_boolean(data: Any) -> bool:
    """Boolean cast: a fixed, case-insensitive vocabulary for strings, truthiness otherwise."""
    if isinstance(data, str):
        return data.lower() in TRUTHY_STRINGS
    return bool(data)


def to_date(data: Any) -> Any:
    """Date cast from ISO-8601 strings or POSIX timestamps (UTC).

    Values that cannot be read are returned unchanged so the date schema
    reports them.
    """
    if isinstance(data, bool):
        return data
    if isinstance(data, str):
        try:
            return dt.datetime.fromisoformat(data.strip().replace("Z", "+00:00"))
        except ValueError:
            logger.debug("Could not read %r as an ISO-8601 date", data)
            return data
    if isinstance(data, numbers.Real):
        try:
            return dt.datetime.fromtimestamp(float(data), tz=dt.timezone.utc)
        except (OverflowError, OSError, ValueError):
            logger.debug("Timestamp %r is out of range", data)
            return data
    return data


CASTS: dict[str, Callable[[Any], Any]] = {
    "number": to_number,
    "string": to_string,
    "boolean": to_boolean,
    "date": to_date,
}


class CoercedSchema(Schema[T]):
    """Runs a cast before delegating to the wrapped schema.

    Keeps the wrapped schema's type tag and message. Errors describe the raw
    input rather than the intermediate cast value.
    """

    def __init__(self, schema: Schema[T], cast: Callable[[Any], Any]):
        super().__init__(schema.type, schema.message)
        self._schema = schema
        self._cast = cast

    @property
    def schema(self) -> Schema[T]:
        return self._schema

    def parse(self, data: Any) -> Result[T, ParseError]:
        cast = self._cast(data)
        result = self._schema.parse(cast)
        if result.is_ok():
            return result
        error = result.unwrap_err()
        # Only plain type mismatches on the cast value are re-described.
        if error.path or error.value is not cast:
            return result
        if error.message not in (self.message, f"Expected {error.expected}, but got {error.actual}"):
            return result
        return Err(err(self.type, data, self.message))


def coerce(schema: Schema[T]) -> Schema[T]:
    """Wrap a number, string, boolean or date schema with a pre-parse cast.

    Args:
        schema: Schema whose type tag is one of number, string, boolean, date

    Returns:
        Schema that casts its input before validating it

    Raises:
        SchemaConfigurationError: If the schema kind cannot be coerced
    """
    cast = CASTS.get(schema.type)
    if cast is None:
        raise SchemaConfigurationError(
            f'Cannot coerce "{schema.type}" to a primitive type',
            context={"schema_type": schema.type, "supported": sorted(CASTS)},
        )
    return CoercedSchema(schema, cast)
