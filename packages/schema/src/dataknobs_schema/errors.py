"""Parse errors and exceptions for the dataknobs_schema package.

Data problems are reported as ``ParseError`` values inside an ``Err``.
Programmer mistakes (bad schema construction) raise exceptions built on the
common exception framework from dataknobs_common.
"""

from __future__ import annotations

import math
import numbers
from collections.abc import Mapping
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Any

from dataknobs_common import (
    ConfigurationError,
    DataknobsError,
    ValidationError,
)

from .sequence import Seq


@dataclass(frozen=True, slots=True)
class ParseError:
    """Location-aware description of a validation failure.

    Attributes:
        actual: Runtime type label of the offending value
        expected: Type label the schema expected
        message: Human-readable message (schema override or generated default)
        path: Property names / indices from the root to the failing node
        value: The offending input, exactly as received
    """

    actual: str
    expected: str
    message: str
    path: tuple[str, ...] = ()
    value: Any = None

    def prepend(self, segment: str | int) -> ParseError:
        """Return a copy with one path segment added in front.

        Args:
            segment: Property key or index of the enclosing container

        Returns:
            New ParseError; this one is left untouched
        """
        return replace(self, path=(str(segment), *self.path))

    def to_dict(self) -> dict[str, Any]:
        """Return the wire shape, suitable for JSON error responses."""
        return {
            "actual": self.actual,
            "expected": self.expected,
            "message": self.message,
            "path": list(self.path),
            "value": self.value,
        }

    def __str__(self) -> str:
        if self.path:
            return f"{'.'.join(self.path)}: {self.message}"
        return self.message


def type_of(value: Any) -> str:
    """Get the runtime type label used in error messages."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, numbers.Real):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (datetime, date)):
        return "date"
    if isinstance(value, Seq):
        return "list"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, (set, frozenset)):
        return "set"
    if isinstance(value, (bytes, bytearray)):
        return "bytes"
    if callable(value):
        return "function"
    return type(value).__name__.lower()


def err(expected: str, value: Any, message: str | None = None) -> ParseError:
    """Build a ParseError for a value that did not match ``expected``.

    Args:
        expected: Type label of the schema that rejected the value
        value: The rejected input
        message: Optional override message

    Returns:
        ParseError with an empty path
    """
    actual = type_of(value)
    return ParseError(
        actual=actual,
        expected=expected,
        message=message or f"Expected {expected}, but got {actual}",
        path=(),
        value=value,
    )


def format_number(value: Any) -> str:
    """Render a number the way it reads in messages (``3`` rather than ``3.0``)."""
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


class SchemaError(DataknobsError):
    """Base exception for the schema package."""

    pass


class SchemaConfigurationError(ConfigurationError, SchemaError):
    """Raised when a schema is built from invalid arguments or configuration.

    These are programmer errors, raised eagerly while the schema tree is being
    constructed and never through the ``Result`` channel.
    """

    pass


class SchemaValidationError(ValidationError, SchemaError):
    """Raised by ``Schema.validate`` when data does not match the schema."""

    def __init__(self, error: ParseError):
        self.error = error
        super().__init__(str(error), context=error.to_dict())
