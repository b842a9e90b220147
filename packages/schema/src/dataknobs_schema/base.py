"""Schema abstraction shared by every constructor in the package."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from .errors import ParseError, SchemaValidationError
from .result import Result

T = TypeVar("T")


class Schema(ABC, Generic[T]):
    """Base class for all schemas.

    A schema carries a ``type`` tag used in error messages, an optional
    override ``message`` and a ``parse`` operation. Schemas are immutable once
    built, so a single instance may be shared and parsed against concurrently.
    """

    __slots__ = ("_type", "_message")

    def __init__(self, type: str, message: str | None = None):
        self._type = type
        self._message = message

    @property
    def type(self) -> str:
        """Type tag reported as ``expected`` in errors."""
        return self._type

    @property
    def message(self) -> str | None:
        """Override message used instead of the generated default."""
        return self._message

    @abstractmethod
    def parse(self, data: Any) -> Result[T, ParseError]:
        """Validate ``data`` and return the typed value or a ParseError.

        Args:
            data: Untrusted input

        Returns:
            Ok with the validated value, or Err with the first failure found
        """
        pass

    def validate(self, data: Any) -> T:
        """Parse ``data``, raising instead of returning an Err.

        Raises:
            SchemaValidationError: If the data does not match
        """
        result = self.parse(data)
        if result.is_err():
            raise SchemaValidationError(result.unwrap_err())
        return result.unwrap()

    def is_valid(self, data: Any) -> bool:
        """Check whether ``data`` matches without keeping the result."""
        return self.parse(data).is_ok()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(type={self._type!r})"
