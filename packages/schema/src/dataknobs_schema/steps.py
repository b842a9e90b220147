"""Reusable pipeline steps.

Each function takes its configuration (and an optional override message) and
returns a step for ``pipe``. Steps are pure and hold no state between calls.

Example:
    ```python
    from dataknobs_schema import pipe, string, number, steps

    username = pipe(string(), steps.trim(), steps.min_len(3), steps.max_len(20))
    age = pipe(number(), steps.integer(), steps.in_range(0, 150))
    ```
"""

from __future__ import annotations

import datetime as dt
import re
from collections.abc import Sized
from re import Pattern as RegexPattern
from typing import Any

from .errors import format_number
from .pipeline import Pipe
from .result import Err, Ok
from .sequence import Seq

EMAIL_MAX_LENGTH = 320

EMAIL_REGEX = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
)

UUID_REGEX = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}\Z",
    re.IGNORECASE,
)


def _iso(value: dt.date) -> str:
    """ISO-8601 with millisecond precision; UTC is written as ``Z``."""
    if isinstance(value, dt.datetime):
        text = value.isoformat(timespec="milliseconds")
        if text.endswith("+00:00"):
            text = text[: -len("+00:00")] + "Z"
        return text
    return value.isoformat()


def _instant(value: dt.date) -> dt.datetime:
    """Place a date or datetime on a single UTC timeline.

    Plain dates are read as midnight and naive datetimes as UTC.
    """
    if not isinstance(value, dt.datetime):
        return dt.datetime(value.year, value.month, value.day, tzinfo=dt.timezone.utc)
    if value.tzinfo is None or value.utcoffset() is None:
        return value.replace(tzinfo=dt.timezone.utc)
    return value


# Strings


def min_len(min: int, message: str | None = None) -> Pipe[str]:
    """Require at least ``min`` characters."""

    def step(data: str):
        if len(data) < min:
            return Err(message or f"Expected length to be at least {min}, but got {len(data)}")
        return Ok(data)

    return step


def max_len(max: int, message: str | None = None) -> Pipe[str]:
    """Require at most ``max`` characters."""

    def step(data: str):
        if len(data) > max:
            return Err(message or f"Expected length to be at most {max}, but got {len(data)}")
        return Ok(data)

    return step


def trim() -> Pipe[str]:
    """Strip leading and trailing whitespace."""

    def step(data: str):
        return Ok(data.strip())

    return step


def upcase() -> Pipe[str]:
    def step(data: str):
        return Ok(data.upper())

    return step


def lowcase() -> Pipe[str]:
    def step(data: str):
        return Ok(data.lower())

    return step


def pattern(regex: str | RegexPattern, message: str | None = None) -> Pipe[str]:
    """Require a regular-expression match anywhere in the value.

    Anchor the pattern with ``^``/``$`` to match the whole value.
    """
    compiled = re.compile(regex) if isinstance(regex, str) else regex
    msg = message or f"Expected value to match pattern /{compiled.pattern}/"

    def step(data: str):
        if compiled.search(data) is None:
            return Err(msg)
        return Ok(data)

    return step


def not_empty(message: str | None = None) -> Pipe[Any]:
    """Reject empty strings, lists and other empty collections."""
    msg = message or "Expected value to be non-empty"

    def step(data: Sized):
        empty = data.is_empty() if isinstance(data, Seq) else len(data) == 0
        if empty:
            return Err(msg)
        return Ok(data)

    return step


# Numbers


def min_value(min: float, message: str | None = None) -> Pipe[float]:
    """Require ``value >= min``."""
    msg = message or f"Expected value to be at least {format_number(min)}"

    def step(data: float):
        if data < min:
            return Err(msg)
        return Ok(data)

    return step


def max_value(max: float, message: str | None = None) -> Pipe[float]:
    """Require ``value <= max``."""
    msg = message or f"Expected value to be at most {format_number(max)}"

    def step(data: float):
        if data > max:
            return Err(msg)
        return Ok(data)

    return step


def in_range(min: float, max: float, message: str | None = None) -> Pipe[float]:
    """Require ``min <= value <= max``."""

    def step(data: float):
        if data < min or data > max:
            return Err(
                message
                or f"Expected value to be in range {format_number(min)} - {format_number(max)}, "
                f"but got {format_number(data)}"
            )
        return Ok(data)

    return step


def clamp(min: float, max: float) -> Pipe[float]:
    """Saturate the value into ``[min, max]``; never fails."""

    def step(data: float):
        if data < min:
            return Ok(min)
        if data > max:
            return Ok(max)
        return Ok(data)

    return step


def integer(message: str | None = None) -> Pipe[float]:
    """Require an integral value (``3.0`` passes, ``3.5`` does not)."""
    msg = message or "Expected value to be an integer"

    def step(data: float):
        if isinstance(data, float) and not data.is_integer():
            return Err(msg)
        return Ok(data)

    return step


def positive(message: str | None = None) -> Pipe[float]:
    """Require ``value >= 0``; zero counts as positive."""
    return min_value(0, message or "Expected value to be positive")


def negative(message: str | None = None) -> Pipe[float]:
    """Require ``value <= 0``; zero counts as negative."""
    return max_value(0, message or "Expected value to be negative")


# Dates


def before(date: dt.date, message: str | None = None) -> Pipe[dt.date]:
    """Require a date strictly earlier than ``date``."""
    msg = message or f"Expected date to be before {_iso(date)}"
    bound = _instant(date)

    def step(data: dt.date):
        if _instant(data) >= bound:
            return Err(msg)
        return Ok(data)

    return step


def after(date: dt.date, message: str | None = None) -> Pipe[dt.date]:
    """Require a date strictly later than ``date``."""
    msg = message or f"Expected date to be after {_iso(date)}"
    bound = _instant(date)

    def step(data: dt.date):
        if _instant(data) <= bound:
            return Err(msg)
        return Ok(data)

    return step


def between(start: dt.date, end: dt.date, message: str | None = None) -> Pipe[dt.date]:
    """Require ``start <= date <= end``."""
    msg = message or f"Expected date to be between {_iso(start)} and {_iso(end)}"
    lower, upper = _instant(start), _instant(end)

    def step(data: dt.date):
        instant = _instant(data)
        if instant < lower or instant > upper:
            return Err(msg)
        return Ok(data)

    return step


# Formats


def email(message: str | None = None) -> Pipe[str]:
    """Require a plausible email address (at most 320 characters)."""
    msg = message or "Expected value to be a valid email address"

    def step(data: str):
        if len(data) > EMAIL_MAX_LENGTH or EMAIL_REGEX.fullmatch(data) is None:
            return Err(msg)
        return Ok(data)

    return step


def uuid(message: str | None = None) -> Pipe[str]:
    """Require a version-4 UUID, in either case."""
    return pattern(UUID_REGEX, message or "Expected value to be a valid UUID")
