"""Post-validation transformation pipeline.
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from .base import Schema
from .errors import ParseError, err
from .result import Err, Ok, Result

T = TypeVar("T")
U = TypeVar("U")

Pipe = Callable[[T], Result[T, str]]
"""A step: takes the current value, returns Ok(new value) or Err(message)."""


class PipeSchema(Schema[T]):
    """Runs the wrapped schema, then each step in order.

    The first failing step stops the pipeline. Its message becomes a
    ParseError tagged ``pipe`` whose value is the input to that step.
    """

    def __init__(self, schema: Schema[T], steps: tuple[Pipe[T], ...]):
        super().__init__("pipe")
        self._schema = schema
        self._steps = steps

    @property
    def schema(self) -> Schema[T]:
        return self._schema

    @property
    def steps(self) -> tuple[Pipe[T], ...]:
        return self._steps

    def parse(self, data: Any) -> Result[T, ParseError]:
        return self._schema.parse(data).and_then(self._run)

    def _run(self, value: T) -> Result[T, ParseError]:
        acc = value
        for step in self._steps:
            result = step(acc)
            if result.is_err():
                return Err(err(self.type, acc, result.unwrap_err()))
            acc = result.unwrap()
        return Ok(acc)


def pipe(schema: Schema[T], *steps: Pipe[T]) -> PipeSchema[T]:
    """Validate with ``schema``, then thread the value through ``steps``."""
    return PipeSchema(schema, steps)


class TransformSchema(Schema[U]):
    """Runs the wrapped schema, then a mapper that may change the type.

    Keeps the wrapped schema's type tag.
    """

    def __init__(self, schema: Schema[T], mapper: Callable[[T], Result[U, str]]):
        super().__init__(schema.type)
        self._schema = schema
        self._mapper = mapper

    @property
    def schema(self) -> Schema[T]:
        return self._schema

    def parse(self, data: Any) -> Result[U, ParseError]:
        return self._schema.parse(data).and_then(self._apply)

    def _apply(self, value: T) -> Result[U, ParseError]:
        return self._mapper(value).map_err(lambda message: err(self.type, value, message))


def transform(schema: Schema[T], mapper: Callable[[T], Result[U, str]]) -> TransformSchema[U]:
    """Validate with ``schema``, then map the value with a fallible ``mapper``."""
    return TransformSchema(schema, mapper)
