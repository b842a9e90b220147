"""Optional-value type produced by ``opt`` and ``partial`` schemas."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, NoReturn, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Some(Generic[T]):
    """A present value."""

    value: T

    def is_some(self) -> bool:
        return True

    def is_none(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: Any) -> T:
        return self.value

    def map(self, f: Callable[[T], U]) -> Some[U]:
        return Some(f(self.value))


@dataclass(frozen=True, slots=True)
class Nothing:
    """An absent value. Use the ``NOTHING`` singleton."""

    def is_some(self) -> bool:
        return False

    def is_none(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        raise ValueError("Called unwrap on Nothing")

    def unwrap_or(self, default: T) -> T:
        return default

    def map(self, f: Callable[[Any], Any]) -> Nothing:
        return self

    def __bool__(self) -> bool:
        return False


NOTHING = Nothing()

Option = Union[Some[T], Nothing]
