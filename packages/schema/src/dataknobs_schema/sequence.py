"""Immutable ordered sequence returned by list schemas."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import Any, Generic, TypeVar, overload

T = TypeVar("T")


class Seq(Sequence[T], Generic[T]):
    """Tuple-backed sequence with structural equality.

    A ``Seq`` compares equal to another ``Seq``, list or tuple holding the
    same items in the same order.
    """

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[T] = ()):
        self._items: tuple[T, ...] = tuple(items)

    @classmethod
    def of(cls, *items: T) -> Seq[T]:
        return cls(items)

    @classmethod
    def from_iterable(cls, items: Iterable[T]) -> Seq[T]:
        return cls(items)

    def is_empty(self) -> bool:
        return not self._items

    def to_list(self) -> list[T]:
        return list(self._items)

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> Seq[T]: ...

    def __getitem__(self, index: int | slice) -> T | Seq[T]:
        if isinstance(index, slice):
            return Seq(self._items[index])
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Seq):
            return self._items == other._items
        if isinstance(other, (list, tuple)):
            return self._items == tuple(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:
        return f"Seq({list(self._items)!r})"
