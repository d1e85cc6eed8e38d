"""A segment: the storage for the elements of one concrete type."""

from __future__ import annotations

import copy as _copy
from typing import Any, Iterable, Iterator

from polyseg.exceptions import NotCopyConstructible, NotEqualityComparable


def _has_equality(type_: type) -> bool:
    return type_.__eq__ is not object.__eq__


class Segment:
    """Contiguous storage for elements that all have exactly one type.

    Positions are plain indices. Every modifier returns the index of the
    first element it touched (or of the element that now follows the erased
    ones), the way the collection built on top expects. Capacity is tracked
    so that reserving and shrinking behave as in a growable array: a fresh
    segment always has room for at least one element.
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, type_: type, items: Iterable[Any] = ()) -> None:
        self.type_ = type_
        self._items: list[Any] = []
        values = list(items)
        self._check_all(values)
        self._items = values
        self._capacity = max(len(values), 1)

    # -- inspection ---------------------------------------------------------

    @property
    def type_info(self) -> type:
        """The concrete type of the elements held."""
        return self.type_

    @property
    def capacity(self) -> int:
        """How many elements fit before the storage has to grow."""
        return self._capacity

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def __getitem__(self, index: int | slice) -> Any:
        if isinstance(index, slice):
            return self._items[index]
        return self._items[self._position(index, allow_end=False)]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Segment):
            return NotImplemented
        if self.type_ is not other.type_:
            return False
        if len(self._items) != len(other._items):
            return False
        if not self._items:
            return True
        if not _has_equality(self.type_):
            raise NotEqualityComparable(self.type_)
        return all(x == y for x, y in zip(self._items, other._items))

    def __repr__(self) -> str:
        return f"Segment({self.type_.__name__}, {self._items!r})"

    # -- copies -------------------------------------------------------------

    def copy(self) -> "Segment":
        """Return a segment holding copies of every element."""
        try:
            values = [_copy.copy(item) for item in self._items]
        except (TypeError, _copy.Error) as exc:
            raise NotCopyConstructible(self.type_) from exc
        return Segment(self.type_, values)

    def empty_copy(self) -> "Segment":
        """Return a segment for the same type with no elements."""
        return Segment(self.type_)

    # -- insertion ----------------------------------------------------------

    def push_back(self, value: Any) -> int:
        """Append ``value`` and return its index."""
        self._check(value)
        self._prereserve(1)
        self._items.append(value)
        return len(self._items) - 1

    def emplace_back(self, *args: Any, **kwargs: Any) -> int:
        """Construct an element from the arguments at the end; return its index."""
        return self.push_back(self.type_(*args, **kwargs))

    def insert(self, index: int, value: Any) -> int:
        """Insert ``value`` before ``index`` and return its index."""
        pos = self._position(index, allow_end=True)
        self._check(value)
        self._prereserve(1)
        self._items.insert(pos, value)
        return pos

    def insert_range(self, index: int, iterable: Iterable[Any]) -> int:
        """Insert every value of ``iterable`` before ``index``.

        Returns the index of the first inserted element. Nothing is inserted
        if any value has the wrong type.
        """
        pos = self._position(index, allow_end=True)
        values = list(iterable)
        self._check_all(values)
        if values:
            self._prereserve(len(values))
            self._items[pos:pos] = values
        return pos

    def emplace(self, index: int, *args: Any, **kwargs: Any) -> int:
        """Construct an element from the arguments before ``index``."""
        pos = self._position(index, allow_end=True)
        return self.insert(pos, self.type_(*args, **kwargs))

    # -- erasure ------------------------------------------------------------

    def erase(self, index: int) -> int:
        """Remove the element at ``index``; return the index that follows it."""
        pos = self._position(index, allow_end=False)
        del self._items[pos]
        return pos

    def erase_range(self, first: int, last: int) -> int:
        """Remove the elements in ``[first, last)``; return ``first``."""
        start = self._position(first, allow_end=True)
        stop = self._position(last, allow_end=True)
        if start > stop:
            raise ValueError("range start lies after its end")
        del self._items[start:stop]
        return start

    def erase_till_end(self, first: int) -> int:
        """Remove every element from ``first`` on; return ``first``."""
        return self.erase_range(first, len(self._items))

    def erase_from_begin(self, last: int) -> int:
        """Remove every element before ``last``; return the new first index."""
        return self.erase_range(0, last)

    def clear(self) -> None:
        """Remove every element, keeping the capacity."""
        self._items.clear()

    # -- capacity -----------------------------------------------------------

    def reserve(self, n: int) -> None:
        """Make room for at least ``n`` elements."""
        if n < 0:
            raise ValueError("cannot reserve a negative number of elements")
        self._capacity = max(self._capacity, n)

    def shrink_to_fit(self) -> None:
        """Drop spare capacity, keeping room for at least one element."""
        self._capacity = max(len(self._items), 1)

    # -- helpers ------------------------------------------------------------

    def _check(self, value: Any) -> None:
        if type(value) is not self.type_:
            raise TypeError(
                f"segment holds {self.type_.__name__}, "
                f"got {type(value).__name__}"
            )

    def _check_all(self, values: Iterable[Any]) -> None:
        for value in values:
            self._check(value)

    def _position(self, index: int, *, allow_end: bool) -> int:
        size = len(self._items)
        pos = index + size if index < 0 else index
        limit = size if allow_end else size - 1
        if not 0 <= pos <= limit:
            raise IndexError("segment index out of range")
        return pos

    def _prereserve(self, m: int) -> None:
        size = len(self._items)
        if size + m <= self._capacity:
            return
        if m == 1:
            self._capacity = size + 1 if size <= 1 else size + size // 2
        else:
            self._capacity = size + m