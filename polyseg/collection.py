"""A collection that keeps its elements grouped in one segment per type."""

from __future__ import annotations

from itertools import chain
from typing import Any, Iterable, Iterator

from polyseg.exceptions import UnregisteredType
from polyseg.segment import Segment


class SegmentInfo:
    """A view of one segment of a collection: its type and its elements."""

    __slots__ = ("_segment",)

    def __init__(self, segment: Segment) -> None:
        self._segment = segment

    @property
    def type_info(self) -> type:
        """The concrete type of the elements in the segment."""
        return self._segment.type_

    @property
    def capacity(self) -> int:
        """How many elements the segment holds before it has to grow."""
        return self._segment.capacity

    def __iter__(self) -> Iterator[Any]:
        return iter(self._segment)

    def __len__(self) -> int:
        return len(self._segment)

    def __getitem__(self, index: int | slice) -> Any:
        return self._segment[index]

    def __repr__(self) -> str:
        return f"SegmentInfo({self.type_info.__name__}, {list(self._segment)!r})"


class PolyCollection:
    """Elements of many types, stored in one segment per concrete type.

    Segments are kept in the order their types were registered; iteration
    walks them in that order, skipping empty ones. A type is registered
    explicitly with :meth:`register_types`, or implicitly when an element of
    it is inserted or emplaced, or when room is reserved for it. Operations
    that name a type without creating it raise :class:`UnregisteredType`
    when that type has no segment.
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, iterable: Iterable[Any] = ()) -> None:
        self._segments: dict[type, Segment] = {}
        self.extend(iterable)

    # -- whole collection -----------------------------------------------------

    def __len__(self) -> int:
        return sum(len(segment) for segment in self._segments.values())

    def __iter__(self) -> Iterator[Any]:
        return chain.from_iterable(self._segments.values())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PolyCollection) or not self._same_kind(other):
            return NotImplemented
        total = 0
        for type_, segment in self._segments.items():
            counterpart = other._segments.get(type_)
            if counterpart is None:
                if len(segment):
                    return False
            elif segment != counterpart:
                return False
            total += len(segment)
        return total == len(other)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"

    def copy(self) -> "PolyCollection":
        """Return a collection of the same kind holding copies of every element."""
        cls = type(self)
        clone = cls.__new__(cls)
        clone.__dict__.update(self.__dict__)
        clone._segments = {
            type_: segment.copy() for type_, segment in self._segments.items()
        }
        return clone

    def __copy__(self) -> "PolyCollection":
        return self.copy()

    # -- acceptance and registration ------------------------------------------

    def accepts(self, value: Any) -> bool:
        """Tell whether ``value`` may be stored in this collection."""
        return self._accepts_type(type(value))

    def register_types(self, *args: type) -> None:
        """Create an empty segment for every given type not yet registered."""
        for type_ in args:
            self._register(type_)

    def is_registered(self, type_: type) -> bool:
        """Tell whether ``type_`` has a segment."""
        return type_ in self._segments

    def segment(self, type_: type) -> SegmentInfo:
        """Return a view of the segment for ``type_``."""
        return SegmentInfo(self._segment(type_))

    def segment_traversal(self) -> list[SegmentInfo]:
        """Return views of every segment, empty ones included, in order."""
        return [SegmentInfo(segment) for segment in self._segments.values()]

    # -- capacity --------------------------------------------------------------

    def size(self, type_: type | None = None) -> int:
        """Number of elements overall, or of type ``type_``."""
        if type_ is None:
            return len(self)
        return len(self._segment(type_))

    def empty(self, type_: type | None = None) -> bool:
        """Tell whether there are no elements overall, or of type ``type_``."""
        return self.size(type_) == 0

    def capacity(self, type_: type) -> int:
        """How many elements of ``type_`` fit before its segment grows."""
        return self._segment(type_).capacity

    def reserve(self, n: int, type_: type | None = None) -> None:
        """Make room for ``n`` elements in every segment, or in that of
        ``type_``, which is registered if it was not."""
        if type_ is None:
            for segment in self._segments.values():
                segment.reserve(n)
        else:
            self._register(type_).reserve(n)

    def shrink_to_fit(self, type_: type | None = None) -> None:
        """Drop spare capacity in every segment, or in that of ``type_``."""
        for segment in self._targets(type_):
            segment.shrink_to_fit()

    def clear(self, type_: type | None = None) -> None:
        """Remove every element, or every element of type ``type_``."""
        for segment in self._targets(type_):
            segment.clear()

    # -- insertion -------------------------------------------------------------

    def insert(self, value: Any) -> int:
        """Append ``value`` to the segment of its type; return its index there."""
        self._check_accepts(value)
        return self._register(type(value)).push_back(value)

    def insert_at(self, type_: type, index: int, value: Any) -> int:
        """Insert ``value`` before ``index`` in the segment of ``type_``."""
        return self._segment(type_).insert(index, value)

    def extend(self, iterable: Iterable[Any]) -> None:
        """Append every value of ``iterable`` to the segment of its type."""
        values = list(iterable)
        for value in values:
            self._check_accepts(value)
        for value in values:
            self._register(type(value)).push_back(value)

    def extend_at(self, type_: type, index: int, iterable: Iterable[Any]) -> int:
        """Insert the values of ``iterable`` before ``index`` in the segment
        of ``type_``; return the index of the first one.

        Values that are not of ``type_`` are converted by ``type_(value)``.
        """
        segment = self._segment(type_)
        values = [value if type(value) is type_ else type_(value) for value in iterable]
        return segment.insert_range(index, values)

    def emplace(self, type_: type, *args: Any, **kwargs: Any) -> int:
        """Construct a ``type_`` from the arguments at the end of its segment."""
        return self._register(type_).emplace_back(*args, **kwargs)

    def emplace_at(self, type_: type, index: int, *args: Any, **kwargs: Any) -> int:
        """Construct a ``type_`` from the arguments before ``index``."""
        return self._segment(type_).emplace(index, *args, **kwargs)

    # -- erasure ---------------------------------------------------------------

    def erase(self, type_: type, index: int) -> int:
        """Remove the element at ``index`` of the segment of ``type_``."""
        return self._segment(type_).erase(index)

    def erase_range(self, type_: type, first: int, last: int) -> int:
        """Remove elements ``[first, last)`` of the segment of ``type_``."""
        return self._segment(type_).erase_range(first, last)

    def erase_at(self, index: int) -> int:
        """Remove the element at position ``index`` of the whole collection.

        Returns the position of the element that now follows the erased one.
        """
        size = len(self)
        pos = index + size if index < 0 else index
        if not 0 <= pos < size:
            raise IndexError("collection index out of range")
        for segment in self._segments.values():
            if pos < len(segment):
                segment.erase(pos)
                break
            pos -= len(segment)
        return index + size if index < 0 else index

    def erase_slice(self, start: int, stop: int) -> int:
        """Remove positions ``[start, stop)`` of the whole collection."""
        size = len(self)
        first = start + size if start < 0 else start
        last = stop + size if stop < 0 else stop
        if not (0 <= first <= size and 0 <= last <= size):
            raise IndexError("collection index out of range")
        if first > last:
            raise ValueError("range start lies after its end")
        offset = 0
        for segment in self._segments.values():
            length = len(segment)
            low = max(first, offset) - offset
            high = min(last, offset + length) - offset
            if low < high:
                segment.erase_range(low, high)
            offset += length
        return first

    # -- helpers ---------------------------------------------------------------

    def _accepts_type(self, type_: type) -> bool:
        return True

    def _same_kind(self, other: "PolyCollection") -> bool:
        return type(other) is type(self)

    def _check_accepts(self, value: Any) -> None:
        if not self.accepts(value):
            raise TypeError(
                f"{type(self).__name__} cannot hold {type(value).__name__}"
            )

    def _register(self, type_: type) -> Segment:
        segment = self._segments.get(type_)
        if segment is None:
            if not isinstance(type_, type) or not self._accepts_type(type_):
                name = getattr(type_, "__name__", repr(type_))
                raise TypeError(f"{type(self).__name__} cannot hold {name}")
            segment = self._segments[type_] = Segment(type_)
        return segment

    def _segment(self, type_: type) -> Segment:
        try:
            return self._segments[type_]
        except KeyError:
            raise UnregisteredType(type_) from None

    def _targets(self, type_: type | None) -> Iterable[Segment]:
        if type_ is None:
            return list(self._segments.values())
        return [self._segment(type_)]