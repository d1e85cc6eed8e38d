"""Type restitution: dispatch on a segment's runtime type to a typed view.

A segment is any iterable that carries its element type in a ``type_info``
attribute. When that type is one of the listed types, the callable receives
a view that knows the concrete type (``view.type_``); otherwise it receives
the plain, type-erased object it was given.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Iterator, Sequence

from polyseg.functional import tail_closure


class _LocalRange:
    """A segment range whose element type is known."""

    __slots__ = ("type_", "base")

    def __init__(self, type_: type, base: Iterable[Any]) -> None:
        self.type_ = type_
        self.base = base

    def __iter__(self) -> Iterator[Any]:
        return iter(self.base)

    def __len__(self) -> int:
        return len(self.base)  # type: ignore[arg-type]

    def __repr__(self) -> str:
        return f"_LocalRange({self.type_.__name__})"


class _LocalIterator:
    """An iterator over elements whose type is known."""

    __slots__ = ("type_", "base")

    def __init__(self, type_: type, base: Any) -> None:
        self.type_ = type_
        self.base = base

    def __iter__(self) -> "_LocalIterator":
        return self

    def __next__(self) -> Any:
        return next(self.base)

    def __repr__(self) -> str:
        return f"_LocalIterator({self.type_.__name__})"


def _match(types: Sequence[type], info: type) -> type | None:
    for candidate in types:
        if info is candidate:
            return candidate
    return None


def _restitute(types: Sequence[type], info: type, it: Any) -> Any:
    found = _match(types, info)
    return it if found is None else _LocalIterator(found, it)


def restitute_range(
    types: Sequence[type], f: Callable[..., Any], *args: Any
) -> Callable[[Any], Any]:
    """Return ``g`` so that ``g(segment)`` calls ``f(range, *args)``.

    ``range`` is a typed view of the segment when its ``type_info`` is one of
    ``types``, and the segment itself otherwise.
    """
    types = tuple(types)
    call = tail_closure(f, *args)

    def dispatch(segment: Any) -> Any:
        found = _match(types, segment.type_info)
        if found is None:
            return call(segment)
        return call(_LocalRange(found, segment))

    return dispatch


def restitute_iterator(
    types: Sequence[type], f: Callable[..., Any], *args: Any
) -> Callable[..., Any]:
    """Return ``g`` so that ``g(info, it, *more)`` calls ``f(it', *more, *args)``.

    ``it'`` is a typed iterator over ``it`` when ``info`` is one of ``types``.
    """
    types = tuple(types)
    call = tail_closure(f, *args)

    def dispatch(info: type, it: Any, *more: Any) -> Any:
        return call(_restitute(types, info, it), *more)

    return dispatch


def binary_restitute_iterator(
    types: Sequence[type], f: Callable[..., Any], *args: Any
) -> Callable[[type, Any, type, Any], Any]:
    """Return ``g`` so that ``g(info1, it1, info2, it2)`` calls
    ``f(it1', it2', *args)`` with each iterator restituted on its own type.
    """
    types = tuple(types)
    call = tail_closure(f, *args)

    def dispatch(info1: type, it1: Any, info2: type, it2: Any) -> Any:
        return call(_restitute(types, info1, it1), _restitute(types, info2, it2))

    return dispatch