"""Collections restricted to one family of element types."""

from __future__ import annotations

from typing import Any, Iterable

from polyseg.collection import PolyCollection


def _defines_call(type_: type) -> bool:
    return any("__call__" in vars(klass) for klass in type_.__mro__)


class BaseCollection(PolyCollection):
    """Holds instances of ``base`` and of its subclasses."""

    def __init__(self, base: type, iterable: Iterable[Any] = ()) -> None:
        if not isinstance(base, type):
            raise TypeError("base must be a class")
        self.base = base
        super().__init__(iterable)

    def accepts(self, value: Any) -> bool:
        """Tell whether ``value`` is an instance of the base class."""
        return self._accepts_type(type(value))

    def _accepts_type(self, type_: type) -> bool:
        return issubclass(type_, self.base)

    def _same_kind(self, other: PolyCollection) -> bool:
        return super()._same_kind(other) and getattr(other, "base", None) is self.base


class AnyCollection(PolyCollection):
    """Holds values of any type, grouped by type."""

    def __init__(self, iterable: Iterable[Any] = ()) -> None:
        super().__init__(iterable)

    def accepts(self, value: Any) -> bool:
        """Every value is accepted."""
        return True


class FunctionCollection(PolyCollection):
    """Holds callable objects, grouped by their type."""

    def __init__(self, iterable: Iterable[Any] = ()) -> None:
        super().__init__(iterable)

    def accepts(self, value: Any) -> bool:
        """Tell whether ``value`` can be called."""
        return self._accepts_type(type(value))

    def _accepts_type(self, type_: type) -> bool:
        return _defines_call(type_)

    def call_all(self, *args: Any, **kwargs: Any) -> list[Any]:
        """Call every element with the arguments; return the results in order."""
        return [function(*args, **kwargs) for function in self]