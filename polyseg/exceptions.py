"""Errors raised by polymorphic collections."""

from __future__ import annotations


class PolyCollectionError(Exception):
    """Base class of every error raised for a misuse of a collection."""

    message = "polymorphic collection error"

    def __init__(self, type_: type | None = None) -> None:
        super().__init__(self.message)
        self.type_ = type_


class UnregisteredType(PolyCollectionError):
    """An operation named a type that has no segment in the collection."""

    message = "type not registered"


class NotCopyConstructible(PolyCollectionError):
    """An element had to be copied but its type does not allow copies."""

    message = "type is not copy constructible"


class NotEqualityComparable(PolyCollectionError):
    """Two elements had to be compared but their type has no equality."""

    message = "type does not support equality comparison"