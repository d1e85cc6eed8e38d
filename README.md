# polyseg

`polyseg` provides polymorphic collections. Elements are kept in one
segment per concrete type rather than in one flat list of mixed objects.
Elements of the same type sit next to each other. Iteration walks the
segments in the order their types were registered, and each segment can
be read, resized or cleared on its own.

The package has no dependencies beyond the standard library.

## Installation

```
pip install polyseg
```

To run the test suite:

```
pip install "polyseg[test]"
pytest
```

## Collections

`polyseg.collection.PolyCollection` holds the common machinery. There are
three restricted kinds in `polyseg.collections`:

- `BaseCollection(base, iterable=())` accepts instances of `base` and of
  its subclasses.
- `AnyCollection(iterable=())` accepts values of any type.
- `FunctionCollection(iterable=())` accepts values whose class defines
  `__call__`. `call_all(*args, **kwargs)` calls every element in iteration
  order and returns the results as a list.

Inserting a value that a collection does not accept raises `TypeError`.

```python
from polyseg.collections import BaseCollection
from polyseg.exceptions import UnregisteredType


class Shape:
    def area(self):
        raise NotImplementedError


class Square(Shape):
    def __init__(self, side):
        self.side = side

    def area(self):
        return self.side * self.side


class Circle(Shape):
    def __init__(self, r):
        self.r = r

    def area(self):
        return 3.14159 * self.r * self.r


shapes = BaseCollection(Shape)
shapes.insert(Square(2))
shapes.insert(Circle(1))
shapes.insert(Square(3))

print(len(shapes))             # 3
print(shapes.size(Square))     # 2

# Both squares come first, since their segment was created first.
for shape in shapes:
    print(shape.area())        # 4, 9, 3.14159

for seg in shapes.segment_traversal():
    print(seg.type_info.__name__, len(seg))
```

A type gets a segment when one of its elements is inserted or emplaced,
when room is reserved for it with `reserve(n, type_)`, or when it is
registered with `register_types`. Any other operation that names a type
without a segment raises `UnregisteredType`:

```python
class Triangle(Shape):
    pass

try:
    shapes.size(Triangle)
except UnregisteredType:
    shapes.register_types(Triangle)

print(shapes.is_registered(Triangle))   # True
print(shapes.empty(Triangle))           # True
```

Two collections compare equal when they are of the same kind (and, for
`BaseCollection`, have the same base) and hold equal elements of each type,
segment by segment. Empty segments do not count. `copy()` returns a
collection of the same kind with a copy of every element.

## Positions and per-segment operations

Positions are plain indices; negative indices count from the end.

- `insert(value)` appends to the segment of the value's type and returns
  its index there. `extend(iterable)` appends many values.
- `insert_at(type_, index, value)`, `extend_at(type_, index, iterable)`
  and `emplace_at(type_, index, *args, **kwargs)` insert at a position in
  the segment of `type_`. `extend_at` converts values of another type with
  `type_(value)`.
- `emplace(type_, *args, **kwargs)` builds a `type_` from the arguments
  and appends it.
- `erase(type_, index)` and `erase_range(type_, first, last)` remove
  elements from one segment.
- `erase_at(index)` and `erase_slice(start, stop)` remove elements by
  their position in whole-collection iteration order.
- `size`, `empty`, `shrink_to_fit` and `clear` act on the whole collection,
  or on one segment when given a type. `capacity(type_)` reports a
  segment's capacity.
- `segment(type_)` returns a `SegmentInfo` view with `type_info`,
  `capacity`, `len()`, iteration and indexing.

The storage itself is `polyseg.segment.Segment`, which holds elements of
exactly one type and can be used on its own.

## Helpers

- `polyseg.functional`: `tail_closure`, `head_closure`, `cast_return`,
  `transparent_equal_to` and `is_invocable`, which inspects a callable's
  signature to tell whether it accepts a given number of positional
  arguments.
- `polyseg.restitution`: `restitute_range`, `restitute_iterator` and
  `binary_restitute_iterator` wrap a function so that, for segments or
  iterators whose type is among a given list, it receives a view that
  carries the concrete type in `type_`.

## Errors

All errors specific to collections derive from
`polyseg.exceptions.PolyCollectionError` and carry the offending type in
`type_`:

- `UnregisteredType`: the type has no segment in the collection.
- `NotCopyConstructible`: an element had to be copied and could not be.
- `NotEqualityComparable`: two non-empty segments of a type that defines
  no `__eq__` had to be compared.

## Benchmark

`polyseg.perf` times insertion into, and traversal of, segmented
collections against plain, sorted and shuffled lists, for a class
hierarchy, for callable objects and for values of unrelated types:

```
polyseg-perf insert_base for_each_base
```

The test names are `all`, `insert_base`, `for_each_base`,
`insert_function`, `for_each_function`, `insert_any` and `for_each_any`.
Without a name the command lists them and exits with status 1; an unknown
name also exits with status 1. Sizes run from 100 to 10,000,000 elements
in steps of 50 savarts. Each row is the element count followed by one
timing per container, separated by semicolons; a timing is the average
seconds per call divided by the element count and multiplied by 10e9.

## Limitations

- Capacity is bookkeeping only: `reserve` and `shrink_to_fit` change the
  reported capacity, not how Python stores the elements.
- Collections are not thread-safe and have no persistence.