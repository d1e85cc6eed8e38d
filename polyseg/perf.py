"""Timing benchmarks: segmented collections against plain lists.

Three scenarios are measured, each for insertion and for traversal:
instances of a class hierarchy, plain callable objects, and values of
unrelated types. Results are printed as ``;``-separated rows, one row per
collection size, one column per container kind, in nanoseconds per element
scaled as the timings have always been reported.
"""

from __future__ import annotations

import copy
import math
import random
import sys
import time
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Sequence

from polyseg.collection import PolyCollection
from polyseg.collections import AnyCollection, BaseCollection, FunctionCollection
from polyseg.restitution import restitute_range

NUM_TRIALS = 10
MIN_TIME_PER_TRIAL = 0.2  # seconds


class Stopwatch:
    """Measures elapsed time, with the possibility of leaving pauses out."""

    def __init__(self, clock: Callable[[], float] | None = None) -> None:
        self._clock = clock if clock is not None else time.perf_counter
        self._start = self._clock()
        self._paused_at: float | None = None

    def restart(self) -> None:
        """Start measuring from now."""
        self._start = self._clock()
        self._paused_at = None

    def elapsed(self) -> float:
        """Seconds since the last restart, paused stretches excluded."""
        return self._clock() - self._start

    def pause(self) -> None:
        """Stop counting time until :meth:`resume` is called."""
        self._paused_at = self._clock()

    def resume(self) -> None:
        """Count time again, leaving out the stretch since :meth:`pause`."""
        if self._paused_at is None:
            raise RuntimeError("stopwatch is not paused")
        self._start += self._clock() - self._paused_at
        self._paused_at = None


def measure(f: Callable[[], Any], stopwatch: Stopwatch | None = None) -> float:
    """Seconds taken by one call of ``f``.

    ``f`` is run repeatedly for at least ``MIN_TIME_PER_TRIAL`` in each of
    ``NUM_TRIALS`` trials; the two fastest and two slowest trials are
    dropped and the rest averaged.
    """
    sw = stopwatch if stopwatch is not None else Stopwatch()
    trials = []
    for _ in range(NUM_TRIALS):
        runs = 0
        sw.restart()
        while True:
            f()
            runs += 1
            elapsed = sw.elapsed()
            if elapsed >= MIN_TIME_PER_TRIAL:
                break
        trials.append(elapsed / runs)
    trials.sort()
    kept = trials[2:-2]
    return sum(kept) / len(kept)


def measure_per_element(
    n: int, f: Callable[[], Any], stopwatch: Stopwatch | None = None
) -> float:
    """Time of one call of ``f`` divided among ``n`` elements, scaled by 10e9."""
    return (measure(f, stopwatch) / n) * 10e9


# -- element types ------------------------------------------------------------


class Base:
    """Root of the class hierarchy used by the first scenario."""

    def __call__(self, x: int) -> int:
        raise NotImplementedError


class Derived1(Base):
    def __init__(self, n: int) -> None:
        self.n = n

    def __call__(self, x: int) -> int:
        return self.n


class Derived2(Base):
    def __init__(self, n: int) -> None:
        self.unused = 0
        self.n = n

    def __call__(self, x: int) -> int:
        return x * self.n


class Derived3(Base):
    def __init__(self, n: int) -> None:
        self.unused = 0
        self.n = n

    def __call__(self, x: int) -> int:
        return x * x * self.n


class Concrete1:
    def __init__(self, n: int) -> None:
        self.n = n

    def __call__(self, x: int) -> int:
        return self.n


class Concrete2:
    def __init__(self, n: int) -> None:
        self.unused = 0
        self.n = n

    def __call__(self, x: int) -> int:
        return x * self.n


class Concrete3:
    def __init__(self, n: int) -> None:
        self.unused = 0
        self.n = n

    def __call__(self, x: int) -> int:
        return x * x * self.n


class Char(int):
    """A small integer kept as a type of its own."""


BASE_ELEMENTS: tuple[Callable[[int], Any], ...] = (
    Derived1, Derived1, Derived2, Derived2, Derived3,
)
FUNCTION_ELEMENTS: tuple[Callable[[int], Any], ...] = (
    Concrete1, Concrete1, Concrete2, Concrete2, Concrete3,
)
ANY_ELEMENTS: tuple[Callable[[int], Any], ...] = (int, int, float, float, Char)


# -- traversal functions -------------------------------------------------------


class ForEachCallable:
    """Calls every element with 2 and adds up the results."""

    def __init__(self) -> None:
        self.res = 0

    def __call__(self, x: Any) -> None:
        self.res += x(2)


class ForEachIncrementable:
    """Increments every element and counts them."""

    def __init__(self) -> None:
        self.res = 0
        self.last: Any = None

    def __call__(self, x: Any) -> None:
        self.last = x + 1
        self.res += 1


# -- containers under test -----------------------------------------------------


class VectorContainer:
    """A plain list of elements in insertion order."""

    def __init__(self) -> None:
        self.items: list[Any] = []

    def insert(self, value: Any) -> None:
        self.items.append(value)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.items)

    def for_each(self, f: Callable[[Any], Any]) -> None:
        for x in self.items:
            f(x)

    def prepare_for_for_each(self) -> None:
        """Nothing to do before traversal."""


def _type_key(value: Any) -> str:
    type_ = type(value)
    return f"{type_.__module__}.{type_.__qualname__}"


class SortedVectorContainer(VectorContainer):
    """A list whose elements are grouped by type before traversal."""

    def prepare_for_for_each(self) -> None:
        self.items.sort(key=_type_key)


class ShuffledVectorContainer(VectorContainer):
    """A list whose elements are shuffled, with a fixed seed, before traversal."""

    def prepare_for_for_each(self) -> None:
        random.Random(1).shuffle(self.items)


class SegmentedContainer:
    """A segmented collection traversed element by element."""

    def __init__(self, factory: Callable[[], PolyCollection]) -> None:
        self.collection = factory()

    def insert(self, value: Any) -> None:
        self.collection.insert(value)

    def __len__(self) -> int:
        return len(self.collection)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.collection)

    def for_each(self, f: Callable[[Any], Any]) -> None:
        for x in self.collection:
            f(x)

    def prepare_for_for_each(self) -> None:
        """Nothing to do before traversal."""


def _apply_to_range(elements: Any, f: Callable[[Any], Any]) -> None:
    for x in elements:
        f(x)


class PolyForEachContainer(SegmentedContainer):
    """A segmented collection traversed segment by segment.

    Segments whose type is among ``types`` are visited through a view that
    knows their concrete type.
    """

    def __init__(
        self, factory: Callable[[], PolyCollection], types: Sequence[type] = ()
    ) -> None:
        super().__init__(factory)
        self.types = tuple(types)

    def for_each(self, f: Callable[[Any], Any]) -> None:
        visit = restitute_range(self.types, _apply_to_range, f)
        for segment in self.collection.segment_traversal():
            visit(segment)


@dataclass(frozen=True)
class ContainerKind:
    """A container to benchmark: a column label and a way to make one."""

    label: str
    factory: Callable[[], Any]


def _base_collection() -> BaseCollection:
    return BaseCollection(Base)


BASE_CONTAINERS = {
    "pv": ContainerKind("ptr_vector", VectorContainer),
    "spv": ContainerKind("sorted ptr_vector", SortedVectorContainer),
    "shpv": ContainerKind("shuffled ptr_vector", ShuffledVectorContainer),
    "bc": ContainerKind(
        "base_collection", lambda: SegmentedContainer(_base_collection)
    ),
    "fbc": ContainerKind(
        "base_collection (poly::for_each)",
        lambda: PolyForEachContainer(_base_collection),
    ),
    "rfbc": ContainerKind(
        "base_collection (restituted poly::for_each)",
        lambda: PolyForEachContainer(
            _base_collection, (Derived1, Derived2, Derived2)
        ),
    ),
}

FUNCTION_CONTAINERS = {
    "fv": ContainerKind("func_vector", VectorContainer),
    "sfv": ContainerKind("sorted func_vector", SortedVectorContainer),
    "shfv": ContainerKind("shuffled func_vector", ShuffledVectorContainer),
    "fc": ContainerKind(
        "function_collection", lambda: SegmentedContainer(FunctionCollection)
    ),
    "ffc": ContainerKind(
        "function_collection (poly::for_each)",
        lambda: PolyForEachContainer(FunctionCollection),
    ),
    "rffc": ContainerKind(
        "function_collection (restituted poly::for_each)",
        lambda: PolyForEachContainer(
            FunctionCollection, (Concrete1, Concrete2, Concrete3)
        ),
    ),
}

ANY_CONTAINERS = {
    "av": ContainerKind("any_vector", VectorContainer),
    "sav": ContainerKind("sorted any_vector", SortedVectorContainer),
    "shav": ContainerKind("shuffled any_vector", ShuffledVectorContainer),
    "ac": ContainerKind("any_collection", lambda: SegmentedContainer(AnyCollection)),
    "fac": ContainerKind(
        "any_collection (poly::for_each)",
        lambda: PolyForEachContainer(AnyCollection),
    ),
    "rfac": ContainerKind(
        "any_collection (restituted poly::for_each)",
        lambda: PolyForEachContainer(AnyCollection, (int, float, Char)),
    ),
}


# -- benchmark drivers ---------------------------------------------------------


def container_fill(
    n: int, elements: Sequence[Callable[[int], Any]], container: Any
) -> None:
    """Insert ``n // len(elements)`` rounds of one element made by each factory."""
    for i in range(n // len(elements)):
        for make in elements:
            container.insert(make(i))


def _round_half_up(x: float) -> int:
    return math.floor(x + 0.5)


def sizes(n0: int, n1: int, dsav: int, group: int) -> Iterator[int]:
    """Collection sizes from ``n0`` to ``n1`` in steps of ``dsav`` savarts.

    Each size is brought down to a multiple of ``group``.
    """
    if dsav <= 0:
        raise ValueError("step must be positive")
    if group <= 0:
        raise ValueError("group must be positive")
    s = 0
    while True:
        n = _round_half_up(n0 * 10.0 ** (s / 1000.0))
        if n > n1:
            return
        yield (n // group) * group
        s += dsav


def _print_row(*fields: Any) -> None:
    print(";".join(f"{f:g}" if isinstance(f, float) else str(f) for f in fields))


def run_insert_perf(
    n0: int,
    n1: int,
    dsav: int,
    elements: Sequence[Callable[[int], Any]],
    containers: Sequence[ContainerKind],
) -> list[tuple[int, list[float]]]:
    """Time filling each kind of container; print and return the rows."""
    print("insert:")
    _print_row("n", *(kind.label for kind in containers))
    stopwatch = Stopwatch()
    rows = []
    for nn in sizes(n0, n1, dsav, len(elements)):

        def fill(kind: ContainerKind, nn: int = nn) -> int:
            stopwatch.pause()
            container = kind.factory()
            stopwatch.resume()
            container_fill(nn, elements, container)
            stopwatch.pause()
            size = len(container)
            stopwatch.resume()
            return size

        times = [
            measure_per_element(nn, lambda kind=kind: fill(kind), stopwatch)
            for kind in containers
        ]
        _print_row(nn, *times)
        rows.append((nn, times))
    return rows


def run_for_each_perf(
    n0: int,
    n1: int,
    dsav: int,
    elements: Sequence[Callable[[int], Any]],
    f: Any,
    containers: Sequence[ContainerKind],
) -> list[tuple[int, list[float]]]:
    """Time traversing each kind of container with a fresh copy of ``f``;
    print and return the rows."""
    print("for_each:")
    _print_row("n", *(kind.label for kind in containers))
    stopwatch = Stopwatch()
    rows = []
    for nn in sizes(n0, n1, dsav, len(elements)):
        times = []
        for kind in containers:
            container = kind.factory()
            container_fill(nn, elements, container)
            container.prepare_for_for_each()

            def traverse(container: Any = container) -> Any:
                visitor = copy.copy(f)
                container.for_each(visitor)
                return visitor.res

            times.append(measure_per_element(nn, traverse, stopwatch))
        _print_row(nn, *times)
        rows.append((nn, times))
    return rows


TEST_NAMES = (
    "all",
    "insert_base",
    "for_each_base",
    "insert_function",
    "for_each_function",
    "insert_any",
    "for_each_any",
)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the benchmarks named on the command line."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print("specify one or more tests to execute:")
        for name in TEST_NAMES:
            print(f"  {name}")
        return 1
    selected = set()
    for arg in args:
        if arg not in TEST_NAMES:
            print("invalid test name")
            return 1
        selected.add(arg)

    def wanted(name: str) -> bool:
        return "all" in selected or name in selected

    n0, n1, dsav = 100, 10_000_000, 50  # dsav in savarts

    base = BASE_CONTAINERS
    if wanted("insert_base"):
        run_insert_perf(n0, n1, dsav, BASE_ELEMENTS, [base["pv"], base["bc"]])
    if wanted("for_each_base"):
        run_for_each_perf(
            n0, n1, dsav, BASE_ELEMENTS, ForEachCallable(), list(base.values())
        )

    funcs = FUNCTION_CONTAINERS
    if wanted("insert_function"):
        run_insert_perf(n0, n1, dsav, FUNCTION_ELEMENTS, [funcs["fv"], funcs["fc"]])
    if wanted("for_each_function"):
        run_for_each_perf(
            n0, n1, dsav, FUNCTION_ELEMENTS, ForEachCallable(), list(funcs.values())
        )

    anys = ANY_CONTAINERS
    if wanted("insert_any"):
        run_insert_perf(n0, n1, dsav, ANY_ELEMENTS, [anys["av"], anys["ac"]])
    if wanted("for_each_any"):
        run_for_each_perf(
            n0, n1, dsav, ANY_ELEMENTS, ForEachIncrementable(), list(anys.values())
        )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())