import pytest

from polyseg.exceptions import NotCopyConstructible, NotEqualityComparable
from polyseg.segment import Segment


class Comparable:
    def __init__(self, n=-1):
        self.n = n

    def __eq__(self, other):
        return isinstance(other, Comparable) and self.n == other.n


class Plain:
    def __init__(self, n=0):
        self.n = n


class NoCopy:
    def __init__(self, n):
        self.n = n

    def __eq__(self, other):
        return isinstance(other, NoCopy) and self.n == other.n

    def __copy__(self):
        raise TypeError("not copyable")


def make(n, type_=int):
    return Segment(type_, [type_(i) for i in range(n)])


def test_construction_and_iteration():
    seg = Segment(int, [3, 1, 2])
    assert len(seg) == 3
    assert list(seg) == [3, 1, 2]
    assert seg[0] == 3
    assert seg[-1] == 2
    assert seg[1:] == [1, 2]
    assert seg.type_info is int


def test_construction_rejects_wrong_type():
    with pytest.raises(TypeError):
        Segment(int, [1, "two"])


def test_fresh_segment_has_room_for_one():
    seg = Segment(int)
    assert len(seg) == 0
    assert seg.capacity == 1


def test_getitem_out_of_range():
    seg = make(2)
    assert seg[1] == 1
    with pytest.raises(IndexError):
        _ = seg[2]
    assert list(seg) == [0, 1]


def test_push_back_returns_last_index():
    seg = Segment(int)
    for i in range(10):
        assert seg.push_back(i) == i
        assert seg[i] == i
        assert seg.capacity >= len(seg)
    assert list(seg) == list(range(10))


def test_push_back_rejects_wrong_type():
    seg = Segment(int)
    with pytest.raises(TypeError):
        seg.push_back(True)
    assert len(seg) == 0


def test_emplace_back_constructs_type():
    seg = Segment(Comparable)
    idx = seg.emplace_back(4)
    assert idx == 0
    assert seg[0] == Comparable(4)
    seg.emplace_back()
    assert seg[1] == Comparable(-1)


def test_insert_positions():
    seg = Segment(int, [1, 3])
    assert seg.insert(1, 2) == 1
    assert seg.insert(0, 0) == 0
    assert seg.insert(len(seg), 4) == len(seg) - 1
    assert list(seg) == [0, 1, 2, 3, 4]


def test_insert_out_of_range():
    seg = make(2)
    with pytest.raises(IndexError):
        seg.insert(3, 7)


def test_insert_range():
    seg = Segment(int, [0, 9])
    values = [1, 2, 3]
    assert seg.insert_range(1, values) == 1
    assert list(seg) == [0, 1, 2, 3, 9]
    assert seg.capacity >= len(seg)


def test_insert_range_empty_and_atomic():
    seg = Segment(int, [5])
    assert seg.insert_range(0, []) == 0
    with pytest.raises(TypeError):
        seg.insert_range(0, [1, "x"])
    assert list(seg) == [5]


def test_emplace_at_positions():
    seg = Segment(Comparable)
    seg.emplace(0, 4)
    assert seg.emplace(0, 3) == 0
    assert seg.emplace(len(seg), 5) == 2
    assert seg.emplace(1, 2) == 1
    assert [c.n for c in seg] == [3, 2, 4, 5]


def test_erase_each_position():
    base = make(5)
    for i in range(len(base)):
        seg = base.copy()
        assert seg.erase(i) == i
        assert len(seg) == len(base) - 1
        assert i not in list(seg)


def test_erase_out_of_range():
    seg = make(3)
    with pytest.raises(IndexError):
        seg.erase(3)


def test_erase_every_range():
    base = make(5)
    for i in range(len(base) + 1):
        for j in range(i, len(base) + 1):
            seg = base.copy()
            assert seg.erase_range(i, j) == i
            assert len(seg) == len(base) - (j - i)
            assert list(seg) == list(base)[:i] + list(base)[j:]


def test_erase_range_reversed():
    seg = make(4)
    with pytest.raises(ValueError):
        seg.erase_range(3, 1)


def test_erase_till_end_and_from_begin():
    seg = make(6)
    assert seg.erase_till_end(4) == 4
    assert list(seg) == [0, 1, 2, 3]
    assert seg.erase_from_begin(2) == 0
    assert list(seg) == [2, 3]


def test_clear_keeps_capacity():
    seg = make(8)
    cap = seg.capacity
    seg.clear()
    assert len(seg) == 0
    assert seg.capacity == cap


def test_reserve_and_shrink():
    seg = make(3)
    seg.reserve(50)
    assert seg.capacity == 50
    seg.reserve(10)
    assert seg.capacity == 50
    seg.shrink_to_fit()
    assert seg.capacity == len(seg)
    seg.clear()
    seg.shrink_to_fit()
    assert seg.capacity == 1


def test_reserve_negative():
    with pytest.raises(ValueError):
        Segment(int).reserve(-1)


def test_equality():
    assert make(3) == make(3)
    assert make(3) != make(2)
    assert Segment(int) == Segment(int)
    assert Segment(int) != Segment(float)
    assert Segment(int, [1]) != Segment(int, [2])


def test_equality_not_comparable():
    a = Segment(Plain, [Plain(1), Plain(2)])
    b = Segment(Plain, [Plain(1), Plain(2)])
    with pytest.raises(NotEqualityComparable) as info:
        _ = a == b
    assert info.value.type_ is Plain
    # Sizes differ: no element comparison is needed.
    assert a != Segment(Plain, [Plain(1)])
    assert Segment(Plain) == Segment(Plain)


def test_copy_is_independent():
    seg = Segment(Comparable, [Comparable(1), Comparable(2)])
    dup = seg.copy()
    assert dup == seg
    assert dup[0] is not seg[0]
    dup.push_back(Comparable(3))
    assert len(seg) == 2
    assert dup != seg


def test_copy_not_copy_constructible():
    seg = Segment(NoCopy, [NoCopy(1)])
    with pytest.raises(NotCopyConstructible) as info:
        seg.copy()
    assert info.value.type_ is NoCopy


def test_empty_copy():
    seg = make(4)
    empty = seg.empty_copy()
    assert len(empty) == 0
    assert empty.type_ is int
    assert len(seg) == 4


def test_not_hashable():
    with pytest.raises(TypeError):
        hash(Segment(int))