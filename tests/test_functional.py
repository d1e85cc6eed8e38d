import pytest

from polyseg.functional import (
    cast_return,
    head_closure,
    is_invocable,
    tail_closure,
    transparent_equal_to,
)


def collect(*args):
    return args


def test_tail_closure_appends_bound_arguments():
    g = tail_closure(collect, "x", "y")
    assert g("a", "b") == ("a", "b", "x", "y")


def test_head_closure_prepends_bound_arguments():
    g = head_closure(collect, "x", "y")
    assert g("a", "b") == ("x", "y", "a", "b")


def test_closures_without_bound_arguments_forward_unchanged():
    assert tail_closure(collect)("a") == ("a",)
    assert head_closure(collect)("a") == ("a",)


def test_tail_closure_is_reusable():
    g = tail_closure(collect, 9)
    assert g(1) == (1, 9)
    assert g(2) == (2, 9)


def test_cast_return_converts_result():
    g = cast_return(str, lambda n: n)
    assert g(42) == "42"


def test_cast_return_forwards_keywords():
    g = cast_return(tuple, lambda *, items: items)
    assert g(items=[1, 2]) == (1, 2)


@pytest.mark.parametrize(
    "x, y, expected",
    [(1, 1, True), (1, 1.0, True), ("a", "b", False), (None, 0, False)],
)
def test_transparent_equal_to(x, y, expected):
    assert transparent_equal_to(x, y) is expected


def test_is_invocable_matches_arity():
    def one(a):
        return a

    assert is_invocable(one, 1) is True
    assert is_invocable(one) is False
    assert is_invocable(one, 1, 2) is False


def test_is_invocable_with_varargs():
    assert is_invocable(collect) is True
    assert is_invocable(collect, 1, 2, 3) is True


def test_is_invocable_rejects_non_callables():
    assert is_invocable(5) is False
    assert is_invocable("text", 1) is False


def test_is_invocable_with_callable_object():
    class Adder:
        def __call__(self, x, y):
            return x + y

    assert is_invocable(Adder(), 1, 2) is True
    assert is_invocable(Adder(), 1) is False