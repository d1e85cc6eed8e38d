"""Small functional helpers: argument binding, result casting, invocability."""

from __future__ import annotations

import functools
import types
from typing import Any, Callable, Optional, Tuple

_CO_VARARGS = 0x04


def tail_closure(f: Callable[..., Any], *args: Any) -> Callable[..., Any]:
    """Return a callable that appends ``args`` after the arguments it gets."""

    def closure(*head: Any) -> Any:
        return f(*head, *args)

    return closure


def head_closure(f: Callable[..., Any], *args: Any) -> Callable[..., Any]:
    """Return a callable that puts ``args`` before the arguments it gets."""

    def closure(*tail: Any) -> Any:
        return f(*args, *tail)

    return closure


def cast_return(return_type: Callable[[Any], Any], f: Callable[..., Any]) -> Callable[..., Any]:
    """Return a callable that converts the result of ``f`` with ``return_type``."""

    def closure(*args: Any, **kwargs: Any) -> Any:
        return return_type(f(*args, **kwargs))

    return closure


def transparent_equal_to(x: Any, y: Any) -> bool:
    """Compare two values of possibly different types with ``==``."""
    return x == y


def _python_function(f: Any) -> Optional[Tuple[types.FunctionType, int]]:
    """Find the Python function behind ``f`` and how many arguments it pre-binds."""
    if isinstance(f, types.FunctionType):
        wrapped = getattr(f, "__wrapped__", None)
        if wrapped is not None and callable(wrapped):
            inner = _python_function(wrapped)
            if inner is not None:
                return inner
        return f, 0
    if isinstance(f, types.MethodType):
        inner = _python_function(f.__func__)
        if inner is None:
            return None
        return inner[0], inner[1] + 1
    if isinstance(f, type):
        init = getattr(f, "__init__", None)
        if isinstance(init, types.FunctionType):
            return init, 1
        new = getattr(f, "__new__", None)
        if isinstance(new, types.FunctionType):
            return new, 1
        return None
    call = getattr(type(f), "__call__", None)
    if isinstance(call, types.FunctionType):
        return call, 1
    return None


def _accepts_positional(func: types.FunctionType, count: int) -> bool:
    code = func.__code__
    defaults = func.__defaults__ or ()
    if count < code.co_argcount - len(defaults):
        return False
    if count > code.co_argcount and not code.co_flags & _CO_VARARGS:
        return False
    start = code.co_argcount
    kwonly = code.co_varnames[start:start + code.co_kwonlyargcount]
    kwdefaults = func.__kwdefaults__ or {}
    return all(name in kwdefaults for name in kwonly)


def is_invocable(f: Any, *args: Any) -> bool:
    """Tell whether ``f`` can be called with the given positional arguments."""
    if not callable(f):
        return False
    if isinstance(f, functools.partial):
        if f.keywords:
            # Keyword arguments may fill any parameter; assume the call works.
            return True
        return is_invocable(f.func, *f.args, *args)
    target = _python_function(f)
    if target is None:
        # Builtins and extension callables: being callable is all we know.
        return True
    func, bound = target
    return _accepts_positional(func, bound + len(args))