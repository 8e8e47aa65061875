from __future__ import annotations
from functools import wraps
from typing import Any, Callable, TypeVar

from toolz import pipe as _pipe

A = TypeVar("A")
B = TypeVar("B")

def pipe(x: A, *fns: Callable[[Any], Any]) -> Any:
    return _pipe(x, *fns) if fns else x

def try_or(default: B) -> Callable[[Callable[[A], B]], Callable[[A], B]]:
    """Decorator: return `default` when the wrapped single-arg parser raises."""
    def _wrap(fn: Callable[[A], B]) -> Callable[[A], B]:
        @wraps(fn)
        def _inner(x: A) -> B:
            try:
                return fn(x)
            except (TypeError, ValueError, OverflowError):
                return default
        return _inner
    return _wrap
