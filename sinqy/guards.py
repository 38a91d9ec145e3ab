import inspect
import numbers
from collections.abc import Iterable as AbcIterable
from typing import Any, Callable, Optional

from .errors import InvalidArgumentError


def ensure_function(func: Any, name: str = "argument") -> None:
    """fail fast when a selector/predicate/comparer is not callable"""
    if not callable(func):
        raise InvalidArgumentError(f"{name} needs to be a function, got {type(func).__name__}")


def ensure_iterable(source: Any, name: str = "argument") -> None:
    """accept anything iterable, or a zero-argument factory of iterators"""
    if isinstance(source, AbcIterable) or callable(source):
        return
    raise InvalidArgumentError(f"{name} must be iterable, got {type(source).__name__}")


def _required_positional(func: Callable) -> Optional[int]:
    try:
        parameters = inspect.signature(func).parameters.values()
    except (TypeError, ValueError):
        # builtins without an introspectable signature
        return None
    return sum(1 for p in parameters
               if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD) and p.default is p.empty)


def with_index(func: Callable, arity: int = 1) -> Callable[..., Any]:
    """
    normalizes a callback to take its usual `arity` arguments plus a trailing
    index. callbacks that declare more required positional parameters than
    `arity` receive the index, everything else just the usual arguments.
    """
    required = _required_positional(func)
    if required is not None and required > arity:
        return func
    if arity == 1:
        return lambda item, index: func(item)
    return lambda *args: func(*args[:arity])


def ensure_count(count: Any, name: str = "count") -> int:
    """counts must be real ints. negatives clamp to zero."""
    if isinstance(count, bool) or not isinstance(count, numbers.Integral):
        raise InvalidArgumentError(f"{name} needs to be an integer, got {type(count).__name__}")
    return max(0, int(count))
