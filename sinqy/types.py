from enum import Enum
from typing import (
    TypeVar, Generic, Callable, Iterator, Iterable, Any, Optional, Union,
    Dict, List, Tuple, Set, Type
)

T = TypeVar('T')
U = TypeVar('U')
K = TypeVar('K')
V = TypeVar('V')

Predicate = Callable[..., bool]
Selector = Callable[..., U]
KeySelector = Callable[..., K]
Comparer = Callable[[T, T], int]
EqualityComparerFunc = Callable[[T, T], bool]
Accumulator = Callable[[U, T], U]


class _NoValue:
    """
    marker for "nothing there". distinct from None, which is a perfectly good
    element value. falsy, and always the same instance.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool: return False

    def __repr__(self) -> str: return "NO_VALUE"

    def __reduce__(self): return (_NoValue, ())


NO_VALUE = _NoValue()


class EqualityMode(Enum):
    """how set-like operators decide two items are the same"""
    HASH = 'hash'      # hash + ==, o(n)
    CUSTOM = 'custom'  # pairwise comparer calls, o(n^2)


class EqualityComparer:
    """ready-made equality comparers"""

    @staticmethod
    def default(item1: Any, item2: Any) -> bool:
        return item1 == item2

    @staticmethod
    def exact(item1: Any, item2: Any) -> bool:
        return item1 is item2 or (type(item1) is type(item2) and item1 == item2)


def equality_mode(equality_comparer: Optional[EqualityComparerFunc]) -> EqualityMode:
    """
    no comparer, or EqualityComparer.default (plain ==), selects the hash
    path. any other comparer selects the pairwise one.
    """
    if equality_comparer is None or equality_comparer is EqualityComparer.default:
        return EqualityMode.HASH
    return EqualityMode.CUSTOM


class SequenceStats(Generic[T]):
    """count, min and max collected in a single pass"""

    def __init__(self, count: int, min: Any, max: Any):
        self.count = count
        self.min = min
        self.max = max

    def __eq__(self, other) -> bool:
        if not isinstance(other, SequenceStats): return NotImplemented
        return (self.count, self.min, self.max) == (other.count, other.min, other.max)

    def __repr__(self) -> str:
        return f"SequenceStats(count={self.count}, min={self.min!r}, max={self.max!r})"
