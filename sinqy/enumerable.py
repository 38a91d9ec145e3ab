from __future__ import annotations

import logging
from abc import ABC
from bisect import bisect_left, bisect_right
from collections.abc import Iterable as AbcIterable, Mapping, Sequence as AbcSequence, Sized
from enum import Enum
from functools import total_ordering
from itertools import islice

import numpy as np

from .types import *
from .errors import (
    IndexOutOfRangeError, EmptySequenceError, MultipleElementsError,
    UnsupportedOperationError, InvalidArgumentError
)
from .guards import ensure_function, ensure_count
from .sorting import partial_quicksort

# --- core functionality ---
from .extensions.core import _CoreOperations

# --- accessors ---
from .extensions.set import SetAccessor
from .extensions.join import JoinAccessor
from .extensions.grouping import GroupingAccessor
from .extensions.stats import StatsAccessor
from .extensions.utility import UtilityAccessor
from .extensions.terminal import TerminalAccessor
from .extensions.zip import ZipAccessor

logger = logging.getLogger(__name__)


# --- source classification ---

class SourceKind(Enum):
    """the closed set of source shapes an enumerable can wrap"""
    INDEXABLE = 'indexable'    # str, list, tuple, range, ndarray: len + true random access
    MAPPING = 'mapping'        # iterates (key, value) pairs, len but no random access
    SIZED = 'sized'            # set, frozenset, deque, views: len but no random access
    ENUMERABLE = 'enumerable'  # another enumerable, capabilities are inherited
    FACTORY = 'factory'        # zero-arg callable returning a fresh iterator per call
    ITERABLE = 'iterable'      # anything else, e.g. generator objects (single use)


def _classify_source(source: Any) -> SourceKind:
    if isinstance(source, _BaseEnumerable):
        return SourceKind.ENUMERABLE
    if isinstance(source, (str, bytes, AbcSequence)):
        return SourceKind.INDEXABLE
    if isinstance(source, np.ndarray) and source.ndim > 0:
        return SourceKind.INDEXABLE
    if isinstance(source, Mapping):
        return SourceKind.MAPPING
    if isinstance(source, AbcIterable):
        return SourceKind.SIZED if isinstance(source, Sized) else SourceKind.ITERABLE
    if callable(source):
        return SourceKind.FACTORY
    raise InvalidArgumentError(f"the source must be iterable, got {type(source).__name__}")


def _cursor_factory_for(source: Any, kind: SourceKind) -> Callable[[], Iterator]:
    if kind is SourceKind.MAPPING:
        return lambda: iter(source.items())
    if kind is SourceKind.FACTORY:
        return lambda: iter(source())
    if kind is SourceKind.ENUMERABLE:
        return source.__iter__
    return lambda: iter(source)


# --- base enumerable implementation ---

class _BaseEnumerable(ABC, Generic[T]):
    def __init__(self, source: Any):
        """wraps a source without touching it. iteration state lives only in the cursors."""
        self._kind = _classify_source(source)
        self._source = source
        self._cursor_factory = _cursor_factory_for(source, self._kind)
        self._count_fn: Optional[Callable[[], int]] = None
        self._try_get_at: Optional[Callable[[int], Any]] = None
        self._can_seek = False
        self._was_iterated = False

    @classmethod
    def _derived(cls, cursor_factory: Callable[[], Iterator[T]],
                 count_fn: Optional[Callable[[], int]] = None,
                 try_get_at: Optional[Callable[[int], Any]] = None,
                 can_seek: bool = False) -> 'Enumerable[T]':
        """builds an operator result with whatever capabilities the operator can vouch for"""
        result = cls(cursor_factory)
        result._count_fn = count_fn
        if try_get_at is not None:
            result._set_accessor(try_get_at, can_seek)
        return result

    def __iter__(self) -> Iterator[T]:
        self._was_iterated = True
        return self._cursor_factory()

    @property
    def source_kind(self) -> SourceKind:
        return self._kind

    @property
    def was_iterated(self) -> bool:
        return self._was_iterated

    @property
    def can_seek(self) -> bool:
        self._ensure_try_get_at()
        return self._can_seek

    # --- capability inference ---

    def _set_accessor(self, try_get_at: Callable[[int], Any], can_seek: bool) -> None:
        # positional access and its seekability are only ever assigned together
        self._try_get_at = try_get_at
        self._can_seek = can_seek

    def _ensure_count(self) -> None:
        if self._count_fn is not None:
            return
        kind = self._kind
        if kind in (SourceKind.INDEXABLE, SourceKind.MAPPING, SourceKind.SIZED):
            source = self._source
            self._count_fn = lambda: len(source)
        elif kind is SourceKind.ENUMERABLE:
            self._count_fn = self._source.count
        else:
            logger.debug("no cheap count for a %s source, counting by iteration", kind.value)
            self._count_fn = lambda: sum(1 for _ in self)

    def _ensure_try_get_at(self) -> None:
        if self._try_get_at is not None:
            return
        kind = self._kind
        if kind is SourceKind.INDEXABLE:
            source = self._source

            def direct(index: int) -> Any:
                if 0 <= index < len(source):
                    return source[index]
                return NO_VALUE

            self._set_accessor(direct, True)
        elif kind is SourceKind.ENUMERABLE:
            inner = self._source
            inner._ensure_try_get_at()
            self._set_accessor(inner._try_get_at, inner._can_seek)
        else:
            logger.debug("no random access for a %s source, element lookups will iterate", kind.value)
            self._set_accessor(self._iterate_to, False)

    def _iterate_to(self, index: int) -> Any:
        if index < 0:
            return NO_VALUE
        return next(islice(self, index, None), NO_VALUE)

    # --- consumption ---

    def count(self) -> int:
        """number of elements, without iterating whenever the chain allows it"""
        self._ensure_count()
        return self._count_fn()

    def to_list(self) -> List[T]:
        """materializes the sequence into a new list"""
        self._ensure_try_get_at()
        if self._can_seek:
            size = self.count()
            result = [None] * size
            try_get_at = self._try_get_at
            for index in range(size):
                result[index] = try_get_at(index)
            return result
        return list(self)

    def element_at(self, index: int) -> T:
        """element at a zero-based position. negative positions are out of range."""
        self._ensure_try_get_at()
        value = self._try_get_at(index)
        if value is NO_VALUE:
            raise IndexOutOfRangeError(f"index {index} is out of range")
        return value

    def element_at_or_default(self, index: int, default: Any = NO_VALUE) -> Any:
        self._ensure_try_get_at()
        value = self._try_get_at(index)
        return default if value is NO_VALUE else value

    def _first_value(self) -> Any:
        self._ensure_try_get_at()
        if self._can_seek:
            return self._try_get_at(0)
        return next(iter(self), NO_VALUE)

    def _last_value(self) -> Any:
        self._ensure_try_get_at()
        if self._can_seek:
            return self._try_get_at(self.count() - 1)
        result = NO_VALUE
        for item in self:
            result = item
        return result

    def _single_value(self) -> Any:
        cursor = iter(self)
        result = next(cursor, NO_VALUE)
        if result is not NO_VALUE and next(cursor, NO_VALUE) is not NO_VALUE:
            raise MultipleElementsError("sequence contains more than one element")
        return result

    def first(self, predicate: Optional[Predicate[T]] = None) -> T:
        """get first element"""
        if predicate is not None:
            return self.where(predicate).first()
        result = self._first_value()
        if result is NO_VALUE:
            raise EmptySequenceError("sequence contains no elements")
        return result

    def first_or_default(self, predicate: Optional[Predicate[T]] = None, default: Any = NO_VALUE) -> Any:
        """get first element or default"""
        if predicate is not None:
            return self.where(predicate).first_or_default(default=default)
        result = self._first_value()
        return default if result is NO_VALUE else result

    def last(self, predicate: Optional[Predicate[T]] = None) -> T:
        """
        get last element. seekable sequences jump straight to count - 1,
        everything else is scanned once keeping only the final value.
        """
        if predicate is not None:
            return self.where(predicate).last()
        result = self._last_value()
        if result is NO_VALUE:
            raise EmptySequenceError("sequence contains no elements")
        return result

    def last_or_default(self, predicate: Optional[Predicate[T]] = None, default: Any = NO_VALUE) -> Any:
        """get last element or default"""
        if predicate is not None:
            return self.where(predicate).last_or_default(default=default)
        result = self._last_value()
        return default if result is NO_VALUE else result

    def single(self, predicate: Optional[Predicate[T]] = None) -> T:
        """get the only element, erroring if there is not exactly one"""
        if predicate is not None:
            return self.where(predicate).single()
        result = self._single_value()
        if result is NO_VALUE:
            raise EmptySequenceError("sequence contains no elements")
        return result

    def single_or_default(self, predicate: Optional[Predicate[T]] = None, default: Any = NO_VALUE) -> Any:
        """the only element, default when empty, still an error when there are several"""
        if predicate is not None:
            return self.where(predicate).single_or_default(default=default)
        result = self._single_value()
        return default if result is NO_VALUE else result


# --- private helper for descending sort searches ---
@total_ordering
class _ReverseComparable:
    """wraps an object to invert its comparison operators for bisect."""
    def __init__(self, obj):
        self.obj = obj
    def __eq__(self, other):
        return self.obj == other.obj
    def __lt__(self, other):
        return self.obj > other.obj

# --- main enumerable class ---

class Enumerable(
    _BaseEnumerable[T],
    _CoreOperations[T]
):
    """a lazy, linq-inspired enumerable that knows when it can count and seek without iterating."""
    def __init__(self, source: Any):
        super().__init__(source)
        # --- initialize accessors ---
        self.set = SetAccessor(self)
        self.join = JoinAccessor(self)
        self.zip = ZipAccessor(self)
        self.group = GroupingAccessor(self)
        self.stats = StatsAccessor(self)
        self.util = UtilityAccessor(self)
        self.to = TerminalAccessor(self)

# --- grouped enumerable class ---

class GroupEnumerable(Enumerable[T]):
    """the items of one group, plus the key they were grouped under."""

    def __init__(self, items: Any, key: Any):
        super().__init__(items)
        self._key = key

    @property
    def key(self) -> Any:
        return self._key

    def __repr__(self) -> str:
        return f"GroupEnumerable(key={self._key!r}, count={self.count()})"

# --- ordered enumerable class ---

class Restriction(Enum):
    TAKE = 'take'
    TAKE_LAST = 'take_last'
    SKIP = 'skip'
    SKIP_LAST = 'skip_last'


def resolve_interval(restrictions: List[Tuple[Restriction, int]], length: int) -> Tuple[int, int]:
    """folds restrictions, in declaration order, into one [start, end) window over length items"""
    start, end = 0, length
    for restriction, count in restrictions:
        if restriction is Restriction.TAKE:
            end = min(end, start + count)
        elif restriction is Restriction.SKIP:
            start = min(end, start + count)
        elif restriction is Restriction.TAKE_LAST:
            start = max(start, end - count)
        elif restriction is Restriction.SKIP_LAST:
            end = max(start, end - count)
    return start, end


class OrderedEnumerable(Enumerable[T]):
    """
    represents a pending sort. then_by*, take, skip, take_last and skip_last
    only record what is wanted and return this same instance; the first
    consumption freezes the recipe, works out the [start, end) window and
    sorts just enough of the data to fill it.

    equal keys come out in no guaranteed order. positional access is not
    supported: iterate, count, or call first()/last() instead.
    """

    def __init__(self, source: Any, key_selector: Optional[KeySelector[T, K]] = None,
                 ascending: bool = True):
        parent = source if isinstance(source, _BaseEnumerable) else Enumerable(source)
        super().__init__(parent)
        self._key_selectors: List[Tuple[KeySelector[T, Any], bool]] = []
        self._restrictions: List[Tuple[Restriction, int]] = []
        self._use_quicksort = True
        self._materialized: Optional[List[T]] = None
        self._interval: Optional[Tuple[int, int]] = None
        self._resolved: Optional[List[T]] = None
        self._add_key(key_selector, ascending)

        self._cursor_factory = self._iterate_sorted
        self._count_fn = self._sorted_count
        self._set_accessor(self._refuse_positional_access, False)

    # --- building ---

    def _ensure_building(self) -> None:
        if self._interval is not None:
            raise UnsupportedOperationError("the ordering was already consumed and can no longer change")

    def _add_key(self, key_selector: Optional[KeySelector[T, K]], ascending: bool) -> 'OrderedEnumerable[T]':
        self._ensure_building()
        if key_selector is None:
            key_selector = lambda item: item
        ensure_function(key_selector, "key_selector")
        self._key_selectors.append((key_selector, ascending))
        return self

    def _add_restriction(self, restriction: Restriction, count: int) -> 'OrderedEnumerable[T]':
        self._ensure_building()
        self._restrictions.append((restriction, ensure_count(count)))
        return self

    def then_by(self, key_selector: Optional[KeySelector[T, K]] = None) -> 'OrderedEnumerable[T]':
        """secondary sort ascending"""
        return self._add_key(key_selector, True)

    def then_by_descending(self, key_selector: Optional[KeySelector[T, K]] = None) -> 'OrderedEnumerable[T]':
        """secondary sort descending"""
        return self._add_key(key_selector, False)

    def take(self, count: int) -> 'OrderedEnumerable[T]':
        """deferred take, narrows the sort window"""
        return self._add_restriction(Restriction.TAKE, count)

    def skip(self, count: int) -> 'OrderedEnumerable[T]':
        """deferred skip, narrows the sort window"""
        return self._add_restriction(Restriction.SKIP, count)

    def take_last(self, count: int) -> 'OrderedEnumerable[T]':
        """deferred take_last, narrows the sort window"""
        return self._add_restriction(Restriction.TAKE_LAST, count)

    def skip_last(self, count: int) -> 'OrderedEnumerable[T]':
        """deferred skip_last, narrows the sort window"""
        return self._add_restriction(Restriction.SKIP_LAST, count)

    def use_quicksort(self) -> 'OrderedEnumerable[T]':
        """sort restricted windows with the partial quicksort (the default)"""
        self._ensure_building()
        self._use_quicksort = True
        return self

    def use_builtin_sort(self) -> 'OrderedEnumerable[T]':
        """always fully sort with list.sort, even when only a window is needed"""
        self._ensure_building()
        self._use_quicksort = False
        return self

    # --- resolution ---

    def _resolve_interval(self) -> Tuple[int, int]:
        if self._interval is None:
            parent = self._source
            parent._ensure_try_get_at()
            if parent._can_seek:
                length = parent.count()
            else:
                # unseekable sources are read exactly once and kept for the sort
                self._materialized = parent.to_list()
                length = len(self._materialized)
            self._interval = resolve_interval(self._restrictions, length)
            logger.debug("ordering over %d items resolved to window %s", length, self._interval)
        return self._interval

    def _resolve(self) -> List[T]:
        if self._resolved is None:
            start, end = self._resolve_interval()
            if start >= end:
                self._resolved = []
            else:
                items = self._materialized if self._materialized is not None else self._source.to_list()
                self._materialized = None
                self._resolved = self._sort(items, start, end)
        return self._resolved

    def _sort(self, items: List[T], start: int, end: int) -> List[T]:
        if self._restrictions and self._use_quicksort:
            logger.debug("partial quicksort of %d items for window [%d, %d)", len(items), start, end)
            selectors = [key_selector for key_selector, _ in self._key_selectors]
            keyed = [(tuple(selector(item) for selector in selectors), item) for item in items]
            partial_quicksort(keyed, self._composite_comparer(), start, end)
            return [item for _, item in keyed[start:end]]
        # list.sort is stable, so sorting from the last key to the first composes them
        for key_selector, ascending in reversed(self._key_selectors):
            items.sort(key=key_selector, reverse=not ascending)
        return items[start:end]

    def _composite_comparer(self) -> Comparer:
        """compares (keys, item) pairs key by key, primary first, descending keys negated"""
        directions = [1 if ascending else -1 for _, ascending in self._key_selectors]

        def compare(keyed1, keyed2) -> int:
            for key1, key2, direction in zip(keyed1[0], keyed2[0], directions):
                if key1 > key2: return direction
                if key1 < key2: return -direction
            return 0

        return compare

    def _iterate_sorted(self) -> Iterator[T]:
        yield from self._resolve()

    def _sorted_count(self) -> int:
        start, end = self._resolve_interval()
        return end - start

    def _refuse_positional_access(self, index: int) -> Any:
        raise UnsupportedOperationError(
            "ordered sequences do not support positional access, use to_list(), first() or last()")

    def _get_full_key_selector(self) -> Callable[[T], Tuple]:
        """creates a single selector that returns a tuple of all sort keys."""
        return lambda item: tuple(key_selector(item) for key_selector, _ in self._key_selectors)

    # --- searches over the resolved order ---

    def _search_key(self, length: int) -> Tuple[Callable[[T], Tuple], Callable[[Tuple], Tuple]]:
        """
        key function over the first `length` sort keys for bisect, plus the
        matching wrapper for search bounds. descending levels are wrapped so
        bisect sees one ascending order.
        """
        if length > len(self._key_selectors):
            raise InvalidArgumentError("more search keys provided than sort levels exist.")
        levels = self._key_selectors[:length]

        def wrap(keys: Tuple) -> Tuple:
            return tuple(key if ascending else _ReverseComparable(key)
                         for key, (_, ascending) in zip(keys, levels))

        def search_key(item: T) -> Tuple:
            return wrap(tuple(key_selector(item) for key_selector, _ in levels))

        return search_key, wrap

    def find_by_key(self, *key_prefix: Any) -> 'Enumerable[T]':
        """
        all items whose leading sort keys equal key_prefix, found by binary
        search over the resolved order. mixed directions are fine.
        """

        def find_data():
            search_key, wrap = self._search_key(len(key_prefix))
            prefix = wrap(key_prefix)
            sorted_data = self._resolve()
            start_index = bisect_left(sorted_data, prefix, key=search_key)
            end_index = bisect_right(sorted_data, prefix, key=search_key)
            yield from sorted_data[start_index:end_index]

        return Enumerable(find_data)

    def between_keys(self, lower_bound: Union[Any, Tuple], upper_bound: Union[Any, Tuple]) -> 'Enumerable[T]':
        """
        items whose sort keys lie between the bounds, inclusive. bounds follow
        the sort direction, e.g. (10, 50) ascending but (50, 10) descending.
        """
        def between_data():
            lower = lower_bound if isinstance(lower_bound, tuple) else (lower_bound,)
            upper = upper_bound if isinstance(upper_bound, tuple) else (upper_bound,)
            if len(lower) != len(upper):
                raise InvalidArgumentError("lower and upper bound tuples must have the same length.")

            search_key, wrap = self._search_key(len(lower))
            sorted_data = self._resolve()
            start_index = bisect_left(sorted_data, wrap(lower), key=search_key)
            end_index = bisect_right(sorted_data, wrap(upper), key=search_key)
            yield from sorted_data[start_index:end_index]

        return Enumerable(between_data)

    def merge_with(self, other: 'OrderedEnumerable[T]') -> 'Enumerable[T]':
        """
        efficiently merges this sorted sequence with another compatible sorted sequence (o(n + m)).
        raises an error if the sort directions are not identical.
        """

        def merge_data():
            if [sk[1] for sk in self._key_selectors] != [sk[1] for sk in other._key_selectors]:
                raise InvalidArgumentError("cannot merge enumerables with different sort directions.")

            list_a = self._resolve()
            list_b = other._resolve()
            key_selector = self._get_full_key_selector()
            compare = self._composite_comparer()

            # two-pointer merge over (keys, item) pairs
            i, j = 0, 0
            while i < len(list_a) and j < len(list_b):
                if compare((key_selector(list_a[i]), None), (key_selector(list_b[j]), None)) <= 0:
                    yield list_a[i]
                    i += 1
                else:
                    yield list_b[j]
                    j += 1

            yield from list_a[i:]
            yield from list_b[j:]

        return Enumerable(merge_data)
