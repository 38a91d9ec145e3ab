from __future__ import annotations
import typing
import numpy as np
import pandas as pd
from ..types import *
from ..guards import ensure_function, ensure_iterable, with_index

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable

class TerminalAccessor(Generic[T]):
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def list(self) -> List[T]:
        """convert to list"""
        return self._enumerable.to_list()

    def tuple(self) -> Tuple[T, ...]:
        """convert to tuple"""
        return tuple(self._enumerable.to_list())

    def array(self) -> np.ndarray:
        """convert to numpy array"""
        return np.array(self._enumerable.to_list())

    def set(self) -> Set[T]:
        """convert to set"""
        return set(self._enumerable)

    def dict(self, key_selector: KeySelector[T, K],
             value_selector: Optional[Selector[T, V]] = None) -> Dict[K, V]:
        """convert to dictionary, later keys overwrite earlier ones"""
        ensure_function(key_selector, "key_selector")
        key_of = with_index(key_selector)
        value_of = with_index(value_selector) if value_selector else (lambda item, index: item)
        return {key_of(item, index): value_of(item, index) for index, item in enumerate(self._enumerable)}

    def pandas(self) -> pd.Series:
        """convert to pandas series"""
        return pd.Series(self._enumerable.to_list())

    def df(self) -> pd.DataFrame:
        """convert to pandas dataframe"""
        return pd.DataFrame(self._enumerable.to_list())

    def aggregate(self, seed: U, accumulator: Accumulator[U, T]) -> U:
        """left fold starting from seed"""
        ensure_function(accumulator, "accumulator")
        result = seed
        for item in self._enumerable:
            result = accumulator(result, item)
        return result

    def any(self, predicate: Optional[Predicate[T]] = None) -> bool:
        """check if any element exists, or satisfies the predicate"""
        if predicate is None:
            self._enumerable._ensure_try_get_at()
            if self._enumerable._can_seek:
                return self._enumerable.count() > 0
            return next(iter(self._enumerable), NO_VALUE) is not NO_VALUE
        ensure_function(predicate, "predicate")
        call = with_index(predicate)
        return any(call(item, index) for index, item in enumerate(self._enumerable))

    def all(self, predicate: Predicate[T]) -> bool:
        """check if all elements satisfy condition"""
        ensure_function(predicate, "predicate")
        call = with_index(predicate)
        return all(call(item, index) for index, item in enumerate(self._enumerable))

    def contains(self, item: T, equality_comparer: Optional[EqualityComparerFunc] = None) -> bool:
        """determines whether the sequence contains item"""
        if equality_mode(equality_comparer) is EqualityMode.HASH:
            return any(x == item for x in self._enumerable)
        ensure_function(equality_comparer, "equality_comparer")
        return any(equality_comparer(x, item) for x in self._enumerable)

    def sequence_equal(self, other: Iterable[T], equality_comparer: Optional[EqualityComparerFunc] = None) -> bool:
        """same length and pairwise equal elements, in order"""
        from ..factories import from_iterable
        ensure_iterable(other, "other")
        equal = equality_comparer or EqualityComparer.default
        ensure_function(equal, "equality_comparer")
        cursor1, cursor2 = iter(self._enumerable), iter(from_iterable(other))
        while True:
            item1, item2 = next(cursor1, NO_VALUE), next(cursor2, NO_VALUE)
            if item1 is NO_VALUE or item2 is NO_VALUE:
                return item1 is item2
            if not equal(item1, item2):
                return False
