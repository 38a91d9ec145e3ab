from __future__ import annotations
import typing
from ..types import *
from ..guards import ensure_function, ensure_iterable

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable


def _contains(values: List[T], item: T, equality_comparer: EqualityComparerFunc) -> bool:
    return any(equality_comparer(item, value) for value in values)


class SetAccessor(Generic[T]):
    """
    set-theoretic operations. with no equality comparer every operator uses
    hash + == membership (o(n), items must be hashable). passing a comparer
    switches to pairwise comparer calls, which is o(n*m): the slow path, only
    worth it when items are unhashable or equality is not ==.
    """
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def distinct(self, equality_comparer: Optional[EqualityComparerFunc] = None) -> 'Enumerable[T]':
        """return distinct elements. preserves order of first appearance."""
        from ..enumerable import Enumerable
        source = self._enumerable

        if equality_mode(equality_comparer) is EqualityMode.HASH:
            def distinct_data():
                seen = set()
                for item in source:
                    if item not in seen:
                        seen.add(item)
                        yield item
        else:
            ensure_function(equality_comparer, "equality_comparer")

            def distinct_data():
                values = []
                for item in source:
                    if not _contains(values, item, equality_comparer):
                        values.append(item)
                        yield item

        return Enumerable(distinct_data)

    def distinct_by_hash(self, hash_func: Selector[T, K]) -> 'Enumerable[T]':
        """keeps the first item for every distinct hash_func(item)"""
        from ..enumerable import Enumerable
        ensure_function(hash_func, "hash_func")
        source = self._enumerable

        def distinct_data():
            seen = set()
            for item in source:
                key = hash_func(item)
                if key not in seen:
                    seen.add(key)
                    yield item

        return Enumerable(distinct_data)

    def union(self, other: Iterable[T], equality_comparer: Optional[EqualityComparerFunc] = None) -> 'Enumerable[T]':
        """return the order-preserving union of two sequences (distinct elements)."""
        ensure_iterable(other, "other")
        return self._enumerable.concat(other).set.distinct(equality_comparer)

    def intersect(self, other: Iterable[T], equality_comparer: Optional[EqualityComparerFunc] = None) -> 'Enumerable[T]':
        """return items of this sequence that also appear in other, in this sequence's order."""
        return self._membership_filter(other, equality_comparer, keep_members=True)

    def except_(self, other: Iterable[T], equality_comparer: Optional[EqualityComparerFunc] = None) -> 'Enumerable[T]':
        """return elements from the first sequence not in the second (set difference)."""
        return self._membership_filter(other, equality_comparer, keep_members=False)

    def _membership_filter(self, other: Iterable[T], equality_comparer: Optional[EqualityComparerFunc],
                           keep_members: bool) -> 'Enumerable[T]':
        from ..enumerable import Enumerable
        from ..factories import from_iterable
        ensure_iterable(other, "other")
        source = self._enumerable
        other = from_iterable(other)

        if equality_mode(equality_comparer) is EqualityMode.HASH:
            def filter_data():
                # building a set from the second sequence gives o(1) lookups
                other_set = set(other)
                for item in source:
                    if (item in other_set) == keep_members:
                        yield item
        else:
            ensure_function(equality_comparer, "equality_comparer")

            def filter_data():
                values = other.to_list()
                for item in source:
                    if _contains(values, item, equality_comparer) == keep_members:
                        yield item

        return Enumerable(filter_data)

    def intersect_by_hash(self, other: Iterable[T], hash_func: Selector[T, K]) -> 'Enumerable[T]':
        """items whose hash_func value also occurs among other's hash_func values"""
        return self._hash_membership_filter(other, hash_func, keep_members=True)

    def except_by_hash(self, other: Iterable[T], hash_func: Selector[T, K]) -> 'Enumerable[T]':
        """items whose hash_func value does not occur among other's hash_func values"""
        return self._hash_membership_filter(other, hash_func, keep_members=False)

    def _hash_membership_filter(self, other: Iterable[T], hash_func: Selector[T, K],
                                keep_members: bool) -> 'Enumerable[T]':
        from ..enumerable import Enumerable
        from ..factories import from_iterable
        ensure_iterable(other, "other")
        ensure_function(hash_func, "hash_func")
        source = self._enumerable
        other = from_iterable(other)

        def filter_data():
            hashes = {hash_func(item) for item in other}
            for item in source:
                if (hash_func(item) in hashes) == keep_members:
                    yield item

        return Enumerable(filter_data)
