from __future__ import annotations
import typing
from ..types import *
from ..guards import ensure_function, with_index

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable, GroupEnumerable


class GroupingAccessor(Generic[T]):
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def group_by(self, key_selector: KeySelector[T, K]) -> 'Enumerable[GroupEnumerable[T]]':
        """
        group elements by a key. one pass over the source builds an
        insertion-ordered key -> items dict, then one GroupEnumerable is
        yielded per key in order of first occurrence.
        """
        from ..enumerable import Enumerable, GroupEnumerable
        ensure_function(key_selector, "key_selector")
        call = with_index(key_selector)
        source = self._enumerable

        def group_data():
            groups: Dict[Any, List[T]] = {}
            for index, item in enumerate(source):
                groups.setdefault(call(item, index), []).append(item)
            for key, items in groups.items():
                yield GroupEnumerable(items, key)

        return Enumerable(group_data)

    def to_dict(self, key_selector: KeySelector[T, K]) -> Dict[K, List[T]]:
        """eager grouping straight into a plain dict of lists"""
        return {group.key: group.to_list() for group in self.group_by(key_selector)}
