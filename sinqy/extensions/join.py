from __future__ import annotations
import typing
from ..types import *
from ..guards import ensure_function, ensure_iterable, with_index

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable


class JoinAccessor(Generic[T]):
    """
    key based joins. without an equality comparer the inner sequence is
    grouped once into a hash lookup (o(n + m)); with one, every outer item
    is compared against every inner item (o(n * m)).
    """
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def _check(self, inner, outer_key_selector, inner_key_selector, result_selector, equality_comparer):
        ensure_iterable(inner, "inner")
        ensure_function(outer_key_selector, "outer_key_selector")
        ensure_function(inner_key_selector, "inner_key_selector")
        ensure_function(result_selector, "result_selector")
        if equality_mode(equality_comparer) is EqualityMode.CUSTOM:
            ensure_function(equality_comparer, "equality_comparer")

    def _matches(self, inner: 'Enumerable[U]', inner_key_selector: KeySelector[U, K],
                 equality_comparer: Optional[EqualityComparerFunc]) -> Callable[[K], List[U]]:
        """builds the key -> matching inner items function for one join run"""
        if equality_mode(equality_comparer) is EqualityMode.HASH:
            lookup = {group.key: group.to_list() for group in inner.group.group_by(inner_key_selector)}
            return lambda key: lookup.get(key, [])

        call = with_index(inner_key_selector)
        keyed_inner = [(call(item, index), item) for index, item in enumerate(inner)]
        return lambda key: [item for inner_key, item in keyed_inner if equality_comparer(key, inner_key)]

    def join(self, inner: Iterable[U], outer_key_selector: KeySelector[T, K],
             inner_key_selector: KeySelector[U, K],
             result_selector: Callable[[T, U], V],
             equality_comparer: Optional[EqualityComparerFunc] = None) -> 'Enumerable[V]':
        """inner join two sequences based on matching keys"""
        from ..enumerable import Enumerable
        from ..factories import from_iterable
        self._check(inner, outer_key_selector, inner_key_selector, result_selector, equality_comparer)
        outer, inner = self._enumerable, from_iterable(inner)
        outer_key = with_index(outer_key_selector)

        def join_data():
            matches = self._matches(inner, inner_key_selector, equality_comparer)
            for index, outer_item in enumerate(outer):
                for inner_item in matches(outer_key(outer_item, index)):
                    yield result_selector(outer_item, inner_item)

        return Enumerable(join_data)

    def group_join(self, inner: Iterable[U], outer_key_selector: KeySelector[T, K],
                   inner_key_selector: KeySelector[U, K],
                   result_selector: Callable[[T, List[U]], V],
                   equality_comparer: Optional[EqualityComparerFunc] = None) -> 'Enumerable[V]':
        """group join - pairs every outer element with the list of its inner matches"""
        from ..enumerable import Enumerable
        from ..factories import from_iterable
        self._check(inner, outer_key_selector, inner_key_selector, result_selector, equality_comparer)
        outer, inner = self._enumerable, from_iterable(inner)
        outer_key = with_index(outer_key_selector)

        def group_join_data():
            matches = self._matches(inner, inner_key_selector, equality_comparer)
            for index, outer_item in enumerate(outer):
                yield result_selector(outer_item, list(matches(outer_key(outer_item, index))))

        return Enumerable._derived(group_join_data, outer.count)
