from __future__ import annotations
import typing
from collections import deque
from itertools import islice
from ..types import *
from ..errors import InvalidArgumentError, UnsupportedOperationError
from ..guards import ensure_count, ensure_function, ensure_iterable, with_index

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable, OrderedEnumerable


class _CoreOperations(Generic[T]):
    """
    the chain operators. every operator returns a new enumerable and hands it
    whatever count / positional access it can derive from its input, so that
    count() and element_at() on the result do not have to iterate.
    """

    # --- projection and filtering ---

    def where(self: 'Enumerable[T]', predicate: Predicate[T]) -> 'Enumerable[T]':
        """filter elements based on a predicate. predicate(item) or predicate(item, index)."""
        from ..enumerable import Enumerable
        ensure_function(predicate, "predicate")
        call = with_index(predicate)

        def filter_data():
            for index, item in enumerate(self):
                if call(item, index):
                    yield item

        # nothing about count or positions survives a filter
        return Enumerable(filter_data)

    def select(self: 'Enumerable[T]', selector: Selector[T, U]) -> 'Enumerable[U]':
        """project each element to a new form. selector(item) or selector(item, index)."""
        from ..enumerable import Enumerable
        ensure_function(selector, "selector")
        call = with_index(selector)

        def map_data():
            for index, item in enumerate(self):
                yield call(item, index)

        self._ensure_count()
        self._ensure_try_get_at()
        source_try_get_at = self._try_get_at

        def try_get_at(index):
            value = source_try_get_at(index)
            return value if value is NO_VALUE else call(value, index)

        return Enumerable._derived(map_data, self._count_fn, try_get_at, self._can_seek)

    def select_with_index(self: 'Enumerable[T]', selector: Callable[[T, int], U]) -> 'Enumerable[U]':
        """project each element to a new form, always passing the element's index"""
        ensure_function(selector, "selector")
        return self.select(lambda item, index: selector(item, index))

    def select_many(self: 'Enumerable[T]', selector: Optional[Selector[T, Iterable[U]]] = None) -> 'Enumerable[U]':
        """project and flatten sequences"""
        from ..enumerable import Enumerable
        if selector is None:
            selector = lambda item: item
        ensure_function(selector, "selector")
        call = with_index(selector)

        def flat_map_data():
            for index, item in enumerate(self):
                children = call(item, index)
                ensure_iterable(children, "selected item")
                yield from children

        return Enumerable(flat_map_data)

    def of_type(self: 'Enumerable[T]', type_filter: Type[U]) -> 'Enumerable[U]':
        """filters the elements of a sequence based on a specified type"""
        return self.where(lambda item: isinstance(item, type_filter))

    def cast(self: 'Enumerable[T]', type_filter: Type[U]) -> 'Enumerable[U]':
        """passes elements through unchanged, failing on the first one of another type"""
        def check(item):
            if not isinstance(item, type_filter):
                raise InvalidArgumentError(f"{item!r} is not of type {type_filter.__name__}")
            return item

        return self.select(check)

    # --- slicing ---

    def take(self: 'Enumerable[T]', count: int) -> 'Enumerable[T]':
        """take the first 'count' elements"""
        from ..enumerable import Enumerable
        count = ensure_count(count)

        def take_data():
            # islice stops after count pulls, it never asks for one more
            yield from islice(self, count)

        self._ensure_try_get_at()
        source_try_get_at = self._try_get_at

        def try_get_at(index):
            return NO_VALUE if index >= count else source_try_get_at(index)

        return Enumerable._derived(take_data, lambda: min(count, self.count()), try_get_at, self._can_seek)

    def skip(self: 'Enumerable[T]', count: int) -> 'Enumerable[T]':
        """skip the first 'count' elements"""
        from ..enumerable import Enumerable
        count = ensure_count(count)

        def skip_data():
            yield from islice(self, count, None)

        self._ensure_try_get_at()
        source_try_get_at = self._try_get_at

        def try_get_at(index):
            return NO_VALUE if index < 0 else source_try_get_at(index + count)

        return Enumerable._derived(skip_data, lambda: max(0, self.count() - count), try_get_at, self._can_seek)

    def take_last(self: 'Enumerable[T]', count: int) -> 'Enumerable[T]':
        """take the last 'count' elements"""
        from ..enumerable import Enumerable
        count = ensure_count(count)
        self._ensure_try_get_at()

        def result_count():
            return min(count, self.count())

        if not self._can_seek:
            def take_last_data():
                if count == 0:
                    return
                yield from deque(self, maxlen=count)

            return Enumerable._derived(take_last_data, result_count)

        source_try_get_at = self._try_get_at

        def seek_take_last_data():
            length = self.count()
            for index in range(length - min(count, length), length):
                yield source_try_get_at(index)

        def try_get_at(index):
            taken = result_count()
            if index < 0 or index >= taken:
                return NO_VALUE
            return source_try_get_at(self.count() - taken + index)

        return Enumerable._derived(seek_take_last_data, result_count, try_get_at, True)

    def skip_last(self: 'Enumerable[T]', count: int) -> 'Enumerable[T]':
        """skip the last 'count' elements"""
        from ..enumerable import Enumerable
        count = ensure_count(count)

        def skip_last_data():
            buffer = deque()
            for item in self:
                buffer.append(item)
                if len(buffer) > count:
                    yield buffer.popleft()

        def result_count():
            return max(0, self.count() - count)

        self._ensure_try_get_at()
        if not self._can_seek:
            return Enumerable._derived(skip_last_data, result_count)

        source_try_get_at = self._try_get_at

        def try_get_at(index):
            return NO_VALUE if index >= result_count() else source_try_get_at(index)

        return Enumerable._derived(skip_last_data, result_count, try_get_at, True)

    def take_while(self: 'Enumerable[T]', predicate: Predicate[T]) -> 'Enumerable[T]':
        """take elements while predicate is true"""
        from ..enumerable import Enumerable
        ensure_function(predicate, "predicate")
        call = with_index(predicate)

        def take_while_data():
            for index, item in enumerate(self):
                if not call(item, index):
                    return
                yield item

        return Enumerable(take_while_data)

    def skip_while(self: 'Enumerable[T]', predicate: Predicate[T]) -> 'Enumerable[T]':
        """skip elements while predicate is true"""
        from ..enumerable import Enumerable
        ensure_function(predicate, "predicate")
        call = with_index(predicate)

        def skip_while_data():
            skipping = True
            for index, item in enumerate(self):
                if skipping and call(item, index):
                    continue
                skipping = False
                yield item

        return Enumerable(skip_while_data)

    # --- combining ---

    def concat(self: 'Enumerable[T]', other: Iterable[T]) -> 'Enumerable[T]':
        """concatenate with another sequence, preserving all elements and order"""
        from ..enumerable import Enumerable
        from ..factories import from_iterable
        ensure_iterable(other, "other")
        other = from_iterable(other)

        def concat_data():
            yield from self
            yield from other

        self._ensure_try_get_at()
        other._ensure_try_get_at()
        count_fn = lambda: self.count() + other.count()
        if not self._can_seek:
            return Enumerable._derived(concat_data, count_fn)

        self_try_get_at, other_try_get_at = self._try_get_at, other._try_get_at

        def try_get_at(index):
            value = self_try_get_at(index)
            if value is not NO_VALUE or index < 0:
                return value
            return other_try_get_at(index - self.count())

        return Enumerable._derived(concat_data, count_fn, try_get_at, other._can_seek)

    def append(self: 'Enumerable[T]', element: T) -> 'Enumerable[T]':
        """appends a value to the end of the sequence"""
        return self.concat((element,))

    def prepend(self: 'Enumerable[T]', element: T) -> 'Enumerable[T]':
        """adds a value to the beginning of the sequence"""
        from ..enumerable import Enumerable
        return Enumerable((element,)).concat(self)

    def reverse(self: 'Enumerable[T]') -> 'Enumerable[T]':
        """inverts the order of the elements in a sequence"""
        from ..enumerable import Enumerable
        self._ensure_count()
        self._ensure_try_get_at()
        if not self._can_seek:
            def reverse_data():
                yield from reversed(self.to_list())

            return Enumerable._derived(reverse_data, self._count_fn)

        source_try_get_at = self._try_get_at

        def seek_reverse_data():
            for index in range(self.count() - 1, -1, -1):
                yield source_try_get_at(index)

        def try_get_at(index):
            return NO_VALUE if index < 0 else source_try_get_at(self.count() - index - 1)

        return Enumerable._derived(seek_reverse_data, self._count_fn, try_get_at, True)

    def default_if_empty(self: 'Enumerable[T]', default_value: T = None) -> 'Enumerable[T]':
        """returns the elements of a sequence, or a default value in a singleton collection if the sequence is empty"""
        from ..enumerable import Enumerable

        def default_data():
            empty = True
            for item in self:
                empty = False
                yield item
            if empty:
                yield default_value

        return Enumerable._derived(default_data, lambda: max(1, self.count()))

    # --- ordering ---

    def order_by(self: 'Enumerable[T]', key_selector: Optional[KeySelector[T, K]] = None) -> 'OrderedEnumerable[T]':
        """sort elements by a key (the element itself when omitted)"""
        from ..enumerable import OrderedEnumerable
        return OrderedEnumerable(self, key_selector, True)

    def order_by_descending(self: 'Enumerable[T]', key_selector: Optional[KeySelector[T, K]] = None) -> 'OrderedEnumerable[T]':
        """sort elements by a key in descending order"""
        from ..enumerable import OrderedEnumerable
        return OrderedEnumerable(self, key_selector, False)

    # --- identity and materialization helpers ---

    def as_enumerable(self: 'Enumerable[T]') -> 'Enumerable[T]':
        """returns itself"""
        return self

    def to_seekable(self: 'Enumerable[T]') -> 'Enumerable[T]':
        """
        returns a seekable enumerable with the same elements: itself when it
        already seeks, otherwise an enumerable over a materialized list.
        """
        from ..enumerable import Enumerable
        self._ensure_try_get_at()
        if self._can_seek:
            return self
        return Enumerable(self.to_list())

    # --- legacy names that point elsewhere ---

    def to_lookup(self: 'Enumerable[T]', *args, **kwargs) -> typing.NoReturn:
        raise UnsupportedOperationError("use group.group_by instead of to_lookup")

    def to_dictionary(self: 'Enumerable[T]', *args, **kwargs) -> typing.NoReturn:
        raise UnsupportedOperationError("use to.dict instead of to_dictionary")

    def to_hash_set(self: 'Enumerable[T]', *args, **kwargs) -> typing.NoReturn:
        raise UnsupportedOperationError("use to.set instead of to_hash_set")
