from __future__ import annotations
import typing
from collections import deque
from ..types import *
from ..errors import InvalidArgumentError
from ..guards import ensure_function, ensure_iterable, with_index

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable


def _pair(item1, item2):
    return item1, item2


class ZipAccessor(Generic[T]):
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def zip_with(self, other: Iterable[U], zipper: Optional[Callable[..., V]] = None) -> 'Enumerable[V]':
        """
        walks both sequences in lockstep and stops at the shorter one.
        zipper(a, b) or zipper(a, b, index); tuples when omitted.
        """
        from ..enumerable import Enumerable
        from ..factories import from_iterable
        ensure_iterable(other, "other")
        if zipper is None:
            zipper = _pair
        ensure_function(zipper, "zipper")
        source, other = self._enumerable, from_iterable(other)
        call = with_index(zipper, arity=2)

        def zip_data():
            for index, (item1, item2) in enumerate(zip(source, other)):
                yield call(item1, item2, index)

        return Enumerable(zip_data)

    def lag(self, offset: int = 1, zipper: Optional[Callable[[T, Optional[T]], V]] = None) -> 'Enumerable[V]':
        """pairs every item with the one 'offset' positions before it (None before the start)"""
        return self._shifted(offset, zipper, -1, "use lead to join with next items")

    def lead(self, offset: int = 1, zipper: Optional[Callable[[T, Optional[T]], V]] = None) -> 'Enumerable[V]':
        """pairs every item with the one 'offset' positions after it (None past the end)"""
        return self._shifted(offset, zipper, 1, "use lag to join with previous items")

    def _shifted(self, offset: int, zipper, direction: int, hint: str) -> 'Enumerable[V]':
        from ..enumerable import Enumerable
        if offset <= 0:
            raise InvalidArgumentError(f"offset has to be positive, {hint}")
        if zipper is None:
            zipper = _pair
        ensure_function(zipper, "zipper")
        source = self._enumerable

        if direction < 0:
            def shifted_data():
                buffer = deque(maxlen=offset)
                for item in source:
                    yield zipper(item, buffer[0] if len(buffer) == offset else None)
                    buffer.append(item)
        else:
            def shifted_data():
                buffer = deque()
                for item in source:
                    buffer.append(item)
                    if len(buffer) > offset:
                        yield zipper(buffer.popleft(), item)
                while buffer:
                    yield zipper(buffer.popleft(), None)

        source._ensure_count()
        source._ensure_try_get_at()
        if not source._can_seek:
            return Enumerable._derived(shifted_data, source._count_fn)

        source_try_get_at = source._try_get_at

        def try_get_at(index):
            value = source_try_get_at(index)
            if value is NO_VALUE:
                return NO_VALUE
            partner = source_try_get_at(index + direction * offset)
            return zipper(value, None if partner is NO_VALUE else partner)

        return Enumerable._derived(shifted_data, source._count_fn, try_get_at, True)
