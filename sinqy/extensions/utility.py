from __future__ import annotations
import typing
import logging
import math
import random
from ..types import *
from ..errors import InvalidArgumentError
from ..guards import ensure_function
from ..sorting import default_comparer

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable

logger = logging.getLogger(__name__)


def _open_unit(rng: random.Random) -> float:
    """uniform draw from the open interval (0, 1)"""
    value = rng.random()
    while value == 0.0:
        value = rng.random()
    return value


def _as_filler(filler: Any) -> Callable[[int], Any]:
    return filler if callable(filler) else (lambda index: filler)


class UtilityAccessor(Generic[T]):
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def for_each(self, action: Callable[[T], Any]) -> 'Enumerable[T]':
        """
        performs the specified action on each element of a sequence for side-effects.
        this is an EAGER operation that executes immediately.
        returns the original enumerable to allow chaining.
        """
        ensure_function(action, "action")
        for item in self._enumerable:
            action(item)
        return self._enumerable

    def side_effect(self, action: Callable[[T], Any]) -> 'Enumerable[T]':
        """
        performs a side-effect action for each element as it passes through the sequence
        without modifying it. lazy, mostly for debugging pipelines.
        example: .where(...).util.side_effect(print).select(...)
        """
        from ..enumerable import Enumerable
        ensure_function(action, "action")
        source = self._enumerable

        def side_effect_data():
            for item in source:
                action(item)
                yield item

        return Enumerable(side_effect_data)

    def pipe(self, func: Callable[..., U], *args, **kwargs) -> U:
        """
        pipes the enumerable object into an external function. enables custom, chainable operations.
        example: .util.pipe(my_custom_plot_function, title='my data')
        """
        return func(self._enumerable, *args, **kwargs)

    # --- randomness ---

    def shuffle(self, random_state: Optional[int] = None) -> 'Enumerable[T]':
        """
        fisher-yates over a materialized copy. items are handed out as they are
        drawn, so take(k) after shuffle only does k swaps. count survives, seeking does not.
        """
        from ..enumerable import Enumerable
        source = self._enumerable

        def shuffle_data():
            rng = random.Random(random_state)
            items = source.to_list()
            length = len(items)
            for n in range(length):
                k = rng.randrange(n, length)
                items[n], items[k] = items[k], items[n]
                yield items[n]

        source._ensure_count()
        return Enumerable._derived(shuffle_data, source._count_fn)

    def random_sample(self, k: int, limit: Optional[int] = None,
                      random_state: Optional[int] = None) -> 'Enumerable[T]':
        """
        reservoir sample of k items, optionally only among the first 'limit'.
        seekable sources use algorithm l and skip ahead by index, anything
        else is streamed once with algorithm r.
        """
        from ..enumerable import Enumerable
        if k < 0:
            raise InvalidArgumentError("k has to be zero or positive")
        source = self._enumerable
        limit = math.inf if limit is None else limit

        def sample_data():
            rng = random.Random(random_state)
            sample = []
            if k == 0:
                return
            source._ensure_try_get_at()
            if source._can_seek:
                # algorithm l
                length = source.count()
                index = 0
                while index < k and index < limit and index < length:
                    sample.append(source.element_at(index))
                    index += 1
                w = math.exp(math.log(_open_unit(rng)) / k)
                while index < length and index < limit:
                    index += math.floor(math.log(_open_unit(rng)) / math.log(1 - w)) + 1
                    if index < length and index < limit:
                        sample[rng.randrange(k)] = source.element_at(index)
                        w *= math.exp(math.log(_open_unit(rng)) / k)
            else:
                # algorithm r
                for index, item in enumerate(source):
                    if index >= limit:
                        break
                    if index < k:
                        sample.append(item)
                    else:
                        j = rng.randrange(index + 1)
                        if j < k:
                            sample[j] = item
            yield from sample

        return Enumerable(sample_data)

    # --- padding ---

    def pad_end(self, min_length: int, filler: Any = None) -> 'Enumerable[T]':
        """
        at least min_length items, appending filler (a value, or a function of
        the position) after the source runs out.
        """
        from ..enumerable import Enumerable
        if min_length <= 0:
            raise InvalidArgumentError("min_length has to be positive")
        fill = _as_filler(filler)
        source = self._enumerable

        def pad_end_data():
            index = 0
            for item in source:
                yield item
                index += 1
            for position in range(index, min_length):
                yield fill(position)

        count_fn = lambda: max(min_length, source.count())
        source._ensure_try_get_at()
        if not source._can_seek:
            return Enumerable._derived(pad_end_data, count_fn)

        source_try_get_at = source._try_get_at

        def try_get_at(index):
            value = source_try_get_at(index)
            if value is not NO_VALUE:
                return value
            return fill(index) if 0 <= index < min_length else NO_VALUE

        return Enumerable._derived(pad_end_data, count_fn, try_get_at, True)

    def pad_start(self, min_length: int, filler: Any = None) -> 'Enumerable[T]':
        """
        at least min_length items, prepending filler (a value, or a function of
        the position) when the source is shorter. unseekable sources are
        buffered up to min_length items before anything is yielded.
        """
        from ..enumerable import Enumerable
        if min_length <= 0:
            raise InvalidArgumentError("min_length has to be positive")
        fill = _as_filler(filler)
        source = self._enumerable

        def pad_start_data():
            cursor = iter(source)
            buffer = []
            for item in cursor:
                buffer.append(item)
                if len(buffer) == min_length:
                    break
            for position in range(min_length - len(buffer)):
                yield fill(position)
            yield from buffer
            yield from cursor

        count_fn = lambda: max(min_length, source.count())
        source._ensure_try_get_at()
        if not source._can_seek:
            return Enumerable._derived(pad_start_data, count_fn)

        source_try_get_at = source._try_get_at

        def try_get_at(index):
            missing = min_length - source.count()
            if missing <= 0:
                return source_try_get_at(index)
            if 0 <= index < missing:
                return fill(index)
            return source_try_get_at(index - missing)

        return Enumerable._derived(pad_start_data, count_fn, try_get_at, True)

    # --- searching ---

    def binary_search(self, value: Any, comparer: Optional[Comparer] = None) -> Any:
        """
        index of value in a sequence already sorted by comparer, or NO_VALUE.
        o(log n) lookups on a seekable sequence; anything else is materialized first.
        """
        from ..enumerable import Enumerable
        comparer = comparer or default_comparer
        ensure_function(comparer, "comparer")
        enumerable = self._enumerable
        enumerable._ensure_try_get_at()
        if not enumerable._can_seek:
            logger.debug("binary_search over an unseekable sequence, materializing it first")
            enumerable = Enumerable(enumerable.to_list())

        start, end = 0, enumerable.count() - 1
        while start <= end:
            mid = (start + end) >> 1
            comparison = comparer(enumerable.element_at(mid), value)
            if comparison == 0:
                return mid
            if comparison < 0:
                start = mid + 1
            else:
                end = mid - 1
        return NO_VALUE
