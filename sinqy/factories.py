import typing
from .types import *
from .guards import ensure_count

if typing.TYPE_CHECKING:
    from .enumerable import Enumerable


def from_iterable(data: Iterable[T]) -> 'Enumerable[T]':
    """wrap a source in an enumerable, or return it as is when it already is one"""
    from .enumerable import Enumerable, _BaseEnumerable
    if isinstance(data, _BaseEnumerable):
        return data
    return Enumerable(data)

def from_range(start: int, count: int) -> 'Enumerable[int]':
    """create enumerable from range. seekable, so count and element_at never iterate."""
    from .enumerable import Enumerable
    return Enumerable(range(start, start + ensure_count(count)))

def repeat(item: T, count: int) -> 'Enumerable[T]':
    """create enumerable with repeated item"""
    from .enumerable import Enumerable
    count = ensure_count(count)

    def repeat_data():
        for _ in range(count):
            yield item

    def try_get_at(index):
        return item if 0 <= index < count else NO_VALUE

    return Enumerable._derived(repeat_data, lambda: count, try_get_at, True)

def empty() -> 'Enumerable[Any]':
    """create empty enumerable"""
    from .enumerable import Enumerable
    return Enumerable(())

def generate(generator_func: Callable[[], T], count: int) -> 'Enumerable[T]':
    """generate sequence using a function, called afresh on every iteration"""
    from .enumerable import Enumerable
    count = ensure_count(count)

    def generate_data():
        for _ in range(count):
            yield generator_func()

    return Enumerable._derived(generate_data, lambda: count)

# --- aliases ---
sinqy = from_iterable
P = from_iterable
p = from_iterable
