"""
in-place sorting with an optional window of interest.

partial_quicksort only guarantees that the slots in [min_index, max_index)
hold what a full sort would put there. partitions that do not touch the
window are never split further, which is what makes order_by(...).take(k)
cheap for small k.
"""
from typing import Any, Callable, List, Optional

from .types import T, Comparer

INSERTION_SORT_THRESHOLD = 64


def default_comparer(item1: Any, item2: Any) -> int:
    """three-way comparison using > and <"""
    if item1 > item2: return 1
    if item1 < item2: return -1
    return 0


def _insertion_sort(items: List[T], left: int, right: int, comparer: Comparer) -> None:
    """sorts items[left..right] (inclusive)"""
    for j in range(left + 1, right + 1):
        key = items[j]
        i = j - 1
        while i >= left and comparer(items[i], key) > 0:
            items[i + 1] = items[i]
            i -= 1
        items[i + 1] = key


def _partition(items: List[T], left: int, right: int, comparer: Comparer) -> int:
    """
    hoare partition around the middle element. returns the split index:
    everything before it compares <= pivot, everything from it on >= pivot.
    """
    pivot = items[(left + right) >> 1]
    while left <= right:
        while comparer(items[left], pivot) < 0:
            left += 1
        while comparer(items[right], pivot) > 0:
            right -= 1
        if left < right:
            items[left], items[right] = items[right], items[left]
            left += 1
            right -= 1
        elif left == right:
            return left + 1
    return left


def partial_quicksort(items: List[T], comparer: Optional[Comparer] = None,
                      min_index: int = 0, max_index: Optional[int] = None) -> List[T]:
    """
    rearranges items in place so items[min_index:max_index] equals the same
    slice of a full sort. elements outside the window end up in some order,
    each still present exactly once. not stable.
    """
    comparer = comparer or default_comparer
    length = len(items)
    if max_index is None or max_index > length:
        max_index = length
    min_index = max(0, min_index)
    if length < 2 or min_index >= max_index:
        return items

    # explicit work list of inclusive (left, right) partitions
    partitions = [(0, length - 1)]
    while partitions:
        left, right = partitions.pop()
        if right - left < INSERTION_SORT_THRESHOLD:
            _insertion_sort(items, left, right, comparer)
            continue
        index = _partition(items, left, right, comparer)
        if left < index - 1 and index - 1 >= min_index:
            partitions.append((left, index - 1))
        if index < right and index < max_index:
            partitions.append((index, right))
    return items


def sort(items: List[T], comparer: Optional[Comparer] = None) -> List[T]:
    """sorts a list in place with the quicksort and returns it"""
    return partial_quicksort(items, comparer, 0, len(items))
