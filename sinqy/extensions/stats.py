from __future__ import annotations
import typing
import numpy as np
from ..types import *
from ..errors import InvalidArgumentError
from ..guards import ensure_function
from ..sorting import default_comparer

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable

class StatsAccessor(Generic[T]):
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def _get_values(self, selector: Optional[Selector[T, Union[int, float]]] = None) -> np.ndarray:
        """helper to extract numeric values for statistical operations."""
        source = self._enumerable.select(selector) if selector else self._enumerable
        data = source.to_list()
        if data and not all(isinstance(x, (int, float, np.number)) and not isinstance(x, bool) for x in data):
            raise InvalidArgumentError("sequence contains non-numeric types for statistical operation.")
        if any(isinstance(x, (float, np.floating)) for x in data):
            return np.asarray(data, dtype=float)
        # python ints in an object array add without int64 wraparound
        return np.asarray([int(x) for x in data], dtype=object)

    def sum(self, selector: Optional[Selector[T, Union[int, float]]] = None) -> Union[int, float]:
        """calc sum, NO_VALUE for an empty sequence"""
        values = self._get_values(selector)
        if values.size == 0: return NO_VALUE
        result = np.sum(values)
        return result.item() if hasattr(result, 'item') else result

    def average(self, selector: Optional[Selector[T, Union[int, float]]] = None) -> float:
        """calc average, NO_VALUE for an empty sequence"""
        values = self._get_values(selector)
        if values.size == 0: return NO_VALUE
        return float(np.mean(values))

    def median(self, selector: Optional[Selector[T, Union[int, float]]] = None) -> float:
        """
        middle value, NO_VALUE for an empty sequence. only the one or two middle
        positions are sorted into place, not the whole sequence.
        """
        values = self._enumerable.select(selector) if selector else self._enumerable
        values = values.to_seekable()
        n = values.count()
        if n == 0: return NO_VALUE
        middle = values.order_by().skip((n - 1) // 2).take(2 - n % 2).to_list()
        return (middle[0] + middle[-1]) / 2 if n % 2 == 0 else middle[0]

    def stats(self, comparer: Optional[Comparer] = None) -> SequenceStats[T]:
        """count, min and max in one pass. min and max are NO_VALUE when empty."""
        comparer = comparer or default_comparer
        ensure_function(comparer, "comparer")
        count, minimum, maximum = 0, NO_VALUE, NO_VALUE
        for item in self._enumerable:
            if minimum is NO_VALUE or comparer(item, minimum) < 0: minimum = item
            if maximum is NO_VALUE or comparer(item, maximum) > 0: maximum = item
            count += 1
        return SequenceStats(count, minimum, maximum)

    def min(self, comparer: Optional[Comparer] = None) -> T:
        """find minimum, NO_VALUE for an empty sequence"""
        return self.stats(comparer).min

    def max(self, comparer: Optional[Comparer] = None) -> T:
        """find maximum, NO_VALUE for an empty sequence"""
        return self.stats(comparer).max
