r"""
      _ _ __   __ _ _   _
  ___(_) `_ \ / _` | | | |
 (_-<| | | | | (_| | |_| |
 /__/|_|_| |_|\__, |\__, |
                 |_||___/
"""

# expose the main classes
from .enumerable import Enumerable, OrderedEnumerable, GroupEnumerable, SourceKind, Restriction

# expose the factory functions
from .factories import (
    from_iterable,
    from_range,
    repeat,
    empty,
    generate,
    sinqy,
    P,
)

# expose the standalone sort
from .sorting import sort, partial_quicksort, default_comparer

# expose supporting types
from .types import (
    NO_VALUE,
    EqualityComparer,
    EqualityMode,
    SequenceStats,
)

# expose the error taxonomy
from .errors import (
    SinqyError,
    InvalidArgumentError,
    IndexOutOfRangeError,
    EmptySequenceError,
    MultipleElementsError,
    UnsupportedOperationError,
)

# define what `import *` does
__all__ = [
    "Enumerable",
    "OrderedEnumerable",
    "GroupEnumerable",
    "SourceKind",
    "Restriction",
    "from_iterable",
    "from_range",
    "repeat",
    "empty",
    "generate",
    "sinqy",
    "P",
    "sort",
    "partial_quicksort",
    "default_comparer",
    "NO_VALUE",
    "EqualityComparer",
    "EqualityMode",
    "SequenceStats",
    "SinqyError",
    "InvalidArgumentError",
    "IndexOutOfRangeError",
    "EmptySequenceError",
    "MultipleElementsError",
    "UnsupportedOperationError",
]
