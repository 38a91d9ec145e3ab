"""
error types raised by sinqy.

every error derives from SinqyError and from the builtin exception a caller
would naturally catch for the same condition, so `except ValueError` and
friends keep working.
"""


class SinqyError(Exception):
    """base class for every error raised by sinqy"""
    pass


class InvalidArgumentError(SinqyError, TypeError):
    """a source is not iterable, or a selector/predicate/comparer is not callable"""
    pass


class IndexOutOfRangeError(SinqyError, IndexError):
    """element_at was asked for a position the sequence does not have"""
    pass


class EmptySequenceError(SinqyError, ValueError):
    """first/last/single on a sequence with no elements"""
    pass


class MultipleElementsError(SinqyError, ValueError):
    """single/single_or_default on a sequence with more than one element"""
    pass


class UnsupportedOperationError(SinqyError, NotImplementedError):
    """legacy alias, positional access on an ordering, or a builder call after resolution"""
    pass
