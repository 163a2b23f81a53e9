"""Argument checks shared by the vector and matrix containers."""

from operator import index as op_index

from .entry_store import MAX_LENGTH
from .errors import IndexOutOfRange, InvalidLength


def check_length(length):
    """Validate a vector length or matrix dimension and return it as an int"""
    try:
        length = op_index(length)
    except TypeError:
        raise InvalidLength(length, "must be an integer") from None
    if length < 0:
        raise InvalidLength(length)
    if length > MAX_LENGTH:
        raise InvalidLength(length, f"exceeds the maximum of {MAX_LENGTH}")
    return length


def check_index(index, bound, error=IndexOutOfRange):
    """
    Validate ``0 <= index < bound``. Negative indices are rejected rather
    than counted from the end: indices are unsigned positions.
    """
    try:
        index = op_index(index)
    except TypeError:
        raise TypeError(f"indices must be integers, not {type(index).__name__}") from None
    if index < 0 or index >= bound:
        raise error(index, bound)
    return index
