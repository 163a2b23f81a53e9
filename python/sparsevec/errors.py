"""
Error taxonomy for the sparse engine.

Every bounds violation is reported as a typed exception instead of quietly
returning the default value, so a logic error never looks like sparse
absence. The classes also derive from the matching builtin (ValueError,
IndexError) so that callers that only know the builtins still catch them.
"""


class SparseError(Exception):
    """Base class for all errors raised by sparsevec."""


class InvalidLength(SparseError, ValueError):
    """A vector length or matrix dimension that cannot be represented."""

    def __init__(self, length, reason="must be a non-negative integer"):
        self.length = length
        self.reason = reason
        super().__init__(f"invalid length {length!r}: {reason}")


class IndexOutOfRange(SparseError, IndexError):
    """Access beyond the declared length of a vector."""

    axis = "index"

    def __init__(self, index, bound):
        self.index = index
        self.bound = bound
        super().__init__(f"{self.axis} {index} out of range for dimension {bound}")


class RowOutOfRange(IndexOutOfRange):
    axis = "row"


class ColumnOutOfRange(IndexOutOfRange):
    axis = "column"


class DimensionMismatch(SparseError, ValueError):
    """Operands or constructor arguments whose sizes disagree."""


class DuplicateIndex(SparseError, ValueError):
    """The same index was given more than once when building a vector."""

    def __init__(self, index):
        self.index = index
        super().__init__(f"index {index} appeared multiple times")


__all__ = [
    "SparseError",
    "InvalidLength",
    "IndexOutOfRange",
    "RowOutOfRange",
    "ColumnOutOfRange",
    "DimensionMismatch",
    "DuplicateIndex",
]
