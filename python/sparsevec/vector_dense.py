"""
Dense companion vector: a fully materialized, fixed-length numpy array of
one scalar kind. It is the bulk conversion target and source for sparse
vectors and a valid backing store for read-only views.
"""

import numpy as np

from . import scalar_kinds
from ._checks import check_index, check_length
from .entry_store import Entry
from .errors import DimensionMismatch


class DenseVector:
    # pinned by the per-kind subclasses in bindings.py
    kind = None

    def __init__(self, length, kind=None, values=None):
        self.length = check_length(length)
        if kind is None:
            kind = type(self).kind if type(self).kind is not None else scalar_kinds.default_kind()
        self.kind = kind

        if values is None:
            self.values = kind.full(self.length)
        else:
            values = np.array(kind.coerce_array(values)).reshape(-1)
            if values.shape[0] != self.length:
                raise DimensionMismatch(
                    f"expected {self.length} values, got {values.shape[0]}")
            self.values = values

    @classmethod
    def from_numpy(cls, array, kind=None):
        """Copy a one dimensional array (or any sequence) into a new vector"""
        array = np.asarray(array)
        if array.ndim != 1:
            raise DimensionMismatch(f"expected a one dimensional array, got shape {array.shape}")
        return cls(array.shape[0], kind, array)

    def __len__(self):
        return self.length

    def __repr__(self):
        return f"{type(self).__name__}({self.values.tolist()}, kind={self.kind})"

    def __str__(self):
        return self.values.__str__()

    def __eq__(self, other):
        """Value-wise equality against another dense vector or a sequence"""
        if isinstance(other, DenseVector):
            other = other.values
        try:
            other = np.asarray(other)
        except (TypeError, ValueError):
            return NotImplemented
        if other.shape != self.values.shape:
            return False
        return bool(np.array_equal(self.values, other, equal_nan=self.values.dtype.kind == "f"))

    __hash__ = None

    def get(self, index):
        index = check_index(index, self.length)
        return self.values[index]

    def set(self, index, value):
        index = check_index(index, self.length)
        self.values[index] = self.kind.coerce(value)

    def __getitem__(self, index):
        return self.get(index)

    def __setitem__(self, index, value):
        self.set(index, value)

    def iterate(self):
        """Non-default entries in increasing index order, like a sparse vector"""
        values = self.values
        for i in np.flatnonzero(~self.kind.default_mask(values)):
            yield Entry(int(i), values[i])

    def numpy(self):
        """Convert to a numpy array (a copy)"""
        return self.values.copy()

    def copy(self):
        return type(self)(self.length, self.kind, self.values)

    def to_sparse(self):
        from .vector_sparse import SparseVector
        return SparseVector.from_dense(self)

    def view(self):
        """Read-only view sharing this vector's storage"""
        from .vector_const import ConstVector
        return ConstVector(self)


__all__ = ["DenseVector"]
