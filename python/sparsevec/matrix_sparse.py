"""
Sparse matrix stored row-major as one SparseVector per row.

Row and column bounds are checked up front and reported with their own
error types (RowOutOfRange, ColumnOutOfRange) instead of the generic
vector-level IndexOutOfRange. row() hands out a ConstVector over the row
vector itself, so passing a row to a reader such as vector_ops.dot never
copies it.
"""

import logging

import numpy as np

from . import scalar_kinds
from ._checks import check_index, check_length
from .errors import ColumnOutOfRange, DimensionMismatch, RowOutOfRange
from .vector_const import ConstVector
from .vector_sparse import SparseVector

logger = logging.getLogger(__name__)


class SparseMatrix:
    # pinned by the per-kind subclasses in bindings.py
    kind = None
    vector_type = SparseVector

    def __init__(self, row_count, col_count, kind=None):
        self.row_count = check_length(row_count)
        self.col_count = check_length(col_count)
        if kind is None:
            kind = type(self).kind if type(self).kind is not None else scalar_kinds.default_kind()
        self.kind = kind
        self.rows = [self.vector_type(self.col_count, kind) for _ in range(self.row_count)]
        logger.debug("allocated %dx%d sparse matrix of kind %s",
                     self.row_count, self.col_count, kind.name)

    @classmethod
    def from_rows(cls, vectors, kind=None):
        """
        Build a matrix from a sequence of vectors (sparse, dense or views).
        The rows are copied, the matrix never shares storage with its input.
        """
        vectors = list(vectors)
        if kind is None and vectors:
            kind = vectors[0].kind
        col_count = len(vectors[0]) if vectors else 0
        matrix = cls(len(vectors), col_count, kind)
        for i, v in enumerate(vectors):
            if len(v) != col_count:
                raise DimensionMismatch(
                    f"row {i} has length {len(v)}, expected {col_count}")
            row = matrix.rows[i]
            for index, value in v.iterate():
                row.set(index, value)
        return matrix

    @classmethod
    def from_numpy(cls, array, kind=None):
        array = np.asarray(array)
        if array.ndim != 2:
            raise DimensionMismatch(f"expected a two dimensional array, got shape {array.shape}")
        matrix = cls(array.shape[0], array.shape[1], kind)
        kind = matrix.kind
        for i in range(matrix.row_count):
            values = kind.coerce_array(array[i])
            cols = np.flatnonzero(~kind.default_mask(values))
            matrix.rows[i] = matrix.vector_type.from_entries(
                matrix.col_count, cols.tolist(), values[cols], kind)
        return matrix

    @property
    def shape(self):
        return (self.row_count, self.col_count)

    def __repr__(self):
        return (f"{type(self).__name__}(shape={self.shape}, "
                f"nonzero={self.nonzero_count()}, kind={self.kind})")

    def __str__(self):
        return self.to_numpy().__str__()

    def _check(self, row, col):
        row = check_index(row, self.row_count, RowOutOfRange)
        col = check_index(col, self.col_count, ColumnOutOfRange)
        return row, col

    ############################
    ### GET AND SET ELEMENTS ###
    ############################
    def get(self, row, col):
        row, col = self._check(row, col)
        return self.rows[row].get(col)

    def set(self, row, col, value):
        row, col = self._check(row, col)
        self.rows[row].set(col, value)

    def get_mut(self, row, col):
        row, col = self._check(row, col)
        return self.rows[row].get_mut(col)

    def at(self, row, col):
        row, col = self._check(row, col)
        return self.rows[row].at(col)

    def __getitem__(self, idxs):
        row, col = idxs
        return self.get(row, col)

    def __setitem__(self, idxs, value):
        row, col = idxs
        self.set(row, col, value)

    ########################
    ### ROWS AND COLUMNS ###
    ########################
    def row(self, row_index) -> ConstVector:
        """Zero-copy read-only view of one row"""
        row_index = check_index(row_index, self.row_count, RowOutOfRange)
        return ConstVector(self.rows[row_index])

    def column(self, col_index) -> SparseVector:
        """Column extracted into a new vector of length row_count"""
        col_index = check_index(col_index, self.col_count, ColumnOutOfRange)
        out = self.vector_type(self.row_count, self.kind)
        for i, r in enumerate(self.rows):
            pos = r.store.find(col_index)
            if pos is not None:
                out.set(i, r.store.values[pos])
        return out

    def nonzero_count(self):
        return sum(r.nonzero_count() for r in self.rows)

    def iterate(self):
        """Stored (row, col, value) triples, row-major"""
        for i, r in enumerate(self.rows):
            for col, value in r.iterate():
                yield i, col, value

    def compact(self):
        return sum(r.compact() for r in self.rows)

    ##################
    ### CONVERSION ###
    ##################
    def copy(self):
        matrix = type(self)(self.row_count, self.col_count, self.kind)
        matrix.rows = [r.copy() for r in self.rows]
        return matrix

    def to_numpy(self):
        out = np.full(self.shape, self.kind.default_val, dtype=self.kind.dtype)
        for i, r in enumerate(self.rows):
            out[i, r.store.indices.astype(np.intp)] = r.store.values
        return out


__all__ = ["SparseMatrix"]
