"""
The sparse vector: an EntryStore plus a declared logical length.

SparseVector is a thin owner of its store. Every public accessor checks the
index against the declared length first and only then delegates to the
store, so a failing call never leaves a half-applied mutation behind. The
class is written once and parameterized by a ScalarKind; the per-kind
classes in bindings.py only pin the kind.
"""

import logging

import numpy as np

from . import scalar_kinds
from ._checks import check_index, check_length
from .entry_store import EntryStore, Slot
from .errors import DimensionMismatch, DuplicateIndex, IndexOutOfRange
from .vector_dense import DenseVector

logger = logging.getLogger(__name__)


class SparseVector:
    """
    A vector of fixed length that stores only its non-default entries.

    get() always returns a value. The "native" accessor at() follows the
    kind: reference kinds (real32) hand out a Slot that can be written and
    accumulated into in place, value kinds return the value. get_mut() is
    the explicit get-or-insert-default path; a default written back through
    a slot stays stored until compact() is called.
    """

    # pinned by the per-kind subclasses in bindings.py
    kind = None
    matrix_type = None

    def __init__(self, length, kind=None):
        self.length = check_length(length)
        if kind is None:
            kind = type(self).kind if type(self).kind is not None else scalar_kinds.default_kind()
        self.kind = kind
        self._store = EntryStore(kind)

    @classmethod
    def from_entries(cls, length, indices, values, kind=None):
        """
        Build a vector from parallel index and value sequences. Indices
        need not be sorted but must be unique and in range; default values
        are skipped.

        Raises:
            DimensionMismatch: if the sequences differ in length.
            IndexOutOfRange: if an index is not below ``length``.
            DuplicateIndex: if an index appears twice.
        """
        indices = list(indices)
        values = list(values)
        if len(indices) != len(values):
            raise DimensionMismatch("number of indices does not match number of values")

        vector = cls(length, kind)
        seen = set()
        checked = []
        for i in indices:
            i = check_index(i, vector.length)
            if i in seen:
                raise DuplicateIndex(i)
            seen.add(i)
            checked.append(i)

        order = np.argsort(np.asarray(checked, dtype=np.int64), kind="stable")
        sorted_indices = np.asarray(checked, dtype=np.int64)[order]
        sorted_values = vector.kind.coerce_array(values)[order]
        vector._store = EntryStore.from_sorted(vector.kind, sorted_indices, sorted_values)
        return vector

    @classmethod
    def from_dense(cls, dense: DenseVector):
        """
        Convert a dense companion vector. One increasing scan over the
        dense values, so the store comes out sorted without a sort pass.
        A class bound to a kind converts the values into that kind.
        """
        vector = cls(dense.length, cls.kind if cls.kind is not None else dense.kind)
        positions = np.arange(dense.length, dtype=np.int64)
        vector._store = EntryStore.from_sorted(vector.kind, positions, dense.values)
        logger.debug("converted dense vector of length %d to %d stored entries",
                     dense.length, vector.nonzero_count())
        return vector

    @property
    def store(self) -> EntryStore:
        return self._store

    def __len__(self):
        return self.length

    def __repr__(self):
        pairs = ", ".join(f"{i}: {v}" for i, v in self._store.iterate())
        return f"{type(self).__name__}({{{pairs}}}, length={self.length}, kind={self.kind})"

    def __str__(self):
        return self.numpy().__str__()

    ############################
    ### GET AND SET ELEMENTS ###
    ############################
    def get(self, index):
        index = check_index(index, self.length)
        return self._store.get(index)

    def set(self, index, value):
        index = check_index(index, self.length)
        self._store.set(index, value)

    def get_mut(self, index) -> Slot:
        index = check_index(index, self.length)
        return self._store.mutable_slot(index)

    def at(self, index):
        """Native accessor: a Slot for reference kinds, the value otherwise"""
        if self.kind.by_reference:
            return self.get_mut(index)
        return self.get(index)

    def __getitem__(self, index):
        return self.get(index)

    def __setitem__(self, index, value):
        self.set(index, value)

    def nonzero_count(self):
        return self._store.size

    def iterate(self):
        return self._store.iterate()

    def __iter__(self):
        return self._store.iterate()

    def iterate_from(self, start):
        start = min(max(int(start), 0), self.length)
        return self._store.iterate_from(start)

    def compact(self):
        return self._store.compact()

    def clear(self):
        self._store.clear()

    ##################
    ### CONVERSION ###
    ##################
    def to_dense(self) -> DenseVector:
        dense = DenseVector(self.length, self.kind)
        dense.values[self._store.indices.astype(np.intp)] = self._store.values
        return dense

    def numpy(self):
        """Convert to a numpy array"""
        return self.to_dense().values

    def view(self):
        """Read-only view sharing this vector's storage"""
        from .vector_const import ConstVector
        return ConstVector(self)

    def copy(self):
        vector = type(self)(self.length, self.kind)
        vector._store = self._store.copy()
        return vector

    #################################
    ### SLICING AND CONCATENATION ###
    #################################
    def slice(self, start, stop):
        """Copy of the entries in [start, stop), reindexed from zero"""
        if not 0 <= start <= stop <= self.length:
            raise IndexOutOfRange((start, stop), self.length)
        store = self._store
        lo = int(np.searchsorted(store.indices, start))
        hi = int(np.searchsorted(store.indices, stop))

        out = type(self)(stop - start, self.kind)
        out._store = EntryStore(
            self.kind,
            (store.indices[lo:hi] - start).astype(store.indices.dtype),
            store.values[lo:hi].copy(),
        )
        return out

    def append(self, other):
        """New vector holding this vector's entries followed by ``other``'s"""
        length = check_length(self.length + len(other))
        entries = list(other.iterate())
        tail_indices = np.array([e.index for e in entries], dtype=np.int64) + self.length
        tail_values = self.kind.coerce_array([e.value for e in entries])

        out = type(self)(length, self.kind)
        out._store = EntryStore.from_sorted(
            self.kind,
            np.concatenate([self._store.indices.astype(np.int64), tail_indices]),
            np.concatenate([self._store.values, tail_values]),
        )
        return out

    def append_scalars(self, *values):
        """New vector with ``values`` appended, stored like any other entries"""
        return self.append(DenseVector(len(values), self.kind, values))

    def assign(self, other):
        """
        Overwrite this vector in place with the contents of ``other`` (a
        sparse, dense or const vector of the same length). Values are
        converted into this vector's kind; nothing is changed if that fails.
        """
        if other is self:
            return
        if len(other) != self.length:
            raise DimensionMismatch(f"vector lengths differ: {self.length} != {len(other)}")

        if self.kind.is_default(other.kind.default_val):
            entries = list(other.iterate())
            indices = np.array([e.index for e in entries], dtype=np.int64)
            values = self.kind.coerce_array([e.value for e in entries])
        else:
            # absent entries of other are not absent here
            indices = np.arange(self.length, dtype=np.int64)
            values = self.kind.coerce_array(other.numpy())
        self._store = EntryStore.from_sorted(self.kind, indices, values)

    def as_matrix(self, row_count, col_count):
        """
        Reshape into a row_count x col_count sparse matrix, filled row-major.
        The matrix holds copies of the entries.
        """
        from .matrix_sparse import SparseMatrix
        if row_count * col_count != self.length:
            raise DimensionMismatch(
                f"a {row_count}x{col_count} matrix does not fit a vector of length {self.length}")
        matrix_type = type(self).matrix_type or SparseMatrix
        matrix = matrix_type(row_count, col_count, self.kind)
        for i, row in enumerate(matrix.rows):
            row._store = self.slice(i * col_count, (i + 1) * col_count).store
        return matrix

    ##############################
    ### MAPPING AND REDUCTIONS ###
    ##############################
    def map(self, f):
        """
        Replace every stored value v by f(v), in place. Absent entries are
        not visited; results equal to the default are dropped.
        """
        store = self._store
        values = [self.kind.coerce(f(v)) for v in store.values]
        store.values = np.array(values, dtype=self.kind.dtype).reshape(-1)
        store.compact()

    def reduce(self, f, initial):
        """Fold f(result, value) over the stored values in index order"""
        result = initial
        for value in self._store.values:
            result = f(result, value)
        return result

    ##################
    ### REORDERING ###
    ##################
    def swap(self, i, j):
        i = check_index(i, self.length)
        j = check_index(j, self.length)
        vi, vj = self._store.get(i), self._store.get(j)
        self._store.set(i, vj)
        self._store.set(j, vi)

    def permute(self, pi):
        """
        Reorder in place so that afterwards ``v[i]`` holds the old ``v[pi[i]]``.

        Raises:
            DimensionMismatch: if ``pi`` does not have one entry per index.
            ValueError: if ``pi`` is not a permutation of range(length).
        """
        pi = np.asarray(pi)
        if pi.shape != (self.length,):
            raise DimensionMismatch(f"permutation must have length {self.length}")
        if pi.size and (pi.dtype.kind not in "iu"
                        or not np.array_equal(np.sort(pi), np.arange(self.length))):
            raise ValueError("invalid permutation")

        inverse = np.empty(self.length, dtype=np.int64)
        inverse[pi] = np.arange(self.length)

        store = self._store
        new_indices = inverse[store.indices.astype(np.intp)]
        order = np.argsort(new_indices, kind="stable")
        store.indices = new_indices[order].astype(store.indices.dtype)
        store.values = store.values[order]

    def reverse_order(self):
        """Reverse in place: index i moves to length - 1 - i"""
        store = self._store
        reversed_indices = self.length - 1 - store.indices.astype(np.int64)
        store.indices = reversed_indices[::-1].astype(store.indices.dtype)
        store.values = store.values[::-1].copy()

    def sort(self, reverse=False):
        """
        Sort the values in place, defaults included: in ascending order the
        values below the default move to the front, the ones above it to the
        back and the absent entries fill the gap between them.
        """
        kind = self.kind
        if kind.is_default(np.nan):
            raise ValueError("cannot sort around a NaN default")
        store = self._store
        values = np.sort(store.values[~kind.default_mask(store.values)])
        leading = int(np.count_nonzero(values < kind.default_val))
        trailing = values.size - leading
        indices = np.concatenate([
            np.arange(leading, dtype=np.int64),
            np.arange(self.length - trailing, self.length, dtype=np.int64),
        ])
        if reverse:
            indices = (self.length - 1 - indices)[::-1]
            values = values[::-1]
        store.indices = indices.astype(store.indices.dtype)
        store.values = values.copy()


__all__ = ["SparseVector"]
