"""
Const views: read-only, non-owning windows onto a sparse or dense vector.

A view holds nothing but a reference to its source and the source's
length, so copying one is cheap and never copies vector data. Reads always
go through the source's value-returning get(), even for reference kinds,
so a view cannot be used to reach a mutable slot. The view observes the
source as it is at the time of each read; it must not outlive the source
in any meaningful sense, and concurrent readers are only safe while nobody
mutates the source.
"""

from .vector_dense import DenseVector
from .vector_sparse import SparseVector


class ConstVector:
    __slots__ = ("_source", "_length")

    def __init__(self, source):
        if isinstance(source, ConstVector):
            source = source._source
        if not isinstance(source, (SparseVector, DenseVector)):
            raise TypeError(
                f"a const view needs a SparseVector or DenseVector, not {type(source).__name__}")
        self._source = source
        self._length = source.length

    def length(self):
        return self._length

    def __len__(self):
        return self._length

    @property
    def kind(self):
        return self._source.kind

    def get(self, index):
        return self._source.get(index)

    def __getitem__(self, index):
        return self._source.get(index)

    def iterate(self):
        return self._source.iterate()

    def __iter__(self):
        return self._source.iterate()

    def to_dense(self) -> DenseVector:
        """Materialized copy of the current source contents"""
        if isinstance(self._source, DenseVector):
            return self._source.copy()
        return self._source.to_dense()

    def numpy(self):
        return self.to_dense().values

    def is_view_of(self, vector):
        return self._source is vector

    def __copy__(self):
        return ConstVector(self._source)

    def __deepcopy__(self, memo):
        # the source is borrowed, deep copies share it too
        return ConstVector(self._source)

    def __repr__(self):
        return f"ConstVector({self._source!r})"


__all__ = ["ConstVector"]
