"""
Entry store: the ordered (index, value) pairs behind one sparse vector.

The pairs live in two parallel numpy arrays. Indices are kept strictly
increasing and unique, and default-valued entries are elided, so a lookup
is a binary search and a traversal is a plain walk over both arrays.
Inserting or removing an entry shifts the tail of both arrays (O(n));
sparse structures are expected to be read far more often than their
pattern changes.

The one place the "no default entries" rule may be broken is the mutable
slot path: mutable_slot() materializes a default-valued entry and a write
through the returned Slot is never compacted on the spot. compact() (or the
next set() at that index) restores the invariant.
"""

import logging
from typing import Any, NamedTuple, Optional

import numpy as np

from .scalar_kinds import ScalarKind

logger = logging.getLogger(__name__)

_index_type = np.uint32
# indices are stored as uint32, so lengths up to 2**32 are representable
MAX_LENGTH = int(np.iinfo(_index_type).max) + 1


class Entry(NamedTuple):
    index: int
    value: Any


###################
### ENTRY STORE ###
###################
class EntryStore:
    def __init__(self,
                 kind: ScalarKind,
                 indices: np.ndarray = None,
                 values: np.ndarray = None):
        self.kind = kind

        if indices is None:
            self.indices = np.empty((0,), dtype=_index_type)
        else:
            self.indices = indices

        if values is None:
            self.values = kind.empty()
        else:
            self.values = values

        EntryStore.check(kind, self.indices, self.values)

    @staticmethod
    def check(kind, indices, values):
        assert indices.dtype == _index_type
        assert values.dtype == kind.dtype
        assert indices.ndim == 1
        assert values.ndim == 1
        assert indices.shape[0] == values.shape[0]

    @classmethod
    def from_sorted(cls, kind: ScalarKind, indices, values):
        """
        Build a store from indices that are already strictly increasing,
        dropping every value equal to the kind's default. No sort pass is
        performed, the caller vouches for the order.
        """
        indices = np.asarray(indices, dtype=_index_type).reshape(-1)
        values = kind.coerce_array(values).reshape(-1)
        if indices.shape[0] != values.shape[0]:
            raise ValueError("number of indices does not match number of values")
        keep = ~kind.default_mask(values)
        return cls(kind, indices[keep], values[keep])

    @property
    def size(self):
        """number of stored entries"""
        return self.values.size

    def __len__(self):
        return self.size

    def __iter__(self):
        return self.iterate()

    def __repr__(self):
        pairs = ", ".join(f"{i}: {v}" for i, v in self.iterate())
        return f"EntryStore({{{pairs}}}, kind={self.kind})"

    ##############
    ### LOOKUP ###
    ##############
    def _locate(self, index):
        """Return (position, found) where position is the sorted insertion point"""
        pos = int(np.searchsorted(self.indices, _index_type(index)))
        found = pos < self.size and int(self.indices[pos]) == index
        return pos, found

    def find(self, index) -> Optional[int]:
        """Position of ``index`` in the store, or None when it is not stored"""
        pos, found = self._locate(index)
        return pos if found else None

    def get(self, index):
        pos, found = self._locate(index)
        if found:
            return self.values[pos]
        return self.kind.default_val

    ################
    ### MUTATION ###
    ################
    def _insert(self, pos, index, value):
        self.indices = np.insert(self.indices, pos, _index_type(index))
        self.values = np.insert(self.values, pos, value)

    def _remove(self, pos):
        self.indices = np.delete(self.indices, pos)
        self.values = np.delete(self.values, pos)

    def set(self, index, value):
        value = self.kind.coerce(value)
        pos, found = self._locate(index)

        if self.kind.is_default(value):
            if found:
                self._remove(pos)
            return

        if found:
            self.values[pos] = value
        else:
            self._insert(pos, index, value)

    def mutable_slot(self, index) -> "Slot":
        """
        Get-or-insert-default: make sure ``index`` has a stored entry and
        return a Slot referring to it. The materialized entry holds the
        default value until something is written through the slot.
        """
        pos, found = self._locate(index)
        if not found:
            self._insert(pos, index, self.kind.default_val)
        return Slot(self, index)

    def compact(self) -> int:
        """Remove default-valued entries; returns how many were dropped"""
        mask = self.kind.default_mask(self.values)
        removed = int(np.count_nonzero(mask))
        if removed:
            self.indices = self.indices[~mask]
            self.values = self.values[~mask]
            logger.debug("compacted %d default-valued entries", removed)
        return removed

    def clear(self):
        self.indices = np.empty((0,), dtype=_index_type)
        self.values = self.kind.empty()

    def copy(self):
        return EntryStore(self.kind, self.indices.copy(), self.values.copy())

    #################
    ### TRAVERSAL ###
    #################
    def iterate(self):
        """Lazy traversal of the entries in increasing index order"""
        return self._walk(0)

    def iterate_from(self, start):
        """Lazy traversal of the entries whose index is >= ``start``"""
        pos = int(np.searchsorted(self.indices, _index_type(start))) if start > 0 else 0
        return self._walk(pos)

    def _walk(self, pos):
        indices, values = self.indices, self.values
        for k in range(pos, indices.shape[0]):
            yield Entry(int(indices[k]), values[k])

    def first(self) -> Optional[Entry]:
        if self.size == 0:
            return None
        return Entry(int(self.indices[0]), self.values[0])

    def last(self) -> Optional[Entry]:
        if self.size == 0:
            return None
        return Entry(int(self.indices[-1]), self.values[-1])

    def is_compact(self):
        """True when indices are strictly increasing and no default is stored"""
        if self.size == 0:
            return True
        increasing = bool(np.all(self.indices[1:] > self.indices[:-1]))
        return increasing and not bool(np.any(self.kind.default_mask(self.values)))


#############
### SLOTS ###
#############
class Slot:
    """
    Mutable reference to the entry of one index in an EntryStore.

    The slot is bound to the index rather than an array position, so it
    stays valid when other entries are inserted or removed. Writes go
    straight into the stored value without compaction; if the entry has
    been compacted away in the meantime, a write materializes it again.
    """

    __slots__ = ("_store", "index")

    def __init__(self, store: EntryStore, index: int):
        self._store = store
        self.index = index

    def get(self):
        return self._store.get(self.index)

    def set(self, value):
        store = self._store
        value = store.kind.coerce(value)
        pos, found = store._locate(self.index)
        if found:
            store.values[pos] = value
        else:
            store._insert(pos, self.index, value)

    def add(self, delta):
        """In-place accumulation, the reason slots exist"""
        self.set(self.get() + delta)

    @property
    def value(self):
        return self.get()

    @value.setter
    def value(self, value):
        self.set(value)

    def __iadd__(self, delta):
        self.add(delta)
        return self

    def __repr__(self):
        return f"Slot(index={self.index}, value={self.get()})"
