"""
Read-only computations over vector-like operands.

Every function accepts SparseVector, DenseVector or ConstVector operands
interchangeably: all three expose len(), .kind and iterate(), and iterate()
yields the non-default entries in increasing index order. The binary
operations walk both entry streams in lockstep, so their cost is linear in
the number of stored entries rather than in the vector length.
"""

from collections import deque
from typing import Callable

import numpy as np

from .entry_store import EntryStore
from .errors import DimensionMismatch
from .vector_sparse import SparseVector


def _check_same_length(a, b):
    if len(a) != len(b):
        raise DimensionMismatch(f"vector lengths differ: {len(a)} != {len(b)}")


######################
### JOINT ITERATOR ###
######################
def joint_iterate(a, b):
    """
    Merge the entries of ``a`` and ``b``: yields (index, a_value, b_value)
    for every index stored in at least one of them, in increasing order.
    The missing side is filled in with its kind's default value.
    """
    _check_same_length(a, b)
    a_default = a.kind.default_val
    b_default = b.kind.default_val

    a_it = iter(a.iterate())
    b_it = iter(b.iterate())
    a_entry = next(a_it, None)
    b_entry = next(b_it, None)

    while a_entry is not None and b_entry is not None:
        if a_entry.index == b_entry.index:
            yield a_entry.index, a_entry.value, b_entry.value
            a_entry = next(a_it, None)
            b_entry = next(b_it, None)
        elif a_entry.index < b_entry.index:
            yield a_entry.index, a_entry.value, b_default
            a_entry = next(a_it, None)
        else:
            yield b_entry.index, a_default, b_entry.value
            b_entry = next(b_it, None)

    while a_entry is not None:
        yield a_entry.index, a_entry.value, b_default
        a_entry = next(a_it, None)

    while b_entry is not None:
        yield b_entry.index, a_default, b_entry.value
        b_entry = next(b_it, None)


################
### EWISE OP ###
################
def _item(x):
    # plain python numbers, so integer kinds accumulate without wrapping
    return x.item() if isinstance(x, np.generic) else x


def _wide(values):
    values = np.asarray(values)
    if values.dtype.kind in "iub":
        return values.astype(np.int64)
    return values.astype(np.float64)


def _result(a, out, indices, values) -> SparseVector:
    if out is None:
        out = SparseVector(len(a), a.kind)
    out._store = EntryStore.from_sorted(
        out.kind,
        np.array(indices, dtype=np.int64),
        out.kind.coerce_array(values),
    )
    return out


def ewise_op(a, b, op: Callable, out: SparseVector = None) -> SparseVector:
    """
    Combine ``a`` and ``b`` entry by entry into a SparseVector, ``out`` if
    given and otherwise a new one of ``a``'s kind. Only indices stored in
    either operand are visited, so ``op(default, default)`` must give the
    default back; results equal to the default are dropped.
    """
    _check_same_length(a, b)
    kind = out.kind if out is not None else a.kind
    if out is not None and len(out) != len(a):
        raise DimensionMismatch(f"output length {len(out)} != {len(a)}")
    if not kind.is_default(op(_item(a.kind.default_val), _item(b.kind.default_val))):
        raise ValueError("operation does not map default values to the default value")

    new_indices = deque()
    new_values = deque()
    for index, a_val, b_val in joint_iterate(a, b):
        new_val = kind.coerce(op(_item(a_val), _item(b_val)))
        if not kind.is_default(new_val):
            new_indices.append(index)
            new_values.append(new_val)

    return _result(a, out, new_indices, np.array(new_values, dtype=kind.dtype))


def ewise_add(a, b, out=None):
    return ewise_op(a, b, lambda x, y: x + y, out)


def ewise_sub(a, b, out=None):
    return ewise_op(a, b, lambda x, y: x - y, out)


def ewise_mul(a, b, out=None):
    return ewise_op(a, b, lambda x, y: x * y, out)


#################
### SCALAR OP ###
#################
def scalar_op(a, val, op: Callable, out: SparseVector = None) -> SparseVector:
    """
    Apply ``op(x, val)`` to every element of ``a``. ``op`` is called on
    numpy arrays. If it keeps the default in place only the stored entries
    are computed; otherwise every index gets a value.
    """
    kind = out.kind if out is not None else a.kind
    if out is not None and len(out) != len(a):
        raise DimensionMismatch(f"output length {len(out)} != {len(a)}")

    if kind.is_default(op(_item(a.kind.default_val), val)):
        entries = list(a.iterate())
        indices = [e.index for e in entries]
        values = op(_wide([e.value for e in entries]), val)
    else:
        indices = np.arange(len(a), dtype=np.int64)
        values = op(_wide(a.numpy()), val)
    return _result(a, out, indices, values)


def scalar_add(a, val, out=None):
    return scalar_op(a, val, lambda x, y: x + y, out)


def scalar_sub(a, val, out=None):
    return scalar_op(a, val, lambda x, y: x - y, out)


def scalar_mul(a, val, out=None):
    return scalar_op(a, val, lambda x, y: x * y, out)


##################
### REDUCTIONS ###
##################
def _dense_pairs(a, b):
    a_values = a.numpy()
    b_values = b.numpy()
    for i in range(len(a)):
        yield i, a_values[i], b_values[i]


def dot(a, b):
    """
    Sum of products over the indices stored in both operands. When either
    default is nonzero every index contributes and the operands are
    materialized instead.
    """
    _check_same_length(a, b)
    if a.kind.default_val != 0 or b.kind.default_val != 0:
        return sum(_item(x) * _item(y) for _, x, y in _dense_pairs(a, b))

    result = 0
    for _, x, y in joint_iterate(a, b):
        result += _item(x) * _item(y)
    return result


def equals(a, b, epsilon=0.0):
    """
    True when both operands have the same length and agree at every index
    within ``epsilon``. Indices absent from both sides agree trivially.
    """
    if len(a) != len(b):
        return False
    if not a.kind.is_default(b.kind.default_val):
        pairs = _dense_pairs(a, b)
    else:
        pairs = joint_iterate(a, b)
    return all(abs(float(x) - float(y)) <= epsilon for _, x, y in pairs)


__all__ = [
    "joint_iterate",
    "ewise_op",
    "ewise_add",
    "ewise_sub",
    "ewise_mul",
    "scalar_op",
    "scalar_add",
    "scalar_sub",
    "scalar_mul",
    "dot",
    "equals",
]
