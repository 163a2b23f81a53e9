"""
Computations over sparse matrices.

Matrices are stored row-major, so everything here is phrased row by row on
top of vector_ops: element-wise work is an ewise_op per row pair, and the
products scatter the stored entries of one row into a wide accumulator.
Results are new matrices of the left operand's type and kind unless an
``out`` matrix of the right shape is passed in.
"""

import logging
from typing import Callable

import numpy as np

from .entry_store import EntryStore
from .errors import DimensionMismatch
from .matrix_sparse import SparseMatrix
from .vector_dense import DenseVector
from .vector_ops import dot, equals, ewise_op, scalar_op

logger = logging.getLogger(__name__)


def _check_same_shape(a, b):
    if a.shape != b.shape:
        raise DimensionMismatch(f"matrix shapes differ: {a.shape} != {b.shape}")


def _output(a, out, shape):
    if out is None:
        return type(a)(shape[0], shape[1], a.kind)
    if out.shape != shape:
        raise DimensionMismatch(f"output shape {out.shape} != {shape}")
    return out


def _check_zero_defaults(*operands):
    for x in operands:
        if x.kind.default_val != 0:
            raise ValueError("products need operands whose default value is zero")


def matrix_equals(a, b, epsilon=0.0):
    """True when both matrices have the same shape and agree within ``epsilon``"""
    if a.shape != b.shape:
        return False
    return all(equals(a.row(i), b.row(i), epsilon) for i in range(a.row_count))


################
### EWISE OP ###
################
def matrix_ewise_op(a, b, op: Callable, out: SparseMatrix = None) -> SparseMatrix:
    """Row-wise ewise_op; ``op(default, default)`` must be the default"""
    _check_same_shape(a, b)
    out = _output(a, out, a.shape)
    for i in range(a.row_count):
        ewise_op(a.row(i), b.row(i), op, out=out.rows[i])
    return out


def matrix_add(a, b, out=None):
    return matrix_ewise_op(a, b, lambda x, y: x + y, out)


def matrix_sub(a, b, out=None):
    return matrix_ewise_op(a, b, lambda x, y: x - y, out)


def matrix_mul(a, b, out=None):
    """Element-wise (Hadamard) product"""
    return matrix_ewise_op(a, b, lambda x, y: x * y, out)


#################
### SCALAR OP ###
#################
def matrix_scalar_op(a, val, op: Callable, out: SparseMatrix = None) -> SparseMatrix:
    out = _output(a, out, a.shape)
    for i in range(a.row_count):
        scalar_op(a.row(i), val, op, out=out.rows[i])
    return out


def matrix_add_scalar(a, val, out=None):
    return matrix_scalar_op(a, val, lambda x, y: x + y, out)


def matrix_sub_scalar(a, val, out=None):
    return matrix_scalar_op(a, val, lambda x, y: x - y, out)


def matrix_mul_scalar(a, val, out=None):
    return matrix_scalar_op(a, val, lambda x, y: x * y, out)


################
### PRODUCTS ###
################
def _accumulator_type(*kinds):
    if all(k.dtype.kind in "iu" for k in kinds):
        return np.int64
    return np.float64


def matmul(a, b, out=None) -> SparseMatrix:
    """
    Matrix product of an (n, k) and a (k, m) matrix. Each stored a[i, k]
    scatters row k of ``b`` into a dense accumulator for row i, so only
    stored entries are ever multiplied.
    """
    if a.col_count != b.row_count:
        raise DimensionMismatch(f"cannot multiply {a.shape} by {b.shape}")
    _check_zero_defaults(a, b)
    out = _output(a, out, (a.row_count, b.col_count))
    acc_type = _accumulator_type(a.kind, b.kind)

    rows = []
    for i in range(a.row_count):
        acc = np.zeros(b.col_count, dtype=acc_type)
        for k, value in a.rows[i].iterate():
            b_store = b.rows[k].store
            acc[b_store.indices.astype(np.intp)] += value * b_store.values.astype(acc_type)
        cols = np.flatnonzero(acc)
        rows.append(EntryStore.from_sorted(out.kind, cols, acc[cols]))
    # out may be one of the operands, so rows are only replaced at the end
    for row, store in zip(out.rows, rows):
        row._store = store

    logger.debug("multiplied %s by %s matrix", a.shape, b.shape)
    return out


def matvec(a, x) -> DenseVector:
    """Matrix-vector product; ``x`` is any vector of length a.col_count"""
    if len(x) != a.col_count:
        raise DimensionMismatch(f"cannot multiply {a.shape} matrix by vector of length {len(x)}")
    return DenseVector(a.row_count, a.kind, [dot(a.row(i), x) for i in range(a.row_count)])


def outer(a, b, kind=None) -> SparseMatrix:
    """Outer product: a len(a) x len(b) matrix with entries a[i] * b[j]"""
    _check_zero_defaults(a, b)
    out = SparseMatrix(len(a), len(b), kind if kind is not None else a.kind)
    for i, value in a.iterate():
        scalar_op(b, value, lambda x, y: x * y, out=out.rows[i])
    return out


__all__ = [
    "matrix_equals",
    "matrix_ewise_op",
    "matrix_add",
    "matrix_sub",
    "matrix_mul",
    "matrix_scalar_op",
    "matrix_add_scalar",
    "matrix_sub_scalar",
    "matrix_mul_scalar",
    "matmul",
    "matvec",
    "outer",
]
