import numpy as np
import pytest
from sparsevec import (
    DenseVector,
    DimensionMismatch,
    SparseMatrix,
    SparseVector,
    all_kinds,
    kind_float32,
    kind_int,
    kind_int8,
    matmul,
    matrix_add,
    matrix_add_scalar,
    matrix_equals,
    matrix_ewise_op,
    matrix_mul,
    matrix_mul_scalar,
    matrix_sub,
    matrix_sub_scalar,
    matvec,
    outer,
)
from sparsevec.bindings import SparseIntMatrix


_KINDS = all_kinds()
_KIND_IDS = [k.name for k in _KINDS]


def _random_array(shape, seed=0, low=-5, high=5, density=0.4):
    rng = np.random.default_rng(seed)
    values = rng.integers(low, high, size=shape)
    values[rng.random(shape) > density] = 0
    return values


OPS = {
    "add": (matrix_add, lambda a, b: a + b),
    "subtract": (matrix_sub, lambda a, b: a - b),
    "multiply": (matrix_mul, lambda a, b: a * b),
}
OP_FNS = [OPS[k] for k in OPS]
OP_NAMES = [k for k in OPS]

SCALAR_OPS = {
    "add": (matrix_add_scalar, lambda a, b: a + b),
    "subtract": (matrix_sub_scalar, lambda a, b: a - b),
    "multiply": (matrix_mul_scalar, lambda a, b: a * b),
}
SCALAR_OP_FNS = [SCALAR_OPS[k] for k in SCALAR_OPS]
SCALAR_OP_NAMES = [k for k in SCALAR_OPS]

matmul_shapes = [(1, 1, 1), (4, 5, 3), (7, 2, 6), (3, 0, 2)]


################
### EQUALITY ###
################
def test_matrix_equals():
    _A = _random_array((3, 4), seed=1)
    a = SparseMatrix.from_numpy(_A, kind_int())
    assert matrix_equals(a, a.copy())
    assert matrix_equals(a, SparseMatrix.from_numpy(_A, kind_float32()))

    b = a.copy()
    b.set(2, 3, b.get(2, 3) + 1)
    assert not matrix_equals(a, b)
    assert matrix_equals(a, b, epsilon=1.0)
    assert not matrix_equals(a, SparseMatrix(4, 3, kind_int()))


#################
### EWISE OPS ###
#################
@pytest.mark.parametrize("fn,np_fn", OP_FNS, ids=OP_NAMES)
@pytest.mark.parametrize("kind", _KINDS, ids=_KIND_IDS)
def test_matrix_ewise(fn, np_fn, kind):
    _A = _random_array((6, 5), seed=2)
    _B = _random_array((6, 5), seed=3)
    A = SparseMatrix.from_numpy(_A, kind)
    B = SparseMatrix.from_numpy(_B, kind)
    out = fn(A, B)
    assert out.kind == kind
    assert out.shape == (6, 5)
    np.testing.assert_allclose(out.to_numpy(), np_fn(_A, _B))
    assert all(r.store.is_compact() for r in out.rows)
    # operands are untouched
    np.testing.assert_array_equal(A.to_numpy(), _A)


def test_matrix_ewise_in_place():
    _A = _random_array((3, 3), seed=4)
    _B = _random_array((3, 3), seed=5)
    A = SparseMatrix.from_numpy(_A, kind_int())
    B = SparseMatrix.from_numpy(_B, kind_int())
    assert matrix_add(A, B, out=A) is A
    np.testing.assert_array_equal(A.to_numpy(), _A + _B)


def test_matrix_ewise_keeps_bound_type():
    A = SparseIntMatrix.from_numpy([[1, 0], [0, 2]])
    out = matrix_mul(A, A)
    assert type(out) is SparseIntMatrix
    np.testing.assert_array_equal(out.to_numpy(), [[1, 0], [0, 4]])


def test_matrix_ewise_errors():
    a = SparseMatrix(2, 3, kind_int())
    with pytest.raises(DimensionMismatch):
        matrix_add(a, SparseMatrix(3, 2, kind_int()))
    with pytest.raises(DimensionMismatch):
        matrix_add(a, a, out=SparseMatrix(2, 2, kind_int()))
    with pytest.raises(ValueError):
        matrix_ewise_op(a, a, lambda x, y: x + y + 1)


##################
### SCALAR OPS ###
##################
@pytest.mark.parametrize("fn,np_fn", SCALAR_OP_FNS, ids=SCALAR_OP_NAMES)
@pytest.mark.parametrize("kind", _KINDS, ids=_KIND_IDS)
def test_matrix_scalar(fn, np_fn, kind):
    _A = _random_array((4, 6), seed=6)
    A = SparseMatrix.from_numpy(_A, kind)
    out = fn(A, 3)
    np.testing.assert_allclose(out.to_numpy(), np_fn(_A, 3))
    assert out.nonzero_count() == np.count_nonzero(np_fn(_A, 3))


def test_matrix_scalar_overflow():
    A = SparseMatrix.from_numpy([[100, 0]], kind_int8())
    with pytest.raises(ValueError):
        matrix_mul_scalar(A, 2)
    with pytest.raises(ValueError):
        matrix_add_scalar(A, 0.5)
    np.testing.assert_array_equal(A.to_numpy(), [[100, 0]])


################
### PRODUCTS ###
################
@pytest.mark.parametrize("m,k,n", matmul_shapes)
@pytest.mark.parametrize("kind", _KINDS, ids=_KIND_IDS)
def test_matmul(m, k, n, kind):
    _A = _random_array((m, k), seed=7)
    _B = _random_array((k, n), seed=8)
    A = SparseMatrix.from_numpy(_A, kind)
    B = SparseMatrix.from_numpy(_B, kind)
    out = matmul(A, B)
    assert out.shape == (m, n)
    assert out.kind == kind
    np.testing.assert_allclose(out.to_numpy(), _A @ _B)
    assert all(r.store.is_compact() for r in out.rows)


def test_matmul_into_operand():
    _A = _random_array((3, 3), seed=9)
    A = SparseMatrix.from_numpy(_A, kind_int())
    matmul(A, A, out=A)
    np.testing.assert_array_equal(A.to_numpy(), _A @ _A)


def test_matmul_errors():
    with pytest.raises(DimensionMismatch):
        matmul(SparseMatrix(2, 3), SparseMatrix(2, 3))
    with pytest.raises(DimensionMismatch):
        matmul(SparseMatrix(2, 3), SparseMatrix(3, 2), out=SparseMatrix(3, 3))
    big = SparseMatrix.from_numpy([[100, 100]], kind_int8())
    with pytest.raises(ValueError):
        matmul(big, SparseMatrix.from_numpy([[1], [1]], kind_int8()))


@pytest.mark.parametrize("kind", _KINDS, ids=_KIND_IDS)
def test_matvec(kind):
    _A = _random_array((5, 4), seed=10)
    _x = _random_array(4, seed=11, density=0.7)
    A = SparseMatrix.from_numpy(_A, kind)
    x = DenseVector.from_numpy(_x, kind)
    for operand in (x, x.to_sparse(), x.to_sparse().view()):
        out = matvec(A, operand)
        assert isinstance(out, DenseVector)
        assert out.kind == kind
        np.testing.assert_allclose(out.numpy(), _A @ _x)

    with pytest.raises(DimensionMismatch):
        matvec(A, SparseVector(5, kind))


@pytest.mark.parametrize("kind", _KINDS, ids=_KIND_IDS)
def test_outer(kind):
    _a = _random_array(4, seed=12, density=0.6)
    _b = _random_array(6, seed=13, density=0.6)
    a = DenseVector.from_numpy(_a, kind).to_sparse()
    b = DenseVector.from_numpy(_b, kind)
    out = outer(a, b)
    assert out.shape == (4, 6)
    assert out.kind == kind
    np.testing.assert_allclose(out.to_numpy(), np.outer(_a, _b))
    assert out.nonzero_count() == np.count_nonzero(np.outer(_a, _b))


def test_outer_of_matrix_rows():
    m = SparseMatrix.from_numpy([[1, 0, 2], [0, 3, 0]], kind_int())
    out = outer(m.row(0), m.row(1), kind=kind_float32())
    assert out.kind == kind_float32()
    np.testing.assert_array_equal(out.to_numpy(), [[0, 3, 0], [0, 0, 0], [0, 6, 0]])
