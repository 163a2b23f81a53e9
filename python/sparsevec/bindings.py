"""
Per-kind bindings of the generic containers.

The engine is written once (SparseVector, SparseMatrix, DenseVector) and
parameterized by a ScalarKind. bind() stamps out subclasses that only pin
the kind, which gives every kind its own named types without duplicating
any logic.
"""

from .matrix_sparse import SparseMatrix
from .scalar_kinds import kind_float32, kind_int, kind_int8, kind_real32
from .vector_dense import DenseVector
from .vector_sparse import SparseVector


def bind(kind, name=None):
    """
    Return (sparse vector, sparse matrix, dense vector) classes fixed to
    ``kind``. ``name`` is used in the generated class names and defaults
    to the capitalized kind name, e.g. SparseReal32Vector.
    """
    name = name if name is not None else kind.name.capitalize()
    vector = type(f"Sparse{name}Vector", (SparseVector,),
                  {"kind": kind, "__module__": __name__})
    matrix = type(f"Sparse{name}Matrix", (SparseMatrix,),
                  {"kind": kind, "vector_type": vector, "__module__": __name__})
    dense = type(f"Dense{name}Vector", (DenseVector,),
                 {"kind": kind, "__module__": __name__})
    vector.matrix_type = matrix
    return vector, matrix, dense


SparseInt8Vector, SparseInt8Matrix, DenseInt8Vector = bind(kind_int8())
SparseIntVector, SparseIntMatrix, DenseIntVector = bind(kind_int())
SparseFloat32Vector, SparseFloat32Matrix, DenseFloat32Vector = bind(kind_float32())
SparseReal32Vector, SparseReal32Matrix, DenseReal32Vector = bind(kind_real32())


__all__ = [
    "bind",
    "SparseInt8Vector",
    "SparseInt8Matrix",
    "DenseInt8Vector",
    "SparseIntVector",
    "SparseIntMatrix",
    "DenseIntVector",
    "SparseFloat32Vector",
    "SparseFloat32Matrix",
    "DenseFloat32Vector",
    "SparseReal32Vector",
    "SparseReal32Matrix",
    "DenseReal32Vector",
]
