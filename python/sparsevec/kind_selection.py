"""
Logic for scalar kind selection.

This module picks the scalar kind used by code that does not want to name
one explicitly. The kind is determined by the value of the environment
variable SPARSEVEC_KIND. The available kinds are "int8" (narrow integers),
"int" (native integers), "float32" (32-bit floats) and "real32" (32-bit
floats whose native accessor returns a mutable slot).

The selected kind is bound to the generic containers and the bound classes
are exported as SparseVector, SparseMatrix and DenseVector. The selection
is logged.

If an unknown kind is specified, a RuntimeError is raised.
"""
import logging
import os

from .bindings import bind
from .scalar_kinds import kind_float32, kind_int, kind_int8, kind_real32

logger = logging.getLogger(__name__)


KIND = os.environ.get("SPARSEVEC_KIND", "float32")


if KIND == "int8":
    logger.info("Using int8 scalar kind")
    DefaultKind = kind_int8()

elif KIND == "int":
    logger.info("Using native int scalar kind")
    DefaultKind = kind_int()

elif KIND == "float32":
    logger.info("Using float32 scalar kind")
    DefaultKind = kind_float32()

elif KIND == "real32":
    """
    real32 stores the same values as float32; the difference is that
    at() hands out mutable slots, for call sites that accumulate into a
    vector in place.
    """
    logger.info("Using real32 scalar kind")
    DefaultKind = kind_real32()

else:
    raise RuntimeError("Unknown sparsevec scalar kind %s" % KIND)


SparseVector, SparseMatrix, DenseVector = bind(DefaultKind, name="Default")
