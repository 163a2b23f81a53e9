"""
sparsevec: a generic sparse vector and sparse matrix engine.

Only non-default entries are stored. The containers are written once and
parameterized by a scalar kind (int8, int, float32, real32), with per-kind
classes generated in bindings.py.

vector_sparse.py, matrix_sparse.py and vector_dense.py hold the owning
containers, vector_const.py the read-only views that borrow them, and
vector_ops.py and matrix_ops.py the computations over them. The default
kind for code that does not pick one is chosen in kind_selection.py.
"""

from .errors import *
from .scalar_kinds import *
from .entry_store import Entry, EntryStore, Slot, MAX_LENGTH
from .vector_dense import *
from .vector_sparse import *
from .vector_const import *
from .matrix_sparse import *
from .vector_ops import *
from .matrix_ops import *
from .bindings import *
from .logging_config import setup_logging

__version__ = "0.1.0"
