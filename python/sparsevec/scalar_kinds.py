"""
Scalar kinds parameterize the sparse engine. A kind fixes the numpy dtype
of the stored values, the default ("empty") value that is never stored, and
whether the native accessor of a vector returns a value or a mutable slot.

A kind is a small handle that gets passed around; the generic containers
ask it how to coerce and compare values and never hard-code a dtype
themselves.
"""

import numpy as np


class ScalarKind:
    """
    A closed description of one value kind.

    Args:
        name: short identifier, e.g. "int8" or "real32"
        dtype: numpy dtype of the stored values
        default_val: value represented by absence; zero unless configured
        by_reference: whether the native accessor yields a mutable slot
    """

    def __init__(self, name, dtype, default_val=0, by_reference=False):
        self.name = name
        self.dtype = np.dtype(dtype)
        self.default_val = self.dtype.type(default_val)
        self.by_reference = by_reference
        # nan never compares equal to itself, so it needs a separate test
        self._default_is_nan = self.dtype.kind == "f" and bool(np.isnan(self.default_val))

    def __eq__(self, other):
        if not isinstance(other, ScalarKind):
            return NotImplemented
        return (
            self.name == other.name
            and self.dtype == other.dtype
            and self.by_reference == other.by_reference
            and self._default_is_nan == other._default_is_nan
            and (self._default_is_nan or self.default_val == other.default_val)
        )

    def __hash__(self):
        return hash((self.name, self.dtype.str, self.by_reference))

    def __repr__(self):
        return self.name + "()"

    def default_value(self):
        return self.default_val

    def _is_integer(self):
        return self.dtype.kind in "iu"

    def coerce(self, value):
        """
        Convert a python or numpy scalar to the stored type.

        Integer kinds only accept values they can represent exactly: a
        fractional or out-of-range value raises ValueError instead of being
        truncated or wrapped, since a truncated value may well be the default
        and silently erase an entry.
        """
        if not self._is_integer():
            return self.dtype.type(value)
        try:
            out = self.dtype.type(value)
        except OverflowError:
            raise ValueError(f"{value!r} is out of range for kind {self.name}") from None
        if out != value:
            raise ValueError(f"{value!r} is not representable in kind {self.name}")
        return out

    def coerce_array(self, values) -> np.ndarray:
        """Array version of coerce(); returns ``values`` as is when no cast is needed."""
        values = np.asarray(values)
        if values.dtype == self.dtype:
            return values
        if not self._is_integer() or values.dtype.kind == "b":
            return values.astype(self.dtype)
        with np.errstate(invalid="ignore", over="ignore"):
            out = values.astype(self.dtype)
        if not np.array_equal(out, values):
            raise ValueError(f"values are not representable in kind {self.name}")
        return out

    def is_default(self, value):
        if self._default_is_nan:
            return bool(np.isnan(value))
        return bool(value == self.default_val)

    def default_mask(self, values: np.ndarray) -> np.ndarray:
        """Boolean mask marking the entries of ``values`` equal to the default."""
        if self._default_is_nan:
            return np.isnan(values)
        return values == self.default_val

    def empty(self):
        return np.empty((0,), dtype=self.dtype)

    def full(self, length):
        return np.full((length,), self.default_val, dtype=self.dtype)


def kind_int8():
    """Narrow 1-byte integers"""
    return ScalarKind("int8", np.int8)


def kind_int():
    """Integers of native width"""
    return ScalarKind("int", np.int_)


def kind_float32():
    """32-bit floats, value accessor"""
    return ScalarKind("float32", np.float32)


def kind_real32():
    """32-bit floats whose accessor hands out a mutable slot"""
    return ScalarKind("real32", np.float32, by_reference=True)


_FACTORIES = {
    "int8": kind_int8,
    "int": kind_int,
    "float32": kind_float32,
    "real32": kind_real32,
}


def kind_by_name(name):
    """Return the built-in kind called ``name``"""
    try:
        return _FACTORIES[name]()
    except KeyError:
        raise ValueError(f"Unknown scalar kind {name}") from None


def default_kind():
    """float32 is the kind used when none is given"""
    return kind_float32()


def all_kinds():
    """return a list of all built-in kinds"""
    return [kind_int8(), kind_int(), kind_float32(), kind_real32()]


__all__ = [
    "ScalarKind",
    "kind_int8",
    "kind_int",
    "kind_float32",
    "kind_real32",
    "kind_by_name",
    "default_kind",
    "all_kinds",
]
