"""Type promotion for Taylor series.

A series type is described by its root dtype (the scalar type at the bottom
of the nesting) and one truncation order per independent variable, listed
from the outermost nesting level inwards. Plain scalars are series types with
no orders.

Promotion of two types works level by level:

* The roots are promoted with numpy's rules (Python scalars are weak) and
  then widened to an inexact kind, since integer roots cannot hold Taylor
  coefficients.
* The orders are merged from the outside in, keeping the larger order per
  level. A shallower operand is constant in the extra inner variables and is
  zero-padded there.

Both steps are associative and commutative, so mixed expressions yield the
same result type whatever the order of evaluation.

Typical usage example:

>>> import numpy as np
>>> from taylorkit.autodiff.promotion import nested_type, promote
>>> promote(nested_type(np.float32, 3), nested_type(float, 2, 4))
SeriesType(root=dtype('float64'), orders=(3, 4))
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from itertools import zip_longest
from typing import Any

import mpmath
import numpy as np

from taylorkit.autodiff import kernels
from taylorkit.exceptions import TypePromotionFailure
from taylorkit.utils.types import CoefficientArray, Orders
from taylorkit.utils.validate import validate_order

__all__ = [
    "SeriesType",
    "OBJECT_DTYPE",
    "as_root_dtype",
    "promote_roots",
    "merge_orders",
    "series_type_of",
    "promote",
    "root_type",
    "depth",
    "order_sum",
    "type_at",
    "nested_type",
    "is_operand",
    "common_operand_type",
    "cast_scalar",
    "cast_array",
    "coefficients_as",
]

OBJECT_DTYPE = np.dtype(object)

_ROOT_KINDS = "fcO"
_PYTHON_SCALARS = (bool, int, float, complex)
_MPMATH_SCALARS = (mpmath.mpf, mpmath.mpc)


def as_root_dtype(dtype: Any) -> np.dtype:
    """Returns the root dtype used for coefficients of the given dtype.

    Integer and boolean dtypes widen to ``float64``. The object dtype stands
    for mpmath numbers.

    Raises:
        TypePromotionFailure: If the dtype is not numeric.
    """
    try:
        dtype = np.dtype(dtype)
    except TypeError as exc:
        raise TypePromotionFailure(f"{dtype!r} is not a numeric type.") from exc
    if dtype.kind in "biu":
        return np.dtype(np.float64)
    if dtype.kind not in _ROOT_KINDS:
        raise TypePromotionFailure(f"Unsupported root type {dtype}.")
    return dtype


def _root_key(value: Any) -> Any:
    """Argument for ``np.result_type`` describing the root of an operand."""
    if isinstance(getattr(value, "series_type", None), SeriesType):
        return value.dtype
    if isinstance(value, _PYTHON_SCALARS):
        return value
    if isinstance(value, np.generic):
        return value.dtype
    if isinstance(value, _MPMATH_SCALARS):
        return OBJECT_DTYPE
    raise TypePromotionFailure(f"Cannot use {type(value).__name__} as a series operand.")


def promote_roots(*keys: Any) -> np.dtype:
    """Promotes root dtypes (or weak Python scalars) to a common root dtype."""
    try:
        result = np.result_type(*keys)
    except TypeError as exc:
        raise TypePromotionFailure(f"No common root type for {keys!r}.") from exc
    return as_root_dtype(result)


def merge_orders(a: Orders, b: Orders) -> Orders:
    """Level-wise maximum of two order tuples, padding the shorter with zeros."""
    return tuple(max(x, y) for x, y in zip_longest(a, b, fillvalue=0))


@dataclass(frozen=True)
class SeriesType:
    """Type descriptor of a (possibly nested) Taylor series.

    Attributes:
        root: Root dtype of the coefficients.
        orders: Truncation order per variable, outermost first. Empty for a
            plain scalar.
    """

    root: np.dtype
    orders: Orders = ()

    def __post_init__(self):
        object.__setattr__(self, "root", as_root_dtype(self.root))
        object.__setattr__(self, "orders", tuple(validate_order(o) for o in self.orders))

    @property
    def depth(self) -> int:
        """Number of nesting levels (independent variables)."""
        return len(self.orders)

    @property
    def order_sum(self) -> int:
        """Sum of the per-variable orders."""
        return sum(self.orders)

    @property
    def shape(self) -> tuple[int, ...]:
        """Shape of the coefficient array."""
        return tuple(o + 1 for o in self.orders)

    @property
    def is_scalar(self) -> bool:
        return not self.orders

    def type_at(self, level: int) -> SeriesType:
        """Type of the coefficients found ``level`` nesting levels down.

        Levels at or past the depth give the scalar root type.
        """
        if level < 0:
            raise ValueError(f"level must be non-negative; got {level}.")
        return SeriesType(self.root, self.orders[level:])

    def promote(self, other: SeriesType) -> SeriesType:
        """Common type able to hold both ``self`` and ``other``."""
        return SeriesType(
            promote_roots(self.root, other.root), merge_orders(self.orders, other.orders)
        )


def _type_designator(t: type) -> SeriesType:
    if issubclass(t, _MPMATH_SCALARS):
        return SeriesType(OBJECT_DTYPE)
    if issubclass(t, _PYTHON_SCALARS + (np.generic,)):
        return SeriesType(np.dtype(t))
    raise TypePromotionFailure(f"{t.__name__} is not a numeric type.")


def series_type_of(value: Any) -> SeriesType:
    """Returns the series type of a value or type designator.

    Accepts series, ``SeriesType`` instances, numeric types (Python, numpy
    and mpmath), numpy dtypes or dtype strings, and numeric scalars.

    Raises:
        TypePromotionFailure: If ``value`` does not describe a numeric type.
    """
    if isinstance(value, SeriesType):
        return value
    st = getattr(value, "series_type", None)
    if isinstance(st, SeriesType):
        return st
    if isinstance(value, type):
        return _type_designator(value)
    if isinstance(value, (np.dtype, str)):
        return SeriesType(value)
    return SeriesType(promote_roots(_root_key(value)))


def promote(*types: Any) -> SeriesType:
    """Common series type of any number of types or values.

    Raises:
        TypePromotionFailure: If the roots have no common numeric type.
    """
    if not types:
        raise TypeError("promote() needs at least one type.")
    return reduce(SeriesType.promote, (series_type_of(t) for t in types))


def root_type(t: Any) -> np.dtype:
    """Root dtype of a series type or value."""
    return series_type_of(t).root


def depth(t: Any) -> int:
    """Nesting depth of a series type or value (0 for scalars)."""
    return series_type_of(t).depth


def order_sum(t: Any) -> int:
    """Sum of the truncation orders of a series type or value."""
    return series_type_of(t).order_sum


def type_at(t: Any, level: int) -> SeriesType:
    """Coefficient type found ``level`` nesting levels below ``t``."""
    return series_type_of(t).type_at(level)


def nested_type(root: Any, *orders: int) -> SeriesType:
    """Builds the nested series type with the given root and per-variable orders."""
    return SeriesType(series_type_of(root).root, tuple(orders))


def is_operand(value: Any) -> bool:
    """Tells whether ``value`` can take part in series arithmetic."""
    if isinstance(getattr(value, "series_type", None), SeriesType):
        return True
    if isinstance(value, np.generic):
        return isinstance(value, (np.number, np.bool_))
    return isinstance(value, _PYTHON_SCALARS + _MPMATH_SCALARS)


def common_operand_type(a: Any, b: Any) -> SeriesType:
    """Result type of a binary operation between two operands.

    Unlike :func:`promote`, Python scalars only contribute their kind, so a
    ``float32`` series times ``2.0`` stays ``float32``.
    """
    root = promote_roots(_root_key(a), _root_key(b))
    return SeriesType(root, merge_orders(_orders_of(a), _orders_of(b)))


def _orders_of(value: Any) -> Orders:
    st = getattr(value, "series_type", None)
    return st.orders if isinstance(st, SeriesType) else ()


def cast_scalar(value: Any, dtype: np.dtype) -> Any:
    """Converts a scalar to the scalar type of a root dtype."""
    if dtype.kind == "O":
        if isinstance(value, np.generic):
            value = value.item()
        return mpmath.mpmathify(value)
    return dtype.type(value)


def cast_array(a: CoefficientArray, dtype: np.dtype) -> CoefficientArray:
    """Converts a coefficient array to a root dtype."""
    if a.dtype == dtype:
        return a
    if dtype.kind == "O":
        out = np.empty(a.shape, dtype=object)
        for idx, v in np.ndenumerate(a):
            out[idx] = cast_scalar(v, dtype)
        return out
    return a.astype(dtype)


def coefficients_as(value: Any, target: SeriesType) -> CoefficientArray:
    """Coefficient array of an operand in the target series type.

    Series are cast and zero-padded, scalars become constants.
    """
    st = getattr(value, "series_type", None)
    if isinstance(st, SeriesType):
        return kernels.pad_to(cast_array(value.coefficients, target.root), target.shape)
    return kernels.constant(target.shape, target.root, cast_scalar(value, target.root))
