"""Constructors for independent variables and constants.

Typical usage example:

>>> from taylorkit import make_variables, sin
>>> x, y = make_variables([2, 2], [1.0, 2.0])
>>> f = x * y + sin(x)
>>> float(f.derivative(1, 1))
1.0
"""

from __future__ import annotations

from typing import Any, Sequence

from taylorkit.autodiff import kernels
from taylorkit.autodiff.promotion import (
    cast_scalar,
    is_operand,
    promote_roots,
    series_type_of,
)
from taylorkit.autodiff.series import TaylorSeries
from taylorkit.utils.types import OrdersLike, Scalar
from taylorkit.utils.validate import validate_order, validate_orders

__all__ = [
    "make_series",
    "make_variable",
    "make_constant",
    "make_variables",
]


def _root_for(values: Sequence[Any], dtype: Any):
    for v in values:
        if isinstance(v, TaylorSeries) or not is_operand(v):
            raise TypeError(f"expected a numeric scalar value; got {type(v).__name__}.")
    if dtype is not None:
        return series_type_of(dtype).root
    return promote_roots(*(series_type_of(v).root for v in values))


def _seed(shape: tuple[int, ...], root, value: Scalar, axis: int | None) -> TaylorSeries:
    arr = kernels.constant(shape, root, cast_scalar(value, root))
    if axis is not None and shape[axis] > 1:
        unit = [0] * len(shape)
        unit[axis] = 1
        arr[tuple(unit)] = cast_scalar(1, root)
    return TaylorSeries._from_array(arr)


def make_series(value: Scalar, *orders: int, dtype: Any = None) -> TaylorSeries:
    """Seeds the independent variable of the innermost listed level.

    The series has one level per entry of ``orders``. It varies in the last
    level and is constant in all outer ones, so ``make_series(y0, 0, 3)`` is
    the second of two variables, tracked to order 3.

    Args:
        value: Value of the variable at the expansion point.
        *orders: Truncation order per level, outermost first.
        dtype: Root type; inferred from ``value`` when omitted.

    Returns:
        The seeded series.
    """
    shape = tuple(o + 1 for o in validate_orders(orders))
    root = _root_for([value], dtype)
    return _seed(shape, root, value, len(shape) - 1)


def make_variable(order: int, value: Scalar, dtype: Any = None) -> TaylorSeries:
    """Seeds a single independent variable: ``[value, 1, 0, ..., 0]``."""
    return make_series(value, validate_order(order), dtype=dtype)


def make_constant(orders: OrdersLike, value: Scalar, dtype: Any = None) -> TaylorSeries:
    """A constant series: ``value`` followed by zero coefficients."""
    shape = tuple(o + 1 for o in validate_orders(orders))
    root = _root_for([value], dtype)
    return _seed(shape, root, value, None)


def make_variables(
    orders: Sequence[int],
    values: Sequence[Scalar],
    dtype: Any = None,
) -> tuple[TaylorSeries, ...]:
    """Seeds several independent variables sharing one series type.

    Variable ``k`` is live along axis ``k`` and constant along the others,
    so products of the returned series carry every mixed partial derivative
    up to ``orders``.

    Args:
        orders: Truncation order per variable.
        values: Value of each variable at the expansion point.
        dtype: Common root type; promoted from ``values`` when omitted.

    Returns:
        One series per variable, all of depth ``len(orders)``.

    Raises:
        ValueError: If ``orders`` and ``values`` differ in length.
    """
    orders = validate_orders(orders)
    values = list(values)
    if len(values) != len(orders):
        raise ValueError(
            f"got {len(orders)} orders but {len(values)} values."
        )
    shape = tuple(o + 1 for o in orders)
    root = _root_for(values, dtype)
    return tuple(_seed(shape, root, v, k) for k, v in enumerate(values))
