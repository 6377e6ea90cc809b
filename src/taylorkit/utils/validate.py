"""Validation utilities for TaylorKit."""

from __future__ import annotations

import operator
from typing import Any, Sequence

import numpy as np
from numpy.typing import ArrayLike

from taylorkit.utils.types import Orders, OrdersLike

__all__ = [
    "validate_order",
    "validate_orders",
    "validate_point",
    "check_scalar_output",
]


def validate_order(order: Any) -> int:
    """Checks that a truncation order is a non-negative integer.

    Args:
        order: Candidate order.

    Returns:
        The order as a Python ``int``.

    Raises:
        TypeError: If ``order`` is not an integer.
        ValueError: If ``order`` is negative.
    """
    if isinstance(order, bool):
        raise TypeError("order must be an integer; got bool.")
    try:
        order = operator.index(order)
    except TypeError as exc:
        raise TypeError(f"order must be an integer; got {type(order).__name__}.") from exc
    if order < 0:
        raise ValueError(f"order must be non-negative; got {order}.")
    return order


def validate_orders(orders: OrdersLike) -> Orders:
    """Normalizes one order or a sequence of per-variable orders to a tuple.

    Raises:
        ValueError: If the sequence is empty or an order is negative.
        TypeError: If an order is not an integer.
    """
    if isinstance(orders, Sequence) or isinstance(orders, np.ndarray):
        result = tuple(validate_order(o) for o in orders)
    else:
        result = (validate_order(orders),)
    if not result:
        raise ValueError("at least one order is required.")
    return result


def validate_point(x0: ArrayLike) -> np.ndarray:
    """Converts an expansion point to a non-empty 1D array.

    The dtype is kept as given so multiprecision values survive.

    Raises:
        ValueError: If ``x0`` is empty.
    """
    x = np.asarray(x0)
    if x.dtype.kind in "biu":
        x = x.astype(np.float64)
    x = x.reshape(-1)
    if x.size == 0:
        raise ValueError("x0 must be a non-empty 1D array.")
    return x


def check_scalar_output(value: Any, caller: str) -> None:
    """Raises if a model returned more than one value where a scalar is required.

    Raises:
        TypeError: If ``value`` is array-like with more than one element.
    """
    shape = np.shape(value)
    if int(np.prod(shape)) != 1:
        raise TypeError(
            f"{caller}() expects a scalar-valued function; got output of shape {shape}."
        )
