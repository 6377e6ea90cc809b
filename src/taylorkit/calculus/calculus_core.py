"""Core utilities for calculus-based derivative computations.

This module provides shared helper functions for building derivative
objects (gradients, Jacobians, Hessians, mixed partials) from Taylor-series
evaluations of a user function.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Sequence

import numpy as np

from taylorkit.autodiff.construct import make_constant, make_variables
from taylorkit.autodiff.promotion import SeriesType, is_operand
from taylorkit.autodiff.scalar_math import is_finite
from taylorkit.autodiff.series import TaylorSeries
from taylorkit.config import TaylorConfig
from taylorkit.logger import taylorkit_logger

__all__ = [
    "as_series",
    "seed_point",
    "evaluate_at",
    "flatten_output",
    "finalize",
]


def as_series(value: Any, target: SeriesType) -> TaylorSeries:
    """Converts a model output to a series of the target type.

    Plain numbers are functions that do not depend on the variables and
    become constant series. 0-d object arrays are unwrapped first.

    Raises:
        TypeError: If ``value`` is neither a series nor a number.
    """
    if isinstance(value, np.ndarray) and value.ndim == 0:
        value = value.item()
    if isinstance(value, TaylorSeries):
        return value
    if is_operand(value):
        return make_constant(target.orders, value, dtype=target.root)
    raise TypeError(f"model output must be a number or TaylorSeries; got {type(value).__name__}.")


def seed_point(
    theta: np.ndarray,
    active: Sequence[int],
    orders: Sequence[int],
    config: TaylorConfig,
) -> np.ndarray:
    """Builds the series-valued parameter vector passed to the model.

    Parameter ``active[k]`` becomes the ``k``-th independent variable with
    order ``orders[k]``; all other parameters are constants of the same type.

    Returns:
        A 1D object array of series.
    """
    seeds = make_variables(orders, [theta[i] for i in active], dtype=config.dtype)
    point = np.empty(theta.size, dtype=object)
    for j in range(theta.size):
        point[j] = make_constant(tuple(orders), theta[j], dtype=config.dtype)
    for k, i in enumerate(active):
        point[i] = seeds[k]
    return point


def evaluate_at(
    function: Callable[[np.ndarray], Any],
    theta: np.ndarray,
    active: Sequence[int],
    orders: Sequence[int],
    config: TaylorConfig,
) -> Any:
    """Evaluates the model on series seeded at ``theta``."""
    return function(seed_point(theta, active, orders, config))


def flatten_output(value: Any) -> np.ndarray:
    """Returns the model output as a flat object array (C order)."""
    return np.ravel(np.asarray(value, dtype=object), order="C")


def finalize(values: Sequence[Any], config: TaylorConfig, caller: str) -> np.ndarray:
    """Packs derivative values into an array and checks they are finite.

    Raises:
        FloatingPointError: If a value is not finite and
            ``config.check_finite`` is set.
    """
    out = np.asarray(values, dtype=config.dtype)
    if not all(is_finite(v) for v in out.flat):
        if config.check_finite:
            raise FloatingPointError(f"Non-finite values encountered in {caller}.")
        taylorkit_logger.warning("Non-finite values encountered in %s.", caller)
    return out
