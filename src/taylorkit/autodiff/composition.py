"""Composition of a scalar function with a Taylor series.

If ``f`` has Taylor coefficients ``c_k`` at ``x0 = x.value``, then

    f(x) = sum_k c_k * eps**k,    eps = x - x0,

where ``eps`` has a zero value coefficient, so ``eps**k`` vanishes once
``k`` exceeds the total order of ``x``. Every elementary function reduces to
supplying ``c_k`` (or the derivatives ``c_k * k!``) and calling one of the
functions below.
"""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np

from taylorkit.autodiff import kernels
from taylorkit.autodiff.promotion import cast_scalar
from taylorkit.autodiff.scalar_math import is_finite
from taylorkit.autodiff.series import TaylorSeries
from taylorkit.logger import taylorkit_logger
from taylorkit.utils.numerics import factorial

__all__ = [
    "compose",
    "apply_coefficients",
    "apply_derivatives",
]


def compose(x: TaylorSeries, coefficients: Sequence[Any]) -> TaylorSeries:
    """Evaluates ``sum_k coefficients[k] * (x - x.value)**k``.

    Uses Horner's scheme when all coefficients are finite. Otherwise the
    powers of ``x - x.value`` are summed term by term and zero entries are
    kept zero, so an infinite derivative only reaches the coefficients it
    actually multiplies.

    Args:
        x: Inner series.
        coefficients: Taylor coefficients of the outer function at
            ``x.value``. At least ``x.order_sum + 1`` are needed; extra ones
            are ignored.

    Returns:
        The composed series, in the type of ``x``.

    Raises:
        ValueError: If too few coefficients are given.
    """
    n = x.order_sum
    if len(coefficients) < n + 1:
        raise ValueError(f"{n + 1} coefficients are required; got {len(coefficients)}.")
    dtype = x.dtype
    cs = [cast_scalar(c, dtype) for c in coefficients[: n + 1]]
    eps = kernels.epsilon(x.coefficients)
    shape = eps.shape
    with np.errstate(divide="ignore", over="ignore", invalid="ignore"):
        if all(is_finite(c) for c in cs):
            acc = kernels.constant(shape, dtype, cs[n])
            root = kernels.root_index(eps.ndim)
            for c in reversed(cs[:n]):
                acc = kernels.cauchy_product(acc, eps)
                acc[root] += c
            return TaylorSeries._from_array(acc)

        taylorkit_logger.info(
            "Non-finite Taylor coefficients at x0=%s; using the term-wise expansion.",
            x.value,
        )
        acc = kernels.constant(shape, dtype, cs[0])
        power = eps
        for k in range(1, n + 1):
            acc = acc + kernels.scale(power, cs[k], scale_root=False)
            if k < n:
                power = kernels.cauchy_product(power, eps)
        return TaylorSeries._from_array(acc)


def apply_coefficients(x: TaylorSeries, coefficients: Sequence[Any]) -> TaylorSeries:
    """Composes with an outer function given by its Taylor coefficients."""
    return compose(x, coefficients)


def apply_derivatives(x: TaylorSeries, derivatives: Sequence[Any]) -> TaylorSeries:
    """Composes with an outer function given by its derivatives at ``x.value``.

    ``derivatives[k]`` is the ``k``-th derivative of the outer function; it is
    divided by ``k!`` to give the Taylor coefficient.
    """
    dtype = x.dtype
    n = min(len(derivatives), x.order_sum + 1)
    coefficients = [cast_scalar(derivatives[k], dtype) / factorial(k) for k in range(n)]
    return compose(x, coefficients)
