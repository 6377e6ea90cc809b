"""Coefficient-array kernels for truncated multivariate Taylor series.

A series in ``n`` variables is stored as an ``n``-dimensional array of shape
``(o1 + 1, ..., on + 1)``. Axis ``k`` carries the powers of the ``k``-th
variable, so ``a[i1, ..., in]`` is the coefficient of
``dx1**i1 * ... * dxn**in``. The kernels below work on such arrays of one
common shape and dtype and never read or write past the declared orders.
Multivariate products and quotients recurse over the leading axis, which is
the array form of a series whose coefficients are themselves series.
"""

from __future__ import annotations

from typing import Any

import mpmath
import numpy as np

from taylorkit.autodiff.scalar_math import is_finite
from taylorkit.utils.types import CoefficientArray

__all__ = [
    "zero_of",
    "zeros",
    "constant",
    "root_index",
    "pad_to",
    "truncate_to",
    "with_root",
    "epsilon",
    "is_constant",
    "cauchy_product",
    "series_quotient",
    "scale",
]


def zero_of(dtype: np.dtype) -> Any:
    """Returns the additive identity of a root dtype."""
    if dtype.kind == "O":
        return mpmath.mpf(0)
    return dtype.type(0)


def zeros(shape: tuple[int, ...], dtype: np.dtype) -> CoefficientArray:
    """Allocates a zero coefficient array."""
    if dtype.kind == "O":
        return np.full(shape, mpmath.mpf(0), dtype=object)
    return np.zeros(shape, dtype=dtype)


def root_index(ndim: int) -> tuple[int, ...]:
    """Index of the value coefficient in an array of the given rank."""
    return (0,) * ndim


def constant(shape: tuple[int, ...], dtype: np.dtype, value: Any) -> CoefficientArray:
    """Coefficient array of a constant: ``value`` at the root, zero elsewhere."""
    out = zeros(shape, dtype)
    out[root_index(len(shape))] = value
    return out


def pad_to(a: CoefficientArray, shape: tuple[int, ...]) -> CoefficientArray:
    """Zero-pads ``a`` to a larger shape.

    Extra trailing axes are inner variables ``a`` does not depend on, so its
    coefficients land at index 0 of those axes.
    """
    if a.shape == shape:
        return a
    out = zeros(shape, a.dtype)
    region = tuple(slice(0, s) for s in a.shape) + (0,) * (len(shape) - a.ndim)
    out[region] = a
    return out


def truncate_to(a: CoefficientArray, shape: tuple[int, ...]) -> CoefficientArray:
    """Drops coefficients past ``shape`` along each axis."""
    return a[tuple(slice(0, s) for s in shape)].copy()


def with_root(a: CoefficientArray, value: Any) -> CoefficientArray:
    """Copy of ``a`` with the value coefficient replaced."""
    out = a.copy()
    out[root_index(a.ndim)] = value
    return out


def epsilon(a: CoefficientArray) -> CoefficientArray:
    """The infinitesimal part of ``a``: a copy with a zero value coefficient."""
    return with_root(a, zero_of(a.dtype))


def is_constant(a: CoefficientArray) -> bool:
    """Tells whether every coefficient but the value is zero."""
    nonzero = a != 0
    nonzero[root_index(a.ndim)] = False
    return not nonzero.any()


def cauchy_product(a: CoefficientArray, b: CoefficientArray) -> CoefficientArray:
    """Truncated product of two series of identical shape.

    ``c[k] = sum_{i + j = k} a[i] * b[j]`` along the leading axis, where for
    more than one variable each ``a[i] * b[j]`` is itself a truncated product
    of the inner series.
    """
    n = a.shape[0]
    out = zeros(a.shape, a.dtype)
    if a.ndim == 1:
        for k in range(n):
            out[k] = np.dot(a[: k + 1], b[k::-1])
        return out
    for k in range(n):
        acc = cauchy_product(a[0], b[k])
        for i in range(1, k + 1):
            acc = acc + cauchy_product(a[i], b[k - i])
        out[k] = acc
    return out


def series_quotient(a: CoefficientArray, b: CoefficientArray) -> CoefficientArray:
    """Truncated quotient ``a / b`` of two series of identical shape.

    Solves ``a = q * b`` for ``q`` one order at a time:
    ``q[0] = a[0] / b[0]`` and
    ``q[k] = (a[k] - sum_{j=1..k} b[j] * q[k - j]) / b[0]``.
    The value coefficient of ``b`` must be non-zero; callers check it.
    """
    n = a.shape[0]
    out = zeros(a.shape, a.dtype)
    if a.ndim == 1:
        b0 = b[0]
        out[0] = a[0] / b0
        for k in range(1, n):
            out[k] = (a[k] - np.dot(b[1 : k + 1], out[k - 1 :: -1])) / b0
        return out
    for k in range(n):
        acc = a[k]
        for j in range(1, k + 1):
            acc = acc - cauchy_product(b[j], out[k - j])
        out[k] = series_quotient(acc, b[0])
    return out


def scale(a: CoefficientArray, factor: Any, *, scale_root: bool = True) -> CoefficientArray:
    """Multiplies every coefficient by a scalar of the same root type.

    Zero coefficients stay zero when ``factor`` is infinite or NaN instead of
    turning into NaN. With ``scale_root=True`` the value coefficient is
    multiplied unconditionally, as plain scalar arithmetic would.
    """
    out = a * factor
    if not is_finite(factor):
        zero = np.asarray(a == 0, dtype=bool)
        if scale_root:
            zero[root_index(a.ndim)] = False
        out[zero] = zero_of(a.dtype)
    return out
