"""Scalar backends used to seed Taylor coefficients.

Elementary functions need the value and a few closed-form derivatives of the
outer function at the expansion point. Those are plain scalar evaluations,
done with numpy (and scipy.special) for numpy dtypes and with mpmath for
multiprecision roots stored in object arrays.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

import mpmath
import numpy as np
import scipy.special

__all__ = [
    "ScalarBackend",
    "NUMPY_BACKEND",
    "MPMATH_BACKEND",
    "backend_for",
    "is_finite",
    "is_complex_scalar",
    "real_part",
]


@dataclass(frozen=True)
class ScalarBackend:
    """Bundle of scalar functions for one family of root types."""

    name: str
    exp: Callable[[Any], Any]
    log: Callable[[Any], Any]
    sqrt: Callable[[Any], Any]
    sin: Callable[[Any], Any]
    cos: Callable[[Any], Any]
    tan: Callable[[Any], Any]
    asin: Callable[[Any], Any]
    acos: Callable[[Any], Any]
    atan: Callable[[Any], Any]
    atan2: Callable[[Any, Any], Any]
    sinh: Callable[[Any], Any]
    cosh: Callable[[Any], Any]
    tanh: Callable[[Any], Any]
    asinh: Callable[[Any], Any]
    acosh: Callable[[Any], Any]
    atanh: Callable[[Any], Any]
    erf: Callable[[Any], Any]
    erfc: Callable[[Any], Any]
    lambert_w0: Callable[[Any], Any]
    power: Callable[[Any, Any], Any]
    floor: Callable[[Any], Any]
    ceil: Callable[[Any], Any]
    trunc: Callable[[Any], Any]
    round: Callable[[Any], Any]
    frexp: Callable[[Any], tuple[Any, int]]
    ldexp: Callable[[Any, int], Any]
    isfinite: Callable[[Any], bool]
    is_integer: Callable[[Any], bool]
    pi: Callable[[], Any]
    inf: Callable[[], Any]


def _np_lambert_w0(v):
    w = scipy.special.lambertw(v, 0)
    return w if np.iscomplexobj(v) else w.real


def _np_round(v):
    # Half away from zero, like C ``round``.
    return np.sign(v) * np.floor(np.abs(v) + 0.5)


def _np_frexp(v):
    mantissa, exponent = np.frexp(v)
    return mantissa, int(exponent)


def _np_is_integer(v) -> bool:
    return bool(np.isreal(v)) and float(np.real(v)).is_integer()


NUMPY_BACKEND = ScalarBackend(
    name="numpy",
    exp=np.exp,
    log=np.log,
    sqrt=np.sqrt,
    sin=np.sin,
    cos=np.cos,
    tan=np.tan,
    asin=np.arcsin,
    acos=np.arccos,
    atan=np.arctan,
    atan2=np.arctan2,
    sinh=np.sinh,
    cosh=np.cosh,
    tanh=np.tanh,
    asinh=np.arcsinh,
    acosh=np.arccosh,
    atanh=np.arctanh,
    erf=scipy.special.erf,
    erfc=scipy.special.erfc,
    lambert_w0=_np_lambert_w0,
    power=np.power,
    floor=np.floor,
    ceil=np.ceil,
    trunc=np.trunc,
    round=_np_round,
    frexp=_np_frexp,
    ldexp=np.ldexp,
    isfinite=lambda v: bool(np.isfinite(v)),
    is_integer=_np_is_integer,
    pi=lambda: np.pi,
    inf=lambda: np.inf,
)


def _mp_lambert_w0(v):
    w = mpmath.lambertw(v)
    return w if isinstance(v, mpmath.mpc) else mpmath.re(w)


def _mp_trunc(v):
    return mpmath.floor(v) if v >= 0 else mpmath.ceil(v)


def _mp_round(v):
    return mpmath.sign(v) * mpmath.floor(abs(v) + mpmath.mpf(0.5))


MPMATH_BACKEND = ScalarBackend(
    name="mpmath",
    exp=mpmath.exp,
    log=mpmath.log,
    sqrt=mpmath.sqrt,
    sin=mpmath.sin,
    cos=mpmath.cos,
    tan=mpmath.tan,
    asin=mpmath.asin,
    acos=mpmath.acos,
    atan=mpmath.atan,
    atan2=mpmath.atan2,
    sinh=mpmath.sinh,
    cosh=mpmath.cosh,
    tanh=mpmath.tanh,
    asinh=mpmath.asinh,
    acosh=mpmath.acosh,
    atanh=mpmath.atanh,
    erf=mpmath.erf,
    erfc=mpmath.erfc,
    lambert_w0=_mp_lambert_w0,
    power=mpmath.power,
    floor=mpmath.floor,
    ceil=mpmath.ceil,
    trunc=_mp_trunc,
    round=_mp_round,
    frexp=mpmath.frexp,
    ldexp=mpmath.ldexp,
    isfinite=lambda v: bool(mpmath.isfinite(v)),
    is_integer=lambda v: bool(mpmath.isint(v)),
    pi=lambda: +mpmath.mp.pi,
    inf=lambda: mpmath.inf,
)


def backend_for(dtype: np.dtype) -> ScalarBackend:
    """Returns the scalar backend for a root dtype."""
    return MPMATH_BACKEND if np.dtype(dtype).kind == "O" else NUMPY_BACKEND


def is_finite(value: Any) -> bool:
    """Tells whether a numpy, Python or mpmath scalar is finite."""
    if isinstance(value, (mpmath.mpf, mpmath.mpc)):
        return bool(mpmath.isfinite(value))
    return bool(np.isfinite(value))


def is_complex_scalar(value: Any) -> bool:
    """Tells whether a scalar is of a complex type."""
    return isinstance(value, (complex, np.complexfloating, mpmath.mpc))


def real_part(value: Any) -> Any:
    """Returns the real part of a scalar, keeping its precision."""
    if isinstance(value, mpmath.mpc):
        return value.real
    if isinstance(value, mpmath.mpf):
        return value
    return np.real(value)
