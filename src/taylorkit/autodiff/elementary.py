"""Elementary functions of Taylor series.

Each function evaluates the outer function and enough of its derivatives at
the value of its argument, then hands them to
:mod:`taylorkit.autodiff.composition`. Functions whose derivative is an
algebraic expression (``atan``, ``asin``, ``erf``...) expand that expression
as a one-variable series around the value and integrate it term by term.

On real roots, points outside a function's domain raise
:class:`~taylorkit.exceptions.DomainError` instead of returning NaN
coefficients. Boundary points where the value exists but the derivatives do
not (``asin(1)``, ``acosh(1)``...) are accepted only for order-0 series.
Complex roots skip the real-domain checks.
"""

from __future__ import annotations

import builtins
from typing import Any, Callable

import numpy as np

from taylorkit.autodiff import kernels
from taylorkit.autodiff.composition import apply_coefficients, apply_derivatives
from taylorkit.autodiff.construct import make_variable
from taylorkit.autodiff.promotion import (
    SeriesType,
    cast_scalar,
    coefficients_as,
    common_operand_type,
    is_operand,
)
from taylorkit.autodiff.scalar_math import (
    ScalarBackend,
    backend_for,
    is_complex_scalar,
    real_part,
)
from taylorkit.autodiff.series import TaylorSeries
from taylorkit.exceptions import DomainError
from taylorkit.utils.numerics import factorial, falling_factorial

__all__ = [
    "exp",
    "log",
    "sqrt",
    "sin",
    "cos",
    "tan",
    "asin",
    "acos",
    "atan",
    "atan2",
    "sinh",
    "cosh",
    "tanh",
    "asinh",
    "acosh",
    "atanh",
    "erf",
    "erfc",
    "lambert_w0",
    "sinc",
    "pow",
    "fabs",
    "abs",
    "floor",
    "ceil",
    "round",
    "trunc",
    "iround",
    "itrunc",
    "frexp",
    "ldexp",
    "fmod",
    "inverse",
]


def _series_arg(x: Any, name: str) -> TaylorSeries:
    if not isinstance(x, TaylorSeries):
        raise TypeError(f"{name}() expects a TaylorSeries; got {type(x).__name__}.")
    return x


def _backend(x: TaylorSeries) -> ScalarBackend:
    return backend_for(x.dtype)


def _is_real(value: Any) -> bool:
    return not is_complex_scalar(value)


def _as_type(value: Any, target: SeriesType) -> TaylorSeries:
    return TaylorSeries._from_array(coefficients_as(value, target))


def _constant_like(x: TaylorSeries, value: Any) -> TaylorSeries:
    shape = x.coefficients.shape
    return TaylorSeries._from_array(
        kernels.constant(shape, x.dtype, cast_scalar(value, x.dtype))
    )


def _with_derivative(
    x: TaylorSeries,
    value: Any,
    derivative: Callable[[TaylorSeries], TaylorSeries],
) -> TaylorSeries:
    """Composes ``x`` with ``f`` given ``f(x0)`` and a series expression of ``f'``.

    ``f'`` is expanded to order ``n - 1`` around ``x0`` in one variable; its
    ``k - 1``-th coefficient divided by ``k`` is the ``k``-th coefficient of ``f``.
    """
    n = x.order_sum
    if n == 0:
        return apply_coefficients(x, [value])
    u = make_variable(n - 1, x.value, dtype=x.dtype)
    d = derivative(u)
    coefficients = [value] + [d.at(k - 1) / k for k in range(1, n + 1)]
    return apply_coefficients(x, coefficients)


def exp(x: TaylorSeries) -> TaylorSeries:
    """Exponential. Every derivative equals ``exp(x0)``."""
    x = _series_arg(x, "exp")
    d0 = _backend(x).exp(x.value)
    return apply_derivatives(x, [d0] * (x.order_sum + 1))


def log(x: TaylorSeries) -> TaylorSeries:
    """Natural logarithm.

    Raises:
        DomainError: If the value is not positive (or is complex zero).
    """
    x = _series_arg(x, "log")
    x0 = x.value
    if (_is_real(x0) and x0 <= 0) or x0 == 0:
        raise DomainError(f"log() requires a positive value; got {x0}.")
    coefficients = [_backend(x).log(x0)]
    if x.order_sum >= 1:
        c = 1 / x0
        coefficients.append(c)
        for k in range(2, x.order_sum + 1):
            c = c * (1 - k) / (k * x0)
            coefficients.append(c)
    return apply_coefficients(x, coefficients)


def sqrt(x: TaylorSeries) -> TaylorSeries:
    """Square root.

    At zero the value is 0 and the derivatives are alternately ``+inf`` and
    ``-inf``; they reach only the coefficients they multiply.

    Raises:
        DomainError: If the value is negative, or complex zero with order > 0.
    """
    x = _series_arg(x, "sqrt")
    be = _backend(x)
    x0 = x.value
    n = x.order_sum
    if _is_real(x0) and x0 < 0:
        raise DomainError(f"sqrt() requires a non-negative value; got {x0}.")
    d0 = be.sqrt(x0)
    if n == 0:
        return apply_coefficients(x, [d0])
    if x0 == 0:
        if not _is_real(x0):
            raise DomainError("sqrt() has no derivatives at complex zero.")
        inf = cast_scalar(be.inf(), x.dtype)
        return apply_coefficients(x, [d0] + [inf if k % 2 else -inf for k in range(1, n + 1)])
    coefficients = [d0]
    c = d0
    for k in range(1, n + 1):
        c = c * (3 - 2 * k) / (2 * k * x0)
        coefficients.append(c)
    return apply_coefficients(x, coefficients)


def sin(x: TaylorSeries) -> TaylorSeries:
    """Sine."""
    x = _series_arg(x, "sin")
    be = _backend(x)
    s, c = be.sin(x.value), be.cos(x.value)
    cycle = (s, c, -s, -c)
    return apply_derivatives(x, [cycle[k % 4] for k in range(x.order_sum + 1)])


def cos(x: TaylorSeries) -> TaylorSeries:
    """Cosine."""
    x = _series_arg(x, "cos")
    be = _backend(x)
    s, c = be.sin(x.value), be.cos(x.value)
    cycle = (c, -s, -c, s)
    return apply_derivatives(x, [cycle[k % 4] for k in range(x.order_sum + 1)])


def tan(x: TaylorSeries) -> TaylorSeries:
    """Tangent, from ``tan' = 1 / cos**2``.

    Raises:
        DomainError: If the cosine of the value is exactly zero.
    """
    x = _series_arg(x, "tan")
    be = _backend(x)
    if be.cos(x.value) == 0:
        raise DomainError(f"tan() is undefined at {x.value}.")
    return _with_derivative(x, be.tan(x.value), lambda u: 1 / (cos(u) * cos(u)))


def _check_unit_interval(x: TaylorSeries, name: str) -> None:
    x0 = x.value
    if not _is_real(x0):
        return
    if builtins.abs(x0) > 1:
        raise DomainError(f"{name}() requires a value in [-1, 1]; got {x0}.")
    if builtins.abs(x0) == 1 and x.order_sum > 0:
        raise DomainError(f"{name}() has no finite derivatives at {x0}.")


def asin(x: TaylorSeries) -> TaylorSeries:
    """Inverse sine.

    Raises:
        DomainError: If ``|x0| > 1``, or ``|x0| == 1`` with order > 0.
    """
    x = _series_arg(x, "asin")
    _check_unit_interval(x, "asin")
    return _with_derivative(x, _backend(x).asin(x.value), lambda u: 1 / sqrt(1 - u * u))


def acos(x: TaylorSeries) -> TaylorSeries:
    """Inverse cosine.

    Raises:
        DomainError: If ``|x0| > 1``, or ``|x0| == 1`` with order > 0.
    """
    x = _series_arg(x, "acos")
    _check_unit_interval(x, "acos")
    return _with_derivative(x, _backend(x).acos(x.value), lambda u: -1 / sqrt(1 - u * u))


def atan(x: TaylorSeries) -> TaylorSeries:
    """Inverse tangent."""
    x = _series_arg(x, "atan")
    return _with_derivative(x, _backend(x).atan(x.value), lambda u: 1 / (1 + u * u))


def atan2(y: Any, x: Any) -> TaylorSeries:
    """Two-argument inverse tangent of ``y / x``, for any mix of series and scalars.

    Away from ``x0 == 0`` this is ``atan(y / x)`` shifted by the branch
    constant, otherwise ``-atan(x / y)`` shifted; only the value coefficient
    depends on the branch.

    Raises:
        DomainError: If both values are zero and derivatives are requested.
        TypeError: If neither argument is a series.
    """
    if not (isinstance(y, TaylorSeries) or isinstance(x, TaylorSeries)):
        raise TypeError("atan2() expects at least one TaylorSeries.")
    if not (is_operand(x) and is_operand(y)):
        raise TypeError("atan2() arguments must be numeric.")
    target = common_operand_type(y, x)
    y, x = _as_type(y, target), _as_type(x, target)
    be = _backend(x)
    value = be.atan2(y.value, x.value)
    if x.value != 0:
        return atan(y / x).with_root(value)
    if y.value != 0:
        return (-atan(x / y)).with_root(value)
    if x.order_sum > 0:
        raise DomainError("atan2() has no derivatives at (0, 0).")
    return _constant_like(x, value)


def sinh(x: TaylorSeries) -> TaylorSeries:
    """Hyperbolic sine."""
    x = _series_arg(x, "sinh")
    be = _backend(x)
    pair = (be.sinh(x.value), be.cosh(x.value))
    return apply_derivatives(x, [pair[k % 2] for k in range(x.order_sum + 1)])


def cosh(x: TaylorSeries) -> TaylorSeries:
    """Hyperbolic cosine."""
    x = _series_arg(x, "cosh")
    be = _backend(x)
    pair = (be.cosh(x.value), be.sinh(x.value))
    return apply_derivatives(x, [pair[k % 2] for k in range(x.order_sum + 1)])


def tanh(x: TaylorSeries) -> TaylorSeries:
    """Hyperbolic tangent.

    Uses ``(1 - e) / (1 + e)`` with ``e = exp(-2x)`` for non-negative values
    and the mirrored form otherwise, so large arguments do not overflow.
    """
    x = _series_arg(x, "tanh")
    value = _backend(x).tanh(x.value)
    if real_part(x.value) >= 0:
        e = exp(x * -2)
        return ((1 - e) / (1 + e)).with_root(value)
    e = exp(x * 2)
    return ((e - 1) / (e + 1)).with_root(value)


def asinh(x: TaylorSeries) -> TaylorSeries:
    """Inverse hyperbolic sine."""
    x = _series_arg(x, "asinh")
    return _with_derivative(x, _backend(x).asinh(x.value), lambda u: 1 / sqrt(u * u + 1))


def acosh(x: TaylorSeries) -> TaylorSeries:
    """Inverse hyperbolic cosine.

    Raises:
        DomainError: If ``x0 < 1``, or ``x0 == 1`` with order > 0.
    """
    x = _series_arg(x, "acosh")
    x0 = x.value
    if _is_real(x0):
        if x0 < 1:
            raise DomainError(f"acosh() requires a value >= 1; got {x0}.")
        if x0 == 1 and x.order_sum > 0:
            raise DomainError("acosh() has no finite derivatives at 1.")
    return _with_derivative(x, _backend(x).acosh(x0), lambda u: 1 / sqrt(u * u - 1))


def atanh(x: TaylorSeries) -> TaylorSeries:
    """Inverse hyperbolic tangent.

    Raises:
        DomainError: If ``|x0| >= 1``.
    """
    x = _series_arg(x, "atanh")
    x0 = x.value
    if _is_real(x0) and builtins.abs(x0) >= 1:
        raise DomainError(f"atanh() requires a value in (-1, 1); got {x0}.")
    return _with_derivative(x, _backend(x).atanh(x0), lambda u: 1 / (1 - u * u))


def _two_over_sqrt_pi(x: TaylorSeries) -> Any:
    be = _backend(x)
    return cast_scalar(2, x.dtype) / be.sqrt(cast_scalar(be.pi(), x.dtype))


def erf(x: TaylorSeries) -> TaylorSeries:
    """Error function."""
    x = _series_arg(x, "erf")
    factor = _two_over_sqrt_pi(x)
    return _with_derivative(x, _backend(x).erf(x.value), lambda u: exp(-(u * u)) * factor)


def erfc(x: TaylorSeries) -> TaylorSeries:
    """Complementary error function."""
    x = _series_arg(x, "erfc")
    factor = -_two_over_sqrt_pi(x)
    return _with_derivative(x, _backend(x).erfc(x.value), lambda u: exp(-(u * u)) * factor)


def lambert_w0(x: TaylorSeries) -> TaylorSeries:
    """Principal branch of the Lambert W function.

    With ``W = W(x0)``, ``d1 = 1 / (x0 + e**W)`` and ``X = d1 * e**W``, the
    ``n``-th derivative is ``d1**n`` times a degree ``n - 1`` polynomial in
    ``X`` whose coefficients follow a two-term recurrence in ``n``.

    Raises:
        DomainError: If ``x0 < -1/e``, or ``x0 == -1/e`` with order > 0.
    """
    x = _series_arg(x, "lambert_w0")
    be = _backend(x)
    x0 = x.value
    n = x.order_sum
    if _is_real(x0):
        branch_point = -be.exp(cast_scalar(-1, x.dtype))
        if x0 < branch_point:
            raise DomainError(f"lambert_w0() requires a value >= -1/e; got {x0}.")
        if x0 == branch_point and n > 0:
            raise DomainError("lambert_w0() has no finite derivatives at -1/e.")
    w = be.lambert_w0(x0)
    derivatives = [w]
    if n >= 1:
        ew = be.exp(w)
        d1 = 1 / (x0 + ew)
        derivatives.append(d1)
    if n >= 2:
        d1_power = d1 * d1
        big_x = d1 * ew
        derivatives.append(d1_power * (-1 - big_x))
        one = cast_scalar(1, x.dtype)
        coef = [-one, -one] + [one * 0] * (n - 2)
        for m in range(3, n + 1):
            coef[m - 1] = coef[m - 2] * -(2 * m - 3)
            for j in range(m - 2, 0, -1):
                coef[j] = coef[j] * -(m - 1) - (m + j - 2) * coef[j - 1]
            coef[0] = coef[0] * -(m - 1)
            d1_power = d1_power * d1
            acc = coef[m - 1]
            for j in range(m - 2, -1, -1):
                acc = acc * big_x + coef[j]
            derivatives.append(d1_power * acc)
    return apply_derivatives(x, derivatives)


def sinc(x: TaylorSeries) -> TaylorSeries:
    """Unnormalized sinc, ``sin(x) / x`` with ``sinc(0) = 1``."""
    x = _series_arg(x, "sinc")
    if x.value != 0:
        return sin(x) / x
    one = cast_scalar(1, x.dtype)
    coefficients = [one] + [one * 0] * x.order_sum
    for m in range(2, x.order_sum + 1, 2):
        sign = one if m % 4 == 0 else -one
        coefficients[m] = sign / factorial(m + 1)
    return apply_coefficients(x, coefficients)


def _power_at(be: ScalarBackend, x0: Any, exponent: Any) -> Any:
    if x0 == 0:
        p = real_part(exponent)
        if p > 0:
            return x0 * 0
        if p == 0:
            return x0 * 0 + 1
        return be.inf()
    return be.power(x0, exponent)


def _pow_scalar_exponent(x: TaylorSeries, p: Any) -> TaylorSeries:
    target = common_operand_type(x, p)
    x = _as_type(x, target)
    p = cast_scalar(p, target.root)
    be = _backend(x)
    x0 = x.value
    if _is_real(x0) and _is_real(p):
        if x0 < 0 and not be.is_integer(p):
            raise DomainError(f"pow() of negative {x0} needs an integer exponent; got {p}.")
    if x0 == 0 and real_part(p) < 0:
        raise DomainError(f"pow() of zero needs a non-negative exponent; got {p}.")
    derivatives = []
    for k in range(x.order_sum + 1):
        ff = falling_factorial(p, k)
        if ff == 0:
            derivatives.append(ff)
        else:
            derivatives.append(ff * _power_at(be, x0, p - k))
    return apply_derivatives(x, derivatives)


def _pow_scalar_base(a: Any, y: TaylorSeries) -> TaylorSeries:
    target = common_operand_type(a, y)
    y = _as_type(y, target)
    a = cast_scalar(a, target.root)
    be = _backend(y)
    y0 = y.value
    if a == 0 and real_part(y0) < 0:
        raise DomainError(f"pow() of zero needs a non-negative exponent; got {y0}.")
    if _is_real(a) and _is_real(y0) and a < 0 and not be.is_integer(y0):
        raise DomainError(f"pow() of negative {a} needs an integer exponent; got {y0}.")
    if kernels.is_constant(y.coefficients):
        return _constant_like(y, _power_at(be, a, y0))
    if (_is_real(a) and a <= 0) or a == 0:
        raise DomainError(f"pow() with a series exponent needs a positive base; got {a}.")
    log_a = be.log(a)
    derivatives = [be.power(a, y0)]
    for _ in range(y.order_sum):
        derivatives.append(derivatives[-1] * log_a)
    return apply_derivatives(y, derivatives)


def _pow_series(x: TaylorSeries, y: TaylorSeries) -> TaylorSeries:
    target = common_operand_type(x, y)
    x, y = _as_type(x, target), _as_type(y, target)
    if kernels.is_constant(y.coefficients):
        return _pow_scalar_exponent(x, y.value)
    if kernels.is_constant(x.coefficients):
        return _pow_scalar_base(x.value, y)
    x0 = x.value
    if (_is_real(x0) and x0 <= 0) or x0 == 0:
        raise DomainError(f"pow() with a series exponent needs a positive base; got {x0}.")
    return exp(y * log(x))


def pow(x: Any, y: Any) -> TaylorSeries:
    """Power ``x ** y`` where either or both arguments are series.

    * series ** scalar: derivatives ``p (p - 1) ... (p - k + 1) x0**(p - k)``.
    * scalar ** series: derivatives ``a**y0 * log(a)**k``.
    * series ** series: ``exp(y * log(x))``, or one of the above when a side
      is constant.

    Raises:
        DomainError: For a negative base with a non-integer exponent, zero to a
            negative power, or a non-positive base under a varying exponent.
        TypeError: If neither argument is a series.
    """
    if isinstance(x, TaylorSeries) and isinstance(y, TaylorSeries):
        return _pow_series(x, y)
    if isinstance(x, TaylorSeries) and is_operand(y):
        return _pow_scalar_exponent(x, y)
    if isinstance(y, TaylorSeries) and is_operand(x):
        return _pow_scalar_base(x, y)
    raise TypeError(
        f"pow() expects a TaylorSeries and a number; got {type(x).__name__}, {type(y).__name__}."
    )


def fabs(x: TaylorSeries) -> TaylorSeries:
    """Absolute value. At zero the result is the zero series; NaN propagates.

    Raises:
        DomainError: For complex roots.
    """
    x = _series_arg(x, "fabs")
    x0 = x.value
    if not _is_real(x0):
        raise DomainError("fabs() is not differentiable for complex values.")
    if x0 < 0:
        return -x
    if x0 == 0:
        return _constant_like(x, 0)
    return x


def abs(x: TaylorSeries) -> TaylorSeries:
    """Same as :func:`fabs`."""
    return fabs(x)


def floor(x: TaylorSeries) -> TaylorSeries:
    """Constant series holding ``floor(x0)``."""
    x = _series_arg(x, "floor")
    return _constant_like(x, _backend(x).floor(x.value))


def ceil(x: TaylorSeries) -> TaylorSeries:
    """Constant series holding ``ceil(x0)``."""
    x = _series_arg(x, "ceil")
    return _constant_like(x, _backend(x).ceil(x.value))


def round(x: TaylorSeries) -> TaylorSeries:
    """Constant series holding ``x0`` rounded half away from zero."""
    x = _series_arg(x, "round")
    return _constant_like(x, _backend(x).round(x.value))


def trunc(x: TaylorSeries) -> TaylorSeries:
    """Constant series holding ``x0`` rounded towards zero."""
    x = _series_arg(x, "trunc")
    return _constant_like(x, _backend(x).trunc(x.value))


def iround(x: TaylorSeries) -> int:
    """``x0`` rounded half away from zero, as a Python ``int``."""
    x = _series_arg(x, "iround")
    return int(_backend(x).round(x.value))


def itrunc(x: TaylorSeries) -> int:
    """``x0`` rounded towards zero, as a Python ``int``."""
    x = _series_arg(x, "itrunc")
    return int(_backend(x).trunc(x.value))


def frexp(x: TaylorSeries) -> tuple[TaylorSeries, int]:
    """Splits off the binary exponent ``e`` of the value: ``x = m * 2**e``.

    Returns:
        ``(x * 2**-e, e)``, where the value of the first item is in
        ``[0.5, 1)`` in magnitude.
    """
    x = _series_arg(x, "frexp")
    _, exponent = _backend(x).frexp(x.value)
    return ldexp(x, -exponent), exponent


def ldexp(x: TaylorSeries, exponent: int) -> TaylorSeries:
    """Multiplies every coefficient by ``2**exponent``."""
    x = _series_arg(x, "ldexp")
    factor = _backend(x).ldexp(cast_scalar(1, x.dtype), int(exponent))
    return x * factor


def fmod(a: Any, b: Any) -> TaylorSeries:
    """Floating-point remainder ``a - b * trunc(a0 / b0)``.

    Raises:
        DomainError: If the value of ``b`` is zero.
        TypeError: If neither argument is a series.
    """
    if not (isinstance(a, TaylorSeries) or isinstance(b, TaylorSeries)):
        raise TypeError("fmod() expects at least one TaylorSeries.")
    if not (is_operand(a) and is_operand(b)):
        raise TypeError("fmod() arguments must be numeric.")
    target = common_operand_type(a, b)
    a, b = _as_type(a, target), _as_type(b, target)
    if b.value == 0:
        raise DomainError("fmod() with a zero divisor.")
    with np.errstate(invalid="ignore"):
        quotient = _backend(a).trunc(a.value / b.value)
    return a - b * quotient


def inverse(x: TaylorSeries) -> TaylorSeries:
    """Returns ``1 / x``.

    Raises:
        DivisionByZero: If the value of ``x`` is zero.
    """
    return _series_arg(x, "inverse").inverse()
