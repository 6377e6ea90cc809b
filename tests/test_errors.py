"""Unit tests for domain errors and the exception hierarchy."""

import math

import pytest

import taylorkit as tk
from taylorkit import (
    AutodiffError,
    DivisionByZero,
    DomainError,
    TruncationExceeded,
    TypePromotionFailure,
    make_constant,
    make_series,
    make_variable,
)


@pytest.mark.parametrize(
    "exc, builtin",
    [
        (TruncationExceeded, IndexError),
        (DivisionByZero, ZeroDivisionError),
        (DomainError, ValueError),
        (TypePromotionFailure, TypeError),
    ],
)
def test_exceptions_derive_from_builtin_and_base(exc, builtin):
    """Tests that every error is an AutodiffError and the matching builtin."""
    assert issubclass(exc, AutodiffError)
    assert issubclass(exc, builtin)


@pytest.mark.parametrize(
    "func, x0, order",
    [
        (tk.log, 0.0, 3),
        (tk.log, -1.0, 0),
        (tk.sqrt, -1.0, 2),
        (tk.asin, 1.5, 0),
        (tk.asin, 1.0, 1),
        (tk.acos, -1.0, 2),
        (tk.acosh, 0.5, 1),
        (tk.acosh, 1.0, 1),
        (tk.atanh, 1.0, 0),
        (tk.atanh, -2.0, 1),
        (tk.lambert_w0, -1.0, 1),
        (tk.lambert_w0, -0.5, 0),
    ],
)
def test_out_of_domain_raises(func, x0, order):
    """Tests that values outside a function's domain raise DomainError."""
    with pytest.raises(DomainError):
        func(make_variable(order, x0))


def test_domain_error_is_a_value_error():
    """Tests that DomainError can be caught as ValueError."""
    with pytest.raises(ValueError):
        tk.log(make_variable(1, -3.0))


@pytest.mark.parametrize(
    "build",
    [
        lambda: make_variable(2, -2.0) ** 0.5,
        lambda: make_variable(2, 0.0) ** -1,
        lambda: (-2.0) ** make_variable(2, 1.0),
        lambda: 0.0 ** make_variable(2, -1.0),
        lambda: tk.pow(-2.0, make_constant(2, 0.5)),
        lambda: make_variable(2, 0.0) ** make_series(1.0, 0, 2),
        lambda: tk.fmod(make_variable(2, 1.0), 0.0),
        lambda: tk.atan2(make_variable(1, 0.0), 0.0),
    ],
)
def test_power_and_remainder_domain_errors(build):
    """Tests domain errors of pow, fmod and atan2."""
    with pytest.raises(DomainError):
        build()


def test_atan2_at_origin_with_order_zero():
    """Tests that atan2(0, 0) is defined when no derivatives are requested."""
    z = tk.atan2(make_variable(0, 0.0), 0.0)
    assert z.value == 0.0


def test_complex_fabs_is_a_domain_error():
    """Tests that fabs rejects complex series."""
    with pytest.raises(DomainError):
        tk.fabs(make_variable(1, 1 + 1j))


def test_complex_roots_skip_real_domain_checks():
    """Tests that log of a negative complex value is defined."""
    y = tk.log(make_variable(2, -1.0 + 0j))
    assert y.value == pytest.approx(complex(0, math.pi))
    assert y.derivative(1) == pytest.approx(-1.0)


def test_derivative_beyond_order_is_an_error():
    """Tests that requesting a derivative past the truncation order raises."""
    y = tk.exp(make_variable(2, 0.0))
    with pytest.raises(TruncationExceeded):
        y.derivative(3)


def test_negative_base_with_integer_constant_exponent():
    """Tests that a negative base is allowed when the constant exponent is integral."""
    z = tk.pow(-2.0, make_constant(2, 3.0))
    assert z.value == pytest.approx(-8.0)
    assert z.at(1) == 0.0
