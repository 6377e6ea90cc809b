"""Unit tests for series with mpmath roots."""

import mpmath
import numpy as np
import pytest

import taylorkit as tk
from taylorkit import make_variable, make_variables, numeric_limits


def _close(a, b, digits=40):
    """Returns True if a and b agree to the given number of digits."""
    return abs(a - b) <= mpmath.mpf(10) ** (-digits) * max(1, abs(b))


def test_mpf_seed_gives_object_series(mp_precision):
    """Tests that an mpf value produces mpmath coefficients."""
    x = make_variable(3, mpmath.mpf(2))
    assert x.dtype == object
    assert all(isinstance(c, mpmath.mpf) for c in x.coefficients)


def test_exp_at_high_precision(mp_precision):
    """Tests exp derivatives to 40 digits."""
    y = tk.exp(make_variable(4, mpmath.mpf(2)))
    for k in range(5):
        assert _close(y.derivative(k), mpmath.e**2)


def test_log_and_sqrt_at_high_precision(mp_precision):
    """Tests log and sqrt against mpmath's own derivatives."""
    x0 = mpmath.mpf(3)
    log_series = tk.log(make_variable(4, x0))
    sqrt_series = tk.sqrt(make_variable(4, x0))
    for k in range(5):
        assert _close(log_series.derivative(k), mpmath.diff(mpmath.log, x0, k), 30)
        assert _close(sqrt_series.derivative(k), mpmath.diff(mpmath.sqrt, x0, k), 30)


def test_lambert_w0_at_high_precision(mp_precision):
    """Tests Lambert W derivatives against the implicit-derivative formula."""
    x0 = mpmath.mpf(3)
    y = tk.lambert_w0(make_variable(3, x0))
    w = mpmath.lambertw(x0).real
    assert _close(y.derivative(0), w)
    assert _close(y.derivative(1), w / (x0 * (1 + w)))
    assert _close(y.derivative(3), mpmath.diff(lambda t: mpmath.lambertw(t).real, x0, 3), 30)


def test_mixed_partials_at_high_precision(mp_precision):
    """Tests a mixed partial of exp(x*y) with mpmath variables."""
    x, y = make_variables([2, 2], [mpmath.mpf(1) / 3, mpmath.mpf(2)])
    f = tk.exp(x * y)
    # d^2/dxdy exp(xy) = (1 + xy) exp(xy)
    expected = (1 + mpmath.mpf(2) / 3) * mpmath.exp(mpmath.mpf(2) / 3)
    assert _close(f.derivative(1, 1), expected)


def test_mixing_float_and_mpf_gives_object_root(mp_precision):
    """Tests that float64 series combined with mpf scalars become object series."""
    x = make_variable(2, 1.0)
    y = mpmath.mpf("0.1") * x
    assert y.dtype == object
    assert isinstance(y.value, mpmath.mpf)


def test_float_series_promoted_with_mpf_series(mp_precision):
    """Tests that a float64 series and an mpf series share the object root."""
    x = make_variable(2, 1.0)
    y = make_variable(2, mpmath.mpf(2))
    z = x * y
    assert z.dtype == object
    assert z.derivative(1) == 3


def test_mpc_series(mp_precision):
    """Tests complex multiprecision series."""
    x = make_variable(2, mpmath.mpc(0, 1))
    y = tk.exp(x)
    assert _close(y.value, mpmath.exp(mpmath.mpc(0, 1)))


def test_domain_errors_with_mpmath_roots(mp_precision):
    """Tests that real-domain checks apply to mpf values."""
    with pytest.raises(tk.DomainError):
        tk.log(make_variable(2, mpmath.mpf(-1)))


def test_numeric_limits_follow_mp_precision(mp_precision):
    """Tests that mpmath limits report the working precision."""
    limits = numeric_limits(mpmath.mpf)
    assert limits.digits10 == 50
    assert limits.max is None
    assert limits.epsilon < mpmath.mpf(10) ** -45


def test_numeric_limits_of_numpy_roots():
    """Tests that numpy roots use np.finfo."""
    limits = numeric_limits(tk.nested_type(np.float32, 2))
    assert limits.epsilon == np.finfo(np.float32).eps
    assert limits.max == np.finfo(np.float32).max
    assert limits.lowest == -np.finfo(np.float32).max
    assert numeric_limits(make_variable(1, 1.0)).digits10 == 15
