"""Unit tests for numpy ufunc interoperability."""

import math

import numpy as np
import pytest
from numpy.testing import assert_allclose

import taylorkit as tk
from taylorkit import TaylorSeries, make_variable, make_variables
from taylorkit.autodiff.ufuncs import supported_ufuncs


@pytest.mark.parametrize(
    "ufunc, func",
    [
        (np.exp, tk.exp),
        (np.log, tk.log),
        (np.sqrt, tk.sqrt),
        (np.sin, tk.sin),
        (np.cos, tk.cos),
        (np.tan, tk.tan),
        (np.arcsin, tk.asin),
        (np.arccos, tk.acos),
        (np.arctan, tk.atan),
        (np.sinh, tk.sinh),
        (np.cosh, tk.cosh),
        (np.tanh, tk.tanh),
        (np.arcsinh, tk.asinh),
        (np.arctanh, tk.atanh),
        (np.absolute, tk.fabs),
    ],
)
def test_unary_ufuncs_match_functions(ufunc, func):
    """Tests that numpy ufuncs on a series call the matching function."""
    x = make_variable(3, 0.3)
    y = ufunc(x)
    assert isinstance(y, TaylorSeries)
    assert_allclose(y.coefficients, func(x).coefficients)


def test_numpy_scalar_on_the_left():
    """Tests that numpy scalars combine with series from either side."""
    x = make_variable(2, 1.0)
    for y in (np.float64(2.0) * x, x * np.float64(2.0)):
        assert isinstance(y, TaylorSeries)
        assert_allclose(y.coefficients, [2.0, 2.0, 0.0])
    z = np.float64(1.0) - x
    assert_allclose(z.coefficients, [0.0, -1.0, 0.0])
    w = np.float64(1.0) / (x + 1)
    assert_allclose(w.derivative(1), -0.25)


def test_binary_ufuncs():
    """Tests explicit binary ufunc calls with series operands."""
    x, y = make_variables([1, 1], [1.0, 2.0])
    assert_allclose(np.multiply(x, y).coefficients, (x * y).coefficients)
    assert_allclose(np.arctan2(y, x).value, math.atan2(2.0, 1.0))
    assert_allclose(np.power(x, 2).coefficients, (x**2).coefficients)
    assert np.less(x, y)
    assert np.equal(x, 1.0)


def test_object_arrays_of_series():
    """Tests ufuncs and reductions on object arrays holding series."""
    x, y = make_variables([1, 1], [0.5, 2.0])
    arr = np.array([x, y], dtype=object)
    s = np.sin(arr)
    assert s.dtype == object
    assert_allclose(s[0].derivative(1, 0), math.cos(0.5))
    total = np.sum(arr * np.array([3.0, 4.0]))
    assert_allclose(total.derivative(1, 0), 3.0)
    assert_allclose(total.derivative(0, 1), 4.0)


def test_float_array_plus_series():
    """Tests that an array plus a series gives an object array of series."""
    x = make_variable(1, 1.0)
    out = np.array([1.0, 2.0]) + x
    assert out.dtype == object
    assert_allclose([v.value for v in out], [2.0, 3.0])


def test_matrix_quadratic_form():
    """Tests a quadratic form evaluated with matmul on series."""
    x, y = make_variables([2, 2], [1.0, -1.0])
    v = np.array([x, y], dtype=object)
    a = np.array([[2.0, 1.0], [1.0, 3.0]])
    q = v @ a @ v
    assert_allclose(q.derivative(2, 0), 4.0)
    assert_allclose(q.derivative(1, 1), 2.0)
    assert_allclose(q.derivative(0, 2), 6.0)


def test_unsupported_ufunc_raises_type_error():
    """Tests that ufuncs without a series rule raise TypeError."""
    x = make_variable(1, 1.0)
    assert np.hypot not in supported_ufuncs()
    with pytest.raises(TypeError):
        np.hypot(x, x)


def test_ufunc_with_out_argument_is_rejected():
    """Tests that ufunc calls with keyword arguments raise TypeError."""
    x = make_variable(1, 1.0)
    out = np.empty((), dtype=object)
    with pytest.raises(TypeError):
        np.exp(x, out=out)
