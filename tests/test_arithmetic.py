"""Unit tests for series arithmetic and comparisons."""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from taylorkit import (
    DivisionByZero,
    TaylorSeries,
    inverse,
    make_constant,
    make_variable,
    make_variables,
)


def _random_series(rng, orders, positive_value=False):
    """Returns a float64 series with random coefficients."""
    coeffs = rng.normal(size=tuple(o + 1 for o in orders))
    if positive_value:
        coeffs[(0,) * len(orders)] = 1.0 + abs(coeffs[(0,) * len(orders)])
    return TaylorSeries(coeffs)


def test_cube_of_variable():
    """Tests that x*x*x at 2 gives the derivatives of x^3."""
    x = make_variable(5, 2.0)
    y = x * x * x
    assert_allclose([y.derivative(k) for k in range(6)], [8, 12, 12, 6, 0, 0])


@pytest.mark.parametrize("orders", [(4,), (2, 3), (1, 2, 2)])
def test_add_then_subtract_is_identity(orders):
    """Tests that (a + b) - b reproduces a."""
    rng = np.random.default_rng(0)
    a = _random_series(rng, orders)
    b = _random_series(rng, orders)
    assert_allclose(((a + b) - b).coefficients, a.coefficients, atol=1e-12)


@pytest.mark.parametrize("orders", [(5,), (3, 2), (2, 1, 2)])
def test_divide_then_multiply_is_identity(orders):
    """Tests that (a / b) * b reproduces a for a non-zero denominator."""
    rng = np.random.default_rng(1)
    a = _random_series(rng, orders)
    b = _random_series(rng, orders, positive_value=True)
    assert_allclose(((a / b) * b).coefficients, a.coefficients, rtol=1e-9, atol=1e-9)


def test_product_is_commutative_and_associative():
    """Tests the ring laws of the truncated product."""
    rng = np.random.default_rng(2)
    a, b, c = (_random_series(rng, (3, 2)) for _ in range(3))
    assert_allclose((a * b).coefficients, (b * a).coefficients, atol=1e-12)
    assert_allclose(((a * b) * c).coefficients, (a * (b * c)).coefficients, atol=1e-12)


def test_scalar_operations_touch_expected_coefficients():
    """Tests that adding a scalar changes only the value, scaling changes all."""
    x = make_variable(2, 1.0)
    assert_allclose((x + 3).coefficients, [4.0, 1.0, 0.0])
    assert_allclose((3 + x).coefficients, [4.0, 1.0, 0.0])
    assert_allclose((x - 3).coefficients, [-2.0, 1.0, 0.0])
    assert_allclose((3 - x).coefficients, [2.0, -1.0, 0.0])
    assert_allclose((x * 2).coefficients, [2.0, 2.0, 0.0])
    assert_allclose((2 * x).coefficients, [2.0, 2.0, 0.0])
    assert_allclose((x / 2).coefficients, [0.5, 0.5, 0.0])


def test_scalar_divided_by_series():
    """Tests that 1 / x expands as the geometric series."""
    x = make_variable(4, 2.0)
    y = 1 / x
    expected = [1 / 2, -1 / 4, 2 / 8, -6 / 16, 24 / 32]
    assert_allclose([y.derivative(k) for k in range(5)], expected)
    assert_allclose(inverse(x).coefficients, y.coefficients)
    assert_allclose(x.inverse().coefficients, y.coefficients)


def test_negation():
    """Tests unary minus and plus."""
    x = make_variable(2, 1.5)
    assert_allclose((-x).coefficients, [-1.5, -1.0, 0.0])
    assert_allclose(x.negate().coefficients, [-1.5, -1.0, 0.0])
    assert +x is x


def test_operators_do_not_mutate_operands():
    """Tests that every operator leaves its inputs unchanged."""
    x = make_variable(2, 1.0)
    before = x.coefficients.copy()
    _ = x + x, x - 1, x * x, x / (x + 1), -x, x**2
    assert_allclose(x.coefficients, before)


def test_mixed_orders_promote_to_larger_order():
    """Tests that operands of different orders are zero-padded to the larger one."""
    x = make_variable(1, 2.0)
    y = make_variable(3, 2.0)
    z = x * y
    assert z.orders == (3,)
    # x is truncated at order 1: x * y = (2 + dx) * (2 + dx) with dx**2 kept
    assert_allclose(z.coefficients, [4.0, 4.0, 1.0, 0.0])


def test_lower_depth_operand_is_constant_in_inner_levels():
    """Tests that a shallower series is padded as constant in the missing levels."""
    x = make_variable(2, 3.0)
    c = make_constant([2, 2], 2.0)
    z = x + c
    assert z.orders == (2, 2)
    assert z.at(1, 0) == 1.0
    assert z.at(0, 1) == 0.0


def test_multiply_by_infinity_keeps_zero_coefficients():
    """Tests that scaling by inf leaves zero coefficients at zero instead of NaN."""
    x = make_variable(2, 2.0)
    y = x * np.inf
    assert np.isposinf(y.at(0))
    assert np.isposinf(y.at(1))
    assert y.at(2) == 0.0


@pytest.mark.parametrize("denominator", [0.0, 0, make_variable(2, 0.0)])
def test_division_by_zero_raises(denominator):
    """Tests that dividing by a zero value raises DivisionByZero."""
    x = make_variable(2, 1.0)
    with pytest.raises(DivisionByZero):
        x / denominator
    with pytest.raises(ZeroDivisionError):
        x / denominator


def test_division_by_series_with_zero_value_but_nonzero_slope():
    """Tests that only the value coefficient decides a zero division."""
    b = TaylorSeries([0.0, 5.0, 1.0])
    with pytest.raises(DivisionByZero):
        1.0 / b


def test_comparisons_use_value_only():
    """Tests that comparisons look at the value coefficient only."""
    x = make_variable(2, 1.0)
    y = TaylorSeries([1.0, 5.0, -3.0])
    assert x == y
    assert not x != y
    assert x < 2
    assert 2 > x
    assert x <= 1.0
    assert x >= 1
    assert x != 0.5
    assert make_variable(1, -1.0) < x


def test_comparison_with_non_number_is_unequal():
    """Tests that comparing with a non-number falls back to Python semantics."""
    x = make_variable(1, 1.0)
    assert (x == "1") is False
    with pytest.raises(TypeError):
        x < "1"


def test_unsupported_operand_raises_type_error():
    """Tests that arithmetic with strings raises TypeError."""
    x = make_variable(1, 1.0)
    with pytest.raises(TypeError):
        x + "a"
    with pytest.raises(TypeError):
        "a" * x


def test_product_of_two_variables_gives_mixed_coefficient():
    """Tests that x * y has a single unit mixed coefficient."""
    x, y = make_variables([1, 1], [2.0, 3.0])
    z = x * y
    assert_allclose(z.coefficients, [[6.0, 2.0], [3.0, 1.0]])


def test_compound_assignment_rebinds_without_mutation():
    """Tests that += and *= produce new series and leave the original intact."""
    x = make_variable(2, 1.0)
    y = x
    y += 1.0
    y *= x
    assert_allclose(x.coefficients, [1.0, 1.0, 0.0])
    assert_allclose(y.coefficients, [2.0, 3.0, 1.0])


def test_constant_has_zero_derivatives_through_functions():
    """Tests that expressions of constants have no derivatives of order >= 1."""
    c = make_constant(4, 0.7)
    y = (c * c + 1) / (c - 2)
    assert all(y.derivative(k) == 0.0 for k in range(1, 5))
