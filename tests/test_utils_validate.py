"""Tests for taylorkit.utils.validate."""

import mpmath
import numpy as np
import pytest

from taylorkit.utils.validate import (
    check_scalar_output,
    validate_order,
    validate_orders,
    validate_point,
)


@pytest.mark.parametrize("order", [0, 3, np.int64(2)])
def test_validate_order_accepts_integers(order):
    """Tests that non-negative integers are accepted as orders."""
    assert validate_order(order) == int(order)
    assert type(validate_order(order)) is int


@pytest.mark.parametrize("order, exc", [(-1, ValueError), (1.0, TypeError), (True, TypeError), ("2", TypeError)])
def test_validate_order_rejects(order, exc):
    """Tests that negative and non-integer orders are rejected."""
    with pytest.raises(exc):
        validate_order(order)


def test_validate_orders_normalizes_to_tuple():
    """Tests that a single order or a sequence becomes a tuple."""
    assert validate_orders(3) == (3,)
    assert validate_orders([1, 2]) == (1, 2)
    assert validate_orders(np.array([2, 0])) == (2, 0)
    with pytest.raises(ValueError):
        validate_orders([])


def test_validate_point():
    """Tests conversion of expansion points to 1D arrays."""
    x = validate_point([1, 2, 3])
    assert x.dtype == np.float64
    assert x.shape == (3,)
    assert validate_point(2.0).shape == (1,)
    assert validate_point([mpmath.mpf(1)]).dtype == object
    with pytest.raises(ValueError):
        validate_point([])


def test_check_scalar_output():
    """Tests that only single-element outputs pass."""
    check_scalar_output(1.0, "f")
    check_scalar_output(np.array([2.0]), "f")
    with pytest.raises(TypeError):
        check_scalar_output([1.0, 2.0], "f")
