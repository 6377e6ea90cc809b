"""Unit tests for public API."""

from __future__ import annotations

import taylorkit
import taylorkit.autodiff
from taylorkit import CalculusKit, TaylorConfig, TaylorKit, TaylorSeries


def test_kits_importable_from_top_level():
    """Tests that the front ends and the series class import from the top level."""
    assert TaylorKit is not None
    assert CalculusKit is not None
    assert TaylorConfig is not None
    assert TaylorSeries is not None


def test_public_all_names_exist():
    """Tests that every name in __all__ is defined."""
    for name in taylorkit.__all__:
        assert hasattr(taylorkit, name), name
    for name in taylorkit.autodiff.__all__:
        assert hasattr(taylorkit.autodiff, name), name


def test_public_all_contains_core_operations():
    """Tests that __all__ lists the constructors, functions and kits."""
    expected = {
        "TaylorSeries",
        "TaylorKit",
        "CalculusKit",
        "make_variable",
        "make_variables",
        "make_series",
        "make_constant",
        "derivative",
        "promote",
        "exp",
        "lambert_w0",
        "pow",
    }
    assert expected.issubset(set(taylorkit.__all__))


def test_autodiff_names_are_reexported():
    """Tests that the top level re-exports the autodiff API."""
    assert set(taylorkit.autodiff.__all__).issubset(set(taylorkit.__all__))
