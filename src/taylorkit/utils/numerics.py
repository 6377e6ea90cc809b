"""Numerical utilities."""

from __future__ import annotations

import math
from functools import lru_cache
from typing import Any, Sequence

__all__ = [
    "factorial",
    "falling_factorial",
    "multi_index_factorial",
]


@lru_cache(maxsize=None)
def factorial(n: int) -> int:
    """Returns ``n!`` as an exact Python integer.

    Args:
        n: Non-negative integer.

    Returns:
        The factorial of ``n``.
    """
    return math.factorial(n)


def falling_factorial(x: Any, n: int) -> Any:
    """Computes the falling factorial ``x (x - 1) ... (x - n + 1)``.

    Works for any scalar supporting subtraction and multiplication by
    integers, including numpy and mpmath scalars.

    Args:
        x: Scalar base.
        n: Number of factors. ``n = 0`` gives the empty product 1.

    Returns:
        The product, in the type of ``x`` for ``n >= 1``.
    """
    result = 1
    for i in range(n):
        result = result * (x - i)
    return result


def multi_index_factorial(indices: Sequence[int]) -> int:
    """Returns the product of factorials of a multi-index."""
    result = 1
    for i in indices:
        result *= factorial(i)
    return result
