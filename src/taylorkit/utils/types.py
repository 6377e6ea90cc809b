"""Shared typing aliases for TaylorKit."""

from __future__ import annotations

from typing import Any, Sequence, TypeAlias

from numpy.typing import NDArray

# float, complex, numpy scalar or mpmath mpf/mpc
Scalar: TypeAlias = Any
Orders: TypeAlias = tuple[int, ...]
OrdersLike: TypeAlias = int | Sequence[int]
CoefficientArray: TypeAlias = NDArray[Any]
