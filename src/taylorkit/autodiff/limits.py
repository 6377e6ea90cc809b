"""Numeric limits of the root type of a series.

Limits describe the scalar type the coefficients are stored in. They are
forwarded unchanged and never differentiated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import mpmath
import numpy as np

from taylorkit.autodiff.promotion import series_type_of

__all__ = ["NumericLimits", "numeric_limits"]


@dataclass(frozen=True)
class NumericLimits:
    """Limits of a root type.

    Attributes:
        epsilon: Difference between 1 and the next representable value.
        min: Smallest positive normal value, or ``None`` if unbounded.
        max: Largest finite value, or ``None`` if unbounded.
        lowest: Most negative finite value, or ``None`` if unbounded.
        digits10: Decimal digits that survive a round trip.
    """

    epsilon: Any
    min: Any
    max: Any
    lowest: Any
    digits10: int


def numeric_limits(t: Any) -> NumericLimits:
    """Returns the numeric limits of the root type of ``t``.

    Args:
        t: A series, ``SeriesType``, scalar type, dtype or scalar value.

    Returns:
        ``np.finfo`` based limits for float and complex roots. For mpmath
        roots, epsilon and digits follow the current ``mpmath.mp`` precision
        and the range is unbounded.
    """
    root = series_type_of(t).root
    if root.kind == "O":
        return NumericLimits(
            epsilon=+mpmath.mp.eps,
            min=None,
            max=None,
            lowest=None,
            digits10=mpmath.mp.dps,
        )
    info = np.finfo(root)
    return NumericLimits(
        epsilon=info.eps,
        min=info.tiny,
        max=info.max,
        lowest=info.min,
        digits10=info.precision,
    )
