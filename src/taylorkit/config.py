"""Configuration for the TaylorKit and CalculusKit front ends.

This config controls the root type the front ends seed their variables with,
the working precision used for multiprecision roots, and whether non-finite
derivatives are treated as errors.
"""

from __future__ import annotations

from contextlib import nullcontext
from typing import Any, ContextManager

import mpmath
import numpy as np

from taylorkit.autodiff.promotion import root_type


class TaylorConfig:
    """Configuration for the Taylor-series front ends.

    This config controls the root type the front ends seed their variables
    with, the working precision used for multiprecision roots, and whether
    non-finite derivatives are treated as errors.
    """

    def __init__(
        self,
        dtype: Any = np.float64,
        dps: int | None = None,
        check_finite: bool = True,
    ):
        """Initialize configuration.

        Args:
            dtype:
                Root type of the seeded variables. Any numpy floating or
                complex type, or ``mpmath.mpf`` / ``mpmath.mpc`` for
                multiprecision evaluation. Integer types widen to
                ``float64``.

            dps:
                Decimal digits of working precision for multiprecision
                roots. Applied with ``mpmath.workdps`` around each front-end
                call and restored afterwards. ``None`` keeps the current
                ``mpmath.mp`` precision. Ignored for numpy roots.

            check_finite:
                If ``True``, a front end raises ``FloatingPointError`` when a
                derivative is infinite or NaN. If ``False``, it logs a warning
                and returns the values.

        Raises:
            TypePromotionFailure: If ``dtype`` is not a supported root type.
            ValueError: If ``dps`` is not a positive integer.
        """
        self.dtype = root_type(dtype)
        if dps is not None:
            dps = int(dps)
            if dps < 1:
                raise ValueError(f"dps must be a positive integer; got {dps}.")
        self.dps = dps
        self.check_finite = bool(check_finite)

    @property
    def is_multiprecision(self) -> bool:
        """Whether the root type is an mpmath number."""
        return self.dtype.kind == "O"

    def precision(self) -> ContextManager:
        """Context manager applying the configured mpmath precision."""
        if self.is_multiprecision and self.dps is not None:
            return mpmath.workdps(self.dps)
        return nullcontext()

    def __repr__(self) -> str:
        return (
            f"TaylorConfig(dtype={self.dtype}, dps={self.dps}, "
            f"check_finite={self.check_finite})"
        )
