"""Provides the TaylorKit class.

A light wrapper that seeds one Taylor-series variable at ``x0``, evaluates a
scalar function on it, and reads off the value and derivatives up to the
requested order from that single evaluation.

Typical usage examples:

>>> import numpy as np
>>> from taylorkit import TaylorKit
>>>
>>> kit = TaylorKit(lambda x: x**3, x0=2.0)
>>> float(kit.differentiate(order=2))
12.0
>>> TaylorKit(np.exp, x0=0.0).derivatives(3)
array([1., 1., 1., 1.])
"""

from collections.abc import Callable
from typing import Any

import numpy as np
from numpy.typing import NDArray

from taylorkit.autodiff.construct import make_variable
from taylorkit.autodiff.promotion import is_operand
from taylorkit.autodiff.series import TaylorSeries
from taylorkit.calculus.calculus_core import as_series, finalize
from taylorkit.config import TaylorConfig
from taylorkit.utils.validate import validate_order


class TaylorKit:
    """Derivatives of a scalar function of one variable."""

    def __init__(
        self,
        function: Callable[[TaylorSeries], Any],
        x0: Any,
        config: TaylorConfig | None = None,
    ):
        """Initialises with function and expansion point.

        Args:
            function: Scalar function of one variable. It receives a
                ``TaylorSeries`` and may use Python operators, ``taylorkit``
                functions or numpy ufuncs.
            x0: Point at which the derivatives are evaluated.
            config: Front-end configuration; defaults to ``TaylorConfig()``.

        Raises:
            TypeError: If ``x0`` is not a scalar number.
        """
        if isinstance(x0, np.ndarray) and x0.ndim == 0:
            x0 = x0[()]
        if isinstance(x0, TaylorSeries) or not is_operand(x0):
            raise TypeError(f"x0 must be a scalar number; got {type(x0).__name__}.")
        self.function = function
        self.x0 = x0
        self.config = config or TaylorConfig()

    def series(self, order: int) -> TaylorSeries:
        """Returns ``function`` evaluated on a variable of the given order."""
        order = validate_order(order)
        with self.config.precision():
            x = make_variable(order, self.x0, dtype=self.config.dtype)
            return as_series(self.function(x), x.series_type)

    def taylor_coefficients(self, order: int) -> NDArray:
        """Returns the Taylor coefficients ``f^(k)(x0) / k!`` for ``k = 0..order``."""
        s = self.series(order)
        with self.config.precision():
            return finalize(list(s.coefficients), self.config, "taylor_coefficients")

    def derivatives(self, order: int) -> NDArray:
        """Returns ``[f(x0), f'(x0), ..., f^(order)(x0)]``.

        Raises:
            FloatingPointError: If a derivative is not finite and
                ``config.check_finite`` is set.
        """
        s = self.series(order)
        with self.config.precision():
            values = [s.derivative(k) for k in range(order + 1)]
            return finalize(values, self.config, "derivatives")

    def differentiate(self, order: int = 1) -> Any:
        """Returns the single derivative ``f^(order)(x0)``."""
        return self.derivatives(order)[order]
