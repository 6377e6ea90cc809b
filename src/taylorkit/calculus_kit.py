"""Provides the CalculusKit class.

A light wrapper around the calculus helpers that exposes a simple API
for gradient, Jacobian, Hessian and mixed partial derivative computations.

Typical usage examples:

>>> import numpy as np
>>> from taylorkit.calculus_kit import CalculusKit  # noqa: F401
>>>
>>> def sin_function(x):
...     # scalar-valued function: f(θ) = sin(θ0) * θ1
...     return np.sin(x[0]) * x[1]
>>>
>>> def identity_function(x):
...     # vector-valued function: f(θ) = θ
...     return x
>>>
>>> calc = CalculusKit(sin_function, x0=np.array([0.5, 2.0]))
>>> grad = calc.gradient()
>>> hess = calc.hessian()
>>> d3 = calc.mixed_partial([2, 1])
>>>
>>> jac = CalculusKit(identity_function, x0=np.array([1.0, 2.0])).jacobian()
"""

from collections.abc import Callable
from typing import Any, Sequence

import numpy as np
from numpy.typing import NDArray

from taylorkit.calculus import (
    build_gradient,
    build_hessian,
    build_hessian_diag,
    build_jacobian,
    build_mixed_partial,
)
from taylorkit.config import TaylorConfig
from taylorkit.utils.validate import validate_point


class CalculusKit:
    """Provides access to gradient, Jacobian, Hessian and mixed partial derivatives."""

    def __init__(
        self,
        function: Callable[[np.ndarray], Any],
        x0: Sequence[float] | np.ndarray,
        config: TaylorConfig | None = None,
    ):
        """Initialise with function and expansion point.

        Args:
            function: Maps parameters -> observable(s). Accepts a 1D object
                      array of series of length P. Returns either a scalar
                      (for gradient/Hessian of scalar f) or a 1D array-like
                      (for Jacobian).
            x0: Point at which to evaluate derivatives (shape (P,)).
            config: Front-end configuration; defaults to ``TaylorConfig()``.
        """
        self.function = function
        self.x0 = validate_point(x0)
        self.config = config or TaylorConfig()

    def gradient(self, *, n_workers: int = 1) -> NDArray:
        """Returns the gradient of a scalar-valued function."""
        return build_gradient(self.function, self.x0, n_workers=n_workers, config=self.config)

    def jacobian(self, *, n_workers: int = 1) -> NDArray:
        """Returns the Jacobian of a vector-valued function."""
        return build_jacobian(self.function, self.x0, n_workers=n_workers, config=self.config)

    def hessian(self, *, n_workers: int = 1) -> NDArray:
        """Returns the Hessian of a scalar-valued function."""
        return build_hessian(self.function, self.x0, n_workers=n_workers, config=self.config)

    def hessian_diag(self, *, n_workers: int = 1) -> NDArray:
        """Returns the diagonal of the Hessian of a scalar-valued function."""
        return build_hessian_diag(self.function, self.x0, n_workers=n_workers, config=self.config)

    def mixed_partial(self, orders: Sequence[int]) -> Any:
        """Returns the mixed partial derivative with the given order per parameter."""
        return build_mixed_partial(self.function, self.x0, orders, config=self.config)
