"""Contains functions used to construct the gradient of scalar-valued functions."""

from collections.abc import Callable
from functools import partial

import numpy as np
from numpy.typing import ArrayLike

from taylorkit.autodiff.promotion import SeriesType
from taylorkit.calculus.calculus_core import as_series, evaluate_at, finalize
from taylorkit.config import TaylorConfig
from taylorkit.utils.concurrency import parallel_execute
from taylorkit.utils.validate import check_scalar_output, validate_point

__all__ = ["build_gradient"]


def build_gradient(
    function: Callable,
    theta0: ArrayLike,
    n_workers: int = 1,
    config: TaylorConfig | None = None,
) -> np.ndarray:
    """Returns the gradient of a scalar-valued function.

    Each component comes from one evaluation of ``function`` with a single
    first-order variable seeded at that parameter.

    Args:
        function: The function to be differentiated. It receives a 1D object
            array of series and must return a single series or number.
        theta0: The parameter vector at which the gradient is evaluated.
        n_workers: Number of threads evaluating components in parallel.
        config: Front-end configuration; defaults to ``TaylorConfig()``.

    Returns:
        A 1D array representing the gradient.

    Raises:
        TypeError: If ``function`` does not return a scalar value.
        ValueError: If ``theta0`` is empty.
        FloatingPointError: If non-finite values are encountered.
    """
    config = config or TaylorConfig()
    theta = validate_point(theta0)
    worker = partial(_grad_component, function=function, theta=theta, config=config)
    with config.precision():
        vals = parallel_execute(
            worker, [(i,) for i in range(theta.size)], n_workers=n_workers
        )
        return finalize(vals, config, "build_gradient")


def _grad_component(
    i: int,
    function: Callable,
    theta: np.ndarray,
    config: TaylorConfig,
):
    """Returns one entry of the gradient for a scalar-valued function.

    Args:
        i: The index of the parameter being varied.
        function: A function that returns a single value.
        theta: The parameter values where the derivative is evaluated.
        config: Front-end configuration.

    Returns:
        The partial derivative of ``function`` with respect to parameter ``i``.
    """
    out = evaluate_at(function, theta, (i,), (1,), config)
    check_scalar_output(out, "build_gradient")
    return as_series(out, SeriesType(config.dtype, (1,))).derivative(1)
