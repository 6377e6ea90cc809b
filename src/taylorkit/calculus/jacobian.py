"""Contains functions used to construct the Jacobian of vector-valued functions."""

from collections.abc import Callable
from functools import partial

import numpy as np
from numpy.typing import ArrayLike

from taylorkit.autodiff.promotion import SeriesType
from taylorkit.calculus.calculus_core import (
    as_series,
    evaluate_at,
    finalize,
    flatten_output,
)
from taylorkit.config import TaylorConfig
from taylorkit.utils.concurrency import parallel_execute
from taylorkit.utils.validate import validate_point

__all__ = ["build_jacobian"]


def build_jacobian(
    function: Callable,
    theta0: ArrayLike,
    n_workers: int = 1,
    config: TaylorConfig | None = None,
) -> np.ndarray:
    """Computes the Jacobian of a vector-valued function.

    Column ``i`` comes from one evaluation of ``function`` with a first-order
    variable seeded at parameter ``i``; every output component is read off
    that single evaluation.

    Args:
        function: The vector-valued function to be differentiated. It
            receives a 1D object array of series and returns an array-like of
            series or numbers; the output is flattened in C order.
        theta0: The parameter vector at which the Jacobian is evaluated.
        n_workers: Number of threads evaluating columns in parallel.
        config: Front-end configuration; defaults to ``TaylorConfig()``.

    Returns:
        A 2D array of shape ``(n_outputs, n_parameters)``.

    Raises:
        ValueError: If ``theta0`` is empty or the output size changes between
            evaluations.
        FloatingPointError: If non-finite values are encountered.
    """
    config = config or TaylorConfig()
    theta = validate_point(theta0)
    worker = partial(_jacobian_column, function=function, theta=theta, config=config)
    with config.precision():
        columns = parallel_execute(
            worker, [(i,) for i in range(theta.size)], n_workers=n_workers
        )
        sizes = {len(c) for c in columns}
        if len(sizes) != 1:
            raise ValueError(f"function output size changed between evaluations: {sorted(sizes)}.")
        jac = finalize(columns, config, "build_jacobian")
    return jac.T


def _jacobian_column(
    i: int,
    function: Callable,
    theta: np.ndarray,
    config: TaylorConfig,
) -> list:
    """Returns the derivatives of all outputs with respect to parameter ``i``."""
    target = SeriesType(config.dtype, (1,))
    out = flatten_output(evaluate_at(function, theta, (i,), (1,), config))
    return [as_series(v, target).derivative(1) for v in out]
