"""Contains functions used in constructing the Hessian of a scalar-valued function."""

from collections.abc import Callable
from functools import partial

import numpy as np
from numpy.typing import ArrayLike

from taylorkit.autodiff.promotion import SeriesType
from taylorkit.calculus.calculus_core import as_series, evaluate_at, finalize
from taylorkit.config import TaylorConfig
from taylorkit.utils.concurrency import parallel_execute
from taylorkit.utils.validate import check_scalar_output, validate_point

__all__ = [
    "build_hessian",
    "build_hessian_diag",
]


def build_hessian(
    function: Callable,
    theta0: ArrayLike,
    n_workers: int = 1,
    config: TaylorConfig | None = None,
) -> np.ndarray:
    """Returns the full Hessian of a scalar-valued function.

    Diagonal entries use one second-order variable each. Each off-diagonal
    pair ``i < j`` uses two first-order variables and reads the mixed
    coefficient; the lower triangle is filled by symmetry.

    Args:
        function: The function to be differentiated.
        theta0: The parameter vector at which the Hessian is evaluated.
        n_workers: Number of threads evaluating entries in parallel.
        config: Front-end configuration; defaults to ``TaylorConfig()``.

    Returns:
        The Hessian with shape ``(p, p)``.

    Raises:
        FloatingPointError: If non-finite values are encountered.
        ValueError: If ``theta0`` is an empty array.
        TypeError: If ``function`` does not return a scalar.
    """
    config = config or TaylorConfig()
    theta = validate_point(theta0)
    p = theta.size
    pairs = [(i, j) for i in range(p) for j in range(i, p)]
    worker = partial(_hessian_entry, function=function, theta=theta, config=config)
    with config.precision():
        vals = parallel_execute(worker, pairs, n_workers=n_workers)
        entries = finalize(vals, config, "build_hessian")
    hess = np.empty((p, p), dtype=entries.dtype)
    for (i, j), v in zip(pairs, entries):
        hess[i, j] = v
        hess[j, i] = v
    return hess


def build_hessian_diag(
    function: Callable,
    theta0: ArrayLike,
    n_workers: int = 1,
    config: TaylorConfig | None = None,
) -> np.ndarray:
    """Returns the diagonal of the Hessian of a scalar-valued function.

    Args:
        function: The function to be differentiated.
        theta0: The parameter vector at which the Hessian is evaluated.
        n_workers: Number of threads evaluating entries in parallel.
        config: Front-end configuration; defaults to ``TaylorConfig()``.

    Returns:
        The diagonal entries, shape ``(p,)``.

    Raises:
        FloatingPointError: If non-finite values are encountered.
        ValueError: If ``theta0`` is an empty array.
        TypeError: If ``function`` does not return a scalar.
    """
    config = config or TaylorConfig()
    theta = validate_point(theta0)
    worker = partial(_hessian_entry, function=function, theta=theta, config=config)
    with config.precision():
        vals = parallel_execute(
            worker, [(i, i) for i in range(theta.size)], n_workers=n_workers
        )
        return finalize(vals, config, "build_hessian_diag")


def _hessian_entry(
    i: int,
    j: int,
    function: Callable,
    theta: np.ndarray,
    config: TaylorConfig,
):
    """Computes ``d^2 f / dtheta_i dtheta_j`` from one series evaluation."""
    if i == j:
        out = evaluate_at(function, theta, (i,), (2,), config)
        check_scalar_output(out, "build_hessian")
        return as_series(out, SeriesType(config.dtype, (2,))).derivative(2)
    out = evaluate_at(function, theta, (i, j), (1, 1), config)
    check_scalar_output(out, "build_hessian")
    return as_series(out, SeriesType(config.dtype, (1, 1))).derivative(1, 1)
