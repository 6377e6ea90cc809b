"""Contains the function used to compute one mixed partial derivative."""

from collections.abc import Callable
from typing import Sequence

from numpy.typing import ArrayLike

from taylorkit.autodiff.promotion import SeriesType
from taylorkit.calculus.calculus_core import as_series, evaluate_at, finalize
from taylorkit.config import TaylorConfig
from taylorkit.utils.validate import check_scalar_output, validate_order, validate_point

__all__ = ["build_mixed_partial"]


def build_mixed_partial(
    function: Callable,
    theta0: ArrayLike,
    orders: Sequence[int],
    config: TaylorConfig | None = None,
):
    """Returns ``d^|o| f / dtheta_1^o_1 ... dtheta_p^o_p`` at ``theta0``.

    Only parameters with a non-zero order become variables, so the nested
    series has one level per differentiated parameter.

    Args:
        function: Scalar-valued function of the parameter vector.
        theta0: The parameter vector at which the derivative is evaluated.
        orders: Derivative order per parameter (same length as ``theta0``).
        config: Front-end configuration; defaults to ``TaylorConfig()``.

    Returns:
        The derivative as a root-type scalar.

    Raises:
        ValueError: If ``orders`` does not match ``theta0`` in length.
        TypeError: If ``function`` does not return a scalar.
        FloatingPointError: If the result is not finite.
    """
    config = config or TaylorConfig()
    theta = validate_point(theta0)
    orders = [validate_order(o) for o in orders]
    if len(orders) != theta.size:
        raise ValueError(f"expected {theta.size} orders; got {len(orders)}.")
    active = [i for i, o in enumerate(orders) if o > 0]
    active_orders = [orders[i] for i in active]
    with config.precision():
        if not active:
            # no variable: the function value, as an order-0 series
            active, active_orders = [0], [0]
        out = evaluate_at(function, theta, active, active_orders, config)
        check_scalar_output(out, "build_mixed_partial")
        series = as_series(out, SeriesType(config.dtype, tuple(active_orders)))
        value = series.derivative(*active_orders)
        return finalize([value], config, "build_mixed_partial")[0]
