"""Forward-mode automatic differentiation with truncated Taylor series."""

from taylorkit.autodiff.composition import (
    apply_coefficients,
    apply_derivatives,
    compose,
)
from taylorkit.autodiff.construct import (
    make_constant,
    make_series,
    make_variable,
    make_variables,
)
from taylorkit.autodiff.elementary import (
    abs,
    acos,
    acosh,
    asin,
    asinh,
    atan,
    atan2,
    atanh,
    ceil,
    cos,
    cosh,
    erf,
    erfc,
    exp,
    fabs,
    floor,
    fmod,
    frexp,
    inverse,
    iround,
    itrunc,
    lambert_w0,
    ldexp,
    log,
    pow,
    round,
    sin,
    sinc,
    sinh,
    sqrt,
    tan,
    tanh,
    trunc,
)
from taylorkit.autodiff.limits import NumericLimits, numeric_limits
from taylorkit.autodiff.promotion import (
    SeriesType,
    depth,
    nested_type,
    order_sum,
    promote,
    root_type,
    type_at,
)
from taylorkit.autodiff.series import TaylorSeries, derivative

__all__ = [
    "TaylorSeries",
    "SeriesType",
    "NumericLimits",
    "derivative",
    "make_series",
    "make_variable",
    "make_constant",
    "make_variables",
    "promote",
    "root_type",
    "depth",
    "order_sum",
    "type_at",
    "nested_type",
    "numeric_limits",
    "compose",
    "apply_coefficients",
    "apply_derivatives",
    "exp",
    "log",
    "sqrt",
    "sin",
    "cos",
    "tan",
    "asin",
    "acos",
    "atan",
    "atan2",
    "sinh",
    "cosh",
    "tanh",
    "asinh",
    "acosh",
    "atanh",
    "erf",
    "erfc",
    "lambert_w0",
    "sinc",
    "pow",
    "fabs",
    "abs",
    "floor",
    "ceil",
    "round",
    "trunc",
    "iround",
    "itrunc",
    "frexp",
    "ldexp",
    "fmod",
    "inverse",
]
