"""Provides all taylorkit methods."""

from importlib.metadata import PackageNotFoundError, version

from taylorkit.autodiff import (
    NumericLimits,
    SeriesType,
    TaylorSeries,
    abs,
    acos,
    acosh,
    apply_coefficients,
    apply_derivatives,
    asin,
    asinh,
    atan,
    atan2,
    atanh,
    ceil,
    compose,
    cos,
    cosh,
    depth,
    derivative,
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
    make_constant,
    make_series,
    make_variable,
    make_variables,
    nested_type,
    numeric_limits,
    order_sum,
    pow,
    promote,
    root_type,
    round,
    sin,
    sinc,
    sinh,
    sqrt,
    tan,
    tanh,
    trunc,
    type_at,
)
from taylorkit.calculus_kit import CalculusKit
from taylorkit.config import TaylorConfig
from taylorkit.exceptions import (
    AutodiffError,
    DivisionByZero,
    DomainError,
    TruncationExceeded,
    TypePromotionFailure,
)
from taylorkit.taylor_kit import TaylorKit

try:
    __version__ = version("taylorkit")
except PackageNotFoundError:
    pass

__all__ = [
    "TaylorSeries",
    "SeriesType",
    "NumericLimits",
    "TaylorKit",
    "CalculusKit",
    "TaylorConfig",
    "AutodiffError",
    "TruncationExceeded",
    "DivisionByZero",
    "DomainError",
    "TypePromotionFailure",
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
