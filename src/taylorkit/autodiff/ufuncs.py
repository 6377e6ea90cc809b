"""numpy ufunc support for :class:`~taylorkit.autodiff.series.TaylorSeries`.

``np.sin(x)``, ``np.float64(2) * x`` and array expressions mixing series with
numbers are routed here through ``TaylorSeries.__array_ufunc__``. Array
operands are evaluated element by element into object arrays.
"""

from __future__ import annotations

from typing import Any, Callable

import numpy as np

from taylorkit.autodiff import elementary
from taylorkit.autodiff.series import TaylorSeries

__all__ = ["dispatch_ufunc", "supported_ufuncs"]

_BINARY_METHODS: dict[np.ufunc, tuple[str, str]] = {
    np.add: ("__add__", "__radd__"),
    np.subtract: ("__sub__", "__rsub__"),
    np.multiply: ("__mul__", "__rmul__"),
    np.true_divide: ("__truediv__", "__rtruediv__"),
    np.power: ("__pow__", "__rpow__"),
    np.equal: ("__eq__", "__eq__"),
    np.not_equal: ("__ne__", "__ne__"),
    np.less: ("__lt__", "__gt__"),
    np.less_equal: ("__le__", "__ge__"),
    np.greater: ("__gt__", "__lt__"),
    np.greater_equal: ("__ge__", "__le__"),
}

_FUNCTIONS: dict[np.ufunc, Callable[..., Any]] = {
    np.negative: lambda x: -x,
    np.positive: lambda x: x,
    np.absolute: elementary.fabs,
    np.square: lambda x: x * x,
    np.reciprocal: elementary.inverse,
    np.exp: elementary.exp,
    np.log: elementary.log,
    np.sqrt: elementary.sqrt,
    np.sin: elementary.sin,
    np.cos: elementary.cos,
    np.tan: elementary.tan,
    np.arcsin: elementary.asin,
    np.arccos: elementary.acos,
    np.arctan: elementary.atan,
    np.sinh: elementary.sinh,
    np.cosh: elementary.cosh,
    np.tanh: elementary.tanh,
    np.arcsinh: elementary.asinh,
    np.arccosh: elementary.acosh,
    np.arctanh: elementary.atanh,
    np.floor: elementary.floor,
    np.ceil: elementary.ceil,
    np.trunc: elementary.trunc,
    np.arctan2: elementary.atan2,
    np.fmod: elementary.fmod,
    np.ldexp: elementary.ldexp,
}


def supported_ufuncs() -> frozenset[np.ufunc]:
    """Returns the ufuncs that accept series operands."""
    return frozenset(_BINARY_METHODS) | frozenset(_FUNCTIONS)


def _binary(ufunc: np.ufunc) -> Callable[[Any, Any], Any]:
    forward, reflected = _BINARY_METHODS[ufunc]

    def apply(a, b):
        if isinstance(a, TaylorSeries):
            result = getattr(a, forward)(b)
        elif isinstance(b, TaylorSeries):
            result = getattr(b, reflected)(a)
        else:
            return ufunc(a, b)
        if result is NotImplemented:
            raise TypeError(
                f"unsupported operands for {ufunc.__name__}: "
                f"{type(a).__name__} and {type(b).__name__}."
            )
        return result

    return apply


def _function(ufunc: np.ufunc) -> Callable[..., Any]:
    func = _FUNCTIONS[ufunc]

    def apply(*args):
        if any(isinstance(a, TaylorSeries) for a in args):
            return func(*args)
        return ufunc(*args)

    return apply


def _boxed(value: Any) -> Any:
    # 0-d object array, so the element-wise ufunc does not dispatch back here
    if isinstance(value, TaylorSeries):
        box = np.empty((), dtype=object)
        box[()] = value
        return box
    return value


def dispatch_ufunc(ufunc: np.ufunc, method: str, *inputs: Any, **kwargs: Any) -> Any:
    """Evaluates a ufunc call involving series operands.

    Only plain calls are supported; reductions, ``out=`` and other keyword
    arguments return ``NotImplemented`` so numpy raises ``TypeError``.
    """
    if method != "__call__" or kwargs:
        return NotImplemented
    if ufunc in _BINARY_METHODS:
        apply = _binary(ufunc)
    elif ufunc in _FUNCTIONS:
        apply = _function(ufunc)
    else:
        return NotImplemented
    if any(isinstance(i, np.ndarray) for i in inputs):
        operands = [_boxed(i) for i in inputs]
        return np.frompyfunc(apply, ufunc.nin, 1)(*operands)
    return apply(*inputs)
