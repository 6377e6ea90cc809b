"""Provides the TaylorSeries class.

A :class:`TaylorSeries` is a number that carries, next to its value, the
truncated Taylor expansion of the quantity it represents with respect to one
or more independent variables. Arithmetic and elementary functions propagate
the whole expansion, so a single evaluation of an expression returns its
value and all partial derivatives up to the truncation orders.

Typical usage example:

>>> from taylorkit import make_variable
>>> x = make_variable(5, 2.0)
>>> y = x * x * x
>>> [float(y.derivative(k)) for k in range(6)]
[8.0, 12.0, 12.0, 6.0, 0.0, 0.0]
"""

from __future__ import annotations

import operator
from typing import Any

import numpy as np
from numpy.typing import ArrayLike

from taylorkit.autodiff import kernels
from taylorkit.autodiff.promotion import (
    SeriesType,
    as_root_dtype,
    cast_array,
    cast_scalar,
    coefficients_as,
    common_operand_type,
    is_operand,
    promote_roots,
    series_type_of,
)
from taylorkit.exceptions import DivisionByZero, TruncationExceeded, TypePromotionFailure
from taylorkit.utils.numerics import multi_index_factorial
from taylorkit.utils.types import CoefficientArray, Orders, OrdersLike, Scalar
from taylorkit.utils.validate import validate_orders

__all__ = [
    "TaylorSeries",
    "derivative",
]

# numpy errors that arise from legitimate infinite derivatives
_KERNEL_ERRSTATE = {"divide": "ignore", "over": "ignore", "invalid": "ignore"}


def _elementwise(name: str):
    def method(self):
        from taylorkit.autodiff import elementary

        return getattr(elementary, name)(self)

    method.__name__ = name
    method.__doc__ = f"Same as ``taylorkit.{name}(self)``."
    return method


class TaylorSeries:
    """Truncated multivariate Taylor series.

    The coefficients live in an immutable array of shape
    ``(o1 + 1, ..., on + 1)``: axis ``k`` belongs to the ``k``-th independent
    variable and ``coefficients[i1, ..., in]`` is the partial derivative
    ``d^(i1+...+in) f / dx1^i1 ... dxn^in`` divided by ``i1! ... in!``.

    Operators never mutate an operand. Mixed operands are first promoted to
    their common series type (see :mod:`taylorkit.autodiff.promotion`).
    Comparisons and truth testing use the value coefficient only.
    """

    __slots__ = ("_coefficients", "_series_type")

    def __init__(
        self,
        coefficients: ArrayLike,
        orders: OrdersLike | None = None,
        dtype: Any = None,
    ):
        """Initialises a series from its Taylor coefficients.

        Args:
            coefficients: Nested sequence or array of Taylor coefficients, or
                a scalar for a constant (then ``orders`` is required).
            orders: Truncation order per variable. Defaults to the shape of
                ``coefficients``. Shorter or shallower coefficient input is
                zero-padded up to these orders.
            dtype: Root type (numpy dtype or scalar type, ``mpmath.mpf``...).
                Inferred from ``coefficients`` when omitted; object input is
                stored as mpmath numbers.

        Raises:
            TruncationExceeded: If ``coefficients`` reach past ``orders``.
            TypePromotionFailure: If the coefficients are not numeric.
            ValueError: If no order can be determined or the input is empty.
        """
        arr = np.array(coefficients)
        root = as_root_dtype(arr.dtype) if dtype is None else series_type_of(dtype).root
        arr = _convert(arr, root)
        if orders is None:
            if arr.ndim == 0:
                raise ValueError("orders are required to build a series from a scalar.")
            shape = arr.shape
        else:
            shape = tuple(o + 1 for o in validate_orders(orders))
            if arr.ndim > len(shape) or any(s > t for s, t in zip(arr.shape, shape)):
                raise TruncationExceeded(
                    f"coefficients of shape {arr.shape} exceed the shape {shape}."
                )
            if arr.ndim == 0:
                arr = kernels.constant(shape, root, arr[()])
        if 0 in arr.shape:
            raise ValueError("coefficients must not be empty.")
        arr = kernels.pad_to(arr, shape)
        arr.setflags(write=False)
        self._coefficients = arr
        self._series_type = None

    @classmethod
    def _from_array(cls, coefficients: CoefficientArray) -> TaylorSeries:
        """Wraps a coefficient array owned by the caller without validation."""
        obj = cls.__new__(cls)
        coefficients.setflags(write=False)
        obj._coefficients = coefficients
        obj._series_type = None
        return obj

    @property
    def coefficients(self) -> CoefficientArray:
        """Read-only array of Taylor coefficients."""
        return self._coefficients

    @property
    def orders(self) -> Orders:
        """Truncation order of each variable, outermost first."""
        return tuple(s - 1 for s in self._coefficients.shape)

    @property
    def order(self) -> int:
        """Truncation order of the outermost variable."""
        return self._coefficients.shape[0] - 1

    @property
    def depth(self) -> int:
        """Number of independent variables."""
        return self._coefficients.ndim

    @property
    def order_sum(self) -> int:
        """Sum of the truncation orders: the highest total derivative order tracked."""
        return sum(self.orders)

    @property
    def dtype(self) -> np.dtype:
        """Root dtype of the coefficients."""
        return self._coefficients.dtype

    @property
    def series_type(self) -> SeriesType:
        if self._series_type is None:
            self._series_type = SeriesType(self.dtype, self.orders)
        return self._series_type

    @property
    def value(self) -> Scalar:
        """Value coefficient, i.e. the represented number at the expansion point."""
        return self._coefficients[kernels.root_index(self.depth)]

    def at(self, *indices: int) -> TaylorSeries | Scalar:
        """Returns the Taylor coefficient at a (partial) multi-index.

        With one index per variable the result is a root scalar. With fewer
        indices the result is the series over the remaining inner variables.

        Raises:
            TruncationExceeded: If an index is outside ``0..order`` of its
                variable or more indices than variables are given.
        """
        if len(indices) > self.depth:
            raise TruncationExceeded(
                f"{len(indices)} indices given for a series of depth {self.depth}."
            )
        indices = tuple(operator.index(i) for i in indices)
        for level, (i, order) in enumerate(zip(indices, self.orders)):
            if not 0 <= i <= order:
                raise TruncationExceeded(
                    f"index {i} is outside the truncation order {order} of variable {level}."
                )
        if not indices:
            return self
        item = self._coefficients[indices]
        if len(indices) == self.depth:
            return item
        return TaylorSeries._from_array(item)

    def derivative(self, *indices: int) -> TaylorSeries | Scalar:
        """Returns the partial derivative ``d^|i| f / dx1^i1 ... dxn^in``.

        This is the Taylor coefficient at ``indices`` times the product of
        their factorials. Fewer indices than variables return the derivative
        as a series in the remaining variables.

        Raises:
            TruncationExceeded: If an index exceeds its variable's order.
        """
        return self.at(*indices) * multi_index_factorial(indices)

    def with_root(self, value: Scalar) -> TaylorSeries:
        """Returns a copy with the value coefficient replaced."""
        return TaylorSeries._from_array(
            kernels.with_root(self._coefficients, cast_scalar(value, self.dtype))
        )

    def astype(self, target: Any) -> TaylorSeries:
        """Converts to a wider series type.

        Args:
            target: A ``SeriesType``, another series, or a root type. A root
                type alone keeps the orders.

        Raises:
            TypePromotionFailure: If ``target`` has fewer variables, lower
                orders, or a root the coefficients cannot be cast to safely.
        """
        target = series_type_of(target)
        if target.is_scalar:
            target = SeriesType(target.root, self.orders)
        if target.depth < self.depth or any(
            t < s for s, t in zip(self.orders, target.orders)
        ):
            raise TypePromotionFailure(
                f"cannot widen orders {self.orders} to {target.orders}; use truncated()."
            )
        if target.root.kind != "O" and not np.can_cast(self.dtype, target.root, "safe"):
            raise TypePromotionFailure(f"cannot cast {self.dtype} to {target.root} safely.")
        return TaylorSeries._from_array(coefficients_as(self, target))

    def truncated(self, *orders: int) -> TaylorSeries:
        """Drops the coefficients beyond the given per-variable orders.

        Raises:
            ValueError: If the number of orders differs from the depth.
            TruncationExceeded: If an order is higher than the current one.
        """
        orders = validate_orders(orders)
        if len(orders) != self.depth:
            raise ValueError(f"expected {self.depth} orders; got {len(orders)}.")
        for level, (new, old) in enumerate(zip(orders, self.orders)):
            if new > old:
                raise TruncationExceeded(
                    f"order {new} exceeds the order {old} of variable {level}."
                )
        shape = tuple(o + 1 for o in orders)
        return TaylorSeries._from_array(kernels.truncate_to(self._coefficients, shape))

    def inverse(self) -> TaylorSeries:
        """Returns ``1 / self``."""
        return 1 / self

    def negate(self) -> TaylorSeries:
        """Returns ``-self``."""
        return -self

    def _operands(self, other: Any) -> tuple[CoefficientArray, CoefficientArray]:
        target = common_operand_type(self, other)
        return coefficients_as(self, target), coefficients_as(other, target)

    def __add__(self, other):
        if not is_operand(other):
            return NotImplemented
        a, b = self._operands(other)
        with np.errstate(**_KERNEL_ERRSTATE):
            return TaylorSeries._from_array(a + b)

    __radd__ = __add__

    def __sub__(self, other):
        if not is_operand(other):
            return NotImplemented
        a, b = self._operands(other)
        with np.errstate(**_KERNEL_ERRSTATE):
            return TaylorSeries._from_array(a - b)

    def __rsub__(self, other):
        if not is_operand(other):
            return NotImplemented
        a, b = self._operands(other)
        with np.errstate(**_KERNEL_ERRSTATE):
            return TaylorSeries._from_array(b - a)

    def __mul__(self, other):
        if not is_operand(other):
            return NotImplemented
        with np.errstate(**_KERNEL_ERRSTATE):
            if isinstance(other, TaylorSeries):
                a, b = self._operands(other)
                return TaylorSeries._from_array(kernels.cauchy_product(a, b))
            target = common_operand_type(self, other)
            factor = cast_scalar(other, target.root)
            return TaylorSeries._from_array(
                kernels.scale(coefficients_as(self, target), factor)
            )

    __rmul__ = __mul__

    def __truediv__(self, other):
        if not is_operand(other):
            return NotImplemented
        if isinstance(other, TaylorSeries):
            return _divide(self, other)
        target = common_operand_type(self, other)
        divisor = cast_scalar(other, target.root)
        if divisor == 0:
            raise DivisionByZero("series divided by zero.")
        with np.errstate(**_KERNEL_ERRSTATE):
            return TaylorSeries._from_array(coefficients_as(self, target) / divisor)

    def __rtruediv__(self, other):
        if not is_operand(other):
            return NotImplemented
        return _divide(other, self)

    def __pow__(self, other, modulo=None):
        if modulo is not None or not is_operand(other):
            return NotImplemented
        from taylorkit.autodiff import elementary

        return elementary.pow(self, other)

    def __rpow__(self, other):
        if not is_operand(other):
            return NotImplemented
        from taylorkit.autodiff import elementary

        return elementary.pow(other, self)

    def __neg__(self):
        return TaylorSeries._from_array(-self._coefficients)

    def __pos__(self):
        return self

    def __abs__(self):
        from taylorkit.autodiff import elementary

        return elementary.fabs(self)

    def _root_values(self, other: Any) -> tuple[Scalar, Scalar]:
        other_value = other.value if isinstance(other, TaylorSeries) else other
        root = promote_roots(self.dtype, _weak(other_value))
        return cast_scalar(self.value, root), cast_scalar(other_value, root)

    def __eq__(self, other):
        if not is_operand(other):
            return NotImplemented
        a, b = self._root_values(other)
        return bool(a == b)

    def __ne__(self, other):
        if not is_operand(other):
            return NotImplemented
        a, b = self._root_values(other)
        return bool(a != b)

    def __lt__(self, other):
        if not is_operand(other):
            return NotImplemented
        a, b = self._root_values(other)
        return bool(a < b)

    def __le__(self, other):
        if not is_operand(other):
            return NotImplemented
        a, b = self._root_values(other)
        return bool(a <= b)

    def __gt__(self, other):
        if not is_operand(other):
            return NotImplemented
        a, b = self._root_values(other)
        return bool(a > b)

    def __ge__(self, other):
        if not is_operand(other):
            return NotImplemented
        a, b = self._root_values(other)
        return bool(a >= b)

    __hash__ = None

    def __bool__(self):
        return bool(self.value != 0)

    def __array_ufunc__(self, ufunc, method, *inputs, **kwargs):
        from taylorkit.autodiff.ufuncs import dispatch_ufunc

        return dispatch_ufunc(ufunc, method, *inputs, **kwargs)

    # numpy's object-dtype loops call these on the elements of object arrays
    exp = _elementwise("exp")
    log = _elementwise("log")
    sqrt = _elementwise("sqrt")
    sin = _elementwise("sin")
    cos = _elementwise("cos")
    tan = _elementwise("tan")
    arcsin = _elementwise("asin")
    arccos = _elementwise("acos")
    arctan = _elementwise("atan")
    sinh = _elementwise("sinh")
    cosh = _elementwise("cosh")
    tanh = _elementwise("tanh")
    arcsinh = _elementwise("asinh")
    arccosh = _elementwise("acosh")
    arctanh = _elementwise("atanh")

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return (self.__class__, (np.array(self._coefficients), None, self.dtype))

    def __str__(self):
        return _nested_str(self._coefficients)

    def __repr__(self):
        return f"TaylorSeries({self._coefficients.tolist()!r}, dtype={self.dtype.name})"


def derivative(series: TaylorSeries, *indices: int) -> TaylorSeries | Scalar:
    """Returns the mixed partial derivative of ``series`` at a multi-index.

    See :meth:`TaylorSeries.derivative`.
    """
    if not isinstance(series, TaylorSeries):
        raise TypeError(f"derivative() expects a TaylorSeries; got {type(series).__name__}.")
    return series.derivative(*indices)


def _divide(numerator: Any, denominator: TaylorSeries) -> TaylorSeries:
    target = common_operand_type(numerator, denominator)
    b = coefficients_as(denominator, target)
    if b[kernels.root_index(b.ndim)] == 0:
        raise DivisionByZero("division by a series whose value is zero.")
    a = coefficients_as(numerator, target)
    with np.errstate(**_KERNEL_ERRSTATE):
        return TaylorSeries._from_array(kernels.series_quotient(a, b))


def _convert(arr: np.ndarray, root: np.dtype) -> np.ndarray:
    if root.kind == "O":
        out = np.empty(arr.shape, dtype=object)
        for idx, v in np.ndenumerate(arr):
            try:
                out[idx] = cast_scalar(v, root)
            except (TypeError, ValueError) as exc:
                raise TypePromotionFailure(
                    f"cannot use {type(v).__name__} as a series coefficient."
                ) from exc
        return out
    try:
        return cast_array(arr, root)
    except (TypeError, ValueError) as exc:
        raise TypePromotionFailure(f"cannot cast coefficients to {root}.") from exc


def _weak(value: Any) -> Any:
    # dtype for numpy and mpmath scalars, the value itself for Python scalars
    st = series_type_of(value)
    return value if isinstance(value, (bool, int, float, complex)) else st.root


def _nested_str(a: CoefficientArray) -> str:
    if a.ndim == 1:
        inner = ",".join(str(v) for v in a)
    else:
        inner = ",".join(_nested_str(sub) for sub in a)
    return f"depth({a.ndim})({inner})"
