"""Exceptions raised by Taylor-series arithmetic.

Every error derives from :class:`AutodiffError` and from the builtin
exception a plain-scalar computation would raise in the same situation,
so ``except ZeroDivisionError`` keeps working for code that does not know
about this package.
"""

from __future__ import annotations

__all__ = [
    "AutodiffError",
    "TruncationExceeded",
    "DivisionByZero",
    "DomainError",
    "TypePromotionFailure",
]


class AutodiffError(Exception):
    """Base class for all Taylor-series arithmetic errors."""


class TruncationExceeded(AutodiffError, IndexError):
    """Raised when a coefficient beyond a variable's truncation order is requested.

    Returning zero instead would be indistinguishable from a derivative that
    is legitimately zero.
    """


class DivisionByZero(AutodiffError, ZeroDivisionError):
    """Raised when dividing by a series whose value coefficient is zero."""


class DomainError(AutodiffError, ValueError):
    """Raised when an elementary function is evaluated outside its domain."""


class TypePromotionFailure(AutodiffError, TypeError):
    """Raised when operands have no well-defined common series type."""
