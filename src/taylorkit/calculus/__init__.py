"""Calculus utilities.

Provides constructors for gradient, Jacobian, Hessian and mixed partial
derivative computations.
"""

from .gradient import build_gradient
from .hessian import build_hessian, build_hessian_diag
from .jacobian import build_jacobian
from .mixed_partial import build_mixed_partial

__all__ = [
    "build_gradient",
    "build_jacobian",
    "build_hessian",
    "build_hessian_diag",
    "build_mixed_partial",
]
