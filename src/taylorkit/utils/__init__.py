"""Utility functions for TaylorKit package."""

from .concurrency import normalize_workers, parallel_execute
from .numerics import factorial, falling_factorial, multi_index_factorial

__all__ = [
    "factorial",
    "falling_factorial",
    "multi_index_factorial",
    "normalize_workers",
    "parallel_execute",
]
