"""Concurrency management for derivative computations."""

from __future__ import annotations

import contextvars
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Sequence, Tuple

__all__ = [
    "parallel_execute",
    "normalize_workers",
]


def parallel_execute(
    worker: Callable[..., Any],
    arg_tuples: Sequence[Tuple[Any, ...]],
    *,
    n_workers: int = 1,
) -> list[Any]:
    """Runs ``worker(*args)`` for each tuple in arg_tuples, optionally on threads.

    Series values are immutable, so tasks share nothing that needs locking.

    Args:
        worker: Callable evaluated once per argument tuple.
        arg_tuples: Positional arguments for each call.
        n_workers: Number of threads. ``1`` runs serially in the caller.

    Returns:
        The results, in the order of ``arg_tuples``.
    """
    n_workers = normalize_workers(n_workers)
    if n_workers > 1 and len(arg_tuples) > 1:
        with ThreadPoolExecutor(max_workers=n_workers) as ex:
            futures = []
            for args in arg_tuples:
                # Each task gets its own copy of the current context
                ctx = contextvars.copy_context()
                futures.append(ex.submit(ctx.run, worker, *args))
            return [f.result() for f in futures]
    return [worker(*args) for args in arg_tuples]


def normalize_workers(
    n_workers: Any
) -> int:
    """Ensures n_workers is a positive integer, defaulting to 1.

    Args:
        n_workers: Input number of workers (can be None, float, negative, etc.)

    Returns:
        int: A positive integer number of workers (at least 1).
    """
    try:
        n = int(n_workers)
    except (TypeError, ValueError):
        n = 1
    return 1 if n < 1 else n
