"""Tests for taylorkit.utils.concurrency."""

from __future__ import annotations

import contextvars
import threading

import pytest

from taylorkit.utils.concurrency import normalize_workers, parallel_execute

_request_id: contextvars.ContextVar[str] = contextvars.ContextVar("request_id", default="none")


@pytest.mark.parametrize("given, expected", [(None, 1), (0, 1), (-2, 1), (3, 3), (2.7, 2), ("x", 1)])
def test_normalize_workers(given, expected):
    """Tests that worker counts are coerced to positive integers."""
    assert normalize_workers(given) == expected


def test_parallel_execute_serial_keeps_order():
    """Tests that serial execution returns results in argument order."""
    out = parallel_execute(lambda a, b: a * b, [(1, 2), (3, 4), (5, 6)])
    assert out == [2, 12, 30]


@pytest.mark.parallel
def test_parallel_execute_threads_keep_order(extra_threads_ok):
    """Tests that threaded execution returns results in argument order."""
    if not extra_threads_ok:
        pytest.skip("cannot spawn threads")
    out = parallel_execute(lambda i: i * i, [(i,) for i in range(20)], n_workers=4)
    assert out == [i * i for i in range(20)]


@pytest.mark.parallel
def test_parallel_execute_copies_context(extra_threads_ok):
    """Tests that worker threads see the caller's context variables."""
    if not extra_threads_ok:
        pytest.skip("cannot spawn threads")
    token = _request_id.set("abc")
    try:
        names = parallel_execute(
            lambda _: (_request_id.get(), threading.current_thread().name),
            [(i,) for i in range(4)],
            n_workers=2,
        )
    finally:
        _request_id.reset(token)
    assert all(value == "abc" for value, _ in names)


def test_parallel_execute_propagates_errors():
    """Tests that an exception in a worker reaches the caller."""
    def boom(i):
        raise RuntimeError(f"failed {i}")

    with pytest.raises(RuntimeError):
        parallel_execute(boom, [(1,), (2,)], n_workers=2)
