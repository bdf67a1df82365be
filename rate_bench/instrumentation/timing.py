"""
Timing utilities for throughput benchmarking.

Provides a nanosecond timer, a timing context manager and the
conversion from a measured duration to an operations-per-second rate.
"""

import time
from contextlib import contextmanager
from typing import Iterator


NANOS_PER_SECOND = 1_000_000_000


class ZeroDurationError(ArithmeticError):
    """Raised when a rate is requested for a zero-length measurement."""


def to_rate(duration_ns: int, count: int) -> int:
    """Convert a measured duration into whole operations per second.

    Equivalent to ``floor(count / duration_ns * 1e9)`` but computed with
    integers so large counts do not lose precision.
    """
    if duration_ns <= 0:
        raise ZeroDurationError(
            f"Cannot compute a rate for {count} ops over {duration_ns}ns"
        )
    return count * NANOS_PER_SECOND // duration_ns


class Timer:
    """Simple timer backed by the monotonic performance counter."""

    def __init__(self, name: str = "timer"):
        self.name = name
        self.start_ns: int = 0
        self.end_ns: int = 0
        self._running = False

    def start(self) -> "Timer":
        """Start the timer."""
        self.start_ns = time.perf_counter_ns()
        self._running = True
        return self

    def stop(self) -> "Timer":
        """Stop the timer."""
        self.end_ns = time.perf_counter_ns()
        self._running = False
        return self

    @property
    def running(self) -> bool:
        return self._running

    @property
    def elapsed_ns(self) -> int:
        """Elapsed time in nanoseconds."""
        end = self.end_ns if not self._running else time.perf_counter_ns()
        return end - self.start_ns

    @property
    def elapsed_ms(self) -> float:
        """Elapsed time in milliseconds."""
        return self.elapsed_ns / 1_000_000


@contextmanager
def timed(name: str = "operation") -> Iterator[Timer]:
    """Context manager for timing synchronous operations.

    Usage:
        with timed("my_operation") as timer:
            # do work
        print(f"Elapsed: {timer.elapsed_ns}ns")
    """
    timer = Timer(name).start()
    try:
        yield timer
    finally:
        timer.stop()
