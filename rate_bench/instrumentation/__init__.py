"""
Instrumentation module for throughput benchmarking.

Provides timing utilities and the duration-to-rate conversion.
"""

from .timing import (
    NANOS_PER_SECOND,
    Timer,
    ZeroDurationError,
    timed,
    to_rate,
)

__all__ = [
    "NANOS_PER_SECOND",
    "Timer",
    "ZeroDurationError",
    "timed",
    "to_rate",
]
