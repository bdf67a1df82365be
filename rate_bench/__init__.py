"""
rate-bench - Throughput micro-benchmarking for Python callables.

Measures operations per second for a zero-argument function, optionally
spread across worker threads, and ranks several such measurements.

Key modules:
- harness: Benchmark orchestration and reporting
- instrumentation: Timing utilities and rate conversion
- scenarios: Built-in sample workloads
"""

__version__ = "0.1.0"

from . import harness
from . import instrumentation
from . import scenarios

from .harness import (
    BenchConfig,
    BenchResult,
    ConfigError,
    RateBencher,
    bench,
    bench_many,
    compare,
    format_results,
    workload,
)
from .instrumentation import ZeroDurationError, to_rate

__all__ = [
    "harness",
    "instrumentation",
    "scenarios",
    "BenchConfig",
    "BenchResult",
    "ConfigError",
    "RateBencher",
    "ZeroDurationError",
    "bench",
    "bench_many",
    "compare",
    "format_results",
    "to_rate",
    "workload",
]
