"""
Benchmark harness for throughput measurements.

Provides orchestration and reporting capabilities.
"""

from .runner import (
    DEFAULT_DURATION_SECONDS,
    ESTIMATE_THRESHOLD_NS,
    BenchConfig,
    BenchResult,
    ConfigError,
    FixedCount,
    RateBencher,
    TargetDuration,
    bench,
    bench_many,
    compare,
    default_concurrency,
    workload,
)

from .reporter import (
    ChartReporter,
    ConsoleReporter,
    JSONReporter,
    format_int,
    format_results,
)

__all__ = [
    # Runner
    "DEFAULT_DURATION_SECONDS",
    "ESTIMATE_THRESHOLD_NS",
    "BenchConfig",
    "BenchResult",
    "ConfigError",
    "FixedCount",
    "RateBencher",
    "TargetDuration",
    "bench",
    "bench_many",
    "compare",
    "default_concurrency",
    "workload",
    # Reporter
    "ChartReporter",
    "ConsoleReporter",
    "JSONReporter",
    "format_int",
    "format_results",
]
