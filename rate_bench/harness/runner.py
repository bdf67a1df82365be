"""
Benchmark orchestrator for throughput measurements.

Runs a zero-argument unit of work either a fixed number of times or for
an estimated number of times that fills a target duration, spreading the
operations across a pool of worker threads.
"""

import dataclasses
import os
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, Optional, Union

from ..instrumentation.timing import timed, to_rate
from .reporter import format_int, format_results


DEFAULT_DURATION_SECONDS = 5
# A trial run must take longer than this before its rate is trusted.
ESTIMATE_THRESHOLD_NS = 100_000_000
ESTIMATE_GROWTH = 10


class ConfigError(ValueError):
    """Invalid or contradictory benchmark options."""


@dataclass(frozen=True)
class FixedCount:
    """Run exactly ``count`` operations."""

    count: int


@dataclass(frozen=True)
class TargetDuration:
    """Run as many operations as should take about ``seconds`` seconds."""

    seconds: float = DEFAULT_DURATION_SECONDS


BenchMode = Union[FixedCount, TargetDuration]
Work = Callable[[], Any]


def default_concurrency() -> int:
    """Available hardware parallelism, queried on every call."""
    return os.cpu_count() or 1


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass
class BenchConfig:
    """Configuration for a single throughput measurement."""

    work: Work
    concurrency: Optional[int] = None
    count: Optional[int] = None
    duration_seconds: Optional[float] = None

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Raise ConfigError if the options cannot describe a run."""
        if not callable(self.work):
            raise ConfigError(f"work must be callable, got {type(self.work).__name__}")
        if self.count is not None and self.duration_seconds is not None:
            raise ConfigError("use duration OR count, not both")
        if self.concurrency is not None:
            if not _is_int(self.concurrency):
                raise ConfigError(f"concurrency must be an integer, got {self.concurrency!r}")
            if self.concurrency < 1:
                raise ConfigError(f"concurrency must be at least 1, got {self.concurrency}")
        if self.count is not None:
            if not _is_int(self.count):
                raise ConfigError(f"count must be an integer, got {self.count!r}")
            if self.count < 0:
                raise ConfigError(f"count must be non-negative, got {self.count}")
        if self.duration_seconds is not None:
            if not _is_number(self.duration_seconds):
                raise ConfigError(f"duration must be a number, got {self.duration_seconds!r}")
            if self.duration_seconds <= 0:
                raise ConfigError(f"duration must be positive, got {self.duration_seconds}")

    @property
    def mode(self) -> BenchMode:
        if self.count is not None:
            return FixedCount(self.count)
        if self.duration_seconds is not None:
            return TargetDuration(self.duration_seconds)
        return TargetDuration()

    def resolved_concurrency(self) -> int:
        if self.concurrency is None:
            return default_concurrency()
        return self.concurrency

    def with_overrides(self, **overrides) -> "BenchConfig":
        """Return a copy with the non-None ``overrides`` applied.

        Passing ``count`` clears ``duration_seconds`` and vice versa, so
        an explicit override always switches the mode.
        """
        overrides = {k: v for k, v in overrides.items() if v is not None}
        if "count" in overrides:
            overrides.setdefault("duration_seconds", None)
        if "duration_seconds" in overrides:
            overrides.setdefault("count", None)
        return dataclasses.replace(self, **overrides)

    @classmethod
    def for_workload(cls, work: Work, **overrides) -> "BenchConfig":
        """Build a config from the options attached by ``@workload``."""
        options = dict(getattr(work, "_bench_options", {}))
        return cls(work=work, **options).with_overrides(**overrides)

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        mode = self.mode
        return {
            "work": getattr(self.work, "__name__", repr(self.work)),
            "concurrency": self.concurrency,
            "mode": type(mode).__name__,
            "count": self.count,
            "duration_seconds": (
                mode.seconds if isinstance(mode, TargetDuration) else None
            ),
        }


@dataclass(frozen=True)
class BenchResult:
    """Measured throughput for one benchmark.

    Unpacks as a ``(label, rate)`` pair.
    """

    label: str
    rate: int
    count: int = 0
    duration_ns: int = 0
    concurrency: int = 1

    def __iter__(self) -> Iterator:
        return iter((self.label, self.rate))

    def to_dict(self) -> dict:
        """Convert result to dictionary for serialization."""
        return {
            "label": self.label,
            "rate": self.rate,
            "count": self.count,
            "duration_ns": self.duration_ns,
            "concurrency": self.concurrency,
        }


def workload(**options):
    """Decorator attaching default bench options to a work function.

    Usage:
        @workload(concurrency=4, count=1_000)
        def my_work():
            ...

        bench(my_work)
    """
    # Fail at decoration time rather than at the first bench call.
    BenchConfig(work=lambda: None, **options)

    def decorator(func: Callable) -> Callable:
        func._bench_options = dict(options)
        return func
    return decorator


def _run_sequential(work: Work, count: int) -> None:
    for _ in range(count):
        work()


LabeledConfigs = Union[Mapping, Iterable[tuple]]


class RateBencher:
    """Measures operations per second for zero-argument work functions."""

    def __init__(self, verbose: bool = True):
        self.verbose = verbose
        self._workloads: dict[str, Work] = {}

    def _progress(self, text: str, end: str = "\n") -> None:
        if self.verbose:
            print(text, end=end, flush=True)

    def register(self, name: str, work: Work) -> None:
        """Register a work function under ``name``."""
        if not callable(work):
            raise ConfigError(f"work must be callable, got {type(work).__name__}")
        self._workloads[name] = work

    def list_workloads(self) -> list[str]:
        """List registered workload names."""
        return list(self._workloads.keys())

    def bench_registered(self, name: str, **options) -> BenchResult:
        """Benchmark a registered workload, labelled with its name."""
        if name not in self._workloads:
            raise ValueError(f"Unknown workload: {name}")
        return self.bench(self._workloads[name], label=name, **options)

    def timed_run(self, work: Work, concurrency: int, count: int) -> int:
        """Run ``count`` operations and return the wall-clock span in ns.

        With more than one worker each runs ``count // concurrency``
        operations, so any remainder is not executed. The span ends when
        the slowest worker finishes.
        """
        if concurrency < 1:
            raise ConfigError(f"concurrency must be at least 1, got {concurrency}")

        if concurrency == 1:
            with timed("sequential") as timer:
                _run_sequential(work, count)
            return timer.elapsed_ns

        per_worker = count // concurrency
        with ThreadPoolExecutor(
            max_workers=concurrency,
            thread_name_prefix="rate-bench",
        ) as pool:
            with timed("parallel") as timer:
                futures = [
                    pool.submit(_run_sequential, work, per_worker)
                    for _ in range(concurrency)
                ]
                wait(futures)

        for future in futures:
            future.result()
        return timer.elapsed_ns

    def estimate_rate(self, work: Work, concurrency: int) -> int:
        """Find a rate from a trial run long enough to trust.

        Starts at one operation per worker and grows the count tenfold
        until a run takes longer than ESTIMATE_THRESHOLD_NS.
        """
        count = max(concurrency, 1)
        while True:
            duration = self.timed_run(work, concurrency, count)
            if duration > ESTIMATE_THRESHOLD_NS:
                rate = to_rate(duration, count)
                self._progress(f"~{format_int(rate)} ops/s ", end="")
                return rate
            self._progress(".", end="")
            count *= ESTIMATE_GROWTH

    def bench(
        self,
        config: Union[BenchConfig, Work],
        label: Optional[str] = None,
        **options,
    ) -> BenchResult:
        """Measure the throughput of one work function.

        ``config`` may be a BenchConfig or a bare callable; keyword
        options (``concurrency``, ``count``, ``duration_seconds``) are
        applied on top of either the same way: None values are ignored
        and passing ``count`` or ``duration_seconds`` switches the mode.
        """
        if isinstance(config, BenchConfig):
            config = config.with_overrides(**options)
        else:
            config = BenchConfig.for_workload(config, **options)
        config.validate()

        work = config.work
        concurrency = config.resolved_concurrency()
        mode = config.mode

        if isinstance(mode, FixedCount):
            count = mode.count
        else:
            estimate = self.estimate_rate(work, concurrency)
            count = int(mode.seconds * estimate)

        duration = self.timed_run(work, concurrency, count)

        if label is None:
            label = getattr(work, "__name__", "work")
        return BenchResult(
            label=label,
            rate=to_rate(duration, count),
            count=count,
            duration_ns=duration,
            concurrency=concurrency,
        )

    def bench_many(self, labeled_configs: LabeledConfigs) -> list[BenchResult]:
        """Run ``bench`` for each ``(label, config)`` entry, in order.

        A failure in any entry aborts the remaining ones.
        """
        if isinstance(labeled_configs, Mapping):
            labeled_configs = labeled_configs.items()

        results = []
        for label, config in labeled_configs:
            self._progress(f"Running {label}... ", end="")
            results.append(self.bench(config, label=label))
            self._progress("done.")
        self._progress("")
        return results

    def compare(self, labeled_configs: LabeledConfigs) -> str:
        """Run several benchmarks and return the ranked comparison table."""
        return format_results(self.bench_many(labeled_configs))


def bench(
    config: Union[BenchConfig, Work],
    label: Optional[str] = None,
    verbose: bool = True,
    **options,
) -> BenchResult:
    """Benchmark a single work function. See RateBencher.bench."""
    return RateBencher(verbose=verbose).bench(config, label=label, **options)


def bench_many(labeled_configs: LabeledConfigs, verbose: bool = True) -> list[BenchResult]:
    """Benchmark several labeled configs. See RateBencher.bench_many."""
    return RateBencher(verbose=verbose).bench_many(labeled_configs)


def compare(labeled_configs: LabeledConfigs, verbose: bool = True) -> str:
    """Benchmark and rank several labeled configs."""
    return RateBencher(verbose=verbose).compare(labeled_configs)
