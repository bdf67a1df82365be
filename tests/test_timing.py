import time

import pytest

from rate_bench.instrumentation.timing import (
    NANOS_PER_SECOND,
    Timer,
    ZeroDurationError,
    timed,
    to_rate,
)


def test_to_rate_one_second():
    assert to_rate(NANOS_PER_SECOND, 1_000) == 1_000


def test_to_rate_floors():
    # 10 ops in 3s is 3.33 ops/s
    assert to_rate(3 * NANOS_PER_SECOND, 10) == 3


def test_to_rate_large_counts_are_exact():
    assert to_rate(1, 10**15) == 10**24


@pytest.mark.parametrize("duration", [0, -5])
def test_to_rate_rejects_non_positive_duration(duration):
    with pytest.raises(ZeroDurationError):
        to_rate(duration, 10)


def test_zero_duration_is_arithmetic_error():
    assert issubclass(ZeroDurationError, ArithmeticError)


def test_to_rate_decreases_with_duration():
    rates = [to_rate(d, 1_000) for d in (10, 100, 1_000, 10_000, 123_457)]
    assert rates == sorted(rates, reverse=True)


def test_to_rate_increases_with_count():
    rates = [to_rate(1_000, c) for c in (0, 1, 10, 999, 5_000)]
    assert rates == sorted(rates)


def test_timer_measures_elapsed():
    timer = Timer("sleep").start()
    assert timer.running
    time.sleep(0.01)
    timer.stop()

    assert not timer.running
    assert timer.elapsed_ns >= 10_000_000
    assert timer.elapsed_ms == timer.elapsed_ns / 1_000_000


def test_timed_stops_on_exception():
    with pytest.raises(RuntimeError):
        with timed("failing") as timer:
            raise RuntimeError("fail")

    assert not timer.running
    assert timer.end_ns >= timer.start_ns
