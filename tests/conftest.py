import threading

import pytest


class CallCounter:
    """Thread-safe zero-argument work function that counts its calls."""

    def __init__(self, fail_at=None):
        self.calls = 0
        self.fail_at = fail_at
        self._lock = threading.Lock()

    def __call__(self):
        with self._lock:
            self.calls += 1
            calls = self.calls
        if self.fail_at is not None and calls >= self.fail_at:
            raise RuntimeError(f"boom at call {calls}")


@pytest.fixture
def counter():
    return CallCounter()


@pytest.fixture
def make_counter():
    """Factory for counters that can fail after N calls."""

    def _make(fail_at=None):
        return CallCounter(fail_at=fail_at)

    return _make
