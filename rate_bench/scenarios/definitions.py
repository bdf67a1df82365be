"""
Built-in workload definitions for throughput benchmarking.

Small, self-contained units of work covering common cases:
1. Interpreter overhead (no-op, arithmetic)
2. Data handling (sorting, JSON)
3. C-level work that releases the GIL (hashing)
4. Blocking I/O (sleep)
"""

import hashlib
import json
import random
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from ..harness.runner import BenchConfig, workload


@dataclass
class Scenario:
    """A named unit of work with its default bench options."""

    name: str
    description: str
    category: str
    work: Callable[[], Any]

    def config(self, **overrides) -> BenchConfig:
        """Build a BenchConfig, applying any non-None overrides."""
        return BenchConfig.for_workload(self.work, **overrides)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "options": dict(getattr(self.work, "_bench_options", {})),
        }


# ============================================================================
# Work functions
# ============================================================================

_SORT_INPUT = [random.random() for _ in range(1_000)]
_JSON_INPUT = {
    "id": 42,
    "name": "rate-bench",
    "tags": ["alpha", "beta", "gamma"],
    "values": list(range(32)),
}
_HASH_INPUT = b"x" * 64 * 1024


@workload(concurrency=1)
def noop():
    pass


@workload(concurrency=1)
def sum_range():
    return sum(range(100))


@workload(concurrency=1)
def sort_list():
    return sorted(_SORT_INPUT)


@workload(concurrency=1)
def json_roundtrip():
    return json.loads(json.dumps(_JSON_INPUT))


@workload()
def sha256_digest():
    # hashlib drops the GIL for inputs over 2 KiB
    return hashlib.sha256(_HASH_INPUT).digest()


@workload(concurrency=16, duration_seconds=2)
def sleep_1ms():
    time.sleep(0.001)


# ============================================================================
# Scenarios
# ============================================================================

OVERHEAD_SCENARIOS = [
    Scenario(
        name="noop",
        description="Empty function call, measures harness overhead",
        category="overhead",
        work=noop,
    ),
    Scenario(
        name="sum_range",
        description="Sum of a 100-element range",
        category="overhead",
        work=sum_range,
    ),
]

DATA_SCENARIOS = [
    Scenario(
        name="sort_list",
        description="Sort 1,000 random floats",
        category="data",
        work=sort_list,
    ),
    Scenario(
        name="json_roundtrip",
        description="Serialize and parse a small JSON document",
        category="data",
        work=json_roundtrip,
    ),
]

PARALLEL_SCENARIOS = [
    Scenario(
        name="sha256_digest",
        description="SHA-256 of 64 KiB across all cores",
        category="parallel",
        work=sha256_digest,
    ),
    Scenario(
        name="sleep_1ms",
        description="1ms sleep across 16 threads",
        category="parallel",
        work=sleep_1ms,
    ),
]

ALL_SCENARIOS = OVERHEAD_SCENARIOS + DATA_SCENARIOS + PARALLEL_SCENARIOS


def get_scenario(name: str) -> Optional[Scenario]:
    """Get a scenario by name."""
    for scenario in ALL_SCENARIOS:
        if scenario.name == name:
            return scenario
    return None


def get_scenarios_by_category(category: str) -> list[Scenario]:
    """Get all scenarios in a category."""
    return [s for s in ALL_SCENARIOS if s.category == category]


def list_scenarios() -> list[str]:
    """List all scenario names."""
    return [s.name for s in ALL_SCENARIOS]
