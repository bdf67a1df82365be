"""
Built-in workloads for throughput benchmarking.
"""

from .definitions import (
    Scenario,
    ALL_SCENARIOS,
    OVERHEAD_SCENARIOS,
    DATA_SCENARIOS,
    PARALLEL_SCENARIOS,
    get_scenario,
    get_scenarios_by_category,
    list_scenarios,
)

__all__ = [
    "Scenario",
    "ALL_SCENARIOS",
    "OVERHEAD_SCENARIOS",
    "DATA_SCENARIOS",
    "PARALLEL_SCENARIOS",
    "get_scenario",
    "get_scenarios_by_category",
    "list_scenarios",
]
