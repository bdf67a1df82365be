import pytest

from rate_bench.harness.runner import BenchConfig, RateBencher
from rate_bench.scenarios import (
    ALL_SCENARIOS,
    get_scenario,
    get_scenarios_by_category,
    list_scenarios,
)


def test_scenario_names_are_unique():
    names = list_scenarios()
    assert len(names) == len(set(names))


def test_get_scenario():
    assert get_scenario("noop").category == "overhead"
    assert get_scenario("missing") is None


def test_get_scenarios_by_category():
    names = [s.name for s in get_scenarios_by_category("parallel")]
    assert names == ["sha256_digest", "sleep_1ms"]


@pytest.mark.parametrize("scenario", ALL_SCENARIOS, ids=lambda s: s.name)
def test_scenario_config_is_valid(scenario):
    assert isinstance(scenario.config(), BenchConfig)


def test_scenario_config_overrides():
    config = get_scenario("sleep_1ms").config(count=32, concurrency=4)
    assert config.count == 32
    assert config.duration_seconds is None
    assert config.concurrency == 4


def test_scenario_to_dict():
    data = get_scenario("sleep_1ms").to_dict()
    assert data["options"] == {"concurrency": 16, "duration_seconds": 2}


@pytest.mark.parametrize("scenario", ALL_SCENARIOS, ids=lambda s: s.name)
def test_scenario_runs(scenario):
    result = RateBencher(verbose=False).bench(scenario.config(count=16, concurrency=2))
    assert result.count == 16
