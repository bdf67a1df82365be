"""
Tests for the command-line entry point.
"""
import json

import pytest

import main


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("RATE_BENCH_CONCURRENCY", "RATE_BENCH_DURATION", "RATE_BENCH_OUTPUT_DIR"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(main, "load_dotenv", lambda: False)


def test_list(capsys):
    main.main(["list"])
    out = capsys.readouterr().out
    assert "noop" in out
    assert "[parallel]" in out


def test_run_fixed_count(capsys):
    main.main(["run", "noop", "--count", "1000", "--concurrency", "1", "--quiet"])
    out = capsys.readouterr().out
    assert out.startswith("noop: ")
    assert out.strip().endswith("ops/s")


def test_compare_ranks_scenarios(capsys):
    main.main(["compare", "noop", "sleep_1ms", "--count", "8", "--concurrency", "2", "--quiet"])
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Throughput Comparison"
    assert lines[2].startswith("noop:")
    assert lines[3].startswith("sleep_1ms:")


def test_compare_progress(capsys):
    main.main(["compare", "noop", "--count", "10", "--concurrency", "1"])
    out = capsys.readouterr().out
    assert out.startswith("Running noop... done.\n")


def test_count_and_duration_are_exclusive(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main.main(["run", "noop", "--count", "10", "--duration", "1"])
    assert exc_info.value.code == 2


def test_unknown_scenario_exits_with_error(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main.main(["run", "nope", "--count", "1", "--quiet"])
    assert exc_info.value.code == 1
    assert "Error: Unknown scenario: nope" in capsys.readouterr().out


def test_invalid_concurrency_exits_with_error(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main.main(["run", "noop", "--count", "1", "--concurrency", "-1", "--quiet"])
    assert exc_info.value.code == 1
    assert "concurrency must be at least 1" in capsys.readouterr().out


def test_env_concurrency_default(monkeypatch):
    monkeypatch.setenv("RATE_BENCH_CONCURRENCY", "3")
    args = main.build_parser().parse_args(["run", "noop", "--count", "10"])
    assert main._overrides(args) == {
        "concurrency": 3,
        "count": 10,
        "duration_seconds": None,
    }


def test_env_duration_ignored_with_count(monkeypatch):
    monkeypatch.setenv("RATE_BENCH_DURATION", "2.5")
    args = main.build_parser().parse_args(["run", "noop", "--count", "10"])
    assert main._overrides(args)["duration_seconds"] is None

    args = main.build_parser().parse_args(["run", "noop"])
    assert main._overrides(args)["duration_seconds"] == 2.5


def test_output_saves_json(tmp_path, capsys):
    main.main(
        [
            "compare", "noop", "sum_range",
            "--count", "100", "--concurrency", "1", "--quiet",
            "--output", "--output-dir", str(tmp_path),
        ]
    )
    files = list(tmp_path.glob("comparison_*.json"))
    assert len(files) == 1
    with open(files[0]) as f:
        labels = {r["label"] for r in json.load(f)["results"]}
    assert labels == {"noop", "sum_range"}
