#!/usr/bin/env python3
"""
rate-bench - Main entry point for running throughput benchmarks.

Usage:
    python main.py [command] [options]

Commands:
    list        - List the built-in scenarios
    run         - Benchmark a single scenario
    compare     - Benchmark several scenarios and rank them

Environment (also read from a .env file):
    RATE_BENCH_CONCURRENCY  - default worker count (default: CPU count)
    RATE_BENCH_DURATION     - default target duration in seconds (default: 5)
    RATE_BENCH_OUTPUT_DIR   - directory for --output/--chart (default: results/)
"""

import argparse
import os
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from rate_bench.harness import (
    ChartReporter,
    ConsoleReporter,
    JSONReporter,
    RateBencher,
)
from rate_bench.scenarios import ALL_SCENARIOS, get_scenario, list_scenarios


def _env_int(name: str) -> Optional[int]:
    value = os.getenv(name)
    return int(value) if value else None


def _env_float(name: str) -> Optional[float]:
    value = os.getenv(name)
    return float(value) if value else None


def _overrides(args) -> dict:
    """Bench options from flags, falling back to the environment.

    The environment duration only applies when no count was given.
    """
    duration = args.duration
    if duration is None and args.count is None:
        duration = _env_float("RATE_BENCH_DURATION")
    return {
        "concurrency": (
            args.concurrency if args.concurrency is not None
            else _env_int("RATE_BENCH_CONCURRENCY")
        ),
        "count": args.count,
        "duration_seconds": duration,
    }


def _resolve(names: list[str]):
    scenarios = []
    for name in names:
        scenario = get_scenario(name)
        if scenario is None:
            raise ValueError(f"Unknown scenario: {name} (try: {', '.join(list_scenarios())})")
        scenarios.append(scenario)
    return scenarios


def _save_artifacts(args, results) -> None:
    if args.output:
        path = JSONReporter(args.output_dir).save_comparison(results)
        print(f"Results saved to {path}")
    if args.chart:
        path = ChartReporter(args.output_dir / "charts").rate_bar_chart(results)
        if path:
            print(f"Chart saved to {path}")


def run_list(args):
    """Print the built-in scenarios."""
    width = max(len(s.name) for s in ALL_SCENARIOS)
    for scenario in ALL_SCENARIOS:
        print(f"{scenario.name:<{width}}  [{scenario.category}] {scenario.description}")


def run_single(args):
    """Benchmark one scenario."""
    scenario = _resolve([args.scenario])[0]
    bencher = RateBencher(verbose=not args.quiet)

    if bencher.verbose:
        print(f"Running {scenario.name}... ", end="", flush=True)
    result = bencher.bench(scenario.config(**_overrides(args)), label=scenario.name)
    if bencher.verbose:
        print("done.\n")

    print(ConsoleReporter().single_result(result))
    _save_artifacts(args, [result])


def run_compare(args):
    """Benchmark several scenarios and print them ranked."""
    scenarios = _resolve(args.scenarios) if args.scenarios else ALL_SCENARIOS
    overrides = _overrides(args)
    bencher = RateBencher(verbose=not args.quiet)

    results = bencher.bench_many(
        [(s.name, s.config(**overrides)) for s in scenarios]
    )

    print(ConsoleReporter().comparison_table(results, title="Throughput Comparison"))
    _save_artifacts(args, results)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="rate-bench - Measure operations per second",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python main.py list
    python main.py run noop --count 1000000 --concurrency 1
    python main.py run sha256_digest --duration 2
    python main.py compare noop sum_range sort_list --duration 1
        """,
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("list", help="List built-in scenarios")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--concurrency",
        type=int,
        default=None,
        help="Number of worker threads (default: CPU count)",
    )
    mode = common.add_mutually_exclusive_group()
    mode.add_argument(
        "--count",
        type=int,
        default=None,
        help="Run exactly this many operations",
    )
    mode.add_argument(
        "--duration",
        type=float,
        default=None,
        help="Target duration in seconds (default: 5)",
    )
    common.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    common.add_argument(
        "--output",
        action="store_true",
        help="Save results as JSON",
    )
    common.add_argument(
        "--chart",
        action="store_true",
        help="Save a bar chart of the results (requires matplotlib)",
    )
    common.add_argument(
        "--output-dir",
        type=Path,
        default=Path(os.getenv("RATE_BENCH_OUTPUT_DIR", "results")),
        help="Directory to save results (default: results/)",
    )

    run_parser = subparsers.add_parser("run", parents=[common], help="Benchmark a single scenario")
    run_parser.add_argument("scenario", help="Scenario name")

    compare_parser = subparsers.add_parser(
        "compare", parents=[common], help="Benchmark and rank several scenarios"
    )
    compare_parser.add_argument(
        "scenarios",
        nargs="*",
        help="Scenario names (default: all)",
    )

    return parser


def main(argv=None):
    # Load environment variables from .env file
    load_dotenv()

    args = build_parser().parse_args(argv)

    commands = {
        "list": run_list,
        "run": run_single,
        "compare": run_compare,
    }

    try:
        commands[args.command](args)
    except KeyboardInterrupt:
        print("\nBenchmark interrupted by user")
        sys.exit(1)
    except Exception as e:
        print(f"\nError: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
