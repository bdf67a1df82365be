"""
Results aggregation and visualization for benchmark results.

Provides the ranked comparison table, JSON export and charts.
"""

import json
import re
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional


def _slug(text: str) -> str:
    """Make a label safe to use as a file name."""
    return re.sub(r"[^A-Za-z0-9._-]+", "_", text).strip("._") or "result"


def format_int(value: int) -> str:
    """Format an integer with ``_`` between groups of three digits."""
    return f"{value:_d}"


def format_results(results: Iterable) -> str:
    """Render ``(label, rate)`` pairs as a table ranked by rate.

    Ties keep their original order. Each line reads
    ``<label>: <rate> ops/s`` with labels and rates aligned.
    """
    rows = [(str(label), rate) for label, rate in results]
    if not rows:
        return ""

    rows.sort(key=lambda row: row[1], reverse=True)
    formatted = [(f"{label}:", format_int(rate)) for label, rate in rows]

    name_width = max(len(label) for label, _ in rows) + 1
    rate_width = max(len(rate) for _, rate in formatted)

    return "\n".join(
        f"{name:<{name_width}} {rate:>{rate_width}} ops/s"
        for name, rate in formatted
    )


class ConsoleReporter:
    """Generates console/CLI reports."""

    def single_result(self, result) -> str:
        """One line for a single benchmark result."""
        label, rate = result
        return f"{label}: {format_int(rate)} ops/s"

    def comparison_table(self, results: list, title: Optional[str] = None) -> str:
        """Ranked comparison table with an optional title."""
        if not results:
            return "No results to display"

        table = format_results(results)
        if not title:
            return table

        width = max(len(title), *(len(line) for line in table.splitlines()))
        return "\n".join([title, "=" * width, table])


class JSONReporter:
    """Exports results as JSON for further analysis."""

    def __init__(self, output_dir: Optional[Path] = None):
        self.output_dir = output_dir or Path("results")

    def save_result(self, result) -> Path:
        """Save a single result to JSON."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = self.output_dir / f"{_slug(result.label)}_{timestamp}.json"

        with open(filepath, "w") as f:
            json.dump(result.to_dict(), f, indent=2)

        return filepath

    def save_comparison(self, results: list, name: str = "comparison") -> Path:
        """Save multiple results, ranked, as a comparison JSON."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = self.output_dir / f"{name}_{timestamp}.json"

        ranked = sorted(results, key=lambda r: r.rate, reverse=True)
        data = {
            "name": name,
            "timestamp": timestamp,
            "results": [r.to_dict() for r in ranked],
        }

        with open(filepath, "w") as f:
            json.dump(data, f, indent=2)

        return filepath

    def load_result(self, filepath: Path) -> dict:
        """Load a result from JSON."""
        with open(filepath) as f:
            return json.load(f)


class ChartReporter:
    """Generates visual charts using matplotlib."""

    def __init__(self, output_dir: Optional[Path] = None):
        self.output_dir = output_dir or Path("results/charts")
        self._matplotlib_available = False
        self._check_matplotlib()

    def _check_matplotlib(self):
        """Check if matplotlib is available."""
        try:
            import matplotlib
            matplotlib.use("Agg")  # Non-interactive backend
            self._matplotlib_available = True
        except ImportError:
            self._matplotlib_available = False

    def rate_bar_chart(
        self,
        results: list,
        filename: Optional[str] = None,
    ) -> Optional[Path]:
        """Generate a horizontal bar chart of rates, fastest on top."""
        if not self._matplotlib_available:
            print("Warning: matplotlib not available for charts")
            return None

        import matplotlib.pyplot as plt

        if not results:
            return None

        ranked = sorted(results, key=lambda r: r.rate)
        labels = [r.label for r in ranked]
        rates = [r.rate for r in ranked]

        fig, ax = plt.subplots(figsize=(10, max(2, 0.5 * len(ranked) + 1)))
        bars = ax.barh(labels, rates, color="steelblue")
        ax.bar_label(bars, labels=[format_int(rate) for rate in rates], padding=3)

        ax.set_xlabel("Operations per second")
        ax.set_title("Throughput Comparison")
        fig.tight_layout()

        self.output_dir.mkdir(parents=True, exist_ok=True)
        filename = filename or "rate_comparison.png"
        filepath = self.output_dir / filename
        fig.savefig(filepath, dpi=150, bbox_inches="tight")
        plt.close(fig)

        return filepath
