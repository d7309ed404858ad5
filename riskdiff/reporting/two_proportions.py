"""
riskdiff.reporting.two_proportions
==================================

Tabular and graphical views over two-proportion validation results.

The reporter takes the results of one trial analysed under several methods
(see `riskdiff.api.trial.compare_methods`) and lays them out as a Polars
table or a forest plot of the confidence intervals against the margin.

Examples
--------
>>> from riskdiff.api.trial import compare_methods
>>> from riskdiff.reporting.two_proportions import MethodComparisonReporter
>>> results = compare_methods(n1=100, x1=80, n2=100, x2=85, margin=0.10)
>>> rep = MethodComparisonReporter(results)
>>> rep.table().height
4
>>> rep.table()["method"].to_list()
['wald', 'fm', 'mn', 'wilson']
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

import polars as pl

from riskdiff.core.names import Hypothesis
from riskdiff.stats.schemes.two_proportions.validation import TwoPropResult

TABLE_COLUMNS = [
    "method",
    "hypothesis",
    "p1",
    "p2",
    "diff",
    "ci_lower",
    "ci_upper",
    "p_value",
    "test_statistic",
    "z_critical",
    "is_success",
]


@dataclass
class MethodComparisonReporter:
    """Side-by-side view of one trial under several methods."""

    results: Sequence[TwoPropResult]

    def table(self) -> pl.DataFrame:
        """
        One row per result with columns:
        - method, hypothesis, p1, p2, diff, ci_lower, ci_upper, p_value,
          test_statistic, z_critical, is_success
        """
        records = [r.to_record() for r in self.results]
        if not records:
            schema = {c: pl.Float64 for c in TABLE_COLUMNS}
            schema.update(method=pl.Utf8, hypothesis=pl.Utf8, is_success=pl.Boolean)
            return pl.DataFrame(schema=schema)
        return pl.DataFrame(records).select(TABLE_COLUMNS)

    def agreement(self) -> bool:
        """True when every method reaches the same decision."""
        return len({r.is_success for r in self.results}) <= 1

    def _margin_lines(self) -> List[float]:
        if not self.results:
            return []
        first = self.results[0]
        if first.hypothesis is Hypothesis.SUPERIORITY:
            return [0.0]
        if first.hypothesis is Hypothesis.EQUIVALENCE:
            return [-first.margin, first.margin]
        return [-first.margin]

    def plot(self, show: bool = True, ax: Optional[Any] = None) -> Any:
        """
        Forest plot of the confidence intervals with the decision margin.

        Methods whose interval is undefined are drawn without a bar.
        Returns the matplotlib Axes.
        """
        import matplotlib.pyplot as plt

        if ax is None:
            _, ax = plt.subplots(figsize=(6.5, 0.6 * max(len(self.results), 1) + 1.8))

        labels = [r.method.value for r in self.results]
        for i, r in enumerate(self.results):
            color = "tab:green" if r.is_success else "tab:red"
            if r.is_defined:
                ax.hlines(i, r.ci_lower, r.ci_upper, color=color, linewidth=2)
            ax.plot([r.diff], [i], marker="o", color=color)

        for x in self._margin_lines():
            ax.axvline(x, linestyle="--", linewidth=1, color="gray")
        ax.axvline(0.0, linestyle=":", linewidth=1, color="black")

        ax.set_yticks(range(len(labels)))
        ax.set_yticklabels(labels)
        ax.invert_yaxis()
        ax.set_xlabel("Risk difference (p2 - p1)")
        if self.results:
            ax.set_title(f"{self.results[0].hypothesis.value.replace('_', '-')} by method")
        plt.tight_layout()
        if show:
            plt.show()
        return ax
