"""
riskdiff.stats.methods.score_test.inversion
===========================================

Confidence intervals for p2 - p1 by inverting the Miettinen-Nurminen score
test.

The bounds are the two values of delta0 at which the score statistic
z(delta0) = (diff - delta0) / sqrt(V_MN(delta0)) equals +z_crit (lower
bound) and -z_crit (upper bound). z(delta0) is decreasing in delta0, so each
bound is found by bisection over a bracket on one side of the observed
difference; every step re-solves the restricted MLE at the trial delta0.
The search never leaves [-ci_limit, ci_limit]: when the observed difference
is exactly -1 or +1 the matching bound saturates at -ci_limit or +ci_limit.

Examples
--------
>>> from riskdiff.stats.methods.score_test.inversion import invert_score_interval
>>> ci = invert_score_interval(80, 100, 85, 100, 1.959964)
>>> ci.lower < 0.05 < ci.upper
True
>>> ci.lower > -0.10
True
"""

from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import Callable, Optional

from riskdiff.core.config import DEFAULT_SETTINGS, SolverSettings
from riskdiff.stats.methods.score_test.core import restricted_variance
from riskdiff.stats.methods.score_test.solvers import MiettinenNurminenSolver


@dataclass(frozen=True)
class ConfidenceInterval:
    """Interval on the risk-difference scale."""

    lower: float
    upper: float

    @property
    def width(self) -> float:
        return self.upper - self.lower

    def contains(self, value: float) -> bool:
        return self.lower <= value <= self.upper


@dataclass(frozen=True, kw_only=True)
class ScoreIntervalInverter:
    """
    Bisection search for the Miettinen-Nurminen interval bounds.

    Attributes:
        settings: Bracket, tolerance and iteration caps (also passed to the
            restricted-MLE solver)
    """

    settings: SolverSettings = field(default=DEFAULT_SETTINGS)

    def z_function(
        self, x1: int, n1: int, x2: int, n2: int, observed_diff: float
    ) -> Callable[[float], float]:
        """z(delta0) for fixed counts, with the variance floored."""
        solver = MiettinenNurminenSolver(settings=self.settings)
        floor = self.settings.variance_floor

        def z_at(delta0: float) -> float:
            mle = solver.solve(x1, n1, x2, n2, delta0)
            var = restricted_variance(
                mle.p1_star, mle.p2_star, n1, n2, small_sample_correction=True
            )
            return (observed_diff - delta0) / math.sqrt(max(var, floor))

        return z_at

    def lower_bound(
        self, x1: int, n1: int, x2: int, n2: int, observed_diff: float, z_critical: float
    ) -> float:
        """Bisect toward z(delta0) = +z_critical below the observed difference.

        Returns -ci_limit when the observed difference is -1.
        """
        s = self.settings
        z_at = self.z_function(x1, n1, x2, n2, observed_diff)

        lo = max(-s.ci_limit, observed_diff - s.ci_bracket)
        hi = observed_diff
        for _ in range(s.ci_max_iter):
            mid = (lo + hi) / 2
            if z_at(mid) > z_critical:
                lo = mid
            else:
                hi = mid
            if abs(hi - lo) < s.ci_tol:
                break
        return lo

    def upper_bound(
        self, x1: int, n1: int, x2: int, n2: int, observed_diff: float, z_critical: float
    ) -> float:
        """Bisect toward z(delta0) = -z_critical above the observed difference.

        Returns +ci_limit when the observed difference is +1.
        """
        s = self.settings
        z_at = self.z_function(x1, n1, x2, n2, observed_diff)

        lo = observed_diff
        hi = min(s.ci_limit, observed_diff + s.ci_bracket)
        for _ in range(s.ci_max_iter):
            mid = (lo + hi) / 2
            if z_at(mid) < -z_critical:
                hi = mid
            else:
                lo = mid
            if abs(hi - lo) < s.ci_tol:
                break
        return hi

    def invert(
        self,
        x1: int,
        n1: int,
        x2: int,
        n2: int,
        z_critical: float,
        observed_diff: Optional[float] = None,
    ) -> ConfidenceInterval:
        """Both bounds of the inverted score interval.

        `observed_diff` defaults to x2/n2 - x1/n1. A non-finite critical
        value gives an undefined (nan) interval.
        """
        if not math.isfinite(z_critical):
            nan = float("nan")
            return ConfidenceInterval(nan, nan)
        if observed_diff is None:
            observed_diff = x2 / n2 - x1 / n1
        return ConfidenceInterval(
            lower=self.lower_bound(x1, n1, x2, n2, observed_diff, z_critical),
            upper=self.upper_bound(x1, n1, x2, n2, observed_diff, z_critical),
        )


def invert_score_interval(
    x1: int,
    n1: int,
    x2: int,
    n2: int,
    z_critical: float,
    observed_diff: Optional[float] = None,
    settings: SolverSettings = DEFAULT_SETTINGS,
) -> ConfidenceInterval:
    """Miettinen-Nurminen confidence interval for p2 - p1 from counts."""
    return ScoreIntervalInverter(settings=settings).invert(
        x1, n1, x2, n2, z_critical, observed_diff
    )
