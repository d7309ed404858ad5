"""
riskdiff.stats.methods.score_test.core
======================================

Core mathematics for restricted-MLE score tests on a risk difference.

Provides:
- The plug-in variance of p2_hat - p1_hat evaluated at the restricted MLE
- The score statistic and its upper-tail p-value
- `score_test`, the solver -> variance -> statistic chain for one delta0

Variance convention: the Miettinen-Nurminen variance carries the
small-sample factor N/(N-1); the Farrington-Manning variance does not.
Each matches its published definition.

Examples
--------
>>> from riskdiff.core.names import Method
>>> from riskdiff.stats.methods.score_test.core import score_test
>>> res = score_test(Method.MN, 80, 100, 85, 100, -0.10)
>>> res.is_defined and res.z_statistic > 0
True
>>> round(restricted_variance(0.5, 0.5, 50, 50, small_sample_correction=True), 6)
0.010101
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Optional

from riskdiff.core.config import SolverSettings
from riskdiff.core.names import Method
from riskdiff.logging import get_logger
from riskdiff.stats.common.normal import NormalDistribution, get_normal
from riskdiff.stats.methods.score_test.solvers import RestrictedMLE, get_solver

logger = get_logger(__name__)


@dataclass(frozen=True)
class ScoreResult:
    """
    Score statistic for H0: p2 - p1 = delta0.

    Attributes:
        variance: Variance estimate used for standardisation
        z_statistic: (observed_diff - delta0) / sqrt(variance); nan when undefined
        p_value: Upper-tail p-value 1 - Φ(z); nan when undefined
        delta0: Hypothesized difference
        restricted_mle: RMLE the variance was evaluated at, if any
    """

    variance: float
    z_statistic: float
    p_value: float
    delta0: float = 0.0
    restricted_mle: Optional[RestrictedMLE] = None

    @property
    def is_defined(self) -> bool:
        """False when the variance degenerated and the statistic is undefined."""
        return not math.isnan(self.z_statistic)


def restricted_variance(
    p1_star: float,
    p2_star: float,
    n1: int,
    n2: int,
    small_sample_correction: bool = False,
) -> float:
    """Variance of p2_hat - p1_hat at (p1*, p2*).

    Args:
        p1_star, p2_star: Restricted MLE
        n1, n2: Group sizes
        small_sample_correction: Multiply by N/(N-1), N = n1 + n2 (Miettinen-Nurminen)

    Returns:
        Variance estimate (nan when either group is empty)
    """
    if n1 <= 0 or n2 <= 0:
        return float("nan")
    var = p1_star * (1 - p1_star) / n1 + p2_star * (1 - p2_star) / n2
    if small_sample_correction:
        total = n1 + n2
        var *= total / (total - 1)
    return var


def score_statistic(
    observed_diff: float,
    delta0: float,
    variance: float,
    normal: Optional[NormalDistribution] = None,
    restricted_mle: Optional[RestrictedMLE] = None,
) -> ScoreResult:
    """Standardise observed_diff - delta0 and attach the upper-tail p-value.

    A non-finite or non-positive variance yields an undefined result
    (`nan` statistic and p-value) rather than z = 0.
    """
    if not math.isfinite(variance) or variance <= 0:
        logger.debug("score_statistic_undefined", delta0=delta0, variance=variance)
        nan = float("nan")
        return ScoreResult(variance, nan, nan, delta0, restricted_mle)

    z = (observed_diff - delta0) / math.sqrt(variance)
    p_value = get_normal(normal).sf(z)
    return ScoreResult(variance, z, p_value, delta0, restricted_mle)


def score_test(
    method: Method,
    x1: int,
    n1: int,
    x2: int,
    n2: int,
    delta0: float,
    normal: Optional[NormalDistribution] = None,
    settings: Optional[SolverSettings] = None,
) -> ScoreResult:
    """Run restricted MLE -> variance -> statistic at one delta0 from counts.

    Args:
        method: Method.FM or Method.MN
        x1, n1: Successes and trials in group 1 (control)
        x2, n2: Successes and trials in group 2 (treatment)
        delta0: Hypothesized p2 - p1
        normal: Normal distribution to use (process default when None)
        settings: Solver settings (defaults when None)

    Returns:
        ScoreResult carrying the restricted MLE
    """
    return score_test_rates(
        method, x1 / n1, x2 / n2, n1, n2, delta0, normal, (x1, x2), settings
    )


def score_test_rates(
    method: Method,
    p1_obs: float,
    p2_obs: float,
    n1: int,
    n2: int,
    delta0: float,
    normal: Optional[NormalDistribution] = None,
    counts: Optional[tuple[int, int]] = None,
    settings: Optional[SolverSettings] = None,
) -> ScoreResult:
    """Same chain as `score_test` from observed (possibly adjusted) rates.

    When `counts` (x1, x2) is given the solver works on the counts, which the
    Miettinen-Nurminen pooled-rate shortcut needs to be exact.
    """
    solver = get_solver(method, settings)
    if counts is not None:
        mle = solver.solve(counts[0], n1, counts[1], n2, delta0)
    else:
        mle = solver.solve_rates(p1_obs, p2_obs, n1, n2, delta0)

    variance = restricted_variance(
        mle.p1_star,
        mle.p2_star,
        n1,
        n2,
        small_sample_correction=method is Method.MN,
    )
    return score_statistic(p2_obs - p1_obs, delta0, variance, normal, mle)
