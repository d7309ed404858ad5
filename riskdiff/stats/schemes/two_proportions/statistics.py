"""
riskdiff.stats.schemes.two_proportions.statistics
=================================================

Risk-difference estimators for two binomial proportions.

Each estimator pairs a confidence interval for p2 - p1 with a one-sided test
of H0: p2 - p1 = delta0 against p2 - p1 > delta0:

- `WaldEstimator`: diff ± z * SE_obs, Wald statistic with the observed-rate SE
- `FarringtonManningEstimator`: the same Wald-type interval, score statistic
  with the Farrington-Manning restricted-MLE variance
- `MiettinenNurminenEstimator`: test-inverted score interval, score statistic
  with the Miettinen-Nurminen variance; works on raw counts
- `WilsonNewcombeEstimator`: Newcombe hybrid interval from per-group Wilson
  intervals, Wald statistic with the observed-rate SE

Mathematical Background
-----------------------
The observed-rate standard error is

    SE_obs = sqrt(p1(1-p1)/n1 + p2(1-p2)/n2)

and the score statistics replace the observed rates by the restricted MLE
(p1*, p2*) under H0, see `riskdiff.stats.methods.score_test`.

Examples
--------
>>> from riskdiff.stats.schemes.two_proportions.common import TwoPropSample
>>> sample = TwoPropSample.from_counts(n1=100, x1=80, n2=100, x2=85)
>>> res = WaldEstimator().test(sample, delta0=-0.10)
>>> round(res.z_statistic, 3)
2.798
>>> ci = WaldEstimator().interval(sample, 1.959964)
>>> round(ci.lower, 3), round(ci.upper, 3)
(-0.055, 0.155)
"""

from __future__ import annotations
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import ClassVar, Optional

from riskdiff.core.config import DEFAULT_SETTINGS, SolverSettings
from riskdiff.core.names import Method
from riskdiff.stats.common.normal import NormalDistribution, get_normal
from riskdiff.stats.methods.common.statistical import (
    newcombe_interval,
    unpooled_variance,
)
from riskdiff.stats.methods.score_test.core import (
    ScoreResult,
    score_statistic,
    score_test,
    score_test_rates,
)
from riskdiff.stats.methods.score_test.inversion import (
    ConfidenceInterval,
    invert_score_interval,
)
from riskdiff.stats.schemes.two_proportions.common import TwoPropSample


@dataclass(frozen=True, kw_only=True)
class RiskDifferenceEstimator(ABC):
    """Interval and one-sided test for p2 - p1 under one method."""

    method: ClassVar[Method]
    settings: SolverSettings = field(default=DEFAULT_SETTINGS)

    @abstractmethod
    def interval(self, sample: TwoPropSample, z_critical: float) -> ConfidenceInterval:
        """Two-sided interval with the given critical value."""

    @abstractmethod
    def test(
        self,
        sample: TwoPropSample,
        delta0: float,
        normal: Optional[NormalDistribution] = None,
    ) -> ScoreResult:
        """Statistic and upper-tail p-value for H0: p2 - p1 = delta0."""


@dataclass(frozen=True, kw_only=True)
class WaldEstimator(RiskDifferenceEstimator):
    """Wald interval and statistic from the (possibly adjusted) observed rates."""

    method: ClassVar[Method] = Method.WALD

    def observed_variance(self, sample: TwoPropSample) -> float:
        return unpooled_variance(sample.p1, sample.p2, sample.n1, sample.n2)

    def interval(self, sample: TwoPropSample, z_critical: float) -> ConfidenceInterval:
        var = self.observed_variance(sample)
        # A zero standard error leaves the interval undefined.
        if not math.isfinite(z_critical) or not var > 0:
            nan = float("nan")
            return ConfidenceInterval(nan, nan)
        half_width = z_critical * math.sqrt(var)
        return ConfidenceInterval(sample.diff - half_width, sample.diff + half_width)

    def test(
        self,
        sample: TwoPropSample,
        delta0: float,
        normal: Optional[NormalDistribution] = None,
    ) -> ScoreResult:
        return score_statistic(
            sample.diff, delta0, self.observed_variance(sample), normal
        )


@dataclass(frozen=True, kw_only=True)
class FarringtonManningEstimator(WaldEstimator):
    """Wald-type interval with the Farrington-Manning score test."""

    method: ClassVar[Method] = Method.FM

    def test(
        self,
        sample: TwoPropSample,
        delta0: float,
        normal: Optional[NormalDistribution] = None,
    ) -> ScoreResult:
        return score_test_rates(
            Method.FM,
            sample.p1,
            sample.p2,
            sample.n1,
            sample.n2,
            delta0,
            normal,
            settings=self.settings,
        )


@dataclass(frozen=True, kw_only=True)
class MiettinenNurminenEstimator(RiskDifferenceEstimator):
    """
    Miettinen-Nurminen score test and its inverted interval.

    Always works on the raw counts; the continuity adjustment of the sample
    does not apply to this method.
    """

    method: ClassVar[Method] = Method.MN

    def interval(self, sample: TwoPropSample, z_critical: float) -> ConfidenceInterval:
        return invert_score_interval(
            sample.x1,
            sample.n1,
            sample.x2,
            sample.n2,
            z_critical,
            sample.raw_diff,
            settings=self.settings,
        )

    def test(
        self,
        sample: TwoPropSample,
        delta0: float,
        normal: Optional[NormalDistribution] = None,
    ) -> ScoreResult:
        return score_test(
            Method.MN,
            sample.x1,
            sample.n1,
            sample.x2,
            sample.n2,
            delta0,
            normal,
            settings=self.settings,
        )


@dataclass(frozen=True, kw_only=True)
class WilsonNewcombeEstimator(WaldEstimator):
    """Newcombe hybrid score interval; the test stays on the observed-rate SE."""

    method: ClassVar[Method] = Method.WILSON

    def interval(self, sample: TwoPropSample, z_critical: float) -> ConfidenceInterval:
        if not math.isfinite(z_critical):
            nan = float("nan")
            return ConfidenceInterval(nan, nan)
        lower, upper = newcombe_interval(
            sample.x1, sample.n1, sample.x2, sample.n2, z_critical, sample.p1, sample.p2
        )
        return ConfidenceInterval(lower, upper)


def critical_value(
    alpha: float, two_sided: bool = False, normal: Optional[NormalDistribution] = None
) -> float:
    """Φ⁻¹(1 - alpha), or Φ⁻¹(1 - alpha/2) when `two_sided`.

    Undefined (nan) for alpha outside (0, 1):

    >>> critical_value(0.0)
    nan
    >>> round(critical_value(0.05, two_sided=True), 4)
    1.96
    """
    if not 0 < alpha < 1:
        return float("nan")
    tail = alpha / 2 if two_sided else alpha
    return get_normal(normal).ppf(1 - tail)
