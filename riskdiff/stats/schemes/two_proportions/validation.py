"""
riskdiff.stats.schemes.two_proportions.validation
=================================================

Result validation for two-proportion trials.

`validate_two_proportions` dispatches over the method
({wald, fm, mn, wilson}) and the hypothesis
({non_inferiority, superiority, equivalence}):

- non-inferiority: one-sided test at delta0 = -margin, success when the
  lower confidence bound exceeds -margin
- superiority: one-sided test at delta0 = 0, success when the lower bound
  exceeds 0
- equivalence: two one-sided tests (TOST) at -margin and +margin, success
  when the whole interval lies strictly inside (-margin, +margin)

The critical value is Φ⁻¹(1 - alpha) for the one-sided hypotheses and
Φ⁻¹(1 - alpha/2) for equivalence, where the interval is two-sided.

Examples
--------
>>> from riskdiff.stats.schemes.two_proportions.common import TwoPropSample
>>> sample = TwoPropSample.from_counts(n1=100, x1=80, n2=100, x2=85)
>>> res = validate_two_proportions(sample, margin=0.10, alpha=0.05, method="mn")
>>> res.is_success
True
>>> sorted(res.to_dict())[:4]
['ci_lower', 'ci_upper', 'diff', 'is_non_inferior']
"""

from __future__ import annotations
import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from riskdiff.core.config import DEFAULT_SETTINGS, SolverSettings
from riskdiff.core.names import (
    Hypothesis,
    HypothesisLike,
    Method,
    MethodLike,
    parse_hypothesis,
    parse_method,
)
from riskdiff.logging import get_logger
from riskdiff.stats.common.normal import NormalDistribution, get_normal
from riskdiff.stats.schemes.two_proportions.common import TwoPropSample
from riskdiff.stats.schemes.two_proportions.statistics import (
    FarringtonManningEstimator,
    MiettinenNurminenEstimator,
    RiskDifferenceEstimator,
    WaldEstimator,
    WilsonNewcombeEstimator,
    critical_value,
)

logger = get_logger(__name__)

NAN = float("nan")


@dataclass(frozen=True)
class TwoPropResult:
    """
    Outcome of validating one two-proportion trial.

    Attributes:
        p1, p2: Reported rates (continuity-adjusted when requested)
        diff: p2 - p1
        ci_lower, ci_upper: Confidence bounds for p2 - p1
        p_value: One-sided p-value (max of the two for equivalence)
        test_statistic: z statistic (the binding TOST statistic for equivalence)
        is_success: Whether the hypothesis of interest is established
        method, hypothesis: Selected method and hypothesis
        margin, alpha: Inputs of the decision
        z_critical: Critical value used for the interval
        se: Standard error behind the reported statistic
        lower_test, upper_test: TOST statistics at -margin and +margin
            (equivalence only)
    """

    p1: float
    p2: float
    diff: float
    ci_lower: float
    ci_upper: float
    p_value: float
    test_statistic: float
    is_success: bool
    method: Method
    hypothesis: Hypothesis
    margin: float
    alpha: float
    z_critical: float
    se: float = NAN
    lower_test: Optional[float] = None
    upper_test: Optional[float] = None

    @property
    def is_defined(self) -> bool:
        return not (math.isnan(self.ci_lower) or math.isnan(self.ci_upper))

    def to_dict(self) -> Dict[str, Any]:
        """Output mapping; non-inferiority results also carry `is_non_inferior`."""
        out: Dict[str, Any] = {
            "p1": self.p1,
            "p2": self.p2,
            "diff": self.diff,
            "ci_lower": self.ci_lower,
            "ci_upper": self.ci_upper,
            "p_value": self.p_value,
            "test_statistic": self.test_statistic,
            "is_success": self.is_success,
        }
        if self.hypothesis is Hypothesis.NON_INFERIORITY:
            out["is_non_inferior"] = self.is_success
        return out

    def to_record(self) -> Dict[str, Any]:
        """Flat mapping of every field, with enum values as strings."""
        record = asdict(self)
        record["method"] = self.method.value
        record["hypothesis"] = self.hypothesis.value
        return record


ESTIMATORS: Dict[Method, type[RiskDifferenceEstimator]] = {
    Method.WALD: WaldEstimator,
    Method.FM: FarringtonManningEstimator,
    Method.MN: MiettinenNurminenEstimator,
    Method.WILSON: WilsonNewcombeEstimator,
}


def get_estimator(
    method: MethodLike, settings: SolverSettings = DEFAULT_SETTINGS
) -> RiskDifferenceEstimator:
    """Estimator registered for `method`."""
    return ESTIMATORS[parse_method(method)](settings=settings)


def _nan_max(a: float, b: float) -> float:
    if math.isnan(a) or math.isnan(b):
        return NAN
    return max(a, b)


def _nan_min(a: float, b: float) -> float:
    if math.isnan(a) or math.isnan(b):
        return NAN
    return min(a, b)


def _undefined_result(
    margin: float,
    alpha: float,
    method: Method,
    hypothesis: Hypothesis,
    z_critical: float,
) -> TwoPropResult:
    return TwoPropResult(
        p1=NAN,
        p2=NAN,
        diff=NAN,
        ci_lower=NAN,
        ci_upper=NAN,
        p_value=NAN,
        test_statistic=NAN,
        is_success=False,
        method=method,
        hypothesis=hypothesis,
        margin=margin,
        alpha=alpha,
        z_critical=z_critical,
    )


def validate_two_proportions(
    sample: TwoPropSample,
    margin: float,
    alpha: float = 0.05,
    method: MethodLike = Method.WALD,
    hypothesis: HypothesisLike = Hypothesis.NON_INFERIORITY,
    normal: Optional[NormalDistribution] = None,
    settings: SolverSettings = DEFAULT_SETTINGS,
) -> TwoPropResult:
    """
    Validate a two-proportion trial result.

    Args:
        sample: Control (group 1) and treatment (group 2) counts
        margin: Non-negative margin (ignored for superiority)
        alpha: One-sided significance level (overall level for equivalence)
        method: "wald", "fm", "mn" or "wilson"
        hypothesis: "non_inferiority", "superiority" or "equivalence"
        normal: Normal distribution to use (process default when None)
        settings: Solver settings for the score methods

    Returns:
        TwoPropResult; all-nan with `is_success=False` when alpha lies outside
        (0, 1)

    Raises:
        ValueError: Unknown method or hypothesis name
    """
    method = parse_method(method)
    hypothesis = parse_hypothesis(hypothesis)
    normal = get_normal(normal)
    log = logger.bind(method=method.value, hypothesis=hypothesis.value)

    is_equivalence = hypothesis is Hypothesis.EQUIVALENCE
    z_critical = critical_value(alpha, two_sided=is_equivalence, normal=normal)
    if not math.isfinite(z_critical):
        log.debug("critical_value_undefined", alpha=alpha, z_critical=z_critical)
        return _undefined_result(margin, alpha, method, hypothesis, z_critical)

    estimator = get_estimator(method, settings)
    ci = estimator.interval(sample, z_critical)
    lower_test: Optional[float] = None
    upper_test: Optional[float] = None

    if hypothesis is Hypothesis.NON_INFERIORITY:
        primary = estimator.test(sample, -margin, normal)
        p_value = primary.p_value
        statistic = primary.z_statistic
        is_success = ci.lower > -margin
    elif hypothesis is Hypothesis.SUPERIORITY:
        primary = estimator.test(sample, 0.0, normal)
        p_value = primary.p_value
        statistic = primary.z_statistic
        is_success = ci.lower > 0
    else:
        primary = estimator.test(sample, -margin, normal)
        upper = estimator.test(sample, margin, normal)
        lower_test = primary.z_statistic
        upper_test = upper.z_statistic
        p_upper = normal.cdf(upper_test) if upper.is_defined else NAN
        p_value = _nan_max(primary.p_value, p_upper)
        statistic = _nan_min(lower_test, -upper_test)
        is_success = -margin < ci.lower and ci.upper < margin

    se = math.sqrt(primary.variance) if primary.variance > 0 else NAN
    log.debug(
        "two_proportions_validated",
        z_critical=z_critical,
        ci_lower=ci.lower,
        ci_upper=ci.upper,
        test_statistic=statistic,
        is_success=is_success,
    )
    return TwoPropResult(
        p1=sample.p1,
        p2=sample.p2,
        diff=sample.diff,
        ci_lower=ci.lower,
        ci_upper=ci.upper,
        p_value=p_value,
        test_statistic=statistic,
        is_success=bool(is_success),
        method=method,
        hypothesis=hypothesis,
        margin=margin,
        alpha=alpha,
        z_critical=z_critical,
        se=se,
        lower_test=lower_test,
        upper_test=upper_test,
    )
