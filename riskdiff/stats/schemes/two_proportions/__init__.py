"""
Two-proportion trial validation.

Compares a control arm (group 1) and a treatment arm (group 2) on the risk
difference p2 - p1.

**Module Organization:**

- `common`: Per-arm and two-arm count containers
- `statistics`: Interval/test estimators for the Wald, Farrington-Manning,
  Miettinen-Nurminen and Wilson-Newcombe methods
- `validation`: Dispatch over method x hypothesis and the result object

Example Usage
-------------
>>> from riskdiff.stats.schemes.two_proportions import TwoPropSample, validate_two_proportions
>>> sample = TwoPropSample.from_counts(n1=200, x1=150, n2=200, x2=170)
>>> res = validate_two_proportions(sample, margin=0.0, method="wald", hypothesis="superiority")
>>> res.is_success
True
"""

from riskdiff.stats.schemes.two_proportions.common import (
    ProportionSample,
    TwoPropSample,
)
from riskdiff.stats.schemes.two_proportions.statistics import (
    FarringtonManningEstimator,
    MiettinenNurminenEstimator,
    RiskDifferenceEstimator,
    WaldEstimator,
    WilsonNewcombeEstimator,
    critical_value,
)
from riskdiff.stats.schemes.two_proportions.validation import (
    ESTIMATORS,
    TwoPropResult,
    get_estimator,
    validate_two_proportions,
)

__all__ = [
    "ProportionSample",
    "TwoPropSample",
    "FarringtonManningEstimator",
    "MiettinenNurminenEstimator",
    "RiskDifferenceEstimator",
    "WaldEstimator",
    "WilsonNewcombeEstimator",
    "critical_value",
    "ESTIMATORS",
    "TwoPropResult",
    "get_estimator",
    "validate_two_proportions",
]
