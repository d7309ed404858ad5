"""
riskdiff: constrained-likelihood score tests for a difference of two proportions.

Comparative trials with a binary endpoint are judged on the risk difference
p2 - p1 between a treatment arm (group 2) and a control arm (group 1).
riskdiff validates a finished trial against a non-inferiority, superiority
or equivalence hypothesis with one of four methods:

- Wald: unpooled normal approximation
- Farrington-Manning: score test with the restricted MLE under H0 (Newton)
- Miettinen-Nurminen: score test with the restricted MLE under H0
  (bisection) and a confidence interval obtained by inverting the test
- Wilson / Newcombe: hybrid score interval from per-arm Wilson intervals

Numerical paths never raise: undefined values are reported as nan.
Configuration errors (unknown method names, impossible counts) raise
ValueError.

Example
-------
>>> import riskdiff
>>> res = riskdiff.non_inferiority_test(n1=100, x1=80, n2=100, x2=85, margin=0.10, method="mn")
>>> res.is_success
True
>>> assert hasattr(riskdiff, "stats")
"""

from riskdiff import stats
from riskdiff.api.trial import (
    TrialConfig,
    compare_methods,
    equivalence_test,
    non_inferiority_test,
    superiority_test,
    validate_trial,
)
from riskdiff.core.config import DEFAULT_SETTINGS, SolverSettings
from riskdiff.core.names import Hypothesis, Method
from riskdiff.stats.common.normal import NormalDistribution, reset_normal_cache
from riskdiff.stats.schemes.two_proportions import (
    TwoPropResult,
    TwoPropSample,
    validate_two_proportions,
)

__version__ = "0.1.0"

__all__ = [
    "stats",
    "TrialConfig",
    "compare_methods",
    "equivalence_test",
    "non_inferiority_test",
    "superiority_test",
    "validate_trial",
    "DEFAULT_SETTINGS",
    "SolverSettings",
    "Hypothesis",
    "Method",
    "NormalDistribution",
    "reset_normal_cache",
    "TwoPropResult",
    "TwoPropSample",
    "validate_two_proportions",
]
