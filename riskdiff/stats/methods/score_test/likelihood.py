"""
riskdiff.stats.methods.score_test.likelihood
============================================

The constrained two-binomial log-likelihood.

Under H0: p2 - p1 = delta0 the joint log-likelihood of two independent
binomials becomes a function of p1 alone:

    l(p1) = n1 [p1_obs log p1 + (1 - p1_obs) log(1 - p1)]
          + n2 [p2_obs log p2 + (1 - p2_obs) log(1 - p2)],   p2 = p1 + delta0

`constrained_score` is dl/dp1 and `constrained_information` is -d²l/dp1².
The score is strictly decreasing on the feasible interval, which is what
makes bisection on its sign well defined.
"""

from __future__ import annotations
import math
from typing import Tuple


def constrained_score(
    p1: float, p1_obs: float, p2_obs: float, n1: float, n2: float, delta0: float
) -> float:
    """dl/dp1 at `p1` with `p2 = p1 + delta0`."""
    p2 = p1 + delta0
    return n1 * (p1_obs / p1 - (1 - p1_obs) / (1 - p1)) + n2 * (
        p2_obs / p2 - (1 - p2_obs) / (1 - p2)
    )


def constrained_information(
    p1: float, p1_obs: float, p2_obs: float, n1: float, n2: float, delta0: float
) -> float:
    """-d²l/dp1² at `p1` with `p2 = p1 + delta0`."""
    p2 = p1 + delta0
    return n1 * (p1_obs / (p1 * p1) + (1 - p1_obs) / ((1 - p1) * (1 - p1))) + n2 * (
        p2_obs / (p2 * p2) + (1 - p2_obs) / ((1 - p2) * (1 - p2))
    )


def constrained_log_likelihood(
    p1: float, p1_obs: float, p2_obs: float, n1: float, n2: float, delta0: float
) -> float:
    """l(p1); terms with a zero observed weight contribute nothing."""
    p2 = p1 + delta0
    total = 0.0
    for n, obs, p in ((n1, p1_obs, p1), (n2, p2_obs, p2)):
        if obs > 0:
            total += n * obs * math.log(p)
        if obs < 1:
            total += n * (1 - obs) * math.log(1 - p)
    return total


def feasible_interval(delta0: float, eps: float) -> Tuple[float, float]:
    """Range of p1 keeping both p1 and p1 + delta0 inside (eps, 1 - eps).

    >>> feasible_interval(0.0, 1e-8)
    (1e-08, 0.99999999)
    >>> lo, hi = feasible_interval(-0.3, 1e-8)
    >>> round(lo, 6), round(hi, 6)
    (0.3, 1.0)

    The interval is empty (lo >= hi) when |delta0| >= 1 - 2 eps.
    """
    return max(eps, -delta0 + eps), min(1 - eps, 1 - delta0 - eps)
