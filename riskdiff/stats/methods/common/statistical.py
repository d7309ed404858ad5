"""
riskdiff.stats.methods.common.statistical
=========================================

Closed-form building blocks for two-proportion comparisons.

Provides observed-rate and pooled variances and the Wilson / Newcombe
intervals. These functions are method-agnostic and used by the
risk-difference estimators.
"""

from __future__ import annotations
import math
from typing import Tuple


def clip_probability(p: float, eps: float) -> float:
    """Clip `p` into [eps, 1 - eps]."""
    return max(eps, min(1.0 - eps, p))


def unpooled_variance(p1: float, p2: float, n1: int, n2: int) -> float:
    """Variance of p2_hat - p1_hat with each group's own rate.

    >>> round(unpooled_variance(0.8, 0.85, 100, 100), 6)
    0.002875
    """
    return p1 * (1 - p1) / n1 + p2 * (1 - p2) / n2


def pooled_variance(x1: int, n1: int, x2: int, n2: int) -> float:
    """Variance of p2_hat - p1_hat under a common (pooled) rate.

    >>> round(pooled_variance(25, 50, 25, 50), 6)
    0.01
    """
    p_pooled = (x1 + x2) / (n1 + n2)
    return p_pooled * (1 - p_pooled) * (1 / n1 + 1 / n2)


def wilson_interval(x: int, n: int, z: float) -> Tuple[float, float]:
    """Wilson score interval for a single proportion.

    Args:
        x: Successes
        n: Trials
        z: Critical value

    Returns:
        (lower, upper), clipped to [0, 1]

    >>> lo, hi = wilson_interval(80, 100, 1.959964)
    >>> round(lo, 3), round(hi, 3)
    (0.711, 0.867)
    """
    if n <= 0:
        return 0.0, 0.0

    p = x / n
    z2 = z * z
    denom = 1 + z2 / n
    center = (p + z2 / (2 * n)) / denom
    radicand = max(0.0, p * (1 - p) / n + z2 / (4 * n * n))
    margin = min(z * math.sqrt(radicand) / denom, 1.0)

    return max(0.0, center - margin), min(1.0, center + margin)


def newcombe_interval(
    x1: int, n1: int, x2: int, n2: int, z: float, p1: float, p2: float
) -> Tuple[float, float]:
    """Newcombe hybrid score interval for p2 - p1.

    Combines the per-group Wilson intervals (computed from counts) around
    the observed difference `p2 - p1` (which may be continuity-adjusted).
    """
    l1, u1 = wilson_interval(x1, n1, z)
    l2, u2 = wilson_interval(x2, n2, z)
    diff = p2 - p1

    lower = diff - math.sqrt((p2 - l2) ** 2 + (u1 - p1) ** 2)
    upper = diff + math.sqrt((u2 - p2) ** 2 + (p1 - l1) ** 2)
    return lower, upper
