"""
riskdiff.stats.common
=====================

Distribution leaves shared by every method: the standard normal with its
bounded quantile cache.
"""

from riskdiff.stats.common.normal import (
    NormalDistribution,
    get_normal,
    reset_normal_cache,
)

__all__ = ["NormalDistribution", "get_normal", "reset_normal_cache"]
