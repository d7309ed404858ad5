"""
riskdiff.stats.common.normal
============================

Standard normal distribution with a bounded quantile cache.

The quantile Φ⁻¹ is evaluated many times with the same handful of
probabilities (1 - alpha, 1 - alpha/2), so each `NormalDistribution` owns an
LRU cache keyed by the probability rounded to 10 decimals. A process-wide
default instance backs the engine; tests reset it with `reset_normal_cache`,
and callers may pass their own instance to any engine entry point.

Examples
--------
>>> from riskdiff.stats.common.normal import NormalDistribution
>>> normal = NormalDistribution(cache_size=4)
>>> round(normal.ppf(0.975), 4)
1.96
>>> normal.ppf(0.0), normal.ppf(1.0)
(-inf, inf)
>>> round(normal.cdf(0.0), 6)
0.5
>>> normal.cache_info().currsize
1
"""

from __future__ import annotations
import math
from functools import lru_cache
from typing import Any, Optional

from scipy.stats import norm

QUANTILE_CACHE_SIZE = 25
QUANTILE_KEY_DIGITS = 10


class NormalDistribution:
    """
    Standard normal Φ, 1 - Φ and Φ⁻¹ with a memoised quantile.

    Args:
        cache_size: Maximum number of cached quantiles (least recently used evicted)
        key_digits: Decimal digits the probability is rounded to before lookup
    """

    def __init__(
        self,
        cache_size: int = QUANTILE_CACHE_SIZE,
        key_digits: int = QUANTILE_KEY_DIGITS,
    ) -> None:
        if cache_size < 1:
            raise ValueError(f"cache_size must be positive, got {cache_size}")
        self.cache_size = cache_size
        self.key_digits = key_digits
        self._quantile = lru_cache(maxsize=cache_size)(_quantile)

    def cdf(self, x: float) -> float:
        """Φ(x)."""
        return float(norm.cdf(x))

    def sf(self, x: float) -> float:
        """Upper tail 1 - Φ(x)."""
        return float(norm.sf(x))

    def ppf(self, p: float) -> float:
        """Φ⁻¹(p); -inf for p <= 0, +inf for p >= 1, nan for nan."""
        if math.isnan(p):
            return float("nan")
        if p <= 0:
            return float("-inf")
        if p >= 1:
            return float("inf")
        return self._quantile(round(p, self.key_digits))

    def cache_clear(self) -> None:
        """Drop every cached quantile."""
        self._quantile.cache_clear()

    def cache_info(self) -> Any:
        """Hit/miss statistics of the quantile cache."""
        return self._quantile.cache_info()


def _quantile(p: float) -> float:
    return float(norm.ppf(p))


_default_normal = NormalDistribution()


def get_normal(normal: Optional[NormalDistribution] = None) -> NormalDistribution:
    """Return `normal` when given, else the process-wide default instance."""
    return normal if normal is not None else _default_normal


def reset_normal_cache() -> None:
    """Clear the quantile cache of the process-wide default instance."""
    _default_normal.cache_clear()
