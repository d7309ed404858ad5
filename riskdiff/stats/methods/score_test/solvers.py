"""
riskdiff.stats.methods.score_test.solvers
=========================================

Restricted maximum-likelihood estimation of two binomial proportions under
H0: p2 - p1 = delta0.

Two strategies implement the same contract, each reproducing a named
procedure from the literature:

- `FarringtonManningSolver`: Newton-Raphson on the constrained score. When an
  iterate leaves (0, 1) it stops and returns a re-centred, clipped estimate
  without further refinement (Farrington & Manning, 1990).
- `MiettinenNurminenSolver`: bisection on the sign of the constrained score
  over the feasible interval. When the score does not change sign the
  endpoint whose score is closest to zero is returned (Miettinen & Nurminen,
  1985).

Both are pure: every call builds fresh locals and returns a new
`RestrictedMLE`.

Examples
--------
>>> from riskdiff.stats.methods.score_test.solvers import MiettinenNurminenSolver
>>> mle = MiettinenNurminenSolver().solve(80, 100, 85, 100, -0.10)
>>> abs(mle.p2_star - mle.p1_star + 0.10) < 1e-6
True
>>> MiettinenNurminenSolver().solve(25, 50, 25, 50, 0.0).p1_star
0.5
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import ClassVar, Dict, Optional

from riskdiff.core.config import DEFAULT_SETTINGS, SolverSettings
from riskdiff.core.names import Method
from riskdiff.logging import get_engine_logger
from riskdiff.stats.methods.common.statistical import clip_probability
from riskdiff.stats.methods.score_test.likelihood import (
    constrained_information,
    constrained_score,
    feasible_interval,
)


@dataclass(frozen=True)
class RestrictedMLE:
    """
    Restricted MLE (p1*, p2*) with p2* - p1* = delta0.

    Attributes:
        p1_star: Estimate for group 1 (control)
        p2_star: Estimate for group 2 (treatment)
        delta0: Hypothesized difference the estimate was constrained to
        converged: False when the solver stopped on a boundary fallback or
            its iteration cap; the estimate is still returned unchanged
        iterations: Iterations performed (0 for closed-form returns)
    """

    p1_star: float
    p2_star: float
    delta0: float
    converged: bool = True
    iterations: int = 0


@dataclass(frozen=True, kw_only=True)
class ConstrainedMLESolver(ABC):
    """
    Base class for restricted-MLE strategies.

    Subclasses implement `solve(x1, n1, x2, n2, delta0)`. Rates are derived
    from the counts; `solve_rates` accepts (possibly adjusted) rates directly.
    """

    method: ClassVar[Method]
    settings: SolverSettings = field(default=DEFAULT_SETTINGS)

    def solve(self, x1: int, n1: int, x2: int, n2: int, delta0: float) -> RestrictedMLE:
        """Restricted MLE from success counts."""
        return self.solve_rates(x1 / n1, x2 / n2, n1, n2, delta0)

    @abstractmethod
    def solve_rates(
        self, p1_obs: float, p2_obs: float, n1: int, n2: int, delta0: float
    ) -> RestrictedMLE:
        """Restricted MLE from observed rates."""


@dataclass(frozen=True, kw_only=True)
class FarringtonManningSolver(ConstrainedMLESolver):
    """
    Newton-Raphson restricted MLE (Farrington-Manning).

    Starts from the sample-size-weighted pooled rate minus delta0/2 and
    iterates p1 <- p1 + score/information. Never raises; the returned pair
    always lies in [fm_clip, 1 - fm_clip].
    """

    method: ClassVar[Method] = Method.FM

    def solve_rates(
        self, p1_obs: float, p2_obs: float, n1: int, n2: int, delta0: float
    ) -> RestrictedMLE:
        s = self.settings
        lo_clip, hi_clip = s.fm_clip, 1 - s.fm_clip
        upper_p1 = hi_clip - max(0.0, delta0)

        p_pooled = (n1 * p1_obs + n2 * p2_obs) / (n1 + n2)
        p1 = max(lo_clip, min(hi_clip, p_pooled - delta0 / 2))

        converged = False
        iterations = 0
        for iterations in range(1, s.fm_max_iter + 1):
            p2 = p1 + delta0
            if p2 <= 0 or p2 >= 1 or p1 <= 0 or p1 >= 1:
                p1 = max(lo_clip, min(upper_p1, p_pooled - delta0 / 2))
                get_engine_logger(__name__, self.method.value).debug(
                    "rmle_boundary_fallback",
                    delta0=delta0,
                    iteration=iterations,
                    p1_fallback=p1,
                )
                break

            score = constrained_score(p1, p1_obs, p2_obs, n1, n2, delta0)
            info = constrained_information(p1, p1_obs, p2_obs, n1, n2, delta0)
            step = score / info
            p1 = p1 + step

            if abs(step) < s.fm_tol:
                converged = True
                break

            p1 = max(lo_clip, min(upper_p1, p1))

        p1 = max(lo_clip, min(hi_clip, p1))
        p2 = max(lo_clip, min(hi_clip, p1 + delta0))
        return RestrictedMLE(
            p1_star=p1,
            p2_star=p2,
            delta0=delta0,
            converged=converged,
            iterations=iterations,
        )


@dataclass(frozen=True, kw_only=True)
class MiettinenNurminenSolver(ConstrainedMLESolver):
    """
    Bisection restricted MLE on the sign of the constrained score
    (Miettinen-Nurminen).

    At delta0 = 0 the pooled rate is returned directly. Bisection has a
    bounded number of iterations and converges monotonically because the
    constrained score is decreasing on the feasible interval.
    """

    method: ClassVar[Method] = Method.MN

    def solve(self, x1: int, n1: int, x2: int, n2: int, delta0: float) -> RestrictedMLE:
        s = self.settings
        if abs(delta0) < s.null_tol:
            pooled = (x1 + x2) / (n1 + n2)
            if pooled <= 0 or pooled >= 1:
                pooled = clip_probability(pooled, s.epsilon)
            return RestrictedMLE(p1_star=pooled, p2_star=pooled, delta0=delta0)
        return self.solve_rates(x1 / n1, x2 / n2, n1, n2, delta0)

    def solve_rates(
        self, p1_obs: float, p2_obs: float, n1: int, n2: int, delta0: float
    ) -> RestrictedMLE:
        s = self.settings
        if abs(delta0) < s.null_tol:
            pooled = clip_probability((n1 * p1_obs + n2 * p2_obs) / (n1 + n2), s.epsilon)
            return RestrictedMLE(p1_star=pooled, p2_star=pooled, delta0=delta0)

        p1_min, p1_max = feasible_interval(delta0, s.epsilon)
        if p1_min >= p1_max:
            p1 = clip_probability((p1_min + p1_max) / 2, s.epsilon)
            p2 = clip_probability(p1 + delta0, s.epsilon)
            return RestrictedMLE(p1_star=p1, p2_star=p2, delta0=delta0, converged=False)

        def score(p1: float) -> float:
            return constrained_score(p1, p1_obs, p2_obs, n1, n2, delta0)

        score_lo = score(p1_min)
        score_hi = score(p1_max)

        # A decreasing score crosses zero only when it is positive at p1_min.
        if not score_lo > 0.0 > score_hi:
            p1 = p1_min if abs(score_lo) <= abs(score_hi) else p1_max
            get_engine_logger(__name__, self.method.value).debug(
                "rmle_score_saturated",
                delta0=delta0,
                p1_star=p1,
                score_lo=score_lo,
                score_hi=score_hi,
            )
            return RestrictedMLE(p1_star=p1, p2_star=p1 + delta0, delta0=delta0)

        lo, hi = p1_min, p1_max
        for i in range(1, s.mn_max_iter + 1):
            mid = (lo + hi) / 2
            score_mid = score(mid)

            if abs(score_mid) < s.mn_tol or abs(hi - lo) < s.mn_tol:
                return RestrictedMLE(
                    p1_star=mid, p2_star=mid + delta0, delta0=delta0, iterations=i
                )

            if score_mid > 0:
                lo = mid
            else:
                hi = mid

        p1 = (lo + hi) / 2
        return RestrictedMLE(
            p1_star=p1,
            p2_star=p1 + delta0,
            delta0=delta0,
            converged=False,
            iterations=s.mn_max_iter,
        )


SOLVERS: Dict[Method, ConstrainedMLESolver] = {
    Method.FM: FarringtonManningSolver(),
    Method.MN: MiettinenNurminenSolver(),
}


def get_solver(
    method: Method, settings: Optional[SolverSettings] = None
) -> ConstrainedMLESolver:
    """Return the restricted-MLE strategy registered for `method`."""
    if method not in SOLVERS:
        raise ValueError(f"No restricted-MLE solver for method: {method}")
    if settings is None:
        return SOLVERS[method]
    return type(SOLVERS[method])(settings=settings)
