"""
riskdiff.core.config
====================

Numerical settings for the constrained-likelihood engine.

The defaults reproduce the published behaviour of the Farrington-Manning
and Miettinen-Nurminen procedures; override them only for experiments.

Examples
--------
>>> from riskdiff.core.config import SolverSettings, DEFAULT_SETTINGS
>>> DEFAULT_SETTINGS.fm_max_iter
20
>>> tight = SolverSettings(ci_tol=1e-10)
>>> tight.validate()
>>> SolverSettings(epsilon=0.6).validate()
Traceback (most recent call last):
    ...
ValueError: epsilon must be in (0, 0.5), got 0.6
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class SolverSettings:
    """
    Tolerances and iteration caps shared by the solvers and the CI inverter.

    Attributes:
        epsilon: Open-interval margin keeping estimates inside (0, 1)
        fm_clip: Clip bound for Farrington-Manning estimates, [fm_clip, 1 - fm_clip]
        fm_max_iter: Newton-Raphson iteration cap
        fm_tol: Newton-Raphson step tolerance
        mn_max_iter: Bisection iteration cap for the Miettinen-Nurminen RMLE
        mn_tol: Score and interval-width tolerance for the RMLE bisection
        null_tol: |delta0| below which the pooled rate is returned directly
        ci_max_iter: Bisection iteration cap per confidence bound
        ci_tol: Interval-width tolerance per confidence bound
        ci_bracket: Half-width of the search bracket around the observed difference
        ci_limit: Largest |delta0| searched by the inverter
        variance_floor: Variance floor applied inside the inverter
    """

    epsilon: float = 1e-8
    fm_clip: float = 0.001
    fm_max_iter: int = 20
    fm_tol: float = 1e-8
    mn_max_iter: int = 100
    mn_tol: float = 1e-12
    null_tol: float = 1e-10
    ci_max_iter: int = 100
    ci_tol: float = 1e-8
    ci_bracket: float = 0.5
    ci_limit: float = 0.9999
    variance_floor: float = 1e-12

    def validate(self) -> None:
        """Validate settings."""
        if not 0 < self.epsilon < 0.5:
            raise ValueError(f"epsilon must be in (0, 0.5), got {self.epsilon}")
        if not 0 < self.fm_clip < 0.5:
            raise ValueError(f"fm_clip must be in (0, 0.5), got {self.fm_clip}")
        for name in ("fm_max_iter", "mn_max_iter", "ci_max_iter"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        for name in ("fm_tol", "mn_tol", "null_tol", "ci_tol", "variance_floor"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if self.ci_bracket <= 0:
            raise ValueError(f"ci_bracket must be positive, got {self.ci_bracket}")
        if not 0 < self.ci_limit < 1:
            raise ValueError(f"ci_limit must be in (0, 1), got {self.ci_limit}")


DEFAULT_SETTINGS = SolverSettings()
