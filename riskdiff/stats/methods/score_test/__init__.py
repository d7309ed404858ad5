"""
riskdiff.stats.methods.score_test
=================================

Restricted-MLE score tests for a difference of two binomial proportions:
constrained likelihood, the Farrington-Manning and Miettinen-Nurminen
restricted-MLE solvers, the score statistic and test inversion.
"""

from riskdiff.stats.methods.score_test.core import (
    ScoreResult,
    restricted_variance,
    score_statistic,
    score_test,
    score_test_rates,
)
from riskdiff.stats.methods.score_test.inversion import (
    ConfidenceInterval,
    ScoreIntervalInverter,
    invert_score_interval,
)
from riskdiff.stats.methods.score_test.solvers import (
    ConstrainedMLESolver,
    FarringtonManningSolver,
    MiettinenNurminenSolver,
    RestrictedMLE,
    get_solver,
)

__all__ = [
    "ScoreResult",
    "restricted_variance",
    "score_statistic",
    "score_test",
    "score_test_rates",
    "ConfidenceInterval",
    "ScoreIntervalInverter",
    "invert_score_interval",
    "ConstrainedMLESolver",
    "FarringtonManningSolver",
    "MiettinenNurminenSolver",
    "RestrictedMLE",
    "get_solver",
]
