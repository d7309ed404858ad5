"""
riskdiff.core
=============

Shared names and numerical settings.
"""

from riskdiff.core.config import DEFAULT_SETTINGS, SolverSettings
from riskdiff.core.names import Hypothesis, Method, parse_hypothesis, parse_method

__all__ = [
    "DEFAULT_SETTINGS",
    "SolverSettings",
    "Hypothesis",
    "Method",
    "parse_hypothesis",
    "parse_method",
]
