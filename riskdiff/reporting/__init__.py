"""
Reporting helpers for riskdiff results.
"""

from riskdiff.reporting.two_proportions import MethodComparisonReporter

__all__ = ["MethodComparisonReporter"]
