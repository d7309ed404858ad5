"""
riskdiff.stats.methods.common
=============================

Closed-form statistical utilities shared by the risk-difference methods.

This module provides the observed-rate variances, the Wald statistic and
the Wilson / Newcombe intervals that do not need an iterative solver.
"""
