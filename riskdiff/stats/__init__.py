"""
riskdiff.stats
==============

Statistics for comparing two binomial proportions.

- `common`: the standard normal leaf and its quantile cache
- `methods`: solver-level mathematics (score tests, closed-form intervals)
- `schemes`: trial-level validation built on the methods
"""
