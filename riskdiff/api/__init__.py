"""
riskdiff.api - Trial-Oriented Facade
====================================

This module provides an off-the-shelf interface organised by the questions
a trial statistician asks: is the treatment non-inferior, superior or
equivalent to the control? In terms of design patterns, this is the facade
pattern over `riskdiff.stats`.

Examples
--------
>>> from riskdiff.api import non_inferiority_test
>>> res = non_inferiority_test(n1=100, x1=80, n2=100, x2=85, margin=0.10, method="fm")
>>> res.to_dict()["is_non_inferior"]
True

Unified Interface
-----------------
- `non_inferiority_test()`: H0: p2 - p1 <= -margin
- `superiority_test()`: H0: p2 - p1 <= 0
- `equivalence_test()`: TOST at -margin and +margin
- `compare_methods()`: one analysis under several methods
- `TrialConfig` / `validate_trial()`: configuration-driven entry point
"""

from riskdiff.api.trial import (
    TrialConfig,
    compare_methods,
    equivalence_test,
    non_inferiority_test,
    results_to_records,
    superiority_test,
    validate_trial,
)

__all__ = [
    "TrialConfig",
    "compare_methods",
    "equivalence_test",
    "non_inferiority_test",
    "results_to_records",
    "superiority_test",
    "validate_trial",
]
