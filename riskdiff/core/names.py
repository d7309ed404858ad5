"""
riskdiff.core.names
===================

Typed names shared across the package.

- `Method`: an Enum for the supported risk-difference methods.
- `Hypothesis`: an Enum for the supported trial hypotheses.
- `parse_method`, `parse_hypothesis`: resolve user-facing spellings.

Examples
--------
>>> from riskdiff.core.names import Method, Hypothesis, parse_method
>>> Method.MN.value
'mn'
>>> parse_method("Miettinen-Nurminen") is Method.MN
True
>>> Hypothesis("equivalence") is Hypothesis.EQUIVALENCE
True
"""

from __future__ import annotations
from enum import Enum
from typing import Dict, Union


class Method(str, Enum):
    """Risk-difference estimation methods.

    - WALD: unpooled Wald interval and statistic
    - FM: Farrington-Manning restricted-MLE score test
    - MN: Miettinen-Nurminen score test with test-inverted interval
    - WILSON: Newcombe hybrid interval built from Wilson score intervals
    """

    WALD = "wald"
    FM = "fm"
    MN = "mn"
    WILSON = "wilson"


class Hypothesis(str, Enum):
    """Comparative trial hypotheses on the difference p2 - p1."""

    NON_INFERIORITY = "non_inferiority"
    SUPERIORITY = "superiority"
    EQUIVALENCE = "equivalence"


MethodLike = Union[Method, str]
HypothesisLike = Union[Hypothesis, str]

_METHOD_ALIASES: Dict[str, Method] = {
    "wald": Method.WALD,
    "fm": Method.FM,
    "farrington-manning": Method.FM,
    "farrington_manning": Method.FM,
    "mn": Method.MN,
    "miettinen-nurminen": Method.MN,
    "miettinen_nurminen": Method.MN,
    "wilson": Method.WILSON,
    "newcombe": Method.WILSON,
    "wilson-newcombe": Method.WILSON,
}

_HYPOTHESIS_ALIASES: Dict[str, Hypothesis] = {
    "non_inferiority": Hypothesis.NON_INFERIORITY,
    "non-inferiority": Hypothesis.NON_INFERIORITY,
    "noninferiority": Hypothesis.NON_INFERIORITY,
    "ni": Hypothesis.NON_INFERIORITY,
    "superiority": Hypothesis.SUPERIORITY,
    "sup": Hypothesis.SUPERIORITY,
    "equivalence": Hypothesis.EQUIVALENCE,
    "eq": Hypothesis.EQUIVALENCE,
    "tost": Hypothesis.EQUIVALENCE,
}


def parse_method(method: MethodLike) -> Method:
    """Resolve a method selector; raise ValueError for unknown names."""
    if isinstance(method, Method):
        return method
    key = str(method).strip().lower()
    if key not in _METHOD_ALIASES:
        raise ValueError(f"Unknown method: {method}")
    return _METHOD_ALIASES[key]


def parse_hypothesis(hypothesis: HypothesisLike) -> Hypothesis:
    """Resolve a hypothesis selector; raise ValueError for unknown names."""
    if isinstance(hypothesis, Hypothesis):
        return hypothesis
    key = str(hypothesis).strip().lower()
    if key not in _HYPOTHESIS_ALIASES:
        raise ValueError(f"Unknown hypothesis: {hypothesis}")
    return _HYPOTHESIS_ALIASES[key]
