"""
riskdiff.api.trial
==================

Clinical-trial facade for validating two-proportion results.

This module wraps the risk-difference engine in the vocabulary of
comparative trials: non-inferiority, superiority and equivalence, each
with a choice of Wald, Farrington-Manning, Miettinen-Nurminen or
Wilson-Newcombe inference.

Examples
--------
>>> from riskdiff.api.trial import non_inferiority_test, equivalence_test
>>> res = non_inferiority_test(n1=100, x1=80, n2=100, x2=85, margin=0.10, method="mn")
>>> res.is_success
True
>>> eq = equivalence_test(n1=500, x1=250, n2=500, x2=250, margin=0.15, method="mn")
>>> eq.is_success
True
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

from riskdiff.core.config import DEFAULT_SETTINGS, SolverSettings
from riskdiff.core.names import (
    Hypothesis,
    HypothesisLike,
    Method,
    MethodLike,
    parse_hypothesis,
    parse_method,
)
from riskdiff.stats.common.normal import NormalDistribution
from riskdiff.stats.schemes.two_proportions.common import TwoPropSample
from riskdiff.stats.schemes.two_proportions.validation import (
    TwoPropResult,
    validate_two_proportions,
)


@dataclass
class TrialConfig:
    """
    Configuration of one two-proportion trial analysis.

    Parameters
    ----------
    n1, x1 : int
        Trials and successes in the control group
    n2, x2 : int
        Trials and successes in the treatment group
    margin : float, default=0.0
        Non-inferiority / equivalence margin on the risk-difference scale
    alpha : float, default=0.05
        One-sided significance level (overall level for equivalence)
    method : str, default="wald"
        "wald", "fm", "mn" or "wilson"
    hypothesis : str, default="non_inferiority"
        "non_inferiority", "superiority" or "equivalence"
    continuity : bool, default=False
        Use (x + 0.5)/(n + 1) rates on the Wald, FM and Wilson paths

    Examples
    --------
    >>> cfg = TrialConfig(n1=100, x1=80, n2=100, x2=85, margin=0.10, method="fm")
    >>> cfg.validate()
    >>> TrialConfig(n1=100, x1=80, n2=100, x2=85, margin=-0.1).validate()
    Traceback (most recent call last):
        ...
    ValueError: Margin must be non-negative, got -0.1
    """

    n1: int
    x1: int
    n2: int
    x2: int
    margin: float = 0.0
    alpha: float = 0.05
    method: MethodLike = Method.WALD
    hypothesis: HypothesisLike = Hypothesis.NON_INFERIORITY
    continuity: bool = False

    def validate(self) -> None:
        """Validate trial configuration."""
        arms = (("control", self.n1, self.x1), ("treatment", self.n2, self.x2))
        for arm, n, x in arms:
            if n <= 0:
                raise ValueError(
                    f"Sample size of the {arm} group must be positive, got {n}"
                )
            if not 0 <= x <= n:
                raise ValueError(
                    f"Successes of the {arm} group must be in [0, {n}], got {x}"
                )
        if self.alpha <= 0 or self.alpha >= 1:
            raise ValueError(f"Alpha must be in (0,1), got {self.alpha}")
        if self.margin < 0:
            raise ValueError(f"Margin must be non-negative, got {self.margin}")
        parse_method(self.method)
        parse_hypothesis(self.hypothesis)

    def sample(self) -> TwoPropSample:
        return TwoPropSample.from_counts(
            self.n1, self.x1, self.n2, self.x2, continuity=self.continuity
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TrialConfig":
        """Build a config from a mapping, ignoring unknown keys."""
        fields = cls.__dataclass_fields__
        return cls(**{k: v for k, v in data.items() if k in fields})


def validate_trial(
    config: TrialConfig,
    normal: Optional[NormalDistribution] = None,
    settings: SolverSettings = DEFAULT_SETTINGS,
) -> TwoPropResult:
    """
    Validate the configuration, then run the requested analysis.

    Raises
    ------
    ValueError
        If the configuration is invalid
    """
    config.validate()
    return validate_two_proportions(
        config.sample(),
        margin=config.margin,
        alpha=config.alpha,
        method=config.method,
        hypothesis=config.hypothesis,
        normal=normal,
        settings=settings,
    )


def non_inferiority_test(
    n1: int,
    x1: int,
    n2: int,
    x2: int,
    margin: float,
    alpha: float = 0.05,
    method: MethodLike = Method.WALD,
    continuity: bool = False,
) -> TwoPropResult:
    """
    Test whether the treatment is no worse than the control by more than `margin`.

    H0: p2 - p1 <= -margin against H1: p2 - p1 > -margin. Non-inferiority
    is established when the lower bound of the one-sided (1 - alpha)
    interval exceeds -margin.

    Parameters
    ----------
    n1, x1 : int
        Control group trials and successes
    n2, x2 : int
        Treatment group trials and successes
    margin : float
        Non-inferiority margin (positive)
    alpha : float, default=0.05
        One-sided significance level
    method : {"wald", "fm", "mn", "wilson"}, default="wald"
        Inference method
    continuity : bool, default=False
        Apply the (x + 0.5)/(n + 1) adjustment

    Returns
    -------
    TwoPropResult
    """
    return validate_trial(
        TrialConfig(
            n1=n1,
            x1=x1,
            n2=n2,
            x2=x2,
            margin=margin,
            alpha=alpha,
            method=method,
            hypothesis=Hypothesis.NON_INFERIORITY,
            continuity=continuity,
        )
    )


def superiority_test(
    n1: int,
    x1: int,
    n2: int,
    x2: int,
    alpha: float = 0.05,
    method: MethodLike = Method.WALD,
    continuity: bool = False,
) -> TwoPropResult:
    """
    Test whether the treatment rate exceeds the control rate.

    H0: p2 - p1 <= 0; superiority is established when the lower confidence
    bound exceeds 0.

    Examples
    --------
    >>> superiority_test(n1=200, x1=150, n2=200, x2=170).is_success
    True
    """
    return validate_trial(
        TrialConfig(
            n1=n1,
            x1=x1,
            n2=n2,
            x2=x2,
            alpha=alpha,
            method=method,
            hypothesis=Hypothesis.SUPERIORITY,
            continuity=continuity,
        )
    )


def equivalence_test(
    n1: int,
    x1: int,
    n2: int,
    x2: int,
    margin: float,
    alpha: float = 0.05,
    method: MethodLike = Method.WALD,
    continuity: bool = False,
) -> TwoPropResult:
    """
    Two one-sided tests (TOST) for |p2 - p1| < margin.

    The interval is two-sided at level 1 - alpha (critical value
    Φ⁻¹(1 - alpha/2)); equivalence is established when it lies strictly
    inside (-margin, +margin).
    """
    return validate_trial(
        TrialConfig(
            n1=n1,
            x1=x1,
            n2=n2,
            x2=x2,
            margin=margin,
            alpha=alpha,
            method=method,
            hypothesis=Hypothesis.EQUIVALENCE,
            continuity=continuity,
        )
    )


def compare_methods(
    n1: int,
    x1: int,
    n2: int,
    x2: int,
    margin: float = 0.0,
    alpha: float = 0.05,
    hypothesis: HypothesisLike = Hypothesis.NON_INFERIORITY,
    methods: Optional[Sequence[MethodLike]] = None,
    continuity: bool = False,
) -> List[TwoPropResult]:
    """
    Run the same analysis under several methods.

    Parameters
    ----------
    methods : sequence of str, optional
        Methods to run; all four when None

    Returns
    -------
    List[TwoPropResult]
        One result per method, in the order requested

    Examples
    --------
    >>> results = compare_methods(n1=100, x1=80, n2=100, x2=85, margin=0.10)
    >>> [r.method.value for r in results]
    ['wald', 'fm', 'mn', 'wilson']
    """
    if methods is None:
        methods = list(Method)
    return [
        validate_trial(
            TrialConfig(
                n1=n1,
                x1=x1,
                n2=n2,
                x2=x2,
                margin=margin,
                alpha=alpha,
                method=method,
                hypothesis=hypothesis,
                continuity=continuity,
            )
        )
        for method in methods
    ]


def results_to_records(results: Sequence[TwoPropResult]) -> List[Dict[str, Any]]:
    """Flatten results into plain dictionaries (e.g. for a DataFrame)."""
    return [r.to_record() for r in results]
