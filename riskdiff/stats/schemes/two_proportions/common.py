"""
riskdiff.stats.schemes.two_proportions.common
=============================================

Data structures for two-proportion comparisons.

Group 1 is the control arm and group 2 the treatment arm; every difference
in this package is reported as p2 - p1.

Examples
--------
>>> sample = TwoPropSample.from_counts(n1=100, x1=80, n2=100, x2=85)
>>> round(sample.diff, 2)
0.05
>>> adjusted = TwoPropSample.from_counts(n1=100, x1=80, n2=100, x2=85, continuity=True)
>>> round(adjusted.p1, 6)
0.79703
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Mapping


# --- Data Classes ---


@dataclass(frozen=True)
class ProportionSample:
    """Successes out of trials for one arm."""

    successes: int
    trials: int

    def __post_init__(self) -> None:
        if self.trials <= 0:
            raise ValueError(f"trials must be positive, got {self.trials}")
        if not 0 <= self.successes <= self.trials:
            raise ValueError(
                f"successes must be in [0, {self.trials}], got {self.successes}"
            )

    @property
    def rate(self) -> float:
        return self.successes / self.trials

    def adjusted_rate(self, continuity: bool = False) -> float:
        """Observed rate, or (x + 0.5)/(n + 1) with the continuity adjustment."""
        if continuity:
            return (self.successes + 0.5) / (self.trials + 1)
        return self.rate


@dataclass(frozen=True)
class TwoPropSample:
    """
    Control and treatment counts for one comparison.

    Attributes:
        control: Group 1 counts
        treatment: Group 2 counts
        continuity: Report and use (x + 0.5)/(n + 1) rates on the Wald,
            Farrington-Manning and Wilson paths
    """

    control: ProportionSample
    treatment: ProportionSample
    continuity: bool = False

    @classmethod
    def from_counts(
        cls, n1: int, x1: int, n2: int, x2: int, continuity: bool = False
    ) -> "TwoPropSample":
        return cls(ProportionSample(x1, n1), ProportionSample(x2, n2), continuity)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TwoPropSample":
        """Build from a mapping with keys n1, x1, n2, x2 and optional continuity."""
        return cls.from_counts(
            n1=int(data["n1"]),
            x1=int(data["x1"]),
            n2=int(data["n2"]),
            x2=int(data["x2"]),
            continuity=bool(data.get("continuity", False)),
        )

    @property
    def x1(self) -> int:
        return self.control.successes

    @property
    def n1(self) -> int:
        return self.control.trials

    @property
    def x2(self) -> int:
        return self.treatment.successes

    @property
    def n2(self) -> int:
        return self.treatment.trials

    @property
    def p1(self) -> float:
        return self.control.adjusted_rate(self.continuity)

    @property
    def p2(self) -> float:
        return self.treatment.adjusted_rate(self.continuity)

    @property
    def diff(self) -> float:
        """Reported risk difference p2 - p1."""
        return self.p2 - self.p1

    @property
    def raw_diff(self) -> float:
        """Risk difference of the unadjusted rates."""
        return self.treatment.rate - self.control.rate

    def to_dict(self) -> Dict[str, Any]:
        return {
            "n1": self.n1,
            "x1": self.x1,
            "n2": self.n2,
            "x2": self.x2,
            "continuity": self.continuity,
        }
