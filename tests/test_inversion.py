import math

import pytest

from riskdiff.stats.methods.score_test.inversion import (
    ConfidenceInterval,
    ScoreIntervalInverter,
    invert_score_interval,
)

Z_975 = 1.959963984540054
Z_95 = 1.6448536269514722


@pytest.mark.parametrize(
    "x1,n1,x2,n2,z_critical",
    [
        (80, 100, 85, 100, Z_975),
        (80, 100, 85, 100, Z_95),
        (12, 40, 18, 50, Z_975),
        (45, 60, 30, 60, Z_975),
    ],
)
def test_bounds_reproduce_the_critical_value(x1, n1, x2, n2, z_critical):
    inverter = ScoreIntervalInverter()
    diff = x2 / n2 - x1 / n1
    ci = inverter.invert(x1, n1, x2, n2, z_critical)
    z_at = inverter.z_function(x1, n1, x2, n2, diff)
    assert z_at(ci.lower) == pytest.approx(z_critical, abs=1e-4)
    assert z_at(ci.upper) == pytest.approx(-z_critical, abs=1e-4)


def test_interval_brackets_observed_difference():
    ci = invert_score_interval(80, 100, 85, 100, Z_975)
    assert ci.lower < 0.05 < ci.upper
    assert ci.contains(0.05)
    assert ci.lower > -0.10


def test_larger_samples_narrow_the_interval():
    base = invert_score_interval(80, 100, 85, 100, Z_975)
    more_control = invert_score_interval(160, 200, 85, 100, Z_975)
    more_treatment = invert_score_interval(80, 100, 170, 200, Z_975)
    both = invert_score_interval(800, 1000, 850, 1000, Z_975)
    assert more_control.width < base.width
    assert more_treatment.width < base.width
    assert both.width < min(more_control.width, more_treatment.width)


def test_wider_confidence_gives_wider_interval():
    narrow = invert_score_interval(80, 100, 85, 100, Z_95)
    wide = invert_score_interval(80, 100, 85, 100, Z_975)
    assert wide.lower < narrow.lower
    assert wide.upper > narrow.upper


def test_observed_difference_can_be_supplied():
    inverter = ScoreIntervalInverter()
    default = inverter.invert(80, 100, 85, 100, Z_975)
    explicit = inverter.invert(80, 100, 85, 100, Z_975, observed_diff=0.05)
    assert explicit.lower == pytest.approx(default.lower, abs=1e-7)
    assert explicit.upper == pytest.approx(default.upper, abs=1e-7)


@pytest.mark.parametrize("z_critical", [math.inf, -math.inf, math.nan])
def test_non_finite_critical_value_gives_undefined_interval(z_critical):
    ci = invert_score_interval(80, 100, 85, 100, z_critical)
    assert math.isnan(ci.lower)
    assert math.isnan(ci.upper)


def test_bounds_stay_inside_search_limits():
    ci = invert_score_interval(1, 50, 49, 50, Z_975)
    assert -0.9999 <= ci.lower <= ci.upper <= 0.9999


def test_bound_saturates_at_search_limit_for_extreme_difference():
    worst = invert_score_interval(20, 20, 0, 20, Z_975)
    assert worst.lower == -0.9999
    assert -1.0 < worst.upper < 0.0
    best = invert_score_interval(0, 20, 20, 20, Z_975)
    assert best.upper == 0.9999
    assert 0.0 < best.lower < 1.0


def test_confidence_interval_helpers():
    ci = ConfidenceInterval(-0.05, 0.15)
    assert ci.width == pytest.approx(0.20)
    assert ci.contains(0.0)
    assert not ci.contains(0.2)
