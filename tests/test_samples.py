import pytest

from riskdiff.stats.schemes.two_proportions.common import (
    ProportionSample,
    TwoPropSample,
)


def test_proportion_sample_rates():
    arm = ProportionSample(successes=80, trials=100)
    assert arm.rate == 0.8
    assert arm.adjusted_rate() == 0.8
    assert arm.adjusted_rate(continuity=True) == pytest.approx(80.5 / 101)


@pytest.mark.parametrize("successes,trials", [(1, 0), (-1, 10), (11, 10)])
def test_proportion_sample_rejects_impossible_counts(successes, trials):
    with pytest.raises(ValueError):
        ProportionSample(successes, trials)


def test_two_prop_sample_from_counts():
    sample = TwoPropSample.from_counts(n1=100, x1=80, n2=100, x2=85)
    assert (sample.n1, sample.x1, sample.n2, sample.x2) == (100, 80, 100, 85)
    assert sample.p1 == 0.8
    assert sample.p2 == 0.85
    assert sample.diff == pytest.approx(0.05)


def test_continuity_changes_reported_rates_only():
    sample = TwoPropSample.from_counts(n1=40, x1=10, n2=60, x2=30, continuity=True)
    assert sample.p1 == pytest.approx(10.5 / 41)
    assert sample.p2 == pytest.approx(30.5 / 61)
    assert sample.raw_diff == pytest.approx(0.5 - 0.25)
    assert sample.diff != pytest.approx(sample.raw_diff)


def test_dict_round_trip():
    data = {"n1": 50, "x1": 25, "n2": 50, "x2": 30, "continuity": True}
    sample = TwoPropSample.from_dict(data)
    assert sample.to_dict() == data
    assert TwoPropSample.from_dict({"n1": 5, "x1": 1, "n2": 5, "x2": 2}).continuity is False
