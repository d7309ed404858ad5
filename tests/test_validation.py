import math

import pytest
from scipy.stats import norm

from riskdiff.core.names import Hypothesis, Method
from riskdiff.stats.common.normal import NormalDistribution, get_normal
from riskdiff.stats.methods.score_test import (
    FarringtonManningSolver,
    MiettinenNurminenSolver,
)
from riskdiff.stats.schemes.two_proportions import (
    ESTIMATORS,
    MiettinenNurminenEstimator,
    TwoPropSample,
    get_estimator,
    validate_two_proportions,
)

METHODS = ["wald", "fm", "mn", "wilson"]
HYPOTHESES = ["non_inferiority", "superiority", "equivalence"]


def sample(n1, x1, n2, x2, continuity=False):
    return TwoPropSample.from_counts(n1=n1, x1=x1, n2=n2, x2=x2, continuity=continuity)


@pytest.mark.parametrize("method", METHODS)
@pytest.mark.parametrize("hypothesis", HYPOTHESES)
def test_every_combination_is_defined(method, hypothesis):
    res = validate_two_proportions(
        sample(100, 80, 100, 85), margin=0.10, alpha=0.05, method=method, hypothesis=hypothesis
    )
    assert res.method is Method(method)
    assert res.hypothesis is Hypothesis(hypothesis)
    assert res.is_defined
    assert res.ci_lower < res.diff < res.ci_upper
    assert 0.0 <= res.p_value <= 1.0
    assert math.isfinite(res.test_statistic)
    assert set(res.to_dict()) >= {
        "p1",
        "p2",
        "diff",
        "ci_lower",
        "ci_upper",
        "p_value",
        "test_statistic",
        "is_success",
    }


def test_mn_non_inferiority_scenario():
    res = validate_two_proportions(
        sample(100, 80, 100, 85), margin=0.10, alpha=0.025, method="mn"
    )
    assert res.test_statistic > 0
    assert res.ci_lower > -0.10
    assert res.is_success
    assert res.to_dict()["is_non_inferior"] is True
    assert res.z_critical == pytest.approx(1.959964, abs=1e-6)


@pytest.mark.parametrize("method", METHODS)
def test_non_inferiority_established(method):
    res = validate_two_proportions(sample(100, 80, 100, 85), margin=0.10, method=method)
    assert res.is_success
    assert res.ci_lower > -0.10


@pytest.mark.parametrize("method", METHODS)
def test_non_inferiority_rejected_for_tight_margin(method):
    res = validate_two_proportions(sample(100, 80, 100, 85), margin=0.01, method=method)
    assert not res.is_success


@pytest.mark.parametrize("method", METHODS)
def test_superiority(method):
    clear = validate_two_proportions(
        sample(200, 150, 200, 170), margin=0.0, method=method, hypothesis="superiority"
    )
    assert clear.is_success
    assert clear.ci_lower > 0
    unclear = validate_two_proportions(
        sample(100, 80, 100, 85), margin=0.0, method=method, hypothesis="superiority"
    )
    assert not unclear.is_success
    assert "is_non_inferior" not in unclear.to_dict()


@pytest.mark.parametrize("method", METHODS)
def test_equivalence_established_with_large_samples(method):
    res = validate_two_proportions(
        sample(500, 250, 500, 250), margin=0.15, method=method, hypothesis="equivalence"
    )
    assert res.is_success
    assert -0.15 < res.ci_lower < res.ci_upper < 0.15
    assert res.p_value < 0.05
    assert res.test_statistic > 0
    assert res.lower_test == pytest.approx(-res.upper_test, rel=1e-6)


@pytest.mark.parametrize("method", ["wald", "mn"])
def test_equivalence_equal_rates_small_samples(method):
    # At n=50 per arm the two-sided 95% interval (about ±0.196) is wider than
    # the margin, so equivalence is not established even though both one-sided
    # p-values are small.
    res = validate_two_proportions(
        sample(50, 25, 50, 25), margin=0.15, method=method, hypothesis="equivalence"
    )
    assert res.diff == 0.0
    assert res.p_value < 0.1
    assert res.lower_test == pytest.approx(-res.upper_test, rel=1e-6)
    assert not res.is_success


@pytest.mark.parametrize("method", METHODS)
def test_equivalence_equal_rates_small_samples_at_wider_alpha(method):
    # alpha/2 = 0.10 exceeds the one-sided p-value of about 0.066, so the
    # two-sided 80% interval (about ±0.128) falls inside the margin.
    res = validate_two_proportions(
        sample(50, 25, 50, 25), margin=0.15, alpha=0.20, method=method, hypothesis="equivalence"
    )
    assert res.z_critical == pytest.approx(norm.ppf(0.90))
    assert -0.15 < res.ci_lower < 0.0 < res.ci_upper < 0.15
    assert res.is_success


@pytest.mark.parametrize("solver", [FarringtonManningSolver(), MiettinenNurminenSolver()])
def test_equal_rates_restricted_mle_at_zero(solver):
    mle = solver.solve(25, 50, 25, 50, 0.0)
    assert mle.p1_star == pytest.approx(0.5, abs=1e-9)
    assert mle.p2_star == pytest.approx(0.5, abs=1e-9)


def test_equivalence_uses_two_sided_critical_value():
    res = validate_two_proportions(
        sample(100, 80, 100, 85), margin=0.10, alpha=0.10, hypothesis="equivalence"
    )
    assert res.z_critical == pytest.approx(norm.ppf(0.95))


def test_wald_tost_p_value_and_statistic():
    res = validate_two_proportions(
        sample(100, 80, 100, 85), margin=0.10, method="wald", hypothesis="equivalence"
    )
    se = math.sqrt(0.8 * 0.2 / 100 + 0.85 * 0.15 / 100)
    z_lower = (res.diff + 0.10) / se
    z_upper = (res.diff - 0.10) / se
    assert res.lower_test == pytest.approx(z_lower)
    assert res.upper_test == pytest.approx(z_upper)
    assert res.p_value == pytest.approx(max(norm.sf(z_lower), norm.cdf(z_upper)))
    assert res.test_statistic == pytest.approx(min(z_lower, -z_upper))
    assert res.se == pytest.approx(se)


def test_equivalence_with_zero_margin_never_succeeds():
    res = validate_two_proportions(
        sample(1000, 500, 1000, 500), margin=0.0, method="mn", hypothesis="equivalence"
    )
    assert not res.is_success


@pytest.mark.parametrize("alpha", [0.0, 1.0, -0.1, 1.5, float("nan")])
@pytest.mark.parametrize("hypothesis", HYPOTHESES)
def test_alpha_outside_unit_interval_is_undefined(alpha, hypothesis):
    res = validate_two_proportions(
        sample(100, 80, 100, 85), margin=0.10, alpha=alpha, method="mn", hypothesis=hypothesis
    )
    assert not res.is_success
    assert not res.is_defined
    for value in (res.p1, res.diff, res.ci_lower, res.ci_upper, res.p_value, res.test_statistic):
        assert math.isnan(value)


def test_zero_variance_wald_is_undefined():
    res = validate_two_proportions(sample(50, 0, 50, 0), margin=0.10, method="wald")
    assert math.isnan(res.ci_lower)
    assert math.isnan(res.test_statistic)
    assert not res.is_success


def test_fm_shares_the_wald_interval_but_not_the_statistic():
    wald = validate_two_proportions(sample(100, 80, 100, 85), margin=0.10, method="wald")
    fm = validate_two_proportions(sample(100, 80, 100, 85), margin=0.10, method="fm")
    assert fm.ci_lower == wald.ci_lower
    assert fm.ci_upper == wald.ci_upper
    assert fm.test_statistic != pytest.approx(wald.test_statistic)


def test_wilson_keeps_the_wald_statistic():
    wald = validate_two_proportions(sample(100, 80, 100, 85), margin=0.10, method="wald")
    wilson = validate_two_proportions(sample(100, 80, 100, 85), margin=0.10, method="wilson")
    assert wilson.test_statistic == wald.test_statistic
    assert wilson.ci_lower != pytest.approx(wald.ci_lower)


def test_continuity_adjustment():
    plain = validate_two_proportions(sample(100, 80, 100, 85), margin=0.10, method="wald")
    adjusted = validate_two_proportions(
        sample(100, 80, 100, 85, continuity=True), margin=0.10, method="wald"
    )
    assert adjusted.p1 == pytest.approx(80.5 / 101)
    assert adjusted.p2 == pytest.approx(85.5 / 101)
    assert adjusted.ci_lower != pytest.approx(plain.ci_lower)


def test_mn_ignores_continuity_adjustment():
    plain = validate_two_proportions(sample(100, 80, 100, 85), margin=0.10, method="mn")
    adjusted = validate_two_proportions(
        sample(100, 80, 100, 85, continuity=True), margin=0.10, method="mn"
    )
    assert adjusted.ci_lower == plain.ci_lower
    assert adjusted.ci_upper == plain.ci_upper
    assert adjusted.test_statistic == plain.test_statistic
    assert adjusted.p1 != plain.p1


def test_selector_aliases():
    res = validate_two_proportions(
        sample(100, 80, 100, 85), margin=0.10, method="Miettinen-Nurminen", hypothesis="ni"
    )
    assert res.method is Method.MN
    assert res.hypothesis is Hypothesis.NON_INFERIORITY


def test_unknown_selectors_raise():
    with pytest.raises(ValueError, match="Unknown method"):
        validate_two_proportions(sample(100, 80, 100, 85), margin=0.1, method="exact")
    with pytest.raises(ValueError, match="Unknown hypothesis"):
        validate_two_proportions(sample(100, 80, 100, 85), margin=0.1, hypothesis="futility")


def test_injected_normal_leaves_default_cache_untouched():
    custom = NormalDistribution()
    validate_two_proportions(sample(100, 80, 100, 85), margin=0.10, normal=custom)
    assert custom.cache_info().misses >= 1
    assert get_normal().cache_info().currsize == 0


def test_estimator_registry():
    assert set(ESTIMATORS) == set(Method)
    assert isinstance(get_estimator("mn"), MiettinenNurminenEstimator)


def test_result_record():
    res = validate_two_proportions(sample(100, 80, 100, 85), margin=0.10, method="fm")
    record = res.to_record()
    assert record["method"] == "fm"
    assert record["hypothesis"] == "non_inferiority"
    assert record["margin"] == 0.10


def test_dispatch_is_logged(debug_logs):
    validate_two_proportions(sample(100, 80, 100, 85), margin=0.10, method="mn")
    events = [e for e in debug_logs if e["event"] == "two_proportions_validated"]
    assert len(events) == 1
    assert events[0]["method"] == "mn"
    assert events[0]["hypothesis"] == "non_inferiority"
    assert events[0]["is_success"] is True
