import pytest

import riskdiff
from riskdiff.api import (
    TrialConfig,
    compare_methods,
    equivalence_test,
    non_inferiority_test,
    results_to_records,
    superiority_test,
    validate_trial,
)
from riskdiff.core.names import Hypothesis, Method


def test_non_inferiority_facade():
    res = non_inferiority_test(n1=100, x1=80, n2=100, x2=85, margin=0.10, method="mn")
    assert res.hypothesis is Hypothesis.NON_INFERIORITY
    assert res.to_dict()["is_non_inferior"]


def test_superiority_facade():
    res = superiority_test(n1=200, x1=150, n2=200, x2=170, method="fm")
    assert res.hypothesis is Hypothesis.SUPERIORITY
    assert res.is_success


def test_equivalence_facade():
    res = equivalence_test(n1=500, x1=250, n2=500, x2=250, margin=0.15, method="wilson")
    assert res.hypothesis is Hypothesis.EQUIVALENCE
    assert res.is_success


def test_continuity_is_forwarded():
    res = non_inferiority_test(
        n1=100, x1=80, n2=100, x2=85, margin=0.10, continuity=True
    )
    assert res.p1 == pytest.approx(80.5 / 101)


@pytest.mark.parametrize(
    "overrides,message",
    [
        ({"n1": 0}, "Sample size of the control group"),
        ({"x2": 101}, "Successes of the treatment group"),
        ({"x1": -1}, "Successes of the control group"),
        ({"alpha": 0.0}, "Alpha must be in"),
        ({"alpha": 1.0}, "Alpha must be in"),
        ({"margin": -0.05}, "Margin must be non-negative"),
        ({"method": "bayes"}, "Unknown method"),
        ({"hypothesis": "futility"}, "Unknown hypothesis"),
    ],
)
def test_trial_config_validation(overrides, message):
    params = dict(n1=100, x1=80, n2=100, x2=85, margin=0.10)
    params.update(overrides)
    with pytest.raises(ValueError, match=message):
        TrialConfig(**params).validate()


def test_validate_trial_rejects_invalid_config():
    with pytest.raises(ValueError):
        validate_trial(TrialConfig(n1=100, x1=80, n2=100, x2=85, alpha=0.0))


def test_trial_config_from_dict():
    cfg = TrialConfig.from_dict(
        {"n1": 100, "x1": 80, "n2": 100, "x2": 85, "margin": 0.1, "method": "mn", "note": "x"}
    )
    cfg.validate()
    assert cfg.method == "mn"
    res = validate_trial(cfg)
    assert res.method is Method.MN


def test_compare_methods_default_order():
    results = compare_methods(n1=100, x1=80, n2=100, x2=85, margin=0.10)
    assert [r.method for r in results] == list(Method)
    assert all(r.is_success for r in results)


def test_compare_methods_subset():
    results = compare_methods(
        n1=500,
        x1=250,
        n2=500,
        x2=250,
        margin=0.15,
        hypothesis="equivalence",
        methods=["mn", "wald"],
    )
    assert [r.method for r in results] == [Method.MN, Method.WALD]


def test_results_to_records():
    records = results_to_records(compare_methods(n1=100, x1=80, n2=100, x2=85, margin=0.1))
    assert [r["method"] for r in records] == ["wald", "fm", "mn", "wilson"]


def test_package_exports():
    assert riskdiff.non_inferiority_test is non_inferiority_test
    assert riskdiff.Method is Method
    assert isinstance(riskdiff.__version__, str)
