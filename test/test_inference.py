import pytest

from fis.fuzzifier import fuzzify
from fis.inference import infer, infer_from_strengths
from fis.rule_engine import evaluate_rules


@pytest.mark.parametrize(
    "x, expected",
    [
        (5.0, 0.6),    # cheap peak clipped at 0.6
        (2.5, 0.5),    # cheap ramp below the clip level
        (15.0, 0.4),   # average peak clipped at 0.4
        (25.0, 0.0),   # generous does not fire
        (40.0, 0.0),   # outside every set
    ],
)
def test_infer_min_implication_max_aggregation(tipping_system, tipping_inputs, x, expected):
    assert infer(tipping_system, tipping_inputs, "tip", x) == pytest.approx(expected)


def test_infer_matches_definition(tipping_system, tipping_inputs):
    strengths = evaluate_rules(tipping_system, tipping_inputs)
    for x in [0.0, 3.3, 5.0, 9.9, 12.0, 17.5, 22.0]:
        expected = max(
            min(w, fuzzify(tipping_system, "tip", c.label, x)) for c, w in strengths
        )
        assert infer(tipping_system, tipping_inputs, "tip", x) == pytest.approx(expected)


def test_infer_at_least_cheap_contribution(tipping_system, tipping_inputs):
    mu = infer(tipping_system, tipping_inputs, "tip", 5.0)
    assert mu >= min(0.6, fuzzify(tipping_system, "tip", "cheap", 5.0))


def test_variable_without_rules_is_zero(tipping_system, tipping_inputs):
    # no rule concludes on 'service'
    assert infer(tipping_system, tipping_inputs, "service", 2.0) == 0.0


def test_infer_from_strengths_filters_by_output(tipping_system, tipping_inputs):
    strengths = evaluate_rules(tipping_system, tipping_inputs)
    assert infer_from_strengths(tipping_system, strengths, "tip", 5.0) == pytest.approx(0.6)
    assert infer_from_strengths(tipping_system, strengths, "food", 5.0) == 0.0
    assert infer_from_strengths(tipping_system, [], "tip", 5.0) == 0.0
