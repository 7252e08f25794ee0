import pytest

from fis.errors import NotFoundError
from fis.fuzzifier import fuzzify, fuzzify_variable


def test_fuzzify_service_poor(tipping_system):
    # (5 - 2) / (5 - 0)
    assert fuzzify(tipping_system, "service", "poor", 2.0) == pytest.approx(0.6)


def test_fuzzify_outside_support(tipping_system):
    assert fuzzify(tipping_system, "food", "rancid", 5.0) == 0.0


def test_fuzzify_peak_activation(tipping_system):
    assert fuzzify(tipping_system, "service", "good", 5.0) == pytest.approx(1.0)
    assert fuzzify(tipping_system, "food", "delicious", 9.5) == pytest.approx(1.0)


def test_fuzzify_variable_returns_every_label(tipping_system):
    result = fuzzify_variable(tipping_system, "service", 2.0)
    assert set(result) == {"poor", "good", "excellent"}
    assert result["poor"] == pytest.approx(0.6)
    assert result["good"] == pytest.approx(0.4)
    assert result["excellent"] == 0.0


@pytest.mark.parametrize(
    "variable, label",
    [("ambience", "poor"), ("service", "mediocre")],
)
def test_fuzzify_unknown_names(tipping_system, variable, label):
    with pytest.raises(NotFoundError):
        fuzzify(tipping_system, variable, label, 1.0)


def test_fuzzify_invalid_input_name(tipping_system):
    with pytest.raises(KeyError):
        fuzzify_variable(tipping_system, "nonexistent_input", 0.0)
