# test/test_rule_engine.py
import pytest

from fis.definition import InferenceSystem, NaryOp, Predicate, Rule, UnaryOp
from fis.errors import MissingInputError, NotFoundError
from fis.operators import OPERATORS
from fis.rule_engine import evaluate_expression, evaluate_rules


def test_predicate_leaf(tipping_system, tipping_inputs):
    w = evaluate_expression(tipping_system, Predicate("service", "poor"), tipping_inputs)
    assert w == pytest.approx(0.6)


def test_or_rule_firing_strength(tipping_system, tipping_inputs):
    # max(poor=0.6, rancid=0.0)
    w = evaluate_expression(tipping_system, tipping_system.rules[0].antecedent, tipping_inputs)
    assert w == pytest.approx(0.6)


def test_all_rules_in_order(tipping_system, tipping_inputs):
    outputs = evaluate_rules(tipping_system, tipping_inputs)
    assert [(c.variable, c.label) for c, _ in outputs] == [
        ("tip", "cheap"),
        ("tip", "average"),
        ("tip", "generous"),
    ]
    strengths = [w for _, w in outputs]
    assert strengths == pytest.approx([0.6, 0.4, 0.0])


@pytest.mark.parametrize(
    "service, food, expected",
    [
        (2.0, 5.0, 0.6),   # service dominates
        (8.0, 0.5, 1.0),   # food dominates
        (8.0, 5.0, 0.0),   # neither
    ],
)
def test_or_is_max_of_memberships(tipping_system, service, food, expected):
    outputs = evaluate_rules(tipping_system, {"service": service, "food": food})
    _, w = outputs[0]
    assert w == pytest.approx(expected, abs=1e-12)


def test_nested_operators(tipping_system):
    inputs = {"service": 2.0, "food": 8.0}
    # not(poor)=0.4, delicious=0.5 -> min=0.4
    expr = NaryOp("and", (
        UnaryOp("not", Predicate("service", "poor")),
        Predicate("food", "delicious"),
    ))
    assert evaluate_expression(tipping_system, expr, inputs) == pytest.approx(0.4)


def test_operands_keep_rule_order(tipping_system, monkeypatch):
    calls = []

    def record(*values):
        calls.append(values)
        return values[0]

    monkeypatch.setitem(OPERATORS, "record", record)
    system = InferenceSystem(
        tipping_system.variables,
        [Rule(
            NaryOp("first", (Predicate("food", "rancid"), Predicate("service", "poor"))),
            Predicate("tip", "cheap"),
        )],
        operators={"first": "record"},
    )

    w = evaluate_expression(system, system.rules[0].antecedent, {"service": 2.0, "food": 2.0})
    # rancid(2.0) = 0.5, poor(2.0) = 0.6
    assert calls == [(0.5, 0.6)]
    assert w == pytest.approx(0.5)


def test_probor_binding(tipping_system):
    system = InferenceSystem(
        tipping_system.variables,
        tipping_system.rules,
        operators={"or": "probor", "and": "min", "not": "not"},
    )
    outputs = evaluate_rules(system, {"service": 2.0, "food": 2.0})
    # 0.6 + 0.5 - 0.6 * 0.5
    assert outputs[0][1] == pytest.approx(0.8)


def test_missing_input(tipping_system):
    with pytest.raises(MissingInputError):
        evaluate_rules(tipping_system, {"service": 2.0})


def test_missing_input_is_not_found(tipping_system):
    with pytest.raises(NotFoundError):
        evaluate_expression(tipping_system, Predicate("food", "rancid"), {})


def test_unknown_label_in_ad_hoc_expression(tipping_system, tipping_inputs):
    with pytest.raises(NotFoundError):
        evaluate_expression(tipping_system, Predicate("service", "slow"), tipping_inputs)


def test_unknown_operator_in_ad_hoc_expression(tipping_system, tipping_inputs):
    expr = NaryOp("xor", (Predicate("service", "poor"), Predicate("food", "rancid")))
    with pytest.raises(NotFoundError):
        evaluate_expression(tipping_system, expr, tipping_inputs)


def test_zero_strength_rules_are_reported(tipping_system):
    outputs = evaluate_rules(tipping_system, {"service": -50.0, "food": 50.0})
    assert len(outputs) == len(tipping_system.rules)
    assert all(w == 0.0 for _, w in outputs)
