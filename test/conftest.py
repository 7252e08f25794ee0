# test/conftest.py
import os

import matplotlib
import pytest

matplotlib.use("Agg")

from fis.definition import (  # noqa: E402
    InferenceSystem,
    LinguisticVariable,
    NaryOp,
    Predicate,
    Rule,
)
from fis.membership import MembershipFunction  # noqa: E402

CONFIG_DIR = os.path.join(os.path.dirname(__file__), "..", "config")
TIPPING_TOML = os.path.join(CONFIG_DIR, "tipping.toml")


def _mf(shape, *params):
    return MembershipFunction(shape, params)


@pytest.fixture
def tipping_system():
    """The tipping problem: service/food quality in [0, 10] -> tip in [0, 30]."""
    variables = [
        LinguisticVariable("service", {
            "poor": _mf("tri", 0.0, 0.0, 5.0),
            "good": _mf("tri", 0.0, 5.0, 10.0),
            "excellent": _mf("tri", 5.0, 10.0, 10.0),
        }),
        LinguisticVariable("food", {
            "rancid": _mf("trap", -2.0, 0.0, 1.0, 3.0),
            "delicious": _mf("trap", 7.0, 9.0, 10.0, 12.0),
        }),
        LinguisticVariable("tip", {
            "cheap": _mf("tri", 0.0, 5.0, 10.0),
            "average": _mf("tri", 10.0, 15.0, 20.0),
            "generous": _mf("tri", 20.0, 25.0, 30.0),
        }),
    ]
    rules = [
        Rule(
            NaryOp("or", (Predicate("service", "poor"), Predicate("food", "rancid"))),
            Predicate("tip", "cheap"),
        ),
        Rule(Predicate("service", "good"), Predicate("tip", "average")),
        Rule(
            NaryOp("or", (Predicate("service", "excellent"), Predicate("food", "delicious"))),
            Predicate("tip", "generous"),
        ),
    ]
    return InferenceSystem(
        variables=variables,
        rules=rules,
        operators={"and": "min", "or": "max", "not": "not"},
    )


@pytest.fixture
def tipping_inputs():
    return {"service": 2.0, "food": 5.0}


@pytest.fixture
def tipping_toml():
    return TIPPING_TOML
