"""Mamdani fuzzy inference: fuzzify -> evaluate rules -> infer -> defuzzify."""

from fis.definition import (
    InferenceSystem,
    LinguisticVariable,
    NaryOp,
    Predicate,
    Rule,
    UnaryOp,
    validate_inputs,
)
from fis.defuzzifier import defuzzify
from fis.errors import (
    DefinitionError,
    EmptyFiringError,
    FuzzyError,
    MissingInputError,
    NotFoundError,
)
from fis.fuzzifier import fuzzify
from fis.inference import infer
from fis.membership import MembershipFunction
from fis.rule_engine import evaluate_rules

__version__ = "0.1.0"
