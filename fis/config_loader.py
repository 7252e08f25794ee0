"""
Builds an InferenceSystem from a TOML definition.

Expected layout::

    [operators]                 # optional, defaults to and=min, or=max, not=not
    and = "min"
    or = "max"

    [variables.service]
    poor = { shape = "tri", params = [0.0, 0.0, 5.0] }

    [[rules]]
    if = ["or", ["is", "service", "poor"], ["is", "food", "rancid"]]
    then = ["is", "tip", "cheap"]

    [controller]                # optional, read by FISController.from_config
    output = "tip"

Expressions are nested arrays: ``["is", variable, label]`` is a predicate,
any other head is an operator symbol applied to the remaining elements. A
single operand gives a unary node.
"""

import logging
import tomllib
from typing import Any, Dict, List

from fis.definition import (
    Expression,
    InferenceSystem,
    LinguisticVariable,
    NaryOp,
    Predicate,
    Rule,
    UnaryOp,
)
from fis.errors import DefinitionError
from fis.membership import MembershipFunction
from fis.operators import DEFAULT_BINDINGS

config_log = logging.getLogger("config")

PREDICATE_TAG = "is"


def load_config(path: str) -> dict:
    with open(path, "rb") as f:
        return tomllib.load(f)


def expression_from_data(data: Any) -> Expression:
    """Converts the nested-array form of an expression into its tree."""
    if not isinstance(data, (list, tuple)) or not data or not isinstance(data[0], str):
        raise DefinitionError(f"Malformed expression: {data!r}")

    head, args = data[0], list(data[1:])
    if head == PREDICATE_TAG:
        if len(args) != 2 or not all(isinstance(a, str) for a in args):
            raise DefinitionError(
                f"Predicate must be ['{PREDICATE_TAG}', variable, label], got {data!r}"
            )
        return Predicate(args[0], args[1])

    if not args:
        raise DefinitionError(f"Operator '{head}' has no operands: {data!r}")
    operands = [expression_from_data(a) for a in args]
    if len(operands) == 1:
        return UnaryOp(head, operands[0])
    return NaryOp(head, tuple(operands))


def _variables_from_data(section: Dict[str, Any]) -> List[LinguisticVariable]:
    variables = []
    for name, sets in section.items():
        if not isinstance(sets, dict):
            raise DefinitionError(f"Variable '{name}' must be a table of labeled sets")
        mfs = {}
        for label, spec in sets.items():
            try:
                mfs[label] = MembershipFunction(spec["shape"], spec["params"])
            except (KeyError, TypeError) as e:
                raise DefinitionError(
                    f"Set '{name}.{label}' needs 'shape' and 'params': {spec!r}"
                ) from e
        variables.append(LinguisticVariable(name, mfs))
    return variables


def _rules_from_data(entries: List[Dict[str, Any]]) -> List[Rule]:
    rules = []
    for i, entry in enumerate(entries):
        try:
            antecedent = expression_from_data(entry["if"])
            consequent = expression_from_data(entry["then"])
        except KeyError as e:
            raise DefinitionError(f"Rule #{i} is missing its '{e.args[0]}' part") from e
        rules.append(Rule(antecedent, consequent))
    return rules


def build_system(cfg: Dict[str, Any]) -> InferenceSystem:
    """
    Constructs an InferenceSystem from a parsed configuration dictionary.

    Raises:
        DefinitionError: If the data does not describe a valid system.
    """
    operators = dict(DEFAULT_BINDINGS)
    operators.update(cfg.get("operators", {}))

    system = InferenceSystem(
        variables={v.name: v for v in _variables_from_data(cfg.get("variables", {}))},
        rules=_rules_from_data(cfg.get("rules", [])),
        operators=operators,
    )
    config_log.info(
        "Inference system built with %d variables and %d rules.",
        len(system.variables),
        len(system.rules),
    )
    return system


def load_system(path: str) -> InferenceSystem:
    """Reads a TOML definition file and builds its InferenceSystem."""
    config_log.info("Loading inference system from %s", path)
    return build_system(load_config(path))
