"""
Evaluates the fuzzy rule base to determine rule firing strengths.

Each rule antecedent is an expression tree of predicates joined by operator
nodes. Predicates are fuzzified against the crisp inputs; operator nodes
evaluate all of their operands first and then apply the function bound to
their symbol, keeping the operands in rule order. The result for every rule
is its consequent paired with a firing strength.
"""

import logging
from typing import List, Mapping, Tuple

from fis.definition import (
    Expression,
    InferenceSystem,
    NaryOp,
    Predicate,
    UnaryOp,
)
from fis.errors import DefinitionError, MissingInputError
from fis.fuzzifier import fuzzify

rule_engine_log = logging.getLogger("rule_engine")


def evaluate_expression(
    system: InferenceSystem,
    expression: Expression,
    inputs: Mapping[str, float],
) -> float:
    """
    Recursively evaluates an antecedent expression to a single degree.

    Args:
        system (InferenceSystem): The definition holding sets and operators.
        expression (Expression): Predicate, UnaryOp or NaryOp tree.
        inputs (Mapping[str, float]): Crisp value per input variable.

    Returns:
        float: The degree to which the expression holds.

    Raises:
        MissingInputError: If a predicate's variable has no input value.
        NotFoundError: If a variable, label or operator symbol is unknown.
    """
    if isinstance(expression, Predicate):
        if expression.variable not in inputs:
            raise MissingInputError(
                f"No input value supplied for variable '{expression.variable}'"
            )
        return fuzzify(
            system, expression.variable, expression.label, inputs[expression.variable]
        )

    if isinstance(expression, UnaryOp):
        operands = [evaluate_expression(system, expression.operand, inputs)]
    elif isinstance(expression, NaryOp):
        operands = [evaluate_expression(system, o, inputs) for o in expression.operands]
    else:
        raise DefinitionError(f"Not an expression: {expression!r}")

    return system.operator(expression.op)(*operands)


def evaluate_rules(
    system: InferenceSystem, inputs: Mapping[str, float]
) -> List[Tuple[Predicate, float]]:
    """
    Evaluates all rules in the rule base.

    Returns:
        List[Tuple[Predicate, float]]: One (consequent, firing strength) pair
        per rule, in rule-base order. Rules that do not fire are kept with a
        strength of 0.
    """
    strengths = []
    for i, rule in enumerate(system.rules):
        w = evaluate_expression(system, rule.antecedent, inputs)
        strengths.append((rule.consequent, w))
        rule_engine_log.debug("Rule# %d %s W= %.3f", i, rule, w)

    rule_engine_log.debug(
        "%d of %d rules fired", sum(1 for _, w in strengths if w > 0), len(strengths)
    )
    return strengths
