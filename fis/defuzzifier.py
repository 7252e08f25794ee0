"""
Computes the crisp output from the aggregated fuzzy output set.

This module implements centroid (center of gravity) defuzzification by a
left Riemann sum over the structural domain of the output variable:

    y* = sum(mu(x) * x) / sum(mu(x)),  x = min_val, min_val + h, ... < max_val

The step is accumulated additively and the upper bound is excluded, so the
sum visits the same sample points in the same order on every run.
"""

import logging
from typing import Mapping, Tuple

from fis.definition import InferenceSystem
from fis.errors import EmptyFiringError
from fis.inference import infer_from_strengths
from fis.rule_engine import evaluate_rules

defuzzifier_log = logging.getLogger("defuzzifier")

STEP = 0.1


def domain_bounds(system: InferenceSystem, output_variable: str) -> Tuple[float, float]:
    """Min and max over every parameter of every set of ``output_variable``."""
    return system.variable(output_variable).bounds()


def defuzzify(
    system: InferenceSystem,
    inputs: Mapping[str, float],
    output_variable: str,
) -> float:
    """
    Calculates the centroid of the aggregated output set.

    Args:
        system (InferenceSystem): The inference system to evaluate.
        inputs (Mapping[str, float]): Crisp value per input variable.
        output_variable (str): Name of the output variable.

    Returns:
        float: The crisp output value.

    Raises:
        NotFoundError: If ``output_variable`` is not defined.
        MissingInputError: If an antecedent variable has no input value.
        EmptyFiringError: If the aggregated set is zero over the whole domain.
    """
    min_val, max_val = domain_bounds(system, output_variable)
    # rules are pure, evaluate them once for every probe point
    strengths = evaluate_rules(system, inputs)

    numerator = 0.0
    denominator = 0.0
    samples = 0
    x = min_val
    while x < max_val:
        mu = infer_from_strengths(system, strengths, output_variable, x)
        numerator += mu * x
        denominator += mu
        samples += 1
        x += STEP

    if denominator == 0:
        defuzzifier_log.warning(
            "No rule fires for '%s' over [%.3f, %.3f).", output_variable, min_val, max_val
        )
        raise EmptyFiringError(output_variable, (min_val, max_val))

    result = numerator / denominator
    defuzzifier_log.debug(
        "Defuzzified %s: %.4f (%d samples, area= %.4f)",
        output_variable,
        result,
        samples,
        denominator * STEP,
    )
    return result
