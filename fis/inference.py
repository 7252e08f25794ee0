"""
Mamdani implication and aggregation.

Each rule targeting an output variable clips its consequent set at the rule's
firing strength (min implication); the clipped sets are combined with max
(aggregation). The aggregated set is never materialized: its degree is
recomputed at each probe value.
"""

import logging
from typing import Mapping, Sequence, Tuple

from fis.definition import InferenceSystem, Predicate
from fis.fuzzifier import fuzzify
from fis.rule_engine import evaluate_rules

inference_log = logging.getLogger("inference")


def infer_from_strengths(
    system: InferenceSystem,
    strengths: Sequence[Tuple[Predicate, float]],
    output_variable: str,
    x: float,
) -> float:
    """
    Aggregated output degree at ``x`` from already evaluated rules.

    Args:
        system (InferenceSystem): The definition holding the output sets.
        strengths: (consequent, firing strength) pairs from ``evaluate_rules``.
        output_variable (str): Name of the output variable.
        x (float): Probe value in the output domain.

    Returns:
        float: max over matching rules of min(strength, consequent(x)); 0.0
        when no rule targets the variable.
    """
    degree = 0.0
    for consequent, w in strengths:
        if consequent.variable != output_variable:
            continue
        clipped = min(w, fuzzify(system, output_variable, consequent.label, x))
        degree = max(degree, clipped)
    return degree


def infer(
    system: InferenceSystem,
    inputs: Mapping[str, float],
    output_variable: str,
    x: float,
) -> float:
    """
    Evaluates the rule base and returns the aggregated degree of
    ``output_variable`` at the probe value ``x``.
    """
    strengths = evaluate_rules(system, inputs)
    degree = infer_from_strengths(system, strengths, output_variable, x)
    inference_log.debug("mu_%s(%.3f)= %.4f", output_variable, x, degree)
    return degree
