"""
Fuzzifies crisp values against the labeled sets of an inference system.

This module looks up the membership function bound to a (variable, label)
pair and evaluates it at a crisp value, yielding a degree of membership.
"""

import logging
from typing import Dict

from fis.definition import InferenceSystem

fuzzifier_log = logging.getLogger("fuzzifier")


def fuzzify(system: InferenceSystem, variable: str, label: str, value: float) -> float:
    """
    Calculates the degree to which ``value`` belongs to ``variable IS label``.

    Args:
        system (InferenceSystem): The definition holding the fuzzy sets.
        variable (str): Name of the linguistic variable.
        label (str): Name of the fuzzy set within the variable.
        value (float): The crisp value to fuzzify.

    Returns:
        float: The degree of membership.

    Raises:
        NotFoundError: If the variable or the label does not exist.
    """
    mf = system.variable(variable)[label]
    return mf(value)


def fuzzify_variable(system: InferenceSystem, variable: str, value: float) -> Dict[str, float]:
    """
    Fuzzifies a crisp value against every set of a variable.

    Returns:
        Dict[str, float]: label -> degree, for all labels of the variable.
    """
    sets = system.variable(variable).sets
    degrees = {label: mf(value) for label, mf in sets.items()}

    fuzzifier_log.debug(
        "Fuzzified %s= %.3f -> %s",
        variable,
        value,
        {k: f"{v:.3f}" for k, v in degrees.items()},
    )
    return degrees
