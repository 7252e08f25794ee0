"""
Exception taxonomy for the fuzzy inference system.

Structural problems in a definition are reported while the InferenceSystem is
built; lookups that fail while evaluating raise NotFoundError. A centroid
with nothing to weigh raises EmptyFiringError so callers can pick a fallback.
"""


class FuzzyError(Exception):
    """Domain error for the fuzzy inference package."""


class DefinitionError(FuzzyError, ValueError):
    """Malformed definition data (shape, parameters, rules, bindings)."""


class NotFoundError(FuzzyError, KeyError):
    """Unknown variable, label or operator symbol."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable.
        return str(self.args[0]) if self.args else ""


class MissingInputError(NotFoundError):
    """A rule references an input variable that was not supplied."""


class EmptyFiringError(FuzzyError, ArithmeticError):
    """No rule fires anywhere in the sampled output domain."""

    def __init__(self, variable: str, bounds: tuple):
        self.variable = variable
        self.bounds = bounds
        super().__init__(
            f"No rule fires for '{variable}' over [{bounds[0]}, {bounds[1]})"
        )
