"""
Fuzzy logical operators.

Rule definitions bind their operator symbols to names in ``OPERATORS`` rather
than to callables, so a definition stays plain data. Every operator takes its
operands positionally, in the order they appear in the rule.
"""

from typing import Callable, Dict

from fis.errors import DefinitionError


def complement(x: float) -> float:
    """Fuzzy NOT: ``1 - x``."""
    return 1.0 - x


def probor(x: float, *ys: float) -> float:
    """
    Probabilistic OR (algebraic sum).

    Folds ``a + b - a*b`` left to right over the arguments: the first two are
    combined, then the result with the third, and so on.
    """
    acc = float(x)
    for y in ys:
        acc = acc + y - acc * y
    return acc


def fuzzy_min(x: float, *ys: float) -> float:
    return min((x,) + ys)


def fuzzy_max(x: float, *ys: float) -> float:
    return max((x,) + ys)


def prod(x: float, *ys: float) -> float:
    """Algebraic product t-norm."""
    acc = float(x)
    for y in ys:
        acc *= y
    return acc


OPERATORS: Dict[str, Callable[..., float]] = {
    "min": fuzzy_min,
    "max": fuzzy_max,
    "not": complement,
    "probor": probor,
    "prod": prod,
}

# unary operators; everything else accepts one or more operands
UNARY = frozenset({"not"})

DEFAULT_BINDINGS: Dict[str, str] = {
    "and": "min",
    "or": "max",
    "not": "not",
}


def resolve_operator(name: str) -> Callable[..., float]:
    """Returns the library function registered under ``name``."""
    try:
        return OPERATORS[name]
    except KeyError:
        raise DefinitionError(
            f"Unknown operator '{name}'; expected one of {sorted(OPERATORS)}"
        ) from None
