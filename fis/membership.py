"""
Membership function library.

Each shape is a pure function ``f(x, *params) -> degree`` returning a value in
[0, 1] for sensible parameters. Piecewise shapes test their breakpoints in
ascending order with strict comparisons, so a segment of zero width is never
divided by: it collapses onto the plateau on either side of it. When two
breakpoints coincide the peak value wins, e.g. ``tri(5, 0, 5, 5) == 1``.

``MembershipFunction`` binds a shape tag to its parameters and dispatches
through ``SHAPES``, which keeps a definition pure data.
"""

import math
from dataclasses import dataclass
from typing import Callable, Dict, Tuple

from fis.errors import DefinitionError


def _ratio(num: float, width: float, limit: float) -> float:
    """num / width, or ``limit`` for a zero-width segment."""
    if width == 0:
        return limit
    return num / width


# --- piecewise linear -------------------------------------------------------

def tri(x: float, a: float, b: float, c: float) -> float:
    """
    Triangular membership function.

    Args:
        x (float): The crisp value.
        a (float): Left foot.
        b (float): Peak.
        c (float): Right foot.

    Returns:
        float: 0 outside [a, c], 1 at b, linear in between.
    """
    if x < a:
        return 0.0
    if x < b:
        return _ratio(x - a, b - a, 1.0)
    if x == b:
        return 1.0
    if x < c:
        return _ratio(c - x, c - b, 1.0)
    return 0.0


def trap(x: float, a: float, b: float, c: float, d: float) -> float:
    """
    Trapezoidal membership function.

    Args:
        x (float): The crisp value.
        a, d (float): The feet (zero membership).
        b, c (float): The shoulders; membership is 1.0 over [b, c].

    Returns:
        float: Degree of membership. With b == c this is ``tri(x, a, b, d)``.
    """
    if x < a:
        return 0.0
    if x < b:
        return _ratio(x - a, b - a, 1.0)
    if x <= c:
        return 1.0
    if x < d:
        return _ratio(d - x, d - c, 1.0)
    return 0.0


def linz(x: float, a: float, b: float) -> float:
    """Linear z-shaped saturation: 1 below a, falling to 0 at b."""
    if x < a:
        return 1.0
    if x < b:
        return _ratio(b - x, b - a, 0.0)
    return 0.0


def lins(x: float, a: float, b: float) -> float:
    """Linear s-shaped saturation: 0 below a, rising to 1 at b."""
    if x < a:
        return 0.0
    if x < b:
        return _ratio(x - a, b - a, 1.0)
    return 1.0


# --- gaussian and bell ------------------------------------------------------

def gauss(x: float, s: float, c: float) -> float:
    """Gaussian with standard deviation ``s`` and mean ``c``."""
    if s == 0:
        return 1.0 if x == c else 0.0
    # scale before squaring: s * s underflows for tiny spreads
    d = (x - c) / s
    try:
        return math.exp(-0.5 * d * d)
    except OverflowError:
        return 0.0


def gauss2(x: float, s1: float, c1: float, s2: float, c2: float) -> float:
    """
    Two-sided gaussian: left tail ``gauss(s1, c1)``, plateau at 1 over
    [c1, c2], right tail ``gauss(s2, c2)``. With c1 > c2 the maximum stays
    below 1.
    """
    if x < c1:
        return gauss(x, s1, c1)
    if x <= c2:
        return 1.0
    return gauss(x, s2, c2)


def gbell(x: float, a: float, b: float, c: float) -> float:
    """Generalized bell: ``1 / (1 + |(x - c) / a| ** (2b))``."""
    if a == 0:
        return 1.0 if x == c else 0.0
    try:
        return 1.0 / (1.0 + abs((x - c) / a) ** (2.0 * b))
    except OverflowError:
        # far tail of a steep bell
        return 0.0
    except ZeroDivisionError:
        # b < 0 at the centre: the inverted bell bottoms out at 0
        return 0.0


# --- sigmoids ---------------------------------------------------------------

def sig(x: float, a: float, c: float) -> float:
    """Sigmoid ``1 / (1 + exp(-a (x - c)))``, open to the right for a > 0."""
    z = a * (x - c)
    if z >= 0:
        return 1.0 / (1.0 + math.exp(-z))
    e = math.exp(z)
    return e / (1.0 + e)


def dsig(x: float, a1: float, c1: float, a2: float, c2: float) -> float:
    """Difference of two sigmoids."""
    return sig(x, a1, c1) - sig(x, a2, c2)


def psig(x: float, a1: float, c1: float, a2: float, c2: float) -> float:
    """Product of two sigmoids."""
    return sig(x, a1, c1) * sig(x, a2, c2)


# --- quadratic splines ------------------------------------------------------

def z(x: float, a: float, b: float) -> float:
    """Z-shaped curve: shoulder at a, foot at b, symmetric about (a + b) / 2."""
    if x < a:
        return 1.0
    if x < (a + b) / 2.0:
        return 1.0 - 2.0 * _ratio(x - a, b - a, 0.0) ** 2
    if x < b:
        return 2.0 * _ratio(x - b, b - a, 0.0) ** 2
    return 0.0


def s(x: float, a: float, b: float) -> float:
    """S-shaped curve: foot at a, shoulder at b, symmetric about (a + b) / 2."""
    if x < a:
        return 0.0
    if x < (a + b) / 2.0:
        return 2.0 * _ratio(x - a, b - a, 0.0) ** 2
    if x < b:
        return 1.0 - 2.0 * _ratio(x - b, b - a, 0.0) ** 2
    return 1.0


def pi(x: float, a: float, b: float, c: float, d: float) -> float:
    """Pi-shaped curve: ``s`` rise over [a, b], 1 over [b, c], ``z`` fall over [c, d]."""
    if x < b:
        return s(x, a, b)
    if x <= c:
        return 1.0
    return z(x, c, d)


# tag -> (formula, number of parameters)
SHAPES: Dict[str, Tuple[Callable[..., float], int]] = {
    "tri": (tri, 3),
    "trap": (trap, 4),
    "linz": (linz, 2),
    "lins": (lins, 2),
    "gauss": (gauss, 2),
    "gauss2": (gauss2, 4),
    "gbell": (gbell, 3),
    "sig": (sig, 2),
    "dsig": (dsig, 4),
    "psig": (psig, 4),
    "z": (z, 2),
    "s": (s, 2),
    "pi": (pi, 4),
}


@dataclass(frozen=True)
class MembershipFunction:
    """
    A shape tag bound to its ordered parameters.

    Attributes:
        shape (str): One of the keys of ``SHAPES``.
        params (Tuple[float, ...]): Parameters in the order the formula expects.
    """

    shape: str
    params: Tuple[float, ...]

    def __post_init__(self):
        if self.shape not in SHAPES:
            raise DefinitionError(
                f"Unknown membership function shape '{self.shape}'"
            )
        try:
            params = tuple(float(p) for p in self.params)
        except (TypeError, ValueError) as e:
            raise DefinitionError(
                f"Non-numeric parameters for '{self.shape}': {self.params!r}"
            ) from e
        arity = SHAPES[self.shape][1]
        if len(params) != arity:
            raise DefinitionError(
                f"Shape '{self.shape}' takes {arity} parameters, got {len(params)}"
            )
        if not all(math.isfinite(p) for p in params):
            raise DefinitionError(
                f"Non-finite parameters for '{self.shape}': {params}"
            )
        object.__setattr__(self, "params", params)

    def __call__(self, x: float) -> float:
        formula = SHAPES[self.shape][0]
        return formula(float(x), *self.params)

    def __str__(self) -> str:
        return f"{self.shape}({', '.join(f'{p:g}' for p in self.params)})"
