"""
Static definition of a fuzzy inference system.

Linguistic variables, their labeled membership functions, the rule base and
the operator bindings are immutable values. An InferenceSystem cross-checks
every name its rules reference when it is built, so evaluation never meets a
structural surprise.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Tuple, Union

from fis.errors import DefinitionError, MissingInputError, NotFoundError
from fis.membership import MembershipFunction
from fis.operators import DEFAULT_BINDINGS, UNARY, resolve_operator


@dataclass(frozen=True)
class Predicate:
    """``variable IS label``."""

    variable: str
    label: str

    def __str__(self) -> str:
        return f"{self.variable} IS {self.label}"


@dataclass(frozen=True)
class UnaryOp:
    op: str
    operand: "Expression"

    def __str__(self) -> str:
        return f"{self.op.upper()} ({self.operand})"


@dataclass(frozen=True)
class NaryOp:
    op: str
    operands: Tuple["Expression", ...]

    def __post_init__(self):
        operands = tuple(self.operands)
        if not operands:
            raise DefinitionError(f"Operator '{self.op}' needs at least one operand")
        object.__setattr__(self, "operands", operands)

    def __str__(self) -> str:
        joiner = f" {self.op.upper()} "
        return "(" + joiner.join(str(o) for o in self.operands) + ")"


Expression = Union[Predicate, UnaryOp, NaryOp]


def iter_predicates(expression: Expression) -> Iterator[Predicate]:
    """Yields the predicate leaves of an expression, left to right."""
    if isinstance(expression, Predicate):
        yield expression
    elif isinstance(expression, UnaryOp):
        yield from iter_predicates(expression.operand)
    elif isinstance(expression, NaryOp):
        for operand in expression.operands:
            yield from iter_predicates(operand)
    else:
        raise DefinitionError(f"Not an expression: {expression!r}")


def iter_operator_nodes(expression: Expression) -> Iterator[Union[UnaryOp, NaryOp]]:
    """Yields the operator nodes of an expression, outermost first."""
    if isinstance(expression, UnaryOp):
        yield expression
        yield from iter_operator_nodes(expression.operand)
    elif isinstance(expression, NaryOp):
        yield expression
        for operand in expression.operands:
            yield from iter_operator_nodes(operand)


@dataclass(frozen=True)
class Rule:
    """IF ``antecedent`` THEN ``consequent``."""

    antecedent: Expression
    consequent: Predicate

    def __post_init__(self):
        if not isinstance(self.consequent, Predicate):
            raise DefinitionError(
                f"Rule consequent must be a single predicate, got {self.consequent!r}"
            )

    def __str__(self) -> str:
        return f"IF {self.antecedent} THEN {self.consequent}"


@dataclass(frozen=True)
class LinguisticVariable:
    """
    A named variable and its labeled fuzzy sets.

    Attributes:
        name (str): Variable name.
        sets (Mapping[str, MembershipFunction]): label -> membership function.
    """

    name: str
    sets: Mapping[str, MembershipFunction]

    def __post_init__(self):
        sets = dict(self.sets)
        for label, mf in sets.items():
            if not isinstance(mf, MembershipFunction):
                raise DefinitionError(
                    f"Set '{self.name}.{label}' is not a MembershipFunction: {mf!r}"
                )
        object.__setattr__(self, "sets", MappingProxyType(sets))

    def __getitem__(self, label: str) -> MembershipFunction:
        try:
            return self.sets[label]
        except KeyError:
            raise NotFoundError(
                f"Variable '{self.name}' has no label '{label}'"
            ) from None

    def breakpoints(self) -> Tuple[float, ...]:
        """Every numeric parameter of every labeled set."""
        return tuple(p for mf in self.sets.values() for p in mf.params)

    def bounds(self) -> Tuple[float, float]:
        """
        Structural domain of the variable: min and max over its breakpoints.

        Shapes with unbounded tails (gaussians, sigmoids) only contribute their
        explicit parameters.
        """
        points = self.breakpoints()
        if not points:
            raise DefinitionError(f"Variable '{self.name}' has no fuzzy sets")
        return min(points), max(points)


@dataclass(frozen=True)
class InferenceSystem:
    """
    Variables, rule base and operator bindings of one Mamdani system.

    Attributes:
        variables (Mapping[str, LinguisticVariable]): name -> variable.
        rules (Tuple[Rule, ...]): The rule base, in evaluation order.
        operators (Mapping[str, str]): Rule operator symbol -> name of an
            operator in ``fis.operators.OPERATORS``.
    """

    variables: Mapping[str, LinguisticVariable]
    rules: Tuple[Rule, ...]
    operators: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_BINDINGS))

    def __post_init__(self):
        variables = self.variables
        if not isinstance(variables, Mapping):
            variables = {v.name: v for v in variables}
        variables = dict(variables)
        for name, var in variables.items():
            if var.name != name:
                raise DefinitionError(
                    f"Variable registered as '{name}' is named '{var.name}'"
                )
        object.__setattr__(self, "variables", MappingProxyType(variables))
        object.__setattr__(self, "rules", tuple(self.rules))
        object.__setattr__(self, "operators", MappingProxyType(dict(self.operators)))
        self._validate()

    def _validate(self) -> None:
        for symbol, name in self.operators.items():
            try:
                resolve_operator(name)
            except DefinitionError as e:
                raise DefinitionError(f"Operator symbol '{symbol}': {e}") from None

        for i, rule in enumerate(self.rules):
            if not isinstance(rule, Rule):
                raise DefinitionError(f"Rule #{i} is not a Rule: {rule!r}")
            for pred in (*iter_predicates(rule.antecedent), rule.consequent):
                var = self.variables.get(pred.variable)
                if var is None:
                    raise DefinitionError(
                        f"Rule #{i} ({rule}) references unknown variable '{pred.variable}'"
                    )
                if pred.label not in var.sets:
                    raise DefinitionError(
                        f"Rule #{i} ({rule}) references unknown label "
                        f"'{pred.variable}.{pred.label}'"
                    )
            for node in iter_operator_nodes(rule.antecedent):
                name = self.operators.get(node.op)
                if name is None:
                    raise DefinitionError(
                        f"Rule #{i} ({rule}) uses unbound operator '{node.op}'"
                    )
                if name in UNARY and isinstance(node, NaryOp) and len(node.operands) != 1:
                    raise DefinitionError(
                        f"Rule #{i} ({rule}) applies unary operator '{node.op}' "
                        f"to {len(node.operands)} operands"
                    )

    def variable(self, name: str) -> LinguisticVariable:
        try:
            return self.variables[name]
        except KeyError:
            raise NotFoundError(f"Unknown variable '{name}'") from None

    def operator(self, symbol: str):
        """Returns the function bound to a rule operator symbol."""
        try:
            name = self.operators[symbol]
        except KeyError:
            raise NotFoundError(f"Unknown operator symbol '{symbol}'") from None
        return resolve_operator(name)

    def input_variables(self) -> Tuple[str, ...]:
        """Names referenced by any antecedent, in first-reference order."""
        names: Dict[str, None] = {}
        for rule in self.rules:
            for pred in iter_predicates(rule.antecedent):
                names.setdefault(pred.variable)
        return tuple(names)

    def output_variables(self) -> Tuple[str, ...]:
        """Names targeted by any consequent, in first-reference order."""
        names: Dict[str, None] = {}
        for rule in self.rules:
            names.setdefault(rule.consequent.variable)
        return tuple(names)


def validate_inputs(system: InferenceSystem, inputs: Mapping[str, float]) -> None:
    """
    Checks that ``inputs`` covers every variable the antecedents reference.

    Raises:
        MissingInputError: For the first uncovered variable.
    """
    for name in system.input_variables():
        if name not in inputs:
            raise MissingInputError(f"No input value supplied for variable '{name}'")
