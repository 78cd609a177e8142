"""
Operand Resolver: decides which operands a locale actually needs.

After every category of a locale has been compiled, the predicates are
walked to collect the names they reference. Only those operands (plus
what their derivation depends on) get a derivation step, and each
modulo variable is bound once, in first-seen order.

IMPORTANT: This is an analysis layer. It does NOT modify predicates.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Set, Tuple

from cplm.expressions import (
    Assignment,
    BinaryExpression,
    Expression,
    FunctionCall,
    VariableReference,
)
from cplm.operands import (
    ModuloVariable,
    Operand,
    derive_operands,
    resolve_live_operands,
)

_SYMBOLS = {op.symbol: op for op in Operand}


def _collect_names(expr: Expression | None, names: Set[str]) -> None:
    if isinstance(expr, BinaryExpression):
        _collect_names(expr.left, names)
        _collect_names(expr.right, names)

    elif isinstance(expr, FunctionCall):
        for argument in expr.arguments:
            _collect_names(argument, names)

    elif isinstance(expr, VariableReference):
        names.add(expr.name)

    # Literals don't reference variables


def referenced_names(predicates: Iterable[Expression | None]) -> Set[str]:
    """Names of every variable the predicates reference; None is skipped."""
    names: Set[str] = set()
    for predicate in predicates:
        _collect_names(predicate, names)
    return names


@dataclass(frozen=True)
class OperandResolution:
    """
    Outcome of resolving one locale.

    Properties:
        operands: Live operands, in Operand declaration order
        modulo_variables: Referenced modulo variables, first-seen order
        preamble: Derivation steps, operands first, then modulo variables
    """

    operands: Tuple[Operand, ...] = ()
    modulo_variables: Tuple[ModuloVariable, ...] = ()
    preamble: Tuple[Assignment, ...] = ()


def resolve_operands(
    predicates: Iterable[Expression | None],
    modulo_variables: Sequence[ModuloVariable],
) -> OperandResolution:
    """
    Compute the minimal derivation preamble for a set of predicates.

    Args:
        predicates: Every compiled condition of the locale (cardinal and
            ordinal); None entries are fallbacks and are ignored
        modulo_variables: Modulo variables registered while parsing, in
            first-seen order

    Returns:
        OperandResolution with the live operands and the preamble
    """
    names = referenced_names(predicates)

    used_modulo: List[ModuloVariable] = []
    for variable in modulo_variables:
        if variable.name in names and variable not in used_modulo:
            used_modulo.append(variable)

    referenced = {_SYMBOLS[name] for name in names if name in _SYMBOLS}
    # A modulo variable is computed from its base operand.
    referenced.update(variable.operand for variable in used_modulo)

    live = resolve_live_operands(frozenset(referenced))
    preamble = derive_operands(live) + tuple(v.derivation() for v in used_modulo)

    return OperandResolution(
        operands=tuple(op for op in Operand if op in live),
        modulo_variables=tuple(used_modulo),
        preamble=preamble,
    )


__all__ = [
    "OperandResolution",
    "referenced_names",
    "resolve_operands",
]
