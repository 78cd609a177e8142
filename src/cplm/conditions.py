"""
Condition Compiler for CPLM (Layer 2: LogicOps → predicate AST).

Turns the flat LogicOp sequence of a relation into one boolean predicate,
reproducing CLDR precedence: "and" binds tighter than "or".

    a or b and c     →  a || (b && c)
    a and b or c     →  (a && b) || c

Each comparison first expands into fragments, one per right-hand value:

    i = 2          →  i == 2
    i != 2         →  i != 2
    i = 2..4       →  i >= 2 && i <= 4
    i != 2..4      →  (i < 2 || i > 4)
    n = 2..4       →  p && n >= 2 && n <= 4

The "p &&" guard makes a range over n (or n % m) match integer values
only. It is only added under "=": "n != 2..4" stays a plain exclusion.

Fragments are kept as Clauses (a conjunction plus a guard flag) until the
very end, so that merging two guarded conjunctions yields one leading p.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from cplm.expressions import (
    BinaryExpression,
    BinaryOperator,
    Expression,
    Literal,
    VariableReference,
    conjunction,
    disjunction,
)
from cplm.operands import Operand
from cplm.relation_parser import (
    Comparator,
    Connector,
    IntRange,
    LogicOp,
    ParsedRelation,
)

GUARD = VariableReference(Operand.P.symbol)


@dataclass
class Clause:
    """
    A conjunction of terms, optionally guarded by p.

    The guard is held apart from the terms so it can be hoisted to the
    front when clauses are ANDed together.
    """

    terms: List[Expression] = field(default_factory=list)
    guarded: bool = False

    def to_expression(self) -> Expression:
        terms = ([GUARD] if self.guarded else []) + self.terms
        return conjunction(*terms)


def _compare(operator: BinaryOperator, name: str, value: int) -> Expression:
    return BinaryExpression(operator, VariableReference(name), Literal(value))


def range_condition(name: str, bounds: IntRange, comparator: Comparator) -> List[Expression]:
    """
    Compile lo..hi against a variable.

    Returns:
        Conjunction terms: two bounds under EQUALS, one exclusion under
        NOT_EQUALS
    """
    if comparator == Comparator.NOT_EQUALS:
        return [disjunction(
            _compare(BinaryOperator.LESS_THAN, name, bounds.lower),
            _compare(BinaryOperator.GREATER_THAN, name, bounds.upper),
        )]
    return [
        _compare(BinaryOperator.GREATER_EQUAL, name, bounds.lower),
        _compare(BinaryOperator.LESS_EQUAL, name, bounds.upper),
    ]


def op_conditions(op: LogicOp) -> List[Clause]:
    """Expand one LogicOp into a clause per right-hand value."""
    condition = op.condition
    name = condition.left_name
    operator = (
        BinaryOperator.EQUALS
        if condition.comparator == Comparator.EQUALS
        else BinaryOperator.NOT_EQUALS
    )

    result = []
    for value in condition.values:
        if isinstance(value, IntRange):
            guarded = (
                condition.base_operand is Operand.N
                and condition.comparator == Comparator.EQUALS
            )
            result.append(Clause(range_condition(name, value, condition.comparator), guarded))
        else:
            result.append(Clause([_compare(operator, name, value)]))
    return result


def join_and(clauses: List[Clause]) -> Clause:
    """AND clauses together, keeping at most one leading guard."""
    terms: List[Expression] = []
    for clause in clauses:
        terms.extend(clause.terms)
    return Clause(terms, any(c.guarded for c in clauses))


def join_or(clauses: List[Clause]) -> Clause:
    """
    OR clauses into a single parenthesized term.

    A lone clause is returned as is so its guard can still be hoisted.
    """
    if len(clauses) == 1:
        return clauses[0]
    return Clause([disjunction(*(c.to_expression() for c in clauses))])


def join_to(buffer: List[Clause], index: int, clause: Clause) -> None:
    """Fold a clause into the conjunction at buffer[index]."""
    target = buffer[index]
    buffer[index] = Clause(target.terms + clause.terms, target.guarded or clause.guarded)


def _merge(op: LogicOp, clauses: List[Clause]) -> Clause:
    # Under "=" the values are alternatives; under "!=" all must hold.
    if op.comparator == Comparator.EQUALS:
        return join_or(clauses)
    return join_and(clauses)


def group_disjuncts(ops) -> List[Clause]:
    """
    Group LogicOps into top-level disjuncts.

    An op preceded by AND joins the conjunction of the latest disjunct.
    An op followed by AND opens a new conjunction. Anything else sits
    between ORs and contributes its fragments as separate disjuncts.
    """
    ops = list(ops)
    if len(ops) == 1:
        op = ops[0]
        clauses = op_conditions(op)
        if op.comparator == Comparator.EQUALS:
            return clauses
        return [join_and(clauses)]

    buffer: List[Clause] = []
    for op in ops:
        clauses = op_conditions(op)

        if op.previous_logic == Connector.AND:
            join_to(buffer, len(buffer) - 1, _merge(op, clauses))
        elif op.next_logic == Connector.AND:
            buffer.append(_merge(op, clauses))
        elif op.comparator == Comparator.EQUALS:
            buffer.extend(clauses)
        else:
            buffer.append(join_and(clauses))

    return buffer


def compile_relation(relation: ParsedRelation) -> Optional[Expression]:
    """
    Compile a parsed relation into one predicate.

    Returns:
        The predicate, or None for a relation without logic (the
        "other" fallback)
    """
    if relation.is_empty:
        return None
    disjuncts = group_disjuncts(relation.ops)
    return disjunction(*(clause.to_expression() for clause in disjuncts))


__all__ = [
    "Clause",
    "compile_relation",
    "group_disjuncts",
    "join_and",
    "join_or",
    "join_to",
    "op_conditions",
    "range_condition",
]
