"""
C-style text rendering for CPLM expressions.

Produces the predicate text that sits next to each compiled category:

    v == 0 && i10 >= 2 && i10 <= 4 && (i100 < 12 || i100 > 14)

Parentheses are only emitted where precedence requires them, which in
practice means an OR nested inside an AND.
"""

from typing import Iterable, List

from cplm.expressions import (
    Assignment,
    BinaryExpression,
    BinaryOperator,
    Expression,
    FunctionCall,
    Literal,
    VariableReference,
)
from cplm.model import COMPILE_ORDER, LocaleRuleTable

_SYMBOLS = {
    BinaryOperator.AND: "&&",
    BinaryOperator.OR: "||",
    BinaryOperator.EQUALS: "==",
    BinaryOperator.NOT_EQUALS: "!=",
    BinaryOperator.GREATER_THAN: ">",
    BinaryOperator.GREATER_EQUAL: ">=",
    BinaryOperator.LESS_THAN: "<",
    BinaryOperator.LESS_EQUAL: "<=",
    BinaryOperator.MODULO: "%",
}

_PRECEDENCE = {
    BinaryOperator.OR: 1,
    BinaryOperator.AND: 2,
    BinaryOperator.EQUALS: 3,
    BinaryOperator.NOT_EQUALS: 3,
    BinaryOperator.GREATER_THAN: 3,
    BinaryOperator.GREATER_EQUAL: 3,
    BinaryOperator.LESS_THAN: 3,
    BinaryOperator.LESS_EQUAL: 3,
    BinaryOperator.MODULO: 4,
}

_ATOM = 5


def _precedence(expr: Expression) -> int:
    if isinstance(expr, BinaryExpression):
        return _PRECEDENCE[expr.operator]
    return _ATOM


def _render_operand(expr: Expression, parent: int, strict: bool) -> str:
    text = render_expression(expr)
    own = _precedence(expr)
    if own < parent or (strict and own == parent):
        return f"({text})"
    return text


def render_expression(expr: Expression | None) -> str:
    """Render an expression tree as C-style text."""
    if expr is None:
        return ""

    if isinstance(expr, BinaryExpression):
        own = _PRECEDENCE[expr.operator]
        # AND / OR chains nest to the left; a right child of equal
        # precedence only occurs for non-associative comparisons.
        associative = expr.operator in (BinaryOperator.AND, BinaryOperator.OR)
        left = _render_operand(expr.left, own, strict=False)
        right = _render_operand(expr.right, own, strict=not associative)
        return f"{left} {_SYMBOLS[expr.operator]} {right}"

    if isinstance(expr, VariableReference):
        return expr.name

    if isinstance(expr, Literal):
        if isinstance(expr.value, bool):
            return "true" if expr.value else "false"
        if isinstance(expr.value, str):
            return f'"{expr.value}"'
        return str(expr.value)

    if isinstance(expr, FunctionCall):
        args = ", ".join(render_expression(a) for a in expr.arguments)
        return f"{expr.name}({args})"

    raise TypeError(f"Unsupported Expression type: {type(expr)}")


def render_assignment(assignment: Assignment) -> str:
    """Render a derivation step, e.g. ``i10 := i % 10``."""
    return f"{', '.join(assignment.targets)} := {render_expression(assignment.expression)}"


def render_preamble(assignments: Iterable[Assignment]) -> str:
    return "\n".join(render_assignment(a) for a in assignments)


def describe_table(table: LocaleRuleTable) -> str:
    """
    Human-readable listing of a rule table.

    Intended for logs and demos; the emitter renders its own syntax.
    """
    lines: List[str] = []
    if table.preamble:
        lines.append(render_preamble(table.preamble))

    switches = [("cardinal", table.cardinal)]
    if table.ordinal is not None:
        switches.append(("ordinal", table.ordinal))

    for title, predicates in switches:
        lines.append(f"{title}:")
        by_category = {p.category: p for p in predicates}
        for category in COMPILE_ORDER:
            predicate = by_category.get(category)
            if predicate is None:
                continue
            condition = render_expression(predicate.condition) if predicate.condition else "default"
            lines.append(f"  {category.value}: {condition}")

    return "\n".join(lines)


__all__ = ["describe_table", "render_assignment", "render_expression", "render_preamble"]
