"""
Expression System for CPLM

Every compiled plural predicate and every operand derivation is
represented as an Abstract Syntax Tree, never as a string.

This ensures:
    - Structural equality (two locales compare by tree, not by source text)
    - Language independence
    - Serialization capability
    - Rendering into any target syntax by a backend

ARCHITECTURAL RULE:
    Predicate text is produced by backends.
    Nothing in the compiler concatenates code fragments.
"""

from abc import ABC
from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union


class Expression(ABC):
    """
    Base class for all AST expressions.

    This class is structure only.

    DO NOT:
        - Add evaluation logic here (the runtime matcher is external)
        - Add string representations (belongs in backends)
    """
    pass


class BinaryOperator(Enum):
    """
    Binary operators that appear in compiled plural predicates.

    Every operator here must be expressible in any target language
    the emitter renders to.
    """

    # Logical operators
    AND = "AND"
    OR = "OR"

    # Comparison operators
    EQUALS = "=="
    NOT_EQUALS = "!="
    GREATER_THAN = ">"
    GREATER_EQUAL = ">="
    LESS_THAN = "<"
    LESS_EQUAL = "<="

    # Arithmetic
    MODULO = "%"


@dataclass(frozen=True)
class BinaryExpression(Expression):
    """
    Represents a binary logical, comparison or arithmetic expression.

    Example:
        v = 0 and i % 10 = 1

    Becomes:
        BinaryExpression(
            operator=BinaryOperator.AND,
            left=BinaryExpression(
                operator=BinaryOperator.EQUALS,
                left=VariableReference("v"),
                right=Literal(0)
            ),
            right=BinaryExpression(
                operator=BinaryOperator.EQUALS,
                left=VariableReference("i10"),
                right=Literal(1)
            )
        )

    IMPORTANT:
        This object is immutable (frozen=True).
        Chains of AND / OR are nested to the left.
    """

    operator: BinaryOperator
    left: "Expression"
    right: "Expression"


@dataclass(frozen=True)
class VariableReference(Expression):
    """
    References an operand or a derived variable.

    Examples:
        - n, i, v, w, f, t   (CLDR operands)
        - p                  (derived "no significant fraction" flag)
        - i10, n100          (modulo variables)
        - value              (the quantity handed to the matcher)
    """

    name: str


@dataclass(frozen=True)
class Literal(Expression):
    """
    Represents a literal constant value.

    CLDR relations only ever compare against non-negative integers,
    but derivations may need other constants.
    """

    value: Union[int, float, str, bool]


@dataclass(frozen=True)
class FunctionCall(Expression):
    """
    Represents a call to a helper the runtime provides.

    Examples:
        finvtw(value)
        mod(n, 100)
        abs(float(value))
    """

    name: str
    arguments: Tuple[Expression, ...] = ()


@dataclass(frozen=True)
class Assignment:
    """
    Binds one or more names to the result of an expression.

    This is a statement, not an Expression: it only appears in the
    operand-derivation preamble of a locale.

    Examples:
        i10 := i % 10
        f, i, _, v, _, _ := finvtw(value)

    Properties:
        targets: Names bound, in order. "_" marks a discarded slot.
        expression: Right-hand side
    """

    targets: Tuple[str, ...]
    expression: Expression


def conjunction(*terms: Expression) -> Expression:
    """Fold terms into a left-nested AND chain."""
    return _fold(BinaryOperator.AND, terms)


def disjunction(*terms: Expression) -> Expression:
    """Fold terms into a left-nested OR chain."""
    return _fold(BinaryOperator.OR, terms)


def _fold(operator: BinaryOperator, terms) -> Expression:
    if not terms:
        raise ValueError(f"Cannot fold an empty {operator.value} chain")
    result = terms[0]
    for term in terms[1:]:
        result = BinaryExpression(operator, result, term)
    return result
