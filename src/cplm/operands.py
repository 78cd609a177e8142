"""
Operand Model for CPLM.

CLDR plural rules never look at a number directly. They look at a handful
of operands derived from its decimal representation
(http://unicode.org/reports/tr35/tr35-numbers.html#Operands):

    Symbol  Value
    n       absolute value of the source number (integer and decimals)
    i       integer digits of n
    v       number of visible fraction digits in n, with trailing zeros
    w       number of visible fraction digits in n, without trailing zeros
    f       visible fractional digits in n, with trailing zeros
    t       visible fractional digits in n, without trailing zeros
    p       w == 0 (not a CLDR operand; guards integer ranges over n)

This module owns the symbols, the modulo variables built on them and the
derivation steps a runtime needs to compute the live ones.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import FrozenSet, List, Tuple, Union

from cplm.expressions import (
    Assignment,
    BinaryExpression,
    BinaryOperator,
    Expression,
    FunctionCall,
    Literal,
    VariableReference,
)


class Operand(Enum):
    """
    Operand symbols, in the order of the finvtw tuple.

    The order is part of the output format: it fixes the slot layout of
    the tuple assignment and the order operands are listed in a table.
    """

    F = "f"
    I = "i"
    N = "n"
    V = "v"
    T = "t"
    W = "w"
    P = "p"

    @property
    def symbol(self) -> str:
        return self.value

    @classmethod
    def from_symbol(cls, symbol: str) -> "Operand":
        for operand in cls:
            if operand.value == symbol:
                return operand
        raise ValueError(f"Unknown plural operand: {symbol!r}")


# Operands a CLDR relation may name. p only comes out of compilation.
SOURCE_OPERANDS: FrozenSet[Operand] = frozenset(
    {Operand.N, Operand.I, Operand.V, Operand.W, Operand.F, Operand.T}
)

# Operands that need the fractional digits of the visible representation.
FRACTION_OPERANDS: FrozenSet[Operand] = frozenset(
    {Operand.F, Operand.V, Operand.T, Operand.W}
)

# Name of the quantity handed to the runtime matcher.
VALUE = VariableReference("value")


@dataclass(frozen=True)
class ModuloVariable:
    """
    An operand reduced by an integer modulus, e.g. ``i % 10``.

    Identified by (operand, modulus). A locale binds each distinct pair
    once and every relation that mentions it reuses the same name.
    """

    operand: Operand
    modulus: int

    @property
    def name(self) -> str:
        return f"{self.operand.symbol}{self.modulus}"

    def derivation(self) -> Assignment:
        base = VariableReference(self.operand.symbol)
        if self.operand is Operand.N:
            # n may carry a fraction; the runtime provides a float modulo.
            expression: Expression = FunctionCall("mod", (base, Literal(self.modulus)))
        else:
            expression = BinaryExpression(BinaryOperator.MODULO, base, Literal(self.modulus))
        return Assignment((self.name,), expression)


def _ref(operand: Operand) -> VariableReference:
    return VariableReference(operand.symbol)


def resolve_live_operands(referenced: FrozenSet[Operand]) -> FrozenSet[Operand]:
    """
    Close a set of referenced operands over the derivation dependencies.

    p is derived from w when the fraction digits are computed anyway,
    otherwise from n (and i when available), so it drags in one of them.
    """
    live = set(referenced)
    if Operand.P in live:
        if live & FRACTION_OPERANDS:
            live.add(Operand.W)
        else:
            live.add(Operand.N)
    return frozenset(live)


def derive_operands(live: FrozenSet[Operand]) -> Tuple[Assignment, ...]:
    """
    Produce the minimal extraction steps for a set of live operands.

    Args:
        live: Operands the predicates need, already closed with
            resolve_live_operands()

    Returns:
        Assignments in execution order. Empty when nothing is live.
    """
    steps: List[Assignment] = []

    if live & FRACTION_OPERANDS:
        targets = tuple(
            op.symbol if op in live else "_"
            for op in (Operand.F, Operand.I, Operand.N, Operand.V, Operand.T, Operand.W)
        )
        steps.append(Assignment(targets, FunctionCall("finvtw", (VALUE,))))
        if Operand.P in live:
            steps.append(Assignment(
                ("p",),
                BinaryExpression(BinaryOperator.EQUALS, _ref(Operand.W), Literal(0)),
            ))
        return tuple(steps)

    absolute = FunctionCall("abs", (FunctionCall("float", (VALUE,)),))
    if Operand.N in live:
        steps.append(Assignment(("n",), absolute))
        if Operand.I in live:
            steps.append(Assignment(("i",), FunctionCall("int", (_ref(Operand.N),))))
    elif Operand.I in live:
        steps.append(Assignment(("i",), FunctionCall("int", (absolute,))))

    if Operand.P in live:
        if Operand.I in live:
            integral: Expression = FunctionCall("float", (_ref(Operand.I),))
        else:
            integral = FunctionCall("round", (_ref(Operand.N),))
        steps.append(Assignment(
            ("p",),
            BinaryExpression(BinaryOperator.EQUALS, integral, _ref(Operand.N)),
        ))

    return tuple(steps)


@dataclass(frozen=True)
class PluralOperands:
    """
    Operand values of one quantity.

    Reference semantics for the symbols above; the compiler itself never
    classifies a quantity, but sample fixtures are checked against these.
    """

    n: Decimal
    i: int
    v: int
    w: int
    f: int
    t: int

    @property
    def p(self) -> bool:
        return self.w == 0

    def get(self, operand: Operand) -> Union[Decimal, int, bool]:
        return getattr(self, operand.symbol)


def plural_operands(value: Union[int, str, Decimal]) -> PluralOperands:
    """
    Compute the operands of a quantity.

    Strings keep their visible trailing zeros, so "1.0" has v == 1 while
    1 has v == 0.

    Raises:
        ValueError: If value is not a plain decimal number
    """
    if isinstance(value, bool) or not isinstance(value, (int, str, Decimal)):
        raise ValueError(f"Unsupported quantity type: {type(value).__name__}")
    try:
        number = abs(Decimal(value.strip() if isinstance(value, str) else value))
    except InvalidOperation:
        raise ValueError(f"Not a decimal quantity: {value!r}")
    if not number.is_finite():
        raise ValueError(f"Not a finite quantity: {value!r}")

    text = format(number, "f")
    integer_part, _, fraction = text.partition(".")
    trimmed = fraction.rstrip("0")

    return PluralOperands(
        n=number,
        i=int(integer_part),
        v=len(fraction),
        w=len(trimmed),
        f=int(fraction) if fraction else 0,
        t=int(trimmed) if trimmed else 0,
    )
