"""
Relation Parser for CPLM (Layer 1: CLDR relation string → LogicOps).

Parses one CLDR plural relation, e.g.

    v = 0 and i % 10 = 2..4 and i % 100 != 12..14 @integer 2~4, 22~24, …

Syntax Notes:
    - Operands: n i v w f t, optionally reduced with "% <integer>"
    - Comparators: = and !=
    - Right-hand side: comma-separated integers and inclusive ranges lo..hi
    - Connectors: and / or (and binds tighter, handled by the compiler)
    - Everything from the first @ on is a sample clause, not logic

The parser keeps the flat connector structure CLDR writes: each comparison
becomes a LogicOp that remembers the connector before and after it.
Grouping happens in cplm.conditions.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple, Union

from cplm.errors import ParseError
from cplm.operands import SOURCE_OPERANDS, ModuloVariable, Operand


class TokenKind(Enum):
    OPERAND = "operand"
    PERCENT = "%"
    INTEGER = "integer"
    RANGE = ".."
    COMMA = ","
    EQUALS = "="
    NOT_EQUALS = "!="
    AND = "and"
    OR = "or"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    position: int


class Connector(Enum):
    """Logical connector between two comparisons."""
    AND = "AND"
    OR = "OR"


class Comparator(Enum):
    EQUALS = "=="
    NOT_EQUALS = "!="


@dataclass(frozen=True)
class IntRange:
    """Inclusive integer range lo..hi."""
    lower: int
    upper: int


RangeItem = Union[int, IntRange]
LeftOperand = Union[Operand, ModuloVariable]


@dataclass(frozen=True)
class Condition:
    """
    One comparison of a relation.

    Properties:
        left: Operand or modulo variable being tested
        comparator: EQUALS or NOT_EQUALS
        values: Integers and ranges; under EQUALS the condition holds
            when any of them matches, under NOT_EQUALS when none does
    """

    left: LeftOperand
    comparator: Comparator
    values: Tuple[RangeItem, ...]

    @property
    def left_name(self) -> str:
        if isinstance(self.left, ModuloVariable):
            return self.left.name
        return self.left.symbol

    @property
    def base_operand(self) -> Operand:
        if isinstance(self.left, ModuloVariable):
            return self.left.operand
        return self.left


@dataclass(frozen=True)
class LogicOp:
    """
    One clause of a relation, with the connectors around it.

    Properties:
        previous_logic: Connector before this clause (None for the first)
        condition: The parsed comparison
        right: Right-hand side as written in the source
        next_logic: Connector after this clause (None for the last)
    """

    previous_logic: Optional[Connector]
    condition: Condition
    right: str
    next_logic: Optional[Connector] = None

    @property
    def left(self) -> LeftOperand:
        return self.condition.left

    @property
    def comparator(self) -> Comparator:
        return self.condition.comparator


@dataclass(frozen=True)
class ParsedRelation:
    """A relation as an ordered LogicOp sequence."""

    source: str
    ops: Tuple[LogicOp, ...] = ()
    modulo_variables: Tuple[ModuloVariable, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.ops


_TOKEN_RE = re.compile(
    r"""
    (?P<space>\s+)
    |(?P<range>\.\.)
    |(?P<not_equals>!=)
    |(?P<equals>=)
    |(?P<percent>%)
    |(?P<comma>,)
    |(?P<integer>\d+)
    |(?P<word>[A-Za-z]+)
    """,
    re.VERBOSE,
)

_GROUP_KINDS = {
    "range": TokenKind.RANGE,
    "not_equals": TokenKind.NOT_EQUALS,
    "equals": TokenKind.EQUALS,
    "percent": TokenKind.PERCENT,
    "comma": TokenKind.COMMA,
    "integer": TokenKind.INTEGER,
}

_KEYWORDS = {"and": TokenKind.AND, "or": TokenKind.OR}

_SAMPLE_VALUE_RE = re.compile(r"[0-9.][^ ,~]*")


def split_relation(relation: str) -> Tuple[str, str]:
    """Split a relation into its logic part and its sample clause."""
    logic, marker, samples = relation.partition("@")
    return logic, marker + samples


def tokenize(relation: str, locale: Optional[str] = None) -> List[Token]:
    """
    Tokenize the logic part of a relation.

    Scanning stops at the first "@".

    Raises:
        ParseError: On a character that starts no token
    """
    logic, _ = split_relation(relation)
    tokens: List[Token] = []
    pos = 0
    while pos < len(logic):
        match = _TOKEN_RE.match(logic, pos)
        if match is None:
            raise ParseError(f"Unexpected character {logic[pos]!r}", relation, locale, pos)
        group = match.lastgroup
        text = match.group()
        if group == "word":
            kind = _KEYWORDS.get(text.lower(), TokenKind.OPERAND)
            tokens.append(Token(kind, text, pos))
        elif group != "space":
            tokens.append(Token(_GROUP_KINDS[group], text, pos))
        pos = match.end()
    return tokens


class _RelationParser:
    """Recursive-descent parser over the token stream of one relation."""

    def __init__(self, relation: str, locale: Optional[str] = None):
        self.relation = relation
        self.locale = locale
        self.tokens = tokenize(relation, locale)
        self.pos = 0
        self.modulo_variables: List[ModuloVariable] = []

    def error(self, message: str, token: Optional[Token] = None) -> ParseError:
        if token is None and self.pos < len(self.tokens):
            token = self.tokens[self.pos]
        position = token.position if token else len(split_relation(self.relation)[0])
        return ParseError(message, self.relation, self.locale, position)

    def peek(self) -> Optional[Token]:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def expect(self, *kinds: TokenKind) -> Token:
        token = self.peek()
        if token is None:
            expected = " or ".join(k.value for k in kinds)
            raise self.error(f"Unexpected end of relation, expected {expected}")
        if token.kind not in kinds:
            expected = " or ".join(k.value for k in kinds)
            raise self.error(f"Expected {expected}, got {token.text!r}", token)
        self.pos += 1
        return token

    def parse(self) -> ParsedRelation:
        if not self.tokens:
            return ParsedRelation(source=self.relation)

        ops: List[LogicOp] = []
        previous: Optional[Connector] = None
        while True:
            condition, right = self.parse_condition()
            token = self.peek()
            if token is None:
                ops.append(LogicOp(previous, condition, right, None))
                break
            connector_token = self.expect(TokenKind.AND, TokenKind.OR)
            connector = Connector.AND if connector_token.kind == TokenKind.AND else Connector.OR
            ops.append(LogicOp(previous, condition, right, connector))
            previous = connector

        return ParsedRelation(
            source=self.relation,
            ops=tuple(ops),
            modulo_variables=tuple(self.modulo_variables),
        )

    def parse_condition(self) -> Tuple[Condition, str]:
        left = self.parse_operand()
        comparator_token = self.expect(TokenKind.EQUALS, TokenKind.NOT_EQUALS)
        comparator = Comparator.EQUALS if comparator_token.kind == TokenKind.EQUALS else Comparator.NOT_EQUALS

        start = self.peek()
        values = self.parse_range_list()
        last = self.tokens[self.pos - 1]
        right = self.relation[start.position:last.position + len(last.text)]
        return Condition(left, comparator, tuple(values)), right

    def parse_operand(self) -> LeftOperand:
        token = self.expect(TokenKind.OPERAND)
        if len(token.text) != 1:
            raise self.error(f"Operand must be a single symbol, got {token.text!r}", token)
        try:
            operand = Operand.from_symbol(token.text)
        except ValueError:
            operand = None
        if operand not in SOURCE_OPERANDS:
            raise self.error(f"Unknown operand {token.text!r}", token)

        if self.peek() is None or self.peek().kind != TokenKind.PERCENT:
            return operand

        self.pos += 1
        modulus_token = self.expect(TokenKind.INTEGER)
        modulus = int(modulus_token.text)
        if modulus == 0:
            raise self.error("Modulus must be positive", modulus_token)
        variable = ModuloVariable(operand, modulus)
        if variable not in self.modulo_variables:
            self.modulo_variables.append(variable)
        return variable

    def parse_range_list(self) -> List[RangeItem]:
        values = [self.parse_range_item()]
        while self.peek() is not None and self.peek().kind == TokenKind.COMMA:
            self.pos += 1
            values.append(self.parse_range_item())
        return values

    def parse_range_item(self) -> RangeItem:
        lower_token = self.expect(TokenKind.INTEGER)
        lower = int(lower_token.text)
        if self.peek() is None or self.peek().kind != TokenKind.RANGE:
            return lower
        self.pos += 1
        upper = int(self.expect(TokenKind.INTEGER).text)
        if upper < lower:
            raise self.error(f"Empty range {lower}..{upper}", lower_token)
        return IntRange(lower, upper)


def parse_relation(relation: str, locale: Optional[str] = None) -> ParsedRelation:
    """
    Parse a CLDR relation into LogicOps.

    Args:
        relation: Relation text, optionally followed by sample clauses
        locale: Locale tag, reported in errors

    Returns:
        ParsedRelation; empty when the relation holds only samples

    Raises:
        ParseError: If the relation is malformed
    """
    return _RelationParser(relation, locale).parse()


def split_values(text: str) -> Tuple[str, ...]:
    """
    Split a sample list into values.

    A value starts at a digit or "." and runs to the next space, comma
    or "~". Ellipses and other decoration are dropped.
    """
    return tuple(_SAMPLE_VALUE_RE.findall(text))


def parse_samples(relation: str) -> Tuple[Tuple[str, ...], Tuple[str, ...]]:
    """
    Extract the sample values of a relation.

    Returns:
        (integers, decimals) as written in the source
    """
    integers: Tuple[str, ...] = ()
    decimals: Tuple[str, ...] = ()
    for clause in relation.split("@")[1:]:
        if clause.startswith("integer"):
            integers = split_values(clause[len("integer"):])
        elif clause.startswith("decimal"):
            decimals = split_values(clause[len("decimal"):])
    return integers, decimals


__all__ = [
    "Comparator",
    "Condition",
    "Connector",
    "IntRange",
    "LogicOp",
    "ParsedRelation",
    "parse_relation",
    "parse_samples",
    "split_values",
    "tokenize",
]
