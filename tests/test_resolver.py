"""
Tests for the operand resolver.

Tests verify:
    - Referenced-name collection
    - Only referenced operands are derived
    - Modulo variables are bound once, in first-seen order
    - The p flag pulls in the operands it is computed from
"""

from cplm.backends.text_renderer import render_preamble
from cplm.conditions import compile_relation
from cplm.expressions import (
    BinaryExpression,
    BinaryOperator,
    FunctionCall,
    Literal,
    VariableReference,
)
from cplm.operands import ModuloVariable, Operand
from cplm.relation_parser import parse_relation
from cplm.resolver import referenced_names, resolve_operands


def resolve(*relations):
    predicates = []
    modulo = []
    for relation in relations:
        parsed = parse_relation(relation)
        predicates.append(compile_relation(parsed))
        for variable in parsed.modulo_variables:
            if variable not in modulo:
                modulo.append(variable)
    return resolve_operands(predicates, modulo)


class TestReferencedNames:
    """Test collection of referenced variable names."""

    def test_none(self):
        assert referenced_names([None]) == set()

    def test_literal(self):
        assert referenced_names([Literal(5)]) == set()

    def test_comparison(self):
        expr = BinaryExpression(BinaryOperator.EQUALS, VariableReference("i"), Literal(1))
        assert referenced_names([expr]) == {"i"}

    def test_function_call(self):
        expr = FunctionCall("mod", (VariableReference("n"), Literal(10)))
        assert referenced_names([expr]) == {"n"}

    def test_modulo_variable_names(self):
        predicate = compile_relation(parse_relation("n % 10 = 1 and n % 100 != 11..19"))
        assert referenced_names([predicate]) == {"n10", "n100"}

    def test_guard_is_a_name(self):
        predicate = compile_relation(parse_relation("n = 2..4"))
        assert referenced_names([predicate]) == {"p", "n"}

    def test_union_over_predicates(self):
        predicates = [None, compile_relation(parse_relation("i = 1 and v = 0")), compile_relation(parse_relation("f != 0"))]
        assert referenced_names(predicates) == {"i", "v", "f"}


class TestResolveOperands:
    """Test minimal derivation per locale."""

    def test_nothing_referenced(self):
        resolution = resolve_operands([None], [])
        assert resolution.operands == ()
        assert resolution.preamble == ()

    def test_integer_digits_and_visible_fraction(self):
        resolution = resolve("i = 1 and v = 0")
        assert resolution.operands == (Operand.I, Operand.V)
        assert render_preamble(resolution.preamble) == "_, i, _, v, _, _ := finvtw(value)"

    def test_only_i_skips_fraction_extraction(self):
        resolution = resolve("i = 0,1")
        assert resolution.operands == (Operand.I,)
        assert render_preamble(resolution.preamble) == "i := int(abs(float(value)))"

    def test_modulo_variables_follow_operands(self):
        resolution = resolve(
            "v = 0 and i % 10 = 1 and i % 100 != 11",
            "v = 0 and i % 10 = 2..4 and i % 100 != 12..14",
        )
        assert resolution.modulo_variables == (
            ModuloVariable(Operand.I, 10),
            ModuloVariable(Operand.I, 100),
        )
        assert render_preamble(resolution.preamble) == (
            "_, i, _, v, _, _ := finvtw(value)\n"
            "i10 := i % 10\n"
            "i100 := i % 100"
        )

    def test_modulo_base_operand_is_live(self):
        resolution = resolve("n % 10 = 1 and n % 100 != 11")
        assert resolution.operands == (Operand.N,)
        assert render_preamble(resolution.preamble) == (
            "n := abs(float(value))\n"
            "n10 := mod(n, 10)\n"
            "n100 := mod(n, 100)"
        )

    def test_unreferenced_modulo_variable_dropped(self):
        predicate = compile_relation(parse_relation("i = 1"))
        resolution = resolve_operands([predicate], [ModuloVariable(Operand.I, 10)])
        assert resolution.modulo_variables == ()
        assert "i10" not in render_preamble(resolution.preamble)

    def test_guard_without_fraction_digits(self):
        resolution = resolve("n = 0", "n % 100 = 3..10")
        assert resolution.operands == (Operand.N, Operand.P)
        assert render_preamble(resolution.preamble) == (
            "n := abs(float(value))\n"
            "p := round(n) == n\n"
            "n100 := mod(n, 100)"
        )

    def test_guard_with_fraction_digits(self):
        resolution = resolve("n % 10 = 2..9 and n % 100 != 11..19", "f != 0")
        assert resolution.operands == (Operand.F, Operand.N, Operand.W, Operand.P)
        assert render_preamble(resolution.preamble) == (
            "f, _, n, _, _, w := finvtw(value)\n"
            "p := w == 0\n"
            "n10 := mod(n, 10)\n"
            "n100 := mod(n, 100)"
        )

    def test_guard_with_integer_digits(self):
        resolution = resolve("n = 2..4", "i = 1")
        assert render_preamble(resolution.preamble) == (
            "n := abs(float(value))\n"
            "i := int(n)\n"
            "p := float(i) == n"
        )
