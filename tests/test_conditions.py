"""
Tests for the condition compiler.

Tests verify:
    - Per-value expansion of a comparison (lists, ranges, negation)
    - CLDR precedence: and binds tighter than or
    - The p guard on ranges over n, with at most one leading p
    - Structural identity of equivalent relations
"""

from cplm.backends.text_renderer import render_expression
from cplm.conditions import (
    GUARD,
    Clause,
    compile_relation,
    group_disjuncts,
    join_and,
    join_or,
    op_conditions,
    range_condition,
)
from cplm.expressions import (
    BinaryExpression,
    BinaryOperator,
    Literal,
    VariableReference,
    conjunction,
    disjunction,
)
from cplm.relation_parser import Comparator, IntRange, parse_relation


def compiled(relation):
    return render_expression(compile_relation(parse_relation(relation)))


def eq(name, value):
    return BinaryExpression(BinaryOperator.EQUALS, VariableReference(name), Literal(value))


class TestRangeCondition:

    def test_equals_range(self):
        terms = range_condition("i", IntRange(2, 4), Comparator.EQUALS)
        assert [render_expression(t) for t in terms] == ["i >= 2", "i <= 4"]

    def test_not_equals_range(self):
        terms = range_condition("i", IntRange(2, 4), Comparator.NOT_EQUALS)
        assert len(terms) == 1
        assert render_expression(terms[0]) == "i < 2 || i > 4"


class TestOpConditions:
    """One clause per right-hand value."""

    def test_value_list(self):
        clauses = op_conditions(parse_relation("i = 0,1").ops[0])
        assert [render_expression(c.to_expression()) for c in clauses] == ["i == 0", "i == 1"]

    def test_n_range_is_guarded(self):
        clause = op_conditions(parse_relation("n = 2..4").ops[0])[0]
        assert clause.guarded

    def test_n_modulo_range_is_guarded(self):
        clause = op_conditions(parse_relation("n % 100 = 3..10").ops[0])[0]
        assert clause.guarded

    def test_i_range_is_not_guarded(self):
        clause = op_conditions(parse_relation("i % 10 = 2..4").ops[0])[0]
        assert not clause.guarded

    def test_negated_n_range_is_not_guarded(self):
        clause = op_conditions(parse_relation("n != 2..4").ops[0])[0]
        assert not clause.guarded


class TestJoins:

    def test_join_and_keeps_one_guard(self):
        a = Clause([eq("n10", 3)], guarded=True)
        b = Clause([eq("n100", 13)], guarded=True)
        joined = join_and([a, b])
        assert joined.guarded
        assert joined.to_expression() == conjunction(GUARD, eq("n10", 3), eq("n100", 13))

    def test_join_or_single_clause_is_unchanged(self):
        clause = Clause([eq("i", 1)], guarded=True)
        assert join_or([clause]) is clause

    def test_join_or_wraps_alternatives(self):
        joined = join_or([Clause([eq("i", 0)]), Clause([eq("i", 1)])])
        assert not joined.guarded
        assert joined.terms == [disjunction(eq("i", 0), eq("i", 1))]


class TestCompileRelation:
    """End-to-end relation → predicate text."""

    def test_and_only(self):
        assert compiled("i = 1 and v = 0") == "i == 1 && v == 0"

    def test_and_only_structure(self):
        expr = compile_relation(parse_relation("i = 1 and v = 0"))
        assert expr == conjunction(eq("i", 1), eq("v", 0))

    def test_or_only(self):
        assert compiled("n = 0 or n = 1") == "n == 0 || n == 1"

    def test_value_list_is_disjunction(self):
        assert compiled("i = 0,1") == "i == 0 || i == 1"

    def test_negated_list_is_conjunction(self):
        assert compiled("i != 0,1") == "i != 0 && i != 1"

    def test_guarded_range(self):
        assert compiled("n = 2..4") == "p && n >= 2 && n <= 4"

    def test_negated_n_range_has_no_guard(self):
        assert compiled("n != 2..4") == "n < 2 || n > 4"

    def test_integer_range(self):
        assert compiled("i = 2..4") == "i >= 2 && i <= 4"

    def test_modulo_range(self):
        assert compiled("n % 100 = 3..10") == "p && n100 >= 3 && n100 <= 10"

    def test_or_then_and(self):
        """a or b and c groups as a || (b && c)."""
        expr = compile_relation(parse_relation("n = 1 or i = 2 and v = 0"))
        assert expr == disjunction(eq("n", 1), conjunction(eq("i", 2), eq("v", 0)))
        assert render_expression(expr) == "n == 1 || i == 2 && v == 0"

    def test_and_then_or(self):
        """a and b or c groups as (a && b) || c."""
        expr = compile_relation(parse_relation("i = 2 and v = 0 or n = 1"))
        assert expr == disjunction(conjunction(eq("i", 2), eq("v", 0)), eq("n", 1))

    def test_negated_range_inside_and(self):
        assert compiled("n % 10 = 1 and n % 100 != 11..19") == (
            "n10 == 1 && (n100 < 11 || n100 > 19)"
        )

    def test_three_way_and(self):
        assert compiled("v = 0 and i % 10 = 2..4 and i % 100 != 12..14") == (
            "v == 0 && i10 >= 2 && i10 <= 4 && (i100 < 12 || i100 > 14)"
        )

    def test_single_guard_when_anding_ranges(self):
        text = compiled("n % 10 = 3..4 and n % 100 = 11..19")
        assert text == "p && n10 >= 3 && n10 <= 4 && n100 >= 11 && n100 <= 19"
        assert text.count("p &&") == 1

    def test_list_under_and(self):
        assert compiled("n % 10 = 1,2 and n % 100 != 11,12") == (
            "(n10 == 1 || n10 == 2) && n100 != 11 && n100 != 12"
        )

    def test_mixed_list_under_and(self):
        assert compiled("n % 10 = 1,3..4 and v = 0") == (
            "(n10 == 1 || p && n10 >= 3 && n10 <= 4) && v == 0"
        )

    def test_or_chain_with_guarded_disjunct(self):
        assert compiled(
            "n % 10 = 0 or n % 100 = 11..19 or v = 2 and f % 100 = 11..19"
        ) == (
            "n10 == 0 || p && n100 >= 11 && n100 <= 19 || v == 2 && f100 >= 11 && f100 <= 19"
        )

    def test_alternating_and_or(self):
        assert compiled(
            "v = 0 and i % 10 = 0 or v = 0 and i % 10 = 5..9 or v = 0 and i % 100 = 11..14"
        ) == (
            "v == 0 && i10 == 0 || v == 0 && i10 >= 5 && i10 <= 9 || v == 0 && i100 >= 11 && i100 <= 14"
        )

    def test_empty_relation(self):
        assert compile_relation(parse_relation(" @integer 0~15")) is None

    def test_equivalent_relations_compile_equal(self):
        a = compile_relation(parse_relation("i = 1 and v = 0 @integer 1"))
        b = compile_relation(parse_relation("i=1  and   v=0"))
        assert a == b

    def test_group_disjuncts_count(self):
        ops = parse_relation("n = 1 or i = 2 and v = 0").ops
        assert len(group_disjuncts(ops)) == 2
