"""
Conformance of the compiled example tables against the CLDR samples.

A minimal matcher interprets each table the way an emitted runtime would:
run the preamble, then test zero, one, two, few, many in turn and fall
back to other. Every @integer / @decimal sample must land in the
category it is listed under.
"""

import operator

import pytest
from cplm.examples import build_example_plural_info
from cplm.expressions import BinaryExpression, BinaryOperator, FunctionCall, Literal, VariableReference
from cplm.model import Category
from cplm.operands import plural_operands


def _finvtw(value):
    ops = plural_operands(value)
    return ops.f, ops.i, ops.n, ops.v, ops.t, ops.w


HELPERS = {
    "finvtw": _finvtw,
    "abs": abs,
    "float": float,
    "int": int,
    "round": round,
    "mod": lambda a, b: a % b,
}

OPERATORS = {
    BinaryOperator.EQUALS: operator.eq,
    BinaryOperator.NOT_EQUALS: operator.ne,
    BinaryOperator.GREATER_THAN: operator.gt,
    BinaryOperator.GREATER_EQUAL: operator.ge,
    BinaryOperator.LESS_THAN: operator.lt,
    BinaryOperator.LESS_EQUAL: operator.le,
    BinaryOperator.MODULO: operator.mod,
}

MATCH_ORDER = (Category.ZERO, Category.ONE, Category.TWO, Category.FEW, Category.MANY)


def evaluate(expr, env):
    if isinstance(expr, Literal):
        return expr.value
    if isinstance(expr, VariableReference):
        return env[expr.name]
    if isinstance(expr, FunctionCall):
        return HELPERS[expr.name](*(evaluate(a, env) for a in expr.arguments))
    if expr.operator == BinaryOperator.AND:
        return evaluate(expr.left, env) and evaluate(expr.right, env)
    if expr.operator == BinaryOperator.OR:
        return evaluate(expr.left, env) or evaluate(expr.right, env)
    return OPERATORS[expr.operator](evaluate(expr.left, env), evaluate(expr.right, env))


def classify(table, value, ordinal=False):
    env = {"value": value}
    for step in table.preamble:
        result = evaluate(step.expression, env)
        if len(step.targets) == 1:
            env[step.targets[0]] = result
            continue
        for name, part in zip(step.targets, result):
            if name != "_":
                env[name] = part

    for category in MATCH_ORDER:
        predicate = table.get_predicate(category, ordinal)
        if predicate is not None and evaluate(predicate.condition, env):
            return category
    return Category.OTHER


INFO = build_example_plural_info()


@pytest.mark.parametrize("culture", INFO.cultures, ids=lambda c: c.name)
def test_samples_classify_as_listed(culture):
    tests = culture.sample_tests
    assert tests
    for vector in tests:
        got = classify(culture.table, vector.value, vector.ordinal)
        kind = "ordinal" if vector.ordinal else "cardinal"
        assert got == vector.expected, f"{culture.name} {kind} {vector.value}: {got} != {vector.expected}"


class TestEnglish:
    """Spot checks on the English table."""

    @pytest.fixture
    def table(self):
        return INFO.get_culture("en").table

    def test_integer_one(self, table):
        assert classify(table, 1) is Category.ONE

    def test_visible_fraction_is_other(self, table):
        assert classify(table, "1.0") is Category.OTHER

    def test_ordinals(self, table):
        assert classify(table, "21", ordinal=True) is Category.ONE
        assert classify(table, "112", ordinal=True) is Category.OTHER
        assert classify(table, "103", ordinal=True) is Category.FEW


class TestGuard:
    """The p guard keeps fractional values out of integer ranges."""

    def test_arabic_few(self):
        table = INFO.get_culture("ar").table
        assert classify(table, "103") is Category.FEW
        assert classify(table, "3.5") is Category.OTHER

    def test_lithuanian_few(self):
        table = INFO.get_culture("lt").table
        assert classify(table, "2.0") is Category.FEW
        assert classify(table, "2.5") is Category.MANY
