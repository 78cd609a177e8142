"""
Tests for the Operand Model.

Tests verify:
    - Operand symbols and modulo variables
    - Numeric operand semantics (n i v w f t p)
    - Minimal derivation steps for a set of live operands
"""

from decimal import Decimal

import pytest
from cplm.backends.text_renderer import render_preamble
from cplm.operands import (
    ModuloVariable,
    Operand,
    derive_operands,
    plural_operands,
    resolve_live_operands,
)


def live(symbols):
    return resolve_live_operands(frozenset(Operand.from_symbol(s) for s in symbols))


class TestOperandSymbols:

    def test_from_symbol(self):
        assert Operand.from_symbol("i") is Operand.I
        assert Operand.from_symbol("p") is Operand.P

    def test_unknown_symbol(self):
        with pytest.raises(ValueError):
            Operand.from_symbol("e")

    def test_declaration_order(self):
        assert "".join(op.symbol for op in Operand) == "finvtwp"


class TestModuloVariable:

    def test_name(self):
        assert ModuloVariable(Operand.I, 10).name == "i10"
        assert ModuloVariable(Operand.N, 100).name == "n100"

    def test_identity_by_operand_and_modulus(self):
        assert ModuloVariable(Operand.I, 10) == ModuloVariable(Operand.I, 10)
        assert ModuloVariable(Operand.I, 10) != ModuloVariable(Operand.N, 10)
        assert len({ModuloVariable(Operand.I, 10), ModuloVariable(Operand.I, 10)}) == 1

    def test_integer_derivation(self):
        assert render_preamble([ModuloVariable(Operand.I, 10).derivation()]) == "i10 := i % 10"

    def test_n_uses_float_modulo(self):
        assert render_preamble([ModuloVariable(Operand.N, 100).derivation()]) == "n100 := mod(n, 100)"


class TestPluralOperands:
    """Operand values per UTS #35."""

    def test_integer(self):
        ops = plural_operands(1)
        assert (ops.n, ops.i, ops.v, ops.w, ops.f, ops.t) == (1, 1, 0, 0, 0, 0)
        assert ops.p

    def test_visible_trailing_zero(self):
        ops = plural_operands("1.0")
        assert ops.i == 1
        assert ops.v == 1
        assert ops.w == 0
        assert ops.f == 0
        assert ops.p

    def test_fraction_with_trailing_zeros(self):
        ops = plural_operands("1.230")
        assert (ops.i, ops.v, ops.w, ops.f, ops.t) == (1, 3, 2, 230, 23)
        assert not ops.p

    def test_negative_uses_absolute_value(self):
        ops = plural_operands("-2.5")
        assert ops.n == Decimal("2.5")
        assert ops.i == 2

    def test_decimal_input(self):
        assert plural_operands(Decimal("0.10")).v == 2

    def test_leading_fraction_zero_counts_as_digit(self):
        """0.01 has two visible fraction digits, both significant."""
        ops = plural_operands(Decimal("0.01"))
        assert (ops.v, ops.w, ops.f, ops.t) == (2, 2, 1, 1)

    def test_get(self):
        ops = plural_operands("3.4")
        assert ops.get(Operand.T) == 4
        assert ops.get(Operand.P) is False

    def test_rejects_non_numbers(self):
        with pytest.raises(ValueError):
            plural_operands("1c6")
        with pytest.raises(ValueError):
            plural_operands(1.5)


class TestLiveOperands:

    def test_p_pulls_in_n_without_fraction_digits(self):
        assert live("p") == {Operand.P, Operand.N}

    def test_p_pulls_in_w_with_fraction_digits(self):
        assert live("pv") == {Operand.P, Operand.V, Operand.W}

    def test_no_p(self):
        assert live("iv") == {Operand.I, Operand.V}


class TestDeriveOperands:
    """Derivation steps are the minimal ones for the live set."""

    def test_nothing_live(self):
        assert derive_operands(frozenset()) == ()

    def test_only_i(self):
        assert render_preamble(derive_operands(live("i"))) == "i := int(abs(float(value)))"

    def test_only_n(self):
        assert render_preamble(derive_operands(live("n"))) == "n := abs(float(value))"

    def test_n_and_i(self):
        assert render_preamble(derive_operands(live("ni"))) == (
            "n := abs(float(value))\n"
            "i := int(n)"
        )

    def test_p_from_i_when_i_is_live(self):
        text = render_preamble(derive_operands(live("nip")))
        assert text.endswith("p := float(i) == n")

    def test_p_from_n_alone(self):
        assert render_preamble(derive_operands(live("np"))) == (
            "n := abs(float(value))\n"
            "p := round(n) == n"
        )

    def test_fraction_digits_use_one_tuple(self):
        assert render_preamble(derive_operands(live("iv"))) == "_, i, _, v, _, _ := finvtw(value)"

    def test_p_from_w_when_digits_are_computed(self):
        assert render_preamble(derive_operands(live("nfp"))) == (
            "f, _, n, _, _, w := finvtw(value)\n"
            "p := w == 0"
        )

    def test_integer_only_never_extracts_digits(self):
        text = render_preamble(derive_operands(live("nip")))
        assert "finvtw" not in text
