# =============================================================================
# test_operators.py - Operator Table Tests
# =============================================================================
# Tests for the operator table that drives the tokenizer and parser.
# =============================================================================

import pytest
from pratt_calc.operators import (
    OPERATOR_TABLE,
    SYMBOL_TO_KIND,
    TokenKind,
    binding_power,
    lookup,
    precedence,
    symbol_to_kind,
)


class TestTable:
    """Test table contents."""

    def test_every_kind_has_an_entry(self):
        assert set(OPERATOR_TABLE) == set(TokenKind)

    @pytest.mark.parametrize("kind,expected", [
        (TokenKind.BANG, 100),
        (TokenKind.STAR, 90),
        (TokenKind.SLASH, 90),
        (TokenKind.PERCENT, 90),
        (TokenKind.ADD, 80),
        (TokenKind.SUB, 80),
        (TokenKind.LSHIFT, 70),
        (TokenKind.RSHIFT, 70),
        (TokenKind.AMP, 60),
        (TokenKind.CARET, 55),
        (TokenKind.BAR, 50),
        (TokenKind.TILDE, 40),
        (TokenKind.NUMBER, 0),
        (TokenKind.LPAREN, 0),
        (TokenKind.RPAREN, 0),
        (TokenKind.EOF, 0),
        (TokenKind.NONE, 0),
    ])
    def test_precedence(self, kind, expected):
        assert precedence(kind) == expected
        assert kind.precedence == expected

    def test_prefix_operators(self):
        prefix = {kind for kind in TokenKind if kind.is_prefix}
        assert prefix == {TokenKind.ADD, TokenKind.SUB, TokenKind.TILDE}

    def test_infix_operators(self):
        infix = {kind for kind in TokenKind if kind.is_infix}
        assert infix == {
            TokenKind.ADD, TokenKind.SUB, TokenKind.STAR, TokenKind.SLASH,
            TokenKind.PERCENT, TokenKind.AMP, TokenKind.BAR, TokenKind.CARET,
            TokenKind.LSHIFT, TokenKind.RSHIFT,
        }

    def test_postfix_operators(self):
        postfix = {kind for kind in TokenKind if kind.is_postfix}
        assert postfix == {TokenKind.BANG}

    def test_value_kinds(self):
        assert {kind for kind in TokenKind if kind.is_value} == {TokenKind.NUMBER}

    def test_associativity_flags(self):
        left = {kind for kind in TokenKind if kind.is_left_associative}
        right = {kind for kind in TokenKind if kind.is_right_associative}
        assert left == {TokenKind.ADD, TokenKind.SUB, TokenKind.TILDE}
        assert right == {TokenKind.BANG}

    def test_lookup(self):
        assert lookup(TokenKind.LSHIFT).symbol == "<<"
        assert TokenKind.LPAREN.symbol == "("
        assert TokenKind.NUMBER.symbol is None


class TestHelpers:
    """Test the query helpers."""

    def test_binding_power_left_associative(self):
        assert binding_power(TokenKind.ADD) == 80

    def test_binding_power_unflagged(self):
        assert binding_power(TokenKind.STAR) == 90

    def test_binding_power_right_associative(self):
        assert binding_power(TokenKind.BANG) == 99

    @pytest.mark.parametrize("symbol,kind", [
        ("+", TokenKind.ADD),
        ("<<", TokenKind.LSHIFT),
        (">>", TokenKind.RSHIFT),
        (")", TokenKind.RPAREN),
    ])
    def test_symbol_to_kind(self, symbol, kind):
        assert symbol_to_kind(symbol) == kind

    @pytest.mark.parametrize("symbol", ["<", "?", "", "**"])
    def test_unknown_symbol(self, symbol):
        assert symbol_to_kind(symbol) is None

    def test_symbols_are_unique(self):
        """Every symbol in the table maps back to its own kind."""
        for symbol, kind in SYMBOL_TO_KIND.items():
            assert OPERATOR_TABLE[kind].symbol == symbol
