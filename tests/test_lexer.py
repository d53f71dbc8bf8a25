# =============================================================================
# test_lexer.py - Lookahead Buffer Tests
# =============================================================================
# Tests for the Lexer cursor that sits between the tokenizer and parser.
#
# Test coverage includes:
#   - Initial sentinel state
#   - next(), token(), token(k) lookahead
#   - prev_token and index bookkeeping
#   - Behaviour at and beyond end of input
#   - Lazy tokenizing and error surfacing
# =============================================================================

import pytest
from pratt_calc.config import CalcConfig
from pratt_calc.errors import LexicalError
from pratt_calc.lexer import Lexer
from pratt_calc.operators import TokenKind
from pratt_calc.tokenizer import Tokenizer
from pratt_calc.tokens import NONE_TOKEN


# =============================================================================
# Initial State
# =============================================================================

class TestInitialState:
    """Test the lexer before anything is consumed."""

    def test_current_is_none_sentinel(self):
        """Before next(), the current token is the NONE sentinel."""
        lexer = Lexer("1")
        assert lexer.token() is NONE_TOKEN
        assert lexer.token().kind == TokenKind.NONE

    def test_prev_is_none_sentinel(self):
        lexer = Lexer("1")
        assert lexer.prev_token is NONE_TOKEN

    def test_index_starts_at_zero(self):
        assert Lexer("1 + 2").index == 0

    def test_wraps_existing_tokenizer(self):
        """An existing Tokenizer can be wrapped instead of text."""
        tokenizer = Tokenizer("7", "given.txt")
        lexer = Lexer(tokenizer)
        assert lexer.tokenizer is tokenizer
        assert lexer.next().filename == "given.txt"

    def test_config_filename(self):
        """The config's filename reaches the tokens."""
        lexer = Lexer("7", CalcConfig(filename="expr.txt"))
        assert lexer.next().filename == "expr.txt"


# =============================================================================
# Cursor Movement
# =============================================================================

class TestCursor:
    """Test next(), token() and their bookkeeping."""

    def test_next_in_order(self):
        """next() returns tokens in source order."""
        lexer = Lexer("1 + 2")
        assert lexer.next().value == "1"
        assert lexer.next().value == "+"
        assert lexer.next().value == "2"
        assert lexer.next().kind == TokenKind.EOF

    def test_token_is_current(self):
        """token() returns what next() just returned."""
        lexer = Lexer("1 + 2")
        consumed = lexer.next()
        assert lexer.token() is consumed

    def test_prev_token(self):
        """prev_token is the token that was current before next()."""
        lexer = Lexer("1 + 2")
        first = lexer.next()
        lexer.next()
        assert lexer.prev_token is first

    def test_index_counts_next_calls(self):
        lexer = Lexer("1 + 2")
        lexer.next()
        lexer.next()
        assert lexer.index == 2

    def test_lookahead_does_not_advance(self):
        """token(k) peeks without moving the cursor."""
        lexer = Lexer("1 + 2")
        lexer.next()
        assert lexer.token(1).value == "+"
        assert lexer.token(2).value == "2"
        assert lexer.token().value == "1"
        assert lexer.index == 1

    def test_next_after_peek(self):
        """Peeked tokens are consumed in order by next()."""
        lexer = Lexer("1 + 2")
        lexer.token(2)
        assert lexer.next().value == "1"
        assert lexer.next().value == "+"
        assert lexer.next().value == "2"

    def test_repeated_peek_is_stable(self):
        lexer = Lexer("3 * 4")
        assert lexer.token(1) is lexer.token(1)

    def test_negative_lookahead(self):
        with pytest.raises(ValueError):
            Lexer("1").token(-1)

    def test_has_next(self):
        """has_next() is false once EOF has been consumed."""
        lexer = Lexer("1")
        assert lexer.has_next()
        lexer.next()
        assert lexer.has_next()
        lexer.next()
        assert not lexer.has_next()


# =============================================================================
# End of Input
# =============================================================================

class TestEndOfInput:
    """Test behaviour at and past the end of input."""

    def test_next_sticks_at_eof(self):
        """next() keeps returning EOF after the end."""
        lexer = Lexer("1")
        lexer.next()
        eof = lexer.next()
        assert eof.kind == TokenKind.EOF
        assert lexer.next() is eof
        assert lexer.next() is eof

    def test_index_keeps_counting_at_eof(self):
        lexer = Lexer("")
        for _ in range(3):
            lexer.next()
        assert lexer.index == 3

    def test_lookahead_past_end(self):
        """Peeking beyond the input yields EOF."""
        lexer = Lexer("1")
        assert lexer.token(5).kind == TokenKind.EOF

    def test_lookahead_after_eof_consumed(self):
        lexer = Lexer("")
        lexer.next()
        assert lexer.token(1).kind == TokenKind.EOF

    def test_iteration(self):
        """Iterating yields every token up to and including EOF."""
        kinds = [token.kind for token in Lexer("1+2")]
        assert kinds == [
            TokenKind.NUMBER,
            TokenKind.ADD,
            TokenKind.NUMBER,
            TokenKind.EOF,
        ]


# =============================================================================
# Lazy Tokenizing
# =============================================================================

class TestLaziness:
    """Test that the tokenizer only runs as far as needed."""

    def test_error_surfaces_on_peek(self):
        """A bad character is reported only when it is reached."""
        lexer = Lexer("1 $")
        assert lexer.next().value == "1"
        with pytest.raises(LexicalError):
            lexer.token(1)

    def test_error_surfaces_on_next(self):
        lexer = Lexer("1 $")
        lexer.next()
        with pytest.raises(LexicalError):
            lexer.next()
