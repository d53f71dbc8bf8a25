"""
Token Lookahead Buffer
======================

The Lexer wraps a Tokenizer and gives the parser a single-pass cursor
over its tokens:

- next() consumes one token and makes it current
- token() returns the current token, token(k) peeks k tokens ahead
- prev_token and index describe what has been consumed so far

Peeked tokens are buffered until next() consumes them, so the tokenizer
still runs lazily and a lexical error surfaces only when the parser
actually reaches the offending character.

Example
-------
>>> lexer = Lexer("1 + 2")
>>> lexer.next()
Token(NUMBER, '1', 1:1)
>>> lexer.token(1)
Token(ADD, '+', 1:3)
>>> lexer.token()
Token(NUMBER, '1', 1:1)
"""

from collections import deque
from typing import Iterator, Optional, Union

from pratt_calc.config import CalcConfig
from pratt_calc.tokenizer import Tokenizer
from pratt_calc.tokens import EOF_TOKEN, NONE_TOKEN, Token


class Lexer:
    """
    Forward cursor with bounded lookahead over a Tokenizer's output.

    Before the first next() both the current and previous tokens are the
    NONE sentinel. Once the EOF token has been consumed, next() keeps
    returning it.

    Attributes:
        index: Number of next() calls made so far
        prev_token: The token that was current before the last next()
    """

    def __init__(
        self,
        source: Union[str, Tokenizer],
        config: Optional[CalcConfig] = None,
    ):
        """
        Initialize the lexer.

        Args:
            source: Expression text, or an existing Tokenizer to wrap
            config: Configuration (used for the filename of new tokenizers)
        """
        if isinstance(source, Tokenizer):
            self._tokenizer = source
        else:
            config = config or CalcConfig()
            self._tokenizer = Tokenizer(source, config.filename)

        self._buffer: deque[Token] = deque()
        self._token: Token = NONE_TOKEN
        self.prev_token: Token = NONE_TOKEN
        self.index = 0

    @property
    def tokenizer(self) -> Tokenizer:
        """The wrapped tokenizer."""
        return self._tokenizer

    # =========================================================================
    # Cursor Movement
    # =========================================================================

    def has_next(self) -> bool:
        """Check whether another token can still be consumed."""
        return bool(self._buffer) or self._tokenizer.is_available()

    def next(self) -> Token:
        """
        Advance one token and return the new current token.

        Buffered (peeked) tokens are consumed oldest first before the
        tokenizer is asked for more.
        """
        self.prev_token = self._token
        if self._buffer:
            self._token = self._buffer.popleft()
        elif self._tokenizer.is_available():
            self._token = self._tokenizer.read_token()
        elif not self._token.is_eof:
            self._token = EOF_TOKEN
        self.index += 1
        return self._token

    def token(self, lookahead: int = 0) -> Token:
        """
        Return the current token, or the token `lookahead` positions ahead.

        Args:
            lookahead: 0 for the current token, k >= 1 to peek ahead

        Returns:
            The requested token; EOF when peeking past the end of input
        """
        if lookahead < 0:
            raise ValueError(f"lookahead must be non-negative, got {lookahead}")
        if lookahead == 0:
            return self._token

        self._ensure_lookahead(lookahead)
        if lookahead <= len(self._buffer):
            return self._buffer[lookahead - 1]

        # Input ran out before the requested depth
        if self._buffer:
            return self._buffer[-1]
        return self._token if self._token.is_eof else EOF_TOKEN

    def _ensure_lookahead(self, lookahead: int) -> None:
        """Pull tokens into the buffer until it holds `lookahead` of them."""
        while len(self._buffer) < lookahead and self._tokenizer.is_available():
            self._buffer.append(self._tokenizer.read_token())

    # =========================================================================
    # Iterator Protocol
    # =========================================================================

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        """Yield tokens up to and including EOF."""
        if self._token.is_eof:
            raise StopIteration
        return self.next()
