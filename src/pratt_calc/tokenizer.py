"""
Expression Tokenizer
====================

This module converts expression text into a stream of tokens for the
lookahead buffer and parser.

Token Kinds
-----------
- NUMBER: Decimal, hex (0x1F), octal (0o17) or binary (0b101) literals
- Operators: + - * / % & | ^ ~ ! << >>
- Grouping: ( )
- EOF: End of input (emitted exactly once)

Number Formats
--------------
| Format      | Prefix | Example   | Value |
|-------------|--------|-----------|-------|
| Decimal     | (none) | 123, 1.5  | 123   |
| Hexadecimal | 0x 0X  | 0x7F      | 127   |
| Octal       | 0o 0O  | 0o177     | 127   |
| Binary      | 0b 0B  | 0b1010    | 10    |

A leading zero alone does not mean octal. Underscores may separate
digits (1_000). A fractional part uses the same digit set as the
integer part, so 0x1.8 is 1.5. The token keeps the raw literal text;
its radix is recorded on the token for the evaluator.

Whitespace (space, tab, form feed) is skipped, and carriage returns and
newlines advance the line count. Any other unrecognized character is a
fail-fast LexicalError.

Example
-------
>>> from pratt_calc.tokenizer import Tokenizer
>>> for token in Tokenizer("0x10 << 2").tokenize():
...     print(repr(token))
Token(NUMBER, '0x10', 1:1)
Token(LSHIFT, '<<', 1:6)
Token(NUMBER, '2', 1:9)
Token(EOF, 1:10)
"""

import logging
from typing import Iterator, Optional

from pratt_calc.errors import LexicalError, SourceLocation
from pratt_calc.operators import TokenKind, symbol_to_kind
from pratt_calc.tokens import Token

logger = logging.getLogger(__name__)


# Digit sets per radix; "_" is a separator with no numeric meaning
DECIMAL_DIGITS = "0123456789_"
HEX_DIGITS = "0123456789abcdefABCDEF_"
OCTAL_DIGITS = "01234567_"
BINARY_DIGITS = "01_"

RADIX_PREFIXES = {
    "x": (16, HEX_DIGITS),
    "o": (8, OCTAL_DIGITS),
    "b": (2, BINARY_DIGITS),
}


class Tokenizer:
    """
    Scans expression text one token at a time.

    The cursor state (position, line, column) is private to the instance;
    a new Tokenizer is needed to rescan the input.

    Usage:
        tokenizer = Tokenizer("1 + 2")
        while tokenizer.is_available():
            token = tokenizer.read_token()

    Attributes:
        source: The expression text being tokenized
        filename: Name of the source (for error messages)
    """

    WHITESPACE = " \t\f"
    NEWLINES = "\r\n"

    # Operators that are only valid when doubled
    DOUBLED_OPERATORS = {"<": TokenKind.LSHIFT, ">": TokenKind.RSHIFT}

    def __init__(self, source: str, filename: str = "<input>"):
        self.source = source
        self.filename = filename

        self._pos = 0
        self._line = 1
        self._column = 1
        self._eof = False

    # =========================================================================
    # Public Interface
    # =========================================================================

    def is_available(self) -> bool:
        """
        Check whether another token can still be read.

        True until the cursor has moved past one-past-end, which happens
        when the EOF token is emitted.
        """
        return self._pos <= len(self.source)

    def read_token(self) -> Token:
        """
        Scan and return the next token.

        Returns:
            The next Token; an EOF token once the input is exhausted

        Raises:
            LexicalError: On an unrecognized character, a malformed
                          operator or literal, or a read after EOF
        """
        if self._eof:
            raise self._error("no more tokens: end of input already reached")

        while not self._at_end():
            char = self._peek()

            if char in self.WHITESPACE:
                self._advance()
                continue

            if char in self.NEWLINES:
                self._advance()
                continue

            token = self._scan_token()
            logger.debug(f"Scanned {token!r}")
            return token

        # Step past one-past-end so is_available() turns false
        self._eof = True
        token = self._make_token(TokenKind.EOF, "")
        self._pos = len(self.source) + 1
        logger.debug(f"Scanned {token!r}")
        return token

    def tokenize(self) -> Iterator[Token]:
        """
        Generate all tokens from the source, ending with EOF.

        Yields:
            Token objects for each lexical element
        """
        while self.is_available():
            yield self.read_token()

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        """Look at a character without advancing; "" past the end."""
        pos = self._pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _advance(self) -> str:
        """Consume one character, keeping line and column up to date."""
        if self._at_end():
            return ""

        char = self.source[self._pos]
        self._pos += 1

        # "\r\n" counts as a single line break
        if char == "\n" or (char == "\r" and self._peek() != "\n"):
            self._line += 1
            self._column = 1
        else:
            self._column += 1

        return char

    def _accept(self, valid: str) -> str:
        """Consume the next character if it is one of `valid`; return it or ""."""
        # Note: '' in 'abc' is True in Python, so check for end first
        char = self._peek()
        if char and char in valid:
            return self._advance()
        return ""

    def _accept_run(self, valid: str) -> str:
        """Consume a run of characters from `valid` and return it."""
        chars = []
        while self._peek() and self._peek() in valid:
            chars.append(self._advance())
        return "".join(chars)

    # =========================================================================
    # Token Creation
    # =========================================================================

    def _make_token(
        self,
        kind: TokenKind,
        value: str,
        start_line: Optional[int] = None,
        start_column: Optional[int] = None,
        radix: int = 10,
    ) -> Token:
        return Token(
            kind=kind,
            value=value,
            line=start_line or self._line,
            column=start_column or self._column,
            radix=radix,
            filename=self.filename,
        )

    def _error(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        hint: Optional[str] = None,
    ) -> LexicalError:
        """Create a LexicalError pointing at the given (or current) position."""
        location = SourceLocation(
            self.filename, line or self._line, column or self._column
        )
        return LexicalError(
            message, location, hint=hint, source_line=self.get_current_line()
        )

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_token(self) -> Token:
        start_line = self._line
        start_column = self._column

        char = self._peek()

        # ASCII only; str.isdigit() also accepts "²" and friends
        if char in "0123456789":
            return self._scan_number(start_line, start_column)

        if char in self.DOUBLED_OPERATORS:
            self._advance()
            if not self._accept(char):
                raise self._error(
                    f"unexpected character '{char}'",
                    start_line,
                    start_column,
                    hint=f"shift operators are written '{char}{char}'",
                )
            return self._make_token(
                self.DOUBLED_OPERATORS[char], char * 2, start_line, start_column
            )

        kind = symbol_to_kind(char)
        if kind is not None:
            self._advance()
            return self._make_token(kind, char, start_line, start_column)

        raise self._error(f"unexpected character '{char}'", start_line, start_column)

    def _scan_number(self, start_line: int, start_column: int) -> Token:
        """
        Scan a numeric literal.

        Grammar: [sign] [0x|0o|0b] digits ["." digits], where the digit
        set is chosen by the radix prefix and may contain "_".
        """
        start = self._pos

        self._accept("+-")

        radix = 10
        digits = DECIMAL_DIGITS
        prefix = ""
        if self._accept("0"):
            marker = self._peek().lower()
            if marker in RADIX_PREFIXES:
                prefix = "0" + self._advance()
                radix, digits = RADIX_PREFIXES[marker]

        run = self._accept_run(digits)
        if prefix and not run.replace("_", ""):
            raise self._error(
                f"expected digits after '{prefix}'", start_line, start_column
            )

        if self._accept("."):
            self._accept_run(digits)

        text = self.source[start:self._pos]
        return self._make_token(
            TokenKind.NUMBER, text, start_line, start_column, radix=radix
        )

    # =========================================================================
    # Utility Methods
    # =========================================================================

    def get_current_line(self) -> str:
        """Get the current line of source text, for error reporting."""
        return self.get_line(self._line)

    def get_line(self, line_number: int) -> str:
        """
        Get a line of source text by its 1-indexed number.

        Returns an empty string for lines outside the source.
        """
        lines = self.source.replace("\r\n", "\n").replace("\r", "\n").split("\n")
        if 1 <= line_number <= len(lines):
            return lines[line_number - 1]
        return ""
