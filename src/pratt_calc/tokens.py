"""
Token Record
============

Immutable tokens produced by the tokenizer, plus the two sentinel
tokens used before the first read and after the end of input.
"""

from dataclasses import dataclass

from pratt_calc.errors import SourceLocation
from pratt_calc.operators import TokenKind


@dataclass(frozen=True)
class Token:
    """
    Represents a single lexical unit of the expression.

    Attributes:
        kind: The TokenKind classification
        value: Raw source text of the token ("" for sentinels)
        line: Line number in source (1-indexed, 0 for sentinels)
        column: Column number in source (1-indexed, 0 for sentinels)
        radix: Base of a numeric literal (2, 8, 10 or 16)
        filename: Name of the source
    """
    kind: TokenKind
    value: str
    line: int
    column: int
    radix: int = 10
    filename: str = "<input>"

    def __str__(self) -> str:
        if self.kind is TokenKind.EOF:
            return "EOF"
        return self.value

    def __repr__(self) -> str:
        if self.value:
            return f"Token({self.kind.name}, {self.value!r}, {self.line}:{self.column})"
        return f"Token({self.kind.name}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)

    @property
    def is_eof(self) -> bool:
        return self.kind is TokenKind.EOF


NONE_TOKEN = Token(TokenKind.NONE, "", 0, 0)
EOF_TOKEN = Token(TokenKind.EOF, "", 0, 0)
