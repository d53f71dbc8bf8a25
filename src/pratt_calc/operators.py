"""
Operator Table
==============

This module is the single source of truth for operator behavior. Both
the parser and the evaluator query it; neither recomputes precedence or
fixity on its own, so adding an operator only needs a table entry here
(plus its arithmetic in the evaluator).

Precedence Levels
-----------------
Higher numbers bind tighter:

| Level | Operators   | Fixity  | Associativity |
|-------|-------------|---------|---------------|
| 100   | !           | postfix | right         |
| 90    | * / %       | infix   |               |
| 80    | + -         | both    | left          |
| 70    | << >>       | infix   |               |
| 60    | &           | infix   |               |
| 55    | ^           | infix   |               |
| 50    | \\|          | infix   |               |
| 40    | ~           | prefix  | left          |
| 0     | literals, parentheses, end of input           |

Operators with neither associativity flag follow the left-associative
default when parsed as infix.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


# =============================================================================
# Token Kinds
# =============================================================================

class TokenKind(Enum):
    """
    Closed set of token kinds.

    Operator metadata is exposed as properties but lives in
    OPERATOR_TABLE below.
    """

    # Sentinels
    NONE = auto()       # Before any token has been read
    EOF = auto()        # End of input

    # Values
    NUMBER = auto()     # Numeric literal (any radix)

    # Arithmetic operators
    ADD = auto()        # +
    SUB = auto()        # -
    STAR = auto()       # *
    SLASH = auto()      # /
    PERCENT = auto()    # %

    # Bitwise operators
    AMP = auto()        # &
    BAR = auto()        # |
    TILDE = auto()      # ~
    CARET = auto()      # ^
    LSHIFT = auto()     # <<
    RSHIFT = auto()     # >>

    # Postfix
    BANG = auto()       # ! (factorial)

    # Grouping
    LPAREN = auto()     # (
    RPAREN = auto()     # )

    @property
    def info(self) -> "OperatorInfo":
        return OPERATOR_TABLE[self]

    @property
    def symbol(self) -> Optional[str]:
        return self.info.symbol

    @property
    def precedence(self) -> int:
        return self.info.precedence

    @property
    def is_prefix(self) -> bool:
        return self.info.prefix

    @property
    def is_infix(self) -> bool:
        return self.info.infix

    @property
    def is_postfix(self) -> bool:
        return self.info.postfix

    @property
    def is_value(self) -> bool:
        return self.info.value

    @property
    def is_left_associative(self) -> bool:
        return self.info.left_assoc

    @property
    def is_right_associative(self) -> bool:
        return self.info.right_assoc


# =============================================================================
# Operator Metadata
# =============================================================================

@dataclass(frozen=True)
class OperatorInfo:
    """
    Static metadata for one token kind.

    Attributes:
        symbol: Display symbol (None for literals and sentinels)
        precedence: Binding strength, higher binds tighter
        prefix: May appear before an operand
        infix: May appear between two operands
        postfix: May appear after an operand
        value: Is a value (literal) token
        left_assoc: Flagged left-associative
        right_assoc: Flagged right-associative
    """
    symbol: Optional[str] = None
    precedence: int = 0
    prefix: bool = False
    infix: bool = False
    postfix: bool = False
    value: bool = False
    left_assoc: bool = False
    right_assoc: bool = False


OPERATOR_TABLE: dict[TokenKind, OperatorInfo] = {
    TokenKind.NONE: OperatorInfo(),
    TokenKind.EOF: OperatorInfo(),
    TokenKind.NUMBER: OperatorInfo(value=True),
    TokenKind.ADD: OperatorInfo("+", 80, prefix=True, infix=True, left_assoc=True),
    TokenKind.SUB: OperatorInfo("-", 80, prefix=True, infix=True, left_assoc=True),
    TokenKind.STAR: OperatorInfo("*", 90, infix=True),
    TokenKind.SLASH: OperatorInfo("/", 90, infix=True),
    TokenKind.PERCENT: OperatorInfo("%", 90, infix=True),
    TokenKind.AMP: OperatorInfo("&", 60, infix=True),
    TokenKind.BAR: OperatorInfo("|", 50, infix=True),
    TokenKind.TILDE: OperatorInfo("~", 40, prefix=True, left_assoc=True),
    TokenKind.CARET: OperatorInfo("^", 55, infix=True),
    TokenKind.LSHIFT: OperatorInfo("<<", 70, infix=True),
    TokenKind.RSHIFT: OperatorInfo(">>", 70, infix=True),
    TokenKind.BANG: OperatorInfo("!", 100, postfix=True, right_assoc=True),
    TokenKind.LPAREN: OperatorInfo("("),
    TokenKind.RPAREN: OperatorInfo(")"),
}

# Symbol lookup for the tokenizer, built from the table so the two cannot drift
SYMBOL_TO_KIND: dict[str, TokenKind] = {
    info.symbol: kind
    for kind, info in OPERATOR_TABLE.items()
    if info.symbol is not None
}


# =============================================================================
# Query Helpers
# =============================================================================

def lookup(kind: TokenKind) -> OperatorInfo:
    """Return the metadata for a token kind."""
    return OPERATOR_TABLE[kind]


def precedence(kind: TokenKind) -> int:
    """Return the precedence of a token kind (0 for non-operators)."""
    return OPERATOR_TABLE[kind].precedence


def binding_power(kind: TokenKind) -> int:
    """
    Return the threshold used to parse the operand that follows an operator.

    Left-associative and unflagged operators parse their operand at their
    own precedence, so an operator of the same level ends the operand and
    groups to the left. Right-associative operators use one less, letting
    an operator of the same level nest to the right.
    """
    info = OPERATOR_TABLE[kind]
    if info.right_assoc:
        return info.precedence - 1
    return info.precedence


def symbol_to_kind(symbol: str) -> Optional[TokenKind]:
    """Map an operator symbol to its kind, or None if unknown."""
    return SYMBOL_TO_KIND.get(symbol)
