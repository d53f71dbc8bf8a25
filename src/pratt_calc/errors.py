"""
Pratt Calculator Error Hierarchy
================================

This module defines the exception hierarchy for the calculator.
All exceptions inherit from PrattError, allowing callers to catch every
tokenizing, parsing, and evaluation failure with a single except clause.

Exception Hierarchy
-------------------
PrattError (base)
├── LexicalError - unrecognized character or malformed token
├── SyntaxError - token sequence does not form an expression
└── EvaluationError - tree cannot be reduced to a number

Every error is fail-fast: the first problem aborts the whole call and
no partial tree or partial result is returned.

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
            ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the expression text for error reporting.

    Attributes:
        filename: Name of the source (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Base Exception Class
# =============================================================================

class PrattError(Exception):
    """
    Base exception for all calculator errors.

    Provides common formatting for error messages including source
    location tracking and optional hint messages:

        try:
            value = calculate("(1+2")
        except PrattError as e:
            print(f"Error: {e}")

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The actual source text at the error location (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            <input>:1:2: error: unexpected character '<'
                1<2
                 ^
            hint: shifts are written '<<' and '>>'
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Concrete Errors
# =============================================================================

class LexicalError(PrattError):
    """
    Error raised while scanning characters into tokens.

    Examples:
        - Unrecognized character ('$', '<' not followed by '<')
        - Radix prefix with no digits ("0x")
        - Reading past the end-of-input token
    """
    pass


class SyntaxError(PrattError):
    """
    Token sequence does not form a valid expression.

    Shadows the builtin inside this module only; the package exports it
    as PrattSyntaxError.

    Examples:
        - Operator where an operand is required ("1+*2")
        - Unbalanced parenthesis ("(1+2")
        - Tokens left over after a complete expression ("1 2")
    """
    pass


class EvaluationError(PrattError):
    """
    Error reducing an expression tree to a number.

    Raised when a node carries an operator its node type does not
    support, or when an absent (empty) expression is evaluated.
    Floating-point division by zero is not an error.
    """
    pass
