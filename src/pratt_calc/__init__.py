"""
Pratt Calculator - Expression Parsing and Evaluation
====================================================

This package tokenizes arithmetic expressions, parses them into a tree
with a precedence-climbing (Pratt) parser, and evaluates the tree to a
floating-point number.

Main Components
---------------
- **tokenizer**: scans text into tokens (multi-radix literals, operators)
- **lexer**: lookahead buffer over the tokenizer
- **operators**: the operator table (precedence, fixity, associativity)
- **parser**: the Pratt parser building the expression tree
- **evaluator**: the tree-walking evaluator
- **cli**: the pcalc command-line tool

Supported Operators
-------------------
From loosest to tightest binding:

    ~x              bitwise NOT (prefix)
    a | b           bitwise OR
    a ^ b           bitwise XOR
    a & b           bitwise AND
    a << b, a >> b  shifts
    a + b, a - b    addition, subtraction (also prefix +x, -x)
    a * b, a / b, a % b
    x!              factorial (postfix)

Quick Start
-----------
    >>> from pratt_calc import parse_expression, evaluate
    >>> tree = parse_expression("(2 + 3) * 4")
    >>> str(tree)
    '((2+3)*4)'
    >>> evaluate(tree)
    20.0

    >>> from pratt_calc import calculate
    >>> calculate("0x10 | 0b11")
    19.0

Or use the command-line tool:
    $ pcalc "4 * 5!"
    480
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from typing import Optional

from pratt_calc.ast import (
    ExprNode,
    ValueNode,
    PrefixOpNode,
    InfixOpNode,
    PostfixOpNode,
    dump_tree,
)
from pratt_calc.config import CalcConfig
from pratt_calc.errors import (
    PrattError,
    LexicalError,
    SyntaxError as PrattSyntaxError,  # Avoid collision with builtin
    EvaluationError,
    SourceLocation,
)
from pratt_calc.evaluator import Evaluator, evaluate, parse_literal
from pratt_calc.lexer import Lexer
from pratt_calc.operators import OPERATOR_TABLE, OperatorInfo, TokenKind
from pratt_calc.parser import Parser, parse_expression
from pratt_calc.tokenizer import Tokenizer
from pratt_calc.tokens import EOF_TOKEN, NONE_TOKEN, Token


def calculate(source: str, config: Optional[CalcConfig] = None) -> float:
    """
    Parse and evaluate an expression in one call.

    Raises:
        PrattError: On any lexical, syntax or evaluation error, including
                    an empty expression
    """
    return evaluate(parse_expression(source, config), config)


__all__ = [
    "__version__",
    # Entry points
    "parse_expression",
    "evaluate",
    "calculate",
    # Components
    "Tokenizer",
    "Lexer",
    "Parser",
    "Evaluator",
    "parse_literal",
    # Tokens and operator table
    "Token",
    "TokenKind",
    "NONE_TOKEN",
    "EOF_TOKEN",
    "OperatorInfo",
    "OPERATOR_TABLE",
    # Tree
    "ExprNode",
    "ValueNode",
    "PrefixOpNode",
    "InfixOpNode",
    "PostfixOpNode",
    "dump_tree",
    # Configuration
    "CalcConfig",
    # Errors
    "PrattError",
    "LexicalError",
    "PrattSyntaxError",
    "EvaluationError",
    "SourceLocation",
]
