"""
Pratt Expression Parser
=======================

This module builds an expression tree from the lexer's token stream
using precedence climbing (Pratt parsing). All operator knowledge comes
from the operator table; the parser itself only knows the three roles a
token can play.

Terminology
-----------
- rbp (right binding power): the precedence threshold of the current
  parse call. The loop keeps extending the left-hand expression while
  the next operator binds tighter than rbp.
- nud (null denotation): handling of a token with no left operand,
  i.e. a prefix operator such as -x or ~x. Postfix operators directly
  following an operand (x!) are attached at the same step.
- led (left denotation): handling of an infix operator that already has
  a left operand.

Algorithm
---------
    parse(rbp):
        left = factor()              # literal, ( expr ), or prefix op
        left = postfix(left)         # x!, x!!
        while rbp < precedence(next token):
            left = led(left)         # left op parse(binding_power(op))
        return left

An operator's operand is parsed at its binding power: its precedence
for left-associative (and unflagged) operators, one less for
right-associative ones. Equal-precedence operators therefore group to
the left unless the table says otherwise.

Trees deeper than MAX_TREE_DEPTH are rejected with a SyntaxError, so
every tree the parser returns can be printed and evaluated recursively.

Example Usage
-------------
>>> from pratt_calc.parser import parse_expression
>>> str(parse_expression("2+3*4"))
'(2+(3*4))'
>>> str(parse_expression("-2*3!"))
'(-(2*(3!)))'
"""

import logging
from typing import Optional

from pratt_calc.ast import ExprNode, InfixOpNode, PostfixOpNode, PrefixOpNode, ValueNode
from pratt_calc.config import CalcConfig
from pratt_calc.errors import SyntaxError
from pratt_calc.lexer import Lexer
from pratt_calc.operators import TokenKind, binding_power
from pratt_calc.tokens import Token

logger = logging.getLogger(__name__)

# Longest operator chain from root to literal; see ExprNode.depth
MAX_TREE_DEPTH = 256


class Parser:
    """
    Precedence-climbing parser over a Lexer.

    One Parser handles one expression; parse() is called once and
    consumes tokens up to the end of the expression. It does not check
    that the input is exhausted afterwards, see expect_end().

    Usage:
        parser = Parser(Lexer("1 + 2"))
        tree = parser.parse()
    """

    def __init__(self, lexer: Lexer):
        self._lexer = lexer

    # =========================================================================
    # Main Parsing Interface
    # =========================================================================

    def parse(self) -> Optional[ExprNode]:
        """
        Parse one expression.

        Returns:
            The root of the expression tree, or None for empty input

        Raises:
            SyntaxError: If the tokens do not form an expression, or nest
                         deeper than MAX_TREE_DEPTH or the recursion limit
            LexicalError: If the tokenizer hits invalid input
        """
        try:
            node = self._parse(0)
        except RecursionError:
            raise self._error(
                "expression nested too deeply",
                self._lexer.token(),
                hint="remove redundant parentheses or prefix operators",
            ) from None
        if node is None:
            logger.debug("Parsed empty expression")
        else:
            logger.debug(f"Parsed {node} from {self._lexer.index} tokens")
        return node

    def expect_end(self) -> None:
        """
        Require that no tokens remain after the parsed expression.

        Raises:
            SyntaxError: If a token other than EOF follows the expression
        """
        if self._lexer.token().is_eof:
            return
        trailing = self._lexer.token(1)
        if not trailing.is_eof:
            raise self._error(
                f"unexpected token '{trailing}' after expression",
                trailing,
                hint="an expression ends here; is an operator missing?",
            )

    # =========================================================================
    # Precedence Climbing
    # =========================================================================

    def _parse(self, rbp: int) -> Optional[ExprNode]:
        """Parse an expression whose operators all bind tighter than rbp."""
        left = self._factor()
        if left is None:
            return None

        left = self._postfix(left, rbp)

        while rbp < self._lexer.token(1).kind.precedence:
            node = self._led(left)
            if node is None:
                break
            left = node

        return left

    def _factor(self) -> Optional[ExprNode]:
        """
        Consume the token that starts an operand.

        Grammar:
            factor -> NUMBER | "(" expr ")" | prefix-op factor | EOF
        """
        token = self._lexer.next()
        kind = token.kind

        if kind is TokenKind.EOF:
            return None

        if kind is TokenKind.LPAREN:
            node = self._parse(0)
            if node is None:
                raise self._error("expected expression after '('", token)
            self._consume(TokenKind.RPAREN, opening=token)
            return node

        if kind.is_value:
            return ValueNode(token)

        if kind.is_prefix:
            return self._nud(token)

        prev = self._lexer.prev_token
        hint = None
        if prev.kind is not TokenKind.NONE:
            hint = f"'{prev}' must be followed by a number or '('"
        raise self._error(f"unexpected token '{token}'", token, hint=hint)

    def _nud(self, op: Token) -> ExprNode:
        """Build a prefix node; the operand extends while operators bind tighter."""
        operand = self._parse(binding_power(op.kind))
        if operand is None:
            raise self._error(f"expected operand after '{op}'", op)
        node = self._check_depth(PrefixOpNode(op, operand), op)
        logger.debug(f"nud: {op!r}, depth {node.depth}")
        return node

    def _postfix(self, left: ExprNode, rbp: int) -> ExprNode:
        """Attach any postfix operators that directly follow an operand."""
        while True:
            op = self._lexer.token(1)
            if not (op.kind.is_postfix and rbp < op.kind.precedence):
                return left
            self._lexer.next()
            left = self._check_depth(PostfixOpNode(left, op), op)
            logger.debug(f"nud: {op!r}, depth {left.depth}")

    def _led(self, left: ExprNode) -> Optional[ExprNode]:
        """
        Build an infix node with `left` as its left operand.

        Returns:
            The new node, or None if the next token is not an infix operator
        """
        op = self._lexer.token(1)
        if not op.kind.is_infix:
            return None
        self._lexer.next()

        right = self._parse(binding_power(op.kind))
        if right is None:
            raise self._error(f"expected operand after '{op}'", op)

        node = self._check_depth(InfixOpNode(left, op, right), op)
        logger.debug(f"led: {op!r}, depth {node.depth}")
        return node

    # =========================================================================
    # Token Helpers
    # =========================================================================

    def _check_depth(self, node: ExprNode, op: Token) -> ExprNode:
        """Reject a node that makes the tree deeper than MAX_TREE_DEPTH."""
        if node.depth > MAX_TREE_DEPTH:
            raise self._error(
                "expression nested too deeply",
                op,
                hint=f"at most {MAX_TREE_DEPTH} levels of operators are supported",
            )
        return node

    def _consume(self, kind: TokenKind, opening: Token) -> Token:
        """Consume a token of the expected kind or raise SyntaxError."""
        token = self._lexer.next()
        if token.kind is not kind:
            raise self._error(
                f"expected '{kind.symbol}', got '{token}'",
                token,
                hint=f"'{opening}' opened at {opening.location} is never closed",
            )
        return token

    def _error(self, message: str, token: Token, hint: Optional[str] = None) -> SyntaxError:
        """Create a SyntaxError located at `token` (when it has a position)."""
        if token.line == 0:
            return SyntaxError(message, hint=hint)
        return SyntaxError(
            message,
            token.location,
            hint=hint,
            source_line=self._lexer.tokenizer.get_line(token.line),
        )


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_expression(source: str, config: Optional[CalcConfig] = None) -> Optional[ExprNode]:
    """
    Parse expression text into a tree.

    Args:
        source: The expression text
        config: Optional configuration (filename for error locations)

    Returns:
        The expression tree, or None if the text holds no expression

    Raises:
        LexicalError: On invalid characters or malformed literals
        SyntaxError: On malformed expressions or trailing tokens
    """
    parser = Parser(Lexer(source, config))
    node = parser.parse()
    parser.expect_end()
    return node
