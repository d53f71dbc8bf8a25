"""
Expression Tree Evaluator
=========================

This module reduces an expression tree to a floating-point number.

Semantics
---------
**Arithmetic** (+ - * / %): IEEE double arithmetic. Division by zero
is not an error: it yields +/-inf, or NaN for 0/0. Modulo follows C
fmod (result takes the sign of the dividend, x % 0 is NaN).

**Bitwise** (& | ^ ~ << >>): operands are first truncated to a signed
fixed-width integer (32 bits by default, see CalcConfig.int_bits):
- the fraction is dropped (toward zero)
- out-of-range values wrap around
- NaN becomes 0, +/-inf saturate to the integer limits
Shift counts are taken modulo the integer width, as on two's complement
hardware. The integer result wraps to the same width and is widened
back to a float.

**Factorial** (!): the operand is truncated toward zero, without wrapping,
to an integer x and 1*2*...*x is computed iteratively; x <= 0 and NaN
give 1, +inf gives inf.

Example Usage
-------------
>>> from pratt_calc.parser import parse_expression
>>> from pratt_calc.evaluator import evaluate
>>> evaluate(parse_expression("305 << 2 - 212 + 4 * 5!"))
4997120.0
"""

import logging
import math
from typing import Optional

from pratt_calc.ast import ExprNode, InfixOpNode, PostfixOpNode, PrefixOpNode, ValueNode
from pratt_calc.config import CalcConfig
from pratt_calc.errors import EvaluationError
from pratt_calc.operators import TokenKind
from pratt_calc.tokens import Token

logger = logging.getLogger(__name__)


# =============================================================================
# Literal Conversion
# =============================================================================

RADIX_PREFIX_LENGTH = 2  # "0x", "0o", "0b"


def parse_literal(text: str, radix: int = 10) -> float:
    """
    Convert the raw text of a numeric literal to a float.

    Args:
        text: Literal text as scanned, e.g. "1_000", "0x1F", "0b1.1"
        radix: Radix recorded by the tokenizer (2, 8, 10 or 16)

    Returns:
        The literal's value; inf if it is too large for a float
    """
    body = text.replace("_", "")

    sign = 1.0
    if body[:1] in ("+", "-"):
        if body[0] == "-":
            sign = -1.0
        body = body[1:]

    if radix == 10:
        return sign * float(body)

    body = body[RADIX_PREFIX_LENGTH:]
    whole, _, fraction = body.partition(".")

    try:
        value = float(int(whole, radix)) if whole else 0.0
    except OverflowError:
        return sign * math.inf

    if fraction:
        value += int(fraction, radix) / radix ** len(fraction)

    return sign * value


# =============================================================================
# Evaluator
# =============================================================================

class Evaluator:
    """
    Tree-walking evaluator producing one float per node.

    Dispatch is over the closed set of node types; any other object,
    or an operator that does not belong to its node type, raises
    EvaluationError naming the offending token.

    Usage:
        evaluator = Evaluator(CalcConfig(int_bits=16))
        value = evaluator.evaluate(tree)
    """

    def __init__(self, config: Optional[CalcConfig] = None):
        self.config = config or CalcConfig()

    # =========================================================================
    # Main Evaluation Interface
    # =========================================================================

    def evaluate(self, node: Optional[ExprNode]) -> float:
        """
        Evaluate an expression tree.

        Args:
            node: Root of the tree. Must not be None: an empty input
                  parses to None and has no value.

        Returns:
            The value of the expression

        Raises:
            EvaluationError: For an empty tree, an unsupported operator or
                             a tree nested deeper than the interpreter
                             recursion limit
        """
        if node is None:
            raise EvaluationError(
                "cannot evaluate an empty expression",
                hint="check parse_expression() result for None first",
            )
        try:
            result = self._eval(node)
        except RecursionError:
            raise EvaluationError(
                "expression nested too deeply",
                hint="split the expression into smaller parts",
            ) from None
        logger.debug(f"Evaluated {node} = {result!r}")
        return result

    def _eval(self, node: ExprNode) -> float:
        if isinstance(node, ValueNode):
            return parse_literal(node.value, node.radix)
        if isinstance(node, PrefixOpNode):
            return self._eval_prefix(node)
        if isinstance(node, InfixOpNode):
            return self._eval_infix(node)
        if isinstance(node, PostfixOpNode):
            return self._eval_postfix(node)
        raise EvaluationError(f"not an expression node: {node!r}")

    # =========================================================================
    # Node Handlers
    # =========================================================================

    def _eval_prefix(self, node: PrefixOpNode) -> float:
        """Evaluate +x, -x, ~x."""
        operand = self._eval(node.operand)
        kind = node.op.kind

        if kind is TokenKind.ADD:
            return operand
        if kind is TokenKind.SUB:
            return -operand
        if kind is TokenKind.TILDE:
            return float(self._wrap(~self.to_int(operand)))

        raise self._unknown_operator("prefix", node.op)

    def _eval_infix(self, node: InfixOpNode) -> float:
        """Evaluate binary arithmetic and bitwise operators."""
        lhs = self._eval(node.left)
        rhs = self._eval(node.right)
        kind = node.op.kind

        # Arithmetic on floats
        if kind is TokenKind.ADD:
            return lhs + rhs
        if kind is TokenKind.SUB:
            return lhs - rhs
        if kind is TokenKind.STAR:
            return lhs * rhs
        if kind is TokenKind.SLASH:
            return divide(lhs, rhs)
        if kind is TokenKind.PERCENT:
            return remainder(lhs, rhs)

        # Bitwise on truncated integers
        if kind is TokenKind.AMP:
            return float(self.to_int(lhs) & self.to_int(rhs))
        if kind is TokenKind.BAR:
            return float(self.to_int(lhs) | self.to_int(rhs))
        if kind is TokenKind.CARET:
            return float(self.to_int(lhs) ^ self.to_int(rhs))
        if kind is TokenKind.LSHIFT:
            count = self.to_int(rhs) % self.config.int_bits
            return float(self._wrap(self.to_int(lhs) << count))
        if kind is TokenKind.RSHIFT:
            count = self.to_int(rhs) % self.config.int_bits
            return float(self.to_int(lhs) >> count)

        raise self._unknown_operator("infix", node.op)

    def _eval_postfix(self, node: PostfixOpNode) -> float:
        """Evaluate x! (the only postfix operator)."""
        operand = self._eval(node.operand)

        if node.op.kind is TokenKind.BANG:
            # Truncated but not wrapped to int_bits
            if math.isnan(operand):
                return factorial(0)
            if math.isinf(operand):
                return math.inf if operand > 0 else factorial(0)
            return factorial(math.trunc(operand))

        raise self._unknown_operator("postfix", node.op)

    # =========================================================================
    # Fixed-Width Integer Helpers
    # =========================================================================

    def to_int(self, value: float) -> int:
        """
        Truncate a float to the configured signed integer width.

        The fraction is dropped toward zero and out-of-range values wrap.
        NaN maps to 0; infinities saturate to the integer limits.
        """
        if math.isnan(value):
            return 0
        if math.isinf(value):
            return self.config.int_max if value > 0 else self.config.int_min
        return self._wrap(int(value))

    def _wrap(self, value: int) -> int:
        """Wrap an arbitrary integer into the configured signed width."""
        bits = self.config.int_bits
        value &= (1 << bits) - 1
        if value >= 1 << (bits - 1):
            value -= 1 << bits
        return value

    def _unknown_operator(self, role: str, op: Token) -> EvaluationError:
        location = op.location if op.line else None
        return EvaluationError(f"unsupported {role} operator '{op}'", location)


# =============================================================================
# Float Helpers
# =============================================================================

def divide(lhs: float, rhs: float) -> float:
    """IEEE division: x/0 is +/-inf, 0/0 and nan/0 are NaN."""
    if rhs == 0.0:
        if lhs == 0.0 or math.isnan(lhs):
            return math.nan
        return math.copysign(math.inf, lhs) * math.copysign(1.0, rhs)
    return lhs / rhs


def remainder(lhs: float, rhs: float) -> float:
    """C fmod semantics: sign of the dividend, NaN for x % 0 and inf % y."""
    if math.isnan(lhs) or math.isnan(rhs) or rhs == 0.0 or math.isinf(lhs):
        return math.nan
    if math.isinf(rhs):
        return lhs
    return math.fmod(lhs, rhs)


def factorial(n: int) -> float:
    """Iterative factorial as a float; n <= 0 gives 1, large n gives inf."""
    result = 1.0
    for i in range(2, n + 1):
        result *= i
        if math.isinf(result):
            break
    return result


# =============================================================================
# Convenience Functions
# =============================================================================

def evaluate(node: Optional[ExprNode], config: Optional[CalcConfig] = None) -> float:
    """
    Evaluate an expression tree.

    Args:
        node: Root of the tree returned by parse_expression()
        config: Optional configuration (integer width)

    Returns:
        The value of the expression

    Raises:
        EvaluationError: For an empty tree or an unsupported operator
    """
    return Evaluator(config).evaluate(node)
