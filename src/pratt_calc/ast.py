"""
Expression Abstract Syntax Tree
===============================

The parser produces a tree built from exactly four node types:

ExprNode
├── ValueNode - numeric literal
├── PrefixOpNode - operator before one operand (-x, ~x)
├── InfixOpNode - operator between two operands (a + b)
└── PostfixOpNode - operator after one operand (x!)

Design Notes
------------
- ExprNode is a closed union, not a base class: consumers such as the
  evaluator dispatch over the four types and fail on anything else
- Nodes are frozen dataclasses built bottom-up and never mutated
- Each node owns its children; subtrees are never shared
- str(node) is the display form. Every compound node is parenthesized,
  so the text re-parses to a tree with the same value
- depth counts the nodes on the longest path down to a literal; it is
  computed once at construction from the children, which already know theirs
"""

from dataclasses import dataclass, field
from typing import Union

from pratt_calc.tokens import Token


@dataclass(frozen=True)
class ValueNode:
    """
    Numeric literal.

    Attributes:
        token: The NUMBER token, carrying the raw text and its radix
    """
    token: Token
    depth: int = field(default=1, init=False, repr=False, compare=False)

    @property
    def value(self) -> str:
        """Raw literal text."""
        return self.token.value

    @property
    def radix(self) -> int:
        return self.token.radix

    def __str__(self) -> str:
        return self.token.value


@dataclass(frozen=True)
class PrefixOpNode:
    """
    Prefix operation (op operand).

    Attributes:
        op: The operator token (+, - or ~)
        operand: The operand expression
    """
    op: Token
    operand: "ExprNode"
    depth: int = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "depth", self.operand.depth + 1)

    def __str__(self) -> str:
        return f"({self.op.value}{self.operand})"


@dataclass(frozen=True)
class InfixOpNode:
    """
    Binary operation (left op right).

    Attributes:
        left: Left operand expression
        op: The operator token
        right: Right operand expression
    """
    left: "ExprNode"
    op: Token
    right: "ExprNode"
    depth: int = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "depth", max(self.left.depth, self.right.depth) + 1)

    def __str__(self) -> str:
        return f"({self.left}{self.op.value}{self.right})"


@dataclass(frozen=True)
class PostfixOpNode:
    """
    Postfix operation (operand op).

    Attributes:
        operand: The operand expression
        op: The operator token (!)
    """
    operand: "ExprNode"
    op: Token
    depth: int = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "depth", self.operand.depth + 1)

    def __str__(self) -> str:
        return f"({self.operand}{self.op.value})"


ExprNode = Union[ValueNode, PrefixOpNode, InfixOpNode, PostfixOpNode]


def dump_tree(node: ExprNode, indent: str = "  ") -> str:
    """
    Render a tree as an indented outline, one node per line.

    Example for "1+2*3":
        Infix +
          Value 1
          Infix *
            Value 2
            Value 3
    """
    lines: list[str] = []

    def walk(current: ExprNode, depth: int) -> None:
        pad = indent * depth
        if isinstance(current, ValueNode):
            lines.append(f"{pad}Value {current.value}")
        elif isinstance(current, PrefixOpNode):
            lines.append(f"{pad}Prefix {current.op.value}")
            walk(current.operand, depth + 1)
        elif isinstance(current, InfixOpNode):
            lines.append(f"{pad}Infix {current.op.value}")
            walk(current.left, depth + 1)
            walk(current.right, depth + 1)
        elif isinstance(current, PostfixOpNode):
            lines.append(f"{pad}Postfix {current.op.value}")
            walk(current.operand, depth + 1)
        else:
            raise TypeError(f"not an expression node: {current!r}")

    walk(node, 0)
    return "\n".join(lines)
