"""Expression tree produced by the parser."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

__all__ = [
    "Literal",
    "Variable",
    "UnaryOp",
    "BinaryOp",
    "Call",
    "Node",
    "VARIABLES",
    "to_source",
]

# Free variables of y' = f(x, y)
VARIABLES = ("x", "y")


@dataclass(frozen=True, slots=True)
class Literal:
    value: float


@dataclass(frozen=True, slots=True)
class Variable:
    name: str


@dataclass(frozen=True, slots=True)
class UnaryOp:
    op: str
    operand: "Node"


@dataclass(frozen=True, slots=True)
class BinaryOp:
    op: str
    left: "Node"
    right: "Node"


@dataclass(frozen=True, slots=True)
class Call:
    name: str
    args: tuple["Node", ...] = ()


Node = Union[Literal, Variable, UnaryOp, BinaryOp, Call]


def _format_number(value: float) -> str:
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def to_source(node: Node) -> str:
    """Render *node* back to text with every grouping made explicit.

    >>> to_source(BinaryOp("+", Call("sin", (Variable("x"),)), Literal(1.0)))
    '(sin(x) + 1)'
    """
    if isinstance(node, Literal):
        return _format_number(node.value)
    if isinstance(node, Variable):
        return node.name
    if isinstance(node, UnaryOp):
        return f"({node.op}{to_source(node.operand)})"
    if isinstance(node, BinaryOp):
        return f"({to_source(node.left)} {node.op} {to_source(node.right)})"
    if isinstance(node, Call):
        if not node.args:
            return node.name
        return f"{node.name}({', '.join(to_source(a) for a in node.args)})"
    raise TypeError(f"not an expression node: {node!r}")
