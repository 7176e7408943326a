"""Expression compiler: equation text → callable ``f(x, y)``."""

from .equation import CompiledEquation, compile_equation
from .nodes import BinaryOp, Call, Literal, Node, UnaryOp, Variable, to_source
from .parser import parse
from .tokens import Token, tokenize

__all__ = [
    "CompiledEquation",
    "compile_equation",
    "parse",
    "tokenize",
    "Token",
    "Node",
    "Literal",
    "Variable",
    "UnaryOp",
    "BinaryOp",
    "Call",
    "to_source",
]
