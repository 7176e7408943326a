"""SymPy view of a parsed equation, used for pretty and LaTeX display."""
from __future__ import annotations

from typing import Any, Callable

from .nodes import BinaryOp, Call, Literal, Node, UnaryOp, Variable

__all__ = ["to_sympy", "to_latex"]


def _calls() -> dict[tuple[str, int], Callable[..., Any]]:
    import sympy as sp

    return {
        ("exp", 1): sp.exp,
        ("sqrt", 1): sp.sqrt,
        ("pow", 2): sp.Pow,
        ("log", 1): lambda a: sp.log(a, 10),
        ("log", 2): sp.log,
        ("ln", 1): sp.log,
        ("cos", 1): sp.cos,
        ("sin", 1): sp.sin,
        ("tan", 1): sp.tan,
        ("atan", 1): sp.atan,
        ("acos", 1): sp.acos,
        ("asin", 1): sp.asin,
        ("tanh", 1): sp.tanh,
        ("cosh", 1): sp.cosh,
        ("sinh", 1): sp.sinh,
        ("abs", 1): sp.Abs,
        ("pi", 0): lambda: sp.pi,
        ("e", 0): lambda: sp.E,
    }


def to_sympy(node: Node) -> Any:  # noqa: ANN401 – sympy.Expr
    """Convert *node* to a SymPy expression over symbols ``x`` and ``y``."""
    import sympy as sp

    calls = _calls()

    def _convert(n: Node) -> Any:
        if isinstance(n, Literal):
            if n.value.is_integer():
                return sp.Integer(int(n.value))
            return sp.Float(n.value)
        if isinstance(n, Variable):
            return sp.Symbol(n.name, real=True)
        if isinstance(n, UnaryOp):
            operand = _convert(n.operand)
            return -operand if n.op == "-" else operand
        if isinstance(n, BinaryOp):
            left, right = _convert(n.left), _convert(n.right)
            if n.op == "+":
                return left + right
            if n.op == "-":
                return left - right
            if n.op == "*":
                return left * right
            return left / right
        if isinstance(n, Call):
            try:
                func = calls[(n.name, len(n.args))]
            except KeyError:
                raise ValueError(f"no symbolic form for '{n.name}'") from None
            return func(*(_convert(a) for a in n.args))
        raise TypeError(f"not an expression node: {n!r}")

    return _convert(node)


def to_latex(node: Node) -> str:
    import sympy as sp

    return sp.latex(to_sympy(node))
