"""Turn a parsed expression tree into a numeric ``f(x, y)``."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

import numpy as np

from ..errors import ParseError
from ..registry import DEFAULT_REGISTRY, FunctionRegistry
from .nodes import BinaryOp, Call, Literal, Node, UnaryOp, Variable, to_source
from .parser import parse

__all__ = ["CompiledEquation", "compile_equation"]

logger = logging.getLogger(__name__)

_Fn = Callable[[Any, Any], Any]

_BINARY: dict[str, Callable[[Any, Any], Any]] = {
    "+": np.add,
    "-": np.subtract,
    "*": np.multiply,
    "/": np.divide,
}


def _build(node: Node, registry: FunctionRegistry) -> _Fn:
    if isinstance(node, Literal):
        value = np.float64(node.value)
        return lambda x, y: value
    if isinstance(node, Variable):
        if node.name == "x":
            return lambda x, y: x
        return lambda x, y: y
    if isinstance(node, UnaryOp):
        operand = _build(node.operand, registry)
        if node.op == "+":
            return operand
        return lambda x, y: np.negative(operand(x, y))
    if isinstance(node, BinaryOp):
        op = _BINARY[node.op]
        left = _build(node.left, registry)
        right = _build(node.right, registry)
        return lambda x, y: op(left(x, y), right(x, y))
    if isinstance(node, Call):
        entry = registry.resolve(node.name, len(node.args))
        if entry is None:
            raise ParseError(f"'{node.name}' cannot take {len(node.args)} argument(s)")
        impl = entry.impl
        if entry.is_constant:
            const = np.float64(impl())
            return lambda x, y: const
        args = [_build(a, registry) for a in node.args]
        if len(args) == 1:
            (arg,) = args
            return lambda x, y: impl(arg(x, y))
        return lambda x, y: impl(*(a(x, y) for a in args))
    raise ParseError(f"unsupported expression node {node!r}")


def _check_signature(fn: _Fn, text: str) -> None:
    """Ensure *fn* maps two floats to one real float."""
    try:
        with np.errstate(all="ignore"):
            sample = fn(np.float64(0.0), np.float64(0.0))
    except Exception as exc:
        raise ParseError(f"equation cannot be evaluated: {exc}", text=text) from exc
    if np.ndim(sample) != 0 or not np.isrealobj(sample):
        raise ParseError("equation does not produce a real number", text=text)


@dataclass(frozen=True)
class CompiledEquation:
    """Immutable, callable ``f(x, y)`` built from equation text.

    Calling the object evaluates a single point and returns a Python float;
    undefined results come back as ``nan`` or ``±inf`` rather than raising.
    :meth:`evaluate` does the same element‑wise over NumPy arrays.
    """

    text: str
    tree: Node
    _fn: _Fn = field(repr=False, compare=False)

    def __call__(self, x: float, y: float) -> float:
        with np.errstate(all="ignore"):
            return float(self._fn(np.float64(x), np.float64(y)))

    def evaluate(self, x: Any, y: Any) -> np.ndarray:
        xs = np.asarray(x, dtype=np.float64)
        ys = np.asarray(y, dtype=np.float64)
        shape = np.broadcast_shapes(xs.shape, ys.shape)
        with np.errstate(all="ignore"):
            out = np.asarray(self._fn(xs, ys), dtype=np.float64)
        return np.broadcast_to(out, shape)

    @property
    def canonical(self) -> str:
        """The parsed form with all grouping explicit."""
        return to_source(self.tree)

    def to_sympy(self) -> Any:  # noqa: ANN401 – sympy.Expr
        from .symbolic import to_sympy

        return to_sympy(self.tree)

    @property
    def latex(self) -> str:
        from .symbolic import to_latex

        return to_latex(self.tree)


def compile_equation(text: str, registry: FunctionRegistry = DEFAULT_REGISTRY) -> CompiledEquation:
    """Parse and compile the right‑hand side of ``y' = f(x, y)``.

    Raises :class:`ParseError` for malformed syntax, unknown identifiers,
    wrong arities, or an expression that does not yield a real number.
    """
    try:
        tree = parse(text, registry)
        fn = _build(tree, registry)
        _check_signature(fn, text)
    except RecursionError:
        raise ParseError("equation is nested too deeply", text=text) from None
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("compiled %r as %s", text, to_source(tree))
    return CompiledEquation(text=text, tree=tree, _fn=fn)
