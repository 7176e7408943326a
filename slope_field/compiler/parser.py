"""Recursive‑descent parser for the equation language.

Grammar, lowest to highest precedence::

    expression := term (("+" | "-") term)*
    term       := unary (("*" | "/") unary)*
    unary      := ("-" | "+") unary | primary
    primary    := NUMBER | "x" | "y" | "(" expression ")" | call
    call       := NAME "(" [expression ("," expression)*] ")"
                | NAME unary          # implicit first argument, e.g. "sin x"
                | NAME                # constant, e.g. "pi"

A function name that is not followed by ``(`` takes the next unary operand as
its argument, so ``sin x + cos x`` reads as ``sin(x) + cos(x)`` and
``sin 2*x`` as ``sin(2) * x``.
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, NoReturn

from ..constants import MAX_EQUATION_TOKENS, MAX_NESTING
from ..errors import ParseError
from ..registry import DEFAULT_REGISTRY, FunctionRegistry
from .nodes import VARIABLES, BinaryOp, Call, Literal, Node, UnaryOp, Variable
from .tokens import Token, tokenize

__all__ = ["parse"]

# Tokens that may begin an operand
_OPERAND_OPS = {"(", "-", "+"}


class _Parser:
    def __init__(self, text: str, registry: FunctionRegistry) -> None:
        self.text = text
        self.registry = registry
        self.tokens = tokenize(text)
        self.idx = 0
        self.depth = 0
        if len(self.tokens) - 1 > MAX_EQUATION_TOKENS:
            raise ParseError(
                f"equation is too long; the limit is {MAX_EQUATION_TOKENS} tokens",
                text=text,
                position=self.tokens[MAX_EQUATION_TOKENS].pos,
            )

    # ------------------------------------------------------------------
    # Token helpers
    # ------------------------------------------------------------------
    @property
    def current(self) -> Token:
        return self.tokens[self.idx]

    def _peek_is(self, text: str) -> bool:
        tok = self.current
        return tok.kind == "op" and tok.text == text

    def _advance(self) -> Token:
        tok = self.current
        if tok.kind != "end":
            self.idx += 1
        return tok

    def _expect(self, text: str) -> Token:
        if not self._peek_is(text):
            self._unexpected(f"expected {text!r}")
        return self._advance()

    def _error(self, message: str, tok: Token | None = None) -> ParseError:
        tok = tok or self.current
        return ParseError(message, text=self.text, position=tok.pos)

    def _unexpected(self, hint: str | None = None) -> NoReturn:
        tok = self.current
        if tok.kind == "end":
            message = "unexpected end of equation"
        elif tok.kind == "op" and tok.text == "^":
            message = "'^' is not supported; use pow(a, b)"
        else:
            message = f"unexpected {tok.text!r}"
        if hint and tok.text != "^":
            message = f"{message}, {hint}"
        raise self._error(message, tok)

    @contextmanager
    def _nested(self, tok: Token) -> Iterator[None]:
        self.depth += 1
        try:
            if self.depth > MAX_NESTING:
                raise self._error("equation is nested too deeply", tok)
            yield
        finally:
            self.depth -= 1

    def _starts_operand(self) -> bool:
        tok = self.current
        if tok.kind in ("number", "name"):
            return True
        return tok.kind == "op" and tok.text in _OPERAND_OPS

    # ------------------------------------------------------------------
    # Grammar
    # ------------------------------------------------------------------
    def parse(self) -> Node:
        if self.current.kind == "end":
            raise ParseError("equation is empty", text=self.text)
        node = self._expression()
        if self.current.kind != "end":
            if self._peek_is(")"):
                raise self._error("unbalanced ')'")
            self._unexpected()
        return node

    def _expression(self) -> Node:
        node = self._term()
        while self._peek_is("+") or self._peek_is("-"):
            op = self._advance().text
            node = BinaryOp(op, node, self._term())
        return node

    def _term(self) -> Node:
        node = self._unary()
        while self._peek_is("*") or self._peek_is("/"):
            op = self._advance().text
            node = BinaryOp(op, node, self._unary())
        return node

    def _unary(self) -> Node:
        if self._peek_is("-") or self._peek_is("+"):
            tok = self._advance()
            with self._nested(tok):
                return UnaryOp(tok.text, self._unary())
        return self._primary()

    def _primary(self) -> Node:
        tok = self.current
        if tok.kind == "number":
            self._advance()
            return Literal(float(tok.text))
        if tok.kind == "name":
            self._advance()
            if tok.text in VARIABLES:
                if self._peek_is("("):
                    raise self._error(f"'{tok.text}' is a variable and cannot be called", tok)
                return Variable(tok.text)
            return self._call(tok)
        if self._peek_is("("):
            opening = self._advance()
            with self._nested(opening):
                node = self._expression()
            if not self._peek_is(")"):
                if self.current.kind == "end":
                    raise self._error("missing ')'", opening)
                self._unexpected("expected ')'")
            self._advance()
            return node
        self._unexpected()

    def _call(self, name_tok: Token) -> Node:
        name = name_tok.text
        if name not in self.registry:
            raise self._error(f"unknown identifier '{name}'", name_tok)

        if self._peek_is("("):
            with self._nested(name_tok):
                args = self._arguments()
        elif self.registry.is_callable(name) and self._starts_operand():
            with self._nested(name_tok):
                args = [self._unary()]
        elif self.registry.resolve(name, 0) is not None:
            args = []
        else:
            raise self._error(f"'{name}' needs an argument", name_tok)

        if self.registry.resolve(name, len(args)) is None:
            accepted = " or ".join(str(a) for a in self.registry.arities(name))
            raise self._error(
                f"'{name}' takes {accepted} argument(s), got {len(args)}", name_tok
            )
        return Call(name, tuple(args))

    def _arguments(self) -> list[Node]:
        opening = self._expect("(")
        args: list[Node] = []
        if self._peek_is(")"):
            self._advance()
            return args
        while True:
            args.append(self._expression())
            if self._peek_is(","):
                self._advance()
                continue
            if self._peek_is(")"):
                self._advance()
                return args
            if self.current.kind == "end":
                raise self._error("missing ')'", opening)
            self._unexpected("expected ',' or ')'")


def parse(text: str, registry: FunctionRegistry = DEFAULT_REGISTRY) -> Node:
    """Parse *text* into an expression tree, raising :class:`ParseError`."""
    return _Parser(text, registry).parse()
