from __future__ import annotations

import dataclasses
import math
import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from slope_field import compile_equation  # noqa: E402
from slope_field.errors import ParseError  # noqa: E402


def test_pure_arithmetic_matches_python() -> None:
    f = compile_equation("x*x+1")
    assert f(3, 0) == 10.0
    g = compile_equation("(x - 2) / 4 * -3 + 0.5")
    for x in (-3.0, 0.0, 1.25, 7.0):
        assert g(x, 0.0) == pytest.approx((x - 2) / 4 * -3 + 0.5)


def test_both_variables() -> None:
    f = compile_equation("x - 2*y")
    assert f(1.0, 3.0) == -5.0


def test_implicit_application_round_trip() -> None:
    f = compile_equation("sin x + cos x")
    for x in np.linspace(-5.0, 5.0, 21):
        assert f(x, 0.0) == pytest.approx(math.sin(x) + math.cos(x), abs=1e-6)


def test_registry_functions() -> None:
    assert compile_equation("log(100)")(0, 0) == pytest.approx(2.0)
    assert compile_equation("log(8, 2)")(0, 0) == pytest.approx(3.0)
    assert compile_equation("ln e")(0, 0) == pytest.approx(1.0)
    assert compile_equation("pow(2, 10)")(0, 0) == 1024.0
    assert compile_equation("abs(x)")(-4, 0) == 4.0
    assert compile_equation("2*pi")(0, 0) == pytest.approx(2 * math.pi)
    assert compile_equation("atan 1")(0, 0) == pytest.approx(math.pi / 4)
    assert compile_equation("sqrt(y)")(0, 9) == 3.0


def test_undefined_values_do_not_raise() -> None:
    assert compile_equation("1/x")(0, 0) == math.inf
    assert compile_equation("-1/x")(0, 0) == -math.inf
    assert math.isnan(compile_equation("sqrt(x)")(-1, 0))
    assert math.isnan(compile_equation("0/x")(0, 0))
    assert compile_equation("ln x")(0, 0) == -math.inf
    assert compile_equation("exp(x)")(1000, 0) == math.inf
    assert math.isnan(compile_equation("asin(x)")(2, 0))


def test_evaluate_broadcasts_over_arrays() -> None:
    X, Y = np.meshgrid(np.linspace(0, 1, 3), np.linspace(0, 2, 3))
    out = compile_equation("x + y").evaluate(X, Y)
    assert out.shape == (3, 3)
    assert np.allclose(out, X + Y)

    const = compile_equation("pi").evaluate(X, Y)
    assert const.shape == (3, 3)
    assert np.allclose(const, math.pi)


def test_compiled_equation_is_immutable() -> None:
    f = compile_equation("y")
    with pytest.raises(dataclasses.FrozenInstanceError):
        f.text = "x"  # type: ignore[misc]


def test_unknown_identifier_fails() -> None:
    with pytest.raises(ParseError, match="unknown identifier 'foo'"):
        compile_equation("foo(x)")


def test_canonical_and_latex() -> None:
    f = compile_equation("sin x + y")
    assert f.canonical == "(sin(x) + y)"
    assert "\\sin" in f.latex


def test_to_sympy_matches_expression() -> None:
    import sympy as sp

    x = sp.Symbol("x", real=True)
    y = sp.Symbol("y", real=True)
    expr = compile_equation("pow(x, 2) - log(y, 2) + abs(x)").to_sympy()
    assert sp.simplify(expr - (x**2 - sp.log(y, 2) + sp.Abs(x))) == 0


def test_canonical_form_only_built_for_debug_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    import logging

    import slope_field.compiler.equation as equation

    def _boom(node: object) -> str:
        raise AssertionError("to_source called")

    monkeypatch.setattr(equation, "to_source", _boom)
    monkeypatch.setattr(equation, "logger", logging.Logger("quiet", logging.WARNING))
    assert compile_equation("x + 1")(1, 0) == 2.0
