"""Command‑line interface: graph ``y' = f(x, y)`` to a PNG or JSON."""
from __future__ import annotations

import argparse
import json
import logging
import math
import sys
from pathlib import Path
from typing import Any

from . import constants as C
from .errors import SlopeFieldError
from .registry import DEFAULT_REGISTRY, FunctionRegistry
from .render import render_slope_field
from .session import SlopeFieldSession
from .solver import SlopeGrid, SolutionPath
from .utils import parse_point

__all__ = ["main"]


def _preview_image(path: str) -> None:
    """Display the rendered PNG in a Matplotlib window (best‑effort)."""
    try:
        import numpy as np  # type: ignore
        from PIL import Image  # type: ignore
        import matplotlib.pyplot as plt  # imported lazily to avoid GUI deps
    except ImportError as exc:
        print(
            f"⚠️ Could not preview slope field; missing dependency: {exc}",
            file=sys.stderr,
        )
        return

    try:
        img = Image.open(path).convert("RGBA")
        arr = np.array(img)
        fig, ax = plt.subplots()
        ax.imshow(arr)
        ax.axis("off")
        plt.show()
    except Exception as exc:
        print(f"⚠️ Could not preview slope field: {exc}", file=sys.stderr)


def _format_functions(registry: FunctionRegistry) -> list[str]:
    lines: list[str] = []
    for name in registry.names():
        sigs: list[str] = []
        for arity in registry.arities(name):
            entry = registry.resolve(name, arity)
            assert entry is not None
            if arity == 0:
                sig = name
            else:
                params = ", ".join("ab"[i] if i < 2 else f"a{i}" for i in range(arity))
                sig = f"{name}({params})"
            sigs.append(f"{sig}  {entry.description}".rstrip())
        lines.extend(sigs)
    return lines


def _finite_or_none(value: float) -> float | None:
    return value if math.isfinite(value) else None


def _summary(equation_text: str, latex: str | None, grid: SlopeGrid, path: SolutionPath | None) -> dict[str, Any]:
    d = grid.domain
    out: dict[str, Any] = {
        "equation": equation_text,
        "latex": latex,
        "domain": {"left": d.left, "right": d.right, "lower": d.lower, "upper": d.upper},
        "rows": grid.n,
        "xs": [float(x) for x in grid.xs],
        "ys": [float(y) for y in grid.ys],
        "slopes": [[_finite_or_none(float(v)) for v in row] for row in grid.values],
        "path": None,
    }
    if path is not None:
        out["path"] = {
            "start": [path.start.x, path.start.y],
            "step": path.step,
            "forward": [[p.x, _finite_or_none(p.y)] for p in path.forward],
            "backward": [[p.x, _finite_or_none(p.y)] for p in path.backward],
        }
    return out


def _parse_cli(argv: list[str] | None = None) -> argparse.Namespace:  # noqa: D401 – imperative mood
    parser = argparse.ArgumentParser(description="Plot the slope field of y' = f(x, y)")
    parser.add_argument("equation", nargs="?", help="Right-hand side f(x, y), e.g. 'sin x + y'")
    parser.add_argument("--demo", action="store_true", help="Graph a built-in demo equation")
    parser.add_argument(
        "--domain",
        default=f"{C.DEFAULT_LEFT},{C.DEFAULT_RIGHT}",
        help="x bounds as 'left,right'",
    )
    parser.add_argument(
        "--range",
        dest="range_",
        default=f"{C.DEFAULT_LOWER},{C.DEFAULT_UPPER}",
        help="y bounds as 'lower,upper'",
    )
    parser.add_argument("--rows", default=str(C.DEFAULT_ROWS), help="Slope lines per row")
    parser.add_argument("--initial", help="Initial point 'x,y' for the Euler solution curve")
    parser.add_argument("--step", default=str(C.DEFAULT_STEP), help="Euler step size")
    parser.add_argument("--out", help="Write the PNG to this path instead of a temp file")
    parser.add_argument("--json", action="store_true", help="Print grid and path as JSON instead of rendering")
    parser.add_argument("--preview", action="store_true", help="Show the rendered PNG")
    parser.add_argument(
        "--list-functions",
        action="store_true",
        help="List the functions and constants an equation may use",
    )
    parser.add_argument(
        "--log-level",
        choices=["WARNING", "INFO", "DEBUG"],
        default="WARNING",
        help="Logging level for slope_field",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:  # noqa: D401 – imperative mood
    ns = _parse_cli(argv)

    logging.basicConfig(level=logging.WARNING)
    level = getattr(logging, ns.log_level)
    pkg_logger = logging.getLogger("slope_field")
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(logging.BASIC_FORMAT))
    handler.setLevel(level)
    pkg_logger.addHandler(handler)
    pkg_logger.propagate = False
    pkg_logger.setLevel(level)

    if ns.list_functions:
        print("\n".join(_format_functions(DEFAULT_REGISTRY)))
        return

    if ns.equation is not None and ns.demo:
        sys.exit("Error: 'equation' cannot be combined with --demo.")

    initial_text: str | None = ns.initial
    if ns.demo:
        equation_text = C._DEMO_EQUATION
        if initial_text is None:
            initial_text = ",".join(str(v) for v in C._DEMO_INITIAL)
    elif ns.equation is not None:
        equation_text = ns.equation
    else:
        sys.exit("Error: an equation is required unless using --demo or --list-functions.")

    session = SlopeFieldSession()
    if not session.graph(equation_text, ns.domain, ns.range_, ns.rows):
        sys.exit(f"Error: {session.error}")
    assert session.snapshot is not None
    snap = session.snapshot

    path: SolutionPath | None = None
    if initial_text is not None:
        try:
            start = parse_point(initial_text)
        except SlopeFieldError as exc:
            sys.exit(f"Error: {exc}")
        path = session.trace(start.x, start.y, ns.step)
        if path is None:
            sys.exit(f"Error: {session.error}")

    if ns.json:
        try:
            latex: str | None = snap.equation.latex
        except (ValueError, TypeError):
            latex = None
        print(json.dumps(_summary(equation_text, latex, snap.grid, path), separators=(",", ":")))
        return

    png = render_slope_field(snap.grid, path, title=f"y' = {equation_text}", out_path=ns.out)
    if ns.out:
        print(f"✔ Slope field written to {Path(png)}")
    else:
        print(png)

    if ns.preview:
        _preview_image(png)


if __name__ == "__main__":  # pragma: no cover
    main()
