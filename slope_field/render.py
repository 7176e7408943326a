"""Draw a slope field and its Euler path to a PNG."""
from __future__ import annotations

import os
import tempfile
import warnings
from pathlib import Path
from typing import Any

import numpy as np

from .constants import SLOPE_LINE_FILL
from .solver import SlopeGrid, SolutionPath

__all__ = ["slope_segments", "path_segments", "render_slope_field"]


def slope_segments(grid: SlopeGrid, fill: float = SLOPE_LINE_FILL) -> np.ndarray:
    """Return an ``(n*n, 2, 2)`` array of short line segments, one per cell.

    Segments are centred on their lattice point and have the same length on a
    square plot whatever the aspect of the domain. Undefined slopes give
    ``nan`` endpoints; infinite ones are drawn vertical.
    """
    domain = grid.domain
    X, Y = np.meshgrid(grid.xs, grid.ys)
    # slope as seen on a unit square
    with np.errstate(all="ignore"):
        angle = np.arctan(grid.values * (domain.width / domain.height))
    half = fill / grid.n / 2.0
    dx = half * np.cos(angle) * domain.width
    dy = half * np.sin(angle) * domain.height
    start = np.stack([X - dx, Y - dy], axis=-1)
    end = np.stack([X + dx, Y + dy], axis=-1)
    return np.stack([start, end], axis=-2).reshape(-1, 2, 2)


def path_segments(path: SolutionPath) -> np.ndarray:
    """Return the drawable Euler steps as an ``(m, 2, 2)`` array."""
    segs = [[tuple(a), tuple(b)] for a, b in path.segments()]
    if not segs:
        return np.empty((0, 2, 2), dtype=np.float64)
    return np.asarray(segs, dtype=np.float64)


def _finite(segs: np.ndarray) -> np.ndarray:
    return segs[np.isfinite(segs).all(axis=(1, 2))]


def _select_backend() -> Any:  # noqa: ANN401 – module
    try:
        import matplotlib  # type: ignore
    except Exception as exc:  # pragma: no cover - environment-dependent
        raise RuntimeError(
            "matplotlib is required to render slope fields. Install it or use --json."
        ) from exc

    try:
        backend = matplotlib.get_backend().lower()
    except Exception:
        backend = ""
    if backend not in {"agg", "tkagg"}:
        env_backend = os.environ.get("MPLBACKEND", "").lower()
        prefer_tk = bool(os.environ.get("DISPLAY")) or env_backend == "tkagg"
        if prefer_tk:
            try:
                matplotlib.use("TkAgg")
            except Exception as exc:  # pragma: no cover - depends on system backend
                warnings.warn(
                    f"Preferred GUI backend 'TkAgg' unavailable; falling back to 'Agg': {exc}",
                    RuntimeWarning,
                )
                matplotlib.use("Agg")
        else:
            matplotlib.use("Agg")
    return matplotlib


def render_slope_field(
    grid: SlopeGrid,
    path: SolutionPath | None = None,
    *,
    title: str | None = None,
    out_path: str | os.PathLike[str] | None = None,
) -> str:
    """Render *grid* (and *path*, if given) to a **PNG file** and return its path."""
    _select_backend()
    import matplotlib.pyplot as plt  # type: ignore
    from matplotlib.collections import LineCollection  # type: ignore

    domain = grid.domain
    fig, ax = plt.subplots(figsize=(6, 6))

    # axes only when zero is inside the viewport
    if domain.lower <= 0 <= domain.upper:
        ax.axhline(0, color="black", linewidth=1.5)
    if domain.left <= 0 <= domain.right:
        ax.axvline(0, color="black", linewidth=1.5)

    ax.add_collection(LineCollection(_finite(slope_segments(grid)), colors="tab:blue", linewidths=1))
    if path is not None:
        segs = _finite(path_segments(path))
        if len(segs):
            ax.add_collection(LineCollection(segs, colors="red", linewidths=2))
        ax.plot([path.start.x], [path.start.y], "o", color="red", markersize=4)

    ax.set_xlim(domain.left, domain.right)
    ax.set_ylim(domain.lower, domain.upper)
    # square drawing area regardless of the domain's aspect
    ax.set_box_aspect(1)
    ax.grid(True, alpha=0.3)
    if title:
        ax.set_title(str(title))

    if out_path is None:
        fd, tmp = tempfile.mkstemp(suffix=".png")
        os.close(fd)
        png_path = Path(tmp)
    else:
        png_path = Path(out_path)
    fig.savefig(png_path, format="png")
    plt.close(fig)
    return str(png_path)
