"""Slope‑field sampling over a rectangular domain."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable

import numpy as np

from ..constants import MIN_ROWS
from ..errors import InvalidDomain, InvalidGridSize

__all__ = ["Domain", "SlopeGrid", "compute_slope_grid", "lattice"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Domain:
    """Sampling rectangle ``[left, right] x [lower, upper]``."""

    left: float
    right: float
    lower: float
    upper: float

    def __post_init__(self) -> None:
        bounds = (self.left, self.right, self.lower, self.upper)
        if not all(math.isfinite(b) for b in bounds):
            raise InvalidDomain(f"bounds must be finite, got {bounds}")
        if not self.right > self.left:
            raise InvalidDomain(f"domain right ({self.right}) must exceed left ({self.left})")
        if not self.upper > self.lower:
            raise InvalidDomain(f"range upper ({self.upper}) must exceed lower ({self.lower})")

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.upper - self.lower

    def contains(self, x: float, y: float) -> bool:
        return self.left <= x <= self.right and self.lower <= y <= self.upper


def _check_rows(n: object) -> int:
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
        raise InvalidGridSize(f"slope line count must be an integer, got {n!r}")
    if n < MIN_ROWS:
        raise InvalidGridSize(f"slope line count must be at least {MIN_ROWS}, got {n}")
    return int(n)


def lattice(domain: Domain, n: int) -> tuple[np.ndarray, np.ndarray]:
    """Return the ``n`` sample abscissae and ordinates, both ends inclusive."""
    n = _check_rows(n)
    xs = np.linspace(domain.left, domain.right, n)
    ys = np.linspace(domain.lower, domain.upper, n)
    return xs, ys


@dataclass(frozen=True)
class SlopeGrid:
    """Row‑major slopes: ``values[row, col]`` is ``f(xs[col], ys[row])``."""

    domain: Domain
    n: int
    xs: np.ndarray
    ys: np.ndarray
    values: np.ndarray

    @property
    def shape(self) -> tuple[int, int]:
        return (self.n, self.n)

    def at(self, row: int, col: int) -> float:
        return float(self.values[row, col])

    def undefined_count(self) -> int:
        """Number of cells without a finite slope."""
        return int(np.count_nonzero(~np.isfinite(self.values)))


def _evaluate_cells(f: Callable[[float, float], float], xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
    values = np.empty((len(ys), len(xs)), dtype=np.float64)
    for row, y in enumerate(ys):
        for col, x in enumerate(xs):
            try:
                values[row, col] = f(float(x), float(y))
            except (ArithmeticError, ValueError, TypeError) as exc:
                logger.debug("slope undefined at (%g, %g): %s", x, y, exc)
                values[row, col] = np.nan
    return values


def compute_slope_grid(f: Callable[[float, float], float], domain: Domain, n: int) -> SlopeGrid:
    """Sample ``f`` on an ``n x n`` lattice spanning *domain*.

    Equations compiled by :mod:`slope_field.compiler` are evaluated over the
    whole lattice at once. Any other callable, or a vectorised evaluation that
    raises, falls back to one call per cell; a cell whose call raises becomes
    ``nan`` and the rest of the grid is unaffected.
    """
    xs, ys = lattice(domain, n)
    values: np.ndarray | None = None
    evaluate = getattr(f, "evaluate", None)
    if evaluate is not None:
        X, Y = np.meshgrid(xs, ys)
        try:
            values = np.array(evaluate(X, Y), dtype=np.float64)
        except (ArithmeticError, ValueError, TypeError) as exc:
            logger.debug("vectorised evaluation failed, sampling per cell: %s", exc)
    if values is None:
        values = _evaluate_cells(f, xs, ys)

    values.setflags(write=False)
    xs.setflags(write=False)
    ys.setflags(write=False)
    grid = SlopeGrid(domain=domain, n=len(xs), xs=xs, ys=ys, values=values)
    logger.debug("computed %dx%d slope grid (%d undefined)", grid.n, grid.n, grid.undefined_count())
    return grid
