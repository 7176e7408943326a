"""Per‑cycle state machine that turns raw user input into renderable data.

A caller (window, CLI, notebook) feeds the text of each input field to
:meth:`SlopeFieldSession.graph`. The session validates, compiles and samples
in order; any failure is recorded on the session instead of being raised, and
the last successful snapshot stays available for display.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from .compiler import CompiledEquation, compile_equation
from .constants import DEFAULT_STEP, MAX_EULER_STEPS
from .errors import EvaluationError, SlopeFieldError
from .registry import DEFAULT_REGISTRY, FunctionRegistry
from .solver import Domain, Point, SlopeGrid, SolutionPath, compute_slope_grid, solve_path
from .utils import parse_domain, parse_row_count, parse_step

__all__ = ["Phase", "Snapshot", "SlopeFieldSession"]

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    PARSING = "parsing"
    COMPUTING = "computing"
    READY = "ready"
    PATH_COMPUTED = "path_computed"
    FAILED = "failed"


@dataclass(frozen=True)
class Snapshot:
    """Everything needed to draw one successfully graphed equation."""

    equation: CompiledEquation
    domain: Domain
    grid: SlopeGrid


class SlopeFieldSession:
    """Holds the last good graph and drives the compute cycle."""

    def __init__(
        self,
        registry: FunctionRegistry = DEFAULT_REGISTRY,
        *,
        max_steps: int = MAX_EULER_STEPS,
    ) -> None:
        self.registry = registry
        self.max_steps = max_steps
        self.phase = Phase.IDLE
        self.snapshot: Snapshot | None = None
        self.path: SolutionPath | None = None
        self.error: str | None = None
        self.has_compiled = False

    def _enter(self, phase: Phase) -> None:
        logger.debug("session %s -> %s", self.phase.value, phase.value)
        self.phase = phase

    def _fail(self, exc: SlopeFieldError) -> None:
        self.error = str(exc)
        self._enter(Phase.FAILED)
        logger.warning("%s: %s", type(exc).__name__, exc)

    @property
    def equation(self) -> CompiledEquation | None:
        return self.snapshot.equation if self.snapshot else None

    @property
    def grid(self) -> SlopeGrid | None:
        return self.snapshot.grid if self.snapshot else None

    def graph(self, equation_text: str, domain_text: str, range_text: str, rows_text: str) -> bool:
        """Validate the inputs, compile the equation and sample its slope field.

        Returns ``True`` and replaces the snapshot on success. On failure the
        previous snapshot is kept, ``has_compiled`` drops to ``False`` and
        ``error`` carries the message.
        """
        logger.info(
            "Graphing y'=%s on x=[%s] and y=[%s] with %s slope lines per row",
            equation_text,
            domain_text,
            range_text,
            rows_text,
        )
        self.error = None
        self.has_compiled = False
        try:
            self._enter(Phase.VALIDATING)
            rows = parse_row_count(rows_text)
            domain = parse_domain(domain_text, range_text)

            self._enter(Phase.PARSING)
            equation = compile_equation(equation_text, self.registry)

            self._enter(Phase.COMPUTING)
            grid = compute_slope_grid(equation, domain, rows)
        except SlopeFieldError as exc:
            self._fail(exc)
            return False

        self.snapshot = Snapshot(equation=equation, domain=domain, grid=grid)
        self.path = None
        self.has_compiled = True
        self._enter(Phase.READY)
        logger.info("graphed %s (%d undefined slopes)", equation.canonical, grid.undefined_count())
        return True

    def trace(self, x: float, y: float, step_text: str | float = DEFAULT_STEP) -> SolutionPath | None:
        """Compute the Euler path through ``(x, y)`` over the current graph.

        The grid is left alone. Returns ``None`` (and records ``error``) when
        nothing has been graphed, the point lies outside the domain, or the
        step is invalid.
        """
        if self.snapshot is None or not self.has_compiled:
            self.error = "nothing has been graphed yet"
            logger.warning("trace ignored: %s", self.error)
            return None
        snap = self.snapshot
        try:
            step = step_text if isinstance(step_text, float) else parse_step(str(step_text))
            if not snap.domain.contains(x, y):
                raise EvaluationError(f"initial point ({x}, {y}) lies outside the graphed domain")
            path = solve_path(snap.equation, Point(x, y), step, snap.domain, max_steps=self.max_steps)
        except SlopeFieldError as exc:
            self.error = str(exc)
            logger.warning("%s: %s", type(exc).__name__, exc)
            return None

        self.error = None
        self.path = path
        self._enter(Phase.PATH_COMPUTED)
        self._enter(Phase.READY)
        return path
