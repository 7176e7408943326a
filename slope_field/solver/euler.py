"""Euler's method walks through an initial point.

Both walks step away from the start until they reach their bound. They differ
on one point of policy that callers rely on:

* the forward walk skips any step whose derivative is infinite, leaving a gap
  in the drawn curve instead of sending every later point to infinity;
* the backward walk does not, so an infinite derivative propagates.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Iterator, NamedTuple

from ..constants import MAX_EULER_STEPS
from ..errors import EvaluationError, InvalidStepSize, StepCountExceeded
from .grid import Domain

__all__ = [
    "Point",
    "SolutionPath",
    "euler_forward",
    "euler_backward",
    "solve_path",
    "step_count",
]

logger = logging.getLogger(__name__)

Derivative = Callable[[float, float], float]


class Point(NamedTuple):
    x: float
    y: float


def _check_step(step: float) -> float:
    try:
        step = float(step)
    except (TypeError, ValueError) as exc:
        raise InvalidStepSize(f"step size must be a number, got {step!r}") from exc
    if not math.isfinite(step) or step <= 0:
        raise InvalidStepSize(f"step size must be a finite number > 0, got {step}")
    return step


def _check_start(start: tuple[float, float]) -> Point:
    x0, y0 = (float(v) for v in start)
    if not (math.isfinite(x0) and math.isfinite(y0)):
        raise EvaluationError(f"initial point must be finite, got ({x0}, {y0})")
    return Point(x0, y0)


def _slope(f: Derivative, x: float, y: float) -> float:
    try:
        return f(x, y)
    except (ArithmeticError, ValueError, TypeError) as exc:
        logger.debug("slope undefined at (%g, %g): %s", x, y, exc)
        return math.nan


def step_count(distance: float, step: float, max_steps: int = MAX_EULER_STEPS) -> int:
    """Number of Euler steps needed to cover *distance* (never negative)."""
    step = _check_step(step)
    if not math.isfinite(distance):
        raise EvaluationError(f"bound must be finite, got distance {distance}")
    count = max(0, math.ceil(distance / step))
    if count > max_steps:
        raise StepCountExceeded(
            f"{count} steps needed with step size {step}; the limit is {max_steps}"
        )
    return count


def euler_forward(
    f: Derivative,
    start: tuple[float, float],
    step: float,
    right_bound: float,
    *,
    max_steps: int = MAX_EULER_STEPS,
) -> tuple[Point, ...]:
    """Walk right from *start* using ``y += f(x, y) * step``.

    Steps where the derivative is infinite emit no point; ``x`` still
    advances and ``y`` is held, so the next step restarts from the gap. A
    derivative call that raises counts as ``nan``.
    """
    x0, y0 = _check_start(start)
    step = _check_step(step)
    count = step_count(right_bound - x0, step, max_steps)

    points: list[Point] = []
    x_prev, y_prev = x0, y0
    for i in range(1, count + 1):
        x = x0 + i * step
        dy = _slope(f, x_prev, y_prev)
        if math.isinf(dy):
            logger.debug("skipping forward step at x=%g: infinite derivative", x_prev)
            x_prev = x
            continue
        y = y_prev + dy * step
        points.append(Point(x, y))
        x_prev, y_prev = x, y
    return tuple(points)


def euler_backward(
    f: Derivative,
    start: tuple[float, float],
    step: float,
    left_bound: float,
    *,
    max_steps: int = MAX_EULER_STEPS,
) -> tuple[Point, ...]:
    """Walk left from *start* using ``y -= f(x, y) * step``.

    Infinite derivatives are not skipped here. A derivative call that
    raises counts as ``nan``.
    """
    x0, y0 = _check_start(start)
    step = _check_step(step)
    count = step_count(x0 - left_bound, step, max_steps)

    points: list[Point] = []
    x_prev, y_prev = x0, y0
    for i in range(1, count + 1):
        x = x0 - i * step
        y = y_prev - _slope(f, x_prev, y_prev) * step
        points.append(Point(x, y))
        x_prev, y_prev = x, y
    return tuple(points)


@dataclass(frozen=True, slots=True)
class SolutionPath:
    """Both Euler branches through ``start``, as produced and never modified."""

    start: Point
    step: float
    forward: tuple[Point, ...]
    backward: tuple[Point, ...]

    def points(self) -> list[Point]:
        """Backward branch (reversed), the start, then the forward branch."""
        return [*reversed(self.backward), self.start, *self.forward]

    def segments(self) -> Iterator[tuple[Point, Point]]:
        """Line segments to draw, one per emitted step.

        Each segment runs from ``(x ∓ step, previous y)`` to the emitted
        point, so a skipped forward step shows up as a gap.
        """
        y_prev = self.start.y
        for p in self.forward:
            yield Point(p.x - self.step, y_prev), p
            y_prev = p.y
        y_prev = self.start.y
        for p in self.backward:
            yield Point(p.x + self.step, y_prev), p
            y_prev = p.y


def solve_path(
    f: Derivative,
    start: tuple[float, float],
    step: float,
    domain: Domain,
    *,
    max_steps: int = MAX_EULER_STEPS,
) -> SolutionPath:
    """Run both walks from *start* out to the domain's left and right bounds."""
    origin = _check_start(start)
    step = _check_step(step)
    forward = euler_forward(f, origin, step, domain.right, max_steps=max_steps)
    backward = euler_backward(f, origin, step, domain.left, max_steps=max_steps)
    logger.debug(
        "euler path from (%g, %g): %d forward, %d backward points",
        origin.x,
        origin.y,
        len(forward),
        len(backward),
    )
    return SolutionPath(start=origin, step=step, forward=forward, backward=backward)
