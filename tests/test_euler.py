from __future__ import annotations

import math

import pytest

from slope_field import Domain, Point, compile_equation, euler_backward, euler_forward, solve_path
from slope_field.errors import EvaluationError, InvalidStepSize, StepCountExceeded
from slope_field.solver import step_count


def test_zero_derivative_forward() -> None:
    f = compile_equation("0")
    points = euler_forward(f, (0.0, 2.0), 0.25, 1.0)
    assert len(points) == math.ceil((1.0 - 0.0) / 0.25) == 4
    assert all(p.y == 2.0 for p in points)
    assert [p.x for p in points] == pytest.approx([0.25, 0.5, 0.75, 1.0])


def test_forward_overshoots_to_cover_bound() -> None:
    points = euler_forward(compile_equation("0"), (0.0, 0.0), 0.3, 1.0)
    assert len(points) == 4
    assert points[-1].x == pytest.approx(1.2)
    diffs = [b.x - a.x for a, b in zip(points, points[1:])]
    assert diffs == pytest.approx([0.3, 0.3, 0.3])


def test_forward_update_rule() -> None:
    points = euler_forward(compile_equation("y"), (0.0, 1.0), 0.1, 1.0)
    assert len(points) == 10
    assert [p.y for p in points] == pytest.approx([1.1**i for i in range(1, 11)])


def test_derivative_evaluated_at_previous_point() -> None:
    # f = x: first step uses x0 = 0, so y stays put
    points = euler_forward(compile_equation("x"), (0.0, 0.0), 0.5, 1.0)
    assert points == (Point(0.5, 0.0), Point(1.0, 0.25))


def test_backward_update_rule() -> None:
    points = euler_backward(compile_equation("1"), (0.0, 0.0), 0.5, -1.0)
    assert points == (Point(-0.5, -0.5), Point(-1.0, -1.0))


def test_forward_skips_infinite_derivative() -> None:
    singular = euler_forward(compile_equation("1/x"), (0.0, 0.0), 0.5, 2.0)
    regular = euler_forward(compile_equation("1/(x + 10)"), (0.0, 0.0), 0.5, 2.0)
    assert len(regular) == 4
    assert len(singular) == len(regular) - 1
    # x keeps advancing across the gap, y is held
    assert singular[0] == Point(1.0, 1.0)
    assert all(math.isfinite(p.y) for p in singular)


def test_backward_propagates_infinite_derivative() -> None:
    points = euler_backward(compile_equation("1/x"), (0.0, 0.0), 0.5, -2.0)
    assert len(points) == 4
    assert [p.x for p in points] == [-0.5, -1.0, -1.5, -2.0]
    assert all(math.isinf(p.y) for p in points)


def test_start_beyond_bound_is_empty() -> None:
    f = compile_equation("1")
    assert euler_forward(f, (2.0, 0.0), 0.1, 1.0) == ()
    assert euler_backward(f, (-2.0, 0.0), 0.1, -1.0) == ()


@pytest.mark.parametrize("step", [0.0, -0.1, math.nan, math.inf])
def test_invalid_step_size(step: float) -> None:
    f = compile_equation("1")
    with pytest.raises(InvalidStepSize):
        euler_forward(f, (0.0, 0.0), step, 1.0)
    with pytest.raises(InvalidStepSize):
        euler_backward(f, (0.0, 0.0), step, -1.0)


def test_step_count_cap() -> None:
    f = compile_equation("1")
    with pytest.raises(StepCountExceeded):
        euler_forward(f, (0.0, 0.0), 1e-9, 1.0)
    with pytest.raises(StepCountExceeded, match="limit is 3"):
        euler_backward(f, (0.0, 0.0), 0.25, -1.0, max_steps=3)
    assert step_count(1.0, 0.25, max_steps=4) == 4


def test_non_finite_start_rejected() -> None:
    with pytest.raises(EvaluationError):
        euler_forward(compile_equation("1"), (math.nan, 0.0), 0.1, 1.0)


def test_solve_path_runs_both_branches() -> None:
    path = solve_path(compile_equation("0"), (0.0, 0.5), 0.5, Domain(-1.0, 1.0, -1.0, 1.0))
    assert len(path.forward) == 2
    assert len(path.backward) == 2
    assert [p.x for p in path.points()] == [-1.0, -0.5, 0.0, 0.5, 1.0]
    assert len(list(path.segments())) == 4


def test_segments_leave_gap_after_skip() -> None:
    path = solve_path(compile_equation("1/x"), (0.0, 0.0), 0.5, Domain(-1.0, 2.0, -1.0, 1.0))
    first_start, first_end = next(iter(path.segments()))
    assert first_start == Point(0.5, 0.0)
    assert first_end == Point(1.0, 1.0)


def test_plain_callable_errors_become_nan_forward() -> None:
    def f(x: float, y: float) -> float:
        return math.sqrt(x - 0.5)

    points = euler_forward(f, (0.0, 0.0), 0.25, 1.0)
    assert len(points) == 4
    assert [p.x for p in points] == [0.25, 0.5, 0.75, 1.0]
    assert math.isnan(points[0].y)


def test_plain_callable_errors_become_nan_backward() -> None:
    def f(x: float, y: float) -> float:
        if x < 0:
            raise ZeroDivisionError("pole")
        return 1.0

    points = euler_backward(f, (0.0, 0.0), 0.5, -1.0)
    assert points[0] == Point(-0.5, -0.5)
    assert math.isnan(points[1].y)
