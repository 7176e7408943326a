from __future__ import annotations

import numpy as np
import pytest

from slope_field import Domain, Point, SolutionPath, compile_equation, compute_slope_grid, solve_path
from slope_field.render import path_segments, render_slope_field, slope_segments

UNIT = Domain(-1.0, 1.0, -1.0, 1.0)


def test_flat_slopes_give_horizontal_segments() -> None:
    grid = compute_slope_grid(compile_equation("0"), UNIT, 2)
    segs = slope_segments(grid)
    assert segs.shape == (4, 2, 2)
    # half length = 0.9 / 2 / 2 of the unit square, scaled to width 2
    assert np.allclose(segs[0], [[-1.45, -1.0], [-0.55, -1.0]])


def test_segment_length_independent_of_slope() -> None:
    grid = compute_slope_grid(compile_equation("x * 5"), Domain(-1.0, 1.0, -4.0, 4.0), 4)
    segs = slope_segments(grid)
    dx = (segs[:, 1, 0] - segs[:, 0, 0]) / grid.domain.width
    dy = (segs[:, 1, 1] - segs[:, 0, 1]) / grid.domain.height
    assert np.allclose(np.hypot(dx, dy), 0.9 / 4)


def test_undefined_and_infinite_slopes() -> None:
    grid = compute_slope_grid(compile_equation("1/x"), UNIT, 3)
    segs = slope_segments(grid).reshape(3, 3, 2, 2)
    middle = segs[:, 1]
    assert np.allclose(middle[:, 0, 0], middle[:, 1, 0])

    nan_grid = compute_slope_grid(compile_equation("sqrt(x)"), UNIT, 3)
    assert np.isnan(slope_segments(nan_grid).reshape(3, 3, 2, 2)[:, 0]).all()


def test_path_segments_empty() -> None:
    path = SolutionPath(start=Point(1.0, 0.0), step=0.5, forward=(), backward=())
    assert path_segments(path).shape == (0, 2, 2)


def test_path_segments_follow_steps() -> None:
    path = solve_path(compile_equation("1"), (0.0, 0.0), 0.5, UNIT)
    segs = path_segments(path)
    assert segs.shape == (4, 2, 2)
    assert segs[0].tolist() == [[0.0, 0.0], [0.5, 0.5]]


def test_render_writes_png(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.delenv("DISPLAY", raising=False)
    monkeypatch.delenv("MPLBACKEND", raising=False)

    f = compile_equation("1/x")
    grid = compute_slope_grid(f, UNIT, 5)
    path = solve_path(f, (0.0, 0.0), 0.1, UNIT)
    out = tmp_path / "field.png"
    result = render_slope_field(grid, path, title="y' = 1/x", out_path=out)
    assert result == str(out)
    assert out.read_bytes().startswith(b"\x89PNG")


def test_render_defaults_to_temp_file(monkeypatch: pytest.MonkeyPatch) -> None:
    from pathlib import Path

    monkeypatch.delenv("DISPLAY", raising=False)
    monkeypatch.delenv("MPLBACKEND", raising=False)

    grid = compute_slope_grid(compile_equation("x - y"), UNIT, 4)
    path = render_slope_field(grid)
    try:
        assert Path(path).is_file()
        import matplotlib

        assert matplotlib.get_backend().lower() == "agg"
    finally:
        Path(path).unlink(missing_ok=True)
