"""Field & solver engine: slope grids and Euler walks."""

from .euler import Point, SolutionPath, euler_backward, euler_forward, solve_path, step_count
from .grid import Domain, SlopeGrid, compute_slope_grid, lattice

__all__ = [
    "Domain",
    "SlopeGrid",
    "compute_slope_grid",
    "lattice",
    "Point",
    "SolutionPath",
    "euler_forward",
    "euler_backward",
    "solve_path",
    "step_count",
]
