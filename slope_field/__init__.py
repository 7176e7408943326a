"""Public package interface for the slope‑field plotter.

Importing this package gives you the compiler and solver entry points without
having to know the internal module layout.

Typical usage
-------------
>>> from slope_field import Domain, compile_equation, compute_slope_grid, euler_forward
>>> f = compile_equation("sin x + y")
>>> grid = compute_slope_grid(f, Domain(-1, 1, -1, 1), 10)
>>> path = euler_forward(f, (0.0, 0.0), 0.1, 1.0)
"""
from importlib.metadata import version as _version  # type: ignore

from .compiler import CompiledEquation, compile_equation
from .errors import (
    EvaluationError,
    InputFormatError,
    InvalidDomain,
    InvalidGridSize,
    InvalidStepSize,
    ParseError,
    SlopeFieldError,
    StepCountExceeded,
)
from .registry import DEFAULT_REGISTRY, FunctionEntry, FunctionRegistry, list_available_functions
from .session import Phase, SlopeFieldSession
from .solver import (
    Domain,
    Point,
    SlopeGrid,
    SolutionPath,
    compute_slope_grid,
    euler_backward,
    euler_forward,
    solve_path,
)

__all__ = [
    "compile_equation",
    "CompiledEquation",
    "compute_slope_grid",
    "euler_forward",
    "euler_backward",
    "solve_path",
    "list_available_functions",
    "Domain",
    "Point",
    "SlopeGrid",
    "SolutionPath",
    "FunctionEntry",
    "FunctionRegistry",
    "DEFAULT_REGISTRY",
    "SlopeFieldSession",
    "Phase",
    "SlopeFieldError",
    "InputFormatError",
    "ParseError",
    "InvalidGridSize",
    "InvalidStepSize",
    "InvalidDomain",
    "EvaluationError",
    "StepCountExceeded",
    "__version__",
]

try:
    __version__ = _version("slope_field")
except Exception:  # pragma: no cover – package not installed yet
    __version__ = "0.0.0"
