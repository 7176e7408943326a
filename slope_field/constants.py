"""Package‑wide defaults and demo inputs."""

# Default viewport, matching a fresh window of the interactive tool
DEFAULT_LEFT = -1.0
DEFAULT_RIGHT = 1.0
DEFAULT_LOWER = -1.0
DEFAULT_UPPER = 1.0

DEFAULT_ROWS = 10
DEFAULT_STEP = 0.1

MIN_ROWS = 2

# Upper bound on iterations of a single Euler walk
MAX_EULER_STEPS = 1_000_000

# Size limits keeping parse, compile and evaluation well inside the recursion limit
MAX_EQUATION_TOKENS = 400
MAX_NESTING = 100

# Segment length as a fraction of one lattice cell
SLOPE_LINE_FILL = 0.9

_DEMO_EQUATION = "sin x + y"
_DEMO_INITIAL = (0.0, 0.0)

__all__ = [
    "DEFAULT_LEFT",
    "DEFAULT_RIGHT",
    "DEFAULT_LOWER",
    "DEFAULT_UPPER",
    "DEFAULT_ROWS",
    "DEFAULT_STEP",
    "MIN_ROWS",
    "MAX_EULER_STEPS",
    "MAX_EQUATION_TOKENS",
    "MAX_NESTING",
    "SLOPE_LINE_FILL",
    "_DEMO_EQUATION",
    "_DEMO_INITIAL",
]
