"""Exception types raised by the compiler, solver and input parsers."""
from __future__ import annotations

__all__ = [
    "SlopeFieldError",
    "InputFormatError",
    "ParseError",
    "InvalidGridSize",
    "InvalidStepSize",
    "InvalidDomain",
    "EvaluationError",
    "StepCountExceeded",
]


class SlopeFieldError(ValueError):
    """Base class for every recoverable error in this package."""


class InputFormatError(SlopeFieldError):
    """Raw text for a bound, step or count is not numeric (or malformed)."""


class ParseError(SlopeFieldError):
    """An equation could not be parsed or compiled.

    ``position`` is the character offset into the source text where the
    problem was detected, or ``None`` when it applies to the whole input.
    """

    def __init__(self, message: str, *, text: str = "", position: int | None = None) -> None:
        self.message = message
        self.text = text
        self.position = position
        super().__init__(self._format())

    def _format(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} (at position {self.position})"


class InvalidGridSize(SlopeFieldError):
    """Slope-line count is not an integer >= 2."""


class InvalidStepSize(SlopeFieldError):
    """Euler step is not a finite number > 0."""


class InvalidDomain(SlopeFieldError):
    """Bounds are not finite or not strictly increasing."""


class EvaluationError(SlopeFieldError):
    """A whole grid or path computation could not proceed."""


class StepCountExceeded(EvaluationError):
    """An Euler walk would need more steps than the configured cap."""
