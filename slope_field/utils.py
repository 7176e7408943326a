"""Parsing of the raw text fields a caller collects from the user."""
from __future__ import annotations

import re

from .errors import InputFormatError
from .solver import Domain, Point

__all__ = [
    "parse_number",
    "parse_bounds",
    "parse_domain",
    "parse_row_count",
    "parse_step",
    "parse_point",
]

_INT_RE = re.compile(r"^[+-]?\d+$")


def parse_number(text: str, label: str = "value") -> float:
    """Return *text* as a float or raise :class:`InputFormatError`."""
    raw = str(text).strip()
    try:
        return float(raw)
    except ValueError:
        raise InputFormatError(f"Could not parse {label}: {text!r} is not a number") from None


def _split_pair(text: str, label: str) -> tuple[str, str]:
    parts = [p.strip() for p in str(text).split(",")]
    if len(parts) != 2 or not all(parts):
        raise InputFormatError(
            f"Could not parse {label}: expected two comma-separated numbers, got {text!r}"
        )
    return parts[0], parts[1]


def parse_bounds(text: str, label: str = "bounds") -> tuple[float, float]:
    """Parse ``"a, b"`` into ``(a, b)``."""
    low, high = _split_pair(text, label)
    return parse_number(low, label), parse_number(high, label)


def parse_domain(domain_text: str, range_text: str) -> Domain:
    """Build a :class:`Domain` from the x‑domain and y‑range text fields."""
    left, right = parse_bounds(domain_text, "domain")
    lower, upper = parse_bounds(range_text, "range")
    return Domain(left=left, right=right, lower=lower, upper=upper)


def parse_row_count(text: str) -> int:
    """Parse the slope‑lines‑per‑row field; only the integer format is checked here."""
    raw = str(text).strip()
    if not _INT_RE.match(raw):
        raise InputFormatError(f"Could not parse row count: {text!r} is not an integer")
    return int(raw)


def parse_step(text: str) -> float:
    return parse_number(text, "step size")


def parse_point(text: str) -> Point:
    x, y = parse_bounds(text, "initial point")
    return Point(x, y)
