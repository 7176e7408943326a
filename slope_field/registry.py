"""Named functions and constants an equation may reference.

The registry is a static table rather than anything discovered at runtime, so
the callable surface of the expression language is exactly what is listed
below. Every implementation is a NumPy ufunc (or built from them) so the same
entry works on scalars and on whole lattices, with IEEE semantics: a domain
error yields ``nan`` and a pole yields ``±inf`` instead of raising.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping

import numpy as np

__all__ = [
    "FunctionEntry",
    "FunctionRegistry",
    "DEFAULT_REGISTRY",
    "list_available_functions",
]


@dataclass(frozen=True, slots=True)
class FunctionEntry:
    name: str
    arity: int
    impl: Callable[..., Any]
    description: str = ""

    @property
    def is_constant(self) -> bool:
        return self.arity == 0


class FunctionRegistry:
    """Read‑only lookup of :class:`FunctionEntry` by ``(name, arity)``.

    A name may appear more than once provided each occurrence has a different
    arity; the call site's argument count picks the overload.
    """

    __slots__ = ("_entries", "_names")

    def __init__(self, entries: Iterable[FunctionEntry]) -> None:
        table: dict[tuple[str, int], FunctionEntry] = {}
        names: list[str] = []
        for entry in entries:
            key = (entry.name, entry.arity)
            if key in table:
                raise ValueError(f"duplicate registry entry {entry.name}/{entry.arity}")
            if entry.arity < 0:
                raise ValueError(f"negative arity for {entry.name}")
            table[key] = entry
            if entry.name not in names:
                names.append(entry.name)
        self._entries: Mapping[tuple[str, int], FunctionEntry] = MappingProxyType(table)
        self._names: tuple[str, ...] = tuple(names)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> Mapping[tuple[str, int], FunctionEntry]:
        return self._entries

    def names(self) -> tuple[str, ...]:
        """Unique names in declaration order."""
        return self._names

    def arities(self, name: str) -> tuple[int, ...]:
        return tuple(sorted(arity for (n, arity) in self._entries if n == name))

    def is_callable(self, name: str) -> bool:
        """``True`` when *name* has at least one overload taking arguments."""
        return any(arity > 0 for arity in self.arities(name))

    def resolve(self, name: str, arity: int) -> FunctionEntry | None:
        return self._entries.get((name, arity))


def _log_base(value: Any, base: Any) -> Any:
    return np.divide(np.log(value), np.log(base))


def _constant(value: float) -> Callable[[], np.float64]:
    const = np.float64(value)

    def _value() -> np.float64:
        return const

    return _value


DEFAULT_REGISTRY = FunctionRegistry(
    [
        # Power functions
        FunctionEntry("exp", 1, np.exp, "e raised to a"),
        FunctionEntry("sqrt", 1, np.sqrt, "square root"),
        FunctionEntry("pow", 2, np.power, "a raised to b"),
        FunctionEntry("log", 1, np.log10, "base-10 logarithm"),
        FunctionEntry("log", 2, _log_base, "logarithm of a in base b"),
        FunctionEntry("ln", 1, np.log, "natural logarithm"),
        # Trigonometric functions
        FunctionEntry("cos", 1, np.cos, "cosine"),
        FunctionEntry("sin", 1, np.sin, "sine"),
        FunctionEntry("tan", 1, np.tan, "tangent"),
        FunctionEntry("atan", 1, np.arctan, "inverse tangent"),
        FunctionEntry("acos", 1, np.arccos, "inverse cosine"),
        FunctionEntry("asin", 1, np.arcsin, "inverse sine"),
        # Hyperbolic functions
        FunctionEntry("tanh", 1, np.tanh, "hyperbolic tangent"),
        FunctionEntry("cosh", 1, np.cosh, "hyperbolic cosine"),
        FunctionEntry("sinh", 1, np.sinh, "hyperbolic sine"),
        # Special functions
        FunctionEntry("abs", 1, np.abs, "absolute value"),
        # Constants
        FunctionEntry("pi", 0, _constant(np.pi), "ratio of circumference to diameter"),
        FunctionEntry("e", 0, _constant(np.e), "Euler's number"),
    ]
)


def list_available_functions(registry: FunctionRegistry = DEFAULT_REGISTRY) -> list[str]:
    """Return the names an equation may use, in a stable order for help text."""
    return list(registry.names())
