"""Data dependences between statement instances and the classic integer tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from math import gcd
from typing import Any, Optional, Sequence


class DependenceKind(Enum):
    """Kind of data dependence."""

    FLOW = "flow"
    ANTI = "anti"
    OUTPUT = "output"
    INPUT = "input"

    def is_true_dependence(self) -> bool:
        """True for every kind that must be respected (all but input)."""
        return self is not DependenceKind.INPUT

    def involves_write(self) -> bool:
        """True when at least one of the two accesses is a write."""
        return self is not DependenceKind.INPUT

    def short_name(self) -> str:
        """The three-letter name, e.g. ``RAW``."""
        return _SHORT_NAMES[self]

    @property
    def label(self) -> str:
        return _LABELS[self]


_SHORT_NAMES = {
    DependenceKind.FLOW: "RAW",
    DependenceKind.ANTI: "WAR",
    DependenceKind.OUTPUT: "WAW",
    DependenceKind.INPUT: "RAR",
}

_LABELS = {
    DependenceKind.FLOW: "flow (RAW)",
    DependenceKind.ANTI: "anti (WAR)",
    DependenceKind.OUTPUT: "output (WAW)",
    DependenceKind.INPUT: "input (RAR)",
}


class Direction(Enum):
    """Direction of a dependence in one loop dimension."""

    LT = "<"
    EQ = "="
    GT = ">"
    LE = "≤"
    GE = "≥"
    STAR = "*"

    def to_char(self) -> str:
        """The single-character symbol for this direction."""
        return self.value

    def allows_parallel(self) -> bool:
        """Only the ``=`` direction permits running the loop in parallel."""
        return self is Direction.EQ

    def union(self, other: "Direction") -> "Direction":
        """The smallest direction covering both ``self`` and ``other``."""
        if self is other:
            return self
        pair = {self, other}
        if pair == {Direction.LT, Direction.EQ}:
            return Direction.LE
        if pair == {Direction.GT, Direction.EQ}:
            return Direction.GE
        return Direction.STAR

    @classmethod
    def from_distance(cls, dist: int) -> "Direction":
        """Direction implied by a distance: positive is ``<``, negative ``>``."""
        if dist < 0:
            return cls.GT
        if dist == 0:
            return cls.EQ
        return cls.LT


@dataclass
class Dependence:
    """A data dependence between two statements."""

    source: Any
    target: Any
    kind: DependenceKind
    direction: list[Direction]
    array: str
    distance: Optional[list[int]] = None
    level: Optional[int] = None
    is_loop_independent: bool = False
    relation: Any = None

    def is_parallelizable_at(self, level: int) -> bool:
        """Whether this dependence permits a parallel loop at ``level``."""
        if level < len(self.direction):
            return self.direction[level] is Direction.EQ
        return True

    def is_loop_carried(self) -> bool:
        return not self.is_loop_independent

    def description(self) -> str:
        """A one-line human-readable description."""
        dirs = "".join(d.to_char() for d in self.direction)
        return (
            f"{self.source} -> {self.target} [{self.kind.label}] "
            f"on {self.array} dir=<{dirs}>"
        )


@dataclass
class DependenceEquation:
    """One subscript equation: src·i + tgt·j + params·p + constant = 0."""

    src_coeffs: list[int] = field(default_factory=list)
    tgt_coeffs: list[int] = field(default_factory=list)
    param_coeffs: list[int] = field(default_factory=list)
    constant: int = 0

    def has_variables(self) -> bool:
        return any(self.src_coeffs) or any(self.tgt_coeffs)

    def all_coeffs(self) -> list[int]:
        """Source coefficients followed by target coefficients."""
        return [*self.src_coeffs, *self.tgt_coeffs]


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _trunc_rem(a: int, b: int) -> int:
    return a - b * _trunc_div(a, b)


def _sign(a: int) -> int:
    return (a > 0) - (a < 0)


def gcd_test(coeffs: Sequence[int], constant: int) -> bool:
    """GCD test: False proves independence, True means a dependence may exist."""
    g = 0
    for c in coeffs:
        g = gcd(g, c)
    if g == 0:
        return constant == 0
    return constant % g == 0


def banerjee_test(
    coeffs: Sequence[int],
    constant: int,
    lower_bounds: Sequence[int],
    upper_bounds: Sequence[int],
) -> bool:
    """Banerjee bounds test; missing bounds default to 0 and 100."""
    min_val = max_val = constant
    for i, c in enumerate(coeffs):
        lb = lower_bounds[i] if i < len(lower_bounds) else 0
        ub = upper_bounds[i] if i < len(upper_bounds) else 100
        if c > 0:
            min_val += c * lb
            max_val += c * ub
        else:
            min_val += c * ub
            max_val += c * lb
    return min_val <= 0 <= max_val


def extended_gcd(a: int, b: int) -> tuple[int, int, int]:
    """Return ``(g, x, y)`` with ``a*x + b*y == g``."""
    if b == 0:
        return abs(a), _sign(a), 0
    g, x, y = extended_gcd(b, _trunc_rem(a, b))
    return g, y, x - _trunc_div(a, b) * y


def solve_diophantine(a: int, b: int, c: int) -> Optional[tuple[int, int]]:
    """One integer solution of ``a*x + b*y == c``, or None if there is none."""
    if a == 0 and b == 0:
        return (0, 0) if c == 0 else None
    g, x0, y0 = extended_gcd(a, b)
    if c % g != 0:
        return None
    scale = _trunc_div(c, g)
    return x0 * scale, y0 * scale