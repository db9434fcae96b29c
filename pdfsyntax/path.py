"""Writing path construction operators of a content stream."""

from __future__ import annotations

import enum
import math
from decimal import Decimal
from typing import Sequence, TextIO


class FillMode(enum.Enum):
    """Rule used to decide which areas of a path are inside it."""

    NON_ZERO = "f"
    EVEN_ODD = "f*"


def _fmt(x: float) -> str:
    if math.isfinite(x) and float(x).is_integer():
        return str(int(x))
    if not math.isfinite(x):
        return "NaN" if math.isnan(x) else ("inf" if x > 0 else "-inf")
    return format(Decimal(repr(float(x))), "f")


def _point(p: Sequence[float]) -> tuple[float, float]:
    x, y = p
    return float(x), float(y)


class PathBuilder:
    """Writes path operators to a text stream, tracking the current point."""

    def __init__(self, out: TextIO, start: Sequence[float]) -> None:
        self.out = out
        self.current = _point(start)

    def _emit(self, *values: float, op: str) -> None:
        self.out.write(" ".join([*(_fmt(v) for v in values), op]) + "\n")

    def move_to(self, p: Sequence[float]) -> None:
        """Begin a new subpath at ``p`` without drawing a connecting segment."""
        p = _point(p)
        self._emit(*p, op="m")
        self.current = p

    def line_to(self, p: Sequence[float]) -> None:
        """Append a straight line from the current point to ``p``."""
        p = _point(p)
        self._emit(*p, op="l")
        self.current = p

    def quadratic(self, c: Sequence[float], p: Sequence[float]) -> None:
        """Append a quadratic Bézier curve, written as the equivalent cubic one."""
        c, p = _point(c), _point(p)
        c1 = tuple(2 / 3 * cv + 1 / 3 * sv for cv, sv in zip(c, self.current))
        c2 = tuple(2 / 3 * cv + 1 / 3 * pv for cv, pv in zip(c, p))
        self._emit(*c1, *c2, *p, op="c")
        self.current = p

    def cubic(
        self, c1: Sequence[float], c2: Sequence[float], p: Sequence[float]
    ) -> None:
        """Append a cubic Bézier curve with control points ``c1`` and ``c2``."""
        c1, c2, p = _point(c1), _point(c2), _point(p)
        if c1 == self.current:
            self._emit(*c2, *p, op="v")
        elif c2 == self.current:
            self._emit(*c1, *p, op="y")
        else:
            self._emit(*c1, *c2, *p, op="c")
        self.current = p

    def close(self) -> None:
        """Close the current subpath."""
        self.out.write("h\n")

    def fill(self, mode: FillMode) -> None:
        """Fill the path using the given rule."""
        self.out.write(FillMode(mode).value + "\n")