"""
Span generator for thick ellipse outlines.

The ring between two concentric ellipses (the requested one shrunk and
grown by half the thickness on both axes) is traced by two midpoint walks
sharing the same row. Each walk starts on the major axis at `(a, 0)` and is
first "steep" (one row per step, x moves by at most one) until its tangent
crosses the diagonal, then "shallow" (x moves by one per step, rows advance
occasionally). The walks cross the diagonal at different rows, which gives
four phases:

1. both walks steep: emit the gap between inner and outer edge per row
2. one walk steep, the other shallow: keep stepping rows, with full
   spans once the inner ellipse is used up
3. both walks shallow: step by x while the inner edge exists
4. inner ellipse consumed: full spans until the outer walk reaches x = 0

Python integers do not overflow, so no care is needed for large radii.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TypeAlias

Span: TypeAlias = tuple[int, int, int]


@dataclass
class EllipseEdge:
    """Midpoint walk along one quadrant of an ellipse with semi-axes `a`, `b`."""

    a: int
    b: int
    x: int = field(init=False, default=0)
    dx: int = field(init=False, default=0)
    dy: int = field(init=False, default=0)
    err: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        self.x = self.a
        self.dx = 2 * self.b * self.b * self.x
        self.dy = 0
        self.err = self.steep_error()

    @property
    def steep(self) -> bool:
        return self.dy < self.dx

    def steep_error(self) -> int:
        a2, b2 = self.a * self.a, self.b * self.b
        return a2 - b2 * self.a + b2 // 4

    def shallow_error(self, y: int) -> int:
        a2, b2 = self.a * self.a, self.b * self.b
        return a2 * (y * y + y) + b2 * (self.x - 1) * (self.x - 1) - b2 * a2

    def step_row(self) -> None:
        """Advance one row in the steep region."""
        a2, b2 = self.a * self.a, self.b * self.b
        self.dy += 2 * a2
        if self.err < 0:
            self.err += self.dy + a2
        else:
            self.x -= 1
            self.dx -= 2 * b2
            self.err += self.dy - self.dx + a2

    def step_column(self) -> bool:
        """Advance in the shallow region until the row changes or x < 0.

        Returns True if the walk moved to the next row.
        """
        a2, b2 = self.a * self.a, self.b * self.b
        while True:
            self.x -= 1
            if self.x < 0:
                return False
            self.dx -= 2 * b2
            if self.err > 0:
                self.err += b2 - self.dx
            else:
                self.dy += 2 * a2
                self.err += self.dy - self.dx + b2
                return True


def _ring(py: int, outer: int, inner: int) -> Iterator[Span]:
    yield py, -outer, -inner
    yield py, outer, inner
    yield -py, -outer, -inner
    yield -py, outer, inner


def _band(py: int, x1: int, x2: int) -> Iterator[Span]:
    yield py, x1, x2
    yield -py, x1, x2


def thick_ellipse_spans(a: int, b: int, thickness: int) -> Iterator[Span]:
    """Yield `(dy, x1, x2)` spans, relative to the centre, of a thick ellipse.

    Spans are inclusive and may overlap. Nothing is yielded for `a < 1`,
    `b < 1` or `thickness <= 0`.
    """
    if a < 1 or b < 1 or thickness <= 0:
        return

    half = thickness // 2
    outer = EllipseEdge(a + half, b + half)
    inner = EllipseEdge(a - half, b - half)
    py = 0

    # 1st phase
    while outer.steep and inner.steep:
        yield from _ring(py, outer.x, inner.x)
        outer.step_row()
        inner.step_row()
        py += 1

    # 2nd phase
    if outer.steep:
        inner.err = inner.shallow_error(py)
        while outer.steep and inner.x >= 0:
            yield from _ring(py, outer.x, inner.x)
            outer.step_row()
            inner.step_column()
            py += 1

        while outer.steep:
            yield from _band(py, -outer.x, outer.x)
            outer.step_row()
            py += 1
    else:
        outer.err = outer.shallow_error(py)
        while inner.steep:
            px, row = outer.x, py
            if outer.step_column():
                py += 1
            inner.step_row()
            yield from _ring(row, px, max(min(px, inner.x), 0))

    # 3rd phase
    outer.err = outer.shallow_error(py)
    inner.err = inner.shallow_error(py)
    while inner.x >= 0:
        px, row = outer.x, py
        if outer.step_column():
            py += 1
        yield from _ring(row, px, min(px, inner.x))
        inner.step_column()

    # 4th phase
    while outer.x >= 0:
        yield from _band(py, -outer.x, outer.x + 1)
        if outer.step_column():
            py += 1
