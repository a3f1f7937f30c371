"""
Turtle-style drawing on a `PixelCanvas`.

A `Pen` has a position, a heading and a stroke style. Moving it with the pen
down strokes a line on the canvas. Methods return the pen so calls chain:

    pen.set_position(45, 32).set_thickness(2)
    pen.repeat(6, lambda p: p.forward(45).turn_right(60))
"""

import math
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Self, TypeAlias

from .color import Color, ColorLike, to_color
from .draw import PixelCanvas

Bounds: TypeAlias = tuple[float, float, float, float]


@dataclass
class PenState:
    position: tuple[float, float] = (0.0, 0.0)
    direction: float = 0.0
    """Heading in radians, 0 points along +x, positive turns clockwise on screen"""
    color: Color = Color.WHITE
    thickness: int = 1
    is_down: bool = True
    bounds: Bounds | None = None
    """(xmin, xmax, ymin, ymax) the pen may not leave"""


class Pen:
    def __init__(self, canvas: PixelCanvas, state: PenState | None = None) -> None:
        self.canvas: PixelCanvas = canvas
        self.state: PenState = PenState() if state is None else replace(state)
        self._bound_self()

    def set_state(self, state: PenState) -> Self:
        self.state = replace(state)
        self._bound_self()
        return self

    def get_state(self) -> PenState:
        return replace(self.state)

    def reset(self) -> Self:
        return self.set_state(PenState())

    def set_bounds(self, xmin: float, xmax: float, ymin: float, ymax: float) -> Self:
        """Keep the pen inside the given box."""
        self.state.bounds = (xmin, xmax, ymin, ymax)
        self._bound_self()
        return self

    def set_bounds_to_canvas(self) -> Self:
        return self.set_bounds(
            0.0, float(self.canvas.width - 1), 0.0, float(self.canvas.height - 1)
        )

    def set_position(self, x: float, y: float) -> Self:
        """Move without drawing."""
        self.state.position = self._bound_pos(x, y)
        return self

    def set_position_draw(self, x: float, y: float) -> Self:
        """Move to (x, y), drawing a line if the pen is down."""
        return self._move_to(*self._bound_pos(x, y))

    def forward(self, amount: float) -> Self:
        x, y = self.state.position
        dx, dy = math.cos(self.state.direction), math.sin(self.state.direction)
        return self._move_to(*self._bound_pos(x + dx * amount, y + dy * amount))

    def backward(self, amount: float) -> Self:
        return self.forward(-amount)

    def flood_fill(self) -> Self:
        """Flood fill from the current position with the pen color."""
        x, y = self.state.position
        self.canvas.flood_fill(int(x), int(y), self.state.color)
        return self

    def set_direction(self, deg: float) -> Self:
        self.state.direction = math.radians(deg)
        return self

    def get_direction(self) -> float:
        return math.degrees(self.state.direction)

    def set_direction_rad(self, rad: float) -> Self:
        self.state.direction = rad
        return self

    def turn_left(self, deg: float) -> Self:
        return self.turn_left_rad(math.radians(deg))

    def turn_left_rad(self, rad: float) -> Self:
        self.state.direction -= rad
        return self

    def turn_right(self, deg: float) -> Self:
        return self.turn_right_rad(math.radians(deg))

    def turn_right_rad(self, rad: float) -> Self:
        self.state.direction += rad
        return self

    def set_color(self, color: ColorLike) -> Self:
        self.state.color = to_color(color)
        return self

    def set_thickness(self, thickness: int) -> Self:
        self.state.thickness = thickness
        return self

    def pen_up(self) -> Self:
        self.state.is_down = False
        return self

    def pen_down(self) -> Self:
        self.state.is_down = True
        return self

    def pen_toggle(self) -> Self:
        self.state.is_down = not self.state.is_down
        return self

    def repeat(self, times: int, fn: Callable[[Self], object]) -> Self:
        for _ in range(times):
            fn(self)
        return self

    def _bound_pos(self, x: float, y: float) -> tuple[float, float]:
        if self.state.bounds is None:
            return x, y
        xmin, xmax, ymin, ymax = self.state.bounds
        return min(max(x, xmin), xmax), min(max(y, ymin), ymax)

    def _bound_self(self) -> None:
        self.state.position = self._bound_pos(*self.state.position)

    def _move_to(self, x: float, y: float) -> Self:
        if self.state.is_down:
            x1, y1 = self.state.position
            self._stroke(int(x1), int(y1), int(x), int(y))
        self.state.position = (x, y)
        return self

    def _stroke(self, x1: int, y1: int, x2: int, y2: int) -> None:
        thickness, color = self.state.thickness, self.state.color
        self.canvas.thick_line_maybe_axis_aligned(x1, y1, x2, y2, thickness, color)

        if thickness > 1:
            half = thickness // 2
            self.canvas.fill_circle(x1, y1, half, color)
            self.canvas.fill_circle(x2, y2, half, color)
