"""Shape records that know how to draw themselves on a `PixelCanvas`."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Self

from .color import Color, ColorLike, to_color
from .draw import PixelCanvas


def _optional_color(color: ColorLike | None) -> Color | None:
    return None if color is None else to_color(color)


@dataclass(kw_only=True)
class Shape(ABC):
    """Common style: optional fill and outline colors and outline width.

    A shape with neither color set draws nothing.
    """

    fill_color: Color | None = Color.BLACK
    outline_color: Color | None = None
    outline_thickness: int = 1

    def __post_init__(self) -> None:
        self.fill_color = _optional_color(self.fill_color)
        self.outline_color = _optional_color(self.outline_color)

    def set_fill_color(self, color: ColorLike | None) -> Self:
        self.fill_color = _optional_color(color)
        return self

    def set_outline_color(self, color: ColorLike | None) -> Self:
        self.outline_color = _optional_color(color)
        return self

    def set_outline_thickness(self, thickness: int) -> Self:
        self.outline_thickness = thickness
        return self

    @abstractmethod
    def draw_to(self, canvas: PixelCanvas) -> None: ...


@dataclass
class Rectangle(Shape):
    x: int
    y: int
    width: int
    height: int

    @classmethod
    def from_points(cls, x1: int, y1: int, x2: int, y2: int) -> Self:
        return cls(x=min(x1, x2), y=min(y1, y2), width=abs(x2 - x1), height=abs(y2 - y1))

    def draw_to(self, canvas: PixelCanvas) -> None:
        if self.fill_color is not None:
            canvas.fill_rect(self.x, self.y, self.width, self.height, self.fill_color)
        if self.outline_color is not None:
            canvas.thick_outline_rect(
                self.x,
                self.y,
                self.width,
                self.height,
                self.outline_thickness,
                self.outline_color,
            )


@dataclass
class Circle(Shape):
    x: int
    y: int
    radius: int

    def draw_to(self, canvas: PixelCanvas) -> None:
        if self.fill_color is not None:
            canvas.fill_circle(self.x, self.y, self.radius, self.fill_color)
        if self.outline_color is not None:
            canvas.thick_outline_circle(
                self.x, self.y, self.radius, self.outline_thickness, self.outline_color
            )


@dataclass
class Ellipse(Shape):
    x: int
    y: int
    a: int
    """Horizontal semi-axis"""
    b: int
    """Vertical semi-axis"""

    def draw_to(self, canvas: PixelCanvas) -> None:
        if self.fill_color is not None:
            canvas.fill_ellipse(self.x, self.y, self.a, self.b, self.fill_color)
        if self.outline_color is not None:
            canvas.thick_outline_ellipse(
                self.x, self.y, self.a, self.b, self.outline_thickness, self.outline_color
            )


@dataclass
class Triangle(Shape):
    x1: int
    y1: int
    x2: int
    y2: int
    x3: int
    y3: int

    def draw_to(self, canvas: PixelCanvas) -> None:
        points = (self.x1, self.y1, self.x2, self.y2, self.x3, self.y3)
        if self.fill_color is not None:
            canvas.fill_triangle(*points, self.fill_color)
        if self.outline_color is not None:
            canvas.thick_outline_triangle(
                *points, self.outline_thickness, self.outline_color
            )


@dataclass
class Line(Shape):
    """A stroke; `fill_color` is the stroke color, `outline_thickness` its width."""

    x1: int
    y1: int
    x2: int
    y2: int

    def draw_to(self, canvas: PixelCanvas) -> None:
        if self.fill_color is not None:
            canvas.thick_line_maybe_axis_aligned(
                self.x1,
                self.y1,
                self.x2,
                self.y2,
                self.outline_thickness,
                self.fill_color,
            )
