"""
Raster drawing on a flat 1D pixel buffer.

`PixelCanvas` treats `array` as a flat, mutable 1D buffer of packed
`0xAARRGGBB` colors representing a `width` by `height` bitmap in row-major
order. Pixels are addressed at index `y * width + x`.

All drawing operations take signed integer coordinates and clip against the
buffer, so shapes may extend arbitrarily far off canvas. Empty or negative
sizes are not errors: they draw nothing.
"""

import array
import math
from collections.abc import Iterable, Iterator, MutableSequence
from logging import getLogger
from typing import Final, Protocol, Self

from .color import Color, ColorLike, to_color
from .errors import SizeMismatchError
from .pixel_access import OverwriteWriter, PixelWriter
from .thick_ellipse import thick_ellipse_spans

logger = getLogger(__name__)

COORD_MAX: Final = 2**31 - 1


class Drawable(Protocol):
    def draw_to(self, canvas: "PixelCanvas") -> None: ...


def _circle_steps(r: int) -> Iterator[tuple[int, int]]:
    """Midpoint circle recurrence: `i` runs from -r up to 0, `j` from 0 up."""
    i, j = -r, 0
    err = 2 - 2 * r
    while True:
        yield i, j
        e = err
        if e <= j:
            j += 1
            err += j * 2 + 1
        if e > i or err > j:
            i += 1
            err += i * 2 + 1
        if i >= 0:
            break


def _ellipse_steps(a: int, b: int) -> Iterator[tuple[int, int]]:
    """Midpoint ellipse recurrence, followed by the tip along the minor axis."""
    i, j = -a, 0
    a2, b2 = a * a, b * b
    err = i * (2 * b2 + i) + b2
    while True:
        yield i, j
        e2 = 2 * err
        if e2 >= (i * 2 + 1) * b2:
            i += 1
            err += (i * 2 + 1) * b2
        if e2 <= (j * 2 + 1) * a2:
            j += 1
            err += (j * 2 + 1) * a2
        if i > 0:
            break

    # flat ellipses stop early, finish the tip
    while j < b:
        j += 1
        yield 0, j


class PixelCanvas:
    """A bitmap canvas backed by a 1D buffer of packed colors.

    - `array` is modified in-place.
    - Coordinates are 0-based, with origin at top-left.
    - Every write goes through `writer` (overwrite by default).
    """

    def __init__(
        self,
        w: int,
        h: int,
        writer: PixelWriter | None = None,
        buffer: MutableSequence[int] | None = None,
    ) -> None:
        if w < 0 or h < 0:
            raise ValueError(f"Invalid canvas size {w}x{h}")
        if buffer is None:
            buffer = array.array("I", [0]) * (w * h)
        elif len(buffer) != w * h:
            raise SizeMismatchError(w, h, len(buffer))

        self.array: Final = buffer
        self.width: Final = w
        self.height: Final = h
        self.clamped_width: Final = min(w, COORD_MAX)
        self.clamped_height: Final = min(h, COORD_MAX)
        self.writer: PixelWriter = writer or OverwriteWriter()
        logger.debug(f"Canvas {w}x{h} using {type(self.writer).__name__}")

    @classmethod
    def from_buffer(
        cls,
        buffer: MutableSequence[int],
        w: int,
        h: int,
        writer: PixelWriter | None = None,
    ) -> Self:
        """Wrap caller-owned storage of exactly `w * h` pixels.

        Raises `SizeMismatchError` if the length does not match.
        """
        return cls(w, h, writer, buffer=buffer)

    @property
    def buffer(self) -> MutableSequence[int]:
        return self.array

    def _in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.clamped_width and 0 <= y < self.clamped_height

    def _index(self, x: int, y: int) -> int:
        return y * self.width + x

    def _set_pixel_unchecked(self, x: int, y: int, color: int) -> None:
        """Write a pixel without bounds checking.

        Precondition: `0 <= x < width` and `0 <= y < height`. Anything else
        corrupts a different pixel (or raises from the underlying storage).
        """
        self.writer.write(self.array, y * self.width + x, color)

    def _fill_span(self, y: int, from_x: int, to_x: int, color: int) -> None:
        """Fill `[from_x, to_x)` on row `y`. Same precondition as above."""
        offset = y * self.width
        self.writer.fill(self.array, offset + from_x, offset + to_x, color)

    def clip_rect(
        self, xmin: int, xmax: int, ymin: int, ymax: int
    ) -> tuple[int, int, int, int]:
        """Clip the half-open rectangle `[xmin, xmax) x [ymin, ymax)`.

        Returns `(from_x, to_x, from_y, to_y)`, safe to use as indices. A
        range that misses the buffer comes back empty (`to == from`).
        """
        from_x = min(max(xmin, 0), self.clamped_width)
        to_x = max(min(xmax, self.clamped_width), from_x)
        from_y = min(max(ymin, 0), self.clamped_height)
        to_y = max(min(ymax, self.clamped_height), from_y)
        return from_x, to_x, from_y, to_y

    def _fill_clipped(
        self, xmin: int, xmax: int, ymin: int, ymax: int, color: int
    ) -> None:
        from_x, to_x, from_y, to_y = self.clip_rect(xmin, xmax, ymin, ymax)
        if from_x == to_x:
            return
        for y in range(from_y, to_y):
            self._fill_span(y, from_x, to_x, color)

    def clear(self, color: ColorLike) -> None:
        self.writer.fill(self.array, 0, len(self.array), to_color(color))

    def set_pixel(self, x: int, y: int, color: ColorLike) -> None:
        if self._in_bounds(x, y):
            self._set_pixel_unchecked(x, y, to_color(color))

    def get_pixel(self, x: int, y: int) -> Color:
        if not self._in_bounds(x, y):
            raise IndexError(f"({x}, {y}) outside {self.width}x{self.height} canvas")
        return Color(self.array[self._index(x, y)])

    def set_pixels(self, values: Iterable[int]) -> None:
        """Replace the whole frame with `values` (row-major packed colors)."""
        values = list(values)
        if len(values) != len(self.array):
            raise SizeMismatchError(self.width, self.height, len(values))
        if isinstance(self.array, array.array):
            self.array[:] = array.array(self.array.typecode, values)
        else:
            self.array[:] = values

    def pixels(self) -> Iterator[tuple[int, int, Color]]:
        """Yield `(x, y, color)` for every pixel in row-major order."""
        for i, p in enumerate(self.array):
            yield i % self.width, i // self.width, Color(p)

    def draw(self, drawable: Drawable) -> None:
        drawable.draw_to(self)

    # Lines and rectangles

    def hline(self, y: int, x1: int, x2: int, color: ColorLike) -> None:
        """Draw a horizontal line from `x1` to `x2` inclusive."""
        if 0 <= y < self.clamped_height:
            if x1 > x2:
                x1, x2 = x2, x1
            from_x = max(x1, 0)
            to_x = min(x2 + 1, self.clamped_width)
            if from_x < to_x:
                self._fill_span(y, from_x, to_x, to_color(color))

    def vline(self, x: int, y1: int, y2: int, color: ColorLike) -> None:
        """Draw a vertical line from `y1` to `y2` inclusive."""
        if 0 <= x < self.clamped_width:
            if y1 > y2:
                y1, y2 = y2, y1
            raw = to_color(color)
            for y in range(max(y1, 0), min(y2 + 1, self.clamped_height)):
                self._set_pixel_unchecked(x, y, raw)

    def thick_hline(
        self, y: int, x1: int, x2: int, thickness: int, color: ColorLike
    ) -> None:
        """Horizontal form of `thick_line`.

        Covers `2 * (thickness // 2) + 1` rows centred on `y`.
        """
        if thickness < 1:
            return
        half = thickness // 2
        self.fill_rect(min(x1, x2), y - half, abs(x2 - x1) + 1, 2 * half + 1, color)

    def thick_vline(
        self, x: int, y1: int, y2: int, thickness: int, color: ColorLike
    ) -> None:
        """Vertical form of `thick_line`."""
        if thickness < 1:
            return
        half = thickness // 2
        self.fill_rect(x - half, min(y1, y2), 2 * half + 1, abs(y2 - y1) + 1, color)

    def fill_rect(self, x: int, y: int, w: int, h: int, color: ColorLike) -> None:
        """Fill a `w` by `h` rectangle with its top-left corner at (x, y).

        Nothing is drawn if `w <= 0` or `h <= 0`.
        """
        if w <= 0 or h <= 0:
            return
        self._fill_clipped(x, x + w, y, y + h, to_color(color))

    def outline_rect(self, x: int, y: int, w: int, h: int, color: ColorLike) -> None:
        """Draw the one pixel border of the rectangle `fill_rect` would fill."""
        if w <= 0 or h <= 0:
            return

        raw = to_color(color)
        x2 = x + w - 1
        y2 = y + h - 1

        self.hline(y, x, x2, raw)
        if y2 != y:
            self.hline(y2, x, x2, raw)
        if h > 2:
            self.vline(x, y + 1, y2 - 1, raw)
            if x2 != x:
                self.vline(x2, y + 1, y2 - 1, raw)

    def thick_outline_rect(
        self, x: int, y: int, w: int, h: int, thickness: int, color: ColorLike
    ) -> None:
        """Draw a rectangle border `thickness` pixels wide.

        The border is centred on the pixels `outline_rect` draws, growing
        `thickness // 2` pixels outwards.
        """
        if w <= 0 or h <= 0 or thickness <= 0:
            return
        if thickness == 1:
            self.outline_rect(x, y, w, h, color)
            return

        raw = to_color(color)
        half = thickness // 2

        # outer bounds, half-open
        left = x - half
        top = y - half
        right = x + w - 1 - half + thickness
        bottom = y + h - 1 - half + thickness

        # hole in the middle, half-open
        inner_left = left + thickness
        inner_right = right - thickness
        inner_top = top + thickness
        inner_bottom = bottom - thickness

        if inner_left >= inner_right or inner_top >= inner_bottom:
            self._fill_clipped(left, right, top, bottom, raw)
            return

        self._fill_clipped(left, right, top, inner_top, raw)
        self._fill_clipped(left, right, inner_bottom, bottom, raw)
        self._fill_clipped(left, inner_left, inner_top, inner_bottom, raw)
        self._fill_clipped(inner_right, right, inner_top, inner_bottom, raw)

    def line(self, x1: int, y1: int, x2: int, y2: int, color: ColorLike) -> None:
        """Draw a line from (x1, y1) to (x2, y2) using Bresenham's algorithm.

        - Writes only to in-bounds pixels.
        - The endpoints are walked in a fixed order, so swapping them gives
          the same pixels.
        """
        if max(x1, x2) < 0 or min(x1, x2) >= self.clamped_width:
            return
        if max(y1, y2) < 0 or min(y1, y2) >= self.clamped_height:
            return
        if (x2, y2) < (x1, y1):
            x1, y1, x2, y2 = x2, y2, x1, y1

        raw = to_color(color)
        dx = abs(x2 - x1)
        sx = 1 if x1 < x2 else -1
        dy = -abs(y2 - y1)
        sy = 1 if y1 < y2 else -1
        err = dx + dy  # error term

        while True:
            if self._in_bounds(x1, y1):
                self._set_pixel_unchecked(x1, y1, raw)
            if x1 == x2 and y1 == y2:
                break
            e2 = 2 * err
            if e2 >= dy:
                err += dy
                x1 += sx
            if e2 <= dx:
                err += dx
                y1 += sy

    def line_maybe_axis_aligned(
        self, x1: int, y1: int, x2: int, y2: int, color: ColorLike
    ) -> None:
        """Same pixels as `line`, faster when the line is axis-aligned."""
        if x1 == x2:
            self.vline(x1, y1, y2, color)
        elif y1 == y2:
            self.hline(y1, x1, x2, color)
        else:
            self.line(x1, y1, x2, y2, color)

    def thick_line(
        self, x1: int, y1: int, x2: int, y2: int, thickness: int, color: ColorLike
    ) -> None:
        """Draw a line `thickness` pixels wide as a quad of two triangles.

        The quad's long edges run parallel to the line, offset by half the
        thickness on each side. A zero length line draws a square dot.
        """
        if thickness < 1:
            return
        if thickness == 1:
            self.line(x1, y1, x2, y2, color)
            return

        raw = to_color(color)
        if x1 == x2 and y1 == y2:
            half = thickness // 2
            self.fill_rect(x1 - half, y1 - half, 2 * half + 1, 2 * half + 1, raw)
            return

        dx = x2 - x1
        dy = y2 - y1
        length = math.hypot(dx, dy)
        half_thickness = thickness * 0.5

        px = int((-dy / length) * half_thickness)
        py = int((dx / length) * half_thickness)

        v1x, v1y = x1 + px, y1 + py
        v2x, v2y = x1 - px, y1 - py
        v3x, v3y = x2 + px, y2 + py
        v4x, v4y = x2 - px, y2 - py

        self.fill_triangle(v1x, v1y, v2x, v2y, v3x, v3y, raw)
        self.fill_triangle(v2x, v2y, v4x, v4y, v3x, v3y, raw)

    def thick_line_maybe_axis_aligned(
        self, x1: int, y1: int, x2: int, y2: int, thickness: int, color: ColorLike
    ) -> None:
        """Same pixels as `thick_line`, faster when the line is axis-aligned."""
        if x1 == x2 and y1 == y2:
            self.thick_line(x1, y1, x2, y2, thickness, color)
        elif x1 == x2:
            self.thick_vline(x1, y1, y2, thickness, color)
        elif y1 == y2:
            self.thick_hline(y1, x1, x2, thickness, color)
        else:
            self.thick_line(x1, y1, x2, y2, thickness, color)

    # Circles

    def fill_circle(self, x: int, y: int, r: int, color: ColorLike) -> None:
        """Fill a disc of radius `r` centred on (x, y). Needs `r >= 1`."""
        if r < 1:
            return

        raw = to_color(color)
        # half width per row offset, from the step itself and its conjugate
        widths: dict[int, int] = {}
        for i, j in _circle_steps(r):
            widths[j] = max(widths.get(j, 0), -i)
            widths[-i] = max(widths.get(-i, 0), j)

        for dy, w in widths.items():
            self.hline(y + dy, x - w, x + w, raw)
            if dy:
                self.hline(y - dy, x - w, x + w, raw)

    def outline_circle(self, x: int, y: int, r: int, color: ColorLike) -> None:
        """Draw a one pixel circle of radius `r`. Needs `r >= 1`."""
        if r < 1:
            return

        raw = to_color(color)
        points: set[tuple[int, int]] = set()
        for i, j in _circle_steps(r):
            points.update(((-i, j), (-j, -i), (i, -j), (j, i)))

        for dx, dy in points:
            if self._in_bounds(x + dx, y + dy):
                self._set_pixel_unchecked(x + dx, y + dy, raw)

    def thick_outline_circle(
        self, x: int, y: int, r: int, thickness: int, color: ColorLike
    ) -> None:
        """Draw a circle outline `thickness` pixels wide.

        The stroke grows both inwards and outwards, so `r` is the centre of
        the stroke.
        """
        if thickness == 1:
            self.outline_circle(x, y, r, color)
            return
        if thickness <= 0 or r < 1:
            return

        raw = to_color(color)
        half = thickness // 2
        ro = r + half
        ri = ro - thickness + 1

        xo, xi, j = ro, ri, 0
        erro = 1 - xo
        erri = 1 - xi

        while xo >= j:
            self.hline(y + j, x + xi, x + xo, raw)
            self.vline(x + j, y + xi, y + xo, raw)
            self.hline(y + j, x - xo, x - xi, raw)
            self.vline(x - j, y + xi, y + xo, raw)
            self.hline(y - j, x - xo, x - xi, raw)
            self.vline(x - j, y - xo, y - xi, raw)
            self.hline(y - j, x + xi, x + xo, raw)
            self.vline(x + j, y - xo, y - xi, raw)

            j += 1

            if erro < 0:
                erro += 2 * j + 1
            else:
                xo -= 1
                erro += 2 * (j - xo) + 1

            if j > ri:
                xi = j
            elif erri < 0:
                erri += 2 * j + 1
            else:
                xi -= 1
                erri += 2 * (j - xi) + 1

    # Ellipses

    def fill_ellipse(self, x: int, y: int, a: int, b: int, color: ColorLike) -> None:
        """Fill an ellipse with horizontal semi-axis `a` and vertical `b`."""
        if a < 1 or b < 1:
            return

        raw = to_color(color)
        widths: dict[int, int] = {}
        for i, j in _ellipse_steps(a, b):
            widths[j] = max(widths.get(j, 0), -i)

        for dy, w in widths.items():
            self.hline(y + dy, x - w, x + w, raw)
            if dy:
                self.hline(y - dy, x - w, x + w, raw)

    def outline_ellipse(
        self, x: int, y: int, a: int, b: int, color: ColorLike
    ) -> None:
        if a < 1 or b < 1:
            return

        raw = to_color(color)
        points: set[tuple[int, int]] = set()
        for i, j in _ellipse_steps(a, b):
            points.update(((-i, j), (i, j), (i, -j), (-i, -j)))

        for dx, dy in points:
            if self._in_bounds(x + dx, y + dy):
                self._set_pixel_unchecked(x + dx, y + dy, raw)

    def thick_outline_ellipse(
        self, x: int, y: int, a: int, b: int, thickness: int, color: ColorLike
    ) -> None:
        """Draw the ring between the ellipse shrunk and grown by half the
        thickness. See `rasterpix.thick_ellipse` for the walk."""
        if thickness == 1:
            self.outline_ellipse(x, y, a, b, color)
            return

        raw = to_color(color)
        for dy, x1, x2 in thick_ellipse_spans(a, b, thickness):
            self.hline(y + dy, x + x1, x + x2, raw)

    # Triangles

    def fill_triangle(
        self,
        x1: int,
        y1: int,
        x2: int,
        y2: int,
        x3: int,
        y3: int,
        color: ColorLike,
    ) -> None:
        raw = to_color(color)

        # Sort points vertically
        if y2 > y3:
            x2, y2, x3, y3 = x3, y3, x2, y2
        if y1 > y2:
            x1, y1, x2, y2 = x2, y2, x1, y1
        if y2 > y3:
            x2, y2, x3, y3 = x3, y3, x2, y2

        # +1 keeps flat edges from dividing by zero
        dx_far = (x3 - x1) / (y3 - y1 + 1)
        dx_upper = (x2 - x1) / (y2 - y1 + 1)
        dx_low = (x3 - x2) / (y3 - y2 + 1)

        for y in range(max(y1, 0), min(y3, self.clamped_height - 1) + 1):
            xf = x1 + dx_far * (y - y1)
            if y <= y2:
                xt = x1 + dx_upper * (y - y1 + 1)
            else:
                xt = x2 + dx_low * (y - y2)

            from_x = math.floor(min(xf, xt))
            to_x = math.floor(max(xf, xt))
            if to_x < 0 or from_x >= self.clamped_width:
                continue
            self._fill_span(
                y, max(from_x, 0), min(to_x, self.clamped_width - 1) + 1, raw
            )

    def outline_triangle(
        self,
        x1: int,
        y1: int,
        x2: int,
        y2: int,
        x3: int,
        y3: int,
        color: ColorLike,
    ) -> None:
        raw = to_color(color)
        self.line(x1, y1, x2, y2, raw)
        self.line(x1, y1, x3, y3, raw)
        self.line(x2, y2, x3, y3, raw)

    def thick_outline_triangle(
        self,
        x1: int,
        y1: int,
        x2: int,
        y2: int,
        x3: int,
        y3: int,
        thickness: int,
        color: ColorLike,
    ) -> None:
        """Draw a triangle outline with thick edges and rounded joints."""
        if thickness < 1:
            return
        if thickness == 1:
            self.outline_triangle(x1, y1, x2, y2, x3, y3, color)
            return

        raw = to_color(color)
        half = thickness // 2

        self.thick_line(x1, y1, x2, y2, thickness, raw)
        self.thick_line(x1, y1, x3, y3, thickness, raw)
        self.thick_line(x2, y2, x3, y3, thickness, raw)
        self.fill_circle(x1, y1, half, raw)
        self.fill_circle(x2, y2, half, raw)
        self.fill_circle(x3, y3, half, raw)

    # Flood fill

    def flood_fill(self, x: int, y: int, color: ColorLike) -> None:
        """Flood-fill the 4-connected region containing (x, y) with `color`.

        - Only pixels with the seed's current color are filled
        - Pixels are always overwritten, whatever the canvas writer is
        - Pending regions are kept on a list, not the call stack
        """
        if not self._in_bounds(x, y):
            return

        col = to_color(color)
        target_col = self.array[self._index(x, y)]
        if col == target_col:
            return

        # (x, y, find_origin): find_origin means walk up/left to the block's
        # top-left corner before filling
        stack: list[tuple[int, int, bool]] = [(x, y, True)]

        while stack:
            cx, cy, find_origin = stack.pop()
            if self.array[self._index(cx, cy)] != target_col:
                continue
            if find_origin:
                cx, cy = self._fill_origin(cx, cy, target_col)
            self._fill_block(cx, cy, col, target_col, stack)

    def _fill_origin(self, x: int, y: int, target_col: int) -> tuple[int, int]:
        buf, w = self.array, self.width
        while True:
            ox, oy = x, y
            while y != 0 and buf[(y - 1) * w + x] == target_col:
                y -= 1
            while x != 0 and buf[y * w + x - 1] == target_col:
                x -= 1
            if x == ox and y == oy:
                return x, y

    def _fill_block(
        self,
        x: int,
        y: int,
        col: int,
        target_col: int,
        stack: list[tuple[int, int, bool]],
    ) -> None:
        """Fill rows downwards from (x, y), pushing side regions on `stack`.

        The run of the previous row from `x` to `x + last_row_len` is always
        filled already, so only the parts where consecutive runs differ in
        length need another look.
        """
        buf, w = self.array, self.width
        last_row_len = 0

        while True:
            row_len = 0
            sx = x
            row = y * w

            if last_row_len != 0 and buf[row + x] != target_col:
                # run got narrower on the left
                while True:
                    last_row_len -= 1
                    if last_row_len == 0:
                        return
                    x += 1
                    if buf[row + x] == target_col:
                        break
                sx = x
            else:
                # run got wider on the left, cells above may be new regions
                above_open = False
                while x != 0 and buf[row + x - 1] == target_col:
                    x -= 1
                    buf[row + x] = col
                    above = y != 0 and buf[row - w + x] == target_col
                    if above and not above_open:
                        stack.append((x, y - 1, True))
                    above_open = above
                    row_len += 1
                    last_row_len += 1

            while sx < w and buf[row + sx] == target_col:
                buf[row + sx] = col
                row_len += 1
                sx += 1

            if row_len < last_row_len:
                # shorter than the row above: the rest of this row under the
                # previous run may hold separate regions
                end = x + last_row_len
                sx += 1
                while sx < end:
                    if buf[row + sx] == target_col:
                        stack.append((sx, y, False))
                        while sx < end and buf[row + sx] == target_col:
                            sx += 1
                    sx += 1
            elif row_len > last_row_len and y != 0:
                # longer than the row above: look above the overhang
                ux = x + last_row_len + 1
                while ux < sx:
                    if buf[row - w + ux] == target_col:
                        stack.append((ux, y - 1, True))
                        while ux < sx and buf[row - w + ux] == target_col:
                            ux += 1
                    ux += 1

            last_row_len = row_len
            y += 1
            if last_row_len == 0 or y >= self.height:
                break
