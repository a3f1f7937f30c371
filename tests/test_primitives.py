"""Tests for pixels, spans, rectangles and lines"""

import random

import pytest

from rasterpix.color import Color
from rasterpix.draw import PixelCanvas
from rasterpix.errors import SizeMismatchError


def lit(canvas: PixelCanvas) -> set[tuple[int, int]]:
    return {(x, y) for x, y, c in canvas.pixels() if c}


def drawn(w, h, fn) -> PixelCanvas:
    canvas = PixelCanvas(w, h)
    fn(canvas)
    return canvas


class TestBufferAccess:
    def test_set_and_get_pixel(self):
        canvas = PixelCanvas(4, 3)
        canvas.set_pixel(2, 1, Color.RED)
        assert canvas.get_pixel(2, 1) == Color.RED
        assert canvas.array[1 * 4 + 2] == 0x00FF0000

    def test_set_pixel_out_of_bounds_is_ignored(self):
        canvas = PixelCanvas(4, 3)
        for x, y in [(-1, 0), (4, 0), (0, -1), (0, 3), (10**12, 10**12)]:
            canvas.set_pixel(x, y, 1)
        assert lit(canvas) == set()

    def test_get_pixel_out_of_bounds_raises(self):
        canvas = PixelCanvas(4, 3)
        with pytest.raises(IndexError):
            canvas.get_pixel(4, 0)

    def test_clear(self):
        canvas = PixelCanvas(3, 2)
        canvas.clear((1, 2, 3))
        assert list(canvas.array) == [Color.rgb(1, 2, 3)] * 6

    def test_set_pixels(self):
        canvas = PixelCanvas(2, 2)
        canvas.set_pixels([1, 2, 3, 4])
        assert canvas.get_pixel(1, 1) == 4
        with pytest.raises(SizeMismatchError):
            canvas.set_pixels([1, 2, 3])

    def test_empty_canvas_accepts_everything(self):
        canvas = PixelCanvas(0, 0)
        canvas.fill_rect(0, 0, 10, 10, 1)
        canvas.line(0, 0, 5, 5, 1)
        canvas.fill_circle(0, 0, 3, 1)
        canvas.fill_triangle(0, 0, 5, 0, 0, 5, 1)
        canvas.flood_fill(0, 0, 1)
        assert len(canvas.array) == 0

    def test_clip_rect(self):
        canvas = PixelCanvas(8, 6)
        assert canvas.clip_rect(-3, 4, 2, 100) == (0, 4, 2, 6)
        from_x, to_x, _, _ = canvas.clip_rect(20, 30, 0, 6)
        assert from_x == to_x
        _, _, from_y, to_y = canvas.clip_rect(0, 8, -10, -5)
        assert from_y == to_y


class TestSpans:
    def test_hline_is_inclusive_and_order_independent(self):
        a = drawn(8, 4, lambda c: c.hline(1, 2, 5, 1))
        b = drawn(8, 4, lambda c: c.hline(1, 5, 2, 1))
        assert lit(a) == {(x, 1) for x in range(2, 6)}
        assert list(a.array) == list(b.array)

    def test_hline_clips(self):
        canvas = drawn(8, 4, lambda c: c.hline(1, 6, -3, 7))
        assert lit(canvas) == {(x, 1) for x in range(0, 7)}

    def test_hline_past_right_edge_draws_nothing(self):
        canvas = drawn(8, 4, lambda c: c.hline(0, 100, 120, 1))
        assert lit(canvas) == set()

    def test_vline(self):
        canvas = drawn(4, 8, lambda c: c.vline(2, 9, 5, 1))
        assert lit(canvas) == {(2, y) for y in range(5, 8)}


class TestRectangles:
    @pytest.mark.parametrize("w, h", [(0, 4), (4, 0), (-2, 3), (3, -2)])
    def test_empty_rect_draws_nothing(self, w, h):
        canvas = PixelCanvas(8, 8)
        canvas.fill_rect(1, 1, w, h, 1)
        canvas.outline_rect(1, 1, w, h, 1)
        canvas.thick_outline_rect(1, 1, w, h, 3, 1)
        assert lit(canvas) == set()

    def test_fill_rect(self):
        canvas = drawn(8, 8, lambda c: c.fill_rect(1, 2, 3, 2, 1))
        assert lit(canvas) == {(x, y) for x in range(1, 4) for y in range(2, 4)}

    def test_fill_rect_clipped(self):
        canvas = drawn(8, 8, lambda c: c.fill_rect(-2, -2, 4, 4, 1))
        assert lit(canvas) == {(0, 0), (1, 0), (0, 1), (1, 1)}

    def test_fill_rect_off_canvas(self):
        canvas = PixelCanvas(8, 8)
        canvas.fill_rect(100, 2, 4, 4, 1)
        canvas.fill_rect(2, 8, 4, 4, 1)
        canvas.fill_rect(-10, -10, 5, 5, 1)
        assert lit(canvas) == set()

    def test_outline_rect(self):
        canvas = drawn(8, 8, lambda c: c.outline_rect(1, 1, 4, 3, 1))
        expected = {
            (x, y)
            for x in range(1, 5)
            for y in range(1, 4)
            if x in (1, 4) or y in (1, 3)
        }
        assert lit(canvas) == expected

    @pytest.mark.parametrize(
        "rect", [(1, 1, 4, 3), (0, 0, 1, 1), (2, 3, 1, 5), (-2, 5, 12, 7), (3, 3, 2, 2)]
    )
    def test_thick_outline_rect_one_is_outline(self, rect):
        a = drawn(10, 10, lambda c: c.outline_rect(*rect, 1))
        b = drawn(10, 10, lambda c: c.thick_outline_rect(*rect, 1, 1))
        assert list(a.array) == list(b.array)

    def test_thick_outline_rect_is_centred_on_outline(self):
        canvas = drawn(30, 30, lambda c: c.thick_outline_rect(5, 5, 10, 8, 3, 1))
        outer = {(x, y) for x in range(4, 16) for y in range(4, 14)}
        hole = {(x, y) for x in range(7, 13) for y in range(7, 11)}
        assert lit(canvas) == outer - hole

    def test_thick_outline_rect_without_hole_is_filled(self):
        canvas = drawn(30, 30, lambda c: c.thick_outline_rect(5, 5, 3, 3, 4, 1))
        # left = 3, right = 5 + 2 - 2 + 4 = 9
        assert lit(canvas) == {(x, y) for x in range(3, 9) for y in range(3, 9)}

    def test_thick_outline_rect_writes_each_pixel_once(self):
        counting = PixelCanvas(30, 30, writer=_CountingWriter())
        counting.thick_outline_rect(5, 5, 10, 8, 4, 1)
        assert max(counting.array) == 1
        assert sum(counting.array) == 13 * 11 - 5 * 3


class _CountingWriter:
    def write(self, buffer, index, color):
        buffer[index] += 1

    def fill(self, buffer, start, stop, color):
        for i in range(start, stop):
            buffer[i] += 1


class TestLines:
    def test_horizontal_line(self):
        canvas = drawn(8, 4, lambda c: c.line(1, 2, 5, 2, 1))
        assert lit(canvas) == {(x, 2) for x in range(1, 6)}

    def test_single_point(self):
        canvas = drawn(8, 4, lambda c: c.line(3, 3, 3, 3, 1))
        assert lit(canvas) == {(3, 3)}

    def test_line_clips(self):
        canvas = drawn(8, 8, lambda c: c.line(-5, 2, 20, 2, 1))
        assert lit(canvas) == {(x, 2) for x in range(8)}

    def test_line_off_canvas(self):
        canvas = PixelCanvas(8, 8)
        canvas.line(-10, -1, 20, -5, 1)
        canvas.line(9, 0, 30, 7, 1)
        assert lit(canvas) == set()

    def test_line_is_symmetric(self):
        rng = random.Random(7)
        for _ in range(200):
            x1, y1, x2, y2 = (rng.randint(-8, 24) for _ in range(4))
            a = drawn(16, 16, lambda c: c.line(x1, y1, x2, y2, 1))
            b = drawn(16, 16, lambda c: c.line(x2, y2, x1, y1, 1))
            assert list(a.array) == list(b.array), (x1, y1, x2, y2)

    def test_line_connects_endpoints(self):
        rng = random.Random(3)
        for _ in range(50):
            x1, y1, x2, y2 = (rng.randint(0, 15) for _ in range(4))
            pixels = lit(drawn(16, 16, lambda c: c.line(x1, y1, x2, y2, 1)))
            assert (x1, y1) in pixels and (x2, y2) in pixels
            assert len(pixels) == max(abs(x2 - x1), abs(y2 - y1)) + 1

    @pytest.mark.parametrize(
        "coords",
        [(1, 1, 1, 9), (1, 9, 1, 1), (0, 3, 12, 3), (12, 3, 0, 3), (-4, 5, 20, 5), (2, 2, 9, 7)],
    )
    def test_line_maybe_axis_aligned_matches_line(self, coords):
        a = drawn(12, 12, lambda c: c.line(*coords, 1))
        b = drawn(12, 12, lambda c: c.line_maybe_axis_aligned(*coords, 1))
        assert list(a.array) == list(b.array)


class TestThickLines:
    def test_thin_thickness_draws_nothing(self):
        canvas = drawn(16, 16, lambda c: c.thick_line(1, 1, 10, 5, 0, 1))
        assert lit(canvas) == set()

    def test_thickness_one_is_line(self):
        a = drawn(16, 16, lambda c: c.line(1, 1, 10, 5, 1))
        b = drawn(16, 16, lambda c: c.thick_line(1, 1, 10, 5, 1, 1))
        assert list(a.array) == list(b.array)

    def test_zero_length_draws_square(self):
        canvas = drawn(16, 16, lambda c: c.thick_line(5, 5, 5, 5, 3, 1))
        assert lit(canvas) == {(x, y) for x in range(4, 7) for y in range(4, 7)}

    @pytest.mark.parametrize("thickness", [2, 3, 4, 5])
    @pytest.mark.parametrize(
        "coords",
        [(2, 8, 14, 8), (14, 8, 2, 8), (8, 2, 8, 14), (8, 14, 8, 2), (-5, 3, 30, 3)],
    )
    def test_maybe_axis_aligned_matches_thick_line(self, coords, thickness):
        a = drawn(20, 20, lambda c: c.thick_line(*coords, thickness, 1))
        b = drawn(20, 20, lambda c: c.thick_line_maybe_axis_aligned(*coords, thickness, 1))
        assert list(a.array) == list(b.array)

    def test_thick_hline_rows(self):
        canvas = drawn(20, 20, lambda c: c.thick_hline(8, 2, 10, 4, 1))
        assert lit(canvas) == {(x, y) for x in range(2, 11) for y in range(6, 11)}

    def test_diagonal_thick_line(self):
        canvas = drawn(32, 32, lambda c: c.thick_line(2, 2, 20, 12, 4, 1))
        pixels = lit(canvas)
        assert (11, 7) in pixels
        assert all(-2 <= x <= 24 and -2 <= y <= 16 for x, y in pixels)
