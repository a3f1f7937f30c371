"""Tests for filled and outlined triangles"""

import itertools

import pytest

from rasterpix.draw import PixelCanvas


def lit(canvas: PixelCanvas) -> set[tuple[int, int]]:
    return {(x, y) for x, y, c in canvas.pixels() if c}


def drawn(w, h, fn) -> PixelCanvas:
    canvas = PixelCanvas(w, h)
    fn(canvas)
    return canvas


TRIANGLES = [
    ((2, 1), (14, 6), (5, 13)),
    ((0, 0), (15, 3), (7, 15)),
    ((-6, 4), (20, 8), (3, 22)),
]


class TestFillTriangle:
    @pytest.mark.parametrize("points", TRIANGLES)
    def test_vertex_order_does_not_matter_for_distinct_rows(self, points):
        """Vertices on three different rows sort the same whatever order they come in."""
        results = set()
        for perm in itertools.permutations(points):
            coords = [v for p in perm for v in p]
            canvas = drawn(16, 16, lambda c: c.fill_triangle(*coords, 1))
            results.add(tuple(canvas.array))
        assert len(results) == 1

    @pytest.mark.parametrize("points", TRIANGLES)
    def test_stays_in_bounding_box(self, points):
        coords = [v for p in points for v in p]
        pixels = lit(drawn(16, 16, lambda c: c.fill_triangle(*coords, 1)))
        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        assert pixels
        assert all(min(xs) <= x <= max(xs) and min(ys) <= y <= max(ys) for x, y in pixels)

    def test_covers_whole_canvas(self):
        canvas = drawn(16, 16, lambda c: c.fill_triangle(-1000, -1000, 3000, -1000, -1000, 3000, 1))
        assert set(canvas.array) == {1}

    def test_off_canvas(self):
        canvas = PixelCanvas(16, 16)
        canvas.fill_triangle(20, 0, 40, 5, 30, 15, 1)
        canvas.fill_triangle(0, -20, 10, -5, 5, -1, 1)
        canvas.fill_triangle(0, 16, 10, 20, 5, 40, 1)
        assert lit(canvas) == set()

    def test_flat_triangle(self):
        canvas = drawn(16, 16, lambda c: c.fill_triangle(2, 5, 8, 5, 12, 5, 1))
        pixels = lit(canvas)
        assert pixels
        assert {y for _, y in pixels} == {5}


class TestOutlineTriangle:
    def test_outline_is_three_lines(self):
        a = drawn(16, 16, lambda c: c.outline_triangle(2, 1, 14, 6, 5, 13, 1))
        b = PixelCanvas(16, 16)
        b.line(2, 1, 14, 6, 1)
        b.line(14, 6, 5, 13, 1)
        b.line(5, 13, 2, 1, 1)
        assert list(a.array) == list(b.array)

    def test_thick_outline_one_is_outline(self):
        a = drawn(16, 16, lambda c: c.outline_triangle(2, 1, 14, 6, 5, 13, 1))
        b = drawn(16, 16, lambda c: c.thick_outline_triangle(2, 1, 14, 6, 5, 13, 1, 1))
        assert list(a.array) == list(b.array)

    def test_thick_outline_zero_draws_nothing(self):
        canvas = drawn(16, 16, lambda c: c.thick_outline_triangle(2, 1, 14, 6, 5, 13, 0, 1))
        assert lit(canvas) == set()

    def test_thick_outline_has_round_corners(self):
        canvas = drawn(32, 32, lambda c: c.thick_outline_triangle(4, 4, 26, 8, 10, 26, 4, 1))
        pixels = lit(canvas)
        for vx, vy in [(4, 4), (26, 8), (10, 26)]:
            assert {(vx - 2, vy), (vx + 2, vy), (vx, vy - 2), (vx, vy + 2)} <= pixels
        # the middle stays empty
        assert (13, 12) not in pixels
