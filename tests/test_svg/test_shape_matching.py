"""Tests for recognising primitive shapes in free-form paths."""

from __future__ import annotations

import pytest

from scenesvg.scene import Path, ShapeKind
from scenesvg.svg.shape_matching import match_shape
from scenesvg.utils.matrix import Matrix
from tests.conftest import CIRCLE_D, ELLIPSE_D, SQUARE


class TestRectangles:
    def test_square(self, square_path):
        shape = match_shape(square_path)
        assert shape is not None
        assert shape.shape == ShapeKind.RECTANGLE
        assert shape.size == pytest.approx((10, 10))
        assert shape.position == pytest.approx((5, 5))

    def test_rotated_rectangle(self):
        path = Path.from_points([(0, 0), (3, 4), (-1, 7), (-4, 3)], closed=True)
        shape = match_shape(path)
        assert shape is not None
        assert shape.size == pytest.approx((5, 5))
        dec = shape.matrix.decompose()
        assert dec.rotation == pytest.approx(53.1301, abs=1e-4)

    def test_quarter_turn_swaps_dimensions(self):
        # First edge runs down the y axis
        path = Path.from_points([(0, 0), (0, 20), (-10, 20), (-10, 0)], closed=True)
        shape = match_shape(path)
        assert shape.size == pytest.approx((10, 20))
        assert shape.matrix.decompose().rotation == pytest.approx(0)

    def test_path_matrix_kept(self):
        path = Path.from_points(SQUARE, closed=True, matrix=Matrix.translation(100, 0))
        assert match_shape(path).position == pytest.approx((105, 5))

    def test_open_path_not_matched(self):
        assert match_shape(Path.from_points(SQUARE)) is None

    def test_skewed_quad_not_matched(self):
        path = Path.from_points([(0, 0), (10, 0), (12, 10), (2, 10)], closed=True)
        assert match_shape(path) is None

    def test_triangle_not_matched(self):
        assert match_shape(Path.from_points([(0, 0), (10, 0), (5, 5)], closed=True)) is None


class TestEllipses:
    def test_circle(self):
        shape = match_shape(Path.from_svg_data(CIRCLE_D))
        assert shape.shape == ShapeKind.CIRCLE
        assert shape.radius == pytest.approx(10)
        assert shape.position == pytest.approx((0, 0))

    def test_ellipse(self):
        shape = match_shape(Path.from_svg_data(ELLIPSE_D))
        assert shape.shape == ShapeKind.ELLIPSE
        assert shape.radius_xy == pytest.approx((20, 10))

    def test_lumpy_loop_not_matched(self):
        d = "M10,0 C10,9 9,10 0,10 C-5,10 -10,5 -10,0 C-10,-5 -5,-10 0,-10 C5,-10 10,-5 10,0 Z"
        assert match_shape(Path.from_svg_data(d)) is None
