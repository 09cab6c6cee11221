"""Tests for matrix → SVG positioning attributes."""

from __future__ import annotations

from scenesvg.scene import Shape
from scenesvg.svg.transform import get_transform, matrix_attributes
from scenesvg.utils.formatter import Formatter
from scenesvg.utils.matrix import Matrix

FMT = Formatter()


class TestMatrixAttributes:
    def test_identity_emits_nothing(self):
        assert matrix_attributes(Matrix(), FMT) == {}

    def test_pure_translation(self):
        assert matrix_attributes(Matrix.translation(10, 20), FMT) == {"transform": "translate(10,20)"}

    def test_shear_falls_back_to_matrix(self):
        attrs = matrix_attributes(Matrix(1, 0, 0.5, 1, 3, 4), FMT)
        assert attrs == {"transform": "matrix(1,0,0.5,1,3,4)"}

    def test_clause_order(self):
        m = Matrix.translation(5, 0) @ Matrix.rotation(45) @ Matrix.scaling(2, 3)
        assert matrix_attributes(m, FMT) == {"transform": "translate(5,0) rotate(45) scale(2,3)"}

    def test_rotation_only(self):
        assert matrix_attributes(Matrix.rotation(90), FMT) == {"transform": "rotate(90)"}

    def test_reflection(self):
        assert matrix_attributes(Matrix.scaling(-1, 1), FMT) == {"transform": "scale(-1,1)"}


class TestCoordinates:
    def test_translation_becomes_anchor(self):
        attrs = matrix_attributes(Matrix.translation(10, 20), FMT, coordinates=True)
        assert attrs == {"x": 10, "y": 20}

    def test_center_anchor(self):
        attrs = matrix_attributes(Matrix.translation(10, 20), FMT, coordinates=True, center=True)
        assert attrs == {"cx": 10, "cy": 20}

    def test_anchor_in_local_coordinates(self):
        attrs = matrix_attributes(Matrix(2, 0, 0, 2, 10, 20), FMT, coordinates=True)
        assert attrs == {"x": 5, "y": 10, "transform": "scale(2,2)"}

    def test_rotated_anchor_has_no_translate(self):
        m = Matrix.translation(10, 0) @ Matrix.rotation(90)
        attrs = matrix_attributes(m, FMT, coordinates=True)
        assert attrs["transform"] == "rotate(90)"
        assert FMT.point(attrs["x"], attrs["y"]) == "0,-10"

    def test_singular_keeps_full_matrix(self):
        attrs = matrix_attributes(Matrix(0, 0, 0, 0, 5, 5), FMT, coordinates=True)
        assert attrs == {"x": 0.0, "y": 0.0, "transform": "matrix(0,0,0,0,5,5)"}


def test_get_transform_reads_item_matrix():
    circle = Shape.circle((3, 4), 1)
    assert get_transform(circle, FMT, coordinates=True, center=True) == {"cx": 3, "cy": 4}
