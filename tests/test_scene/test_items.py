"""Tests for scene items, styles and colours."""

from __future__ import annotations

import pytest
from PIL import Image

from scenesvg.errors import DegenerateGeometryError
from scenesvg.scene import (
    Color,
    CompoundPath,
    Group,
    Layer,
    NodeKind,
    Path,
    PlacedSymbol,
    PointText,
    Project,
    Raster,
    Shape,
    ShapeKind,
    Style,
    Symbol,
)
from scenesvg.utils.geometry import Rect
from scenesvg.utils.matrix import Matrix
from tests.conftest import SQUARE


class TestHierarchy:
    def test_children_adopted_on_construction(self):
        child = Shape.circle((0, 0), 1)
        group = Group(children=[child])
        assert child.parent is group

    def test_add_child_reparents(self):
        child = Shape.circle((0, 0), 1)
        a = Group(children=[child])
        b = Group()
        b.add_child(child)
        assert child.parent is b
        assert a.children == []
        assert b.children == [child]

    def test_ids_are_unique(self):
        assert Group().id != Group().id

    def test_kinds(self):
        assert Layer.kind == NodeKind.LAYER
        assert CompoundPath.kind == NodeKind.COMPOUND_PATH
        assert PointText.kind == "point-text"


class TestStyle:
    def test_resolve_climbs_to_ancestor(self):
        child = Shape.circle((0, 0), 1)
        Group(style={"stroke_width": 3}, children=[Group(children=[child])])
        assert child.resolve("stroke_width") == 3

    def test_resolve_falls_back_to_defaults(self):
        assert Group().resolve("stroke_cap") == "butt"
        assert Group().resolve("fill_color") is None

    def test_explicit_none_is_kept(self):
        child = Shape.circle((0, 0), 1, style={"fill_color": None})
        Group(style={"fill_color": "#ff0000"}, children=[child])
        assert child.resolve("fill_color") is None

    def test_hex_colours_coerced(self):
        style = Style(fill_color="#f00")
        assert style["fill_color"] == Color(1, 0, 0)

    def test_unknown_property_rejected(self):
        with pytest.raises(KeyError):
            Style(fill="#fff")

    def test_dash_array_floats(self):
        assert Style(dash_array=[1, 2])["dash_array"] == [1.0, 2.0]


class TestColor:
    def test_from_hex(self):
        assert Color.from_hex("#336699").hex == "#336699"
        assert Color.from_hex("#ff000080").alpha == pytest.approx(128 / 255)

    def test_invalid_hex(self):
        with pytest.raises(ValueError):
            Color.from_hex("red")

    def test_css(self):
        assert Color(1, 0, 0, 0.5).to_css() == "rgba(255,0,0,0.5)"
        assert Color(1, 0, 0, 0.5).to_css(no_alpha=True) == "#ff0000"

    def test_equality_ignores_identity(self):
        a, b = Color(0, 1, 0), Color(0, 1, 0)
        assert a == b
        assert a.id != b.id


class TestGeometry:
    def test_shape_constructors(self):
        circle = Shape.circle((20, 0), 5)
        assert circle.shape == ShapeKind.CIRCLE
        assert circle.position == (20, 0)
        assert circle.bounds == Rect(15, -5, 10, 10)

        ellipse = Shape.ellipse((0, 0), (4, 2))
        assert ellipse.radius_xy == (4.0, 2.0)
        assert ellipse.size == (8, 4)

    def test_path_vertices(self):
        closed = Path.from_points(SQUARE + [(0, 0)], closed=True)
        assert closed.vertices == [(0, 0), (10, 0), (10, 10), (0, 10)]
        opened = Path.from_points(SQUARE)
        assert len(opened.vertices) == 4
        assert opened.is_polygon

    def test_path_from_svg_data(self):
        path = Path.from_svg_data("M0,0 L10,0 Q15,5 10,10 Z")
        assert path.closed
        assert not path.is_polygon
        assert path.bounds.x == pytest.approx(0)

    def test_empty_group_has_no_bounds(self):
        assert Group().bounds is None

    def test_group_bounds_union(self):
        group = Group(
            matrix=Matrix.translation(100, 0),
            children=[Shape.rectangle((0, 0), (10, 10)), Shape.circle((20, 0), 5)],
        )
        assert group.bounds == pytest.approx(Rect(95, -5, 30, 10))

    def test_placed_symbol_bounds(self):
        symbol = Symbol(definition=Shape.circle((0, 0), 5))
        placed = PlacedSymbol(symbol=symbol, matrix=Matrix.translation(50, 50))
        assert placed.bounds == pytest.approx(Rect(45, 45, 10, 10))

    def test_project_bounds(self):
        project = Project()
        project.add_layer(Layer(children=[Shape.rectangle((0, 0), (10, 10))]))
        project.add_layer(Layer(children=[Shape.circle((20, 0), 5)]))
        assert project.bounds == pytest.approx(Rect(-5, -5, 30, 10))


class TestRaster:
    def test_size_from_image(self):
        raster = Raster(image=Image.new("RGB", (3, 2)))
        assert raster.size == (3.0, 2.0)
        assert raster.to_data_url().startswith("data:image/png;base64,")

    def test_source_bytes(self):
        raster = Raster(size=(1, 1), source=b"abc", mime="image/jpeg")
        assert raster.to_data_url() == "data:image/jpeg;base64,YWJj"

    def test_no_pixels(self):
        with pytest.raises(DegenerateGeometryError):
            Raster(size=(1, 1)).to_data_url()
