"""Tests for the per-kind node exporters."""

from __future__ import annotations

from lxml import etree

from scenesvg.scene import (
    CompoundPath,
    Group,
    NodeKind,
    Path,
    PlacedSymbol,
    PointText,
    Raster,
    Shape,
    ShapeKind,
    Symbol,
)
from scenesvg.svg.exporter import ExportSession
from scenesvg.svg.exporters import EXPORTERS, check_exporters
from scenesvg.utils.matrix import Matrix
from tests.conftest import CIRCLE_D, SQUARE, href, local


def test_every_kind_has_an_exporter():
    assert set(check_exporters()) == set(NodeKind)
    assert EXPORTERS[NodeKind.GROUP] is EXPORTERS[NodeKind.LAYER]


def test_unknown_kind_yields_nothing(session):
    assert session.export(object()) is None


class TestPaths:
    def test_two_vertices_become_line(self, session):
        node = session.export(Path.from_points([(0, 0), (10, 5)]))
        assert local(node) == "line"
        assert [node.get(k) for k in ("x1", "y1", "x2", "y2")] == ["0", "0", "10", "5"]

    def test_empty_path_omitted(self, session):
        assert session.export(Path()) is None

    def test_closed_polygon(self, session, square_path):
        node = session.export(square_path)
        assert local(node) == "polygon"
        assert node.get("points") == "0,0 10,0 10,10 0,10"

    def test_open_polyline(self, session):
        node = session.export(Path.from_points(SQUARE))
        assert local(node) == "polyline"

    def test_curves_become_path_data(self, session):
        node = session.export(Path.from_svg_data("M0,0 Q5,10 10,0"))
        assert local(node) == "path"
        assert node.get("d") == "M0,0Q5,10 10,0"

    def test_path_keeps_matrix_as_transform(self, session):
        path = Path.from_points(SQUARE, closed=True, matrix=Matrix.translation(3, 4))
        node = session.export(path)
        assert node.get("transform") == "translate(3,4)"
        assert node.get("x") is None

    def test_match_shapes(self, square_path):
        session = ExportSession.create(match_shapes=True)
        node = session.export(square_path)
        assert local(node) == "rect"
        assert [node.get(k) for k in ("x", "y", "width", "height")] == ["0", "0", "10", "10"]

        circle = session.export(Path.from_svg_data(CIRCLE_D))
        assert local(circle) == "circle"
        assert circle.get("r") == "10"


class TestShapes:
    def test_rectangle_anchored_top_left(self, session):
        node = session.export(Shape.rectangle((10, 10), (20, 10)))
        assert local(node) == "rect"
        assert [node.get(k) for k in ("x", "y", "width", "height")] == ["0", "5", "20", "10"]
        assert node.get("rx") is None

    def test_rounded_rectangle(self, session):
        node = session.export(Shape.rectangle((0, 0), (20, 10), radius=(2, 3)))
        assert (node.get("rx"), node.get("ry")) == ("2", "3")

    def test_circle(self, session):
        node = session.export(Shape.circle((20, 0), 5))
        assert (node.get("cx"), node.get("cy"), node.get("r")) == ("20", "0", "5")

    def test_zero_radius_circle_has_no_r(self, session):
        node = session.export(Shape.circle((0, 0), 0))
        assert node.get("r") is None

    def test_ellipse(self, session):
        node = session.export(Shape.ellipse((1, 2), (4, 3)))
        assert local(node) == "ellipse"
        assert [node.get(k) for k in ("cx", "cy", "rx", "ry")] == ["1", "2", "4", "3"]

    def test_rotated_rectangle(self, session):
        rect = Shape.rectangle((0, 0), (10, 10), matrix=Matrix.rotation(30))
        node = session.export(rect)
        assert node.get("transform") == "rotate(30)"
        assert (node.get("x"), node.get("y")) == ("-5", "-5")

    def test_unknown_shape_kind_omitted(self, session):
        shape = Shape(shape="triangle", size=(1, 1))
        assert session.export(shape) is None
        assert shape.id in session.errors

    def test_shape_enum(self):
        assert ShapeKind("ellipse") is ShapeKind.ELLIPSE


class TestGroups:
    def test_children_in_order(self, session):
        group = Group(children=[Shape.circle((0, 0), 1), Shape.rectangle((0, 0), (1, 1))])
        node = session.export(group)
        assert local(node) == "g"
        assert [local(child) for child in node] == ["circle", "rect"]

    def test_clip_mask_registered(self, session):
        mask = Shape.circle((0, 0), 5, clip_mask=True)
        group = Group(children=[mask, Shape.rectangle((0, 0), (20, 20))])
        node = session.export(group)
        assert node.get("clip-path") == "url(#clip-1)"
        assert [local(child) for child in node] == ["rect"]
        clip = session.definitions.entries()[0]
        assert local(clip) == "clipPath"
        assert local(clip[0]) == "circle"

    def test_clip_numbering(self, session):
        def clipped():
            return Group(children=[Shape.circle((0, 0), 5, clip_mask=True), Shape.circle((0, 0), 9)])

        first = session.export(clipped())
        second = session.export(clipped())
        assert first.get("clip-path") == "url(#clip-1)"
        assert second.get("clip-path") == "url(#clip-2)"


class TestOtherKinds:
    def test_compound_path(self, session):
        compound = CompoundPath(
            children=[
                Path.from_points(SQUARE, closed=True),
                Path.from_points(SQUARE, closed=True, matrix=Matrix.translation(100, 0)),
            ]
        )
        node = session.export(compound)
        assert local(node) == "path"
        assert node.get("d") == "M0,0L10,0L10,10L0,10ZM100,0L110,0L110,10L100,10Z"

    def test_empty_compound_path_omitted(self, session):
        assert session.export(CompoundPath(children=[Path()])) is None

    def test_raster(self, session):
        raster = Raster(size=(4, 2), source=b"abc", matrix=Matrix.translation(10, 10))
        node = session.export(raster)
        assert local(node) == "image"
        assert [node.get(k) for k in ("x", "y", "width", "height")] == ["8", "9", "4", "2"]
        assert href(node) == "data:image/png;base64,YWJj"

    def test_raster_without_pixels_omitted(self, session):
        group = Group(children=[Raster(size=(1, 1)), Shape.circle((0, 0), 1)])
        node = session.export(group)
        assert [local(child) for child in node] == ["circle"]
        assert len(session.errors) == 1

    def test_placed_symbol(self, session):
        symbol = Symbol(definition=Shape.circle((0, 0), 5))
        placed = PlacedSymbol(symbol=symbol, matrix=Matrix.translation(50, 50))
        node = session.export(placed)
        assert local(node) == "use"
        assert href(node) == "#symbol-1"
        assert [node.get(k) for k in ("x", "y", "width", "height")] == ["45", "45", "10", "10"]

        definition = session.definitions.lookup(symbol, "symbol")
        assert definition.get("viewBox") == "-5,-5,10,10"
        assert local(definition[0]) == "circle"

    def test_symbol_defined_once(self, session):
        symbol = Symbol(definition=Shape.circle((0, 0), 5))
        group = Group(children=[PlacedSymbol(symbol=symbol), PlacedSymbol(symbol=symbol)])
        node = session.export(group)
        assert [href(use) for use in node] == ["#symbol-1", "#symbol-1"]
        assert len(session.definitions) == 1

    def test_point_text(self, session):
        node = session.export(PointText.at((10, 20), "a < b"))
        assert local(node) == "text"
        assert (node.get("x"), node.get("y")) == ("10", "20")
        assert node.text == "a < b"
        assert b"a &lt; b" in etree.tostring(node)
