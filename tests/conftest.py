"""Shared test fixtures."""

from __future__ import annotations

import pytest
from lxml import etree

from scenesvg.scene import Color, Gradient, GradientColor, GradientStop, Group, Path, Shape
from scenesvg.svg.document import XLINK_NS
from scenesvg.svg.exporter import ExportSession


# Four-cubic approximations of a circle (r=10) and an ellipse (rx=20, ry=10)
# centred on the origin, as drawing tools emit them.

CIRCLE_D = (
    "M10,0 C10,5.522847 5.522847,10 0,10 C-5.522847,10 -10,5.522847 -10,0 "
    "C-10,-5.522847 -5.522847,-10 0,-10 C5.522847,-10 10,-5.522847 10,0 Z"
)

ELLIPSE_D = (
    "M20,0 C20,5.522847 11.045695,10 0,10 C-11.045695,10 -20,5.522847 -20,0 "
    "C-20,-5.522847 -11.045695,-10 0,-10 C11.045695,-10 20,-5.522847 20,0 Z"
)

SQUARE = [(0, 0), (10, 0), (10, 10), (0, 10)]


def local(node: etree._Element) -> str:
    return etree.QName(node).localname


def href(node: etree._Element) -> str | None:
    return node.get(f"{{{XLINK_NS}}}href")


def rect_and_circle() -> Group:
    """Group holding a 10x10 rectangle at the origin and an r=5 circle at (20, 0)."""
    return Group(
        children=[
            Shape.rectangle((0, 0), (10, 10)),
            Shape.circle((20, 0), 5),
        ]
    )


def red_to_blue() -> GradientColor:
    gradient = Gradient(
        stops=[
            GradientStop(Color(1, 0, 0), 0.0),
            GradientStop(Color(0, 0, 1, alpha=0.5), 1.0),
        ]
    )
    return GradientColor(gradient=gradient, origin=(0, 0), destination=(10, 0))


@pytest.fixture
def session() -> ExportSession:
    return ExportSession.create()


@pytest.fixture
def square_path() -> Path:
    return Path.from_points(SQUARE, closed=True)
