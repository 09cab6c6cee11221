"""In-memory scene graph consumed by the SVG exporter."""

from scenesvg.scene.color import Color, Gradient, GradientColor, GradientStop
from scenesvg.scene.items import (
    CompoundPath,
    Group,
    Item,
    Layer,
    NodeKind,
    Path,
    PlacedSymbol,
    PointText,
    Raster,
    Shape,
    ShapeKind,
    Symbol,
)
from scenesvg.scene.project import Project
from scenesvg.scene.style import Style

__all__ = [
    "Color",
    "CompoundPath",
    "Gradient",
    "GradientColor",
    "GradientStop",
    "Group",
    "Item",
    "Layer",
    "NodeKind",
    "Path",
    "PlacedSymbol",
    "PointText",
    "Project",
    "Raster",
    "Shape",
    "ShapeKind",
    "Style",
    "Symbol",
]
