"""Node exporters — one function per scene node kind, registered via decorator.

Usage:
    @exporter(NodeKind.SHAPE)
    def export_shape(item: Shape, session: ExportSession) -> etree._Element | None:
        ...

An exporter returns the element for its item, or None when the item has nothing
to draw; the session skips None results. Styles are applied by the session.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from lxml import etree

from scenesvg.errors import DegenerateGeometryError
from scenesvg.scene.items import (
    CompoundPath,
    Group,
    NodeKind,
    Path,
    PlacedSymbol,
    PointText,
    Raster,
    Shape,
    ShapeKind,
)
from scenesvg.svg.definitions import CLIP, SYMBOL
from scenesvg.svg.document import set_text
from scenesvg.svg.path_data import compound_path_data, path_data
from scenesvg.svg.shape_matching import match_shape
from scenesvg.svg.transform import get_transform
from scenesvg.utils.geometry import Rect
from scenesvg.utils.math_helpers import is_finite, is_zero

if TYPE_CHECKING:
    from scenesvg.svg.exporter import ExportSession

logger = logging.getLogger(__name__)

ExporterFn = Callable[[Any, "ExportSession"], "etree._Element | None"]

EXPORTERS: dict[NodeKind, ExporterFn] = {}


def exporter(*kinds: NodeKind):
    """Decorator to register an exporter for one or more node kinds."""

    def decorator(fn: ExporterFn) -> ExporterFn:
        for kind in kinds:
            if kind in EXPORTERS:
                raise ValueError(f"Duplicate exporter for node kind: {kind}")
            EXPORTERS[kind] = fn
        return fn

    return decorator


def get_exporter(kind: Any) -> ExporterFn | None:
    return EXPORTERS.get(kind)


def check_exporters() -> dict[NodeKind, ExporterFn]:
    """Every NodeKind must have an exporter; raise on the first gap."""
    for kind in NodeKind:
        if kind not in EXPORTERS:
            raise NotImplementedError(f"No exporter registered for node kind '{kind}'")
    return EXPORTERS


# ── Containers ──


@exporter(NodeKind.GROUP, NodeKind.LAYER)
def export_group(item: Group, session: ExportSession) -> etree._Element:
    node = session.create_element("g", get_transform(item, session.formatter))
    for child in item.children:
        child_node = session.export(child)
        if child_node is None:
            continue
        if child.clip_mask:
            clip = session.create_element("clipPath")
            clip.append(child_node)
            clip_id = session.definitions.register(child, clip, CLIP)
            session.set_attributes(node, {"clip-path": f"url(#{clip_id})"})
        else:
            node.append(child_node)
    return node


# ── Bitmaps ──


@exporter(NodeKind.RASTER)
def export_raster(item: Raster, session: ExportSession) -> etree._Element:
    if item.size is None:
        raise DegenerateGeometryError(f"raster {item.id} has no size")
    attrs = get_transform(item, session.formatter, coordinates=True)
    width, height = item.size
    # Rasters are centred on their position
    attrs["x"] -= width / 2
    attrs["y"] -= height / 2
    attrs["width"] = width
    attrs["height"] = height
    attrs["href"] = item.to_data_url()
    return session.create_element("image", attrs)


# ── Paths ──


@exporter(NodeKind.PATH)
def export_path(item: Path, session: ExportSession) -> etree._Element | None:
    if session.options.match_shapes:
        shape = match_shape(item)
        if shape is not None:
            logger.debug("Path %d matched as %s", item.id, shape.shape)
            return export_shape(shape, session)

    if not item.segments:
        return None

    fmt = session.formatter
    attrs: dict[str, Any]
    if item.is_polygon:
        vertices = item.vertices
        if len(vertices) >= 3:
            tag = "polygon" if item.closed else "polyline"
            attrs = {"points": " ".join(fmt.point(x, y) for x, y in vertices)}
        else:
            tag = "line"
            (x1, y1), (x2, y2) = vertices[0], vertices[-1]
            attrs = {"x1": x1, "y1": y1, "x2": x2, "y2": y2}
    else:
        tag = "path"
        data = path_data(item.segments, item.closed, fmt)
        if not data:
            return None
        attrs = {"d": data}

    attrs.update(get_transform(item, fmt))
    return session.create_element(tag, attrs)


@exporter(NodeKind.COMPOUND_PATH)
def export_compound_path(item: CompoundPath, session: ExportSession) -> etree._Element | None:
    data = compound_path_data(item.children, session.formatter)
    if not data:
        return None
    attrs: dict[str, Any] = {"d": data}
    attrs.update(get_transform(item, session.formatter))
    return session.create_element("path", attrs)


# ── Parametric shapes ──


@exporter(NodeKind.SHAPE)
def export_shape(item: Shape, session: ExportSession) -> etree._Element:
    shape = item.shape
    width, height = item.size
    rx, ry = item.radius_xy
    if not is_finite(width, height, rx, ry):
        raise DegenerateGeometryError(f"shape {item.id} has non-finite geometry")

    attrs = get_transform(item, session.formatter, coordinates=True, center=shape != ShapeKind.RECTANGLE)
    if shape == ShapeKind.RECTANGLE:
        tag = "rect"
        attrs["x"] -= width / 2
        attrs["y"] -= height / 2
        attrs["width"] = width
        attrs["height"] = height
        if not (is_zero(rx) and is_zero(ry)):
            attrs["rx"] = rx
            attrs["ry"] = ry
    elif shape == ShapeKind.CIRCLE:
        tag = "circle"
        if not is_zero(rx):
            attrs["r"] = rx
    elif shape == ShapeKind.ELLIPSE:
        tag = "ellipse"
        attrs["rx"] = rx
        attrs["ry"] = ry
    else:
        raise DegenerateGeometryError(f"Unsupported shape kind: {shape!r}")
    return session.create_element(tag, attrs)


# ── Symbols ──


@exporter(NodeKind.PLACED_SYMBOL)
def export_placed_symbol(item: PlacedSymbol, session: ExportSession) -> etree._Element:
    fmt = session.formatter
    attrs = get_transform(item, fmt, coordinates=True)
    symbol = item.symbol
    definition = symbol.definition
    bounds = definition.bounds or Rect(0.0, 0.0, 0.0, 0.0)

    symbol_node = session.definitions.lookup(symbol, SYMBOL)
    if symbol_node is None:
        symbol_node = session.create_element("symbol", {"viewBox": fmt.rectangle(bounds)})
        definition_node = session.export(definition)
        if definition_node is not None:
            symbol_node.append(definition_node)
        session.definitions.register(symbol, symbol_node, SYMBOL)

    attrs["href"] = f"#{symbol_node.get('id')}"
    attrs["x"] += bounds.x
    attrs["y"] += bounds.y
    attrs["width"] = bounds.width
    attrs["height"] = bounds.height
    return session.create_element("use", attrs)


# ── Text ──


@exporter(NodeKind.POINT_TEXT)
def export_point_text(item: PointText, session: ExportSession) -> etree._Element:
    node = session.create_element("text", get_transform(item, session.formatter, coordinates=True))
    set_text(node, item.content)
    return node


check_exporters()
