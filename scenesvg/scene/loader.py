"""Build scene items from API node specs."""

from __future__ import annotations

import base64
import binascii
import io
import logging
from typing import Any, cast

from PIL import Image, UnidentifiedImageError

from scenesvg.errors import SceneSpecError
from scenesvg.models.requests import ColorSpec, GradientColorSpec, NodeSpec, StyleSpec
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
    Symbol,
)
from scenesvg.scene.project import Project
from scenesvg.scene.style import Style
from scenesvg.utils.matrix import Matrix

logger = logging.getLogger(__name__)

_CONTAINERS = {NodeKind.GROUP, NodeKind.LAYER, NodeKind.COMPOUND_PATH}


class SceneBuilder:
    """Turns node specs into items; symbols are built once and shared by name."""

    def __init__(self, symbols: dict[str, NodeSpec] | None = None) -> None:
        self._symbol_specs = symbols or {}
        self._symbols: dict[str, Symbol] = {}
        self._building: set[str] = set()

    def build(self, spec: NodeSpec) -> Item:
        if spec.children and spec.kind not in _CONTAINERS:
            raise SceneSpecError(f"{spec.kind} nodes cannot have children")

        common: dict[str, Any] = {
            "matrix": _matrix(spec),
            "style": self._style(spec.style),
            "name": spec.name,
            "visible": spec.visible,
            "data": spec.data,
            "clip_mask": spec.clip_mask,
        }
        kind = spec.kind

        if kind in (NodeKind.GROUP, NodeKind.LAYER):
            cls = Layer if kind == NodeKind.LAYER else Group
            return cls(children=[self.build(child) for child in spec.children], **common)
        if kind == NodeKind.COMPOUND_PATH:
            children = [self.build(child) for child in spec.children]
            if any(not isinstance(child, Path) for child in children):
                raise SceneSpecError("compound-path children must be paths")
            return CompoundPath(children=children, **common)
        if kind == NodeKind.PATH:
            return self._path(spec, common)
        if kind == NodeKind.SHAPE:
            return self._shape(spec, common)
        if kind == NodeKind.RASTER:
            return self._raster(spec, common)
        if kind == NodeKind.PLACED_SYMBOL:
            if spec.symbol is None:
                raise SceneSpecError("placed-symbol requires 'symbol'")
            return PlacedSymbol(symbol=self.symbol(spec.symbol), **common)
        if kind == NodeKind.POINT_TEXT:
            return PointText(content=spec.content or "", **common)
        raise SceneSpecError(f"Unsupported node kind: {kind}")

    def symbol(self, name: str) -> Symbol:
        if name in self._symbols:
            return self._symbols[name]
        if name not in self._symbol_specs:
            raise SceneSpecError(f"Unknown symbol: {name!r}")
        if name in self._building:
            raise SceneSpecError(f"Symbol {name!r} places itself")
        self._building.add(name)
        try:
            symbol = Symbol(definition=self.build(self._symbol_specs[name]))
        finally:
            self._building.discard(name)
        self._symbols[name] = symbol
        logger.debug("Built symbol %r", name)
        return symbol

    def _path(self, spec: NodeSpec, common: dict[str, Any]) -> Path:
        if (spec.d is None) == (spec.points is None):
            raise SceneSpecError("path requires exactly one of 'd' or 'points'")
        if spec.points is not None:
            return Path.from_points(spec.points, closed=bool(spec.closed), **common)
        if spec.closed is not None:
            common["closed"] = spec.closed
        try:
            return Path.from_svg_data(spec.d, **common)
        except (ValueError, IndexError) as e:
            raise SceneSpecError(f"Invalid path data {spec.d!r}: {e}") from e

    def _shape(self, spec: NodeSpec, common: dict[str, Any]) -> Shape:
        if spec.shape is None or spec.size is None:
            raise SceneSpecError("shape requires 'shape' and 'size'")
        return Shape(shape=spec.shape, size=spec.size, radius=spec.radius or 0.0, **common)

    def _raster(self, spec: NodeSpec, common: dict[str, Any]) -> Raster:
        if spec.image is None:
            raise SceneSpecError("raster requires 'image'")
        try:
            source = base64.b64decode(spec.image, validate=True)
        except binascii.Error as e:
            raise SceneSpecError(f"raster image is not valid base64: {e}") from e
        size = spec.size
        if size is None:
            try:
                with Image.open(io.BytesIO(source)) as img:
                    size = (float(img.width), float(img.height))
            except UnidentifiedImageError as e:
                raise SceneSpecError("raster image format not recognised; pass 'size' explicitly") from e
        return Raster(size=size, source=source, mime=spec.mime, **common)

    def _style(self, spec: StyleSpec | None) -> Style:
        style = Style()
        if spec is None:
            return style
        for key in spec.model_fields_set:
            value = getattr(spec, key)
            if key in ("fill_color", "stroke_color"):
                value = _color(value)
            elif value is None and key != "dash_array":
                raise SceneSpecError(f"Style {key} cannot be null")
            try:
                style[key] = value
            except (KeyError, TypeError, ValueError) as e:
                raise SceneSpecError(f"Invalid style {key}={value!r}: {e}") from e
        return style


def _matrix(spec: NodeSpec) -> Matrix:
    matrix = Matrix(*spec.matrix) if spec.matrix is not None else Matrix()
    if spec.position is not None:
        matrix = Matrix.translation(*spec.position) @ matrix
    return matrix


def _color(spec: ColorSpec | None) -> Color | GradientColor | None:
    if spec is None:
        return None
    if isinstance(spec, GradientColorSpec):
        stops = [GradientStop(color=_hex(stop.color), offset=stop.offset) for stop in spec.stops]
        return GradientColor(
            gradient=Gradient(stops=stops, radial=spec.radial),
            origin=spec.origin,
            destination=spec.destination,
            highlight=spec.highlight,
            alpha=spec.alpha,
        )
    return _hex(spec)


def _hex(text: str) -> Color:
    try:
        return Color.from_hex(text)
    except ValueError as e:
        raise SceneSpecError(str(e)) from e


def build_scene(spec: NodeSpec, symbols: dict[str, NodeSpec] | None = None) -> Item:
    return SceneBuilder(symbols).build(spec)


def build_project(
    layers: list[NodeSpec],
    symbols: dict[str, NodeSpec] | None = None,
    view_size: tuple[float, float] | None = None,
) -> Project:
    builder = SceneBuilder(symbols)
    project = Project(view_size=view_size)
    for spec in layers:
        if spec.kind != NodeKind.LAYER:
            raise SceneSpecError(f"Project layers must be of kind 'layer', got {spec.kind}")
        layer = cast(Layer, builder.build(spec))
        project.add_layer(layer)
    return project
