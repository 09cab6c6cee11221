"""API request models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from scenesvg.models.options import ExportOptions
from scenesvg.scene.items import NodeKind, ShapeKind

Point = tuple[float, float]


class GradientStopSpec(BaseModel):
    color: str = Field(..., description="Hex colour (#rgb, #rrggbb or #rrggbbaa)")
    offset: float = Field(..., ge=0, le=1)


class GradientColorSpec(BaseModel):
    stops: list[GradientStopSpec] = Field(..., min_length=1)
    radial: bool = False
    origin: Point
    destination: Point
    highlight: Point | None = Field(default=None, description="Focal point of a radial gradient")
    alpha: float = Field(default=1.0, ge=0, le=1, description="Emitted as fill-opacity / stroke-opacity")


ColorSpec = str | GradientColorSpec


class StyleSpec(BaseModel):
    """Presentation properties; a field left out is inherited, an explicit null means none."""

    fill_color: ColorSpec | None = None
    stroke_color: ColorSpec | None = None
    stroke_width: float | None = None
    stroke_cap: str | None = None
    stroke_join: str | None = None
    miter_limit: float | None = None
    dash_array: list[float] | None = None
    dash_offset: float | None = None
    fill_rule: str | None = None
    font_family: str | None = None
    font_size: float | None = None
    justification: str | None = None
    opacity: float | None = Field(default=None, ge=0, le=1)
    blend_mode: str | None = None


class NodeSpec(BaseModel):
    kind: NodeKind
    matrix: tuple[float, float, float, float, float, float] | None = Field(
        default=None,
        description="Affine matrix a, b, c, d, tx, ty",
    )
    position: Point | None = Field(default=None, description="Translation applied after the matrix")
    name: str | None = None
    visible: bool | None = None
    data: Any = None
    clip_mask: bool = False
    style: StyleSpec | None = None
    children: list[NodeSpec] = Field(default_factory=list)

    # path
    d: str | None = Field(default=None, description="SVG path data")
    points: list[Point] | None = None
    closed: bool | None = None

    # shape / raster
    shape: ShapeKind | None = None
    size: Point | None = None
    radius: float | Point | None = None
    image: str | None = Field(default=None, description="Base64-encoded image bytes")
    mime: str = "image/png"

    # placed symbol / text
    symbol: str | None = Field(default=None, description="Key into the request's symbols")
    content: str | None = None


class ExportRequest(BaseModel):
    scene: NodeSpec = Field(..., description="Root node to export")
    symbols: dict[str, NodeSpec] = Field(default_factory=dict, description="Symbol definitions by name")
    options: ExportOptions | None = None


class ProjectExportRequest(BaseModel):
    layers: list[NodeSpec] = Field(..., description="Layer nodes in paint order")
    symbols: dict[str, NodeSpec] = Field(default_factory=dict, description="Symbol definitions by name")
    view_size: Point | None = Field(default=None, description="Explicit canvas width/height")
    options: ExportOptions | None = None
