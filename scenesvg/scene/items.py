"""Scene items — the node kinds the SVG exporter knows how to serialize.

Every item carries a local ``matrix``; shapes, rasters, texts and placed symbols
are centred on their local origin, so their position is the matrix translation.
Paths and compound paths keep their geometry as svgpathtools segments.
"""

from __future__ import annotations

import base64
import enum
import io
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar

from svgpathtools import Line, parse_path
from svgpathtools import Path as SvgPath
from svgpathtools.path import transform as transform_curve

from scenesvg.errors import DegenerateGeometryError
from scenesvg.scene.ids import new_id
from scenesvg.scene.style import DEFAULTS, Style
from scenesvg.utils.geometry import Rect, union_all
from scenesvg.utils.math_helpers import is_zero
from scenesvg.utils.matrix import Matrix

if TYPE_CHECKING:
    from PIL import Image


class NodeKind(enum.StrEnum):
    GROUP = "group"
    LAYER = "layer"
    RASTER = "raster"
    PATH = "path"
    SHAPE = "shape"
    COMPOUND_PATH = "compound-path"
    PLACED_SYMBOL = "placed-symbol"
    POINT_TEXT = "point-text"


class ShapeKind(enum.StrEnum):
    RECTANGLE = "rectangle"
    CIRCLE = "circle"
    ELLIPSE = "ellipse"


@dataclass(eq=False, kw_only=True)
class Item:
    """Base scene node."""

    kind: ClassVar[NodeKind]

    matrix: Matrix = field(default_factory=Matrix)
    style: Style = field(default_factory=Style)
    name: str | None = None
    # None = never set; only an explicit False hides the item
    visible: bool | None = None
    data: Any = None
    clip_mask: bool = False
    children: list[Item] = field(default_factory=list)
    parent: Item | None = field(default=None, repr=False)
    id: int = field(default_factory=new_id)

    def __post_init__(self) -> None:
        if not isinstance(self.style, Style):
            self.style = Style(self.style)
        for child in self.children:
            child.parent = self

    def add_child(self, child: Item) -> Item:
        if child.parent is not None and child.parent is not self:
            child.parent.children.remove(child)
        child.parent = self
        self.children.append(child)
        return child

    def resolve(self, prop: str) -> Any:
        """Style value for ``prop``, climbing to the nearest ancestor that sets it."""
        node: Item | None = self
        while node is not None:
            if prop in node.style:
                return node.style[prop]
            node = node.parent
        return DEFAULTS[prop]

    @property
    def position(self) -> tuple[float, float]:
        return self.matrix.translation_vector

    def local_bounds(self) -> Rect | None:
        return union_all([child.bounds for child in self.children])

    @property
    def bounds(self) -> Rect | None:
        """Axis-aligned bounds in parent coordinates, None when the item is empty."""
        local = self.local_bounds()
        if local is None:
            return None
        return local.transform(self.matrix)


@dataclass(eq=False, kw_only=True)
class Group(Item):
    kind: ClassVar[NodeKind] = NodeKind.GROUP


@dataclass(eq=False, kw_only=True)
class Layer(Group):
    kind: ClassVar[NodeKind] = NodeKind.LAYER


@dataclass(eq=False, kw_only=True)
class Path(Item):
    kind: ClassVar[NodeKind] = NodeKind.PATH

    # svgpathtools segments (Line, CubicBezier, QuadraticBezier, Arc)
    segments: list[Any] = field(default_factory=list)
    closed: bool = False

    @classmethod
    def from_points(cls, points: Iterable[tuple[float, float]], closed: bool = False, **kwargs: Any) -> Path:
        pts = [complex(x, y) for x, y in points]
        segments = [Line(p, q) for p, q in zip(pts, pts[1:])]
        return cls(segments=segments, closed=closed, **kwargs)

    @classmethod
    def from_svg_data(cls, d: str, **kwargs: Any) -> Path:
        parsed = parse_path(d)
        subpaths = parsed.continuous_subpaths() if len(parsed) else []
        kwargs.setdefault("closed", bool(subpaths) and all(sub.isclosed() for sub in subpaths))
        return cls(segments=list(parsed), **kwargs)

    @property
    def is_polygon(self) -> bool:
        """No curved segments."""
        return all(isinstance(seg, Line) for seg in self.segments)

    @property
    def vertices(self) -> list[tuple[float, float]]:
        """Anchor points in order; a closed path does not repeat its first point."""
        if not self.segments:
            return []
        pts = [seg.start for seg in self.segments]
        last = self.segments[-1].end
        if not (self.closed and is_zero(abs(last - pts[0]), 1e-9)):
            pts.append(last)
        return [(p.real, p.imag) for p in pts]

    def transformed_segments(self) -> list[Any]:
        """Segments mapped through this path's own matrix."""
        if not self.segments or self.matrix.is_identity():
            return list(self.segments)
        return list(transform_curve(SvgPath(*self.segments), self.matrix.to_array()))

    def local_bounds(self) -> Rect | None:
        if not self.segments:
            return None
        xmin, xmax, ymin, ymax = SvgPath(*self.segments).bbox()
        return Rect.from_bbox(xmin, ymin, xmax, ymax)


@dataclass(eq=False, kw_only=True)
class CompoundPath(Item):
    """Container of ``Path`` children rendered as a single path element."""

    kind: ClassVar[NodeKind] = NodeKind.COMPOUND_PATH


@dataclass(eq=False, kw_only=True)
class Shape(Item):
    """Parametric rectangle, circle or ellipse centred on its local origin.

    ``radius`` is a number for circles and an ``(rx, ry)`` pair for ellipses and
    rounded rectangle corners.
    """

    kind: ClassVar[NodeKind] = NodeKind.SHAPE

    shape: ShapeKind = ShapeKind.RECTANGLE
    size: tuple[float, float] = (0.0, 0.0)
    radius: float | tuple[float, float] = 0.0

    @classmethod
    def rectangle(
        cls,
        center: tuple[float, float],
        size: tuple[float, float],
        radius: float | tuple[float, float] = 0.0,
        **kwargs: Any,
    ) -> Shape:
        kwargs["matrix"] = Matrix.translation(*center) @ kwargs.get("matrix", Matrix())
        return cls(shape=ShapeKind.RECTANGLE, size=size, radius=radius, **kwargs)

    @classmethod
    def circle(cls, center: tuple[float, float], radius: float, **kwargs: Any) -> Shape:
        kwargs["matrix"] = Matrix.translation(*center) @ kwargs.get("matrix", Matrix())
        return cls(shape=ShapeKind.CIRCLE, size=(radius * 2, radius * 2), radius=radius, **kwargs)

    @classmethod
    def ellipse(cls, center: tuple[float, float], radius: tuple[float, float], **kwargs: Any) -> Shape:
        kwargs["matrix"] = Matrix.translation(*center) @ kwargs.get("matrix", Matrix())
        rx, ry = radius
        return cls(shape=ShapeKind.ELLIPSE, size=(rx * 2, ry * 2), radius=(rx, ry), **kwargs)

    @property
    def radius_xy(self) -> tuple[float, float]:
        if isinstance(self.radius, (int, float)):
            return (float(self.radius), float(self.radius))
        rx, ry = self.radius
        return (float(rx), float(ry))

    def local_bounds(self) -> Rect | None:
        w, h = self.size
        return Rect(-w / 2, -h / 2, w, h)


@dataclass(eq=False, kw_only=True)
class Raster(Item):
    """Bitmap centred on its local origin.

    Pixel content is either encoded bytes (``source`` + ``mime``) or a Pillow
    image, which is encoded as PNG on export.
    """

    kind: ClassVar[NodeKind] = NodeKind.RASTER

    size: tuple[float, float] | None = None
    source: bytes | None = None
    mime: str = "image/png"
    image: Image.Image | None = None

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.size is None and self.image is not None:
            self.size = tuple(float(v) for v in self.image.size)

    def to_data_url(self) -> str:
        if self.source is not None:
            data, mime = self.source, self.mime
        elif self.image is not None:
            buf = io.BytesIO()
            self.image.save(buf, format="PNG")
            data, mime = buf.getvalue(), "image/png"
        else:
            raise DegenerateGeometryError(f"raster {self.id} has no pixel data")
        return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"

    def local_bounds(self) -> Rect | None:
        if self.size is None:
            return None
        w, h = self.size
        return Rect(-w / 2, -h / 2, w, h)


@dataclass(eq=False, kw_only=True)
class Symbol:
    """Reusable definition shared by any number of ``PlacedSymbol`` items."""

    definition: Item
    id: int = field(default_factory=new_id)


@dataclass(eq=False, kw_only=True)
class PlacedSymbol(Item):
    kind: ClassVar[NodeKind] = NodeKind.PLACED_SYMBOL

    symbol: Symbol

    def local_bounds(self) -> Rect | None:
        return self.symbol.definition.bounds


@dataclass(eq=False, kw_only=True)
class PointText(Item):
    """Text anchored at its local origin."""

    kind: ClassVar[NodeKind] = NodeKind.POINT_TEXT

    content: str = ""

    @classmethod
    def at(cls, point: tuple[float, float], content: str, **kwargs: Any) -> PointText:
        kwargs["matrix"] = Matrix.translation(*point) @ kwargs.get("matrix", Matrix())
        return cls(content=content, **kwargs)

    def local_bounds(self) -> Rect | None:
        return Rect(0.0, 0.0, 0.0, 0.0)
