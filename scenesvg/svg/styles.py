"""Style cascade — emit only the presentation attributes an item does not inherit.

Each property in ``SVG_STYLES`` is resolved on the item and on its parent; equal
values are left to SVG inheritance. Items without a parent are compared against
the value SVG assumes when the attribute is absent.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from lxml import etree

from scenesvg.errors import InvalidStyleError
from scenesvg.scene.color import Color, GradientColor
from scenesvg.svg.gradients import export_gradient

if TYPE_CHECKING:
    from scenesvg.scene.items import Item
    from scenesvg.svg.exporter import ExportSession

_BLEND_MODES = (
    "normal",
    "multiply",
    "screen",
    "overlay",
    "darken",
    "lighten",
    "color-dodge",
    "color-burn",
    "hard-light",
    "soft-light",
    "difference",
    "exclusion",
    "hue",
    "saturation",
    "color",
    "luminosity",
)


@dataclass(frozen=True)
class StyleEntry:
    prop: str
    attribute: str
    type: str  # color | number | array | lookup | string
    # Value SVG renders when the attribute is absent
    initial: Any = None
    to_svg: dict[str, str] | None = None


SVG_STYLES: tuple[StyleEntry, ...] = (
    StyleEntry("fill_color", "fill", "color", initial=Color(0.0, 0.0, 0.0)),
    StyleEntry("stroke_color", "stroke", "color", initial=None),
    StyleEntry("stroke_width", "stroke-width", "number", initial=1.0),
    StyleEntry(
        "stroke_cap",
        "stroke-linecap",
        "lookup",
        initial="butt",
        to_svg={"butt": "butt", "round": "round", "square": "square", "projecting": "square"},
    ),
    StyleEntry(
        "stroke_join",
        "stroke-linejoin",
        "lookup",
        initial="miter",
        to_svg={"miter": "miter", "round": "round", "bevel": "bevel"},
    ),
    StyleEntry("miter_limit", "stroke-miterlimit", "number", initial=4.0),
    StyleEntry("dash_array", "stroke-dasharray", "array", initial=[]),
    StyleEntry("dash_offset", "stroke-dashoffset", "number", initial=0.0),
    StyleEntry(
        "fill_rule",
        "fill-rule",
        "lookup",
        initial="nonzero",
        to_svg={"nonzero": "nonzero", "evenodd": "evenodd"},
    ),
    # Font initials are user-agent defined; treat the scene defaults as implied
    StyleEntry("font_family", "font-family", "string", initial="sans-serif"),
    StyleEntry("font_size", "font-size", "number", initial=12.0),
    StyleEntry(
        "justification",
        "text-anchor",
        "lookup",
        initial="left",
        to_svg={"left": "start", "center": "middle", "right": "end"},
    ),
    StyleEntry("opacity", "opacity", "number", initial=1.0),
    StyleEntry(
        "blend_mode",
        "mix-blend-mode",
        "lookup",
        initial="normal",
        to_svg={mode: mode for mode in _BLEND_MODES},
    ),
)


def style_attributes(item: Item, session: ExportSession) -> dict[str, Any]:
    attrs: dict[str, Any] = {}
    parent = item.parent

    if item.name is not None:
        attrs["id"] = item.name

    for entry in SVG_STYLES:
        value = item.resolve(entry.prop)
        inherited = parent.resolve(entry.prop) if parent is not None else entry.initial
        if value == inherited:
            continue
        attrs.update(_entry_attributes(entry, value, session))
        if entry.type == "color" and value is not None:
            alpha = value.alpha
            if alpha != _inherited_alpha(item, entry):
                attrs[f"{entry.attribute}-opacity"] = alpha

    if attrs.get("opacity") == 1:
        del attrs["opacity"]

    if item.visible is False:
        attrs["visibility"] = "hidden"

    return attrs


def apply_style(item: Item, node: etree._Element, session: ExportSession) -> etree._Element:
    return session.set_attributes(node, style_attributes(item, session))


def _inherited_alpha(item: Item, entry: StyleEntry) -> float:
    """The ``*-opacity`` an item picks up from the nearest ancestor that paints."""
    ancestor = item.parent
    while ancestor is not None:
        value = ancestor.resolve(entry.prop)
        if value is not None:
            return value.alpha
        ancestor = ancestor.parent
    return 1.0


def _entry_attributes(entry: StyleEntry, value: Any, session: ExportSession) -> dict[str, Any]:
    attr = entry.attribute
    if value is None:
        return {attr: "none"}
    if entry.type == "color":
        if isinstance(value, GradientColor):
            return {attr: export_gradient(value, session)}
        # SVG 1.1 has no rgba(): alpha travels in fill-opacity / stroke-opacity
        color: Color = value
        return {attr: color.to_css(no_alpha=True)}
    if entry.type == "number":
        return {attr: float(value)}
    if entry.type == "array":
        if not value:
            return {attr: "none"}
        return {attr: ",".join(session.formatter.number(v) for v in value)}
    if entry.type == "lookup":
        mapped = (entry.to_svg or {}).get(value)
        if mapped is None:
            raise InvalidStyleError(f"{entry.prop} has no SVG spelling for {value!r}")
        return {attr: mapped}
    return {attr: str(value)}
