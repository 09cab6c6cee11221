"""Gradient colours → <linearGradient>/<radialGradient> definitions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from scenesvg.scene.color import GradientColor
from scenesvg.svg.definitions import COLOR

if TYPE_CHECKING:
    from scenesvg.svg.exporter import ExportSession


def export_gradient(color: GradientColor, session: ExportSession) -> str:
    """Return a ``url(#color-n)`` reference, creating the definition on first use.

    Each gradient colour gets its own definition even when several share one
    ``Gradient``: the placement (origin/destination/highlight) lives on the colour.
    """
    node = session.definitions.lookup(color, COLOR)
    if node is None:
        gradient = color.gradient
        origin, destination = color.origin, color.destination
        attrs: dict[str, Any]
        if gradient.radial:
            attrs = {"cx": origin[0], "cy": origin[1], "r": color.radius}
            if color.highlight is not None:
                attrs["fx"] = color.highlight[0]
                attrs["fy"] = color.highlight[1]
        else:
            attrs = {
                "x1": origin[0],
                "y1": origin[1],
                "x2": destination[0],
                "y2": destination[1],
            }
        attrs["gradientUnits"] = "userSpaceOnUse"
        node = session.create_element("radialGradient" if gradient.radial else "linearGradient", attrs)
        for stop in gradient.stops:
            stop_attrs: dict[str, Any] = {
                "offset": stop.offset,
                "stop-color": stop.color.to_css(no_alpha=True),
            }
            # Same split as fill/stroke: alpha goes in its own attribute
            if stop.color.alpha < 1:
                stop_attrs["stop-opacity"] = stop.color.alpha
            node.append(session.create_element("stop", stop_attrs))
        session.definitions.register(color, node, COLOR)
    return f"url(#{node.get('id')})"
