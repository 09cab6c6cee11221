"""Style bag: the closed set of presentation properties an item may carry.

A property missing from an item's bag is inherited from its parent; an explicit
``None`` for a colour means "none". Values resolved past the root fall back to
``DEFAULTS``.
"""

from __future__ import annotations

from typing import Any

from scenesvg.scene.color import Color, GradientColor

DEFAULTS: dict[str, Any] = {
    "fill_color": None,
    "stroke_color": None,
    "stroke_width": 1.0,
    "stroke_cap": "butt",
    "stroke_join": "miter",
    "miter_limit": 10.0,
    "dash_array": [],
    "dash_offset": 0.0,
    "fill_rule": "nonzero",
    "font_family": "sans-serif",
    "font_size": 12.0,
    "justification": "left",
    "opacity": 1.0,
    "blend_mode": "normal",
}

_COLOR_PROPERTIES = {"fill_color", "stroke_color"}


class Style(dict):
    """dict restricted to the known style properties."""

    def __init__(self, values: dict[str, Any] | None = None, **kwargs: Any) -> None:
        super().__init__()
        for key, value in {**(values or {}), **kwargs}.items():
            self[key] = value

    def __setitem__(self, key: str, value: Any) -> None:
        if key not in DEFAULTS:
            raise KeyError(f"Unknown style property: {key!r}")
        if key in _COLOR_PROPERTIES:
            value = _coerce_color(value)
        elif key == "dash_array" and value is not None:
            value = [float(v) for v in value]
        super().__setitem__(key, value)

    def update(self, *args: Any, **kwargs: Any) -> None:  # type: ignore[override]
        for key, value in dict(*args, **kwargs).items():
            self[key] = value


def _coerce_color(value: Any) -> Color | GradientColor | None:
    if value is None or isinstance(value, (Color, GradientColor)):
        return value
    if isinstance(value, str):
        return Color.from_hex(value)
    raise TypeError(f"Expected a colour, got {type(value).__name__}")
