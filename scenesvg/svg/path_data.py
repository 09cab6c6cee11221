"""Path data serialization — svgpathtools segments → absolute SVG ``d`` commands."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from svgpathtools import Arc, CubicBezier, Line, QuadraticBezier

from scenesvg.errors import DegenerateGeometryError
from scenesvg.utils.formatter import Formatter

# Gap below which consecutive segments count as connected
_CONTINUITY_TOL = 1e-9


def path_data(segments: Sequence[Any], closed: bool, formatter: Formatter) -> str:
    if not segments:
        return ""

    def pt(z: complex) -> str:
        return formatter.point(z.real, z.imag)

    parts: list[str] = []
    current: complex | None = None
    subpath_start: complex | None = None
    for seg in segments:
        if not isinstance(seg, (Line, CubicBezier, QuadraticBezier, Arc)):
            raise DegenerateGeometryError(f"Unsupported segment type: {type(seg).__name__}")
        if current is None or abs(seg.start - current) > _CONTINUITY_TOL:
            # Earlier subpaths of a closed path close when they return to their start
            if closed and current is not None and abs(current - subpath_start) <= _CONTINUITY_TOL:
                parts.append("Z")
            parts.append(f"M{pt(seg.start)}")
            subpath_start = seg.start
        if isinstance(seg, Line):
            parts.append(f"L{pt(seg.end)}")
        elif isinstance(seg, CubicBezier):
            parts.append(f"C{pt(seg.control1)} {pt(seg.control2)} {pt(seg.end)}")
        elif isinstance(seg, QuadraticBezier):
            parts.append(f"Q{pt(seg.control)} {pt(seg.end)}")
        else:
            parts.append(
                f"A{pt(seg.radius)} {formatter.number(seg.rotation)} "
                f"{int(seg.large_arc)},{int(seg.sweep)} {pt(seg.end)}"
            )
        current = seg.end

    if closed:
        parts.append("Z")
    return "".join(parts)


def compound_path_data(children: Sequence[Any], formatter: Formatter) -> str:
    """Concatenate child path data, each child mapped through its own matrix."""
    return "".join(
        path_data(child.transformed_segments(), child.closed, formatter)
        for child in children
        if getattr(child, "segments", None)
    )
