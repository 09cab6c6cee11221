"""Rectangle/circle/ellipse detection from free-form paths.

Used when ``match_shapes`` is on: a path recognised here exports as the
equivalent <rect>, <circle> or <ellipse> instead of path data.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray
from svgpathtools import CubicBezier

from scenesvg.scene.items import Path, Shape, ShapeKind
from scenesvg.utils.matrix import Matrix

# Relative tolerance on edge lengths, right angles and anchor symmetry.
# Well under one unit in 1e5, so only deliberate primitives match.
_SHAPE_TOL = 1e-6

# A 4-cubic kappa ellipse deviates from the true ellipse by ~2.7e-4 of the
# radius; 1e-3 on the normalized equation admits that and nothing looser.
_ELLIPSE_TOL = 1e-3

# Samples per cubic segment when checking the ellipse equation
_SAMPLES_PER_SEGMENT = 9


def match_shape(path: Path) -> Shape | None:
    """Return an equivalent ``Shape`` for ``path``, or None when it is free-form."""
    if not path.closed or not path.segments:
        return None
    if path.is_polygon:
        return _match_rectangle(path)
    if len(path.segments) == 4 and all(isinstance(s, CubicBezier) for s in path.segments):
        return _match_ellipse(path)
    return None


def _match_rectangle(path: Path) -> Shape | None:
    vertices = path.vertices
    if len(vertices) != 4:
        return None
    pts = np.array(vertices, dtype=np.float64)
    edges = np.roll(pts, -1, axis=0) - pts
    lengths = np.linalg.norm(edges, axis=1)
    scale = float(np.max(lengths))
    if scale < 1e-10 or float(np.min(lengths)) < scale * _SHAPE_TOL:
        return None

    # Consecutive edges perpendicular, opposite edges equal
    units = edges / lengths[:, None]
    dots = np.abs(np.sum(units * np.roll(units, -1, axis=0), axis=1))
    if np.any(dots > _SHAPE_TOL):
        return None
    if abs(lengths[0] - lengths[2]) > scale * _SHAPE_TOL or abs(lengths[1] - lengths[3]) > scale * _SHAPE_TOL:
        return None

    cx, cy = np.mean(pts, axis=0)
    angle, width, height = _canonical_axes(
        math.degrees(math.atan2(edges[0, 1], edges[0, 0])), float(lengths[0]), float(lengths[1])
    )
    return Shape(
        shape=ShapeKind.RECTANGLE,
        size=(width, height),
        radius=(0.0, 0.0),
        matrix=_placement(path.matrix, float(cx), float(cy), angle),
    )


def _match_ellipse(path: Path) -> Shape | None:
    segs = path.segments
    anchors = np.array([[s.start.real, s.start.imag] for s in segs], dtype=np.float64)
    center = np.mean(anchors, axis=0)
    v0 = anchors[0] - center
    v1 = anchors[1] - center
    rx = float(np.linalg.norm(v0))
    ry = float(np.linalg.norm(v1))
    scale = max(rx, ry)
    if min(rx, ry) < 1e-10:
        return None

    # Anchors on the axes: perpendicular pair, opposite anchors mirrored
    if abs(float(np.dot(v0, v1))) > scale * scale * _SHAPE_TOL:
        return None
    if np.linalg.norm(anchors[2] - (center - v0)) > scale * _SHAPE_TOL:
        return None
    if np.linalg.norm(anchors[3] - (center - v1)) > scale * _SHAPE_TOL:
        return None

    ex = v0 / rx
    ey = v1 / ry
    samples = _sample_segments(segs) - center
    u = samples @ ex / rx
    v = samples @ ey / ry
    if float(np.max(np.abs(u * u + v * v - 1.0))) > _ELLIPSE_TOL:
        return None

    cx, cy = float(center[0]), float(center[1])
    if abs(rx - ry) <= scale * _SHAPE_TOL:
        matrix = _placement(path.matrix, cx, cy, 0.0)
        return Shape(shape=ShapeKind.CIRCLE, size=(rx * 2, rx * 2), radius=rx, matrix=matrix)
    angle, rx, ry = _canonical_axes(math.degrees(math.atan2(ex[1], ex[0])), rx, ry)
    matrix = _placement(path.matrix, cx, cy, angle)
    return Shape(shape=ShapeKind.ELLIPSE, size=(rx * 2, ry * 2), radius=(rx, ry), matrix=matrix)


def _sample_segments(segments: list[CubicBezier]) -> NDArray[np.float64]:
    ts = np.linspace(0.0, 1.0, _SAMPLES_PER_SEGMENT)
    points = [seg.point(t) for seg in segments for t in ts]
    return np.array([[p.real, p.imag] for p in points], dtype=np.float64)


def _placement(base: Matrix, cx: float, cy: float, angle: float) -> Matrix:
    matrix = base @ Matrix.translation(cx, cy)
    if abs(angle) > 1e-9:
        matrix = matrix @ Matrix.rotation(angle)
    return matrix


def _canonical_axes(angle: float, width: float, height: float) -> tuple[float, float, float]:
    """Fold the angle into [-90, 90); quarter turns become a width/height swap.

    Rectangles and ellipses are symmetric under half turns, so this never
    changes the covered area.
    """
    angle = (angle + 90.0) % 180.0 - 90.0
    if abs(abs(angle) - 90.0) < 1e-9:
        return 0.0, height, width
    return angle, width, height
