"""Leaf-node geometry helpers. No scene or svg imports."""

from __future__ import annotations

from typing import NamedTuple

import numpy as np
from numpy.typing import NDArray

from scenesvg.utils.matrix import Matrix


class Rect(NamedTuple):
    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_bbox(cls, xmin: float, ymin: float, xmax: float, ymax: float) -> Rect:
        return cls(xmin, ymin, xmax - xmin, ymax - ymin)

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def corners(self) -> list[tuple[float, float]]:
        return [
            (self.x, self.y),
            (self.right, self.y),
            (self.right, self.bottom),
            (self.x, self.bottom),
        ]

    def union(self, other: Rect | None) -> Rect:
        if other is None:
            return self
        return Rect.from_bbox(
            min(self.x, other.x),
            min(self.y, other.y),
            max(self.right, other.right),
            max(self.bottom, other.bottom),
        )

    def expand(self, margin: float) -> Rect:
        return Rect(self.x - margin, self.y - margin, self.width + 2 * margin, self.height + 2 * margin)

    def transform(self, matrix: Matrix) -> Rect:
        """Axis-aligned box around this rect's corners after ``matrix``."""
        if matrix.is_identity():
            return self
        pts = np.array([matrix.transform_point(x, y) for x, y in self.corners])
        return Rect.from_bbox(*bbox(pts))


def bbox(points: NDArray[np.float64]) -> tuple[float, float, float, float]:
    """Compute (xmin, ymin, xmax, ymax) bounding box."""
    if len(points) == 0:
        return (0.0, 0.0, 0.0, 0.0)
    return (
        float(np.min(points[:, 0])),
        float(np.min(points[:, 1])),
        float(np.max(points[:, 0])),
        float(np.max(points[:, 1])),
    )


def union_all(rects: list[Rect | None]) -> Rect | None:
    result: Rect | None = None
    for rect in rects:
        if rect is None:
            continue
        result = rect if result is None else result.union(rect)
    return result
