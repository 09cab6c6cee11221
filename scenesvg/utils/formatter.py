"""Numeric formatter. Renders numbers at a fixed precision for SVG attributes.

Trailing zeros are trimmed and negative zero collapses to "0", so the same
geometry always produces the same text.
"""

from __future__ import annotations

import math

from scenesvg.errors import DegenerateGeometryError
from scenesvg.utils.geometry import Rect

DEFAULT_PRECISION = 5


class Formatter:
    def __init__(self, precision: int = DEFAULT_PRECISION) -> None:
        if isinstance(precision, bool) or not isinstance(precision, int) or precision < 0:
            raise ValueError(f"precision must be a non-negative integer, got {precision!r}")
        self.precision = precision

    def number(self, value: float) -> str:
        value = float(value)
        if not math.isfinite(value):
            raise DegenerateGeometryError(f"cannot format non-finite number {value!r}")
        rounded = round(value, self.precision)
        if rounded == 0:
            return "0"
        if rounded.is_integer():
            return str(int(rounded))
        text = f"{rounded:.{self.precision}f}"
        return text.rstrip("0").rstrip(".")

    def point(self, x: float, y: float, separator: str = ",") -> str:
        return f"{self.number(x)}{separator}{self.number(y)}"

    def size(self, width: float, height: float, separator: str = ",") -> str:
        return self.point(width, height, separator)

    def rectangle(self, rect: Rect, separator: str = ",") -> str:
        return separator.join(self.number(v) for v in (rect.x, rect.y, rect.width, rect.height))
