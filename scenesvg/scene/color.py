"""Colour values: solid RGBA colours and gradient colours.

Equality is structural (the ``id`` field is excluded from comparison), which is
what the style cascade needs; the ``id`` is what the definition registry keys on.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field

from scenesvg.scene.ids import new_id

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


def _channel(value: float) -> int:
    return max(0, min(255, round(value * 255)))


@dataclass
class Color:
    """Solid colour, channels in [0, 1]."""

    red: float = 0.0
    green: float = 0.0
    blue: float = 0.0
    alpha: float = 1.0
    id: int = field(default_factory=new_id, compare=False, repr=False)

    @classmethod
    def from_hex(cls, text: str) -> Color:
        """Parse ``#rgb``, ``#rrggbb`` or ``#rrggbbaa``."""
        m = _HEX_RE.match(text.strip())
        if not m:
            raise ValueError(f"Invalid hex colour: {text!r}")
        digits = m.group(1)
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        channels = [int(digits[i : i + 2], 16) / 255 for i in range(0, len(digits), 2)]
        return cls(*channels)

    @property
    def hex(self) -> str:
        return "#{:02x}{:02x}{:02x}".format(_channel(self.red), _channel(self.green), _channel(self.blue))

    def to_css(self, no_alpha: bool = False) -> str:
        if no_alpha or self.alpha >= 1:
            return self.hex
        return "rgba({},{},{},{:g})".format(
            _channel(self.red), _channel(self.green), _channel(self.blue), self.alpha
        )


@dataclass
class GradientStop:
    color: Color
    offset: float


@dataclass
class Gradient:
    """Gradient definition shared between any number of gradient colours."""

    stops: list[GradientStop] = field(default_factory=list)
    radial: bool = False
    id: int = field(default_factory=new_id, compare=False, repr=False)


@dataclass
class GradientColor:
    """A gradient placed in user space: origin/destination, optional focal highlight."""

    gradient: Gradient
    origin: tuple[float, float]
    destination: tuple[float, float]
    highlight: tuple[float, float] | None = None
    alpha: float = 1.0
    id: int = field(default_factory=new_id, compare=False, repr=False)

    @property
    def radius(self) -> float:
        return math.hypot(
            self.destination[0] - self.origin[0],
            self.destination[1] - self.origin[1],
        )
