"""Project: ordered layers plus an optional fixed view size."""

from __future__ import annotations

from dataclasses import dataclass, field

from scenesvg.scene.items import Layer
from scenesvg.utils.geometry import Rect, union_all


@dataclass(eq=False)
class Project:
    layers: list[Layer] = field(default_factory=list)
    view_size: tuple[float, float] | None = None

    def add_layer(self, layer: Layer) -> Layer:
        self.layers.append(layer)
        return layer

    @property
    def bounds(self) -> Rect | None:
        return union_all([layer.bounds for layer in self.layers])
