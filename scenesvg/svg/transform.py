"""Matrix decomposer — item matrix → SVG positioning attributes.

Elements that support native coordinates (x/y or cx/cy) take the translation
as those attributes; whatever remains is written as a compact
translate/rotate/scale sequence, or as ``matrix(...)`` when shear is present.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from scenesvg.utils.formatter import Formatter
from scenesvg.utils.math_helpers import is_one, is_zero

if TYPE_CHECKING:
    from scenesvg.scene.items import Item
    from scenesvg.utils.matrix import Matrix


def get_transform(
    item: Item,
    formatter: Formatter,
    coordinates: bool = False,
    center: bool = False,
) -> dict[str, Any]:
    return matrix_attributes(item.matrix, formatter, coordinates, center)


def matrix_attributes(
    matrix: Matrix,
    formatter: Formatter,
    coordinates: bool = False,
    center: bool = False,
) -> dict[str, Any]:
    attrs: dict[str, Any] = {}
    trans: tuple[float, float] | None = matrix.translation_vector

    if coordinates:
        shiftless = matrix.shiftless()
        # The anchor is in local coordinates: undo the linear part first
        point = shiftless.inverse_transform(*trans)
        if point is None:
            point = (0.0, 0.0)
        else:
            matrix = shiftless
            trans = None
        attrs["cx" if center else "x"] = point[0]
        attrs["cy" if center else "y"] = point[1]

    if matrix.is_identity():
        return attrs

    decomposed = matrix.decompose()
    if decomposed is not None and is_zero(decomposed.shearing):
        parts: list[str] = []
        angle = decomposed.rotation
        sx, sy = decomposed.scaling
        if trans is not None and not (is_zero(trans[0]) and is_zero(trans[1])):
            parts.append(f"translate({formatter.point(*trans)})")
        if not is_zero(angle):
            parts.append(f"rotate({formatter.number(angle)})")
        if not is_one(sx) or not is_one(sy):
            parts.append(f"scale({formatter.point(sx, sy)})")
        if parts:
            attrs["transform"] = " ".join(parts)
    else:
        attrs["transform"] = "matrix({})".format(",".join(formatter.number(v) for v in matrix.values))
    return attrs
