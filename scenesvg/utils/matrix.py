"""2D affine matrix in SVG component order.

    | a  c  tx |
    | b  d  ty |
    | 0  0  1  |

x' = a*x + c*y + tx,  y' = b*x + d*y + ty.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from scenesvg.utils.math_helpers import is_one, is_zero


@dataclass(frozen=True)
class Decomposition:
    """Translation + rotation (degrees) + scale, plus the residual shear factor."""

    translation: tuple[float, float]
    scaling: tuple[float, float]
    rotation: float
    shearing: float


@dataclass(frozen=True)
class Matrix:
    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    tx: float = 0.0
    ty: float = 0.0

    # ── Constructors ──

    @classmethod
    def identity(cls) -> Matrix:
        return cls()

    @classmethod
    def translation(cls, tx: float, ty: float) -> Matrix:
        return cls(tx=float(tx), ty=float(ty))

    @classmethod
    def rotation(cls, degrees: float) -> Matrix:
        rad = math.radians(degrees)
        cos, sin = math.cos(rad), math.sin(rad)
        return cls(a=cos, b=sin, c=-sin, d=cos)

    @classmethod
    def scaling(cls, sx: float, sy: float | None = None) -> Matrix:
        return cls(a=float(sx), d=float(sx if sy is None else sy))

    @classmethod
    def from_array(cls, arr: NDArray[np.float64]) -> Matrix:
        return cls(
            a=float(arr[0, 0]),
            b=float(arr[1, 0]),
            c=float(arr[0, 1]),
            d=float(arr[1, 1]),
            tx=float(arr[0, 2]),
            ty=float(arr[1, 2]),
        )

    # ── Views ──

    def to_array(self) -> NDArray[np.float64]:
        return np.array(
            [
                [self.a, self.c, self.tx],
                [self.b, self.d, self.ty],
                [0.0, 0.0, 1.0],
            ],
            dtype=np.float64,
        )

    @property
    def values(self) -> tuple[float, float, float, float, float, float]:
        return (self.a, self.b, self.c, self.d, self.tx, self.ty)

    @property
    def translation_vector(self) -> tuple[float, float]:
        return (self.tx, self.ty)

    @property
    def determinant(self) -> float:
        return self.a * self.d - self.b * self.c

    def __matmul__(self, other: Matrix) -> Matrix:
        """``self @ other`` applies ``other`` first, then ``self``."""
        return Matrix.from_array(self.to_array() @ other.to_array())

    def shiftless(self) -> Matrix:
        return Matrix(self.a, self.b, self.c, self.d, 0.0, 0.0)

    def is_identity(self) -> bool:
        return (
            is_one(self.a)
            and is_zero(self.b)
            and is_zero(self.c)
            and is_one(self.d)
            and is_zero(self.tx)
            and is_zero(self.ty)
        )

    def is_invertible(self) -> bool:
        return not is_zero(self.determinant)

    def transform_point(self, x: float, y: float) -> tuple[float, float]:
        return (
            self.a * x + self.c * y + self.tx,
            self.b * x + self.d * y + self.ty,
        )

    def inverse_transform(self, x: float, y: float) -> tuple[float, float] | None:
        """Map a point back through the matrix; None when the matrix is singular."""
        det = self.determinant
        if is_zero(det):
            return None
        x -= self.tx
        y -= self.ty
        return (
            (x * self.d - y * self.c) / det,
            (y * self.a - x * self.b) / det,
        )

    def decompose(self) -> Decomposition | None:
        """Split into translate * rotate * scale, reporting any leftover shear.

        Returns None for singular matrices, which have no such decomposition.
        """
        a, b, c, d = self.a, self.b, self.c, self.d
        if is_zero(a * d - b * c):
            return None

        scale_x = math.hypot(a, b)
        a /= scale_x
        b /= scale_x
        shear = a * c + b * d
        c -= a * shear
        d -= b * shear
        scale_y = math.hypot(c, d)
        c /= scale_y
        d /= scale_y
        shear /= scale_y

        # Reflection: fold the sign into the x scale so rotation stays proper
        if a * d < b * c:
            a, b = -a, -b
            shear = -shear
            scale_x = -scale_x

        return Decomposition(
            translation=(self.tx, self.ty),
            scaling=(scale_x, scale_y),
            rotation=math.degrees(math.atan2(b, a)),
            shearing=shear,
        )
