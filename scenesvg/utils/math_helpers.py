"""Tolerant float comparisons. No scene or svg imports."""

from __future__ import annotations

import math

# Floating-point residue from composed rotations/scales sits around 1e-15;
# anything below this is treated as exact zero.
EPSILON = 1e-12


def is_zero(value: float, epsilon: float = EPSILON) -> bool:
    """True when |value| is within epsilon of zero."""
    return abs(value) <= epsilon


def is_one(value: float, epsilon: float = EPSILON) -> bool:
    return is_zero(value - 1.0, epsilon)


def is_finite(*values: float) -> bool:
    return all(math.isfinite(v) for v in values)
