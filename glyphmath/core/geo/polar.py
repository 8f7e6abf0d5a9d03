"""
Polar views of Bézier handles.

A handle is measured from the on-curve point it belongs to, so a handle
sitting on its point is (0, 0) in both cartesian and polar form. Angles
are in radians, the same unit `polar` returns and `from_polar` accepts.
"""

from __future__ import annotations
import math
from enum import Enum
from typing import Tuple

from .vector import Vector


class WhichHandle(Enum):
    """A is the outgoing handle of a point, B the incoming one."""

    A = "a"
    B = "b"


def cartesian(point: Vector, handle: Vector) -> Tuple[float, float]:
    offset = handle - point
    return offset.x, offset.y


def polar(point: Vector, handle: Vector) -> Tuple[float, float]:
    """Returns (r, theta) of `handle` around `point`."""
    x, y = cartesian(point, handle)
    return math.hypot(x, y), math.atan2(y, x)


def from_polar(point: Vector, r: float, theta: float) -> Vector:
    return Vector(
        point.x + r * math.cos(theta), point.y + r * math.sin(theta)
    )
