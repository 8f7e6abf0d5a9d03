from __future__ import annotations
import sys
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple, Union
import numpy as np

from . import polar as polar_mod
from .polar import WhichHandle
from .rect import Rect
from .subdivide import Subdivide
from .vector import Vector

PointLike = Union[Vector, Sequence[float]]


def _nudge(t: float) -> float:
    # With a handle sitting on its endpoint the derivative vanishes at the
    # boundary. Step one epsilon inside so we still get a usable direction.
    if t == 0.0:
        return sys.float_info.epsilon
    if t == 1.0:
        return 1.0 - sys.float_info.epsilon
    return t


def de_casteljau3(t: float, p0: Vector, p1: Vector, p2: Vector) -> Vector:
    q0 = p0.lerp(p1, t)
    q1 = p1.lerp(p2, t)
    return q0.lerp(q1, t)


def de_casteljau4(
    t: float, p0: Vector, p1: Vector, p2: Vector, p3: Vector
) -> Vector:
    q0 = p0.lerp(p1, t)
    q1 = p1.lerp(p2, t)
    q2 = p2.lerp(p3, t)
    return de_casteljau3(t, q0, q1, q2)


@dataclass(frozen=True)
class Bezier(Subdivide):
    """
    A cubic Bézier curve. `w1` and `w4` are the endpoints, `w2` and `w3`
    the handles. Any arrangement of the four points is legal, including
    coincident handles and fully collapsed curves.
    """

    w1: Vector
    w2: Vector
    w3: Vector
    w4: Vector

    @staticmethod
    def from_points(
        p0: PointLike, p1: PointLike, p2: PointLike, p3: PointLike
    ) -> "Bezier":
        return Bezier(
            Vector.coerce(p0),
            Vector.coerce(p1),
            Vector.coerce(p2),
            Vector.coerce(p3),
        )

    @staticmethod
    def line(start: PointLike, end: PointLike) -> "Bezier":
        """A straight line in cubic form, handles at thirds."""
        p0 = Vector.coerce(start)
        p3 = Vector.coerce(end)
        return Bezier(p0, p0.lerp(p3, 1 / 3), p0.lerp(p3, 2 / 3), p3)

    def to_control_points(self) -> Tuple[Vector, Vector, Vector, Vector]:
        return (self.w1, self.w2, self.w3, self.w4)

    def to_numpy(self) -> np.ndarray:
        """Returns the control points as a 4x2 float array."""
        return np.array([p.to_tuple() for p in self.to_control_points()])

    def at(self, t: float) -> Vector:
        return de_casteljau4(t, self.w1, self.w2, self.w3, self.w4)

    def derivative(self) -> Tuple[Vector, Vector, Vector]:
        """Control points of the quadratic derivative curve."""
        return (
            (self.w2 - self.w1) * 3.0,
            (self.w3 - self.w2) * 3.0,
            (self.w4 - self.w3) * 3.0,
        )

    def tangent_at(self, t: float) -> Vector:
        """
        The first derivative at `t`. Exactly 0.0 and 1.0 are evaluated one
        machine epsilon inside the curve, so this is an approximation at
        the boundary rather than the true derivative there.
        """
        d1, d2, d3 = self.derivative()
        return de_casteljau3(_nudge(t), d1, d2, d3)

    def second_derivative_at(self, t: float) -> Vector:
        a = (self.w3 - self.w2 * 2.0 + self.w1) * 6.0
        b = (self.w4 - self.w3 * 2.0 + self.w2) * 6.0
        return a.lerp(b, t)

    def curvature_at(self, t: float) -> float:
        """
        Signed curvature at `t` (positive when turning counter-clockwise).
        Returns 0.0 where the curve has no measurable speed.
        """
        t = _nudge(t)
        d1 = self.tangent_at(t)
        d2 = self.second_derivative_at(t)
        speed = d1.magnitude()
        if speed < sys.float_info.epsilon:
            return 0.0
        return d1.cross(d2) / speed**3

    def _curvature_samples(self, num_steps: int) -> List[Tuple[float, float]]:
        if num_steps < 1:
            raise ValueError("num_steps must be at least 1")
        ts = (i / num_steps for i in range(num_steps + 1))
        return [(t, self.curvature_at(t)) for t in ts]

    def min_curvature(self, num_steps: int = 100) -> Tuple[float, float]:
        """
        Returns (t, curvature) where the signed curvature is lowest, found
        by sampling num_steps + 1 evenly spaced parameters. The sharpest
        clockwise turn of the curve.
        """
        return min(self._curvature_samples(num_steps), key=lambda s: s[1])

    def max_curvature(self, num_steps: int = 100) -> Tuple[float, float]:
        """Like `min_curvature`, for the highest signed curvature."""
        return max(self._curvature_samples(num_steps), key=lambda s: s[1])

    def _handle(self, which: WhichHandle) -> Tuple[Vector, Vector]:
        if WhichHandle(which) is WhichHandle.A:
            return self.w1, self.w2
        return self.w4, self.w3

    def cartesian(self, which: WhichHandle) -> Tuple[float, float]:
        """Offset of handle A from w1, or of handle B from w4."""
        return polar_mod.cartesian(*self._handle(which))

    def polar(self, which: WhichHandle) -> Tuple[float, float]:
        """(r, theta) of a handle around its endpoint, theta in radians."""
        return polar_mod.polar(*self._handle(which))

    def with_polar(
        self, which: WhichHandle, r_theta: Tuple[float, float]
    ) -> "Bezier":
        """Returns a copy with one handle moved to polar (r, theta)."""
        point, _ = self._handle(which)
        handle = polar_mod.from_polar(point, *r_theta)
        if WhichHandle(which) is WhichHandle.A:
            return Bezier(self.w1, handle, self.w3, self.w4)
        return Bezier(self.w1, self.w2, handle, self.w4)

    def split(self, t: float) -> Optional[Tuple["Bezier", "Bezier"]]:
        """
        de Casteljau subdivision at `t`. The two halves reproduce the
        original exactly. None at t == 0 or t == 1.
        """
        if t == 0.0 or t == 1.0:
            return None

        w12 = self.w1.lerp(self.w2, t)
        w23 = self.w2.lerp(self.w3, t)
        w34 = self.w3.lerp(self.w4, t)

        w123 = w12.lerp(w23, t)
        w234 = w23.lerp(w34, t)

        w1234 = w123.lerp(w234, t)

        return (
            Bezier(self.w1, w12, w123, w1234),
            Bezier(w1234, w234, w34, self.w4),
        )

    def reverse(self) -> "Bezier":
        return Bezier(self.w4, self.w3, self.w2, self.w1)

    def balance(self, distance: float = 0.1) -> "Bezier":
        """
        Pulls handles that sit (almost) on their endpoint out onto the
        curve, so tangents near the ends are well defined.
        """
        w2 = self.w2
        w3 = self.w3
        if self.w1.distance(self.w2) < distance:
            w2 = self.at(0.4)
        if self.w3.distance(self.w4) < distance:
            w3 = self.at(0.6)
        return Bezier(self.w1, w2, w3, self.w4)

    def bounds(self) -> Rect:
        """
        The bounding box of the control points, which always contains the
        curve.
        """
        return Rect.from_points(self.to_control_points())

    def apply_transform(
        self, transform: Callable[[Vector], Vector]
    ) -> "Bezier":
        return Bezier(*(transform(p) for p in self.to_control_points()))

    def start_point(self) -> Vector:
        return self.w1

    def end_point(self) -> Vector:
        return self.w4

    def sample(self, num_steps: int) -> List[Vector]:
        """Evaluates num_steps + 1 evenly spaced parameters, ends included."""
        if num_steps < 1:
            raise ValueError("num_steps must be at least 1")
        return [self.at(i / num_steps) for i in range(num_steps + 1)]
