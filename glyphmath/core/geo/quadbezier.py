from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from .bezier import Bezier, PointLike, _nudge, de_casteljau3
from .rect import Rect
from .subdivide import Subdivide
from .vector import Vector


@dataclass(frozen=True)
class QuadBezier(Subdivide):
    """A quadratic Bézier curve with a single shared handle `w2`."""

    w1: Vector
    w2: Vector
    w3: Vector

    @staticmethod
    def from_points(
        p0: PointLike, p1: PointLike, p2: PointLike
    ) -> "QuadBezier":
        return QuadBezier(
            Vector.coerce(p0), Vector.coerce(p1), Vector.coerce(p2)
        )

    def to_control_points(self) -> Tuple[Vector, Vector, Vector]:
        return (self.w1, self.w2, self.w3)

    def at(self, t: float) -> Vector:
        return de_casteljau3(t, self.w1, self.w2, self.w3)

    def tangent_at(self, t: float) -> Vector:
        t = _nudge(t)
        d1 = (self.w2 - self.w1) * 2.0
        d2 = (self.w3 - self.w2) * 2.0
        return d1.lerp(d2, t)

    def split(self, t: float) -> Optional[Tuple["QuadBezier", "QuadBezier"]]:
        if t == 0.0 or t == 1.0:
            return None
        q1 = self.w1.lerp(self.w2, t)
        q2 = self.w2.lerp(self.w3, t)
        r1 = q1.lerp(q2, t)
        return QuadBezier(self.w1, q1, r1), QuadBezier(r1, q2, self.w3)

    def reverse(self) -> "QuadBezier":
        return QuadBezier(self.w3, self.w2, self.w1)

    def calc_line_intersection(
        self, line_start: PointLike, line_end: PointLike
    ) -> List[Vector]:
        """
        Points where the curve crosses the segment from `line_start` to
        `line_end`, in increasing curve parameter. A line that only touches
        the curve gives a single point.

        The curve is projected onto the line's normal, which leaves a
        quadratic in t whose roots in [0, 1] are the candidate crossings.
        Candidates are then kept only if they fall within the segment's
        bounding box.
        """
        start = Vector.coerce(line_start)
        end = Vector.coerce(line_end)
        normal = Vector(start.y - end.y, end.x - start.x)
        offset = start.x * end.y - end.x * start.y

        # Power basis of the curve: c2 t^2 + c1 t + c0.
        c2 = self.w1 - self.w2 * 2.0 + self.w3
        c1 = (self.w2 - self.w1) * 2.0
        c0 = self.w1

        a = normal.dot(c2)
        b = normal.dot(c1)
        c = normal.dot(c0) + offset

        roots: List[float] = []
        if a == 0.0:
            if b != 0.0:
                roots.append(-c / b)
        else:
            d = b * b - 4.0 * a * c
            if d > 0.0:
                e = math.sqrt(d)
                roots.extend(((-b - e) / (2.0 * a), (-b + e) / (2.0 * a)))
            elif d == 0.0:
                roots.append(-b / (2.0 * a))

        min_x, max_x = sorted((start.x, end.x))
        min_y, max_y = sorted((start.y, end.y))
        intersections = []
        for t in sorted(roots):
            if not 0.0 <= t <= 1.0:
                continue
            point = self.at(t)
            # A vertical or horizontal line only bounds one axis.
            in_x = start.x == end.x or min_x <= point.x <= max_x
            in_y = start.y == end.y or min_y <= point.y <= max_y
            if in_x and in_y:
                intersections.append(point)
        return intersections

    def to_cubic(self) -> Bezier:
        """Exact degree elevation to a cubic."""
        c1 = self.w1 + (self.w2 - self.w1) * (2.0 / 3.0)
        c2 = self.w3 + (self.w2 - self.w3) * (2.0 / 3.0)
        return Bezier(self.w1, c1, c2, self.w3)

    def bounds(self) -> Rect:
        return Rect.from_points(self.to_control_points())

    def apply_transform(
        self, transform: Callable[[Vector], Vector]
    ) -> "QuadBezier":
        return QuadBezier(
            transform(self.w1), transform(self.w2), transform(self.w3)
        )

    def start_point(self) -> Vector:
        return self.w1

    def end_point(self) -> Vector:
        return self.w3
