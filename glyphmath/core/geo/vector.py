from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple, TypeVar, Union


@dataclass(frozen=True)
class Vector:
    """
    A 2D point or direction. Immutable value type.

    Components are expected to be finite; nothing here enforces it.
    """

    x: float
    y: float

    @staticmethod
    def from_components(x: float, y: float) -> "Vector":
        return Vector(float(x), float(y))

    @staticmethod
    def coerce(value: Union["Vector", Sequence[float]]) -> "Vector":
        """Accepts a Vector or any (x, y) sequence."""
        if isinstance(value, Vector):
            return value
        x, y = value
        return Vector(float(x), float(y))

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __add__(self, other: "Vector") -> "Vector":
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector") -> "Vector":
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector(self.x - other.x, self.y - other.y)

    def __mul__(self, other: Union["Vector", float]) -> "Vector":
        if isinstance(other, Vector):
            return Vector(self.x * other.x, self.y * other.y)
        if isinstance(other, (int, float)):
            return Vector(self.x * other, self.y * other)
        return NotImplemented

    def __rmul__(self, other: float) -> "Vector":
        if isinstance(other, (int, float)):
            return Vector(self.x * other, self.y * other)
        return NotImplemented

    def __truediv__(self, s: float) -> "Vector":
        return Vector(self.x / s, self.y / s)

    def __neg__(self) -> "Vector":
        return Vector(-self.x, -self.y)

    def __abs__(self) -> float:
        return self.magnitude()

    def is_near(self, other: "Vector", eps: float) -> bool:
        """True if both components differ by at most eps."""
        return abs(self.x - other.x) <= eps and abs(self.y - other.y) <= eps

    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)

    def distance(self, other: "Vector") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def normalize(self) -> "Vector":
        # A zero vector yields NaN components, same as the division would.
        m = self.magnitude()
        if m == 0.0:
            return Vector(math.nan, math.nan)
        return Vector(self.x / m, self.y / m)

    def dot(self, other: "Vector") -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: "Vector") -> float:
        return self.x * other.y - self.y * other.x

    def lerp(self, other: "Vector", t: float) -> "Vector":
        return Vector(
            (1.0 - t) * self.x + t * other.x,
            (1.0 - t) * self.y + t * other.y,
        )

    def angle(self, other: "Vector") -> float:
        """
        Signed angle in radians that rotates this direction onto `other`,
        wrapped to (-pi, pi].
        """
        delta = math.atan2(other.y, other.x) - math.atan2(self.y, self.x)
        return wrap_angle(delta)

    def rotate(self, pivot: "Vector", angle: float) -> "Vector":
        """Rotates around `pivot` by `angle` radians (counter-clockwise)."""
        s = math.sin(angle)
        c = math.cos(angle)
        dx = self.x - pivot.x
        dy = self.y - pivot.y
        return Vector(dx * c - dy * s + pivot.x, dx * s + dy * c + pivot.y)


# An evaluation result: 1D curves (interpolators) produce floats, 2D
# curves produce Vectors. Both support +, -, scalar * and abs().
Coordinate = Union[float, Vector]
C = TypeVar("C", float, Vector)


def lerp(a: C, b: C, t: float) -> C:
    """Linear interpolation that works for floats and Vectors alike."""
    return a * (1.0 - t) + b * t


def distance(a: Coordinate, b: Coordinate) -> float:
    return abs(b - a)  # type: ignore[operator]


def wrap_angle(angle: float) -> float:
    """Wraps an angle in radians to (-pi, pi]."""
    wrapped = math.fmod(angle + math.pi, 2 * math.pi)
    if wrapped <= 0.0:
        wrapped += 2 * math.pi
    return wrapped - math.pi
