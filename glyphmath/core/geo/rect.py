from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Iterable, Tuple

from .vector import Vector


@dataclass(frozen=True)
class Rect:
    """
    An axis-aligned rectangle in a Y-up system: `bottom` is the minimum y
    and `top` the maximum y.
    """

    left: float
    bottom: float
    right: float
    top: float

    @staticmethod
    def empty() -> "Rect":
        """
        An inverted infinite rect. Encapsulating anything into it yields
        that thing's bounding box.
        """
        return Rect(math.inf, math.inf, -math.inf, -math.inf)

    @staticmethod
    def from_points(points: Iterable[Vector]) -> "Rect":
        """Returns the minimum bounding box of the given points."""
        rect = Rect.empty()
        for p in points:
            rect = rect.encapsulate(p)
        return rect

    def is_empty(self) -> bool:
        return self.left > self.right or self.bottom > self.top

    def encapsulate(self, p: Vector) -> "Rect":
        return Rect(
            left=min(self.left, p.x),
            bottom=min(self.bottom, p.y),
            right=max(self.right, p.x),
            top=max(self.top, p.y),
        )

    def encapsulate_rect(self, other: "Rect") -> "Rect":
        return self.encapsulate(Vector(other.left, other.bottom)).encapsulate(
            Vector(other.right, other.top)
        )

    def overlaps(self, other: "Rect") -> bool:
        return (
            self.bottom < other.top
            and self.top > other.bottom
            and self.left < other.right
            and self.right > other.left
        )

    def overlap_rect(self, other: "Rect") -> "Rect":
        """The intersection of two rects. Inverted if they don't overlap."""
        return Rect(
            left=max(self.left, other.left),
            bottom=max(self.bottom, other.bottom),
            right=min(self.right, other.right),
            top=min(self.top, other.top),
        )

    def width(self) -> float:
        return abs(self.right - self.left)

    def height(self) -> float:
        return abs(self.top - self.bottom)

    def area(self) -> float:
        return (self.right - self.left) * (self.top - self.bottom)

    def center(self) -> Vector:
        return Vector(self.left, self.bottom).lerp(
            Vector(self.right, self.top), 0.5
        )

    def to_tuple(self) -> Tuple[float, float, float, float]:
        """Returns (min_x, min_y, max_x, max_y)."""
        return self.left, self.bottom, self.right, self.top
