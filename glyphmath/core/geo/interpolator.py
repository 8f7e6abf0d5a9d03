from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from .rect import Rect
from .vector import Vector


class InterpolationType(Enum):
    NULL = "null"
    LINEAR = "linear"
    EXPONENTIAL = "exponential"


@dataclass(frozen=True)
class Interpolator:
    """
    A 1D curve from `start` to `finish`. Evaluates to floats, so it can be
    stitched into a Piecewise to describe a scalar along a path (a stroke
    width, for example).
    """

    start: float
    finish: float
    kind: InterpolationType = InterpolationType.LINEAR

    def at(self, t: float) -> float:
        if self.kind is InterpolationType.NULL:
            return self.start
        if self.kind is InterpolationType.LINEAR:
            return (1.0 - t) * self.start + t * self.finish
        return self.start + (self.finish - self.start) * t * t

    def tangent_at(self, t: float) -> float:
        if self.kind is InterpolationType.NULL:
            return 0.0
        if self.kind is InterpolationType.LINEAR:
            return self.finish - self.start
        return 2.0 * (self.finish - self.start) * t

    def bounds(self) -> Rect:
        lo = min(self.start, self.finish)
        hi = max(self.start, self.finish)
        return Rect.from_points([Vector(lo, lo), Vector(hi, hi)])

    def apply_transform(
        self, transform: Callable[[float], float]
    ) -> "Interpolator":
        return Interpolator(
            transform(self.start), transform(self.finish), self.kind
        )

    def start_point(self) -> float:
        return self.at(0.0)

    def end_point(self) -> float:
        return self.at(1.0)
