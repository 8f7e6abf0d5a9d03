"""
The evaluation contract shared by every curve type that can live inside a
Piecewise, plus transform helpers built on top of it.
"""

from __future__ import annotations
import math
from abc import abstractmethod
from typing import (
    TYPE_CHECKING,
    Callable,
    Optional,
    Protocol,
    Tuple,
    TypeVar,
    Union,
)

from .vector import Coordinate, Vector

if TYPE_CHECKING:
    from ..matrix import Matrix
    from .rect import Rect

E = TypeVar("E", bound="Evaluable")


class Evaluable(Protocol):
    """
    Anything that can be evaluated over a [0, 1] parameter. The result is a
    Coordinate: a Vector for 2D curves, a float for 1D ones.
    """

    @abstractmethod
    def at(self, t: float) -> Coordinate:
        raise NotImplementedError

    @abstractmethod
    def tangent_at(self, t: float) -> Coordinate:
        raise NotImplementedError

    @abstractmethod
    def bounds(self) -> "Rect":
        raise NotImplementedError

    @abstractmethod
    def apply_transform(
        self: E, transform: Callable[[Coordinate], Coordinate]
    ) -> E:
        raise NotImplementedError

    @abstractmethod
    def start_point(self) -> Coordinate:
        raise NotImplementedError

    @abstractmethod
    def end_point(self) -> Coordinate:
        raise NotImplementedError


class Primitive(Evaluable, Protocol):
    """A leaf curve that can also be split in two at a parameter."""

    @abstractmethod
    def split(self: E, t: float) -> Optional[Tuple[E, E]]:
        raise NotImplementedError


def translate(curve: E, offset: Coordinate) -> E:
    return curve.apply_transform(lambda v: v + offset)  # type: ignore


def scale(curve: E, factor: Union[Coordinate, float]) -> E:
    """Scales about the origin. A Vector factor scales per axis."""
    return curve.apply_transform(lambda v: v * factor)  # type: ignore


def rotate(curve: E, angle: float) -> E:
    """Rotates a 2D curve about the origin by `angle` radians."""
    c = math.cos(angle)
    s = math.sin(angle)

    def _rotate(v: Coordinate) -> Coordinate:
        assert isinstance(v, Vector)
        return Vector(v.x * c - v.y * s, v.x * s + v.y * c)

    return curve.apply_transform(_rotate)


def transform(curve: E, matrix: "Matrix") -> E:
    """Applies an affine Matrix to every control point of a 2D curve."""

    def _apply(v: Coordinate) -> Coordinate:
        assert isinstance(v, Vector)
        return Vector.coerce(matrix.transform_point(v.to_tuple()))

    return curve.apply_transform(_apply)
