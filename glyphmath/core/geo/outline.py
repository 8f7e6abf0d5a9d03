"""
Conversion between piecewise curves and the points-with-handles form used
by font outlines.

A contour is a list of on-curve points. Each point carries an outgoing
handle `a` and an incoming handle `b`; a handle of None sits on the point
itself (it is colocated). A contour whose first point is a MOVE is open,
any other contour is closed.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from ...config import DEFAULT_TOLERANCES, Tolerances
from . import polar as polar_mod
from .bezier import Bezier
from .piecewise import Piecewise
from .polar import WhichHandle
from .vector import Vector

logger = logging.getLogger(__name__)


class PointType(Enum):
    MOVE = "move"
    LINE = "line"
    CURVE = "curve"
    QCURVE = "qcurve"


@dataclass(frozen=True)
class ContourPoint:
    x: float
    y: float
    a: Optional[Vector] = None
    b: Optional[Vector] = None
    ptype: PointType = PointType.CURVE

    @property
    def pos(self) -> Vector:
        return Vector(self.x, self.y)

    def handle_a(self) -> Vector:
        """The outgoing handle, or the point itself when colocated."""
        return self.a if self.a is not None else self.pos

    def handle_b(self) -> Vector:
        """The incoming handle, or the point itself when colocated."""
        return self.b if self.b is not None else self.pos

    def _handle(self, which: WhichHandle) -> Vector:
        if WhichHandle(which) is WhichHandle.A:
            return self.handle_a()
        return self.handle_b()

    def cartesian(self, which: WhichHandle) -> Tuple[float, float]:
        return polar_mod.cartesian(self.pos, self._handle(which))

    def polar(self, which: WhichHandle) -> Tuple[float, float]:
        """(r, theta) of a handle around the point, theta in radians."""
        return polar_mod.polar(self.pos, self._handle(which))

    def with_polar(
        self, which: WhichHandle, r_theta: Tuple[float, float]
    ) -> "ContourPoint":
        handle = polar_mod.from_polar(self.pos, *r_theta)
        if WhichHandle(which) is WhichHandle.A:
            return replace(self, a=handle)
        return replace(self, b=handle)


@dataclass(frozen=True)
class QuadPoint:
    """A point of a quadratic contour. Only one off-curve handle."""

    x: float
    y: float
    a: Optional[Vector] = None
    ptype: PointType = PointType.QCURVE


Contour = List[ContourPoint]
Outline = List[Contour]


def bezier_from_points(
    point: ContourPoint, next_point: ContourPoint
) -> Bezier:
    """The cubic running from `point` to `next_point`."""
    return Bezier(
        point.pos, point.handle_a(), next_point.handle_b(), next_point.pos
    )


def piecewise_from_contour(
    contour: Sequence[ContourPoint],
) -> Piecewise[Bezier]:
    if not contour:
        return Piecewise([])

    segs = [
        bezier_from_points(prev, point)
        for prev, point in zip(contour, contour[1:])
    ]
    if contour[0].ptype is not PointType.MOVE:
        segs.append(bezier_from_points(contour[-1], contour[0]))
    return Piecewise(segs)


def piecewise_from_outline(
    outline: Sequence[Sequence[ContourPoint]],
) -> Piecewise[Piecewise[Bezier]]:
    return Piecewise([piecewise_from_contour(c) for c in outline])


def _export_handle(
    handle: Vector, point: Vector, tolerances: Tolerances
) -> Optional[Vector]:
    if handle.is_near(point, tolerances.small_distance):
        return None
    return handle


def contour_from_piecewise(
    pw: Piecewise[Bezier], tolerances: Tolerances = DEFAULT_TOLERANCES
) -> Contour:
    """
    Turns a contour of cubics back into points with handles. Handles
    within `tolerances.small_distance` of their point are written out as
    colocated; use `assert_colocated` to snap longer handles.
    """
    if pw.is_empty():
        return []

    closed = pw.is_closed(tolerances)
    points: Contour = []
    last: Optional[Bezier] = None
    for i, bez in enumerate(pw.segs):
        ptype = PointType.MOVE if i == 0 and not closed else PointType.CURVE
        b = None
        if last is not None:
            b = _export_handle(last.w3, bez.w1, tolerances)
        points.append(
            ContourPoint(
                bez.w1.x,
                bez.w1.y,
                _export_handle(bez.w2, bez.w1, tolerances),
                b,
                ptype,
            )
        )
        last = bez

    assert last is not None
    if closed:
        first = points[0]
        points[0] = replace(
            first, b=_export_handle(last.w3, first.pos, tolerances)
        )
    else:
        end = last.w4
        points.append(
            ContourPoint(
                end.x,
                end.y,
                None,
                _export_handle(last.w3, end, tolerances),
                PointType.CURVE,
            )
        )
    return points


def outline_from_piecewise(
    pw: Piecewise[Piecewise[Bezier]],
    tolerances: Tolerances = DEFAULT_TOLERANCES,
) -> Outline:
    return [contour_from_piecewise(c, tolerances) for c in pw.segs]


def _colocate(
    handle: Optional[Vector], point: Vector, within: float
) -> Optional[Vector]:
    if handle is None:
        return None
    if abs(handle.x - point.x) < within and abs(handle.y - point.y) < within:
        return None
    return handle


def assert_colocated(
    outline: Sequence[Sequence[ContourPoint]],
    within: float = DEFAULT_TOLERANCES.handle_colocation,
) -> Outline:
    """
    Returns a copy of `outline` where every handle closer than `within` to
    its point on both axes is marked colocated.
    """
    result: Outline = []
    for contour in outline:
        fixed = []
        for p in contour:
            a = _colocate(p.a, p.pos, within)
            b = _colocate(p.b, p.pos, within)
            fixed.append(replace(p, a=a, b=b))
        result.append(fixed)
    return result


def resolve_quad_contour(points: Sequence[QuadPoint]) -> Contour:
    """
    Elevates a quadratic contour to cubics. The single control point of
    each quadratic span becomes two cubic handles at two thirds of the way
    from each end point towards it.
    """
    closed = bool(points) and points[0].ptype is not PointType.MOVE
    output: Contour = []
    for idx, point in enumerate(points):
        pos = Vector(point.x, point.y)
        a = None
        if point.a is not None:
            a = pos + (point.a - pos) * (2.0 / 3.0)

        prev: Optional[QuadPoint] = None
        if idx > 0:
            prev = points[idx - 1]
        elif closed and len(points) > 1:
            prev = points[-1]

        b = None
        if prev is not None and prev.a is not None:
            b = pos + (prev.a - pos) * (2.0 / 3.0)

        ptype = point.ptype
        if ptype is PointType.QCURVE:
            ptype = PointType.CURVE
        output.append(ContourPoint(point.x, point.y, a, b, ptype))

    logger.debug(f"Resolved quadratic contour of {len(output)} points")
    return output
