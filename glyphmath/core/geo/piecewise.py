from __future__ import annotations
import logging
import math
from typing import (
    TYPE_CHECKING,
    Callable,
    Generic,
    Iterator,
    List,
    Optional,
    Sequence,
    Tuple,
    TypeVar,
    Union,
)

from ...config import DEFAULT_TOLERANCES, Tolerances
from .bezier import Bezier, PointLike
from .evaluate import Evaluable
from .rect import Rect
from .search import IntervalSearchError, locate_interval
from .vector import Coordinate, Vector

if TYPE_CHECKING:
    from .continuity import ContinuityGrouping, ContinuityOrder

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Evaluable)


class EmptyPiecewiseError(IntervalSearchError):
    """Raised when an operation needs at least one segment."""

    pass


class InvalidCutTableError(ValueError):
    pass


class DegenerateIntervalError(ZeroDivisionError):
    """Raised when remapping into a segment whose cut interval is empty."""

    pass


def _uniform_cuts(count: int) -> Tuple[float, ...]:
    return (0.0,) + tuple((i + 1) / count for i in range(count))


def _validate_cuts(cuts: Sequence[float], count: int) -> Tuple[float, ...]:
    cuts = tuple(float(c) for c in cuts)
    if len(cuts) != count + 1:
        raise InvalidCutTableError(
            f"Expected {count + 1} cuts for {count} segments, "
            f"got {len(cuts)}"
        )
    if not all(math.isfinite(c) for c in cuts):
        raise InvalidCutTableError(f"Cut table has non-finite values: {cuts}")
    if not math.isclose(cuts[0], 0.0, abs_tol=1e-9):
        raise InvalidCutTableError(f"Cut table must start at 0, got {cuts}")
    if count and not math.isclose(cuts[-1], 1.0, abs_tol=1e-9):
        raise InvalidCutTableError(f"Cut table must end at 1, got {cuts}")
    for a, b in zip(cuts, cuts[1:]):
        if b < a:
            raise InvalidCutTableError(
                f"Cut table must be non-decreasing, got {cuts}"
            )
    return cuts


class Piecewise(Generic[T]):
    """
    A sequence of curves joined into a single curve over [0, 1].

    The cut table maps the global parameter onto segments: segment i covers
    [cuts[i], cuts[i+1]]. Segments may themselves be Piecewise, which is how
    contours (Piecewise[Bezier]) and outlines (Piecewise[Piecewise[Bezier]])
    are modelled.

    Instances are immutable. Every editing operation returns a new
    Piecewise.
    """

    def __init__(
        self, segs: Sequence[T], cuts: Optional[Sequence[float]] = None
    ) -> None:
        self._segs: Tuple[T, ...] = tuple(segs)
        if cuts is None:
            self._cuts = _uniform_cuts(len(self._segs))
        else:
            self._cuts = _validate_cuts(cuts, len(self._segs))

    @property
    def segs(self) -> Tuple[T, ...]:
        return self._segs

    @property
    def cuts(self) -> Tuple[float, ...]:
        return self._cuts

    def __len__(self) -> int:
        return len(self._segs)

    def __iter__(self) -> Iterator[T]:
        return iter(self._segs)

    def __getitem__(self, index: Union[int, slice]):
        return self._segs[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Piecewise):
            return NotImplemented
        return self._segs == other._segs and self._cuts == other._cuts

    def __hash__(self) -> int:
        return hash((self._segs, self._cuts))

    def __repr__(self) -> str:
        return (
            f"Piecewise(segs={list(self._segs)!r}, "
            f"cuts={list(self._cuts)!r})"
        )

    def is_empty(self) -> bool:
        return not self._segs

    def iter_segments(self) -> Iterator[Tuple[T, float, float]]:
        """Yields (segment, start t, end t) for every segment."""
        for i, seg in enumerate(self._segs):
            yield seg, self._cuts[i], self._cuts[i + 1]

    def seg_n(self, t: float) -> int:
        """
        Index of the segment that holds global parameter `t`. Values below
        0 map to the first segment and values above 1 to the last.
        """
        if not self._segs:
            raise EmptyPiecewiseError("An empty piecewise has no segments.")
        return locate_interval(self._cuts, t).require()

    def seg_t(self, t: float) -> float:
        """Maps global `t` into the local parameter of its segment."""
        return self._locate(t)[1]

    def _locate(self, t: float) -> Tuple[int, float]:
        i = self.seg_n(t)
        start = self._cuts[i]
        width = self._cuts[i + 1] - start
        if width == 0.0:
            raise DegenerateIntervalError(
                f"Segment {i} has a zero-length cut interval at {start}"
            )
        return i, (t - start) / width

    def at(self, t: float) -> Coordinate:
        i, local_t = self._locate(t)
        return self._segs[i].at(local_t)

    def tangent_at(self, t: float) -> Coordinate:
        """
        Tangent of the segment holding `t`, with respect to that segment's
        own parameter.
        """
        i, local_t = self._locate(t)
        return self._segs[i].tangent_at(local_t)

    def bounds(self) -> Rect:
        if not self._segs:
            raise EmptyPiecewiseError("An empty piecewise knows no bounds!")
        output = Rect.empty()
        for seg in self._segs:
            output = output.encapsulate_rect(seg.bounds())
        return output

    def apply_transform(
        self, transform: Callable[[Coordinate], Coordinate]
    ) -> "Piecewise[T]":
        return Piecewise(
            [seg.apply_transform(transform) for seg in self._segs],
            self._cuts,
        )

    def start_point(self) -> Coordinate:
        if not self._segs:
            raise EmptyPiecewiseError("Empty piecewise has no start point.")
        return self._segs[0].start_point()

    def end_point(self) -> Coordinate:
        if not self._segs:
            raise EmptyPiecewiseError("Empty piecewise has no end point.")
        return self._segs[-1].end_point()

    def is_closed(self, tolerances: Tolerances = DEFAULT_TOLERANCES) -> bool:
        start = self.start_point()
        end = self.end_point()
        if isinstance(start, Vector) and isinstance(end, Vector):
            return start.is_near(end, tolerances.small_distance)
        return abs(end - start) <= tolerances.small_distance  # type: ignore

    def _is_nested(self) -> bool:
        return bool(self._segs) and isinstance(self._segs[0], Piecewise)

    def _split_leaf(self, t: float) -> "Piecewise[T]":
        """Splits the leaf segment holding global `t` and inserts cut t."""
        if not self._cuts[0] < t < self._cuts[-1]:
            return Piecewise(self._segs, self._cuts)

        i, local_t = self._locate(t)
        halves = self._segs[i].split(local_t)  # type: ignore[attr-defined]
        if halves is None:
            logger.debug(f"t={t} falls on an existing cut, nothing to split")
            return Piecewise(self._segs, self._cuts)

        segs = self._segs[:i] + tuple(halves) + self._segs[i + 1:]
        cuts = self._cuts[: i + 1] + (t,) + self._cuts[i + 1:]
        return Piecewise(segs, cuts)

    def subdivide(self, t: float) -> "Piecewise[T]":
        """
        Splits the segment that contains global parameter `t` in two and
        inserts a cut at `t`. The other segments are passed through.

        For a nested Piecewise (an outline of contours), every child is
        subdivided at `t` in its own parameter space and the outer cut table
        is kept.
        """
        if self._is_nested():
            return Piecewise(
                [seg.subdivide(t) for seg in self._segs],  # type: ignore
                self._cuts,
            )
        return self._split_leaf(t)

    def cut_at_t(self, t: float) -> "Piecewise[T]":
        """
        Splits exactly one leaf segment of the whole structure at global
        parameter `t`. Nested levels descend into the child that holds `t`
        using its local parameter; the new cut ends up in the table of the
        Piecewise that owns the split leaf.
        """
        i, local_t = self._locate(t)
        seg = self._segs[i]
        if isinstance(seg, Piecewise):
            new_child = seg.cut_at_t(local_t)
            segs = self._segs[:i] + (new_child,) + self._segs[i + 1:]
            return Piecewise(segs, self._cuts)  # type: ignore[arg-type]
        return self._split_leaf(t)

    # The operations below only make sense for contours of cubic curves.

    def fuse_nearby_ends(self, distance: float) -> "Piecewise[Bezier]":
        """
        Snaps the end of each segment onto the start of the next one when
        the two are within `distance`. Cuts are kept.
        """
        new_segments: List[Bezier] = []
        for i, bez in enumerate(self._segs):
            assert isinstance(bez, Bezier)
            if i + 1 < len(self._segs):
                next_start = self._segs[i + 1].start_point()
                assert isinstance(next_start, Vector)
                if bez.end_point().distance(next_start) <= distance:
                    bez = Bezier(bez.w1, bez.w2, bez.w3, next_start)
            new_segments.append(bez)
        return Piecewise(new_segments, self._cuts)

    def remove_short_segs(
        self, length: float, accuracy: int
    ) -> "Piecewise[Bezier]":
        """
        Drops segments whose sampled arc length is not above `length`.
        The cut table is regenerated uniformly.
        """
        from .parameterization import ArcLengthParameterization

        new_segs = []
        for seg in self._segs:
            param = ArcLengthParameterization.from_curve(seg, accuracy)
            if param.get_total_arclen() > length:
                new_segs.append(seg)
            else:
                logger.debug(f"Dropping short segment {seg}")
        return Piecewise(new_segs)  # type: ignore[arg-type]

    def as_continuous_beziers(
        self,
        order: Union[int, "ContinuityOrder"],
        tolerances: Tolerances = DEFAULT_TOLERANCES,
    ) -> "ContinuityGrouping":
        """Groups the segments into maximal runs of G<order> continuity."""
        from .continuity import group_continuous

        return group_continuous(self, order, tolerances)  # type: ignore

    def split_at_discontinuities(
        self, distance: float
    ) -> "Piecewise[Piecewise[Bezier]]":
        """Breaks the contour wherever consecutive ends are further apart
        than `distance`."""
        tolerances = DEFAULT_TOLERANCES.replace(small_distance=distance)
        return self.as_continuous_beziers(0, tolerances).piecewise

    def split_at_tangent_discontinuities(
        self, angle: float, tolerances: Tolerances = DEFAULT_TOLERANCES
    ) -> "Piecewise[Piecewise[Bezier]]":
        """Breaks the contour at corners sharper than `angle` radians."""
        tolerances = tolerances.replace(tangent_angle=angle)
        return self.as_continuous_beziers(1, tolerances).piecewise

    @classmethod
    def from_bezier_points(
        cls,
        start: PointLike,
        points: Sequence[Tuple[PointLike, PointLike, PointLike]],
    ) -> "Piecewise[Bezier]":
        """
        Builds a contour from a start point and a sequence of
        (handle 1, handle 2, end point) triples.
        """
        segs = []
        current = Vector.coerce(start)
        for h1, h2, end in points:
            bez = Bezier.from_points(current, h1, h2, end)
            segs.append(bez)
            current = bez.w4
        return cls(segs)  # type: ignore[arg-type]

    def to_bezier_points(
        self,
    ) -> Tuple[Vector, List[Tuple[Vector, Vector, Vector]]]:
        """Inverse of `from_bezier_points`."""
        start = self.start_point()
        points = []
        for bez in self._segs:
            assert isinstance(bez, Bezier)
            points.append((bez.w2, bez.w3, bez.w4))
        assert isinstance(start, Vector)
        return start, points
