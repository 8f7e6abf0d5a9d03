"""
Classification of the joints between consecutive curve segments.

G0 means the segments touch, G1 that they also leave and enter in the same
direction, G2 that they additionally bend by the same amount at the joint.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import List, Tuple, Union

from ...config import DEFAULT_TOLERANCES, Tolerances
from .bezier import Bezier
from .piecewise import Piecewise

logger = logging.getLogger(__name__)


class ContinuityOrderError(ValueError):
    pass


class ContinuityOrder(IntEnum):
    G0 = 0
    G1 = 1
    G2 = 2

    @classmethod
    def coerce(
        cls, order: Union[int, "ContinuityOrder"]
    ) -> "ContinuityOrder":
        try:
            return cls(order)
        except ValueError:
            raise ContinuityOrderError(
                f"Continuity order must be 0, 1 or 2, got {order!r}"
            )


def _tangents_match(a: Bezier, b: Bezier, max_angle: float) -> bool:
    exit_dir = a.tangent_at(1.0)
    entry_dir = b.tangent_at(0.0)
    if exit_dir.magnitude() == 0.0 or entry_dir.magnitude() == 0.0:
        return False
    return abs(exit_dir.angle(entry_dir)) <= max_angle


def _curvatures_match(a: Bezier, b: Bezier, tolerance: float) -> bool:
    ka = a.curvature_at(1.0)
    kb = b.curvature_at(0.0)
    scale = max(abs(ka), abs(kb), 1e-9)
    return abs(ka - kb) <= tolerance * scale


def is_continuous(
    a: Bezier,
    b: Bezier,
    order: Union[int, ContinuityOrder],
    tolerances: Tolerances = DEFAULT_TOLERANCES,
) -> bool:
    """
    Checks whether segment `b` continues segment `a` at the given order.

    Args:
        a: The segment whose end forms the joint.
        b: The segment whose start forms the joint.
        order: 0, 1 or 2 (or a ContinuityOrder).
        tolerances: `small_distance` bounds the gap, `tangent_angle` the
                    change of direction in radians and `curvature` the
                    relative change of curvature.
    """
    order = ContinuityOrder.coerce(order)
    if a.end_point().distance(b.start_point()) > tolerances.small_distance:
        return False
    if order >= ContinuityOrder.G1 and not _tangents_match(
        a, b, tolerances.tangent_angle
    ):
        return False
    if order >= ContinuityOrder.G2 and not _curvatures_match(
        a, b, tolerances.curvature
    ):
        return False
    return True


@dataclass(frozen=True)
class ContinuityGrouping:
    """
    Result of `group_continuous`.

    Attributes:
        order: The order the joints were tested at.
        groups: Indices of the original segments, one tuple per maximal
                run of continuous segments.
        piecewise: One inner Piecewise per group. The outer cuts are the
                   original cuts at the group boundaries, so global
                   parameters map to the same points as before.
    """

    order: ContinuityOrder
    groups: Tuple[Tuple[int, ...], ...]
    piecewise: Piecewise[Piecewise[Bezier]]

    def __len__(self) -> int:
        return len(self.groups)


def _renormalize(cuts: Tuple[float, ...]) -> List[float]:
    start = cuts[0]
    end = cuts[-1]
    width = end - start
    if width == 0.0:
        # Every segment of the run is zero-length in the parent; spread
        # them evenly instead.
        count = len(cuts) - 1
        return [i / count for i in range(count + 1)]
    inner = [(c - start) / width for c in cuts]
    inner[0] = 0.0
    inner[-1] = 1.0
    return inner


def group_continuous(
    piecewise: Piecewise[Bezier],
    order: Union[int, ContinuityOrder],
    tolerances: Tolerances = DEFAULT_TOLERANCES,
) -> ContinuityGrouping:
    """
    Splits a contour into maximal runs of consecutive segments that join
    with at least the requested continuity. The joint between the last
    and the first segment is not examined, even for closed contours.
    """
    order = ContinuityOrder.coerce(order)
    segs = piecewise.segs
    cuts = piecewise.cuts
    if not segs:
        return ContinuityGrouping(order, (), Piecewise([]))

    groups: List[List[int]] = [[0]]
    for i in range(1, len(segs)):
        if is_continuous(segs[i - 1], segs[i], order, tolerances):
            groups[-1].append(i)
        else:
            groups.append([i])

    inner = []
    outer_cuts = [0.0]
    for group in groups:
        first = group[0]
        last = group[-1]
        run_cuts = cuts[first:last + 2]
        inner.append(
            Piecewise([segs[i] for i in group], _renormalize(run_cuts))
        )
        outer_cuts.append(cuts[last + 1])
    outer_cuts[-1] = 1.0

    logger.debug(
        f"Grouped {len(segs)} segments into {len(groups)} G{int(order)} runs"
    )
    return ContinuityGrouping(
        order,
        tuple(tuple(g) for g in groups),
        Piecewise(inner, outer_cuts),
    )
