"""
Reparameterizations of evaluable curves.

A reparameterization maps a normalized, scheme-specific coordinate u in
[0, 1] back to the curve's native parameter t. Both schemes here sample the
curve at N + 1 evenly spaced native parameters and accumulate a
non-decreasing table: travelled distance for arc length, absolute tangent
turning for angle. Lookups search that table for the bracketing sample
interval and interpolate linearly inside it.
"""

from __future__ import annotations
import logging
import math
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Sequence, Type, TypeVar, Union
import numpy as np

from .evaluate import Evaluable
from .search import (
    IntervalSearchError,
    SearchStatus,
    locate_interval,
)
from .vector import Coordinate, Vector

logger = logging.getLogger(__name__)

P = TypeVar("P", bound="CumulativeParameterization")

# Upper bound on the crossings one angle search may report.
MAX_ANGLE_CROSSINGS = 1_000_000


class Parameterization(ABC):
    @abstractmethod
    def parameterize(self, u: float) -> float:
        """Maps a scheme coordinate u in [0, 1] to a native parameter t."""
        raise NotImplementedError


def _as_xy(value: Coordinate) -> tuple:
    if isinstance(value, Vector):
        return value.to_tuple()
    return (float(value), 0.0)


class CumulativeParameterization(Parameterization):
    """
    Shared machinery for parameterizations backed by a cumulative table
    sampled uniformly in native parameter space.
    """

    def __init__(self, table: Union[Sequence[float], np.ndarray]):
        arr = np.array(table, dtype=float)
        arr.setflags(write=False)
        self._table = arr

    @classmethod
    def from_curve(cls: Type[P], curve: Evaluable, iterations: int) -> P:
        """
        Samples `curve` over `iterations` equal steps of its native
        parameter and builds a table of iterations + 1 entries.
        """
        if iterations < 1:
            raise ValueError(
                f"iterations must be at least 1, got {iterations}"
            )
        return cls(cls._build_table(curve, iterations))

    @classmethod
    def from_many(
        cls: Type[P],
        curves: Iterable[Evaluable],
        iterations: int,
        max_workers: Optional[int] = None,
    ) -> List[P]:
        """
        Builds one table per curve on a thread pool. The curves must be
        independent of each other; results come back in input order.
        """
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            return list(
                executor.map(lambda c: cls.from_curve(c, iterations), curves)
            )

    @classmethod
    @abstractmethod
    def _build_table(cls, curve: Evaluable, iterations: int) -> np.ndarray:
        raise NotImplementedError

    @property
    def iterations(self) -> int:
        return len(self._table) - 1

    def _total(self) -> float:
        if len(self._table) == 0:
            raise IntervalSearchError("The table is empty.")
        return float(self._table[-1])

    def parameterize(self, u: float) -> float:
        """
        Maps u to the native parameter where the cumulative quantity
        reaches u times its total. Non-decreasing in u. Values of u outside
        [0, 1] extrapolate from the first or last sample interval.
        """
        table = self._table
        target = u * self._total()
        result = locate_interval(table, target)
        if result.status is SearchStatus.DEGENERATE:
            # A curve that never moves (or never turns) has nothing to
            # reparameterize against.
            logger.debug("Flat parameterization table, using identity")
            return u
        index = result.require()
        n = len(table) - 1
        if result.match is not None:
            # Where a stretch of samples sits on the target value, report
            # where the curve first gets there.
            return result.match / n

        start = table[index]
        end = table[index + 1]
        fraction = (target - start) / (end - start)
        return float((index + fraction) / n)

    def _value_at_t(self, t: float) -> float:
        """Interpolates the cumulative table at native parameter t."""
        table = self._table
        n = len(table) - 1
        if n < 1:
            raise IntervalSearchError(
                "Cannot interpolate a table with fewer than two entries."
            )
        fractional_index = t * n
        index = min(max(int(math.floor(fractional_index)), 0), n - 1)
        fraction = fractional_index - index
        start = table[index]
        end = table[index + 1]
        return float(start + (end - start) * fraction)


class ArcLengthParameterization(CumulativeParameterization):
    """
    Maps arc-length fractions to native parameters, so that
    `curve.at(p.parameterize(0.5))` is halfway along the curve by
    distance. Accuracy depends on the sample count.
    """

    @classmethod
    def _build_table(cls, curve: Evaluable, iterations: int) -> np.ndarray:
        points = [curve.at(i / iterations) for i in range(iterations + 1)]
        if isinstance(points[0], Vector):
            coords = np.array([p.to_tuple() for p in points])  # type: ignore
            steps = np.diff(coords, axis=0)
            dists = np.hypot(steps[:, 0], steps[:, 1])
        else:
            dists = np.abs(np.diff(np.array(points, dtype=float)))
        return np.concatenate(([0.0], np.cumsum(dists)))

    @property
    def arclens(self) -> np.ndarray:
        return self._table

    def get_total_arclen(self) -> float:
        return self._total()

    def get_arclen_from_t(self, t: float) -> float:
        """Distance travelled along the curve up to native parameter t."""
        return self._value_at_t(t)


class AngleParameterization(CumulativeParameterization):
    """
    Maps fractions of the total tangent turning to native parameters.
    Useful for finding points where a path has bent by a given amount.
    """

    @classmethod
    def _build_table(cls, curve: Evaluable, iterations: int) -> np.ndarray:
        tangents = np.array(
            [
                _as_xy(curve.tangent_at(i / iterations))
                for i in range(iterations + 1)
            ]
        )
        headings = np.arctan2(tangents[:, 1], tangents[:, 0])
        deltas = np.diff(headings)
        # Turning across the +-pi branch cut is a small turn, not a full
        # revolution.
        deltas = (deltas + np.pi) % (2 * np.pi) - np.pi
        return np.concatenate(([0.0], np.cumsum(np.abs(deltas))))

    @property
    def total_angles(self) -> np.ndarray:
        return self._table

    def get_total_angle(self) -> float:
        return self._total()

    def get_angle_from_t(self, t: float) -> float:
        """Cumulative turning in radians up to native parameter t."""
        return self._value_at_t(t)

    def find_parameters_for_angle_intervals(
        self, angle_interval: float
    ) -> List[float]:
        """
        Native parameters at which the cumulative turning crosses each
        multiple of `angle_interval`. A multiple that coincides with the
        total turning is the end of the curve, not a crossing, and is left
        out.
        """
        return self._crossings(angle_interval, 0, len(self._table) - 1)

    def find_parameters_for_angle_intervals_in_range(
        self, angle_interval: float, min_t: float, max_t: float
    ) -> List[float]:
        """
        Like `find_parameters_for_angle_intervals`, restricted to
        [min_t, max_t] and counting turning from min_t.
        """
        if not 0.0 <= min_t <= 1.0 or not 0.0 <= max_t <= 1.0:
            raise ValueError(
                f"min_t and max_t must lie in [0, 1], got {min_t}, {max_t}"
            )
        if min_t > max_t:
            raise ValueError(f"min_t {min_t} is greater than max_t {max_t}")
        n = len(self._table) - 1
        min_index = int(round(min_t * n))
        max_index = int(round(max_t * n))
        logger.debug(
            f"Angle crossings every {angle_interval} rad in samples "
            f"{min_index}..{max_index}"
        )
        return self._crossings(angle_interval, min_index, max_index)

    def _crossings(
        self, angle_interval: float, lo: int, hi: int
    ) -> List[float]:
        if not angle_interval > 0:
            raise ValueError(
                f"angle_interval must be positive, got {angle_interval}"
            )
        table = self._table
        n = len(table) - 1
        if n < 1:
            raise IntervalSearchError(
                "Cannot search a table with fewer than two entries."
            )

        base = table[lo]
        end_value = table[hi]
        if (end_value - base) / angle_interval > MAX_ANGLE_CROSSINGS:
            raise ValueError(
                f"angle_interval {angle_interval} would give more than "
                f"{MAX_ANGLE_CROSSINGS} crossings"
            )
        count = 1
        threshold = base + angle_interval
        parameters: List[float] = []

        for i in range(lo + 1, hi + 1):
            while table[i] >= threshold:
                if math.isclose(
                    threshold, end_value, rel_tol=1e-9, abs_tol=1e-12
                ):
                    return parameters
                prev = table[i - 1]
                fraction = (threshold - prev) / (table[i] - prev)
                parameters.append(float((i - 1 + fraction) / n))
                count += 1
                threshold = base + count * angle_interval
        return parameters
