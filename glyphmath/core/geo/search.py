"""
Bracketing-interval search over monotonic tables.

Piecewise cut tables, arc-length tables and turning-angle tables all need
the same lookup: given a target value, find the interval
[table[i], table[i+1]] that holds it. This module provides that lookup
once, as a partition-point (floor) search.

Conventions for runs of equal entries:

* The bracket index is the unique i whose half-open bracket
  [table[i], table[i+1]) is non-empty and contains the target. A
  zero-width bracket is never returned, so callers can always divide by
  the bracket width. A target equal to the last entry maps to the last
  non-empty bracket.
* When entries equal the target, `match` is the first of them.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Union
import numpy as np


class IntervalSearchError(Exception):
    """Raised when a table cannot bracket a target at all."""

    pass


class SearchStatus(Enum):
    FOUND = "found"
    BEFORE_RANGE = "before_range"
    AFTER_RANGE = "after_range"
    DEGENERATE = "degenerate"
    EMPTY = "empty"


@dataclass(frozen=True)
class IntervalSearchResult:
    """
    Outcome of `locate_interval`.

    Attributes:
        status: Where the target fell relative to the table.
        index: Left index of the bracket. For BEFORE_RANGE and AFTER_RANGE
               this is the first or last non-empty bracket, usable for
               linear extrapolation. Meaningless for DEGENERATE and EMPTY.
        match: First index whose entry equals the target, or None.
    """

    status: SearchStatus
    index: int
    match: Optional[int] = None

    @property
    def exact(self) -> bool:
        return self.match is not None

    def require(self) -> int:
        """Returns the bracket index, raising if there is none."""
        if self.status is SearchStatus.EMPTY:
            raise IntervalSearchError(
                "Cannot search a table with fewer than two entries."
            )
        if self.status is SearchStatus.DEGENERATE:
            raise IntervalSearchError(
                "Cannot bracket a target in a table whose entries are all "
                "equal."
            )
        return self.index


def locate_interval(
    table: Union[Sequence[float], np.ndarray], target: float
) -> IntervalSearchResult:
    """
    Finds the bracket of a non-decreasing table that contains `target`.

    Args:
        table: Non-decreasing values. Monotonicity is not checked here.
        target: The value to look up.

    Returns:
        An IntervalSearchResult. See the module docstring for the
        conventions used on equal entries.

    Raises:
        IntervalSearchError: If `target` is NaN or infinite.
    """
    if not math.isfinite(target):
        raise IntervalSearchError(
            f"Cannot locate non-finite target {target}"
        )
    arr = np.asarray(table, dtype=float)
    n = arr.shape[0]
    if n < 2:
        return IntervalSearchResult(SearchStatus.EMPTY, 0)

    first = arr[0]
    last = arr[-1]
    if first == last:
        return IntervalSearchResult(
            SearchStatus.DEGENERATE, 0, 0 if target == first else None
        )

    if target < first:
        # The last entry of the leading run of equal values starts the
        # first non-empty bracket.
        index = int(np.searchsorted(arr, first, side="right")) - 1
        return IntervalSearchResult(SearchStatus.BEFORE_RANGE, index)

    if target > last:
        index = int(np.searchsorted(arr, last, side="left")) - 1
        return IntervalSearchResult(SearchStatus.AFTER_RANGE, index)

    left = int(np.searchsorted(arr, target, side="left"))
    match = left if arr[left] == target else None
    if target == last:
        return IntervalSearchResult(SearchStatus.FOUND, left - 1, match)
    index = int(np.searchsorted(arr, target, side="right")) - 1
    return IntervalSearchResult(SearchStatus.FOUND, index, match)
