import logging
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Tuple, TypeVar

logger = logging.getLogger(__name__)

S = TypeVar("S", bound="Subdivide")


class Subdivide(ABC):
    """Mixin for curves that can be split at a parameter."""

    @abstractmethod
    def split(self: S, t: float) -> Optional[Tuple[S, S]]:
        """
        Splits the curve at `t`. Returns None when t is exactly 0 or 1,
        since either half would have zero length.
        """
        raise NotImplementedError

    def split_at_multiple_t(self: S, t_values: Iterable[float]) -> List[S]:
        """
        Splits the curve at several parameters of the original curve.

        The values are sorted, and each one is renormalized into the local
        parameter space of the piece that remains after the previous split.
        Values that cannot split anything (0, 1, repeats, anything outside
        the unit interval) are skipped, so N distinct interior values give
        N + 1 pieces.

        Returns:
            The pieces in order, covering the curve end to end.
        """
        pieces: List[S] = []
        last_t = 0.0
        current = self

        for t in sorted(t_values):
            if not last_t < t < 1.0:
                logger.debug(f"Skipping split at t={t}")
                continue
            local_t = (t - last_t) / (1.0 - last_t)
            halves = current.split(local_t)
            if halves is None:
                logger.debug(f"Skipping split at t={t} (local {local_t})")
                continue
            left, right = halves
            pieces.append(left)
            current = right
            last_t = t

        pieces.append(current)
        return pieces
