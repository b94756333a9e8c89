from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional
import logging

from triangulated_graph import TriangulatedGraph

logger = logging.getLogger(__name__)


@dataclass
class BranchCounter:
    """Number of search nodes visited; shared by a search and all of its sub-searches."""
    branches: int = 0

    def increment(self) -> None:
        self.branches += 1

    def reset(self) -> None:
        self.branches = 0


class FlipDistance(ABC):
    """
    Common interface of the flip distance strategies.

    Implementations answer the decision question "can `start` be turned into
    `end` with at most k flips"; the minimum distance is found by asking it
    for increasing (or bisected) k.
    """

    def __init__(
        self,
        start: TriangulatedGraph,
        end: TriangulatedGraph,
        *,
        counter: Optional[BranchCounter] = None,
    ):
        if start.size != end.size:
            raise ValueError(
                f"Triangulations have different sizes: {start.size} != {end.size}"
            )
        self.start = start
        self.end = end
        self.counter = counter if counter is not None else BranchCounter()

    @abstractmethod
    def flip_distance_decision(self, k: int) -> bool:
        pass

    def flip_distance(self, *, binary_search: bool = False) -> int:
        if self.start == self.end:
            return 0
        lo = self.start.diagonal_difference(self.end)
        hi = 2 * self.start.size - 6
        if binary_search:
            if not self.flip_distance_decision(hi):
                raise RuntimeError(f"No flip sequence of length <= {hi} found")
            while lo < hi:
                mid = (lo + hi) // 2
                logger.debug("trying k=%d in [%d, %d]", mid, lo, hi)
                if self.flip_distance_decision(mid):
                    hi = mid
                else:
                    lo = mid + 1
            logger.debug("flip distance is %d", lo)
            return lo
        for k in range(lo, hi + 1):
            logger.debug("trying k=%d", k)
            if self.flip_distance_decision(k):
                logger.debug("flip distance is %d", k)
                return k
        raise RuntimeError(f"No flip sequence of length <= {hi} found")

    def get_statistics(self) -> List[int]:
        return [self.counter.branches]

    def reset_statistics(self) -> None:
        self.counter.reset()
