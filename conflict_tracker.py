from __future__ import annotations
from collections import Counter
from contextlib import contextmanager
from typing import Iterator

from triangulated_graph import Edge, TriangulatedGraph


class ConflictTracker:
    """Counted set of edges that may not be picked for the current round of flips."""

    def __init__(self):
        self._counts: Counter = Counter()

    def add(self, e: Edge) -> None:
        self._counts[e] += 1

    def remove_one(self, e: Edge) -> None:
        if self._counts[e] > 1:
            self._counts[e] -= 1
        else:
            self._counts.pop(e, None)

    def count(self, e: Edge) -> int:
        return self._counts.get(e, 0)

    def __contains__(self, e: Edge) -> bool:
        return self.count(e) > 0

    def __len__(self) -> int:
        return sum(self._counts.values())

    def add_with_neighbors(self, e: Edge, g: TriangulatedGraph) -> None:
        self.add(e)
        for neighbor in g.get_neighbors(e):
            self.add(neighbor)

    def remove_with_neighbors(self, e: Edge, g: TriangulatedGraph) -> None:
        self.remove_one(e)
        for neighbor in g.get_neighbors(e):
            self.remove_one(neighbor)

    @contextmanager
    def reserve(self, e: Edge, g: TriangulatedGraph) -> Iterator[None]:
        self.add_with_neighbors(e, g)
        try:
            yield
        finally:
            self.remove_with_neighbors(e, g)
