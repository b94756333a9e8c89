from collections import deque
from functools import lru_cache
from typing import FrozenSet, List

from triangulated_graph import Edge, TriangulatedGraph


def all_triangulations(n: int) -> List[TriangulatedGraph]:
    """Every triangulation of the convex n-gon (Catalan(n-2) of them)."""

    @lru_cache(maxsize=None)
    def between(i: int, j: int) -> List[FrozenSet[Edge]]:
        if j - i < 2:
            return [frozenset()]
        result = []
        for m in range(i + 1, j):
            extra = set()
            if m - i > 1:
                extra.add((i, m))
            if j - m > 1:
                extra.add((m, j))
            for left in between(i, m):
                for right in between(m, j):
                    result.append(left | right | frozenset(extra))
        return result

    return [TriangulatedGraph(n, sorted(d)) for d in between(0, n - 1)]


def bfs_flip_distance(start: TriangulatedGraph, end: TriangulatedGraph) -> int:
    target = frozenset(end.edges())
    seen = {frozenset(start.edges())}
    queue = deque([(start.copy(), 0)])
    while queue:
        g, d = queue.popleft()
        if frozenset(g.edges()) == target:
            return d
        for e in g.edges():
            with g.flipped(e):
                key = frozenset(g.edges())
                if key not in seen:
                    seen.add(key)
                    queue.append((g.copy(), d + 1))
    raise RuntimeError("flip graph is disconnected")
