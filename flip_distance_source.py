from __future__ import annotations
from typing import Iterator, List, Sequence, Tuple

from conflict_tracker import ConflictTracker
from edge_projection import EdgePairs, FDProblem, neighbor_pairs, split_problem
from flip_distance import FlipDistance
from triangulated_graph import Edge, TriangulatedGraph


def _assert_no_common_edge(start: TriangulatedGraph, end: TriangulatedGraph) -> bool:
    for e in start.edges():
        assert not end.has_edge(e), f"{e} is shared by both triangulations"
    return True


def _assert_no_free_edge(start: TriangulatedGraph, end: TriangulatedGraph) -> bool:
    g = start.copy()
    for e in g.edges():
        with g.flipped(e) as result:
            assert not end.has_edge(result), f"flipping {e} gives target edge {result}"
    return True


def _assert_non_trivial(start: TriangulatedGraph, end: TriangulatedGraph) -> bool:
    return _assert_no_common_edge(start, end) and _assert_no_free_edge(start, end)


def perform_free_flips(
    start: TriangulatedGraph,
    end: TriangulatedGraph,
    sources: EdgePairs,
    k: int,
) -> Tuple[List[FDProblem], int]:
    # returns the sub-problems with no free flip left and the remaining budget
    cur: List[FDProblem] = [FDProblem(start.copy(), end, list(sources))]
    no_free: List[FDProblem] = []
    while cur:
        problem = cur.pop()
        g1, g2 = problem.start, problem.end
        for e in g1.edges():
            result = g1.flip(e)
            if g2.has_edge(result):
                k -= 1
                pairs = [p for p in problem.sources if e not in p]
                pairs.extend(neighbor_pairs(g1, result))
                cur.extend(split_problem(g1, g2, result, pairs))
                break
            g1.flip(result)
        else:
            no_free.append(problem)
    return no_free, k


def iter_independent_choices(
    pairs: EdgePairs, g: TriangulatedGraph
) -> Iterator[Tuple[Edge, ...]]:
    chosen: List[Edge] = []
    forbid = ConflictTracker()

    def extend(index: int) -> Iterator[Tuple[Edge, ...]]:
        if index == len(pairs):
            yield tuple(chosen)
            return
        yield from extend(index + 1)
        for e in pairs[index]:
            if not g.is_flippable(e) or e in forbid:
                continue
            with forbid.reserve(e, g):
                chosen.append(e)
                try:
                    yield from extend(index + 1)
                finally:
                    chosen.pop()

    return extend(0)


class FlipDistanceSource(FlipDistance):
    def _child(self, start: TriangulatedGraph, end: TriangulatedGraph) -> "FlipDistanceSource":
        return FlipDistanceSource(start, end, counter=self.counter)

    def flip_distance_decision(self, k: int) -> bool:
        if k < 0:
            return False
        if self.start == self.end:
            return True
        self.counter.increment()
        g = self.start.copy()
        for e in g.edges():
            if self.end.has_edge(e):
                return self._split_and_search(g, e, k)
            with g.flipped(e) as result:
                if self.end.has_edge(result):
                    return self._split_and_search(g, result, k - 1)
        max_size = k - (self.start.size - 3)
        return any(
            self._search(source, self.start, k)
            for source in self.start.get_sources(max_size=max_size)
        )

    def _search(self, sources: Sequence[Edge], g: TriangulatedGraph, k: int) -> bool:
        self.counter.increment()
        assert _assert_non_trivial(g, self.end)
        assert g.is_independent_set(sources)
        if g == self.end and k >= 0:
            return True
        if g.size - 3 > k - len(sources):
            return False
        if not sources:
            return False
        for e in g.edges():
            with g.flipped(e) as result:
                if self.end.has_edge(result):
                    return e in sources and self._split_and_search(g, result, k - 1)
        g = g.copy()
        pairs: EdgePairs = []
        for e in sources:
            assert g.is_flippable(e)
            result = g.flip(e)
            pairs.extend(neighbor_pairs(g, result))
        k -= len(sources)
        problems, k = perform_free_flips(g, self.end, pairs, k)
        if k < 0:
            return False
        for problem in problems:
            algo = self._child(problem.start, problem.end)
            for i in range(k + 1):
                if algo._search_pairs(problem.sources, algo.start, i):
                    k -= i
                    break
            else:
                return False
        return k >= 0

    def _search_pairs(self, sources: EdgePairs, g: TriangulatedGraph, k: int) -> bool:
        assert _assert_non_trivial(g, self.end)
        return any(
            self._search(choice, g, k)
            for choice in iter_independent_choices(sources, g)
        )

    def _split_and_search(self, g: TriangulatedGraph, divider: Edge, k: int) -> bool:
        if k <= 0:
            return g == self.end and k == 0
        left, right = split_problem(g, self.end, divider)
        algo = self._child(left.start, left.end)
        for i in range(left.start.diagonal_difference(left.end), k + 1):
            if algo.flip_distance_decision(i):
                return self._child(right.start, right.end).flip_distance_decision(k - i)
        return False
