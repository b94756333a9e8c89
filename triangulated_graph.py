from __future__ import annotations
from contextlib import contextmanager
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, Tuple

from cgshop2026_pyutils.geometry import FlipPartnerMap, FlippableTriangulation, Point

Edge = Tuple[int, int]
EdgePair = Tuple[Edge, Edge]


def normalize_edge(a: int, b: int) -> Edge:
    return (a, b) if a < b else (b, a)


def convex_position_points(size: int) -> List[Point]:
    # parabola y = x^2, counter-clockwise in index order
    return [Point(i, i * i) for i in range(size)]


def get_vertex_filter(v1: int, v2: int) -> Callable[[int], bool]:
    if v1 <= v2:
        return lambda v: v1 <= v <= v2
    return lambda v: v >= v1 or v <= v2


class TriangulatedGraph:
    """
    A triangulation of a convex polygon with vertices 0..n-1 in cyclic order,
    embedded on convex_position_points(n). Only the diagonals are stored;
    flips go through the FlipPartnerMap of the embedding.
    """

    def __init__(self, size: int, edges: Iterable[Edge] = ()):
        if size < 3:
            raise ValueError(f"A polygon needs at least 3 vertices, got {size}")
        diagonals = set()
        for u, v in edges:
            u, v = int(u), int(v)
            if not (0 <= u < size and 0 <= v < size) or u == v:
                raise ValueError(
                    f"Edges do not form a valid triangulation: bad edge ({u}, {v})"
                )
            e = normalize_edge(u, v)
            if not self._is_boundary(size, e):
                diagonals.add(e)
        tri = FlippableTriangulation.from_points_edges(
            convex_position_points(size), sorted(diagonals)
        )
        self._size = size
        self._flip_map: FlipPartnerMap = tri._flip_map

    @classmethod
    def _wrap(cls, size: int, flip_map: FlipPartnerMap) -> "TriangulatedGraph":
        graph = cls.__new__(cls)
        graph._size = size
        graph._flip_map = flip_map
        return graph

    @classmethod
    def fan(cls, size: int, apex: int = 0) -> "TriangulatedGraph":
        edges = [(apex, (apex + i) % size) for i in range(2, size - 1)]
        return cls(size, edges)

    @staticmethod
    def _is_boundary(size: int, e: Edge) -> bool:
        u, v = e
        return v - u == 1 or (u == 0 and v == size - 1)

    @property
    def size(self) -> int:
        return self._size

    def edges(self) -> List[Edge]:
        return sorted(e for e in self._flip_map.edges if not self._is_boundary(self._size, e))

    def has_edge(self, e: Edge) -> bool:
        u, v = normalize_edge(*e)
        if not (0 <= u < v < self._size):
            return False
        return (u, v) in self._flip_map.edges or self._is_boundary(self._size, (u, v))

    def is_flippable(self, e: Edge) -> bool:
        return self._flip_map.is_flippable(e)

    def flip(self, e: Edge) -> Edge:
        return self._flip_map.flip(e)

    @contextmanager
    def flipped(self, e: Edge) -> Iterator[Edge]:
        result = self.flip(e)
        try:
            yield result
        finally:
            self.flip(result)

    def get_neighbors(self, e: Edge) -> List[Edge]:
        # triangle inside (a, b) first, then the one on the far side
        a, b = normalize_edge(*e)
        c, d = (int(v) for v in self._flip_map.get_flip_partner((a, b)))
        if not a < c < b:
            c, d = d, c
        return [
            normalize_edge(a, c),
            normalize_edge(c, b),
            normalize_edge(a, d),
            normalize_edge(d, b),
        ]

    def share_triangle(self, e1: Edge, e2: Edge) -> bool:
        shared = set(e1) & set(e2)
        if len(shared) != 1:
            return False
        x, y = set(e1) ^ set(e2)
        return self.has_edge((x, y))

    def sub_graph(self, v1: int, v2: int) -> "TriangulatedGraph":
        # v1 becomes 0 and v2 the last vertex
        if not self.has_edge((v1, v2)):
            raise ValueError(f"Cannot split along ({v1}, {v2}): not an edge")
        m = (v2 - v1) % self._size + 1
        if m < 3:
            raise ValueError(f"Splitting along ({v1}, {v2}) leaves no polygon")
        return TriangulatedGraph(m, self.filter_and_map_edges(v1, v2, self.edges()))

    vertex_filter = staticmethod(get_vertex_filter)

    def vertex_mapper(self, v1: int, v2: int) -> Callable[[int], int]:
        n = self._size
        return lambda v: (v - v1) % n

    def filter_and_map_edges(
        self, v1: int, v2: int, edges: Iterable[Edge]
    ) -> List[Edge]:
        keep = self.vertex_filter(v1, v2)
        mapper = self.vertex_mapper(v1, v2)
        return [
            normalize_edge(mapper(u), mapper(v))
            for (u, v) in edges
            if keep(u) and keep(v)
        ]

    def diagonal_difference(self, other: "TriangulatedGraph") -> int:
        return len(self._flip_map.edges - other._flip_map.edges)

    def is_independent_set(self, edges: Sequence[Edge]) -> bool:
        for e in edges:
            for e2 in edges:
                if e != e2 and self.share_triangle(e, e2):
                    return False
        return True

    def get_sources(self, max_size: Optional[int] = None) -> List[List[Edge]]:
        # non-empty independent sets of diagonals, smallest first
        diagonals = self.edges()
        if max_size is None:
            max_size = len(diagonals)
        by_size: List[List[List[Edge]]] = [[] for _ in range(max_size + 1)]

        def backtrack(start_idx: int, current: List[Edge]) -> None:
            if current:
                by_size[len(current)].append(list(current))
            if len(current) == max_size:
                return
            for i in range(start_idx, len(diagonals)):
                d = diagonals[i]
                if all(not self.share_triangle(d, c) for c in current):
                    current.append(d)
                    backtrack(i + 1, current)
                    current.pop()

        if max_size > 0:
            backtrack(0, [])
        return [s for group in by_size for s in group]

    def copy(self) -> "TriangulatedGraph":
        return TriangulatedGraph._wrap(self._size, self._flip_map.deep_copy())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TriangulatedGraph):
            return NotImplemented
        return self._size == other._size and self._flip_map.edges == other._flip_map.edges

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"TriangulatedGraph({self._size}, {self.edges()})"
