from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Tuple

from triangulated_graph import Edge, EdgePair, TriangulatedGraph, normalize_edge

EdgePairs = List[EdgePair]


@dataclass
class FDProblem:
    start: TriangulatedGraph
    end: TriangulatedGraph
    sources: EdgePairs = field(default_factory=list)


def neighbor_pairs(g: TriangulatedGraph, e: Edge) -> EdgePairs:
    n = g.get_neighbors(e)
    return [(n[0], n[1]), (n[2], n[3])]


def filter_and_map_edge_pairs(
    pairs: Iterable[EdgePair],
    vertex_filter: Callable[[int], bool],
    mapper: Callable[[int], int],
) -> EdgePairs:
    result: EdgePairs = []
    for first, second in pairs:
        if all(vertex_filter(v) for v in (*first, *second)):
            result.append(
                (normalize_edge(mapper(first[0]), mapper(first[1])),
                 normalize_edge(mapper(second[0]), mapper(second[1])))
            )
    return result


def _side(
    start: TriangulatedGraph,
    end: TriangulatedGraph,
    v1: int,
    v2: int,
    pairs: EdgePairs,
) -> FDProblem:
    return FDProblem(
        start.sub_graph(v1, v2),
        end.sub_graph(v1, v2),
        filter_and_map_edge_pairs(pairs, start.vertex_filter(v1, v2), start.vertex_mapper(v1, v2)),
    )


def split_problem(
    start: TriangulatedGraph,
    end: TriangulatedGraph,
    divider: Edge,
    pairs: EdgePairs = (),
) -> Tuple[FDProblem, FDProblem]:
    # left walks v1 -> v2, right walks v2 -> v1, both renumbered from 0
    v1, v2 = divider
    pairs = list(pairs)
    return _side(start, end, v1, v2, pairs), _side(start, end, v2, v1, pairs)
