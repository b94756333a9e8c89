from __future__ import annotations
from typing import Iterable, List, Optional, Sequence, Tuple
import logging
import math

from cgshop2026_pyutils.geometry import Point, FlippableTriangulation
from cgshop2026_pyutils.io import read_instance

from triangulated_graph import Edge, TriangulatedGraph, convex_position_points, normalize_edge

logger = logging.getLogger(__name__)


def _orientation(ax: float, ay: float, bx: float, by: float, cx: float, cy: float) -> int:
    val = (bx - ax) * (cy - ay) - (by - ay) * (cx - ax)
    if val > 0:
        return 1
    if val < 0:
        return -1
    return 0


def hull_order(points_xy: Sequence[Sequence[float]]) -> List[int]:
    """
    Point indices in counter-clockwise order around the polygon. Raises
    ValueError unless every point is a strictly convex hull vertex.
    """
    n = len(points_xy)
    if n < 3:
        raise ValueError(f"A polygon needs at least 3 points, got {n}")
    cx = sum(float(p[0]) for p in points_xy) / n
    cy = sum(float(p[1]) for p in points_xy) / n
    order = sorted(
        range(n),
        key=lambda i: math.atan2(float(points_xy[i][1]) - cy, float(points_xy[i][0]) - cx),
    )
    for i in range(n):
        a, b, c = (points_xy[order[(i + j) % n]] for j in range(3))
        if _orientation(a[0], a[1], b[0], b[1], c[0], c[1]) <= 0:
            raise ValueError("Points are not in convex position")
    return order


def graph_from_points_edges(
    points_xy: Sequence[Sequence[float]],
    edges: Iterable[Edge],
) -> Tuple[TriangulatedGraph, List[int]]:
    """
    Builds the combinatorial triangulation of a convex point set. Vertex i of
    the result is point `order[i]` of the input; `order` is returned as well.
    """
    order = hull_order(points_xy)
    label = {p: i for i, p in enumerate(order)}
    n = len(order)
    diagonals = []
    for u, v in edges:
        if int(u) not in label or int(v) not in label:
            raise ValueError(f"Edge ({u}, {v}) refers to a missing point")
        e = normalize_edge(label[int(u)], label[int(v)])
        if e[1] - e[0] != 1 and e != (0, n - 1):
            diagonals.append((int(u), int(v)))

    points = [Point(x, y) for (x, y) in points_xy]
    # raises ValueError if the edges do not triangulate the point set
    FlippableTriangulation.from_points_edges(points, diagonals)

    graph = TriangulatedGraph(n, [(label[u], label[v]) for (u, v) in diagonals])
    return graph, order


def load_convex_instance(path: str) -> Tuple[List[TriangulatedGraph], List[int]]:
    inst = read_instance(path)
    points_xy = list(zip(inst.points_x, inst.points_y))
    graphs: List[TriangulatedGraph] = []
    order: List[int] = []
    for tri_edges in inst.triangulations:
        graph, order = graph_from_points_edges(points_xy, tri_edges)
        graphs.append(graph)
    logger.debug(
        "loaded %s: %d points, %d triangulations",
        inst.instance_uid, len(points_xy), len(graphs),
    )
    return graphs, order


def to_flippable_triangulation(
    graph: TriangulatedGraph,
    points: Optional[List[Point]] = None,
) -> FlippableTriangulation:
    # points must be in hull order
    if points is None:
        points = convex_position_points(graph.size)
    return FlippableTriangulation.from_points_edges(points, graph.edges())
