"""Pick which grid corner becomes the origin."""

from __future__ import annotations

import math

from .angles import bound_half, dist_half, distance_ccw
from .corner_graph import CornerGraph, CornerNode
from .errors import GridInvariantError
from .grid_info import GridInfo

DEFAULT_ORIGIN_TOLERANCE = math.pi / 4.0


def corner_bisector(graph: CornerGraph, candidate: CornerNode) -> float:
    """Axis splitting the directions to the two neighbors of a grid corner."""
    edges = candidate.edge_indices()
    if len(edges) != 2:
        raise GridInvariantError(
            f"corner {candidate.index} should have two edges, found {len(edges)}"
        )
    a = graph[edges[0]]
    b = graph[edges[1]]

    dir_a = math.atan2(a.y - candidate.y, a.x - candidate.x)
    dir_b = math.atan2(b.y - candidate.y, b.x - candidate.x)

    # bisectors of the short and long arcs differ by pi, the same axis
    return bound_half(dir_a + distance_ccw(dir_a, dir_b) / 2.0)


def is_corner_valid_origin(
    graph: CornerGraph,
    candidate: CornerNode,
    tolerance: float = DEFAULT_ORIGIN_TOLERANCE,
) -> bool:
    """A grid corner can be the origin when its orientation runs along the
    bisector of its two edges, i.e. the black square sits inside the grid.
    """
    bisector = corner_bisector(graph, candidate)
    return dist_half(bisector, candidate.orientation) < tolerance


def select_corner(
    graph: CornerGraph,
    info: GridInfo,
    tolerance: float = DEFAULT_ORIGIN_TOLERANCE,
) -> int:
    """Index of the grid corner to use as origin.

    0 = top-left, 1 = top-right, 2 = bottom-right, 3 = bottom-left. Among the
    valid corners the one closest to the frame origin wins, ties go to the
    lower index. Returns -1 if no corner is valid.
    """
    best_corner = -1
    best_score = math.inf
    for i, node in enumerate(info.lookup_grid_corners()):
        if not is_corner_valid_origin(graph, node, tolerance):
            continue
        distance = node.norm_sq()
        if distance < best_score:
            best_score = distance
            best_corner = i
    return best_corner
