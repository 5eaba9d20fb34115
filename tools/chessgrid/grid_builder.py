"""Walk an aligned corner graph into a row-major grid."""

from __future__ import annotations

import math
from typing import Callable

from .angles import distance_cw
from .corner_graph import NUM_SLOTS, CornerGraph, CornerNode
from .errors import GridFailure
from .grid_info import GridInfo

Verbose = Callable[[str], None]


def find_seed(graph: CornerGraph) -> CornerNode | None:
    """First corner with exactly two neighbors."""
    for node in graph:
        if node.count_edges() == 2:
            return node
    return None


def is_right_handed(graph: CornerGraph, seed: CornerNode, idx_row: int, idx_col: int) -> bool:
    """True when the row and column directions at ``seed`` form a right-handed frame."""
    r = graph.neighbor(seed, idx_row)
    c = graph.neighbor(seed, idx_col)

    dir_row = math.atan2(r.y - seed.y, r.x - seed.x)
    dir_col = math.atan2(c.y - seed.y, c.x - seed.x)

    return distance_cw(dir_row, dir_col) < math.pi


def _grid_axes(graph: CornerGraph, seed: CornerNode) -> tuple[int, int]:
    row_edge, col_edge = [i for i in range(NUM_SLOTS) if seed.edges[i] is not None]
    if not is_right_handed(graph, seed, row_edge, col_edge):
        row_edge, col_edge = col_edge, row_edge
    return row_edge, col_edge


def order_nodes(graph: CornerGraph, info: GridInfo, verbose: Verbose | None = None) -> bool:
    """Put the corners into a rectangular row-major grid.

    Traversal starts at a corner with two neighbors. Rows follow one of its
    edges and successive rows follow the other, picked so the result is
    right-handed. On failure ``info`` is reset and ``info.failure`` is set.

    Args:
        graph: Cluster whose edges are already sorted and aligned.
        info: Output grid.
        verbose: Optional sink for diagnostic messages.
    Returns:
        True if every corner landed in a complete rectangle.
    """
    info.reset()

    def fail(reason: GridFailure, msg: str | None = None) -> bool:
        if verbose:
            verbose(msg or reason.value)
        info.fail(reason)
        return False

    seed = find_seed(graph)
    if seed is None:
        return fail(GridFailure.NO_SEED, "can't find a corner with just two edges")

    row_edge, col_edge = _grid_axes(graph, seed)
    visited = [False] * len(graph)

    row_start: CornerNode | None = seed
    while row_start is not None:
        before = len(info.nodes)
        node: CornerNode | None = row_start
        while node is not None:
            if visited[node.index]:
                return fail(GridFailure.REVISITED_NODE, f"corner {node.index} was reached twice")
            visited[node.index] = True
            info.nodes.append(node)
            node = graph.neighbor(node, row_edge)

        columns_in_row = len(info.nodes) - before
        if info.cols == -1:
            info.cols = columns_in_row
        elif columns_in_row != info.cols:
            return fail(
                GridFailure.IRREGULAR_ROWS,
                f"row {before // info.cols} has {columns_in_row} columns, expected {info.cols}",
            )
        row_start = graph.neighbor(row_start, col_edge)

    info.rows = len(info.nodes) // info.cols
    if info.rows * info.cols != len(graph):
        return fail(
            GridFailure.INCOMPLETE,
            f"grid has {info.rows * info.cols} corners but the cluster has {len(graph)}",
        )
    return True
