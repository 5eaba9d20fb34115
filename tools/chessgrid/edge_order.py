"""Sort each corner's neighbor slots into counter-clockwise order."""

from __future__ import annotations

import math

import numpy as np

from .angles import distance_ccw
from .corner_graph import NUM_SLOTS, CornerGraph, CornerNode


def edge_directions(graph: CornerGraph, node: CornerNode) -> np.ndarray:
    """Bearing to every neighbor slot, ``inf`` for empty slots."""
    directions = np.full(NUM_SLOTS, np.inf, dtype=np.float64)
    for i, idx in enumerate(node.edges):
        if idx is None:
            continue
        nb = graph[idx]
        directions[i] = math.atan2(nb.y - node.y, nb.x - node.x)
    return directions


def sort_node_edges(graph: CornerGraph, node: CornerNode) -> None:
    directions = edge_directions(graph, node)
    order = np.argsort(directions, kind="stable")
    node.edges = [node.edges[i] for i in order]
    bearings = [float(directions[i]) for i in order]
    count = node.count_edges()

    # Sorting leaves the empty slots at the end, which is only right when the
    # largest angular gap is the one that wraps past +-pi.
    if count == 3:
        tail = distance_ccw(bearings[2], bearings[0])
        gaps = [distance_ccw(bearings[i - 1], bearings[i]) for i in range(1, 3)]
        i = 1 if gaps[0] >= gaps[1] else 2
        if tail < gaps[i - 1]:
            node.edges[i + 1:] = node.edges[i:NUM_SLOTS - 1]
            node.edges[i] = None
    elif count == 2:
        tail = distance_ccw(bearings[1], bearings[0])
        if tail < distance_ccw(bearings[0], bearings[1]):
            node.edges[0], node.edges[1] = node.edges[1], node.edges[0]


def sort_edges_ccw(graph: CornerGraph) -> None:
    """Order the slots of every corner by increasing CCW bearing.

    Corners with three neighbors get their empty slot inside the widest gap
    between consecutive neighbors. Corners with two neighbors are put in
    CCW-adjacent order.
    """
    for node in graph:
        sort_node_edges(graph, node)
