from __future__ import annotations

import math
from typing import Callable

import pytest

from chessgrid.corner_graph import CornerGraph
from chessgrid.grid_info import GridInfo

LatticeFn = Callable[..., CornerGraph]


def build_lattice(
    rows: int,
    cols: int,
    orientations: dict[int, float] | None = None,
    default_orientation: float = 0.0,
) -> CornerGraph:
    """Unit-spaced ``rows x cols`` cluster; corner ``r * cols + c`` sits at (c, r)."""
    orientations = orientations or {}
    graph = CornerGraph()
    for r in range(rows):
        for c in range(cols):
            idx = r * cols + c
            graph.add_corner(c, r, orientations.get(idx, default_orientation))
    for r in range(rows):
        for c in range(cols):
            idx = r * cols + c
            if c + 1 < cols:
                graph.connect(idx, idx + 1)
            if r + 1 < rows:
                graph.connect(idx, idx + cols)
    return graph


def canonical_copy(info: GridInfo) -> CornerGraph:
    """Fresh cluster whose corner ``i`` is ``info.nodes[i]``."""
    new_index = {n.index: i for i, n in enumerate(info.nodes)}
    graph = CornerGraph()
    for n in info.nodes:
        graph.add_corner(n.x, n.y, n.orientation)
    for i, n in enumerate(info.nodes):
        graph[i].edges = [None if e is None else new_index[e] for e in n.edges]
    return graph


def assert_opposite_slots(graph: CornerGraph) -> None:
    for a in graph:
        for i, b in enumerate(a.edges):
            if b is None:
                continue
            assert graph[b].edges[(i + 2) % 4] == a.index, f"corner {b} slot {(i + 2) % 4} doesn't point at {a.index}"


@pytest.fixture
def lattice() -> LatticeFn:
    return build_lattice


@pytest.fixture
def checkerboard_3x3() -> CornerGraph:
    # only the corner at (2, 2) has its orientation along its edge bisector
    quarter = math.pi / 4.0
    return build_lattice(3, 3, {0: -quarter, 2: quarter, 6: quarter, 8: quarter})
