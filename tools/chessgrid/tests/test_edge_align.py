"""Slot alignment between linked corners."""

from __future__ import annotations

from conftest import assert_opposite_slots

from chessgrid.corner_graph import CornerGraph
from chessgrid.edge_align import align_edges
from chessgrid.edge_order import sort_edges_ccw


def test_lattice_aligns(lattice) -> None:
    graph = lattice(4, 5)
    sort_edges_ccw(graph)
    assert align_edges(graph)
    assert_opposite_slots(graph)


def test_alignment_keeps_connectivity(lattice) -> None:
    graph = lattice(3, 4)
    before = [sorted(n.edge_indices()) for n in graph]
    sort_edges_ccw(graph)
    assert align_edges(graph)
    assert [sorted(n.edge_indices()) for n in graph] == before


def test_start_corner_is_not_rotated(lattice) -> None:
    graph = lattice(3, 3)
    sort_edges_ccw(graph)
    start = list(graph[0].edges)
    assert align_edges(graph)
    assert graph[0].edges == start


def test_triangle_can_not_be_aligned() -> None:
    graph = CornerGraph()
    for x, y in [(0, 0), (1, 0), (0, 1)]:
        graph.add_corner(x, y)
    graph.connect(0, 1)
    graph.connect(0, 2)
    graph.connect(1, 2)
    sort_edges_ccw(graph)

    messages: list[str] = []
    assert not align_edges(graph, messages.append)
    assert messages and "doesn't point back" in messages[0]


def test_unreciprocated_link_can_not_be_aligned() -> None:
    graph = CornerGraph()
    graph.add_corner(0, 0)
    graph.add_corner(1, 0)
    graph[0].edges = [1, None, None, None]

    messages: list[str] = []
    assert not align_edges(graph, messages.append)
    assert "can't align" in messages[0]


def test_empty_graph_fails() -> None:
    assert not align_edges(CornerGraph())
