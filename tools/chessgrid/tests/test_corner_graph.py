"""Corner graph model and JSON I/O."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from chessgrid.corner_graph import CornerGraph, graph_from_dict, load_graph, save_graph


def _square() -> CornerGraph:
    graph = CornerGraph()
    for x, y in [(0, 0), (1, 0), (0, 1), (1, 1)]:
        graph.add_corner(x, y, 0.3)
    graph.connect(0, 1)
    graph.connect(0, 2)
    graph.connect(1, 3)
    graph.connect(2, 3)
    return graph


def test_connect_fills_free_slots() -> None:
    graph = _square()
    assert graph[0].edges == [1, 2, None, None]
    assert graph[3].edges == [1, 2, None, None]
    assert graph.node_degrees() == [2, 2, 2, 2]
    assert graph.neighbor(graph[0], 1) is graph[2]
    assert graph.neighbor(graph[0], 2) is None


def test_connect_rejects_self_links_and_full_nodes() -> None:
    graph = CornerGraph()
    for i in range(6):
        graph.add_corner(i, 0)
    with pytest.raises(ValueError):
        graph.connect(0, 0)
    for i in range(1, 5):
        graph.connect(0, i)
    with pytest.raises(ValueError):
        graph.connect(0, 5)


def test_rotate_edges_down() -> None:
    graph = _square()
    node = graph[0]
    node.edges = [1, None, 2, None]
    node.rotate_edges_down()
    assert node.edges == [None, 2, None, 1]
    for _ in range(3):
        node.rotate_edges_down()
    assert node.edges == [1, None, 2, None]


def test_json_round_trip(tmp_path: Path) -> None:
    graph = _square()
    path = tmp_path / "cluster.json"
    save_graph(graph, path)
    loaded = load_graph(path)

    assert len(loaded) == 4
    for a, b in zip(graph, loaded):
        assert (a.index, a.x, a.y, a.orientation, a.edges) == (b.index, b.x, b.y, b.orientation, b.edges)


def test_load_ignores_extra_fields_and_pads_edges(tmp_path: Path) -> None:
    path = tmp_path / "cluster.json"
    data = {
        "corners": [
            {"x": 0.0, "y": 0.0, "orientation": 0.1, "response": 12.5, "phase": 1, "edges": [1]},
            {"x": 1.0, "y": 0.0, "edges": [None, 0]},
        ]
    }
    path.write_text(json.dumps(data), encoding="utf-8")
    graph = load_graph(path)

    assert graph[0].edges == [1, None, None, None]
    assert graph[1].edges == [None, 0, None, None]
    assert graph[1].orientation == 0.0


def test_unreciprocated_edges_are_rejected() -> None:
    data = {"corners": [{"x": 0, "y": 0, "edges": [1]}, {"x": 1, "y": 0, "edges": []}]}
    with pytest.raises(ValueError, match="not reciprocated"):
        graph_from_dict(data)


def test_out_of_range_edges_are_rejected() -> None:
    data = {"corners": [{"x": 0, "y": 0, "edges": [7]}]}
    with pytest.raises(ValueError, match="unknown corner"):
        graph_from_dict(data)


def test_non_integer_edges_are_rejected() -> None:
    for bad in (1.7, 1.0, True, "1"):
        data = {"corners": [{"x": 0, "y": 0, "edges": [bad]}, {"x": 1, "y": 0, "edges": [0]}]}
        with pytest.raises(ValueError, match="non-integer edge"):
            graph_from_dict(data)
