""" Chessboard corner graph (cluster) """

from __future__ import annotations

from dataclasses import dataclass, field
import json
from pathlib import Path
from typing import Any, Iterator

NUM_SLOTS = 4


def _empty_edges() -> list[int | None]:
    return [None] * NUM_SLOTS


@dataclass
class CornerNode:
    """ Corner in a cluster with up to four neighbor slots.

    Neighbors are stored as indices into the owning ``CornerGraph``.
    """
    index: int
    x: float
    y: float
    orientation: float
    edges: list[int | None] = field(default_factory=_empty_edges)

    def count_edges(self) -> int:
        return sum(1 for e in self.edges if e is not None)

    def edge_indices(self) -> list[int]:
        return [e for e in self.edges if e is not None]

    def rotate_edges_down(self) -> None:
        """Shift every slot one position down, slot 0 wraps to slot 3."""
        self.edges = self.edges[1:] + self.edges[:1]

    def norm_sq(self) -> float:
        return self.x * self.x + self.y * self.y


class CornerGraph:
    """ Cluster of corners. Node ``i`` is always stored at ``corners[i]``. """

    def __init__(self) -> None:
        self.corners: list[CornerNode] = []

    def __len__(self) -> int:
        return len(self.corners)

    def __iter__(self) -> Iterator[CornerNode]:
        return iter(self.corners)

    def __getitem__(self, index: int) -> CornerNode:
        return self.corners[index]

    def add_corner(self, x: float, y: float, orientation: float = 0.0) -> CornerNode:
        node = CornerNode(len(self.corners), float(x), float(y), float(orientation))
        self.corners.append(node)
        return node

    def neighbor(self, node: CornerNode, slot: int) -> CornerNode | None:
        idx = node.edges[slot]
        return None if idx is None else self.corners[idx]

    def connect(
        self,
        a: int,
        b: int,
        slot_a: int | None = None,
        slot_b: int | None = None,
    ) -> None:
        """Link two corners, using the first free slot unless one is given."""
        if a == b:
            raise ValueError(f"corner {a} can't be linked to itself")
        na = self.corners[a]
        nb = self.corners[b]
        slot_a = _free_slot(na) if slot_a is None else slot_a
        slot_b = _free_slot(nb) if slot_b is None else slot_b
        na.edges[slot_a] = b
        nb.edges[slot_b] = a

    def node_degrees(self) -> list[int]:
        return [n.count_edges() for n in self.corners]


def _free_slot(node: CornerNode) -> int:
    for i, e in enumerate(node.edges):
        if e is None:
            return i
    raise ValueError(f"corner {node.index} already has {NUM_SLOTS} neighbors")


def graph_from_dict(data: dict[str, Any]) -> CornerGraph:
    corners = data.get("corners", [])
    graph = CornerGraph()
    for c in corners:
        graph.add_corner(c["x"], c["y"], c.get("orientation", 0.0))

    n = len(graph)
    for node, c in zip(graph, corners):
        edges = list(c.get("edges", []))
        if len(edges) > NUM_SLOTS:
            raise ValueError(f"corner {node.index} has {len(edges)} edges, at most {NUM_SLOTS} allowed")
        edges += [None] * (NUM_SLOTS - len(edges))
        for e in edges:
            if e is None:
                continue
            # bool is an int subclass, JSON true/false are not corner indices
            if isinstance(e, bool) or not isinstance(e, int):
                raise ValueError(f"corner {node.index} has non-integer edge {e!r}")
            if not 0 <= e < n:
                raise ValueError(f"corner {node.index} links to unknown corner {e}")
        node.edges = edges

    for node in graph:
        for e in node.edge_indices():
            if e == node.index:
                raise ValueError(f"corner {node.index} links to itself")
            if node.index not in graph[e].edges:
                raise ValueError(
                    f"edge {node.index} -> {e} is not reciprocated by corner {e}"
                )
    return graph


def graph_to_dict(graph: CornerGraph) -> dict[str, Any]:
    return {
        "corners": [
            {
                "x": n.x,
                "y": n.y,
                "orientation": n.orientation,
                "edges": list(n.edges),
            }
            for n in graph
        ]
    }


def load_graph(json_path: Path) -> CornerGraph:
    with json_path.open("r", encoding="utf-8") as fh:
        data = json.load(fh)
    return graph_from_dict(data)


def save_graph(graph: CornerGraph, json_path: Path) -> None:
    with json_path.open("w", encoding="utf-8") as fh:
        json.dump(graph_to_dict(graph), fh, indent=2)
