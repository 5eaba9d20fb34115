"""Make linked corners agree on slot numbering.

After CCW sorting each corner's slots are in the right order but with an
arbitrary starting slot. Alignment rotates slot arrays so that for every link
``A.edges[i] == B`` the back link sits at ``B.edges[(i + 2) % 4]``.
"""

from __future__ import annotations

from collections import deque
from typing import Callable

from .corner_graph import NUM_SLOTS, CornerGraph

Verbose = Callable[[str], None]


def opposite_slot(slot: int) -> int:
    return (slot + 2) % NUM_SLOTS


def align_edges(graph: CornerGraph, verbose: Verbose | None = None) -> bool:
    """Breadth-first alignment starting from the first corner.

    Returns:
        False when some pair of corners can't be made to agree.
    """
    if len(graph) == 0:
        return False

    marked = [False] * len(graph)
    start = graph[0]
    marked[start.index] = True
    open_nodes = deque([start])

    while open_nodes:
        na = open_nodes.popleft()
        for i in range(NUM_SLOTS):
            idx = na.edges[i]
            if idx is None:
                continue
            j = opposite_slot(i)
            nb = graph[idx]

            if marked[nb.index]:
                if nb.edges[j] != na.index:
                    if verbose:
                        verbose(
                            f"corner {nb.index} was already aligned but slot {j} "
                            f"doesn't point back at corner {na.index}"
                        )
                    return False
                continue

            aligned = False
            for _attempt in range(NUM_SLOTS):
                if nb.edges[j] == na.index:
                    aligned = True
                    break
                nb.rotate_edges_down()
            if not aligned:
                if verbose:
                    verbose(f"can't align edges of corner {nb.index} with corner {na.index}")
                return False
            marked[nb.index] = True
            open_nodes.append(nb)
    return True
