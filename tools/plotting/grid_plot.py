""" Cluster and grid plot utils """

from __future__ import annotations

import matplotlib.pyplot as plt
import numpy as np

from chessgrid.corner_graph import CornerGraph
from chessgrid.grid_info import GridInfo

SLOT_PALETTE = ["#e63946", "#1d3557", "#2a9d8f", "#f4a261"]


def plot_cluster(
    ax,
    graph: CornerGraph,
    show_orientation: bool = True,
    arrow_length: float | None = None,
    show_slots: bool = False,
):
    """ Plot cluster corners, their links and orientations

    Args:
        ax (matplotlib.axes.Axes): Axes to plot on
        graph (CornerGraph): Cluster to draw
        show_orientation (bool): Draw each corner's orientation axis
        arrow_length (float, optional): Orientation arrow length. Defaults to
            a third of the median link length.
        show_slots (bool): Color each link by its slot index at the source corner

    Returns:
        matplotlib.axes.Axes: Axes with plot
    """
    xs = np.array([c.x for c in graph])
    ys = np.array([c.y for c in graph])

    lengths = []
    for node in graph:
        for slot, idx in enumerate(node.edges):
            if idx is None:
                continue
            nb = graph[idx]
            lengths.append(np.hypot(nb.x - node.x, nb.y - node.y))
            if show_slots:
                # half link from each end, so both slot colors are visible
                mx, my = 0.5 * (node.x + nb.x), 0.5 * (node.y + nb.y)
                ax.plot([node.x, mx], [node.y, my], color=SLOT_PALETTE[slot], linewidth=1.2)
            elif idx > node.index:
                ax.plot([node.x, nb.x], [node.y, nb.y], color="0.6", linewidth=0.8)

    if show_orientation and len(graph):
        if arrow_length is None:
            arrow_length = float(np.median(lengths)) / 3.0 if lengths else 1.0
        us = np.array([np.cos(c.orientation) for c in graph]) * arrow_length
        vs = np.array([np.sin(c.orientation) for c in graph]) * arrow_length
        # orientation is an axis, draw both directions
        ax.quiver(
            np.concatenate([xs, xs]),
            np.concatenate([ys, ys]),
            np.concatenate([us, -us]),
            np.concatenate([vs, -vs]),
            angles="xy",
            scale_units="xy",
            scale=1,
            color="#6a4c93",
            width=0.003,
        )

    ax.scatter(xs, ys, s=18, facecolors="none", edgecolors="#1d3557", linewidths=0.8, label="corners")
    ax.set_aspect("equal")
    return ax


def plot_grid(ax, info: GridInfo, show_labels: bool = True):
    """ Overlay grid order: row-major labels, origin and row/column axes """
    if not info.is_valid() or info.rows < 2 or info.cols < 2:
        ax.set_title("No grid")
        return ax

    xs = [n.x for n in info.nodes]
    ys = [n.y for n in info.nodes]
    ax.plot(xs, ys, color="#2a9d8f", linewidth=0.6, alpha=0.7)

    if show_labels:
        for i, n in enumerate(info.nodes):
            ax.annotate(str(i), (n.x, n.y), textcoords="offset points", xytext=(3, 3), fontsize=7)

    origin = info.get(0, 0)
    row_next = info.get(0, 1)
    col_next = info.get(1, 0)
    ax.scatter([origin.x], [origin.y], s=60, c="#e63946", marker="s", label="origin")
    ax.annotate(
        "", xy=(row_next.x, row_next.y), xytext=(origin.x, origin.y),
        arrowprops=dict(arrowstyle="->", color="#e63946", linewidth=1.5),
    )
    ax.annotate(
        "", xy=(col_next.x, col_next.y), xytext=(origin.x, origin.y),
        arrowprops=dict(arrowstyle="->", color="#f4a261", linewidth=1.5),
    )
    ax.set_title(f"Grid {info.rows}x{info.cols}")
    return ax


def plot_result(
    graph: CornerGraph,
    info: GridInfo,
    img: np.ndarray | None = None,
    invert_y: bool = True,
    show_slots: bool = False,
) -> plt.Figure:
    fig, ax = plt.subplots(figsize=(8, 6))
    if img is not None:
        ax.imshow(img, cmap="gray")
    plot_cluster(ax, graph, show_slots=show_slots)
    plot_grid(ax, info)
    if info.failure is not None:
        ax.set_title(f"Failed: {info.failure.value}")
    # image frames have y pointing down
    if img is None and invert_y:
        ax.invert_yaxis()
    ax.legend(loc="lower right", framealpha=0.6)
    fig.tight_layout()
    return fig
