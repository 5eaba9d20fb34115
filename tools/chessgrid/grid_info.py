"""Row-major grid of corners and its rotation."""

from __future__ import annotations

from dataclasses import dataclass, field

from .corner_graph import CornerNode
from .errors import GridFailure


@dataclass
class GridInfo:
    """ Corners in row-major order. ``rows == cols == -1`` marks an invalid grid. """
    nodes: list[CornerNode] = field(default_factory=list)
    rows: int = -1
    cols: int = -1
    failure: GridFailure | None = None

    def reset(self) -> None:
        self.nodes.clear()
        self.rows = self.cols = -1
        self.failure = None

    def fail(self, reason: GridFailure) -> None:
        self.reset()
        self.failure = reason

    def get(self, row: int, col: int) -> CornerNode:
        return self.nodes[row * self.cols + col]

    def is_valid(self) -> bool:
        return self.rows > 0 and self.cols > 0 and self.rows * self.cols == len(self.nodes)

    def lookup_grid_corners(self) -> list[CornerNode]:
        """Top-left, top-right, bottom-right and bottom-left corners, in that order."""
        return [
            self.get(0, 0),
            self.get(0, self.cols - 1),
            self.get(self.rows - 1, self.cols - 1),
            self.get(self.rows - 1, 0),
        ]

    def indices(self) -> list[int]:
        return [n.index for n in self.nodes]


def rotate_ccw(grid: GridInfo) -> None:
    """Rotate the grid a quarter turn so the top-right corner becomes (0, 0)."""
    rotated: list[CornerNode] = []
    new_rows, new_cols = grid.cols, grid.rows
    for row in range(new_rows):
        for col in range(new_cols):
            rotated.append(grid.get(col, grid.cols - 1 - row))
    grid.nodes = rotated
    grid.rows, grid.cols = new_rows, new_cols
