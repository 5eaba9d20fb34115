"""Synthetic chessboard corner clusters for tests and demos."""

from __future__ import annotations

import math
from typing import Iterable, Tuple

import numpy as np

from chessgrid.angles import bound_half
from chessgrid.corner_graph import NUM_SLOTS, CornerGraph

# Warp parameter ranges, overridable per key through the ``cfg`` dict.
WARP_RANGES = {
    "rotation": (-math.pi, math.pi),
    "shear_range": (-0.2, 0.2),
    "scale_x": (0.8, 1.2),
    "scale_y": (0.8, 1.2),
    "p_range": (-0.02, 0.02),
}


def _sample_param(rng: np.random.Generator, cfg: dict, key: str) -> float:
    value = cfg.get(key, WARP_RANGES[key])
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ValueError(f"{key} must be a 2-element list")
    return float(rng.uniform(float(value[0]), float(value[1])))


def board_warp(
    theta: float, shear: float, sx: float, sy: float, p1: float, p2: float
) -> np.ndarray:
    """Homography that scales, shears and rotates board units, then tilts them.

    The board origin stays fixed; ``p1`` / ``p2`` fill the perspective row.
    """
    c, s = math.cos(theta), math.sin(theta)
    H = np.eye(3)
    H[:2, :2] = np.array([[c, -s], [s, c]]) @ np.array([[1.0, shear], [0.0, 1.0]]) @ np.diag([sx, sy])
    H[2, :2] = (p1, p2)
    return H


def apply_homography(H: np.ndarray, xy: np.ndarray) -> np.ndarray:
    xy = np.asarray(xy, dtype=np.float64)
    x = xy[..., 0]
    y = xy[..., 1]
    w = H[2, 0] * x + H[2, 1] * y + H[2, 2]
    u = (H[0, 0] * x + H[0, 1] * y + H[0, 2]) / w
    v = (H[1, 0] * x + H[1, 1] * y + H[1, 2]) / w
    return np.stack((u, v), axis=-1)


def _local_jacobian(H: np.ndarray, x: float, y: float, eps: float = 1e-3) -> np.ndarray:
    base = apply_homography(H, np.array([x, y]))
    dx = apply_homography(H, np.array([x + eps, y]))
    dy = apply_homography(H, np.array([x, y + eps]))
    return np.stack(((dx - base) / eps, (dy - base) / eps), axis=1)


def _check_homography(
    H: np.ndarray,
    points: Iterable[Tuple[float, float]],
    min_scale: float,
    max_skew: float,
) -> bool:
    for x, y in points:
        J = _local_jacobian(H, x, y)
        # a mirrored warp would flip the board's handedness
        if np.linalg.det(J) <= 0.0:
            return False
        s = np.linalg.svd(J, compute_uv=False)
        if s[-1] < min_scale or s[0] / s[-1] > max_skew:
            return False
    return True


def sample_homography(
    rng: np.random.Generator,
    cfg: dict,
    extent: Tuple[float, float] = (1.0, 1.0),
) -> np.ndarray:
    """Draw a mild warp for a board spanning ``[0, extent]`` in board units.

    Falls back to identity if no valid warp is found in ``max_attempts``.
    """
    attempts = int(cfg.get("max_attempts", 50))
    min_scale = float(cfg.get("min_local_scale", 0.3))
    max_skew = float(cfg.get("max_skew", 1.6))
    w, h = float(extent[0]), float(extent[1])
    check_points = ((0.0, 0.0), (w, 0.0), (0.0, h), (w, h), (0.5 * w, 0.5 * h))

    for _ in range(max(1, attempts)):
        theta = _sample_param(rng, cfg, "rotation")
        shear = _sample_param(rng, cfg, "shear_range")
        sx = _sample_param(rng, cfg, "scale_x")
        sy = _sample_param(rng, cfg, "scale_y")
        p1 = _sample_param(rng, cfg, "p_range")
        p2 = _sample_param(rng, cfg, "p_range")
        H = board_warp(theta, shear, sx, sy, p1, p2)
        if _check_homography(H, check_points, min_scale, max_skew):
            return H
    return np.eye(3)


def corner_orientation(H: np.ndarray, x: float, y: float, phase: int) -> float:
    """Warped axis of the black-square diagonal through board point (x, y)."""
    d = 0.25 if phase % 2 == 0 else -0.25
    p0, p1 = apply_homography(H, np.array([[x - 0.25, y - d], [x + 0.25, y + d]]))
    return bound_half(math.atan2(p1[1] - p0[1], p1[0] - p0[0]))


def make_grid_graph(
    rows: int,
    cols: int,
    spacing: float = 1.0,
    H: np.ndarray | None = None,
    origin_phase: int = 0,
) -> CornerGraph:
    """Complete ``rows x cols`` lattice cluster in row-major index order.

    Board point (col, row) is warped by ``H``, which is defined on board
    units, and the result is scaled by ``spacing``. Orientations alternate
    with checkerboard parity, the corner at board (0, 0) takes
    ``origin_phase``.
    """
    H = np.eye(3) if H is None else np.asarray(H, dtype=np.float64)
    HS = np.diag([spacing, spacing, 1.0]) @ H

    board = np.array([[c, r] for r in range(rows) for c in range(cols)], dtype=np.float64)
    pts = apply_homography(HS, board)

    graph = CornerGraph()
    for (bx, by), (x, y) in zip(board, pts):
        phase = origin_phase + int(bx) + int(by)
        graph.add_corner(float(x), float(y), corner_orientation(HS, bx, by, phase))

    for r in range(rows):
        for c in range(cols):
            idx = r * cols + c
            if c + 1 < cols:
                graph.connect(idx, idx + 1)
            if r + 1 < rows:
                graph.connect(idx, idx + cols)
    return graph


def shuffle_graph(graph: CornerGraph, rng: np.random.Generator) -> CornerGraph:
    """Copy of ``graph`` with corner indices permuted and slots scrambled."""
    n = len(graph)
    perm = rng.permutation(n)
    new_index = {int(old): new for new, old in enumerate(perm)}

    shuffled = CornerGraph()
    for old in perm:
        node = graph[int(old)]
        shuffled.add_corner(node.x, node.y, node.orientation)
    for new, old in enumerate(perm):
        edges = [None if e is None else new_index[e] for e in graph[int(old)].edges]
        slot_order = rng.permutation(NUM_SLOTS)
        shuffled[new].edges = [edges[int(i)] for i in slot_order]
    return shuffled
