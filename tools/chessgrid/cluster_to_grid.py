"""Convert a chessboard corner cluster into a canonical grid.

The grid is in "standard order": rows and columns follow a right-handed
frame, edges of each corner are in CCW order with linked corners meeting at
slots ``i`` and ``(i + 2) % 4``, and the corner at (0, 0) has its orientation
along the bisector of its two edges. When several corners qualify the one
closest to the frame origin is used.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
import json
from pathlib import Path
from typing import Any, Callable

from .corner_graph import CornerGraph
from .edge_align import align_edges
from .edge_order import sort_edges_ccw
from .errors import GridFailure
from .grid_builder import order_nodes
from .grid_info import GridInfo, rotate_ccw
from .origin import DEFAULT_ORIGIN_TOLERANCE, select_corner

Verbose = Callable[[str], None]


@dataclass
class ClusterToGridConfig:
    # max acute angle (radians) between a corner's orientation and its edge bisector
    origin_tolerance: float = DEFAULT_ORIGIN_TOLERANCE

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "ClusterToGridConfig":
        if not isinstance(data, dict):
            raise ValueError(f"Config must be a JSON object, got {type(data).__name__}")
        known = {f.name for f in fields(ClusterToGridConfig)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
        cfg = ClusterToGridConfig(**data)
        tol = cfg.origin_tolerance
        if isinstance(tol, bool) or not isinstance(tol, (int, float)):
            raise ValueError(f"origin_tolerance must be a number, got {tol!r}")
        cfg.origin_tolerance = float(tol)
        if not 0.0 < cfg.origin_tolerance <= DEFAULT_ORIGIN_TOLERANCE * 2.0:
            raise ValueError(f"origin_tolerance must be in (0, pi/2], got {cfg.origin_tolerance}")
        return cfg


def load_config(path: Path) -> ClusterToGridConfig:
    with path.open("r", encoding="utf-8") as f:
        return ClusterToGridConfig.from_dict(json.load(f))


class ClusterToGrid:
    """ Puts a corner cluster into grid order.

    The cluster's edge order is modified in place. Nothing is kept between
    calls, so one instance can serve any number of clusters.
    """

    def __init__(
        self,
        config: ClusterToGridConfig | None = None,
        verbose: Verbose | None = None,
    ) -> None:
        self.config = config or ClusterToGridConfig()
        self.verbose = verbose
        self.failure: GridFailure | None = None

    def set_verbose(self, verbose: Verbose | None) -> None:
        self.verbose = verbose

    def convert(self, cluster: CornerGraph, info: GridInfo) -> bool:
        """Order the cluster's corners into a grid.

        Args:
            cluster: Input cluster. Edge order will be modified.
            info: Output, filled with the ordered corners and grid shape.
        Returns:
            True on success. On failure ``info`` holds the invalid sentinel
            and ``self.failure`` says why.
        """
        # default to an invalid grid so a failure can't go unnoticed
        info.reset()
        self.failure = None

        if len(cluster) == 0:
            return self._fail(info, GridFailure.EMPTY_CLUSTER)

        if not self.order_edges(cluster):
            return self._fail(info, GridFailure.ALIGNMENT)

        if not self.order_nodes(cluster, info):
            return self._fail(info, info.failure or GridFailure.INCOMPLETE)

        corner = self.select_corner(cluster, info)
        if corner < 0:
            return self._fail(info, GridFailure.AMBIGUOUS_ORIGIN)
        for _ in range(corner):
            self.rotate_ccw(info)

        if self.verbose:
            self.verbose(f"grid {info.rows}x{info.cols}, origin corner {corner}")
        return True

    def order_edges(self, cluster: CornerGraph) -> bool:
        """Put edges in CCW order and pair up the slots of linked corners."""
        sort_edges_ccw(cluster)
        return align_edges(cluster, self.verbose)

    def order_nodes(self, cluster: CornerGraph, info: GridInfo) -> bool:
        return order_nodes(cluster, info, self.verbose)

    def select_corner(self, cluster: CornerGraph, info: GridInfo) -> int:
        return select_corner(cluster, info, self.config.origin_tolerance)

    def rotate_ccw(self, info: GridInfo) -> None:
        rotate_ccw(info)

    def _fail(self, info: GridInfo, reason: GridFailure) -> bool:
        info.fail(reason)
        self.failure = reason
        if self.verbose:
            self.verbose(f"failed: {reason.value}")
        return False
