"""Failure categories for cluster-to-grid conversion."""

from __future__ import annotations

from enum import Enum


class GridFailure(Enum):
    EMPTY_CLUSTER = "cluster has no corners"
    ALIGNMENT = "edges of linked corners can't be aligned"
    NO_SEED = "no corner with exactly two neighbors, not a complete rectangular cluster"
    IRREGULAR_ROWS = "number of columns in each row is variable"
    REVISITED_NODE = "a corner was reached twice while walking the grid"
    INCOMPLETE = "grid doesn't cover every corner in the cluster"
    AMBIGUOUS_ORIGIN = "no corner is consistent with being the origin"


class GridInvariantError(RuntimeError):
    """Internal contract was broken. Indicates a bug, not bad input."""
