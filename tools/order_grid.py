#!/usr/bin/env python3
"""
Put a chessboard corner cluster into canonical grid order.

The cluster is read from JSON (``{"corners": [{"x", "y", "orientation",
"edges": [...]}]}``) or generated with ``--synthetic``. Prints the grid shape
and the row-major corner order, and optionally saves the order as JSON and a
plot of the result.

Example:
    python tools/order_grid.py testdata/cluster.json --out grid.png --verbose
    python tools/order_grid.py --synthetic 7 11 --seed 3 --no-show
    python tools/order_grid.py --synthetic 5 6 --show-slots --out slots.png --no-show
"""

from __future__ import annotations

import argparse
import json
import math
import sys
from pathlib import Path

import cv2
import matplotlib.pyplot as plt
import numpy as np

from chessgrid.cluster_to_grid import ClusterToGrid, ClusterToGridConfig, load_config
from chessgrid.corner_graph import CornerGraph, load_graph
from chessgrid.grid_info import GridInfo
from plotting.grid_plot import plot_result
from synth.grid_cluster import make_grid_graph, sample_homography, shuffle_graph


def _synthetic_cluster(rows: int, cols: int, seed: int) -> CornerGraph:
    rng = np.random.default_rng(seed)
    H = sample_homography(rng, {}, extent=(cols - 1, rows - 1))
    graph = make_grid_graph(rows, cols, spacing=1.0, H=H)
    return shuffle_graph(graph, rng)


def _load_cluster(args: argparse.Namespace) -> CornerGraph:
    if args.synthetic:
        rows, cols = args.synthetic
        return _synthetic_cluster(rows, cols, args.seed)
    if args.cluster is None:
        raise SystemExit("Either a cluster JSON or --synthetic ROWS COLS is required")
    if not args.cluster.exists():
        raise SystemExit(f"Cluster not found: {args.cluster}")
    try:
        return load_graph(args.cluster)
    except (ValueError, KeyError) as exc:
        raise SystemExit(f"Invalid cluster {args.cluster}: {exc}") from exc


def _load_cfg(args: argparse.Namespace) -> ClusterToGridConfig:
    cfg = ClusterToGridConfig()
    if args.config:
        if not args.config.exists():
            raise SystemExit(f"Config not found: {args.config}")
        try:
            cfg = load_config(args.config)
        except ValueError as exc:
            raise SystemExit(f"Invalid config {args.config}: {exc}") from exc
    if args.tolerance is not None:
        try:
            cfg = ClusterToGridConfig.from_dict({**cfg.to_dict(), "origin_tolerance": math.radians(args.tolerance)})
        except ValueError as exc:
            raise SystemExit(f"Invalid --tolerance {args.tolerance}: {exc}") from exc
    return cfg


def write_grid_json(path: Path, info: GridInfo) -> None:
    payload = {"rows": info.rows, "cols": info.cols, "order": info.indices()}
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Order a chessboard corner cluster into a grid.")
    parser.add_argument("cluster", type=Path, nargs="?", help="Cluster JSON path.")
    parser.add_argument(
        "--synthetic",
        type=int,
        nargs=2,
        metavar=("ROWS", "COLS"),
        help="Generate a warped, shuffled ROWS x COLS cluster instead of loading one.",
    )
    parser.add_argument("--seed", type=int, default=0, help="Random seed for --synthetic.")
    parser.add_argument("--config", type=Path, help="Optional config JSON.")
    parser.add_argument(
        "--tolerance",
        type=float,
        help="Origin orientation tolerance in degrees (overrides --config).",
    )
    parser.add_argument("--image", type=Path, help="Optional background image for the plot.")
    parser.add_argument("--out", type=Path, help="Optional path to save the figure (PNG).")
    parser.add_argument("--json-out", type=Path, help="Optional path to save the grid order (JSON).")
    parser.add_argument(
        "--show-slots",
        action="store_true",
        help="Color each link by its neighbor slot to inspect the CCW edge order.",
    )
    parser.add_argument("--verbose", action="store_true", help="Print diagnostic messages.")
    parser.add_argument(
        "--no-show",
        action="store_true",
        help="Do not display the figure, only save it if --out is given.",
    )
    args = parser.parse_args(argv)

    graph = _load_cluster(args)
    cfg = _load_cfg(args)

    alg = ClusterToGrid(cfg, verbose=print if args.verbose else None)
    info = GridInfo()
    ok = alg.convert(graph, info)

    if ok:
        print(f"Grid: {info.rows} rows x {info.cols} cols")
        for row in range(info.rows):
            print("  " + " ".join(f"{info.get(row, col).index:4d}" for col in range(info.cols)))
    else:
        print(f"Failed: {alg.failure.value}")

    if args.json_out and ok:
        args.json_out.parent.mkdir(parents=True, exist_ok=True)
        write_grid_json(args.json_out, info)
        print(f"Saved grid order to {args.json_out}")

    if args.out or not args.no_show:
        img = None
        if args.image:
            if not args.image.exists():
                raise SystemExit(f"Image not found: {args.image}")
            img = cv2.imread(str(args.image), cv2.IMREAD_GRAYSCALE)
        fig = plot_result(graph, info, img=img, show_slots=args.show_slots)
        if args.out:
            args.out.parent.mkdir(parents=True, exist_ok=True)
            fig.savefig(args.out, dpi=150)
            print(f"Saved figure to {args.out}")
        if not args.no_show:
            plt.show()
        else:
            plt.close(fig)

    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
