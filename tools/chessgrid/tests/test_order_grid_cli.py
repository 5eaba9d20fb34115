"""Command line entry point."""

from __future__ import annotations

import json
from pathlib import Path

import matplotlib
import pytest

matplotlib.use("Agg")

import order_grid  # noqa: E402
from chessgrid.corner_graph import CornerGraph, save_graph  # noqa: E402


def test_synthetic_run_writes_grid(tmp_path: Path, capsys) -> None:
    out = tmp_path / "grid.json"
    fig = tmp_path / "grid.png"
    code = order_grid.main(
        ["--synthetic", "4", "5", "--seed", "3", "--json-out", str(out), "--out", str(fig), "--no-show"]
    )
    assert code == 0
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["rows"] * data["cols"] == 20
    assert sorted(data["order"]) == list(range(20))
    assert fig.exists()
    assert "Grid:" in capsys.readouterr().out


def test_cluster_file_failure_exit_code(tmp_path: Path, capsys) -> None:
    graph = CornerGraph()
    graph.add_corner(0.0, 0.0, 0.0)
    path = tmp_path / "cluster.json"
    save_graph(graph, path)

    code = order_grid.main([str(path), "--no-show", "--verbose"])
    assert code == 1
    out = capsys.readouterr().out
    assert "Failed:" in out
    assert "two edges" in out


def test_tolerance_flag_overrides_config(tmp_path: Path) -> None:
    cfg = tmp_path / "cfg.json"
    cfg.write_text(json.dumps({"origin_tolerance": 0.2}), encoding="utf-8")
    code = order_grid.main(["--synthetic", "3", "3", "--config", str(cfg), "--tolerance", "45", "--no-show"])
    assert code == 0


def test_bad_config_exits_with_message(tmp_path: Path) -> None:
    cfg = tmp_path / "cfg.json"
    for content in ('{"origin_tolerance": "wide"}', '{"origin_tol": 0.5}', "{not json"):
        cfg.write_text(content, encoding="utf-8")
        with pytest.raises(SystemExit, match="Invalid config"):
            order_grid.main(["--synthetic", "3", "3", "--config", str(cfg), "--no-show"])


def test_out_of_range_tolerance_flag_exits(tmp_path: Path) -> None:
    with pytest.raises(SystemExit, match="Invalid --tolerance"):
        order_grid.main(["--synthetic", "3", "3", "--tolerance", "120", "--no-show"])


def test_show_slots_figure_is_saved(tmp_path: Path) -> None:
    fig = tmp_path / "slots.png"
    code = order_grid.main(["--synthetic", "3", "4", "--show-slots", "--out", str(fig), "--no-show"])
    assert code == 0
    assert fig.exists()
