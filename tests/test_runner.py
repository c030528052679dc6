"""solve() driver, PNG rendering and the command line."""

import sys
import os
import csv
import logging

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from PIL import Image

from stepsearch.cli import build_grid, main
from stepsearch.config import SearchConfig
from stepsearch.engine import SearchEngine, SearchState
from stepsearch.graph import Graph
from stepsearch.log import setup_logging
from stepsearch.runner import solve
from stepsearch.types import Classification
from stepsearch.viz import draw_search_png


def _grid(w, h, start, target, obstacles=()):
    g = Graph.generate(w, h)
    for x, y in obstacles:
        g.set_obstacle(g.get(x, y), True)
    g.reassign(Classification.START, g.get(*start))
    g.reassign(Classification.TARGET, g.get(*target))
    return g


class TestSolve:
    def test_reached(self):
        stats = solve(_grid(3, 3, (0, 0), (2, 2)))
        assert stats.reached
        assert stats.state is SearchState.FINISHED
        assert stats.steps == 13
        assert stats.tree_size == 11
        assert abs(stats.path_length - 2 * 2 ** 0.5) < 1e-9

    def test_unreachable(self):
        stats = solve(_grid(3, 1, (0, 0), (2, 0), obstacles=[(1, 0)]))
        assert not stats.reached
        assert stats.state is SearchState.FAILED
        assert stats.path is None
        assert stats.path_length == 0.0

    def test_idle_graph_stops_immediately(self):
        g = Graph.generate(3, 3)
        stats = solve(g)
        assert not stats.reached
        assert stats.state is SearchState.IDLE
        assert stats.steps == 0 and stats.tree_size == 0

    def test_step_budget(self):
        stats = solve(_grid(10, 10, (0, 0), (9, 9)), max_steps=5)
        assert stats.steps == 5
        assert stats.state is SearchState.EXPANDING

    def test_build_grid_corners(self):
        g = build_grid(SearchConfig(grid_width=6, grid_height=4, obstacle_ratio=0.5, seed=3))
        assert g.start is g.get(0, 0)
        assert g.target is g.get(5, 3)
        assert g.target.classification is Classification.TARGET


class TestDrawing:
    def test_png_written(self, tmp_path):
        g = _grid(4, 4, (0, 0), (3, 3), obstacles=[(1, 2)])
        eng = SearchEngine(g)
        solve(g, engine=eng)
        out = str(tmp_path / "out" / "run.png")
        draw_search_png(eng, out)
        with Image.open(out) as img:
            assert img.size == (3 * 35 + 40, 3 * 35 + 40)
            # start cell centre is red
            assert img.getpixel((20, 20)) == (255, 0, 0)

    def test_png_before_first_step(self, tmp_path):
        eng = SearchEngine(Graph.generate(2, 2))
        out = str(tmp_path / "idle.png")
        draw_search_png(eng, out)
        assert os.path.exists(out)


class TestCli:
    def test_gen_then_bench(self, tmp_path, capsys):
        maps = tmp_path / "maps"
        main(["gen", "--count", "2", "--width", "6", "--height", "5", "--p", "0.1",
              "--seed", "1", "--out", str(maps)])
        files = sorted(os.listdir(maps))
        assert files == ["grid_000.json", "grid_001.json"]
        g = Graph.load_file(str(maps / files[0]))
        assert g.start is g.get(0, 0)
        assert g.target is g.get(5, 4)

        report = tmp_path / "bench.csv"
        main(["bench", "--mapdir", str(maps), "--csv", str(report), "--out", str(tmp_path / "runs")])
        with open(report, newline="") as f:
            rows = list(csv.DictReader(f))
        assert [r["map"] for r in rows] == files
        assert all(r["state"] in ("finished", "failed") for r in rows)
        assert os.path.exists(tmp_path / "runs" / "grid_000.png")
        assert "grid_001.json" in capsys.readouterr().out

    def test_demo(self, tmp_path, capsys):
        path = str(tmp_path / "m.json")
        _grid(5, 5, (0, 0), (4, 2)).save(path)
        main(["demo", "--map", path, "--out", str(tmp_path / "runs")])
        out = capsys.readouterr().out
        assert "reached=True" in out
        assert os.path.exists(tmp_path / "runs" / "m.png")


class TestLogging:
    def test_setup_logging_installs_one_handler(self):
        setup_logging("debug")
        setup_logging("warning")
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.WARNING
