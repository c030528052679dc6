# stepsearch/cli.py
from __future__ import annotations
import argparse, csv, logging, os, os.path
from typing import List, Optional

from .config import SearchConfig
from .engine import SearchEngine
from .graph import Graph
from .log import setup_logging
from .runner import RunStats, solve
from .types import Classification
from .viz import draw_search_png

logger = logging.getLogger(__name__)

def format_stats(name: str, s: RunStats) -> str:
    return (f"{name:20s} | reached={s.reached!s:5s} | steps={s.steps:6d} | "
            f"visited={s.expansions:5d} | tree={s.tree_size:6d} | "
            f"length={s.path_length:7.2f} | time={s.elapsed_sec*1000:7.1f} ms")

def build_grid(cfg: SearchConfig) -> Graph:
    """Grid with start in the top-left corner and target in the bottom-right one."""
    g = Graph.generate(cfg.grid_width, cfg.grid_height)
    start = g.get(0, 0)
    target = g.get(cfg.grid_width - 1, cfg.grid_height - 1)
    g.reassign(Classification.START, start)
    if target is not start:
        g.reassign(Classification.TARGET, target)
    if cfg.obstacle_ratio > 0:
        g.scatter_obstacles(cfg.obstacle_ratio, seed=cfg.seed)
    return g

def run_map(path: str, out_dir: Optional[str], max_steps: int) -> RunStats:
    graph = Graph.load_file(path)
    engine = SearchEngine(graph)
    stats = solve(graph, max_steps=max_steps, engine=engine)
    if out_dir:
        base = os.path.splitext(os.path.basename(path))[0]
        draw_search_png(engine, os.path.join(out_dir, f"{base}.png"))
    return stats

# -------- subcommands --------

def cmd_gen(args: argparse.Namespace) -> None:
    os.makedirs(args.out, exist_ok=True)
    for i in range(args.count):
        cfg = SearchConfig(
            grid_width=args.width, grid_height=args.height, obstacle_ratio=args.p,
            seed=(args.seed + i) if args.seed is not None else None,
        )
        path = os.path.join(args.out, f"grid_{i:03d}.json")
        build_grid(cfg).save(path)
        print("wrote", path)

def cmd_demo(args: argparse.Namespace) -> None:
    stats = run_map(args.map, args.out, args.max_steps)
    print(format_stats(os.path.basename(args.map), stats))

def cmd_bench(args: argparse.Namespace) -> None:
    maps = sorted(p for p in os.listdir(args.mapdir) if p.endswith(".json"))
    if not maps:
        logger.warning("No .json maps in %s", args.mapdir)
    rows = []
    for fname in maps:
        stats = run_map(os.path.join(args.mapdir, fname), args.out, args.max_steps)
        print(format_stats(fname, stats))
        rows.append({
            "map": fname,
            "reached": stats.reached,
            "state": stats.state.value,
            "steps": stats.steps,
            "visited": stats.expansions,
            "tree_size": stats.tree_size,
            "path_length": round(stats.path_length, 6),
            "time_sec": round(stats.elapsed_sec, 6),
        })
    if args.csv and rows:
        with open(args.csv, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=list(rows[0].keys()))
            writer.writeheader()
            writer.writerows(rows)
        print("wrote CSV:", args.csv)

def cmd_view(args: argparse.Namespace) -> None:
    from .pygame_viewer import main as viewer_main
    viewer_main(["--map", args.map, "--log-level", args.log_level])

def build_argparser() -> argparse.ArgumentParser:
    defaults = SearchConfig()
    p = argparse.ArgumentParser(description="Stepwise greedy best-first search on editable grids")
    p.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])
    sub = p.add_subparsers(dest="cmd", required=True)

    g = sub.add_parser("gen", help="generate grid maps as JSON")
    g.add_argument("--count", type=int, default=10)
    g.add_argument("--width", type=int, default=defaults.grid_width)
    g.add_argument("--height", type=int, default=defaults.grid_height)
    g.add_argument("--p", type=float, default=0.25, help="obstacle ratio")
    g.add_argument("--out", type=str, default="maps")
    g.add_argument("--seed", type=int, default=defaults.seed)
    g.set_defaults(func=cmd_gen)

    d = sub.add_parser("demo", help="search one map and save a PNG")
    d.add_argument("--map", type=str, required=True)
    d.add_argument("--out", type=str, default="runs")
    d.add_argument("--max-steps", type=int, default=defaults.max_steps)
    d.set_defaults(func=cmd_demo)

    b = sub.add_parser("bench", help="search every .json map in a folder")
    b.add_argument("--mapdir", type=str, required=True)
    b.add_argument("--out", type=str, default="")
    b.add_argument("--csv", type=str, default="")
    b.add_argument("--max-steps", type=int, default=defaults.max_steps)
    b.set_defaults(func=cmd_bench)

    v = sub.add_parser("view", help="open the interactive viewer")
    v.add_argument("--map", type=str, default="map.json")
    v.set_defaults(func=cmd_view)

    return p

def main(argv: Optional[List[str]] = None):
    ap = build_argparser()
    args = ap.parse_args(argv)
    setup_logging(args.log_level)
    args.func(args)
