# stepsearch/viz.py
from __future__ import annotations
import os
from typing import Dict, Tuple

from PIL import Image, ImageDraw

from .config import ViewerConfig
from .engine import SearchEngine
from .graph import CellNode
from .types import Classification

RGB = Tuple[int, int, int]

NODE_COLORS: Dict[Classification, RGB] = {
    Classification.OBSTACLE: (165, 42, 42),
    Classification.START: (255, 0, 0),
    Classification.TARGET: (0, 0, 255),
    Classification.CURRENT: (128, 0, 128),
}
EMPTY = (255, 255, 255)
VISITED = (0, 128, 0)
FRONTIER = (0, 150, 136)
BRANCH = (135, 206, 235)
SHORTEST = (255, 255, 0)
BG = (18, 18, 22)

def node_color(engine: SearchEngine, node: CellNode) -> RGB:
    if node.classification is not Classification.EMPTY:
        return NODE_COLORS[node.classification]
    if node in engine.visited_nodes:
        return VISITED
    if node in engine.next_nodes:
        return FRONTIER
    return EMPTY

def to_pixel(node: CellNode, cfg: ViewerConfig) -> Tuple[float, float]:
    return node.position.x * cfg.scaler + cfg.offset, node.position.y * cfg.scaler + cfg.offset

def draw_search_png(engine: SearchEngine, out_png: str, cfg: ViewerConfig = ViewerConfig()) -> None:
    nodes = list(engine.graph)
    if not nodes:
        raise ValueError("cannot draw an empty graph")
    W = int(max(n.position.x for n in nodes) * cfg.scaler + 2 * cfg.offset)
    H = int(max(n.position.y for n in nodes) * cfg.scaler + 2 * cfg.offset)
    img = Image.new("RGB", (W, H), BG)
    drw = ImageDraw.Draw(img)

    # every branch, leaf back to root
    if engine.root is not None:
        for leaf in engine.root.iter_leaves():
            branch = leaf.path()
            if leaf.is_terminal or len(branch) < 2:
                continue
            drw.line([to_pixel(n, cfg) for n in reversed(branch)], fill=BRANCH, width=1)

    path = engine.path()
    if path and len(path) > 1:
        drw.line([to_pixel(n, cfg) for n in path], fill=SHORTEST, width=5)

    # nodes
    for node in nodes:
        x, y = to_pixel(node, cfg)
        r = cfg.radius
        drw.ellipse((x - r, y - r, x + r, y + r), fill=node_color(engine, node))

    parent = os.path.dirname(out_png)
    if parent:
        os.makedirs(parent, exist_ok=True)
    img.save(out_png)
