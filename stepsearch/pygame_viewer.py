# stepsearch/pygame_viewer.py (map editor + stepwise animation)
from __future__ import annotations
import argparse
import logging
import os
from typing import Optional, Tuple

import pygame

from .config import ViewerConfig
from .engine import SearchEngine, SearchState
from .errors import GraphError
from .graph import CellNode, Graph
from .log import setup_logging
from .types import Classification
from .vector import Vector2d
from .viz import BG, BRANCH, SHORTEST, node_color, to_pixel

logger = logging.getLogger(__name__)

BRUSH = (255, 255, 0, 128)

class Viewer:
    def __init__(self, graph: Graph, cfg: ViewerConfig = ViewerConfig()):
        self.cfg = cfg
        self.graph = graph
        self.engine = SearchEngine(graph)
        self.running = True
        self.mouse_pos: Optional[Tuple[int, int]] = None
        self.dragging = False

        pygame.display.set_caption("Step Search")
        self.screen = pygame.display.set_mode(self._canvas_size(), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()

    def _canvas_size(self) -> Tuple[int, int]:
        xs = [n.position.x for n in self.graph] or [0]
        ys = [n.position.y for n in self.graph] or [0]
        return (int(max(xs) * self.cfg.scaler + 2 * self.cfg.offset),
                int(max(ys) * self.cfg.scaler + 2 * self.cfg.offset))

    # ----------------- editing -----------------
    def _to_grid(self, px: int, py: int) -> Vector2d:
        return Vector2d((px - self.cfg.offset) / self.cfg.scaler, (py - self.cfg.offset) / self.cfg.scaler)

    def node_at(self, px: int, py: int) -> Optional[CellNode]:
        p = self._to_grid(px, py)
        return self.graph.get(round(max(0, p.x)), round(max(0, p.y)))

    def edit(self, px: int, py: int, mods: int) -> None:
        if mods & pygame.KMOD_CTRL or mods & pygame.KMOD_ALT:
            node = self.node_at(px, py)
            if node is None:
                return
            designation = Classification.START if mods & pygame.KMOD_CTRL else Classification.TARGET
            self.graph.reassign(designation, node)
        else:
            self.mouse_pos = (px, py)
            blocked = not (mods & pygame.KMOD_SHIFT)
            radius = self.cfg.brush_radius / self.cfg.scaler
            for node in self.graph.nodes_near(self._to_grid(px, py), radius):
                self.graph.set_obstacle(node, blocked)
        self.save()

    def save(self) -> None:
        self.graph.save(self.cfg.map_path)

    def restart(self, graph: Optional[Graph] = None) -> None:
        self.engine.reset()
        if graph is not None:
            self.graph = graph
            self.engine = SearchEngine(graph)
            self.screen = pygame.display.set_mode(self._canvas_size(), pygame.RESIZABLE)

    # ----------------- draw -----------------
    def draw(self) -> None:
        scr = self.screen
        cfg = self.cfg
        scr.fill(BG)

        root = self.engine.root
        if root is not None:
            for leaf in root.iter_leaves():
                branch = leaf.path()
                if leaf.is_terminal or len(branch) < 2:
                    continue
                pygame.draw.lines(scr, BRANCH, False, [to_pixel(n, cfg) for n in reversed(branch)], 1)

        path = self.engine.path()
        if path and len(path) > 1:
            pygame.draw.lines(scr, SHORTEST, False, [to_pixel(n, cfg) for n in path], 5)

        for node in self.graph:
            pygame.draw.circle(scr, node_color(self.engine, node), to_pixel(node, cfg), cfg.radius)

        if self.mouse_pos is not None:
            r = cfg.brush_radius
            brush = pygame.Surface((2 * r, 2 * r), pygame.SRCALPHA)
            pygame.draw.circle(brush, BRUSH, (r, r), r)
            scr.blit(brush, (self.mouse_pos[0] - r, self.mouse_pos[1] - r))

        pygame.display.flip()

    # ----------------- loop -----------------
    def run(self) -> None:
        autoplay = True
        while self.running:
            self.clock.tick(self.cfg.fps)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key in (pygame.K_ESCAPE, pygame.K_q):
                        self.running = False
                    elif event.key == pygame.K_SPACE:
                        autoplay = not autoplay
                    elif event.key == pygame.K_n:
                        self.engine.step()
                    elif event.key == pygame.K_r:
                        self.restart()
                    elif event.key == pygame.K_g:
                        xs = [n.position.x for n in self.graph]
                        ys = [n.position.y for n in self.graph]
                        self.restart(Graph.generate(int(max(xs)) + 1, int(max(ys)) + 1))
                        self.save()
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    self.dragging = True
                    self.edit(*event.pos, pygame.key.get_mods())
                elif event.type == pygame.MOUSEMOTION and self.dragging:
                    self.edit(*event.pos, pygame.key.get_mods())
                elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                    self.dragging = False
                    self.mouse_pos = None

            if autoplay and self.engine.state not in (SearchState.FINISHED, SearchState.FAILED):
                for _ in range(self.cfg.steps_per_frame):
                    self.engine.step()

            self.draw()

def open_map(path: str, width: int, height: int) -> Graph:
    if os.path.exists(path):
        try:
            return Graph.load_file(path)
        except (GraphError, ValueError) as e:
            logger.warning("Ignoring unreadable map %s: %s", path, e)
    return Graph.generate(width, height)

def main(argv=None):
    parser = argparse.ArgumentParser(description="Step Search viewer: edit a grid and watch the search")
    parser.add_argument("--map", type=str, default=ViewerConfig.map_path, help="Map JSON to load and save edits to")
    parser.add_argument("--width", type=int, default=20, help="Grid width when no map exists")
    parser.add_argument("--height", type=int, default=20, help="Grid height when no map exists")
    parser.add_argument("--fps", type=int, default=60, help="Frames per second")
    parser.add_argument("--steps", type=int, default=1, help="Search steps per frame")
    parser.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])
    args = parser.parse_args(argv)

    setup_logging(args.log_level)
    cfg = ViewerConfig(fps=args.fps, steps_per_frame=args.steps, map_path=args.map)
    graph = open_map(args.map, args.width, args.height)

    pygame.init()
    try:
        Viewer(graph, cfg).run()
    finally:
        pygame.quit()

if __name__ == "__main__":
    main()
