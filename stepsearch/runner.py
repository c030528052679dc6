# stepsearch/runner.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional
import time

from .engine import SearchEngine, SearchState
from .graph import CellNode, Graph
from .vector import Vector2d

@dataclass
class RunStats:
    reached: bool
    state: SearchState
    steps: int
    expansions: int
    tree_size: int
    elapsed_sec: float
    path: Optional[List[CellNode]]

    @property
    def path_length(self) -> float:
        if not self.path:
            return 0.0
        return sum(Vector2d.distance(a.position, b.position) for a, b in zip(self.path, self.path[1:]))

def solve(graph: Graph, max_steps: int = 100_000, engine: Optional[SearchEngine] = None) -> RunStats:
    """Drive step() until the engine stops or *max_steps* calls have been made."""
    eng = engine if engine is not None else SearchEngine(graph)
    t0 = time.perf_counter()

    for _ in range(max_steps):
        before = eng.steps
        state = eng.step()
        if state in (SearchState.FINISHED, SearchState.FAILED):
            break
        if eng.steps == before:
            # idle: start or target not designated
            break

    return RunStats(
        reached=eng.is_finished,
        state=eng.state,
        steps=eng.steps,
        expansions=len(eng.visited_nodes),
        tree_size=eng.tree.size if eng.tree is not None else 0,
        elapsed_sec=time.perf_counter() - t0,
        path=eng.path(),
    )
