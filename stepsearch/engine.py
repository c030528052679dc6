# stepsearch/engine.py
"""
Greedy best-first search that does one unit of work per step() so a
viewer can animate it.

Each call either inspects one edge of the current node, or (once the
edges are exhausted) scans every leaf of the search tree and moves to
the leaf with the lowest path distance + distance to target.
Ties go to the leaf seen last in depth-first order.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Set
import logging
import math

from .graph import CellNode, Graph
from .tree import SearchTree, SearchTreeNode
from .types import Classification
from .vector import Vector2d

logger = logging.getLogger(__name__)

class SearchState(str, Enum):
    IDLE = "idle"
    EXPANDING = "expanding"
    SELECTING = "selecting"
    FINISHED = "finished"
    FAILED = "failed"

@dataclass
class Candidate:
    branch: Optional[SearchTreeNode] = None
    score: float = math.inf

@dataclass
class LeafScan:
    best: Candidate
    terminal: Optional[SearchTreeNode] = None

def scan_leaves(
    leaves: Iterable[SearchTreeNode],
    target: CellNode,
    visited: Set[CellNode],
    current: Optional[CellNode],
) -> LeafScan:
    best = Candidate()
    for leaf in leaves:
        if leaf.node in visited:
            continue
        # only guards until a first candidate is accepted
        if best.score == math.inf and leaf.node is current:
            continue

        h = Vector2d.distance(leaf.node.position, target.position)
        if h == 0:
            leaf.is_terminal = True
            return LeafScan(best, terminal=leaf)

        score = leaf.cumulative_distance + h
        if score <= best.score:
            best.branch = leaf
            best.score = score
    return LeafScan(best)


class SearchEngine:
    def __init__(self, graph: Graph):
        self.graph = graph
        self._clear()

    def _clear(self) -> None:
        self.next_nodes: Set[CellNode] = set()
        self.visited_nodes: Set[CellNode] = set()
        self.start_node: Optional[CellNode] = None
        self.current_node: Optional[CellNode] = None
        self.tree: Optional[SearchTree] = None
        self.tree_node: Optional[SearchTreeNode] = None
        self.edge_index = -1
        self.best = Candidate()
        self.steps = 0
        self._state = SearchState.IDLE

    @property
    def state(self) -> SearchState:
        return self._state

    @property
    def is_finished(self) -> bool:
        return self._state is SearchState.FINISHED

    @property
    def root(self) -> Optional[SearchTreeNode]:
        return self.tree.root if self.tree is not None else None

    def reset(self) -> None:
        if self.current_node is not None and self.current_node.classification is Classification.CURRENT:
            self.current_node.classification = Classification.EMPTY
        self._clear()

    def path(self) -> Optional[List[CellNode]]:
        if self.tree is None or not self.is_finished:
            return None
        return self.tree.shortest_path()

    # -------------------- stepping --------------------
    def step(self) -> SearchState:
        if self._state in (SearchState.FINISHED, SearchState.FAILED):
            return self._state
        start, target = self.graph.start, self.graph.target
        if start is None or target is None:
            return self._state

        self.steps += 1
        if self.current_node is None:
            self.start_node = start
            self.current_node = start
            self.tree = SearchTree(start)
            self.tree_node = self.tree.root
            self.visited_nodes.add(start)
            self._state = SearchState.EXPANDING

        if self.edge_index < 0:
            self.edge_index = 0
        else:
            self.edge_index += 1

        if self.edge_index >= len(self.current_node.neighbors):
            self._select(target)
            return self._state

        neighbour = self.current_node.neighbors[self.edge_index]
        if neighbour.classification is Classification.OBSTACLE or neighbour in self.visited_nodes:
            return self._state

        self.tree.expand(self.tree_node, neighbour)
        self.next_nodes.add(neighbour)
        return self._state

    def _select(self, target: CellNode) -> None:
        self._state = SearchState.SELECTING
        current = self.current_node
        if current is not self.start_node:
            current.classification = Classification.EMPTY
            self.visited_nodes.add(current)
            self.next_nodes.discard(current)

        scan = scan_leaves(self.tree.iter_leaves(), target, self.visited_nodes, current)
        self.best = scan.best
        if scan.terminal is not None:
            current.classification = Classification.EMPTY
            self._state = SearchState.FINISHED
            logger.info("Target %s reached after %d steps (distance %.3f)",
                        target.key, self.steps, scan.terminal.cumulative_distance)
            return

        if self.best.branch is None:
            self._fail("frontier exhausted")
            return

        logger.debug("Expanding %s (score %.3f)", self.best.branch.node.key, self.best.score)
        self.tree_node = self.best.branch
        self.current_node = self.best.branch.node
        self.current_node.classification = Classification.CURRENT
        self.edge_index = -1
        self.best = Candidate()
        self._state = SearchState.EXPANDING

    def _fail(self, reason: str) -> None:
        self._state = SearchState.FAILED
        logger.warning("Search failed after %d steps: %s (%d nodes visited)",
                       self.steps, reason, len(self.visited_nodes))
