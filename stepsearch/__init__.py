# stepsearch/__init__.py
from .vector import Vector2d
from .types import Classification, node_key
from .errors import (
    GraphError, InvalidDimensions, InvalidClassification, InvalidPosition, DuplicateDesignation,
)
from .graph import CellNode, Graph
from .tree import SearchTree, SearchTreeNode
from .engine import SearchEngine, SearchState, Candidate, LeafScan, scan_leaves
from .runner import solve, RunStats
from .config import SearchConfig, ViewerConfig
from .log import setup_logging
from .viz import draw_search_png

__all__ = [
    "Vector2d", "Classification", "node_key",
    "GraphError", "InvalidDimensions", "InvalidClassification", "InvalidPosition", "DuplicateDesignation",
    "CellNode", "Graph",
    "SearchTree", "SearchTreeNode",
    "SearchEngine", "SearchState", "Candidate", "LeafScan", "scan_leaves",
    "solve", "RunStats",
    "SearchConfig", "ViewerConfig", "setup_logging",
    "draw_search_png",
]
