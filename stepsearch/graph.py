# stepsearch/graph.py
from __future__ import annotations
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Dict, List, Optional, Tuple
import json
import logging
import os
import random

from .errors import (
    DuplicateDesignation, GraphError, InvalidClassification,
    InvalidDimensions, InvalidPosition,
)
from .types import DESIGNATIONS, Classification, node_key
from .vector import Vector2d

logger = logging.getLogger(__name__)

# (dx, dy) enumerated dx-major; this order decides tie-breaks in the engine
NEIGHBOR_OFFSETS: Tuple[Tuple[int, int], ...] = tuple(
    (i, j) for i in (-1, 0, 1) for j in (-1, 0, 1) if (i, j) != (0, 0)
)

@dataclass(eq=False)
class CellNode:
    classification: Classification
    position: Vector2d
    neighbors: List["CellNode"] = field(default_factory=list)

    @property
    def key(self) -> str:
        return node_key(self.position.x, self.position.y)

    def __repr__(self) -> str:
        return f"CellNode({self.key!r}, {self.classification.value})"


def _parse_classification(value: Any) -> Classification:
    try:
        return Classification(value)
    except ValueError:
        raise InvalidClassification(f"invalid classification: {value!r}") from None

def _parse_coord(value: Any):
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidPosition(f"coordinate is not a number: {value!r}")
    if value != value or value in (float("inf"), float("-inf")):
        raise InvalidPosition(f"coordinate is not finite: {value!r}")
    # 3.0 and 3 must share a key
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value

def _parse_position(value: Any) -> Vector2d:
    if not isinstance(value, dict) or "x" not in value or "y" not in value:
        raise InvalidPosition(f"malformed position: {value!r}")
    return Vector2d(_parse_coord(value["x"]), _parse_coord(value["y"]))


class Graph:
    """Graph store: cell nodes keyed by position, plus the Start/Target designations."""

    def __init__(self, nodes: Optional[Dict[str, CellNode]] = None,
                 start_key: Optional[str] = None, target_key: Optional[str] = None):
        self.nodes: Dict[str, CellNode] = nodes if nodes is not None else {}
        self.start_key = start_key
        self.target_key = target_key

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self):
        return iter(self.nodes.values())

    # ----------------- construction -----------------
    @staticmethod
    def generate(width: int, height: int) -> "Graph":
        for dim in (width, height):
            if isinstance(dim, bool) or not isinstance(dim, int) or dim <= 0:
                raise InvalidDimensions(f"grid dimensions must be positive integers, got {width}x{height}")

        nodes: Dict[str, CellNode] = {}
        for x in range(width):
            for y in range(height):
                nodes[node_key(x, y)] = CellNode(Classification.EMPTY, Vector2d(x, y))

        for node in nodes.values():
            px, py = node.position.x, node.position.y
            for i, j in NEIGHBOR_OFFSETS:
                neighbour = nodes.get(node_key(px + i, py + j))
                if neighbour is not None:
                    node.neighbors.append(neighbour)

        logger.debug("Generated %dx%d grid (%d nodes)", width, height, len(nodes))
        return Graph(nodes)

    @staticmethod
    def load(data: Any) -> "Graph":
        if not isinstance(data, dict) or not isinstance(data.get("nodes"), dict):
            raise GraphError("serialized graph must be a mapping with a 'nodes' mapping")
        records: Dict[str, Any] = data["nodes"]

        nodes: Dict[str, CellNode] = {}
        start_key: Optional[str] = None
        target_key: Optional[str] = None
        for key, rec in records.items():
            if not isinstance(rec, dict):
                raise GraphError(f"node record {key!r} is not a mapping")
            try:
                raw_cls, raw_pos = rec["classification"], rec["position"]
            except KeyError as e:
                raise GraphError(f"node record {key!r} is missing {e.args[0]!r}") from None
            cls = _parse_classification(raw_cls)
            node = CellNode(cls, _parse_position(raw_pos))
            if key != node.key:
                raise InvalidPosition(f"record {key!r} is at {node.key!r}; keys must match positions")
            if cls is Classification.START:
                if start_key is not None:
                    raise DuplicateDesignation(f"more than one start node: {start_key!r}, {key!r}")
                start_key = key
            elif cls is Classification.TARGET:
                if target_key is not None:
                    raise DuplicateDesignation(f"more than one target node: {target_key!r}, {key!r}")
                target_key = key
            elif cls is Classification.CURRENT:
                node.classification = Classification.EMPTY
            nodes[key] = node

        for key, rec in records.items():
            neighbour_keys = rec.get("neighbor_keys", [])
            if not isinstance(neighbour_keys, list):
                raise GraphError(f"neighbor_keys of {key!r} must be a list")
            node = nodes[key]
            for nk in neighbour_keys:
                neighbour = nodes.get(nk)
                if neighbour is None:
                    raise GraphError(f"node {key!r} lists unknown neighbour {nk!r}")
                node.neighbors.append(neighbour)

        logger.debug("Loaded graph with %d nodes (start=%s, target=%s)", len(nodes), start_key, target_key)
        return Graph(nodes, start_key, target_key)

    @staticmethod
    def load_file(path: str) -> "Graph":
        with open(path, "r") as f:
            return Graph.load(json.load(f))

    def serialize(self) -> Dict[str, Any]:
        return {
            "nodes": {
                key: {
                    "classification": node.classification.value,
                    "position": {"x": node.position.x, "y": node.position.y},
                    "neighbor_keys": [n.key for n in node.neighbors],
                }
                for key, node in self.nodes.items()
            }
        }

    def save(self, path: str) -> None:
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.serialize(), f)

    # ----------------- queries -----------------
    def get(self, x, y) -> Optional[CellNode]:
        return self.nodes.get(node_key(x, y))

    @property
    def start(self) -> Optional[CellNode]:
        return self.nodes.get(self.start_key) if self.start_key is not None else None

    @property
    def target(self) -> Optional[CellNode]:
        return self.nodes.get(self.target_key) if self.target_key is not None else None

    def nodes_near(self, point: Vector2d, radius: float) -> List[CellNode]:
        """Neighbours of the cell nearest *point* that lie within *radius* of it."""
        centre = self.get(round(max(0, point.x)), round(max(0, point.y)))
        if centre is None:
            return []
        return [n for n in centre.neighbors if Vector2d.distance(point, n.position) <= radius]

    # ----------------- editing -----------------
    def reassign(self, designation: Classification, node: CellNode) -> None:
        if designation not in DESIGNATIONS:
            raise InvalidClassification(f"cannot designate a node as {designation!r}")
        attr = "start_key" if designation is Classification.START else "target_key"
        other = "target_key" if attr == "start_key" else "start_key"

        old = self.nodes.get(getattr(self, attr)) if getattr(self, attr) is not None else None
        if old is not None and old is not node:
            old.classification = Classification.EMPTY
        if getattr(self, other) == node.key:
            setattr(self, other, None)

        node.classification = designation
        setattr(self, attr, node.key)
        logger.debug("%s moved to %s", designation.value, node.key)

    def set_obstacle(self, node: CellNode, blocked: bool) -> bool:
        if node.classification in DESIGNATIONS:
            return False
        node.classification = Classification.OBSTACLE if blocked else Classification.EMPTY
        return True

    def scatter_obstacles(self, ratio: float, seed: Optional[int] = None) -> int:
        rng = random.Random(seed)
        placed = 0
        for node in self.nodes.values():
            if node.classification is Classification.EMPTY and rng.random() < ratio:
                node.classification = Classification.OBSTACLE
                placed += 1
        return placed
