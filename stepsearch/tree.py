# stepsearch/tree.py
from __future__ import annotations
from typing import Callable, Iterator, List, Optional
import weakref

from .graph import CellNode
from .vector import Vector2d

class SearchTreeNode:
    """One step of the exploration. Children are owned; the parent link is a weak reference."""

    __slots__ = ("node", "_parent", "children", "cumulative_distance", "is_terminal", "__weakref__")

    def __init__(self, node: CellNode, parent: Optional["SearchTreeNode"] = None):
        distance = 0.0
        if parent is not None:
            distance = parent.cumulative_distance + Vector2d.distance(parent.node.position, node.position)
        self.node = node
        self._parent = weakref.ref(parent) if parent is not None else None
        self.children: List[SearchTreeNode] = []
        self.cumulative_distance = distance
        self.is_terminal = False

    @property
    def parent(self) -> Optional["SearchTreeNode"]:
        return self._parent() if self._parent is not None else None

    @property
    def is_root(self) -> bool:
        return self._parent is None

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def iter_leaves(self) -> Iterator["SearchTreeNode"]:
        # explicit stack; long paths would overflow the recursion limit
        stack = [self]
        while stack:
            tn = stack.pop()
            if tn.is_leaf:
                yield tn
            else:
                stack.extend(reversed(tn.children))

    def for_each_leaf(self, visitor: Callable[["SearchTreeNode"], None]) -> None:
        for leaf in self.iter_leaves():
            visitor(leaf)

    def path(self) -> List[CellNode]:
        out = []
        tn: Optional[SearchTreeNode] = self
        while tn is not None:
            out.append(tn.node)
            tn = tn.parent
        out.reverse()
        return out

    def __repr__(self) -> str:
        return f"SearchTreeNode({self.node.key!r}, distance={self.cumulative_distance:.3f})"


class SearchTree:
    def __init__(self, root_node: CellNode):
        self.root = SearchTreeNode(root_node)
        self.size = 1

    def expand(self, parent: SearchTreeNode, node: CellNode) -> SearchTreeNode:
        branch = SearchTreeNode(node, parent)
        parent.children.append(branch)
        self.size += 1
        return branch

    def for_each_leaf(self, visitor: Callable[[SearchTreeNode], None]) -> None:
        self.root.for_each_leaf(visitor)

    def iter_leaves(self) -> Iterator[SearchTreeNode]:
        return self.root.iter_leaves()

    def terminal(self) -> Optional[SearchTreeNode]:
        for leaf in self.root.iter_leaves():
            if leaf.is_terminal:
                return leaf
        return None

    def shortest_path(self) -> Optional[List[CellNode]]:
        leaf = self.terminal()
        return leaf.path() if leaf is not None else None
