# quadtree mapping chunk coordinates to exploration chunks
# src/nav_core/explore/region_tree.py
"""
Sparse region tree (quadtree) over chunk space.

Gives unbounded-looking 2D storage without preallocating a dense grid.
Nodes split on demand; chunks live in depth-0 leaves, so the coarsest
addressable unit is extent / 2**depth. With the default 2000 extent and
depth 20 that is well below one chunk, so distinct integer chunk
coordinates never share a leaf.

Coordinates outside the root rectangle are not rejected: the quadrant
rule always picks an edge quadrant, so such points alias onto the border
leaves.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from .chunk import ExplorationChunk

# quadrant order of RegionNode.children
TOP_LEFT, TOP_RIGHT, BOTTOM_LEFT, BOTTOM_RIGHT = range(4)


@dataclass
class RegionNode:
    """
    Rectangle of chunk space.

    Holds EITHER a chunk (leaf) OR four children (internal), never both
    once split.
    """

    x: float
    y: float
    width: float
    height: float
    depth: int
    children: Optional[List["RegionNode"]] = None
    chunk: Optional[ExplorationChunk] = None

    @property
    def is_leaf(self) -> bool:
        return self.chunk is not None and self.children is None

    def split(self) -> None:
        half_w, half_h = self.width / 2, self.height / 2
        d = self.depth - 1
        self.children = [
            RegionNode(self.x, self.y, half_w, half_h, d),
            RegionNode(self.x + half_w, self.y, half_w, half_h, d),
            RegionNode(self.x, self.y + half_h, half_w, half_h, d),
            RegionNode(self.x + half_w, self.y + half_h, half_w, half_h, d),
        ]

    def quadrant(self, x: float, y: float) -> int:
        mid_x = self.x + self.width / 2
        mid_y = self.y + self.height / 2
        top, left = y < mid_y, x < mid_x
        if left:
            return TOP_LEFT if top else BOTTOM_LEFT
        return TOP_RIGHT if top else BOTTOM_RIGHT


class RegionTree:
    """
    Chunk store keyed by integer chunk coordinates.

    Public surface:
        insert(x, y, chunk) -> None   (last insert at a leaf wins)
        get(x, y) -> chunk | None
    """

    def __init__(
        self,
        origin: Tuple[float, float] = (-1000.0, -1000.0),
        extent: float = 2000.0,
        depth: int = 20,
    ) -> None:
        self._origin = origin
        self._extent = extent
        self._depth = depth
        self._root = RegionNode(origin[0], origin[1], extent, extent, depth)
        self._count = 0

    @property
    def root(self) -> RegionNode:
        return self._root

    def __len__(self) -> int:
        """Number of occupied leaves."""
        return self._count

    def insert(self, x: int, y: int, chunk: ExplorationChunk) -> None:
        node = self._root
        while True:
            if node.depth == 0 or node.is_leaf:
                if node.chunk is None:
                    self._count += 1
                node.chunk = chunk
                return
            if node.children is None:
                node.split()
            assert node.children is not None
            node = node.children[node.quadrant(x, y)]

    def get(self, x: int, y: int) -> Optional[ExplorationChunk]:
        node = self._root
        while True:
            if node.is_leaf:
                return node.chunk
            if node.children is None:
                return None
            node = node.children[node.quadrant(x, y)]

    def clear(self) -> None:
        self._root = RegionNode(
            self._origin[0], self._origin[1], self._extent, self._extent, self._depth
        )
        self._count = 0

    def iter_nodes(self) -> Iterator[RegionNode]:
        """Depth-first walk over every node (debugging / invariant checks)."""
        stack = [self._root]
        while stack:
            node = stack.pop()
            yield node
            if node.children:
                stack.extend(node.children)
