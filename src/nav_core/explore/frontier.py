# set of chunk coordinates bordering unexplored territory
# src/nav_core/explore/frontier.py

from __future__ import annotations

from typing import Iterator, Set

from spec.types import GridCoord
from .region_tree import RegionTree

NEIGHBOR_OFFSETS = tuple(
    (dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if dx or dy
)


class FrontierTracker:
    """
    Exploration candidates surrounding already-scanned territory.

    Updated incrementally, one scanned chunk at a time, which grows an
    amortized "ring" of candidates around the explored area.
    """

    def __init__(self) -> None:
        self._coords: Set[GridCoord] = set()

    def update(self, cx: int, cy: int, index: RegionTree) -> None:
        """
        Record that chunk (cx, cy) was just scanned.

        The chunk itself leaves the frontier; every existing neighbour that
        is still interesting joins it (set semantics, so repeated updates
        never grow it).
        """
        self._coords.discard((cx, cy))
        for dx, dy in NEIGHBOR_OFFSETS:
            nx, ny = cx + dx, cy + dy
            chunk = index.get(nx, ny)
            if chunk is not None and chunk.is_still_interesting():
                self._coords.add((nx, ny))

    def discard(self, coord: GridCoord) -> None:
        self._coords.discard(coord)

    def clear(self) -> None:
        self._coords.clear()

    def snapshot(self) -> Set[GridCoord]:
        return set(self._coords)

    def __contains__(self, coord: object) -> bool:
        return coord in self._coords

    def __iter__(self) -> Iterator[GridCoord]:
        return iter(list(self._coords))

    def __len__(self) -> int:
        return len(self._coords)
