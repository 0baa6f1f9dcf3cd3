# per-explorer memory: region tree, frontier and visit cooldowns
# src/nav_core/explore/state.py
"""
ExplorationState bundles everything an explorer remembers between ticks.

It is owned by the caller and handed to an ExplorationPlanner, so several
independent explorers (or tests) never share memory by accident. Nothing
here is thread-safe: region-tree splits are not atomic, so a multi-threaded
embedding must keep one owner thread or lock around planner calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from env.schema import ExplorerConfig
from spec.types import GridCoord
from .chunk import ExplorationChunk
from .frontier import FrontierTracker
from .region_tree import RegionTree


@dataclass
class VisitCooldown:
    """Chunk coordinate → time of the last visit."""

    window: float
    last_visit: Dict[GridCoord, float] = field(default_factory=dict)

    def mark(self, coord: GridCoord, now: float) -> None:
        self.last_visit[coord] = now

    def is_cooling_down(self, coord: GridCoord, now: float) -> bool:
        visited = self.last_visit.get(coord)
        return visited is not None and (now - visited) < self.window

    def clear(self) -> None:
        self.last_visit.clear()


class ExplorationState:
    """Spatial memory of one explorer."""

    def __init__(self, config: Optional[ExplorerConfig] = None) -> None:
        self.config = config or ExplorerConfig()
        self.index = RegionTree(
            origin=self.config.region_origin,
            extent=self.config.region_extent,
            depth=self.config.region_depth,
        )
        self.frontier = FrontierTracker()
        self.cooldown = VisitCooldown(window=self.config.visit_cooldown)

    def new_chunk(self) -> ExplorationChunk:
        return ExplorationChunk(
            size=self.config.chunk_size,
            interest_ratio=self.config.interest_ratio,
        )

    def get_or_create_chunk(self, cx: int, cy: int) -> ExplorationChunk:
        """Return chunk (cx, cy), creating and inserting it on first visit."""
        chunk = self.index.get(cx, cy)
        if chunk is None:
            chunk = self.new_chunk()
        # re-inserting an existing chunk is a no-op overwrite
        self.index.insert(cx, cy, chunk)
        return chunk

    def clear(self) -> None:
        """Forget everything (the only way this memory is ever reset)."""
        self.index.clear()
        self.frontier.clear()
        self.cooldown.clear()
