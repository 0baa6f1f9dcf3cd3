# core shared types: Position, CellState, GridCoord
# src/spec/types.py

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Tuple


# (chunk_x, chunk_y) integer coordinates in chunk space
GridCoord = Tuple[int, int]


# ---------------------------------------------------------------------------
# World geometry
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Position:
    """A point in the world.

    Only (x, y) participate in grid indexing and arrival checks; z carries
    terrain height and is passed through to movement requests.
    """
    x: float
    y: float
    z: float = 0.0

    def dist_to(self, other: "Position") -> float:
        """Full 3D euclidean distance."""
        return math.sqrt(
            (self.x - other.x) ** 2
            + (self.y - other.y) ** 2
            + (self.z - other.z) ** 2
        )

    def dist_to_ignore_z(self, other: "Position") -> float:
        """Planar (x, y) distance."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def with_z(self, z: float) -> "Position":
        return Position(self.x, self.y, z)

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y, "z": self.z}


# ---------------------------------------------------------------------------
# Exploration memory
# ---------------------------------------------------------------------------

class CellState(IntEnum):
    """Occupancy tag of a single exploration cell."""

    UNEXPLORED = 0
    EXPLORED = 1
    BLOCKED = 2
