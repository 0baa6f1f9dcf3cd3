# fixed-size occupancy grid, the unit of exploration bookkeeping
# src/nav_core/explore/chunk.py

from __future__ import annotations

from typing import Dict

from spec.types import CellState

DEFAULT_CHUNK_SIZE = 5
DEFAULT_INTEREST_RATIO = 0.02


class ExplorationChunk:
    """
    N×N grid of CellState addressed by local (lx, ly) offsets.

    Cells are stored sparsely: a cell that was never written reads as
    UNEXPLORED but is not counted by `is_still_interesting()`. A chunk only
    becomes interesting once a scan has actually observed unexplored cells
    in it.
    """

    __slots__ = ("size", "interest_ratio", "dirty", "_cells")

    def __init__(
        self,
        size: int = DEFAULT_CHUNK_SIZE,
        interest_ratio: float = DEFAULT_INTEREST_RATIO,
    ) -> None:
        self.size = size
        self.interest_ratio = interest_ratio
        self.dirty = False  # advisory; set on any write, nothing reads it for correctness
        self._cells: Dict[int, CellState] = {}

    def _key(self, lx: int, ly: int) -> int:
        if not (0 <= lx < self.size and 0 <= ly < self.size):
            raise IndexError(f"cell ({lx}, {ly}) outside {self.size}x{self.size} chunk")
        return ly * self.size + lx

    def get(self, lx: int, ly: int) -> CellState:
        return self._cells.get(self._key(lx, ly), CellState.UNEXPLORED)

    def set(self, lx: int, ly: int, state: CellState) -> None:
        self._cells[self._key(lx, ly)] = CellState(state)
        self.dirty = True

    def count(self, state: CellState) -> int:
        """Number of written cells holding `state`."""
        return sum(1 for cell in self._cells.values() if cell == state)

    def is_still_interesting(self) -> bool:
        """True while more than `interest_ratio` of the chunk is unexplored."""
        total = self.size * self.size
        return self.count(CellState.UNEXPLORED) / total > self.interest_ratio

    def __repr__(self) -> str:
        return (
            f"ExplorationChunk(size={self.size}, "
            f"unexplored={self.count(CellState.UNEXPLORED)}, "
            f"explored={self.count(CellState.EXPLORED)}, "
            f"blocked={self.count(CellState.BLOCKED)})"
        )
