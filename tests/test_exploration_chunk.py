# tests/test_exploration_chunk.py

from __future__ import annotations

import pytest

from nav_core.explore.chunk import ExplorationChunk
from spec.types import CellState


def test_unwritten_cells_read_as_unexplored() -> None:
    chunk = ExplorationChunk(size=5)
    assert chunk.get(0, 0) is CellState.UNEXPLORED
    assert chunk.get(4, 4) is CellState.UNEXPLORED
    assert not chunk.dirty


def test_set_and_count() -> None:
    chunk = ExplorationChunk(size=5)
    chunk.set(1, 2, CellState.BLOCKED)
    chunk.set(3, 3, CellState.EXPLORED)
    chunk.set(0, 0, CellState.UNEXPLORED)

    assert chunk.get(1, 2) is CellState.BLOCKED
    assert chunk.count(CellState.EXPLORED) == 1
    assert chunk.count(CellState.BLOCKED) == 1
    # only written cells are counted
    assert chunk.count(CellState.UNEXPLORED) == 1
    assert chunk.dirty


def test_out_of_range_cells_raise() -> None:
    chunk = ExplorationChunk(size=5)
    with pytest.raises(IndexError):
        chunk.get(5, 0)
    with pytest.raises(IndexError):
        chunk.set(0, -1, CellState.EXPLORED)


def test_fresh_chunk_is_not_interesting() -> None:
    assert not ExplorationChunk(size=5).is_still_interesting()


def test_interest_follows_unexplored_ratio() -> None:
    chunk = ExplorationChunk(size=5, interest_ratio=0.02)
    for lx in range(5):
        for ly in range(5):
            chunk.set(lx, ly, CellState.EXPLORED)
    assert not chunk.is_still_interesting()

    # 1 / 25 = 0.04 > 0.02
    chunk.set(2, 2, CellState.UNEXPLORED)
    assert chunk.is_still_interesting()


def test_interest_threshold_is_strict() -> None:
    chunk = ExplorationChunk(size=2, interest_ratio=0.25)
    chunk.set(0, 0, CellState.UNEXPLORED)
    assert not chunk.is_still_interesting()  # 0.25 is not > 0.25
    chunk.set(1, 0, CellState.UNEXPLORED)
    assert chunk.is_still_interesting()
