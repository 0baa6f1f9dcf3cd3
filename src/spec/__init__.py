# src/spec/__init__.py

from __future__ import annotations

"""
Public spec surface for the navigation core.

This module re-exports *interfaces and data types* used across the codebase:
  - World geometry primitives (Position, GridCoord)
  - Exploration cell occupancy (CellState)
  - The WorldPort protocol consumed by the walker and the planner

Deliberately does NOT export concrete walker / planner implementations to
keep runtime wiring in src/agent/.
"""

from .types import (
    CellState,
    GridCoord,
    Position,
)

from .world import WorldPort

__all__ = [
    "CellState",
    "GridCoord",
    "Position",
    "WorldPort",
]
