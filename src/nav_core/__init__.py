"""
nav_core package.

Exports:
    - WaypointWalker / WalkerState: path following with stuck recovery
    - ExplorationPlanner / ExplorationState: frontier exploration
    - ExplorationAssist: planner → walker bridge
"""

from __future__ import annotations

from .walker import PathPlan, WaypointWalker, WalkerState
from .explore import ExplorationAssist, ExplorationPlanner, ExplorationState

__all__ = [
    "PathPlan",
    "WaypointWalker",
    "WalkerState",
    "ExplorationAssist",
    "ExplorationPlanner",
    "ExplorationState",
]
