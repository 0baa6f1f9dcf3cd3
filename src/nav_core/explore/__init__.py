# src/nav_core/explore/__init__.py
"""
Frontier exploration subsystem.

Provides:
- PriorityQueue: min-heap used to rank candidate chunks
- ExplorationChunk: N×N occupancy grid
- RegionTree: sparse quadtree from chunk coordinates to chunks
- FrontierTracker: chunks bordering unexplored territory
- ExplorationState: caller-owned memory bundling the three above
- ExplorationPlanner: scores the frontier and picks a target
- ExplorationAssist: feeds planner targets into a WaypointWalker
"""

from __future__ import annotations

from .priority_queue import PriorityQueue, QueueItem
from .chunk import ExplorationChunk
from .region_tree import RegionTree, RegionNode
from .frontier import FrontierTracker
from .state import ExplorationState, VisitCooldown
from .planner import ExplorationPlanner, PlannerState
from .assist import ExplorationAssist

__all__ = [
    "PriorityQueue",
    "QueueItem",
    "ExplorationChunk",
    "RegionTree",
    "RegionNode",
    "FrontierTracker",
    "ExplorationState",
    "VisitCooldown",
    "ExplorationPlanner",
    "PlannerState",
    "ExplorationAssist",
]
