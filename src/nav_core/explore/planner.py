# frontier scoring and exploration target selection
# src/nav_core/explore/planner.py
"""
ExplorationPlanner: picks the next region worth walking to.

Two states:
    NO_TARGET  → update() rescans around the agent, re-scores the frontier
                 and tries to select a target.
    TARGETING  → update() only checks for arrival; the target is cleared
                 once the agent is within the arrival threshold.

The planner owns no memory of its own beyond the current target; the
region tree, frontier and cooldowns live in the ExplorationState passed in.
"""

from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Optional

from env.schema import ExplorerConfig
from monitoring.bus import EventBus
from monitoring.events import EventType
from monitoring.logger import log_event
from spec.types import CellState, GridCoord, Position
from spec.world import WorldPort
from .chunk import ExplorationChunk
from .priority_queue import PriorityQueue
from .state import ExplorationState


log = logging.getLogger(__name__)

MODULE = "nav_core.explore.planner"


class PlannerState(Enum):
    NO_TARGET = "no_target"
    TARGETING = "targeting"


class ExplorationPlanner:
    """
    Frontier-based exploration target selector.

    Public surface:
        update() -> bool            (True while a target is held)
        current_target() -> Position | None
        clear_target() -> None
    """

    def __init__(
        self,
        world: WorldPort,
        state: Optional[ExplorationState] = None,
        *,
        config: Optional[ExplorerConfig] = None,
        bus: Optional[EventBus] = None,
    ) -> None:
        self._world = world
        self._config = config or (state.config if state is not None else ExplorerConfig())
        self._state = state or ExplorationState(self._config)
        self._bus = bus

        self._candidates: PriorityQueue[GridCoord] = PriorityQueue()
        self._target: Optional[Position] = None
        self._target_chunk: Optional[GridCoord] = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def state(self) -> ExplorationState:
        return self._state

    @property
    def planner_state(self) -> PlannerState:
        return PlannerState.TARGETING if self._target is not None else PlannerState.NO_TARGET

    @property
    def target_chunk(self) -> Optional[GridCoord]:
        return self._target_chunk

    def current_target(self) -> Optional[Position]:
        return self._target

    def clear_target(self) -> None:
        self._target = None
        self._target_chunk = None

    def update(self) -> bool:
        """Run one planning cycle; return True if a target is held afterwards."""
        position = self._world.current_position()
        if position is None:
            return False

        if self._target is not None:
            distance = position.dist_to_ignore_z(self._target)
            if distance < self._config.arrival_threshold:
                log_event(
                    self._bus,
                    ts=self._world.now(),
                    module=MODULE,
                    event_type=EventType.EXPLORATION_TARGET_REACHED,
                    message="Reached exploration target",
                    payload={
                        "target": self._target.to_dict(),
                        "chunk": list(self._target_chunk) if self._target_chunk else None,
                    },
                )
                log.debug("Exploration target %s reached", self._target_chunk)
                self.clear_target()
                return False
            return True

        self.scan_around(position)
        self.rebuild_candidates(position)
        return self._select_target(position)

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    def chunk_coord_of(self, position: Position) -> GridCoord:
        grid = self._config.grid_size
        size = self._config.chunk_size
        gx = math.floor(position.x / grid)
        gy = math.floor(position.y / grid)
        return gx // size, gy // size

    def scan_around(self, position: Position) -> None:
        """Reclassify every cell of the 3×3 chunk block around `position`."""
        center_x, center_y = self.chunk_coord_of(position)
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                cx, cy = center_x + dx, center_y + dy
                chunk = self._state.get_or_create_chunk(cx, cy)
                self._scan_chunk(chunk, cx, cy, position)
                self._state.frontier.update(cx, cy, self._state.index)

    def _scan_chunk(
        self,
        chunk: ExplorationChunk,
        cx: int,
        cy: int,
        position: Position,
    ) -> None:
        size = self._config.chunk_size
        grid = self._config.grid_size
        radius = self._config.exploration_radius
        for lx in range(size):
            for ly in range(size):
                cell_x, cell_y = cx * size + lx, cy * size + ly
                point = Position(cell_x * grid, cell_y * grid, position.z)
                point = self._world.project_to_ground(point)
                walkable = self._world.is_walkable(point)
                if not walkable:
                    cell = CellState.BLOCKED
                elif point.dist_to(position) <= radius:
                    cell = CellState.EXPLORED
                else:
                    cell = CellState.UNEXPLORED
                chunk.set(lx, ly, cell)

    # ------------------------------------------------------------------
    # Scoring & selection
    # ------------------------------------------------------------------

    def chunk_center(self, coord: GridCoord, z: float) -> Position:
        span = self._config.chunk_size * self._config.grid_size
        return Position(coord[0] * span + span / 2, coord[1] * span + span / 2, z)

    def score_chunk(self, chunk: ExplorationChunk, coord: GridCoord, position: Position) -> float:
        """(distance + 1) * (unexplored - 0.5 * explored); higher is picked first."""
        distance = position.dist_to(self.chunk_center(coord, position.z))
        unexplored = chunk.count(CellState.UNEXPLORED)
        explored = chunk.count(CellState.EXPLORED)
        return (distance + 1) * (unexplored - explored * 0.5)

    def rebuild_candidates(self, position: Position) -> int:
        """Re-score the whole frontier into a fresh queue; return its size."""
        self._candidates = PriorityQueue()
        for coord in self._state.frontier:
            chunk = self._state.index.get(*coord)
            if chunk is None:
                continue
            # max-score-first on top of a min-heap
            self._candidates.push(coord, -self.score_chunk(chunk, coord, position))
        return len(self._candidates)

    def _select_target(self, position: Position) -> bool:
        now = self._world.now()
        while True:
            item = self._candidates.pop()
            if item is None:
                return False
            coord = item.value
            chunk = self._state.index.get(*coord)
            if chunk is None or not chunk.is_still_interesting():
                continue
            if self._state.cooldown.is_cooling_down(coord, now):
                continue

            # cooldown starts at selection, not arrival, so the same chunk is
            # not re-picked every tick while the agent is on its way
            self._state.cooldown.mark(coord, now)
            target = self._world.project_to_ground(self.chunk_center(coord, position.z))
            self._target = target
            self._target_chunk = coord

            log.info(
                "Exploration target chunk=%s pos=(%.1f, %.1f, %.1f) score=%.2f",
                coord, target.x, target.y, target.z, -item.priority,
            )
            log_event(
                self._bus,
                ts=now,
                module=MODULE,
                event_type=EventType.EXPLORATION_TARGET_SELECTED,
                message="Selected exploration target",
                payload={
                    "chunk": list(coord),
                    "target": target.to_dict(),
                    "score": -item.priority,
                    "frontier_size": len(self._state.frontier),
                },
            )
            return True
