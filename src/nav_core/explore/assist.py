# glue between the exploration planner and the waypoint walker
# src/nav_core/explore/assist.py
"""
ExplorationAssist lets the planner steer the walker.

Two modes, chosen by what the walker is doing:
- assistance: while a recorded path is walked, a "beneficial" exploration
  target is spliced in just before the current waypoint.
- auto-explore: while the walker is idle, the walker is sent straight to
  the next exploration target.

Planner consultations are throttled to one per `check_interval`.
"""

from __future__ import annotations

import logging
from typing import Optional

from env.schema import AssistConfig
from monitoring.bus import EventBus
from monitoring.events import EventType
from monitoring.logger import log_event
from spec.types import Position
from spec.world import WorldPort
from ..walker import WaypointWalker
from .planner import ExplorationPlanner


log = logging.getLogger(__name__)

MODULE = "nav_core.explore.assist"
EXPLORATION_PATH_NAME = "Exploration"


class ExplorationAssist:
    def __init__(
        self,
        world: WorldPort,
        walker: WaypointWalker,
        planner: ExplorationPlanner,
        config: Optional[AssistConfig] = None,
        *,
        bus: Optional[EventBus] = None,
    ) -> None:
        self._world = world
        self._walker = walker
        self._planner = planner
        self._config = config or AssistConfig()
        self._bus = bus

        self.assistance_enabled = self._config.assistance_enabled
        self.auto_explore_enabled = self._config.auto_explore_enabled
        self.exploration_active = False
        # True while the walker is on a walk that auto-explore started
        self._auto_walk = False
        self._inserted_target: Optional[Position] = None
        self._last_check: Optional[float] = None

    # ------------------------------------------------------------------
    # Switches
    # ------------------------------------------------------------------

    def set_assistance_enabled(self, enabled: bool) -> None:
        self.assistance_enabled = bool(enabled)

    def set_auto_explore_enabled(self, enabled: bool) -> None:
        self.auto_explore_enabled = bool(enabled)
        if not enabled:
            if self._auto_walk and self._walker.is_walking:
                self._walker.stop()
            self._auto_walk = False
            self.exploration_active = False

    def clear(self) -> None:
        self.exploration_active = False
        self._inserted_target = None
        self._planner.clear_target()

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def update(self) -> None:
        if not self._walker.is_walking:
            self._auto_walk = False

        if self._walker.is_walking:
            self._update_assistance()
        else:
            self._update_auto_exploration()
        self._check_completion()

    def _due(self, now: float) -> bool:
        if self._last_check is not None and now - self._last_check < self._config.check_interval:
            return False
        self._last_check = now
        return True

    def _update_assistance(self) -> None:
        if not self.assistance_enabled or self._auto_walk or self._walker.walking_to_start:
            return
        if not self._due(self._world.now()):
            return

        if not self._planner.update():
            return
        target = self._planner.current_target()
        # the planner keeps returning the same target until it is reached
        if target is None or target == self._inserted_target:
            return
        if not self.is_beneficial(target):
            return

        if self._walker.insert_waypoint(target):
            self._inserted_target = target
            self.exploration_active = True
            log.info("Inserted exploration detour at (%.1f, %.1f)", target.x, target.y)
            log_event(
                self._bus,
                ts=self._world.now(),
                module=MODULE,
                event_type=EventType.EXPLORATION_DETOUR_INSERTED,
                message="Inserted exploration detour",
                payload={"target": target.to_dict(), "index": self._walker.current_index},
            )

    def _update_auto_exploration(self) -> None:
        if not self.auto_explore_enabled:
            return
        if not self._due(self._world.now()):
            return

        if self._planner.update():
            target = self._planner.current_target()
            if target is not None and self._walker.walk_to(target, EXPLORATION_PATH_NAME):
                self.exploration_active = True
                self._auto_walk = True
        elif self.exploration_active:
            self.exploration_active = False

    def _check_completion(self) -> None:
        if not self.exploration_active:
            return
        position = self._world.current_position()
        target = self._planner.current_target()
        if position is None or target is None:
            return
        if position.dist_to(target) <= self._walker.config.arrival_threshold:
            self.exploration_active = False
            # short pause before the next consultation
            self._last_check = self._world.now() + self._config.completion_delay

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def is_beneficial(self, target: Position) -> bool:
        """
        A detour is worth taking if the target is not much farther from the
        current waypoint than the agent already is.
        """
        waypoint = self._walker.current_waypoint()
        position = self._world.current_position()
        if waypoint is None or position is None:
            return False
        detour = target.dist_to_ignore_z(waypoint)
        direct = position.dist_to_ignore_z(waypoint)
        return detour < direct + self._config.detour_slack

    def status(self) -> str:
        walking = self._walker.is_walking
        if walking and not self._auto_walk and self.assistance_enabled:
            if self.exploration_active:
                return "Assisting pathfinding with exploration"
            return "Ready to assist pathfinding"
        if self.auto_explore_enabled and (not walking or self._auto_walk):
            if self.exploration_active:
                return "Exploring area..."
            return "Looking for exploration targets..."
        return "Explorer integration disabled"
