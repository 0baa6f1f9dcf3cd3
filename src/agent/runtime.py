# path: src/agent/runtime.py
"""
Fixed-tick driver for the navigation core.

NavigationRuntime wires together:
- WaypointWalker (path following)
- ExplorationPlanner + ExplorationState (frontier exploration)
- ExplorationAssist (planner → walker)
- EventBus control commands (PAUSE / RESUME / STOP / CLEAR_TARGET)

The embedding application calls `tick()` once per frame or timer tick;
nothing here sleeps or spawns threads. Scripted behaviour (teleports,
portals, zone checks) stays in the application and talks to the walker
through this object.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, Optional

from env.schema import NavConfig
from monitoring.bus import EventBus
from monitoring.events import ControlCommand, ControlCommandType, EventType
from monitoring.logger import log_event
from nav_core.explore import ExplorationAssist, ExplorationPlanner, ExplorationState
from nav_core.walker import DEFAULT_PATH_NAME, WaypointWalker, WalkerState
from spec.types import Position
from spec.world import WorldPort


log = logging.getLogger(__name__)

PathCompletedFn = Callable[[str], None]


class NavigationRuntime:
    def __init__(
        self,
        world: WorldPort,
        config: Optional[NavConfig] = None,
        *,
        bus: Optional[EventBus] = None,
        state: Optional[ExplorationState] = None,
        on_path_completed: Optional[PathCompletedFn] = None,
    ) -> None:
        self._world = world
        self._config = config or NavConfig()
        self._bus = bus
        self._on_path_completed = on_path_completed

        self.exploration = state or ExplorationState(self._config.explorer)
        self.walker = WaypointWalker(world, self._config.walker, bus=bus)
        self.planner = ExplorationPlanner(
            world, self.exploration, config=self._config.explorer, bus=bus
        )
        self.assist = ExplorationAssist(
            world, self.walker, self.planner, self._config.assist, bus=bus
        )

        self._ticks = 0
        self._active_path: Optional[str] = None
        # walk_id of the start_path() walk that `_active_path` names
        self._active_walk: Optional[int] = None

        if bus is not None:
            bus.subscribe_commands(self._handle_command)

    @property
    def ticks(self) -> int:
        return self._ticks

    # --------------------------------------------------------
    # Driving
    # --------------------------------------------------------

    def start_path(
        self,
        points: Iterable[Position],
        name: Optional[str] = None,
        force_walk_to_first: bool = False,
    ) -> bool:
        ok = self.walker.start_walking_path(points, name, force_walk_to_first)
        if ok:
            self._active_path = name or DEFAULT_PATH_NAME
            self._active_walk = self.walker.walk_id
        return ok

    def tick(self) -> None:
        """One cooperative tick: walker first, then exploration."""
        self._ticks += 1
        was_walking = self.walker.is_walking

        self.walker.advance()
        # checked before assist.update(), which may start a new walk this tick
        if was_walking and self.walker.state is WalkerState.COMPLETED:
            self._notify_completed()

        self.assist.update()

    def _notify_completed(self) -> None:
        # only the walk started by start_path() is reported
        name = self._active_path
        walk = self._active_walk
        self._active_path = None
        self._active_walk = None
        if name is None or walk != self.walker.walk_id:
            return
        if self._on_path_completed is None:
            return
        try:
            self._on_path_completed(name)
        except Exception:
            log.exception("on_path_completed callback failed for %r", name)

    # --------------------------------------------------------
    # Command handling
    # --------------------------------------------------------

    def _handle_command(self, cmd: ControlCommand) -> None:
        if cmd.cmd == ControlCommandType.PAUSE:
            if self.walker.state is not WalkerState.PAUSED:
                self.walker.toggle_pause()

        elif cmd.cmd == ControlCommandType.RESUME:
            if self.walker.state is WalkerState.PAUSED:
                self.walker.toggle_pause()

        elif cmd.cmd == ControlCommandType.STOP:
            self.walker.stop()
            self._active_path = None
            self._active_walk = None

        elif cmd.cmd == ControlCommandType.CLEAR_TARGET:
            self.assist.clear()

        log_event(
            self._bus,
            ts=self._world.now(),
            module="agent.runtime",
            event_type=EventType.CONTROL_COMMAND,
            message=f"Handled {cmd.cmd.name}",
            payload={"command": cmd.cmd.name, "walker": self.walker.status()},
        )

    # --------------------------------------------------------
    # Introspection
    # --------------------------------------------------------

    def debug_state(self) -> Dict[str, Any]:
        """JSON-safe snapshot of walker / planner / memory state."""
        current, total = self.walker.progress()
        target = self.planner.current_target()
        return {
            "ticks": self._ticks,
            "walker_state": self.walker.state.value,
            "walker_status": self.walker.status(),
            "progress": [current, total],
            "exploration_status": self.assist.status(),
            "target": target.to_dict() if target else None,
            "chunks": len(self.exploration.index),
            "frontier": len(self.exploration.frontier),
            "visited": len(self.exploration.cooldown.last_visit),
        }
