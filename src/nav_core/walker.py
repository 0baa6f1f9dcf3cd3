# waypoint-following state machine with stuck recovery
# src/nav_core/walker.py
"""
WaypointWalker: drives the agent along an ordered list of positions.

Lifecycle:

    IDLE ──start_walking_path──► WALKING_TO_START ──start reached──► WALKING_PATH
                         └─────────────(close to start)────────────────┘
    WALKING_* ◄──toggle_pause──► PAUSED
    WALKING_PATH ──last waypoint reached──► COMPLETED
    any active state ──stop() / invalid index / world error──► STOPPED

advance() is meant to be called on every tick of a fixed-rate loop. It
never blocks and never raises: all waiting (move rate limit, stuck
detection) is a comparison against WorldPort.now(), and failures turn
into a stopped walker rather than an exception.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, List, Optional, Tuple

from env.schema import WalkerConfig
from monitoring.bus import EventBus
from monitoring.events import EventType
from monitoring.logger import log_event
from spec.types import Position
from spec.world import WorldPort
from .stuck import StuckDetector


log = logging.getLogger(__name__)

MODULE = "nav_core.walker"
DEFAULT_PATH_NAME = "Custom Path"


class WalkerState(Enum):
    IDLE = "idle"
    WALKING_TO_START = "walking_to_start"
    WALKING_PATH = "walking_path"
    PAUSED = "paused"
    COMPLETED = "completed"
    STOPPED = "stopped"


ACTIVE_STATES = (WalkerState.WALKING_TO_START, WalkerState.WALKING_PATH)


@dataclass
class PathPlan:
    """
    The path currently being walked.

    `points` is what the walker steers along; while walking to the start it
    is the synthetic [agent, original[0]] pair and `original` holds the
    recorded path to switch to afterwards. `index` is 0-based.
    """

    points: List[Position]
    index: int = 0
    forward: bool = True
    original: List[Position] = field(default_factory=list)
    name: str = DEFAULT_PATH_NAME

    def next_index(self) -> Optional[int]:
        """Index after the current one in the walking direction, or None at the end."""
        if self.forward:
            return self.index + 1 if self.index < len(self.points) - 1 else None
        return self.index - 1 if self.index > 0 else None

    def in_bounds(self) -> bool:
        return 0 <= self.index < len(self.points)


class WaypointWalker:
    """
    Waypoint follower for a single agent.

    Public surface (used by the runtime / external state machines):
        start_walking_path(points, name, force_walk_to_first) -> bool
        advance() -> None
        stop() -> None
        toggle_pause() -> bool
        set_loop(enabled) -> None
        status() -> str
        is_at_final_waypoint() -> bool
        is_path_completed() -> bool
        progress() -> (index, total)
    """

    def __init__(
        self,
        world: WorldPort,
        config: Optional[WalkerConfig] = None,
        *,
        bus: Optional[EventBus] = None,
    ) -> None:
        self._world = world
        self._config = config or WalkerConfig()
        self._bus = bus

        self._state = WalkerState.IDLE
        self._resume_state: Optional[WalkerState] = None
        self._plan: Optional[PathPlan] = None
        self._loop = False

        self._last_move_request: Optional[float] = None
        self._stuck = StuckDetector(
            threshold=self._config.stuck_threshold,
            check_interval=self._config.stuck_check_interval,
            min_movement=self._config.stuck_min_movement,
        )

        self._walk_count = 0
        self._last_path_name: Optional[str] = None
        # last clock reading; event timestamps use it so emitting never calls the world
        self._last_now = 0.0

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def config(self) -> WalkerConfig:
        return self._config

    @property
    def state(self) -> WalkerState:
        return self._state

    @property
    def is_walking(self) -> bool:
        """True while a walk is in progress, paused or not."""
        return self._state in ACTIVE_STATES or self._state is WalkerState.PAUSED

    @property
    def walking_to_start(self) -> bool:
        return self._phase() is WalkerState.WALKING_TO_START

    @property
    def walk_id(self) -> int:
        """Counter bumped by every started walk; identifies the current or last walk."""
        return self._walk_count

    @property
    def loop_enabled(self) -> bool:
        return self._loop

    @property
    def path(self) -> Tuple[Position, ...]:
        return tuple(self._plan.points) if self._plan else ()

    @property
    def current_index(self) -> Optional[int]:
        """1-based index of the waypoint being walked to, or None."""
        return self._plan.index + 1 if self._plan else None

    def current_waypoint(self) -> Optional[Position]:
        if self._plan is None or not self._plan.in_bounds():
            return None
        return self._plan.points[self._plan.index]

    def _phase(self) -> WalkerState:
        """Effective walking phase, looking through a pause."""
        if self._state is WalkerState.PAUSED and self._resume_state is not None:
            return self._resume_state
        return self._state

    def _now(self) -> float:
        self._last_now = self._world.now()
        return self._last_now

    def _correlation_id(self) -> str:
        return f"walk-{self._walk_count}"

    def _emit(self, event_type: EventType, message: str, **payload: Any) -> None:
        log_event(
            self._bus,
            ts=self._last_now,
            module=MODULE,
            event_type=event_type,
            message=message,
            payload=payload,
            correlation_id=self._correlation_id(),
        )

    # ------------------------------------------------------------------
    # Starting a walk
    # ------------------------------------------------------------------

    def start_walking_path(
        self,
        points: Optional[Iterable[Position]],
        name: Optional[str] = None,
        force_walk_to_first: bool = False,
    ) -> bool:
        """
        Begin walking `points`.

        If forced, or if the agent is farther than start_distance_threshold
        from the first point, a two-point [agent, points[0]] plan is walked
        first and the recorded path starts once that point is reached.
        Returns False (and changes nothing) on an empty path or unknown
        agent position.
        """
        waypoints = list(points or [])
        if not waypoints:
            log.warning("start_walking_path: no waypoints provided")
            return False

        try:
            position = self._world.current_position()
            if position is None:
                log.warning("start_walking_path: agent position unavailable")
                return False
            distance = position.dist_to_ignore_z(waypoints[0])
            now = self._now()
        except Exception:
            log.exception("start_walking_path: world query failed")
            return False

        display_name = name or DEFAULT_PATH_NAME
        if force_walk_to_first or distance > self._config.start_distance_threshold:
            log.info(
                "Agent is %.1f from start of %r; walking to the starting position first",
                distance, display_name,
            )
            plan = PathPlan(
                points=[position, waypoints[0]],
                index=1,
                original=waypoints,
                name=display_name,
            )
            state = WalkerState.WALKING_TO_START
        else:
            log.info("Agent is close to start of %r (%.1f); walking path directly", display_name, distance)
            plan = PathPlan(points=list(waypoints), index=0, original=waypoints, name=display_name)
            state = WalkerState.WALKING_PATH

        self._begin(plan, state, now)
        log.info("Started walking path: %s (%d waypoints)", display_name, len(waypoints))
        self._emit(
            EventType.WALK_STARTED,
            f"Started walking path {display_name}",
            name=display_name,
            waypoints=len(waypoints),
            walking_to_start=state is WalkerState.WALKING_TO_START,
            distance_to_start=distance,
        )
        return True

    def walk_to(self, target: Position, name: str = "Exploration") -> bool:
        """
        Walk straight to a single target, skipping the walk-to-start phase.

        Used by auto-exploration; looping is switched off. Returns False on
        an unknown agent position or a failing world query.
        """
        try:
            position = self._world.current_position()
            if position is None:
                return False
            now = self._now()
        except Exception:
            log.exception("walk_to: world query failed")
            return False

        self._loop = False
        plan = PathPlan(points=[position, target], index=1, original=[position, target], name=name)
        self._begin(plan, WalkerState.WALKING_PATH, now)
        self._emit(
            EventType.WALK_STARTED,
            f"Started walking path {name}",
            name=name,
            waypoints=2,
            walking_to_start=False,
        )
        return True

    def insert_waypoint(self, point: Position) -> bool:
        """
        Splice `point` in just ahead of the current waypoint and steer to it.

        "Ahead" follows the walking direction: when a looping walker is
        heading back down the path the point goes after the current waypoint
        in the list, so the waypoint is still visited once the detour is done.
        Only valid while walking the recorded path (not the walk to start).
        """
        plan = self._plan
        if plan is None or self._phase() is not WalkerState.WALKING_PATH:
            return False
        try:
            now = self._now()
        except Exception:
            log.exception("insert_waypoint: world query failed")
            return False

        if plan.forward:
            plan.points.insert(plan.index, point)
        else:
            plan.points.insert(plan.index + 1, point)
            plan.index += 1
        self._stuck.reset(now)
        self._last_move_request = None
        return True

    def _begin(self, plan: PathPlan, state: WalkerState, now: float) -> None:
        self._walk_count += 1
        self._plan = plan
        self._state = state
        self._resume_state = None
        self._last_path_name = plan.name
        self._last_move_request = None
        self._stuck.reset(now)

    # ------------------------------------------------------------------
    # Stop / pause / loop
    # ------------------------------------------------------------------

    def stop(self) -> None:
        """Tear down the active walk. A walker that is not walking is left as is."""
        if not self.is_walking:
            return
        log.info("Stopped walking path")
        self._teardown(WalkerState.STOPPED)
        self._emit(EventType.WALK_STOPPED, "Stopped walking path", reason="stop")

    def toggle_pause(self) -> bool:
        """Pause or resume; returns False when there is nothing to pause."""
        if self._state in ACTIVE_STATES:
            self._resume_state = self._state
            self._state = WalkerState.PAUSED
            log.info("Paused path walking")
            self._emit(EventType.WALK_PAUSED, "Paused path walking")
            return True

        if self._state is WalkerState.PAUSED:
            self._state = self._resume_state or WalkerState.WALKING_PATH
            self._resume_state = None
            # time spent paused must not count as being stuck
            self._stuck.reset(self._now())
            self._last_move_request = None
            log.info("Resumed path walking")
            self._emit(EventType.WALK_RESUMED, "Resumed path walking")
            return True

        return False

    def set_loop(self, enabled: bool) -> None:
        """When enabled, the walker reverses at either end instead of completing."""
        self._loop = bool(enabled)
        log.info("Path looping %s", "enabled" if enabled else "disabled")

    def _teardown(self, state: WalkerState) -> None:
        self._state = state
        self._resume_state = None
        self._plan = None
        self._last_move_request = None
        self._stuck.reset(0.0)

    # ------------------------------------------------------------------
    # Per-tick update
    # ------------------------------------------------------------------

    def advance(self) -> None:
        """One tick of path following; a no-op unless actively walking."""
        if self._state not in ACTIVE_STATES:
            return
        try:
            self._advance()
        except Exception:
            log.exception("Error in path walking update; stopping")
            self._teardown(WalkerState.STOPPED)
            self._emit(EventType.WALK_STOPPED, "Stopped after walker error", reason="error")

    def _advance(self) -> None:
        position = self._world.current_position()
        if position is None:
            return

        plan = self._plan
        if plan is None or not plan.in_bounds():
            log.warning(
                "Invalid waypoint index %s for %d waypoints, stopping",
                plan.index if plan else None,
                len(plan.points) if plan else 0,
            )
            self._teardown(WalkerState.STOPPED)
            self._emit(EventType.WALK_STOPPED, "Stopped on invalid waypoint index", reason="invalid_index")
            return

        now = self._now()
        waypoint = plan.points[plan.index]

        if position.dist_to_ignore_z(waypoint) <= self._config.arrival_threshold:
            if self._state is WalkerState.WALKING_TO_START:
                self._enter_recorded_path(plan, now)
                return
            if not self._step(plan, reason="reached"):
                return

        if plan.next_index() is not None and self._stuck.check(position, now):
            log.warning("Agent appears stuck near waypoint %d, skipping ahead", plan.index + 1)
            self._emit(
                EventType.WALKER_STUCK,
                "Agent appears stuck",
                index=plan.index + 1,
                position=position.to_dict(),
            )
            if not self._step(plan, reason="stuck"):
                return
            self._stuck.reset(now)

        interval = self._config.move_request_interval
        if self._last_move_request is None or now - self._last_move_request >= interval:
            self._world.request_move(plan.points[plan.index])
            self._last_move_request = now

    def _enter_recorded_path(self, plan: PathPlan, now: float) -> None:
        log.info(
            "Reached path starting position; walking %r (%d waypoints)",
            plan.name, len(plan.original),
        )
        self._plan = PathPlan(
            points=list(plan.original),
            index=0,
            forward=True,
            original=plan.original,
            name=plan.name,
        )
        self._state = WalkerState.WALKING_PATH
        self._stuck.reset(now)
        self._emit(EventType.WALK_TO_START_REACHED, "Reached path starting position", name=plan.name)

    def _step(self, plan: PathPlan, reason: str) -> bool:
        """
        Move the index one waypoint along the walking direction.

        Returns False when the path is exhausted; the walker is then
        COMPLETED and the caller must not touch `plan` again.
        """
        next_index = plan.next_index()
        if next_index is None and self._loop:
            plan.forward = not plan.forward
            next_index = plan.next_index()

        if next_index is None:
            log.info("Reached the final waypoint (#%d) - path completed", plan.index + 1)
            total = len(plan.points)
            self._teardown(WalkerState.COMPLETED)
            self._emit(
                EventType.PATH_COMPLETED,
                f"Completed path {plan.name}",
                name=plan.name,
                waypoints=total,
                reason=reason,
            )
            return False

        previous = plan.index
        plan.index = next_index
        log.debug("Waypoint %d done (%s), moving to waypoint %d", previous + 1, reason, next_index + 1)
        self._emit(
            EventType.WAYPOINT_REACHED,
            f"Moving to waypoint {next_index + 1}",
            index=next_index + 1,
            previous=previous + 1,
            total=len(plan.points),
            reason=reason,
        )
        return True

    # ------------------------------------------------------------------
    # Progress queries
    # ------------------------------------------------------------------

    def status(self) -> str:
        if self._state is WalkerState.COMPLETED:
            return "Path completed"
        if not self.is_walking:
            return "Not walking"
        if self._state is WalkerState.PAUSED:
            return "Paused"
        if self._state is WalkerState.WALKING_TO_START:
            return "Walking to path start"
        assert self._plan is not None
        return f"Walking waypoint {self._plan.index + 1}/{len(self._plan.points)}"

    def is_at_final_waypoint(self) -> bool:
        """True when walking the recorded path, on its last waypoint and within reach of it."""
        plan = self._plan
        if plan is None or self._phase() is not WalkerState.WALKING_PATH:
            return False
        if plan.index != len(plan.points) - 1:
            return False
        position = self._world.current_position()
        if position is None:
            return False
        return position.dist_to_ignore_z(plan.points[-1]) <= self._config.arrival_threshold

    def is_path_completed(self) -> bool:
        """True only after a walk ran to its end (not after stop())."""
        return self._state is WalkerState.COMPLETED

    def progress(self) -> Tuple[int, int]:
        """(1-based current index, total); (0, len(original)) while walking to start."""
        plan = self._plan
        if plan is None or not self.is_walking:
            return 0, 0
        if self._phase() is WalkerState.WALKING_TO_START:
            return 0, len(plan.original)
        return plan.index + 1, len(plan.points)
