# path: src/monitoring/events.py
"""
Event and command schemas for navigation monitoring.

This module defines:
- EventType enum (walker + explorer lifecycle)
- MonitoringEvent (structured, JSON-safe record)
- ControlCommandType / ControlCommand for operator-issued controls

All events are JSON-serializable via `.to_dict()` and are intended
for use with monitoring.bus.EventBus and monitoring.logger.JsonFileLogger.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from enum import Enum, auto
from typing import Any, Dict, Optional


# ============================================================
# Event Types
# ============================================================

class EventType(Enum):
    """Typed monitoring events emitted by the navigation core."""

    # Waypoint walker
    WALK_STARTED = auto()
    WALK_TO_START_REACHED = auto()
    WAYPOINT_REACHED = auto()
    WALKER_STUCK = auto()
    WALK_PAUSED = auto()
    WALK_RESUMED = auto()
    PATH_COMPLETED = auto()
    WALK_STOPPED = auto()

    # Exploration planner / assist
    EXPLORATION_TARGET_SELECTED = auto()
    EXPLORATION_TARGET_REACHED = auto()
    EXPLORATION_DETOUR_INSERTED = auto()

    # Control surface events
    CONTROL_COMMAND = auto()

    # Generic log messages
    LOG = auto()


# ============================================================
# Monitoring Event Structure
# ============================================================

@dataclass
class MonitoringEvent:
    """
    Runtime event emitted by the walker, the planner or the runtime.

    All fields must be JSON-safe.
    """

    ts: float                   # clock value at emission (seconds)
    module: str                 # source module string ("nav_core.walker", ...)
    event_type: EventType
    message: str                # short human-readable description
    payload: Dict[str, Any]     # structured data (indices, positions, ...)
    correlation_id: Optional[str] = None  # groups events per walked path

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-safe dict for loggers."""
        data = asdict(self)
        data["event_type"] = self.event_type.name  # store name, not enum
        return data


# ============================================================
# Control Commands
# ============================================================

class ControlCommandType(Enum):
    """
    Commands that operators or tools can send to the navigation runtime.
    """

    PAUSE = auto()          # pause the walker
    RESUME = auto()         # resume a paused walker
    STOP = auto()           # tear down the current walk
    CLEAR_TARGET = auto()   # drop the current exploration target


@dataclass
class ControlCommand:
    """
    Represents an external command for the runtime.

    Sent through EventBus.publish_command(), then interpreted by
    agent.runtime.NavigationRuntime.
    """

    cmd: ControlCommandType
    args: Dict[str, Any]

    @staticmethod
    def pause() -> "ControlCommand":
        return ControlCommand(ControlCommandType.PAUSE, {})

    @staticmethod
    def resume() -> "ControlCommand":
        return ControlCommand(ControlCommandType.RESUME, {})

    @staticmethod
    def stop() -> "ControlCommand":
        return ControlCommand(ControlCommandType.STOP, {})

    @staticmethod
    def clear_target() -> "ControlCommand":
        return ControlCommand(ControlCommandType.CLEAR_TARGET, {})
