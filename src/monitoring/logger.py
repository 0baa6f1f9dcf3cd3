# JSON logger subscribing to EventBus
"""
Structured logging for navigation monitoring.

Provides:
- JsonFileLogger: subscribes to an EventBus and writes MonitoringEvents as JSONL.
- log_event: convenience helper for publishing MonitoringEvents via the EventBus.

Usage:

    bus = EventBus()
    sink = JsonFileLogger(Path("logs/navigation/events.log"), bus)

    log_event(
        bus=bus,
        ts=world.now(),
        module="nav_core.walker",
        event_type=EventType.WAYPOINT_REACHED,
        message="Reached waypoint 3",
        payload={"index": 3},
    )
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from .bus import EventBus
from .events import EventType, MonitoringEvent


log = logging.getLogger(__name__)


# ============================================================
# JSONL File Logger
# ============================================================

class JsonFileLogger:
    """
    JSON-lines sink for MonitoringEvent instances.

    - Subscribes to an EventBus and writes one JSON object per line.
    - Creates the parent directory when needed.
    """

    def __init__(self, path: Path, bus: EventBus) -> None:
        self._path = path
        self._bus = bus
        path.parent.mkdir(parents=True, exist_ok=True)
        self._file = path.open("a", encoding="utf-8")
        bus.subscribe(self._on_event)

    @property
    def path(self) -> Path:
        return self._path

    def _on_event(self, event: MonitoringEvent) -> None:
        line = json.dumps(event.to_dict(), ensure_ascii=False)
        try:
            self._file.write(line + "\n")
            self._file.flush()
        except OSError:
            # Disk full or closed handle: drop the line, keep the tick loop alive.
            log.warning("Dropped monitoring event %s (write failed)", event.event_type.name)

    def close(self) -> None:
        """Unsubscribe and close the underlying file handle."""
        self._bus.unsubscribe(self._on_event)
        self._file.close()


# ============================================================
# Convenience helper for emitting events
# ============================================================

def log_event(
    bus: Optional[EventBus],
    ts: float,
    module: str,
    event_type: EventType,
    message: str,
    payload: Optional[Dict[str, Any]] = None,
    correlation_id: Optional[str] = None,
) -> None:
    """
    Create and publish a MonitoringEvent.

    `bus` may be None so components can call this unconditionally; the
    event is then dropped. `ts` is taken from the caller's clock (usually
    WorldPort.now()) so events line up with the tick timeline.
    """
    if bus is None:
        return
    event = MonitoringEvent(
        ts=ts,
        module=module,
        event_type=event_type,
        message=message,
        payload=payload or {},
        correlation_id=correlation_id,
    )
    bus.publish(event)
