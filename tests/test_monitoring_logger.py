#tests/test_monitoring_logger.py
"""
Tests for monitoring.logger.JsonFileLogger and log_event.

Covers:
- JSON structure validity
- Correct field encoding
- Parent directory creation
- No events after close()
"""

from __future__ import annotations

import json
from pathlib import Path

from monitoring.bus import EventBus
from monitoring.logger import JsonFileLogger, log_event
from monitoring.events import EventType


def test_json_file_logger_writes_valid_json(tmp_path: Path):
    bus = EventBus()
    log_path = tmp_path / "events.log"

    logger = JsonFileLogger(log_path, bus)

    log_event(
        bus=bus,
        ts=12.5,
        module="nav_core.walker",
        event_type=EventType.WALKER_STUCK,
        message="Agent appears stuck",
        payload={"index": 2, "position": {"x": 1.0, "y": 2.0, "z": 0.0}},
        correlation_id="walk-3",
    )

    logger.close()

    lines = log_path.read_text(encoding="utf-8").strip().splitlines()
    assert len(lines) == 1

    data = json.loads(lines[0])

    assert data["ts"] == 12.5
    assert data["module"] == "nav_core.walker"
    assert data["event_type"] == "WALKER_STUCK"
    assert data["message"] == "Agent appears stuck"
    assert data["payload"]["index"] == 2
    assert data["payload"]["position"]["y"] == 2.0
    assert data["correlation_id"] == "walk-3"


def test_logger_parent_dir_created(tmp_path: Path):
    log_path = tmp_path / "nested" / "logs" / "events.log"

    bus = EventBus()
    logger = JsonFileLogger(log_path, bus)

    log_event(bus=bus, ts=0.0, module="test.module", event_type=EventType.LOG, message="hello")
    logger.close()

    assert logger.path == log_path
    assert log_path.read_text(encoding="utf-8").strip()


def test_logger_stops_after_close(tmp_path: Path):
    bus = EventBus()
    log_path = tmp_path / "events.log"
    logger = JsonFileLogger(log_path, bus)

    log_event(bus=bus, ts=0.0, module="m", event_type=EventType.LOG, message="one")
    logger.close()
    log_event(bus=bus, ts=1.0, module="m", event_type=EventType.LOG, message="two")

    lines = log_path.read_text(encoding="utf-8").strip().splitlines()
    assert [json.loads(line)["message"] for line in lines] == ["one"]


def test_log_event_without_bus_is_noop():
    # components call log_event unconditionally; no bus means no event
    log_event(None, ts=0.0, module="m", event_type=EventType.LOG, message="dropped")
