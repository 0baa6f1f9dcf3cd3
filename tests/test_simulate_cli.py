# tests/test_simulate_cli.py

from __future__ import annotations

import json
from pathlib import Path

from cli.simulate import DEMO_PATH, build_world, main
from spec.types import Position


def test_demo_world_blocks_wall() -> None:
    world = build_world(speed=6.0)
    assert not world.is_walkable(Position(5.5, 0.0))
    assert world.is_walkable(DEMO_PATH[0])


def test_path_mode_prints_summary(capsys) -> None:
    main(["--mode", "path", "--ticks", "200"])

    out = capsys.readouterr().out
    assert "Navigation summary" in out
    assert "WALK_STARTED" in out


def test_explore_mode_writes_events(tmp_path: Path) -> None:
    events_path = tmp_path / "events" / "sim.log"

    main(["--mode", "explore", "--ticks", "100", "--events", str(events_path)])

    lines = events_path.read_text(encoding="utf-8").strip().splitlines()
    types = {json.loads(line)["event_type"] for line in lines}
    assert "EXPLORATION_TARGET_SELECTED" in types
