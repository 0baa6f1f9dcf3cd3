# src/cli/simulate.py
"""
Offline simulator for the navigation core.

Runs NavigationRuntime against a FakeWorld (a flat map with one wall) and
prints a summary table. Useful for eyeballing tunables without a game
client:

    python -m cli.simulate --mode path --ticks 800
    python -m cli.simulate --mode explore --events logs/sim_events.log
"""

from __future__ import annotations

import argparse
from collections import Counter
from pathlib import Path
from typing import List, Optional, Sequence

from rich.console import Console
from rich.table import Table

from agent.logging_config import configure_logging
from agent.runtime import NavigationRuntime
from env.loader import load_nav_config
from env.schema import NavConfig
from monitoring.bus import EventBus
from monitoring.events import MonitoringEvent
from monitoring.logger import JsonFileLogger
from nav_core.testing.fakes import FakeWorld
from spec.types import Position


# loop around the wall; the (3, 14) -> (12, 0) leg runs straight into it,
# so stuck recovery has to skip (12, 0)
DEMO_PATH: List[Position] = [
    Position(3.0, 0.0),
    Position(3.0, -14.0),
    Position(12.0, -14.0),
    Position(12.0, 14.0),
    Position(3.0, 14.0),
    Position(12.0, 0.0),
    Position(3.0, 0.0),
]


def build_world(speed: float) -> FakeWorld:
    world = FakeWorld(Position(-10.0, -10.0, 0.0), speed=speed, bounds=(-40.0, -40.0, 40.0, 40.0))
    world.block_rect(5, -10, 6, 10)
    return world


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Simulate waypoint walking / frontier exploration on a synthetic map."
    )
    parser.add_argument("--mode", choices=("path", "explore"), default="path")
    parser.add_argument("--ticks", type=int, default=1000, help="Number of ticks to run")
    parser.add_argument("--dt", type=float, default=0.05, help="Seconds per tick")
    parser.add_argument("--speed", type=float, default=6.0, help="Agent speed (units/s)")
    parser.add_argument("--config", type=Path, default=None, help="navigation.yaml to load")
    parser.add_argument("--events", type=Path, default=None, help="Write events as JSONL here")
    parser.add_argument("--log-level", default="WARNING")
    return parser.parse_args(argv)


def render_summary(console: Console, runtime: NavigationRuntime, counts: Counter) -> None:
    state = runtime.debug_state()

    table = Table(title="Navigation summary")
    table.add_column("Field", style="bold")
    table.add_column("Value")
    for key, value in state.items():
        table.add_row(key, str(value))
    console.print(table)

    events = Table(title="Events")
    events.add_column("Type", style="bold")
    events.add_column("Count", justify="right")
    for name, count in sorted(counts.items()):
        events.add_row(name, str(count))
    console.print(events)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    configure_logging(args.log_level)

    config = load_nav_config(args.config) if args.config else NavConfig()
    if args.mode == "explore":
        config.assist.auto_explore_enabled = True

    bus = EventBus()
    counts: Counter = Counter()

    def count_event(evt: MonitoringEvent) -> None:
        counts[evt.event_type.name] += 1

    bus.subscribe(count_event)
    sink = JsonFileLogger(args.events, bus) if args.events else None

    world = build_world(args.speed)
    runtime = NavigationRuntime(world, config, bus=bus)

    if args.mode == "path":
        runtime.start_path(DEMO_PATH, "Demo loop")

    try:
        for _ in range(args.ticks):
            runtime.tick()
            world.step(args.dt)
            if args.mode == "path" and not runtime.walker.is_walking:
                break
    finally:
        if sink is not None:
            sink.close()

    render_summary(Console(), runtime, counts)


if __name__ == "__main__":
    main()
