# tests/test_exploration_assist.py

from __future__ import annotations

from typing import List

from env.schema import AssistConfig
from monitoring.bus import EventBus
from monitoring.events import EventType, MonitoringEvent
from nav_core.explore.assist import ExplorationAssist
from nav_core.explore.planner import ExplorationPlanner
from nav_core.explore.state import ExplorationState
from nav_core.testing.fakes import FakeWorld
from nav_core.walker import WaypointWalker, WalkerState
from spec.types import Position


class _Rig:
    def __init__(self, world: FakeWorld, **assist_options) -> None:
        self.world = world
        self.bus = EventBus()
        self.events: List[MonitoringEvent] = []
        self.bus.subscribe(self.events.append)
        self.walker = WaypointWalker(world, bus=self.bus)
        self.planner = ExplorationPlanner(world, ExplorationState(), bus=self.bus)
        self.assist = ExplorationAssist(
            world, self.walker, self.planner, AssistConfig(**assist_options), bus=self.bus
        )

    def types(self) -> List[EventType]:
        return [e.event_type for e in self.events]


def test_disabled_by_default() -> None:
    rig = _Rig(FakeWorld())
    rig.assist.update()

    assert rig.planner.current_target() is None
    assert not rig.walker.is_walking
    assert rig.assist.status() == "Explorer integration disabled"


def test_assistance_inserts_beneficial_detour() -> None:
    rig = _Rig(FakeWorld(Position(0.0, 0.0)), assistance_enabled=True)
    rig.walker.start_walking_path([Position(0.0, 0.0), Position(40.0, 0.0)])
    rig.walker.advance()
    assert rig.assist.status() == "Ready to assist pathfinding"

    rig.assist.update()

    target = rig.planner.current_target()
    assert target is not None
    assert rig.walker.current_waypoint() == target
    assert rig.walker.path == (Position(0.0, 0.0), target, Position(40.0, 0.0))
    assert rig.assist.exploration_active
    assert rig.assist.status() == "Assisting pathfinding with exploration"
    assert EventType.EXPLORATION_DETOUR_INSERTED in rig.types()


def test_assistance_is_throttled_and_not_repeated() -> None:
    rig = _Rig(FakeWorld(Position(0.0, 0.0)), assistance_enabled=True, check_interval=2.0)
    rig.walker.start_walking_path([Position(0.0, 0.0), Position(40.0, 0.0)])
    rig.walker.advance()

    rig.assist.update()
    assert len(rig.walker.path) == 3

    rig.assist.update()
    rig.world.clock.advance(2.0)
    rig.assist.update()

    # the held target is not spliced in a second time
    assert len(rig.walker.path) == 3
    assert rig.types().count(EventType.EXPLORATION_DETOUR_INSERTED) == 1


def test_detour_completion_clears_active_flag() -> None:
    rig = _Rig(FakeWorld(Position(0.0, 0.0)), assistance_enabled=True)
    rig.walker.start_walking_path([Position(0.0, 0.0), Position(40.0, 0.0)])
    rig.walker.advance()
    rig.assist.update()
    target = rig.planner.current_target()

    rig.world.teleport(target.x, target.y)
    rig.assist.update()

    assert not rig.assist.exploration_active


def test_far_target_is_not_beneficial() -> None:
    rig = _Rig(FakeWorld(Position(0.0, 0.0)), detour_slack=15.0)
    rig.walker.start_walking_path([Position(0.0, 0.0), Position(10.0, 0.0)])
    rig.walker.advance()

    # direct distance 10, detour distance 30: 30 >= 10 + 15
    assert not rig.assist.is_beneficial(Position(40.0, 0.0))
    assert rig.assist.is_beneficial(Position(20.0, 0.0))


def test_no_detour_while_walking_to_start() -> None:
    rig = _Rig(FakeWorld(Position(30.0, 30.0)), assistance_enabled=True)
    rig.walker.start_walking_path([Position(0.0, 0.0), Position(10.0, 0.0)])

    rig.assist.update()

    assert rig.planner.current_target() is None
    assert len(rig.walker.path) == 2


def test_auto_explore_sends_idle_walker_to_target() -> None:
    rig = _Rig(FakeWorld(Position(0.0, 0.0)), auto_explore_enabled=True)
    assert rig.assist.status() == "Looking for exploration targets..."

    rig.assist.update()

    target = rig.planner.current_target()
    assert target is not None
    assert rig.walker.is_walking
    assert rig.walker.path[-1] == target
    assert rig.assist.exploration_active
    assert rig.assist.status() == "Exploring area..."


def test_disabling_auto_explore_stops_its_walk() -> None:
    rig = _Rig(FakeWorld(Position(0.0, 0.0)), auto_explore_enabled=True)
    rig.assist.update()
    assert rig.walker.is_walking

    rig.assist.set_auto_explore_enabled(False)

    assert rig.walker.state is WalkerState.STOPPED
    assert not rig.assist.exploration_active


def test_disabling_auto_explore_leaves_recorded_path_alone() -> None:
    rig = _Rig(FakeWorld(Position(0.0, 0.0)), auto_explore_enabled=True)
    rig.walker.start_walking_path([Position(0.0, 0.0), Position(10.0, 0.0)])

    rig.assist.set_auto_explore_enabled(False)

    assert rig.walker.is_walking


def test_clear_drops_target() -> None:
    rig = _Rig(FakeWorld(Position(0.0, 0.0)), auto_explore_enabled=True)
    rig.assist.update()

    rig.assist.clear()

    assert rig.planner.current_target() is None
    assert not rig.assist.exploration_active
