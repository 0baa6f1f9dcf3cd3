# tests/test_stuck_detector.py

from __future__ import annotations

from nav_core.stuck import StuckDetector
from spec.types import Position


def _detector() -> StuckDetector:
    d = StuckDetector(threshold=2.0, check_interval=0.5, min_movement=0.5)
    d.reset(0.0)
    return d


def test_stationary_agent_is_reported_after_threshold() -> None:
    d = _detector()
    pos = Position(0.0, 0.0)

    results = {}
    t = 0.0
    while t <= 3.0:
        results[t] = d.check(pos, t)
        t += 0.25

    # first sample at 0.5, stationary from there on
    assert not any(stuck for ts, stuck in results.items() if ts < 2.5)
    assert results[2.5]


def test_moving_agent_is_never_stuck() -> None:
    d = _detector()
    for i in range(40):
        t = i * 0.25
        assert not d.check(Position(t * 2.0, 0.0), t)


def test_calls_between_samples_are_ignored() -> None:
    d = _detector()
    assert not d.check(Position(0.0, 0.0), 0.1)
    assert d.last_sample is None
    assert not d.check(Position(0.0, 0.0), 0.5)
    assert d.last_sample == Position(0.0, 0.0)


def test_reset_restarts_window() -> None:
    d = _detector()
    pos = Position(1.0, 1.0)
    for t in (0.5, 1.0, 1.5, 2.0):
        d.check(pos, t)
    d.reset(2.0)

    assert d.stationary_since is None
    assert not d.check(pos, 2.5)
    assert not d.check(pos, 3.0)
