# movement sampling for stuck detection
# src/nav_core/stuck.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from spec.types import Position


@dataclass
class StuckDetector:
    """
    Samples the agent position every `check_interval` seconds.

    The agent counts as stuck once consecutive samples have all moved less
    than `min_movement` for at least `threshold` seconds. Calls between
    samples are free, so check() can run on every tick.
    """

    threshold: float = 2.0
    check_interval: float = 0.5
    min_movement: float = 0.5

    last_sample: Optional[Position] = None
    last_sample_time: float = 0.0
    stationary_since: Optional[float] = None

    def reset(self, now: float) -> None:
        """Start a fresh sampling window at `now`."""
        self.last_sample = None
        self.last_sample_time = now
        self.stationary_since = None

    def check(self, position: Position, now: float) -> bool:
        if now - self.last_sample_time < self.check_interval:
            return False

        stuck = False
        if self.last_sample is not None:
            moved = position.dist_to_ignore_z(self.last_sample)
            if moved < self.min_movement:
                if self.stationary_since is None:
                    self.stationary_since = self.last_sample_time
                stuck = now - self.stationary_since >= self.threshold
            else:
                self.stationary_since = None

        self.last_sample = position
        self.last_sample_time = now
        return stuck
