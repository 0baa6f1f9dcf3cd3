# WalkerConfig, ExplorerConfig, AssistConfig, NavConfig dataclasses
# src/env/schema.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


@dataclass
class WalkerConfig:
    """Tunables for the waypoint walker."""
    arrival_threshold: float = 1.2           # planar distance counted as "reached"
    start_distance_threshold: float = 3.0    # farther than this → walk to path start first
    move_request_interval: float = 0.1       # seconds between move requests
    stuck_threshold: float = 2.0             # seconds without movement → stuck
    stuck_check_interval: float = 0.5        # seconds between position samples
    stuck_min_movement: float = 0.5          # sampled movement below this counts as "not moving"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WalkerConfig":
        """Convenience constructor from a plain dict (e.g. YAML)."""
        return cls(
            arrival_threshold=float(data.get("arrival_threshold", 1.2)),
            start_distance_threshold=float(data.get("start_distance_threshold", 3.0)),
            move_request_interval=float(data.get("move_request_interval", 0.1)),
            stuck_threshold=float(data.get("stuck_threshold", 2.0)),
            stuck_check_interval=float(data.get("stuck_check_interval", 0.5)),
            stuck_min_movement=float(data.get("stuck_min_movement", 0.5)),
        )


@dataclass
class ExplorerConfig:
    """Tunables for exploration memory and target selection."""
    chunk_size: int = 5                       # cells per chunk side
    grid_size: float = 1.0                    # world units per cell
    exploration_radius_cells: int = 5         # scan radius, in cells
    visit_cooldown: float = 3000.0            # seconds a chosen chunk stays excluded
    arrival_threshold: float = 3.0            # planar distance that clears the target
    interest_ratio: float = 0.02              # unexplored fraction keeping a chunk "interesting"
    region_origin: Tuple[float, float] = (-1000.0, -1000.0)
    region_extent: float = 2000.0             # side of the square chunk-space root region
    region_depth: int = 20

    @property
    def exploration_radius(self) -> float:
        return self.exploration_radius_cells * self.grid_size

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExplorerConfig":
        origin = data.get("region_origin", (-1000.0, -1000.0))
        return cls(
            chunk_size=int(data.get("chunk_size", 5)),
            grid_size=float(data.get("grid_size", 1.0)),
            exploration_radius_cells=int(data.get("exploration_radius_cells", 5)),
            visit_cooldown=float(data.get("visit_cooldown", 3000.0)),
            arrival_threshold=float(data.get("arrival_threshold", 3.0)),
            interest_ratio=float(data.get("interest_ratio", 0.02)),
            region_origin=(float(origin[0]), float(origin[1])),
            region_extent=float(data.get("region_extent", 2000.0)),
            region_depth=int(data.get("region_depth", 20)),
        )


@dataclass
class AssistConfig:
    """Tunables for splicing exploration targets into walked paths."""
    check_interval: float = 2.0        # seconds between planner consultations
    detour_slack: float = 15.0         # allowed extra distance for a detour
    completion_delay: float = 1.0      # pause after reaching an exploration target
    assistance_enabled: bool = False
    auto_explore_enabled: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AssistConfig":
        return cls(
            check_interval=float(data.get("check_interval", 2.0)),
            detour_slack=float(data.get("detour_slack", 15.0)),
            completion_delay=float(data.get("completion_delay", 1.0)),
            assistance_enabled=bool(data.get("assistance_enabled", False)),
            auto_explore_enabled=bool(data.get("auto_explore_enabled", False)),
        )


@dataclass
class NavConfig:
    """Resolved navigation configuration."""
    walker: WalkerConfig = field(default_factory=WalkerConfig)
    explorer: ExplorerConfig = field(default_factory=ExplorerConfig)
    assist: AssistConfig = field(default_factory=AssistConfig)
