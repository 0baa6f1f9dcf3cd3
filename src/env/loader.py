from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .schema import AssistConfig, ExplorerConfig, NavConfig, WalkerConfig


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class ConfigError(ValueError):
    """Raised when a navigation config value is out of range."""


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

PROJECT_ROOT = Path(__file__).resolve().parents[2]
CONFIG_ROOT = PROJECT_ROOT / "config"
DEFAULT_CONFIG_PATH = CONFIG_ROOT / "navigation.yaml"


def _load_yaml(path: Path) -> Dict[str, Any]:
    """Load a YAML mapping from `path`."""
    if not path.exists():
        raise FileNotFoundError(f"Missing config file: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected mapping at top of {path}, got {type(data)}")
    return data


def _section(raw: Dict[str, Any], name: str) -> Dict[str, Any]:
    """Return raw[name] as a mapping; absent sections are empty."""
    value = raw.get(name)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"Section '{name}' must be a mapping, got {type(value)}")
    return value


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_nav_config(path: Optional[Path] = None) -> NavConfig:
    """
    Main entry point: returns a validated NavConfig.

    Without `path`, reads DEFAULT_CONFIG_PATH, which is resolved relative to
    the source checkout (`<repo>/config/navigation.yaml`). `config/` is not
    part of the installed package, so installed (non-editable) users must
    pass an explicit path.
    """
    raw = _load_yaml(Path(path) if path is not None else DEFAULT_CONFIG_PATH)

    config = NavConfig(
        walker=WalkerConfig.from_dict(_section(raw, "walker")),
        explorer=ExplorerConfig.from_dict(_section(raw, "explorer")),
        assist=AssistConfig.from_dict(_section(raw, "assist")),
    )

    validate_nav_config(config)
    return config


def validate_nav_config(config: NavConfig) -> None:
    """Minimal sanity checks for navigation tunables."""
    walker = config.walker
    positive = {
        "walker.arrival_threshold": walker.arrival_threshold,
        "walker.start_distance_threshold": walker.start_distance_threshold,
        "walker.stuck_threshold": walker.stuck_threshold,
        "walker.stuck_check_interval": walker.stuck_check_interval,
        "explorer.grid_size": config.explorer.grid_size,
        "explorer.arrival_threshold": config.explorer.arrival_threshold,
        "explorer.region_extent": config.explorer.region_extent,
        "assist.check_interval": config.assist.check_interval,
    }
    for name, value in positive.items():
        if value <= 0:
            raise ConfigError(f"{name} must be > 0, got {value}")

    # zero is allowed: a move request on every tick
    if walker.move_request_interval < 0:
        raise ConfigError(
            f"walker.move_request_interval must be >= 0, got {walker.move_request_interval}"
        )

    explorer = config.explorer
    if explorer.chunk_size < 1:
        raise ConfigError(f"explorer.chunk_size must be >= 1, got {explorer.chunk_size}")
    if explorer.region_depth < 0:
        raise ConfigError(f"explorer.region_depth must be >= 0, got {explorer.region_depth}")
    if not 0.0 <= explorer.interest_ratio < 1.0:
        raise ConfigError(
            f"explorer.interest_ratio must be in [0, 1), got {explorer.interest_ratio}"
        )
    if explorer.visit_cooldown < 0:
        raise ConfigError(f"explorer.visit_cooldown must be >= 0, got {explorer.visit_cooldown}")
