"""Test helpers for nav_core (in-memory world and clock)."""

from __future__ import annotations

from .fakes import FakeClock, FakeWorld, MoveRequest

__all__ = ["FakeClock", "FakeWorld", "MoveRequest"]
