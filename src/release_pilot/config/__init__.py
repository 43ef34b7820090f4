"""Configuration management for release-pilot."""

from __future__ import annotations

from release_pilot.config.loader import load_config
from release_pilot.config.models import ReleasePilotConfig

__all__ = [
    "ReleasePilotConfig",
    "load_config",
]
