"""Command-line interface for release-pilot."""

from __future__ import annotations

from release_pilot.cli.app import app

__all__ = ["app"]
