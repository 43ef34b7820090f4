"""Version-control access."""

from __future__ import annotations

from release_pilot.vcs.base import RawCommit, VersionControl
from release_pilot.vcs.git import GitRepository

__all__ = [
    "GitRepository",
    "RawCommit",
    "VersionControl",
]
