"""Core business logic for release-pilot.

This module contains the fundamental building blocks:
- Conventional commit parsing and bump calculation
- Semantic version arithmetic
- Changelog rendering
- Release orchestration
"""

from __future__ import annotations

from release_pilot.core.changelog import (
    ChangelogFile,
    format_commit_for_changelog,
    merge_changelog,
    render_changelog,
)
from release_pilot.core.commits import (
    CommitCategory,
    ParsedCommit,
    calculate_bump,
    get_breaking_changes,
    group_commits_by_type,
    parse_commits,
)
from release_pilot.core.release import (
    ReleasePlan,
    Releaser,
    ReleaseResult,
    ReleaseState,
    bump_version,
    plan_release,
)
from release_pilot.core.version import BumpType, Version, next_version, parse_version

__all__ = [
    # Version
    "BumpType",
    # Changelog
    "ChangelogFile",
    # Commits
    "CommitCategory",
    "ParsedCommit",
    # Release
    "ReleasePlan",
    "ReleaseResult",
    "ReleaseState",
    "Releaser",
    "Version",
    "bump_version",
    "calculate_bump",
    "format_commit_for_changelog",
    "get_breaking_changes",
    "group_commits_by_type",
    "merge_changelog",
    "next_version",
    "parse_commits",
    "parse_version",
    "plan_release",
    "render_changelog",
]
