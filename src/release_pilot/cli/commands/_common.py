"""Shared setup for CLI commands."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape

from release_pilot.config import ReleasePilotConfig, load_config
from release_pilot.core.changelog import ChangelogFile
from release_pilot.exceptions import ReleasePilotError
from release_pilot.project import ManifestStore, detect_manifest
from release_pilot.vcs import GitRepository, VersionControl

if TYPE_CHECKING:
    from rich.console import Console


@dataclass
class Project:
    path: Path
    config: ReleasePilotConfig
    repo: VersionControl
    manifest: ManifestStore
    changelog: ChangelogFile


def open_project(path: str | None) -> Project:
    """Load configuration and collaborators for the project at ``path``.

    Raises:
        ReleasePilotError: If the config, repository or manifest is unusable.
    """
    project_path = Path(path).resolve() if path else Path.cwd()
    config = load_config(project_path)
    repo = GitRepository(project_path)
    manifest = detect_manifest(project_path, config.manifest_path)
    return Project(
        path=project_path,
        config=config,
        repo=repo,
        manifest=manifest,
        changelog=ChangelogFile(project_path / config.changelog_path),
    )


def fail(err_console: Console, error: ReleasePilotError | str) -> SystemExit:
    """Print a one-line error and return the exit to raise."""
    err_console.print(f"[red]Error:[/] {escape(str(error))}", soft_wrap=True)
    return SystemExit(1)
