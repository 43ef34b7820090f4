"""Implementation of the 'release' command.

Runs the whole flow: bump version, prepend the changelog, commit, tag
and push.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape

from release_pilot.cli.commands._common import fail, open_project
from release_pilot.cli.output import (
    print_bump_reason,
    print_changelog,
    print_dry_run_banner,
    print_header,
    print_release_summary,
    print_version_bump,
)
from release_pilot.core.release import Releaser, ReleaseState
from release_pilot.exceptions import ReleasePilotError

if TYPE_CHECKING:
    from rich.console import Console

    from release_pilot.core.release import ReleaseResult
    from release_pilot.core.version import BumpType


def run_release(
    path: str | None,
    dry_run: bool,
    force: BumpType | None,
    push: bool,
    console: Console,
    err_console: Console,
) -> None:
    """Run the release command.

    Args:
        path: Optional path to project directory
        dry_run: Compute and validate everything without changing anything
        force: Bump kind overriding the one derived from commits
        push: Push the tag when a remote is configured
        console: Console for standard output
        err_console: Console for error output
    """
    print_header(console, "release-pilot")
    if dry_run:
        print_dry_run_banner(console)

    try:
        project = open_project(path)
    except ReleasePilotError as e:
        raise fail(err_console, e) from e

    releaser = Releaser(project.repo, project.manifest, project.changelog, project.config)
    try:
        result = releaser.run(dry_run=dry_run, force=force, push=push)
    except ReleasePilotError as e:
        if releaser.result is not None:
            _print_plan(console, releaser.result)
        if releaser.state not in (ReleaseState.IDLE, ReleaseState.VERSION_COMPUTED, ReleaseState.CHANGELOG_BUILT):
            err_console.print(
                f"[yellow]Release stopped after step: {escape(releaser.state.value)}. "
                "Completed steps were not rolled back.[/]",
                soft_wrap=True,
            )
        raise fail(err_console, e) from e

    _print_plan(console, result)
    print_release_summary(console, result)


def _print_plan(console: Console, result: ReleaseResult) -> None:
    print_version_bump(console, result.plan)
    print_bump_reason(console, result.plan.commits)
    if result.changelog:
        print_changelog(console, result.changelog)
