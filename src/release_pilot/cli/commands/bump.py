"""Implementation of the 'bump' command.

The bump command computes the next version from commit history and
writes it to the project manifest. It does not commit or tag.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from release_pilot.cli.commands._common import fail, open_project
from release_pilot.cli.output import print_bump_reason, print_dry_run_banner, print_header, print_version_bump
from release_pilot.core.release import bump_version
from release_pilot.exceptions import ReleasePilotError

if TYPE_CHECKING:
    from rich.console import Console

    from release_pilot.core.version import BumpType


def run_bump(
    path: str | None,
    dry_run: bool,
    force: BumpType | None,
    console: Console,
    err_console: Console,
) -> None:
    """Run the bump command.

    Args:
        path: Optional path to project directory
        dry_run: Compute the version without writing it
        force: Bump kind overriding the one derived from commits
        console: Console for standard output
        err_console: Console for error output
    """
    print_header(console, "Version Bump")
    if dry_run:
        print_dry_run_banner(console)

    try:
        project = open_project(path)
        plan = bump_version(project.repo, project.manifest, dry_run=dry_run, force=force)
    except ReleasePilotError as e:
        raise fail(err_console, e) from e

    print_version_bump(console, plan)
    print_bump_reason(console, plan.commits)

    if dry_run:
        console.print(f"  [dim](skipped)[/] Would write version {plan.next_version} to {project.manifest.path.name}")
    else:
        console.print(
            f"  [green]✓[/] Updated {project.manifest.path.name} "
            f"[dim]{plan.current_version} → {plan.next_version}[/]"
        )
