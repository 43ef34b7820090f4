"""Implementation of the 'changelog' command.

Previews the changelog section for the next release without changing
anything.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from release_pilot.cli.commands._common import fail, open_project
from release_pilot.cli.output import print_changelog, print_header
from release_pilot.core.changelog import render_changelog
from release_pilot.core.release import plan_release, resolve_repository_url
from release_pilot.exceptions import ReleasePilotError

if TYPE_CHECKING:
    from rich.console import Console


def run_changelog(
    path: str | None,
    as_json: bool,
    console: Console,
    err_console: Console,
) -> None:
    """Run the changelog command.

    Args:
        path: Optional path to project directory
        as_json: Emit a JSON object instead of formatted output
        console: Console for standard output
        err_console: Console for error output
    """
    try:
        project = open_project(path)
        plan = plan_release(project.repo, project.manifest)
        changelog = render_changelog(
            plan.next_version,
            plan.commits,
            plan.previous_tag,
            tag_prefix=project.config.tag_prefix,
            repository_url=resolve_repository_url(project.repo, project.config),
        )
    except ReleasePilotError as e:
        raise fail(err_console, e) from e

    if as_json:
        payload: dict[str, Any] = {
            "version": plan.next_version,
            "bumpType": str(plan.bump_type),
            "breaking": plan.breaking,
            "commits": [pc.to_dict() for pc in plan.commits],
            "changelog": changelog,
        }
        console.out(json.dumps(payload, indent=2, ensure_ascii=False), highlight=False)
        return

    print_header(console, "Changelog Preview")
    console.print(f"  Next version: [bold]{plan.next_version}[/]  ({plan.bump_type} bump)\n")
    print_changelog(console, changelog)
