"""Implementation of the 'check' command.

Reports whether the repository is ready for a release: clean working
tree, on a release branch, and (as a warning only) a configured remote.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape

from release_pilot.cli.output import CHECK, CROSS, WARN, print_check, print_header
from release_pilot.config import load_config
from release_pilot.exceptions import GitError, ReleasePilotError
from release_pilot.vcs import GitRepository

if TYPE_CHECKING:
    from rich.console import Console

    from release_pilot.config import ReleasePilotConfig
    from release_pilot.vcs import VersionControl


def check_readiness(repo: VersionControl, config: ReleasePilotConfig, console: Console) -> bool:
    """Run the readiness probes against a repository.

    Returns:
        Whether a release can be cut.
    """
    ready = True

    try:
        if repo.is_clean():
            print_check(console, CHECK, "Working tree is clean")
        else:
            print_check(console, CROSS, "Working tree has uncommitted changes")
            ready = False
    except GitError:
        print_check(console, CROSS, "Cannot run git status")
        ready = False

    expected = " or ".join(config.release_branches)
    try:
        branch = repo.current_branch()
    except GitError:
        print_check(console, CROSS, "Cannot determine current branch")
        ready = False
    else:
        if branch in config.release_branches:
            print_check(console, CHECK, f"On branch: [bold]{escape(branch)}[/]")
        else:
            print_check(console, WARN, f"On branch: [yellow]{escape(branch)}[/] (expected {escape(expected)})")
            ready = False

    if repo.has_remote(config.remote):
        print_check(console, CHECK, f'Remote "{escape(config.remote)}" is configured')
    else:
        print_check(console, WARN, f'No remote "{escape(config.remote)}": tag will not be pushed')

    return ready


def run_check(path: str | None, console: Console, err_console: Console) -> None:
    """Run the check command.

    Args:
        path: Optional path to project directory
        console: Console for standard output
        err_console: Console for error output

    Raises:
        SystemExit: With status 1 when the repository is not ready.
    """
    print_header(console, "Release Readiness Check")
    project_path = Path(path).resolve() if path else Path.cwd()

    try:
        config = load_config(project_path)
        repo = GitRepository(project_path)
    except ReleasePilotError as e:
        print_check(console, CROSS, escape(str(e)))
        console.print()
        err_console.print("[red bold]Not ready.[/] Fix the issues above first.")
        raise SystemExit(1) from e

    ready = check_readiness(repo, config, console)
    console.print()

    if ready:
        console.print("  [green bold]Ready to release.[/]")
        return

    err_console.print("[red bold]Not ready.[/] Fix the issues above first.")
    raise SystemExit(1)
