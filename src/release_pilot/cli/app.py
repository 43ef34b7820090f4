"""Command-line interface for release-pilot."""

from __future__ import annotations

from typing import Annotated, Optional

import typer
from rich.console import Console

from release_pilot import __version__
from release_pilot.cli.commands.bump import run_bump
from release_pilot.cli.commands.changelog import run_changelog
from release_pilot.cli.commands.check import run_check
from release_pilot.cli.commands.release import run_release
from release_pilot.core.version import BumpType
from release_pilot.logging import configure_logging

app = typer.Typer(
    name="release-pilot",
    help="Automated releases with changelogs from conventional commits.",
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)

PathOption = Annotated[
    Optional[str],
    typer.Option("--path", "-p", help="Project directory (default: current directory)"),
]
DryRunOption = Annotated[
    bool,
    typer.Option("--dry-run", help="Preview all actions without making any changes"),
]
ForceOption = Annotated[
    Optional[BumpType],
    typer.Option("--force", help="Override the bump type derived from commits", case_sensitive=False),
]


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"release-pilot {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="Only log errors")] = False,
    json_log: Annotated[bool, typer.Option("--json-log", help="Emit logs as JSON lines")] = False,
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, is_eager=True, help="Show version and exit"),
    ] = None,
) -> None:
    """Automated releases with changelogs from conventional commits.

    Without a command, runs a release.
    """
    configure_logging(verbose=verbose, quiet=quiet, json_log=json_log)
    if ctx.invoked_subcommand is None:
        run_release(None, False, None, True, console, err_console)


@app.command()
def release(
    path: PathOption = None,
    dry_run: DryRunOption = False,
    force: ForceOption = None,
    push: Annotated[bool, typer.Option("--push/--no-push", help="Push the tag to the remote")] = True,
) -> None:
    """Run the full release flow: bump, changelog, commit, tag, push."""
    run_release(path, dry_run, force, push, console, err_console)


@app.command()
def changelog(
    path: PathOption = None,
    as_json: Annotated[bool, typer.Option("--json", help="Output a JSON object instead of formatted text")] = False,
) -> None:
    """Preview the changelog for the next release without making any changes."""
    run_changelog(path, as_json, console, err_console)


@app.command()
def bump(
    path: PathOption = None,
    dry_run: DryRunOption = False,
    force: ForceOption = None,
) -> None:
    """Bump the manifest version without committing or tagging."""
    run_bump(path, dry_run, force, console, err_console)


@app.command()
def check(path: PathOption = None) -> None:
    """Check that the repository is ready for a release."""
    run_check(path, console, err_console)
