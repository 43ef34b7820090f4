"""Rich terminal output for release-pilot commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.panel import Panel
from rich.text import Text

from release_pilot.core.commits import CommitCategory, count_by_category, get_breaking_changes
from release_pilot.core.version import BumpType

if TYPE_CHECKING:
    from rich.console import Console

    from release_pilot.core.commits import ParsedCommit
    from release_pilot.core.release import ReleasePlan, ReleaseResult

ACCENT = "bold #3B82F6"

BUMP_STYLES = {
    BumpType.MAJOR: "bold red",
    BumpType.MINOR: "bold yellow",
    BumpType.PATCH: "bold green",
}

CHECK = "[green]✓[/]"
CROSS = "[red]✗[/]"
WARN = "[yellow]![/]"


def print_header(console: Console, title: str) -> None:
    console.print()
    console.rule(f"[{ACCENT}]{title}[/]")
    console.print()


def print_dry_run_banner(console: Console) -> None:
    console.print(
        Panel(
            "[bold]DRY RUN[/] - no changes will be made",
            border_style="yellow",
            expand=False,
        )
    )


def print_version_bump(console: Console, plan: ReleasePlan) -> None:
    style = BUMP_STYLES.get(plan.bump_type, "bold")
    forced = " [dim](forced)[/]" if plan.forced else ""
    console.print(
        f"  [dim]{plan.current_version}[/]  →  [{ACCENT}]{plan.next_version}[/]  "
        f"[{style}]({plan.bump_type})[/]{forced}"
    )


def print_bump_reason(console: Console, commits: list[ParsedCommit]) -> None:
    breaking = len(get_breaking_changes(commits))
    features = count_by_category(commits, CommitCategory.FEAT)
    fixes = count_by_category(commits, CommitCategory.FIX)

    console.print(f"  • {len(commits)} commits analysed")
    if breaking:
        console.print(f"  • [bold red]{breaking} breaking change(s)[/]")
    if features:
        console.print(f"  • [yellow]{features} new feature(s)[/]")
    if fixes:
        console.print(f"  • [green]{fixes} bug fix(es)[/]")
    console.print()


def print_changelog(console: Console, changelog: str) -> None:
    """Print a rendered changelog section with light highlighting."""
    for line in changelog.split("\n"):
        if line.startswith("## "):
            console.print(Text(line, style=ACCENT))
        elif line.startswith("### "):
            console.print(Text(line, style="bold cyan"))
        elif line.startswith("- "):
            console.print(Text(f"  • {line[2:]}"))
        elif line.startswith("["):
            console.print(Text(line, style="dim"))
        else:
            console.print(Text(line))


def print_release_summary(console: Console, result: ReleaseResult) -> None:
    plan = result.plan
    if result.pushed:
        push_line = f"{CHECK} Pushed [{ACCENT}]{result.tag}[/]"
    elif result.push_skipped:
        push_line = f"{WARN} Push skipped: {result.push_skipped}"
    else:
        push_line = f"{WARN} Push disabled"

    lines = [
        f"{CHECK} Changelog: {result.changelog_lines} lines",
        f"{CHECK} Version: {plan.current_version} → [{ACCENT}]{plan.next_version}[/]",
        f"{CHECK} Commit: {result.commit_message}",
        f"{CHECK} Tag: [{ACCENT}]{result.tag}[/]",
        push_line,
    ]
    if result.dry_run:
        title = f"[yellow]Dry Run: release {plan.next_version}[/]"
        border = "yellow"
    else:
        title = f"[green]Released {plan.next_version}[/]"
        border = "green"

    console.print()
    console.print(Panel("\n".join(lines), title=title, border_style=border))


def print_check(console: Console, status: str, message: str) -> None:
    console.print(f"  {status}  {message}")
