"""Changelog rendering and persistence.

Renders one `Keep a Changelog <https://keepachangelog.com/>`_ style
section per release from parsed commits, and prepends it to the
project's changelog file below a standard preamble.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from datetime import UTC, date, datetime
from pathlib import Path

from release_pilot.core.commits import ParsedCommit, get_breaking_changes, group_commits_by_type
from release_pilot.exceptions import ChangelogError
from release_pilot.logging import get_logger

log = get_logger(__name__)

CHANGELOG_PREAMBLE = (
    "# Changelog\n"
    "\n"
    "All notable changes to this project will be documented in this file.\n"
    "\n"
    "The format is based on [Keep a Changelog](https://keepachangelog.com/).\n"
    "\n"
)

BREAKING_HEADING = "### BREAKING CHANGES"

_VERSION_HEADING = re.compile(r"^## ", re.MULTILINE)

# scp-like (git@host:owner/repo.git) and URL-style remotes.
_SCP_REMOTE = re.compile(r"^[\w.-]+@(?P<host>[\w.-]+):(?P<path>.+?)(?:\.git)?/?$")
_URL_REMOTE = re.compile(r"^(?:https?|ssh|git)://(?:[^@/]+@)?(?P<host>[\w.-]+)(?::\d+)?/(?P<path>.+?)(?:\.git)?/?$")


def format_commit_for_changelog(commit: ParsedCommit, *, include_sha: bool = True) -> str:
    """Format a commit as a markdown list item.

    Args:
        commit: Parsed commit.
        include_sha: Append the abbreviated commit id when one is known.

    Returns:
        A line such as ``- **api**: handle null response (abc1234)``.
    """
    scope = f"**{commit.scope}**: " if commit.scope else ""
    sha = f" ({commit.short_sha})" if include_sha and commit.sha else ""
    return f"- {scope}{commit.description}{sha}"


def repository_url_from_remote(remote_url: str | None) -> str | None:
    """Derive a browsable ``https://`` URL from a git remote URL.

    >>> repository_url_from_remote("git@github.com:owner/repo.git")
    'https://github.com/owner/repo'
    """
    if not remote_url:
        return None
    remote_url = remote_url.strip()
    match = _SCP_REMOTE.match(remote_url) or _URL_REMOTE.match(remote_url)
    if not match:
        return None
    return f"https://{match['host']}/{match['path']}"


def reference_link(
    version: str,
    previous_tag: str | None,
    *,
    tag_prefix: str = "v",
    repository_url: str | None = None,
) -> str:
    """Build the trailing link-reference line for a release section."""
    tag = f"{tag_prefix}{version}"
    if repository_url:
        base = repository_url.rstrip("/")
        if previous_tag:
            return f"[{version}]: {base}/compare/{previous_tag}...{tag}"
        return f"[{version}]: {base}/releases/tag/{tag}"
    if previous_tag:
        return f"[{version}]: {previous_tag}...{tag}"
    return f"[{version}]: {tag}"


def render_changelog(
    version: str,
    commits: Sequence[ParsedCommit],
    previous_tag: str | None = None,
    *,
    tag_prefix: str = "v",
    repository_url: str | None = None,
    today: date | None = None,
) -> str:
    """Render the changelog section for a release.

    The output depends only on the arguments and the current UTC date,
    so two calls on the same day produce identical text.

    Args:
        version: Version being released, without prefix.
        commits: Parsed commits, oldest first.
        previous_tag: Tag of the previous release, used for the compare link.
        tag_prefix: Prefix of release tags.
        repository_url: Base URL for the reference link.
        today: Release date; defaults to the current UTC date.

    Returns:
        Markdown text without a trailing newline.
    """
    release_date = today or datetime.now(UTC).date()

    lines = [
        f"## [{version}] - {release_date.isoformat()}",
        "",
    ]

    breaking = get_breaking_changes(commits)
    if breaking:
        lines.append(BREAKING_HEADING)
        lines.append("")
        for pc in breaking:
            lines.append(format_commit_for_changelog(pc, include_sha=False))
        lines.append("")

    for category, commits_of_type in group_commits_by_type(commits).items():
        lines.append(f"### {category.label}")
        lines.append("")
        for pc in commits_of_type:
            lines.append(format_commit_for_changelog(pc))
        lines.append("")

    lines.append(
        reference_link(
            version,
            previous_tag,
            tag_prefix=tag_prefix,
            repository_url=repository_url,
        )
    )

    return "\n".join(lines)


def strip_preamble(content: str) -> str:
    """Return the prior release sections of a changelog, without preamble.

    Everything before the first ``## `` heading is preamble. A file with no
    release sections yields an empty string.
    """
    match = _VERSION_HEADING.search(content)
    if not match:
        return ""
    return content[match.start() :].strip()


def merge_changelog(new_section: str, existing: str | None) -> str:
    """Prepend a release section to an existing changelog document."""
    previous = strip_preamble(existing) if existing else ""
    body = f"{new_section}\n\n{previous}" if previous else new_section
    return f"{CHANGELOG_PREAMBLE}{body}\n"


def count_lines(text: str) -> int:
    return len(text.split("\n"))


class ChangelogFile:
    """The changelog document on disk."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def read(self) -> str | None:
        """Return the current contents, or ``None`` if the file does not exist."""
        if not self.path.exists():
            return None
        try:
            return self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise ChangelogError(f"Cannot read {self.path}: {e}") from e

    def write(self, content: str) -> None:
        try:
            self.path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise ChangelogError(f"Cannot write {self.path}: {e}") from e
        log.debug("wrote changelog", path=str(self.path), lines=count_lines(content))
