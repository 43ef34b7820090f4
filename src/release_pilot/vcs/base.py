"""Version-control types shared by the core and the git backend."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class RawCommit:
    """A commit record exactly as read from history."""

    sha: str
    subject: str
    body: str = ""


@runtime_checkable
class VersionControl(Protocol):
    """What the release flow needs from a repository.

    :class:`~release_pilot.vcs.git.GitRepository` is the production
    implementation; tests substitute an in-memory fake.
    """

    def latest_tag(self) -> str | None:
        """Most recent release tag, or ``None`` when there is none."""
        ...

    def commits_since(self, tag: str | None) -> Sequence[RawCommit]:
        """Non-merge commits after ``tag`` (all commits if ``None``), oldest first."""
        ...

    def tag_exists(self, name: str) -> bool: ...

    def create_tag(self, name: str, message: str) -> None: ...

    def has_remote(self, remote: str) -> bool: ...

    def remote_url(self, remote: str) -> str | None: ...

    def push_tag(self, name: str, remote: str) -> None: ...

    def commit(self, paths: Sequence[str], message: str) -> None: ...

    def is_clean(self) -> bool: ...

    def current_branch(self) -> str: ...
