"""Conventional commit parsing and bump calculation.

A commit subject is matched against::

    type(scope)!: description

Subjects that do not follow the convention are kept under the ``other``
category with the whole subject as the description. A ``BREAKING CHANGE``
phrase anywhere in the body marks the commit as breaking regardless of
the subject.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any

from release_pilot.core.version import BumpType
from release_pilot.logging import get_logger
from release_pilot.vcs.base import RawCommit

log = get_logger(__name__)

COMMIT_PATTERN: re.Pattern[str] = re.compile(
    r"^(?P<type>[a-z]+)"
    r"(?:\((?P<scope>[^)]+)\))?"
    r"(?P<breaking>!)?"
    r"\s*:\s*"
    r"(?P<description>.+)$"
)

# Unanchored: matches footers and inline mentions alike.
BREAKING_BODY_PATTERN: re.Pattern[str] = re.compile(r"BREAKING CHANGE[:\s]", re.IGNORECASE)


class CommitCategory(Enum):
    """Closed registry of changelog categories.

    Each member's value is ``(display label, display order)``. Tokens not
    in the registry fall back to :attr:`OTHER`.
    """

    FEAT = ("Features", 0)
    FIX = ("Bug Fixes", 1)
    PERF = ("Performance", 2)
    REFACTOR = ("Refactoring", 3)
    DOCS = ("Documentation", 4)
    TEST = ("Tests", 5)
    CI = ("CI / CD", 6)
    CHORE = ("Chores", 7)
    BUILD = ("Build System", 8)
    STYLE = ("Style", 9)
    REVERT = ("Reverts", 10)
    OTHER = ("Other Changes", 11)

    @property
    def token(self) -> str:
        return self.name.lower()

    @property
    def label(self) -> str:
        return self.value[0]

    @property
    def order(self) -> int:
        return self.value[1]

    @classmethod
    def from_token(cls, token: str) -> CommitCategory:
        """Look up a category by its commit type token."""
        try:
            return cls[token.upper()]
        except KeyError:
            return cls.OTHER


@dataclass(frozen=True)
class SubjectMatch:
    """Structured pieces of a subject line that follows the convention."""

    commit_type: str
    scope: str | None
    breaking: bool
    description: str


def match_subject(subject: str) -> SubjectMatch | None:
    """Match a subject line against the conventional commit grammar.

    Returns:
        A :class:`SubjectMatch`, or ``None`` if the subject is free text.
    """
    match = COMMIT_PATTERN.match(subject.strip())
    if not match:
        return None
    return SubjectMatch(
        commit_type=match.group("type").lower(),
        scope=match.group("scope"),
        breaking=bool(match.group("breaking")),
        description=match.group("description").strip(),
    )


@dataclass(frozen=True)
class ParsedCommit:
    """A commit classified for version bumping and changelog rendering.

    Attributes:
        sha: Commit identifier, possibly empty.
        category: Lowercase type token, or ``"other"`` for free-text subjects.
        scope: Text in parentheses after the type, if any.
        description: Text after the colon, or the whole subject.
        body: Commit body, trimmed.
        is_breaking: ``!`` marker present or a breaking phrase in the body.
        is_conventional: Whether the subject followed the convention.
    """

    sha: str
    category: str
    description: str
    scope: str | None = None
    body: str = ""
    is_breaking: bool = False
    is_conventional: bool = False

    @classmethod
    def from_raw(cls, raw: RawCommit) -> ParsedCommit | None:
        """Classify a raw commit record.

        Returns:
            The parsed commit, or ``None`` when the subject is empty.
        """
        sha = (raw.sha or "").strip()
        subject = (raw.subject or "").strip()
        body = (raw.body or "").strip()

        if not subject:
            return None

        body_breaking = bool(BREAKING_BODY_PATTERN.search(body))
        matched = match_subject(subject)

        if matched is None:
            return cls(
                sha=sha,
                category=CommitCategory.OTHER.token,
                description=subject,
                body=body,
                is_breaking=body_breaking,
            )

        return cls(
            sha=sha,
            category=matched.commit_type,
            scope=matched.scope,
            description=matched.description,
            body=body,
            is_breaking=matched.breaking or body_breaking,
            is_conventional=True,
        )

    @property
    def short_sha(self) -> str:
        return self.sha[:7]

    @property
    def section(self) -> CommitCategory:
        """Changelog section this commit is listed under."""
        return CommitCategory.from_token(self.category)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def parse_commits(raw_commits: Iterable[RawCommit]) -> list[ParsedCommit]:
    """Parse raw commits, dropping those with an empty subject.

    Input order is preserved.
    """
    parsed = [pc for pc in (ParsedCommit.from_raw(raw) for raw in raw_commits) if pc is not None]
    log.debug("parsed commits", count=len(parsed))
    return parsed


def bump_for_commit(commit: ParsedCommit) -> BumpType:
    """Bump kind a single commit asks for."""
    if commit.is_breaking:
        return BumpType.MAJOR
    if commit.category == CommitCategory.FEAT.token:
        return BumpType.MINOR
    return BumpType.PATCH


def calculate_bump(commits: Iterable[ParsedCommit], override: BumpType | None = None) -> BumpType:
    """Decide the release bump kind.

    Any breaking commit means ``MAJOR``, otherwise any ``feat`` means
    ``MINOR``, otherwise ``PATCH`` (including when there are no commits).

    Args:
        commits: Parsed commits since the last release.
        override: Caller-forced bump kind; when given the commits are not
            consulted.

    Returns:
        The bump kind.
    """
    if override is not None:
        return BumpType(override)
    return max(
        (bump_for_commit(pc) for pc in commits),
        key=lambda bump: bump.precedence,
        default=BumpType.PATCH,
    )


def get_breaking_changes(commits: Iterable[ParsedCommit]) -> list[ParsedCommit]:
    """Return breaking commits in input order."""
    return [pc for pc in commits if pc.is_breaking]


def has_breaking_changes(commits: Iterable[ParsedCommit]) -> bool:
    return any(pc.is_breaking for pc in commits)


def group_commits_by_type(commits: Iterable[ParsedCommit]) -> dict[CommitCategory, list[ParsedCommit]]:
    """Group commits by changelog section.

    Sections come out in registry display order; commits within a section
    keep their input order. Empty sections are omitted.
    """
    grouped: dict[CommitCategory, list[ParsedCommit]] = {}
    for pc in commits:
        grouped.setdefault(pc.section, []).append(pc)
    return {category: grouped[category] for category in sorted(grouped, key=lambda c: c.order)}


def count_by_category(commits: Sequence[ParsedCommit], category: CommitCategory) -> int:
    return sum(1 for pc in commits if pc.section is category)
