"""Release orchestration.

A release moves through a fixed sequence of states::

    IDLE -> VERSION_COMPUTED -> CHANGELOG_BUILT -> FILES_WRITTEN
         -> COMMITTED -> TAGGED -> PUSHED -> DONE

A failure stops the sequence where it happened. Completed steps are not
rolled back, so :attr:`Releaser.state` tells the caller what is left to
clean up (for example a release commit without a tag).

In dry-run mode every read-only step still runs, including the tag
existence check, but nothing is written, committed, tagged or pushed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Protocol

from release_pilot.core.changelog import (
    count_lines,
    merge_changelog,
    render_changelog,
    repository_url_from_remote,
)
from release_pilot.core.commits import ParsedCommit, calculate_bump, has_breaking_changes, parse_commits
from release_pilot.core.version import BumpType, next_version
from release_pilot.exceptions import ReleasePilotError, TagExistsError
from release_pilot.logging import get_logger

if TYPE_CHECKING:
    from pathlib import Path

    from release_pilot.config.models import ReleasePilotConfig
    from release_pilot.project import ManifestStore
    from release_pilot.vcs.base import VersionControl

log = get_logger(__name__)

TAG_EXCERPT_LENGTH = 500


class ChangelogStore(Protocol):
    path: Path

    def read(self) -> str | None: ...

    def write(self, content: str) -> None: ...


class ReleaseState(Enum):
    IDLE = "idle"
    VERSION_COMPUTED = "version computed"
    CHANGELOG_BUILT = "changelog built"
    FILES_WRITTEN = "files written"
    COMMITTED = "committed"
    TAGGED = "tagged"
    PUSHED = "pushed"
    DONE = "done"


@dataclass(frozen=True)
class ReleasePlan:
    """Everything derived from history before anything is written."""

    current_version: str
    next_version: str
    bump_type: BumpType
    commits: list[ParsedCommit]
    previous_tag: str | None
    forced: bool = False

    @property
    def breaking(self) -> bool:
        return has_breaking_changes(self.commits)


@dataclass
class ReleaseResult:
    plan: ReleasePlan
    tag: str
    changelog: str = ""
    changelog_lines: int = 0
    commit_message: str = ""
    pushed: bool = False
    push_skipped: str | None = None
    dry_run: bool = False
    completed: list[ReleaseState] = field(default_factory=list)


def plan_release(
    vcs: VersionControl,
    manifest: ManifestStore,
    *,
    force: BumpType | None = None,
) -> ReleasePlan:
    """Read history and the manifest and compute the next version.

    Raises:
        ManifestError: If the manifest cannot be read.
        InvalidVersionError: If the manifest version is not strict semver.
    """
    previous_tag = vcs.latest_tag()
    commits = parse_commits(vcs.commits_since(previous_tag))
    current = manifest.read_version()
    bump_type = calculate_bump(commits, override=force)
    plan = ReleasePlan(
        current_version=current,
        next_version=next_version(current, bump_type),
        bump_type=bump_type,
        commits=commits,
        previous_tag=previous_tag,
        forced=force is not None,
    )
    log.info(
        "computed next version",
        current=plan.current_version,
        next=plan.next_version,
        bump=str(plan.bump_type),
        commits=len(commits),
        previous_tag=previous_tag,
    )
    return plan


def bump_version(
    vcs: VersionControl,
    manifest: ManifestStore,
    *,
    dry_run: bool = False,
    force: BumpType | None = None,
) -> ReleasePlan:
    """Compute the next version and write it to the manifest."""
    plan = plan_release(vcs, manifest, force=force)
    if not dry_run:
        manifest.write_version(plan.next_version)
        log.info("wrote manifest version", path=str(manifest.path), version=plan.next_version)
    return plan


def resolve_repository_url(vcs: VersionControl, config: ReleasePilotConfig) -> str | None:
    """Configured repository URL, else one derived from the remote."""
    if config.repository_url:
        return config.repository_url
    return repository_url_from_remote(vcs.remote_url(config.remote))


def tag_message(tag: str, changelog: str) -> str:
    return f"Release {tag}\n\n{changelog[:TAG_EXCERPT_LENGTH]}"


class Releaser:
    """Runs the release state machine against injected collaborators.

    Args:
        vcs: Repository access.
        manifest: Store holding the project version.
        changelog_file: Store holding the changelog document.
        config: Release settings.
    """

    def __init__(
        self,
        vcs: VersionControl,
        manifest: ManifestStore,
        changelog_file: ChangelogStore,
        config: ReleasePilotConfig,
    ) -> None:
        self.vcs = vcs
        self.manifest = manifest
        self.changelog_file = changelog_file
        self.config = config
        self.state = ReleaseState.IDLE
        self.result: ReleaseResult | None = None

    def _advance(self, state: ReleaseState) -> None:
        self.state = state
        if self.result is not None:
            self.result.completed.append(state)
        log.debug("release state", state=state.value)

    def run(
        self,
        *,
        dry_run: bool = False,
        force: BumpType | None = None,
        push: bool = True,
    ) -> ReleaseResult:
        """Run the full release.

        Args:
            dry_run: Compute and validate everything but change nothing.
            force: Bump kind overriding the one derived from commits.
            push: Push the tag when a remote is configured.

        Returns:
            What was (or in dry-run, would be) done.

        Raises:
            ReleasePilotError: On any failure; :attr:`state` holds the last
                completed state.
        """
        if self.state is not ReleaseState.IDLE:
            raise ReleasePilotError("A Releaser can only run once")

        try:
            self.compute_version(force=force, dry_run=dry_run)
            self.build_changelog()
            self.write_files()
            self.commit()
            self.tag()
            if push:
                self.push()
        except ReleasePilotError as e:
            log.error("release aborted", state=self.state.value, error=str(e))
            raise

        self._advance(ReleaseState.DONE)
        return self._require_result()

    def compute_version(self, *, force: BumpType | None = None, dry_run: bool = False) -> ReleasePlan:
        plan = plan_release(self.vcs, self.manifest, force=force)
        self.result = ReleaseResult(
            plan=plan,
            tag=self.config.tag_name(plan.next_version),
            dry_run=dry_run,
        )
        self._advance(ReleaseState.VERSION_COMPUTED)
        return plan

    def build_changelog(self) -> str:
        result = self._require_result()
        result.changelog = render_changelog(
            result.plan.next_version,
            result.plan.commits,
            result.plan.previous_tag,
            tag_prefix=self.config.tag_prefix,
            repository_url=resolve_repository_url(self.vcs, self.config),
        )
        self._advance(ReleaseState.CHANGELOG_BUILT)
        return result.changelog

    def write_files(self) -> None:
        result = self._require_result()
        full = merge_changelog(result.changelog, self.changelog_file.read())
        result.changelog_lines = count_lines(full)

        if result.dry_run:
            log.info("dry run: skipping file writes", lines=result.changelog_lines)
            return

        self.changelog_file.write(full)
        self.manifest.write_version(result.plan.next_version)
        self._advance(ReleaseState.FILES_WRITTEN)

    def commit(self) -> None:
        result = self._require_result()
        result.commit_message = f"chore(release): {result.tag}"

        if result.dry_run:
            return

        self.vcs.commit(
            [str(self.manifest.path), str(self.changelog_file.path)],
            result.commit_message,
        )
        self._advance(ReleaseState.COMMITTED)

    def tag(self) -> None:
        result = self._require_result()
        if self.vcs.tag_exists(result.tag):
            raise TagExistsError(result.tag)

        if result.dry_run:
            return

        self.vcs.create_tag(result.tag, tag_message(result.tag, result.changelog))
        self._advance(ReleaseState.TAGGED)

    def push(self) -> None:
        result = self._require_result()
        remote = self.config.remote

        if not self.vcs.has_remote(remote):
            result.push_skipped = f'no remote "{remote}" configured'
            log.info("skipping push", reason=result.push_skipped)
            return

        if result.dry_run:
            result.push_skipped = "dry run"
            return

        self.vcs.push_tag(result.tag, remote)
        result.pushed = True
        self._advance(ReleaseState.PUSHED)

    def _require_result(self) -> ReleaseResult:
        if self.result is None:
            raise ReleasePilotError(f"Release step out of order (state: {self.state.value})")
        return self.result
