"""Git repository access via the ``git`` executable.

All commands run as subprocesses in the repository directory with
captured output. Failures surface as :class:`GitError`; queries with a
sensible default (no tags, no commits, no remote) return it instead.
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from pathlib import Path

from release_pilot.exceptions import GitError, PushError, TagExistsError
from release_pilot.logging import get_logger
from release_pilot.vcs.base import RawCommit

log = get_logger(__name__)

# Field and record separators in ``git log`` output. The format string
# uses git's hex escapes since argv cannot carry NUL bytes.
_FIELD_SEP = "\x00"
_RECORD_SEP = "\x1e"
_LOG_FORMAT = "%H%x00%s%x00%b%x1e"


class GitRepository:
    """A git working tree.

    Args:
        path: Any directory inside the working tree.

    Raises:
        GitError: If ``path`` is not inside a git repository.
    """

    def __init__(self, path: Path | str | None = None) -> None:
        self.path = Path(path) if path else Path.cwd()
        toplevel = self._run("rev-parse", "--show-toplevel", error="Not a git repository")
        self.path = Path(toplevel)

    def _run(self, *args: str, error: str | None = None) -> str:
        """Run a git command and return its stripped stdout."""
        command = ["git", *args]
        log.debug("running git", command=command)
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                check=True,
                cwd=self.path,
            )
        except FileNotFoundError as e:
            raise GitError("git executable not found", command=command) from e
        except subprocess.CalledProcessError as e:
            raise GitError(
                error or f"git {args[0]} failed with exit code {e.returncode}",
                command=command,
                stderr=e.stderr or "",
            ) from e
        return result.stdout.strip()

    def latest_tag(self) -> str | None:
        try:
            tag = self._run("describe", "--tags", "--abbrev=0")
        except GitError:
            log.debug("no tags found")
            return None
        return tag or None

    def commits_since(self, tag: str | None) -> list[RawCommit]:
        revision = f"{tag}..HEAD" if tag else "HEAD"
        try:
            output = self._run("log", revision, f"--format={_LOG_FORMAT}", "--no-merges", "--reverse")
        except GitError as e:
            log.warning("cannot read commit history", revision=revision, error=str(e))
            return []
        return parse_log_output(output)

    def tag_exists(self, name: str) -> bool:
        try:
            self._run("rev-parse", "--verify", "--quiet", f"refs/tags/{name}")
        except GitError:
            return False
        return True

    def create_tag(self, name: str, message: str) -> None:
        if self.tag_exists(name):
            raise TagExistsError(name)
        self._run("tag", "-a", name, "-m", message, error=f"Failed to create tag {name}")

    def has_remote(self, remote: str = "origin") -> bool:
        return self.remote_url(remote) is not None

    def remote_url(self, remote: str = "origin") -> str | None:
        try:
            return self._run("remote", "get-url", remote) or None
        except GitError:
            return None

    def push_tag(self, name: str, remote: str = "origin") -> None:
        try:
            self._run("push", remote, name)
        except GitError as e:
            raise PushError(name, remote, e.stderr or str(e)) from e

    def commit(self, paths: Sequence[str], message: str) -> None:
        self._run("add", "--", *paths, error="Failed to stage release files")
        self._run("commit", "-m", message, error="Failed to create release commit")

    def is_clean(self) -> bool:
        return self._run("status", "--porcelain") == ""

    def current_branch(self) -> str:
        return self._run("rev-parse", "--abbrev-ref", "HEAD", error="Cannot determine current branch")


def parse_log_output(output: str) -> list[RawCommit]:
    """Split ``git log`` output produced with :data:`_LOG_FORMAT` into records."""
    commits: list[RawCommit] = []
    for record in output.split(_RECORD_SEP):
        record = record.strip("\n")
        if not record.strip():
            continue
        sha, _, rest = record.partition(_FIELD_SEP)
        subject, _, body = rest.partition(_FIELD_SEP)
        commits.append(RawCommit(sha=sha.strip(), subject=subject, body=body))
    return commits
