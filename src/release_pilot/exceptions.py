"""Exception hierarchy for release-pilot.

Every error raised by the library derives from :class:`ReleasePilotError`
and carries a single-line, user-facing message. The CLI catches the base
class, prints the message and exits with a non-zero status.
"""

from __future__ import annotations


class ReleasePilotError(Exception):
    """Base class for all release-pilot errors."""


# Configuration


class ConfigError(ReleasePilotError):
    """Configuration could not be loaded."""


class ConfigValidationError(ConfigError):
    """The [tool.release-pilot] table is invalid."""


# Versions and manifests


class InvalidVersionError(ReleasePilotError):
    """A version string is not strict ``major.minor.patch``."""

    def __init__(self, version: str) -> None:
        self.version = version
        super().__init__(f'Invalid semver: "{version}" (expected MAJOR.MINOR.PATCH)')


class ManifestError(ReleasePilotError):
    """The project manifest is unreadable or has no version field."""


class ManifestNotFoundError(ManifestError):
    """No supported manifest file exists in the project."""


# Changelog


class ChangelogError(ReleasePilotError):
    """The changelog file could not be read or written."""


# Version control


class GitError(ReleasePilotError):
    """A git command failed."""

    def __init__(self, message: str, *, command: list[str] | None = None, stderr: str = "") -> None:
        self.command = command or []
        self.stderr = stderr.strip()
        if self.stderr:
            message = f"{message}: {self.stderr.splitlines()[-1]}"
        super().__init__(message)


class TagExistsError(ReleasePilotError):
    """The release tag is already present in the repository."""

    def __init__(self, tag: str) -> None:
        self.tag = tag
        super().__init__(f'Tag "{tag}" already exists. Delete it first or bump the version.')


class PushError(ReleasePilotError):
    """Pushing the release tag to the remote failed.

    The tag has already been created locally when this is raised.
    """

    def __init__(self, tag: str, remote: str, cause: str) -> None:
        self.tag = tag
        self.remote = remote
        self.cause = cause
        super().__init__(f'Failed to push tag "{tag}" to "{remote}": {cause}')
