"""Configuration models for release-pilot.

Settings live in the ``[tool.release-pilot]`` table of pyproject.toml.
Every field has a default, so an absent table is a valid configuration.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ReleasePilotConfig(BaseModel):
    """Root configuration."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    release_branches: list[str] = Field(
        default_factory=lambda: ["main", "master"],
        description="Branches a release may be cut from",
    )
    remote: str = Field(default="origin", description="Remote the release tag is pushed to")
    tag_prefix: str = Field(default="v", description="Prefix prepended to versions to form tag names")
    changelog_path: Path = Field(default=Path("CHANGELOG.md"), description="Changelog file")
    manifest_path: Path | None = Field(
        default=None,
        description="Manifest holding the version; auto-detected when unset",
    )
    repository_url: str | None = Field(
        default=None,
        description="Base URL for changelog links; derived from the remote when unset",
    )

    @field_validator("release_branches")
    @classmethod
    def _branches_not_empty(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("at least one release branch is required")
        return value

    def tag_name(self, version: str) -> str:
        """Release tag for a version."""
        return f"{self.tag_prefix}{version}"
