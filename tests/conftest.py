"""Shared fixtures for release-pilot tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from release_pilot.config.models import ReleasePilotConfig
from release_pilot.core.changelog import ChangelogFile
from release_pilot.project.pyproject import PyprojectManifest
from release_pilot.vcs.base import RawCommit
from tests.fakes import FakeRepository


@pytest.fixture
def feat_commit() -> RawCommit:
    return RawCommit("feat1234567890", "feat: add user authentication")


@pytest.fixture
def fix_commit() -> RawCommit:
    return RawCommit("fix1234567890", "fix(core): handle null response")


@pytest.fixture
def breaking_commit() -> RawCommit:
    return RawCommit("brk1234567890", "feat(api)!: redesign endpoints")


@pytest.fixture
def sample_commits() -> list[RawCommit]:
    return [
        RawCommit("a" * 40, "feat: add export"),
        RawCommit("b" * 40, "fix: null pointer"),
        RawCommit("c" * 40, "docs: update readme"),
        RawCommit("d" * 40, "chore: bump deps"),
        RawCommit("e" * 40, "feat!: drop legacy API"),
    ]


@pytest.fixture
def fake_repo(sample_commits: list[RawCommit]) -> FakeRepository:
    return FakeRepository(commits=sample_commits, last_tag="v1.2.3")


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A project with a pyproject.toml at version 1.2.3."""
    (tmp_path / "pyproject.toml").write_text(
        """\
[project]
name = "test-project"
version = "1.2.3"  # managed by release-pilot
description = "A test project"

[tool.other]
version = "9.9.9"
"""
    )
    return tmp_path


@pytest.fixture
def manifest(project_dir: Path) -> PyprojectManifest:
    return PyprojectManifest(project_dir / "pyproject.toml")


@pytest.fixture
def changelog_file(project_dir: Path) -> ChangelogFile:
    return ChangelogFile(project_dir / "CHANGELOG.md")


@pytest.fixture
def config() -> ReleasePilotConfig:
    return ReleasePilotConfig()
