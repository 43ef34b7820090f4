from __future__ import annotations

import json
import logging
import shutil
import subprocess
from pathlib import Path

import pytest
from typer.testing import CliRunner

from release_pilot import __version__
from release_pilot.cli import app
from release_pilot.cli.commands._common import open_project
from release_pilot.exceptions import GitError
from tests.fakes import FakeRepository

runner = CliRunner()

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


@pytest.fixture(autouse=True)
def restore_root_logging():
    """The app callback reconfigures logging against the runner's streams."""
    handlers = logging.root.handlers[:]
    level = logging.root.level
    yield
    logging.root.handlers[:] = handlers
    logging.root.setLevel(level)


@pytest.fixture
def use_repo(monkeypatch: pytest.MonkeyPatch, fake_repo: FakeRepository) -> FakeRepository:
    """Route every GitRepository the CLI opens to the in-memory fake."""
    monkeypatch.setattr("release_pilot.cli.commands._common.GitRepository", lambda path: fake_repo)
    monkeypatch.setattr("release_pilot.cli.commands.check.GitRepository", lambda path: fake_repo)
    return fake_repo


def test_cli_version() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert f"release-pilot {__version__}" in result.stdout


def test_cli_changelog_json(project_dir: Path, use_repo: FakeRepository) -> None:
    result = runner.invoke(app, ["changelog", "--path", str(project_dir), "--json"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert set(payload) == {"version", "bumpType", "breaking", "commits", "changelog"}
    assert payload["version"] == "2.0.0"
    assert payload["bumpType"] == "major"
    assert payload["breaking"] is True
    assert len(payload["commits"]) == 5
    assert set(payload["commits"][0]) == {
        "sha",
        "category",
        "scope",
        "description",
        "body",
        "is_breaking",
        "is_conventional",
    }
    assert payload["changelog"].startswith("## [2.0.0] - ")
    assert not (project_dir / "CHANGELOG.md").exists()


def test_cli_changelog_preview(project_dir: Path, use_repo: FakeRepository) -> None:
    result = runner.invoke(app, ["changelog", "--path", str(project_dir)])
    assert result.exit_code == 0
    assert "Next version: 2.0.0" in result.stdout
    assert "BREAKING CHANGES" in result.stdout


def test_cli_bump_dry_run(project_dir: Path, use_repo: FakeRepository) -> None:
    result = runner.invoke(app, ["bump", "--path", str(project_dir), "--dry-run"])
    assert result.exit_code == 0
    assert "Would write version 2.0.0" in result.stdout
    assert 'version = "1.2.3"' in (project_dir / "pyproject.toml").read_text()


def test_cli_bump_force(project_dir: Path, use_repo: FakeRepository) -> None:
    result = runner.invoke(app, ["bump", "--path", str(project_dir), "--force", "patch"])
    assert result.exit_code == 0
    assert 'version = "1.2.4"' in (project_dir / "pyproject.toml").read_text()
    assert use_repo.commit_calls == []
    assert use_repo.tags == {}


def test_cli_release_dry_run(project_dir: Path, use_repo: FakeRepository) -> None:
    result = runner.invoke(app, ["release", "--path", str(project_dir), "--dry-run"])
    assert result.exit_code == 0
    assert "DRY RUN" in result.stdout
    assert "chore(release): v2.0.0" in result.stdout
    assert not (project_dir / "CHANGELOG.md").exists()
    assert use_repo.commit_calls == []
    assert use_repo.tags == {}


def test_cli_release(project_dir: Path, use_repo: FakeRepository) -> None:
    use_repo.remotes["origin"] = "git@github.com:owner/repo.git"
    result = runner.invoke(app, ["release", "--path", str(project_dir)])
    assert result.exit_code == 0
    assert "Released 2.0.0" in result.stdout
    assert (project_dir / "CHANGELOG.md").read_text().startswith("# Changelog")
    assert use_repo.pushed == [("v2.0.0", "origin")]


def test_cli_release_no_push(project_dir: Path, use_repo: FakeRepository) -> None:
    use_repo.remotes["origin"] = "git@github.com:owner/repo.git"
    result = runner.invoke(app, ["release", "--path", str(project_dir), "--no-push"])
    assert result.exit_code == 0
    assert "v2.0.0" in use_repo.tags
    assert use_repo.pushed == []


def test_cli_release_existing_tag(project_dir: Path, use_repo: FakeRepository) -> None:
    use_repo.tags["v2.0.0"] = "existing"
    result = runner.invoke(app, ["release", "--path", str(project_dir)])
    assert result.exit_code == 1
    assert "Release stopped after step" in result.output
    assert "already exists" in result.output
    # What was computed is still shown.
    assert "(major)" in result.output
    assert "drop legacy API" in result.output


def test_cli_release_error_on_one_line(
    project_dir: Path, use_repo: FakeRepository, monkeypatch: pytest.MonkeyPatch
) -> None:
    stderr = "fatal: pathspec 'some/deeply/nested/project/directory/pyproject.toml' did not match any files"

    def failing_commit(paths: list[str], message: str) -> None:
        raise GitError("Failed to stage release files", stderr=stderr)

    monkeypatch.setattr(use_repo, "commit", failing_commit)
    result = runner.invoke(app, ["release", "--path", str(project_dir)])
    assert result.exit_code == 1
    assert f"Error: Failed to stage release files: {stderr}" in result.output
    assert "Release stopped after step: files written. Completed steps were not rolled back." in result.output


def test_cli_no_command_runs_release(
    project_dir: Path, use_repo: FakeRepository, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(project_dir)
    result = runner.invoke(app, [])
    assert result.exit_code == 0
    assert "Released 2.0.0" in result.stdout
    assert "v2.0.0" in use_repo.tags


def test_cli_invalid_manifest_version(project_dir: Path, use_repo: FakeRepository) -> None:
    (project_dir / "pyproject.toml").write_text('[project]\nname = "x"\nversion = "1.2"\n')
    result = runner.invoke(app, ["bump", "--path", str(project_dir)])
    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "Invalid semver" in result.output


def test_cli_check_ready(project_dir: Path, use_repo: FakeRepository) -> None:
    result = runner.invoke(app, ["check", "--path", str(project_dir)])
    assert result.exit_code == 0
    assert "Working tree is clean" in result.stdout
    assert "Ready to release" in result.stdout


def test_cli_check_dirty_tree(project_dir: Path, use_repo: FakeRepository) -> None:
    use_repo.clean = False
    result = runner.invoke(app, ["check", "--path", str(project_dir)])
    assert result.exit_code == 1
    assert "uncommitted changes" in result.output
    assert "Not ready" in result.output


def test_cli_check_wrong_branch(project_dir: Path, use_repo: FakeRepository) -> None:
    use_repo.branch = "feature"
    result = runner.invoke(app, ["check", "--path", str(project_dir)])
    assert result.exit_code == 1
    assert "expected main or master" in result.output


def test_open_project_resolves_relative_path(
    project_dir: Path, use_repo: FakeRepository, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(project_dir.parent)
    project = open_project(project_dir.name)
    assert project.path == project_dir.resolve()
    assert project.manifest.path == project_dir.resolve() / "pyproject.toml"
    assert project.changelog.path == project_dir.resolve() / "CHANGELOG.md"


@requires_git
def test_cli_release_relative_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """A relative --path commits the release files from the repository root."""
    project = tmp_path / "proj"
    project.mkdir()

    def git(*args: str) -> str:
        return subprocess.run(
            ["git", *args], cwd=project, check=True, capture_output=True, text=True
        ).stdout.strip()

    git("init", "-b", "main")
    git("config", "user.email", "test@example.com")
    git("config", "user.name", "Test")
    git("config", "commit.gpgsign", "false")
    git("config", "tag.gpgsign", "false")
    (project / "pyproject.toml").write_text('[project]\nname = "proj"\nversion = "1.2.3"\n')
    git("add", "pyproject.toml")
    git("commit", "-m", "feat: first feature")

    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["release", "--path", "proj", "--no-push"])

    assert result.exit_code == 0, result.output
    assert 'version = "1.3.0"' in (project / "pyproject.toml").read_text()
    assert git("log", "-1", "--format=%s") == "chore(release): v1.3.0"
    assert git("tag", "--list") == "v1.3.0"
    assert git("status", "--porcelain") == ""


def test_cli_check_not_a_repository(project_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def not_a_repo(path: Path) -> FakeRepository:
        raise GitError("Not a git repository")

    monkeypatch.setattr("release_pilot.cli.commands.check.GitRepository", not_a_repo)
    result = runner.invoke(app, ["check", "--path", str(project_dir)])
    assert result.exit_code == 1
    assert "Not a git repository" in result.output
