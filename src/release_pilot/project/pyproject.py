"""pyproject.toml version manipulation.

This module reads and updates the version number in pyproject.toml
files. It preserves formatting and comments by using regex-based
replacement rather than full TOML parsing and rewriting.
"""

from __future__ import annotations

import re
from pathlib import Path

from release_pilot.exceptions import ManifestError, ManifestNotFoundError

# Sections that may carry the project version, in lookup order.
_VERSION_SECTIONS = (r"\[project\]", r"\[tool\.poetry\]")

_VERSION_LINE = re.compile(r'^(version\s*=\s*)(["\'])([^"\']+)\2', re.MULTILINE)


def _section_pattern(header: str) -> re.Pattern[str]:
    # The whole section, up to the next table header or EOF.
    return re.compile(rf"^{header}[ \t]*$.*?(?=^\[|\Z)", re.MULTILINE | re.DOTALL)


def _read(path: Path) -> str:
    if not path.is_file():
        raise ManifestNotFoundError(f"Manifest not found: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise ManifestError(f"Cannot read {path}: {e}") from e


def get_pyproject_version(path: Path) -> str:
    """Get the version from pyproject.toml.

    Args:
        path: Path to pyproject.toml

    Returns:
        Version string

    Raises:
        ManifestNotFoundError: If the file does not exist
        ManifestError: If no version can be found
    """
    content = _read(path)

    for header in _VERSION_SECTIONS:
        section = _section_pattern(header).search(content)
        if section:
            match = _VERSION_LINE.search(section.group(0))
            if match:
                return match.group(3)

    raise ManifestError(
        f"Could not find version in {path}. Expected [project].version or [tool.poetry].version."
    )


def update_pyproject_version(path: Path, new_version: str) -> None:
    """Update the version in pyproject.toml.

    Only the first ``version = "..."`` line of the first section that has
    one is rewritten; the quote style of the original line is kept.

    Args:
        path: Path to pyproject.toml
        new_version: New version string to set

    Raises:
        ManifestNotFoundError: If the file does not exist
        ManifestError: If no version can be found or the file cannot be written
    """
    content = _read(path)

    def replace_version(match: re.Match[str]) -> str:
        return _VERSION_LINE.sub(
            lambda m: f"{m.group(1)}{m.group(2)}{new_version}{m.group(2)}",
            match.group(0),
            count=1,
        )

    for header in _VERSION_SECTIONS:
        section = _section_pattern(header).search(content)
        if section and _VERSION_LINE.search(section.group(0)):
            updated = content[: section.start()] + replace_version(section) + content[section.end() :]
            break
    else:
        raise ManifestError(
            f"Could not find version to update in {path}. "
            "Expected [project].version or [tool.poetry].version."
        )

    try:
        path.write_text(updated, encoding="utf-8")
    except OSError as e:
        raise ManifestError(f"Cannot write {path}: {e}") from e


class PyprojectManifest:
    """Version stored in ``pyproject.toml``."""

    filename = "pyproject.toml"

    def __init__(self, path: Path) -> None:
        self.path = path

    def read_version(self) -> str:
        return get_pyproject_version(self.path)

    def write_version(self, version: str) -> None:
        update_pyproject_version(self.path, version)
