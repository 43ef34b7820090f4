"""Project manifests that carry the release version."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from release_pilot.exceptions import ManifestNotFoundError
from release_pilot.project.package_json import PackageJsonManifest
from release_pilot.project.pyproject import PyprojectManifest


@runtime_checkable
class ManifestStore(Protocol):
    """Reads and persists a single version string."""

    path: Path

    def read_version(self) -> str: ...

    def write_version(self, version: str) -> None: ...


_MANIFEST_TYPES: tuple[type[PyprojectManifest] | type[PackageJsonManifest], ...] = (
    PyprojectManifest,
    PackageJsonManifest,
)


def detect_manifest(project_path: Path, manifest_path: Path | None = None) -> ManifestStore:
    """Select the manifest for a project.

    Args:
        project_path: Project root directory.
        manifest_path: Explicit manifest, relative to ``project_path``.

    Returns:
        A manifest store for ``pyproject.toml`` or ``package.json``.

    Raises:
        ManifestNotFoundError: If no supported manifest exists.
    """
    if manifest_path is not None:
        path = project_path / manifest_path
        if path.name == PackageJsonManifest.filename:
            return PackageJsonManifest(path)
        return PyprojectManifest(path)

    for manifest_type in _MANIFEST_TYPES:
        candidate = project_path / manifest_type.filename
        if candidate.is_file():
            return manifest_type(candidate)

    raise ManifestNotFoundError(f"No pyproject.toml or package.json found in {project_path}")


__all__ = [
    "ManifestStore",
    "PackageJsonManifest",
    "PyprojectManifest",
    "detect_manifest",
]
