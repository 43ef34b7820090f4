"""package.json version manipulation."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from release_pilot.exceptions import ManifestError, ManifestNotFoundError


class PackageJsonManifest:
    """Version stored in an npm ``package.json``.

    Writes keep key order, use two-space indentation and end with a
    newline.
    """

    filename = "package.json"

    def __init__(self, path: Path) -> None:
        self.path = path

    def _load(self) -> dict[str, Any]:
        if not self.path.is_file():
            raise ManifestNotFoundError(f"Manifest not found: {self.path}")
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise ManifestError(f"Cannot read package.json at {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise ManifestError(f"Cannot read package.json at {self.path}: not a JSON object")
        return data

    def read_version(self) -> str:
        version = self._load().get("version")
        if not version or not isinstance(version, str):
            raise ManifestError(f"No version field in {self.path}")
        return version

    def write_version(self, version: str) -> None:
        data = self._load()
        data["version"] = version
        try:
            self.path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
        except OSError as e:
            raise ManifestError(f"Cannot write {self.path}: {e}") from e
