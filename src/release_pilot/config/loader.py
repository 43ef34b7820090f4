"""Load release-pilot configuration from pyproject.toml."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from release_pilot.config.models import ReleasePilotConfig
from release_pilot.exceptions import ConfigError, ConfigValidationError
from release_pilot.logging import get_logger

log = get_logger(__name__)

TOOL_KEY = "release-pilot"


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Find pyproject.toml by searching upwards from ``start_dir``."""
    current = (start_dir or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


def load_pyproject_toml(path: Path) -> dict[str, Any]:
    """Parse a pyproject.toml file.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e


def extract_release_pilot_config(pyproject: dict[str, Any]) -> dict[str, Any]:
    """Return the ``[tool.release-pilot]`` table, or an empty dict."""
    return pyproject.get("tool", {}).get(TOOL_KEY, {})


def load_config(project_path: Path | None = None) -> ReleasePilotConfig:
    """Load configuration for the project at ``project_path``.

    Falls back to defaults when there is no pyproject.toml or it has no
    ``[tool.release-pilot]`` table.

    Raises:
        ConfigError: If pyproject.toml cannot be parsed.
        ConfigValidationError: If the table has unknown keys or bad values.
    """
    pyproject_path = find_pyproject_toml(project_path)
    if pyproject_path is None:
        log.debug("no pyproject.toml found, using default config")
        return ReleasePilotConfig()

    data = extract_release_pilot_config(load_pyproject_toml(pyproject_path))
    try:
        config = ReleasePilotConfig.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"]) or TOOL_KEY
        raise ConfigValidationError(
            f"Invalid [tool.{TOOL_KEY}] in {pyproject_path}: {location}: {first['msg']}"
        ) from e

    log.debug("loaded config", path=str(pyproject_path))
    return config
