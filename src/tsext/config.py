"""Configuration loader for the tsconfig locator.

Settings are read from a JSON or YAML file (chosen by suffix) and validated
here; there is no schema engine at runtime. Every key is optional, absent keys
fall back to the defaults below::

    {
      "requiredFiles": [{"name": "tsconfig.json", "kind": "file"}, ...],
      "manifest": "tsconfig.json",
      "sourceContentTypes": ["text/typescript"],
      "excludedDirs": [".git", ".hg", ".svn"],
      "projectMarkers": [".git", ".hg", ".svn"],
      "tempPrefix": "tsext-",
      "tempSuffix": ".json",
      "tempDir": null,
      "keepTempFiles": false,
      "ingestUrl": null,
      "ingestTimeout": 30
    }
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .fs import TYPESCRIPT_MIME_TYPE
from .models.artifact import DIRECTORY, FILE, RequiredArtifact
from .ownership import DEFAULT_PROJECT_MARKERS


CONFIG_PATH_ENV_VAR = "TSEXT_CONFIG"

TSCONFIG_FILENAME = "tsconfig.json"
NODE_MODULES_DIRNAME = "node_modules"
TYPINGS_FILENAME = "typings.json"
TYPINGS_DIRNAME = "typings"

REQUIRED_FILES: tuple[RequiredArtifact, ...] = (
    RequiredArtifact(TSCONFIG_FILENAME, FILE),
    RequiredArtifact(NODE_MODULES_DIRNAME, DIRECTORY),
    RequiredArtifact(TYPINGS_FILENAME, FILE),
    RequiredArtifact(TYPINGS_DIRNAME, DIRECTORY),
)

DEFAULT_EXCLUDED_DIRS = (".git", ".hg", ".svn")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be loaded or is invalid."""


@dataclass(slots=True, frozen=True)
class Settings:
    """Top-level settings container."""

    required_files: tuple[RequiredArtifact, ...] = REQUIRED_FILES
    manifest: str = TSCONFIG_FILENAME
    source_content_types: tuple[str, ...] = (TYPESCRIPT_MIME_TYPE,)
    excluded_dirs: frozenset[str] = field(default_factory=lambda: frozenset(DEFAULT_EXCLUDED_DIRS))
    project_markers: tuple[str, ...] = DEFAULT_PROJECT_MARKERS
    temp_prefix: str = "tsext-"
    temp_suffix: str = ".json"
    temp_dir: Path | None = None
    keep_temp_files: bool = False
    ingest_url: str | None = None
    ingest_timeout: float = 30.0

    def __post_init__(self) -> None:
        names = [artifact.name for artifact in self.required_files]
        if not names:
            raise ConfigError("At least one required file must be configured")
        if len(set(names)) != len(names):
            raise ConfigError("Required file names must be unique")
        manifest = self.get_artifact(self.manifest)
        if manifest is None:
            raise ConfigError(f"Manifest '{self.manifest}' is not a required file")
        if manifest.is_directory:
            raise ConfigError(f"Manifest '{self.manifest}' must be of kind 'file'")

    def get_artifact(self, name: str) -> RequiredArtifact | None:
        """Return the required artifact with the given name, or None if not found."""
        for artifact in self.required_files:
            if artifact.name == name:
                return artifact
        return None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        """Create Settings from a parsed configuration mapping, validating each key."""
        kwargs: dict[str, Any] = {}

        if "requiredFiles" in data:
            kwargs["required_files"] = _parse_required_files(data["requiredFiles"])

        if "manifest" in data:
            kwargs["manifest"] = _expect_str(data, "manifest")

        for key, attr in (
            ("sourceContentTypes", "source_content_types"),
            ("projectMarkers", "project_markers"),
        ):
            if key in data:
                kwargs[attr] = tuple(_expect_str_list(data, key))

        if "excludedDirs" in data:
            kwargs["excluded_dirs"] = frozenset(_expect_str_list(data, "excludedDirs", allow_empty=True))

        for key, attr in (("tempPrefix", "temp_prefix"), ("tempSuffix", "temp_suffix")):
            if key in data:
                kwargs[attr] = _expect_str(data, key, allow_empty=True)

        temp_dir = data.get("tempDir")
        if temp_dir is not None:
            kwargs["temp_dir"] = Path(_expect_str(data, "tempDir"))

        if "keepTempFiles" in data:
            keep = data["keepTempFiles"]
            if not isinstance(keep, bool):
                raise ConfigError("'keepTempFiles' must be a boolean")
            kwargs["keep_temp_files"] = keep

        ingest_url = data.get("ingestUrl")
        if ingest_url is not None:
            kwargs["ingest_url"] = _expect_str(data, "ingestUrl")

        if "ingestTimeout" in data:
            timeout = data["ingestTimeout"]
            if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
                raise ConfigError("'ingestTimeout' must be a positive number")
            kwargs["ingest_timeout"] = float(timeout)

        return cls(**kwargs)


def _expect_str(data: dict[str, Any], key: str, *, allow_empty: bool = False) -> str:
    value = data.get(key)
    if not isinstance(value, str) or (not value and not allow_empty):
        raise ConfigError(f"'{key}' must be a non-empty string")
    return value


def _expect_str_list(data: dict[str, Any], key: str, *, allow_empty: bool = False) -> list[str]:
    value = data.get(key)
    if not isinstance(value, list):
        raise ConfigError(f"'{key}' must be an array")
    if not value and not allow_empty:
        raise ConfigError(f"'{key}' array must contain at least one entry")
    if any(not isinstance(item, str) or not item for item in value):
        raise ConfigError(f"'{key}' entries must be non-empty strings")
    return value


def _parse_required_files(value: Any) -> tuple[RequiredArtifact, ...]:
    if not isinstance(value, list) or not value:
        raise ConfigError("'requiredFiles' must be a non-empty array")
    artifacts: list[RequiredArtifact] = []
    for index, entry in enumerate(value):
        if not isinstance(entry, dict):
            raise ConfigError(f"Required file at index {index} must be an object")
        name = entry.get("name")
        kind = entry.get("kind", FILE)
        try:
            artifacts.append(RequiredArtifact(name=name, kind=kind))
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Required file at index {index} is invalid: {exc}") from exc
    return tuple(artifacts)


def _resolve_config_path(path: Path | str | None = None) -> Path | None:
    """Resolve the configuration file path.

    Priority:
    1. Explicit path argument
    2. TSEXT_CONFIG environment variable
    3. None (built-in defaults)
    """
    if path is not None:
        return Path(path)

    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path)

    return None


def load_settings(path: Path | str | None = None) -> Settings:
    """Load and validate settings from a JSON or YAML file.

    Args:
        path: Optional path to the config file. If not provided, uses the
            TSEXT_CONFIG env var or falls back to the built-in defaults.

    Returns:
        A validated Settings object.

    Raises:
        ConfigError: If the file cannot be read or contains invalid data.
    """
    config_path = _resolve_config_path(path)
    if config_path is None:
        return Settings()

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file: {exc}") from exc

    if config_path.suffix in {".yaml", ".yml"}:
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in configuration file: {exc}") from exc
    else:
        try:
            data = json.loads(content)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid JSON in configuration file: {exc}") from exc

    if data is None:
        return Settings()

    if not isinstance(data, dict):
        raise ConfigError("Configuration must be an object")

    return Settings.from_dict(data)
