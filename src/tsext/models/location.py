"""Locator and source-root resolution results."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class LocationResult:
    """Where each required artifact was found.

    ``inside`` holds artifacts found within the source context, ``outside``
    those found above it in the project, ``missing`` the names found nowhere.
    """

    inside: dict[str, Path] = field(default_factory=dict)
    outside: dict[str, Path] = field(default_factory=dict)
    missing: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        overlap = set(self.inside) & set(self.outside)
        overlap |= (set(self.inside) | set(self.outside)) & set(self.missing)
        if overlap:
            raise ValueError(f"Artifacts recorded more than once: {sorted(overlap)}")
        if len(set(self.missing)) != len(self.missing):
            raise ValueError("Missing artifact names must be unique")

    def get(self, name: str) -> Path | None:
        return self.inside.get(name) or self.outside.get(name)

    def is_external(self, name: str) -> bool:
        return name in self.outside

    @property
    def found(self) -> dict[str, Path]:
        return {**self.inside, **self.outside}

    @property
    def complete(self) -> bool:
        return not self.missing

    def to_dict(self) -> dict[str, object]:
        return {
            "inside": {name: path.as_posix() for name, path in self.inside.items()},
            "outside": {name: path.as_posix() for name, path in self.outside.items()},
            "missing": list(self.missing),
        }


@dataclass(frozen=True)
class ResolvedSourceRoot:
    """The folder holding the TypeScript sources, as declared by tsconfig.json."""

    directory: Path
    relative_path: str
    manifest_path: Path
    document: dict[str, Any]

    def __post_init__(self) -> None:
        if self.relative_path.startswith("/"):
            raise ValueError("relative_path must be relative to the context root")

    def to_dict(self) -> dict[str, str]:
        return {
            "directory": self.directory.as_posix(),
            "relativePath": self.relative_path,
            "manifest": self.manifest_path.as_posix(),
        }
