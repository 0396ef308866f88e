"""Project ownership resolution: which project root owns a directory."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Protocol


DEFAULT_PROJECT_MARKERS = (".git", ".hg", ".svn")


class ProjectOwnership(Protocol):
    def owner_of(self, directory: Path) -> Path | None: ...


class MarkerProjectOwnership:
    """Owner is the nearest directory (itself or an ancestor) holding a marker entry."""

    def __init__(self, markers: Iterable[str] = DEFAULT_PROJECT_MARKERS) -> None:
        self.markers = tuple(markers)
        if not self.markers:
            raise ValueError("At least one project marker must be provided")

    def owner_of(self, directory: Path) -> Path | None:
        directory = directory.resolve()
        for candidate in (directory, *directory.parents):
            if any((candidate / marker).exists() for marker in self.markers):
                return candidate
        return None


class FixedProjectOwnership:
    """Owner is a fixed root, for every directory below it."""

    def __init__(self, root: Path) -> None:
        self.root = root.resolve()

    def owner_of(self, directory: Path) -> Path | None:
        directory = directory.resolve()
        if directory == self.root or self.root in directory.parents:
            return self.root
        return None
