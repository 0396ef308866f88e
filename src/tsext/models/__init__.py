"""Data models for the tsconfig locator."""

from __future__ import annotations

from .artifact import DIRECTORY, FILE, RequiredArtifact
from .context import ProjectContext
from .location import LocationResult, ResolvedSourceRoot
from .scan_state import ScanState, VirtualPathMap

__all__ = [
    "DIRECTORY",
    "FILE",
    "LocationResult",
    "ProjectContext",
    "RequiredArtifact",
    "ResolvedSourceRoot",
    "ScanState",
    "VirtualPathMap",
]
