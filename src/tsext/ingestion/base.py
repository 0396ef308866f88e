"""Ingestion service protocol shared by all backends."""

from __future__ import annotations

from typing import Protocol

from ..errors import ScanError
from ..models import ProjectContext


class IngestionError(ScanError):
    """Raised when a virtual file cannot be handed to the analyzer."""


class IngestionService(Protocol):
    """Receives (virtual path, content) pairs for one source context.

    A later call for the same virtual path replaces the earlier snapshot.
    """

    def ingest(self, virtual_path: str, content: bytes, context: ProjectContext) -> None: ...
