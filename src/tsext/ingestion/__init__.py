"""Ingestion backends receiving the republished virtual files.

The registry maps backend IDs to factories so the CLI (and hosts) can pick a
backend from configuration.
"""

from __future__ import annotations

from collections.abc import Callable

from ..config import Settings
from .base import IngestionError, IngestionService
from .http import HttpIngestionService
from .snapshots import Snapshot, SnapshotStore


class UnknownBackendError(ValueError):
    """Raised when a backend ID is not found in the registry."""


def _make_http(settings: Settings) -> HttpIngestionService:
    if not settings.ingest_url:
        raise ValueError("The http ingestion backend requires 'ingestUrl'")
    return HttpIngestionService(settings.ingest_url, timeout=settings.ingest_timeout)


# Registry of known backends, keyed by backend ID.
INGESTION_BACKENDS: dict[str, Callable[[Settings], IngestionService]] = {
    "memory": lambda settings: SnapshotStore(),
    "http": _make_http,
}


def get_ingestion_service(backend_id: str, settings: Settings) -> IngestionService:
    """Return a new ingestion service for ``backend_id``, or raise UnknownBackendError."""
    factory = INGESTION_BACKENDS.get(backend_id)
    if factory is None:
        known = ", ".join(sorted(INGESTION_BACKENDS))
        raise UnknownBackendError(f"Unknown ingestion backend '{backend_id}'. Known backends: {known}")
    return factory(settings)


__all__ = [
    "HttpIngestionService",
    "INGESTION_BACKENDS",
    "IngestionError",
    "IngestionService",
    "Snapshot",
    "SnapshotStore",
    "UnknownBackendError",
    "get_ingestion_service",
]
