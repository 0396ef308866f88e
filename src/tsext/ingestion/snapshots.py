"""In-memory ingestion backend keeping the latest snapshot of each virtual file."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from hashlib import sha256
from pathlib import Path

from ..models import ProjectContext


@dataclass(frozen=True)
class Snapshot:
    """Content of one virtual file as handed to the analyzer."""

    context_root: str
    virtual_path: str
    content: bytes
    content_hash: str
    ingested_at: datetime

    def __post_init__(self) -> None:
        if self.ingested_at.tzinfo is None:
            raise ValueError("ingested_at must be timezone-aware")
        if not self.virtual_path or self.virtual_path.startswith("/"):
            raise ValueError(f"Invalid virtual path: {self.virtual_path!r}")
        if not self.content_hash or len(self.content_hash) != 64:
            raise ValueError("content_hash must be a SHA-256 hex digest")

    @property
    def text(self) -> str:
        return self.content.decode("utf-8")

    def to_dict(self) -> dict[str, object]:
        return {
            "contextRoot": self.context_root,
            "virtualPath": self.virtual_path,
            "contentHash": self.content_hash,
            "size": len(self.content),
            "ingestedAt": self.ingested_at.isoformat().replace("+00:00", "Z"),
        }

    @classmethod
    def from_content(
        cls,
        *,
        context_root: str,
        virtual_path: str,
        content: bytes,
        ingested_at: datetime | None = None,
    ) -> Snapshot:
        timestamp = ingested_at or datetime.now(timezone.utc)
        digest = sha256(content).hexdigest()
        return cls(
            context_root=context_root,
            virtual_path=virtual_path,
            content=content,
            content_hash=digest,
            ingested_at=timestamp,
        )


class SnapshotStore:
    """Ingestion service that keeps snapshots in memory, keyed by context and virtual path."""

    def __init__(self) -> None:
        self._snapshots: dict[tuple[str, str], Snapshot] = {}
        self.history: list[tuple[str, str]] = []

    def ingest(self, virtual_path: str, content: bytes, context: ProjectContext) -> None:
        root = context.root.as_posix()
        self._snapshots[(root, virtual_path)] = Snapshot.from_content(
            context_root=root, virtual_path=virtual_path, content=content
        )
        self.history.append((root, virtual_path))

    def get(self, context_root: Path, virtual_path: str) -> Snapshot | None:
        return self._snapshots.get((context_root.as_posix(), virtual_path))

    def for_context(self, context_root: Path) -> dict[str, Snapshot]:
        root = context_root.as_posix()
        return {path: snap for (owner, path), snap in self._snapshots.items() if owner == root}

    def __len__(self) -> int:
        return len(self._snapshots)
