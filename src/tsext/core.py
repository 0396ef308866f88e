"""Core scanning entrypoints.

One scan handles one source context: locate the required files, resolve the
TypeScript source root from tsconfig.json, then republish files found outside
the context under virtual paths. This module has no host-specific
dependencies; hosts supply their own filesystem, ownership and ingestion
services.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .config import Settings, load_settings
from .discovery import locate_required_files
from .fs import FileSystem, LocalFileSystem
from .ingestion import IngestionService, SnapshotStore
from .models import LocationResult, ProjectContext, ResolvedSourceRoot, ScanState, VirtualPathMap
from .ownership import FixedProjectOwnership, MarkerProjectOwnership, ProjectOwnership
from .publish import publish_external_files
from .source_root import resolve_source_root
from .utils.logging import get_logger

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class ScanResult:
    """Outcome of scanning one source context."""

    context: ProjectContext
    location: LocationResult | None
    source_root: ResolvedSourceRoot | None
    virtual_files: VirtualPathMap

    def is_ts_context(self) -> bool:
        """True when the context holds the TS sources declared by tsconfig.json."""
        return self.source_root is not None

    @property
    def ts_root_rel_path(self) -> str | None:
        return self.source_root.relative_path if self.source_root else None

    def is_file_external(self, virtual_path: str) -> bool:
        return virtual_path in self.virtual_files

    def to_dict(self) -> dict[str, Any]:
        location = self.location or LocationResult()
        return {
            **self.context.to_dict(),
            "tsContext": self.is_ts_context(),
            "sourceRoot": self.ts_root_rel_path,
            "found": {name: path.as_posix() for name, path in location.inside.items()},
            "external": {name: path.as_posix() for name, path in location.outside.items()},
            "missing": list(location.missing),
            "virtualFiles": self.virtual_files.to_dict(),
        }


def scan_context(
    root: Path,
    *,
    project_root: Path | None = None,
    settings: Settings | None = None,
    fs: FileSystem | None = None,
    ownership: ProjectOwnership | None = None,
    ingestion: IngestionService | None = None,
    publish: bool = True,
) -> ScanResult:
    """Scan a source context and publish its external TypeScript files.

    Params:
        root: root folder of the source context
        project_root: explicit owning project root; when None, ``ownership``
            (or marker-based detection) decides
        settings: scan settings; defaults to ``load_settings()``
        fs: filesystem service; defaults to the local filesystem
        ownership: project ownership service
        ingestion: receiver of the virtual files; defaults to an in-memory store
        publish: when False, only locate and resolve (dry run)

    Raises:
        ScanError: On I/O or ingestion failure; the scan is aborted.
    """
    settings = settings or load_settings()
    fs = fs or LocalFileSystem()
    if ownership is None:
        if project_root is not None:
            ownership = FixedProjectOwnership(project_root)
        else:
            ownership = MarkerProjectOwnership(settings.project_markers)
    ingestion = ingestion if ingestion is not None else SnapshotStore()

    context = ProjectContext.for_directory(root, ownership)
    state = ScanState()

    if not context.has_project:
        LOGGER.info("No project owns %s; skipping", context.root.as_posix())
        return ScanResult(context=context, location=None, source_root=None, virtual_files=state.virtual_files)

    location = locate_required_files(context, settings.required_files, fs, state, settings.excluded_dirs)
    source_root = resolve_source_root(location, context, fs, settings.manifest)

    if source_root is not None and publish:
        publish_external_files(location, source_root, context, fs, ingestion, state, settings)

    return ScanResult(
        context=context,
        location=location,
        source_root=source_root,
        virtual_files=state.virtual_files,
    )
