"""Republish artifacts found outside the source context under virtual paths."""

from __future__ import annotations

from pathlib import Path

from .config import Settings
from .errors import ManifestRewriteError
from .fs import FileSystem
from .ingestion import IngestionService
from .models import LocationResult, ProjectContext, ResolvedSourceRoot, ScanState, VirtualPathMap
from .rewrite import rewrite_manifest, write_temp_manifest
from .utils.logging import get_logger

LOGGER = get_logger(__name__)


def virtual_base_path(fs: FileSystem, context: ProjectContext, source_root: ResolvedSourceRoot) -> str:
    """Context-relative path of the source root's parent, with a trailing ``/`` when non-empty.

    When the source root is the context root itself the base is ``""``.
    """
    parent = fs.parent(source_root.directory)
    relative = fs.relative_path(context.root, parent) if parent is not None else None
    if not relative:
        return ""
    return relative + "/"


class _Publisher:
    def __init__(
        self,
        context: ProjectContext,
        fs: FileSystem,
        ingestion: IngestionService,
        state: ScanState,
        settings: Settings,
    ) -> None:
        self.context = context
        self.fs = fs
        self.ingestion = ingestion
        self.state = state
        self.settings = settings
        self.walked: set[Path] = set()

    def add(self, virtual_path: str, real: Path, content: bytes) -> None:
        real = self.fs.real_path(real)
        previous = self.state.virtual_files.published_as(real)
        if previous is not None:
            LOGGER.debug("%s is already published as %s", real.as_posix(), previous)
            return
        LOGGER.debug("Adding virtual file: %s => %s", virtual_path, real.as_posix())
        self.ingestion.ingest(virtual_path, content, self.context)
        self.state.virtual_files.add(virtual_path, real)

    def add_folder(self, virtual_folder: str, directory: Path) -> None:
        real = self.fs.real_path(directory)
        if real in self.walked:
            return
        self.walked.add(real)
        for child in self.fs.children(directory):
            path = f"{virtual_folder}/{child.name}"
            if self.fs.is_dir(child):
                if child.name not in self.settings.excluded_dirs:
                    self.add_folder(path, child)
            elif self.fs.content_type(child) in self.settings.source_content_types:
                if path not in self.state.virtual_files:
                    self.add(path, child, self.fs.read_bytes(child))

    def manifest_content(self, manifest: Path, source_root: ResolvedSourceRoot, virtual_base: str) -> bytes:
        manifest_parent = self.fs.parent(manifest)
        if manifest_parent is None:
            raise ManifestRewriteError(f"{manifest.as_posix()} has no parent folder")
        rewritten = rewrite_manifest(source_root.document, manifest_parent, self.context.root, virtual_base)
        temp_file = write_temp_manifest(rewritten, self.fs, self.settings)
        try:
            return self.fs.read_bytes(temp_file)
        finally:
            if not self.settings.keep_temp_files:
                self.fs.remove(temp_file)


def publish_external_files(
    location: LocationResult,
    source_root: ResolvedSourceRoot,
    context: ProjectContext,
    fs: FileSystem,
    ingestion: IngestionService,
    state: ScanState,
    settings: Settings,
) -> VirtualPathMap:
    """Hand every artifact in ``location.outside`` to ``ingestion`` under its virtual path.

    Folders are walked recursively and only files of a recognised source
    content type are published. The manifest is published as a rewritten
    copy. No virtual path and no real location is published twice within one
    scan, and a folder reached again through a symlink is not walked again.

    Returns:
        The scan's virtual path map.
    """
    if not location.outside:
        return state.virtual_files

    publisher = _Publisher(context, fs, ingestion, state, settings)
    virtual_base = virtual_base_path(fs, context, source_root)

    for name, real in location.outside.items():
        path = virtual_base + name
        if fs.is_dir(real):
            publisher.add_folder(path, real)
        elif path not in state.virtual_files:
            if name == settings.manifest:
                try:
                    content = publisher.manifest_content(real, source_root, virtual_base)
                except ManifestRewriteError as exc:
                    LOGGER.error("Not publishing %s: %s", real.as_posix(), exc)
                    continue
            else:
                content = fs.read_bytes(real)
            publisher.add(path, real, content)

    return state.virtual_files
