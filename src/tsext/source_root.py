"""Resolve the TypeScript source root declared by tsconfig.json."""

from __future__ import annotations

from pathlib import Path

from .config import TSCONFIG_FILENAME
from .errors import ManifestError, SourceRootError
from .fs import FileSystem
from .models import LocationResult, ProjectContext, ResolvedSourceRoot
from .parsers import tsconfig
from .utils.logging import get_logger

LOGGER = get_logger(__name__)


def walk_source_root(fs: FileSystem, start: Path, source_root: str) -> Path:
    """Apply the ``/``-separated segments of ``source_root`` starting from ``start``.

    ``..`` moves to the parent folder, ``.`` and empty segments are ignored,
    any other segment must name an existing child folder.

    Raises:
        SourceRootError: If a segment cannot be followed.
    """
    cursor = start
    for segment in source_root.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            parent = fs.parent(cursor)
            if parent is None:
                raise SourceRootError(f"sourceRoot {source_root!r} climbs above the filesystem root")
            cursor = parent
            continue
        child = fs.child(cursor, segment)
        if child is None or not fs.is_dir(child):
            raise SourceRootError(
                f"Can't resolve tsconfig.json compilerOptions.sourceRoot {source_root!r} to a folder: "
                f"{segment!r} not found in {cursor.as_posix()}"
            )
        cursor = child
    return cursor


def resolve_source_root(
    location: LocationResult,
    context: ProjectContext,
    fs: FileSystem,
    manifest_name: str = TSCONFIG_FILENAME,
) -> ResolvedSourceRoot | None:
    """Return the source root for ``context``, or None if the context is not a TS context.

    A ScanError from reading the manifest propagates; malformed manifests are
    logged and yield None.
    """
    manifest_path = location.get(manifest_name)
    if manifest_path is None:
        LOGGER.info("No %s located for %s", manifest_name, context.root.as_posix())
        return None

    manifest_dir = fs.parent(manifest_path)
    if manifest_dir is None:
        LOGGER.error("%s has no parent folder: %s", manifest_name, manifest_path.as_posix())
        return None

    try:
        document = tsconfig.parse(manifest_path, fs)
        declared = tsconfig.declared_source_root(document)
        directory = manifest_dir if declared is None else walk_source_root(fs, manifest_dir, declared)
    except ManifestError as exc:
        LOGGER.error("Ignoring %s: %s", manifest_path.as_posix(), exc)
        return None

    relative = fs.relative_path(context.root, directory)
    if relative is None:
        LOGGER.info(
            "TS source root %s is outside source context %s",
            directory.as_posix(),
            context.root.as_posix(),
        )
        return None

    return ResolvedSourceRoot(
        directory=directory,
        relative_path=relative,
        manifest_path=manifest_path,
        document=document,
    )
