"""Required file discovery for a source context.

Two phases: first the context root's own subtree (depth-first, stopping as
soon as every required name is found), then the "uncles" of the context root,
i.e. siblings of each folder on its parent chain, up to the project root.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path

from .config import DEFAULT_EXCLUDED_DIRS
from .fs import FileSystem
from .models import LocationResult, ProjectContext, RequiredArtifact, ScanState
from .utils.logging import get_logger

LOGGER = get_logger(__name__)

EXCLUDES = frozenset(DEFAULT_EXCLUDED_DIRS)


def _matches(fs: FileSystem, path: Path, artifact: RequiredArtifact) -> bool:
    if artifact.is_directory:
        return fs.is_dir(path)
    return fs.is_file(path)


def find_files_in_context(
    fs: FileSystem,
    directory: Path,
    needed: list[RequiredArtifact],
    found: dict[str, Path],
    state: ScanState,
    excludes: Iterable[str] = EXCLUDES,
) -> None:
    """Depth-first search of ``directory`` for the artifacts in ``needed``.

    ``needed`` is consumed as artifacts are found. Each directory is visited at
    most once per scan, keyed on its real location so symlinked folders are
    not searched again.
    """
    if not needed or not fs.is_dir(directory):
        return
    real = fs.real_path(directory)
    if real in state.visited:
        return
    state.visited.add(real)

    for artifact in list(needed):
        target = fs.child(directory, artifact.name)
        if target is not None and _matches(fs, target, artifact):
            found[artifact.name] = target
            needed.remove(artifact)
            LOGGER.info("Required TS project file found: %s", target.as_posix())

    excluded = frozenset(excludes)
    for child in fs.children(directory):
        if not needed:
            return
        if child.name in excluded or not fs.is_dir(child):
            continue
        find_files_in_context(fs, child, needed, found, state, excluded)


def find_files_above_context(
    fs: FileSystem,
    context: ProjectContext,
    needed: list[RequiredArtifact],
    found: dict[str, Path],
    state: ScanState,
) -> None:
    """Look for ``needed`` among the siblings of the context root's parent chain.

    Only immediate children are inspected at each level; the walk stops at the
    project root.
    """
    if context.project_root is None:
        return
    came_from = context.root
    directory = fs.parent(context.root)
    while needed and directory is not None:
        if fs.relative_path(context.project_root, directory) is None:
            break
        state.visited.add(fs.real_path(directory))
        for child in fs.children(directory):
            if child == came_from:
                continue
            for artifact in needed:
                if child.name == artifact.name and _matches(fs, child, artifact):
                    found[artifact.name] = child
                    needed.remove(artifact)
                    LOGGER.info("Required TS project file found outside source context: %s", child.as_posix())
                    break
            if not needed:
                break
        came_from = directory
        directory = fs.parent(directory)


def locate_required_files(
    context: ProjectContext,
    artifacts: Iterable[RequiredArtifact],
    fs: FileSystem,
    state: ScanState,
    excludes: Iterable[str] = EXCLUDES,
) -> LocationResult:
    """Find every artifact, first inside the source context, then above it."""
    artifacts = tuple(artifacts)
    needed = list(artifacts)
    inside: dict[str, Path] = {}
    outside: dict[str, Path] = {}

    find_files_in_context(fs, context.root, needed, inside, state, excludes)
    if needed:
        find_files_above_context(fs, context, needed, outside, state)

    missing = tuple(artifact.name for artifact in needed)
    if missing:
        LOGGER.error("Required files not found in project: %s", list(missing))

    return LocationResult(inside=_ordered(inside, artifacts), outside=_ordered(outside, artifacts), missing=missing)


def _ordered(found: Mapping[str, Path], artifacts: Iterable[RequiredArtifact]) -> dict[str, Path]:
    return {artifact.name: found[artifact.name] for artifact in artifacts if artifact.name in found}
