"""Rewrite the paths of a tsconfig.json that is republished at a virtual path.

When tsconfig.json lives above the source context it is handed to the
analyzer under a virtual path inside the context, a few folders deeper than
its real location. Its ``sourceRoot`` and ``outDir`` must then be adjusted:
``sourceRoot`` loses the folders the manifest moved down through, ``outDir``
gains one ``../`` for each of them. The originals are kept under shadow keys,
which also mark a document as already rewritten.
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any

from .config import Settings
from .errors import ManifestRewriteError, PathPrefixError
from .fs import FileSystem
from .parsers.tsconfig import (
    OUT_DIR,
    OUT_DIR_ORIGINAL,
    SOURCE_ROOT,
    SOURCE_ROOT_ORIGINAL,
    compiler_options,
)
from .paths import (
    best_effort_delta,
    compute_delta,
    extend_relative,
    shorten_relative,
    strip_current_dir,
)
from .utils.logging import get_logger

LOGGER = get_logger(__name__)


def manifest_delta(manifest_parent: str, virtual_dir: str) -> str:
    """Return the delta between the manifest's real folder and its virtual folder."""
    try:
        delta = compute_delta(manifest_parent, virtual_dir)
    except PathPrefixError:
        delta = best_effort_delta(manifest_parent, virtual_dir)
        LOGGER.warning(
            "tsconfig.json virtual folder %s is not below %s; using delta %r",
            virtual_dir,
            manifest_parent,
            delta,
        )
    else:
        LOGGER.debug("tsconfig.json delta path: %r", delta)
    return delta


def adjust_compiler_options(options: dict[str, Any], manifest_parent: str, virtual_dir: str) -> bool:
    """Rewrite ``sourceRoot``/``outDir`` in place; return False when nothing was changed.

    Raises:
        ManifestRewriteError: If ``sourceRoot`` does not start with the delta.
    """
    if SOURCE_ROOT not in options and OUT_DIR not in options:
        return False
    if SOURCE_ROOT_ORIGINAL in options or OUT_DIR_ORIGINAL in options:
        LOGGER.debug("tsconfig.json paths already rewritten")
        return False

    delta = manifest_delta(manifest_parent, virtual_dir)
    updates: dict[str, str] = {}

    source_root = options.get(SOURCE_ROOT)
    if source_root is not None:
        updates[SOURCE_ROOT_ORIGINAL] = source_root
        try:
            updates[SOURCE_ROOT] = shorten_relative(strip_current_dir(source_root), delta)
        except PathPrefixError as exc:
            raise ManifestRewriteError(
                f"compilerOptions.sourceRoot {source_root!r} is not below the virtual folder ({exc})"
            ) from exc

    out_dir = options.get(OUT_DIR)
    if out_dir is not None:
        updates[OUT_DIR_ORIGINAL] = out_dir
        updates[OUT_DIR] = extend_relative(strip_current_dir(out_dir), delta)

    options.update(updates)
    LOGGER.debug(
        "Altered sourceRoot = %r, outDir = %r",
        options.get(SOURCE_ROOT),
        options.get(OUT_DIR),
    )
    return True


def serialize_manifest(document: dict[str, Any]) -> bytes:
    """Compact JSON, forward slashes left unescaped."""
    return json.dumps(document, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def rewrite_manifest(
    document: dict[str, Any],
    manifest_parent: Path,
    context_root: Path,
    virtual_base: str,
) -> bytes:
    """Return the serialized copy of ``document`` as seen from its virtual folder.

    ``document`` itself is never modified.
    """
    rewritten = copy.deepcopy(document)
    options = compiler_options(rewritten)
    if options is not None:
        virtual_dir = f"{context_root.as_posix()}/{virtual_base}"
        adjust_compiler_options(options, manifest_parent.as_posix(), virtual_dir)
    return serialize_manifest(rewritten)


def write_temp_manifest(content: bytes, fs: FileSystem, settings: Settings) -> Path:
    """Write a rewritten manifest to a freshly created, uniquely named file."""
    return fs.create_temp_file(
        content,
        prefix=settings.temp_prefix,
        suffix=settings.temp_suffix,
        directory=settings.temp_dir,
    )
