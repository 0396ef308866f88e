"""Parse tsconfig.json and expose the compiler options tsext interprets."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..errors import ManifestError
from ..fs import FileSystem
from ..validators.tsconfig import validate_manifest

COMPILER_OPTIONS = "compilerOptions"
SOURCE_ROOT = "sourceRoot"
OUT_DIR = "outDir"
SOURCE_ROOT_ORIGINAL = "--sourceRootOriginal"
OUT_DIR_ORIGINAL = "--outDirOriginal"


def parse_bytes(payload: bytes, origin: str = "tsconfig.json") -> dict[str, Any]:
    """Decode a tsconfig.json payload into a JSON object.

    Raises:
        ManifestError: If the payload is not JSON, not an object, or does not
            match the bundled schema.
    """
    try:
        data = json.loads(payload.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ManifestError(f"{origin} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ManifestError(f"tsconfig.json file does not contain a JSON object: {origin}")
    validate_manifest(data)
    return data


def parse(path: Path, fs: FileSystem) -> dict[str, Any]:
    """Read and decode the tsconfig.json at ``path``.

    I/O failures surface as ScanError from the filesystem service.
    """
    return parse_bytes(fs.read_bytes(path), origin=path.as_posix())


def compiler_options(document: dict[str, Any]) -> dict[str, Any] | None:
    options = document.get(COMPILER_OPTIONS)
    if isinstance(options, dict):
        return options
    return None


def declared_source_root(document: dict[str, Any]) -> str | None:
    options = compiler_options(document)
    if options is None:
        return None
    return options.get(SOURCE_ROOT)
