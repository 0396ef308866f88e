"""Filesystem browsing service used by the locator and the publisher.

The scan only talks to the filesystem through the :class:`FileSystem`
protocol so that hosts (IDEs, language servers, tests) can plug in their own
view of the tree. :class:`LocalFileSystem` is the ``pathlib`` implementation.
"""

from __future__ import annotations

import mimetypes
import os
import tempfile
from pathlib import Path
from typing import Protocol

from .errors import ScanError

TYPESCRIPT_MIME_TYPE = "text/typescript"


class FileSystem(Protocol):
    """Structural protocol for the host's filesystem view."""

    def is_dir(self, path: Path) -> bool: ...

    def is_file(self, path: Path) -> bool: ...

    def children(self, directory: Path) -> list[Path]: ...

    def child(self, directory: Path, name: str) -> Path | None: ...

    def parent(self, path: Path) -> Path | None: ...

    def real_path(self, path: Path) -> Path: ...

    def relative_path(self, base: Path, target: Path) -> str | None: ...

    def content_type(self, path: Path) -> str | None: ...

    def read_bytes(self, path: Path) -> bytes: ...

    def create_temp_file(
        self, content: bytes, *, prefix: str, suffix: str, directory: Path | None = None
    ) -> Path: ...

    def remove(self, path: Path) -> None: ...


def _build_mime_table() -> mimetypes.MimeTypes:
    # The stock table maps ".ts" to MPEG transport streams.
    table = mimetypes.MimeTypes()
    table.add_type(TYPESCRIPT_MIME_TYPE, ".ts")
    table.add_type(TYPESCRIPT_MIME_TYPE, ".tsx")
    return table


class LocalFileSystem:
    """``pathlib`` backed implementation of :class:`FileSystem`."""

    def __init__(self) -> None:
        self._mime = _build_mime_table()

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def is_file(self, path: Path) -> bool:
        return path.is_file()

    def children(self, directory: Path) -> list[Path]:
        try:
            return sorted(directory.iterdir(), key=lambda p: p.name)
        except (FileNotFoundError, NotADirectoryError, PermissionError):
            return []

    def child(self, directory: Path, name: str) -> Path | None:
        candidate = directory / name
        if candidate.exists():
            return candidate
        return None

    def parent(self, path: Path) -> Path | None:
        parent = path.parent
        if parent == path:
            return None
        return parent

    def real_path(self, path: Path) -> Path:
        """Return the location ``path`` points to once symlinks are followed."""
        try:
            return path.resolve()
        except (OSError, RuntimeError):
            return path

    def relative_path(self, base: Path, target: Path) -> str | None:
        """Return ``target`` relative to ``base`` or ``None`` if it is not below it."""
        try:
            relative = target.relative_to(base)
        except ValueError:
            return None
        posix = relative.as_posix()
        return "" if posix == "." else posix

    def content_type(self, path: Path) -> str | None:
        mime_type, _ = self._mime.guess_type(path.name)
        return mime_type

    def read_bytes(self, path: Path) -> bytes:
        try:
            return path.read_bytes()
        except OSError as exc:
            raise ScanError(f"Failed to read {path}: {exc}") from exc

    def create_temp_file(
        self, content: bytes, *, prefix: str, suffix: str, directory: Path | None = None
    ) -> Path:
        try:
            fd, name = tempfile.mkstemp(prefix=prefix, suffix=suffix, dir=directory)
            with os.fdopen(fd, "wb") as handle:
                handle.write(content)
        except OSError as exc:
            raise ScanError(f"Failed to create temporary file: {exc}") from exc
        return Path(name)

    def remove(self, path: Path) -> None:
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as exc:
            raise ScanError(f"Failed to remove {path}: {exc}") from exc
