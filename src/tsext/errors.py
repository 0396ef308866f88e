"""Exception types shared across the scan pipeline."""

from __future__ import annotations


class ScanError(RuntimeError):
    """Raised when a scan cannot complete (I/O failure, ingestion failure)."""


class ManifestError(ValueError):
    """Raised when tsconfig.json cannot be interpreted."""


class SourceRootError(ManifestError):
    """Raised when compilerOptions.sourceRoot does not resolve to a folder."""


class ManifestRewriteError(ManifestError):
    """Raised when a relocated tsconfig.json cannot be rewritten consistently."""


class PathPrefixError(ValueError):
    """Raised when a relative path does not extend the expected prefix."""
