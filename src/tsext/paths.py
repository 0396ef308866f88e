"""Relative-path arithmetic between a manifest's real and virtual folders.

All helpers work on POSIX-style strings. A *delta* is the part of a virtual
folder path that lies below the manifest's real parent folder, joined with
``/`` and carrying a trailing ``/`` when non-empty, e.g. ``"web/src/"``.
"""

from __future__ import annotations

from pathlib import PureWindowsPath

from .errors import PathPrefixError


def split_segments(path: str) -> list[str]:
    """Split a path into its named segments, dropping empty and ``.`` parts."""
    return [segment for segment in path.replace("\\", "/").split("/") if segment not in ("", ".")]


def _join_dir(segments: list[str]) -> str:
    return "/".join(segments) + "/" if segments else ""


def is_absolute(value: str) -> bool:
    """True for POSIX absolute paths and Windows drive or UNC paths."""
    return value.replace("\\", "/").startswith("/") or PureWindowsPath(value).is_absolute()


def strip_current_dir(value: str) -> str:
    """Remove a single leading ``./``."""
    if value.startswith("./"):
        return value[2:]
    return value


def compute_delta(real_parent: str, virtual_dir: str) -> str:
    """Return the part of ``virtual_dir`` below ``real_parent``.

    Raises:
        PathPrefixError: If ``virtual_dir`` is not ``real_parent`` or one of its
            descendants.
    """
    parent_segments = split_segments(real_parent)
    virtual_segments = split_segments(virtual_dir)
    if virtual_segments[: len(parent_segments)] != parent_segments:
        raise PathPrefixError(f"Virtual path {virtual_dir!r} does not extend {real_parent!r}")
    return _join_dir(virtual_segments[len(parent_segments) :])


def best_effort_delta(real_parent: str, virtual_dir: str) -> str:
    """Return the part of ``virtual_dir`` below its common ancestor with ``real_parent``."""
    parent_segments = split_segments(real_parent)
    virtual_segments = split_segments(virtual_dir)
    common = 0
    for ours, theirs in zip(parent_segments, virtual_segments):
        if ours != theirs:
            break
        common += 1
    return _join_dir(virtual_segments[common:])


def delta_depth(delta: str) -> int:
    return len(split_segments(delta))


def shorten_relative(value: str, delta: str) -> str:
    """Drop the leading ``delta`` segments from ``value`` and re-anchor it at ``./``.

    ``value`` must already have its leading ``./`` removed. When ``value``
    extends ``delta`` this equals ``"./" + value[len(delta):]``.
    Absolute values do not depend on the manifest's folder and are returned
    unchanged.

    Raises:
        PathPrefixError: If ``value`` does not start with the segments of ``delta``.
    """
    if is_absolute(value):
        return value
    value_segments = split_segments(value)
    delta_segments = split_segments(delta)
    if value_segments[: len(delta_segments)] != delta_segments:
        raise PathPrefixError(f"{value!r} does not start with {delta!r}")
    remainder = value_segments[len(delta_segments) :]
    shortened = "./" + "/".join(remainder)
    if remainder and value.endswith("/"):
        shortened += "/"
    return shortened


def extend_relative(value: str, delta: str) -> str:
    """Prefix ``value`` with one ``../`` per segment of ``delta``; absolute values are kept."""
    if is_absolute(value):
        return value
    return "../" * delta_depth(delta) + value
