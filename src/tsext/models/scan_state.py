"""Per-scan mutable state."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path


class VirtualPathMap:
    """Virtual path -> real location for every file published during one scan.

    Keys are unique and each real location is published under one virtual
    path only. Callers pass real locations with symlinks already followed.
    Entries are never removed.
    """

    def __init__(self) -> None:
        self._by_virtual: dict[str, Path] = {}
        self._by_real: dict[Path, str] = {}

    def __contains__(self, virtual_path: object) -> bool:
        return virtual_path in self._by_virtual

    def __len__(self) -> int:
        return len(self._by_virtual)

    def __iter__(self) -> Iterator[str]:
        return iter(self._by_virtual)

    def __bool__(self) -> bool:
        return bool(self._by_virtual)

    def get(self, virtual_path: str) -> Path | None:
        return self._by_virtual.get(virtual_path)

    def published_as(self, real: Path) -> str | None:
        """Return the virtual path ``real`` was published under, if any."""
        return self._by_real.get(real)

    def add(self, virtual_path: str, real: Path) -> bool:
        """Record a published file; return ``False`` if the pair is already known."""
        if not virtual_path or virtual_path.startswith("/"):
            raise ValueError(f"Invalid virtual path: {virtual_path!r}")
        existing = self._by_virtual.get(virtual_path)
        if existing is not None:
            if existing == real:
                return False
            raise ValueError(f"Virtual path {virtual_path} already maps to {existing}")
        previous = self._by_real.get(real)
        if previous is not None:
            raise ValueError(f"{real} is already published as {previous}")
        self._by_virtual[virtual_path] = real
        self._by_real[real] = virtual_path
        return True

    def items(self) -> list[tuple[str, Path]]:
        return list(self._by_virtual.items())

    def to_dict(self) -> dict[str, str]:
        return {virtual: real.as_posix() for virtual, real in self._by_virtual.items()}


@dataclass(slots=True)
class ScanState:
    """Scratch state owned by a single scan and discarded when it ends.

    ``visited`` holds real folder locations.
    """

    visited: set[Path] = field(default_factory=set)
    virtual_files: VirtualPathMap = field(default_factory=VirtualPathMap)
