"""Source context model."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..ownership import ProjectOwnership


@dataclass(frozen=True)
class ProjectContext:
    """One analysis unit: a source context root and its owning project root.

    ``project_root`` is ``None`` when no project owns the context; such a
    context is ignored by the scan.
    """

    root: Path
    project_root: Path | None = None

    def __post_init__(self) -> None:
        if not self.root.is_absolute():
            raise ValueError(f"Context root must be absolute: {self.root}")
        if self.project_root is None:
            return
        if not self.project_root.is_absolute():
            raise ValueError(f"Project root must be absolute: {self.project_root}")
        if self.project_root != self.root and self.project_root not in self.root.parents:
            raise ValueError(f"Project root {self.project_root} does not contain {self.root}")

    @property
    def has_project(self) -> bool:
        return self.project_root is not None

    def to_dict(self) -> dict[str, str | None]:
        return {
            "root": self.root.as_posix(),
            "projectRoot": self.project_root.as_posix() if self.project_root else None,
        }

    @classmethod
    def for_directory(cls, root: Path, ownership: ProjectOwnership) -> ProjectContext:
        resolved = root.resolve()
        return cls(root=resolved, project_root=ownership.owner_of(resolved))
