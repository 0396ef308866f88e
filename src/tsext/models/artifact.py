"""Required artifact model."""

from __future__ import annotations

from dataclasses import dataclass

FILE = "file"
DIRECTORY = "directory"
_VALID_KINDS = {FILE, DIRECTORY}


@dataclass(frozen=True)
class RequiredArtifact:
    """A named file or folder the scan must locate."""

    name: str
    kind: str

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Artifact name must be non-empty")
        if "/" in self.name or "\\" in self.name:
            raise ValueError(f"Artifact name must be a plain name, not a path: {self.name}")
        if self.kind not in _VALID_KINDS:
            raise ValueError(f"Invalid artifact kind: {self.kind}")

    @property
    def is_directory(self) -> bool:
        return self.kind == DIRECTORY

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "kind": self.kind}
