"""Pytest configuration for the tsext test suite."""

from __future__ import annotations

import json
import logging
from collections import Counter
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from tsext.fs import LocalFileSystem


def _build_tree(root: Path, layout: dict[str, Any]) -> Path:
    """Create ``layout`` below ``root``: dict values are folders, strings are file contents."""
    root.mkdir(parents=True, exist_ok=True)
    for name, value in layout.items():
        path = root / name
        if isinstance(value, dict):
            _build_tree(path, value)
        else:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(value, encoding="utf-8")
    return root


def tsconfig_text(**compiler_options: str) -> str:
    return json.dumps({"compilerOptions": compiler_options, "include": ["**/*.ts"]})


class CountingFileSystem(LocalFileSystem):
    """Local filesystem that counts how often each folder is listed."""

    def __init__(self) -> None:
        super().__init__()
        self.listed: Counter[Path] = Counter()

    def children(self, directory: Path) -> list[Path]:
        self.listed[directory] += 1
        return super().children(directory)


@pytest.fixture(autouse=True)
def _restore_package_logger():
    """Undo handlers and level set by CLI runs."""
    package_logger = logging.getLogger("tsext")
    handlers = list(package_logger.handlers)
    level = package_logger.level
    yield
    for handler in list(package_logger.handlers):
        if handler not in handlers:
            package_logger.removeHandler(handler)
            handler.close()
    package_logger.setLevel(level)


@pytest.fixture
def build_tree() -> Callable[[Path, dict[str, Any]], Path]:
    return _build_tree


@pytest.fixture
def tsconfig() -> Callable[..., str]:
    return tsconfig_text


@pytest.fixture
def fs() -> LocalFileSystem:
    return LocalFileSystem()


@pytest.fixture
def counting_fs() -> CountingFileSystem:
    return CountingFileSystem()


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A project root marked by a .git folder."""
    root = tmp_path.resolve() / "proj"
    (root / ".git").mkdir(parents=True)
    return root
