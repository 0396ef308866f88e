from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from tsext.config import Settings
from tsext.core import scan_context
from tsext.errors import ScanError
from tsext.ingestion import SnapshotStore
from tsext.ownership import MarkerProjectOwnership


@pytest.fixture
def settings(tmp_path) -> Settings:
    temp = tmp_path / "tmp"
    temp.mkdir()
    return Settings(temp_dir=temp)


def test_everything_inside_context_publishes_nothing(project_dir, build_tree, tsconfig, settings) -> None:
    build_tree(
        project_dir / "app",
        {
            "tsconfig.json": tsconfig(sourceRoot="./src"),
            "typings.json": "{}",
            "node_modules": {"lib": {"index.d.ts": ""}},
            "typings": {"globals.d.ts": ""},
            "src": {"main.ts": ""},
        },
    )
    store = SnapshotStore()

    result = scan_context(project_dir / "app", settings=settings, ingestion=store)

    assert result.is_ts_context()
    assert result.ts_root_rel_path == "src"
    assert not result.virtual_files
    assert store.history == []


def test_uncle_folders_are_published_recursively(project_dir, build_tree, tsconfig, settings) -> None:
    build_tree(
        project_dir,
        {
            "node_modules": {
                "lib": {"index.d.ts": "export {};", "package.json": "{}", "lib.js": ""},
            },
            "typings": {"globals.d.ts": "declare var x: number;"},
            "app": {"tsconfig.json": tsconfig(sourceRoot="./src", outDir="./out"), "src": {"main.ts": ""}},
        },
    )
    store = SnapshotStore()

    result = scan_context(project_dir / "app", settings=settings, ingestion=store)

    assert result.ts_root_rel_path == "src"
    assert result.location is not None
    assert set(result.location.outside) == {"node_modules", "typings"}
    assert result.location.missing == ("typings.json",)
    assert result.virtual_files.to_dict() == {
        "node_modules/lib/index.d.ts": (project_dir / "node_modules" / "lib" / "index.d.ts").as_posix(),
        "typings/globals.d.ts": (project_dir / "typings" / "globals.d.ts").as_posix(),
    }
    assert len(store.history) == 2
    snapshot = store.get(result.context.root, "typings/globals.d.ts")
    assert snapshot is not None and snapshot.text == "declare var x: number;"
    assert result.is_file_external("node_modules/lib/index.d.ts")
    assert not result.is_file_external("src/main.ts")


def test_external_manifest_is_rewritten(project_dir, build_tree, tsconfig, settings) -> None:
    build_tree(
        project_dir,
        {
            "tsconfig.json": tsconfig(sourceRoot="./web/src", outDir="./dist"),
            "typings.json": '{"name": "web"}',
            "node_modules": {},
            "typings": {},
            "web": {"src": {"app.ts": ""}},
        },
    )
    store = SnapshotStore()

    result = scan_context(project_dir / "web", settings=settings, ingestion=store)

    assert result.ts_root_rel_path == "src"
    assert set(result.virtual_files) == {"tsconfig.json", "typings.json"}
    assert result.virtual_files.get("tsconfig.json") == project_dir / "tsconfig.json"
    manifest = json.loads(store.get(result.context.root, "tsconfig.json").content)
    assert manifest["compilerOptions"]["sourceRoot"] == "./src"
    assert manifest["compilerOptions"]["outDir"] == "../dist"
    assert manifest["include"] == ["**/*.ts"]
    assert store.get(result.context.root, "typings.json").text == '{"name": "web"}'
    # the file on disk is untouched and the temp copy is gone
    on_disk = json.loads((project_dir / "tsconfig.json").read_text(encoding="utf-8"))
    assert "--sourceRootOriginal" not in on_disk["compilerOptions"]
    assert list(settings.temp_dir.iterdir()) == []


def test_context_equal_to_source_root(project_dir, build_tree, tsconfig, settings) -> None:
    build_tree(
        project_dir,
        {
            "tsconfig.json": tsconfig(sourceRoot="./web/src", outDir="./dist"),
            "web": {"src": {"app.ts": ""}},
        },
    )
    store = SnapshotStore()

    result = scan_context(project_dir / "web" / "src", settings=settings, ingestion=store)

    assert result.ts_root_rel_path == ""
    options = json.loads(store.get(result.context.root, "tsconfig.json").content)["compilerOptions"]
    assert options["sourceRoot"] == "./"
    assert options["outDir"] == "../../dist"


def test_source_root_escaping_project_publishes_nothing(tmp_path, build_tree, tsconfig, settings) -> None:
    base = tmp_path.resolve()
    build_tree(
        base,
        {
            "shared": {},
            "node_modules": {"x.ts": ""},
            "proj": {".git": {}, "tsconfig.json": tsconfig(sourceRoot="../shared")},
        },
    )
    store = SnapshotStore()

    result = scan_context(base / "proj", settings=settings, ingestion=store)

    assert not result.is_ts_context()
    assert not result.virtual_files
    assert len(store) == 0


def test_unrewritable_manifest_is_skipped(tmp_path, build_tree, tsconfig, settings, caplog) -> None:
    base = tmp_path.resolve()
    build_tree(
        base / "proj",
        {
            ".git": {},
            "tsconfig.json": tsconfig(sourceRoot="../proj/web/src"),
            "typings": {"a.ts": ""},
            "web": {"src": {}},
        },
    )
    store = SnapshotStore()

    with caplog.at_level(logging.ERROR, logger="tsext"):
        result = scan_context(base / "proj" / "web", settings=settings, ingestion=store)

    assert result.ts_root_rel_path == "src"
    assert set(result.virtual_files) == {"typings/a.ts"}
    assert "Not publishing" in caplog.text


def test_no_owning_project_is_inert(tmp_path, build_tree, tsconfig, settings) -> None:
    root = build_tree(tmp_path.resolve() / "loose", {"tsconfig.json": tsconfig()})
    store = SnapshotStore()

    ownership = MarkerProjectOwnership(markers=("tsext-test-marker",))

    result = scan_context(root, settings=settings, ownership=ownership, ingestion=store)

    assert result.context.project_root is None
    assert result.location is None
    assert not result.is_ts_context()
    assert len(store) == 0


def test_explicit_project_root(tmp_path, build_tree, tsconfig, settings) -> None:
    base = tmp_path.resolve()
    build_tree(base, {"node_modules": {"a.ts": ""}, "app": {"tsconfig.json": tsconfig()}})
    store = SnapshotStore()

    result = scan_context(base / "app", project_root=base, settings=settings, ingestion=store)

    assert result.context.project_root == base
    assert set(result.virtual_files) == {"node_modules/a.ts"}


def test_dry_run_publishes_nothing(project_dir, build_tree, tsconfig, settings) -> None:
    build_tree(project_dir, {"node_modules": {"a.ts": ""}, "app": {"tsconfig.json": tsconfig()}})
    store = SnapshotStore()

    result = scan_context(project_dir / "app", settings=settings, ingestion=store, publish=False)

    assert result.location is not None and "node_modules" in result.location.outside
    assert len(store) == 0


def test_ingestion_failure_aborts_the_scan(project_dir, build_tree, tsconfig, settings) -> None:
    build_tree(project_dir, {"node_modules": {"a.ts": ""}, "app": {"tsconfig.json": tsconfig()}})

    class FailingIngestion:
        def ingest(self, virtual_path, content, context):
            raise ScanError("analyzer unavailable")

    with pytest.raises(ScanError):
        scan_context(project_dir / "app", settings=settings, ingestion=FailingIngestion())


def test_rescan_replaces_snapshots(project_dir, build_tree, tsconfig, settings) -> None:
    build_tree(project_dir, {"node_modules": {"a.ts": "v1"}, "app": {"tsconfig.json": tsconfig()}})
    store = SnapshotStore()

    scan_context(project_dir / "app", settings=settings, ingestion=store)
    (project_dir / "node_modules" / "a.ts").write_text("v2", encoding="utf-8")
    result = scan_context(project_dir / "app", settings=settings, ingestion=store)

    assert len(store) == 1
    assert store.get(result.context.root, "node_modules/a.ts").text == "v2"


def test_symlink_cycle_in_uncle_publishes_each_file_once(project_dir, build_tree, tsconfig, settings) -> None:
    build_tree(
        project_dir,
        {
            "node_modules": {"lib": {"x.ts": "export {};"}, "other": {}},
            "app": {"tsconfig.json": tsconfig()},
        },
    )
    node_modules = project_dir / "node_modules"
    (node_modules / "lib" / "loop").symlink_to(Path(".."), target_is_directory=True)
    (node_modules / "other" / "loop").symlink_to(Path(".."), target_is_directory=True)
    store = SnapshotStore()

    result = scan_context(project_dir / "app", settings=settings, ingestion=store)

    assert result.virtual_files.to_dict() == {"node_modules/lib/x.ts": (node_modules / "lib" / "x.ts").as_posix()}
    assert len(store.history) == 1


def test_file_reachable_through_two_links_is_published_once(project_dir, build_tree, tsconfig, settings) -> None:
    build_tree(
        project_dir,
        {
            "node_modules": {".pnpm": {"lib": {"x.ts": ""}}},
            "app": {"tsconfig.json": tsconfig()},
        },
    )
    node_modules = project_dir / "node_modules"
    (node_modules / "lib").symlink_to(Path(".pnpm") / "lib", target_is_directory=True)
    store = SnapshotStore()

    result = scan_context(project_dir / "app", settings=settings, ingestion=store)

    assert list(result.virtual_files) == ["node_modules/.pnpm/lib/x.ts"]
    assert result.virtual_files.published_as(node_modules / ".pnpm" / "lib" / "x.ts") == "node_modules/.pnpm/lib/x.ts"
    assert len(store.history) == 1
