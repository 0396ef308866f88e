from __future__ import annotations

import pytest

from tsext.errors import PathPrefixError
from tsext.paths import (
    best_effort_delta,
    compute_delta,
    delta_depth,
    extend_relative,
    is_absolute,
    shorten_relative,
    split_segments,
    strip_current_dir,
)


def test_split_segments_drops_empty_and_current_dir() -> None:
    assert split_segments("/a//b/./c/") == ["a", "b", "c"]
    assert split_segments("../x") == ["..", "x"]
    assert split_segments("") == []


def test_strip_current_dir_removes_one_prefix() -> None:
    assert strip_current_dir("./src") == "src"
    assert strip_current_dir("././src") == "./src"
    assert strip_current_dir("../src") == "../src"


def test_compute_delta_carries_trailing_slash() -> None:
    assert compute_delta("/repo", "/repo/web/") == "web/"
    assert compute_delta("/repo", "/repo/web/src") == "web/src/"
    assert compute_delta("/repo", "/repo/") == ""


def test_compute_delta_compares_whole_segments() -> None:
    with pytest.raises(PathPrefixError):
        compute_delta("/repo/we", "/repo/web/")


def test_best_effort_delta_uses_common_ancestor() -> None:
    assert best_effort_delta("/repo/other", "/repo/web/src/") == "web/src/"


@pytest.mark.parametrize(
    ("value", "delta", "expected"),
    [
        ("web/src", "web/", "./src"),
        ("web/src/app", "web/src/", "./app"),
        ("web", "web/", "./"),
        ("web/src/", "web/", "./src/"),
    ],
)
def test_shorten_relative(value: str, delta: str, expected: str) -> None:
    assert shorten_relative(value, delta) == expected


def test_shorten_relative_matches_character_rule_when_value_extends_delta() -> None:
    value, delta = "packages/web/src", "packages/"
    assert shorten_relative(value, delta) == "./" + value[len(delta) :]


def test_shorten_relative_rejects_unrelated_value() -> None:
    with pytest.raises(PathPrefixError):
        shorten_relative("lib", "web/")


@pytest.mark.parametrize("delta, depth", [("", 0), ("web/", 1), ("a/b/c/", 3)])
def test_extend_relative_adds_one_hop_per_segment(delta: str, depth: int) -> None:
    assert delta_depth(delta) == depth
    assert extend_relative("dist", delta) == "../" * depth + "dist"


@pytest.mark.parametrize("value", ["/srv/build", "C:\\build\\out", "\\\\server\\share\\out"])
def test_absolute_values_are_not_relocated(value: str) -> None:
    assert is_absolute(value)
    assert extend_relative(value, "web/src/") == value
    assert shorten_relative(value, "web/") == value


def test_relative_values_are_not_absolute() -> None:
    assert not is_absolute("dist")
    assert not is_absolute("../dist")
    assert not is_absolute("C:dist")
