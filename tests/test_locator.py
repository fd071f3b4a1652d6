from __future__ import annotations

from pathlib import Path

import pytest

from unitkeeper.core.locator import UnitFileLocator
from unitkeeper.utils.constants import DEFAULT_SEARCH_PATHS


def test_default_search_paths() -> None:
    assert UnitFileLocator().search_paths() == [
        Path("/etc/systemd"),
        Path("/usr/lib/systemd"),
        Path("/lib/systemd"),
    ]
    assert UnitFileLocator().search_paths() == DEFAULT_SEARCH_PATHS


def test_empty_search_paths_are_rejected() -> None:
    with pytest.raises(ValueError):
        UnitFileLocator([])


def test_search_paths_accept_strings(tmp_path: Path) -> None:
    locator = UnitFileLocator([str(tmp_path / "a"), str(tmp_path / "b")])
    assert locator.search_paths() == [tmp_path / "a", tmp_path / "b"]
    assert locator.primary_root == tmp_path / "a"


def test_search_paths_returns_a_copy(locator: UnitFileLocator, roots: list[Path]) -> None:
    locator.search_paths().append(Path("/elsewhere"))
    assert locator.search_paths() == roots


def test_candidate_files_per_root(locator: UnitFileLocator, roots: list[Path]) -> None:
    assert locator.candidate_files("foo") == [root / "system" / "foo.service" for root in roots]


def test_canonical_file_is_under_primary_root(locator: UnitFileLocator, roots: list[Path]) -> None:
    assert locator.canonical_file("foo") == roots[0] / "system" / "foo.service"


def test_existing_files_lists_every_shadow_copy(locator: UnitFileLocator, roots: list[Path]) -> None:
    (roots[0] / "system" / "foo.service").write_text("a")
    (roots[2] / "system" / "foo.service").write_text("c")
    assert locator.existing_files("foo") == [
        roots[0] / "system" / "foo.service",
        roots[2] / "system" / "foo.service",
    ]


def test_existing_files_skips_directories(locator: UnitFileLocator, roots: list[Path]) -> None:
    (roots[1] / "system" / "foo.service").mkdir()
    assert locator.existing_files("foo") == []


def test_existing_files_counts_dangling_symlinks(locator: UnitFileLocator, roots: list[Path]) -> None:
    link = roots[1] / "system" / "foo.service"
    link.symlink_to(roots[1] / "missing")
    assert locator.existing_files("foo") == [link]


def test_missing_roots_are_not_an_error(tmp_path: Path) -> None:
    locator = UnitFileLocator([tmp_path / "nope", tmp_path / "nada"])
    assert locator.existing_files("foo") == []
