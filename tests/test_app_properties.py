from __future__ import annotations

import os
from pathlib import Path

import pytest

from unitkeeper.exceptions import ConfigNotFoundError
from unitkeeper.utils.app_properties import AppProperties, get_executable, get_properties


def _executable(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("#!/bin/sh\n")
    path.chmod(0o755)
    return path


def test_env_name() -> None:
    assert AppProperties(name="unit-keeper.v2").env_name == "UNIT_KEEPER_V2"
    assert AppProperties(name="-app-").env_name == "APP"


def test_search_paths(monkeypatch) -> None:
    monkeypatch.setenv("HOME", "/home/alice")
    properties = AppProperties(dir="/opt/app/bin", name="app")
    assert properties.search_paths() == [
        Path("/home/alice/.app"),
        Path("/opt/app/bin"),
        Path("/etc/app"),
    ]


def test_search_paths_without_name() -> None:
    assert AppProperties(dir="/opt/app/bin").search_paths() == [Path("/opt/app/bin")]
    assert AppProperties(dir="/opt/app/bin").config_files() == []


def test_config_files(monkeypatch) -> None:
    monkeypatch.setenv("HOME", "/home/alice")
    properties = AppProperties(dir="/opt/app/bin", name="app")
    assert properties.config_files() == [
        Path("/home/alice/.app/app.conf"),
        Path("/opt/app/bin/app.conf"),
        Path("/etc/app/app.conf"),
    ]


def test_find_config_prefers_most_specific(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    (bin_dir / "app.conf").write_text("a")

    properties = AppProperties(dir=str(bin_dir), name="app")
    assert properties.find_config() == bin_dir / "app.conf"

    home_config = tmp_path / "home" / ".app"
    home_config.mkdir(parents=True)
    (home_config / "app.conf").write_text("b")
    assert properties.find_config() == home_config / "app.conf"


def test_find_config_skips_directories(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    (tmp_path / ".app" / "app.conf").mkdir(parents=True)
    with pytest.raises(ConfigNotFoundError, match="no config found"):
        AppProperties(name="app").find_config()


def test_find_config_needs_a_name() -> None:
    with pytest.raises(ConfigNotFoundError, match="name not set"):
        AppProperties().find_config()


def test_get_executable_relative_path(tmp_path: Path, monkeypatch) -> None:
    script = _executable(tmp_path / "bin" / "tool")
    monkeypatch.chdir(tmp_path)
    assert os.path.samefile(get_executable("bin/tool"), script)


def test_get_executable_from_path(tmp_path: Path, monkeypatch) -> None:
    script = _executable(tmp_path / "bin" / "tool")
    monkeypatch.setenv("PATH", str(script.parent) + os.pathsep + os.environ.get("PATH", ""))
    assert os.path.samefile(get_executable("tool"), script)


def test_get_properties_strips_extensions(tmp_path: Path, monkeypatch) -> None:
    script = _executable(tmp_path / "bin" / "tool.py")
    monkeypatch.chdir(tmp_path)
    properties = get_properties("./bin/tool.py")
    assert os.path.samefile(properties.executable, script)
    assert os.path.samefile(properties.dir, script.parent)
    assert properties.name == "tool"
    assert properties.version == "0.0.0"
