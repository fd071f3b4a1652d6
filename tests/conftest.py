from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from unitkeeper.core.command_runner import RecordingRunner  # noqa: E402
from unitkeeper.core.locator import UnitFileLocator  # noqa: E402
from unitkeeper.core.materializer import Materializer  # noqa: E402
from unitkeeper.core.service_manager import ServiceController  # noqa: E402
from unitkeeper.models.service import ServiceDefinition  # noqa: E402


@pytest.fixture
def roots(tmp_path: Path) -> list[Path]:
    """Three search roots shaped like /etc/systemd, /usr/lib/systemd, /lib/systemd."""
    paths = [tmp_path / "etc", tmp_path / "usr-lib", tmp_path / "lib"]
    for path in paths:
        (path / "system").mkdir(parents=True)
    return paths


@pytest.fixture
def locator(roots: list[Path]) -> UnitFileLocator:
    return UnitFileLocator(roots)


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def controller(locator: UnitFileLocator, runner: RecordingRunner) -> ServiceController:
    return ServiceController(locator, runner)


@pytest.fixture
def materializer(controller: ServiceController) -> Materializer:
    return Materializer(controller)


@pytest.fixture
def foo() -> ServiceDefinition:
    return ServiceDefinition.simple("foo")
