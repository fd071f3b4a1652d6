from __future__ import annotations

import subprocess

import pytest

from unitkeeper.core.command_runner import CommandRunner, RecordingRunner, SystemctlRunner
from unitkeeper.exceptions import ControlCommandError


def test_base_runner_is_abstract() -> None:
    with pytest.raises(NotImplementedError):
        CommandRunner().run("daemon-reload")


def test_build_command_defaults() -> None:
    assert SystemctlRunner().build_command("enable", "foo") == ["systemctl", "enable", "foo"]


def test_build_command_user_mode_and_pkexec() -> None:
    runner = SystemctlRunner(executable="/bin/systemctl", user_mode=True, use_pkexec=True)
    assert runner.build_command("start", "foo") == ["pkexec", "/bin/systemctl", "--user", "start", "foo"]


def test_run_passes_command_and_timeout(monkeypatch) -> None:
    calls = []

    def fake_run(cmd, **kwargs):
        calls.append((cmd, kwargs))
        return subprocess.CompletedProcess(cmd, 0, "", "")

    monkeypatch.setattr(subprocess, "run", fake_run)
    SystemctlRunner(timeout=2.5).run("daemon-reload")

    cmd, kwargs = calls[0]
    assert cmd == ["systemctl", "daemon-reload"]
    assert kwargs["timeout"] == 2.5
    assert kwargs["check"] is True


def test_no_timeout_by_default(monkeypatch) -> None:
    seen = {}

    def fake_run(cmd, **kwargs):
        seen.update(kwargs)
        return subprocess.CompletedProcess(cmd, 0, "", "")

    monkeypatch.setattr(subprocess, "run", fake_run)
    SystemctlRunner().run("stop", "foo")
    assert seen["timeout"] is None


def test_non_zero_exit_raises(monkeypatch) -> None:
    def fake_run(cmd, **kwargs):
        raise subprocess.CalledProcessError(5, cmd, "", "Unit foo.service not found.\n")

    monkeypatch.setattr(subprocess, "run", fake_run)

    with pytest.raises(ControlCommandError) as excinfo:
        SystemctlRunner().run("start", "foo")

    error = excinfo.value
    assert error.returncode == 5
    assert error.command == ["start", "foo"]
    assert error.stderr == "Unit foo.service not found."
    assert str(error) == "'start foo' exited with status 5: Unit foo.service not found."


def test_launch_failure_raises(tmp_path) -> None:
    runner = SystemctlRunner(executable=str(tmp_path / "no-such-systemctl"))
    with pytest.raises(ControlCommandError) as excinfo:
        runner.run("daemon-reload")
    assert excinfo.value.returncode is None
    assert isinstance(excinfo.value.__cause__, OSError)


def test_timeout_raises(monkeypatch) -> None:
    def fake_run(cmd, **kwargs):
        raise subprocess.TimeoutExpired(cmd, kwargs["timeout"])

    monkeypatch.setattr(subprocess, "run", fake_run)

    with pytest.raises(ControlCommandError, match="timed out"):
        SystemctlRunner(timeout=1).run("reload", "foo")


def test_recording_runner_records_and_fails() -> None:
    runner = RecordingRunner()
    runner.run("daemon-reload")
    runner.fail("enable", returncode=4)

    with pytest.raises(ControlCommandError) as excinfo:
        runner.run("enable", "foo")

    assert excinfo.value.returncode == 4
    assert runner.calls == [("daemon-reload",), ("enable", "foo")]
