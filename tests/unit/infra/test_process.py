from __future__ import annotations

"""
Unit tests for the External Process Infrastructure.

subprocess.run is mocked; the real-process path is covered by the e2e
suite through the CLI.
"""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from standards.domain.errors import ExternalToolError
from standards.infra.process import (
    COMMAND_NOT_EXECUTABLE,
    COMMAND_NOT_FOUND,
    CommandResult,
    SubprocessRunner,
    run_checked,
)


def test_subprocess_runner_captures_combined_output():
    completed = MagicMock(returncode=0, stdout="Already up to date.\n")

    with patch("standards.infra.process.subprocess.run", return_value=completed) as mock_run:
        result = SubprocessRunner().run(["git", "pull"], cwd="/repo")

    assert result == CommandResult(args=["git", "pull"], returncode=0, output="Already up to date.\n")
    kwargs = mock_run.call_args.kwargs
    assert kwargs["cwd"] == "/repo"
    assert kwargs["stdout"] is subprocess.PIPE
    assert kwargs["stderr"] is subprocess.STDOUT


def test_subprocess_runner_missing_executable():
    with patch("standards.infra.process.subprocess.run", side_effect=FileNotFoundError("no pandoc")):
        result = SubprocessRunner().run(["pandoc", "a.md"])

    assert result.returncode == COMMAND_NOT_FOUND
    assert "no pandoc" in result.output
    assert not result.ok


@pytest.mark.parametrize("error", [
    PermissionError(13, "Permission denied"),
    NotADirectoryError(20, "Not a directory"),
])
def test_subprocess_runner_unexecutable_command(error):
    with patch("standards.infra.process.subprocess.run", side_effect=error):
        result = SubprocessRunner().run(["./convert.sh", "a.md"], cwd="/repo")

    assert result.returncode == COMMAND_NOT_EXECUTABLE
    assert error.strerror in result.output


def test_run_checked_reports_unexecutable_command():
    with patch("standards.infra.process.subprocess.run", side_effect=PermissionError(13, "Permission denied")):
        with pytest.raises(ExternalToolError) as exc_info:
            run_checked(SubprocessRunner(), ["git", "pull"], description="Pull failed")

    assert exc_info.value.returncode == COMMAND_NOT_EXECUTABLE
    assert "Permission denied" in str(exc_info.value)


def test_run_checked_returns_successful_result(fake_runner):
    result = run_checked(fake_runner, ["true"])
    assert result.ok


def test_run_checked_raises_on_failure(make_runner):
    runner = make_runner(lambda args, cwd: (128, "fatal: not a git repository"))

    with pytest.raises(ExternalToolError) as exc_info:
        run_checked(runner, ["git", "pull"], cwd="/x", description="git pull failed")

    err = exc_info.value
    assert err.returncode == 128
    assert err.command == ["git", "pull"]
    assert str(err).startswith("git pull failed (exit code 128)")


def test_run_checked_default_description(make_runner):
    runner = make_runner(lambda args, cwd: 1)

    with pytest.raises(ExternalToolError) as exc_info:
        run_checked(runner, ["osascript", "-e", "x"])

    assert "'osascript' failed" in str(exc_info.value)
