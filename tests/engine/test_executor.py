# topmark:header:start
#
#   project      : ShellExec
#   file         : test_executor.py
#   file_relpath : tests/engine/test_executor.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the command runner (one ``bash -c`` process per command line)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from shellexec.core.errors import CommandSpawnError
from shellexec.engine.executor import CommandOutput, CommandRunner
from tests.conftest import mark_integration

if TYPE_CHECKING:
    from pathlib import Path


@mark_integration
def test_visible_command_captures_both_streams(tmp_path: Path) -> None:
    out: CommandOutput = CommandRunner().run("echo out; echo err >&2", tmp_path, visible=True)

    assert out.stdout == b"out\n"
    assert out.stderr == b"err\n"
    assert out.returncode == 0


@mark_integration
def test_silent_command_discards_output_but_runs(tmp_path: Path) -> None:
    out: CommandOutput = CommandRunner().run(
        "echo hidden; echo hidden >&2; touch made", tmp_path, visible=False
    )

    assert out.stdout == b""
    assert out.stderr == b""
    assert (tmp_path / "made").exists()


@mark_integration
def test_command_runs_in_given_directory(tmp_path: Path) -> None:
    out: CommandOutput = CommandRunner().run("pwd -P", tmp_path, visible=True)
    assert out.stdout.decode().strip() == str(tmp_path.resolve())


@mark_integration
def test_non_zero_exit_is_not_an_error(tmp_path: Path) -> None:
    out: CommandOutput = CommandRunner().run("echo failing >&2; exit 3", tmp_path, visible=True)

    assert out.returncode == 3
    assert out.stderr == b"failing\n"


@mark_integration
def test_command_does_not_read_stdin(tmp_path: Path) -> None:
    # stdin is detached, so `cat` sees EOF immediately instead of blocking.
    out: CommandOutput = CommandRunner().run("cat", tmp_path, visible=True)
    assert out.stdout == b""


def test_missing_shell_raises_spawn_error(tmp_path: Path) -> None:
    runner = CommandRunner(shell="/nonexistent/shell-for-shellexec-tests")
    with pytest.raises(CommandSpawnError, match="shell-for-shellexec-tests"):
        runner.run("echo hi", tmp_path, visible=True)


def test_missing_working_directory_raises_spawn_error(tmp_path: Path) -> None:
    with pytest.raises(CommandSpawnError):
        CommandRunner().run("echo hi", tmp_path / "gone", visible=True)
