# topmark:header:start
#
#   project      : ShellExec
#   file         : executor.py
#   file_relpath : src/shellexec/engine/executor.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Run a single example command in a session's working directory.

Each command line is passed to a fresh shell as one ``-c`` script argument. Visible
commands have stdout and stderr captured in full; silent commands have both
streams sent to the null device. The call blocks until the process exits. No
timeout is enforced.

The exit status is recorded for logging but deliberately has no effect on the
rendered transcript: documentation may demonstrate a failing command.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from typing import TYPE_CHECKING

from shellexec.config.logging import get_logger
from shellexec.constants import DEFAULT_SHELL
from shellexec.core.errors import CommandSpawnError

if TYPE_CHECKING:
    from pathlib import Path

    from shellexec.config.logging import ShellExecLogger

logger: ShellExecLogger = get_logger(__name__)


@dataclass(frozen=True)
class CommandOutput:
    """Raw result of one command.

    Attributes:
        stdout (bytes): Captured standard output (empty for silent commands).
        stderr (bytes): Captured standard error (empty for silent commands).
        returncode (int): Process exit status; informational only.
    """

    stdout: bytes = b""
    stderr: bytes = b""
    returncode: int = 0


class CommandRunner:
    """Spawns ``<shell> -c <command>`` processes.

    Args:
        shell (str): Shell executable, looked up on ``PATH`` when not absolute.
    """

    def __init__(self, shell: str = DEFAULT_SHELL) -> None:
        self.shell = shell

    def run(self, command: str, cwd: Path, *, visible: bool) -> CommandOutput:
        """Run ``command`` in ``cwd`` and wait for it to finish.

        Args:
            command (str): The command line, passed verbatim as the script argument.
            cwd (Path): Working directory (the session directory).
            visible (bool): Capture stdout/stderr when True; discard both when False.

        Returns:
            CommandOutput: Captured bytes (empty when not visible) and exit status.

        Raises:
            CommandSpawnError: If the shell cannot be started.
        """
        sink = subprocess.PIPE if visible else subprocess.DEVNULL
        try:
            proc = subprocess.run(
                [self.shell, "-c", command],
                cwd=cwd,
                stdin=subprocess.DEVNULL,
                stdout=sink,
                stderr=sink,
                check=False,
            )
        except OSError as exc:
            raise CommandSpawnError(
                f"cannot run {self.shell!r} for command {command!r}: {exc.strerror or exc}"
            ) from exc

        if proc.returncode != 0:
            logger.debug("Command %r exited with status %d", command, proc.returncode)
        else:
            logger.trace("Command %r finished", command)

        return CommandOutput(
            stdout=proc.stdout or b"",
            stderr=proc.stderr or b"",
            returncode=proc.returncode,
        )
