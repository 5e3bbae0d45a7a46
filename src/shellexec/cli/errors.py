# topmark:header:start
#
#   project      : ShellExec
#   file         : errors.py
#   file_relpath : src/shellexec/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the ShellExec CLI.

Usage:
    Raise these exceptions in CLI commands to signal errors with standardized
    messages and exit codes. Engine errors
    ([`ShellExecError`][shellexec.core.errors.ShellExecError]) are translated with
    [`cli_error_from`][shellexec.cli.errors.cli_error_from].

Styling:
    Exceptions prefer the project console if available (see `show()`); if no console
    is present in the Click context, they fall back to Click's default styling.
"""

from __future__ import annotations

from typing import IO, Any

import click

from shellexec.cli.exit_codes import ExitCode
from shellexec.core.errors import BookFormatError, ConfigError, ShellExecError


class ShellExecCliError(click.ClickException):
    """Base class for all ShellExec CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (colorization happens in `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available."""
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(getattr(ctx, "obj", None), dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(f"Error: {self.format_message()}")
                return
        super().show(file)


class ShellExecUsageError(ShellExecCliError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class ShellExecDataError(ShellExecCliError):
    """Error for malformed preprocessor input."""

    exit_code = ExitCode.DATA_ERROR


class ShellExecFileNotFoundError(ShellExecCliError):
    """Error when an input path does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class ShellExecPipelineError(ShellExecCliError):
    """Error for rewriting failures (strict mode, or outside a book chapter)."""

    exit_code = ExitCode.PIPELINE_ERROR


class ShellExecIOError(ShellExecCliError):
    """Error for I/O errors reading/writing files."""

    exit_code = ExitCode.IO_ERROR


class ShellExecConfigError(ShellExecCliError):
    """Error for configuration errors (invalid preprocessor settings)."""

    exit_code = ExitCode.CONFIG_ERROR


def cli_error_from(exc: ShellExecError) -> ShellExecCliError:
    """Map an engine error onto the CLI error carrying the matching exit code."""
    if isinstance(exc, ConfigError):
        return ShellExecConfigError(str(exc))
    if isinstance(exc, BookFormatError):
        return ShellExecDataError(str(exc))
    return ShellExecPipelineError(str(exc))
