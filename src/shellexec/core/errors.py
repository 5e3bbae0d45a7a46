# topmark:header:start
#
#   project      : ShellExec
#   file         : errors.py
#   file_relpath : src/shellexec/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised by the ShellExec rewriting engine.

These exceptions are framework-agnostic (no Click dependency). The book layer
catches [`ShellExecError`][shellexec.core.errors.ShellExecError] per chapter and
turns it into a diagnostic, so a failure never aborts the whole book. The CLI maps
the remaining ones onto [`ExitCode`][shellexec.cli.exit_codes.ExitCode] values.

A command that exits with a non-zero status is *not* an error: its output is
rendered like any other output.
"""

from __future__ import annotations


class ShellExecError(Exception):
    """Base class for all ShellExec engine errors."""


class SessionError(ShellExecError):
    """A session working directory could not be allocated."""


class CommandSpawnError(ShellExecError):
    """The shell process for an example command could not be started."""


class OutputDecodeError(ShellExecError):
    """Captured command output is not valid UTF-8."""


class MarkupError(ShellExecError):
    """Converting output to markup or serializing markdown failed."""


class ExampleStructureError(ShellExecError):
    """The event stream violates the tagged example block structure."""


class NestedExampleError(ExampleStructureError):
    """A code block started while a tagged example block was still open."""


class UnterminatedExampleError(ExampleStructureError):
    """The event stream ended inside a tagged example block."""


class ConfigError(ShellExecError):
    """Preprocessor settings are missing, malformed, or of the wrong type."""


class BookFormatError(ShellExecError):
    """The mdBook ``[context, book]`` envelope is malformed."""
