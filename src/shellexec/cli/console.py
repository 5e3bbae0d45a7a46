# topmark:header:start
#
#   project      : ShellExec
#   file         : console.py
#   file_relpath : src/shellexec/cli/console.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click-backed console for user-facing program output.

Only `print` writes to stdout, and only for payloads: the rewritten book in
preprocessor mode, a rendered document or the version string. Summaries,
warnings and errors go to stderr so they never corrupt what mdBook reads back.
Internal diagnostics use `logging` instead.
"""

from __future__ import annotations

import sys
from typing import Any, TextIO

import click

from shellexec.cli.console_api import ConsoleLike


class ClickConsole(ConsoleLike):
    """Console writing through `click.echo`.

    Args:
        enable_color (bool): Keep ANSI styling in the output when True.
        out (TextIO | None): Payload stream; `sys.stdout` by default.
        err (TextIO | None): Message stream; `sys.stderr` by default.
    """

    def __init__(
        self,
        *,
        enable_color: bool = True,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.enable_color = enable_color
        self.out: TextIO = out or sys.stdout
        self.err: TextIO = err or sys.stderr

    def _emit(self, stream: TextIO, text: str, nl: bool, **style: Any) -> None:
        if style and self.enable_color:
            text = click.style(text, **style)
        click.echo(text, nl=nl, file=stream, color=self.enable_color)

    def print(self, text: str = "", *, nl: bool = True) -> None:
        """Write a payload to stdout."""
        self._emit(self.out, text, nl)

    def status(self, text: str, *, nl: bool = True) -> None:
        """Write a summary line to stderr."""
        self._emit(self.err, text, nl)

    def warn(self, text: str, *, nl: bool = True) -> None:
        """Write a warning to stderr (yellow)."""
        self._emit(self.err, text, nl, fg="yellow")

    def error(self, text: str, *, nl: bool = True) -> None:
        """Write an error to stderr (bright red)."""
        self._emit(self.err, text, nl, fg="bright_red")

    def styled(self, text: str, **style_kwargs: Any) -> str:
        """Return ``text`` styled with `click.style`, or unchanged without color."""
        return click.style(text, **style_kwargs) if self.enable_color else text
