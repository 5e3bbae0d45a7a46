# topmark:header:start
#
#   project      : ShellExec
#   file         : console_api.py
#   file_relpath : src/shellexec/cli/console_api.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Console protocol used by ShellExec commands.

Commands depend on this protocol rather than on `ClickConsole`, so tests can pass
any object with the same methods.
"""

from __future__ import annotations

from typing import Protocol


class ConsoleLike(Protocol):
    """What a command needs from a console."""

    def print(self, text: str = "", *, nl: bool = True) -> None:
        """Write a payload to stdout."""
        ...

    def status(self, text: str, *, nl: bool = True) -> None:
        """Write a summary line to stderr."""
        ...

    def warn(self, text: str, *, nl: bool = True) -> None:
        """Write a warning to stderr."""
        ...

    def error(self, text: str, *, nl: bool = True) -> None:
        """Write an error to stderr."""
        ...

    def styled(self, text: str, **style_kwargs: object) -> str:
        """Return styled text (unchanged when styling is off)."""
        ...
