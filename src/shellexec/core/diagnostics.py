# topmark:header:start
#
#   project      : ShellExec
#   file         : diagnostics.py
#   file_relpath : src/shellexec/core/diagnostics.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Diagnostic types collected while preprocessing a book.

Sections:
    * DiagnosticLevel: severity levels with associated terminal colors.
    * Diagnostic: immutable structured diagnostic payload (level + message + chapter).
    * DiagnosticLog: mutable per-run collection with helpers for adding and counting.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, cast

from yachalk import chalk

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


class DiagnosticLevel(Enum):
    """Severity levels for diagnostics collected during processing.

    Levels map to terminal colors and are ordered by importance: ERROR > WARNING > INFO.
    """

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def color(self) -> Callable[[str], str]:
        """Return the `yachalk` color function associated with this severity level.

        Returns:
            Callable[[str], str]: The `yachalk` color function for this level.
        """
        return cast(
            "Callable[[str], str]",
            {
                DiagnosticLevel.INFO: chalk.blue,
                DiagnosticLevel.WARNING: chalk.yellow,
                DiagnosticLevel.ERROR: chalk.red_bright,
            }[self],
        )


@dataclass(frozen=True)
class Diagnostic:
    """Structured diagnostic with a severity level, message and optional chapter."""

    level: DiagnosticLevel
    message: str
    chapter: str | None = None

    def render(self, *, color: bool = False) -> str:
        """Return a one-line human readable form of the diagnostic.

        Args:
            color (bool): Colorize the severity prefix with `yachalk`.

        Returns:
            str: ``"[level] chapter: message"`` (chapter omitted when unknown).
        """
        prefix = f"[{self.level.value}]"
        if color:
            prefix = self.level.color(prefix)
        where = f" {self.chapter}:" if self.chapter else ""
        return f"{prefix}{where} {self.message}"


@dataclass
class DiagnosticLog:
    """Mutable collection of diagnostics for one preprocessing run."""

    items: list[Diagnostic] = field(default_factory=lambda: [])

    def add(self, level: DiagnosticLevel, message: str, *, chapter: str | None = None) -> None:
        """Append a diagnostic."""
        self.items.append(Diagnostic(level=level, message=message, chapter=chapter))

    def add_error(self, message: str, *, chapter: str | None = None) -> None:
        """Append an ERROR diagnostic."""
        self.add(DiagnosticLevel.ERROR, message, chapter=chapter)

    def add_warning(self, message: str, *, chapter: str | None = None) -> None:
        """Append a WARNING diagnostic."""
        self.add(DiagnosticLevel.WARNING, message, chapter=chapter)

    def count(self, level: DiagnosticLevel) -> int:
        """Return the number of diagnostics at ``level``."""
        return sum(1 for d in self.items if d.level is level)

    @property
    def has_errors(self) -> bool:
        """Return True if at least one ERROR diagnostic was recorded."""
        return self.count(DiagnosticLevel.ERROR) > 0

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)
