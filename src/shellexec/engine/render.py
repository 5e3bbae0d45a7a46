# topmark:header:start
#
#   project      : ShellExec
#   file         : render.py
#   file_relpath : src/shellexec/engine/render.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Turn captured command output into HTML and assemble block transcripts.

Captured bytes are decoded as strict UTF-8 and passed through `ansi2html`, which
escapes HTML special characters and converts ANSI SGR sequences (colors, bold,
underline, ...) into inline-styled ``<span>`` elements. Inline styles keep the
transcript self-contained: the rendered book needs no extra stylesheet.

A transcript for one block looks like::

    <pre><code>$ echo visible
    visible

    $ true
    </code></pre>

Each visible command contributes its prompt line, then its stdout, then its
stderr; a blank separator line follows whenever either stream produced output.
"""

from __future__ import annotations

import html
from typing import TYPE_CHECKING

from ansi2html import Ansi2HTMLConverter

from shellexec.config.logging import get_logger
from shellexec.constants import DEFAULT_PROMPT, TRANSCRIPT_CLOSE, TRANSCRIPT_OPEN
from shellexec.core.errors import MarkupError, OutputDecodeError

if TYPE_CHECKING:
    from shellexec.config.logging import ShellExecLogger
    from shellexec.engine.executor import CommandOutput

logger: ShellExecLogger = get_logger(__name__)


class OutputRenderer:
    """Convert raw command output to HTML markup."""

    def __init__(self) -> None:
        self._converter = Ansi2HTMLConverter(inline=True, escaped=True)

    def render(self, data: bytes) -> str:
        """Decode ``data`` and convert embedded ANSI styles to inline HTML.

        Args:
            data (bytes): Raw captured stdout or stderr.

        Returns:
            str: HTML-escaped text with styled spans; ``""`` for empty input.

        Raises:
            OutputDecodeError: If ``data`` is not valid UTF-8.
            MarkupError: If the ANSI converter fails.
        """
        if not data:
            return ""
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise OutputDecodeError(f"command output is not valid UTF-8: {exc}") from exc
        try:
            return self._converter.convert(text, full=False)
        except Exception as exc:
            raise MarkupError(f"cannot convert command output to HTML: {exc}") from exc


class TranscriptBuilder:
    """Accumulate the transcript of one tagged block.

    Args:
        renderer (OutputRenderer): Converter for captured output.
        prompt (str): Prompt echoed before each visible command.
    """

    def __init__(self, renderer: OutputRenderer, *, prompt: str = DEFAULT_PROMPT) -> None:
        self._renderer = renderer
        self._prompt = prompt
        self._parts: list[str] = []

    def add(self, command: str, output: CommandOutput) -> None:
        """Append a visible command and its rendered output."""
        stdout = self._renderer.render(output.stdout)
        stderr = self._renderer.render(output.stderr)

        self._parts.append(html.escape(f"{self._prompt}{command}", quote=False) + "\n")
        self._parts.append(stdout)
        self._parts.append(stderr)
        if stdout or stderr:
            self._parts.append("\n")

    def build(self) -> str:
        """Return the transcript wrapped in a single preformatted container."""
        return f"{TRANSCRIPT_OPEN}{''.join(self._parts)}{TRANSCRIPT_CLOSE}"
