# topmark:header:start
#
#   project      : ShellExec
#   file         : supports.py
#   file_relpath : src/shellexec/cli/commands/supports.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ShellExec ``supports`` command.

mdBook runs ``mdbook-shellexec supports <renderer>`` before a build and skips the
preprocessor for that renderer when the exit status is non-zero.
"""

from __future__ import annotations

import click

from shellexec.book.protocol import supports_renderer
from shellexec.cli.exit_codes import ExitCode


@click.command(
    name="supports",
    help="Report whether RENDERER is supported (exit status 0 means yes).",
)
@click.argument("renderer")
def supports_command(renderer: str) -> None:
    """Exit with SUCCESS if the preprocessor supports ``renderer``.

    Args:
        renderer (str): Renderer name as passed by mdBook (``html``, ``markdown``, ...).
    """
    ctx = click.get_current_context()
    ctx.exit(ExitCode.SUCCESS if supports_renderer(renderer) else ExitCode.FAILURE)
