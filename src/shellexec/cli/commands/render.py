# topmark:header:start
#
#   project      : ShellExec
#   file         : render.py
#   file_relpath : src/shellexec/cli/commands/render.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ShellExec ``render`` command.

Rewrites a single markdown document outside of mdBook, which is handy for
previewing a chapter or for READMEs. All tagged blocks of the document share one
session store, exactly like one chapter does under mdBook.

Examples:
  Print the rewritten chapter:

    $ shellexec render src/tutorial.md

  Use the settings of an existing book and write the result to a file:

    $ shellexec render src/tutorial.md --book-toml book.toml -o /tmp/tutorial.md

  Show the examples without running anything:

    $ cat README.md | shellexec render - --no-exec
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from shellexec.cli.errors import (
    ShellExecFileNotFoundError,
    ShellExecIOError,
    cli_error_from,
)
from shellexec.cli.options import CONTEXT_SETTINGS
from shellexec.config.io import load_book_config
from shellexec.config.logging import get_logger
from shellexec.config.model import Config
from shellexec.core.errors import ShellExecError
from shellexec.engine.rewriter import rewrite_markdown

if TYPE_CHECKING:
    from shellexec.cli.console_api import ConsoleLike
    from shellexec.config.logging import ShellExecLogger

logger: ShellExecLogger = get_logger(__name__)


@click.command(
    name="render",
    help="Rewrite one markdown file (or '-' for STDIN) and print the result.",
    context_settings=CONTEXT_SETTINGS,
)
@click.argument("path", type=str)
@click.option(
    "--book-toml",
    "book_toml",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Read settings from the [preprocessor.shellexec] table of this book.toml.",
)
@click.option("--shell", type=str, default=None, help="Shell used to run commands.")
@click.option(
    "--no-exec",
    "no_exec",
    is_flag=True,
    help="Do not run anything; show the examples with silent lines removed.",
)
@click.option(
    "--output",
    "-o",
    "output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the result to this file instead of STDOUT.",
)
def render_command(
    *,
    path: str,
    book_toml: Path | None,
    shell: str | None,
    no_exec: bool,
    output: Path | None,
) -> None:
    """Rewrite the tagged example blocks of one markdown document.

    Args:
        path (str): Markdown file to read, or ``-`` for STDIN.
        book_toml (Path | None): Optional book.toml providing preprocessor settings.
        shell (str | None): Override for the ``shell`` setting.
        no_exec (bool): Disable command execution.
        output (Path | None): Destination file; STDOUT when None.

    Raises:
        ShellExecFileNotFoundError: If ``path`` does not exist.
        ShellExecIOError: If the input cannot be read or the output cannot be written.
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]

    try:
        config = load_book_config(book_toml) if book_toml else Config()
        config = config.with_overrides(shell=shell, execute=False if no_exec else None)
    except ShellExecError as exc:
        raise cli_error_from(exc) from exc

    if path == "-":
        source = click.get_text_stream("stdin").read()
    else:
        src_path = Path(path)
        if not src_path.is_file():
            raise ShellExecFileNotFoundError(f"No such file: {path}")
        try:
            source = src_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ShellExecIOError(f"Cannot read {path}: {exc}") from exc

    try:
        rewritten = rewrite_markdown(source, config=config)
    except ShellExecError as exc:
        raise cli_error_from(exc) from exc

    if output is None:
        console.print(rewritten, nl=False)
        return

    try:
        output.write_text(rewritten, encoding="utf-8")
    except OSError as exc:
        raise ShellExecIOError(f"Cannot write {output}: {exc.strerror or exc}") from exc
    logger.info("Wrote %s", output)
