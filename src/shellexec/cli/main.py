# topmark:header:start
#
#   project      : ShellExec
#   file         : main.py
#   file_relpath : src/shellexec/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ShellExec Click CLI: mdBook preprocessor entry point plus helper subcommands.

Key ideas:
- Group-level options are initialized once, placed into ``ctx.obj``.
- Invoked without a subcommand (the way mdBook runs a preprocessor), the group
  reads ``[context, book]`` from STDIN and writes the rewritten book to STDOUT.
- Subcommands (``supports``, ``render``, ``version``) reuse the same shared state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from shellexec.book.protocol import run_preprocessor
from shellexec.cli.commands.render import render_command
from shellexec.cli.commands.supports import supports_command
from shellexec.cli.commands.version import version_command
from shellexec.cli.console import ClickConsole
from shellexec.cli.errors import ShellExecPipelineError, cli_error_from
from shellexec.cli.options import (
    color_mode_from_flags,
    output_options,
    resolve_color_mode,
    resolve_verbosity,
)
from shellexec.config.logging import get_logger, resolve_env_log_level, setup_logging
from shellexec.core.errors import ShellExecError

if TYPE_CHECKING:
    from shellexec.book.protocol import BookReport
    from shellexec.cli.console_api import ConsoleLike

logger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: str | None,
    no_color: bool,
) -> None:
    """Initialize shared state (verbosity, logging & color) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        color_mode (str | None): Value of ``--color`` (or ``None``).
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
    """
    ctx.obj = ctx.obj or {}

    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)

    # Internal logging is configured via env only:
    level_env = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    enable_color = resolve_color_mode(cli_mode=color_mode_from_flags(color_mode, no_color))
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color

    ctx.obj["console"] = ClickConsole(enable_color=enable_color)


def report_book(console: ConsoleLike, report: BookReport, *, verbosity: int, color: bool) -> None:
    """Print chapter diagnostics and an optional summary to stderr."""
    if verbosity < 0:
        return
    for diagnostic in report.diagnostics:
        console.status(diagnostic.render(color=color))
    if report.failed:
        console.warn(f"shellexec: {report.failed} chapter(s) left unchanged")
    if verbosity > 0:
        console.status(
            f"shellexec: {report.blocks} example block(s) in {report.rewritten} of "
            f"{report.chapters} chapter(s), {report.failed} failed"
        )


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="ShellExec: run tagged shell examples in an mdBook and embed their output.",
)
@output_options
@click.option(
    "--strict",
    is_flag=True,
    help="Exit with a failure status if any chapter could not be processed.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    color_mode: str | None,
    no_color: bool,
    strict: bool,
) -> None:
    """Entry point for the ShellExec CLI.

    Raises:
        ShellExecPipelineError: In ``--strict`` mode, if a chapter failed.
    """
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=color_mode,
        no_color=no_color,
    )
    if ctx.invoked_subcommand is not None:
        return

    console: ConsoleLike = ctx.obj["console"]
    text = click.get_text_stream("stdin").read()
    try:
        book_json, report = run_preprocessor(text)
    except ShellExecError as exc:
        raise cli_error_from(exc) from exc

    click.echo(book_json, nl=False)

    report_book(
        console,
        report,
        verbosity=ctx.obj["verbosity_level"],
        color=ctx.obj["color_enabled"],
    )
    if strict and report.failed:
        raise ShellExecPipelineError(f"{report.failed} chapter(s) could not be processed")


cli.add_command(supports_command)

cli.add_command(render_command)

cli.add_command(version_command)

if __name__ == "__main__":
    cli()
