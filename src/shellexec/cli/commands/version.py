# topmark:header:start
#
#   project      : ShellExec
#   file         : version.py
#   file_relpath : src/shellexec/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ShellExec ``version`` command.

Prints the current ShellExec version as installed in the active Python environment.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from shellexec.constants import SHELLEXEC_VERSION

if TYPE_CHECKING:
    from shellexec.cli.console_api import ConsoleLike


@click.command(
    name="version",
    help="Show the current version of ShellExec.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["default", "json"]),
    default="default",
    help="Output format (default, json).",
)
def version_command(*, output_format: str = "default") -> None:
    """Show the current version of ShellExec.

    Args:
        output_format (str): ``default`` prints the bare version, ``json`` prints
            ``{"version": ...}``.
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]

    if output_format == "json":
        console.print(json.dumps({"version": SHELLEXEC_VERSION}))
    elif ctx.obj.get("verbosity_level", 0) > 0:
        console.print(console.styled("ShellExec version:", bold=True, underline=True))
        console.print(f"    {console.styled(SHELLEXEC_VERSION, bold=True)}")
    else:
        console.print(console.styled(SHELLEXEC_VERSION, bold=True))
