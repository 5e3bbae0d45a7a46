# topmark:header:start
#
#   project      : ShellExec
#   file         : options.py
#   file_relpath : src/shellexec/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shared output options of the ShellExec CLI.

The group accepts ``-v``/``-q`` (how much program output goes to stderr) and
``--color``/``--no-color``. Because stdout carries the book JSON, color
auto-detection looks at stderr only.
"""

from __future__ import annotations

import os
import sys
from enum import Enum
from typing import Callable, ParamSpec, TypeVar

import click

from shellexec.cli.errors import ShellExecUsageError

P = ParamSpec("P")
R = TypeVar("R")

CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
}


class ColorMode(str, Enum):
    """Requested colorization of stderr output."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


_OUTPUT_OPTIONS = (
    click.option(
        "-v",
        "--verbose",
        count=True,
        help="Print a per-book summary on stderr (repeat for more detail).",
    ),
    click.option(
        "-q",
        "--quiet",
        count=True,
        help="Suppress chapter diagnostics on stderr.",
    ),
    click.option(
        "--color",
        "color_mode",
        type=click.Choice([m.value for m in ColorMode]),
        default=None,
        help="Colorize stderr: auto (default), always, or never.",
    ),
    click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Same as --color=never.",
    ),
)


def output_options(f: Callable[P, R]) -> Callable[P, R]:
    """Attach ``-v``, ``-q``, ``--color`` and ``--no-color`` to a command."""
    for option in reversed(_OUTPUT_OPTIONS):
        f = option(f)
    return f


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Collapse the ``-v`` and ``-q`` counts into one signed level.

    Args:
        verbose_count: Occurrences of ``-v``.
        quiet_count: Occurrences of ``-q``.

    Returns:
        A positive level when verbose, a negative one when quiet, 0 otherwise.

    Raises:
        ShellExecUsageError: If both flags are given.
    """
    if verbose_count and quiet_count:
        raise ShellExecUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    return verbose_count or -quiet_count


def color_mode_from_flags(color_mode: str | None, no_color: bool) -> ColorMode:
    """Combine ``--color`` and ``--no-color``; ``--no-color`` wins."""
    if no_color:
        return ColorMode.NEVER
    return ColorMode(color_mode) if color_mode else ColorMode.AUTO


def _color_from_env() -> bool | None:
    force = os.getenv("FORCE_COLOR")
    if force and force != "0":
        return True
    if os.getenv("NO_COLOR") is not None:
        return False
    return None


def resolve_color_mode(
    *,
    cli_mode: ColorMode | None,
    stderr_isatty: bool | None = None,
) -> bool:
    """Decide whether stderr output is colorized.

    An explicit ``always``/``never`` wins. Otherwise ``FORCE_COLOR`` and
    ``NO_COLOR`` are honored, and finally whether stderr is a terminal.

    Args:
        cli_mode: Mode from the command line; ``None`` means auto.
        stderr_isatty: Override for terminal detection (auto-detected when None).

    Returns:
        True if color should be enabled.
    """
    if cli_mode is ColorMode.ALWAYS:
        return True
    if cli_mode is ColorMode.NEVER:
        return False

    from_env = _color_from_env()
    if from_env is not None:
        return from_env

    if stderr_isatty is None:
        try:
            stderr_isatty = sys.stderr.isatty()
        except (AttributeError, ValueError):
            stderr_isatty = False
    return bool(stderr_isatty)
