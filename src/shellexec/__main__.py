# topmark:header:start
#
#   project      : ShellExec
#   file         : __main__.py
#   file_relpath : src/shellexec/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running ShellExec via ``python -m shellexec``.

It delegates directly to :func:`shellexec.cli.main.cli`, ensuring a single,
authoritative CLI entry point regardless of how ShellExec is launched.

Examples:
    Check renderer support the way mdBook does::

        python -m shellexec supports html
"""

from __future__ import annotations

from shellexec.cli.main import cli

if __name__ == "__main__":
    cli()
