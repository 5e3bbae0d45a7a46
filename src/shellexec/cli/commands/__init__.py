# topmark:header:start
#
#   project      : ShellExec
#   file         : __init__.py
#   file_relpath : src/shellexec/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ShellExec CLI subcommands."""

from __future__ import annotations
