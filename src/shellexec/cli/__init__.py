# topmark:header:start
#
#   project      : ShellExec
#   file         : __init__.py
#   file_relpath : src/shellexec/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click-based command-line interface for ShellExec."""

from __future__ import annotations
