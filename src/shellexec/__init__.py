# topmark:header:start
#
#   project      : ShellExec
#   file         : __init__.py
#   file_relpath : src/shellexec/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ShellExec package.

ShellExec is an mdBook preprocessor. It replaces fenced ``bash,<session>`` example
blocks with the recorded output of running their commands, where every session
name is bound to a scratch working directory that persists across blocks.
"""

from __future__ import annotations
