# topmark:header:start
#
#   project      : ShellExec
#   file         : constants.py
#   file_relpath : src/shellexec/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ShellExec Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version

SHELLEXEC_VERSION: str = get_version("shellexec")

# Name of the `[preprocessor.<name>]` table in book.toml.
PREPROCESSOR_NAME: str = "shellexec"

DEFAULT_SHELL: str = "bash"
DEFAULT_MARKER: str = "bash"
DEFAULT_SILENT_PREFIX: str = "$"
DEFAULT_PROMPT: str = "$ "

# Separator between the language marker and the session name in an info string.
SESSION_SEPARATOR: str = ","

TRANSCRIPT_OPEN: str = "<pre><code>"
TRANSCRIPT_CLOSE: str = "</code></pre>"
