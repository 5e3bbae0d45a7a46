# topmark:header:start
#
#   project      : ShellExec
#   file         : __init__.py
#   file_relpath : src/shellexec/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration for ShellExec.

Re-exports the immutable [`Config`][shellexec.config.model.Config] snapshot, the
loaders for book.toml and the mdBook context, and the logging helpers.
"""

from __future__ import annotations

from shellexec.config.io import config_from_context, load_book_config
from shellexec.config.model import Config, SessionScope

__all__ = [
    "Config",
    "SessionScope",
    "config_from_context",
    "load_book_config",
]
