# topmark:header:start
#
#   project      : ShellExec
#   file         : __init__.py
#   file_relpath : src/shellexec/book/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""mdBook integration: the ``[context, book]`` JSON envelope and chapter traversal."""

from __future__ import annotations

from shellexec.book.protocol import (
    BookReport,
    parse_input,
    process_book,
    run_preprocessor,
    supports_renderer,
)

__all__ = [
    "BookReport",
    "parse_input",
    "process_book",
    "run_preprocessor",
    "supports_renderer",
]
