# topmark:header:start
#
#   project      : ShellExec
#   file         : __init__.py
#   file_relpath : src/shellexec/engine/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""The ShellExec rewriting engine.

Leaves first: the session store, the command runner, the output renderer, the
markdown event model, and the rewriter state machine that ties them together.
"""

from __future__ import annotations

from shellexec.engine.events import Event, EventKind, MarkdownDocument
from shellexec.engine.executor import CommandOutput, CommandRunner
from shellexec.engine.render import OutputRenderer, TranscriptBuilder
from shellexec.engine.rewriter import Rewriter, RewriterState, rewrite_markdown
from shellexec.engine.sessions import SessionStore

__all__ = [
    "CommandOutput",
    "CommandRunner",
    "Event",
    "EventKind",
    "MarkdownDocument",
    "OutputRenderer",
    "Rewriter",
    "RewriterState",
    "SessionStore",
    "TranscriptBuilder",
    "rewrite_markdown",
]
