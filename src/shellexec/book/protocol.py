# topmark:header:start
#
#   project      : ShellExec
#   file         : protocol.py
#   file_relpath : src/shellexec/book/protocol.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""mdBook preprocessor protocol.

mdBook runs a preprocessor twice:

1. ``<command> supports <renderer>``: exit status 0 means "I can run for this
   renderer". ShellExec produces HTML transcripts that every renderer passes through,
   so it supports all of them.
2. ``<command>`` with a JSON array ``[context, book]`` on stdin. The preprocessor
   writes the (modified) ``book`` object to stdout.

A book holds a tree of items under ``sections`` (``items`` in older mdBook
releases). Each ``{"Chapter": {...}}`` item has a ``content`` string and nested
``sub_items``; separators and part titles carry no content and are left alone.

Failures are isolated per chapter: if rewriting a chapter raises a
[`ShellExecError`][shellexec.core.errors.ShellExecError], that chapter keeps its
original content, an error diagnostic is recorded, and the next chapter is
processed.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from shellexec.config.io import config_from_context
from shellexec.config.logging import get_logger
from shellexec.config.model import Config, SessionScope
from shellexec.core.diagnostics import DiagnosticLog
from shellexec.core.errors import BookFormatError, ShellExecError
from shellexec.engine.events import MarkdownDocument
from shellexec.engine.rewriter import Rewriter
from shellexec.engine.sessions import SessionStore

if TYPE_CHECKING:
    from collections.abc import Iterator

    from shellexec.config.logging import ShellExecLogger

logger: ShellExecLogger = get_logger(__name__)

BookJson = dict[str, Any]


def supports_renderer(renderer: str) -> bool:
    """Return True if the preprocessor can run for ``renderer`` (always)."""
    logger.debug("Renderer '%s' is supported", renderer)
    return True


def parse_input(text: str) -> tuple[BookJson, BookJson]:
    """Split the preprocessor input into ``(context, book)``.

    Raises:
        BookFormatError: If ``text`` is not JSON or not a ``[context, book]`` pair
            of objects.
    """
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise BookFormatError(f"preprocessor input is not valid JSON: {exc}") from exc

    if not isinstance(payload, list) or len(payload) != 2:
        raise BookFormatError("preprocessor input must be a JSON array [context, book]")
    context, book = payload
    if not isinstance(context, dict) or not isinstance(book, dict):
        raise BookFormatError("preprocessor context and book must both be JSON objects")

    logger.debug(
        "Preprocessing for renderer '%s' (mdBook %s)",
        context.get("renderer", "?"),
        context.get("mdbook_version", "?"),
    )
    return context, book


def book_items(book: BookJson) -> list[Any]:
    """Return the top-level item list of a book.

    Raises:
        BookFormatError: If the book has neither a ``sections`` nor an ``items`` list.
    """
    items = book.get("sections", book.get("items"))
    if not isinstance(items, list):
        raise BookFormatError("book has no 'sections' list")
    return items


def iter_chapters(items: list[Any]) -> Iterator[BookJson]:
    """Yield every chapter object depth-first, in book order."""
    for item in items:
        if not isinstance(item, dict):
            # "Separator" is serialized as a bare string.
            continue
        chapter = item.get("Chapter")
        if not isinstance(chapter, dict):
            continue
        yield chapter
        sub_items = chapter.get("sub_items")
        if isinstance(sub_items, list):
            yield from iter_chapters(sub_items)


def chapter_label(chapter: BookJson) -> str:
    """Return a human readable identifier for diagnostics."""
    return str(chapter.get("source_path") or chapter.get("path") or chapter.get("name") or "?")


@dataclass
class BookReport:
    """Outcome of preprocessing one book.

    Attributes:
        chapters (int): Number of chapters visited.
        rewritten (int): Chapters whose content was replaced.
        blocks (int): Tagged example blocks rewritten across all chapters.
        diagnostics (DiagnosticLog): Per-chapter failures.
    """

    chapters: int = 0
    rewritten: int = 0
    blocks: int = 0
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)

    @property
    def failed(self) -> int:
        """Number of chapters left unmodified because of an error."""
        return len(self.diagnostics)


def rewrite_chapter(content: str, *, config: Config, sessions: SessionStore) -> tuple[str, int]:
    """Rewrite one chapter's markdown.

    Returns:
        tuple[str, int]: The new content and the number of tagged blocks rewritten.
            Content without tagged blocks is returned verbatim (not re-serialized).
    """
    document = MarkdownDocument(content)
    rewriter = Rewriter(document.events(), sessions=sessions, config=config)
    rendered = document.render(rewriter)
    if rewriter.blocks_rewritten == 0:
        return content, 0
    return rendered, rewriter.blocks_rewritten


def process_book(book: BookJson, config: Config | None = None) -> BookReport:
    """Rewrite every chapter of ``book`` in place.

    Args:
        book (BookJson): The book object from the preprocessor input; chapter
            ``content`` strings are replaced in place.
        config (Config | None): Runtime settings; defaults when None.

    Returns:
        BookReport: Counts and diagnostics for the run.
    """
    config = config or Config()
    report = BookReport()
    shared = SessionStore() if config.session_scope is SessionScope.BOOK else None

    try:
        for chapter in iter_chapters(book_items(book)):
            report.chapters += 1
            label = chapter_label(chapter)
            content = chapter.get("content")
            if not isinstance(content, str):
                logger.debug("Chapter %s has no content", label)
                continue

            try:
                if shared is not None:
                    new_content, blocks = rewrite_chapter(content, config=config, sessions=shared)
                else:
                    with SessionStore() as sessions:
                        new_content, blocks = rewrite_chapter(
                            content, config=config, sessions=sessions
                        )
            except ShellExecError as exc:
                logger.error("could not process chapter %s: %s", label, exc)
                report.diagnostics.add_error(f"could not process chapter: {exc}", chapter=label)
                continue

            if blocks:
                chapter["content"] = new_content
                report.rewritten += 1
                report.blocks += blocks
                logger.info("Chapter %s: rewrote %d example block(s)", label, blocks)
    finally:
        if shared is not None:
            shared.close()

    return report


def run_preprocessor(text: str) -> tuple[str, BookReport]:
    """Handle one preprocessor invocation.

    Args:
        text (str): The ``[context, book]`` JSON read from stdin.

    Returns:
        tuple[str, BookReport]: The book JSON to write to stdout, and the report.
    """
    context, book = parse_input(text)
    config = config_from_context(context)
    report = process_book(book, config)
    return json.dumps(book), report
