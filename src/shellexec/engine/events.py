# topmark:header:start
#
#   project      : ShellExec
#   file         : events.py
#   file_relpath : src/shellexec/engine/events.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Markdown as a stream of structural events, and back.

Parsing uses `markdown-it-py` configured exactly like `mdformat` configures it,
and serialization uses mdformat's `MDRenderer`, so a document that contains no
tagged blocks round-trips to its mdformat-normalized form.

markdown-it emits a code block as a single ``fence`` (or ``code_block``) token.
The event stream expands each of those into three events::

    CODE_BLOCK_START(info) -> TEXT(body) -> CODE_BLOCK_END

Every other block-level token is wrapped unchanged in a ``TOKEN`` event. The
rewriter may add ``HTML`` events, which serialize as raw HTML blocks at the nesting
level of the code block they replace.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from markdown_it import MarkdownIt
from markdown_it.token import Token
from mdformat.renderer import MDRenderer

from shellexec.config.logging import get_logger
from shellexec.core.errors import MarkupError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from shellexec.config.logging import ShellExecLogger

logger: ShellExecLogger = get_logger(__name__)

CODE_BLOCK_TOKEN_TYPES: frozenset[str] = frozenset({"fence", "code_block"})


class EventKind(Enum):
    """Kinds of events in a markdown event stream."""

    CODE_BLOCK_START = "code_block_start"
    TEXT = "text"
    CODE_BLOCK_END = "code_block_end"
    HTML = "html"
    TOKEN = "token"


@dataclass(frozen=True)
class Event:
    """One structural markdown event.

    Attributes:
        kind (EventKind): What the event represents.
        text (str): Info string for ``CODE_BLOCK_START``, body fragment for ``TEXT``,
            markup for ``HTML``; empty otherwise.
        token (Token | None): The markdown-it token the event was derived from. For
            ``HTML`` events it is the token of the code block being replaced.
    """

    kind: EventKind
    text: str = ""
    token: Token | None = None

    @classmethod
    def start(cls, info: str, token: Token | None = None) -> Event:
        return cls(EventKind.CODE_BLOCK_START, info, token)

    @classmethod
    def body(cls, text: str) -> Event:
        return cls(EventKind.TEXT, text)

    @classmethod
    def end(cls, token: Token | None = None) -> Event:
        return cls(EventKind.CODE_BLOCK_END, "", token)

    @classmethod
    def html(cls, markup: str, token: Token | None = None) -> Event:
        return cls(EventKind.HTML, markup, token)

    @classmethod
    def passthrough(cls, token: Token) -> Event:
        return cls(EventKind.TOKEN, "", token)

    @property
    def info(self) -> str:
        """Info string of a code block start (empty for other kinds)."""
        return self.text if self.kind is EventKind.CODE_BLOCK_START else ""


def build_markdown_it() -> MarkdownIt:
    """Return a CommonMark parser wired to mdformat's markdown renderer."""
    mdit = MarkdownIt(renderer_cls=MDRenderer)
    mdit.options["mdformat"] = {}
    # Keep reference labels on link/image tokens so references survive rendering.
    mdit.options["store_labels"] = True
    mdit.options["parser_extension"] = []
    mdit.options["codeformatters"] = {}
    return mdit


def token_events(token: Token) -> Iterator[Event]:
    """Expand one block-level token into events."""
    if token.type not in CODE_BLOCK_TOKEN_TYPES:
        yield Event.passthrough(token)
        return
    # Indented code blocks carry no info string, so they can never be tagged.
    yield Event.start(token.info if token.type == "fence" else "", token)
    if token.content:
        yield Event.body(token.content)
    yield Event.end(token)


def events_to_tokens(events: Iterable[Event]) -> list[Token]:
    """Rebuild a markdown-it token list from an event stream.

    Raises:
        MarkupError: If ``TEXT``/``CODE_BLOCK_END`` events appear outside a code
            block, or the stream ends inside one.
    """
    tokens: list[Token] = []
    start: Event | None = None
    body: list[str] = []

    for event in events:
        if event.kind is EventKind.TOKEN:
            if event.token is None:
                raise MarkupError("passthrough event without a token")
            tokens.append(event.token)
        elif event.kind is EventKind.CODE_BLOCK_START:
            start = event
            body = []
        elif event.kind is EventKind.TEXT:
            if start is None:
                raise MarkupError("text event outside of a code block")
            body.append(event.text)
        elif event.kind is EventKind.CODE_BLOCK_END:
            if start is None:
                raise MarkupError("code block end without a matching start")
            tokens.append(_code_block_token(start, "".join(body)))
            start = None
        else:
            tokens.append(_html_token(event))

    if start is not None:
        raise MarkupError("event stream ended inside a code block")
    return tokens


def _code_block_token(start: Event, content: str) -> Token:
    if content and not content.endswith("\n"):
        content += "\n"
    if start.token is not None:
        return start.token.copy(info=start.info, content=content)
    return Token("fence", "code", 0, info=start.info, content=content, markup="```", block=True)


def _html_token(event: Event) -> Token:
    content = f"{event.text}\n"
    if event.token is not None:
        return event.token.copy(type="html_block", tag="", info="", markup="", content=content)
    return Token("html_block", "", 0, content=content, block=True)


class MarkdownDocument:
    """One markdown document with its parser state.

    The document owns the markdown-it environment (reference definitions etc.)
    produced by parsing, which the renderer needs to serialize the document again.

    Args:
        source (str): Markdown text.
        mdit (MarkdownIt | None): Parser to use; a fresh mdformat-compatible one by default.
    """

    def __init__(self, source: str, mdit: MarkdownIt | None = None) -> None:
        self.source = source
        self._mdit = mdit or build_markdown_it()
        self._env: dict[str, Any] = {}

    def events(self) -> Iterator[Event]:
        """Parse the source and return a lazy iterator over its events.

        Each call parses again and returns a fresh iterator.
        """
        self._env = {}
        tokens = self._mdit.parse(self.source, self._env)
        return (event for token in tokens for event in token_events(token))

    def render(self, events: Iterable[Event]) -> str:
        """Serialize ``events`` back to markdown text.

        Raises:
            MarkupError: If the events are malformed or mdformat fails to render them.
        """
        tokens = events_to_tokens(events)
        try:
            return self._mdit.renderer.render(tokens, self._mdit.options, self._env)
        except Exception as exc:
            raise MarkupError(f"cannot serialize markdown: {exc}") from exc
