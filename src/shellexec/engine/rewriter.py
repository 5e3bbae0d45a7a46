# topmark:header:start
#
#   project      : ShellExec
#   file         : rewriter.py
#   file_relpath : src/shellexec/engine/rewriter.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pull-based rewriter that replaces tagged example blocks by their transcripts.

The [`Rewriter`][shellexec.engine.rewriter.Rewriter] is an iterator over
[`Event`][shellexec.engine.events.Event] objects that wraps an upstream event
iterator. It runs an explicit three-state machine:

``IDLE``
    Events pass through unchanged. A code block start whose info string is
    ``<marker>,<session>`` opens an `ExampleBlock` and moves to ``IN_BLOCK``.
``IN_BLOCK``
    Text events are accumulated and not emitted. The block end runs every
    command in the session directory, renders the transcript into one pending
    HTML event and moves to ``EMITTING``.
``EMITTING``
    The pending event is returned by the next pull; the state returns to ``IDLE``.

The start, text and end events of a tagged block never reach the output. Nothing
is buffered beyond the open block's text and the single pending event.

Example:
    ```python
    document = MarkdownDocument(source)
    with SessionStore() as sessions:
        text = document.render(Rewriter(document.events(), sessions=sessions))
    ```
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from markdown_it.token import Token

from shellexec.config.logging import get_logger
from shellexec.config.model import Config
from shellexec.constants import DEFAULT_MARKER, DEFAULT_SILENT_PREFIX, SESSION_SEPARATOR
from shellexec.core.errors import (
    ExampleStructureError,
    NestedExampleError,
    UnterminatedExampleError,
)
from shellexec.engine.events import Event, EventKind, MarkdownDocument
from shellexec.engine.executor import CommandRunner
from shellexec.engine.render import OutputRenderer, TranscriptBuilder
from shellexec.engine.sessions import SessionStore

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from shellexec.config.logging import ShellExecLogger

logger: ShellExecLogger = get_logger(__name__)


def parse_session_name(info: str, marker: str = DEFAULT_MARKER) -> str | None:
    """Return the session name of a tagged info string, or None.

    ``bash,demo`` names session ``demo``. A bare ``bash``, a different language, or
    an empty name (``bash,``) is not tagged.
    """
    language, sep, name = info.strip().partition(SESSION_SEPARATOR)
    name = name.strip()
    if not sep or language.strip() != marker or not name:
        return None
    return name


@dataclass(frozen=True)
class Command:
    """One command line of an example block."""

    text: str
    silent: bool = False


@dataclass
class ExampleBlock:
    """A tagged block while it is open.

    Both derived views (`commands` and `display_text`) are computed from the same
    accumulated body when the block closes.
    """

    session: str
    start: Event
    chunks: list[str] = field(default_factory=lambda: [])

    @property
    def body(self) -> str:
        """The raw block text, exactly as it appeared in the document."""
        return "".join(self.chunks)

    def commands(self, silent_prefix: str = DEFAULT_SILENT_PREFIX) -> list[Command]:
        """Return the commands to execute, in source order.

        Blank lines are skipped. A line starting with ``silent_prefix`` is silent;
        the prefix is removed before execution.
        """
        result: list[Command] = []
        for line in self.body.splitlines():
            silent = line.startswith(silent_prefix)
            text = line[len(silent_prefix) :] if silent else line
            if not text.strip():
                continue
            result.append(Command(text=text, silent=silent))
        return result

    def display_text(self, silent_prefix: str = DEFAULT_SILENT_PREFIX) -> str:
        """Return the body with every silent line removed."""
        return "".join(
            f"{line}\n"
            for line in self.body.splitlines()
            if not line.startswith(silent_prefix)
        )


class RewriterState(Enum):
    """States of the [`Rewriter`][shellexec.engine.rewriter.Rewriter]."""

    IDLE = "idle"
    IN_BLOCK = "in_block"
    EMITTING = "emitting"


class Rewriter:
    """Iterator that replaces tagged example blocks in an event stream.

    Args:
        events (Iterable[Event]): Upstream events, pulled lazily.
        sessions (SessionStore): Store that owns the session directories.
        config (Config | None): Runtime settings; defaults when None.
        runner (CommandRunner | None): Command executor; built from ``config.shell``
            when None.
        renderer (OutputRenderer | None): Output-to-HTML converter.
    """

    def __init__(
        self,
        events: Iterable[Event],
        *,
        sessions: SessionStore,
        config: Config | None = None,
        runner: CommandRunner | None = None,
        renderer: OutputRenderer | None = None,
    ) -> None:
        self._events: Iterator[Event] = iter(events)
        self._sessions = sessions
        self._config = config or Config()
        self._runner = runner or CommandRunner(self._config.shell)
        self._renderer = renderer or OutputRenderer()

        self._state = RewriterState.IDLE
        self._block: ExampleBlock | None = None
        self._pending: Event | None = None
        self.blocks_rewritten = 0

    @property
    def state(self) -> RewriterState:
        """Current state of the machine."""
        return self._state

    def __iter__(self) -> Rewriter:
        return self

    def __next__(self) -> Event:
        while True:
            if self._state is RewriterState.EMITTING:
                event, self._pending = self._pending, None
                self._state = RewriterState.IDLE
                assert event is not None
                return event

            event = next(self._events, None)
            if event is None:
                if self._block is not None:
                    raise UnterminatedExampleError(
                        f"document ended inside the example block for session "
                        f"'{self._block.session}'"
                    )
                raise StopIteration

            if self._state is RewriterState.IDLE:
                if self._open_block(event):
                    continue
                return event

            self._feed_block(event)

    def _open_block(self, event: Event) -> bool:
        if event.kind is not EventKind.CODE_BLOCK_START:
            return False
        session = parse_session_name(event.info, self._config.marker)
        if session is None:
            return False
        logger.trace("Opening example block for session '%s'", session)
        self._block = ExampleBlock(session=session, start=event)
        self._state = RewriterState.IN_BLOCK
        return True

    def _feed_block(self, event: Event) -> None:
        block = self._block
        assert block is not None

        if event.kind is EventKind.TEXT:
            block.chunks.append(event.text)
        elif event.kind is EventKind.CODE_BLOCK_END:
            self._pending = self._close_block(block)
            self._block = None
            self._state = RewriterState.EMITTING
        elif event.kind is EventKind.CODE_BLOCK_START:
            raise NestedExampleError(
                f"code block started inside the example block for session '{block.session}'"
            )
        else:
            raise ExampleStructureError(
                f"unexpected {event.kind.value} event inside the example block "
                f"for session '{block.session}'"
            )

    def _close_block(self, block: ExampleBlock) -> Event:
        prefix = self._config.silent_prefix
        self.blocks_rewritten += 1

        if not self._config.execute:
            return _display_event(block, self._config.marker, block.display_text(prefix))

        commands = block.commands(prefix)
        cwd = self._sessions.get_or_create(block.session)
        transcript = TranscriptBuilder(self._renderer, prompt=self._config.prompt)
        for command in commands:
            output = self._runner.run(command.text, cwd, visible=not command.silent)
            if not command.silent:
                transcript.add(command.text, output)

        logger.debug(
            "Session '%s': ran %d command(s) (%d silent)",
            block.session,
            len(commands),
            sum(1 for c in commands if c.silent),
        )
        return Event.html(transcript.build(), block.start.token)


def _display_event(block: ExampleBlock, marker: str, text: str) -> Event:
    """Return a plain code block showing ``text``, used when execution is disabled."""
    token = block.start.token
    if token is None:
        token = Token("fence", "code", 0, markup="```", block=True)
    return Event.passthrough(token.copy(type="fence", tag="code", info=marker, content=text))


def rewrite_markdown(
    source: str,
    *,
    config: Config | None = None,
    sessions: SessionStore | None = None,
) -> str:
    """Rewrite one markdown document.

    Args:
        source (str): Markdown text.
        config (Config | None): Runtime settings; defaults when None.
        sessions (SessionStore | None): Store to resolve sessions in. When None, a
            private store is created and cleaned up before returning.

    Returns:
        str: The rewritten, mdformat-normalized markdown.
    """
    document = MarkdownDocument(source)
    if sessions is None:
        with SessionStore() as store:
            return document.render(Rewriter(document.events(), sessions=store, config=config))
    return document.render(Rewriter(document.events(), sessions=sessions, config=config))
