# topmark:header:start
#
#   project      : ShellExec
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the ShellExec test suite.

This file sets up global fixtures and customizes the logging configuration for test runs,
ensuring consistent and verbose logging output during testing.

Notes:
    Tests that spawn real ``bash`` processes are marked with `mark_integration`.
    They are skipped automatically when no ``bash`` is available on ``PATH``.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from shellexec.config import Config, logging
from shellexec.engine.events import Event, EventKind
from shellexec.engine.sessions import SessionStore

if TYPE_CHECKING:
    from pathlib import Path

F = TypeVar("F", bound=Callable[..., object])

DecoratorType = Callable[[F], F]

BASH_AVAILABLE: bool = shutil.which("bash") is not None


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.integration`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


def _integration(func: F) -> F:
    func = cast("F", pytest.mark.integration(func))
    return cast("F", pytest.mark.skipif(not BASH_AVAILABLE, reason="bash not available")(func))


mark_integration: DecoratorType[Any] = _integration
mark_engine: DecoratorType[Any] = as_typed_mark(pytest.mark.engine)
mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)
mark_book: DecoratorType[Any] = as_typed_mark(pytest.mark.book)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.mark.parametrize`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.mark.parametrize`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


@pytest.fixture(autouse=True)
def silence_shellexec_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure ShellExec's runtime log level is not forced via env during tests.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    monkeypatch.delenv(logging.LOG_LEVEL_ENV_VAR, raising=False)


def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE for all tests.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


@pytest.fixture
def sessions(tmp_path: Path) -> Iterator[SessionStore]:
    """Yield a session store rooted in ``tmp_path`` and close it afterwards."""
    store = SessionStore(base_dir=tmp_path)
    try:
        yield store
    finally:
        store.close()


@pytest.fixture
def config() -> Config:
    """Default runtime configuration."""
    return Config()


def example_events(info: str, body: str) -> list[Event]:
    """Return the start/text/end events of one synthetic code block.

    Args:
        info (str): Info string, e.g. ``"bash,demo"``.
        body (str): Block body; no TEXT event is produced when empty.

    Returns:
        list[Event]: The events, without markdown-it tokens attached.
    """
    events = [Event.start(info)]
    if body:
        events.append(Event.body(body))
    events.append(Event.end())
    return events


def html_events(events: list[Event]) -> list[Event]:
    """Return only the HTML events of a rewritten stream."""
    return [e for e in events if e.kind is EventKind.HTML]
