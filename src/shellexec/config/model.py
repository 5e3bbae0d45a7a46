# topmark:header:start
#
#   project      : ShellExec
#   file         : model.py
#   file_relpath : src/shellexec/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model for the ShellExec preprocessor.

This module defines:
    - `SessionScope`: how long a session's working directory lives.
    - `Config`: an immutable runtime snapshot consumed by the rewriting engine.

Scope:
    - *In scope*: data shapes, defaults and validation of the
      ``[preprocessor.shellexec]`` table.
    - *Out of scope*: TOML and mdBook context I/O, which live in
      [`shellexec.config.io`][shellexec.config.io].

Keys use the kebab-case spelling of book.toml (``silent-prefix``); the snake_case
field names are accepted as well.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import TYPE_CHECKING, Any

from shellexec.config.logging import get_logger
from shellexec.constants import (
    DEFAULT_MARKER,
    DEFAULT_PROMPT,
    DEFAULT_SHELL,
    DEFAULT_SILENT_PREFIX,
)
from shellexec.core.errors import ConfigError

if TYPE_CHECKING:
    from shellexec.config.logging import ShellExecLogger

logger: ShellExecLogger = get_logger(__name__)

# Keys that mdBook itself interprets inside a preprocessor table.
MDBOOK_RESERVED_KEYS: frozenset[str] = frozenset(
    {"command", "renderers", "renderer", "before", "after", "optional"}
)


class SessionScope(str, Enum):
    """Lifetime of the session-name to working-directory mapping.

    Attributes:
        CHAPTER: Every chapter starts with an empty session store; equal names in
            different chapters get different directories.
        BOOK: One store is shared by all chapters of a single preprocessor run.
    """

    CHAPTER = "chapter"
    BOOK = "book"


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration for ShellExec.

    Attributes:
        shell (str): Shell executable invoked as ``<shell> -c <command>``.
        marker (str): Info-string language that tags an executable block
            (``<marker>,<session>``).
        silent_prefix (str): Line prefix marking a command as silent.
        prompt (str): Prompt echoed before each visible command in the transcript.
        session_scope (SessionScope): Lifetime of session working directories.
        execute (bool): When False, tagged blocks are rendered as plain code blocks
            with silent lines removed, and nothing is executed.
    """

    shell: str = DEFAULT_SHELL
    marker: str = DEFAULT_MARKER
    silent_prefix: str = DEFAULT_SILENT_PREFIX
    prompt: str = DEFAULT_PROMPT
    session_scope: SessionScope = SessionScope.CHAPTER
    execute: bool = True

    @classmethod
    def from_mapping(cls, table: Mapping[str, Any] | None) -> Config:
        """Build a `Config` from a preprocessor settings table.

        Args:
            table (Mapping[str, Any] | None): The ``[preprocessor.shellexec]`` table
                (from book.toml or the mdBook JSON context). ``None`` means defaults.

        Returns:
            Config: The validated configuration.

        Raises:
            ConfigError: If a known key has a value of the wrong type, or a string
                option is empty.
        """
        if table is None:
            return cls()
        if not isinstance(table, Mapping):
            raise ConfigError(f"preprocessor settings must be a table, got {type(table).__name__}")

        known: set[str] = {f.name for f in fields(cls)}
        overrides: dict[str, Any] = {}
        for raw_key, value in table.items():
            key = str(raw_key).replace("-", "_")
            if raw_key in MDBOOK_RESERVED_KEYS:
                continue
            if key not in known:
                logger.warning("Ignoring unknown setting '%s'", raw_key)
                continue
            overrides[key] = _coerce(key, value)

        return replace(cls(), **overrides)

    def with_overrides(self, **changes: Any) -> Config:
        """Return a copy with the given fields replaced (``None`` values are skipped)."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def _coerce(key: str, value: Any) -> Any:
    """Validate and normalize a single setting value."""
    if key == "execute":
        if not isinstance(value, bool):
            raise ConfigError(f"'execute' must be a boolean, got {value!r}")
        return value
    if key == "session_scope":
        try:
            return SessionScope(str(value).lower())
        except ValueError:
            allowed = ", ".join(s.value for s in SessionScope)
            raise ConfigError(
                f"'session-scope' must be one of: {allowed} (got {value!r})"
            ) from None
    if not isinstance(value, str):
        raise ConfigError(f"'{key.replace('_', '-')}' must be a string, got {value!r}")
    # The prompt may legitimately be empty; everything else must not.
    if key != "prompt" and not value:
        raise ConfigError(f"'{key.replace('_', '-')}' must not be empty")
    return value
