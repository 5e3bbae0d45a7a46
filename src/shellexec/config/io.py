# topmark:header:start
#
#   project      : ShellExec
#   file         : io.py
#   file_relpath : src/shellexec/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load ShellExec settings from book.toml or from the mdBook preprocessor context.

mdBook hands every preprocessor the parsed book.toml as part of the JSON context,
so at preprocessing time the settings come from
[`config_from_context`][shellexec.config.io.config_from_context]. The standalone
``render`` command has no such context and reads book.toml directly via
[`load_book_config`][shellexec.config.io.load_book_config].

Parsing is done with `tomlkit` and unwrapped to plain Python values.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, TypeGuard, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from shellexec.config.logging import get_logger
from shellexec.config.model import Config
from shellexec.constants import PREPROCESSOR_NAME
from shellexec.core.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

    from shellexec.config.logging import ShellExecLogger

TomlTable = dict[str, Any]

logger: ShellExecLogger = get_logger(__name__)


def is_toml_table(obj: object) -> TypeGuard[TomlTable]:
    """Type guard for a table-like mapping with string keys.

    Args:
        obj (object): Value to test.

    Returns:
        TypeGuard[TomlTable]: ``True`` if ``obj`` is a ``dict``.
    """
    return isinstance(obj, dict)


def get_table_value(table: Mapping[str, Any], key: str) -> TomlTable:
    """Return ``table[key]`` as a table, or an empty dict if missing.

    Raises:
        ConfigError: If the key exists but is not a table.
    """
    value = table.get(key)
    if value is None:
        return {}
    if not is_toml_table(value):
        raise ConfigError(f"'{key}' must be a table, got {type(value).__name__}")
    return value


def preprocessor_table(root: Mapping[str, Any], name: str = PREPROCESSOR_NAME) -> TomlTable | None:
    """Return the ``[preprocessor.<name>]`` table from a book configuration.

    Args:
        root (Mapping[str, Any]): Parsed book.toml (or ``context["config"]``).
        name (str): Preprocessor name.

    Returns:
        TomlTable | None: The table, or ``None`` if the preprocessor has no settings.
    """
    preprocessors = get_table_value(root, "preprocessor")
    if name not in preprocessors:
        return None
    return get_table_value(preprocessors, name)


def load_toml_dict(path: Path) -> TomlTable:
    """Parse a TOML file with tomlkit and return plain Python values.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot read {path}: {exc.strerror or exc}") from exc
    try:
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except TomlkitParseError as exc:
        raise ConfigError(f"invalid TOML in {path}: {exc}") from exc
    return cast("TomlTable", doc.unwrap())


def load_book_config(path: Path) -> Config:
    """Build a `Config` from the ``[preprocessor.shellexec]`` table of a book.toml file.

    Args:
        path (Path): Path to book.toml.

    Returns:
        Config: The validated configuration (defaults when the table is absent).
    """
    data = load_toml_dict(path)
    table = preprocessor_table(data)
    logger.debug("Loaded %s: preprocessor table %s", path, "found" if table else "absent")
    return Config.from_mapping(table)


def config_from_context(context: Mapping[str, Any]) -> Config:
    """Build a `Config` from the mdBook preprocessor context.

    Args:
        context (Mapping[str, Any]): First element of the ``[context, book]`` pair.

    Returns:
        Config: The validated configuration (defaults when no settings are present).
    """
    book_config = get_table_value(context, "config")
    return Config.from_mapping(preprocessor_table(book_config))
