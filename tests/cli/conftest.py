# topmark:header:start
#
#   project      : ShellExec
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test helpers for running ShellExec through Click's test runner.

`run_cli()` invokes the top-level group with an optional STDIN payload. For the
preprocessor mode, `preprocessor_input()` builds the ``[context, book]`` pair
mdBook writes to the preprocessor, and `output_book()` decodes what was written
back on STDOUT.
"""

from __future__ import annotations

import json
import os
from typing import IO, TYPE_CHECKING, Any, Sequence

from click.testing import CliRunner, Result

from shellexec.cli.exit_codes import ExitCode
from shellexec.cli.main import cli

if TYPE_CHECKING:
    from pathlib import Path


def run_cli(
    argv: str | Sequence[str] | None,
    *,
    input_text: str | bytes | IO[Any] | None = None,
) -> Result:
    """Invoke the CLI without changing the working directory.

    Args:
        argv (str | Sequence[str] | None): CLI argument vector, e.g. ``["supports", "html"]``.
        input_text (str | bytes | IO[Any] | None): Optional standard input, e.g. the
            preprocessor JSON payload.

    Returns:
        Result: The `click.testing.Result` produced by `click.testing.CliRunner.invoke`.

    Example:
        ```python
        result = run_cli([], input_text=preprocessor_input(chapters))
        assert_SUCCESS(result)
        ```
    """
    runner = CliRunner()
    return runner.invoke(cli, argv, input=input_text)


def run_cli_in(
    tmp_path: Path,
    argv: str | Sequence[str] | None,
    *,
    input_text: str | bytes | IO[Any] | None = None,
) -> Result:
    """Invoke the CLI with ``tmp_path`` as the working directory.

    Relative paths given to ``render`` resolve against ``tmp_path``.
    """
    cwd: str = os.getcwd()
    try:
        os.chdir(tmp_path)
        return run_cli(argv, input_text=input_text)
    finally:
        os.chdir(cwd)


def chapter(name: str, content: str, *, sub_items: list[Any] | None = None) -> dict[str, Any]:
    """Return one ``{"Chapter": {...}}`` book item shaped like mdBook's."""
    return {
        "Chapter": {
            "name": name,
            "content": content,
            "number": [1],
            "sub_items": sub_items or [],
            "path": f"{name}.md",
            "source_path": f"{name}.md",
            "parent_names": [],
        }
    }


def preprocessor_input(
    items: list[Any],
    *,
    settings: dict[str, Any] | None = None,
    items_key: str = "sections",
) -> str:
    """Return the JSON mdBook writes to a preprocessor's STDIN.

    Args:
        items (list[Any]): Top-level book items (see `chapter`).
        settings (dict[str, Any] | None): Contents of ``[preprocessor.shellexec]``.
        items_key (str): ``sections`` (current mdBook) or ``items`` (older releases).

    Returns:
        str: The serialized ``[context, book]`` pair.
    """
    preprocessor: dict[str, Any] = {"shellexec": settings or {"command": "mdbook-shellexec"}}
    context: dict[str, Any] = {
        "root": "/book",
        "config": {
            "book": {"authors": [], "language": "en", "src": "src", "title": "Test"},
            "preprocessor": preprocessor,
        },
        "renderer": "html",
        "mdbook_version": "0.4.40",
    }
    book: dict[str, Any] = {items_key: items, "__non_exhaustive": None}
    return json.dumps([context, book])


def output_book(result: Result) -> dict[str, Any]:
    """Decode the book object written to STDOUT."""
    book = json.loads(result.stdout)
    assert isinstance(book, dict)
    return book


def chapter_contents(book: dict[str, Any], items_key: str = "sections") -> list[str]:
    """Return the content of every chapter, depth-first."""
    contents: list[str] = []

    def _walk(items: list[Any]) -> None:
        for item in items:
            if isinstance(item, dict) and "Chapter" in item:
                contents.append(item["Chapter"]["content"])
                _walk(item["Chapter"]["sub_items"])

    _walk(book[items_key])
    return contents


def assert_SUCCESS(result: Result) -> None:
    """Assert that the command exited successfully (code 0).

    Args:
        result (Result): The Result object returned by `run_cli` or `run_cli_in`.
    """
    assert result.exit_code == ExitCode.SUCCESS, result.output


def assert_USAGE_ERROR(result: Result) -> None:
    """Assert that the command exited with USAGE_ERROR (code 64)."""
    assert result.exit_code == ExitCode.USAGE_ERROR, result.output


def assert_DATA_ERROR(result: Result) -> None:
    """Assert that the command exited with DATA_ERROR (code 65)."""
    assert result.exit_code == ExitCode.DATA_ERROR, result.output


def assert_FILE_NOT_FOUND(result: Result) -> None:
    """Assert that the command exited with FILE_NOT_FOUND (code 66)."""
    assert result.exit_code == ExitCode.FILE_NOT_FOUND, result.output


def assert_PIPELINE_ERROR(result: Result) -> None:
    """Assert that the command exited with PIPELINE_ERROR (code 70)."""
    assert result.exit_code == ExitCode.PIPELINE_ERROR, result.output


def assert_CONFIG_ERROR(result: Result) -> None:
    """Assert that the command exited with CONFIG_ERROR (code 78)."""
    assert result.exit_code == ExitCode.CONFIG_ERROR, result.output
