# topmark:header:start
#
#   project      : ShellExec
#   file         : test_preprocess.py
#   file_relpath : tests/cli/test_preprocess.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test: preprocessor mode (no subcommand, ``[context, book]`` on STDIN).

Covers the happy path, per-chapter failure isolation, ``--strict`` and the exit
codes for malformed input and invalid settings.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from tests.cli.conftest import (
    assert_CONFIG_ERROR,
    assert_DATA_ERROR,
    assert_PIPELINE_ERROR,
    assert_SUCCESS,
    chapter,
    chapter_contents,
    output_book,
    preprocessor_input,
    run_cli,
)
from tests.conftest import mark_cli, mark_integration, parametrize

if TYPE_CHECKING:
    from click.testing import Result

TAGGED = "# Demo\n\n```bash,demo\necho hi\n```\n"
UNTAGGED = "# Plain\n\n```bash\necho never run\n```\n\nSome   text with [odd](  spacing ).\n"
BROKEN_SHELL = {"shell": "/nonexistent/shell-for-shellexec-tests"}


@mark_cli
def test_book_without_tagged_blocks_is_unchanged() -> None:
    payload: str = preprocessor_input([chapter("plain", UNTAGGED), "Separator"])

    result: Result = run_cli([], input_text=payload)

    assert_SUCCESS(result)
    assert output_book(result) == json.loads(payload)[1]


@mark_cli
def test_part_titles_and_separators_are_kept() -> None:
    items = [{"PartTitle": "Part one"}, chapter("plain", UNTAGGED), "Separator"]

    result: Result = run_cli([], input_text=preprocessor_input(items))

    assert_SUCCESS(result)
    assert output_book(result)["sections"][0] == {"PartTitle": "Part one"}
    assert output_book(result)["sections"][2] == "Separator"


@mark_integration
@mark_cli
def test_tagged_block_is_replaced_by_transcript() -> None:
    result: Result = run_cli([], input_text=preprocessor_input([chapter("demo", TAGGED)]))

    assert_SUCCESS(result)
    assert chapter_contents(output_book(result)) == [
        "# Demo\n\n<pre><code>$ echo hi\nhi\n\n</code></pre>\n"
    ]


@mark_integration
@mark_cli
def test_nested_chapters_are_processed() -> None:
    nested = chapter("child", TAGGED)
    payload: str = preprocessor_input([chapter("parent", UNTAGGED, sub_items=[nested])])

    result: Result = run_cli([], input_text=payload)

    assert_SUCCESS(result)
    parent, child = chapter_contents(output_book(result))
    assert parent == UNTAGGED
    assert "<pre><code>$ echo hi\nhi\n" in child


@mark_integration
@mark_cli
def test_legacy_items_key_is_accepted() -> None:
    payload: str = preprocessor_input([chapter("demo", TAGGED)], items_key="items")

    result: Result = run_cli([], input_text=payload)

    assert_SUCCESS(result)
    assert "<pre><code>" in chapter_contents(output_book(result), "items")[0]


@mark_integration
@mark_cli
def test_sessions_do_not_cross_chapters_by_default() -> None:
    writer = chapter("writer", "```bash,demo\n$ echo hi > f.txt\n```\n")
    reader = chapter("reader", "```bash,demo\ncat f.txt\n```\n")

    result: Result = run_cli([], input_text=preprocessor_input([writer, reader]))

    assert_SUCCESS(result)
    assert "No such file or directory" in chapter_contents(output_book(result))[1]


@mark_integration
@mark_cli
def test_book_scope_shares_sessions_across_chapters() -> None:
    writer = chapter("writer", "```bash,demo\n$ echo hi > f.txt\n```\n")
    reader = chapter("reader", "```bash,demo\ncat f.txt\n```\n")
    payload: str = preprocessor_input([writer, reader], settings={"session-scope": "book"})

    result: Result = run_cli([], input_text=payload)

    assert_SUCCESS(result)
    assert chapter_contents(output_book(result))[1] == (
        "<pre><code>$ cat f.txt\nhi\n\n</code></pre>\n"
    )


@mark_cli
def test_execute_disabled_shows_examples() -> None:
    content = "```bash,demo\n$ cd /tmp\necho hi\n```\n"
    payload: str = preprocessor_input([chapter("demo", content)], settings={"execute": False})

    result: Result = run_cli([], input_text=payload)

    assert_SUCCESS(result)
    assert chapter_contents(output_book(result)) == ["```bash\necho hi\n```\n"]


@mark_cli
def test_failing_chapter_keeps_content_and_others_continue() -> None:
    payload: str = preprocessor_input(
        [chapter("broken", TAGGED), chapter("plain", UNTAGGED)],
        settings=BROKEN_SHELL,
    )

    result: Result = run_cli(["--no-color"], input_text=payload)

    assert_SUCCESS(result)
    assert chapter_contents(output_book(result)) == [TAGGED, UNTAGGED]
    assert "[error] broken.md: could not process chapter" in result.stderr
    assert "1 chapter(s) left unchanged" in result.stderr


@mark_cli
def test_strict_mode_fails_after_writing_the_book() -> None:
    payload: str = preprocessor_input([chapter("broken", TAGGED)], settings=BROKEN_SHELL)

    result: Result = run_cli(["--strict"], input_text=payload)

    assert_PIPELINE_ERROR(result)
    assert chapter_contents(output_book(result)) == [TAGGED]
    assert "1 chapter(s) could not be processed" in result.stderr


@mark_cli
def test_quiet_suppresses_diagnostics() -> None:
    payload: str = preprocessor_input([chapter("broken", TAGGED)], settings=BROKEN_SHELL)

    result: Result = run_cli(["-q"], input_text=payload)

    assert_SUCCESS(result)
    assert "could not process chapter" not in result.stderr


@mark_cli
def test_verbose_prints_summary() -> None:
    payload: str = preprocessor_input([chapter("plain", UNTAGGED)])

    result: Result = run_cli(["-v"], input_text=payload)

    assert_SUCCESS(result)
    assert "0 example block(s) in 0 of 1 chapter(s), 0 failed" in result.stderr


@mark_cli
@parametrize(
    "payload",
    [
        "",
        "not json",
        "{}",
        "[1, 2]",
        '[{"config": {}}]',
        '[{"config": {}}, {"sections": "nope"}]',
    ],
)
def test_malformed_input_is_a_data_error(payload: str) -> None:
    result: Result = run_cli([], input_text=payload)

    assert_DATA_ERROR(result)
    assert result.stdout == ""


@mark_cli
@parametrize(
    "settings",
    [
        {"execute": "yes"},
        {"session-scope": "forever"},
        {"shell": ""},
        {"prompt": 3},
    ],
)
def test_invalid_settings_are_a_config_error(settings: dict[str, object]) -> None:
    payload: str = preprocessor_input([chapter("plain", UNTAGGED)], settings=settings)

    result: Result = run_cli([], input_text=payload)

    assert_CONFIG_ERROR(result)
