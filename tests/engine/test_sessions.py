# topmark:header:start
#
#   project      : ShellExec
#   file         : test_sessions.py
#   file_relpath : tests/engine/test_sessions.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the session store (session name -> scratch working directory)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from shellexec.core.errors import SessionError
from shellexec.engine.sessions import SessionStore, directory_prefix
from tests.conftest import mark_engine

if TYPE_CHECKING:
    from pathlib import Path


@mark_engine
def test_same_name_returns_same_directory(sessions: SessionStore) -> None:
    first: Path = sessions.get_or_create("demo")
    (first / "marker").write_text("x", encoding="utf-8")

    again: Path = sessions.get_or_create("demo")

    assert again == first
    assert (again / "marker").read_text(encoding="utf-8") == "x"
    assert len(sessions) == 1


@mark_engine
def test_different_names_get_disjoint_directories(sessions: SessionStore) -> None:
    a: Path = sessions.get_or_create("a")
    b: Path = sessions.get_or_create("b")

    assert a != b
    assert a.is_dir() and b.is_dir()
    assert sessions.names == ("a", "b")


@mark_engine
def test_directory_uses_session_name_as_prefix(sessions: SessionStore) -> None:
    path: Path = sessions.get_or_create("tutorial")
    assert path.name.startswith("tutorial-")


@mark_engine
def test_unsafe_characters_are_replaced_in_prefix() -> None:
    assert directory_prefix("a/b c") == "a_b_c-"
    assert directory_prefix("ok.name-1") == "ok.name-1-"


@mark_engine
def test_close_removes_directories(tmp_path: Path) -> None:
    store = SessionStore(base_dir=tmp_path)
    path: Path = store.get_or_create("demo")
    (path / "file.txt").write_text("data", encoding="utf-8")

    store.close()

    assert not path.exists()
    with pytest.raises(SessionError):
        store.get_or_create("demo")


@mark_engine
def test_context_manager_cleans_up(tmp_path: Path) -> None:
    with SessionStore(base_dir=tmp_path) as store:
        path: Path = store.get_or_create("demo")
        assert path.is_dir()
    assert not path.exists()


@mark_engine
def test_allocation_failure_raises_session_error(tmp_path: Path) -> None:
    store = SessionStore(base_dir=tmp_path / "does-not-exist")
    with pytest.raises(SessionError, match="demo"):
        store.get_or_create("demo")
