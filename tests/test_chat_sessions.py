from __future__ import annotations

from pathlib import Path

import pytest

from creator_ai.domain.models import ChatMessage, ChatSession, ChatSessionIndexEntry
from creator_ai.errors import NotFoundError
from creator_ai.storage.layout import ProjectLayout
from creator_ai.storage.sessions import crud as sessions_crud


def test_create_session_uses_default_title_and_is_listed(tmp_path: Path) -> None:
    entry = sessions_crud.create_chat_session(tmp_path)

    assert entry.title == "New Chat"
    assert sessions_crud.list_chat_sessions(tmp_path) == [entry]
    assert sessions_crud.load_chat_session(tmp_path, entry.id) == ChatSession(id=entry.id, title="New Chat")


def test_create_session_with_title(tmp_path: Path) -> None:
    entry = sessions_crud.create_chat_session(tmp_path, "Villain motives")

    assert entry.title == "Villain motives"


def test_load_unknown_session_returns_fresh_unsaved_session(tmp_path: Path) -> None:
    session = sessions_crud.load_chat_session(tmp_path, "abc-123")

    assert session == ChatSession(id="abc-123", title="New Chat", messages=[])
    assert sessions_crud.list_chat_sessions(tmp_path) == []
    assert not ProjectLayout.of(tmp_path).session_file("abc-123").exists()


def test_save_session_resyncs_index_title(tmp_path: Path) -> None:
    entry = sessions_crud.create_chat_session(tmp_path)
    session = sessions_crud.load_chat_session(tmp_path, entry.id)
    session.title = "Renamed"
    session.messages.append(ChatMessage.create("user", "hello"))

    sessions_crud.save_chat_session(tmp_path, session)

    assert sessions_crud.list_chat_sessions(tmp_path) == [ChatSessionIndexEntry(id=entry.id, title="Renamed")]
    assert sessions_crud.load_chat_session(tmp_path, entry.id).messages[0].content == "hello"


def test_save_session_appends_missing_index_entry(tmp_path: Path) -> None:
    sessions_crud.save_chat_session(tmp_path, ChatSession(id="s1", title="First"))
    sessions_crud.save_chat_session(tmp_path, ChatSession(id="s2", title="Second"))

    assert [entry.id for entry in sessions_crud.list_chat_sessions(tmp_path)] == ["s1", "s2"]


def test_delete_session_removes_file_and_index_entry(tmp_path: Path) -> None:
    keep = sessions_crud.create_chat_session(tmp_path, "keep")
    drop = sessions_crud.create_chat_session(tmp_path, "drop")

    sessions_crud.delete_chat_session(tmp_path, drop.id)
    sessions_crud.delete_chat_session(tmp_path, "never-existed")

    assert sessions_crud.list_chat_sessions(tmp_path) == [keep]
    assert not ProjectLayout.of(tmp_path).session_file(drop.id).exists()


def test_session_ids_cannot_escape_sessions_dir(tmp_path: Path) -> None:
    with pytest.raises(NotFoundError):
        sessions_crud.load_chat_session(tmp_path, "../config")
