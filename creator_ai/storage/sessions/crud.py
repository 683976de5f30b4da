from __future__ import annotations

from pathlib import Path

from loguru import logger

from creator_ai.domain.locale import get_locale
from creator_ai.domain.models import ChatSession, ChatSessionIndexEntry, new_id
from creator_ai.storage.codec import atomic_write_json, ensure_dir, read_document, remove_quietly
from creator_ai.storage.layout import ProjectLayout


def list_chat_sessions(root: Path | str) -> list[ChatSessionIndexEntry]:
    layout = ProjectLayout.of(root)
    return read_document(layout.sessions_index_file, list[ChatSessionIndexEntry], default=[])


def create_chat_session(
    root: Path | str,
    title: str | None = None,
    *,
    language: str = "en",
) -> ChatSessionIndexEntry:
    session = ChatSession(
        id=new_id(),
        title=title if title is not None else get_locale(language).default_session_title,
    )
    save_chat_session(root, session)
    return ChatSessionIndexEntry(id=session.id, title=session.title)


def load_chat_session(root: Path | str, session_id: str, *, language: str = "en") -> ChatSession:
    """Load a session; an unknown id yields a fresh, unsaved session with that id."""
    layout = ProjectLayout.of(root)
    session_file = layout.session_file(session_id)
    if not session_file.exists():
        return ChatSession(id=session_id, title=get_locale(language).default_session_title)
    return read_document(session_file, ChatSession)


def save_chat_session(root: Path | str, session: ChatSession) -> None:
    layout = ProjectLayout.of(root)
    ensure_dir(layout.sessions_dir)
    atomic_write_json(layout.session_file(session.id), session)

    index = list_chat_sessions(root)
    found = False
    for entry in index:
        if entry.id == session.id:
            entry.title = session.title
            found = True
    if not found:
        index.append(ChatSessionIndexEntry(id=session.id, title=session.title))
    atomic_write_json(layout.sessions_index_file, index)
    logger.bind(project=layout.project_name, op="save_chat_session", session_id=session.id).debug(
        "Saved session messages={}", len(session.messages)
    )


def delete_chat_session(root: Path | str, session_id: str) -> None:
    layout = ProjectLayout.of(root)
    remove_quietly(layout.session_file(session_id))
    index = [entry for entry in list_chat_sessions(root) if entry.id != session_id]
    atomic_write_json(layout.sessions_index_file, index)
