from __future__ import annotations

from pathlib import Path

from loguru import logger

from creator_ai.domain.locale import get_locale
from creator_ai.domain.models import Chapter, ChapterIndexEntry, ChapterMeta, ChapterSequence
from creator_ai.errors import CreatorAIError, NotFoundError
from creator_ai.storage.codec import (
    atomic_write_json,
    atomic_write_text,
    ensure_dir,
    read_document,
    read_text,
    remove_quietly,
)
from creator_ai.storage.layout import ProjectLayout


def _log(layout: ProjectLayout, op: str, chapter_id: int | str = "-"):
    return logger.bind(project=layout.project_name, op=op, chapter_id=chapter_id)


def list_chapters(root: Path | str) -> list[ChapterIndexEntry]:
    layout = ProjectLayout.of(root)
    return read_document(layout.chapters_index_file, list[ChapterIndexEntry], default=[])


def _write_index(layout: ProjectLayout, index: list[ChapterIndexEntry]) -> None:
    atomic_write_json(layout.chapters_index_file, index)


def _last_allocated_id(layout: ProjectLayout) -> int:
    sequence = read_document(layout.chapter_seq_file, ChapterSequence, default=ChapterSequence())
    return sequence.last_id


def _record_allocated_id(layout: ProjectLayout, chapter_id: int) -> None:
    if chapter_id > _last_allocated_id(layout):
        atomic_write_json(layout.chapter_seq_file, ChapterSequence(last_id=chapter_id))


def next_chapter_id(root: Path | str) -> int:
    """Return the id a new chapter would get; ids are never handed out twice."""
    layout = ProjectLayout.of(root)
    known = {entry.id for entry in list_chapters(root)}
    known |= layout.chapter_ids_on_disk()
    known.add(_last_allocated_id(layout))
    return max(known) + 1


def _write_chapter_files(layout: ProjectLayout, chapter: Chapter) -> None:
    ensure_dir(layout.chapters_dir)
    atomic_write_text(layout.chapter_text_file(chapter.id), chapter.content)
    meta = ChapterMeta(id=chapter.id, title=chapter.title, summary=chapter.summary)
    atomic_write_json(layout.chapter_meta_file(chapter.id), meta)
    _record_allocated_id(layout, chapter.id)


def _sync_index(layout: ProjectLayout, chapter_id: int, title: str) -> None:
    index = list_chapters(layout.root)
    found = False
    for entry in index:
        if entry.id == chapter_id:
            entry.title = title
            found = True
    if not found:
        index.append(ChapterIndexEntry(id=chapter_id, title=title))
    _write_index(layout, index)


def create_chapter(root: Path | str, title: str) -> ChapterIndexEntry:
    layout = ProjectLayout.of(root)
    index = list_chapters(root)
    chapter_id = next_chapter_id(root)

    _write_chapter_files(layout, Chapter(id=chapter_id, title=title))

    entry = ChapterIndexEntry(id=chapter_id, title=title)
    index.append(entry)
    _write_index(layout, index)
    _log(layout, "create_chapter", chapter_id).debug("Created chapter title={!r}", title)
    return entry


def _index_title(layout: ProjectLayout, chapter_id: int) -> str | None:
    try:
        index = list_chapters(layout.root)
    except CreatorAIError as exc:
        _log(layout, "load_chapter", chapter_id).warning("Index unreadable, using synthesized title: {}", exc)
        return None
    for entry in index:
        if entry.id == chapter_id:
            return entry.title
    return None


def load_chapter(root: Path | str, chapter_id: int, *, language: str = "en") -> Chapter:
    layout = ProjectLayout.of(root)
    text_file = layout.chapter_text_file(chapter_id)
    if not text_file.exists():
        raise NotFoundError(f"Chapter not found: {chapter_id}")
    content = read_text(text_file)

    title = None
    summary = ""

    meta_file = layout.chapter_meta_file(chapter_id)
    if meta_file.exists():
        meta = read_document(meta_file, ChapterMeta)
        title = meta.title
        summary = meta.summary
    if title is None:
        title = _index_title(layout, chapter_id)
    if title is None:
        title = get_locale(language).chapter_title(chapter_id)

    return Chapter(id=chapter_id, title=title, content=content, summary=summary)


def save_chapter(root: Path | str, chapter: Chapter) -> None:
    """Persist body and metadata, then bring the index entry in line with them."""
    layout = ProjectLayout.of(root)
    _write_chapter_files(layout, chapter)
    _sync_index(layout, chapter.id, chapter.title)
    _log(layout, "save_chapter", chapter.id).debug("Saved chapter chars={}", len(chapter.content))


def rename_chapter(root: Path | str, chapter_id: int, title: str, *, language: str = "en") -> None:
    # The chapter is loaded before anything is written, so a missing body
    # leaves the index untouched.
    chapter = load_chapter(root, chapter_id, language=language)
    chapter.title = title
    save_chapter(root, chapter)


def delete_chapter(root: Path | str, chapter_id: int) -> None:
    layout = ProjectLayout.of(root)
    index = list_chapters(root)
    if index:
        _record_allocated_id(layout, max(entry.id for entry in index))
    remaining = [entry for entry in index if entry.id != chapter_id]
    _write_index(layout, remaining)

    remove_quietly(layout.chapter_text_file(chapter_id))
    remove_quietly(layout.chapter_meta_file(chapter_id))
    _log(layout, "delete_chapter", chapter_id).debug("Deleted chapter")
