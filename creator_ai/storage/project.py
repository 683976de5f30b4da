from __future__ import annotations

from pathlib import Path

from loguru import logger

from creator_ai.domain.locale import get_locale
from creator_ai.domain.models import Chapter, Preset, ProjectInfo
from creator_ai.storage.chapters import crud as chapters_crud
from creator_ai.storage.codec import atomic_write_json, ensure_dir
from creator_ai.storage.layout import ProjectLayout
from creator_ai.storage.llm_settings.crud import default_llm_config


def init_project(root: Path | str, *, language: str = "en") -> ProjectInfo:
    """Create the project tree and seed missing documents.

    Safe to call on an existing project: only artifacts that do not exist yet
    are written, nothing already on disk is overwritten.
    """
    layout = ProjectLayout.of(root)
    locale = get_locale(language)
    log = logger.bind(project=layout.project_name, op="init_project")

    for directory in (layout.root, layout.chapters_dir, layout.sessions_dir, layout.vectors_dir):
        ensure_dir(directory)

    if not layout.preset_file.exists():
        atomic_write_json(layout.preset_file, Preset.default(language))
        log.debug("Seeded default preset")

    if not layout.llm_config_file.exists():
        atomic_write_json(layout.llm_config_file, default_llm_config())
        log.debug("Seeded default LLM config")

    if not layout.summaries_file.exists():
        atomic_write_json(layout.summaries_file, [])

    if not layout.chapters_index_file.exists():
        first = Chapter(id=1, title=locale.first_chapter_title)
        chapters_crud.save_chapter(layout.root, first)
        log.debug("Seeded first chapter")

    log.info("Project ready at {}", layout.root)
    return ProjectInfo(project_dir=str(layout.root), project_name=layout.project_name)
