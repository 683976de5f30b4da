"""File-backed project document store."""

from creator_ai.storage import chapters, llm_settings, presets, sessions, summaries
from creator_ai.storage.app_state import AppStateStore
from creator_ai.storage.layout import ProjectLayout
from creator_ai.storage.project import init_project

__all__ = [
    "AppStateStore",
    "ProjectLayout",
    "chapters",
    "init_project",
    "llm_settings",
    "presets",
    "sessions",
    "summaries",
]
