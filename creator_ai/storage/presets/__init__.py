"""Writing preset documents."""

from creator_ai.storage.presets import crud

__all__ = ["crud"]
