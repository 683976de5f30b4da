"""Chapter bodies, metadata and the chapter index."""

from creator_ai.storage.chapters import crud

__all__ = ["crud"]
