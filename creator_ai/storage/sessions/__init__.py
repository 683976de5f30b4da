"""Chat sessions and the session index."""

from creator_ai.storage.sessions import crud

__all__ = ["crud"]
