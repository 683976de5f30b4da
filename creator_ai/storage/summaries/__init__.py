"""Append-only chapter summary log."""

from creator_ai.storage.summaries import crud

__all__ = ["crud"]
