"""Per-project LLM endpoint configuration."""

from creator_ai.storage.llm_settings import crud

__all__ = ["crud"]
