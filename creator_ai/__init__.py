"""Project document store and LLM orchestration for a novel-writing assistant."""

__version__ = "0.1.0"
