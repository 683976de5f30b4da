"""Prompt assembly for continue/discuss tasks."""

from creator_ai.prompts.builder import (
    CONTINUE_TASK,
    DISCUSS_TASK,
    build_system_prompt,
    build_user_prompt,
    to_chat_messages,
)

__all__ = ["CONTINUE_TASK", "DISCUSS_TASK", "build_system_prompt", "build_user_prompt", "to_chat_messages"]
