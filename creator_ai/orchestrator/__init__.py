"""Continue/discuss orchestration over the project store."""

from creator_ai.orchestrator.service import ResolvedChatRuntime, WritingAssistant, merge_generated_content

__all__ = ["ResolvedChatRuntime", "WritingAssistant", "merge_generated_content"]
