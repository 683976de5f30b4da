"""OpenAI-compatible LLM access."""

from creator_ai.llm.client import LLMClient, normalize_base_url
from creator_ai.llm.endpoints import active_endpoint, active_model
from creator_ai.llm.parsing import parse_generation_response
from creator_ai.llm.secrets import EnvSecretStore, MemorySecretStore, SecretStore

__all__ = [
    "EnvSecretStore",
    "LLMClient",
    "MemorySecretStore",
    "SecretStore",
    "active_endpoint",
    "active_model",
    "normalize_base_url",
    "parse_generation_response",
]
