from __future__ import annotations

from pathlib import Path

from loguru import logger

from creator_ai.domain.models import EndpointConfig, LlmConfig
from creator_ai.errors import NotFoundError
from creator_ai.storage.codec import atomic_write_json, read_document
from creator_ai.storage.layout import ProjectLayout

DEFAULT_ENDPOINT_NAME = "OpenAI Compatible"
DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_MODEL = "gpt-4o-mini"


def default_llm_config() -> LlmConfig:
    endpoint = EndpointConfig.create(DEFAULT_ENDPOINT_NAME, DEFAULT_BASE_URL, DEFAULT_MODEL)
    return LlmConfig(
        endpoints=[endpoint],
        active_endpoint_id=endpoint.id,
        active_model=endpoint.default_model,
    )


def load_llm_config(root: Path | str) -> LlmConfig:
    layout = ProjectLayout.of(root)
    return read_document(layout.llm_config_file, LlmConfig, default=LlmConfig())


def save_llm_config(root: Path | str, config: LlmConfig) -> None:
    atomic_write_json(ProjectLayout.of(root).llm_config_file, config)


def add_endpoint(root: Path | str, name: str, base_url: str, default_model: str) -> EndpointConfig:
    config = load_llm_config(root)
    endpoint = EndpointConfig.create(name, base_url, default_model)
    config.endpoints.append(endpoint)
    if config.active_endpoint_id is None:
        config.active_endpoint_id = endpoint.id
    save_llm_config(root, config)
    logger.bind(project=ProjectLayout.of(root).project_name, op="add_endpoint", endpoint=endpoint.id).debug(
        "Added endpoint name={!r} base_url={}", name, base_url
    )
    return endpoint


def set_active(root: Path | str, *, endpoint_id: str | None = None, model: str | None = None) -> LlmConfig:
    config = load_llm_config(root)
    if endpoint_id is not None:
        if not any(endpoint.id == endpoint_id for endpoint in config.endpoints):
            raise NotFoundError(f"Endpoint not found: {endpoint_id}")
        config.active_endpoint_id = endpoint_id
    if model is not None:
        config.active_model = model.strip() or None
    save_llm_config(root, config)
    return config
