from __future__ import annotations

from creator_ai.domain.models import EndpointConfig, LlmConfig
from creator_ai.errors import ConfigurationMissingError


def active_endpoint(config: LlmConfig) -> EndpointConfig:
    if not config.endpoints:
        raise ConfigurationMissingError("No LLM endpoint configured: add an endpoint first")
    if config.active_endpoint_id:
        for endpoint in config.endpoints:
            if endpoint.id == config.active_endpoint_id:
                return endpoint
    return config.endpoints[0]


def active_model(config: LlmConfig, endpoint: EndpointConfig) -> str:
    if config.active_model and config.active_model.strip():
        return config.active_model
    return endpoint.default_model
