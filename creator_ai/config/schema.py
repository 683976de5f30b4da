from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from creator_ai.llm.secrets import DEFAULT_ENV_PREFIX


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    log_level: str = Field(default="INFO")
    language: Literal["en", "zh"] = "en"
    state_dir: Path = Field(default=Path("./data/state"))


class LLMConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    timeout_s: float | None = None
    summary_window: int = 20

    @field_validator("timeout_s")
    @classmethod
    def _positive_optional_timeout(cls, value: float | None) -> float | None:
        if value is not None and value <= 0:
            raise ValueError("timeout_s must be positive when provided")
        return value

    @field_validator("summary_window")
    @classmethod
    def _positive_window(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("summary_window must be positive")
        return value


class SecretsConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    env_prefix: str = DEFAULT_ENV_PREFIX

    @field_validator("env_prefix")
    @classmethod
    def _non_empty_prefix(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("env_prefix cannot be empty")
        return value


class ObservabilityConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    log_raw_response_on_parse_failure: bool = True
    raw_response_max_chars: int = 0

    @field_validator("raw_response_max_chars")
    @classmethod
    def _non_negative_chars(cls, value: int) -> int:
        if value < 0:
            raise ValueError("raw_response_max_chars must be non-negative")
        return value


class AppConfigRoot(BaseModel):
    model_config = ConfigDict(extra="forbid")

    app: AppConfig = AppConfig()
    llm: LLMConfig = LLMConfig()
    secrets: SecretsConfig = SecretsConfig()
    observability: ObservabilityConfig = ObservabilityConfig()


def resolve_paths(config: AppConfigRoot, base_dir: Path) -> AppConfigRoot:
    def _resolve(path_value: Path) -> Path:
        return path_value if path_value.is_absolute() else (base_dir / path_value).resolve()

    config.app.state_dir = _resolve(config.app.state_dir)
    return config
