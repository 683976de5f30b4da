"""Configuration loading and schema."""

from creator_ai.config.loader import load_config
from creator_ai.config.schema import AppConfig, AppConfigRoot

__all__ = ["AppConfig", "AppConfigRoot", "load_config"]
