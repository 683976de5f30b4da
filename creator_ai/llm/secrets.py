from __future__ import annotations

import os
import re
from typing import MutableMapping, Protocol

from creator_ai.errors import SecretNotFoundError

DEFAULT_ENV_PREFIX = "CREATOR_AI_API_KEY_"


class SecretStore(Protocol):
    """API keys keyed by endpoint id."""

    def has_secret(self, endpoint_id: str) -> bool: ...

    def get_secret(self, endpoint_id: str) -> str: ...

    def set_secret(self, endpoint_id: str, value: str) -> None: ...

    def delete_secret(self, endpoint_id: str) -> None: ...


def secret_env_var(endpoint_id: str, prefix: str = DEFAULT_ENV_PREFIX) -> str:
    normalized = re.sub(r"[^A-Za-z0-9]", "_", endpoint_id).upper()
    return f"{prefix}{normalized}"


class EnvSecretStore:
    """Reads keys from ``{prefix}{ENDPOINT_ID}`` environment variables."""

    def __init__(self, prefix: str = DEFAULT_ENV_PREFIX, environ: MutableMapping[str, str] | None = None):
        self.prefix = prefix
        self._environ = os.environ if environ is None else environ

    def env_var(self, endpoint_id: str) -> str:
        return secret_env_var(endpoint_id, self.prefix)

    def has_secret(self, endpoint_id: str) -> bool:
        return bool(self._environ.get(self.env_var(endpoint_id)))

    def get_secret(self, endpoint_id: str) -> str:
        value = self._environ.get(self.env_var(endpoint_id))
        if not value:
            raise SecretNotFoundError(endpoint_id)
        return value

    def set_secret(self, endpoint_id: str, value: str) -> None:
        self._environ[self.env_var(endpoint_id)] = value

    def delete_secret(self, endpoint_id: str) -> None:
        self._environ.pop(self.env_var(endpoint_id), None)


class MemorySecretStore:
    def __init__(self, initial: dict[str, str] | None = None):
        self._values: dict[str, str] = dict(initial or {})

    def has_secret(self, endpoint_id: str) -> bool:
        return bool(self._values.get(endpoint_id))

    def get_secret(self, endpoint_id: str) -> str:
        value = self._values.get(endpoint_id)
        if not value:
            raise SecretNotFoundError(endpoint_id)
        return value

    def set_secret(self, endpoint_id: str, value: str) -> None:
        self._values[endpoint_id] = value

    def delete_secret(self, endpoint_id: str) -> None:
        self._values.pop(endpoint_id, None)
