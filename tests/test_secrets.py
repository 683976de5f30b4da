from __future__ import annotations

import pytest

from creator_ai.errors import ConfigurationMissingError, SecretNotFoundError
from creator_ai.llm.secrets import EnvSecretStore, MemorySecretStore, secret_env_var


def test_secret_env_var_normalizes_endpoint_id() -> None:
    assert secret_env_var("3f2a-9c.b") == "CREATOR_AI_API_KEY_3F2A_9C_B"
    assert secret_env_var("x", prefix="MY_") == "MY_X"


def test_env_store_round_trip() -> None:
    environ: dict[str, str] = {}
    store = EnvSecretStore(environ=environ)

    assert store.has_secret("ep-1") is False
    store.set_secret("ep-1", "sk-1")

    assert environ == {"CREATOR_AI_API_KEY_EP_1": "sk-1"}
    assert store.get_secret("ep-1") == "sk-1"

    store.delete_secret("ep-1")
    store.delete_secret("ep-1")
    assert store.has_secret("ep-1") is False


def test_env_store_reads_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CREATOR_AI_API_KEY_EP_2", "sk-env")

    assert EnvSecretStore().get_secret("ep-2") == "sk-env"


def test_missing_secret_is_configuration_error() -> None:
    store = MemorySecretStore({"blank": ""})

    with pytest.raises(SecretNotFoundError) as exc_info:
        store.get_secret("blank")

    assert isinstance(exc_info.value, ConfigurationMissingError)
    assert exc_info.value.endpoint_id == "blank"
    assert store.has_secret("blank") is False
