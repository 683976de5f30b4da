from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from creator_ai.domain.models import ModelParameters
from creator_ai.errors import ConfigurationMissingError, NetworkError, ResponseShapeError, UpstreamError
from creator_ai.llm.client import LLMClient, auth_headers, build_chat_body, endpoint_url
from creator_ai.llm.secrets import MemorySecretStore


def _client(handler, secrets: dict[str, str] | None = None) -> LLMClient:
    return LLMClient(
        secrets=MemorySecretStore(secrets if secrets is not None else {"ep-1": "sk-test"}),
        transport=httpx.MockTransport(handler),
    )


def _chat_reply(content: str) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


@pytest.mark.parametrize(
    "base_url",
    ["https://api.example.com/v1", "https://api.example.com/v1/", "https://api.example.com/v1///"],
)
def test_endpoint_url_strips_trailing_slashes(base_url: str) -> None:
    assert endpoint_url(base_url, "models") == "https://api.example.com/v1/models"


def test_auth_headers_reject_non_ascii_key() -> None:
    assert auth_headers("sk-abc")["Authorization"] == "Bearer sk-abc"
    with pytest.raises(ConfigurationMissingError):
        auth_headers("sk-ключ")


def test_chat_body_sends_only_meaningful_sampling_overrides() -> None:
    messages = [{"role": "user", "content": "hi"}]

    plain = build_chat_body("m", ModelParameters(temperature=0.8, max_tokens=4000, top_p=1.0, top_k=0), messages)
    tuned = build_chat_body("m", ModelParameters(temperature=0.5, max_tokens=100, top_p=0.9, top_k=40), messages)

    assert plain == {"model": "m", "messages": messages, "max_tokens": 4000, "temperature": 0.8}
    assert tuned["top_p"] == 0.9
    assert tuned["top_k"] == 40


def test_fetch_models_returns_sorted_ids() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"object": "list", "data": [{"id": "zeta"}, {"id": "alpha"}, {"id": "mid"}]})

    models = asyncio.run(_client(handler).fetch_models("https://api.example.com/v1/", "ep-1"))

    assert models == ["alpha", "mid", "zeta"]
    assert seen[0].method == "GET"
    assert str(seen[0].url) == "https://api.example.com/v1/models"
    assert seen[0].headers["Authorization"] == "Bearer sk-test"


def test_fetch_models_without_secret_fails_before_request() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    with pytest.raises(ConfigurationMissingError):
        asyncio.run(_client(handler, secrets={}).fetch_models("https://api.example.com/v1", "ep-1"))


def test_fetch_models_unauthorized_carries_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, text="invalid api key")

    with pytest.raises(UpstreamError) as exc_info:
        asyncio.run(_client(handler).fetch_models("https://api.example.com/v1", "ep-1"))

    assert exc_info.value.status_code == 401
    assert "401" in exc_info.value.message
    assert "invalid api key" in exc_info.value.message


def test_fetch_models_unexpected_shape() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"models": ["a"]})

    with pytest.raises(ResponseShapeError):
        asyncio.run(_client(handler).fetch_models("https://api.example.com/v1", "ep-1"))


def test_post_chat_completion_sends_openai_body() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=_chat_reply("Once upon a time"))

    messages = [{"role": "system", "content": "S"}, {"role": "user", "content": "U"}]
    content = asyncio.run(
        _client(handler).post_chat_completion(
            "https://api.example.com/v1/",
            "sk-direct",
            "gpt-test",
            ModelParameters.writing_defaults(),
            messages,
        )
    )

    assert content == "Once upon a time"
    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == "https://api.example.com/v1/chat/completions"
    assert request.headers["Authorization"] == "Bearer sk-direct"
    assert request.headers["Content-Type"] == "application/json"
    assert json.loads(request.content) == {
        "model": "gpt-test",
        "messages": messages,
        "max_tokens": 4000,
        "temperature": 0.8,
    }


def test_post_chat_completion_server_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="boom")

    with pytest.raises(UpstreamError) as exc_info:
        asyncio.run(
            _client(handler).post_chat_completion(
                "https://api.example.com/v1", "sk", "m", ModelParameters.writing_defaults(), []
            )
        )

    assert exc_info.value.status_code == 500
    assert exc_info.value.body == "boom"


def test_post_chat_completion_network_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(NetworkError, match="connection refused"):
        asyncio.run(
            _client(handler).post_chat_completion(
                "https://api.example.com/v1", "sk", "m", ModelParameters.writing_defaults(), []
            )
        )


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="<html>not json</html>"),
        httpx.Response(200, json={"choices": []}),
        httpx.Response(200, json={"choices": [{"message": {}}]}),
        httpx.Response(200, json={"id": "x"}),
    ],
)
def test_post_chat_completion_bad_reply_shape(response: httpx.Response) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return response

    with pytest.raises(ResponseShapeError):
        asyncio.run(
            _client(handler).post_chat_completion(
                "https://api.example.com/v1", "sk", "m", ModelParameters.writing_defaults(), []
            )
        )
