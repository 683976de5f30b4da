from __future__ import annotations

import time
from typing import Any, Sequence

import httpx
import orjson
from loguru import logger
from pydantic import BaseModel, ConfigDict, ValidationError

from creator_ai.domain.models import ModelParameters
from creator_ai.errors import ConfigurationMissingError, NetworkError, ResponseShapeError, UpstreamError
from creator_ai.llm.secrets import SecretStore


class _ModelItem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str


class _ModelsPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    data: list[_ModelItem]


def normalize_base_url(base_url: str) -> str:
    return base_url.rstrip("/")


def endpoint_url(base_url: str, path: str) -> str:
    return f"{normalize_base_url(base_url)}/{path.lstrip('/')}"


def auth_headers(api_key: str) -> dict[str, str]:
    try:
        api_key.encode("ascii")
    except UnicodeEncodeError as exc:
        raise ConfigurationMissingError("Invalid API key: non-ASCII characters") from exc
    return {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }


def build_chat_body(
    model: str,
    parameters: ModelParameters,
    messages: Sequence[dict[str, str]],
) -> dict[str, Any]:
    body: dict[str, Any] = {
        "model": model,
        "messages": list(messages),
        "max_tokens": parameters.max_tokens,
        "temperature": parameters.temperature,
    }
    # Only non-default sampling overrides are sent.
    if parameters.top_p is not None and parameters.top_p < 1.0:
        body["top_p"] = parameters.top_p
    if parameters.top_k is not None and parameters.top_k > 0:
        body["top_k"] = parameters.top_k
    return body


def extract_message_content(payload: Any) -> str:
    try:
        content = payload["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as exc:
        raise ResponseShapeError("Response is missing choices[0].message.content") from exc
    if not isinstance(content, str):
        raise ResponseShapeError("Response is missing choices[0].message.content")
    return content


def _decode_json(response: httpx.Response, action: str) -> Any:
    try:
        return orjson.loads(response.content)
    except orjson.JSONDecodeError as exc:
        raise ResponseShapeError(f"{action}: response is not valid JSON ({exc})") from exc


class LLMClient:
    """OpenAI-compatible HTTP client. No retries; every failure surfaces immediately."""

    def __init__(
        self,
        *,
        secrets: SecretStore,
        timeout_s: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.secrets = secrets
        self.timeout_s = timeout_s
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout_s, transport=self._transport)

    async def _send(self, action: str, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            async with self._client() as client:
                response = await client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            raise NetworkError(f"{action} failed: {exc}") from exc
        if not response.is_success:
            raise UpstreamError(action, response.status_code, response.text)
        return response

    async def fetch_models(self, base_url: str, endpoint_id: str) -> list[str]:
        api_key = self.secrets.get_secret(endpoint_id)
        action = "Fetching model list"
        response = await self._send(action, "GET", endpoint_url(base_url, "models"), headers=auth_headers(api_key))
        try:
            payload = _ModelsPayload.model_validate(_decode_json(response, action))
        except ValidationError as exc:
            raise ResponseShapeError(f"{action}: unexpected response shape ({exc})") from exc
        models = sorted(item.id for item in payload.data)
        logger.bind(endpoint=endpoint_id).info("Fetched {} models from {}", len(models), normalize_base_url(base_url))
        return models

    async def post_chat_completion(
        self,
        base_url: str,
        api_key: str,
        model: str,
        parameters: ModelParameters,
        messages: Sequence[dict[str, str]],
    ) -> str:
        action = "Chat completion request"
        body = build_chat_body(model, parameters, messages)
        started = time.perf_counter()
        response = await self._send(
            action,
            "POST",
            endpoint_url(base_url, "chat/completions"),
            headers=auth_headers(api_key),
            content=orjson.dumps(body),
        )
        content = extract_message_content(_decode_json(response, action))
        logger.info(
            "LLM chat success model={} messages={} latency_ms={:.2f} chars={}",
            model,
            len(body["messages"]),
            (time.perf_counter() - started) * 1000,
            len(content),
        )
        return content
