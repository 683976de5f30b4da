from __future__ import annotations

from typing import Any

import orjson

from creator_ai.domain.models import GenerationResponse

_FENCE_OPEN = "```json"
_FENCE_CLOSE = "```"


def extract_json_block(raw: str) -> str | None:
    start = raw.find(_FENCE_OPEN)
    if start == -1:
        return None
    after = raw[start + len(_FENCE_OPEN) :]
    end = after.find(_FENCE_CLOSE)
    if end == -1:
        return None
    return after[:end].strip()


def _load_object(candidate: str) -> dict[str, Any] | None:
    try:
        payload = orjson.loads(candidate)
    except orjson.JSONDecodeError:
        return None
    return payload if isinstance(payload, dict) else None


def _string_field(payload: dict[str, Any], key: str) -> str:
    value = payload.get(key)
    return value if isinstance(value, str) else ""


def parse_generation_response(raw: str) -> GenerationResponse:
    """Parse a continue-task reply.

    The reply is expected to carry a ```json fenced object with ``content`` and
    ``summary``. Anything else is returned verbatim as ``content`` with the
    original text echoed in ``raw`` so callers can tell structure was missing.
    """
    candidate = extract_json_block(raw)
    payload = _load_object(candidate) if candidate is not None else None
    if payload is None:
        return GenerationResponse(content=raw, summary="", raw=raw)
    return GenerationResponse(
        content=_string_field(payload, "content"),
        summary=_string_field(payload, "summary"),
        raw=None,
    )
