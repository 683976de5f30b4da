from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

import httpx
from loguru import logger

from creator_ai.config.schema import AppConfigRoot
from creator_ai.domain.locale import placeholder_session_titles
from creator_ai.domain.models import Chapter, ChatMessage, EndpointConfig, GenerationResponse, SummaryRecord
from creator_ai.errors import ConfigurationMissingError, SecretNotFoundError
from creator_ai.llm.client import LLMClient
from creator_ai.llm.endpoints import active_endpoint, active_model
from creator_ai.llm.parsing import parse_generation_response
from creator_ai.llm.secrets import EnvSecretStore, SecretStore
from creator_ai.prompts.builder import (
    CONTINUE_TASK,
    DISCUSS_TASK,
    build_system_prompt,
    build_user_prompt,
    to_chat_messages,
)
from creator_ai.storage.chapters import crud as chapters_crud
from creator_ai.storage.layout import ProjectLayout
from creator_ai.storage.llm_settings import crud as llm_settings_crud
from creator_ai.storage.presets import crud as presets_crud
from creator_ai.storage.sessions import crud as sessions_crud
from creator_ai.storage.summaries import crud as summaries_crud

SESSION_TITLE_MAX_CHARS = 16

ApplyMode = Literal["append", "replace"]


@dataclass(frozen=True)
class ResolvedChatRuntime:
    endpoint: EndpointConfig
    model: str
    api_key: str


def _format_payload_for_log(payload: str, max_chars: int) -> str:
    if max_chars <= 0 or len(payload) <= max_chars:
        return payload
    head = max_chars // 2
    tail = max_chars - head
    omitted = len(payload) - max_chars
    if head <= 0 or tail <= 0:
        return payload[:max_chars]
    return f"{payload[:head]}\n...[truncated {omitted} chars]...\n{payload[-tail:]}"


def merge_generated_content(existing: str, generated: str, mode: ApplyMode) -> str:
    if mode == "replace":
        return generated
    if mode != "append":
        raise ValueError(f"Unsupported apply mode: {mode}")
    if not existing:
        return generated
    separator = "" if existing.endswith("\n") or generated.startswith("\n") else "\n"
    return f"{existing}{separator}{generated}"


class WritingAssistant:
    """Runs continue/discuss requests against a project directory.

    Reads always go through the project store; only ``discuss`` and
    ``apply_generation`` write anything back.
    """

    def __init__(
        self,
        client: LLMClient,
        *,
        language: str = "en",
        summary_window: int = 20,
        log_raw_response_on_parse_failure: bool = True,
        raw_response_max_chars: int = 0,
    ):
        self.client = client
        self.language = language
        self.summary_window = summary_window
        self.log_raw_response_on_parse_failure = log_raw_response_on_parse_failure
        self.raw_response_max_chars = raw_response_max_chars

    @classmethod
    def from_config(
        cls,
        config: AppConfigRoot,
        *,
        secrets: SecretStore | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "WritingAssistant":
        store = secrets if secrets is not None else EnvSecretStore(config.secrets.env_prefix)
        client = LLMClient(secrets=store, timeout_s=config.llm.timeout_s, transport=transport)
        return cls(
            client,
            language=config.app.language,
            summary_window=config.llm.summary_window,
            log_raw_response_on_parse_failure=config.observability.log_raw_response_on_parse_failure,
            raw_response_max_chars=config.observability.raw_response_max_chars,
        )

    def resolve_runtime(self, root: Path | str) -> ResolvedChatRuntime:
        config = llm_settings_crud.load_llm_config(root)
        endpoint = active_endpoint(config)
        model = active_model(config, endpoint)
        try:
            api_key = self.client.secrets.get_secret(endpoint.id)
        except SecretNotFoundError as exc:
            raise ConfigurationMissingError(
                f"No API key set for the active endpoint '{endpoint.name}'; set one in the model settings"
            ) from exc
        return ResolvedChatRuntime(endpoint=endpoint, model=model, api_key=api_key)

    def build_continue_prompts(self, root: Path | str, chapter_id: int, instruction: str) -> tuple[str, str]:
        preset = presets_crud.load_preset(root, language=self.language)
        chapter = chapters_crud.load_chapter(root, chapter_id, language=self.language)
        context = [
            (record.chapter_title, record.summary)
            for record in summaries_crud.recent_summaries(root, self.summary_window)
        ]
        system = build_system_prompt(preset, CONTINUE_TASK, language=self.language)
        user = build_user_prompt(context, chapter.content, CONTINUE_TASK, instruction, language=self.language)
        return system, user

    async def continue_chapter(self, root: Path | str, chapter_id: int, instruction: str) -> GenerationResponse:
        """Generate a continuation for a chapter. Nothing is persisted."""
        runtime = self.resolve_runtime(root)
        system, user = self.build_continue_prompts(root, chapter_id, instruction)
        log = logger.bind(
            project=ProjectLayout.of(root).project_name,
            op="continue_chapter",
            chapter_id=chapter_id,
            endpoint=runtime.endpoint.id,
        )
        log.info("Requesting continuation model={}", runtime.model)

        raw = await self.client.post_chat_completion(
            runtime.endpoint.base_url,
            runtime.api_key,
            runtime.model,
            runtime.endpoint.parameters,
            to_chat_messages(system, [], user),
        )
        result = parse_generation_response(raw)
        if result.raw is not None:
            log.warning("Continuation reply had no parsable json block raw_len={}", len(raw))
            if self.log_raw_response_on_parse_failure:
                log.warning("Continuation raw_response={}", _format_payload_for_log(raw, self.raw_response_max_chars))
        return result

    async def discuss(self, root: Path | str, session_id: str, user_message: str) -> ChatMessage:
        preset = presets_crud.load_preset(root, language=self.language)
        runtime = self.resolve_runtime(root)
        session = sessions_crud.load_chat_session(root, session_id, language=self.language)
        system = build_system_prompt(preset, DISCUSS_TASK, language=self.language)

        session.messages.append(ChatMessage.create("user", user_message))
        history = [message for message in session.messages if message.role in ("user", "assistant")]
        messages = to_chat_messages(system, history[:-1], user_message)

        logger.bind(
            project=ProjectLayout.of(root).project_name,
            op="discuss",
            session_id=session_id,
            endpoint=runtime.endpoint.id,
        ).info("Requesting discussion reply model={} history={}", runtime.model, len(history) - 1)

        reply = await self.client.post_chat_completion(
            runtime.endpoint.base_url,
            runtime.api_key,
            runtime.model,
            runtime.endpoint.parameters,
            messages,
        )
        assistant = ChatMessage.create("assistant", reply)
        session.messages.append(assistant)

        if not session.title.strip() or session.title in placeholder_session_titles():
            text = user_message.strip()
            if text:
                session.title = text[:SESSION_TITLE_MAX_CHARS]

        sessions_crud.save_chat_session(root, session)
        return assistant

    def apply_generation(
        self,
        root: Path | str,
        chapter_id: int,
        generation: GenerationResponse,
        mode: ApplyMode = "append",
    ) -> Chapter:
        """Accept a generated continuation into the chapter and the summary log."""
        chapter = chapters_crud.load_chapter(root, chapter_id, language=self.language)
        chapter.content = merge_generated_content(chapter.content, generation.content, mode)
        if generation.summary.strip():
            chapter.summary = generation.summary
        chapters_crud.save_chapter(root, chapter)

        if generation.summary.strip():
            summaries_crud.append_summary(
                root,
                SummaryRecord.create(chapter.id, chapter.title, generation.summary),
            )
        return chapter
