from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal
import uuid

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from creator_ai.domain.locale import get_locale


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


def new_id() -> str:
    return str(uuid.uuid4())


class Document(BaseModel):
    """Persisted record: camelCase on disk, unknown fields ignored on read."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class ProjectInfo(Document):
    project_dir: str
    project_name: str


class ChapterIndexEntry(Document):
    id: int = Field(ge=0)
    title: str


class Chapter(Document):
    id: int = Field(ge=0)
    title: str
    content: str = ""
    summary: str = ""


class ChapterMeta(Document):
    id: int = Field(ge=0)
    title: str | None = None
    summary: str = ""


class ChapterSequence(Document):
    last_id: int = Field(default=0, ge=0)


class SummaryRecord(Document):
    id: str
    chapter_id: int = Field(ge=0)
    chapter_title: str
    summary: str
    created_at: str

    @classmethod
    def create(cls, chapter_id: int, chapter_title: str, summary: str) -> "SummaryRecord":
        return cls(
            id=new_id(),
            chapter_id=chapter_id,
            chapter_title=chapter_title,
            summary=summary,
            created_at=now_iso(),
        )


class Preset(Document):
    style: str
    pov: str
    rules: list[str] = Field(default_factory=list)

    @classmethod
    def default(cls, language: str = "en") -> "Preset":
        locale = get_locale(language)
        return cls(style=locale.default_style, pov=locale.default_pov, rules=list(locale.default_rules))


class ModelParameters(Document):
    temperature: float
    max_tokens: int = Field(ge=0)
    top_p: float | None = None
    top_k: int | None = Field(default=None, ge=0)

    @classmethod
    def writing_defaults(cls) -> "ModelParameters":
        return cls(temperature=0.8, max_tokens=4000)


class EndpointConfig(Document):
    id: str
    name: str
    base_url: str
    default_model: str
    parameters: ModelParameters = Field(default_factory=ModelParameters.writing_defaults)

    @classmethod
    def create(cls, name: str, base_url: str, default_model: str) -> "EndpointConfig":
        return cls(id=new_id(), name=name, base_url=base_url, default_model=default_model)


class LlmConfig(Document):
    endpoints: list[EndpointConfig] = Field(default_factory=list)
    active_endpoint_id: str | None = None
    active_model: str | None = None


ChatRole = Literal["user", "assistant", "system"]


class ChatMessage(Document):
    role: ChatRole
    content: str
    created_at: str

    @classmethod
    def create(cls, role: ChatRole, content: str) -> "ChatMessage":
        return cls(role=role, content=content, created_at=now_iso())


class ChatSessionIndexEntry(Document):
    id: str
    title: str


class ChatSession(Document):
    id: str
    title: str
    messages: list[ChatMessage] = Field(default_factory=list)


class GenerationResponse(Document):
    content: str = ""
    summary: str = ""
    raw: str | None = None


class AppState(Document):
    last_project_dir: str | None = None
    last_session_id: str | None = None
    last_chapter_id: int | None = Field(default=None, ge=0)
