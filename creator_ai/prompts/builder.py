from __future__ import annotations

from typing import Iterable, Sequence

from creator_ai.domain.locale import get_locale
from creator_ai.domain.models import ChatMessage, Preset

CONTINUE_TASK = "continue"
DISCUSS_TASK = "discuss"


def build_system_prompt(preset: Preset, task_kind: str, *, language: str = "en") -> str:
    locale = get_locale(language)
    rules_text = "\n".join(f"- {rule}" for rule in preset.rules)

    prompt = (
        f"{locale.assistant_intro}\n\n"
        f"{locale.style_heading}\n{preset.style}\n\n"
        f"{locale.pov_heading}\n{preset.pov}\n\n"
        f"{locale.rules_heading}\n{rules_text}\n"
    )

    if task_kind == CONTINUE_TASK:
        return f"{prompt}\n{locale.continue_contract}"
    return f"{prompt}\n{locale.discuss_contract}"


def task_label(task_kind: str, *, language: str = "en") -> str:
    return get_locale(language).task_labels.get(task_kind, task_kind)


def build_user_prompt(
    chapter_summaries: Sequence[tuple[str, str]],
    current_text: str,
    task_kind: str,
    instruction: str,
    *,
    language: str = "en",
) -> str:
    locale = get_locale(language)
    parts: list[str] = []

    if chapter_summaries:
        parts.append(locale.summaries_heading)
        for title, summary in chapter_summaries:
            parts.append(locale.summary_line_template.format(title=title, summary=summary))
        parts.append("")

    if current_text:
        parts.append(locale.current_text_heading)
        parts.append(current_text)
        parts.append("")

    parts.append(locale.task_line_template.format(label=task_label(task_kind, language=language)))
    if instruction.strip():
        parts.append(locale.instruction_template.format(instruction=instruction.strip()))

    return "\n".join(parts)


def to_chat_messages(
    system_prompt: str,
    history: Iterable[ChatMessage],
    latest_user_text: str,
) -> list[dict[str, str]]:
    messages = [{"role": "system", "content": system_prompt}]
    for message in history:
        messages.append({"role": message.role, "content": message.content})
    messages.append({"role": "user", "content": latest_user_text})
    return messages
