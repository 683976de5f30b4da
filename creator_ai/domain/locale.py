from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class LocaleStrings:
    default_style: str
    default_pov: str
    default_rules: tuple[str, ...]
    first_chapter_title: str
    chapter_title_template: str
    default_session_title: str
    assistant_intro: str
    style_heading: str
    pov_heading: str
    rules_heading: str
    continue_contract: str
    discuss_contract: str
    summaries_heading: str
    summary_line_template: str
    current_text_heading: str
    task_line_template: str
    instruction_template: str
    task_labels: dict[str, str] = field(default_factory=dict)

    def chapter_title(self, chapter_id: int) -> str:
        return self.chapter_title_template.format(id=chapter_id)


EN = LocaleStrings(
    default_style="Delicate, immersive, vividly visual",
    default_pov="Third-person limited",
    default_rules=(
        "Keep the prose style consistent",
        "Favor sensory description",
        "Avoid the omniscient narrator",
        "Show emotion through action and detail",
    ),
    first_chapter_title="Chapter 1",
    chapter_title_template="Chapter {id}",
    default_session_title="New Chat",
    assistant_intro="You are a professional fiction writing assistant.",
    style_heading="## Writing style",
    pov_heading="## Point of view",
    rules_heading="## Writing rules",
    continue_contract=(
        "## Output requirements\n"
        "You must answer in JSON with exactly two fields:\n"
        '1. "content": the generated prose\n'
        '2. "summary": a short summary of the generated prose (one or two sentences)\n'
        "\n"
        "Example output format:\n"
        "```json\n"
        "{\n"
        '  "content": "The generated prose...",\n'
        '  "summary": "A summary of this passage..."\n'
        "}\n"
        "```\n"
        "\n"
        "Output only the JSON, nothing else.\n"
    ),
    discuss_contract=(
        "## Output requirements\n"
        "You are now acting as a creative consultant. Discuss story ideas, plot development "
        "and characterization with the author.\n"
        "Give professional advice and inspiration, like an experienced editor talking with a writer.\n"
        "Reply in natural language; do not use JSON.\n"
    ),
    summaries_heading="## Previous summaries",
    summary_line_template="[{title}] {summary}",
    current_text_heading="## Current chapter content",
    task_line_template="## Task: {label}",
    instruction_template="The author says: {instruction}",
    task_labels={
        "continue": "continue writing",
        "discuss": "discuss",
        "outline": "generate outline",
        "polish": "polish/revise",
    },
)

ZH = LocaleStrings(
    default_style="细腻、沉浸、画面感强",
    default_pov="第三人称限定视角",
    default_rules=(
        "保持文风一致",
        "注重感官描写",
        "避免上帝视角",
        "通过行为和细节展现情感",
    ),
    first_chapter_title="第一章",
    chapter_title_template="第{id}章",
    default_session_title="新对话",
    assistant_intro="你是一位专业的小说写作助手。",
    style_heading="## 写作风格",
    pov_heading="## 叙事视角",
    rules_heading="## 写作规则",
    continue_contract=(
        "## 输出要求\n"
        "你必须以 JSON 格式输出，包含两个字段：\n"
        '1. "content": 生成的正文内容\n'
        '2. "summary": 对生成内容的简短摘要（50-100字）\n'
        "\n"
        "示例输出格式：\n"
        "```json\n"
        "{\n"
        '  "content": "生成的正文...",\n'
        '  "summary": "这段内容的摘要..."\n'
        "}\n"
        "```\n"
        "\n"
        "只输出 JSON，不要有其他内容。\n"
    ),
    discuss_contract=(
        "## 输出要求\n"
        "你现在是创作顾问模式。请与用户讨论创作思路、情节发展、角色塑造等问题。\n"
        "给出专业的建议和灵感启发，像一个有经验的编辑在和作者交流。\n"
        "直接用自然语言回复，不需要 JSON 格式。\n"
    ),
    summaries_heading="## 前文摘要",
    summary_line_template="【{title}】{summary}",
    current_text_heading="## 当前章节内容",
    task_line_template="## 任务：{label}",
    instruction_template="用户说：{instruction}",
    task_labels={
        "continue": "续写正文",
        "discuss": "讨论创作",
        "outline": "生成大纲",
        "polish": "润色修改",
    },
)

_LOCALES: dict[str, LocaleStrings] = {"en": EN, "zh": ZH}


def get_locale(language: str) -> LocaleStrings:
    try:
        return _LOCALES[language]
    except KeyError:
        raise ValueError(f"Unsupported language: {language}") from None


def placeholder_session_titles() -> set[str]:
    return {locale.default_session_title for locale in _LOCALES.values()}
