from __future__ import annotations

from pathlib import Path

from loguru import logger

from creator_ai.domain.models import SummaryRecord
from creator_ai.storage.codec import atomic_write_json, read_document
from creator_ai.storage.layout import ProjectLayout


def load_summaries(root: Path | str) -> list[SummaryRecord]:
    layout = ProjectLayout.of(root)
    return read_document(layout.summaries_file, list[SummaryRecord], default=[])


def append_summary(root: Path | str, record: SummaryRecord) -> None:
    layout = ProjectLayout.of(root)
    records = load_summaries(root)
    records.append(record)
    atomic_write_json(layout.summaries_file, records)
    logger.bind(project=layout.project_name, op="append_summary", chapter_id=record.chapter_id).debug(
        "Appended summary total={}", len(records)
    )


def recent_summaries(root: Path | str, limit: int = 20) -> list[SummaryRecord]:
    """Most recent ``limit`` non-blank records, oldest first."""
    if limit <= 0:
        return []
    non_blank = [record for record in load_summaries(root) if record.summary.strip()]
    return non_blank[-limit:]
