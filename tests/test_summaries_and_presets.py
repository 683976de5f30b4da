from __future__ import annotations

from pathlib import Path

import pytest

from creator_ai.domain.models import LlmConfig, Preset, SummaryRecord
from creator_ai.errors import MalformedDocumentError, NotFoundError
from creator_ai.storage.layout import ProjectLayout
from creator_ai.storage.llm_settings import crud as llm_settings_crud
from creator_ai.storage.presets import crud as presets_crud
from creator_ai.storage.summaries import crud as summaries_crud


def _record(idx: int, summary: str | None = None) -> SummaryRecord:
    return SummaryRecord.create(chapter_id=idx, chapter_title=f"C{idx}", summary=summary if summary is not None else f"S{idx}")


def test_summaries_append_preserves_insertion_order(tmp_path: Path) -> None:
    records = [_record(idx) for idx in range(3)]
    for record in records:
        summaries_crud.append_summary(tmp_path, record)

    assert summaries_crud.load_summaries(tmp_path) == records


def test_summary_record_create_generates_id_and_timestamp() -> None:
    first = _record(1)
    second = _record(1)

    assert first.id != second.id
    assert first.created_at.endswith("Z")


def test_recent_summaries_skips_blank_and_keeps_chronology(tmp_path: Path) -> None:
    for idx in range(25):
        summaries_crud.append_summary(tmp_path, _record(idx))
    summaries_crud.append_summary(tmp_path, _record(99, summary="   "))

    recent = summaries_crud.recent_summaries(tmp_path, limit=20)

    assert [record.chapter_title for record in recent] == [f"C{idx}" for idx in range(5, 25)]
    assert summaries_crud.recent_summaries(tmp_path, limit=0) == []


def test_load_summaries_malformed_file(tmp_path: Path) -> None:
    ProjectLayout.of(tmp_path).summaries_file.write_text('{"not": "a list"}', encoding="utf-8")

    with pytest.raises(MalformedDocumentError):
        summaries_crud.load_summaries(tmp_path)


def test_load_preset_defaults_when_absent(tmp_path: Path) -> None:
    assert presets_crud.load_preset(tmp_path) == Preset.default("en")
    assert presets_crud.load_preset(tmp_path, language="zh").pov == "第三人称限定视角"


def test_preset_save_and_load(tmp_path: Path) -> None:
    preset = Preset(style="noir", pov="first person", rules=["short sentences", "no flashbacks"])

    presets_crud.save_preset(tmp_path, preset)

    assert presets_crud.load_preset(tmp_path) == preset


def test_preset_export_import_outside_project(tmp_path: Path) -> None:
    preset = Preset(style="lyrical", pov="second person", rules=["rhythm first"])
    shared = tmp_path / "shared" / "lyrical.json"

    presets_crud.export_preset(shared, preset)

    assert presets_crud.import_preset(shared) == preset
    with pytest.raises(NotFoundError):
        presets_crud.import_preset(tmp_path / "nope.json")


def test_load_llm_config_absent_is_empty(tmp_path: Path) -> None:
    assert llm_settings_crud.load_llm_config(tmp_path) == LlmConfig()


def test_add_endpoint_and_set_active(tmp_path: Path) -> None:
    first = llm_settings_crud.add_endpoint(tmp_path, "A", "https://a.example/v1", "model-a")
    second = llm_settings_crud.add_endpoint(tmp_path, "B", "https://b.example/v1", "model-b")

    config = llm_settings_crud.load_llm_config(tmp_path)
    assert [endpoint.id for endpoint in config.endpoints] == [first.id, second.id]
    assert config.active_endpoint_id == first.id

    updated = llm_settings_crud.set_active(tmp_path, endpoint_id=second.id, model="  ")
    assert updated.active_endpoint_id == second.id
    assert updated.active_model is None

    with pytest.raises(NotFoundError):
        llm_settings_crud.set_active(tmp_path, endpoint_id="missing")
