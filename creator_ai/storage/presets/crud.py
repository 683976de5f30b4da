from __future__ import annotations

from pathlib import Path

from creator_ai.domain.models import Preset
from creator_ai.storage.codec import atomic_write_json, read_document
from creator_ai.storage.layout import ProjectLayout


def load_preset(root: Path | str, *, language: str = "en") -> Preset:
    layout = ProjectLayout.of(root)
    if not layout.preset_file.exists():
        return Preset.default(language)
    return read_document(layout.preset_file, Preset)


def save_preset(root: Path | str, preset: Preset) -> None:
    atomic_write_json(ProjectLayout.of(root).preset_file, preset)


def export_preset(file_path: Path | str, preset: Preset) -> None:
    atomic_write_json(Path(file_path), preset)


def import_preset(file_path: Path | str) -> Preset:
    return read_document(Path(file_path), Preset)
