from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import re

from creator_ai.errors import NotFoundError

_CHAPTER_FILE_PATTERN = re.compile(r"^chapter_(\d+)\.(?:txt|json)$")


@dataclass(frozen=True)
class ProjectLayout:
    root: Path

    @classmethod
    def of(cls, root: Path | str) -> "ProjectLayout":
        return cls(Path(root))

    @property
    def chapters_dir(self) -> Path:
        return self.root / "chapters"

    @property
    def sessions_dir(self) -> Path:
        return self.root / "chat_sessions"

    @property
    def internal_dir(self) -> Path:
        return self.root / ".creatorai"

    @property
    def vectors_dir(self) -> Path:
        return self.internal_dir / "vectors"

    @property
    def chapter_seq_file(self) -> Path:
        return self.internal_dir / "chapter_seq.json"

    @property
    def preset_file(self) -> Path:
        return self.root / "config.json"

    @property
    def llm_config_file(self) -> Path:
        return self.root / "llm_config.json"

    @property
    def summaries_file(self) -> Path:
        return self.root / "summaries.json"

    @property
    def chapters_index_file(self) -> Path:
        return self.chapters_dir / "index.json"

    @property
    def sessions_index_file(self) -> Path:
        return self.sessions_dir / "index.json"

    def chapter_text_file(self, chapter_id: int) -> Path:
        return self.chapters_dir / f"chapter_{chapter_id:03}.txt"

    def chapter_meta_file(self, chapter_id: int) -> Path:
        return self.chapters_dir / f"chapter_{chapter_id:03}.json"

    def session_file(self, session_id: str) -> Path:
        if not session_id or session_id in {".", ".."} or any(sep in session_id for sep in ("/", "\\")):
            raise NotFoundError(f"Invalid session id: {session_id!r}")
        return self.sessions_dir / f"session_{session_id}.json"

    def chapter_ids_on_disk(self) -> set[int]:
        if not self.chapters_dir.is_dir():
            return set()
        ids: set[int] = set()
        for entry in self.chapters_dir.iterdir():
            match = _CHAPTER_FILE_PATTERN.match(entry.name)
            if match:
                ids.add(int(match.group(1)))
        return ids

    @property
    def project_name(self) -> str:
        return self.root.name or "Project"
