from __future__ import annotations

from pathlib import Path

from creator_ai.domain.models import AppState
from creator_ai.storage.codec import atomic_write_json, read_document

DEFAULT_PROJECT_DIRNAME = "MyNovel"


class AppStateStore:
    """Cross-project UI state kept under an injected state directory.

    The state file is created on the first ``save``.
    """

    def __init__(self, state_dir: Path | str):
        self.state_dir = Path(state_dir)

    @property
    def state_file(self) -> Path:
        return self.state_dir / "app_state.json"

    def load(self) -> AppState:
        return read_document(self.state_file, AppState, default=AppState())

    def save(self, state: AppState) -> None:
        atomic_write_json(self.state_file, state)

    def update(self, **changes) -> AppState:
        state = self.load().model_copy(update=changes)
        self.save(state)
        return state

    def default_project_dir(self) -> Path:
        return self.state_dir / DEFAULT_PROJECT_DIRNAME
