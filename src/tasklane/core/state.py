# src/tasklane/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..tasks.task_models import TaskFilter, today_iso
from ..tasks.task_store import TaskStore


@dataclass
class AppState:
    # Settings live on the state so commands/connectors never read global config.
    settings: Any

    task_store: TaskStore
    current_filter: TaskFilter = TaskFilter.ALL

    # Task ids in the order of the last rendered view (row n -> last_view_ids[n-1]).
    last_view_ids: list[str] = field(default_factory=list)

    # Non-fatal warnings waiting to be shown by the connector.
    pending_warnings: list[str] = field(default_factory=list)

    # Set by the store's change listener; cleared by the renderer.
    dirty: bool = True

    def today(self) -> str:
        return today_iso(utc=bool(getattr(self.settings, "utc_dates", False)))

    def warn(self, message: str) -> None:
        self.pending_warnings.append(message)

    def mark_dirty(self) -> None:
        self.dirty = True

    def drain_warnings(self) -> list[str]:
        out = list(self.pending_warnings)
        self.pending_warnings.clear()
        return out
