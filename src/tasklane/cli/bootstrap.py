# src/tasklane/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- opens the durable slot, loads + migrates the saved tasks,
- wires the task store, its change listener and the warning sink into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import DurableSlot
from ..core.state import AppState
from ..tasks.migration import load_and_migrate
from ..tasks.persistence import TaskPersistence
from ..tasks.slot_store import SqliteSlotStore
from ..tasks.task_models import TaskFilter
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    # A failure here is reported by the first slot read; the app still starts.
    try:
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        settings.db_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.warning("Could not create data dirs under %s: %s", settings.data_dir, e)


def create_initial_state(*, settings=None, slot: DurableSlot | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings (and the slot) injectable makes the app easy to test and
    avoids hidden global config reads. If settings is None, falls back to
    get_settings(); if slot is None, a SQLite slot at settings.db_path is used.
    """
    if settings is None:
        settings = get_settings()

    if slot is None:
        _ensure_local_dirs(settings)
        slot = SqliteSlotStore(settings.db_path)

    startup_warnings: list[str] = []
    persistence = TaskPersistence(slot, settings.storage_key, on_warning=startup_warnings.append)
    tasks = load_and_migrate(persistence)

    state = AppState(
        settings=settings,
        task_store=TaskStore(persistence, tasks),
        current_filter=TaskFilter.parse(getattr(settings, "default_filter", "all")),
    )

    state.pending_warnings.extend(startup_warnings)
    persistence.set_warning_sink(state.warn)
    state.task_store.subscribe(state.mark_dirty)

    logger.info("Loaded %d tasks (filter=%s)", len(state.task_store), state.current_filter)
    return state
