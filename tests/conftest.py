# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from tasklane.cli.bootstrap import create_initial_state
from tasklane.core.state import AppState
from tasklane.tasks.persistence import TaskPersistence

from .fakes import MemorySlot

STORAGE_KEY = "smart-task-manager-tasks"


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="tasklane-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        db_path=tmp_path / "data" / "tasklane.sqlite3",
        storage_key=STORAGE_KEY,
        default_filter="all",
        utc_dates=False,
    )


@pytest.fixture()
def slot() -> MemorySlot:
    return MemorySlot()


@pytest.fixture()
def persistence(slot: MemorySlot) -> TaskPersistence:
    return TaskPersistence(slot, STORAGE_KEY)


@pytest.fixture()
def state(settings: SimpleNamespace, slot: MemorySlot) -> AppState:
    """AppState wired through the real bootstrap, backed by an in-memory slot."""
    return create_initial_state(settings=settings, slot=slot)
