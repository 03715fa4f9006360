# tests/test_persistence.py

from __future__ import annotations

import json
from pathlib import Path

import pytest

from tasklane.tasks.migration import load_and_migrate, migrate
from tasklane.tasks.persistence import TaskPersistence
from tasklane.tasks.slot_store import SqliteSlotStore
from tasklane.tasks.task_models import Task
from tasklane.tasks.task_store import TaskStore

from .conftest import STORAGE_KEY
from .fakes import FailingSlot, MemorySlot


def _tasks() -> list[Task]:
    return [
        Task(
            id="1760900000000-aaaaaaaaaaaa",
            text="Buy milk",
            completed=False,
            priority="high",
            due_date="2026-10-20",
            created_at="2026-10-19T08:00:00.000Z",
        ),
        Task(
            id="1760900000001-bbbbbbbbbbbb",
            text="Call mom",
            completed=True,
            priority="low",
            due_date=None,
            created_at="2026-10-19T08:00:01.000Z",
        ),
    ]


def test_missing_slot_loads_empty(persistence: TaskPersistence) -> None:
    assert persistence.load() == []


@pytest.mark.parametrize("raw", ["not json", "{broken", '{"a": 1}', '"text"', "42", "null"])
def test_garbled_or_non_array_data_loads_empty(raw: str) -> None:
    slot = MemorySlot(values={STORAGE_KEY: raw})
    assert TaskPersistence(slot, STORAGE_KEY).load() == []


def test_round_trip_is_field_for_field(persistence: TaskPersistence, slot: MemorySlot) -> None:
    tasks = _tasks()

    assert persistence.save(tasks) is True
    stored = json.loads(slot.values[STORAGE_KEY])
    assert stored[0] == {
        "id": "1760900000000-aaaaaaaaaaaa",
        "text": "Buy milk",
        "completed": False,
        "priority": "high",
        "dueDate": "2026-10-20",
        "createdAt": "2026-10-19T08:00:00.000Z",
    }
    assert stored[1]["dueDate"] is None

    loaded = migrate(persistence.load())
    assert loaded.migrated is False
    assert loaded.tasks == tasks


def test_save_failure_is_a_warning_not_an_error() -> None:
    warnings: list[str] = []
    persistence = TaskPersistence(FailingSlot(), STORAGE_KEY, on_warning=warnings.append)

    assert persistence.save(_tasks()) is False
    assert len(warnings) == 1


def test_read_failure_loads_empty_and_warns() -> None:
    warnings: list[str] = []
    persistence = TaskPersistence(FailingSlot(fail_get=True), STORAGE_KEY, on_warning=warnings.append)

    assert persistence.load() == []
    assert len(warnings) == 1


def test_broken_warning_sink_does_not_escape() -> None:
    def sink(_: str) -> None:
        raise RuntimeError("sink down")

    persistence = TaskPersistence(FailingSlot(), STORAGE_KEY, on_warning=sink)
    assert persistence.save(_tasks()) is False


def test_empty_key_is_rejected(slot: MemorySlot) -> None:
    with pytest.raises(ValueError):
        TaskPersistence(slot, "  ")


def test_sqlite_slot_set_get_delete(tmp_path: Path) -> None:
    db = tmp_path / "nested" / "slots.sqlite3"
    store = SqliteSlotStore(db)

    assert store.get("k") is None
    store.set("k", "v1")
    store.set("k", "v2")
    store.set("other", "x")
    assert store.get("k") == "v2"

    store.delete("k")
    assert store.get("k") is None
    assert store.get("other") == "x"


def test_sqlite_slot_survives_reopen(tmp_path: Path) -> None:
    db = tmp_path / "tasklane.sqlite3"
    tasks = _tasks()

    TaskPersistence(SqliteSlotStore(db), STORAGE_KEY).save(tasks)
    reopened = TaskPersistence(SqliteSlotStore(db), STORAGE_KEY)

    assert migrate(reopened.load()).tasks == tasks


def test_read_failure_blocks_saves_so_stored_tasks_survive() -> None:
    stored = json.dumps([t.to_dict() for t in _tasks()])
    slot = FailingSlot(fail_get=True, fail_set=False, values={STORAGE_KEY: stored})
    warnings: list[str] = []
    persistence = TaskPersistence(slot, STORAGE_KEY, on_warning=warnings.append)

    store = TaskStore(persistence, load_and_migrate(persistence))
    assert len(store) == 0
    assert persistence.read_failed is True
    assert store.saving_blocked is True

    # The slot recovers (e.g. another session released its lock).
    slot.fail_get = False
    assert store.add("New one") is not None
    assert store.flush() is False

    assert slot.values[STORAGE_KEY] == stored
    assert len(warnings) == 3


def test_successful_load_clears_read_failure() -> None:
    slot = FailingSlot(fail_get=True, fail_set=False)
    persistence = TaskPersistence(slot, STORAGE_KEY)

    persistence.load()
    slot.fail_get = False
    assert persistence.load() == []
    assert persistence.read_failed is False
    assert persistence.save(_tasks()) is True


def test_sqlite_slot_opens_lazily(tmp_path: Path) -> None:
    db = tmp_path / "later" / "tasklane.sqlite3"
    store = SqliteSlotStore(db)
    assert not db.exists()

    store.set("k", "v")
    assert db.exists()


def test_unopenable_sqlite_slot_degrades_to_warnings(tmp_path: Path) -> None:
    warnings: list[str] = []
    # A directory cannot be opened as a database file.
    persistence = TaskPersistence(SqliteSlotStore(tmp_path), STORAGE_KEY, on_warning=warnings.append)

    assert persistence.load() == []
    assert persistence.save(_tasks()) is False
    assert len(warnings) == 2
