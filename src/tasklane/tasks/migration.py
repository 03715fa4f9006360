# tasks/migration.py

"""
Upgrade stored task lists to the current record shape.

A record with a truthy `id` is current. Anything else is a legacy record
(at most `text` and `completed`) and is rebuilt with a fresh id, medium
priority, no due date and a new creation timestamp.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from .persistence import TaskPersistence
from .task_models import Priority, Task, new_task_id, utc_now_iso

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MigrationResult:
    tasks: list[Task]
    migrated: bool


def _is_current(raw: Any) -> bool:
    return isinstance(raw, dict) and bool(raw.get("id"))


def _upgrade_legacy(raw: Any) -> Task:
    legacy = raw if isinstance(raw, dict) else {}
    text = legacy.get("text")
    completed = legacy.get("completed")
    return Task(
        id=new_task_id(),
        text=str(text) if text else "",
        completed=completed if isinstance(completed, bool) else False,
        priority=Priority.MEDIUM.value,
        due_date=None,
        created_at=utc_now_iso(),
    )


def migrate(raw_tasks: Iterable[Any] | None) -> MigrationResult:
    migrated = False
    out: list[Task] = []

    for raw in raw_tasks or []:
        if isinstance(raw, Task) and raw.id:
            out.append(raw)
            continue
        if _is_current(raw):
            out.append(Task.from_dict(raw))
            continue
        migrated = True
        out.append(_upgrade_legacy(raw))

    return MigrationResult(tasks=out, migrated=migrated)


def load_and_migrate(persistence: TaskPersistence) -> list[Task]:
    """
    Startup path: load -> migrate -> write back if anything was upgraded,
    so later loads skip re-migration.
    """
    result = migrate(persistence.load())
    if result.migrated:
        logger.info("Migrated legacy task records; total=%d", len(result.tasks))
        persistence.save(result.tasks)
    return result.tasks
