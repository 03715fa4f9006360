# tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..core.ports import ChangeListener
from .persistence import TaskPersistence
from .task_models import Priority, Task, new_task_id, utc_now_iso

logger = logging.getLogger(__name__)


class TaskStore:
    """
    In-memory task collection (insertion order), authoritative for the session.

    Every successful mutation:
    1) saves the whole collection through the persistence adapter
    2) notifies subscribed listeners ("state changed")

    Rejected or stale operations (empty/duplicate text, unknown id) are
    silent no-ops and return None.
    """

    def __init__(
        self,
        persistence: TaskPersistence,
        tasks: Iterable[Task] | None = None,
    ) -> None:
        self._persistence = persistence
        self._tasks: list[Task] = list(tasks or [])
        self._listeners: list[ChangeListener] = []
        logger.info("TaskStore ready key=%s total=%d", persistence.key, len(self._tasks))

    def __len__(self) -> int:
        return len(self._tasks)

    @property
    def saving_blocked(self) -> bool:
        return self._persistence.read_failed

    # ---- change notification ----

    def subscribe(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    def _commit(self) -> None:
        self._persistence.save(self._tasks)
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("Task change listener failed.")

    def flush(self) -> bool:
        """Save without notifying listeners (used on shutdown)."""
        return self._persistence.save(self._tasks)

    # ---- queries ----

    def list(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    def get(self, task_id: str) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def _fresh_id(self) -> str:
        live = {t.id for t in self._tasks}
        while True:
            tid = new_task_id()
            if tid not in live:
                return tid

    # ---- mutations ----

    def add(
        self,
        text: str | None,
        due_date: str | None = None,
        priority: Priority | str | None = None,
    ) -> Task | None:
        cleaned = str(text or "").strip()
        if not cleaned:
            return None

        if any(t.text == cleaned for t in self._tasks):
            logger.debug("Duplicate task text ignored: %r", cleaned)
            return None

        task = Task(
            id=self._fresh_id(),
            text=cleaned,
            completed=False,
            priority=Priority.from_raw(priority).value,
            due_date=due_date or None,
            created_at=utc_now_iso(),
        )
        self._tasks.append(task)
        logger.debug("Task added id=%s priority=%s due=%s", task.id, task.priority, task.due_date)
        self._commit()
        return task

    def toggle_completed(self, task_id: str) -> Task | None:
        task = self.get(task_id)
        if task is None:
            return None
        task.completed = not task.completed
        logger.debug("Task toggled id=%s completed=%s", task.id, task.completed)
        self._commit()
        return task

    def remove(self, task_id: str) -> Task | None:
        task = self.get(task_id)
        if task is None:
            return None
        self._tasks.remove(task)
        logger.debug("Task removed id=%s", task.id)
        self._commit()
        return task
