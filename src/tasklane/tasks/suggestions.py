# tasks/suggestions.py

from __future__ import annotations

import logging

from .task_models import Priority, Task
from .task_store import TaskStore

logger = logging.getLogger(__name__)

# Added in order by add_suggested(); texts already on the list are skipped.
SUGGESTED_TASKS: tuple[str, ...] = (
    "Morning exercise",
    "Study for 1 hour",
    "Drink enough water",
)

# Shown by /ideas only, never added automatically.
TASK_IDEAS: tuple[str, ...] = (
    "Complete project documentation",
    "Fix bugs in the login module",
    "Refactor the task manager code",
    "Plan the next sprint",
    "Review pull requests",
)


def add_suggested(store: TaskStore) -> list[Task]:
    """Add every suggested task that is not on the list yet; return the new ones."""
    added: list[Task] = []
    for text in SUGGESTED_TASKS:
        task = store.add(text, None, Priority.MEDIUM)
        if task is not None:
            added.append(task)
    logger.info("Suggested tasks added=%d skipped=%d", len(added), len(SUGGESTED_TASKS) - len(added))
    return added


def list_ideas() -> list[str]:
    return list(TASK_IDEAS)
