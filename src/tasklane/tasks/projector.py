# tasks/projector.py

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .task_models import Priority, Task, TaskFilter, today_iso


@dataclass(frozen=True, slots=True)
class TaskView:
    """One display row: the task plus render-time annotations (never stored)."""

    task: Task
    overdue: bool
    priority_label: str


def matches_filter(task: Task, task_filter: TaskFilter, today: str) -> bool:
    if task_filter is TaskFilter.COMPLETED:
        return task.completed
    if task_filter is TaskFilter.PENDING:
        return not task.completed
    if task_filter is TaskFilter.HIGH:
        return task.effective_priority is Priority.HIGH
    if task_filter is TaskFilter.TODAY:
        return bool(task.due_date) and task.due_date == today
    return True


def _sort_key(task: Task) -> tuple[bool, int]:
    return (task.completed, task.effective_priority.rank)


def project(
    tasks: Iterable[Task],
    task_filter: TaskFilter | str | None = TaskFilter.ALL,
    today: str | None = None,
) -> list[Task]:
    """
    Filtered + ordered view of `tasks`:
    - incomplete before completed
    - then priority (high, medium, low; unknown counts as medium)
    - ties keep insertion order (sorted() is stable)

    The input collection is not modified.
    """
    flt = task_filter if isinstance(task_filter, TaskFilter) else TaskFilter.parse(task_filter)
    day = today or today_iso()
    return sorted((t for t in tasks if matches_filter(t, flt, day)), key=_sort_key)


def is_overdue(task: Task, today: str | None = None) -> bool:
    # YYYY-MM-DD is zero-padded, so string order is date order.
    if not task.due_date or task.completed:
        return False
    return task.due_date < (today or today_iso())


def build_view(
    tasks: Iterable[Task],
    task_filter: TaskFilter | str | None = TaskFilter.ALL,
    today: str | None = None,
) -> list[TaskView]:
    day = today or today_iso()
    return [
        TaskView(task=t, overdue=is_overdue(t, day), priority_label=t.effective_priority.label)
        for t in project(tasks, task_filter, day)
    ]
