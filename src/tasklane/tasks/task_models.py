# tasks/task_models.py

from __future__ import annotations

import secrets
import time
from dataclasses import dataclass
from datetime import UTC, date, datetime
from enum import StrEnum
from typing import Any


class Priority(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def from_raw(cls, raw: Any) -> Priority:
        """Unknown, missing or non-string values read as MEDIUM."""
        if not raw:
            return cls.MEDIUM
        try:
            return cls(raw)
        except Exception:
            return cls.MEDIUM

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]

    @property
    def label(self) -> str:
        return self.value.capitalize()


_PRIORITY_RANK: dict[Priority, int] = {
    Priority.HIGH: 0,
    Priority.MEDIUM: 1,
    Priority.LOW: 2,
}


class TaskFilter(StrEnum):
    """
    Display filters.

    Notes:
    - parse() never fails: unknown names fall back to ALL.
    """

    ALL = "all"
    COMPLETED = "completed"
    PENDING = "pending"
    HIGH = "high"
    TODAY = "today"

    @classmethod
    def parse(cls, raw: str | None) -> TaskFilter:
        if not raw:
            return cls.ALL
        try:
            return cls(str(raw).strip().lower())
        except Exception:
            return cls.ALL


@dataclass(slots=True)
class Task:
    id: str
    text: str
    completed: bool
    priority: str
    due_date: str | None
    created_at: str

    @property
    def effective_priority(self) -> Priority:
        return Priority.from_raw(self.priority)

    def to_dict(self) -> dict[str, Any]:
        """Stored shape (camelCase keys, `dueDate` null when absent)."""
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "priority": self.priority,
            "dueDate": self.due_date,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Task:
        """
        Build a Task from an already-current stored record.

        Values are kept as stored; only shapes that cannot be represented
        are read as their defaults.
        """
        completed = raw.get("completed")
        priority = raw.get("priority")
        due = raw.get("dueDate")
        created = raw.get("createdAt")
        return cls(
            id=str(raw["id"]),
            text=str(raw.get("text") or ""),
            completed=completed if isinstance(completed, bool) else False,
            priority=priority if isinstance(priority, str) and priority else Priority.MEDIUM.value,
            due_date=due if isinstance(due, str) and due else None,
            created_at=created if isinstance(created, str) else "",
        )


def new_task_id() -> str:
    """Epoch milliseconds plus 48 random bits, e.g. '1760900000000-3f9c0a1b2c4d'."""
    return f"{int(time.time() * 1000)}-{secrets.token_hex(6)}"


def utc_now_iso() -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a 'Z' suffix."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def today_iso(*, utc: bool = False) -> str:
    """Current calendar date as YYYY-MM-DD (local by default)."""
    if utc:
        return datetime.now(UTC).date().isoformat()
    return date.today().isoformat()
