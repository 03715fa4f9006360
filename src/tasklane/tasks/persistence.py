# tasks/persistence.py

from __future__ import annotations

import json
import logging
import sqlite3
from collections.abc import Iterable
from typing import Any

from ..core.ports import DurableSlot, WarningSink
from .task_models import Task

logger = logging.getLogger(__name__)


class TaskPersistence:
    """
    Saves/loads the whole task collection as one JSON array in a durable slot.

    Failures never propagate:
    - save() on an unavailable slot logs a warning, notifies the sink, returns False
    - load() on missing/garbled/non-array data returns []
    - load() on an unreadable slot returns [] and blocks later saves, so a
      session that never saw the stored list cannot overwrite it
    """

    def __init__(
        self,
        slot: DurableSlot,
        key: str,
        *,
        on_warning: WarningSink | None = None,
    ) -> None:
        if not key or not key.strip():
            raise ValueError("storage key is required")
        self._slot = slot
        self._key = key
        self._on_warning = on_warning
        self._read_failed = False

    @property
    def key(self) -> str:
        return self._key

    @property
    def read_failed(self) -> bool:
        """True after load() could not read the slot; saves are skipped until a load succeeds."""
        return self._read_failed

    def set_warning_sink(self, sink: WarningSink | None) -> None:
        self._on_warning = sink

    def _warn(self, message: str) -> None:
        if self._on_warning is None:
            return
        try:
            self._on_warning(message)
        except Exception:
            logger.exception("Warning sink failed.")

    def save(self, tasks: Iterable[Task]) -> bool:
        if self._read_failed:
            logger.warning("Not saving tasks key=%s: stored list was never read.", self._key)
            self._warn("Saved tasks could not be read at startup; changes are not saved.")
            return False

        payload = json.dumps([t.to_dict() for t in tasks], ensure_ascii=False)
        try:
            self._slot.set(self._key, payload)
        except (sqlite3.Error, OSError) as e:
            logger.warning("Failed to save tasks key=%s: %s", self._key, e)
            self._warn("Could not save tasks; changes are kept for this session only.")
            return False
        return True

    def load(self) -> list[Any]:
        try:
            raw = self._slot.get(self._key)
        except (sqlite3.Error, OSError) as e:
            self._read_failed = True
            logger.warning("Failed to read tasks key=%s: %s", self._key, e)
            self._warn(
                "Could not read saved tasks; starting with an empty list. "
                "Changes in this session will not be saved."
            )
            return []

        self._read_failed = False

        if not raw:
            return []

        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Stored tasks under key=%s are not valid JSON; ignoring them.", self._key)
            return []

        if not isinstance(data, list):
            logger.warning(
                "Stored tasks under key=%s are %s, not a list; ignoring them.",
                self._key,
                type(data).__name__,
            )
            return []

        return data
