# src/tasklane/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task store and persistence adapter depend on Protocols instead of
concrete implementations, so the durable slot and the UI side stay
swappable and tests need no real storage or terminal.
"""

from collections.abc import Callable
from typing import Protocol

ChangeListener = Callable[[], None]
# "State changed" notification; renderers re-run the projection when called.

WarningSink = Callable[[str], None]
# Receives non-fatal, user-facing warnings (e.g. "could not save").


class DurableSlot(Protocol):
    """
    Named key/value storage holding whole serialized values.

    Implementations may raise on I/O failure; callers decide whether
    that is fatal.
    """

    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...
    def delete(self, key: str) -> None: ...
