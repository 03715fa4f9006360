# src/tasklane/connectors/console_connector.py

from __future__ import annotations

import logging

from ..cli.commands import add_task_from_text
from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..tasks.projector import TaskView, build_view

logger = logging.getLogger(__name__)

FILTER_TITLES = {
    "all": "All tasks",
    "completed": "Completed",
    "pending": "Pending",
    "high": "High priority",
    "today": "Due today",
}


def format_row(n: int, view: TaskView) -> str:
    task = view.task
    box = "[x]" if task.completed else "[ ]"
    parts = [f"{n:>3}. {box} {task.text}", f"({view.priority_label})"]
    if task.due_date:
        parts.append(f"(due {task.due_date})")
    if view.overdue:
        parts.append("OVERDUE")
    return " ".join(parts)


def render_tasks(state: AppState) -> str:
    """
    Project the current collection with the active filter and format it.

    Also records the row -> id mapping used by /toggle <n> and /rm <n>.
    """
    rows = build_view(state.task_store.list(), state.current_filter, state.today())
    state.last_view_ids = [v.task.id for v in rows]
    state.dirty = False

    title = FILTER_TITLES.get(state.current_filter.value, state.current_filter.value)
    lines = [f"== {title} ({len(rows)}) =="]
    if not rows:
        lines.append("  (nothing here)")
    for n, view in enumerate(rows, start=1):
        lines.append(format_row(n, view))
    return "\n".join(lines)


def handle_line(state: AppState, line: str) -> str | None:
    """One input line -> reply text (commands first, plain text adds a task)."""
    reply = command_registry.handle(state, line)
    if reply is not None:
        return reply
    return add_task_from_text(state, line)


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started (tasks=%d).", len(state.task_store))
    print("Type a task to add it. Use /help for commands. Use /exit to quit.\n")
    print(render_tasks(state))

    while True:
        try:
            user_input = input("\n> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = handle_line(state, user_input)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply:
            print(reply)

        for warning in state.drain_warnings():
            print(f"[WARN] {warning}")

        if state.dirty:
            print()
            print(render_tasks(state))

    logger.info("Console connector finished.")
