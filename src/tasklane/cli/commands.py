# src/tasklane/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from ..core.state import AppState
from ..tasks.suggestions import add_suggested, list_ideas
from ..tasks.task_models import Priority, Task, TaskFilter

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)

DUE_PREFIXES = ("due:", "due=")


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        logger.debug("Command /%s args=%r", name, args)
        return handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  (any line without a leading / is added as a medium-priority task)")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- argument helpers ----


def _valid_date(raw: str) -> bool:
    try:
        datetime.strptime(raw, "%Y-%m-%d")
    except ValueError:
        return False
    return True


def parse_add_args(args: list[str]) -> tuple[str, str | None, Priority]:
    """
    Split /add arguments into (text, due_date, priority).

    Tokens like `!high` set the priority, `due:2026-01-20` (or `due=2026-01-20`)
    set the due date; everything else is task text. Raises ValueError for a
    malformed date or an unknown priority.
    """
    words: list[str] = []
    due: str | None = None
    priority = Priority.MEDIUM

    for tok in args:
        low = tok.lower()
        if low.startswith("!") and len(tok) > 1:
            try:
                priority = Priority(low[1:])
            except ValueError:
                raise ValueError(f"Unknown priority: {tok[1:]} (use high, medium or low)") from None
            continue
        prefix = next((p for p in DUE_PREFIXES if low.startswith(p)), None)
        if prefix is not None and len(tok) > len(prefix):
            value = tok[len(prefix):]
            if not _valid_date(value):
                raise ValueError(f"Invalid due date: {value} (use YYYY-MM-DD)")
            due = value
            continue
        words.append(tok)

    return " ".join(words), due, priority


def resolve_task_ref(state: AppState, ref: str) -> Task | None:
    """`ref` is a row number from the last rendered view, or a task id."""
    ref = ref.strip().rstrip(".")
    if ref.isdigit():
        idx = int(ref) - 1
        if 0 <= idx < len(state.last_view_ids):
            return state.task_store.get(state.last_view_ids[idx])
    return state.task_store.get(ref)


def add_task_from_text(state: AppState, line: str) -> str:
    """Plain (non-command) input: add as a medium-priority task without a due date."""
    task = state.task_store.add(line)
    if task is None:
        return _rejected_reply(line)
    return f"Added: {task.text}"


def _rejected_reply(text: str) -> str:
    if not text.strip():
        return "Task text is empty; nothing added."
    return f"Already on the list: {text.strip()}"


# ---- handlers ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add <text> [!high|!medium|!low] [due:YYYY-MM-DD]
    """
    if not args:
        return "Usage: /add <text> [!high|!medium|!low] [due:YYYY-MM-DD]"
    try:
        text, due, priority = parse_add_args(args)
    except ValueError as e:
        return str(e)

    task = state.task_store.add(text, due, priority)
    if task is None:
        return _rejected_reply(text)

    extra = f", due {task.due_date}" if task.due_date else ""
    return f"Added: {task.text} ({task.effective_priority.label}{extra})"


def cmd_toggle(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /toggle <n|id>"
    task = resolve_task_ref(state, args[0])
    if task is None:
        return f"No task {args[0]}."
    state.task_store.toggle_completed(task.id)
    mark = "done" if task.completed else "not done"
    return f"Marked {mark}: {task.text}"


def cmd_remove(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /rm <n|id>"
    task = resolve_task_ref(state, args[0])
    if task is None:
        return f"No task {args[0]}."
    state.task_store.remove(task.id)
    return f"Removed: {task.text}"


def cmd_filter(state: AppState, args: list[str]) -> str:
    """
    /filter            -> show the active filter
    /filter <name>     -> all | completed | pending | high | today
    """
    names = ", ".join(f.value for f in TaskFilter)
    if not args:
        return f"Filter is '{state.current_filter}'. Available: {names}."

    raw = args[0].lower()
    state.current_filter = TaskFilter.parse(raw)
    state.mark_dirty()
    if state.current_filter.value != raw:
        return f"Unknown filter '{raw}'; showing all. Available: {names}."
    return f"Filter: {state.current_filter}"


def cmd_list(state: AppState, args: list[str]) -> str:
    state.mark_dirty()
    return f"{len(state.task_store)} task(s), filter '{state.current_filter}'."


def cmd_suggest(state: AppState, args: list[str]) -> str:
    added = add_suggested(state.task_store)
    if not added:
        return "All suggested tasks are already on the list."
    return "Added suggestions: " + ", ".join(t.text for t in added)


def cmd_ideas(state: AppState, args: list[str]) -> str:
    lines = ["Task ideas (use /add to take one):"]
    for i, idea in enumerate(list_ideas(), start=1):
        lines.append(f"  {i}. {idea}")
    return "\n".join(lines)


def cmd_status(state: AppState, args: list[str]) -> str:
    tasks = state.task_store.list()
    done = sum(1 for t in tasks if t.completed)
    db_path = getattr(state.settings, "db_path", "?")
    key = getattr(state.settings, "storage_key", "?")
    saving = "off (saved tasks were unreadable at startup)" if state.task_store.saving_blocked else "on"
    return (
        "Status:\n"
        f"  Tasks: {len(tasks)} ({len(tasks) - done} pending, {done} completed)\n"
        f"  Filter: {state.current_filter}\n"
        f"  Storage: {db_path} [key={key}]\n"
        f"  Saving: {saving}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register(
    "add", cmd_add, help_text="Add a task: /add <text> [!high|!medium|!low] [due:YYYY-MM-DD]."
)
registry.register(
    "toggle", cmd_toggle, help_text="Toggle completed: /toggle <n|id>.", aliases=["done", "x"]
)
registry.register("rm", cmd_remove, help_text="Delete a task: /rm <n|id>.", aliases=["del", "delete"])
registry.register(
    "filter", cmd_filter, help_text="Set the view filter: all | completed | pending | high | today."
)
registry.register("list", cmd_list, help_text="Show the task list again.", aliases=["ls"])
registry.register("suggest", cmd_suggest, help_text="Add the suggested daily tasks (skips duplicates).")
registry.register("ideas", cmd_ideas, help_text="Show a few task ideas.")
registry.register("status", cmd_status, help_text="Show counts, active filter and storage location.")
