# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Nothing here is secret; every variable has a local default.

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TASKLANE_APP_NAME": "App display name (default: tasklane).",
    "TASKLANE_LOG_LEVEL": "Console logging level (default: WARNING; the log file always gets DEBUG).",
    # Paths (gitignored)
    "TASKLANE_DATA_DIR": "Local data directory (default: .local/tasklane).",
    "TASKLANE_DB_PATH": "SQLite file holding the task slot (default: <data_dir>/tasklane.sqlite3).",
    # Task list
    "TASKLANE_STORAGE_KEY": (
        "Slot key the task list is saved under (default: smart-task-manager-tasks)."
    ),
    "TASKLANE_DEFAULT_FILTER": "Filter shown at startup: all|completed|pending|high|today (default: all).",
    "TASKLANE_UTC_DATES": "Use the UTC date for 'today' and overdue checks (default: false, local date).",
}
