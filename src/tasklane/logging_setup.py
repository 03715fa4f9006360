# src/tasklane/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "tasklane.log"


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the interactive console readable (it shares stderr with the task list):
    - tasklane logs pass from the configured console level
    - Python warnings (captured as 'py.warnings') and third-party noise
      pass only at ERROR+ (or the console level, if that is higher)
    """

    def __init__(self, level: int = logging.WARNING) -> None:
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if name == "tasklane" or name.startswith("tasklane."):
            return record.levelno >= self.level

        return record.levelno >= max(logging.ERROR, self.level)


def setup_logging(
    *,
    log_dir: str | Path = ".local/tasklane",
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> Path | None:
    """
    Configure logging with:
    - Console handler: filtered, so log lines do not drown the task list
    - File handler: full logs in <log_dir>/tasklane.log

    If the log file cannot be opened the app keeps going with console logging
    only. Returns the log file path, or None in that case.

    Call this ONCE, very early (before first logger.info).
    """
    root = logging.getLogger()
    root.setLevel(min(console_level, file_level))

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter(console_level))
    root.addHandler(ch)

    # Route warnings.warn(...) into logging as 'py.warnings'
    logging.captureWarnings(True)

    log_file = Path(log_dir) / LOG_FILE_NAME
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_file), encoding="utf-8")
    except OSError as e:
        logging.getLogger(__name__).warning("File logging disabled (%s): %s", log_file, e)
        return None

    fh.setLevel(file_level)
    fh.setFormatter(fmt)
    root.addHandler(fh)
    return log_file
