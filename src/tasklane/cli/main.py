# src/tasklane/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState (load + migrate saved tasks),
then runs the console REPL until /exit, EOF or Ctrl+C.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)

    try:
        run_console_loop(state)
    finally:
        # Every mutation is already saved; a final save only covers a slot
        # that was unavailable earlier in the session.
        state.task_store.flush()
        logger.info("Bye.")


if __name__ == "__main__":
    main()
