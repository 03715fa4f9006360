# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tasklane.logging_setup import _ConsoleNoiseFilter, setup_logging


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


@pytest.fixture()
def root_logger():
    root = logging.getLogger()
    saved = list(root.handlers)
    saved_level = root.level
    yield root
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in saved:
        root.addHandler(h)
    root.setLevel(saved_level)
    logging.captureWarnings(False)


def test_console_filter_keeps_own_logs_only() -> None:
    flt = _ConsoleNoiseFilter(logging.DEBUG)
    assert flt.filter(_record("tasklane.tasks.task_store", logging.DEBUG))
    assert not flt.filter(_record("urllib3", logging.WARNING))
    assert flt.filter(_record("urllib3", logging.ERROR))
    assert not flt.filter(_record("py.warnings", logging.WARNING))


def test_console_filter_applies_level_to_own_logs() -> None:
    flt = _ConsoleNoiseFilter(logging.WARNING)
    assert not flt.filter(_record("tasklane.tasks.task_store", logging.INFO))
    assert flt.filter(_record("tasklane.tasks.persistence", logging.WARNING))

    quiet = _ConsoleNoiseFilter(logging.CRITICAL)
    assert not quiet.filter(_record("urllib3", logging.ERROR))


def test_setup_logging_writes_log_file(tmp_path: Path, root_logger: logging.Logger) -> None:
    log_file = setup_logging(log_dir=tmp_path / "logs")

    logging.getLogger("tasklane.test").debug("hello file")
    for h in root_logger.handlers:
        h.flush()

    assert log_file == tmp_path / "logs" / "tasklane.log"
    assert "hello file" in log_file.read_text("utf-8")


def test_unwritable_log_dir_falls_back_to_console(tmp_path: Path, root_logger: logging.Logger) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x", "utf-8")

    assert setup_logging(log_dir=blocker) is None
    assert not any(isinstance(h, logging.FileHandler) for h in root_logger.handlers)
    assert len(root_logger.handlers) == 1
