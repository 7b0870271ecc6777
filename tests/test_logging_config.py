"""Tests for logging setup."""

import logging

import pytest

from autodbbackup.infrastructure.logging_config import ColoredFormatter, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_file_handler_captures_debug(tmp_path, restore_root_logger):
    log_file = tmp_path / "logs" / "backup.log"
    setup_logging(level=logging.WARNING, log_file=str(log_file))

    logging.getLogger("autodbbackup.test").debug("batch detail %d", 42)
    for handler in restore_root_logger.handlers:
        handler.flush()

    content = log_file.read_text(encoding="utf-8")
    assert "batch detail 42" in content
    assert "DEBUG" in content
    assert logging.getLogger("pyodbc").level == logging.WARNING


def test_colored_formatter_restores_record():
    formatter = ColoredFormatter("%(levelname)s %(name)s %(message)s", use_colors=True)
    record = logging.LogRecord("autodbbackup", logging.ERROR, __file__, 1, "failed", None, None)

    output = formatter.format(record)

    assert "\033[" in output
    assert record.levelname == "ERROR"
    assert record.name == "autodbbackup"


def test_plain_formatter_without_colors():
    formatter = ColoredFormatter("%(levelname)s %(message)s", use_colors=False)
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "hello", None, None)
    assert formatter.format(record) == "INFO hello"
