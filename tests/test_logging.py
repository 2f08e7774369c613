"""Tests for structured logging functionality."""

from __future__ import annotations

import json
import logging
import sys

from habit_tracker.config import BaseConfig
from habit_tracker.logging_config import JSONFormatter, get_logger, setup_logging


def _record(level=logging.INFO, msg="Test message", exc_info=None) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test.logger",
        level=level,
        pathname="test.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )
    record.module = "test_module"
    record.funcName = "test_function"
    return record


def test_json_formatter():
    """JSONFormatter emits the standard fields."""
    log_data = json.loads(JSONFormatter().format(_record()))

    assert log_data["level"] == "INFO"
    assert log_data["logger"] == "test.logger"
    assert log_data["message"] == "Test message"
    assert log_data["module"] == "test_module"
    assert log_data["function"] == "test_function"
    assert log_data["line"] == 42
    assert "timestamp" in log_data
    assert "extra" not in log_data


def test_json_formatter_with_exception():
    """JSONFormatter serializes exception details."""
    try:
        raise ValueError("Test error")
    except ValueError:
        exc_info = sys.exc_info()

    log_data = json.loads(JSONFormatter().format(_record(logging.ERROR, "Error occurred", exc_info)))

    assert log_data["exception"]["type"] == "ValueError"
    assert "Test error" in log_data["exception"]["message"]
    assert log_data["exception"]["traceback"] is not None


def test_json_formatter_includes_extra_fields():
    record = _record()
    record.habit = "water"
    record.amount = 3

    log_data = json.loads(JSONFormatter().format(record))

    assert log_data["extra"] == {"habit": "water", "amount": 3}


def test_setup_logging(tmp_path):
    """Logging setup creates the JSON log file next to a console handler."""
    config = BaseConfig()
    config.LOG_DIR = tmp_path / "logs"

    logger = setup_logging(config)

    assert logger.name == "habit_tracker"
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 2  # Console + File

    log_file = tmp_path / "logs" / "habit_tracker.log"
    assert log_file.exists()

    get_logger("store").info("Saved store", extra={"habits": 2})
    get_logger("store").debug("Not written outside dev mode")
    for handler in logger.handlers:
        handler.flush()

    lines = [line for line in log_file.read_text(encoding="utf-8").splitlines() if line.strip()]
    assert len(lines) == 1
    entry = json.loads(lines[0])
    assert entry["logger"] == "habit_tracker.store"
    assert entry["message"] == "Saved store"
    assert entry["extra"] == {"habits": 2}


def test_setup_logging_dev_mode_is_verbose(tmp_path):
    config = BaseConfig()
    config.LOG_DIR = tmp_path / "logs"
    config.DEV_MODE = True

    logger = setup_logging(config)

    assert logger.level == logging.DEBUG
    console = [h for h in logger.handlers if not isinstance(h, logging.FileHandler)]
    assert console[0].level == logging.DEBUG


def test_setup_logging_is_idempotent(tmp_path):
    config = BaseConfig()
    config.LOG_DIR = tmp_path / "logs"

    setup_logging(config)
    logger = setup_logging(config)

    assert len(logger.handlers) == 2


def test_unwritable_log_dir_falls_back_to_console(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    config = BaseConfig()
    config.LOG_DIR = blocker / "logs"

    logger = setup_logging(config)

    assert len(logger.handlers) == 1


def test_get_logger_namespaces_under_root():
    assert get_logger("cli").name == "habit_tracker.cli"
