# tests/utils/test_logging_config.py
"""Unit tests for logging configuration utility.
=================================================

Tests for the logging setup utility in `vee.utils.logging_config`.

This module verifies that `setup_logging`:
- Creates rotating file handlers for the main log and a separate error log
  when `separate_error_log` is enabled.
- Honors the configured levels for each handler.
- Can disable console logging when `log_to_console` is set to False.
- Enables the key-event trace only when the environment variable is set.

The tests run in a temporary working directory to avoid touching real files.
"""

import logging
import logging.handlers
import os

import pytest

from vee.utils import logging_config


@pytest.fixture
def restore_logging():
    """Removes the handlers `setup_logging` attaches and restores the root level."""
    root = logging.getLogger()
    level = root.level
    before = list(root.handlers)
    yield
    for handler in list(root.handlers):
        if handler not in before:
            handler.close()
            root.removeHandler(handler)
    for handler in before:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
    for handler in logging_config.KEY_LOGGER.handlers:
        handler.close()
    logging_config.KEY_LOGGER.handlers = []


def test_setup_logging_creates_handlers(tmp_path, monkeypatch, restore_logging) -> None:
    """`setup_logging` should add rotating file handlers with proper levels.

    Scenario:
    - Console logging is disabled.
    - Separate error log is requested.
    - File handler level is INFO.

    Assertions:
    - Both a main rotating file handler and a separate error handler are
      attached to the root logger, and nothing else.
    - Handler levels match the configuration.
    """
    monkeypatch.chdir(tmp_path)

    logging_config.setup_logging(
        {
            "logging": {
                "file_level": "INFO",
                "console_level": "ERROR",
                "log_to_console": False,
                "separate_error_log": True,
            }
        }
    )

    root = logging.getLogger()
    files = {
        os.path.basename(h.baseFilename): h
        for h in root.handlers
        if isinstance(h, logging.handlers.RotatingFileHandler)
    }
    assert len(root.handlers) == 2
    assert files[".vee.log"].level == logging.INFO
    assert files["error.log"].level == logging.ERROR
    assert root.level == logging.INFO


def test_setup_logging_with_console(tmp_path, monkeypatch, restore_logging) -> None:
    monkeypatch.chdir(tmp_path)
    logging_config.setup_logging(
        {"logging": {"file": "logs/app.log", "log_to_console": True, "console_level": "ERROR"}}
    )

    root = logging.getLogger()
    streams = [h for h in root.handlers if type(h) is logging.StreamHandler]
    assert len(streams) == 1
    assert streams[0].level == logging.ERROR
    assert (tmp_path / "logs" / "app.log").exists()


def test_repeated_setup_does_not_duplicate_handlers(tmp_path, monkeypatch, restore_logging) -> None:
    monkeypatch.chdir(tmp_path)
    logging_config.setup_logging({})
    logging_config.setup_logging({})
    assert len(logging.getLogger().handlers) == 1


def test_key_trace_disabled_by_default(tmp_path, monkeypatch, restore_logging) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(logging_config.KEYTRACE_ENV_VAR, raising=False)
    logging_config.setup_logging({})

    key_logger = logging_config.KEY_LOGGER
    assert key_logger.disabled
    assert not key_logger.propagate
    assert all(isinstance(h, logging.NullHandler) for h in key_logger.handlers)
    assert not (tmp_path / "keytrace.log").exists()


def test_key_trace_enabled_by_environment(tmp_path, monkeypatch, restore_logging) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv(logging_config.KEYTRACE_ENV_VAR, "yes")
    logging_config.setup_logging({})

    key_logger = logging_config.KEY_LOGGER
    assert not key_logger.disabled
    key_logger.debug("key 'h'")
    for handler in key_logger.handlers:
        handler.flush()
    assert "key 'h'" in (tmp_path / "keytrace.log").read_text(encoding="utf-8")

    monkeypatch.setattr(logging, "shutdown", lambda: None)
    logging_config.shutdown_logging()
    assert key_logger.handlers == []
