# vee/utils/logging_config.py
"""vee.utils.logging_config
==========================

Logging configuration for the vee viewer. It defines the global logger objects
and the two lifecycle functions of the logging side channel:
`setup_logging`, called once at startup, and `shutdown_logging`, called once
at exit.

Features:
    - Rotating file logging for general application events (`.vee.log` by default).
    - Optional console logging to stderr with configurable log level.
    - Optional separate error log file (error.log) for ERROR and CRITICAL events.
    - Optional key event tracing (keytrace.log) enabled via the VEE_KEYTRACE environment variable.
    - Fallback to the system temp directory when the log directory cannot be created.
    - Safe reconfiguration: clears existing handlers to avoid duplicate logs when called multiple times.

A curses application owns the terminal while it runs, so console logging is
disabled by default; enable it only for post-mortem debugging.

Usage:
    >>> from vee.utils import logging_config
    >>> logging_config.setup_logging({"logging": {"file_level": "INFO"}})
    >>> ...
    >>> logging_config.shutdown_logging()

Globals:
    logger: Main application logger ("vee").
    KEY_LOGGER: Logger for raw key-press trace events ("vee.keyevents").
"""

import logging
import logging.handlers
import os
import sys
import tempfile
from typing import Any, Optional


# ======================== Global loggers ========================
# Created at import-time, unconfigured until ``setup_logging()`` attaches handlers.
logger = logging.getLogger("vee")  # main application logger
KEY_LOGGER = logging.getLogger("vee.keyevents")  # raw key-press trace

KEYTRACE_ENV_VAR = "VEE_KEYTRACE"


def _ensure_log_dir(filename: str) -> str:
    """Creates the directory of *filename*; returns a temp-dir fallback on failure."""
    log_dir = os.path.dirname(filename)
    if log_dir and not os.path.exists(log_dir):
        try:
            os.makedirs(log_dir)
        except OSError as e_mkdir:
            print(f"Error creating log directory '{log_dir}': {e_mkdir}", file=sys.stderr)
            filename = os.path.join(tempfile.gettempdir(), os.path.basename(filename) or "vee.log")
            print(f"Logging to temporary file: '{filename}'", file=sys.stderr)
    return filename


def setup_logging(config: Optional[dict[str, Any]] = None) -> None:
    """Configures application-wide logging handlers and log levels.

    Up to four independent handlers are set up:

    1. File handler: rotating log file capturing everything from
       ``file_level`` (default DEBUG) upward.
    2. Console handler: optional ``stderr`` output whose threshold is
       ``console_level`` (default WARNING).
    3. Error-file handler: optional rotating error.log that stores
       only ERROR and CRITICAL events.
    4. Key-event handler: optional rotating keytrace.log enabled
       when the environment variable ``VEE_KEYTRACE`` is set to
       ``1/true/yes``; attached to the ``vee.keyevents`` logger.

    Existing handlers on the root logger are cleared so that repeated
    calls (e.g. in unit tests) do not duplicate records.

    Args:
        config (dict | None): Application configuration. Only the
            ``["logging"]`` section is consulted; recognised keys are
            ``file``, ``file_level``, ``console_level``, ``log_to_console``
            and ``separate_error_log``.

    Notes:
        The function never raises; I/O or permission errors are reported
        to stderr and logging continues with a best-effort configuration.
    """
    if config is None:
        config = {}
    logging_config = config.get("logging", {})

    log_filename = _ensure_log_dir(logging_config.get("file", ".vee.log"))
    log_file_level_str = str(logging_config.get("file_level", "DEBUG")).upper()
    log_file_level = getattr(logging, log_file_level_str, logging.DEBUG)

    file_formatter = logging.Formatter(
        "%(asctime)s - %(levelname)-8s - %(name)-15s - %(message)s (%(filename)s:%(lineno)d)"
    )
    file_handler = None
    try:
        file_handler = logging.handlers.RotatingFileHandler(
            log_filename, maxBytes=2 * 1024 * 1024, backupCount=5, encoding="utf-8"
        )
        file_handler.setFormatter(file_formatter)
        file_handler.setLevel(log_file_level)
    except OSError as e_fh:
        print(
            f"Error setting up file logger for '{log_filename}': {e_fh}. File logging may be impaired.",
            file=sys.stderr,
        )

    # Console Handler
    console_handler = None
    if logging_config.get("log_to_console", False):
        console_level_str = str(logging_config.get("console_level", "WARNING")).upper()
        console_log_level = getattr(logging, console_level_str, logging.WARNING)

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(
            logging.Formatter("%(levelname)-8s - %(name)-12s - %(message)s")
        )
        console_handler.setLevel(console_log_level)

    # Optional Separate Error Log File
    error_file_handler = None
    if logging_config.get("separate_error_log", False):
        error_log_filename = _ensure_log_dir("error.log")
        try:
            error_file_handler = logging.handlers.RotatingFileHandler(
                error_log_filename,
                maxBytes=1 * 1024 * 1024,
                backupCount=3,
                encoding="utf-8",
            )
            error_file_handler.setFormatter(file_formatter)
            error_file_handler.setLevel(logging.ERROR)
        except OSError as e_efh:
            print(
                f"Error setting up separate error log '{error_log_filename}': {e_efh}.",
                file=sys.stderr,
            )

    # Configure the root logger
    root_logger = logging.getLogger()
    for handler in root_logger.handlers:
        handler.close()
    root_logger.handlers = []  # Clear existing root handlers to avoid duplicates

    for handler in (file_handler, console_handler, error_file_handler):
        if handler:
            root_logger.addHandler(handler)

    root_logger.setLevel(log_file_level)

    # Key Event Logger
    KEY_LOGGER.propagate = False
    KEY_LOGGER.setLevel(logging.DEBUG)
    for handler in KEY_LOGGER.handlers:
        handler.close()
    KEY_LOGGER.handlers = []

    if os.environ.get(KEYTRACE_ENV_VAR, "").lower() in {"1", "true", "yes"}:
        try:
            key_trace_handler = logging.handlers.RotatingFileHandler(
                "keytrace.log",
                maxBytes=1 * 1024 * 1024,
                backupCount=3,
                encoding="utf-8",
            )
            key_trace_handler.setFormatter(logging.Formatter("%(asctime)s - %(message)s"))
            KEY_LOGGER.addHandler(key_trace_handler)
            KEY_LOGGER.disabled = False
            logging.info("Key event tracing enabled, logging to 'keytrace.log'.")
        except OSError as e_keytrace:
            logging.error(f"Failed to set up key trace logging: {e_keytrace}", exc_info=True)
            KEY_LOGGER.disabled = True
    else:
        KEY_LOGGER.addHandler(logging.NullHandler())
        KEY_LOGGER.disabled = True
        logging.debug("Key event tracing is disabled.")

    logging.info(
        "Logging setup complete. Root logger level: %s.",
        logging.getLevelName(root_logger.level),
    )
    if file_handler:
        logging.info(
            f"File logging to '{log_filename}' at level: {logging.getLevelName(file_handler.level)}."
        )


def shutdown_logging() -> None:
    """Flushes and closes every handler attached by `setup_logging`."""
    logging.info("Shutting down logging.")
    for handler in KEY_LOGGER.handlers:
        handler.close()
    KEY_LOGGER.handlers = []
    logging.shutdown()
