#!/usr/bin/env python3
# /vee/main.py
"""
vee Main Entry Point
====================

This script is the primary entry point for launching the vee viewer. It performs:
1) Path Setup: ensures the vee package is importable from a source checkout.
2) Configuration & Logging: loads config and initializes logging first.
3) Argument Check: exactly one file path is required.
4) File Loading: reads the file into a session before the terminal is touched.
5) Curses Wrapper: safely initializes/tears down curses to avoid terminal corruption.

Exit codes: 0 after a normal quit, 2 when the file argument is missing,
1 when the file cannot be read or anything fails during startup or the run.
"""

from __future__ import annotations

import curses
import locale
import logging
import os
import signal
import sys
from typing import Any, Optional

# --- Step 1: Set up the Python Path ---
project_root = os.path.dirname(os.path.abspath(__file__))
src_dir = os.path.join(project_root, "src")
if os.path.isdir(src_dir) and src_dir not in sys.path:
    sys.path.insert(0, src_dir)

from vee.core.Session import Session  # noqa: E402
from vee.core.Vee import run_curses  # noqa: E402
from vee.exceptions import FileLoadError  # noqa: E402
from vee.utils.logging_config import setup_logging, shutdown_logging  # noqa: E402
from vee.utils.utils import load_config  # noqa: E402

logger = logging.getLogger("vee")

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2

USAGE = "usage: vee FILE"


def main_app_runner(stdscr: curses.window, session: Session, config: dict[str, Any]) -> None:
    """
    Target for `curses.wrapper`. Ignores terminal suspension, as full-screen
    TUIs usually do, and runs the viewer until the user quits.
    """
    if hasattr(signal, "SIGTSTP"):
        try:
            signal.signal(signal.SIGTSTP, signal.SIG_IGN)
        except (OSError, ValueError) as e:
            logger.debug("Could not ignore SIGTSTP: %s", e)

    run_curses(stdscr, session, config)


def start(argv: Optional[list[str]] = None) -> int:
    """
    Loads configuration, sets up logging, loads the file and runs the
    curses application. Returns the process exit code.
    """
    argv = sys.argv if argv is None else argv

    # --- Step 2: Configuration and logging ---
    try:
        config: dict[str, Any] = load_config()
        setup_logging(config)
    except Exception as e:
        print(f"FATAL: Could not initialize configuration or logging system: {e}", file=sys.stderr)
        return EXIT_FAILURE

    try:
        logger.info("vee starting up...")

        # --- Step 3: Argument check ---
        if len(argv) < 2 or not argv[1].strip():
            logger.error("No file argument given.")
            print(USAGE, file=sys.stderr)
            return EXIT_USAGE

        # --- Step 4: File loading ---
        try:
            session = Session.from_file(argv[1], config)
        except FileLoadError as e:
            print(f"vee: {e}", file=sys.stderr)
            return EXIT_FAILURE

        # Locale is important for proper character width/encoding behavior in curses.
        try:
            locale.setlocale(locale.LC_ALL, "")
        except locale.Error:
            logger.warning("Could not set system locale. Character rendering may be affected.")

        # --- Step 5: Curses application ---
        try:
            curses.wrapper(main_app_runner, session, config)
        except Exception as e:
            logger.critical("Unhandled exception at the top level.", exc_info=True)
            print(f"vee: {e}", file=sys.stderr)
            return EXIT_FAILURE

        logger.info("vee shut down gracefully.")
        return EXIT_OK
    finally:
        shutdown_logging()


if __name__ == "__main__":
    sys.exit(start())
