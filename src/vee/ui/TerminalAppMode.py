# vee/ui/TerminalAppMode.py
from __future__ import annotations

import curses
import logging
import sys
from typing import Optional

# DECSCUSR: steady bar cursor, and back to the terminal default.
BAR_CURSOR = "\x1b[6 q"
DEFAULT_CURSOR = "\x1b[0 q"


class TerminalAppMode:
    """
    Put the terminal into the state the viewer runs in:

    - Alternate screen buffer (smcup/rmcup) so the shell prompt is hidden.
    - Application cursor keys (smkx/rmkx).
    - raw + noecho (cbreak fallback), keypad(True), a short ESC delay.
    - Mouse events reported, so they can be consumed and ignored.
    - A bar-shaped hardware cursor.

    Always pair `enter(stdscr)` with `exit()` (try/finally).
    """

    def __init__(self) -> None:
        self._entered: bool = False
        self._stdscr: Optional[curses.window] = None

    def enter(self, stdscr: curses.window) -> None:
        self._stdscr = stdscr

        try:
            curses.setupterm()
        except curses.error as e:
            logging.debug("setupterm() failed or not required: %r", e)

        self._tputs("smcup")
        self._tputs("smkx")

        try:
            curses.raw()
        except curses.error:
            curses.cbreak()
        curses.noecho()
        stdscr.keypad(True)

        try:
            curses.set_escdelay(35)
        except curses.error as e:
            logging.debug("set_escdelay skipped: %r", e)

        try:
            curses.use_default_colors()
        except curses.error as e:
            logging.debug("use_default_colors skipped: %r", e)

        try:
            curses.mousemask(curses.ALL_MOUSE_EVENTS)
        except curses.error as e:
            logging.debug("mousemask skipped: %r", e)

        self._write_raw(BAR_CURSOR)

        stdscr.scrollok(False)
        stdscr.leaveok(False)
        stdscr.clearok(True)
        stdscr.erase()
        stdscr.refresh()

        self._entered = True
        logging.debug("TerminalAppMode: entered (alternate screen + app cursor keys).")

    def exit(self) -> None:
        if not self._entered:
            return

        try:
            if self._stdscr is not None:
                self._stdscr.keypad(False)
            curses.noraw()
            curses.echo()
        except curses.error as e:
            logging.debug("TerminalAppMode: restoring input modes failed: %r", e)

        self._write_raw(DEFAULT_CURSOR)
        self._tputs("rmkx")
        self._tputs("rmcup")

        self._entered = False
        logging.debug("TerminalAppMode: exited (restored terminal modes).")

    # ── helpers ───────────────────────────────────────────────────────────────

    def _tputs(self, capname: str) -> None:
        try:
            s = curses.tigetstr(capname)
            if s:
                curses.putp(s)
        except curses.error as e:
            # Non-fatal where the capability is missing.
            logging.debug("tputs(%s) skipped: %r", capname, e)

    @staticmethod
    def _write_raw(sequence: str) -> None:
        try:
            sys.stdout.write(sequence)
            sys.stdout.flush()
        except OSError as e:
            logging.debug("Writing %r to the terminal failed: %r", sequence, e)
