# vee/core/Vee.py
"""Vee Module
==============
The application controller: owns the curses window and runs the event loop.

Each iteration reads one input event, hands it to the
:class:`~vee.core.Session.Session`, renders a frame with
:class:`~vee.ui.DrawScreen.DrawScreen` and replays it through
:class:`~vee.ui.TerminalOutput.CursesOutput`. The frame is flushed before the
next read. Resize events only update the terminal size used for rendering.
"""

import curses
from typing import Any, Optional

from vee.core.Events import KeyEvent, ResizeEvent
from vee.core.Session import Session
from vee.ui.DrawScreen import DrawScreen
from vee.ui.KeyBinder import KeyBinder
from vee.ui.TerminalAppMode import TerminalAppMode
from vee.ui.TerminalOutput import CursesOutput
from vee.utils.logging_config import KEY_LOGGER, logger


class Vee:
    """Class Vee
    ===============
    Ties a session to a curses window.

    Attributes:
        stdscr (curses.window): The main window.
        session (Session): The state being viewed.
        config (dict[str, Any]): Application configuration.
        keybinder (KeyBinder): Decodes terminal input.
        drawer (DrawScreen): Builds frames.
        output (CursesOutput): Replays frames on ``stdscr``.
        size (tuple[int, int]): Terminal ``(width, height)``.
        running (bool): Cleared when the session asks to stop.
    """

    def __init__(
        self, stdscr: "curses.window", session: Session, config: Optional[dict[str, Any]] = None
    ) -> None:
        self.stdscr = stdscr
        self.session = session
        self.config = config or {}
        self.keybinder = KeyBinder(stdscr)
        self.drawer = DrawScreen(self.config)
        self.output = CursesOutput(stdscr)
        height, width = stdscr.getmaxyx()
        self.size = (width, height)
        self.running = False

    def render(self) -> None:
        self.output.replay(self.drawer.draw(self.session, self.size))

    def handle_event(self, event) -> bool:
        """Applies one event and redraws. Returns ``False`` to stop the loop."""
        if isinstance(event, KeyEvent):
            KEY_LOGGER.debug(f"key={event.key!r} mode={self.session.mode}")
        elif isinstance(event, ResizeEvent):
            self.size = (event.width, event.height)
            logger.debug(f"Terminal resized to {event.width}x{event.height}")

        if not self.session.handle(event):
            return False
        self.render()
        return True

    def run(self) -> None:
        """The main event loop. Returns when the session asks to stop."""
        logger.info("Main loop started.")
        self.running = True
        self.render()
        while self.running:
            event = self.keybinder.get_event()
            if event is None:
                continue
            self.running = self.handle_event(event)
        logger.info("Main loop finished.")


def run_curses(stdscr: "curses.window", session: Session, config: dict[str, Any]) -> None:
    """Entry point for ``curses.wrapper``: sets the terminal up, runs the loop,
    and restores the terminal even when the loop raises."""
    app_mode = TerminalAppMode()
    app_mode.enter(stdscr)
    try:
        Vee(stdscr, session, config).run()
    finally:
        app_mode.exit()
