# vee/ui/TerminalOutput.py
"""TerminalOutput.py
========================
CursesOutput replays draw instructions on a curses window.

Colors are mapped onto the terminal's palette: with 16 or more colors the
bright variants are used for the light names, with 8 colors light and dark
names share a slot. Color pairs are allocated lazily, one per
``(foreground, background)`` combination actually drawn.

Curses raises on some legitimate writes (the bottom-right cell, a move past
the edge after a resize). Those errors are logged at debug level and the
frame continues.
"""

import curses
import logging
from typing import Iterable, Optional

from vee.ui.Instructions import (
    ClearLine,
    ClearScreen,
    Color,
    Flush,
    HideCursor,
    Instruction,
    MoveTo,
    Print,
    ResetColor,
    SetBackground,
    SetForeground,
    ShowCursor,
)

# Color -> (8-color index, offset added when the terminal has 16+ colors)
PALETTE: dict[Color, tuple[int, int]] = {
    Color.BLACK: (curses.COLOR_BLACK, 0),
    Color.DARK_GREY: (curses.COLOR_BLACK, 8),
    Color.RED: (curses.COLOR_RED, 8),
    Color.DARK_RED: (curses.COLOR_RED, 0),
    Color.GREEN: (curses.COLOR_GREEN, 8),
    Color.DARK_GREEN: (curses.COLOR_GREEN, 0),
    Color.YELLOW: (curses.COLOR_YELLOW, 8),
    Color.DARK_YELLOW: (curses.COLOR_YELLOW, 0),
    Color.BLUE: (curses.COLOR_BLUE, 8),
    Color.DARK_BLUE: (curses.COLOR_BLUE, 0),
    Color.MAGENTA: (curses.COLOR_MAGENTA, 8),
    Color.DARK_MAGENTA: (curses.COLOR_MAGENTA, 0),
    Color.CYAN: (curses.COLOR_CYAN, 8),
    Color.DARK_CYAN: (curses.COLOR_CYAN, 0),
    Color.WHITE: (curses.COLOR_WHITE, 8),
    Color.GREY: (curses.COLOR_WHITE, 0),
}


class CursesOutput:
    """Terminal-output collaborator backed by a curses window.

    Attributes:
        stdscr (curses.window): The window drawn on.
        use_color (bool): Whether the terminal supports colors.
        fg (Color | None): Active foreground, ``None`` for the default.
        bg (Color | None): Active background, ``None`` for the default.
    """

    def __init__(self, stdscr: "curses.window") -> None:
        self.stdscr = stdscr
        self.fg: Optional[Color] = None
        self.bg: Optional[Color] = None
        self._pairs: dict[tuple[int, int], int] = {}
        try:
            self.use_color = curses.has_colors()
        except curses.error:
            self.use_color = False
        logging.debug(f"CursesOutput initialized (colors: {self.use_color}).")

    def replay(self, instructions: Iterable[Instruction]) -> None:
        for instruction in instructions:
            self.apply(instruction)

    def apply(self, instruction: Instruction) -> None:
        """Executes a single instruction."""
        try:
            if isinstance(instruction, MoveTo):
                self.stdscr.move(instruction.row, instruction.col)
            elif isinstance(instruction, Print):
                self.stdscr.addstr(instruction.text, self._attr())
            elif isinstance(instruction, SetForeground):
                self.fg = instruction.color
            elif isinstance(instruction, SetBackground):
                self.bg = instruction.color
            elif isinstance(instruction, ResetColor):
                self.fg = self.bg = None
            elif isinstance(instruction, ClearLine):
                self.stdscr.clrtoeol()
            elif isinstance(instruction, ClearScreen):
                self.stdscr.erase()
            elif isinstance(instruction, HideCursor):
                curses.curs_set(0)
            elif isinstance(instruction, ShowCursor):
                curses.curs_set(1)
            elif isinstance(instruction, Flush):
                self.stdscr.refresh()
            else:
                logging.warning(f"CursesOutput: unknown instruction {instruction!r}")
        except curses.error as e:
            logging.debug(f"CursesOutput: curses error on {instruction!r}: {e}")

    def _color_index(self, color: Optional[Color]) -> int:
        if color is None:
            return -1
        base, bright = PALETTE[color]
        if bright and curses.COLORS >= 16:
            return base + bright
        return base

    def _attr(self) -> int:
        """Attribute for the active colors, allocating a pair on first use."""
        if self.fg is None and self.bg is None:
            return curses.A_NORMAL
        if not self.use_color:
            return curses.A_REVERSE if self.bg is not None else curses.A_BOLD

        key = (self._color_index(self.fg), self._color_index(self.bg))
        pair = self._pairs.get(key)
        if pair is None:
            pair = len(self._pairs) + 1
            if pair >= curses.COLOR_PAIRS:
                logging.debug("CursesOutput: out of color pairs.")
                return curses.A_NORMAL
            try:
                curses.init_pair(pair, *key)
            except curses.error as e:
                logging.debug(f"CursesOutput: init_pair{key} failed: {e}")
                return curses.A_REVERSE if self.bg is not None else curses.A_NORMAL
            self._pairs[key] = pair
        return curses.color_pair(pair)
