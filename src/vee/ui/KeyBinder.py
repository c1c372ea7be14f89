# vee/ui/KeyBinder.py
"""KeyBinder.py
==================
Description:
-----------------------
The KeyBinder class reads raw terminal input through curses and turns it into
the input events the session understands: :class:`~vee.core.Events.KeyEvent`
with a logical key name, :class:`~vee.core.Events.ResizeEvent` and
:class:`~vee.core.Events.PointerEvent`.

Key Features:
- Unicode input through ``get_wch`` (printable characters are passed through as-is).
- Curses key codes (arrows, function keys, Home/End...) mapped to logical names.
- Robust ESC handling: a lone ESC, or a CSI/SS3 escape sequence sent by terminals
  that bypass keypad translation. Unknown sequences and Alt chords are dropped.

Which action a logical key triggers is decided by :class:`vee.core.Keymap.Keymap`,
not here.
"""

import curses
import logging
import re
from typing import Optional

from vee.core.Events import InputEvent, KeyEvent, PointerEvent, ResizeEvent

ESC = "\x1b"


# ==================== KeyBinder Class ====================
class KeyBinder:
    """Class KeyBinder
    ====================
    Decodes curses input into input events.

    Attributes:
        stdscr (curses.window): The window keys are read from.
        curses_key_names (dict[int, str]): Curses key code to logical key name.
    """
    # Escape sequences without the leading ESC.
    ESCAPE_SEQUENCE_MAP: dict[str, str] = {
        # Arrows (CSI and SS3)
        "[A": "up", "[B": "down", "[C": "right", "[D": "left",
        "OA": "up", "OB": "down", "OC": "right", "OD": "left",

        # Home/End (CSI/SS3 and tilde variants)
        "[H": "home", "[F": "end", "OH": "home", "OF": "end",
        "[1~": "home", "[4~": "end",

        # Insert/Delete/PageUp/PageDown (~ style)
        "[2~": "insert", "[3~": "delete", "[5~": "pageup", "[6~": "pagedown",

        # Function keys (SS3 and tilde variants)
        "OP": "f1", "OQ": "f2", "OR": "f3", "OS": "f4",
        "[11~": "f1", "[12~": "f2", "[13~": "f3", "[14~": "f4",
        "[15~": "f5", "[17~": "f6", "[18~": "f7", "[19~": "f8",
        "[20~": "f9", "[21~": "f10", "[23~": "f11", "[24~": "f12",
    }

    CONTROL_KEY_NAMES: dict[str, str] = {
        "\n": "enter",
        "\r": "enter",
        "\t": "tab",
        "\x7f": "backspace",
        "\x08": "backspace",
    }

    def __init__(self, stdscr: "curses.window") -> None:
        self.stdscr = stdscr
        self.curses_key_names = self._setup_curses_key_names()
        logging.debug("KeyBinder initialized.")

    @staticmethod
    def _setup_curses_key_names() -> dict[int, str]:
        names: dict[int, str] = {
            curses.KEY_LEFT: "left",
            curses.KEY_RIGHT: "right",
            curses.KEY_UP: "up",
            curses.KEY_DOWN: "down",
            curses.KEY_HOME: "home",
            getattr(curses, "KEY_END", curses.KEY_LL): "end",
            curses.KEY_PPAGE: "pageup",
            curses.KEY_NPAGE: "pagedown",
            curses.KEY_DC: "delete",
            curses.KEY_IC: "insert",
            curses.KEY_BACKSPACE: "backspace",
            curses.KEY_ENTER: "enter",
        }
        names.update({getattr(curses, f"KEY_F{i}", 264 + i): f"f{i}" for i in range(1, 13)})
        return names

    def get_event(self) -> Optional[InputEvent]:
        """Blocks for one input and decodes it.

        Returns:
            InputEvent | None: The decoded event, or ``None`` when the input
            has no meaning for the viewer (unknown codes, control characters,
            read errors).
        """
        try:
            key = self.stdscr.get_wch()
        except curses.error:
            return None

        if isinstance(key, int):
            return self._decode_code(key)
        if key == ESC:
            return self._read_escape()
        return self._decode_char(key)

    def _decode_code(self, code: int) -> Optional[InputEvent]:
        if code == curses.KEY_RESIZE:
            height, width = self.stdscr.getmaxyx()
            logging.debug(f"KeyBinder: resize to {width}x{height}")
            return ResizeEvent(width, height)
        if code == curses.KEY_MOUSE:
            try:
                curses.getmouse()
            except curses.error as e:
                logging.debug(f"KeyBinder: getmouse failed: {e}")
            return PointerEvent()
        name = self.curses_key_names.get(code)
        if name is None:
            logging.debug(f"KeyBinder: unmapped key code {code}")
            return None
        return KeyEvent(name)

    def _decode_char(self, char: str) -> Optional[InputEvent]:
        if char in self.CONTROL_KEY_NAMES:
            return KeyEvent(self.CONTROL_KEY_NAMES[char])
        if char.isprintable():
            return KeyEvent(char)
        logging.debug(f"KeyBinder: ignoring control character {char!r}")
        return None

    def _read_escape(self) -> Optional[InputEvent]:
        """After an ESC: a lone ESC, or an escape sequence still in the buffer."""
        seq = ""
        self.stdscr.nodelay(True)
        try:
            while True:
                try:
                    nx = self.stdscr.get_wch()
                except curses.error:
                    break
                seq += nx if isinstance(nx, str) else f"<{nx}>"
        finally:
            self.stdscr.nodelay(False)

        if not seq:
            logging.debug("KeyBinder: standalone ESC")
            return KeyEvent("esc")

        mapped = self.ESCAPE_SEQUENCE_MAP.get(seq)
        if not mapped:
            cleaned = "".join(re.findall(r"[\[O0-9;~A-Za-z]", seq))
            mapped = self.ESCAPE_SEQUENCE_MAP.get(cleaned)
        if mapped:
            logging.debug(f"KeyBinder: ESC {seq!r} -> {mapped!r}")
            return KeyEvent(mapped)

        logging.warning(f"KeyBinder: unknown escape sequence: ESC + {seq!r}")
        return None
