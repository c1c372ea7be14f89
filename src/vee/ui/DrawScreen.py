# vee/ui/DrawScreen.py
"""DrawScreen.py
========================
DrawScreen turns the session state into one frame of draw instructions.

It is responsible for:
- choosing the scroll offset that keeps the cursor vertically centred,
- drawing the visible rows with comment, match and selection highlighting,
- rendering the status line and the search line,
- placing the hardware cursor at the cursor's visual column.

Rendering is pure: :meth:`DrawScreen.draw` reads the session and returns a
list of :mod:`vee.ui.Instructions`. Nothing is written to the terminal here;
:class:`vee.ui.TerminalOutput.CursesOutput` replays the list.

Rows are neither wrapped nor scrolled horizontally. A row stops before the
character whose width would make it reach the terminal width, so the last
column stays blank.
"""

import logging
import unicodedata
from typing import TYPE_CHECKING, Any, Optional

from vee.core.Cursor import Point
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
from vee.utils.utils import DEFAULT_CONFIG, char_width, string_width, truncate_to_width

if TYPE_CHECKING:
    from vee.core.Session import Session


def scroll_offset(cursor_row: int, line_count: int, rows: int) -> int:
    """Index of the first buffer row shown in a terminal of *rows* rows.

    Two rows are reserved for the status and search lines. The cursor stays
    centred except near the top and the bottom of the buffer.
    """
    h = rows - 2
    if h <= 0 or line_count <= h or cursor_row < h // 2:
        return 0
    return min(cursor_row - h // 2, line_count - h)


## ================= class DrawScreen ==============================
class DrawScreen:
    """DrawScreen Class
    =========================
    Builds frames of draw instructions for a :class:`~vee.core.Session.Session`.

    Attributes:
        MIN_ROWS (int): Below this height only an empty frame is drawn.
        MIN_COLS (int): Below this width only an empty frame is drawn.
        config (dict[str, Any]): Application configuration.
        colors (dict[str, Color]): Role name (``comment``, ``match``,
            ``selection``, ``status``, ``error``) to color.
    """

    MIN_ROWS = 3
    MIN_COLS = 1

    def __init__(self, config: Optional[dict[str, Any]] = None) -> None:
        self.config = config or {}
        self.colors = self._load_colors()

    def _load_colors(self) -> dict[str, Color]:
        defaults: dict[str, str] = DEFAULT_CONFIG["colors"]
        configured: dict[str, Any] = self.config.get("colors", {}) or {}
        colors: dict[str, Color] = {}
        for role, default_name in defaults.items():
            name = configured.get(role, default_name)
            try:
                colors[role] = Color.from_name(name)
            except ValueError:
                logging.warning(
                    f"Unknown color {name!r} for '{role}'; using default '{default_name}'."
                )
                colors[role] = Color.from_name(default_name)
        return colors

    # ---------------------- Frame --------------------
    def draw(self, session: "Session", size: tuple[int, int]) -> list[Instruction]:
        """Renders one frame.

        Args:
            session (Session): The state to draw.
            size (tuple[int, int]): Terminal ``(width, height)`` in cells.

        Returns:
            list[Instruction]: The frame, starting with ``HideCursor`` and
            ``ClearScreen`` and ending with ``Flush``.
        """
        width, rows = size
        out: list[Instruction] = [HideCursor(), ClearScreen()]
        if rows < self.MIN_ROWS or width < self.MIN_COLS:
            logging.debug(f"Terminal too small to draw ({width}x{rows}).")
            out.append(Flush())
            return out

        offset = scroll_offset(session.cursor.row, len(session.lines), rows)
        self._draw_text(out, session, offset, width, rows - 2)
        self._draw_status_line(out, session, width, rows - 2)
        self._draw_search_line(out, session, width, rows - 1)

        out.append(MoveTo(min(session.cursor_width(), width - 1), session.cursor.row - offset))
        out.append(ShowCursor())
        out.append(Flush())
        return out

    def _draw_text(
        self, out: list[Instruction], session: "Session", offset: int, width: int, height: int
    ) -> None:
        visible = session.lines[offset:offset + height]
        for screen_row, line in enumerate(visible):
            row = offset + screen_row
            annotations = line.annotations
            out.append(MoveTo(0, screen_row))
            used = 0
            # One virtual blank past the end makes a selection across the line break visible.
            for col, ch in enumerate(line.text + " "):
                glyph = self._glyph(ch)
                if glyph is None:
                    continue
                w = char_width(ch)
                if used + w >= width:
                    break
                if col in annotations.comment_indices:
                    out.append(SetForeground(self.colors["comment"]))
                if col in annotations.match_indices:
                    out.append(SetBackground(self.colors["match"]))
                if session.contains(Point(row, col)):
                    out.append(SetBackground(self.colors["selection"]))
                out.append(Print(glyph))
                out.append(ResetColor())
                used += w
            out.append(ClearLine())

    @staticmethod
    def _glyph(ch: str) -> Optional[str]:
        """What to print for *ch*: tabs become a blank, other control
        characters print nothing."""
        if ch == "\t":
            return " "
        if unicodedata.category(ch) in ("Cc", "Cf"):
            return None
        return ch

    def _draw_status_line(
        self, out: list[Instruction], session: "Session", width: int, screen_row: int
    ) -> None:
        left = f" {session.mode} {session.file_name} [{session.encoding}]"
        right = f"{session.cursor.row + 1}:{session.cursor.col + 1} "
        room = width - string_width(right)
        if room <= 0:
            text = truncate_to_width(right, width)
        else:
            left = truncate_to_width(left, room)
            text = left + " " * (room - string_width(left)) + right
        out.append(MoveTo(0, screen_row))
        out.append(SetBackground(self.colors["status"]))
        out.append(Print(text))
        out.append(ResetColor())

    def _draw_search_line(
        self, out: list[Instruction], session: "Session", width: int, screen_row: int
    ) -> None:
        out.append(MoveTo(0, screen_row))
        state = session.search_state
        if state is not None:
            if state.ok:
                out.append(Print(truncate_to_width(f"/{state.source}", width)))
            else:
                out.append(SetForeground(self.colors["error"]))
                out.append(Print(truncate_to_width(f"! {state.error}", width)))
                out.append(ResetColor())
        out.append(ClearLine())
