# vee/core/Session.py
"""Session Module
==================
The :class:`Session` owns everything the viewer knows while it runs: the rows
of the file, the cursor, the optional selection anchor, the mode and the
outcome of the last search. Every key-driven operation is a method here.

Operations are total. A motion that finds no target leaves the cursor where
it is. Every motion except vertical motion refreshes the cursor's target
width from its new column.

Intended Usage:
---------------
    >>> session = Session(["foo(bar)"], file_name="demo.txt")
    >>> session.handle(KeyEvent("e"))
    True
    >>> session.selection()
    (Cursor(row=0, col=4, target_width=4), Cursor(row=0, col=7, target_width=7))
"""

from typing import Any, Optional, Sequence

from vee.core import Motion
from vee.core.Cursor import Cursor, Point, Wordish
from vee.core.Events import InputEvent, KeyEvent
from vee.core.Keymap import Keymap
from vee.core.Line import Line
from vee.core.Modes import Mode, ModeMachine
from vee.core.Search import SearchState, annotate_all, compile_literal, next_match, prev_match
from vee.utils.logging_config import logger
from vee.utils.utils import read_text_lines


class Session:
    """State and operations of one viewing session.

    Attributes:
        lines (list[Line]): The rows, with their highlight annotations.
        rows (list[str]): The plain text of each row, used by the motions.
        file_name (str): Shown on the status line.
        encoding (str): Encoding the file was decoded with.
        cursor (Cursor): The live position.
        anchor (Cursor | None): The fixed end of the selection, if any.
        mode (Mode): The active mode.
        search_state (SearchState | None): Outcome of the last search.
        big_step (int): Distance of the H/J/K/L moves.
    """

    def __init__(
        self,
        rows: Sequence[str],
        file_name: str = "",
        encoding: str = "utf-8",
        big_step: int = 5,
        keymap: Optional[Keymap] = None,
    ) -> None:
        self.rows: list[str] = list(rows) or [""]
        self.lines: list[Line] = [Line(text) for text in self.rows]
        self.file_name = file_name
        self.encoding = encoding
        self.cursor = Cursor()
        self.anchor: Optional[Cursor] = None
        self.mode = Mode.NORMAL
        self.search_state: Optional[SearchState] = None
        self.big_step = max(1, int(big_step))
        self.keymap = keymap or Keymap()
        self.modes = ModeMachine(self, self.keymap)

    @classmethod
    def from_file(cls, path: str, config: Optional[dict[str, Any]] = None) -> "Session":
        """Loads *path* into a new session.

        Raises:
            FileLoadError: If the file cannot be read.
        """
        config = config or {}
        rows, encoding = read_text_lines(path)
        return cls(
            rows,
            file_name=path,
            encoding=encoding,
            big_step=config.get("motion", {}).get("big_step", 5),
            keymap=Keymap(config),
        )

    # --- Event entry point ---

    def handle(self, event: InputEvent) -> bool:
        """Applies one input event. Returns ``False`` when the loop should stop.

        Only key events reach the mode machine; resize and pointer events
        leave the session untouched.
        """
        if isinstance(event, KeyEvent):
            return self.modes.dispatch(event.key)
        logger.debug(f"Session ignores non-key event: {event!r}")
        return True

    # --- Queries ---

    def cursor_width(self) -> int:
        """Display width of the cursor's row up to the cursor."""
        return Motion.width_before(self.rows[self.cursor.row], self.cursor.col)

    def selection(self) -> Optional[tuple[Cursor, Cursor]]:
        """The ``(start, end)`` pair of anchor and cursor, ordered."""
        if self.anchor is None:
            return None
        if self.anchor < self.cursor:
            return self.anchor, self.cursor
        return self.cursor, self.anchor

    def contains(self, point: Point) -> bool:
        """Whether *point* lies in the half-open selection range."""
        selection = self.selection()
        if selection is None:
            return False
        start, end = selection
        return start.point <= point < end.point

    # --- Mode transitions ---

    def settle_mode(self) -> None:
        """Puts the session in SELECT when an anchor is held, else NORMAL."""
        self.mode = Mode.SELECT if self.anchor is not None else Mode.NORMAL

    def set_anchor(self) -> None:
        self.anchor = self.cursor

    def cancel(self) -> None:
        """Drops the selection; without one, drops the search."""
        if self.anchor is not None:
            self.anchor = None
        else:
            self.cancel_search()

    def begin_edit(self) -> None:
        self.anchor = None
        self.mode = Mode.INSERT

    def end_edit(self) -> None:
        self.mode = Mode.NORMAL

    def enter_system(self) -> None:
        self.mode = Mode.SYSTEM

    def leave_system(self) -> None:
        self.settle_mode()

    # --- Cursor primitives ---

    def _move_cursor(self, point: Point) -> None:
        width = Motion.width_before(self.rows[point.row], point.col)
        self.cursor = self.cursor.moved_to(point, width)

    # --- Character and vertical motion ---

    def move_left(self, distance: int = 1) -> None:
        point = self.cursor.point
        for _ in range(distance):
            point = Motion.left_of(self.rows, point) or point
        self._move_cursor(point)

    def move_right(self, distance: int = 1) -> None:
        point = self.cursor.point
        for _ in range(distance):
            point = Motion.right_of(self.rows, point) or point
        self._move_cursor(point)

    def _move_vertically(self, row: int) -> None:
        row = max(0, min(row, len(self.rows) - 1))
        col = Motion.column_for_width(self.rows[row], self.cursor.target_width)
        self.cursor = Cursor(row, col, self.cursor.target_width)

    def move_up(self, distance: int = 1) -> None:
        self._move_vertically(self.cursor.row - distance)

    def move_down(self, distance: int = 1) -> None:
        self._move_vertically(self.cursor.row + distance)

    # --- Words ---

    def move_left_word(self, wordish: Wordish = Wordish.ALNUM_UNDERSCORE) -> None:
        left = Motion.left_of(self.rows, self.cursor.point)
        if left is None:
            return
        point = Motion.left_word(self.rows, wordish, left)
        if point is not None:
            self._move_cursor(point)

    def move_right_word(self, wordish: Wordish = Wordish.ALNUM_UNDERSCORE) -> None:
        right = Motion.right_of(self.rows, self.cursor.point)
        if right is None:
            return
        point = Motion.right_word(self.rows, wordish, right)
        if point is not None:
            self._move_cursor(point)

    # --- Lines, paragraphs and file ---

    def move_start_of_line(self) -> None:
        self._move_cursor(Motion.start_of_line(self.rows, self.cursor.row))

    def move_end_of_line(self) -> None:
        self._move_cursor(Motion.end_of_line(self.rows, self.cursor.row))

    def move_start_of_para(self) -> None:
        """Moves to the start of the paragraph above.

        Steps up one row before scanning, unless the cursor's row itself
        opens a paragraph, in which case it lands on that row's start.
        """
        row = self.cursor.row
        if not Motion.is_para_start(self.rows, row):
            row = max(0, row - 1)
        self._move_cursor(Motion.start_of_para(self.rows, Point(row, 0)))

    def move_end_of_para(self) -> None:
        """Steps down one row, then moves to the end of the paragraph there."""
        row = min(self.cursor.row + 1, len(self.rows) - 1)
        self._move_cursor(Motion.end_of_para(self.rows, Point(row, 0)))

    def move_start_of_file(self) -> None:
        self._move_cursor(Motion.start_of_file(self.rows))

    def move_end_of_file(self) -> None:
        self._move_cursor(Motion.end_of_file(self.rows))

    # --- Brackets ---

    def move_bracket_inside(self) -> None:
        """Onto the enclosing closer, or just past the opener when the
        cursor already sits on a closer."""
        point = self.cursor.point
        if Motion.next_char(self.rows, point) in Motion.CLOSERS:
            opener = Motion.open_bracket(self.rows, point)
            if opener is not None:
                self._move_cursor(Point(opener.row, opener.col + 1))
        else:
            closer = Motion.close_bracket(self.rows, point)
            if closer is not None:
                self._move_cursor(closer)

    def move_bracket_outside(self) -> None:
        """Just past the closer when the cursor sits on an opener, or onto
        the opener when the cursor sits just past a closer."""
        point = self.cursor.point
        if Motion.next_char(self.rows, point) in Motion.OPENERS:
            closer = Motion.close_bracket(self.rows, Point(point.row, point.col + 1))
            if closer is not None:
                self._move_cursor(Point(closer.row, closer.col + 1))
        elif Motion.prev_char(self.rows, point) in Motion.CLOSERS:
            opener = Motion.open_bracket(self.rows, Point(point.row, point.col - 1))
            if opener is not None:
                self._move_cursor(opener)

    # --- Search matches ---

    def move_next_match(self) -> None:
        if self.search_state is None:
            return
        point = next_match(self.lines, self.cursor.point)
        if point is not None:
            self._move_cursor(point)

    def move_prev_match(self) -> None:
        if self.search_state is None:
            return
        point = prev_match(self.lines, self.cursor.point)
        if point is not None:
            self._move_cursor(point)

    # --- Selections ---

    def _select(self, left: Point, right: Point) -> None:
        self._move_cursor(left)
        self.anchor = self.cursor
        self._move_cursor(right)

    def select_word(self, wordish: Wordish = Wordish.ALNUM_UNDERSCORE) -> None:
        point = self.cursor.point
        left = Motion.left_word(self.rows, wordish, point)
        right = Motion.right_word(self.rows, wordish, point)
        if left is not None and right is not None:
            self._select(left, right)

    def select_inside_brackets(self) -> bool:
        """Selects the contents of the enclosing bracket pair, or of the next
        pair when none encloses the cursor. Returns whether a pair was found."""
        point = self.cursor.point
        opener = Motion.open_bracket(self.rows, point)
        if opener is not None:
            closer = Motion.close_bracket(self.rows, point)
        else:
            opener = Motion.next_opening_bracket(self.rows, point)
            if opener is None:
                return False
            closer = Motion.close_bracket(self.rows, Point(opener.row, opener.col + 1))
        if closer is None:
            return False
        self._select(Point(opener.row, opener.col + 1), closer)
        return True

    def select_outside_brackets(self) -> None:
        saved = self.cursor, self.anchor
        point = self.cursor.point
        if Motion.next_char(self.rows, point) in Motion.OPENERS:
            self.move_right(1)
        elif Motion.prev_char(self.rows, point) in Motion.CLOSERS:
            self.move_left(1)
        if self.select_inside_brackets():
            self.grow_selection()
        else:
            self.cursor, self.anchor = saved

    def select_inside_quotes(self) -> bool:
        """Selects between the quote behind the cursor and the next one, or
        inside the next quoted run when there is no quote behind."""
        point = self.cursor.point
        opener = Motion.open_quote(self.rows, point)
        if opener is not None:
            closer = Motion.close_quote(self.rows, point)
        else:
            opener = Motion.next_quote(self.rows, point)
            if opener is None:
                return False
            closer = Motion.close_quote(self.rows, Point(opener.row, opener.col + 1))
        if closer is None:
            return False
        self._select(Point(opener.row, opener.col + 1), closer)
        return True

    def select_outside_quotes(self) -> None:
        saved = self.cursor, self.anchor
        if Motion.prev_char(self.rows, self.cursor.point) == Motion.QUOTE:
            self.move_left(1)
        if self.select_inside_quotes():
            self.grow_selection()
        else:
            self.cursor, self.anchor = saved

    def select_line(self) -> None:
        row = self.cursor.row
        self._select(Motion.start_of_line(self.rows, row), Motion.end_of_line(self.rows, row))

    def select_para(self) -> None:
        start = Motion.start_of_para(self.rows, self.cursor.point)
        self._select(start, Motion.end_of_para(self.rows, start))

    def grow_selection(self) -> None:
        """Widens the selection by one character on each side.

        Expects the anchor to precede the cursor.
        """
        self.invert_selection()
        self.move_left(1)
        self.invert_selection()
        self.move_right(1)

    def invert_selection(self) -> None:
        if self.anchor is not None:
            self.anchor, self.cursor = self.cursor, self.anchor

    # --- Search ---

    def search(self) -> None:
        """Searches for the selected text when it is a non-empty single-row run."""
        selection = self.selection()
        if selection is None:
            return
        start, end = selection
        if start.row != end.row or start.col == end.col:
            logger.debug("Search skipped: selection is empty or spans rows.")
            return
        self.search_state = compile_literal(self.rows[start.row][start.col:end.col])
        total = annotate_all(self.lines, self.search_state)
        logger.info(f"Search for {self.search_state.source!r}: {total} matches.")

    def cancel_search(self) -> None:
        self.search_state = None
        annotate_all(self.lines, None)
