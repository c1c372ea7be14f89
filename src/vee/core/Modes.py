# vee/core/Modes.py
"""Modes Module
================
The flat mode state machine.

Each mode owns one handler table, reached through its key group:

* ``NORMAL`` and ``SELECT`` share the ``navigation`` table. After every
  navigation action the mode settles to ``SELECT`` when an anchor is held and
  to ``NORMAL`` otherwise.
* ``INSERT`` uses the ``insert`` table, which only knows ``end_edit``.
* ``SYSTEM`` uses the ``system`` table. ``quit`` stops the loop; any other key
  leaves the overlay.

Motions are simply absent from the INSERT and SYSTEM tables, so they cannot be
reached from those modes.
"""

from enum import Enum
from functools import partial
from typing import TYPE_CHECKING, Callable

from vee.core.Cursor import Wordish
from vee.core.Keymap import Keymap
from vee.utils.logging_config import logger

if TYPE_CHECKING:
    from vee.core.Session import Session


class Mode(Enum):
    NORMAL = "NORMAL"
    INSERT = "INSERT"
    SELECT = "SELECT"
    SYSTEM = "SYSTEM"

    def __str__(self) -> str:
        return self.value

    @property
    def group(self) -> str:
        """Key group whose bindings apply in this mode."""
        return MODE_GROUPS[self]

    @property
    def is_navigation(self) -> bool:
        return self in (Mode.NORMAL, Mode.SELECT)


MODE_GROUPS: dict[Mode, str] = {
    Mode.NORMAL: "navigation",
    Mode.SELECT: "navigation",
    Mode.INSERT: "insert",
    Mode.SYSTEM: "system",
}


class ModeMachine:
    """Routes keys to session operations according to the current mode.

    Attributes:
        session (Session): The session whose operations are invoked.
        keymap (Keymap): Key to action lookup, per group.
        handlers (dict[str, dict[str, Callable[[], None]]]): group -> action -> callable.
    """

    def __init__(self, session: "Session", keymap: Keymap) -> None:
        self.session = session
        self.keymap = keymap
        self.handlers = self._setup_handlers()

    def _setup_handlers(self) -> dict[str, dict[str, Callable[[], None]]]:
        s = self.session
        big = s.big_step
        navigation: dict[str, Callable[[], None]] = {
            "select_inside_quotes": s.select_inside_quotes,
            "select_outside_quotes": s.select_outside_quotes,
            "select_word": partial(s.select_word, Wordish.ALNUM_UNDERSCORE),
            "select_wide_word": partial(s.select_word, Wordish.NON_WHITESPACE),
            "select_inside_brackets": s.select_inside_brackets,
            "select_outside_brackets": s.select_outside_brackets,
            "select_line": s.select_line,
            "select_para": s.select_para,
            "move_start_of_line": s.move_start_of_line,
            "move_start_of_para": s.move_start_of_para,
            "move_left_word": partial(s.move_left_word, Wordish.ALNUM_UNDERSCORE),
            "move_left_wide_word": partial(s.move_left_word, Wordish.NON_WHITESPACE),
            "move_right_word": partial(s.move_right_word, Wordish.ALNUM_UNDERSCORE),
            "move_right_wide_word": partial(s.move_right_word, Wordish.NON_WHITESPACE),
            "move_end_of_line": s.move_end_of_line,
            "move_end_of_para": s.move_end_of_para,
            "move_bracket_inside": s.move_bracket_inside,
            "move_bracket_outside": s.move_bracket_outside,
            "set_anchor": s.set_anchor,
            "begin_edit": s.begin_edit,
            "move_left": partial(s.move_left, 1),
            "move_down": partial(s.move_down, 1),
            "move_up": partial(s.move_up, 1),
            "move_right": partial(s.move_right, 1),
            "move_left_big": partial(s.move_left, big),
            "move_down_big": partial(s.move_down, big),
            "move_up_big": partial(s.move_up, big),
            "move_right_big": partial(s.move_right, big),
            "move_start_of_file": s.move_start_of_file,
            "move_end_of_file": s.move_end_of_file,
            "search": s.search,
            "move_next_match": s.move_next_match,
            "move_prev_match": s.move_prev_match,
            "enter_system": s.enter_system,
            "cancel": s.cancel,
        }
        return {
            "navigation": navigation,
            "insert": {"end_edit": s.end_edit},
            "system": {},
        }

    def dispatch(self, key: str) -> bool:
        """Handles one key. Returns ``False`` when the loop should stop."""
        mode = self.session.mode
        group = mode.group
        action = self.keymap.action_for(group, key)
        logger.debug(f"dispatch: mode={mode} key={key!r} action={action}")

        if mode is Mode.SYSTEM:
            if action == "quit":
                logger.info("Quit requested from SYSTEM mode.")
                return False
            self.session.leave_system()
            return True

        if action is None:
            return True

        handler = self.handlers[group].get(action)
        if handler is None:
            logger.warning(f"Action '{action}' is bound in '{group}' but has no handler.")
            return True

        handler()
        if self.session.mode.is_navigation:
            self.session.settle_mode()
        return True
