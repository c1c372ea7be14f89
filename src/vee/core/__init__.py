# src/vee/core/__init__.py
"""Public facade for vee.core: re-export main classes from CamelCase modules.

Keeps per-class file names (Session.py, Keymap.py, ...),
but provides flat imports for convenience and stability.
"""

# Re-export classes/symbols from CamelCase modules
from .Cursor import Cursor, Point, Wordish  # noqa: F401
from .Events import KeyEvent, PointerEvent, ResizeEvent  # noqa: F401
from .Keymap import Keymap  # noqa: F401
from .Line import Line  # noqa: F401
from .Modes import Mode  # noqa: F401
from .Search import SearchState  # noqa: F401
from .Session import Session  # noqa: F401


__all__ = [
    "Cursor",
    "Point",
    "Wordish",
    "KeyEvent",
    "PointerEvent",
    "ResizeEvent",
    "Keymap",
    "Line",
    "Mode",
    "SearchState",
    "Session",
]
