# vee/core/Events.py
"""Input events delivered to the session, one at a time, by the terminal host."""

from dataclasses import dataclass


@dataclass(frozen=True)
class KeyEvent:
    """A key press. ``key`` is a single printable character or a named key
    such as ``"esc"``, ``"left"`` or ``"f1"``."""

    key: str


@dataclass(frozen=True)
class ResizeEvent:
    """The terminal now measures ``width`` x ``height`` character cells."""

    width: int
    height: int


@dataclass(frozen=True)
class PointerEvent:
    """A mouse event. Accepted and ignored."""


InputEvent = KeyEvent | ResizeEvent | PointerEvent
