# tests/conftest.py
"""Pytest configuration with shared fixtures for the vee tests."""

from __future__ import annotations

import copy
from typing import Any, Callable
from unittest.mock import MagicMock

import pytest

from vee.core.Cursor import Cursor
from vee.core.Events import KeyEvent
from vee.core.Session import Session
from vee.utils.utils import DEFAULT_CONFIG


# --- Base fixtures for curses and configuration ---
@pytest.fixture
def mock_stdscr() -> MagicMock:
    """Create a mock of the `curses` stdscr for testing UI components.

    Returns:
        MagicMock: A mocked `stdscr` with terminal size set to (24, 80).
    """
    stdscr = MagicMock()
    stdscr.getmaxyx.return_value = (24, 80)  # Typical terminal size
    return stdscr


@pytest.fixture
def default_config() -> dict[str, Any]:
    """A private copy of the built-in configuration.

    Returns:
        dict[str, Any]: Configuration the tests may mutate freely.
    """
    return copy.deepcopy(DEFAULT_CONFIG)


# --- Session fixtures ---
@pytest.fixture
def make_session() -> Callable[..., Session]:
    """Factory building a session over in-memory rows.

    The returned callable accepts the rows, an optional ``(row, col)`` start
    position and any keyword argument of :class:`Session`.
    """

    def _make(rows: list[str], at: tuple[int, int] = (0, 0), **kwargs: Any) -> Session:
        session = Session(rows, file_name=kwargs.pop("file_name", "test.txt"), **kwargs)
        row, col = at
        session.cursor = Cursor(row, col)
        session.cursor = Cursor(row, col, session.cursor_width())
        return session

    return _make


@pytest.fixture
def press() -> Callable[[Session, str], bool]:
    """Feed a sequence of keys to a session, one ``KeyEvent`` per key.

    Each element of *keys* is a single character, or a named key when it is
    given as a list element (``press(s, ["esc"])``).
    """

    def _press(session: Session, keys: str | list[str]) -> bool:
        result = True
        for key in keys:
            result = session.handle(KeyEvent(key))
        return result

    return _press


@pytest.fixture
def sample_rows() -> list[str]:
    """Provide a small source snippet as a list of rows.

    Returns:
        list[str]: Rows for use in tests.
    """
    return [
        "fn main() {",
        '    let s = "hello";  // greet',
        "    call(a[1], {b});",
        "",
        "    done();",
        "}",
    ]

