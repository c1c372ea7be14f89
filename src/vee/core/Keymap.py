# vee/core/Keymap.py
"""Keymap Module
=================
Maps logical key names to action names, one table per key group.

There are three groups. ``navigation`` serves the NORMAL and SELECT modes,
``insert`` serves INSERT and ``system`` serves SYSTEM. Each group starts from
:data:`DEFAULT_KEYBINDINGS` and may be overridden from the
``[keybindings.<group>]`` tables of the configuration:

.. code-block:: toml

    [keybindings.navigation]
    move_left = ["h", "left"]   # a list
    move_right = "l|right"      # or a "|" separated string
    search = ""                 # an empty value unbinds the action

Key specs are decoded into logical key names. A single character is taken
literally and case-sensitively (``"h"`` and ``"H"`` are different keys).
Anything longer must name a special key and is matched case-insensitively.
"""

from typing import Any, Optional

from vee.exceptions import KeybindingError
from vee.utils.logging_config import logger

NAMED_KEYS: frozenset[str] = frozenset(
    {
        "esc", "left", "right", "up", "down", "enter", "tab", "backspace",
        "delete", "home", "end", "pageup", "pagedown", "insert",
        *(f"f{i}" for i in range(1, 13)),
    }
)

KEY_ALIASES: dict[str, str] = {
    "space": " ",
    "escape": "esc",
    "return": "enter",
    "del": "delete",
    "pgup": "pageup",
    "pgdn": "pagedown",
    "ins": "insert",
}

DEFAULT_KEYBINDINGS: dict[str, dict[str, list[str]]] = {
    "navigation": {
        "select_inside_quotes": ["q"],
        "select_outside_quotes": ["Q"],
        "select_word": ["w"],
        "select_wide_word": ["W"],
        "select_inside_brackets": ["e"],
        "select_outside_brackets": ["E"],
        "select_line": ["r"],
        "select_para": ["R"],
        "move_start_of_line": ["y"],
        "move_start_of_para": ["Y"],
        "move_left_word": ["u"],
        "move_left_wide_word": ["U"],
        "move_right_word": ["i"],
        "move_right_wide_word": ["I"],
        "move_end_of_line": ["o"],
        "move_end_of_para": ["O"],
        "move_bracket_inside": ["p"],
        "move_bracket_outside": ["P"],
        "set_anchor": ["s"],
        "begin_edit": ["f"],
        "move_left": ["h", "left"],
        "move_down": ["j", "down"],
        "move_up": ["k", "up"],
        "move_right": ["l", "right"],
        "move_left_big": ["H"],
        "move_down_big": ["J"],
        "move_up_big": ["K"],
        "move_right_big": ["L"],
        "move_start_of_file": ["n"],
        "move_end_of_file": ["."],
        "search": ["/"],
        "move_next_match": ["m"],
        "move_prev_match": [","],
        "enter_system": ["space"],
        "cancel": ["esc"],
    },
    "insert": {
        "end_edit": ["esc"],
    },
    "system": {
        "quit": ["q"],
    },
}


def decode_key_spec(spec: Any) -> str:
    """Decodes one key spec from the configuration into a logical key name.

    Args:
        spec: A single character, a named key (``"esc"``, ``"Left"``,
            ``"space"``...), or an integer character code.

    Returns:
        str: The logical key name, as delivered in a ``KeyEvent``.

    Raises:
        KeybindingError: If the spec names no known key.
    """
    if isinstance(spec, int) and not isinstance(spec, bool):
        if 32 <= spec < 0x110000 and chr(spec).isprintable():
            return chr(spec)
        raise KeybindingError(f"Key code {spec} is not a printable character.")

    if not isinstance(spec, str):
        raise KeybindingError(f"Invalid key spec type: {type(spec).__name__}. Expected str or int.")

    if len(spec) == 1:
        return spec

    name = spec.strip().lower()
    if not name:
        raise KeybindingError("Key spec cannot be empty.")
    if len(name) == 1:
        return name
    name = KEY_ALIASES.get(name, name)
    if name in NAMED_KEYS or name == " ":
        return name
    raise KeybindingError(f"Unknown key name {spec!r}.")


def _split_specs(value: Any) -> list[Any]:
    if isinstance(value, list):
        return value
    if isinstance(value, str) and "|" in value and len(value) > 1:
        return [s.strip() for s in value.split("|")]
    return [value]


class Keymap:
    """Per-group ``key -> action`` tables built from defaults and user config.

    Attributes:
        keybindings (dict[str, dict[str, list[str]]]): group -> action -> keys.
        action_map (dict[str, dict[str, str]]): group -> key -> action.
    """

    def __init__(self, config: Optional[dict[str, Any]] = None) -> None:
        self.config = config or {}
        self.keybindings = self._load_keybindings()
        self.action_map = self._setup_action_map()

    def _load_keybindings(self) -> dict[str, dict[str, list[str]]]:
        user_keybindings: dict[str, Any] = self.config.get("keybindings", {}) or {}
        parsed: dict[str, dict[str, list[str]]] = {}

        for group, defaults in DEFAULT_KEYBINDINGS.items():
            overrides = user_keybindings.get(group, {}) or {}
            for action in overrides:
                if action not in defaults:
                    logger.warning(f"Unknown action '{action}' in [keybindings.{group}]. Ignored.")

            group_bindings: dict[str, list[str]] = {}
            for action, default_spec in defaults.items():
                spec = overrides.get(action, default_spec)
                if not spec:
                    logger.debug(f"Keybinding for action '{action}' is disabled or empty.")
                    continue

                keys: list[str] = []
                for item in _split_specs(spec):
                    try:
                        key = decode_key_spec(item)
                    except KeybindingError as e:
                        logger.error(
                            f"Error parsing keybinding item {item!r} for action '{action}': {e}. "
                            "This specific binding will be ignored."
                        )
                        continue
                    if key not in keys:
                        keys.append(key)

                if keys:
                    group_bindings[action] = keys
                else:
                    logger.warning(f"No valid keys for action '{action}'. It will not be bound.")
            parsed[group] = group_bindings

        logger.debug(f"Loaded keybindings: {parsed}")
        return parsed

    def _setup_action_map(self) -> dict[str, dict[str, str]]:
        action_map: dict[str, dict[str, str]] = {}
        for group, bindings in self.keybindings.items():
            table: dict[str, str] = {}
            for action, keys in bindings.items():
                for key in keys:
                    if key in table and table[key] != action:
                        logger.warning(
                            f"Keybinding for action '{action}' (key: {key!r}) is overwriting "
                            f"the existing mapping for '{table[key]}'."
                        )
                    table[key] = action
            action_map[group] = table
        return action_map

    def action_for(self, group: str, key: str) -> Optional[str]:
        """The action bound to *key* in *group*, if any."""
        return self.action_map.get(group, {}).get(key)

    def lookup(self, key_spec: Any, group: str = "navigation") -> Optional[str]:
        """Like :meth:`action_for`, but takes a key spec as written in the config."""
        try:
            key = decode_key_spec(key_spec)
        except KeybindingError:
            return None
        return self.action_for(group, key)

    def keys_for(self, action: str, group: str = "navigation") -> list[str]:
        return list(self.keybindings.get(group, {}).get(action, []))
