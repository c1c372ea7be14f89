# vee/utils/utils.py
"""
vee.utils.utils.py
==================

This module provides the core utility functions for the vee viewer.

Key functionalities include:
- Automatic User Configuration: Creates `~/.config/vee/config.toml` from the
  repository template on first run.
- Robust Configuration Loading: Loads a hardcoded, built-in default
  configuration, then recursively merges user-defined settings on top of it.
- File Loading: Reads the file to navigate, detecting its encoding with
  `chardet` when it is not valid UTF-8.
- Display Width Helpers: Character and string widths in terminal cells, based
  on `wcwidth`.

The application is always runnable, even if user configuration files are
missing or corrupted, by falling back to the embedded defaults.
"""

import copy
import logging
import shutil
import unicodedata
from pathlib import Path
from typing import Any, Dict

import chardet
import toml
from wcwidth import wcwidth

from vee.exceptions import FileLoadError

logger = logging.getLogger("vee")

# Confidence below which a chardet guess is decoded with errors="replace".
CHARDET_MIN_CONFIDENCE = 0.75
CHARDET_SAMPLE_SIZE = 1024 * 20

# Direct, hardcoded representation of the repository `config.toml`.
# It serves as the ultimate fallback, ensuring the application can ALWAYS start.
DEFAULT_CONFIG: Dict[str, Any] = {
    "logging": {
        "file": ".vee.log",
        "file_level": "DEBUG",
        "console_level": "WARNING",
        "log_to_console": False,
        "separate_error_log": False,
    },
    "colors": {
        "comment": "dark_red",
        "match": "yellow",
        "selection": "grey",
        "status": "grey",
        "error": "red",
    },
    "motion": {"big_step": 5},
    "keybindings": {"navigation": {}, "insert": {}, "system": {}},
}


# --- Helper Functions ---

def get_project_root() -> Path:
    """Determines the project's root directory for finding template files."""
    return Path(__file__).resolve().parents[3]


def user_config_path() -> Path:
    return Path.home() / ".config" / "vee" / "config.toml"


def ensure_user_config_exists() -> None:
    """Creates `~/.config/vee/config.toml` from the repository template if missing."""
    try:
        target = user_config_path()
        if target.exists():
            return
        source = get_project_root() / "config.toml"
        if source.exists():
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy(source, target)
            logger.info(f"Created user config template at: {target}")
    except OSError as e:
        logger.error(f"Could not create user configuration file: {e}", exc_info=True)


def load_config() -> Dict[str, Any]:
    """
    Loads and merges configurations, ensuring the application can always run.
    """
    final_config = copy.deepcopy(DEFAULT_CONFIG)
    logger.debug("Loaded embedded default configuration.")

    ensure_user_config_exists()

    config_path = user_config_path()
    if config_path.is_file():
        try:
            user_config = toml.load(config_path)
            final_config = deep_merge(final_config, user_config)
            logger.info(f"Successfully loaded and merged user config from {config_path}")
        except (toml.TomlDecodeError, OSError) as e:
            logger.error(f"Could not parse user config '{config_path}': {e}. Using defaults.")

    return final_config


def deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Recursively merges the `override` dictionary into the `base` dictionary.
    """
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def read_text_lines(path: str) -> tuple[list[str], str]:
    """Reads *path* and splits it into lines.

    UTF-8 is tried first. If the content is not valid UTF-8, `chardet` is asked
    for a guess; a confident guess is decoded strictly, anything else is
    decoded with ``errors="replace"``.

    Args:
        path: The file to read.

    Returns:
        A ``(lines, encoding)`` tuple. An empty file yields ``[""]``.

    Raises:
        FileLoadError: If the file does not exist, is a directory, or cannot
            be read.
    """
    try:
        with open(path, "rb") as f_binary:
            raw = f_binary.read()
    except OSError as e:
        logger.error(f"Failed to read '{path}': {e}")
        raise FileLoadError(path, e.strerror or str(e)) from e

    try:
        content = raw.decode("utf-8")
        encoding = "utf-8"
    except UnicodeDecodeError:
        guess = chardet.detect(raw[:CHARDET_SAMPLE_SIZE])
        encoding = guess.get("encoding") or "utf-8"
        confidence = guess.get("confidence") or 0.0
        logger.debug(
            f"Chardet detected encoding '{encoding}' with confidence {confidence:.2f} for '{path}'"
        )
        errors = "strict" if confidence >= CHARDET_MIN_CONFIDENCE else "replace"
        try:
            content = raw.decode(encoding, errors=errors)
        except (UnicodeDecodeError, LookupError) as e:
            logger.warning(f"Decoding '{path}' as {encoding} failed ({e}); using utf-8 with replacement.")
            encoding = "utf-8"
            content = raw.decode(encoding, errors="replace")

    lines = split_lines(content)
    logger.info(f"Loaded '{path}' (enc: {encoding}, {len(lines)} lines)")
    return lines, encoding


def split_lines(content: str) -> list[str]:
    """Splits on "\\n" only, dropping a trailing "\\r" from each line.

    A final newline does not open an extra empty line, and empty content still
    yields one (empty) line.
    """
    lines = content.split("\n")
    if len(lines) > 1 and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def char_width(char: str) -> int:
    """Calculates the display width of a character using wcwidth.
    Control and combining characters are zero width, except the tab, which
    counts as one cell. Characters of undefined width count as one cell.
    """
    if char == "\t":
        return 1
    if unicodedata.category(char) in ("Cc", "Cf"):
        return 0
    if unicodedata.combining(char):
        return 0
    width = wcwidth(char)
    return width if width >= 0 else 1


def string_width(text: str) -> int:
    """Display width of *text*, as the sum of its character widths."""
    return sum(char_width(ch) for ch in text)


def truncate_to_width(text: str, max_width: int) -> str:
    """Clips *text* to *max_width* cells without splitting a wide character."""
    result = []
    used = 0
    for ch in text:
        w = char_width(ch)
        if used + w > max_width:
            break
        result.append(ch)
        used += w
    return "".join(result)
