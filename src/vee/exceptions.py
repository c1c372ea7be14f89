# vee/exceptions.py
"""Exception types raised by the vee core."""


class VeeError(Exception):
    """Base class for all vee errors."""


class FileLoadError(VeeError):
    """The file given on the command line could not be loaded."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot open '{path}': {reason}")
        self.path = path
        self.reason = reason


class KeybindingError(VeeError, ValueError):
    """A key specification in the keymap could not be decoded."""
