# src/vee/__init__.py
"""vee: a modal terminal viewer for navigating and selecting text."""

__version__ = "0.1.0"
