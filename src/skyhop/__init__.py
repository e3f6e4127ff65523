"""SKYHOP - side-scrolling obstacle dodger."""

__version__ = "0.1.0"
