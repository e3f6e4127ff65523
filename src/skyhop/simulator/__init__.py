"""Desktop runner for SKYHOP."""

from .window import SimulatorWindow, WindowConfig

__all__ = ["SimulatorWindow", "WindowConfig"]
