"""Playable modes for SKYHOP."""

from skyhop.modes.base import BaseMode, ModeContext, ModeResult, ModePhase
from skyhop.modes.skyhop import SkyhopMode

__all__ = [
    "BaseMode",
    "ModeContext",
    "ModeResult",
    "ModePhase",
    "SkyhopMode",
]
