"""High score storage for SKYHOP."""

from .high_score import HighScoreStore, JsonHighScoreStore, MemoryHighScoreStore

__all__ = ["HighScoreStore", "JsonHighScoreStore", "MemoryHighScoreStore"]
