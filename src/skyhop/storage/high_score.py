"""High score persistence.

The session core only needs get/set of one integer. Stores never raise:
unreadable or unwritable storage is logged and treated as a high
score of 0.
"""

import json
import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class HighScoreStore(Protocol):
    """Persistence boundary for the single high score."""

    def get_high_score(self) -> int:
        ...

    def set_high_score(self, score: int) -> None:
        ...


class MemoryHighScoreStore:
    """In-process store, used by tests and when no path is configured."""

    def __init__(self, initial: int = 0):
        self._score = initial
        self.writes: list[int] = []

    def get_high_score(self) -> int:
        return self._score

    def set_high_score(self, score: int) -> None:
        self._score = score
        self.writes.append(score)


class JsonHighScoreStore:
    """Keeps the high score in a small JSON file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def get_high_score(self) -> int:
        if not self.path.exists():
            return 0
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            score = int(data.get("high_score", 0))
            logger.info(f"Loaded high score {score} from {self.path}")
            return max(0, score)
        except Exception as e:
            logger.error(f"Failed to load high score: {e}")
            return 0

    def set_high_score(self, score: int) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump({"high_score": int(score)}, f, indent=2)
            logger.info(f"Saved high score {score}")
        except Exception as e:
            logger.error(f"Failed to save high score: {e}")
