"""
Deadline table for timed effects.

Every timed effect of a session (invincibility, shield, slow motion,
combo decay and the cosmetic popups) is one entry keyed by EffectTimer,
holding a deadline on the session's simulation clock.
"""

from enum import Enum, auto


class EffectTimer(Enum):
    """Timed effects tracked per session."""
    INVINCIBILITY = auto()
    SHIELD = auto()
    SLOW_MOTION = auto()
    COMBO_DECAY = auto()

    # Cosmetic only
    COMBO_POPUP = auto()
    SCREEN_SHAKE = auto()
    JUMP_PUFF = auto()

    @property
    def is_cosmetic(self) -> bool:
        return self in COSMETIC_TIMERS


COSMETIC_TIMERS = frozenset({
    EffectTimer.COMBO_POPUP,
    EffectTimer.SCREEN_SHAKE,
    EffectTimer.JUMP_PUFF,
})


class TimerTable:
    """Deadlines keyed by effect, evaluated against an external clock."""

    def __init__(self) -> None:
        self._deadlines: dict[EffectTimer, float] = {}

    def start(self, key: EffectTimer, now_ms: float, duration_ms: float) -> float:
        """Arm (or re-arm) a timer. Returns the new deadline."""
        deadline = now_ms + duration_ms
        self._deadlines[key] = deadline
        return deadline

    def cancel(self, key: EffectTimer) -> bool:
        """Disarm a timer. Returns True if it was armed."""
        return self._deadlines.pop(key, None) is not None

    def is_active(self, key: EffectTimer) -> bool:
        return key in self._deadlines

    def deadline(self, key: EffectTimer) -> float | None:
        return self._deadlines.get(key)

    def remaining(self, key: EffectTimer, now_ms: float) -> float:
        """Milliseconds left before expiry (0.0 if not armed)."""
        deadline = self._deadlines.get(key)
        if deadline is None:
            return 0.0
        return max(0.0, deadline - now_ms)

    def pop_expired(
        self,
        now_ms: float,
        keys: frozenset[EffectTimer] | None = None
    ) -> list[EffectTimer]:
        """
        Remove and return every timer whose deadline has been reached.

        Args:
            now_ms: Current simulation time
            keys: Restrict expiry to these timers (None = all)

        Returns:
            Expired keys, earliest deadline first (enum order on ties)
        """
        expired = [
            key for key, deadline in self._deadlines.items()
            if deadline <= now_ms and (keys is None or key in keys)
        ]
        expired.sort(key=lambda k: (self._deadlines[k], k.value))
        for key in expired:
            del self._deadlines[key]
        return expired

    def clear(self) -> None:
        self._deadlines.clear()

    def __len__(self) -> int:
        return len(self._deadlines)
