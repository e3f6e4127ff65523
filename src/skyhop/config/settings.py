"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Every gameplay tunable lives on GameSettings so a session is fully
described by one configuration object.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(ValueError):
    """Raised at session start when the configured layout cannot be played."""


class GameSettings(BaseSettings):
    """Gameplay tunables. Distances are in field units, times in milliseconds."""

    model_config = SettingsConfigDict(env_prefix="SKYHOP_GAME_", extra="ignore")

    # Play field
    field_width: int = Field(default=800, gt=0)
    field_height: int = Field(default=500, gt=0)
    ground_height: int = Field(default=80, ge=0)

    # Player
    player_size: int = Field(default=45, gt=0)
    player_start_x: float = 50.0
    player_start_y: float = 250.0
    gravity: float = 0.5  # Added to velocity every physics tick
    jump_strength: float = -10.0
    horizontal_speed: float = 8.0  # Per move intent

    # Obstacles
    obstacle_width: int = Field(default=60, gt=0)
    gap_size: int = Field(default=200, gt=0)
    gap_margin_top: int = Field(default=50, ge=0)
    gap_margin_bottom: int = Field(default=130, ge=0)

    # Difficulty: speed = base + floor(score / step) * increment
    base_obstacle_speed: float = Field(default=2.5, gt=0)
    difficulty_step: int = Field(default=15, gt=0)
    speed_increment: float = Field(default=0.3, ge=0)

    # Ambient scenery
    ground_speed: float = 2.5
    ground_tile_width: float = Field(default=100.0, gt=0)
    cloud_speed: float = 0.5
    cloud_wrap_x: float = -100.0

    # Cadences
    tick_ms: float = Field(default=20.0, gt=0)
    particle_tick_ms: float = Field(default=30.0, gt=0)
    cloud_tick_ms: float = Field(default=50.0, gt=0)
    obstacle_spawn_ms: float = Field(default=2500.0, gt=0)
    power_up_spawn_ms: float = Field(default=5000.0, gt=0)

    # Power-ups
    power_up_chance: float = Field(default=0.2, ge=0.0, le=1.0)
    shield_share: float = Field(default=0.5, ge=0.0, le=1.0)
    power_up_margin_top: int = 50
    power_up_margin_bottom: int = 100
    power_up_exit_x: float = -30.0
    pickup_radius: float = Field(default=40.0, gt=0)

    # Effect durations
    invincibility_ms: float = 2000.0
    shield_ms: float = 5000.0
    slow_motion_ms: float = 3000.0
    slow_motion_factor: float = Field(default=0.5, gt=0.0, le=1.0)
    combo_decay_ms: float = 3000.0
    combo_popup_ms: float = 1000.0
    combo_display_threshold: int = 2
    screen_shake_ms: float = 200.0
    jump_puff_ms: float = 200.0

    # Crash particles
    particle_count: int = Field(default=15, ge=0)
    particle_speed: float = 6.0  # Max |v| per axis
    particle_gravity: float = 0.5

    # Medals
    bronze_score: int = 15
    silver_score: int = 30
    gold_score: int = 50

    # Random seed (None = nondeterministic)
    seed: int | None = None

    @property
    def ceiling_y(self) -> float:
        """Lowest valid player y."""
        return 0.0

    @property
    def floor_y(self) -> float:
        """Highest valid player y."""
        return float(self.field_height - self.player_size - self.ground_height)

    @property
    def max_player_x(self) -> float:
        return float(self.field_width - self.player_size)

    @property
    def gap_range(self) -> tuple[float, float]:
        """Inclusive bounds for an obstacle's gap start."""
        low = float(self.gap_margin_top)
        high = float(self.field_height - self.gap_size - self.gap_margin_bottom)
        return low, high

    def validate_layout(self) -> None:
        """
        Check that the field can hold the configured layout.

        Raises:
            ConfigurationError: If a session could not be played
        """
        if self.gap_size >= self.field_height:
            raise ConfigurationError(
                f"gap_size {self.gap_size} must be smaller than field_height {self.field_height}"
            )
        low, high = self.gap_range
        if high < low:
            raise ConfigurationError(
                f"Gap of {self.gap_size} plus margins {self.gap_margin_top}/{self.gap_margin_bottom} "
                f"does not fit in field_height {self.field_height}"
            )
        if self.floor_y <= 0:
            raise ConfigurationError(
                f"player_size {self.player_size} plus ground_height {self.ground_height} "
                f"leaves no room in field_height {self.field_height}"
            )
        if self.player_size >= self.field_width:
            raise ConfigurationError(
                f"player_size {self.player_size} must be smaller than field_width {self.field_width}"
            )
        if self.field_height - self.power_up_margin_bottom < self.power_up_margin_top:
            raise ConfigurationError("Power-up margins do not fit in the field")
        if not (self.bronze_score <= self.silver_score <= self.gold_score):
            raise ConfigurationError("Medal thresholds must be ascending")


class DisplaySettings(BaseSettings):
    """Desktop window settings."""

    model_config = SettingsConfigDict(env_prefix="SKYHOP_DISPLAY_", extra="ignore")

    title: str = "SKYHOP"
    fps: int = Field(default=60, gt=0)
    scale: float = Field(default=1.0, gt=0.0)
    fullscreen: bool = False


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="SKYHOP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = False

    # Where the high score survives between runs
    high_score_path: Path = Field(
        default_factory=lambda: Path.home() / ".skyhop" / "high_score.json"
    )

    # Nested settings
    game: GameSettings = Field(default_factory=GameSettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
