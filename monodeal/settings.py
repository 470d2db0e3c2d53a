"""
Central application configuration using pydantic-settings.

This module provides typed access to environment-based configuration for:
- Engine defaults used when a game is created without explicit options
- The FastAPI server
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from monodeal.config import GameConfig


class GameSettings(BaseSettings):
    """
    Default engine settings.

    Environment variables (prefix: MONODEAL_):
        MONODEAL_SEED             - RNG seed for new games (default: random)
        MONODEAL_HAND_LIMIT       - Cards allowed in hand at end of turn (default: 7)
        MONODEAL_MOVES_PER_TURN   - Moves per turn (default: 3)
        MONODEAL_SETS_TO_WIN      - Complete sets needed to win (default: 3)
        MONODEAL_AI_DELAY_MS      - Simulated AI thinking time (default: 1000)
        MONODEAL_AI_MAX_ATTEMPTS  - AI decisions per turn (default: 10)
        MONODEAL_TIME_LIMIT_TURNS - Turn cap decided on assets (default: none)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="MONODEAL_",
    )

    seed: Optional[int] = Field(default=None, description="RNG seed for new games.")
    hand_limit: int = Field(default=7, ge=0, description="Hand size limit at end of turn.")
    moves_per_turn: int = Field(default=3, gt=0, description="Moves per turn.")
    sets_to_win: int = Field(default=3, gt=0, description="Complete sets needed to win.")
    ai_delay_ms: int = Field(default=1000, ge=0, description="Delay before each AI decision.")
    ai_max_attempts: int = Field(default=10, gt=0, description="AI decisions per turn.")
    time_limit_turns: Optional[int] = Field(
        default=None,
        description="End the game after this many turns; the player with more assets wins.",
    )

    @field_validator("time_limit_turns", mode="before")
    @classmethod
    def empty_means_unlimited(cls, value):
        """Treat an empty or non-positive value as no limit."""
        if value in (None, ""):
            return None
        value = int(value)
        return value if value > 0 else None

    def to_game_config(self, **overrides) -> GameConfig:
        """Build a GameConfig from these defaults plus explicit overrides."""
        values = {
            "seed": self.seed,
            "hand_limit": self.hand_limit,
            "moves_per_turn": self.moves_per_turn,
            "sets_to_win": self.sets_to_win,
            "ai_delay_ms": self.ai_delay_ms,
            "ai_max_attempts": self.ai_max_attempts,
            "time_limit_turns": self.time_limit_turns,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return GameConfig(**values)


class ServerSettings(BaseSettings):
    """
    Configuration for the HTTP/WebSocket server.

    Environment variables:
        SERVER_HOST    - Bind host (default: 127.0.0.1)
        SERVER_PORT    - Bind port (default: 8000)
        CORS_ORIGINS   - Comma separated allowed origins (default: *)
        SERVER_TICK_MS - Pause between queued AI tasks; falls back to the game's ai_delay_ms
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(default="127.0.0.1", alias="SERVER_HOST")
    port: int = Field(default=8000, alias="SERVER_PORT")
    cors_origins: str = Field(default="*", alias="CORS_ORIGINS")
    tick_ms: Optional[int] = Field(default=None, alias="SERVER_TICK_MS")

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_game_settings() -> GameSettings:
    """Return cached game settings instance."""
    return GameSettings()


@lru_cache
def get_server_settings() -> ServerSettings:
    """Return cached server settings instance."""
    return ServerSettings()
