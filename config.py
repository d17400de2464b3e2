"""Configuration management with environment variable support."""

import os
from dataclasses import dataclass, field

from blackjack.errors import InvalidConfig


def _parse_seed() -> int | None:
    """Parse BLACKJACK_SEED; unset or blank means unseeded."""
    raw = os.getenv("BLACKJACK_SEED", "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise InvalidConfig(f"BLACKJACK_SEED must be an integer, got {raw!r}") from None


def _parse_num_decks() -> int:
    raw = os.getenv("BLACKJACK_NUM_DECKS", "6").strip()
    try:
        return int(raw)
    except ValueError:
        raise InvalidConfig(f"BLACKJACK_NUM_DECKS must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class GameConfig:
    """Shoe and randomness settings."""

    num_decks: int = field(default_factory=_parse_num_decks)
    seed: int | None = field(default_factory=_parse_seed)

    def __post_init__(self) -> None:
        if self.num_decks < 1:
            raise InvalidConfig(f"num_decks must be at least 1, got {self.num_decks}")


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")
    log_level: str = field(
        default_factory=lambda: os.getenv("BLACKJACK_LOG_LEVEL", "WARNING").upper()
    )
    player_name: str | None = field(
        default_factory=lambda: os.getenv("BLACKJACK_PLAYER_NAME") or None
    )

    game: GameConfig = field(default_factory=GameConfig)

    @property
    def effective_log_level(self) -> str:
        """Log level after applying the debug switch."""
        return "DEBUG" if self.debug else self.log_level


# Global configuration instance
config = AppConfig()
