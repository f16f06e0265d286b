"""Configuration management with environment variable support."""

import logging
import os
from dataclasses import dataclass, field
from random import Random

from blackjack.cards import Deck
from blackjack.game import BlackjackTable, Game
from blackjack.rules import RuleSet


def _env_flag(name: str, default: str = "false") -> bool:
    """Read a true/false environment variable."""
    return os.getenv(name, default).lower() == "true"


def _parse_seed() -> int | None:
    """Parse BLACKJACK_SEED; unset or blank means an unseeded shuffle."""
    seed = os.getenv("BLACKJACK_SEED", "").strip()
    return int(seed) if seed else None


@dataclass(frozen=True)
class GameConfig:
    """Default game configuration."""

    seed: int | None = field(default_factory=_parse_seed)
    soft_hand_redraw: bool = field(
        default_factory=lambda: _env_flag("BLACKJACK_SOFT_HAND_REDRAW")
    )

    def rules(self) -> RuleSet:
        """Build the dealer rules."""
        return RuleSet(soft_hand_redraw=self.soft_hand_redraw)

    def rng(self) -> Random:
        """Build the shuffle RNG, seeded when a seed is configured."""
        return Random(self.seed)


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: _env_flag("BLACKJACK_DEBUG"))
    game: GameConfig = field(default_factory=GameConfig)

    @property
    def log_level(self) -> int:
        """Logging level for front ends that configure logging."""
        return logging.DEBUG if self.debug else logging.WARNING


# Global configuration instance
config = AppConfig()


def create_table(app_config: AppConfig | None = None) -> BlackjackTable:
    """Build a table with its own deck from configuration."""
    game_config = (app_config or config).game
    deck = Deck(rng=game_config.rng())
    return BlackjackTable(Game(deck=deck, rules=game_config.rules()))
