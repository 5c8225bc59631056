"""
Game configuration: deck size, card cap, exact-bet bonus and validation switches.
Standard Rikiki: 52-card deck, at most 10 cards per player, exact bet = bet + 2.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass
class RikikiConfig:
    """Rules knobs shared by every round of a game."""

    max_cards: int = 10
    deck_size: int = 52
    exact_bonus: int = 2
    # Reject bets/points outside [0, amount_of_cards] and unknown player indices.
    validate_ranges: bool = True
    # Table rule: all points of a round add up to the cards dealt. Off by default.
    enforce_points_total: bool = False

    def validate(self) -> None:
        if self.max_cards < 1:
            raise ValueError(f"max_cards must be >= 1, got {self.max_cards}")
        if self.deck_size < 1:
            raise ValueError(f"deck_size must be >= 1, got {self.deck_size}")


DEFAULT_CONFIG = RikikiConfig()


def initial_card_count(player_count: int, config: RikikiConfig | None = None) -> int:
    """Cards dealt in the first round: min(max_cards, deck_size // player_count)."""
    cfg = config or DEFAULT_CONFIG
    if player_count < 1:
        raise ValueError("At least one player is required")
    return min(cfg.max_cards, cfg.deck_size // player_count)


def round_count(player_count: int, config: RikikiConfig | None = None) -> int:
    """Total rounds of a game: down to one card and back up."""
    return 2 * initial_card_count(player_count, config)


__all__ = ["RikikiConfig", "DEFAULT_CONFIG", "initial_card_count", "round_count"]
