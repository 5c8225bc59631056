"""
One Rikiki round as a phase-typed state machine: NEW -> BETTING -> SCORING -> FINISHED.

Each phase is its own class and only exposes the operations valid in that phase:
bets are collected on a BettingRound, points on a ScoringRound, and scores are
read from a FinishedRound. Slots are filled one player at a time; ``lock_*``
returns None until every player has an entry, then returns the next phase and
invalidates the round it was called on.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, Sequence

from .config import DEFAULT_CONFIG, RikikiConfig, initial_card_count, round_count
from .errors import ConsumedError, InvalidBetError, InvalidPointsError
from .scoring import round_scores

logger = logging.getLogger(__name__)


class Phase(IntEnum):
    """Round phases in play order."""
    NEW = 0
    BETTING = 1
    SCORING = 2
    FINISHED = 3


@dataclass(frozen=True)
class Context:
    """Round-scoped facts, fixed when the round is created."""

    dealer_index: int
    amount_of_cards: int
    amount_of_players: int
    incrementing_phase: bool = False

    @classmethod
    def first(cls, amount_of_cards: int, amount_of_players: int) -> "Context":
        return cls(
            dealer_index=0,
            amount_of_cards=amount_of_cards,
            amount_of_players=amount_of_players,
            incrementing_phase=False,
        )

    @classmethod
    def from_previous(cls, previous: "Context") -> "Context":
        """
        Context of the round following ``previous``.

        Cards go down by one until a round is played with a single card. The next
        round latches the incrementing phase and is dealt one card again; from
        then on the count goes up by one each round.
        """
        incrementing_phase = previous.incrementing_phase or previous.amount_of_cards == 1

        if previous.incrementing_phase:
            amount_of_cards = previous.amount_of_cards + 1
        elif incrementing_phase:
            amount_of_cards = 1
        else:
            amount_of_cards = previous.amount_of_cards - 1

        return cls(
            dealer_index=previous.next_dealer(),
            amount_of_cards=amount_of_cards,
            amount_of_players=previous.amount_of_players,
            incrementing_phase=incrementing_phase,
        )

    def next_dealer(self) -> int:
        return (self.dealer_index + 1) % self.amount_of_players


class _Round:
    """Shared bookkeeping: context, config, and single-use invalidation."""

    phase: Phase = Phase.NEW

    def __init__(self, context: Context, config: RikikiConfig | None = None):
        self._context = context
        self._config = config or DEFAULT_CONFIG
        self._consumed = False

    @property
    def context(self) -> Context:
        return self._context

    @property
    def config(self) -> RikikiConfig:
        return self._config

    @property
    def consumed(self) -> bool:
        return self._consumed

    def _ensure_live(self) -> None:
        if self._consumed:
            raise ConsumedError(
                f"{type(self).__name__} was already locked into its next phase"
            )

    def _consume(self) -> None:
        self._consumed = True

    def _check_entry(
        self,
        kind: str,
        player_index: int,
        value: int,
        error_cls: type[Exception],
    ) -> None:
        n = self._context.amount_of_players
        if not 0 <= player_index < n:
            raise error_cls(f"Player index {player_index} out of range 0..{n - 1}")
        if not self._config.validate_ranges:
            return
        cards = self._context.amount_of_cards
        if not 0 <= value <= cards:
            raise error_cls(
                f"{kind} {value} for player {player_index} outside 0..{cards}"
            )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(context={self._context!r})"


class BettingRound(_Round):
    """Collects one bet per player."""

    phase = Phase.BETTING

    def __init__(self, context: Context, config: RikikiConfig | None = None):
        super().__init__(context, config)
        self._bets: list[int | None] = [None] * context.amount_of_players

    @property
    def bets(self) -> list[int | None]:
        """Current bet slots; None marks a player who has not bet yet."""
        return list(self._bets)

    def add_bet(self, player_index: int, bet: int) -> None:
        """Set (or replace) the bet of one player."""
        self._ensure_live()
        self._check_entry("Bet", player_index, bet, InvalidBetError)
        self._bets[player_index] = bet

    def missing_bets(self) -> list[int]:
        return [i for i, b in enumerate(self._bets) if b is None]

    def is_complete(self) -> bool:
        return not self.missing_bets()

    def lock_bets(self) -> "ScoringRound | None":
        """
        Freeze the bets and move to scoring.

        Returns None while a bet is missing; the round stays usable so the caller
        can keep collecting and try again.
        """
        self._ensure_live()
        missing = self.missing_bets()
        if missing:
            logger.debug("lock_bets refused, missing bets for players %s", missing)
            return None
        locked = [b for b in self._bets if b is not None]
        self._consume()
        logger.debug("Round %r: BETTING -> SCORING, bets=%s", self._context, locked)
        return ScoringRound(self._context, locked, self._config)


class ScoringRound(_Round):
    """Holds the locked bets and collects one points entry per player."""

    phase = Phase.SCORING

    def __init__(
        self,
        context: Context,
        bets: Sequence[int],
        config: RikikiConfig | None = None,
    ):
        super().__init__(context, config)
        if len(bets) != context.amount_of_players:
            raise InvalidBetError(
                f"Expected {context.amount_of_players} bets, got {len(bets)}"
            )
        self._bets = tuple(bets)
        self._points: list[int | None] = [None] * context.amount_of_players

    @property
    def bets(self) -> tuple[int, ...]:
        return self._bets

    @property
    def points(self) -> list[int | None]:
        return list(self._points)

    def add_points(self, player_index: int, points: int) -> None:
        """Set (or replace) the points won by one player."""
        self._ensure_live()
        self._check_entry("Points", player_index, points, InvalidPointsError)
        self._points[player_index] = points

    def missing_points(self) -> list[int]:
        return [i for i, p in enumerate(self._points) if p is None]

    def is_complete(self) -> bool:
        return not self.missing_points()

    def lock_points(self) -> "FinishedRound | None":
        """Freeze the points and compute scores. None while an entry is missing."""
        self._ensure_live()
        missing = self.missing_points()
        if missing:
            logger.debug("lock_points refused, missing points for players %s", missing)
            return None
        locked = [p for p in self._points if p is not None]
        if self._config.enforce_points_total:
            total = sum(locked)
            if total != self._context.amount_of_cards:
                raise InvalidPointsError(
                    f"Points add up to {total}, expected {self._context.amount_of_cards}"
                )
        self._consume()
        finished = FinishedRound(self._context, self._bets, locked, self._config)
        logger.debug(
            "Round %r: SCORING -> FINISHED, scores=%s", self._context, finished.get_scores()
        )
        return finished


class FinishedRound(_Round):
    """Terminal phase: bets, points and derived scores, read-only."""

    phase = Phase.FINISHED

    def __init__(
        self,
        context: Context,
        bets: Sequence[int],
        points: Sequence[int],
        config: RikikiConfig | None = None,
    ):
        super().__init__(context, config)
        if len(points) != context.amount_of_players:
            raise InvalidPointsError(
                f"Expected {context.amount_of_players} points entries, got {len(points)}"
            )
        self._bets = tuple(bets)
        self._points = tuple(points)
        self._scores = tuple(round_scores(self._bets, self._points, self._config.exact_bonus))

    @property
    def bets(self) -> tuple[int, ...]:
        return self._bets

    @property
    def points(self) -> tuple[int, ...]:
        return self._points

    def get_scores(self) -> list[int]:
        return list(self._scores)


def new_round(context: Context, config: RikikiConfig | None = None) -> BettingRound:
    """Create a round; the NEW phase is left immediately for BETTING."""
    logger.debug("Round %r: NEW -> BETTING", context)
    return BettingRound(context, config)


def card_schedule(player_count: int, config: RikikiConfig | None = None) -> Iterator[Context]:
    """Contexts of every round of a game with ``player_count`` players, in play order."""
    context = Context.first(initial_card_count(player_count, config), player_count)
    for _ in range(round_count(player_count, config)):
        yield context
        context = Context.from_previous(context)


__all__ = [
    "Phase",
    "Context",
    "BettingRound",
    "ScoringRound",
    "FinishedRound",
    "new_round",
    "card_schedule",
]
