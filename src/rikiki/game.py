"""
Match orchestration: a Game owns the finished rounds, and one wrapper per phase
(GameBetting, GameScoring, GameRoundFinished) carries the round in progress.

Typical flow:

    game = NewGame.with_players(["Alice", "Bob", "Charlie", "Diana"])
    for i, bet in enumerate(bets):
        game.add_bet(i, bet)
    game = game.lock_bets()          # GameScoring (None if a bet is missing)
    ...
    game = game.lock_points()        # GameRoundFinished
    nxt = game.next_round()          # GameBetting, or Game once all rounds are played
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence, Union

from .config import RikikiConfig, initial_card_count, round_count
from .errors import ConsumedError, InvalidPlayersError
from .round import BettingRound, Context, FinishedRound, ScoringRound, new_round

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Player:
    """Display identifier of a seat; rounds index players by position only."""

    name: str

    @classmethod
    def coerce(cls, value: "Player | str") -> "Player":
        if isinstance(value, Player):
            return value
        return cls(str(value))

    def __str__(self) -> str:
        return self.name


class Game:
    """Players, round count, and the append-only history of finished rounds."""

    def __init__(
        self,
        players: Iterable[Player | str],
        config: RikikiConfig | None = None,
    ):
        self.config = config or RikikiConfig()
        self.config.validate()
        self.players: list[Player] = [Player.coerce(p) for p in players]
        n = len(self.players)
        if n == 0:
            raise InvalidPlayersError("A game needs at least one player")
        if len(set(self.players)) != n:
            raise InvalidPlayersError(f"Player names must be unique: {[p.name for p in self.players]}")
        self.amount_of_cards = initial_card_count(n, self.config)
        if self.amount_of_cards < 1:
            raise InvalidPlayersError(
                f"{n} players cannot share a {self.config.deck_size}-card deck"
            )
        self.amount_of_rounds = round_count(n, self.config)
        self.rounds: list[FinishedRound] = []
        logger.info(
            "New game: %d players, %d cards, %d rounds",
            n,
            self.amount_of_cards,
            self.amount_of_rounds,
        )

    @property
    def amount_of_players(self) -> int:
        return len(self.players)

    @property
    def is_over(self) -> bool:
        return len(self.rounds) == self.amount_of_rounds

    def first_context(self) -> Context:
        return Context.first(self.amount_of_cards, self.amount_of_players)

    def get_scores(self) -> list[list[int]]:
        """Scores per finished round (play order), each aligned to player order."""
        return [r.get_scores() for r in self.rounds]

    def _append(self, finished: FinishedRound) -> None:
        self.rounds.append(finished)

    def __repr__(self) -> str:
        return (
            f"Game(players={[p.name for p in self.players]}, "
            f"rounds={len(self.rounds)}/{self.amount_of_rounds})"
        )


class _GamePhase:
    """A game paired with its current round; single use like the round itself."""

    def __init__(self, game: Game):
        self._game = game
        self._consumed = False

    @property
    def game(self) -> Game:
        return self._game

    @property
    def players(self) -> list[Player]:
        return list(self._game.players)

    def _ensure_live(self) -> None:
        if self._consumed:
            raise ConsumedError(f"{type(self).__name__} was already advanced")

    def get_scores(self) -> list[list[int]]:
        return self._game.get_scores()


class GameBetting(_GamePhase):
    def __init__(self, game: Game, current_round: BettingRound):
        super().__init__(game)
        self.current_round = current_round

    @property
    def context(self) -> Context:
        return self.current_round.context

    def add_bet(self, player_index: int, bet: int) -> None:
        self._ensure_live()
        self.current_round.add_bet(player_index, bet)

    def missing_bets(self) -> list[int]:
        return self.current_round.missing_bets()

    def lock_bets(self) -> "GameScoring | None":
        self._ensure_live()
        scoring = self.current_round.lock_bets()
        if scoring is None:
            return None
        self._consumed = True
        return GameScoring(self._game, scoring)


class GameScoring(_GamePhase):
    def __init__(self, game: Game, current_round: ScoringRound):
        super().__init__(game)
        self.current_round = current_round

    @property
    def context(self) -> Context:
        return self.current_round.context

    def add_points(self, player_index: int, points: int) -> None:
        self._ensure_live()
        self.current_round.add_points(player_index, points)

    def missing_points(self) -> list[int]:
        return self.current_round.missing_points()

    def lock_points(self) -> "GameRoundFinished | None":
        self._ensure_live()
        finished = self.current_round.lock_points()
        if finished is None:
            return None
        self._consumed = True
        return GameRoundFinished(self._game, finished)


class GameRoundFinished(_GamePhase):
    def __init__(self, game: Game, current_round: FinishedRound):
        super().__init__(game)
        self.current_round = current_round

    @property
    def context(self) -> Context:
        return self.current_round.context

    def get_scores(self) -> list[list[int]]:
        """History including the round that just finished."""
        if self._consumed:
            return self._game.get_scores()
        return self._game.get_scores() + [self.current_round.get_scores()]

    def next_round(self) -> "GameBetting | Game":
        """
        Record the finished round. Returns the Game once every round has been
        played, otherwise a GameBetting for the next round.
        """
        self._ensure_live()
        self._consumed = True
        game = self._game
        game._append(self.current_round)

        if len(game.rounds) == game.amount_of_rounds:
            logger.info("Game over after %d rounds", len(game.rounds))
            return game

        context = Context.from_previous(self.current_round.context)
        logger.debug("Round %d of %d: %r", len(game.rounds) + 1, game.amount_of_rounds, context)
        return GameBetting(game, new_round(context, game.config))


NextRoundOrGame = Union[GameBetting, Game]


class NewGame:
    """Entry point: builds the game and its first betting round."""

    @staticmethod
    def with_players(
        players: Sequence[Player | str],
        config: RikikiConfig | None = None,
    ) -> GameBetting:
        game = Game(players, config)
        return GameBetting(game, new_round(game.first_context(), game.config))


__all__ = [
    "Player",
    "Game",
    "NewGame",
    "GameBetting",
    "GameScoring",
    "GameRoundFinished",
    "NextRoundOrGame",
]
