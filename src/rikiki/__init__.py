"""Rikiki (Oh Hell) round and game engine: bets, points, scores, card schedule."""

__version__ = "0.1.0"

from .config import RikikiConfig, initial_card_count, round_count
from .errors import (
    RikikiError,
    InvalidPlayersError,
    InvalidBetError,
    InvalidPointsError,
    ConsumedError,
)
from .scoring import compute_score, round_scores
from .round import (
    Phase,
    Context,
    BettingRound,
    ScoringRound,
    FinishedRound,
    new_round,
    card_schedule,
)
from .game import (
    Player,
    Game,
    NewGame,
    GameBetting,
    GameScoring,
    GameRoundFinished,
    NextRoundOrGame,
)
from .standings import score_table, running_totals, final_totals, ranking, format_table
