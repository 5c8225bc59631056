"""
Command-line driver for the Rikiki engine.

Usage examples:

    python -m rikiki.cli schedule --players 4
    python -m rikiki.cli demo
    python -m rikiki.cli -v replay game.json

A replay script is JSON of the form
``{"players": ["A", "B"], "rounds": [{"bets": [0, 1], "points": [1, 0]}, ...]}``.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from .config import RikikiConfig
from .errors import RikikiError
from .game import Game, GameBetting, NewGame
from .round import card_schedule
from .standings import format_table, ranking

log = logging.getLogger(__name__)

_LEVELS_BY_VERBOSE = {
    0: logging.WARNING,
    1: logging.INFO,
    2: logging.DEBUG,
}

DEMO_PLAYERS = ["Alice", "Bob", "Charlie", "Diana"]
DEMO_ROUNDS = [
    {"bets": [0, 1, 2, 3], "points": [0, 1, 2, 3]},
    {"bets": [0, 0, 2, 0], "points": [0, 5, 2, 3]},
]


class ScriptError(RikikiError, ValueError):
    """Raised when a replay script cannot be played."""


def setup_logging(verbose_count: int = 0) -> logging.Logger:
    """
    Configure the package logger from the -v count.

    -v -> INFO, -vv -> DEBUG, default WARNING. Idempotent.
    """
    level = _LEVELS_BY_VERBOSE.get(verbose_count, logging.DEBUG)
    logger = logging.getLogger("rikiki")
    logger.setLevel(level)
    if not any(getattr(h, "_rikiki_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler(stream=sys.stderr)
        handler._rikiki_handler = True  # type: ignore[attr-defined]
        handler.setFormatter(
            logging.Formatter(fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s", datefmt="%H:%M:%S")
        )
        logger.addHandler(handler)
    return logger


def _script_values(number: int, rnd: Any, key: str) -> list[int]:
    if not isinstance(rnd, dict):
        raise ScriptError(f"Round {number}: expected an object with 'bets' and 'points'")
    values = rnd.get(key, [])
    if not isinstance(values, list):
        raise ScriptError(f"Round {number}: '{key}' must be a list")
    for i, value in enumerate(values):
        # bool is an int subclass; true/false are not valid counts.
        if isinstance(value, bool) or not isinstance(value, int):
            raise ScriptError(f"Round {number}: {key}[{i}] must be an integer, got {value!r}")
    return values


def _play_round(state: GameBetting | Game, number: int, rnd: Any) -> GameBetting | Game:
    """Play one scripted round and advance to the next one."""
    if isinstance(state, Game):
        raise ScriptError(f"Round {number} is past the end of the game")
    bets = _script_values(number, rnd, "bets")
    points = _script_values(number, rnd, "points")
    for i, bet in enumerate(bets):
        state.add_bet(i, bet)
    scoring = state.lock_bets()
    if scoring is None:
        raise ScriptError(f"Round {number}: missing bets for players {state.missing_bets()}")
    for i, pts in enumerate(points):
        scoring.add_points(i, pts)
    finished = scoring.lock_points()
    if finished is None:
        raise ScriptError(f"Round {number}: missing points for players {scoring.missing_points()}")
    return finished.next_round()


def play_script(
    players: Sequence[str],
    rounds: Sequence[Dict[str, Any]],
    config: RikikiConfig | None = None,
) -> Game:
    """
    Play scripted rounds and return the game holding the finished ones.

    The script may stop before the game is over; it may not go past the end.
    """
    if not isinstance(players, list) or not all(isinstance(p, str) for p in players):
        raise ScriptError("'players' must be a list of names")
    if not isinstance(rounds, list):
        raise ScriptError("'rounds' must be a list")
    state: GameBetting | Game = NewGame.with_players(players, config)
    for number, rnd in enumerate(rounds, start=1):
        state = _play_round(state, number, rnd)
    return state.game if isinstance(state, GameBetting) else state


def _load_script(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict) or "players" not in data:
        raise ScriptError(f"{path}: expected an object with a 'players' list")
    return data


def _add_schedule_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser(
        "schedule",
        help="Print dealer and card count of every round for a player count.",
    )
    parser.add_argument(
        "--players",
        type=int,
        default=4,
        help="Number of players at the table.",
    )
    parser.set_defaults(func=_cmd_schedule)


def _cmd_schedule(args: argparse.Namespace) -> None:
    if not 1 <= args.players <= RikikiConfig().deck_size:
        print(f"Player count must be between 1 and {RikikiConfig().deck_size}", file=sys.stderr)
        raise SystemExit(2)
    print("round  dealer  cards")
    for number, ctx in enumerate(card_schedule(args.players), start=1):
        print(f"{number:>5}  {ctx.dealer_index:>6}  {ctx.amount_of_cards:>5}")


def _add_demo_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser(
        "demo",
        help="Play two scripted rounds with four players and print the scores.",
    )
    parser.set_defaults(func=_cmd_demo)


def _cmd_demo(args: argparse.Namespace) -> None:
    state: GameBetting | Game = NewGame.with_players(DEMO_PLAYERS)
    for number, rnd in enumerate(DEMO_ROUNDS, start=1):
        state = _play_round(state, number, rnd)
        print(f"Scores: {state.get_scores()}")


def _add_replay_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser(
        "replay",
        help="Play a JSON script of bets and points and print the standings.",
    )
    parser.add_argument("script", type=str, help="Path to the JSON script.")
    parser.add_argument(
        "--enforce-points-total",
        action="store_true",
        help="Reject rounds whose points do not add up to the cards dealt.",
    )
    parser.set_defaults(func=_cmd_replay)


def _cmd_replay(args: argparse.Namespace) -> None:
    config = RikikiConfig(enforce_points_total=getattr(args, "enforce_points_total", False))
    try:
        data = _load_script(Path(args.script))
        game = play_script(data["players"], data.get("rounds", []), config)
    except (OSError, json.JSONDecodeError, RikikiError) as exc:
        print(f"replay failed: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc

    scores = game.get_scores()
    log.info("Replayed %d of %d rounds", len(scores), game.amount_of_rounds)
    print(format_table(game.players, scores))
    print()
    for place, (player, total) in enumerate(ranking(game.players, scores), start=1):
        print(f"{place}. {player} {total}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rikiki", description="Rikiki scorekeeping CLI.")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log output (-v info, -vv debug).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_schedule_parser(subparsers)
    _add_demo_parser(subparsers)
    _add_replay_parser(subparsers)
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)
    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
