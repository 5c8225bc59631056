"""
Score history as arrays: per-round table, running totals, final ranking.

Input is the ``get_scores()`` shape used throughout the engine: one list per
finished round, each aligned to player order.
"""
from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from .game import Player


def score_table(scores: Sequence[Sequence[int]], num_players: int | None = None) -> np.ndarray:
    """
    Int array of shape (rounds, players).

    ``num_players`` is needed to shape an empty history; otherwise it is taken
    from the rows and checked against them.
    """
    if not scores:
        return np.zeros((0, num_players or 0), dtype=np.int64)
    rows = [list(row) for row in scores]
    if len({len(row) for row in rows}) != 1:
        raise ValueError("Every round must have the same number of scores")
    table = np.array(rows, dtype=np.int64)
    if num_players is not None and table.shape[1] != num_players:
        raise ValueError(f"Expected {num_players} scores per round, got {table.shape[1]}")
    return table


def running_totals(scores: Sequence[Sequence[int]], num_players: int | None = None) -> np.ndarray:
    """Cumulative totals after each round, same shape as score_table."""
    return np.cumsum(score_table(scores, num_players), axis=0)


def final_totals(scores: Sequence[Sequence[int]], num_players: int | None = None) -> List[int]:
    table = score_table(scores, num_players)
    return [int(x) for x in table.sum(axis=0)]


def ranking(
    players: Sequence[Player | str],
    scores: Sequence[Sequence[int]],
) -> List[Tuple[Player, int]]:
    """Players by total score, highest first; ties keep seating order."""
    seated = [Player.coerce(p) for p in players]
    totals = final_totals(scores, len(seated))
    order = np.argsort(-np.array(totals, dtype=np.int64), kind="stable")
    return [(seated[i], totals[i]) for i in order]


def format_table(players: Sequence[Player | str], scores: Sequence[Sequence[int]]) -> str:
    """Plain-text table: one line per round plus a totals line."""
    names = [str(Player.coerce(p)) for p in players]
    table = score_table(scores, len(names))
    width = max([len(n) for n in names] + [6])
    header = "round  " + " ".join(n.rjust(width) for n in names)
    lines = [header]
    for i, row in enumerate(table, start=1):
        lines.append(f"{i:>5}  " + " ".join(str(int(v)).rjust(width) for v in row))
    totals = table.sum(axis=0)
    lines.append("total  " + " ".join(str(int(v)).rjust(width) for v in totals))
    return "\n".join(lines)


__all__ = ["score_table", "running_totals", "final_totals", "ranking", "format_table"]
