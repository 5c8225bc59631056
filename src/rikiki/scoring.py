"""
Round scoring: exact bet earns bet + 2, any miss costs the gap between bet and points.
"""
from __future__ import annotations

from typing import Sequence

EXACT_BONUS = 2


def compute_score(bet: int, points: int, exact_bonus: int = EXACT_BONUS) -> int:
    """
    Score of one player for one round.

    Exact match is the only positive outcome (bet + 2, so at least 2).
    Undercalled (bet < points) gives bet - points, overcalled gives points - bet;
    both equal -abs(bet - points).
    """
    if bet == points:
        return bet + exact_bonus
    elif bet < points:
        return bet - points
    else:
        return points - bet


def round_scores(
    bets: Sequence[int],
    points: Sequence[int],
    exact_bonus: int = EXACT_BONUS,
) -> list[int]:
    """Per-player scores, computed independently from aligned bet and point lists."""
    if len(bets) != len(points):
        raise ValueError(f"Got {len(bets)} bets but {len(points)} point entries")
    return [compute_score(b, p, exact_bonus) for b, p in zip(bets, points)]


__all__ = ["EXACT_BONUS", "compute_score", "round_scores"]
