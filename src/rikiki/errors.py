"""Exception hierarchy for the Rikiki engine."""

from __future__ import annotations

__all__ = [
    "RikikiError",
    "InvalidPlayersError",
    "InvalidBetError",
    "InvalidPointsError",
    "ConsumedError",
]


class RikikiError(Exception):
    """Base exception for the package."""

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"{self.__class__.__name__}({self.args})"


class InvalidPlayersError(RikikiError, ValueError):
    """Raised when the player list cannot start a game (empty, duplicates, too many)."""


class InvalidBetError(RikikiError, ValueError):
    """Raised when a bet is out of range or targets an unknown player."""


class InvalidPointsError(RikikiError, ValueError):
    """Raised when points are out of range, target an unknown player, or do not add up."""


class ConsumedError(RikikiError, RuntimeError):
    """Raised when a round or game value is used after it moved to its next phase."""
