"""Shared enums used across features.

This module provides a single source of truth for enums used in both models and schemas.
"""

from enum import Enum
from typing import Optional


class GameResult(str, Enum):
    """Canonical outcome of a game from the analyzed player's side."""

    WIN = "win"
    LOSS = "loss"
    DRAW = "draw"


class TimeClass(str, Enum):
    """Chess.com time controls tracked by the analyzer."""

    BULLET = "bullet"
    BLITZ = "blitz"
    RAPID = "rapid"


class GameFormat(str, Enum):
    """Stats keys of the chess.com stats endpoint, one per time class."""

    RAPID = "chess_rapid"
    BULLET = "chess_bullet"
    BLITZ = "chess_blitz"

    @property
    def time_class(self) -> TimeClass:
        """Time class whose games belong to this format."""
        return TimeClass(self.value.removeprefix("chess_"))


class RiskLevel(str, Enum):
    """Qualitative risk tier derived from a 0-100 score."""

    LOW = "LOW"
    MODERATE = "MODERATE"
    HIGH = "HIGH"
    VERY_HIGH = "VERY_HIGH"

    @property
    def label(self) -> str:
        return _RISK_LEVEL_DISPLAY[self][0]

    @property
    def color(self) -> str:
        return _RISK_LEVEL_DISPLAY[self][1]


_RISK_LEVEL_DISPLAY = {
    RiskLevel.LOW: ("Low Risk", "#4CAF50"),
    RiskLevel.MODERATE: ("Moderate Risk", "#FFC107"),
    RiskLevel.HIGH: ("High Risk", "#FF9800"),
    RiskLevel.VERY_HIGH: ("Very High Risk", "#F44336"),
}

# Upstream result codes collapsed into the three canonical outcomes.
# Review whenever chess.com adds a new code; unknown codes are dropped.
RAW_RESULT_CODES = {
    "win": GameResult.WIN,
    "agreed": GameResult.DRAW,
    "repetition": GameResult.DRAW,
    "stalemate": GameResult.DRAW,
    "insufficient": GameResult.DRAW,
    "50move": GameResult.DRAW,
    "timevsinsufficient": GameResult.DRAW,
    "checkmated": GameResult.LOSS,
    "timeout": GameResult.LOSS,
    "resigned": GameResult.LOSS,
    "lose": GameResult.LOSS,
    "abandoned": GameResult.LOSS,
}


def map_result_code(raw_code: Optional[str]) -> Optional[GameResult]:
    """
    Map a chess.com result code to a canonical GameResult.

    :param raw_code: Result code as returned by the games archive
    :returns: GameResult, or None for codes outside the mapping table
    """
    if raw_code is None:
        return None
    return RAW_RESULT_CODES.get(raw_code.lower())
