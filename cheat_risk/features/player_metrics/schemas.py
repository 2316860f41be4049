"""
Pydantic schemas for player metrics.

These are the engine's input types: raw games gathered upstream, and the
normalized per-format statistics built from them.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from cheat_risk.core.enums import GameFormat, GameResult, TimeClass


class GameRecord(BaseModel):
    """One recent game from the analyzed player's side."""

    result: GameResult = Field(..., description="Canonical outcome")
    time_class: TimeClass = Field(..., description="Time control of the game")
    player_rating: int = Field(..., description="Player rating in that game")
    accuracy: Optional[float] = Field(
        None, ge=0.0, le=100.0, description="Game review accuracy, if reviewed"
    )
    rated: bool = Field(..., description="Whether the game was rated")
    player_color: Optional[str] = Field(None, description="white or black")
    end_time: Optional[int] = Field(None, description="Game end, unix seconds")

    model_config = ConfigDict(frozen=True)


class LifetimeRecord(BaseModel):
    """All-time counters and current rating of one format."""

    rating: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0

    model_config = ConfigDict(frozen=True)


class PlayerData(BaseModel):
    """Consolidated upstream payload handed to the normalizer."""

    username: str
    joined: int = Field(..., description="Account creation, unix seconds")
    stats: Dict[GameFormat, LifetimeRecord] = Field(default_factory=dict)
    recent_games: List[GameRecord] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class GamesCounts(BaseModel):
    """All-time game counts of one format."""

    total: int = Field(..., ge=0)
    wins: int = Field(..., ge=0)
    losses: int = Field(..., ge=0)
    draws: int = Field(..., ge=0)

    model_config = ConfigDict(frozen=True)


class RecentGames(BaseModel):
    """Result counts over the bounded recent sample of one format."""

    total: int = Field(..., ge=0)
    wins: int = Field(..., ge=0)
    losses: int = Field(..., ge=0)
    draws: int = Field(..., ge=0)
    winrate: float = Field(..., description="Percentage 0-100")

    model_config = ConfigDict(frozen=True)


class AccuracyStats(BaseModel):
    """High-accuracy share among reviewed recent games."""

    games_with_accuracy: int = Field(..., ge=0)
    high_accuracy_games: int = Field(..., ge=0)
    high_accuracy_percentage: float = Field(..., description="Percentage 0-100")

    model_config = ConfigDict(frozen=True)


class FormatStats(BaseModel):
    """Normalized metrics of one format."""

    current_rating: int
    overall_winrate: float = Field(..., description="All-time win rate, 0-100")
    games_counts: GamesCounts
    recent_games: RecentGames
    accuracy: AccuracyStats

    model_config = ConfigDict(frozen=True)


class PlayerMetrics(BaseModel):
    """Everything the scoring engine needs about one player."""

    account_age: int = Field(..., description="Account age in days")
    formats: Dict[GameFormat, FormatStats] = Field(default_factory=dict)
    username: str
    timestamp: datetime

    model_config = ConfigDict(frozen=True)
