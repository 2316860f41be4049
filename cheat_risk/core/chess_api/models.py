"""Pydantic models for chess.com API response data."""

from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field


class ProfileDTO(BaseModel):
    """Player profile (``/player/{username}``)."""

    username: str
    joined: int = Field(..., description="Account creation, unix seconds")
    country: Optional[str] = None
    status: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class RecordDTO(BaseModel):
    """All-time win/loss/draw counters of one format."""

    win: int = 0
    loss: int = 0
    draw: int = 0

    model_config = ConfigDict(extra="ignore")


class RatingSnapshotDTO(BaseModel):
    """Current rating of one format."""

    rating: int = 0
    date: Optional[int] = None

    model_config = ConfigDict(extra="ignore")


class FormatStatsDTO(BaseModel):
    """Stats block of one format (``chess_rapid`` etc.)."""

    last: Optional[RatingSnapshotDTO] = None
    record: Optional[RecordDTO] = None

    model_config = ConfigDict(extra="ignore")


class StatsDTO(BaseModel):
    """Player stats (``/player/{username}/stats``)."""

    chess_rapid: Optional[FormatStatsDTO] = None
    chess_bullet: Optional[FormatStatsDTO] = None
    chess_blitz: Optional[FormatStatsDTO] = None

    model_config = ConfigDict(extra="ignore")


class GamePlayerDTO(BaseModel):
    """One side of an archived game."""

    username: str
    rating: int = 0
    result: str

    model_config = ConfigDict(extra="ignore")


class AccuraciesDTO(BaseModel):
    """Game review accuracies, only present for reviewed games."""

    white: Optional[float] = None
    black: Optional[float] = None

    model_config = ConfigDict(extra="ignore")


class GameDTO(BaseModel):
    """Archived game."""

    rules: str = "chess"
    time_class: str
    rated: bool = False
    end_time: Optional[int] = None
    white: GamePlayerDTO
    black: GamePlayerDTO
    accuracies: Optional[AccuraciesDTO] = None

    model_config = ConfigDict(extra="ignore")


class ArchiveDTO(BaseModel):
    """Monthly games archive (``/player/{username}/games/{YYYY}/{MM}``)."""

    games: List[GameDTO] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")
