"""
Chess.com API client package.

This package provides an HTTP client for the chess.com published-data API,
including timeouts, retry with exponential backoff, and error mapping.
"""

from .client import ChessAPIClient
from .errors import (
    ChessAPIError,
    RateLimitError,
    NotFoundError,
    BadRequestError,
    ServiceUnavailableError,
)
from .models import (
    ProfileDTO,
    StatsDTO,
    FormatStatsDTO,
    RecordDTO,
    RatingSnapshotDTO,
    GameDTO,
    GamePlayerDTO,
    AccuraciesDTO,
    ArchiveDTO,
)
from .endpoints import ChessAPIEndpoints

__all__ = [
    "ChessAPIClient",
    "ChessAPIError",
    "RateLimitError",
    "NotFoundError",
    "BadRequestError",
    "ServiceUnavailableError",
    "ProfileDTO",
    "StatsDTO",
    "FormatStatsDTO",
    "RecordDTO",
    "RatingSnapshotDTO",
    "GameDTO",
    "GamePlayerDTO",
    "AccuraciesDTO",
    "ArchiveDTO",
    "ChessAPIEndpoints",
]
