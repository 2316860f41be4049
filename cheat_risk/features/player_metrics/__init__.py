"""Player metrics feature module.

This module gathers public chess.com data for a player and normalizes it
into the per-format metrics consumed by the risk scoring engine.
"""

from .schemas import (
    GameRecord,
    LifetimeRecord,
    PlayerData,
    GamesCounts,
    RecentGames,
    AccuracyStats,
    FormatStats,
    PlayerMetrics,
)
from .normalizer import (
    calculate_account_age,
    build_format_stats,
    build_player_metrics,
)
from .validation import (
    MetricsValidationReport,
    validate_metrics,
    ensure_valid_metrics,
)
from .gateway import PlayerDataGateway

__all__ = [
    "GameRecord",
    "LifetimeRecord",
    "PlayerData",
    "GamesCounts",
    "RecentGames",
    "AccuracyStats",
    "FormatStats",
    "PlayerMetrics",
    "calculate_account_age",
    "build_format_stats",
    "build_player_metrics",
    "MetricsValidationReport",
    "validate_metrics",
    "ensure_valid_metrics",
    "PlayerDataGateway",
]
