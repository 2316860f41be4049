"""Shared fixtures and builders for the test suite."""

from datetime import datetime, timezone

import pytest

from cheat_risk.core.enums import GameFormat, GameResult, TimeClass
from cheat_risk.features.player_metrics.schemas import (
    AccuracyStats,
    FormatStats,
    GameRecord,
    GamesCounts,
    PlayerMetrics,
    RecentGames,
)

FIXED_NOW = datetime(2024, 3, 20, 12, 0, tzinfo=timezone.utc)


def make_format_stats(
    overall_winrate: float = 50.0,
    total_games: int = 100,
    recent_winrate: float = 50.0,
    recent_total: int = 20,
    accuracy_games: int = 0,
    high_accuracy_games: int = 0,
    high_accuracy_percentage: float = 0.0,
    rating: int = 1500,
) -> FormatStats:
    """Build a consistent FormatStats; counts are derived from the rates."""
    wins = round(total_games * overall_winrate / 100)
    recent_wins = round(recent_total * recent_winrate / 100)
    return FormatStats(
        current_rating=rating,
        overall_winrate=overall_winrate,
        games_counts=GamesCounts(
            total=total_games, wins=wins, losses=total_games - wins, draws=0
        ),
        recent_games=RecentGames(
            total=recent_total,
            wins=recent_wins,
            losses=recent_total - recent_wins,
            draws=0,
            winrate=recent_winrate,
        ),
        accuracy=AccuracyStats(
            games_with_accuracy=accuracy_games,
            high_accuracy_games=high_accuracy_games,
            high_accuracy_percentage=high_accuracy_percentage,
        ),
    )


def make_metrics(
    formats=None, account_age: int = 365, username: str = "hikaru"
) -> PlayerMetrics:
    return PlayerMetrics(
        account_age=account_age,
        formats=formats or {},
        username=username,
        timestamp=FIXED_NOW,
    )


def make_game(
    result: GameResult = GameResult.WIN,
    time_class: TimeClass = TimeClass.BLITZ,
    player_rating: int = 1500,
    accuracy=None,
    rated: bool = True,
) -> GameRecord:
    return GameRecord(
        result=result,
        time_class=time_class,
        player_rating=player_rating,
        accuracy=accuracy,
        rated=rated,
    )


@pytest.fixture
def fixed_clock():
    """Clock returning a constant time."""
    return lambda: FIXED_NOW


@pytest.fixture
def suspicious_metrics():
    """80% overall and recent win rate on 20 games, young account."""
    return make_metrics(
        formats={
            GameFormat.BLITZ: make_format_stats(
                overall_winrate=80.0,
                total_games=20,
                recent_winrate=80.0,
                recent_total=20,
            )
        },
        account_age=30,
    )


@pytest.fixture
def format_stats_factory():
    return make_format_stats


@pytest.fixture
def metrics_factory():
    return make_metrics


@pytest.fixture
def game_factory():
    return make_game
