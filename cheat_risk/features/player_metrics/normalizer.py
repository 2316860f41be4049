"""Normalization of gathered player data into per-format metrics.

Turns lifetime win/loss/draw counters plus a recent-games sample into the
``FormatStats`` / ``PlayerMetrics`` shape consumed by the scoring engine.
"""

from datetime import datetime, timezone
from typing import Iterable, List, Optional

import structlog

from cheat_risk.core.enums import GameFormat, GameResult, TimeClass
from cheat_risk.core.scoring_config import DEFAULT_SCORING_CONFIG, ScoringConfig
from cheat_risk.utils.statistics import percentage, win_rate_percent
from .schemas import (
    AccuracyStats,
    FormatStats,
    GameRecord,
    GamesCounts,
    LifetimeRecord,
    PlayerData,
    PlayerMetrics,
    RecentGames,
)

logger = structlog.get_logger(__name__)

SECONDS_PER_DAY = 86400


def calculate_account_age(joined: int, now: Optional[datetime] = None) -> int:
    """
    Account age in whole days.

    :param joined: Account creation time, unix seconds
    :param now: Reference time (defaults to current UTC time)
    :returns: Days since joining, never negative
    """
    now = now or datetime.now(timezone.utc)
    elapsed = now.timestamp() - joined
    return max(0, int(elapsed // SECONDS_PER_DAY))


def select_format_games(
    games: Iterable[GameRecord], time_class: TimeClass, rated_only: bool = True
) -> List[GameRecord]:
    """Recent games of one time class, rated ones only when ``rated_only``."""
    return [
        game
        for game in games
        if game.time_class == time_class and (game.rated or not rated_only)
    ]


def count_recent_results(games: Iterable[GameRecord]) -> RecentGames:
    """Win/loss/draw counts and win rate of a recent sample."""
    wins = losses = draws = 0
    for game in games:
        if game.result == GameResult.WIN:
            wins += 1
        elif game.result == GameResult.LOSS:
            losses += 1
        elif game.result == GameResult.DRAW:
            draws += 1

    return RecentGames(
        total=wins + losses + draws,
        wins=wins,
        losses=losses,
        draws=draws,
        winrate=win_rate_percent(wins, losses, draws),
    )


def is_high_accuracy(game: GameRecord, config: ScoringConfig) -> bool:
    """
    Whether a reviewed game counts as high accuracy.

    The bar depends on the rating the game was played at: weaker players
    reach high accuracy far less often than strong ones.
    """
    if game.accuracy is None:
        return False
    return game.accuracy >= config.required_accuracy(game.player_rating)


def summarize_accuracy(
    games: Iterable[GameRecord], config: ScoringConfig = DEFAULT_SCORING_CONFIG
) -> AccuracyStats:
    """High-accuracy share among the reviewed games of a sample."""
    reviewed = [game for game in games if game.accuracy is not None]
    high = sum(1 for game in reviewed if is_high_accuracy(game, config))

    return AccuracyStats(
        games_with_accuracy=len(reviewed),
        high_accuracy_games=high,
        high_accuracy_percentage=percentage(high, len(reviewed)),
    )


def build_format_stats(
    lifetime: LifetimeRecord,
    recent_games: Iterable[GameRecord],
    time_class: TimeClass,
    rated_only: bool = True,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> FormatStats:
    """
    Build the normalized metrics of one format.

    :param lifetime: All-time counters and rating from the stats endpoint
    :param recent_games: Recent games of all time classes
    :param time_class: Time class of the format being built
    :param rated_only: Ignore unrated games in the recent sample
    :param config: Scoring configuration (accuracy thresholds)
    :returns: FormatStats for the format
    """
    format_games = select_format_games(recent_games, time_class, rated_only)

    return FormatStats(
        current_rating=lifetime.rating or 0,
        overall_winrate=win_rate_percent(
            lifetime.wins, lifetime.losses, lifetime.draws
        ),
        games_counts=GamesCounts(
            total=lifetime.wins + lifetime.losses + lifetime.draws,
            wins=lifetime.wins,
            losses=lifetime.losses,
            draws=lifetime.draws,
        ),
        recent_games=count_recent_results(format_games),
        accuracy=summarize_accuracy(format_games, config),
    )


def build_player_metrics(
    player_data: PlayerData,
    rated_only: bool = True,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
    now: Optional[datetime] = None,
) -> PlayerMetrics:
    """
    Build PlayerMetrics from a consolidated upstream payload.

    Only formats present in the stats payload are emitted, in the fixed
    ``GameFormat`` order.
    """
    now = now or datetime.now(timezone.utc)

    formats = {
        game_format: build_format_stats(
            player_data.stats[game_format],
            player_data.recent_games,
            game_format.time_class,
            rated_only=rated_only,
            config=config,
        )
        for game_format in GameFormat
        if game_format in player_data.stats
    }

    metrics = PlayerMetrics(
        account_age=calculate_account_age(player_data.joined, now),
        formats=formats,
        username=player_data.username,
        timestamp=now,
    )

    logger.debug(
        "Player metrics built",
        username=metrics.username,
        account_age=metrics.account_age,
        formats=[f.value for f in formats],
        recent_games=len(player_data.recent_games),
    )
    return metrics
