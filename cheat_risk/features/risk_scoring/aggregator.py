"""
Format risk aggregation.

Combines the three weighted sub-scores of a format into one score, applies
the account-age multiplier, then caps the result. The cap is applied once,
after the multiplier.
"""

from typing import Optional

import structlog

from cheat_risk.core.enums import GameFormat
from cheat_risk.core.scoring_config import DEFAULT_SCORING_CONFIG, ScoringConfig
from cheat_risk.features.player_metrics.schemas import FormatStats
from .analyzers import (
    ConfidenceWeighter,
    HighAccuracySignalAnalyzer,
    WinRateSignalAnalyzer,
)
from .schemas import (
    AccuracyFactor,
    FormatFactors,
    FormatRiskResult,
    ScoreCalculation,
    SignalFactor,
)

logger = structlog.get_logger(__name__)


def account_age_factor(
    account_age_days: int, config: ScoringConfig = DEFAULT_SCORING_CONFIG
) -> float:
    """
    Multiplier for young accounts.

    A flat step: accounts up to and including the cutoff get the full
    multiplier, older accounts get 1.0.
    """
    if account_age_days <= config.account_age_cutoff_days:
        return config.account_age_multiplier
    return 1.0


class FormatRiskAggregator:
    """Turns one format's normalized metrics into a capped risk score."""

    def __init__(
        self,
        config: ScoringConfig = DEFAULT_SCORING_CONFIG,
        weighter: Optional[ConfidenceWeighter] = None,
    ):
        self.config = config
        self.weighter = weighter or ConfidenceWeighter(config.confidence_k)
        self.win_rate_analyzer = WinRateSignalAnalyzer(config, self.weighter)
        self.accuracy_analyzer = HighAccuracySignalAnalyzer(config, self.weighter)

    def build_factors(self, stats: FormatStats, age_factor: float) -> FormatFactors:
        """Evaluate every signal of a format and trace the score calculation."""
        cfg = self.config
        weights = cfg.weights

        overall = self.win_rate_analyzer.score(
            stats.overall_winrate / 100, stats.games_counts.total
        )
        recent = self.win_rate_analyzer.score(
            stats.recent_games.winrate / 100, stats.recent_games.total
        )
        accuracy = self.accuracy_analyzer.score(
            stats.accuracy.high_accuracy_percentage,
            stats.accuracy.games_with_accuracy,
        )

        overall_factor = SignalFactor(
            raw=stats.overall_winrate,
            base_score=overall.base_score,
            sample_weight=overall.sample_weight,
            score=overall.score,
            weight=weights["overall_winrate"],
            weighted=weights["overall_winrate"] * overall.score,
            games=stats.games_counts.total,
        )
        recent_factor = SignalFactor(
            raw=stats.recent_games.winrate,
            base_score=recent.base_score,
            sample_weight=recent.sample_weight,
            score=recent.score,
            weight=weights["recent_winrate"],
            weighted=weights["recent_winrate"] * recent.score,
            games=stats.recent_games.total,
        )
        accuracy_factor = AccuracyFactor(
            raw=stats.accuracy.high_accuracy_percentage,
            base_score=accuracy.base_score,
            sample_weight=accuracy.sample_weight,
            score=accuracy.score,
            weight=weights["high_accuracy"],
            weighted=weights["high_accuracy"] * accuracy.score,
            games=stats.accuracy.games_with_accuracy,
            reason=accuracy.reason,
            high_accuracy_games=stats.accuracy.high_accuracy_games,
            player_rating=stats.current_rating,
        )

        weighted_sum = (
            overall_factor.weighted + recent_factor.weighted + accuracy_factor.weighted
        )
        before_cap = age_factor * weighted_sum
        after_cap = min(cfg.max_score, before_cap)

        return FormatFactors(
            overall_winrate=overall_factor,
            recent_winrate=recent_factor,
            accuracy=accuracy_factor,
            weighted_sum=weighted_sum,
            account_age_factor=age_factor,
            calculation=ScoreCalculation(
                weighted_sum=weighted_sum,
                account_age_factor=age_factor,
                before_cap=before_cap,
                after_cap=after_cap,
            ),
        )

    def weighted_sum(self, stats: FormatStats) -> float:
        """Uncapped weighted sum of the three sub-scores, before the age factor."""
        return self.build_factors(stats, 1.0).weighted_sum

    def aggregate(
        self, game_format: GameFormat, stats: FormatStats, account_age_days: int
    ) -> FormatRiskResult:
        """
        Score one format.

        :param game_format: Format being scored
        :param stats: Normalized metrics of the format
        :param account_age_days: Account age used for the multiplier
        :returns: FormatRiskResult with score in [0, 100] and its factors
        """
        age_factor = account_age_factor(account_age_days, self.config)
        factors = self.build_factors(stats, age_factor)

        logger.debug(
            "Format risk aggregated",
            format=game_format.value,
            weighted_sum=factors.weighted_sum,
            account_age_factor=age_factor,
            before_cap=factors.calculation.before_cap,
            score=factors.calculation.after_cap,
        )

        return FormatRiskResult(
            format=game_format,
            score=factors.calculation.after_cap,
            factors=factors,
        )
