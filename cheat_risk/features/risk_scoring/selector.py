"""
Risk score selector.

Filters formats with too few recent games, scores the rest and promotes the
highest-risk format to the headline score.
"""

import math
from datetime import datetime, timezone
from typing import Any, Callable, List, Mapping, Optional, Union

import structlog

from cheat_risk.core.enums import GameFormat
from cheat_risk.core.scoring_config import DEFAULT_SCORING_CONFIG, ScoringConfig
from cheat_risk.features.player_metrics.schemas import PlayerMetrics
from cheat_risk.features.player_metrics.validation import ensure_valid_metrics
from .aggregator import FormatRiskAggregator, account_age_factor
from .analyzers import ConfidenceWeighter
from .schemas import FormatRiskResult, MaxScore, RiskScoreResult

logger = structlog.get_logger(__name__)

NO_RATED_GAMES = "no_rated_games"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


class RiskScoreSelector:
    """
    Produces a RiskScoreResult from validated PlayerMetrics.

    Each call builds its own ConfidenceWeighter, so nothing is shared
    between scoring passes.
    """

    def __init__(
        self,
        config: ScoringConfig = DEFAULT_SCORING_CONFIG,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.config = config
        self.clock = clock

    def eligible_formats(self, metrics: PlayerMetrics) -> List[GameFormat]:
        """Formats with at least ``min_games`` recent games, in input order."""
        return [
            game_format
            for game_format, stats in metrics.formats.items()
            if stats.recent_games.total >= self.config.min_games
        ]

    def select(self, metrics: PlayerMetrics) -> RiskScoreResult:
        """
        Score every eligible format and pick the maximum.

        :param metrics: Validated player metrics
        :returns: RiskScoreResult; the max score carries ``no_rated_games``
            when no format is eligible
        """
        aggregator = FormatRiskAggregator(
            self.config, ConfidenceWeighter(self.config.confidence_k)
        )
        age_factor = account_age_factor(metrics.account_age, self.config)

        results: List[FormatRiskResult] = [
            aggregator.aggregate(
                game_format, metrics.formats[game_format], metrics.account_age
            )
            for game_format in self.eligible_formats(metrics)
        ]

        if not results:
            logger.debug(
                "No eligible formats",
                username=metrics.username,
                formats=[f.value for f in metrics.formats],
            )
            return RiskScoreResult(
                max_score=MaxScore(value=0, reason=NO_RATED_GAMES),
                other_formats=[],
                account_age_score=age_factor,
                account_age_days=metrics.account_age,
                username=metrics.username,
                timestamp=self.clock(),
            )

        # sorted() is stable: equal scores keep their input order
        ranked = sorted(results, key=lambda r: r.score, reverse=True)
        top = ranked[0]

        logger.debug(
            "Risk score selected",
            username=metrics.username,
            format=top.format.value,
            score=top.score,
            eligible=len(ranked),
        )

        return RiskScoreResult(
            max_score=MaxScore(
                value=round_half_up(top.score),
                format=top.format,
                factors=top.factors,
            ),
            other_formats=ranked[1:],
            account_age_score=age_factor,
            account_age_days=metrics.account_age,
            username=metrics.username,
            timestamp=self.clock(),
        )


def calculate_risk_score(
    metrics: Union[PlayerMetrics, Mapping[str, Any]],
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
    clock: Optional[Callable[[], datetime]] = None,
) -> RiskScoreResult:
    """
    Validate metrics and compute the player's risk score.

    :raises InputValidationError: If the metrics violate their invariants
    """
    validated = ensure_valid_metrics(metrics)
    selector = RiskScoreSelector(config, clock or _utc_now)
    return selector.select(validated)
