"""
Risk analysis service.

Chains data gathering, normalization, scoring and classification for one
player and records the outcome in the analysis history.
"""

from datetime import datetime, timezone
from typing import Callable, Optional

import structlog

from cheat_risk.core.decorators import input_validation, service_error_handler
from cheat_risk.core.scoring_config import DEFAULT_SCORING_CONFIG, ScoringConfig
from cheat_risk.features.history.repository import HistoryRepositoryInterface
from cheat_risk.features.history.schemas import HistoryEntry
from cheat_risk.features.player_metrics.gateway import PlayerDataGateway
from cheat_risk.features.player_metrics.normalizer import build_player_metrics
from cheat_risk.features.player_metrics.schemas import PlayerMetrics
from cheat_risk.features.settings.store import PreferencesStore
from .classifier import describe_risk_level
from .schemas import AnalysisResponse
from .selector import calculate_risk_score

logger = structlog.get_logger(__name__)


class RiskAnalysisService:
    """Service for analyzing a chess.com player's cheat risk."""

    def __init__(
        self,
        gateway: PlayerDataGateway,
        history: HistoryRepositoryInterface,
        preferences: PreferencesStore,
        config: ScoringConfig = DEFAULT_SCORING_CONFIG,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        """
        Initialize risk analysis service.

        :param gateway: Player data gateway
        :param history: Repository the analyses are recorded in
        :param preferences: Store holding the user preferences
        :param config: Scoring constants
        :param clock: Source of "now" for metrics and result timestamps
        """
        self.gateway = gateway
        self.history = history
        self.preferences = preferences
        self.config = config
        self._clock = clock
        self._current: Optional[AnalysisResponse] = None

    @service_error_handler("RiskAnalysisService")
    @input_validation(validate_non_empty=["username"])
    async def analyze_player(self, username: str) -> AnalysisResponse:
        """
        Gather, score and classify one player.

        :param username: chess.com username
        :returns: AnalysisResponse with the score and its risk level
        :raises PlayerNotFoundError: If the player does not exist
        :raises UpstreamFailure: If the player data could not be fetched
        :raises InputValidationError: If the gathered metrics are malformed
        """
        username = username.strip()
        preferences = await self.preferences.get()

        player_data = await self.gateway.gather_player_data(
            username, rated_only=preferences.rated_only
        )
        metrics = build_player_metrics(
            player_data,
            rated_only=preferences.rated_only,
            config=self.config,
            now=self._clock(),
        )
        result = calculate_risk_score(metrics, self.config, self._clock)
        risk_level = describe_risk_level(result.max_score.value, self.config)

        response = AnalysisResponse(
            result=result,
            risk_level=risk_level,
            analyzed_at=result.timestamp,
        )

        await self.history.add(
            HistoryEntry(
                username=result.username,
                score=result.max_score.value,
                format=result.max_score.format,
                risk_level=risk_level.level,
                analyzed_at=response.analyzed_at,
            )
        )
        self._current = response

        logger.info(
            "Player analyzed",
            username=result.username,
            score=result.max_score.value,
            format=result.max_score.format.value if result.max_score.format else None,
            risk_level=risk_level.level.value,
            reason=result.max_score.reason,
        )
        return response

    @service_error_handler("RiskAnalysisService")
    async def score_metrics(self, metrics: PlayerMetrics) -> AnalysisResponse:
        """
        Score already normalized metrics without touching upstream or history.

        :raises InputValidationError: If the metrics violate their invariants
        """
        result = calculate_risk_score(metrics, self.config, self._clock)
        return AnalysisResponse(
            result=result,
            risk_level=describe_risk_level(result.max_score.value, self.config),
            analyzed_at=result.timestamp,
        )

    def get_current_analysis(self) -> Optional[AnalysisResponse]:
        """Most recent analysis made by this service, if any."""
        return self._current
