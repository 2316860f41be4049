"""Risk analysis API endpoints.

Upstream and validation errors raised by the service are turned into HTTP
responses by the application-level exception handlers.
"""

from fastapi import APIRouter, HTTPException, status
import structlog

from cheat_risk.features.player_metrics.schemas import PlayerMetrics
from .dependencies import RiskAnalysisServiceDep
from .schemas import AnalysisResponse

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["analysis"])


@router.get("/analysis/current", response_model=AnalysisResponse)
async def get_current_analysis(
    service: RiskAnalysisServiceDep,
) -> AnalysisResponse:
    """Get the most recent analysis."""
    current = service.get_current_analysis()
    if current is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="No analysis available yet"
        )
    return current


@router.post("/analysis/{username}", response_model=AnalysisResponse)
async def analyze_player(
    username: str,
    service: RiskAnalysisServiceDep,
) -> AnalysisResponse:
    """
    Analyze a chess.com player.

    Fetches the player's public profile, stats and recent games, scores every
    format with enough recent games and returns the highest-risk one.

    **Errors**:
    - 404 when chess.com has no such player
    - 502 when chess.com could not be reached
    - 422 when the gathered metrics are malformed
    """
    return await service.analyze_player(username)


@router.post("/risk-score", response_model=AnalysisResponse)
async def score_metrics(
    metrics: PlayerMetrics,
    service: RiskAnalysisServiceDep,
) -> AnalysisResponse:
    """
    Score already normalized player metrics.

    Nothing is fetched and nothing is recorded in the history.
    """
    return await service.score_metrics(metrics)
