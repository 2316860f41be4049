"""Risk scoring feature module.

This module turns normalized player metrics into a 0-100 cheat risk score
with an auditable factor breakdown, and classifies it into a risk level.
"""

from .schemas import (
    SubScore,
    SignalFactor,
    AccuracyFactor,
    ScoreCalculation,
    FormatFactors,
    FormatRiskResult,
    MaxScore,
    RiskScoreResult,
    RiskLevelInfo,
    AnalysisResponse,
)
from .analyzers import ConfidenceWeighter, win_rate_score, accuracy_score
from .aggregator import FormatRiskAggregator, account_age_factor
from .selector import (
    NO_RATED_GAMES,
    RiskScoreSelector,
    calculate_risk_score,
    round_half_up,
)
from .classifier import classify_risk, describe_risk_level
from .service import RiskAnalysisService
from .router import router as risk_scoring_router
from .dependencies import get_risk_analysis_service, RiskAnalysisServiceDep

__all__ = [
    # Schemas
    "SubScore",
    "SignalFactor",
    "AccuracyFactor",
    "ScoreCalculation",
    "FormatFactors",
    "FormatRiskResult",
    "MaxScore",
    "RiskScoreResult",
    "RiskLevelInfo",
    "AnalysisResponse",
    # Engine
    "ConfidenceWeighter",
    "win_rate_score",
    "accuracy_score",
    "FormatRiskAggregator",
    "account_age_factor",
    "NO_RATED_GAMES",
    "RiskScoreSelector",
    "calculate_risk_score",
    "round_half_up",
    "classify_risk",
    "describe_risk_level",
    # Service
    "RiskAnalysisService",
    # Router
    "risk_scoring_router",
    # Dependencies
    "get_risk_analysis_service",
    "RiskAnalysisServiceDep",
]
