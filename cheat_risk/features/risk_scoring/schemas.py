"""
Pydantic schemas for risk scoring results.

This module contains the engine's output records: per-signal sub-scores, the
per-format factor breakdown, and the player-level risk score result.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from cheat_risk.core.enums import GameFormat, RiskLevel


class SubScore(BaseModel):
    """Result of one signal scorer, kept for audit and debugging."""

    base_score: float = Field(..., ge=0.0, description="Raw curve score")
    sample_weight: float = Field(
        ..., ge=0.0, le=1.0, description="Sample-size confidence weight"
    )
    score: float = Field(..., ge=0.0, description="base_score * sample_weight")
    reason: Optional[str] = Field(
        None, description="Why the score is zero (no_accuracy_data, below_threshold)"
    )

    model_config = ConfigDict(frozen=True)


class SignalFactor(BaseModel):
    """Contribution of one signal to a format score."""

    raw: float = Field(..., description="Raw signal value (percentage)")
    base_score: float
    sample_weight: float
    score: float = Field(..., description="Confidence-weighted sub-score")
    weight: float = Field(..., description="Configured weight of the signal")
    weighted: float = Field(..., description="weight * score")
    games: int = Field(..., ge=0, description="Sample size behind the signal")
    reason: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class AccuracyFactor(SignalFactor):
    """High-accuracy signal with its sample details."""

    high_accuracy_games: int = Field(..., ge=0)
    player_rating: int

    model_config = ConfigDict(frozen=True)


class ScoreCalculation(BaseModel):
    """Trace of how the weighted sum became the final format score."""

    weighted_sum: float
    account_age_factor: float
    before_cap: float
    after_cap: float

    model_config = ConfigDict(frozen=True)


class FormatFactors(BaseModel):
    """Auditable breakdown of a format score."""

    overall_winrate: SignalFactor
    recent_winrate: SignalFactor
    accuracy: AccuracyFactor
    weighted_sum: float
    account_age_factor: float
    calculation: ScoreCalculation

    model_config = ConfigDict(frozen=True)


class FormatRiskResult(BaseModel):
    """Risk score of one eligible format."""

    format: GameFormat
    score: float = Field(..., ge=0.0, le=100.0, description="Capped format score")
    factors: FormatFactors

    model_config = ConfigDict(frozen=True)


class MaxScore(BaseModel):
    """Headline score: the highest-risk format."""

    value: int = Field(..., ge=0, le=100, description="Rounded headline score")
    format: Optional[GameFormat] = None
    factors: Optional[FormatFactors] = None
    reason: Optional[str] = Field(
        None, description="Set to no_rated_games when no format was eligible"
    )

    model_config = ConfigDict(frozen=True)


class RiskScoreResult(BaseModel):
    """Player-level output of the scoring engine."""

    max_score: MaxScore
    other_formats: List[FormatRiskResult] = Field(
        default_factory=list,
        description="Remaining eligible formats, highest score first",
    )
    account_age_score: float = Field(..., description="Account age multiplier applied")
    account_age_days: int
    username: str
    timestamp: datetime

    model_config = ConfigDict(frozen=True)


class RiskLevelInfo(BaseModel):
    """Display form of a risk tier."""

    level: RiskLevel
    label: str
    color: str
    min_score: int
    max_score: int

    model_config = ConfigDict(frozen=True)


class AnalysisResponse(BaseModel):
    """Risk score result with its classification, as returned to callers."""

    result: RiskScoreResult
    risk_level: RiskLevelInfo
    analyzed_at: datetime

    model_config = ConfigDict(frozen=True)
