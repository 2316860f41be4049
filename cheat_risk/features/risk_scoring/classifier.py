"""Risk level classification of a 0-100 score."""

import math
from typing import Union

from cheat_risk.core.enums import RiskLevel
from cheat_risk.core.exceptions import InputValidationError
from cheat_risk.core.scoring_config import DEFAULT_SCORING_CONFIG, ScoringConfig
from .schemas import RiskLevelInfo


def classify_risk(
    score: float, config: ScoringConfig = DEFAULT_SCORING_CONFIG
) -> RiskLevel:
    """
    Map a score to its risk tier.

    Tier upper bounds are inclusive: with the default configuration 30 is
    LOW, 50 is MODERATE, 70 is HIGH and 71 is VERY_HIGH.

    :raises InputValidationError: If the score is not within 0-100
    """
    if score is None or math.isnan(score) or score < 0 or score > config.max_score:
        raise InputValidationError(
            f"Risk score must be within 0-{config.max_score:g}, got {score}",
            errors=[f"score: out of range ({score})"],
            operation="classify_risk",
        )

    if score <= config.low_risk_max:
        return RiskLevel.LOW
    if score <= config.moderate_risk_max:
        return RiskLevel.MODERATE
    if score <= config.high_risk_max:
        return RiskLevel.HIGH
    return RiskLevel.VERY_HIGH


def level_bounds(level: RiskLevel, config: ScoringConfig = DEFAULT_SCORING_CONFIG):
    """Inclusive integer score range of a tier."""
    bounds = {
        RiskLevel.LOW: (0, config.low_risk_max),
        RiskLevel.MODERATE: (config.low_risk_max + 1, config.moderate_risk_max),
        RiskLevel.HIGH: (config.moderate_risk_max + 1, config.high_risk_max),
        RiskLevel.VERY_HIGH: (config.high_risk_max + 1, config.max_score),
    }
    return bounds[level]


def describe_risk_level(
    level_or_score: Union[RiskLevel, float],
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> RiskLevelInfo:
    """Display record (label, colour, range) of a tier or of a score's tier."""
    if isinstance(level_or_score, RiskLevel):
        level = level_or_score
    else:
        level = classify_risk(level_or_score, config)

    min_score, max_score = level_bounds(level, config)
    return RiskLevelInfo(
        level=level,
        label=level.label,
        color=level.color,
        min_score=int(min_score),
        max_score=int(max_score),
    )
